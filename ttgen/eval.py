__all__ = [
    'get_all_inputs', 'evaluate',
    'Row', 'TruthTable', 'generate',
]

import logging
import operator
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Callable, Dict, Final, Generator, List, Optional, Sequence, Tuple

from .lexer import Constant, Op, Operator, Token, Variable, scan
from .parser import MalformedExpression, to_postfix, validate

logger = logging.getLogger(__name__)

_binary_ops: Final[Dict[Op, Callable[[bool, bool], bool]]] = {
    Op.CONJUNCTION: lambda left, right: left and right,
    Op.DISJUNCTION: lambda left, right: left or right,
    # Material implication: false only for true -> false.
    Op.IMPLICATION: operator.le,
    Op.BICONDITIONAL: operator.eq,
}


def get_all_inputs(n: int) -> Generator[Tuple[bool, ...], None, None]:
    """Yield every assignment of ``n`` variables, all-true first.

    Assignment ``i`` gives the variable at position ``j`` the value
    ``((i >> (n - 1 - j)) & 1) == 0``, so the first variable flips slowest.
    """
    if n < 0:
        raise ValueError('number of variables must not be negative')
    for i in range(1 << n):
        yield tuple(((i >> (n - 1 - j)) & 1) == 0 for j in range(n))


def _pop(stack: List[bool], t: Token) -> bool:
    if not stack:
        raise MalformedExpression(
            f'missing operand for {t.lexeme!r} at column {t.column}', t)
    return stack.pop()


def evaluate(postfix: Sequence[Token], interpr: Mapping) -> bool:
    """Evaluate a postfix token sequence.

    Variables are looked up by name in ``interpr`` at evaluation time.
    """
    stack: List[bool] = []
    for t in postfix:
        if isinstance(t, Constant):
            stack.append(t.value)
        elif isinstance(t, Variable):
            stack.append(interpr[t.name])
        elif isinstance(t, Operator) and t.unary:
            stack.append(not _pop(stack, t))
        elif isinstance(t, Operator):
            right = _pop(stack, t)
            left = _pop(stack, t)
            stack.append(_binary_ops[t.op](left, right))
        else:
            raise MalformedExpression(
                f'unexpected {t.lexeme!r} at column {t.column}', t)
    if len(stack) != 1:
        raise MalformedExpression(
            f'expression leaves {len(stack)} values instead of one')
    return stack[0]


@dataclass(frozen=True)
class Row:
    values: Tuple[bool, ...]
    result: bool


@dataclass
class TruthTable:
    expression: str
    variables: Tuple[str, ...]
    rows: List[Row] = field(default_factory=list)

    @classmethod
    def from_expr(cls, expression: str) -> Optional['TruthTable']:
        tokens, variables = scan(expression)
        if not tokens:
            return None
        validate(tokens)
        postfix = to_postfix(tokens)

        logger.debug(
            'evaluating %r over %d variables', expression, len(variables))
        tt = cls(expression, variables.names)
        for values in get_all_inputs(len(variables)):
            variables.assign(values)
            tt.rows.append(Row(values, evaluate(postfix, variables)))
        return tt

    def assignments(self) -> Generator[Dict[str, bool], None, None]:
        for row in self.rows:
            yield dict(zip(self.variables, row.values))


def generate(expression: str) -> Optional[TruthTable]:
    """Build the truth table of ``expression``.

    Returns ``None`` when there is nothing to evaluate. Raises
    :class:`~ttgen.parser.InvalidExpression` (or its subclass
    :class:`~ttgen.parser.MalformedExpression`) when the expression is
    rejected.
    """
    if not expression:
        return None
    return TruthTable.from_expr(expression)
