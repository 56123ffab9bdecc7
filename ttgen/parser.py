__all__ = [
    'InvalidExpression', 'MalformedExpression',
    'validate', 'is_well_formed', 'to_postfix', 'format_postfix']

import logging
from typing import List, Optional, Sequence

from .lexer import NO_PRECEDENCE, Constant, Operator, Paren, Token, Variable

logger = logging.getLogger(__name__)


class InvalidExpression(ValueError):
    def __init__(self, message: str, token: Optional[Token] = None) -> None:
        super().__init__(message)
        self.token = token


class MalformedExpression(InvalidExpression):
    """Structural fault found while converting or evaluating.

    Raised for unbalanced parentheses and for anything else that would
    leave the operand stack empty or with more than one value.
    """


def _is_operand(t: Optional[Token]) -> bool:
    return isinstance(t, (Constant, Variable))


def _is_negation(t: Optional[Token]) -> bool:
    return isinstance(t, Operator) and t.unary


def _is_paren(t: Optional[Token], left: bool) -> bool:
    return isinstance(t, Paren) and t.left == left


def _fits(tokens: Sequence[Token], i: int) -> bool:
    t = tokens[i]
    prev = tokens[i - 1] if i > 0 else None
    nxt = tokens[i + 1] if i + 1 < len(tokens) else None

    if _is_operand(t):
        return (len(tokens) == 1
                or (isinstance(nxt, Operator) and not nxt.unary)
                or isinstance(prev, Operator)
                or _is_paren(prev, left=True))
    elif _is_negation(t):
        return (_is_operand(nxt)
                or _is_paren(nxt, left=True)
                or _is_negation(nxt)
                or _is_paren(prev, left=True)
                or (isinstance(prev, Operator) and nxt is not None
                    and not _is_negation(nxt)))
    elif isinstance(t, Operator):
        return ((_is_operand(nxt) or _is_paren(nxt, left=True)
                 or _is_negation(nxt))
                and (_is_operand(prev) or _is_paren(prev, left=False)))
    # Parentheses are left to the converter.
    return True


def validate(tokens: Sequence[Token]) -> None:
    """Check every token against its immediate neighbours.

    This is a local adjacency check, not a grammar: it catches misplaced
    operators and operands but leaves parenthesis balance to
    :func:`to_postfix`.
    """
    for i, t in enumerate(tokens):
        if not _fits(tokens, i):
            logger.debug('rejecting %r at column %d', t.lexeme, t.column)
            raise InvalidExpression(
                f'unexpected {t.lexeme!r} at column {t.column}', t)


def is_well_formed(tokens: Sequence[Token]) -> bool:
    try:
        validate(tokens)
    except InvalidExpression:
        return False
    return True


def _rank(t: Token) -> int:
    return t.precedence if isinstance(t, Operator) else NO_PRECEDENCE


def to_postfix(tokens: Sequence[Token]) -> List[Token]:
    """Shunting-yard conversion from infix to postfix order.

    A stacked operator is only moved to the output when it binds strictly
    tighter than the incoming one, so a run of equal operators groups to
    the right: ``p -> q -> r`` reads as ``p -> (q -> r)``.
    """
    stack: List[Token] = []
    output: List[Token] = []

    for t in tokens:
        if isinstance(t, Operator):
            while stack and _rank(stack[-1]) > t.precedence:
                output.append(stack.pop())
            stack.append(t)
        elif isinstance(t, Paren) and t.left:
            stack.append(t)
        elif isinstance(t, Paren):
            while stack and not _is_paren(stack[-1], left=True):
                output.append(stack.pop())
            if not stack:
                raise MalformedExpression(
                    f'unmatched {t.lexeme!r} at column {t.column}', t)
            stack.pop()
        else:
            output.append(t)

    while stack:
        t = stack.pop()
        if isinstance(t, Paren):
            raise MalformedExpression(
                f'unmatched {t.lexeme!r} at column {t.column}', t)
        output.append(t)

    if logger.isEnabledFor(logging.DEBUG):
        logger.debug('postfix: %s', format_postfix(output))
    return output


def format_postfix(tokens: Sequence[Token]) -> str:
    return ' '.join(t.lexeme for t in tokens)
