__all__ = [
    'Op', 'NO_PRECEDENCE',
    'Constant', 'Variable', 'Operator', 'Paren', 'Token',
    'Variables', 'scan', 'format_tokens',
]

import enum
import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Dict, Final, Iterator, List, Sequence, Tuple, Union

from funcparserlib.lexer import TokenSpec, make_tokenizer

logger = logging.getLogger(__name__)


class Op(enum.Enum):
    NEGATION = '!'
    CONJUNCTION = '^'
    DISJUNCTION = 'v'
    IMPLICATION = '->'
    BICONDITIONAL = '<->'

    @property
    def precedence(self) -> int:
        return _precedence.index(self) + 1


# Loosest first; the tightest-binding operator has the highest rank.
_precedence: Final = [
    Op.BICONDITIONAL, Op.IMPLICATION, Op.DISJUNCTION, Op.CONJUNCTION,
    Op.NEGATION]

NO_PRECEDENCE: Final = 0

_op_lexemes: Final = {
    '^': Op.CONJUNCTION, '*': Op.CONJUNCTION,
    'v': Op.DISJUNCTION, '+': Op.DISJUNCTION,
    '!': Op.NEGATION, '~': Op.NEGATION,
    '->': Op.IMPLICATION,
    '<->': Op.BICONDITIONAL,
}


@dataclass(frozen=True)
class Constant:
    value: bool
    lexeme: str
    column: int = 0


@dataclass(frozen=True)
class Variable:
    name: str
    column: int = 0

    @property
    def lexeme(self) -> str:
        return self.name


@dataclass(frozen=True)
class Operator:
    op: Op
    lexeme: str
    column: int = 0

    @property
    def precedence(self) -> int:
        return self.op.precedence

    @property
    def unary(self) -> bool:
        return self.op is Op.NEGATION


@dataclass(frozen=True)
class Paren:
    left: bool
    column: int = 0

    @property
    def lexeme(self) -> str:
        return '(' if self.left else ')'


Token = Union[Constant, Variable, Operator, Paren]


@dataclass
class _Cell:
    value: bool = False


class Variables(Mapping):
    """Truth values of the distinct variables of one expression.

    Each name owns exactly one cell; every occurrence of the name in the
    token stream reads its value from here. Iteration is in sorted name
    order, which also fixes the bit position of each variable.
    """

    def __init__(self) -> None:
        self._cells: Dict[str, _Cell] = {}

    def register(self, name: str) -> None:
        self._cells.setdefault(name, _Cell())

    def assign(self, values: Sequence[bool]) -> None:
        if len(values) != len(self._cells):
            raise ValueError(
                f'expected {len(self._cells)} values, got {len(values)}')
        for name, value in zip(self, values):
            self._cells[name].value = value

    @property
    def names(self) -> Tuple[str, ...]:
        return tuple(self)

    def __getitem__(self, name: str) -> bool:
        return self._cells[name].value

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._cells))

    def __len__(self) -> int:
        return len(self._cells)

    def __repr__(self) -> str:
        return f'{type(self).__name__}({dict(self)!r})'


# Order matters: the first matching spec wins.
_specs: Final = [
    TokenSpec('space', r' +'),
    TokenSpec('true', r'[1T]'),
    TokenSpec('false', r'[0F]'),
    TokenSpec('lparen', r'\('),
    TokenSpec('rparen', r'\)'),
    TokenSpec('op', r'<->|->|[\^*v+!~]'),
    # A '-' or '<' that does not start an operator vanishes together with
    # the character that was looked at while trying to match it.
    TokenSpec('dropped', r'<-?.?|-.?', re.DOTALL),
    TokenSpec('variable', r'.', re.DOTALL),
]

_tokenize: Final = make_tokenizer(_specs)


def scan(source: str) -> Tuple[List[Token], Variables]:
    tokens: List[Token] = []
    variables = Variables()
    for t in _tokenize(source):
        column = t.start[1] - 1 if t.start else 0
        if t.type == 'space':
            continue
        elif t.type == 'dropped':
            logger.debug('dropping %r at column %d', t.value, column)
        elif t.type == 'true':
            tokens.append(Constant(True, t.value, column))
        elif t.type == 'false':
            tokens.append(Constant(False, t.value, column))
        elif t.type in ('lparen', 'rparen'):
            tokens.append(Paren(t.type == 'lparen', column))
        elif t.type == 'op':
            tokens.append(Operator(_op_lexemes[t.value], t.value, column))
        elif t.type == 'variable':
            variables.register(t.value)
            tokens.append(Variable(t.value, column))
        else:
            raise RuntimeError(f'unknown token type {t.type!r}')
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug('scanned %r:\n%s', source, format_tokens(tokens))
    return tokens, variables


def format_tokens(tokens: Sequence[Token]) -> str:
    return '\n'.join(
        f'{i}. Type: {type(t).__name__}, Lexeme: {t.lexeme}'
        for i, t in enumerate(tokens, 1))
