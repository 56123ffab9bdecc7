__all__ = ['TruthTableCmd', 'format_table']

import cmd
import logging
from typing import Final, Literal

from .eval import TruthTable, generate
from .parser import InvalidExpression

logger = logging.getLogger(__name__)

_labels: Final = ('F', 'T')


def format_table(tt: TruthTable) -> str:
    width = (len(tt.expression) + 1) // 2
    buf = []

    buf.append(''.join(f'{name} ' for name in tt.variables))
    buf.append('\t')
    buf.append(tt.expression)
    buf.append('\n\n')

    for row in tt.rows:
        buf.append(''.join(f'{_labels[v]} ' for v in row.values))
        buf.append('\t')
        buf.append(_labels[row.result].rjust(width))
        buf.append('\n')

    buf.append('\n')
    return ''.join(buf)


class TruthTableCmd(cmd.Cmd):
    """Read one proposition per line and print its truth table.

    Every line is an expression; ``quit`` (or end of input) leaves the loop.
    """

    prompt = 'Enter proposition: '

    def onecmd(self, line: str) -> bool:
        # Bypass cmd's own parsing: '?' and '!' are expression characters.
        if line in ('quit', 'EOF'):
            return self.do_quit(line)
        self.default(line)
        return False

    def do_quit(self, arg: str) -> Literal[True]:
        return True

    def default(self, line: str) -> None:
        try:
            tt = generate(line)
        except InvalidExpression as e:
            logger.debug('%r rejected: %s', line, e)
            self.stdout.write('Invalid expression!\n')
            return
        if tt is not None:
            self.stdout.write(format_table(tt))
