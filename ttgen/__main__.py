import logging
import sys

from .ui import TruthTableCmd


def main() -> int:
    logging.basicConfig(
        level=logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s')
    TruthTableCmd().cmdloop()
    return 0


if __name__ == '__main__':
    sys.exit(main())
