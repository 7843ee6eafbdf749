import sys

from ..fuzzy.core.types import FuzzyError
from .commands.parser import build_parser
from .logsetup import setup_logging


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level)
    try:
        return args.func(args) or 0
    except FuzzyError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
