"""Command-line front end: ``xftmpl [-H] [-i NAME] [-s NAME] [-o FILE] INFILE``."""

import argparse
import logging
import sys

from xftmpl.compiler import CompileOptions, compile_file
from xftmpl.errors import LexError, XftmplError
from xftmpl.lexer import LexerOptions


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="xftmpl",
        description="Binary encode X templates from text format.",
    )
    parser.add_argument("infile", help="Text template file, or - for standard input")
    parser.add_argument(
        "-H",
        dest="header",
        action="store_true",
        help="Output to a c header file instead of a binary file",
    )
    parser.add_argument(
        "-i",
        dest="var_name",
        metavar="NAME",
        help="Output to a c header file, data in variable NAME",
    )
    parser.add_argument(
        "-s",
        dest="size_name",
        metavar="NAME",
        help="In a c header file, define NAME to be the data size",
    )
    parser.add_argument(
        "-o",
        dest="output",
        metavar="FILE",
        default="-",
        help="Write output to FILE (default: standard output)",
    )
    parser.add_argument(
        "--strict-names",
        action="store_true",
        help="Reject identifiers longer than the name limit instead of truncating them",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug output")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Command-line entry point."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(name)s: %(levelname)s: %(message)s",
        stream=sys.stderr,
    )

    options = CompileOptions(
        header=args.header,
        var_name=args.var_name,
        size_name=args.size_name,
        lexer=LexerOptions(strict_names=args.strict_names),
    )

    try:
        compile_file(args.infile, args.output, options)
    except LexError as e:
        print(e, file=sys.stderr)
        return 1
    except XftmplError as e:
        print(f"xftmpl: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
