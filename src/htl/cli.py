"""Command line entry point: read HTL, print HTML.

    $ echo '(a :href foo "bar")' | python -m htl
    <a href="foo">bar</a>
"""

import argparse
import logging
import sys

from .parser import parse
from .serialize import to_html


def build_arg_parser():
    arg_parser = argparse.ArgumentParser(prog="htl", description="Convert HTL markup to HTML.")
    arg_parser.add_argument(
        "path",
        nargs="?",
        help="HTL file to convert (default: read standard input)",
    )
    arg_parser.add_argument("--debug", action="store_true", help="Log parser state transitions to stderr")
    return arg_parser


def main(argv=None):
    args = build_arg_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    if args.path:
        with open(args.path, encoding="utf-8") as f:
            data = f.read()
    else:
        data = sys.stdin.read()

    root, error = parse(data, debug=args.debug)
    if error is not None:
        print(error, file=sys.stderr)
        return 1
    print(to_html(root))
    return 0
