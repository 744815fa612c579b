"""Uses the pure lambda calculus/lambda language implementation to interpret source files or run in command-line
mode. Also uses the error handling context manager. Called from the lambdainterp console script.

Python version must be >=3.7, because error handling requires that dicts are insertion-ordered.
"""

import argparse
import logging
import sys

from lambdainterp.lang.error import ErrorHandler
from lambdainterp.lang.primitives import default_symbols
from lambdainterp.lang.session import Session
from lambdainterp.lang.shell import Shell
from lambdainterp.pure.reduction import STRATEGIES

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def build_parser():
    parser = argparse.ArgumentParser(prog="lambdainterp", description="Untyped lambda calculus interpreter.")
    parser.add_argument("files", help="files to interpret and run (if empty, goes to command-line mode)", nargs="*")
    parser.add_argument("--strategy", choices=sorted(STRATEGIES), help="reduction order (default: applicative)")
    parser.add_argument("--max-steps", type=int, help="reduction steps allowed per expression (default: 1024)")
    parser.add_argument("--numbers", action="store_true", help="display numerals in results as digits")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="log definitions (-v) and steps (-vv)")
    return parser


def main(argv=None):
    """Runs the lambda interpreter. Called from the lambdainterp console script."""
    assert sys.version_info >= (3, 7), "lambdainterp cannot be run with python < 3.7"

    parser = build_parser()
    args = parser.parse_args(argv)
    if args.max_steps is not None and args.max_steps < 0:
        parser.error("--max-steps must not be negative")

    level = {0: logging.WARNING, 1: logging.INFO}.get(args.verbose, logging.DEBUG)
    logging.basicConfig(level=level, format=LOG_FORMAT)

    options = {"strategy": args.strategy, "max_steps": args.max_steps, "numbers": args.numbers}

    with ErrorHandler() as error_handler:
        symbols = default_symbols()  # definitions carry over from one file to the next

        if args.files:
            for path in args.files:
                sess = Session(error_handler, path, cmd_line=False, symbols=symbols, **options)
                sess.run()

                while sess.results:
                    print(sess.pop())

        else:
            Shell(Session(error_handler, Session.SH_FILE, cmd_line=True, symbols=symbols, **options)).cmdloop()
