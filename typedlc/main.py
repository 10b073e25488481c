"""Uses implementation of the typed lambda calculus/typedlc language to interpret .lc files, evaluate expressions or run
in command-line mode. Also uses error handling context manager. Called from the typedlc console script.
"""

import argparse

from typedlc.lang.error import ErrorHandler
from typedlc.lang.session import Session
from typedlc.lang.shell import Shell


def main():
    """Runs typedlc interpreter. Called from typedlc console script."""
    with ErrorHandler() as error_handler:
        parser = argparse.ArgumentParser(prog="typedlc", description="Typed lambda calculus interpreter")
        parser.add_argument("file", help="file to interpret and run (if empty, goes to command-line mode)", nargs="?")
        parser.add_argument("-e", "--expr", help="statements to run instead of a file")
        parser.add_argument("-v", "--verbose", action="store_true",
                            help="print every reduction step and every type diagnostic")
        parser.add_argument("--no-std", action="store_true", help="do not load the standard library")
        parser.add_argument("--max-steps", type=int, default=Session.MAX_STEPS,
                            help="reduction steps before giving up on a term (0 for no limit)")
        parser.add_argument("--raw", action="store_true", help="do not read numerals/booleans back from normal forms")
        args = parser.parse_args()

        error_handler.verbose = args.verbose
        options = {
            "std_path": None if args.no_std else Session.STD_FILE,
            "max_steps": args.max_steps if args.max_steps > 0 else None,
            "raw": args.raw,
        }

        if args.expr is not None:
            sess = Session(error_handler, Session.EXPR_FILE, cmd_line=False, **options)
            sess.add(args.expr, 1)
            sess.run()

            for result in sess.results:
                print(result)

        elif args.file is not None:
            sess = Session(error_handler, args.file, cmd_line=False, **options)
            sess.run()

            for result in sess.results:
                print(result)

        else:
            Shell(Session(error_handler, Session.SH_FILE, cmd_line=True, **options)).cmdloop()
