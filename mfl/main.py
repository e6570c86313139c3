"""Runs MFL programs from files or strings, or starts the interactive shell. Uses the error handling context manager
so that syntax and runtime errors are reported instead of raised. Called from the mfl console script.
"""

import argparse

from mfl.lang.error import ErrorHandler
from mfl.lang.session import Session
from mfl.lang.shell import Shell


def main(argv=None):
    """Runs the MFL interpreter. Called from the mfl console script."""
    with ErrorHandler() as error_handler:
        parser = argparse.ArgumentParser(prog="mfl", description="MFL expression language interpreter")
        parser.add_argument("file", help="file to interpret and run (if empty, goes to command-line mode)", nargs="?")
        parser.add_argument("-c", "--command", help="program passed in as a string")
        parser.add_argument("--tree", action="store_true", help="print the syntax tree instead of running")
        args = parser.parse_args(argv)

        if args.command is not None:
            sess = Session(error_handler, Session.STR_FILE, source=args.command)
        elif args.file is not None:
            sess = Session(error_handler, args.file)
        else:
            Shell(Session(error_handler, Session.SH_FILE, cmd_line=True)).cmdloop()
            return

        if args.tree:
            print(sess.display())
        else:
            sess.run()


if __name__ == "__main__":
    main()
