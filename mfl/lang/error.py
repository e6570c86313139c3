"""Error handling for the MFL language. Only GenericExceptions should be encountered while running a program: if
another type of error is raised and makes it all the way to ErrorHandler, it is assumed to be an internal issue.

There are two user-facing categories: MFLSyntaxError, raised while lexing or parsing source, and MFLRuntimeError,
raised while evaluating a parsed program.
"""

import sys

from termcolor import colored


class GenericException(Exception):
    """Templates an error message so that it can be used to throw an MFL error. Offending snippets in exprs are
    substituted into msg and highlighted when displayed.
    """
    category = "error"

    def __init__(self, msg, exprs=None, line=None, diagnosis=True, internal=False):
        if exprs is None:
            exprs = ""
        if isinstance(exprs, str):
            exprs = [exprs]
        exprs = [str(expr) for expr in exprs]

        self.msg = msg.format(*(colored(expr, attrs=["bold"]) for expr in exprs))  # color expr snippets
        self.expr = exprs[0]  # exprs[0] should be the offending expr that caused the error
        self.line = line      # source line of the offending expr, if known

        self.diagnosis = diagnosis
        self.internal = internal

        super().__init__(msg.format(*exprs))


class MFLSyntaxError(GenericException):
    """Raised when source text does not follow the MFL grammar."""
    category = "syntax error"


class MFLRuntimeError(GenericException):
    """Raised when a parsed program fails during evaluation."""
    category = "runtime error"


class ErrorHandler:
    """Context manager that will suppress MFL errors and report them in a readable, colored format."""
    ERROR = "red"

    def __init__(self, fatal=True, file=None):
        self.fatal = fatal
        self.file = file
        self.traceback = {}  # path: list of source lines

    def register_source(self, path, source):
        """Registers path and its source text in traceback, so that errors can quote the offending line."""
        self.traceback[path] = source.splitlines()

    def remove_source(self, path):
        """Removes path from traceback. Should be called after a successful run."""
        self.traceback.pop(path, None)

    @staticmethod
    def diagnose(error, source_line):
        """Returns source_line with the offending part of error.expr highlighted and underlined, or None if
        error.expr does not appear in source_line.
        """
        start = source_line.find(error.expr)
        if not error.expr or start == -1:
            return None
        end = start + len(error.expr)

        diagnosis = "    " + source_line[:start]
        diagnosis += colored(source_line[start:end], ErrorHandler.ERROR, attrs=["bold"])
        diagnosis += source_line[end:] + "\n"

        diagnosis += "    " + " " * start
        diagnosis += colored("^" + "~" * (end - start - 1), ErrorHandler.ERROR, attrs=["bold"])

        return diagnosis

    def throw(self, error):
        """Prints error using self.traceback to locate it. error must be a GenericException. Exits if self.fatal."""
        file = self.file if self.file is not None else sys.stderr

        error_msg = ""
        quoted = None
        for path, lines in self.traceback.items():  # assumes dict is insertion-ordered
            if error.line is not None and 0 < error.line <= len(lines):
                error_msg += f"  File '{path}', line {error.line}:\n"
                quoted = lines[error.line - 1]

        if error.internal:
            error_msg += colored("[internal] ", ErrorHandler.ERROR, attrs=["bold"])

        error_msg += colored(f"{error.category}: ", ErrorHandler.ERROR, attrs=["bold"]) + error.msg
        print(error_msg, file=file)

        if not error.internal and error.diagnosis and quoted is not None:
            diagnosis = ErrorHandler.diagnose(error, quoted)
            if diagnosis:
                print(diagnosis, file=file)

        if self.fatal:
            sys.exit(1)
        self.traceback = {}  # if error occurred, reset traceback (no need if error is fatal)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        do_exit = False
        if exc_type is KeyboardInterrupt:
            self.throw(GenericException("keyboard interrupt", diagnosis=False))
        elif exc_type is SystemExit:
            do_exit = True
        elif exc_type is RecursionError:
            self.throw(GenericException("maximum recursion depth exceeded", diagnosis=False))
        elif exc_type is not None and issubclass(exc_type, GenericException):
            self.throw(exc_val)
        elif exc_type is not None:
            self.throw(GenericException("unknown error: '{}'", f"{exc_type.__name__}: {exc_val}", internal=True))
            do_exit = True

        return not do_exit
