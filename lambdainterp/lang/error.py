"""Errors of the lambda language and their reporting. Lexing, parsing and reduction only raise GenericException
subclasses; ErrorHandler prints those with the file/line they came from and treats anything else as a bug in the
interpreter.
"""

import sys

from termcolor import colored


class GenericException(Exception):
    """Base of every language error. The message is a format string whose slots are filled with bolded exprs."""

    def __init__(self, msg, exprs=None, start=0, end=-1, diagnosis=True, internal=False):
        """exprs is one string or a sequence of them. exprs[0] is the source text at fault and [start, end) the span
        within it that the diagnosis underlines. diagnosis=False suppresses that underline.
        """
        if exprs is None:
            exprs = ""
        if isinstance(exprs, str):
            exprs = [exprs]

        self.msg = msg.format(*(colored(expr, attrs=["bold"]) for expr in exprs))  # color expr snippets
        self.expr = exprs[0]
        self.end = end if end != -1 else len(self.expr)  # needed for error display

        self.start = start
        self.diagnosis = diagnosis
        self.internal = internal

        super().__init__(self.msg)


class LexicalError(GenericException):
    """Raised when a character cannot begin any token."""


class ParseError(GenericException):
    """Raised when no grammar alternative matches the upcoming tokens."""


class RedefinitionError(GenericException):
    """Raised when a def/rec statement names a symbol that already exists."""


class TooManyStepsError(GenericException):
    """Raised when reduction exhausts its step budget without reaching a normal form."""

    def __init__(self, msg, exprs=None, term=None, steps=0, **kwargs):
        super().__init__(msg, exprs, **kwargs)
        self.term = term
        self.steps = steps


class ErrorHandler:
    """Reports language errors raised inside a `with` block. A fatal handler exits after reporting; a non-fatal one
    (the shell's) swallows the error so the caller can carry on.
    """
    ERROR = "red"
    WARNING = "magenta"

    def __init__(self, fatal=True):
        self.fatal = fatal
        self.traceback = {}

    def register_file(self, path):
        """Adds path to the traceback with no current line."""
        self.traceback[path] = (None, None)

    def register_line(self, path, line, line_num):
        """Marks line as the one being processed in path, so an error raised now points at it."""
        self.traceback[path] = (line, line_num)

    def remove_line(self, path):
        """Clears the current line of path once it was processed without error."""
        self.traceback[path] = (None, None)

    @staticmethod
    def diagnose(error, warning=False):
        """Returns error.expr with the [start, end) span colored and a caret line underneath it."""
        color = ErrorHandler.WARNING if warning else ErrorHandler.ERROR

        diagnosis = "  " + error.expr[:error.start]

        end = max(error.end, error.start + 1)
        diagnosis += colored(error.expr[error.start:end], color, attrs=["bold"])
        diagnosis += error.expr[end:] + "\n"

        diagnosis += "  " + " " * error.start
        diagnosis += colored("^" + "~" * (end - error.start - 1), color, attrs=["bold"])

        return diagnosis

    def warn(self, *args, **kwargs):
        """Prints a warning built from GenericException args, prefixed with the first registered file:line:col."""
        error = GenericException(*args, **kwargs)

        location = ""
        for file, (line, line_num) in self.traceback.items():
            if line:
                col = max(line.find(error.expr), 0) + error.start
                location = f"{file}:{line_num}:{col}: "
                break

        error_msg = colored(location, attrs=["bold"])
        error_msg += colored("warning: ", ErrorHandler.WARNING, attrs=["bold"]) + error.msg

        print(error_msg)

        if not error.internal and error.expr and error.diagnosis:
            print(ErrorHandler.diagnose(error, warning=True))

    def throw(self, error):
        """Prints the GenericException error after a traceback of every file with a current line, in registration
        order. Exits if fatal, otherwise clears the current lines.
        """
        error_msg = ""
        lines = 0
        for file, (line, line_num) in self.traceback.items():  # dicts are insertion-ordered
            if line:
                error_msg += f"  File '{file}', line {line_num}:\n"
                error_msg += f"    {line}\n"
                lines += 1

        if lines > 1:
            error_msg = "Traceback:\n" + error_msg

        if error.internal:
            error_msg += colored("[internal] ", ErrorHandler.ERROR, attrs=["bold"])

        error_msg += colored("error: ", ErrorHandler.ERROR, attrs=["bold"]) + error.msg
        print(error_msg)

        if not error.internal and error.expr and error.diagnosis:
            print(ErrorHandler.diagnose(error))

        if self.fatal:
            sys.exit(1)
        self.traceback = {path: (None, None) for path in self.traceback}  # no need if error is fatal

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        do_exit = False
        if exc_type is None:
            return False
        elif issubclass(exc_type, KeyboardInterrupt):
            self.throw(GenericException("keyboard interrupt"))
        elif issubclass(exc_type, SystemExit):
            do_exit = True
        elif issubclass(exc_type, RecursionError):
            self.throw(GenericException("normal form might exist, but maximum recursion depth exceeded"))
        elif issubclass(exc_type, GenericException):
            self.throw(exc_val)
        else:
            self.throw(GenericException(f"unknown error: '{exc_type.__name__}: {exc_val}'", internal=True))
            do_exit = True

        return not do_exit
