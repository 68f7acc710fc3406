"""Error handling for Thenga Lang. Only GenericExceptions should leave the pipeline: LexicalError from the scanner,
ParseError from the parser and EvalError from the evaluator. Anything else that makes it to the host is wrapped into
an internal EvalError by classify_errors, and reported by ErrorHandler.
"""

import sys
from contextlib import contextmanager

from termcolor import colored


class GenericException(Exception):
    """Message-bearing Thenga error with an optional source position."""
    kind = "error"

    def __init__(self, msg, line=None, column=None, internal=False):
        super().__init__(msg)
        self.msg = msg
        self.line = line
        self.column = column
        self.internal = internal

    @property
    def positioned(self):
        return self.line is not None and self.column is not None

    def __str__(self):
        if self.positioned:
            return f"{self.kind} at {self.line}:{self.column} - {self.msg}"
        return f"{self.kind}: {self.msg}"


class LexicalError(GenericException):
    """Malformed token: bad number, unterminated string, unrecognized character."""
    kind = "lexical error"


class ParseError(GenericException):
    """Token stream violates the grammar. No recovery: the first error wins."""
    kind = "syntax error"


class EvalError(GenericException):
    """Raised during evaluation. Recoverable inside a program with try/catch unless internal."""
    kind = "runtime error"


@contextmanager
def classify_errors():
    """Re-raises any non-Thenga failure as an internal EvalError, so callers only ever see the three error kinds."""
    try:
        yield
    except GenericException:
        raise
    except RecursionError as exc:
        raise EvalError("maximum recursion depth exceeded") from exc
    except Exception as exc:
        raise EvalError(f"Runtime error: {exc}", internal=True) from exc


class ErrorHandler:
    """Context manager that reports Thenga errors in color instead of letting Python tracebacks through."""
    ERROR = "red"
    WARNING = "magenta"

    def __init__(self, fatal=True):
        self.fatal = fatal
        self.path = None
        self.lines = []

    def register_source(self, path, source):
        """Registers the file (or REPL input) currently running, used to locate diagnostics."""
        self.path = path
        self.lines = source.splitlines()

    def reset(self):
        self.path = None
        self.lines = []

    def diagnose(self, error, warning=False):
        """Returns the offending source line with the error column underlined, or None if it cannot be located."""
        if not error.positioned or not 0 < error.line <= len(self.lines):
            return None

        color = ErrorHandler.WARNING if warning else ErrorHandler.ERROR
        line = self.lines[error.line - 1]
        start = min(max(error.column - 1, 0), len(line))

        diagnosis = "  " + line[:start]
        diagnosis += colored(line[start:start + 1], color, attrs=["bold"])
        diagnosis += line[start + 1:] + "\n"
        diagnosis += "  " + " " * start + colored("^", color, attrs=["bold"])

        return diagnosis

    def location(self, error):
        location = self.path or "<in>"
        if error.positioned:
            location += f":{error.line}:{error.column}"
        return colored(f"{location}: ", attrs=["bold"])

    def warn(self, msg):
        """Prints a warning message."""
        print(colored("warning: ", ErrorHandler.WARNING, attrs=["bold"]) + msg)

    def throw(self, error):
        """Prints error, a GenericException, with its location and diagnosis. Exits if self.fatal."""
        error_msg = self.location(error)
        if error.internal:
            error_msg += colored("[internal] ", ErrorHandler.ERROR, attrs=["bold"])
        error_msg += colored(f"{error.kind}: ", ErrorHandler.ERROR, attrs=["bold"]) + error.msg
        print(error_msg)

        diagnosis = self.diagnose(error)
        if not error.internal and diagnosis:
            print(diagnosis)

        if self.fatal:
            sys.exit(1)
        self.reset()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        do_exit = False
        if exc_type is KeyboardInterrupt:
            self.throw(EvalError("keyboard interrupt"))
        elif exc_type is SystemExit:
            do_exit = True
        elif exc_type is RecursionError:
            self.throw(EvalError("maximum recursion depth exceeded"))
        elif exc_type is not None and issubclass(exc_type, GenericException):
            self.throw(exc_val)
        elif exc_type is not None:
            self.throw(EvalError(f"unknown error: '{exc_type.__name__}: {exc_val}'", internal=True))
            do_exit = True

        return not do_exit
