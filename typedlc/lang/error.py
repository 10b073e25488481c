"""Error handling for the typedlc language. Only GenericExceptions should be encountered during running: if another type
of error is raised and makes it all the way to ErrorHandler, it is assumed to be an internal issue.

Type errors are GenericExceptions too, but they are never thrown at the session: the statement processor catches them
and hands them back as values, and the session reports them without stopping (see ErrorHandler.report).
"""

import sys

from termcolor import colored


class GenericException(Exception):
    """Templates an error/warning message so that it can be used to throw a typedlc error/warning. exprs are formatted
    into msg; exprs[0] is the offending expr, and start/end is the range of it that caused the error.
    """

    def __init__(self, msg, exprs=None, start=0, end=-1, diagnosis=True, internal=False):
        """Parses args for GenericException or warning."""
        if exprs is None:
            exprs = ""
        if isinstance(exprs, str):
            exprs = [exprs]

        self.msg = msg.format(*(colored(expr, attrs=["bold"]) for expr in exprs))  # color expr snippets
        self.expr = exprs[0]  # exprs[0] should be the offending expr that caused the error
        self.end = end if end != -1 else len(self.expr)  # needed for error display

        self.start = start
        self.diagnosis = diagnosis
        self.internal = internal

        super().__init__(self.msg)


class ParseError(GenericException):
    """Malformed input. expr is the statement being parsed; start/end point at the offending token."""


class ReductionCancelled(GenericException):
    """A reduction ran past the step budget of its session. Not a property of the term: the reduction was abandoned."""

    def __init__(self, expr, steps):
        super().__init__("'{}' does not have a beta-normal form (gave up after {} steps)", [expr, str(steps)])
        self.steps = steps


class TypeCheckError(GenericException):
    """Superclass of the type errors produced by the checker."""
    kind = "type error"


class UnboundOrUntyped(TypeCheckError):
    """Variable with neither a local binder type nor a declared type."""

    def __init__(self, name):
        super().__init__("'{}' is unbound or has no declared type", name, diagnosis=False)
        self.name = name


class TypeMismatch(TypeCheckError):

    def __init__(self, expected, actual):
        super().__init__("expected type '{}', found '{}'", [str(expected), str(actual)], diagnosis=False)
        self.expected = expected
        self.actual = actual


class NotAFunction(TypeCheckError):
    """Something that is not a function is applied, or a function is expected of a non-arrow type."""

    def __init__(self, actual):
        super().__init__("'{}' is not a function type", str(actual), diagnosis=False)
        self.actual = actual


class CannotInferAbstraction(TypeCheckError):
    """Unannotated abstraction in inference mode: its parameter type is unknowable."""

    def __init__(self, term):
        msg = "cannot infer the type of '{}' (annotate its parameter or the binding)"
        super().__init__(msg, str(term), diagnosis=False)
        self.term = term


class CyclicAlias(TypeCheckError):

    def __init__(self, name):
        super().__init__("type alias '{}' refers to itself", name, diagnosis=False)
        self.name = name


class ErrorHandler:
    """Context manager that will silently suppress Python errors and raise custom typedlc errors/warnings."""
    ERROR = "red"
    WARNING = "magenta"
    STEP = "dark_grey"

    def __init__(self, fatal=True, verbose=False):
        self.fatal = fatal
        self.verbose = verbose
        self.traceback = {}

    def register_file(self, path):
        """Registers path in traceback."""
        self.traceback[path] = (None, None)

    def register_line(self, path, line, line_num):
        """Registers line in traceback given path. Should be called prior to Session add/run."""
        self.traceback[path] = (line, line_num)

    def remove_line(self, path):
        """Removes line from traceback given path. Should be called after successful Session add/run."""
        self.traceback[path] = (None, None)

    def register_step(self, rule, expr):
        """Prints a reduction step in verbose mode."""
        if self.verbose:
            self.show_step(rule, expr)

    @staticmethod
    def show_step(rule, expr):
        """Prints a reduction step."""
        print(colored(f"  {rule} ", ErrorHandler.STEP, attrs=["bold"]) + colored(str(expr), ErrorHandler.STEP))

    @staticmethod
    def diagnose(error, warning=False):
        """Returns offending part of error.expr highlighted and bolded."""
        color = ErrorHandler.WARNING if warning else ErrorHandler.ERROR

        diagnosis = "  " + error.expr[:error.start]

        end = max(error.end, error.start + 1)
        diagnosis += colored(error.expr[error.start:end], color, attrs=["bold"])
        diagnosis += error.expr[end:] + "\n"

        diagnosis += "  " + " " * error.start
        diagnosis += colored("^" + "~" * (end - error.start - 1), color, attrs=["bold"])

        return diagnosis

    def _location(self):
        """'file:line: ' of the innermost registered line, or '' if there is none."""
        for file, (line, line_num) in reversed(list(self.traceback.items())):
            if line is not None:
                return colored(f"{file}:{line_num}: ", attrs=["bold"])
        return ""

    def warn(self, error):
        """Prints runtime warning message for error."""
        error_msg = self._location() + colored("warning: ", ErrorHandler.WARNING, attrs=["bold"]) + error.msg
        print(error_msg)

        if not error.internal and error.expr and error.diagnosis:
            print(ErrorHandler.diagnose(error, warning=True))

    def report(self, error):
        """Prints a non-fatal error (e.g. a type error) without touching the traceback."""
        kind = getattr(error, "kind", "error")
        print(self._location() + colored(f"{kind}: ", ErrorHandler.ERROR, attrs=["bold"]) + error.msg)

        if not error.internal and error.expr and error.diagnosis:
            print(ErrorHandler.diagnose(error))

    def throw(self, error):
        """Throws error using error and self.traceback. error must be a GenericException, and self.traceback must be a
        dict of file: (line, line_num) representing origination of error.
        """
        error_msg = ""
        lines = 0
        for file, (line, line_num) in self.traceback.items():  # assumes dict is insertion-ordered
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
        self.traceback = {file: (None, None) for file in self.traceback}  # no need if error is fatal

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        do_exit = False
        if exc_type is KeyboardInterrupt:
            self.throw(GenericException("keyboard interrupt"))
        elif exc_type is SystemExit:
            do_exit = True
        elif exc_type is RecursionError:
            self.throw(GenericException("beta normal form might exist, but maximum recursion depth exceeded"))
        elif exc_type is not None and issubclass(exc_type, GenericException):
            self.throw(exc_val)
        elif exc_type is not None:
            self.throw(GenericException(f"unknown error: '{exc_type.__name__}: {exc_val}'", internal=True))
            do_exit = True

        return not do_exit
