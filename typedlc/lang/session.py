"""Session control for the typedlc language. Loads the standard library and source files, and runs their statements in
order, either in command-line mode or file interpretation mode.
"""

import os

from typedlc.lang import printer
from typedlc.lang.checker import TypeChecker
from typedlc.lang.environment import Environment
from typedlc.lang.error import GenericException, ReductionCancelled, TypeCheckError
from typedlc.lang.lexical import Statement, parse_statement, parse_term, split_statements
from typedlc.lang.numerical import churchify
from typedlc.lang.statement import process_statement
from typedlc.pure.reduction import NormalOrderReducer
from typedlc.pure.term import Assign, TypeDef, is_annotated
from typedlc.pure.types import BOOL, Hole


class Session:
    """Governs a typedlc session: its environment, the statements waiting to be run, and their results."""
    SH_FILE = "<in>"      # command-line interpreter filename
    EXPR_FILE = "<expr>"  # filename of expressions given with --expr
    STD_FILE = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "common", "std.lc")
    MAX_STEPS = 10000     # reduction steps before a term is assumed to have no normal form

    def __init__(self, error_handler, path, std_path=STD_FILE, cmd_line=False, max_steps=MAX_STEPS, raw=False):
        self.error_handler = error_handler
        self.error_handler.register_file(path)

        self.path = path            # used for error messages
        self.std_path = std_path    # path to the standard library, None to start without it
        self.cmd_line = cmd_line    # whether or not in command-line mode
        self.max_steps = max_steps  # None reduces until a normal form is found, however long it takes
        self.raw = raw              # whether or not to show normal forms without reading back literals

        self.env = Environment()
        self.reducer = NormalOrderReducer(self.env, literals=churchify)
        self.to_exec = []  # list of (path, Statement) to run, in order
        self.results = []  # rendered results of bare terms, oldest first

        if self.cmd_line:
            self.error_handler.fatal = False

        if self.std_path:
            self.load(self.std_path)

        if path not in (Session.SH_FILE, Session.EXPR_FILE):
            self.load(path)
        elif path == Session.SH_FILE and not cmd_line:
            raise GenericException("'<in>' is a reserved filename")

    def load(self, path):
        """Parses every statement in the file at path and queues them. Nothing is queued if any statement is invalid."""
        try:
            with open(path, "r", encoding="utf-8") as file:
                text = file.read()
        except OSError:
            raise GenericException("'{}' could not be opened", path, diagnosis=False)

        self.error_handler.register_file(path)
        statements = [self._parse(expr, line_num, path) for expr, line_num in split_statements(text)]
        self.to_exec.extend((path, stmt) for stmt in statements)

    def add(self, expr, line_num, path=None):
        """Parses the statements in expr and queues them. Reduction is lazy and is delayed until run is called."""
        path = path if path else self.path
        statements = [self._parse(stmt, num, path) for stmt, num in split_statements(expr, line_num)]
        self.to_exec.extend((path, stmt) for stmt in statements)

    def _parse(self, expr, line_num, path):
        self.error_handler.register_line(path, expr, line_num)  # in case error is raised
        stmt = Statement(parse_statement(expr), expr, line_num)
        self.error_handler.remove_line(path)  # error was not raised
        return stmt

    def run(self, on_step=None):
        """Runs the queued statements in order: type aliases and bindings update the environment, bare terms are
        reduced and their results stored in self.results. Type errors are reported but do not stop anything.
        on_step(rule, term) is called after every reduction step; by default steps are only printed in verbose mode.
        """
        if on_step is None and self.error_handler.verbose:
            on_step = self.error_handler.register_step
        try:
            while self.to_exec:
                path, stmt = self.to_exec.pop(0)
                self.error_handler.register_line(path, stmt.expr, stmt.line_num)

                try:
                    result = process_statement(stmt.node, self.env, self.reducer, self.max_steps, on_step)
                except ReductionCancelled as cancelled:
                    self.error_handler.warn(cancelled)
                else:
                    self._show(stmt, result)

                self.error_handler.remove_line(path)
        finally:
            self.to_exec = []  # an error abandons the rest of the queue

    def _show(self, stmt, result):
        """Reports result's type error (if any) and stores result if it is a bare term's."""
        node, type = stmt.node, result.type

        if isinstance(type, TypeCheckError):
            if is_annotated(node) or self.error_handler.verbose:
                self.error_handler.report(type)
            type = None

        if isinstance(node, (Assign, TypeDef)):
            return

        resolved = self.env.resolve(type) if type is not None else None
        if isinstance(resolved, Hole):
            type = None
        self.results.append(printer.render_result(result.term, type, self.raw, booleans=resolved == BOOL))

    def infer(self, expr):
        """Type of the term expr in this session's environment. Raises the TypeCheckError if there is none."""
        self.error_handler.register_line(self.path, expr, 0)
        type = TypeChecker(self.env).infer(parse_term(expr))
        self.error_handler.remove_line(self.path)
        return type

    def definitions(self):
        """Rendered bindings and type aliases of the environment, in definition order."""
        lines = [printer.render_term(TypeDef(name, type)) for name, type in self.env.aliases.items()]
        for name, binding in self.env.items():
            if binding.term is not None:
                lines.append(printer.render_term(Assign(name, binding.term, binding.type)))
        return lines

    def reset(self):
        """Starts over with an empty environment."""
        self.env = Environment()
        self.reducer = NormalOrderReducer(self.env, literals=churchify)

    def pop(self):
        """Returns the oldest result not returned yet."""
        return self.results.pop(0)
