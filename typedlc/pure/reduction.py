"""Normal-order (leftmost-outermost) reduction to beta-normal form.

Besides beta-reduction, the reducer performs delta-reduction: a variable that is free in the term being reduced and
defined in the environment is replaced by its definition, at the moment that variable becomes the leftmost-outermost
reducible node. Expansion therefore happens at reduction time, not at definition time, so redefining a name changes the
meaning of every later evaluation of a term mentioning it. Variables that are neither bound nor defined are left as
symbolic placeholders: `And True False` reduces fine before `True` and `False` exist.

Normal order finds a normal form whenever one exists. When none exists (e.g. (λx.x x) λx.x x), reduction does not
terminate; bounding it is left to the caller (see `steps`).

Source: http://pages.cs.wisc.edu/~horwitz/CS704-NOTES/1.LAMBDA-CALCULUS.html#NOR
"""

from typedlc.pure.substitution import bound_vars, free_vars, fresh_name, rename, substitute
from typedlc.pure.term import Abs, App, BoolLit, NatLit, Var

ALPHA = "α"
BETA = "β"
DELTA = "δ"


class _Capture(Exception):
    """Raised when expanding a definition would bind its free variables to enclosing binders."""

    def __init__(self, names):
        super().__init__(names)
        self.names = names


class NormalOrderReducer:
    """Implements normal-order reduction of a term against an environment.

    env is anything with a lookup_term(name) method (usually a lang.environment.Environment); None reduces closed
    terms only. literals, if given, maps a NatLit/BoolLit to the term it stands for (e.g. lang.numerical.churchify)
    and is applied when a literal is reached; otherwise literals are normal forms and an application headed by one is
    stuck.
    """

    def __init__(self, env=None, literals=None):
        self.env = env
        self.literals = literals

    def normalize(self, term):
        """Returns the normal form of term. Does not return if term has no normal form."""
        for __, term in self.steps(term):
            pass
        return term

    def steps(self, term):
        """Generates (rule, term) for every reduction step, rule being one of α, β, δ. The last term generated is the
        normal form. Callers that need to bound reduction stop iterating.
        """
        while True:
            result = self.step(term)
            if result is None:
                return
            rule, term = result
            yield rule, term

    def step(self, term):
        """Performs the leftmost-outermost reduction step of term. Returns (rule, new term), or None if term is in
        normal form.
        """
        return self._step(term, frozenset())

    def _step(self, term, bound):
        if isinstance(term, App):
            if isinstance(term.fn, Abs):
                return BETA, substitute(term.fn.body, term.fn.name, term.arg, bound)

            result = self._step(term.fn, bound)
            if result is not None:
                rule, fn = result
                return rule, App(fn, term.arg)

            result = self._step(term.arg, bound)
            if result is not None:
                rule, arg = result
                return rule, App(term.fn, arg)
            return None

        elif isinstance(term, Abs):
            try:
                result = self._step(term.body, bound | {term.name})
            except _Capture as capture:
                if term.name not in capture.names:
                    raise
                avoid = free_vars(term.body) | bound_vars(term.body) | capture.names | bound
                new_name = fresh_name(term.name, avoid)
                return ALPHA, Abs(term.binder.renamed(new_name), rename(term.body, term.name, new_name))

            if result is not None:
                rule, body = result
                return rule, Abs(term.binder, body)
            return None

        elif isinstance(term, Var):
            if term.name in bound:
                return None
            definition = self.lookup(term.name)
            if definition is None:
                return None

            captured = free_vars(definition) & bound
            if captured:
                raise _Capture(captured)
            return DELTA, definition

        elif isinstance(term, (NatLit, BoolLit)) and self.literals is not None:
            return DELTA, self.literals(term)

        return None

    def lookup(self, name):
        """Definition of free variable name, or None if it is a symbolic placeholder."""
        if self.env is None:
            return None
        return self.env.lookup_term(name)
