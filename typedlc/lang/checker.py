"""Bidirectional type checking.

Typing is split into two mutually recursive judgments:

```
Γ; ctx ⊢ e ⇒ T    infer: synthesize the type of e
Γ; ctx ⊢ e ⇐ T    check: verify that e has type T
```

Γ is the session environment (declared types of global names, aliases) and ctx maps the binders enclosing e to their
types. Unannotated abstractions can only be checked, never inferred: nothing tells what their parameter is. The hole
type `*` is a wildcard, equal to every type, so `* -> *` accepts any function and applying something of type `*` gives
something of type `*`.

Sources: https://davidchristiansen.dk/tutorials/bidirectional.pdf,
         https://www.cl.cam.ac.uk/~nk480/bidir-survey.pdf
"""

from typedlc.lang.error import CannotInferAbstraction, NotAFunction, TypeMismatch, UnboundOrUntyped
from typedlc.pure.term import Abs, App, Assign, BoolLit, NatLit, Var
from typedlc.pure.types import BOOL, HOLE, NAT, Arrow, Hole, Named


class TypeChecker:
    """Checks terms against the declared types and aliases of env. Failures raise TypeCheckErrors."""

    def __init__(self, env):
        self.env = env

    def infer(self, term, ctx=None):
        """Returns the type synthesized for term."""
        if ctx is None:
            ctx = {}

        if isinstance(term, NatLit):
            return NAT
        elif isinstance(term, BoolLit):
            return BOOL

        elif isinstance(term, Var):
            known = ctx[term.name] if term.name in ctx else self.env.lookup_type(term.name)
            if known is None:
                if term.annotation is not None:
                    return term.annotation
                raise UnboundOrUntyped(term.name)
            if term.annotation is not None and not self.equals(term.annotation, known):
                raise TypeMismatch(term.annotation, known)
            return known

        elif isinstance(term, Abs):
            if term.binder.type is None:
                raise CannotInferAbstraction(term)
            body = self.infer(term.body, {**ctx, term.name: term.binder.type})
            return Arrow(term.binder.type, body)

        elif isinstance(term, App):
            fn = self.infer(term.fn, ctx)
            resolved = self.env.resolve(fn)
            if isinstance(resolved, Hole):
                return HOLE
            if not isinstance(resolved, Arrow):
                raise NotAFunction(fn)
            self.check(term.arg, resolved.domain, ctx)
            return resolved.codomain

        elif isinstance(term, Assign):
            if term.annotation is None:
                return self.infer(term.term, ctx)
            self.check(term.term, term.annotation, ctx)
            return term.annotation

        raise TypeError(f"cannot type {type(term).__name__}")

    def check(self, term, expected, ctx=None):
        """Verifies that term has type expected."""
        if ctx is None:
            ctx = {}

        if isinstance(term, Abs):
            resolved = self.env.resolve(expected)
            if isinstance(resolved, Hole):
                resolved = Arrow(HOLE, HOLE)

            if term.binder.type is None:
                if not isinstance(resolved, Arrow):
                    raise NotAFunction(expected)
                self.check(term.body, resolved.codomain, {**ctx, term.name: resolved.domain})
                return

            if isinstance(resolved, Arrow):
                if not self.equals(term.binder.type, resolved.domain):
                    raise TypeMismatch(resolved.domain, term.binder.type)
                self.check(term.body, resolved.codomain, {**ctx, term.name: term.binder.type})
                return

        actual = self.infer(term, ctx)
        if not self.equals(expected, actual):
            raise TypeMismatch(expected, actual)

    def equals(self, left, right):
        """Whether or not left and right are the same type once aliases are resolved. A hole equals anything."""
        left, right = self.env.resolve(left), self.env.resolve(right)

        if isinstance(left, Hole) or isinstance(right, Hole):
            return True
        elif isinstance(left, Named) and isinstance(right, Named):
            return left.name == right.name
        elif isinstance(left, Arrow) and isinstance(right, Arrow):
            return self.equals(left.domain, right.domain) and self.equals(left.codomain, right.codomain)
        return False
