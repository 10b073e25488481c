"""Abstract syntax tree of the typed lambda calculus.

```
<term> ::= <var> [":" <type>]              ; "variable", optionally ascribed
         | "λ" <binder> "." <term>         ; "abstraction", binder optionally annotated
         | <term> <term>                   ; "application", associating by left: abcd = ((((a) b) c) d)
         | <digits> | "true" | "false"     ; literals, already in normal form
```

Two more node kinds only appear at statement level: `Assign` (`x = e`, `x : T = e`) and `TypeDef` (`type A = T`).

Every node is a frozen dataclass. Nothing in this package mutates a term: reduction and substitution build new nodes
along the path they touch and reuse every other subtree by reference.
"""

from dataclasses import dataclass, replace
from typing import Optional

from typedlc.pure.types import Type


class Term:
    """Superclass of every node of the syntax tree."""

    @property
    def tokenizable(self):
        """Whether or not this node needs parentheses when it is used as an argument."""
        return False


@dataclass(frozen=True)
class Binder:
    """Name bound by an abstraction, with its declared type if there is one."""
    name: str
    type: Optional[Type] = None

    def renamed(self, name):
        return replace(self, name=name)

    def __str__(self):
        if self.type is None:
            return self.name
        return f"({self.name} : {self.type})"


@dataclass(frozen=True)
class Var(Term):
    """Reference to an enclosing binder or to an environment entry."""
    name: str
    annotation: Optional[Type] = None

    def __str__(self):
        if self.annotation is None:
            return self.name
        return f"({self.name} : {self.annotation})"


@dataclass(frozen=True)
class Abs(Term):
    """Single-argument abstraction. Bodies are greedy: λx.x y = λx.(x y) != (λx.x) (y)."""
    binder: Binder
    body: Term

    @property
    def name(self):
        return self.binder.name

    @property
    def tokenizable(self):
        return True

    def __str__(self):
        return f"λ{self.binder}.{self.body}"


@dataclass(frozen=True)
class App(Term):
    """Application of one term to another."""
    fn: Term
    arg: Term

    @property
    def tokenizable(self):
        return True

    def __str__(self):
        fn = f"({self.fn})" if isinstance(self.fn, Abs) else str(self.fn)
        arg = f"({self.arg})" if self.arg.tokenizable else str(self.arg)
        return f"{fn} {arg}"


@dataclass(frozen=True)
class NatLit(Term):
    value: int

    def __str__(self):
        return str(self.value)


@dataclass(frozen=True)
class BoolLit(Term):
    value: bool

    def __str__(self):
        return "true" if self.value else "false"


@dataclass(frozen=True)
class Assign(Term):
    """Top-level binding: <name> [":" <type>] "=" <term>."""
    name: str
    term: Term
    annotation: Optional[Type] = None

    def __str__(self):
        if self.annotation is None:
            return f"{self.name} = {self.term}"
        return f"{self.name} : {self.annotation} = {self.term}"


@dataclass(frozen=True)
class TypeDef(Term):
    """Type alias declaration: "type" <name> "=" <type>."""
    name: str
    type: Type

    def __str__(self):
        return f"type {self.name} = {self.type}"


def is_annotated(term):
    """Whether or not term carries a type annotation anywhere."""
    if isinstance(term, Var):
        return term.annotation is not None
    elif isinstance(term, Abs):
        return term.binder.type is not None or is_annotated(term.body)
    elif isinstance(term, App):
        return is_annotated(term.fn) or is_annotated(term.arg)
    elif isinstance(term, Assign):
        return term.annotation is not None or is_annotated(term.term)
    return isinstance(term, TypeDef)


def lam(name, body, type=None):
    """Shorthand for building an abstraction from a plain name."""
    return Abs(Binder(name, type), body)


def apply(fn, *args):
    """Left-associated application of fn to args: apply(f, a, b) = (f a) b."""
    for arg in args:
        fn = App(fn, arg)
    return fn
