"""Type language for the typed lambda calculus.

```
<type> ::= <name>               ; "named", includes built-ins Bool/Nat and aliases
         | "*"                  ; "hole", compatible with every type
         | <type> "->" <type>   ; "arrow", associating by right: A -> B -> C = A -> (B -> C)
```

Types are immutable and compared structurally here. Alias-aware equality lives in the type checker, because only the
environment knows what a name stands for.
"""

from dataclasses import dataclass


class Type:
    """Superclass of all types."""

    def names(self):
        """Set of named types referenced by this type."""
        return set()


@dataclass(frozen=True)
class Named(Type):
    """Base type or alias, referred to by name."""
    name: str

    def names(self):
        return {self.name}

    def __str__(self):
        return self.name


@dataclass(frozen=True)
class Hole(Type):
    """The `*` type: unknown, accepted wherever a type is expected."""

    def __str__(self):
        return "*"


@dataclass(frozen=True)
class Arrow(Type):
    """Function type."""
    domain: Type
    codomain: Type

    def names(self):
        return self.domain.names() | self.codomain.names()

    def __str__(self):
        if isinstance(self.domain, Arrow):
            return f"({self.domain}) -> {self.codomain}"
        return f"{self.domain} -> {self.codomain}"


BOOL = Named("Bool")
NAT = Named("Nat")
HOLE = Hole()
