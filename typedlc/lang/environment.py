"""Binding environment (Γ) of a typedlc session: term definitions, their declared types, and type aliases.

The environment is the only mutable state of the interpreter. It only grows: a later definition of a name overrides the
earlier one, and nothing is ever deleted. It is passed explicitly to whoever needs it, so independent sessions never
share one.
"""

from dataclasses import dataclass, replace
from typing import Optional

from typedlc.lang.error import CyclicAlias
from typedlc.pure.term import Term
from typedlc.pure.types import Named, Type


@dataclass(frozen=True)
class Binding:
    """Definition of a name. Either part can be missing: a type can be declared before its term is defined."""
    term: Optional[Term] = None
    type: Optional[Type] = None


class Environment:
    """Governs the names of a session. Insertion order is display order; the most recent binding of a name wins."""
    BUILTIN_TYPES = ("Bool", "Nat")

    def __init__(self):
        self.bindings = {}  # dict of name: Binding, most recently (re)defined last
        self.aliases = {}   # dict of alias name: Type it stands for
        self.types = set(Environment.BUILTIN_TYPES)

    def define(self, name, term):
        """Binds name to term, overriding any previous binding of name (including its declared type)."""
        self.bindings.pop(name, None)
        self.bindings[name] = Binding(term)

    def declare_type(self, name, type):
        """Declares the type of name, defined or not."""
        binding = self.bindings.pop(name, Binding())
        self.bindings[name] = replace(binding, type=type)

    def define_alias(self, name, type):
        """Registers name as an alias of type. Raises CyclicAlias, without registering anything, if name would end up
        referring to itself.
        """
        if self._reaches(type, name, set()):
            raise CyclicAlias(name)

        self.aliases.pop(name, None)
        self.aliases[name] = type
        self.types.add(name)

    def _reaches(self, type, name, seen):
        """Whether or not name is referenced by type, directly or through aliases."""
        for ref in type.names():
            if ref == name:
                return True
            if ref in self.aliases and ref not in seen:
                seen.add(ref)
                if self._reaches(self.aliases[ref], name, seen):
                    return True
        return False

    def lookup_term(self, name):
        """Most recent definition of name, or None."""
        binding = self.bindings.get(name)
        return binding.term if binding else None

    def lookup_type(self, name):
        """Declared type of name, or None."""
        binding = self.bindings.get(name)
        return binding.type if binding else None

    def resolve_alias(self, name):
        """Follows the alias chain starting at name down to a base Named type, an Arrow or a Hole. Raises CyclicAlias if
        the chain comes back to a name it has already visited.
        """
        seen = []
        while name in self.aliases:
            if name in seen:
                raise CyclicAlias(name)
            seen.append(name)

            target = self.aliases[name]
            if not isinstance(target, Named):
                return target
            name = target.name
        return Named(name)

    def resolve(self, type):
        """type with its outermost alias resolved. Arrow components are left alone."""
        if isinstance(type, Named):
            return self.resolve_alias(type.name)
        return type

    def is_type(self, name):
        """Whether or not name is a built-in type or an alias."""
        return name in self.types

    def items(self):
        """(name, Binding) pairs in display order."""
        return self.bindings.items()

    def __contains__(self, name):
        return self.lookup_term(name) is not None

    def __repr__(self):
        return f"Environment(bindings={list(self.bindings)}, aliases={list(self.aliases)})"
