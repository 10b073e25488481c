"""Capture-avoiding substitution and alpha-conversion.

Sources: https://en.wikipedia.org/wiki/Lambda_calculus#Substitution,
         https://en.wikipedia.org/wiki/Lambda_calculus#Free_and_bound_variables
"""

from typedlc.pure.term import Abs, App, Assign, Var

SUBS = ["₀", "₁", "₂", "₃", "₄", "₅", "₆", "₇", "₈", "₉"]


def free_vars(term):
    """Names occurring free in term."""
    if isinstance(term, Var):
        return frozenset([term.name])
    elif isinstance(term, Abs):
        return free_vars(term.body) - {term.name}
    elif isinstance(term, App):
        return free_vars(term.fn) | free_vars(term.arg)
    elif isinstance(term, Assign):
        return free_vars(term.term)
    return frozenset()


def bound_vars(term):
    """Names bound by abstractions anywhere in term."""
    if isinstance(term, Abs):
        return bound_vars(term.body) | {term.name}
    elif isinstance(term, App):
        return bound_vars(term.fn) | bound_vars(term.arg)
    elif isinstance(term, Assign):
        return bound_vars(term.term)
    return frozenset()


def subscript(var, num):
    """Returns var with subscript of num."""
    return var + "".join(SUBS[int(digit)] for digit in str(num))


def split(name):
    """Splits name into var and subscript (-1 if there is none)."""
    sub = []
    while name and name[-1] in SUBS:
        sub.insert(0, SUBS.index(name[-1]))
        name = name[:-1]
    return name, int("".join(str(digit) for digit in sub)) if sub else -1


def fresh_name(name, avoid):
    """Returns the first of name₁, name₂, ... that is not in avoid. Any subscript already on name is replaced, so
    renaming x₁ yields x₂ rather than x₁₁.
    """
    var, __ = split(name)
    num = 1
    while subscript(var, num) in avoid:
        num += 1
    return subscript(var, num)


def rename(term, old, new):
    """Renames free occurrences of old to new. new must not be bound anywhere old occurs free."""
    if isinstance(term, Var):
        return Var(new, term.annotation) if term.name == old else term
    elif isinstance(term, Abs):
        if term.name == old:
            return term
        body = rename(term.body, old, new)
        return term if body is term.body else Abs(term.binder, body)
    elif isinstance(term, App):
        fn, arg = rename(term.fn, old, new), rename(term.arg, old, new)
        return term if fn is term.fn and arg is term.arg else App(fn, arg)
    return term


def substitute(term, name, replacement, scope=frozenset()):
    """Returns term with every free occurrence of name replaced by replacement. scope holds the names bound around term
    by its context; they are never picked as fresh binder names. Subtrees that do not contain name are returned as-is.
    """
    incoming = free_vars(replacement)

    def _sub(node, bound):
        if isinstance(node, Var):
            return replacement if node.name == name else node

        elif isinstance(node, Abs):
            if node.name == name:
                return node  # name is shadowed below this binder

            binder, body = node.binder, node.body
            if binder.name in incoming and name in free_vars(body):
                avoid = incoming | free_vars(body) | bound_vars(body) | bound | {name}
                new_name = fresh_name(binder.name, avoid)
                binder, body = binder.renamed(new_name), rename(body, binder.name, new_name)

            new_body = _sub(body, bound | {binder.name})
            if new_body is node.body and binder is node.binder:
                return node
            return Abs(binder, new_body)

        elif isinstance(node, App):
            fn, arg = _sub(node.fn, bound), _sub(node.arg, bound)
            return node if fn is node.fn and arg is node.arg else App(fn, arg)

        elif isinstance(node, Assign):
            new_term = _sub(node.term, bound)
            return node if new_term is node.term else Assign(node.name, new_term, node.annotation)

        return node

    return _sub(term, frozenset(scope))


def alpha_equals(left, right):
    """Whether or not two terms are equal up to the names of their bound variables. Binder annotations are ignored,
    they do not take part in reduction.
    """

    def lookup(bound, name, side):
        for depth, pair in enumerate(reversed(bound)):
            if pair[side] == name:
                return depth
        return None

    def _equals(left, right, bound):
        if isinstance(left, Var) and isinstance(right, Var):
            left_depth, right_depth = lookup(bound, left.name, 0), lookup(bound, right.name, 1)
            if left_depth is None and right_depth is None:
                return left.name == right.name
            return left_depth == right_depth

        elif isinstance(left, Abs) and isinstance(right, Abs):
            return _equals(left.body, right.body, bound + [(left.name, right.name)])

        elif isinstance(left, App) and isinstance(right, App):
            return _equals(left.fn, right.fn, bound) and _equals(left.arg, right.arg, bound)

        elif isinstance(left, Assign) and isinstance(right, Assign):
            return left.name == right.name and _equals(left.term, right.term, bound)

        return type(left) is type(right) and left == right

    return _equals(left, right, [])
