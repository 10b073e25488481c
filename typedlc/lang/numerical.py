"""Natural numbers and booleans encoded as Church numerals/booleans. Operations on them are not implemented here (see
common/std.lc), keeping everything as pure as possible: literals are only expanded into lambda terms when the reducer
reaches them, and normal forms are read back into literals for display.

Source: https://en.wikipedia.org/wiki/Church_encoding#Calculation_with_Church_numerals
"""

from typedlc.lang.error import GenericException
from typedlc.pure.term import Abs, App, BoolLit, NatLit, Var, lam


def cnumber(num):
    """Returns λf.λx.f (... (f x)) with num applications of f (cnum = Church numeral)."""
    if isinstance(num, bool) or not isinstance(num, int) or num < 0:
        raise GenericException("expected natural number, got '{}'", str(num), internal=True)

    body = Var("x")
    for __ in range(num):
        body = App(Var("f"), body)
    return lam("f", lam("x", body))


def cbool(value):
    """Returns λt.λf.t for True and λt.λf.f for False."""
    return lam("t", lam("f", Var("t" if value else "f")))


def churchify(literal):
    """Church encoding of a NatLit/BoolLit."""
    if isinstance(literal, NatLit):
        return cnumber(literal.value)
    return cbool(literal.value)


def number(cnum):
    """Returns the natural number encoded by cnum, or None if cnum isn't a Church numeral."""
    if not isinstance(cnum, Abs) or not isinstance(cnum.body, Abs):
        return None

    f, x = cnum.name, cnum.body.name
    if f == x:
        return None

    num = 0
    nth_body = cnum.body.body
    while isinstance(nth_body, App):
        if not isinstance(nth_body.fn, Var) or nth_body.fn.name != f:
            return None
        nth_body = nth_body.arg
        num += 1

    if isinstance(nth_body, Var) and nth_body.name == x:
        return num
    return None


def boolean(cbool):
    """Returns the boolean encoded by cbool, or None if cbool isn't a Church boolean."""
    if not isinstance(cbool, Abs) or not isinstance(cbool.body, Abs) or cbool.name == cbool.body.name:
        return None

    body = cbool.body.body
    if isinstance(body, Var) and body.name in (cbool.name, cbool.body.name):
        return body.name == cbool.name
    return None


def numberify(term, booleans=False):
    """Replaces every Church numeral in term by a NatLit, outermost first. If booleans, Church booleans are replaced by
    BoolLits before numerals are looked for (λt.λf.f is both false and 0).
    """
    if booleans:
        value = boolean(term)
        if value is not None:
            return BoolLit(value)

    num = number(term)
    if num is not None:
        return NatLit(num)

    if isinstance(term, Abs):
        body = numberify(term.body, booleans)
        return term if body is term.body else Abs(term.binder, body)
    elif isinstance(term, App):
        fn, arg = numberify(term.fn, booleans), numberify(term.arg, booleans)
        return term if fn is term.fn and arg is term.arg else App(fn, arg)
    return term
