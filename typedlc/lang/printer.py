"""Colored rendering of terms and types for the terminal. Layout is the same as str(term), only colors are added:
lambdas yellow, names of definitions (capitalized) magenta, numerals green, booleans cyan, punctuation dark grey.
"""

from termcolor import colored

from typedlc.lang.numerical import numberify
from typedlc.pure.term import Abs, App, Assign, BoolLit, NatLit, TypeDef, Var

PUNCT = "dark_grey"


def punct(text):
    return colored(text, PUNCT)


def render_var(name):
    if name[:1].isupper():
        return colored(name, "magenta")
    return colored(name, attrs=["italic"])


def render_type(type):
    return colored(str(type), "blue")


def render_term(node):
    """Colored rendering of node."""
    if isinstance(node, Var):
        if node.annotation is None:
            return render_var(node.name)
        return punct("(") + render_var(node.name) + punct(" : ") + render_type(node.annotation) + punct(")")

    elif isinstance(node, Abs):
        binder = render_var(node.name)
        if node.binder.type is not None:
            binder = punct("(") + binder + punct(" : ") + render_type(node.binder.type) + punct(")")
        return colored("λ", "yellow") + binder + punct(".") + render_term(node.body)

    elif isinstance(node, App):
        fn = punct("(") + render_term(node.fn) + punct(")") if isinstance(node.fn, Abs) else render_term(node.fn)
        arg = punct("(") + render_term(node.arg) + punct(")") if node.arg.tokenizable else render_term(node.arg)
        return f"{fn} {arg}"

    elif isinstance(node, NatLit):
        return colored(str(node), "green")
    elif isinstance(node, BoolLit):
        return colored(str(node), "cyan", attrs=["italic"])

    elif isinstance(node, Assign):
        annotation = punct(" : ") + render_type(node.annotation) if node.annotation is not None else ""
        return render_var(node.name) + annotation + punct(" = ") + render_term(node.term)
    elif isinstance(node, TypeDef):
        return colored("type ", "yellow") + render_type(node.name) + punct(" = ") + render_type(node.type)

    return str(node)


def render_result(node, node_type=None, raw=False, booleans=False):
    """Rendering of a normal form and its type (if known). Unless raw, Church numerals (and, if booleans, Church
    booleans) are read back as literals.
    """
    if not raw:
        node = numberify(node, booleans)

    rendered = render_term(node)
    if node_type is not None:
        rendered += punct(" : ") + render_type(node_type)
    return rendered
