"""Lexical analysis and parsing for the typedlc language: source text to statements of the typed lambda calculus.

All grammar can be loosely defined as follows:

```
<program>     ::= { <statement> (";" | <newline>) }      ; a newline inside open parentheses continues the statement
<statement>   ::= "type" <name> "=" <type>             ; type alias
                | <name> [":" <type>] "=" <term>       ; binding, only reduced if used later on
                | <term>                               ; reduced and printed when the interpreter is run

<term>        ::= ("λ" | "\") <binder> "." <term>      ; abstraction bodies are greedy
                | <atom> { <atom> } [ <abstraction> ]  ; application, associating by left
<binder>      ::= <name> [":" <type>] | "(" <name> ":" <type> ")"
<atom>        ::= <name> | <digits> | "true" | "false" | "(" <term> ")" | "(" <name> ":" <type> ")"

<type>        ::= <type_atom> ["->" <type>]            ; associating by right
<type_atom>   ::= <name> | "*" | "(" <type> ")"

<comment>     ::= "--" <char>*
```

Names start with a letter or "_" and continue with letters, digits, "_", "'" and subscript digits (so that renamed
variables such as x₁ can be read back in).
"""

import re
from collections import namedtuple

from typedlc.lang.error import ParseError
from typedlc.pure.term import Abs, App, Assign, Binder, BoolLit, NatLit, TypeDef, Var
from typedlc.pure.types import HOLE, Arrow, Named

COMMENT = "--"
KEYWORDS = {"true": "BOOL", "false": "BOOL", "type": "TYPE"}
TOKEN_SPEC = [
    ("ARROW", r"->"),
    ("LAMBDA", r"[λ\\]"),
    ("NUMBER", r"\d+"),
    ("NAME", r"[A-Za-z_][A-Za-z0-9_'₀-₉]*"),
    ("PUNCT", r"[().:=*;]"),
    ("SKIP", r"\s+"),
    ("ILLEGAL", r"."),
]
TOKEN_RE = re.compile("|".join(f"(?P<{kind}>{pattern})" for kind, pattern in TOKEN_SPEC))

Token = namedtuple("Token", ["kind", "text", "start", "end"])
Statement = namedtuple("Statement", ["node", "expr", "line_num"])


def tokenize(expr):
    """Returns the tokens of expr, ending with an EOF token. Punctuation tokens have their own text as kind."""
    tokens = []
    for match in TOKEN_RE.finditer(expr):
        kind, text = match.lastgroup, match.group()
        if kind == "SKIP":
            continue
        elif kind == "ILLEGAL":
            raise ParseError("'{}' contains illegal character '{}'", [expr, text], start=match.start(), end=match.end())
        elif kind == "PUNCT":
            kind = text
        elif kind == "NAME":
            kind = KEYWORDS.get(text, kind)
        tokens.append(Token(kind, text, match.start(), match.end()))

    tokens.append(Token("EOF", "", len(expr), len(expr)))
    return tokens


def strip_comment(line):
    """Removes the comment (if any) at the end of line."""
    if COMMENT in line:
        return line[:line.index(COMMENT)]
    return line


def paren_balance(expr):
    """Number of parentheses opened but not yet closed in expr."""
    return expr.count("(") - expr.count(")")


def needs_continuation(expr):
    """Whether or not expr is an unfinished statement that continues on the next line."""
    return paren_balance(strip_comment(expr)) > 0


def split_statements(text, first_line=1):
    """Splits source text into (statement expr, line number) pairs. Statements end at ";" or at the end of a line,
    unless parentheses are still open. Comments and blank statements are dropped.
    """
    chunk, chunk_line, depth = "", None, 0

    for line_num, line in enumerate(text.split("\n"), first_line):
        for char in strip_comment(line).rstrip("\r"):
            if char == ";" and depth <= 0:
                if chunk.strip():
                    yield chunk.strip(), chunk_line
                chunk, chunk_line, depth = "", None, 0
                continue

            if chunk_line is None and not char.isspace():
                chunk_line = line_num
            depth += {"(": 1, ")": -1}.get(char, 0)
            chunk += char

        if depth > 0:
            chunk += " "
        else:
            if chunk.strip():
                yield chunk.strip(), chunk_line
            chunk, chunk_line, depth = "", None, 0

    if chunk.strip():
        yield chunk.strip(), chunk_line  # unbalanced at end of text: let the parser complain


class Parser:
    """Recursive-descent parser over the tokens of a single statement."""

    def __init__(self, expr):
        self.expr = expr
        self.tokens = tokenize(expr)
        self.pos = 0

    def peek(self, offset=0):
        return self.tokens[min(self.pos + offset, len(self.tokens) - 1)]

    def advance(self):
        token = self.peek()
        self.pos += 1
        return token

    def expect(self, kind, description=None):
        token = self.peek()
        if token.kind != kind:
            self.error(description if description else f"'{kind}'")
        return self.advance()

    def error(self, expected):
        """Raises a ParseError pointing at the current token."""
        token = self.peek()
        if token.kind == "EOF":
            msg = "'{}' ended unexpectedly (expected {})"
            raise ParseError(msg, [self.expr, expected], start=max(token.start - 1, 0), end=token.end)

        if token.kind == ")" and paren_balance(self.expr) < 0:
            raise ParseError("'{}' has mismatched parentheses", self.expr, start=token.start, end=token.end)
        msg = "'{}' has unexpected '{}' (expected {})"
        raise ParseError(msg, [self.expr, token.text, expected], start=token.start, end=token.end)

    def statement(self):
        """<statement>: a TypeDef, an Assign or a bare term."""
        first, second = self.peek(), self.peek(1)

        if first.kind == "TYPE" and second.kind == "NAME":
            self.advance()
            name = self.advance().text
            self.expect("=")
            node = TypeDef(name, self.type())

        elif first.kind == "NAME" and second.kind in ("=", ":"):
            name = self.advance().text
            annotation = None
            if self.advance().kind == ":":
                annotation = self.type()
                self.expect("=")
            node = Assign(name, self.term(), annotation)

        else:
            node = self.term()

        self.expect("EOF", "end of statement")
        return node

    def term(self):
        """<term>: an abstraction or an application of atoms."""
        if self.peek().kind == "LAMBDA":
            return self.abstraction()

        fn = self.atom()
        while True:
            kind = self.peek().kind
            if kind == "LAMBDA":
                return App(fn, self.abstraction())  # the abstraction swallows the rest
            elif kind in ("NAME", "NUMBER", "BOOL", "("):
                fn = App(fn, self.atom())
            else:
                return fn

    def abstraction(self):
        self.expect("LAMBDA", "'λ'")

        if self.peek().kind == "(":
            self.advance()
            name = self.expect("NAME", "a parameter name").text
            self.expect(":")
            binder = Binder(name, self.type())
            self.expect(")")
        else:
            name = self.expect("NAME", "a parameter name").text
            binder = Binder(name)
            if self.peek().kind == ":":
                self.advance()
                binder = Binder(name, self.type())

        self.expect(".")
        return Abs(binder, self.term())

    def atom(self):
        token = self.peek()

        if token.kind == "NAME":
            self.advance()
            return Var(token.text)
        elif token.kind == "NUMBER":
            self.advance()
            return NatLit(int(token.text))
        elif token.kind == "BOOL":
            self.advance()
            return BoolLit(token.text == "true")

        elif token.kind == "(":
            self.advance()
            if self.peek().kind == "NAME" and self.peek(1).kind == ":":
                name = self.advance().text
                self.advance()
                term = Var(name, self.type())
            else:
                term = self.term()
            self.expect(")")
            return term

        self.error("a term")

    def type(self):
        """<type>: arrows associate to the right."""
        domain = self.type_atom()
        if self.peek().kind == "ARROW":
            self.advance()
            return Arrow(domain, self.type())
        return domain

    def type_atom(self):
        token = self.peek()

        if token.kind == "NAME":
            self.advance()
            return Named(token.text)
        elif token.kind == "*":
            self.advance()
            return HOLE
        elif token.kind == "(":
            self.advance()
            type = self.type()
            self.expect(")")
            return type

        self.error("a type")


def parse_statement(expr):
    """Parses a single statement."""
    return Parser(expr).statement()


def parse_term(expr):
    """Parses a single term (no bindings or type aliases)."""
    parser = Parser(expr)
    term = parser.term()
    parser.expect("EOF", "end of term")
    return term


def parse_type(expr):
    parser = Parser(expr)
    type = parser.type()
    parser.expect("EOF", "end of type")
    return type


def parse_program(text, first_line=1):
    """Parses every statement of text, in order."""
    return [Statement(parse_statement(expr), expr, line_num) for expr, line_num in split_statements(text, first_line)]
