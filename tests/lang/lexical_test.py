import unittest

from typedlc.lang.error import ParseError
from typedlc.lang.lexical import (needs_continuation, parse_program, parse_statement, parse_term, parse_type,
                                  split_statements, tokenize)
from typedlc.pure.term import Abs, App, Assign, Binder, BoolLit, NatLit, TypeDef, Var, apply, lam
from typedlc.pure.types import BOOL, HOLE, NAT, Arrow, Named


class TokenizeTestCase(unittest.TestCase):

    def test_tokenize(self):
        cases = {
            "λx.x": ["LAMBDA", "NAME", ".", "NAME", "EOF"],
            "\\x. x 12": ["LAMBDA", "NAME", ".", "NAME", "NUMBER", "EOF"],
            "type T = * -> Nat": ["TYPE", "NAME", "=", "*", "ARROW", "NAME", "EOF"],
            "f true (x₁ : Bool)": ["NAME", "BOOL", "(", "NAME", ":", "NAME", ")", "EOF"],
        }
        for case, expected in cases.items():
            self.assertEqual(expected, [token.kind for token in tokenize(case)], case)

    def test_illegal_characters(self):
        should_raise = ["x + y", "λx.{x}", "a & b"]
        for case in should_raise:
            self.assertRaises(ParseError, tokenize, case)

        with self.assertRaises(ParseError) as context:
            tokenize("x + y")
        self.assertEqual((2, 3), (context.exception.start, context.exception.end))


class ParseTermTestCase(unittest.TestCase):

    def test_parse_term(self):
        cases = {
            "x": Var("x"),
            "λx.x": lam("x", Var("x")),
            "\\x. x": lam("x", Var("x")),
            "(λx.x)": lam("x", Var("x")),
            "x y z": apply(Var("x"), Var("y"), Var("z")),
            "x (y z)": App(Var("x"), App(Var("y"), Var("z"))),
            "λx.x y": lam("x", App(Var("x"), Var("y"))),
            "(λx.x) y": App(lam("x", Var("x")), Var("y")),
            "f λx.x y": App(Var("f"), lam("x", App(Var("x"), Var("y")))),
            "λx.λy.x": lam("x", lam("y", Var("x"))),
            "Add 1 2": apply(Var("Add"), NatLit(1), NatLit(2)),
            "If true x false": apply(Var("If"), BoolLit(True), Var("x"), BoolLit(False)),
            "λ(x : Bool).x": Abs(Binder("x", BOOL), Var("x")),
            "λx: Nat -> Nat. x": Abs(Binder("x", Arrow(NAT, NAT)), Var("x")),
            "(x : Nat) y": App(Var("x", NAT), Var("y")),
            "x₁ x'": App(Var("x₁"), Var("x'")),
        }
        for case, expected in cases.items():
            self.assertEqual(expected, parse_term(case), case)

    def test_round_trip(self):
        cases = ["λx.λy.x y", "(λx.x) (λy.y) z", "f (g x) λz.z", "λ(x : Nat -> Nat).x 1", "(x : *) 1 true"]
        for case in cases:
            term = parse_term(case)
            self.assertEqual(term, parse_term(str(term)), case)

    def test_parse_errors(self):
        should_raise = ["", "λ.x", "λx x", "(x y", "x y)", "λx.", "x . y", "λ(x).x", "f = x", "()"]
        for case in should_raise:
            self.assertRaises(ParseError, parse_term, case)

    def test_error_position(self):
        with self.assertRaises(ParseError) as context:
            parse_term("f (x y")
        self.assertEqual("f (x y", context.exception.expr)
        self.assertEqual(6, context.exception.end)


class ParseTypeTestCase(unittest.TestCase):

    def test_parse_type(self):
        cases = {
            "Nat": NAT,
            "*": HOLE,
            "Nat -> Bool": Arrow(NAT, BOOL),
            "Nat -> Nat -> Bool": Arrow(NAT, Arrow(NAT, BOOL)),
            "(Nat -> Nat) -> Bool": Arrow(Arrow(NAT, NAT), BOOL),
            "(* -> *)": Arrow(HOLE, HOLE),
            "Pair": Named("Pair"),
        }
        for case, expected in cases.items():
            self.assertEqual(expected, parse_type(case), case)
            self.assertEqual(expected, parse_type(str(expected)), case)

    def test_parse_errors(self):
        should_raise = ["", "->", "Nat ->", "(Nat", "Nat Bool", "1"]
        for case in should_raise:
            self.assertRaises(ParseError, parse_type, case)


class ParseStatementTestCase(unittest.TestCase):

    def test_parse_statement(self):
        cases = {
            "type Op = Nat -> Nat": TypeDef("Op", Arrow(NAT, NAT)),
            "I = λx.x": Assign("I", lam("x", Var("x"))),
            "not : Bool -> Bool = λb.b false true":
                Assign("not", lam("b", apply(Var("b"), BoolLit(False), BoolLit(True))), Arrow(BOOL, BOOL)),
            "I y": App(Var("I"), Var("y")),
            "x": Var("x"),
            "(x : Nat)": Var("x", NAT),
        }
        for case, expected in cases.items():
            self.assertEqual(expected, parse_statement(case), case)

    def test_parse_errors(self):
        should_raise = ["type = Nat", "type A Nat", "x : Nat", "x = ", "true = x", "x = y = z", "1 = x", "type"]
        for case in should_raise:
            self.assertRaises(ParseError, parse_statement, case)


class ProgramTestCase(unittest.TestCase):

    def test_split_statements(self):
        text = ("-- identity\n"
                "I = λx.x  -- trailing comment\n"
                "\n"
                "K = λx.\n"
                "  λy.x; I a\n"
                "F = (λx.\n"
                "  x)\n")
        expected = [("I = λx.x", 2), ("K = λx.", 4), ("λy.x", 5), ("I a", 5), ("F = (λx.   x)", 6)]
        self.assertEqual(expected, list(split_statements(text)))

    def test_unbalanced_at_end(self):
        self.assertEqual([("f (x", 1)], list(split_statements("f (x")))

    def test_needs_continuation(self):
        should_pass = ["(λx.", "f (g (x)", "F = (λx. -- comment )"]
        for case in should_pass:
            self.assertTrue(needs_continuation(case), case)

        should_fail = ["λx.x", "f (x)", "x)", ""]
        for case in should_fail:
            self.assertFalse(needs_continuation(case), case)

    def test_parse_program(self):
        program = parse_program("type B = Bool; t : B = true\nt", first_line=3)

        self.assertEqual([TypeDef("B", BOOL), Assign("t", BoolLit(True), Named("B")), Var("t")],
                         [stmt.node for stmt in program])
        self.assertEqual([3, 3, 4], [stmt.line_num for stmt in program])
        self.assertEqual("t : B = true", program[1].expr)


if __name__ == '__main__':
    unittest.main()
