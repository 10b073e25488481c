import unittest

from typedlc.lang import numerical
from typedlc.lang.error import GenericException
from typedlc.lang.lexical import parse_term
from typedlc.pure.term import App, BoolLit, NatLit, Var, lam


class NumericalTestCase(unittest.TestCase):

    def test_cnumber(self):
        should_fail = [-2, 0.3, 4.0, True, "1"]
        for case in should_fail:
            self.assertRaises(GenericException, numerical.cnumber, case)

        should_pass = {0: "λf.λx.x", 3: "λf.λx.f (f (f x))"}
        for case, result in should_pass.items():
            self.assertEqual(parse_term(result), numerical.cnumber(case))

    def test_churchify(self):
        self.assertEqual(parse_term("λf.λx.f (f x)"), numerical.churchify(NatLit(2)))
        self.assertEqual(parse_term("λt.λf.t"), numerical.churchify(BoolLit(True)))
        self.assertEqual(parse_term("λt.λf.f"), numerical.churchify(BoolLit(False)))

    def test_number(self):
        for num in (0, 1, 7):
            self.assertEqual(num, numerical.number(numerical.cnumber(num)))
        self.assertEqual(2, numerical.number(parse_term("λs.λz.s (s z)")))

        should_fail = ["λx.x", "λf.λf.f", "λf.λx.f (g x)", "λf.λx.f", "λf.λx.x f", "x"]
        for case in should_fail:
            self.assertIsNone(numerical.number(parse_term(case)), case)

    def test_boolean(self):
        self.assertTrue(numerical.boolean(numerical.cbool(True)))
        self.assertFalse(numerical.boolean(numerical.cbool(False)))
        self.assertFalse(numerical.boolean(numerical.cnumber(0)))

        should_fail = ["λx.x", "λt.λt.t", "λt.λf.f t", "λt.λf.x"]
        for case in should_fail:
            self.assertIsNone(numerical.boolean(parse_term(case)), case)

    def test_numberify(self):
        cases = {
            App(Var("f"), numerical.cnumber(2)): App(Var("f"), NatLit(2)),
            lam("y", App(Var("y"), numerical.cnumber(1))): lam("y", App(Var("y"), NatLit(1))),
            numerical.cnumber(0): NatLit(0),
        }
        for case, expected in cases.items():
            self.assertEqual(expected, numerical.numberify(case))

        self.assertEqual(NatLit(0), numerical.numberify(numerical.cbool(False)))
        self.assertEqual(BoolLit(False), numerical.numberify(numerical.cbool(False), booleans=True))

        untouched = numerical.cbool(True)
        self.assertIs(untouched, numerical.numberify(untouched))


if __name__ == '__main__':
    unittest.main()
