import unittest
from itertools import islice

from typedlc.lang.environment import Environment
from typedlc.lang.lexical import parse_term
from typedlc.lang.numerical import churchify, cnumber
from typedlc.pure.reduction import ALPHA, BETA, DELTA, NormalOrderReducer
from typedlc.pure.substitution import alpha_equals
from typedlc.pure.term import App, BoolLit, NatLit, Var, apply, lam

OMEGA = App(lam("x", App(Var("x"), Var("x"))), lam("x", App(Var("x"), Var("x"))))


def environment(**definitions):
    env = Environment()
    for name, source in definitions.items():
        env.define(name, parse_term(source))
    return env


class NormalOrderReducerTestCase(unittest.TestCase):

    def test_known_reductions(self):
        reducer = NormalOrderReducer()
        cases = {
            App(lam("x", Var("x")), Var("y")): Var("y"),
            App(App(lam("x", lam("y", App(Var("x"), Var("y")))), lam("z", Var("z"))), lam("w", Var("w"))):
                lam("w", Var("w")),
            lam("x", App(lam("y", Var("y")), Var("x"))): lam("x", Var("x")),
            App(Var("f"), App(lam("y", Var("y")), Var("a"))): App(Var("f"), Var("a")),
        }
        for case, expected in cases.items():
            self.assertEqual(expected, reducer.normalize(case), case)

    def test_normal_forms_are_left_alone(self):
        reducer = NormalOrderReducer()
        should_pass = [Var("x"), lam("x", Var("x")), App(Var("x"), lam("y", Var("y"))), NatLit(3), BoolLit(True)]
        for case in should_pass:
            self.assertIsNone(reducer.step(case), case)
            self.assertIs(case, reducer.normalize(case))

    def test_capture_during_reduction(self):
        term = parse_term("(λx.λy.x) y")
        result = NormalOrderReducer().normalize(term)
        self.assertTrue(alpha_equals(lam("z", Var("y")), result), result)

    def test_idempotent(self):
        env = environment(I="λx.x", K="λx.λy.x", T="λt.λf.t")
        reducer = NormalOrderReducer(env, literals=churchify)
        cases = ["I y", "K a b", "λz.K z", "(λx.λy.x y) y", "T (I a) b", "λf.λx.f (I x)", "2"]
        for case in cases:
            once = reducer.normalize(parse_term(case))
            self.assertTrue(alpha_equals(once, reducer.normalize(once)), case)

    def test_normal_order(self):
        env = environment(K="λx.λy.x")
        term = apply(Var("K"), Var("a"), OMEGA)  # call-by-name: OMEGA is discarded before it is reduced
        self.assertEqual(Var("a"), NormalOrderReducer(env).normalize(term))

    def test_environment_expansion(self):
        env = environment(I="λx.x")
        reducer = NormalOrderReducer(env)

        self.assertEqual(Var("y"), reducer.normalize(App(Var("I"), Var("y"))))
        self.assertEqual(lam("x", Var("x")), reducer.normalize(Var("I")))

    def test_bound_names_shadow_environment(self):
        env = environment(I="λx.x")
        term = lam("I", App(Var("I"), Var("y")))
        self.assertIs(term, NormalOrderReducer(env).normalize(term))

    def test_undefined_names(self):
        env = environment(And="λp.λq.p q p")
        result = NormalOrderReducer(env).normalize(parse_term("And True False"))
        self.assertEqual(apply(Var("True"), Var("False"), Var("True")), result)

    def test_deferred_expansion(self):
        env = environment(G="H")
        reducer = NormalOrderReducer(env)
        self.assertEqual(Var("H"), reducer.normalize(Var("G")))

        env.define("H", parse_term("λx.x"))
        self.assertEqual(lam("x", Var("x")), reducer.normalize(Var("G")))

    def test_expansion_does_not_capture(self):
        env = environment(F="y")
        steps = list(NormalOrderReducer(env).steps(lam("y", App(Var("F"), Var("y")))))

        self.assertEqual([ALPHA, DELTA], [rule for rule, __ in steps])
        self.assertEqual(lam("y₁", App(Var("y"), Var("y₁"))), steps[-1][1])

    def test_renaming_avoids_nested_binders(self):
        expected = parse_term("λa.λb.y a b")

        result = NormalOrderReducer().normalize(parse_term("(λx.λy.λy₁. x y y₁) y"))
        self.assertTrue(alpha_equals(expected, result), result)

        env = environment(F="y")
        steps = list(NormalOrderReducer(env).steps(parse_term("λy.λy₁. F y y₁")))
        self.assertEqual([ALPHA, DELTA], [rule for rule, __ in steps])
        self.assertTrue(alpha_equals(expected, steps[-1][1]), steps[-1][1])

    def test_stuck_literals(self):
        reducer = NormalOrderReducer()
        cases = [App(NatLit(1), Var("x")), App(BoolLit(True), NatLit(1)), lam("x", App(NatLit(0), Var("x")))]
        for case in cases:
            self.assertEqual(case, reducer.normalize(case), case)

    def test_literal_expansion_is_injected(self):
        reducer = NormalOrderReducer(literals=lambda literal: Var(f"lit{literal}"))
        steps = list(reducer.steps(App(NatLit(4), BoolLit(False))))

        self.assertEqual([DELTA, DELTA], [rule for rule, __ in steps])
        self.assertEqual(App(Var("lit4"), Var("litfalse")), steps[-1][1])

    def test_church_literals(self):
        reducer = NormalOrderReducer(literals=churchify)
        self.assertEqual(cnumber(2), reducer.normalize(NatLit(2)))
        self.assertEqual(Var("a"), reducer.normalize(apply(BoolLit(True), Var("a"), Var("b"))))
        self.assertEqual(Var("b"), reducer.normalize(apply(BoolLit(False), Var("a"), Var("b"))))

    def test_church_arithmetic(self):
        env = environment(Add="λm.λn.λf.λx.m f (n f x)", Mul="λm.λn.λf.m (n f)")
        reducer = NormalOrderReducer(env, literals=churchify)

        self.assertTrue(alpha_equals(cnumber(3), reducer.normalize(parse_term("Add 1 2"))))
        self.assertTrue(alpha_equals(cnumber(6), reducer.normalize(parse_term("Mul 2 3"))))

    def test_steps(self):
        steps = list(NormalOrderReducer().steps(parse_term("(λx.x) ((λy.y) z)")))
        self.assertEqual([BETA, BETA], [rule for rule, __ in steps])
        self.assertEqual(Var("z"), steps[-1][1])

    def test_non_termination(self):
        bound = 1000
        steps = list(islice(NormalOrderReducer().steps(OMEGA), bound))
        self.assertEqual(bound, len(steps))  # still reducing when the bound is hit
        self.assertTrue(all(rule == BETA for rule, __ in steps))


if __name__ == '__main__':
    unittest.main()
