"""Statement processing: the single entry point through which type aliases, bindings and bare terms reach the core.

Each statement is type checked when it carries annotations, and then registered in or reduced against the environment.
Type errors are diagnostics: they are handed back with the result and never prevent a binding from being registered or
a term from being reduced, so the interpreter always produces a result.
"""

from collections import namedtuple

from typedlc.lang.checker import TypeChecker
from typedlc.lang.error import ReductionCancelled, TypeCheckError
from typedlc.pure.reduction import NormalOrderReducer
from typedlc.pure.term import Assign, TypeDef

Result = namedtuple("Result", ["env", "type", "term"])
Result.__doc__ = """Outcome of a statement. type is the statement's Type, the TypeCheckError it raised, or None when
nothing could be said; term is the normal form of a bare term, the registered definition of a binding, and None for a
type alias."""


def process_statement(stmt, env, reducer=None, max_steps=None, on_step=None):
    """Processes stmt against env and returns Result(env, type, term). env is updated in place and returned.

    reducer defaults to a NormalOrderReducer over env. If max_steps is given, reducing a bare term for more steps than
    that raises ReductionCancelled; otherwise reduction runs until a normal form is found, forever if there is none.
    on_step(rule, term) is called after every reduction step.
    """
    checker = TypeChecker(env)

    if isinstance(stmt, TypeDef):
        try:
            env.define_alias(stmt.name, stmt.type)
        except TypeCheckError as error:
            return Result(env, error, None)
        return Result(env, stmt.type, None)

    elif isinstance(stmt, Assign):
        env.define(stmt.name, stmt.term)

        if stmt.annotation is not None:
            env.declare_type(stmt.name, stmt.annotation)  # declared first, so recursive bindings can refer to it
            type = stmt.annotation
            try:
                checker.check(stmt.term, stmt.annotation)
            except TypeCheckError as error:
                type = error
            return Result(env, type, stmt.term)

        try:
            type = checker.infer(stmt.term)
        except TypeCheckError as error:
            return Result(env, error, stmt.term)
        env.declare_type(stmt.name, type)
        return Result(env, type, stmt.term)

    try:
        type = checker.infer(stmt)
    except TypeCheckError as error:
        type = error

    if reducer is None:
        reducer = NormalOrderReducer(env)
    term = stmt
    for count, (rule, term) in enumerate(reducer.steps(stmt), 1):
        if max_steps is not None and count > max_steps:
            raise ReductionCancelled(str(stmt), max_steps)
        if on_step is not None:
            on_step(rule, term)
    return Result(env, type, term)
