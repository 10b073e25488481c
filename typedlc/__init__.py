"""Typed lambda calculus interpreter.

For reference:
- "pure": the calculus itself (terms, types, substitution, reduction), with no notion of files or sessions
- "lang": the typedlc language around it (parsing, environment, type checking, sessions, shell)

Basic program flow:
    1. Parser: splits source text into statements and parses each one into a syntax tree (lang/lexical.py)
    2. Type checking: statements carrying annotations are checked bidirectionally against the environment; type
       errors are reported but never stop anything (lang/checker.py)
    3. Evaluation: bindings and type aliases are registered in the environment, bare terms are reduced in normal
       order, expanding environment definitions only when reduction reaches them (pure/reduction.py)

"""
