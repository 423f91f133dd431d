"""
Tests for the parse and evaluation error taxonomies.
"""

import pytest

from yalisp.system.errors import (
    ArityError, EmptyList, OperatorNotSymbol, SexpEvaluationError, SexpSyntaxError,
    StandaloneSymbol, TypeMismatch, UnexpectedEndOfInput, UnknownNodeKind,
    UnknownOperator, UnmatchedOpenParen, UnterminatedString
)


@pytest.mark.parametrize("error_type, message", [
    (UnmatchedOpenParen, "Unmatched '(' in input"),
    (UnterminatedString, "Unterminated string literal in input"),
    (UnexpectedEndOfInput, "Unexpected end of input"),
])
def test_syntax_error_messages(error_type, message):
    error = error_type(sexp_string="(", position=1)
    assert isinstance(error, SexpSyntaxError)
    assert isinstance(error, ValueError)
    assert not isinstance(error, SexpEvaluationError)
    assert str(error) == message
    assert error.sexp_string == "("
    assert error.position == 1


@pytest.mark.parametrize("error, message", [
    (StandaloneSymbol(), "Cannot evaluate a standalone symbol"),
    (EmptyList(), "Cannot evaluate an empty list"),
    (OperatorNotSymbol(), "First element of a list must be a symbol (operator)"),
    (UnknownOperator("frob"), "Unknown operator"),
    (UnknownNodeKind(), "Unknown AST node type"),
    (TypeMismatch("concat", "string", "Non-string argument to concat"), "Non-string argument to concat"),
    (ArityError("-", 1), "Operator - requires at least 1 argument"),
    (ArityError("x", 2), "Operator x requires at least 2 arguments"),
])
def test_evaluation_error_messages(error, message):
    assert isinstance(error, SexpEvaluationError)
    assert not isinstance(error, SexpSyntaxError)
    assert str(error) == message
    assert error.message == message


def test_evaluation_error_keeps_expression():
    error = EmptyList(expression="()")
    assert error.expression == "()"
    assert str(error) == "Cannot evaluate an empty list"
