"""
Unit tests for SexpEvaluator: node dispatch, list application and outcomes.
"""

import pytest

from yalisp.sexp_evaluator.sexp_evaluator import SexpEvaluator, evaluate
from yalisp.sexp_parser.sexp_parser import parse
from yalisp.system.errors import (
    EmptyList, OperatorNotSymbol, SexpEvaluationError, SexpSyntaxError,
    StandaloneSymbol, TypeMismatch, UnknownNodeKind, UnknownOperator
)
from yalisp.system.models import (
    IntLiteral, IntValue, ListNode, StringLiteral, StringValue, SymbolNode
)


def run(source):
    """Parses then evaluates source, asserting the parse succeeds."""
    parsed = parse(source)
    assert not parsed.is_error, parsed.error
    return evaluate(parsed.node)


# --- Literals ---

def test_int_literal_evaluates_to_itself():
    assert run("42").value == IntValue(value=42)


def test_string_literal_evaluates_to_itself():
    assert run("\"ab\"").value == StringValue(value="ab")


def test_empty_string_literal():
    assert run('""').value == StringValue(value="")


# --- Lists ---

def test_nested_expression():
    assert run("(+ (+ 1 2) (- 5 1))").value == IntValue(value=7)


def test_deeply_nested_concat():
    assert run('(concat (concat "a" "b") (concat) "c")').value == StringValue(value="abc")


def test_deep_nesting_within_line_buffer():
    assert run("(+ " * 200 + "1" + ")" * 200).value == IntValue(value=1)


def test_error_context_is_shallow_on_deep_tree():
    outcome = run("(+ " * 200 + "foo" + ")" * 200)
    assert isinstance(outcome.error, StandaloneSymbol)
    assert outcome.error.expression == "foo"


# --- Errors ---

@pytest.mark.parametrize("source, error_type, message", [
    ("foo", StandaloneSymbol, "Cannot evaluate a standalone symbol"),
    ("()", EmptyList, "Cannot evaluate an empty list"),
    ("(1 2)", OperatorNotSymbol, "First element of a list must be a symbol (operator)"),
    ('("+" 1)', OperatorNotSymbol, "First element of a list must be a symbol (operator)"),
    ("((+ 1) 2)", OperatorNotSymbol, "First element of a list must be a symbol (operator)"),
    ("(frobnicate 1)", UnknownOperator, "Unknown operator"),
    ("(+ 1 foo)", StandaloneSymbol, "Cannot evaluate a standalone symbol"),
    ("(+ 1 ())", EmptyList, "Cannot evaluate an empty list"),
    (")", StandaloneSymbol, "Cannot evaluate a standalone symbol"),
])
def test_evaluation_errors(source, error_type, message):
    outcome = run(source)
    assert outcome.is_error
    assert outcome.value is None
    assert isinstance(outcome.error, error_type)
    assert outcome.error.message == message
    assert outcome.render() == f"Error: {message}"


def test_operator_lookup_is_exact():
    """Operator names are case sensitive and must match exactly."""
    assert isinstance(run("(CONCAT)").error, UnknownOperator)
    assert isinstance(run("(++ 1)").error, UnknownOperator)


def test_unknown_operator_records_name():
    outcome = run("(frobnicate 1)")
    assert outcome.error.operator == "frobnicate"


def test_unknown_operator_does_not_evaluate_arguments():
    """The operator is resolved before any argument is evaluated."""
    outcome = run("(frobnicate foo)")
    assert isinstance(outcome.error, UnknownOperator)


def test_first_error_wins():
    """Evaluation stops at the first failing argument."""
    outcome = run('(+ (frobnicate) "x" foo)')
    assert isinstance(outcome.error, UnknownOperator)


def test_inner_error_propagates_unchanged():
    outcome = run('(concat "a" (+ 1 "x"))')
    assert isinstance(outcome.error, TypeMismatch)
    assert outcome.error.message == "Non-integer argument to +"


def test_unknown_node_kind():
    evaluator = SexpEvaluator()
    outcome = evaluator.evaluate(object())
    assert isinstance(outcome.error, UnknownNodeKind)
    assert outcome.error.message == "Unknown AST node type"


# --- Purity ---

def test_evaluate_does_not_modify_node(evaluator):
    node = ListNode(items=(SymbolNode(name="+"), IntLiteral(value=1), IntLiteral(value=2)))
    before = node.model_dump()
    assert evaluator.evaluate(node).value == IntValue(value=3)
    assert evaluator.evaluate(node).value == IntValue(value=3)
    assert node.model_dump() == before


def test_evaluator_can_be_built_directly_from_nodes(evaluator):
    node = ListNode(items=(SymbolNode(name="concat"), StringLiteral(text="x"), StringLiteral(text="y")))
    assert evaluator.evaluate(node).render() == '"xy"'


# --- evaluate_string ---

def test_evaluate_string_returns_value(evaluator):
    assert evaluator.evaluate_string("(- 10 1 2)") == IntValue(value=7)


def test_evaluate_string_ignores_trailing_text(evaluator):
    assert evaluator.evaluate_string("(+ 1 2) extra") == IntValue(value=3)


def test_evaluate_string_raises_syntax_error(evaluator):
    with pytest.raises(SexpSyntaxError):
        evaluator.evaluate_string("(+ 1 2")


def test_evaluate_string_raises_evaluation_error(evaluator):
    with pytest.raises(SexpEvaluationError) as excinfo:
        evaluator.evaluate_string("foo")
    assert isinstance(excinfo.value, StandaloneSymbol)


def test_operator_table_is_closed(evaluator):
    assert set(evaluator.PRIMITIVE_APPLIERS) == {"+", "-", "concat"}
