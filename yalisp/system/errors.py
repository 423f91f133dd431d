"""
Interpreter-wide custom error types.

Two disjoint families: SexpSyntaxError for anything the parser rejects and
SexpEvaluationError for anything the evaluator rejects. The message text of
every concrete error is fixed; the shell prints it verbatim after "Error: ".
"""
from typing import Optional


class SexpSyntaxError(ValueError):
    """
    Raised when S-expression parsing fails.
    Inherits from ValueError for general compatibility but provides specific context.
    """
    message = "S-expression syntax error"

    def __init__(self, message: Optional[str] = None, sexp_string: str = "", position: int = 0):
        """
        Initializes the SexpSyntaxError.

        Args:
            message: Overrides the class-level message when given.
            sexp_string: The source text being parsed when the error occurred.
            position: Cursor offset at which the problem was detected.
        """
        if message is not None:
            self.message = message
        super().__init__(self.message)
        self.sexp_string = sexp_string
        self.position = position


class UnmatchedOpenParen(SexpSyntaxError):
    message = "Unmatched '(' in input"


class UnterminatedString(SexpSyntaxError):
    message = "Unterminated string literal in input"


class UnexpectedEndOfInput(SexpSyntaxError):
    message = "Unexpected end of input"


class SexpEvaluationError(Exception):
    """
    Raised during the evaluation phase of S-expressions.
    Indicates runtime errors like standalone symbols, unknown operators,
    arity problems or type mismatches.
    """
    message = "S-expression evaluation error"

    def __init__(self, message: Optional[str] = None, expression: str = ""):
        """
        Initializes the SexpEvaluationError.

        Args:
            message: Overrides the class-level message when given.
            expression: Source-like rendering of the node being evaluated, if known.
        """
        if message is not None:
            self.message = message
        super().__init__(self.message)
        self.expression = expression


class StandaloneSymbol(SexpEvaluationError):
    message = "Cannot evaluate a standalone symbol"


class EmptyList(SexpEvaluationError):
    message = "Cannot evaluate an empty list"


class OperatorNotSymbol(SexpEvaluationError):
    message = "First element of a list must be a symbol (operator)"


class TypeMismatch(SexpEvaluationError):
    """An operator received an argument of the wrong kind."""

    def __init__(self, operator: str, expected_kind: str, message: str, expression: str = ""):
        super().__init__(message, expression)
        self.operator = operator
        self.expected_kind = expected_kind


class ArityError(SexpEvaluationError):
    """An operator received fewer arguments than it needs."""

    def __init__(self, operator: str, minimum: int, expression: str = ""):
        plural = "argument" if minimum == 1 else "arguments"
        super().__init__(f"Operator {operator} requires at least {minimum} {plural}", expression)
        self.operator = operator
        self.minimum = minimum


class UnknownOperator(SexpEvaluationError):
    message = "Unknown operator"

    def __init__(self, operator: str, expression: str = ""):
        super().__init__(expression=expression)
        self.operator = operator


class UnknownNodeKind(SexpEvaluationError):
    message = "Unknown AST node type"
