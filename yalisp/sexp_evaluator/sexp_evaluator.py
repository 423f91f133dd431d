"""
YALisp tree-walking evaluator.
Evaluates a parsed syntax tree against the fixed set of builtin operators.
There are no bindings or environments: literals evaluate to themselves and a
list applies the operator named by its first element.
"""

import logging
from typing import Callable, Dict, Optional

from yalisp.sexp_parser.sexp_parser import SexpParser
from yalisp.system.errors import (
    EmptyList, OperatorNotSymbol, SexpEvaluationError, StandaloneSymbol,
    UnknownNodeKind, UnknownOperator
)
from yalisp.system.models import (
    EvalOutcome, IntLiteral, IntValue, ListNode, StringLiteral, StringValue,
    SymbolNode, SyntaxNode, Value
)
from .sexp_primitives import PrimitiveProcessor

logger = logging.getLogger(__name__)


class SexpEvaluator:
    """
    Evaluates YALisp syntax trees.

    Holds no per-evaluation state; the node being evaluated is never modified.
    """

    def __init__(self, fix_minus_message: bool = False, parser: Optional[SexpParser] = None):
        """
        Initializes the evaluator.

        Args:
            fix_minus_message: Report '-' type mismatches under '-' instead of the legacy '+' text.
            parser: Parser used by evaluate_string. A new SexpParser if omitted.
        """
        self.parser = parser or SexpParser()
        self.primitive_processor = PrimitiveProcessor(self, fix_minus_message=fix_minus_message)

        # Closed set; there is no way to register further operators.
        self.PRIMITIVE_APPLIERS: Dict[str, Callable] = {
            "+": self.primitive_processor.apply_add_primitive,
            "-": self.primitive_processor.apply_subtract_primitive,
            "concat": self.primitive_processor.apply_concat_primitive,
        }
        logger.debug(f"SexpEvaluator INITIALIZED. PRIMITIVE_APPLIERS keys: {list(self.PRIMITIVE_APPLIERS.keys())}")

    def evaluate(self, node: SyntaxNode) -> EvalOutcome:
        """
        Evaluates a syntax tree and reports the result as an EvalOutcome.

        The first error met anywhere in the tree aborts the evaluation; no
        partial result is returned alongside it.
        """
        try:
            value = self._eval(node)
        except SexpEvaluationError as e:
            logger.debug("Evaluation error: %s", e.message)
            return EvalOutcome(error=e)
        logger.debug("Evaluated %s node -> %s value", getattr(node, "kind", "?"), value.kind)
        return EvalOutcome(value=value)

    def evaluate_string(self, sexp_string: str) -> Value:
        """
        Parses the first expression of a string and evaluates it.

        Raises:
            SexpSyntaxError: If parsing fails.
            SexpEvaluationError: If evaluation fails.
        """
        logger.info(f"Evaluating S-expression string: {sexp_string[:100]}")
        node = self.parser.parse_string(sexp_string)
        return self._eval(node)

    def _eval(self, node: SyntaxNode) -> Value:
        """
        Internal recursive evaluation method. Raises SexpEvaluationError subclasses.
        """
        if isinstance(node, IntLiteral):
            return IntValue(value=node.value)
        if isinstance(node, StringLiteral):
            return StringValue(value=node.text)
        if isinstance(node, SymbolNode):
            raise StandaloneSymbol(expression=node.summary())
        if not isinstance(node, ListNode):
            logger.error(f"Eval: unknown node type {type(node).__name__}")
            raise UnknownNodeKind(expression=repr(node))

        # Lists are applied inline to keep one frame per nesting level here.
        if not node.items:
            raise EmptyList(expression=node.summary())

        op_node, *arg_nodes = node.items
        if not isinstance(op_node, SymbolNode):
            raise OperatorNotSymbol(expression=node.summary())

        applier = self.PRIMITIVE_APPLIERS.get(op_node.name)
        if applier is None:
            logger.debug(f"Eval: unknown operator '{op_node.name}'")
            raise UnknownOperator(op_node.name, expression=node.summary())
        return applier(arg_nodes, node)


_default_evaluator = SexpEvaluator()


def evaluate(node: SyntaxNode) -> EvalOutcome:
    """Evaluates a syntax tree with the default builtin operators."""
    return _default_evaluator.evaluate(node)
