"""
Processor for YALisp builtin operators.
PrimitiveProcessor centralizes the application logic for the closed set of
operators the evaluator dispatches to: '+', '-' and 'concat'.
"""
import logging
from typing import List, Sequence, TYPE_CHECKING

from yalisp.system.errors import ArityError, TypeMismatch
from yalisp.system.models import IntValue, ListNode, StringValue, SyntaxNode, wrap_int32

if TYPE_CHECKING:
    from .sexp_evaluator import SexpEvaluator  # Forward reference for type hinting

logger = logging.getLogger(__name__)

# Shared by '+' and '-' for compatibility with existing transcripts.
NON_INTEGER_MESSAGE = "Non-integer argument to +"
NON_STRING_MESSAGE = "Non-string argument to concat"


class PrimitiveProcessor:
    """
    Applies builtin operators for the SexpEvaluator.
    Each method evaluates its argument nodes strictly, left to right, exactly
    once each. The first failing argument aborts the operator; its error is
    propagated unchanged.
    """
    def __init__(self, evaluator_instance: 'SexpEvaluator', fix_minus_message: bool = False):
        """
        Initializes the PrimitiveProcessor.

        Args:
            evaluator_instance: Evaluator used to evaluate argument nodes.
            fix_minus_message: Name '-' (not '+') in '-' type mismatch messages.
        """
        self.evaluator = evaluator_instance
        self.minus_type_message = "Non-integer argument to -" if fix_minus_message else NON_INTEGER_MESSAGE
        logger.debug("PrimitiveProcessor initialized.")

    def apply_add_primitive(self, arg_nodes: Sequence[SyntaxNode], node: ListNode) -> IntValue:
        """Applies '+': (+ int...). No arguments sum to 0."""
        logger.debug("PrimitiveProcessor.apply_add_primitive: %d argument(s)", len(arg_nodes))
        total = 0
        for arg_node in arg_nodes:
            total = wrap_int32(total + self._eval_int(arg_node, "+", NON_INTEGER_MESSAGE, node))
        logger.debug(f"  '+': Result -> {total}")
        return IntValue(value=total)

    def apply_subtract_primitive(self, arg_nodes: Sequence[SyntaxNode], node: ListNode) -> IntValue:
        """Applies '-': (- first rest...), subtracting each of rest from first in order."""
        logger.debug("PrimitiveProcessor.apply_subtract_primitive: %d argument(s)", len(arg_nodes))
        if not arg_nodes:
            raise ArityError("-", 1, expression=node.summary())

        difference = self._eval_int(arg_nodes[0], "-", self.minus_type_message, node)
        for arg_node in arg_nodes[1:]:
            difference = wrap_int32(difference - self._eval_int(arg_node, "-", self.minus_type_message, node))
        logger.debug(f"  '-': Result -> {difference}")
        return IntValue(value=difference)

    def apply_concat_primitive(self, arg_nodes: Sequence[SyntaxNode], node: ListNode) -> StringValue:
        """Applies 'concat': (concat str...), joining the strings in argument order."""
        logger.debug("PrimitiveProcessor.apply_concat_primitive: %d argument(s)", len(arg_nodes))
        parts: List[str] = []
        for arg_node in arg_nodes:
            value = self.evaluator._eval(arg_node)
            if not isinstance(value, StringValue):
                logger.debug("  'concat': non-string argument (%s)", value.kind)
                raise TypeMismatch("concat", "string", NON_STRING_MESSAGE, expression=node.summary())
            parts.append(value.value)
        result = "".join(parts)
        logger.debug("  'concat': Result length %d", len(result))
        return StringValue(value=result)

    def _eval_int(self, arg_node: SyntaxNode, operator: str, message: str, node: ListNode) -> int:
        value = self.evaluator._eval(arg_node)
        if not isinstance(value, IntValue):
            logger.debug("  '%s': non-integer argument (%s)", operator, value.kind)
            raise TypeMismatch(operator, "integer", message, expression=node.summary())
        return value.value
