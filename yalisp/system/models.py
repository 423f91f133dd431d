"""
Interpreter-wide Pydantic models.

Syntax nodes and values are tagged unions discriminated on a `kind` field.
Outcomes carry either a result or the error that stopped the cycle, never both.
"""

from typing import Annotated, Any, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, NonNegativeInt, conint, field_validator, model_validator
from sexpdata import Symbol, dumps

from yalisp.system.errors import SexpEvaluationError, SexpSyntaxError


INT32_MIN = -(2 ** 31)
INT32_MAX = 2 ** 31 - 1

Int32 = conint(ge=INT32_MIN, le=INT32_MAX)


def wrap_int32(number: int) -> int:
    """Wraps an arbitrary Python int into the signed 32-bit range (two's complement)."""
    return (number - INT32_MIN) % 2 ** 32 + INT32_MIN


# --- Syntax Tree ---

class _Node(BaseModel):
    model_config = ConfigDict(frozen=True)

    def to_sexpdata(self) -> Any:
        """Converts the node into the plain sexpdata representation (int, str, Symbol, list)."""
        raise NotImplementedError

    def __str__(self) -> str:
        return dumps(self.to_sexpdata())

    def summary(self) -> str:
        """Shallow rendering for logs and error context; never walks below the first level."""
        return str(self)


class IntLiteral(_Node):
    """Unsigned decimal literal, stored as a signed 32-bit integer."""
    kind: Literal["int"] = "int"
    value: Int32

    def to_sexpdata(self) -> Any:
        return self.value


class SymbolNode(_Node):
    """Bare token that is not a literal; only meaningful in operator position."""
    kind: Literal["symbol"] = "symbol"
    name: str

    def to_sexpdata(self) -> Any:
        return Symbol(self.name)


class StringLiteral(_Node):
    """Double-quoted text, kept verbatim (no escape processing)."""
    kind: Literal["string"] = "string"
    text: str

    def to_sexpdata(self) -> Any:
        return self.text


class ListNode(_Node):
    """Parenthesized sequence; owns its items exclusively."""
    kind: Literal["list"] = "list"
    items: Tuple["SyntaxNode", ...] = ()

    def to_sexpdata(self) -> Any:
        return [item.to_sexpdata() for item in self.items]

    def summary(self) -> str:
        if not self.items:
            return "()"
        head = self.items[0]
        head_text = "(...)" if isinstance(head, ListNode) else str(head)
        return f"({head_text} ...) [{len(self.items)} items]"


SyntaxNode = Annotated[
    Union[IntLiteral, SymbolNode, StringLiteral, ListNode],
    Field(discriminator="kind"),
]

ListNode.model_rebuild()


# --- Values ---

class IntValue(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["int"] = "int"
    value: Int32

    def render(self) -> str:
        return str(self.value)


class StringValue(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["string"] = "string"
    value: str

    def render(self) -> str:
        # Embedded quotes are not escaped.
        return f'"{self.value}"'


Value = Annotated[Union[IntValue, StringValue], Field(discriminator="kind")]


# --- Outcomes ---

class ParseOutcome(BaseModel):
    """
    Result of parsing one expression.

    Exactly one of `node` / `error` is set. `position` is the cursor offset
    reached; it is only meaningful on success.
    """
    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    node: Optional[SyntaxNode] = None
    error: Optional[SexpSyntaxError] = None
    position: NonNegativeInt = 0

    @model_validator(mode="after")
    def _exactly_one(self) -> "ParseOutcome":
        if (self.node is None) == (self.error is None):
            raise ValueError("ParseOutcome requires exactly one of 'node' or 'error'")
        return self

    @property
    def is_error(self) -> bool:
        return self.error is not None


class EvalOutcome(BaseModel):
    """Result of evaluating one syntax tree: a value or an evaluation error."""
    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    value: Optional[Value] = None
    error: Optional[SexpEvaluationError] = None

    @model_validator(mode="after")
    def _exactly_one(self) -> "EvalOutcome":
        if (self.value is None) == (self.error is None):
            raise ValueError("EvalOutcome requires exactly one of 'value' or 'error'")
        return self

    @property
    def is_error(self) -> bool:
        return self.error is not None

    def render(self) -> str:
        """Text the shell prints for this outcome."""
        if self.error is not None:
            return f"Error: {self.error.message}"
        return self.value.render()


# --- Configuration ---

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ReplConfig(BaseModel):
    """
    Settings for the interactive shell and the command-line entry point.
    """
    buffer_size: conint(ge=2) = Field(1024, description="Line buffer size in bytes, terminator included.")
    prompt: str = Field("(yalisp) > ", description="Prompt printed before each line is read.")
    log_level: str = Field("WARNING", description="Root logging level.")
    log_file: Optional[str] = Field(None, description="Log to this file instead of stderr.")
    fix_minus_message: bool = Field(
        False,
        description="Report '-' type mismatches as 'Non-integer argument to -' instead of the legacy '+' text.",
    )

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, level: str) -> str:
        level = level.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        return level

    @property
    def max_line_length(self) -> int:
        """Longest line content the buffer can hold."""
        return self.buffer_size - 1
