"""
Recursive-descent parser for YALisp S-expressions.
Turns one expression of source text into a syntax tree (see yalisp.system.models).
"""

import logging
from typing import List, Optional, Union

from yalisp.system.errors import (
    SexpSyntaxError, UnmatchedOpenParen, UnterminatedString, UnexpectedEndOfInput
)
from yalisp.system.models import (
    IntLiteral, ListNode, ParseOutcome, StringLiteral, SymbolNode, SyntaxNode, wrap_int32
)

logger = logging.getLogger(__name__)

WHITESPACE = " \t\n"
# Characters that end a symbol run; end of input ends it too.
SYMBOL_TERMINATORS = " )\n\t"
END = "\0"

Source = Union[str, bytes]


class Cursor:
    """Mutable read position into the source text."""

    def __init__(self, pos: int = 0):
        self.pos = pos

    def __repr__(self) -> str:
        return f"Cursor(pos={self.pos})"


class SexpParser:
    """
    Parses YALisp source text into syntax trees.

    Single pass, no backtracking. The first character of a token selects how it
    is read: '(' starts a list, a digit an integer, '"' a string, anything else
    a symbol. NUL and the end of the text both count as end of input.

    The parser keeps no state between calls; one instance may be shared.
    """

    def parse_expression(self, source: Source, cursor: Cursor) -> SyntaxNode:
        """
        Parses one expression starting at `cursor.pos`.

        Args:
            source: Source text. Bytes are decoded as latin-1 so offsets stay byte offsets.
            cursor: Advanced past exactly the characters consumed.

        Returns:
            The root node of the parsed expression.

        Raises:
            SexpSyntaxError: One of UnmatchedOpenParen, UnterminatedString or
                             UnexpectedEndOfInput, describing the first problem found.
        """
        text = _as_text(source)
        return self._parse(text, cursor)

    def parse_string(self, sexp_string: Source) -> SyntaxNode:
        """
        Parses the first expression of a string. Trailing text is ignored.

        Raises:
            SexpSyntaxError: If the expression is malformed or missing.
            TypeError: If the input is neither str nor bytes.
        """
        return self.parse_expression(sexp_string, Cursor())

    def _parse(self, text: str, cursor: Cursor) -> SyntaxNode:
        self._skip_whitespace(text, cursor)
        char = _peek(text, cursor)

        if char == "(":
            return self._parse_list(text, cursor)
        if "0" <= char <= "9":
            return self._parse_integer(text, cursor)
        if char == '"':
            return self._parse_string_literal(text, cursor)
        if char != END:
            return self._parse_symbol(text, cursor)

        logger.debug(f"Parse failed: end of input at {cursor.pos}")
        raise UnexpectedEndOfInput(sexp_string=text, position=cursor.pos)

    def _parse_list(self, text: str, cursor: Cursor) -> ListNode:
        start = cursor.pos
        cursor.pos += 1
        items: List[SyntaxNode] = []

        while True:
            self._skip_whitespace(text, cursor)
            char = _peek(text, cursor)
            if char == ")" or char == END:
                break
            # Sub-expression errors propagate unchanged.
            items.append(self._parse(text, cursor))

        if _peek(text, cursor) == END:
            logger.debug(f"Parse failed: '(' at {start} never closed")
            raise UnmatchedOpenParen(sexp_string=text, position=cursor.pos)

        cursor.pos += 1
        return ListNode(items=tuple(items))

    def _parse_integer(self, text: str, cursor: Cursor) -> IntLiteral:
        value = 0
        while "0" <= _peek(text, cursor) <= "9":
            value = value * 10 + (ord(text[cursor.pos]) - ord("0"))
            cursor.pos += 1
        return IntLiteral(value=wrap_int32(value))

    def _parse_string_literal(self, text: str, cursor: Cursor) -> StringLiteral:
        cursor.pos += 1
        start = cursor.pos
        while _peek(text, cursor) not in ('"', END):
            cursor.pos += 1

        if _peek(text, cursor) == END:
            logger.debug(f"Parse failed: string opened at {start - 1} never closed")
            raise UnterminatedString(sexp_string=text, position=cursor.pos)

        literal = text[start:cursor.pos]
        cursor.pos += 1
        return StringLiteral(text=literal)

    def _parse_symbol(self, text: str, cursor: Cursor) -> SymbolNode:
        start = cursor.pos
        while True:
            char = _peek(text, cursor)
            if char == END or char in SYMBOL_TERMINATORS:
                break
            cursor.pos += 1
        return SymbolNode(name=text[start:cursor.pos])

    @staticmethod
    def _skip_whitespace(text: str, cursor: Cursor) -> None:
        while _peek(text, cursor) in WHITESPACE:
            cursor.pos += 1


def _peek(text: str, cursor: Cursor) -> str:
    if cursor.pos >= len(text):
        return END
    return text[cursor.pos]


def _as_text(source: Source) -> str:
    if isinstance(source, bytes):
        return source.decode("latin-1")
    if not isinstance(source, str):
        raise TypeError("Input must be a string or bytes.")
    return source


_default_parser = SexpParser()


def parse(source: Source, cursor: Optional[Cursor] = None) -> ParseOutcome:
    """
    Parses one expression and reports the result as a ParseOutcome.

    Args:
        source: Source text (str, or bytes scanned one byte per character).
        cursor: Start position, advanced on success. A fresh cursor at 0 is used if omitted.

    Returns:
        ParseOutcome holding either the syntax tree or the SexpSyntaxError.
    """
    if cursor is None:
        cursor = Cursor()
    try:
        node = _default_parser.parse_expression(source, cursor)
    except SexpSyntaxError as e:
        logger.debug("Parse error: %s (position %d)", e.message, e.position)
        return ParseOutcome(error=e, position=cursor.pos)
    logger.debug("Parsed %s node (cursor at %d)", node.kind, cursor.pos)
    return ParseOutcome(node=node, position=cursor.pos)
