"""Primitive parsing utilities for the ICU template parser.

Low-level parsers for argument names, integers and literal text runs.
Each returns a ParseResult on success or None when the input at the cursor
is not the construct; raising is left to the grammar rules, which know
enough context to report a useful diagnostic.
"""

from icumessage.constants import QUOTE_TRIGGERS
from icumessage.syntax.cursor import Cursor, ParseResult

__all__ = [
    "is_identifier_start",
    "parse_identifier",
    "parse_integer",
    "parse_literal_text",
]

# ASCII digits only: str.isdigit() accepts superscripts like '²' which int() rejects.
_ASCII_DIGITS: str = "0123456789"


def is_identifier_start(ch: str) -> bool:
    """Check whether ch may begin an argument name."""
    return ch.isalpha() or ch == "_" or ch in _ASCII_DIGITS


def _is_identifier_char(ch: str) -> bool:
    return ch.isalnum() or ch == "_"


def parse_identifier(cursor: Cursor) -> ParseResult[str] | None:
    """Parse an argument name or keyword.

    Two forms are accepted:
        - named: a letter or '_' followed by letters, digits or '_'
          (``count``, ``user_name``, ``имя``)
        - positional: ASCII digits only (``0``, ``12``)

    Examples:
        >>> parse_identifier(Cursor("count}", 0)).value
        'count'
        >>> parse_identifier(Cursor("0}", 0)).value
        '0'
        >>> parse_identifier(Cursor(" x", 0)) is None
        True
    """
    if cursor.is_eof or not is_identifier_start(cursor.current):
        return None

    start = cursor
    if cursor.current in _ASCII_DIGITS:
        while not cursor.is_eof and cursor.current in _ASCII_DIGITS:
            cursor = cursor.advance()
    else:
        while not cursor.is_eof and _is_identifier_char(cursor.current):
            cursor = cursor.advance()

    return ParseResult(start.slice_to(cursor.pos), cursor)


def parse_integer(cursor: Cursor) -> ParseResult[int] | None:
    """Parse an optionally signed ASCII integer (exact plural labels).

    Examples:
        >>> parse_integer(Cursor("42 {", 0)).value
        42
        >>> parse_integer(Cursor("-1", 0)).value
        -1
        >>> parse_integer(Cursor("x", 0)) is None
        True
    """
    start = cursor
    if not cursor.is_eof and cursor.current == "-":
        cursor = cursor.advance()

    digits_start = cursor.pos
    while not cursor.is_eof and cursor.current in _ASCII_DIGITS:
        cursor = cursor.advance()

    if cursor.pos == digits_start:
        return None
    return ParseResult(int(start.slice_to(cursor.pos)), cursor)


def parse_literal_text(cursor: Cursor, *, in_plural: bool = False) -> ParseResult[str]:
    """Parse a run of literal text, resolving apostrophe quoting.

    Stops before an unquoted '{' or '}', and before '#' when in_plural
    (inside a plural case '#' stands for the number).

    Quoting (ICU apostrophe mode):
        - ``''`` is one literal apostrophe, inside or outside a quoted span
        - ``'`` directly before '{', '}', '|' (or '#' in a plural case)
          opens a quoted span; it closes at the next lone ``'``, and an
          unterminated span runs to end of input
        - any other ``'`` is an ordinary character: ``Can't`` needs no escape

    Examples:
        >>> parse_literal_text(Cursor("Hello {name}", 0)).value
        'Hello '
        >>> parse_literal_text(Cursor("'{'braces'}'", 0)).value
        '{braces}'
        >>> parse_literal_text(Cursor("It''s", 0)).value
        "It's"
        >>> parse_literal_text(Cursor("Can't", 0)).value
        "Can't"
    """
    stop = "{}#" if in_plural else "{}"
    chars: list[str] = []

    while not cursor.is_eof:
        ch = cursor.current
        if ch in stop:
            break
        if ch != "'":
            chars.append(ch)
            cursor = cursor.advance()
            continue

        nxt = cursor.peek(1)
        if nxt == "'":
            chars.append("'")
            cursor = cursor.advance(2)
        elif nxt is not None and (nxt in QUOTE_TRIGGERS and (nxt != "#" or in_plural)):
            cursor = _parse_quoted_span(cursor.advance(), chars)
        else:
            chars.append("'")
            cursor = cursor.advance()

    return ParseResult("".join(chars), cursor)


def _parse_quoted_span(cursor: Cursor, chars: list[str]) -> Cursor:
    """Copy a quoted span into chars; cursor starts after the opening quote."""
    while not cursor.is_eof:
        if cursor.current == "'":
            if cursor.peek(1) == "'":
                chars.append("'")
                cursor = cursor.advance(2)
                continue
            return cursor.advance()
        chars.append(cursor.current)
        cursor = cursor.advance()
    return cursor
