"""Diagnostic codes and data structures.

Defines error codes, source spans, and diagnostic messages.
Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Literal

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
    "SourceSpan",
]


class DiagnosticCode(Enum):
    """Error codes with unique identifiers.

    Organized by category:
        1000-1999: Reference errors (arguments missing at render time)
        2000-2999: Render errors (runtime evaluation failures)
        3000-3999: Syntax errors (parser failures)
    """

    # Reference errors (1000-1999)
    ARGUMENT_NOT_PROVIDED = 1001

    # Render errors (2000-2999)
    ARGUMENT_TYPE_MISMATCH = 2001
    UNKNOWN_VARIANT = 2002
    MAX_DEPTH_EXCEEDED = 2003

    # Syntax errors (3000-3999)
    UNTERMINATED_ELEMENT = 3002
    UNEXPECTED_CLOSING_BRACE = 3003
    INVALID_ARGUMENT_NAME = 3004
    EXPECTED_SEPARATOR = 3005
    UNKNOWN_KEYWORD = 3006
    INVALID_CASE_LABEL = 3007
    DUPLICATE_CASE_LABEL = 3008
    MISSING_OTHER_CASE = 3009
    MISSING_CASE_MESSAGE = 3010
    NO_NUMERIC_CASE = 3011
    NESTING_DEPTH_EXCEEDED = 3012
    SOURCE_TOO_LARGE = 3013


@dataclass(frozen=True, slots=True)
class SourceSpan:
    """Source code location for error reporting.

    Note:
        Python strings measure positions in characters (Unicode code points),
        not bytes. For multi-byte UTF-8 characters, character offset differs
        from byte offset.

    Attributes:
        start: Starting character offset (0-indexed)
        end: Ending character offset (exclusive)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """

    start: int
    end: int
    line: int
    column: int

    def __post_init__(self) -> None:
        """Validate SourceSpan invariants.

        Raises:
            ValueError: If start is negative, end precedes start, or
                line/column are less than 1 (both are 1-indexed).
        """
        if self.start < 0:
            msg = f"SourceSpan.start must be >= 0, got {self.start}"
            raise ValueError(msg)
        if self.end < self.start:
            msg = f"SourceSpan.end ({self.end}) must be >= start ({self.start})"
            raise ValueError(msg)
        if self.line < 1:
            msg = f"SourceSpan.line must be >= 1 (1-indexed), got {self.line}"
            raise ValueError(msg)
        if self.column < 1:
            msg = f"SourceSpan.column must be >= 1 (1-indexed), got {self.column}"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic message.

    Inspired by Rust compiler diagnostics. Provides rich error information
    for both humans and tools.

    Attributes:
        code: Unique error code
        message: Human-readable error description
        span: Source location (None for render-time errors)
        hint: Suggestion for fixing the error
        expected: Tokens the parser expected at ``span`` (syntax errors)
        argument_name: Argument that caused a render error
        expected_type: Expected argument kind (render errors)
        received_type: Actual argument type (render errors)
        severity: Error severity level
    """

    code: DiagnosticCode
    message: str
    span: SourceSpan | None = None
    hint: str | None = None
    expected: tuple[str, ...] = ()
    argument_name: str | None = None
    expected_type: str | None = None
    received_type: str | None = None
    severity: Literal["error", "warning"] = "error"

    def __str__(self) -> str:
        """Return human-readable error description."""
        return self.message

    def format_error(self) -> str:
        """Format diagnostic like Rust compiler.

        Delegates to DiagnosticFormatter for consistent output.

        Example output:
            error[UNKNOWN_KEYWORD]: Unknown element keyword 'number'
              --> line 1, column 5
              = expected: 'plural', 'selectordinal', 'select', 'gender'

        Returns:
            Formatted error message
        """
        from .formatter import DiagnosticFormatter  # noqa: PLC0415 - circular

        return DiagnosticFormatter().format(self)
