"""icumessage exception hierarchy with structured diagnostics.

All exceptions optionally store a Diagnostic object for rich error
information (code, source span, hint).

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic

__all__ = [
    "ArgumentTypeError",
    "IcuError",
    "IcuSyntaxError",
    "MissingArgumentError",
    "RenderError",
    "StrayBraceError",
    "UnknownVariantError",
]


class IcuError(Exception):
    """Base exception for all icumessage errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize IcuError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.format_error())
        else:
            self.diagnostic = None
            super().__init__(message)


class IcuSyntaxError(IcuError):
    """Template syntax error during parsing.

    Always carries a Diagnostic whose span points at the offending
    character. The parser never recovers from these, except for the
    reduced-grammar fallback applied to stray braces in plain prose.
    """

    @property
    def offset(self) -> int:
        """Character offset of the error (0 when no span is attached)."""
        if self.diagnostic is None or self.diagnostic.span is None:
            return 0
        return self.diagnostic.span.start

    @property
    def expected(self) -> tuple[str, ...]:
        """Tokens the parser expected at the error offset."""
        if self.diagnostic is None:
            return ()
        return self.diagnostic.expected


class StrayBraceError(IcuSyntaxError):
    """Syntax error caused by a brace that does not open a recognizable element.

    Raised for a top-level `}` with no open element, or a top-level `{` that
    is not followed by `name}` or `name,`. When the template contains no
    plural, select or gender element before the brace, the parser recovers
    by re-reading the template as plain text with `{name}` substitutions.
    """


class RenderError(IcuError):
    """Runtime error while rendering a parsed template.

    Raised for a single render call; the tree itself stays valid and can be
    rendered again with different arguments.
    """


class MissingArgumentError(RenderError):
    """A plural, select or gender main argument is absent.

    Plain substitutions never raise this: a missing substitution argument
    renders as its ``{name}`` placeholder.

    Attributes:
        argument_name: Name of the missing argument
    """

    def __init__(self, message: str | Diagnostic, *, argument_name: str) -> None:
        """Initialize MissingArgumentError.

        Args:
            message: Error message string OR Diagnostic object
            argument_name: Name of the missing argument
        """
        super().__init__(message)
        self.argument_name = argument_name


class ArgumentTypeError(RenderError):
    """A main argument is present but has the wrong kind.

    Example:
        A string passed as the main argument of a ``plural`` element.

    Attributes:
        argument_name: Name of the offending argument
        expected_kind: Kind the element requires ("number", "string", ...)
        received_type: Python type name of the value actually passed
    """

    def __init__(
        self,
        message: str | Diagnostic,
        *,
        argument_name: str,
        expected_kind: str,
        received_type: str = "",
    ) -> None:
        """Initialize ArgumentTypeError.

        Args:
            message: Error message string OR Diagnostic object
            argument_name: Name of the offending argument
            expected_kind: Kind the element requires
            received_type: Type name of the value passed
        """
        super().__init__(message)
        self.argument_name = argument_name
        self.expected_kind = expected_kind
        self.received_type = received_type


class UnknownVariantError(RenderError):
    """A tree contains a node type the renderer does not handle.

    Signals a programming error (a hand-built tree or a parser/renderer
    mismatch), never bad input.
    """
