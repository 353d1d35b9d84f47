"""Error message templates.

Centralized error message templates for testable, consistent error messages.
Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode, SourceSpan

__all__ = ["ErrorTemplate"]


def _describe(found: str | None) -> str:
    """Render the offending character for a message ('EOF' past the end)."""
    if found is None:
        return "EOF"
    return repr(found)


class ErrorTemplate:
    """Centralized error message templates.

    All error messages are created here. NO f-strings in exception constructors!
    This keeps messages testable and consistent, and documents every error case.
    """

    # =========================================================================
    # REFERENCE ERRORS (1000-1999)
    # =========================================================================

    @staticmethod
    def argument_not_provided(argument_name: str, element: str) -> Diagnostic:
        """Main argument of a plural/select/gender element is missing.

        Args:
            argument_name: The argument that was not supplied
            element: Element keyword ("plural", "select", "gender")

        Returns:
            Diagnostic for ARGUMENT_NOT_PROVIDED
        """
        msg = f"Argument '{argument_name}' is required by {element} element"
        return Diagnostic(
            code=DiagnosticCode.ARGUMENT_NOT_PROVIDED,
            message=msg,
            hint=f"Pass '{argument_name}' in the render arguments",
            argument_name=argument_name,
        )

    # =========================================================================
    # RENDER ERRORS (2000-2999)
    # =========================================================================

    @staticmethod
    def argument_type_mismatch(
        argument_name: str,
        expected_kind: str,
        received_type: str,
        element: str,
    ) -> Diagnostic:
        """Main argument has a type the element cannot use.

        Args:
            argument_name: Argument with the wrong type
            expected_kind: Kind the element requires ("number", "string")
            received_type: Type name of the value passed
            element: Element keyword

        Returns:
            Diagnostic for ARGUMENT_TYPE_MISMATCH
        """
        msg = (
            f"Argument '{argument_name}' of {element} element must be a "
            f"{expected_kind}, got {received_type}"
        )
        return Diagnostic(
            code=DiagnosticCode.ARGUMENT_TYPE_MISMATCH,
            message=msg,
            hint=f"Convert '{argument_name}' to a {expected_kind} before rendering",
            argument_name=argument_name,
            expected_type=expected_kind,
            received_type=received_type,
        )

    @staticmethod
    def unknown_variant(node_type: str) -> Diagnostic:
        """Renderer met a node type outside the message union.

        Args:
            node_type: Type name of the unexpected node

        Returns:
            Diagnostic for UNKNOWN_VARIANT
        """
        msg = f"Unknown message node type: {node_type}"
        return Diagnostic(
            code=DiagnosticCode.UNKNOWN_VARIANT,
            message=msg,
            hint="This is likely a bug in the code that built the message tree",
        )

    @staticmethod
    def depth_limit_exceeded(max_depth: int) -> Diagnostic:
        """Tree nesting exceeds the depth limit during traversal.

        Args:
            max_depth: The configured limit

        Returns:
            Diagnostic for MAX_DEPTH_EXCEEDED
        """
        msg = f"Maximum nesting depth ({max_depth}) exceeded"
        return Diagnostic(
            code=DiagnosticCode.MAX_DEPTH_EXCEEDED,
            message=msg,
            hint="Flatten the message tree; real templates rarely nest deeply",
        )

    # =========================================================================
    # SYNTAX ERRORS (3000-3999)
    # =========================================================================

    @staticmethod
    def unterminated_element(span: SourceSpan) -> Diagnostic:
        """An element was opened with '{' and never closed.

        Args:
            span: Location of the opening brace

        Returns:
            Diagnostic for UNTERMINATED_ELEMENT
        """
        msg = f"Unterminated element starting at position {span.start}"
        return Diagnostic(
            code=DiagnosticCode.UNTERMINATED_ELEMENT,
            message=msg,
            span=span,
            hint="Add the missing '}' or quote the brace as '{'",
            expected=("}",),
        )

    @staticmethod
    def unexpected_closing_brace(span: SourceSpan) -> Diagnostic:
        """A '}' appeared with no open element.

        Args:
            span: Location of the brace

        Returns:
            Diagnostic for UNEXPECTED_CLOSING_BRACE
        """
        return Diagnostic(
            code=DiagnosticCode.UNEXPECTED_CLOSING_BRACE,
            message="Unexpected '}' outside of an element",
            span=span,
            hint="Quote a literal brace as '}'",
        )

    @staticmethod
    def invalid_argument_name(span: SourceSpan, found: str | None) -> Diagnostic:
        """Element does not start with a valid argument name.

        Args:
            span: Location of the offending character
            found: The character found (None at EOF)

        Returns:
            Diagnostic for INVALID_ARGUMENT_NAME
        """
        msg = f"Expected argument name, found {_describe(found)}"
        return Diagnostic(
            code=DiagnosticCode.INVALID_ARGUMENT_NAME,
            message=msg,
            span=span,
            hint="Argument names start with a letter or '_', or are all digits",
            expected=("identifier",),
        )

    @staticmethod
    def expected_separator(
        span: SourceSpan, found: str | None, expected: tuple[str, ...]
    ) -> Diagnostic:
        """A separator (',' or '}') was required.

        Args:
            span: Location of the offending character
            found: The character found (None at EOF)
            expected: Separators that would have been valid

        Returns:
            Diagnostic for EXPECTED_SEPARATOR
        """
        alternatives = " or ".join(f"'{e}'" for e in expected)
        msg = f"Expected {alternatives}, found {_describe(found)}"
        return Diagnostic(
            code=DiagnosticCode.EXPECTED_SEPARATOR,
            message=msg,
            span=span,
            expected=expected,
        )

    @staticmethod
    def unknown_keyword(span: SourceSpan, keyword: str, allowed: tuple[str, ...]) -> Diagnostic:
        """Unsupported keyword after the argument name.

        Args:
            span: Location of the keyword
            keyword: The keyword found
            allowed: Supported keywords

        Returns:
            Diagnostic for UNKNOWN_KEYWORD
        """
        msg = f"Unknown element keyword '{keyword}'"
        return Diagnostic(
            code=DiagnosticCode.UNKNOWN_KEYWORD,
            message=msg,
            span=span,
            hint="Number and date sub-formatting are not supported",
            expected=allowed,
        )

    @staticmethod
    def invalid_case_label(
        span: SourceSpan, label: str, keyword: str, allowed: tuple[str, ...]
    ) -> Diagnostic:
        """Case label not valid for this element kind.

        Args:
            span: Location of the label
            label: The label found (may be empty)
            keyword: Element keyword
            allowed: Labels the element accepts

        Returns:
            Diagnostic for INVALID_CASE_LABEL
        """
        shown = label or "nothing"
        msg = f"Invalid {keyword} case label '{shown}'"
        return Diagnostic(
            code=DiagnosticCode.INVALID_CASE_LABEL,
            message=msg,
            span=span,
            expected=allowed,
        )

    @staticmethod
    def duplicate_case_label(span: SourceSpan, label: str, keyword: str) -> Diagnostic:
        """The same case label appears twice in one element.

        Args:
            span: Location of the second occurrence
            label: The repeated label
            keyword: Element keyword

        Returns:
            Diagnostic for DUPLICATE_CASE_LABEL
        """
        msg = f"Duplicate case label '{label}' in {keyword} element"
        return Diagnostic(
            code=DiagnosticCode.DUPLICATE_CASE_LABEL,
            message=msg,
            span=span,
            hint="Each case label may appear only once",
        )

    @staticmethod
    def missing_other_case(span: SourceSpan, argument_name: str, keyword: str) -> Diagnostic:
        """Element body closed without an 'other' case.

        Args:
            span: Location of the closing brace
            argument_name: Main argument of the element
            keyword: Element keyword

        Returns:
            Diagnostic for MISSING_OTHER_CASE
        """
        msg = f"{keyword.capitalize()} element for '{argument_name}' has no 'other' case"
        return Diagnostic(
            code=DiagnosticCode.MISSING_OTHER_CASE,
            message=msg,
            span=span,
            hint="Add an 'other {...}' case as the fallback",
            expected=("other",),
        )

    @staticmethod
    def missing_case_message(span: SourceSpan, label: str, found: str | None) -> Diagnostic:
        """A case label is not followed by '{'.

        Args:
            span: Location where '{' was expected
            label: The label that lacks a message
            found: The character found (None at EOF)

        Returns:
            Diagnostic for MISSING_CASE_MESSAGE
        """
        msg = f"Expected '{{' after case label '{label}', found {_describe(found)}"
        return Diagnostic(
            code=DiagnosticCode.MISSING_CASE_MESSAGE,
            message=msg,
            span=span,
            expected=("{",),
        )

    @staticmethod
    def no_numeric_case(span: SourceSpan, argument_name: str) -> Diagnostic:
        """Plural element has nothing but an 'other' case.

        Args:
            span: Location of the element
            argument_name: Main argument of the element

        Returns:
            Diagnostic for NO_NUMERIC_CASE
        """
        msg = f"Plural element for '{argument_name}' has only an 'other' case"
        return Diagnostic(
            code=DiagnosticCode.NO_NUMERIC_CASE,
            message=msg,
            span=span,
            hint="Add a category case ('one {...}') or an exact case ('=0 {...}')",
            expected=("=N", "zero", "one", "two", "few", "many"),
        )

    @staticmethod
    def nesting_depth_exceeded(span: SourceSpan, max_depth: int) -> Diagnostic:
        """Elements nest deeper than the parser allows.

        Args:
            span: Location of the element that crossed the limit
            max_depth: The configured limit

        Returns:
            Diagnostic for NESTING_DEPTH_EXCEEDED
        """
        msg = f"Element nesting depth exceeds {max_depth}"
        return Diagnostic(
            code=DiagnosticCode.NESTING_DEPTH_EXCEEDED,
            message=msg,
            span=span,
            hint="Flatten nested plural/select elements",
        )

    @staticmethod
    def source_too_large(size: int, limit: int) -> Diagnostic:
        """Template exceeds the configured size limit.

        Args:
            size: Template length in characters
            limit: Configured maximum

        Returns:
            Diagnostic for SOURCE_TOO_LARGE
        """
        msg = f"Template too large: {size} characters (limit {limit})"
        return Diagnostic(
            code=DiagnosticCode.SOURCE_TOO_LARGE,
            message=msg,
            hint="Raise max_source_size on the parser if this is intended",
        )
