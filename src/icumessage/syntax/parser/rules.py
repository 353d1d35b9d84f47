"""Grammar rules for ICU message templates.

Recursive descent over an immutable Cursor:

    message     := (literal | '#' | element)*
    element     := '{' ws name ws ( '}' | ',' ws keyword ws ',' cases '}' )
    cases       := ( ws label ws '{' message '}' )+ ws
    label       := '=' integer | identifier

Rules return ParseResult and raise IcuSyntaxError on malformed input.
Errors caused by a top-level brace that does not open an element are
raised as StrayBraceError so the parser can fall back to plain text.
"""

from dataclasses import dataclass, field

from icumessage.constants import GENDER_LABELS, MAX_DEPTH, OTHER, PLURAL_CATEGORIES
from icumessage.diagnostics import (
    Diagnostic,
    ErrorTemplate,
    IcuSyntaxError,
    StrayBraceError,
)
from icumessage.enums import ElementKeyword
from icumessage.syntax.ast import (
    Composite,
    Gender,
    Literal,
    Message,
    Plural,
    Select,
    VariableSubstitution,
)
from icumessage.syntax.cursor import Cursor, ParseResult
from icumessage.syntax.parser.primitives import (
    parse_identifier,
    parse_integer,
    parse_literal_text,
)

__all__ = [
    "ParseContext",
    "ParseStats",
    "parse_element",
    "parse_message",
    "parse_plain_message",
]

_KEYWORDS: tuple[str, ...] = tuple(k.value for k in ElementKeyword)


@dataclass(slots=True)
class ParseStats:
    """Mutable counters shared by every context of one parse call."""

    complex_elements: int = 0


@dataclass(frozen=True, slots=True)
class ParseContext:
    """Explicit context for parsing operations.

    Passed down instead of thread-local state, so one parser instance can
    serve many threads.

    Attributes:
        max_nesting_depth: Maximum allowed element nesting depth
        current_depth: Current nesting depth (0 = top level)
        plural_argument: Main argument of the innermost enclosing plural,
            used for '#'; None outside plural cases
        stats: Counters for the whole parse (complex elements seen)
    """

    max_nesting_depth: int = MAX_DEPTH
    current_depth: int = 0
    plural_argument: str | None = None
    stats: ParseStats = field(default_factory=ParseStats)

    def is_depth_exceeded(self) -> bool:
        """Check if maximum nesting depth has been reached."""
        return self.current_depth >= self.max_nesting_depth

    def enter_element(self, plural_argument: str | None) -> "ParseContext":
        """Context for the case messages of a complex element."""
        return ParseContext(
            max_nesting_depth=self.max_nesting_depth,
            current_depth=self.current_depth + 1,
            plural_argument=plural_argument,
            stats=self.stats,
        )


# =============================================================================
# Messages
# =============================================================================


def _append_text(parts: list[Message], text: str) -> None:
    """Append text, merging with a preceding Literal."""
    if not text:
        return
    if parts and isinstance(parts[-1], Literal):
        parts[-1] = Literal(parts[-1].text + text)
    else:
        parts.append(Literal(text))


def _build_message(parts: list[Message]) -> Message:
    if not parts:
        return Literal("")
    if len(parts) == 1:
        return parts[0]
    return Composite(tuple(parts))


def parse_message(cursor: Cursor, context: ParseContext) -> ParseResult[Message]:
    """Parse a message up to EOF (top level) or its closing '}' (case body).

    The closing brace of a case body is NOT consumed; the caller owns it.

    Examples:
        "Hello" -> Literal("Hello")
        "{n} emails" -> Composite((VariableSubstitution("n"), Literal(" emails")))

    Raises:
        StrayBraceError: '}' at top level
        IcuSyntaxError: malformed element
    """
    parts: list[Message] = []
    in_plural = context.plural_argument is not None

    while not cursor.is_eof:
        ch = cursor.current
        if ch == "{":
            element = parse_element(cursor, context)
            parts.append(element.value)
            cursor = element.cursor
        elif ch == "}":
            if context.current_depth == 0:
                raise StrayBraceError(ErrorTemplate.unexpected_closing_brace(cursor.span()))
            break
        elif ch == "#" and context.plural_argument is not None:
            parts.append(VariableSubstitution(context.plural_argument))
            cursor = cursor.advance()
        else:
            text = parse_literal_text(cursor, in_plural=in_plural)
            _append_text(parts, text.value)
            cursor = text.cursor

    return ParseResult(_build_message(parts), cursor)


def parse_plain_message(source: str) -> Message:
    """Parse source with the reduced grammar.

    Only ``{name}`` (whitespace allowed inside the braces) is special;
    every other character, including quotes, '#' and unmatched braces, is
    literal text. Total: never raises.

    Example:
        "Use } to close {name}" ->
            Composite((Literal("Use } to close "), VariableSubstitution("name")))
    """
    parts: list[Message] = []
    cursor = Cursor(source, 0)

    while not cursor.is_eof:
        if cursor.current == "{":
            name = parse_identifier(cursor.advance().skip_whitespace())
            if name is not None:
                closing = name.cursor.skip_whitespace().expect("}")
                if closing is not None:
                    parts.append(VariableSubstitution(name.value))
                    cursor = closing
                    continue
            _append_text(parts, "{")
            cursor = cursor.advance()
            continue

        end = source.find("{", cursor.pos)
        if end == -1:
            end = len(source)
        _append_text(parts, cursor.slice_to(end))
        cursor = Cursor(source, end)

    return _build_message(parts)


# =============================================================================
# Elements
# =============================================================================


def _header_error(diagnostic: Diagnostic, context: ParseContext) -> IcuSyntaxError:
    """Error for an element header that never became a recognizable element."""
    if context.current_depth == 0:
        return StrayBraceError(diagnostic)
    return IcuSyntaxError(diagnostic)


def parse_element(cursor: Cursor, context: ParseContext) -> ParseResult[Message]:
    """Parse an element starting at '{'.

    Examples:
        {name}                                  -> VariableSubstitution
        {n, plural, one {# day} other {# days}} -> Plural
        {who, gender, female {her} other {their}} -> Gender
        {s, select, a {A} other {?}}            -> Select
    """
    start = cursor
    if context.is_depth_exceeded():
        raise IcuSyntaxError(
            ErrorTemplate.nesting_depth_exceeded(start.span(), context.max_nesting_depth)
        )

    cursor = cursor.advance().skip_whitespace()
    if cursor.is_eof:
        raise IcuSyntaxError(ErrorTemplate.unterminated_element(start.span()))

    name = parse_identifier(cursor)
    if name is None:
        raise _header_error(
            ErrorTemplate.invalid_argument_name(cursor.span(), cursor.current), context
        )

    cursor = name.cursor.skip_whitespace()
    if cursor.is_eof:
        raise IcuSyntaxError(ErrorTemplate.unterminated_element(start.span()))
    if cursor.current == "}":
        return ParseResult(VariableSubstitution(name.value), cursor.advance())
    if cursor.current != ",":
        raise _header_error(
            ErrorTemplate.expected_separator(cursor.span(), cursor.current, (",", "}")), context
        )

    cursor = cursor.advance().skip_whitespace()
    keyword = _parse_keyword(cursor, start)
    cursor = keyword.cursor.skip_whitespace()
    if cursor.is_eof:
        raise IcuSyntaxError(ErrorTemplate.unterminated_element(start.span()))
    if cursor.current != ",":
        raise IcuSyntaxError(
            ErrorTemplate.expected_separator(cursor.span(), cursor.current, (",",))
        )
    cursor = cursor.advance()
    context.stats.complex_elements += 1

    match keyword.value:
        case ElementKeyword.PLURAL | ElementKeyword.SELECTORDINAL:
            return _parse_plural(
                cursor,
                context.enter_element(name.value),
                name.value,
                start,
                ordinal=keyword.value is ElementKeyword.SELECTORDINAL,
            )
        case ElementKeyword.GENDER:
            return _parse_gender(
                cursor, context.enter_element(context.plural_argument), name.value, start
            )
        case ElementKeyword.SELECT:
            return _parse_select(
                cursor, context.enter_element(context.plural_argument), name.value, start
            )


def _parse_keyword(cursor: Cursor, start: Cursor) -> ParseResult[ElementKeyword]:
    if cursor.is_eof:
        raise IcuSyntaxError(ErrorTemplate.unterminated_element(start.span()))
    word = parse_identifier(cursor)
    if word is None or word.value not in _KEYWORDS:
        found = word.value if word is not None else cursor.current
        end = word.cursor.pos if word is not None else None
        raise IcuSyntaxError(ErrorTemplate.unknown_keyword(cursor.span(end), found, _KEYWORDS))
    return ParseResult(ElementKeyword(word.value), word.cursor)


# =============================================================================
# Case bodies
# =============================================================================


@dataclass(frozen=True, slots=True)
class _Case:
    label: str
    message: Message


def _parse_label(cursor: Cursor, keyword: ElementKeyword) -> ParseResult[str] | None:
    """Parse a case label; plural exact labels are normalized to '=N'."""
    if keyword is ElementKeyword.PLURAL and not cursor.is_eof and cursor.current == "=":
        number = parse_integer(cursor.advance())
        if number is None:
            return None
        return ParseResult(f"={number.value}", number.cursor)
    return parse_identifier(cursor)


def _parse_cases(
    cursor: Cursor,
    context: ParseContext,
    keyword: ElementKeyword,
    argument: str,
    start: Cursor,
) -> ParseResult[list[_Case]]:
    """Parse ``label {message}`` pairs through the element's closing '}'.

    Args:
        cursor: Position after the keyword's trailing comma
        context: Context for case messages (already entered)
        keyword: PLURAL, SELECT or GENDER (selectordinal parses as PLURAL)
        argument: Main argument of the element (for diagnostics)
        start: Cursor at the element's opening '{'

    Returns:
        Cases in source order; the cursor is past the closing '}'
    """
    match keyword:
        case ElementKeyword.PLURAL:
            allowed: tuple[str, ...] | None = PLURAL_CATEGORIES
            expected = ("=N", *PLURAL_CATEGORIES)
        case ElementKeyword.GENDER:
            allowed = expected = GENDER_LABELS
        case _:
            allowed, expected = None, ("identifier",)

    cases: list[_Case] = []
    seen: set[str] = set()

    cursor = cursor.skip_whitespace()
    while True:
        if cursor.is_eof:
            raise IcuSyntaxError(ErrorTemplate.unterminated_element(start.span()))
        if cursor.current == "}":
            break

        label = _parse_label(cursor, keyword)
        end = label.cursor.pos if label is not None else None
        if label is None or (
            allowed is not None and not label.value.startswith("=") and label.value not in allowed
        ):
            found = cursor.slice_to(end) if end is not None else ""
            raise IcuSyntaxError(
                ErrorTemplate.invalid_case_label(cursor.span(end), found, keyword, expected)
            )
        if label.value in seen:
            raise IcuSyntaxError(
                ErrorTemplate.duplicate_case_label(cursor.span(end), label.value, keyword)
            )
        seen.add(label.value)

        cursor = label.cursor.skip_whitespace()
        if cursor.is_eof:
            raise IcuSyntaxError(ErrorTemplate.unterminated_element(start.span()))
        if cursor.current != "{":
            raise IcuSyntaxError(
                ErrorTemplate.missing_case_message(cursor.span(), label.value, cursor.current)
            )

        body = parse_message(cursor.advance(), context)
        if body.cursor.is_eof:
            raise IcuSyntaxError(ErrorTemplate.unterminated_element(start.span()))
        cases.append(_Case(label.value, body.value))
        cursor = body.cursor.advance().skip_whitespace()

    if OTHER not in seen:
        raise IcuSyntaxError(ErrorTemplate.missing_other_case(cursor.span(), argument, keyword))
    return ParseResult(cases, cursor.advance())


def _parse_plural(
    cursor: Cursor,
    context: ParseContext,
    argument: str,
    start: Cursor,
    *,
    ordinal: bool,
) -> ParseResult[Message]:
    result = _parse_cases(cursor, context, ElementKeyword.PLURAL, argument, start)
    categories: dict[str, Message] = {}
    exact: list[tuple[int, Message]] = []
    for case in result.value:
        if case.label.startswith("="):
            exact.append((int(case.label[1:]), case.message))
        else:
            categories[case.label] = case.message

    if not exact and len(categories) == 1:
        raise IcuSyntaxError(ErrorTemplate.no_numeric_case(start.span(), argument))

    plural = Plural(
        main_argument=argument,
        other=categories[OTHER],
        zero=categories.get("zero"),
        one=categories.get("one"),
        two=categories.get("two"),
        few=categories.get("few"),
        many=categories.get("many"),
        exact=tuple(exact),
        ordinal=ordinal,
    )
    return ParseResult(plural, result.cursor)


def _parse_gender(
    cursor: Cursor, context: ParseContext, argument: str, start: Cursor
) -> ParseResult[Message]:
    result = _parse_cases(cursor, context, ElementKeyword.GENDER, argument, start)
    cases = {case.label: case.message for case in result.value}
    gender = Gender(
        main_argument=argument,
        other=cases[OTHER],
        female=cases.get("female"),
        male=cases.get("male"),
    )
    return ParseResult(gender, result.cursor)


def _parse_select(
    cursor: Cursor, context: ParseContext, argument: str, start: Cursor
) -> ParseResult[Message]:
    result = _parse_cases(cursor, context, ElementKeyword.SELECT, argument, start)
    select = Select(
        main_argument=argument,
        cases=tuple((case.label, case.message) for case in result.value),
    )
    return ParseResult(select, result.cursor)
