"""Tests for the ICU template parser.

Covers plain text, substitutions, plural/selectordinal/select/gender
elements, apostrophe quoting, the plain-text fallback for stray braces,
and syntax error reporting.
"""

import pytest

from icumessage.diagnostics import DiagnosticCode, IcuSyntaxError, StrayBraceError
from icumessage.runtime.renderer import render
from icumessage.syntax import IcuParser, parse
from icumessage.syntax.ast import (
    Composite,
    Gender,
    Literal,
    Plural,
    Select,
    VariableSubstitution,
)
from icumessage.syntax.parser.rules import parse_plain_message

# ============================================================================
# PLAIN TEXT AND SUBSTITUTIONS
# ============================================================================


class TestPlainText:
    """Test templates without elements."""

    def test_simple_text(self) -> None:
        """Text without braces is one Literal."""
        assert parse("Some text").body == Literal("Some text")

    def test_empty_template(self) -> None:
        """Empty template parses to an empty Literal."""
        root = parse("")
        assert root.body == Literal("")
        assert root.declared_arguments == frozenset()

    def test_hash_outside_plural_is_literal(self) -> None:
        """'#' only has meaning inside plural cases."""
        assert parse("Item #1").body == Literal("Item #1")

    def test_unicode_text(self) -> None:
        """Non-ASCII text is kept verbatim."""
        assert parse("Привет, мир").body == Literal("Привет, мир")

    def test_multiline_text(self) -> None:
        """Newlines are ordinary text."""
        assert parse("line1\nline2").body == Literal("line1\nline2")


class TestSubstitution:
    """Test {name} substitutions."""

    def test_single_substitution(self) -> None:
        """Text followed by a substitution."""
        assert parse("Your phone is {phone}").body == Composite(
            (Literal("Your phone is "), VariableSubstitution("phone"))
        )

    def test_substitution_only(self) -> None:
        """A lone substitution is not wrapped in a Composite."""
        assert parse("{phone}").body == VariableSubstitution("phone")

    def test_whitespace_inside_braces(self) -> None:
        """Whitespace around the name is ignored."""
        assert parse("{ phone\n }").body == VariableSubstitution("phone")

    def test_repeated_substitution(self) -> None:
        """The same argument may appear twice."""
        body = parse("{phone} or {phone}").body
        assert body == Composite(
            (VariableSubstitution("phone"), Literal(" or "), VariableSubstitution("phone"))
        )

    def test_positional_name(self) -> None:
        """All-digit names are accepted."""
        assert parse("{0}").body == VariableSubstitution("0")

    def test_unicode_name(self) -> None:
        """Names may use non-ASCII letters."""
        assert parse("{имя}").body == VariableSubstitution("имя")

    def test_declared_arguments(self) -> None:
        """Root lists every referenced argument."""
        root = parse("{a} {b} {a}")
        assert root.declared_arguments == frozenset({"a", "b"})


# ============================================================================
# QUOTING
# ============================================================================


class TestApostropheQuoting:
    """Test ICU apostrophe quoting."""

    def test_doubled_apostrophe(self) -> None:
        """'' is one apostrophe."""
        assert parse("It''s").body == Literal("It's")

    def test_lone_apostrophe_is_literal(self) -> None:
        """An apostrophe not before a syntax character needs no escaping."""
        assert parse("Can't").body == Literal("Can't")

    def test_quoted_braces(self) -> None:
        """Quoted braces are literal text."""
        assert parse("'{'braces'}'").body == Literal("{braces}")

    def test_quoted_substitution_syntax(self) -> None:
        """A quoted span may contain a whole {name}."""
        assert parse("Use '{name}' literally").body == Literal("Use {name} literally")

    def test_unterminated_quote_runs_to_end(self) -> None:
        """A quoted span without a closing quote runs to end of input."""
        assert parse("'{abc").body == Literal("{abc")

    def test_doubled_apostrophe_inside_span(self) -> None:
        """'' inside a quoted span is an apostrophe, not the end of the span."""
        assert parse("'{''}'").body == Literal("{'}")

    def test_quoted_hash_in_plural(self) -> None:
        """'#' quoted inside a plural case is literal."""
        body = parse("{n, plural, one {'#'1} other {x}}").body
        assert isinstance(body, Plural)
        assert body.one == Literal("#1")

    def test_apostrophe_before_pipe_opens_span(self) -> None:
        """'|' triggers quoting."""
        assert parse("a'|'b").body == Literal("a|b")


# ============================================================================
# PLURAL
# ============================================================================


class TestPlural:
    """Test plural and selectordinal elements."""

    def test_exact_and_other_cases(self) -> None:
        """=N cases are kept in source order."""
        body = parse(
            "{count, plural, =0 {No emails} =1 {One email} other {{count} emails}}"
        ).body
        assert body == Plural(
            main_argument="count",
            other=Composite((VariableSubstitution("count"), Literal(" emails"))),
            exact=((0, Literal("No emails")), (1, Literal("One email"))),
        )

    def test_category_cases(self) -> None:
        """Category labels fill the matching fields."""
        body = parse(
            "{days, plural, one {День} few {Дня} many {Дней} other {Дня}}"
        ).body
        assert isinstance(body, Plural)
        assert body.one == Literal("День")
        assert body.few == Literal("Дня")
        assert body.many == Literal("Дней")
        assert body.zero is None
        assert body.two is None

    def test_hash_is_plural_argument(self) -> None:
        """'#' in a plural case substitutes the main argument."""
        body = parse("{n, plural, one {# day} other {# days}}").body
        assert isinstance(body, Plural)
        assert body.one == Composite((VariableSubstitution("n"), Literal(" day")))

    def test_hash_inherited_by_nested_select(self) -> None:
        """A select inside a plural case still resolves '#' to the plural argument."""
        body = parse("{n, plural, one {{g, select, a {# A} other {#}}} other {x}}").body
        assert isinstance(body, Plural)
        inner = body.one
        assert isinstance(inner, Select)
        assert inner.case("a") == Composite((VariableSubstitution("n"), Literal(" A")))
        assert inner.other == VariableSubstitution("n")

    def test_nested_plural_rebinds_hash(self) -> None:
        """The innermost plural owns '#'."""
        body = parse("{a, plural, one {{b, plural, one {#} other {#}}} other {#}}").body
        assert isinstance(body, Plural)
        assert isinstance(body.one, Plural)
        assert body.one.one == VariableSubstitution("b")
        assert body.other == VariableSubstitution("a")

    def test_negative_exact_label(self) -> None:
        """Exact labels may be negative."""
        body = parse("{n, plural, =-1 {neg} other {x}}").body
        assert isinstance(body, Plural)
        assert body.exact == ((-1, Literal("neg")),)

    def test_selectordinal(self) -> None:
        """selectordinal parses as an ordinal Plural."""
        body = parse("{n, selectordinal, one {#st} two {#nd} few {#rd} other {#th}}").body
        assert isinstance(body, Plural)
        assert body.ordinal is True
        assert body.two == Composite((VariableSubstitution("n"), Literal("nd")))

    def test_whitespace_and_newlines_between_cases(self) -> None:
        """Whitespace around labels and separators is ignored."""
        body = parse("{ n ,\n  plural ,\n  one {a}\n  other {b}\n}").body
        assert body == Plural(main_argument="n", other=Literal("b"), one=Literal("a"))

    def test_empty_case_message(self) -> None:
        """An empty case body is an empty Literal."""
        body = parse("{n, plural, one {} other {x}}").body
        assert isinstance(body, Plural)
        assert body.one == Literal("")

    def test_plural_inside_text(self) -> None:
        """Elements mix with surrounding text."""
        body = parse("You have {n, plural, one {# email} other {# emails}}.").body
        assert isinstance(body, Composite)
        assert body.parts[0] == Literal("You have ")
        assert isinstance(body.parts[1], Plural)
        assert body.parts[2] == Literal(".")


# ============================================================================
# SELECT AND GENDER
# ============================================================================


class TestSelect:
    """Test select elements."""

    def test_cases_in_source_order(self) -> None:
        """Select keeps (label, message) pairs in source order."""
        body = parse(
            "{status, select, online {Online} offline {Offline} other {Can't read the status}}"
        ).body
        assert body == Select(
            main_argument="status",
            cases=(
                ("online", Literal("Online")),
                ("offline", Literal("Offline")),
                ("other", Literal("Can't read the status")),
            ),
        )

    def test_other_may_come_first(self) -> None:
        """Case order is free."""
        body = parse("{s, select, other {x} a {y}}").body
        assert isinstance(body, Select)
        assert body.other == Literal("x")
        assert body.case("a") == Literal("y")

    def test_gender_labels_accepted_by_select(self) -> None:
        """Gender via select uses ordinary labels."""
        body = parse("{g, select, female {she} male {he} other {they}}").body
        assert isinstance(body, Select)
        assert body.case("female") == Literal("she")


class TestGender:
    """Test gender elements."""

    def test_all_cases(self) -> None:
        """female, male and other fill the matching fields."""
        body = parse("{g, gender, female {she} male {he} other {they}}").body
        assert body == Gender(
            main_argument="g",
            other=Literal("they"),
            female=Literal("she"),
            male=Literal("he"),
        )

    def test_reordered_cases(self) -> None:
        """Case order does not change the tree."""
        a = parse("{g, gender, female {she} male {he} other {they}}").body
        b = parse("{g, gender, other {they} male {he} female {she}}").body
        assert a == b

    def test_declared_arguments_include_main_arguments(self) -> None:
        """Main arguments and nested substitutions are declared."""
        root = parse("{g, gender, female {{name}} other {x}} {count, plural, one {#} other {#}}")
        assert root.declared_arguments == frozenset({"g", "name", "count"})


# ============================================================================
# FALLBACK FOR STRAY BRACES
# ============================================================================


class TestPlainTextFallback:
    """Test the reduced grammar applied to stray braces in plain prose."""

    def test_stray_closing_brace(self) -> None:
        """A lone '}' is literal when no element was recognized."""
        assert parse("Press } to exit").body == Literal("Press } to exit")

    def test_stray_brace_after_substitution(self) -> None:
        """Substitutions survive the fallback."""
        assert parse("Hello {name}}").body == Composite(
            (Literal("Hello "), VariableSubstitution("name"), Literal("}"))
        )

    def test_brace_before_non_name(self) -> None:
        """'{' not followed by a name is literal."""
        assert parse("{ {name}").body == Composite((Literal("{ "), VariableSubstitution("name")))

    def test_brace_with_bad_separator(self) -> None:
        """'{name' followed by something other than ',' or '}' is literal."""
        assert parse("{ not valid").body == Literal("{ not valid")

    def test_fallback_keeps_apostrophes(self) -> None:
        """The reduced grammar has no quoting."""
        assert parse("Can''t } stop").body == Literal("Can''t } stop")

    def test_no_fallback_after_complex_element(self) -> None:
        """A stray brace after a plural is a real syntax error."""
        with pytest.raises(StrayBraceError):
            parse("{n, plural, one {a} other {b}} }")

    def test_parse_plain_message_direct(self) -> None:
        """Reduced grammar substitutes only well-formed {name}."""
        assert parse_plain_message("a {b} {c d}") == Composite(
            (Literal("a "), VariableSubstitution("b"), Literal(" {c d}"))
        )

    def test_parse_plain_message_empty(self) -> None:
        """Empty source is an empty Literal."""
        assert parse_plain_message("") == Literal("")


# ============================================================================
# SYNTAX ERRORS
# ============================================================================


def _code(source: str, parser: IcuParser | None = None) -> DiagnosticCode:
    with pytest.raises(IcuSyntaxError) as exc_info:
        (parser or IcuParser()).parse(source)
    diagnostic = exc_info.value.diagnostic
    assert diagnostic is not None
    return diagnostic.code


class TestSyntaxErrors:
    """Test error codes, offsets and expected tokens."""

    @pytest.mark.parametrize("source", ["Hello {name", "{", "{n, plural, one {a} other {b}"])
    def test_unterminated_element(self, source: str) -> None:
        """End of input inside an element is fatal."""
        assert _code(source) == DiagnosticCode.UNTERMINATED_ELEMENT

    def test_unterminated_case_body(self) -> None:
        """End of input inside a case body is fatal."""
        assert _code("{n, plural, one {a") == DiagnosticCode.UNTERMINATED_ELEMENT

    def test_unknown_keyword(self) -> None:
        """Number/date sub-formats are not supported."""
        assert _code("{n, number}") == DiagnosticCode.UNKNOWN_KEYWORD

    def test_unknown_keyword_offset_and_expected(self) -> None:
        """Error carries the offset of the keyword and the allowed keywords."""
        with pytest.raises(IcuSyntaxError) as exc_info:
            parse("{n, number}")
        error = exc_info.value
        assert error.offset == 4
        assert error.expected == ("plural", "selectordinal", "select", "gender")
        assert "Unknown element keyword 'number'" in str(error)

    def test_error_line_and_column(self) -> None:
        """Span reports 1-indexed line and column."""
        with pytest.raises(IcuSyntaxError) as exc_info:
            parse("line1\n{n, number}")
        span = exc_info.value.diagnostic.span  # type: ignore[union-attr]
        assert span is not None
        assert (span.line, span.column) == (2, 5)

    def test_missing_separator_after_keyword(self) -> None:
        """Keyword must be followed by ','."""
        assert _code("{n, plural one {a} other {b}}") == DiagnosticCode.EXPECTED_SEPARATOR

    def test_missing_other_case(self) -> None:
        """Every element needs an 'other' case."""
        assert _code("{n, plural, one {a}}") == DiagnosticCode.MISSING_OTHER_CASE
        assert _code("{s, select, a {x}}") == DiagnosticCode.MISSING_OTHER_CASE

    def test_duplicate_case_label(self) -> None:
        """Labels are unique within an element."""
        assert _code("{s, select, a {x} a {y} other {z}}") == DiagnosticCode.DUPLICATE_CASE_LABEL
        assert _code("{n, plural, =1 {x} =1 {y} other {z}}") == (
            DiagnosticCode.DUPLICATE_CASE_LABEL
        )

    def test_invalid_plural_label(self) -> None:
        """Plural labels are CLDR categories or =N."""
        assert _code("{n, plural, single {a} other {b}}") == DiagnosticCode.INVALID_CASE_LABEL
        assert _code("{n, plural, =abc {a} other {b}}") == DiagnosticCode.INVALID_CASE_LABEL

    def test_invalid_gender_label(self) -> None:
        """Gender labels are female, male and other."""
        assert _code("{g, gender, nonbinary {a} other {b}}") == DiagnosticCode.INVALID_CASE_LABEL

    def test_exact_label_in_select_rejected(self) -> None:
        """=N labels belong to plurals only."""
        assert _code("{s, select, =1 {a} other {b}}") == DiagnosticCode.INVALID_CASE_LABEL

    def test_missing_case_message(self) -> None:
        """A label must be followed by '{'."""
        assert _code("{s, select, a x other {y}}") == DiagnosticCode.MISSING_CASE_MESSAGE

    def test_plural_with_only_other(self) -> None:
        """A plural needs at least one case besides 'other'."""
        assert _code("{n, plural, other {x}}") == DiagnosticCode.NO_NUMERIC_CASE

    def test_nested_element_with_stray_brace_is_fatal(self) -> None:
        """Header errors below the top level are not stray braces."""
        with pytest.raises(IcuSyntaxError) as exc_info:
            parse("{s, select, a {{ x y}} other {b}}")
        assert not isinstance(exc_info.value, StrayBraceError)


class TestParserLimits:
    """Test size and nesting limits."""

    _NESTED = "{a, select, other {{b, select, other {{c, select, other {x}}}}}}"

    def test_nesting_depth_exceeded(self) -> None:
        """Elements nested beyond the limit are rejected."""
        parser = IcuParser(max_nesting_depth=2)
        assert _code(self._NESTED, parser) == DiagnosticCode.NESTING_DEPTH_EXCEEDED

    def test_nesting_depth_at_limit(self) -> None:
        """Nesting up to the limit is accepted."""
        parser = IcuParser(max_nesting_depth=3)
        assert isinstance(parser.parse(self._NESTED).body, Select)

    def test_default_depth_allows_hundred_levels(self) -> None:
        """The default limit accepts 100 nested elements."""
        source = "{a, select, other {" * 100 + "x" + "}}" * 100
        assert isinstance(parse(source).body, Select)

    def test_raised_depth_limit_applies_to_whole_parse(self) -> None:
        """A parser configured above the default nests past 100 levels.

        Collecting declared arguments walks the tree with the same limit,
        so parse() succeeds instead of failing with a render error.
        """
        source = "{s, select, other {" * 120 + "{x}" + "}}" * 120
        parser = IcuParser(max_nesting_depth=150)
        root = parser.parse(source)
        assert root.declared_arguments == frozenset({"s", "x"})
        assert render(root, "en", {"s": "a", "x": "deep"}, max_depth=150) == "deep"

    def test_source_too_large(self) -> None:
        """Templates above max_source_size are rejected before parsing."""
        parser = IcuParser(max_source_size=5)
        assert _code("123456", parser) == DiagnosticCode.SOURCE_TOO_LARGE

    def test_size_limit_disabled_with_zero(self) -> None:
        """max_source_size=0 disables the size check."""
        parser = IcuParser(max_source_size=0)
        assert parser.parse("x" * 100).body == Literal("x" * 100)

    def test_limit_properties(self) -> None:
        """Limits are exposed read-only."""
        parser = IcuParser(max_source_size=10, max_nesting_depth=4)
        assert parser.max_source_size == 10
        assert parser.max_nesting_depth == 4
