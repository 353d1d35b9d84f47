"""Serialize message trees back to ICU template syntax.

Converts tree nodes to canonical template text. Useful for:
- Normalizing hand-written templates
- Code generators that build trees programmatically
- Property-based testing (roundtrip: parse -> serialize -> parse)

Canonical form: no whitespace inside element headers, one space between
cases, exact plural cases first, then CLDR categories in CLDR order, then
``other``. ``#`` is always written as ``{name}``.

Python 3.13+.
"""

from icumessage.constants import MAX_DEPTH
from icumessage.core.depth_guard import DepthGuard
from icumessage.enums import ElementKeyword

from .ast import Composite, Gender, Literal, Message, Plural, Root, Select, VariableSubstitution
from .cursor import Cursor
from .parser.primitives import parse_identifier
from .visitor import unknown_variant

__all__ = ["SerializationError", "serialize"]


class SerializationError(ValueError):
    """Raised when a tree cannot be written as a valid template.

    Only hand-built trees can trigger this, e.g. an argument name or
    select label that is not an identifier.
    """


def _check_identifier(name: str, what: str) -> str:
    result = parse_identifier(Cursor(name, 0))
    if result is None or not result.cursor.is_eof:
        msg = f"{what} {name!r} is not a valid identifier"
        raise SerializationError(msg)
    return name


def _escape(text: str, *, in_plural: bool) -> str:
    """Escape literal text so that it parses back unchanged.

    Runs of syntax characters share one quoted span: ``'{'`` followed by
    ``'}'`` would read back as ``{'}``, since ``''`` inside a span is an
    apostrophe.

    Example:
        >>> _escape("{} isn't #", in_plural=True)
        "'{}' isn''t '#'"
    """
    special = "{}#" if in_plural else "{}"
    out: list[str] = []
    quoted = False
    for ch in text:
        if ch == "'":
            out.append("''")
        elif ch in special:
            if not quoted:
                out.append("'")
                quoted = True
            out.append(ch)
        else:
            if quoted:
                out.append("'")
                quoted = False
            out.append(ch)
    if quoted:
        out.append("'")
    return "".join(out)


class _Serializer:
    __slots__ = ("_depth_guard",)

    def __init__(self, max_depth: int) -> None:
        self._depth_guard = DepthGuard(max_depth=max_depth)

    def message(self, node: Message, *, in_plural: bool) -> str:
        match node:
            case Literal():
                return _escape(node.text, in_plural=in_plural)
            case VariableSubstitution():
                return "{" + _check_identifier(node.variable_name, "Argument name") + "}"
            case Composite():
                return "".join(self.message(part, in_plural=in_plural) for part in node.parts)
            case Plural():
                keyword = ElementKeyword.SELECTORDINAL if node.ordinal else ElementKeyword.PLURAL
                cases = [(f"={value}", message) for value, message in node.exact]
                for category in ("zero", "one", "two", "few", "many", "other"):
                    case = node.category_case(category)
                    if case is not None:
                        cases.append((category, case))
                return self._element(node.main_argument, keyword, cases, in_plural=True)
            case Gender():
                cases = [
                    (label, case)
                    for label, case in (("female", node.female), ("male", node.male))
                    if case is not None
                ]
                cases.append(("other", node.other))
                return self._element(
                    node.main_argument, ElementKeyword.GENDER, cases, in_plural=in_plural
                )
            case Select():
                for label, _ in node.cases:
                    _check_identifier(label, "Select label")
                return self._element(
                    node.main_argument, ElementKeyword.SELECT, list(node.cases), in_plural=in_plural
                )
            case _:
                unknown_variant(node)

    def _element(
        self,
        argument: str,
        keyword: ElementKeyword,
        cases: list[tuple[str, Message]],
        *,
        in_plural: bool,
    ) -> str:
        with self._depth_guard:
            body = " ".join(
                f"{label} {{{self.message(case, in_plural=in_plural)}}}" for label, case in cases
            )
        return f"{{{_check_identifier(argument, 'Argument name')}, {keyword}, {body}}}"


def serialize(node: Root | Message, *, max_depth: int = MAX_DEPTH) -> str:
    """Serialize a tree to template text.

    Args:
        node: Root or any message node
        max_depth: Maximum element nesting depth (default: MAX_DEPTH)

    Returns:
        Template text that parses back to an equal tree (for parser-built trees)

    Raises:
        SerializationError: Tree contains names that cannot be written
        DepthLimitExceededError: Tree nests deeper than max_depth

    Example:
        >>> serialize(parse("{ n , plural , one {# day} other {# days} }"))
        '{n, plural, one {{n} day} other {{n} days}}'
    """
    body = node.body if isinstance(node, Root) else node
    return _Serializer(max_depth).message(body, in_plural=False)
