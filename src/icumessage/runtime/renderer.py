"""Message renderer: folds a parsed tree into a string.

Resolves plural cases with CLDR categories, selects gender/select cases,
and substitutes arguments.
Python 3.13+. Indirect dependency: Babel (via plural_rules).

Thread Safety:
    Rendering state (the depth guard) is created per call, and trees are
    immutable, so one Root can be rendered from many threads at once with
    different locales and arguments.
"""

import math
from collections.abc import Mapping
from decimal import Decimal

from icumessage.constants import MAX_DEPTH
from icumessage.core.depth_guard import DepthGuard
from icumessage.diagnostics import ArgumentTypeError, ErrorTemplate, MissingArgumentError
from icumessage.enums import ElementKeyword, PluralCategory
from icumessage.runtime.plural_rules import select_plural_category
from icumessage.syntax import (
    Composite,
    Gender,
    Literal,
    Message,
    Plural,
    Root,
    Select,
    VariableSubstitution,
)
from icumessage.syntax.visitor import unknown_variant

__all__ = ["ArgumentValue", "MessageRenderer", "render"]

type ArgumentValue = int | float | Decimal | str

# Categories whose missing case may be served by the matching exact case.
# Mirrors engines that file '=0', '=1', '=2' under zero/one/two, so a
# Russian '=1 {день}' also covers 21 and 101.
_EXACT_ALIASES: Mapping[str, int] = {
    PluralCategory.ZERO: 0,
    PluralCategory.ONE: 1,
    PluralCategory.TWO: 2,
}


def _format_value(value: object) -> str:
    """String form of a substituted argument."""
    if isinstance(value, float) and value.is_integer() and math.isfinite(value):
        return str(int(value)) if abs(value) < 1e16 else str(value)
    return str(value)


def _integral_value(value: int | float | Decimal) -> int | None:
    """The value as int when it is a whole number, else None."""
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) and value.is_integer() else None
    if value.is_finite() and value == value.to_integral_value():
        return int(value)
    return None


def _select_key(value: int | float | Decimal | str) -> str:
    """Label a select argument is matched against.

    Whole Decimals drop their exponent like whole floats do, so
    ``Decimal("1.0")`` and ``1.0`` both match the label ``1``.
    """
    if isinstance(value, Decimal):
        integral = _integral_value(value)
        if integral is not None:
            return str(integral)
    return _format_value(value)


class MessageRenderer:
    """Renders message trees for one locale.

    Error handling follows the taxonomy in :mod:`icumessage.diagnostics`:
    - Missing substitution argument: renders the ``{name}`` placeholder
    - Missing main argument: MissingArgumentError
    - Main argument of the wrong kind: ArgumentTypeError
    - Foreign node in the tree: UnknownVariantError

    Errors propagate to the caller; nothing is logged here.
    """

    __slots__ = ("locale", "max_depth")

    def __init__(self, locale: str, *, max_depth: int = MAX_DEPTH) -> None:
        """Initialize renderer.

        Args:
            locale: Locale code for plural selection ("ru_RU", "en-US", ...)
            max_depth: Maximum element nesting depth to walk (keyword-only)
        """
        self.locale = locale
        self.max_depth = max_depth

    def render(
        self, root: Root | Message, args: Mapping[str, ArgumentValue] | None = None
    ) -> str:
        """Render a tree to a string.

        Args:
            root: Parsed template (or any message node)
            args: Argument values by name

        Returns:
            Rendered text

        Raises:
            MissingArgumentError: plural/select/gender argument absent
            ArgumentTypeError: plural/select/gender argument of the wrong kind
            UnknownVariantError: tree contains a non-message node
            DepthLimitExceededError: tree nests deeper than max_depth
        """
        body = root.body if isinstance(root, Root) else root
        return self._render(body, args or {}, DepthGuard(max_depth=self.max_depth))

    def _render(self, node: Message, args: Mapping[str, object], guard: DepthGuard) -> str:
        match node:
            case Literal():
                return node.text
            case Composite():
                return "".join(self._render(part, args, guard) for part in node.parts)
            case VariableSubstitution():
                if node.variable_name not in args:
                    return f"{{{node.variable_name}}}"
                return _format_value(args[node.variable_name])
            case Plural():
                selected = self._select_plural_case(node, args)
            case Gender():
                selected = self._select_gender_case(node, args)
            case Select():
                selected = self._select_select_case(node, args)
                if selected is None:
                    return ""
            case _:
                unknown_variant(node)

        with guard:
            return self._render(selected, args, guard)

    def _main_argument(
        self, name: str, args: Mapping[str, object], element: ElementKeyword
    ) -> object:
        if name not in args:
            raise MissingArgumentError(
                ErrorTemplate.argument_not_provided(name, element), argument_name=name
            )
        return args[name]

    @staticmethod
    def _type_error(
        name: str, kind: str, value: object, element: ElementKeyword
    ) -> ArgumentTypeError:
        received = type(value).__name__
        return ArgumentTypeError(
            ErrorTemplate.argument_type_mismatch(name, kind, received, element),
            argument_name=name,
            expected_kind=kind,
            received_type=received,
        )

    def _select_plural_case(self, node: Plural, args: Mapping[str, object]) -> Message:
        """Pick the plural case: exact '=N', then CLDR category, then 'other'."""
        element = ElementKeyword.SELECTORDINAL if node.ordinal else ElementKeyword.PLURAL
        value = self._main_argument(node.main_argument, args, element)
        if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
            raise self._type_error(node.main_argument, "number", value, element)

        integral = _integral_value(value)
        if integral is not None:
            exact = node.exact_case(integral)
            if exact is not None:
                return exact

        category = select_plural_category(value, self.locale)
        case = node.category_case(category)
        if case is not None:
            return case

        alias = _EXACT_ALIASES.get(category)
        if alias is not None:
            exact = node.exact_case(alias)
            if exact is not None:
                return exact
        return node.other

    def _select_gender_case(self, node: Gender, args: Mapping[str, object]) -> Message:
        value = self._main_argument(node.main_argument, args, ElementKeyword.GENDER)
        if not isinstance(value, str):
            raise self._type_error(node.main_argument, "string", value, ElementKeyword.GENDER)
        match value:
            case "female" if node.female is not None:
                return node.female
            case "male" if node.male is not None:
                return node.male
            case _:
                return node.other

    def _select_select_case(self, node: Select, args: Mapping[str, object]) -> Message | None:
        value = self._main_argument(node.main_argument, args, ElementKeyword.SELECT)
        if isinstance(value, bool) or not isinstance(value, (str, int, float, Decimal)):
            raise self._type_error(node.main_argument, "string", value, ElementKeyword.SELECT)
        case = node.case(_select_key(value))
        if case is not None:
            return case
        return node.other


def render(
    root: Root,
    locale: str,
    args: Mapping[str, ArgumentValue] | None = None,
    *,
    max_depth: int = MAX_DEPTH,
) -> str:
    """Render a parsed template.

    Convenience function for MessageRenderer(locale, max_depth=max_depth).render(root, args).
    Pass the parser's max_nesting_depth when it was raised above the default.

    Example:
        >>> from icumessage.syntax import parse
        >>> root = parse("{days, plural, =1 {{days} День} few {{days} Дня} other {{days} Дней}}")
        >>> render(root, "ru_RU", {"days": 22})
        '22 Дня'
    """
    return MessageRenderer(locale, max_depth=max_depth).render(root, args)
