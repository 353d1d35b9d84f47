"""CLDR cardinal plural category selection.

Two layers:

1. ``PLURAL_RULES``: a static, read-only rule table keyed by base language.
   Adding a language here is a pure data change; the renderer never needs
   to know which languages are covered.
2. Babel's CLDR data for every language missing from the table, with the
   English-like rule as the last resort when Babel does not know the
   locale either.

Python 3.13+. Depends on Babel for CLDR data.

Reference: https://www.unicode.org/cldr/charts/47/supplemental/language_plural_rules.html
"""

import math
from collections.abc import Callable
from decimal import Decimal
from types import MappingProxyType

from babel.core import UnknownLocaleError

from icumessage.enums import PluralCategory
from icumessage.locale_utils import base_language, get_babel_locale

__all__ = [
    "PLURAL_RULES",
    "PluralRule",
    "english_rule",
    "east_slavic_rule",
    "select_plural_category",
]

type PluralRule = Callable[[Decimal], PluralCategory]


def _integer_operand(n: Decimal) -> int | None:
    """Return n as an int when it has no fractional part (CLDR v = 0)."""
    if n != n.to_integral_value():
        return None
    return int(n)


def english_rule(n: Decimal) -> PluralCategory:
    """one: i = 1 and v = 0; other otherwise."""
    if _integer_operand(n) == 1:
        return PluralCategory.ONE
    return PluralCategory.OTHER


def east_slavic_rule(n: Decimal) -> PluralCategory:
    """Russian/Ukrainian/Belarusian integer rules.

    one:  i % 10 = 1 and i % 100 != 11
    few:  i % 10 = 2..4 and i % 100 != 12..14
    many: i % 10 = 0, or i % 10 = 5..9, or i % 100 = 11..14
    Fractional values fall through to other.
    """
    i = _integer_operand(n)
    if i is None:
        return PluralCategory.OTHER
    mod10 = i % 10
    mod100 = i % 100
    if mod10 == 1 and mod100 != 11:
        return PluralCategory.ONE
    if 2 <= mod10 <= 4 and not 12 <= mod100 <= 14:
        return PluralCategory.FEW
    if mod10 == 0 or 5 <= mod10 <= 9 or 11 <= mod100 <= 14:
        return PluralCategory.MANY
    return PluralCategory.OTHER


PLURAL_RULES: MappingProxyType[str, PluralRule] = MappingProxyType({
    "en": english_rule,
    "de": english_rule,
    "nl": english_rule,
    "sv": english_rule,
    "fi": english_rule,
    "et": english_rule,
    "nb": english_rule,
    "nn": english_rule,
    "ru": east_slavic_rule,
    "uk": east_slavic_rule,
    "be": east_slavic_rule,
})


def _to_decimal(n: int | float | Decimal) -> Decimal | None:
    """Absolute value as Decimal; None for NaN and infinities."""
    if isinstance(n, float):
        if not math.isfinite(n):
            return None
        # repr() keeps the shortest round-tripping digits (1.5, not 1.5000000000000...)
        return abs(Decimal(repr(n)))
    value = Decimal(n)
    # Checked before taking the magnitude: abs() signals on sNaN
    if not value.is_finite():
        return None
    return value.copy_abs()


def select_plural_category(n: int | float | Decimal, locale: str) -> str:
    """Select the CLDR cardinal plural category for a number.

    Args:
        n: Number to categorize (sign is ignored)
        locale: Locale code (e.g., "ru_RU", "en-US", "ar")

    Returns:
        Plural category: "zero", "one", "two", "few", "many", or "other"

    Examples:
        >>> select_plural_category(1, "en_US")
        'one'
        >>> select_plural_category(22, "ru_RU")
        'few'
        >>> select_plural_category(11, "ru_RU")
        'many'
        >>> select_plural_category(2, "ar_SA")
        'two'
        >>> select_plural_category(42, "ja_JP")
        'other'

    Never raises: unknown locales use the English-like rule and
    non-finite numbers are "other".
    """
    value = _to_decimal(n)
    if value is None:
        return PluralCategory.OTHER.value

    rule = PLURAL_RULES.get(base_language(locale))
    if rule is not None:
        return rule(value).value

    try:
        locale_obj = get_babel_locale(locale)
    except (UnknownLocaleError, ValueError, TypeError):
        return english_rule(value).value

    # Babel's PluralRule evaluates CLDR operands (n, i, v, w, f, t) itself
    return str(locale_obj.plural_form(value))
