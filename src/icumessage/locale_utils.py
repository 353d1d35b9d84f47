"""Locale utilities for BCP-47 to POSIX conversion.

Centralizes locale tag normalization used by the plural resolver and the
formatter, so cache keys and rule-table lookups see one canonical form.

Python 3.13+.
"""

from __future__ import annotations

import functools
import os
from typing import TYPE_CHECKING

from icumessage.constants import MAX_LOCALE_CACHE_SIZE

if TYPE_CHECKING:
    from babel import Locale

__all__ = [
    "base_language",
    "get_babel_locale",
    "get_system_locale",
    "normalize_locale",
]


def normalize_locale(locale_code: str) -> str:
    """Convert a BCP-47 locale tag to POSIX format for Babel.

    Hyphens become underscores and any encoding suffix is dropped
    (``"ru_RU.UTF-8"`` -> ``"ru_RU"``).

    Example:
        >>> normalize_locale("en-US")
        'en_US'
        >>> normalize_locale("pt_BR.UTF-8")
        'pt_BR'
        >>> normalize_locale("en")
        'en'
    """
    return locale_code.split(".")[0].replace("-", "_").strip()


def base_language(locale_code: str) -> str:
    """Return the lowercase language subtag of a locale tag.

    Example:
        >>> base_language("ru-RU")
        'ru'
        >>> base_language("EN_us")
        'en'
        >>> base_language("")
        ''
    """
    return normalize_locale(locale_code).split("_")[0].lower()


@functools.lru_cache(maxsize=MAX_LOCALE_CACHE_SIZE)
def get_babel_locale(locale_code: str) -> Locale:
    """Get a Babel Locale object with caching.

    Parses the locale code once and caches the result. This avoids repeated
    parsing overhead in hot paths like plural rule selection.

    Thread-safe via lru_cache internal locking.

    Args:
        locale_code: Locale code (BCP-47 or POSIX format accepted)

    Returns:
        Babel Locale object

    Raises:
        babel.core.UnknownLocaleError: If locale is not recognized
        ValueError: If locale format is invalid
    """
    # Lazy import: Babel loads CLDR data at import time; defer until needed
    from babel import Locale  # noqa: PLC0415

    return Locale.parse(normalize_locale(locale_code))


def get_system_locale() -> str:
    """Detect system locale from OS and environment variables.

    Detection order:
    1. Python locale.getlocale() (OS-level locale)
    2. LC_ALL, LC_MESSAGES, LANG environment variables

    Filters out "C" and "POSIX" pseudo-locales.

    Returns:
        Detected locale code in POSIX format, "en_US" if none is set.
    """
    import locale as locale_module  # noqa: PLC0415

    try:
        system_locale, _ = locale_module.getlocale()
    except ValueError:
        system_locale = None
    env_values = (os.environ.get(var) for var in ("LC_ALL", "LC_MESSAGES", "LANG"))
    for candidate in (system_locale, *env_values):
        code = normalize_locale(candidate) if candidate else ""
        if code and code not in ("C", "POSIX"):
            return code

    return "en_US"
