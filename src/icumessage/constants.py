"""Shared constants for icumessage.

Centralized configuration constants used across the syntax and runtime
packages. Placing constants here avoids circular imports and provides a
single source of truth.

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Depth limits
    "MAX_DEPTH",
    # Cache limits
    "DEFAULT_CACHE_SIZE",
    "MAX_LOCALE_CACHE_SIZE",
    # Input limits
    "MAX_SOURCE_SIZE",
    # Plural categories
    "PLURAL_CATEGORIES",
    "OTHER",
    # Gender labels
    "GENDER_LABELS",
    # Quoting
    "QUOTE_TRIGGERS",
]

# ============================================================================
# DEPTH LIMITS
# ============================================================================

# Unified maximum depth for recursion protection.
# Used by: parser (element nesting), renderer, visitor, serializer.
# Real templates rarely nest more than three constructs deep.
MAX_DEPTH: int = 100

# ============================================================================
# CACHE LIMITS
# ============================================================================

# Parsed templates kept by a MessageFormatter.
DEFAULT_CACHE_SIZE: int = 256

# Babel Locale objects kept by locale_utils.get_babel_locale().
MAX_LOCALE_CACHE_SIZE: int = 128

# ============================================================================
# INPUT LIMITS
# ============================================================================

# Maximum template length in characters. Message templates are short
# user-facing strings; anything near this size is malformed input.
MAX_SOURCE_SIZE: int = 1_000_000

# ============================================================================
# PLURAL CATEGORIES
# ============================================================================

OTHER: str = "other"

# CLDR cardinal categories, in CLDR order.
PLURAL_CATEGORIES: tuple[str, ...] = ("zero", "one", "two", "few", "many", OTHER)

GENDER_LABELS: tuple[str, ...] = ("female", "male", OTHER)

# Characters that turn a single apostrophe into the start of a quoted span.
QUOTE_TRIGGERS: frozenset[str] = frozenset({"{", "}", "#", "|"})
