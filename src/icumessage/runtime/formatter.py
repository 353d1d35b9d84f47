"""MessageFormatter - main public API for formatting ICU templates.

Parses, caches and renders templates for one locale.
Python 3.13+. External dependency: Babel (plural rules outside the static table).
"""

import logging
from collections.abc import Mapping

from icumessage.constants import DEFAULT_CACHE_SIZE, MAX_DEPTH, MAX_SOURCE_SIZE
from icumessage.diagnostics import IcuError
from icumessage.locale_utils import get_system_locale, normalize_locale
from icumessage.runtime.cache import ParseCache
from icumessage.runtime.renderer import ArgumentValue, MessageRenderer
from icumessage.syntax import IcuParser, Root

__all__ = ["MessageFormatter", "format_message"]

logger = logging.getLogger(__name__)


class MessageFormatter:
    """Formats ICU message templates for a single locale.

    Templates are parsed on first use and the trees kept in a bounded LRU
    cache, so formatting the same template repeatedly only pays for
    rendering.

    Thread-safe: the parser and renderer hold no per-call state, and the
    cache is lock-protected.

    Examples:
        >>> formatter = MessageFormatter("en_US")
        >>> template = "{n, plural, =0 {No emails} =1 {One email} other {{n} emails}}"
        >>> formatter.format(template, {"n": 10})
        ('10 emails', ())

        >>> formatter.format("Hello {name}", {})
        ('Hello {name}', ())

        >>> # Strict mode raises instead of collecting
        >>> strict = MessageFormatter("ru_RU", strict=True)
    """

    __slots__ = ("_cache", "_locale", "_parser", "_renderer", "_strict")

    def __init__(
        self,
        locale: str | None = None,
        *,
        cache_size: int = DEFAULT_CACHE_SIZE,
        strict: bool = False,
        max_source_size: int | None = None,
        max_nesting_depth: int | None = None,
    ) -> None:
        """Initialize MessageFormatter.

        Args:
            locale: Locale code ("en_US", "ru-RU", ...). Defaults to the
                system locale. Locales without plural data fall back to
                English-like plural rules.
            cache_size: Maximum number of parsed templates to keep
                (keyword-only). 0 disables caching.
            strict: Raise errors instead of returning them (keyword-only)
            max_source_size: Maximum template length in characters
                (default: MAX_SOURCE_SIZE)
            max_nesting_depth: Maximum element nesting depth (default: MAX_DEPTH)

        Raises:
            ValueError: cache_size is negative
        """
        if cache_size < 0:
            msg = "cache_size must be non-negative"
            raise ValueError(msg)

        self._locale = normalize_locale(locale if locale is not None else get_system_locale())
        self._strict = strict
        self._parser = IcuParser(
            max_source_size=max_source_size if max_source_size is not None else MAX_SOURCE_SIZE,
            max_nesting_depth=max_nesting_depth if max_nesting_depth is not None else MAX_DEPTH,
        )
        self._renderer = MessageRenderer(self._locale, max_depth=self._parser.max_nesting_depth)
        self._cache = ParseCache(cache_size) if cache_size else None

        logger.debug(
            "MessageFormatter initialized for locale: %s (cache_size=%d, strict=%s)",
            self._locale,
            cache_size,
            strict,
        )

    @property
    def locale(self) -> str:
        """Normalized locale code (read-only)."""
        return self._locale

    @property
    def strict(self) -> bool:
        """Whether errors are raised instead of returned (read-only)."""
        return self._strict

    @property
    def cache_info(self) -> dict[str, int | float] | None:
        """Cache statistics, or None when caching is disabled."""
        if self._cache is None:
            return None
        return self._cache.get_stats()

    def clear_cache(self) -> None:
        """Drop every cached parse tree."""
        if self._cache is not None:
            self._cache.clear()
            logger.debug("Parse cache manually cleared")

    def parse(self, template: str) -> Root:
        """Parse a template, going through the cache.

        Raises:
            IcuSyntaxError: Malformed template (never cached)
        """
        if self._cache is not None:
            cached = self._cache.get(template)
            if cached is not None:
                logger.debug("Parse cache hit: %s", template[:50])
                return cached

        root = self._parser.parse(template)
        if self._cache is not None:
            self._cache.put(template, root)
        return root

    def format(
        self, template: str, args: Mapping[str, ArgumentValue] | None = None
    ) -> tuple[str, tuple[IcuError, ...]]:
        """Format a template with arguments.

        Args:
            template: ICU message template
            args: Argument values by name (int, float, Decimal or str)

        Returns:
            Tuple of (formatted_string, errors)
            - formatted_string: rendered text, or the raw template when
              parsing or rendering failed
            - errors: IcuError instances encountered (immutable)

        Raises:
            IcuError: Only in strict mode

        Example:
            >>> MessageFormatter("ru_RU").format(
            ...     "{days, plural, =1 {{days} День} few {{days} Дня} other {{days} Дней}}",
            ...     {"days": 5},
            ... )
            ('5 Дней', ())
        """
        try:
            root = self.parse(template)
            result = self._renderer.render(root, args)
        except IcuError as error:
            if self._strict:
                raise
            logger.warning("Failed to format template %r: %s", template[:50], type(error).__name__)
            logger.debug("  - %s", error)
            return (template, (error,))

        logger.debug("Formatted template %r: %s", template[:50], result[:50])
        return (result, ())

    def __repr__(self) -> str:
        return f"MessageFormatter(locale={self._locale!r}, strict={self._strict})"


def format_message(
    template: str, locale: str, args: Mapping[str, ArgumentValue] | None = None
) -> str:
    """Parse and render a template in one call.

    Uncached; use MessageFormatter to format the same template repeatedly.

    Raises:
        IcuSyntaxError: Malformed template
        RenderError: Missing or mistyped argument

    Example:
        >>> format_message("Your phone is {phone}", "en_US", {"phone": "555-0100"})
        'Your phone is 555-0100'
    """
    formatter = MessageFormatter(locale, cache_size=0, strict=True)
    result, _ = formatter.format(template, args)
    return result
