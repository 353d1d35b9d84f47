"""ICU message runtime package.

Provides plural category selection, message rendering, and the
MessageFormatter API. Depends on syntax package for parsing.

Python 3.13+.
"""

from .cache import ParseCache
from .formatter import MessageFormatter, format_message
from .plural_rules import PLURAL_RULES, select_plural_category
from .renderer import ArgumentValue, MessageRenderer, render

__all__ = [
    "PLURAL_RULES",
    "ArgumentValue",
    "MessageFormatter",
    "MessageRenderer",
    "ParseCache",
    "format_message",
    "render",
    "select_plural_category",
]
