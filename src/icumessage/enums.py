"""Enumerations used across icumessage.

Python 3.13+. Zero external dependencies.
"""

from enum import StrEnum

__all__ = ["ElementKeyword", "PluralCategory"]


class PluralCategory(StrEnum):
    """CLDR cardinal plural categories.

    Inherits from ``StrEnum`` so members compare equal to the plain strings
    returned by the plural resolver and Babel.
    """

    ZERO = "zero"
    ONE = "one"
    TWO = "two"
    FEW = "few"
    MANY = "many"
    OTHER = "other"


class ElementKeyword(StrEnum):
    """Keywords accepted after the argument name of a complex element.

    Example:
        {count, plural, one {# item} other {# items}}
                ^^^^^^
    """

    PLURAL = "plural"
    SELECTORDINAL = "selectordinal"
    SELECT = "select"
    GENDER = "gender"
