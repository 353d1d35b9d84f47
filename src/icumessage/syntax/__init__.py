"""ICU template syntax package.

Provides parser, message tree definitions, visitor pattern, and
serialization. Separate from runtime so tooling (linters, extractors) can
work with trees without loading locale data.

Python 3.13+.
"""

from .ast import (
    ComplexMessage,
    Composite,
    Gender,
    Literal,
    Message,
    Plural,
    Root,
    Select,
    VariableSubstitution,
)
from .cursor import Cursor, ParseResult
from .parser import IcuParser
from .serializer import SerializationError, serialize
from .visitor import MessageTransformer, MessageVisitor

__all__ = [
    "ComplexMessage",
    "Composite",
    "Cursor",
    "Gender",
    "IcuParser",
    "Literal",
    "Message",
    "MessageTransformer",
    "MessageVisitor",
    "ParseResult",
    "Plural",
    "Root",
    "Select",
    "SerializationError",
    "VariableSubstitution",
    "parse",
    "serialize",
]


def parse(source: str) -> Root:
    """Parse a template into a message tree.

    Convenience function for IcuParser().parse().

    Args:
        source: Template text

    Returns:
        Root owning the parsed tree

    Raises:
        IcuSyntaxError: Malformed template

    Example:
        >>> from icumessage.syntax import parse
        >>> parse("Hello {name}").declared_arguments
        frozenset({'name'})
    """
    parser = IcuParser()
    return parser.parse(source)
