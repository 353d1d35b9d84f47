"""ICU template parser.

Exports:
    IcuParser: Template parser (immutable cursor, recursive descent)
    ParseContext: Explicit per-parse state for grammar rules
"""

from .core import IcuParser
from .rules import ParseContext

__all__ = ["IcuParser", "ParseContext"]
