"""Core ICU template parser.

This module provides the IcuParser class that orchestrates parsing of a
template string into the tree defined in :mod:`icumessage.syntax.ast`.

Architecture:
    The parser uses an immutable cursor pattern (:class:`~icumessage.syntax.cursor.Cursor`)
    to traverse source text. Grammar rules live in
    :mod:`~icumessage.syntax.parser.rules` and
    :mod:`~icumessage.syntax.parser.primitives`.

Fallback:
    Plain prose sometimes carries braces that were never meant as ICU
    syntax ("Press } to exit"). When the full grammar fails on such a stray
    brace and no plural/select/gender element was recognized before it,
    the template is re-read with a reduced grammar where only ``{name}`` is
    special. Every other syntax error is raised.

Security:
    Includes a configurable input size limit and element nesting limit.
"""

from icumessage.constants import MAX_DEPTH, MAX_SOURCE_SIZE
from icumessage.diagnostics import ErrorTemplate, IcuSyntaxError, StrayBraceError
from icumessage.syntax.ast import Message, Root, VariableSubstitution
from icumessage.syntax.cursor import Cursor
from icumessage.syntax.parser.rules import ParseContext, parse_message, parse_plain_message
from icumessage.syntax.visitor import MessageVisitor, Node

__all__ = ["IcuParser"]


class _ArgumentCollector(MessageVisitor[Node]):
    """Collect every argument name referenced in a tree."""

    __slots__ = ("names",)

    def __init__(self, *, max_depth: int) -> None:
        super().__init__(max_depth=max_depth)
        self.names: set[str] = set()

    def visit_VariableSubstitution(self, node: VariableSubstitution) -> Node:  # noqa: N802
        self.names.add(node.variable_name)
        return node

    def generic_visit(self, node: Node) -> Node:
        main_argument = getattr(node, "main_argument", None)
        if main_argument is not None:
            self.names.add(main_argument)
        return super().generic_visit(node)


def _declared_arguments(body: Message, max_depth: int) -> frozenset[str]:
    collector = _ArgumentCollector(max_depth=max_depth)
    collector.visit(body)
    return frozenset(collector.names)


class IcuParser:
    """ICU message template parser using immutable cursor pattern.

    Design:
    - Immutable cursor prevents infinite loops (no manual guards needed)
    - Pure: no state survives a parse call, so one instance is thread-safe
    - Errors carry a Diagnostic with offset, line:column and expected tokens

    Attributes:
        max_source_size: Maximum template length in characters (default: 1M)
        max_nesting_depth: Maximum element nesting depth (default: 100)
    """

    __slots__ = ("_max_nesting_depth", "_max_source_size")

    def __init__(
        self,
        *,
        max_source_size: int | None = None,
        max_nesting_depth: int | None = None,
    ) -> None:
        """Initialize parser with optional size and nesting depth limits.

        Args:
            max_source_size: Maximum template length (default: MAX_SOURCE_SIZE).
                            Set to 0 to disable the size limit.
            max_nesting_depth: Maximum element nesting depth (default: MAX_DEPTH).
        """
        self._max_source_size = (
            max_source_size if max_source_size is not None else MAX_SOURCE_SIZE
        )
        self._max_nesting_depth = (
            max_nesting_depth if max_nesting_depth is not None else MAX_DEPTH
        )

    @property
    def max_source_size(self) -> int:
        """Maximum allowed template length in characters."""
        return self._max_source_size

    @property
    def max_nesting_depth(self) -> int:
        """Maximum allowed element nesting depth."""
        return self._max_nesting_depth

    def parse(self, source: str) -> Root:
        """Parse a template into a Root.

        Args:
            source: Template text

        Returns:
            :class:`~icumessage.syntax.ast.Root` owning the message tree and
            the set of argument names it references

        Raises:
            IcuSyntaxError: Malformed template. ``error.offset`` is the
                character offset, ``error.expected`` the expected tokens.

        Example:
            >>> root = IcuParser().parse("{n, plural, one {# day} other {# days}}")
            >>> root.declared_arguments
            frozenset({'n'})
        """
        if self._max_source_size and len(source) > self._max_source_size:
            raise IcuSyntaxError(ErrorTemplate.source_too_large(len(source), self._max_source_size))

        context = ParseContext(max_nesting_depth=self._max_nesting_depth)
        try:
            body = parse_message(Cursor(source, 0), context).value
        except StrayBraceError:
            if context.stats.complex_elements:
                raise
            body = parse_plain_message(source)

        declared = _declared_arguments(body, self._max_nesting_depth)
        return Root(body=body, declared_arguments=declared)
