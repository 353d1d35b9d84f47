"""Argument introspection for parsed ICU templates.

Answers "which arguments does this template need, and how are they used"
without rendering it, and binds substitution names to positions in an
argument list for callers that pass arguments positionally.

Key features:
- Frozen dataclass results with slots
- Visitor-based traversal with depth limiting
- Binding returns a new tree; parsed trees stay shareable

Python 3.13+.
"""

from collections.abc import Sequence
from dataclasses import dataclass, replace

from .constants import MAX_DEPTH
from .syntax.ast import Gender, Message, Plural, Root, Select, VariableSubstitution
from .syntax.visitor import MessageTransformer, MessageVisitor, Node

__all__ = ["MessageArguments", "bind_arguments", "extract_arguments"]


@dataclass(frozen=True, slots=True)
class MessageArguments:
    """Argument names used by a template, grouped by usage.

    A name can appear in several groups: ``{n, plural, other {# of {n}}}``
    lists ``n`` both as a plural argument and as a variable (``#`` is a
    substitution of the plural argument).
    """

    variables: frozenset[str]
    """Names substituted as text (``{name}`` and ``#``)."""

    plural_arguments: frozenset[str]
    """Main arguments of plural and selectordinal elements (need numbers)."""

    select_arguments: frozenset[str]
    """Main arguments of select elements."""

    gender_arguments: frozenset[str]
    """Main arguments of gender elements (need strings)."""

    @property
    def all(self) -> frozenset[str]:
        """Every argument name the template references."""
        return (
            self.variables | self.plural_arguments | self.select_arguments | self.gender_arguments
        )

    def requires(self, name: str) -> bool:
        """Check if the template references an argument."""
        return name in self.all


class _ArgumentUsageVisitor(MessageVisitor[Node]):
    __slots__ = ("gender", "plural", "select", "variables")

    def __init__(self, *, max_depth: int = MAX_DEPTH) -> None:
        super().__init__(max_depth=max_depth)
        self.variables: set[str] = set()
        self.plural: set[str] = set()
        self.select: set[str] = set()
        self.gender: set[str] = set()

    def visit_VariableSubstitution(self, node: VariableSubstitution) -> Node:  # noqa: N802
        self.variables.add(node.variable_name)
        return node

    def visit_Plural(self, node: Plural) -> Node:  # noqa: N802
        self.plural.add(node.main_argument)
        return self.generic_visit(node)

    def visit_Select(self, node: Select) -> Node:  # noqa: N802
        self.select.add(node.main_argument)
        return self.generic_visit(node)

    def visit_Gender(self, node: Gender) -> Node:  # noqa: N802
        self.gender.add(node.main_argument)
        return self.generic_visit(node)


def extract_arguments(root: Root | Message, *, max_depth: int = MAX_DEPTH) -> MessageArguments:
    """Collect the argument names a template references.

    Args:
        root: Parsed template (or any message node)
        max_depth: Maximum traversal depth (default: MAX_DEPTH)

    Returns:
        MessageArguments grouping names by how they are used

    Raises:
        DepthLimitExceededError: Tree nests deeper than max_depth

    Example:
        >>> args = extract_arguments(parse("{g, gender, female {She} other {They}} has {n}"))
        >>> sorted(args.all)
        ['g', 'n']
    """
    visitor = _ArgumentUsageVisitor(max_depth=max_depth)
    visitor.visit(root)
    return MessageArguments(
        variables=frozenset(visitor.variables),
        plural_arguments=frozenset(visitor.plural),
        select_arguments=frozenset(visitor.select),
        gender_arguments=frozenset(visitor.gender),
    )


class _ArgumentBinder(MessageTransformer):
    __slots__ = ("_positions",)

    def __init__(self, positions: dict[str, int]) -> None:
        super().__init__()
        self._positions = positions

    def visit_VariableSubstitution(self, node: VariableSubstitution) -> Node:  # noqa: N802
        return replace(node, arg_index=self._positions.get(node.variable_name))


def bind_arguments(root: Root, names: Sequence[str]) -> Root:
    """Return a copy of the tree with substitutions bound to positions.

    Each VariableSubstitution gets ``arg_index`` set to the position of its
    name in ``names`` (first occurrence wins). Names not listed are left
    unbound (``arg_index=None``). The input tree is not modified.

    Example:
        >>> bound = bind_arguments(parse("{a} and {b}"), ["b", "a"])
        >>> [part.arg_index for part in bound.body.parts if hasattr(part, "arg_index")]
        [1, 0]
    """
    positions: dict[str, int] = {}
    for index, name in enumerate(names):
        positions.setdefault(name, index)
    result = _ArgumentBinder(positions).visit(root)
    if not isinstance(result, Root):
        msg = "Binding must preserve the Root node"
        raise TypeError(msg)
    return result
