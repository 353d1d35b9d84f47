"""Visitor pattern for message tree traversal.

Enables tools to traverse and transform message trees without modifying
node classes.

NOTE: This module follows Python stdlib ast.NodeVisitor naming convention.
Methods are named visit_NodeName (PascalCase) rather than visit_node_name
(snake_case), matching https://docs.python.org/3/library/ast.html#ast.NodeVisitor

Python 3.13+.
"""

from collections.abc import Callable, Iterable, Iterator
from contextlib import AbstractContextManager, nullcontext
from dataclasses import replace
from typing import ClassVar, Never, NoReturn

from icumessage.constants import MAX_DEPTH
from icumessage.core.depth_guard import DepthGuard
from icumessage.diagnostics import ErrorTemplate, UnknownVariantError

from .ast import Composite, Gender, Literal, Message, Plural, Root, Select, VariableSubstitution

__all__ = ["MessageTransformer", "MessageVisitor", "Node", "iter_children", "unknown_variant"]

type Node = Message | Root


def unknown_variant(node: Never) -> NoReturn:
    """Close an exhaustive ``match`` over the Message union.

    Type checkers reject a call here unless every variant was handled
    above it, so adding a node type flags each walker that misses it.
    At runtime it reports hand-built trees containing foreign objects.
    """
    raise UnknownVariantError(ErrorTemplate.unknown_variant(type(node).__name__))


def iter_children(node: Node) -> Iterator[Message]:
    """Yield direct children in source order.

    Example:
        >>> list(iter_children(Composite((Literal("a"), Literal("b")))))
        [Literal(text='a'), Literal(text='b')]
    """
    match node:
        case Root():
            yield node.body
        case Literal() | VariableSubstitution():
            return
        case Composite():
            yield from node.parts
        case Plural():
            for _, message in node.exact:
                yield message
            for case in (node.zero, node.one, node.two, node.few, node.many):
                if case is not None:
                    yield case
            yield node.other
        case Gender():
            if node.female is not None:
                yield node.female
            if node.male is not None:
                yield node.male
            yield node.other
        case Select():
            for _, message in node.cases:
                yield message
        case _:
            unknown_variant(node)


class MessageVisitor[T = Node]:
    """Base visitor for traversing message trees.

    Follows stdlib ast.NodeVisitor convention: generic_visit() automatically
    traverses all child nodes. Override visit_NodeType methods to add custom
    behavior.

    Example:
        >>> class CountPlurals(MessageVisitor):
        ...     def __init__(self):
        ...         super().__init__()
        ...         self.count = 0
        ...
        ...     def visit_Plural(self, node: Plural) -> Node:
        ...         self.count += 1
        ...         return self.generic_visit(node)
    """

    __slots__ = ("_depth_guard", "_instance_dispatch_cache")

    # Class-level dispatch table (method names only, not bound methods)
    _class_visit_methods: ClassVar[dict[str, str]] = {}

    def __init_subclass__(cls, **kwargs: object) -> None:
        """Build class-level dispatch table when subclass is defined."""
        super().__init_subclass__(**kwargs)
        cls._class_visit_methods = {
            name[6:]: name for name in dir(cls) if name.startswith("visit_")
        }

    def __init__(self, *, max_depth: int | None = None) -> None:
        """Initialize visitor with depth guard and dispatch cache.

        Subclasses MUST call super().__init__().

        Args:
            max_depth: Maximum element nesting depth (default: MAX_DEPTH)
        """
        self._depth_guard = DepthGuard(max_depth=max_depth if max_depth is not None else MAX_DEPTH)
        self._instance_dispatch_cache: dict[type, Callable[[Node], T]] = {}

    def visit(self, node: Node) -> T:
        """Visit a node, dispatching to visit_<ClassName> when defined."""
        node_type = type(node)
        method = self._instance_dispatch_cache.get(node_type)
        if method is None:
            method_name = self._class_visit_methods.get(node_type.__name__)
            method = getattr(self, method_name) if method_name else self.generic_visit
            self._instance_dispatch_cache[node_type] = method
        return method(node)

    def _guard_for(self, node: Node) -> AbstractContextManager[object]:
        """Depth guard for plural/gender/select nodes; other nodes add no depth."""
        if isinstance(node, Plural | Gender | Select):
            return self._depth_guard
        return nullcontext()

    def generic_visit(self, node: Node) -> T:
        """Visit every child with depth protection; return the node itself.

        Raises:
            DepthLimitExceededError: If element nesting exceeds max_depth
        """
        with self._guard_for(node):
            for child in iter_children(node):
                self.visit(child)
        return node  # type: ignore[return-value]


class MessageTransformer(MessageVisitor[Node]):
    """Visitor that rebuilds the tree from transformed children.

    Nodes are frozen, so transformation always produces new nodes; the
    input tree is left untouched and can keep being shared.

    Example:
        >>> class Upper(MessageTransformer):
        ...     def visit_Literal(self, node: Literal) -> Node:
        ...         return Literal(node.text.upper())
    """

    __slots__ = ()

    def transform(self, node: Message) -> Message:
        """Transform a message node (narrowed return type for callers)."""
        result = self.visit(node)
        if isinstance(result, Root):
            msg = "Transformer returned a Root for a message node"
            raise TypeError(msg)
        return result

    def generic_visit(self, node: Node) -> Node:
        """Return a copy of node with every child transformed."""
        with self._guard_for(node):
            match node:
                case Root():
                    return replace(node, body=self.transform(node.body))
                case Literal() | VariableSubstitution():
                    return node
                case Composite():
                    return self._concat(self.transform(part) for part in node.parts)
                case Plural():
                    return replace(
                        node,
                        other=self.transform(node.other),
                        zero=self._optional(node.zero),
                        one=self._optional(node.one),
                        two=self._optional(node.two),
                        few=self._optional(node.few),
                        many=self._optional(node.many),
                        exact=tuple((key, self.transform(m)) for key, m in node.exact),
                    )
                case Gender():
                    return replace(
                        node,
                        other=self.transform(node.other),
                        female=self._optional(node.female),
                        male=self._optional(node.male),
                    )
                case Select():
                    return replace(
                        node,
                        cases=tuple((label, self.transform(m)) for label, m in node.cases),
                    )
                case _:
                    unknown_variant(node)

    def _optional(self, node: Message | None) -> Message | None:
        return None if node is None else self.transform(node)

    @staticmethod
    def _concat(parts: Iterable[Message]) -> Message:
        """Join transformed parts, splicing in parts that became Composite."""
        flat: list[Message] = []
        for part in parts:
            if isinstance(part, Composite):
                flat.extend(part.parts)
            else:
                flat.append(part)
        return flat[0] if len(flat) == 1 else Composite(tuple(flat))
