"""Message tree node definitions.

Every parsed template is a ``Root`` owning a tree built from the closed
``Message`` union. Nodes are frozen and slotted: once the parser builds a
tree it is never mutated, so one tree can be rendered concurrently with
different locales and arguments.

Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass

from icumessage.constants import OTHER

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Leaf nodes
    "Literal",
    "VariableSubstitution",
    # Containers
    "Composite",
    "Plural",
    "Gender",
    "Select",
    # Top level
    "Root",
    # Type aliases
    "Message",
    "ComplexMessage",
]


# ============================================================================
# LEAF NODES
# ============================================================================


@dataclass(frozen=True, slots=True)
class Literal:
    """Plain text segment, already unescaped.

    Empty text appears only for an empty template or an explicitly empty
    case such as ``other {}``.
    """

    text: str


@dataclass(frozen=True, slots=True)
class VariableSubstitution:
    """Argument substitution: ``{name}``.

    Inside a plural case, ``#`` is parsed as a substitution of the plural's
    main argument.

    Attributes:
        variable_name: Argument name as written in the template
        arg_index: Position of the argument in a bound argument list.
            None until ``introspection.bind_arguments`` produces a bound
            copy of the tree.
    """

    variable_name: str
    arg_index: int | None = None

    def __post_init__(self) -> None:
        """Validate substitution invariants."""
        if not self.variable_name:
            msg = "VariableSubstitution.variable_name must be non-empty"
            raise ValueError(msg)
        if self.arg_index is not None and self.arg_index < 0:
            msg = f"VariableSubstitution.arg_index must be >= 0, got {self.arg_index}"
            raise ValueError(msg)


# ============================================================================
# CONTAINERS
# ============================================================================


@dataclass(frozen=True, slots=True)
class Composite:
    """Concatenation of two or more parts.

    Parts are never themselves Composite: concatenation is flat, so every
    level of nesting in a tree goes through a plural, gender or select
    element (which the tree walkers depth-limit).

    Example:
        ``{n} emails`` -> Composite((VariableSubstitution("n"), Literal(" emails")))
    """

    parts: tuple["Message", ...]

    def __post_init__(self) -> None:
        """Validate composite invariants."""
        if len(self.parts) < 2:
            msg = f"Composite needs at least 2 parts, got {len(self.parts)}"
            raise ValueError(msg)
        if any(isinstance(part, Composite) for part in self.parts):
            msg = "Composite parts must not be Composite; flatten the parts instead"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class Plural:
    """Cardinal plural element.

    Example:
        {count, plural, =0 {No items} one {# item} other {# items}}

    Attributes:
        main_argument: Argument whose numeric value selects the case
        other: Required fallback case
        zero, one, two, few, many: Optional CLDR category cases
        exact: ``=N`` cases as (N, message) pairs in source order. Exact
            cases win over category cases; the renderer applies that
            precedence, the parser only records both.
        ordinal: True when written as ``selectordinal`` (rendered with
            cardinal rules)
    """

    main_argument: str
    other: "Message"
    zero: "Message | None" = None
    one: "Message | None" = None
    two: "Message | None" = None
    few: "Message | None" = None
    many: "Message | None" = None
    exact: tuple[tuple[int, "Message"], ...] = ()
    ordinal: bool = False

    def __post_init__(self) -> None:
        """Validate plural invariants."""
        if not self.main_argument:
            msg = "Plural.main_argument must be non-empty"
            raise ValueError(msg)
        if not self.exact and all(
            case is None for case in (self.zero, self.one, self.two, self.few, self.many)
        ):
            msg = f"Plural for '{self.main_argument}' needs a case besides 'other'"
            raise ValueError(msg)
        keys = [value for value, _ in self.exact]
        if len(keys) != len(set(keys)):
            msg = f"Plural for '{self.main_argument}' has duplicate exact cases"
            raise ValueError(msg)

    def category_case(self, category: str) -> "Message | None":
        """Return the case for a CLDR category name, None when absent."""
        match category:
            case "zero":
                return self.zero
            case "one":
                return self.one
            case "two":
                return self.two
            case "few":
                return self.few
            case "many":
                return self.many
            case "other":
                return self.other
            case _:
                return None

    def exact_case(self, value: int) -> "Message | None":
        """Return the ``=value`` case, None when absent."""
        for key, message in self.exact:
            if key == value:
                return message
        return None


@dataclass(frozen=True, slots=True)
class Gender:
    """Gender element: ``{who, gender, female {...} male {...} other {...}}``."""

    main_argument: str
    other: "Message"
    female: "Message | None" = None
    male: "Message | None" = None

    def __post_init__(self) -> None:
        """Validate gender invariants."""
        if not self.main_argument:
            msg = "Gender.main_argument must be non-empty"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class Select:
    """Select element with an open set of string labels.

    Example:
        {status, select, online {Online} offline {Offline} other {Unknown}}

    Cases are kept in source order as (label, message) pairs; lookup is by
    label, so reordering cases never changes rendering.
    """

    main_argument: str
    cases: tuple[tuple[str, "Message"], ...]

    def __post_init__(self) -> None:
        """Validate select invariants."""
        if not self.main_argument:
            msg = "Select.main_argument must be non-empty"
            raise ValueError(msg)
        if not self.cases:
            msg = f"Select for '{self.main_argument}' needs at least one case"
            raise ValueError(msg)
        labels = [label for label, _ in self.cases]
        if len(labels) != len(set(labels)):
            msg = f"Select for '{self.main_argument}' has duplicate case labels"
            raise ValueError(msg)

    def case(self, label: str) -> "Message | None":
        """Return the case for ``label``, None when absent."""
        for key, message in self.cases:
            if key == label:
                return message
        return None

    @property
    def other(self) -> "Message | None":
        """The ``other`` fallback case, if the template declares one."""
        return self.case(OTHER)


# ============================================================================
# TOP LEVEL
# ============================================================================


@dataclass(frozen=True, slots=True)
class Root:
    """One parsed template.

    Attributes:
        body: The message tree
        declared_arguments: Every argument name referenced in the tree,
            by substitutions and by plural/gender/select elements
    """

    body: "Message"
    declared_arguments: frozenset[str] = frozenset()


# ============================================================================
# TYPE ALIASES
# ============================================================================

type ComplexMessage = Plural | Gender | Select

# Closed union: adding a variant makes every exhaustive ``match`` over
# Message fail type checking until it handles the new case.
type Message = Literal | Composite | VariableSubstitution | Plural | Gender | Select
