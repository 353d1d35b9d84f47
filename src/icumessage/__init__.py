"""icumessage - ICU message templates with CLDR plural rules.

Parses ICU-style message templates (plain substitutions plus plural,
selectordinal, select and gender elements) into immutable trees and renders
them against named arguments for a locale.

Public API:
    MessageFormatter - Cached, single-locale formatting with error collection
    format_message - Parse and render in one call
    parse - Parse template text to a message tree
    render - Render a parsed tree
    serialize - Serialize a tree back to template text
    extract_arguments - Argument names a template references
    bind_arguments - Bind substitutions to argument positions
    select_plural_category - CLDR plural category for a number and locale

Exceptions:
    IcuError - Base exception class
    IcuSyntaxError - Parse errors
    RenderError - Runtime rendering errors
    MissingArgumentError - Required argument absent
    ArgumentTypeError - Argument of the wrong kind

Submodules:
    icumessage.syntax.ast - Message tree node types
    icumessage.introspection - Argument extraction and binding
    icumessage.diagnostics - Error types, codes and formatting
"""

from .core.depth_guard import DepthLimitExceededError
from .diagnostics import (
    ArgumentTypeError,
    IcuError,
    IcuSyntaxError,
    MissingArgumentError,
    RenderError,
    UnknownVariantError,
)
from .introspection import MessageArguments, bind_arguments, extract_arguments
from .runtime import (
    ArgumentValue,
    MessageFormatter,
    format_message,
    render,
    select_plural_category,
)
from .syntax import (
    Composite,
    Gender,
    Literal,
    Message,
    Plural,
    Root,
    Select,
    VariableSubstitution,
    parse,
    serialize,
)

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

try:
    __version__ = _get_version("icumessage")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "ArgumentTypeError",
    "ArgumentValue",
    "Composite",
    "DepthLimitExceededError",
    "Gender",
    "IcuError",
    "IcuSyntaxError",
    "Literal",
    "Message",
    "MessageArguments",
    "MessageFormatter",
    "MissingArgumentError",
    "Plural",
    "RenderError",
    "Root",
    "Select",
    "UnknownVariantError",
    "VariableSubstitution",
    "__version__",
    "bind_arguments",
    "extract_arguments",
    "format_message",
    "parse",
    "render",
    "select_plural_category",
    "serialize",
]
