"""Diagnostic system for icumessage errors.

Provides structured error diagnostics with codes, spans, and hints.
Inspired by Rust compiler diagnostics and Elm error messages.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode, SourceSpan
from .errors import (
    ArgumentTypeError,
    IcuError,
    IcuSyntaxError,
    MissingArgumentError,
    RenderError,
    StrayBraceError,
    UnknownVariantError,
)
from .formatter import DiagnosticFormatter, OutputFormat
from .templates import ErrorTemplate

__all__ = [
    "ArgumentTypeError",
    "Diagnostic",
    "DiagnosticCode",
    "DiagnosticFormatter",
    "ErrorTemplate",
    "IcuError",
    "IcuSyntaxError",
    "MissingArgumentError",
    "OutputFormat",
    "RenderError",
    "SourceSpan",
    "StrayBraceError",
    "UnknownVariantError",
]
