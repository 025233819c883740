"""
scadmath Utilities Package.

Common utilities for error handling and builtin diagnostics.
"""

from scadmath.utils.diagnostics import (
    ERROR_DESCRIPTIONS,
    Diagnostic,
    # Builder and emitter
    DiagnosticBuilder,
    DiagnosticEmitter,
    # Core diagnostic types
    DiagnosticLevel,
    # Error codes
    ErrorCode,
    create_feature_disabled_diagnostic,
    # Helper functions for common diagnostics
    create_undefined_function_diagnostic,
    # String similarity utilities
    levenshtein_distance,
    suggest_similar,
)
from scadmath.utils.errors import (
    CallSite,
    ConfigError,
    RegistryError,
    ScadMathError,
)

__all__ = [
    # Errors
    "ScadMathError",
    "RegistryError",
    "ConfigError",
    "CallSite",
    # Error codes
    "ErrorCode",
    "ERROR_DESCRIPTIONS",
    # Core diagnostic types
    "DiagnosticLevel",
    "Diagnostic",
    # Builder and emitter
    "DiagnosticBuilder",
    "DiagnosticEmitter",
    # String similarity utilities
    "levenshtein_distance",
    "suggest_similar",
    # Helper functions
    "create_undefined_function_diagnostic",
    "create_feature_disabled_diagnostic",
]
