"""
scadmath - builtin function library for a CSG scripting language.

scadmath evaluates the language's builtin functions (trigonometry in degrees,
vector math, table lookup and search, random numbers, version introspection)
over a small dynamically typed value model. Builtins never raise: invalid
calls evaluate to undef, optionally with a diagnostic.
"""

from scadmath.config import BuildVersion, Feature, RuntimeConfig
from scadmath.runtime import (
    UNDEFINED,
    CallResult,
    EvalContext,
    Number,
    Runtime,
    String,
    Value,
    Vector,
)

__version__ = "0.1.0"
__all__ = [
    "Runtime",
    "RuntimeConfig",
    "BuildVersion",
    "Feature",
    "CallResult",
    "EvalContext",
    "Value",
    "UNDEFINED",
    "Number",
    "String",
    "Vector",
]
