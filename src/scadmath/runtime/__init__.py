"""
scadmath Runtime Package.

Value model, call context, builtin registry and the Runtime that ties them
together.
"""

from scadmath.runtime.context import EvalContext, ListModuleStack, ModuleStack
from scadmath.runtime.engine import CallResult, Runtime
from scadmath.runtime.registry import BuiltinFunction, FunctionRegistry
from scadmath.runtime.values import (
    UNDEFINED,
    Number,
    String,
    Undefined,
    Value,
    ValueType,
    Vector,
)

__all__ = [
    "Runtime",
    "CallResult",
    "EvalContext",
    "ModuleStack",
    "ListModuleStack",
    "BuiltinFunction",
    "FunctionRegistry",
    "Value",
    "ValueType",
    "Undefined",
    "UNDEFINED",
    "Number",
    "String",
    "Vector",
]
