"""
scadmath Standard Library - Collections Module.

Vector and aggregate builtins: min, max, norm, cross, concat, len and str.
"""

from __future__ import annotations

import math as _math
from typing import TYPE_CHECKING, Optional

import numpy as np

from scadmath.config import Feature
from scadmath.runtime.context import EvalContext
from scadmath.runtime.registry import FunctionRegistry
from scadmath.runtime.values import UNDEFINED, Number, String, Value, Vector
from scadmath.utils.diagnostics import ErrorCode

if TYPE_CHECKING:
    from scadmath.runtime.engine import Runtime


# =============================================================================
# Aggregation
# =============================================================================


def _extremum(ctx: EvalContext, better) -> Value:
    """
    Shared scan for min/max.

    A single non-empty Vector argument is reduced over its own elements.
    Otherwise argument 0 must be a Number and seeds a scan over the
    remaining arguments that stops at the first non-Number.
    """
    n = ctx.num_args()
    if n == 0:
        return UNDEFINED

    first = ctx.get_arg_value(0)
    if n == 1 and isinstance(first, Vector) and len(first) > 0:
        best = first[0]
        for item in first.items[1:]:
            if better(item, best):
                best = item
        return best

    if not isinstance(first, Number):
        return UNDEFINED

    best_value = first.value
    for arg in ctx.args[1:]:
        if not isinstance(arg, Number):
            break
        if better(arg.value, best_value):
            best_value = arg.value
    return Number(best_value)


def builtin_min(runtime: Runtime, ctx: EvalContext) -> Value:
    return _extremum(ctx, lambda a, b: a < b)


def builtin_max(runtime: Runtime, ctx: EvalContext) -> Value:
    return _extremum(ctx, lambda a, b: a > b)


# =============================================================================
# Vector Operations
# =============================================================================


def _as_array(vector: Vector) -> Optional[np.ndarray]:
    """Vector of Numbers as a float64 array; None if any element is not a Number."""
    values = [item.to_double() for item in vector]
    if any(v is None for v in values):
        return None
    return np.array(values, dtype=np.float64)


def builtin_norm(runtime: Runtime, ctx: EvalContext) -> Value:
    """Euclidean length of a numeric Vector."""
    if ctx.num_args() != 1:
        return UNDEFINED
    arg = ctx.get_arg_value(0)
    if not isinstance(arg, Vector):
        return UNDEFINED

    components = _as_array(arg)
    if components is None:
        runtime.diagnostics.warning(
            ErrorCode.W0201, "Incorrect arguments to norm()", "norm"
        ).note(f"argument was {arg.to_display()}").emit()
        return UNDEFINED

    with np.errstate(all="ignore"):
        return Number(_math.sqrt(float(np.dot(components, components))))


def builtin_cross(runtime: Runtime, ctx: EvalContext) -> Value:
    """Cross product of two 3D vectors of finite Numbers."""

    def reject(code: str, message: str) -> Value:
        runtime.diagnostics.warning(code, message, "cross").emit()
        return UNDEFINED

    if ctx.num_args() != 2:
        return reject(ErrorCode.W0202, "Invalid number of parameters for cross()")

    left, right = ctx.args
    if not isinstance(left, Vector) or not isinstance(right, Vector):
        return reject(ErrorCode.W0203, "Invalid type of parameters for cross()")

    if len(left) != 3 or len(right) != 3:
        return reject(ErrorCode.W0201, "Invalid vector size of parameter for cross()")

    for a, b in zip(left, right):
        if not isinstance(a, Number) or not isinstance(b, Number):
            return reject(ErrorCode.W0201, "Invalid value in parameter vector for cross()")
        pair = np.array((a.value, b.value))
        if np.isnan(pair).any():
            return reject(ErrorCode.W0201, "Invalid value (NaN) in parameter vector for cross()")
        if not np.isfinite(pair).all():
            return reject(ErrorCode.W0201, "Invalid value (INF) in parameter vector for cross()")

    product = np.cross(_as_array(left), _as_array(right))
    return Vector.of(Number(float(c)) for c in product)


def builtin_concat(runtime: Runtime, ctx: EvalContext) -> Value:
    """Flatten one level: Vector arguments contribute their elements."""
    result: list[Value] = []
    for arg in ctx.args:
        if isinstance(arg, Vector):
            result.extend(arg)
        else:
            result.append(arg)
    return Vector.of(result)


# =============================================================================
# Basic Functions
# =============================================================================


def builtin_len(runtime: Runtime, ctx: EvalContext) -> Value:
    """Element count of a Vector, or code-point count of a String."""
    if ctx.num_args() != 1:
        return UNDEFINED
    arg = ctx.get_arg_value(0)
    if isinstance(arg, (Vector, String)):
        return Number(float(len(arg)))
    return UNDEFINED


def builtin_str(runtime: Runtime, ctx: EvalContext) -> Value:
    return String("".join(arg.to_display() for arg in ctx.args))


def register(registry: FunctionRegistry) -> None:
    registry.register("min", builtin_min)
    registry.register("max", builtin_max)
    registry.register("len", builtin_len)
    registry.register("str", builtin_str)
    registry.register("concat", builtin_concat, Feature.EXPERIMENTAL_CONCAT)
    registry.register("norm", builtin_norm)
    registry.register("cross", builtin_cross)
