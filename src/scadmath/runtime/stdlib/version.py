"""
scadmath Standard Library - Version Module.

Introspection builtins: the build version and the module call stack.
"""

from __future__ import annotations

import math as _math
from typing import TYPE_CHECKING

from scadmath.runtime.context import EvalContext
from scadmath.runtime.registry import FunctionRegistry
from scadmath.runtime.values import UNDEFINED, Number, String, Value, Vector
from scadmath.utils.diagnostics import ErrorCode

if TYPE_CHECKING:
    from scadmath.runtime.engine import Runtime


def builtin_version(runtime: Runtime, ctx: EvalContext) -> Value:
    """[year, month] or [year, month, day]; arguments are ignored."""
    return Vector.of(Number(float(part)) for part in runtime.config.version.components())


def builtin_version_num(runtime: Runtime, ctx: EvalContext) -> Value:
    """Encode a version vector as year * 10000 + month * 100 + day."""
    if ctx.num_args() == 0:
        value = builtin_version(runtime, ctx)
    else:
        value = ctx.get_arg_value(0)

    parts = value.get_vec3() or value.get_vec2()
    if parts is None:
        return UNDEFINED
    year, month = parts[0], parts[1]
    day = parts[2] if len(parts) == 3 else 0.0
    return Number(year * 10000 + month * 100 + day)


def builtin_parent_module(runtime: Runtime, ctx: EvalContext) -> Value:
    """Name of the n-th enclosing module instance; n defaults to 1."""
    if ctx.num_args() == 0:
        d = 1.0
    elif ctx.num_args() == 1:
        d = ctx.get_arg_value(0).to_double()
        if d is None:
            return UNDEFINED
    else:
        return UNDEFINED

    stack = runtime.module_stack
    depth = stack.stack_size()
    shown = str(_math.trunc(d)) if _math.isfinite(d) else format(d, "g")

    # trunc(d) < 0 exactly when d <= -1
    if d <= -1.0:
        runtime.diagnostics.warning(
            ErrorCode.W0206,
            f"Negative parent module index ({shown}) not allowed",
            "parent_module",
        ).emit()
        return UNDEFINED

    if not d < depth:
        runtime.diagnostics.warning(
            ErrorCode.W0206,
            f"Parent module index ({shown}) greater than the number of modules on the stack",
            "parent_module",
        ).note(f"the stack holds {depth} module(s)").emit()
        return UNDEFINED

    return String(stack.stack_element(depth - 1 - _math.trunc(d)))


def register(registry: FunctionRegistry) -> None:
    registry.register("version", builtin_version)
    registry.register("version_num", builtin_version_num)
    registry.register("parent_module", builtin_parent_module)
