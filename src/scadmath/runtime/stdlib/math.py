"""
scadmath Standard Library - Math Module.

Scalar and trigonometric builtins:
- Basic arithmetic (abs, sign)
- Rounding (round, ceil, floor)
- Powers and logarithms (pow, sqrt, exp, log, ln)
- Degree-based trigonometry (sin, cos, tan, asin, acos, atan, atan2)

Every builtin takes an exact number of Number arguments; anything else
returns undef without a diagnostic. NaN and infinities are valid inputs and
follow IEEE-754 semantics rather than raising.
"""

from __future__ import annotations

import math as _math
from collections.abc import Callable
from typing import TYPE_CHECKING

import numpy as np

from scadmath.config import TRIG_HUGE_VALUE
from scadmath.runtime.context import EvalContext
from scadmath.runtime.registry import FunctionRegistry
from scadmath.runtime.values import UNDEFINED, Number, Value

if TYPE_CHECKING:
    from scadmath.runtime.engine import Runtime

SQRT1_2 = _math.sqrt(0.5)


def deg2rad(x: float) -> float:
    return x * _math.pi / 180.0


def rad2deg(x: float) -> float:
    return x * 180.0 / _math.pi


# =============================================================================
# Plain float functions
# =============================================================================


def sign(x: float) -> float:
    """Return -1.0, 0.0 or 1.0; NaN maps to 0.0."""
    if x < 0:
        return -1.0
    if x > 0:
        return 1.0
    return 0.0


def round_half_away(x: float) -> float:
    """Round to nearest integer, halfway cases away from zero (C round())."""
    if not _math.isfinite(x):
        return x
    t = _math.trunc(x)
    if abs(x - t) >= 0.5:
        t += 1 if x > 0 else -1
    return _math.copysign(float(t), x)


def reduce_degrees(x: float, huge: float = TRIG_HUGE_VALUE) -> float:
    """
    Reduce an angle in degrees to [0, 360).

    Returns NaN for NaN, infinities and magnitudes at or beyond huge, where
    the reduction would have no significant bits left.
    """
    if 0.0 <= x < 360.0:
        return x
    if -huge < x < huge:
        return x - 360.0 * _math.floor(x / 360.0)
    return _math.nan


def sin_degrees(x: float, huge: float = TRIG_HUGE_VALUE) -> float:
    """Sine of an angle in degrees, exact at multiples of 30 and 45."""
    x = reduce_degrees(x, huge)
    if _math.isnan(x):
        return x
    oppose = x >= 180.0
    if oppose:
        x -= 180.0
    if x > 90.0:
        x = 180.0 - x
    if x < 45.0:
        x = 0.5 if x == 30.0 else _math.sin(deg2rad(x))
    elif x == 45.0:
        x = SQRT1_2
    else:
        x = _math.cos(deg2rad(90.0 - x))
    return -x if oppose else x


def cos_degrees(x: float, huge: float = TRIG_HUGE_VALUE) -> float:
    """Cosine of an angle in degrees, exact at multiples of 45 and 60."""
    x = reduce_degrees(x, huge)
    if _math.isnan(x):
        return x
    oppose = x >= 180.0
    if oppose:
        x -= 180.0
    if x > 90.0:
        x = 180.0 - x
        oppose = not oppose
    if x > 45.0:
        x = 0.5 if x == 60.0 else _math.sin(deg2rad(90.0 - x))
    elif x == 45.0:
        x = SQRT1_2
    else:
        x = _math.cos(deg2rad(x))
    return -x if oppose else x


def log_base(base: float, x: float) -> float:
    """log(x) / log(base) with IEEE results for zero and negative inputs."""
    with np.errstate(all="ignore"):
        return float(np.log(x) / np.log(base))


# =============================================================================
# Builtin adapters
# =============================================================================


def _numeric(func: Callable[..., float], arity: int = 1) -> Callable[[Runtime, EvalContext], Value]:
    """Make a builtin from a float function taking exactly arity Numbers."""

    def builtin(runtime: Runtime, ctx: EvalContext) -> Value:
        args = ctx.numbers(arity)
        if args is None:
            return UNDEFINED
        with np.errstate(all="ignore"):
            return Number(float(func(*args)))

    builtin.__name__ = f"builtin_{getattr(func, '__name__', 'numeric')}"
    builtin.__doc__ = func.__doc__
    return builtin


builtin_abs = _numeric(_math.fabs)
builtin_sign = _numeric(sign)
builtin_round = _numeric(round_half_away)
builtin_ceil = _numeric(np.ceil)
builtin_floor = _numeric(np.floor)
builtin_pow = _numeric(np.power, 2)
builtin_sqrt = _numeric(np.sqrt)
builtin_exp = _numeric(np.exp)
builtin_ln = _numeric(np.log)
builtin_tan = _numeric(lambda x: np.tan(deg2rad(x)))
builtin_asin = _numeric(lambda x: rad2deg(np.arcsin(x)))
builtin_acos = _numeric(lambda x: rad2deg(np.arccos(x)))
builtin_atan = _numeric(lambda x: rad2deg(np.arctan(x)))
builtin_atan2 = _numeric(lambda y, x: rad2deg(np.arctan2(y, x)), 2)


def builtin_sin(runtime: Runtime, ctx: EvalContext) -> Value:
    args = ctx.numbers(1)
    if args is None:
        return UNDEFINED
    return Number(sin_degrees(args[0], runtime.config.trig_huge_value))


def builtin_cos(runtime: Runtime, ctx: EvalContext) -> Value:
    args = ctx.numbers(1)
    if args is None:
        return UNDEFINED
    return Number(cos_degrees(args[0], runtime.config.trig_huge_value))


def builtin_log(runtime: Runtime, ctx: EvalContext) -> Value:
    """log(x) is base 10; log(b, x) takes the base first."""
    args = ctx.numbers(1, 2)
    if args is None:
        return UNDEFINED
    if len(args) == 1:
        return Number(log_base(10.0, args[0]))
    return Number(log_base(args[0], args[1]))


def register(registry: FunctionRegistry) -> None:
    registry.register("abs", builtin_abs)
    registry.register("sign", builtin_sign)
    registry.register("sin", builtin_sin)
    registry.register("cos", builtin_cos)
    registry.register("asin", builtin_asin)
    registry.register("acos", builtin_acos)
    registry.register("tan", builtin_tan)
    registry.register("atan", builtin_atan)
    registry.register("atan2", builtin_atan2)
    registry.register("round", builtin_round)
    registry.register("ceil", builtin_ceil)
    registry.register("floor", builtin_floor)
    registry.register("pow", builtin_pow)
    registry.register("sqrt", builtin_sqrt)
    registry.register("exp", builtin_exp)
    registry.register("log", builtin_log)
    registry.register("ln", builtin_ln)
