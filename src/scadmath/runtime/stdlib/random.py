"""
scadmath Standard Library - Random Module.

    rands(min, max, count)        draws from the process-seeded stream
    rands(min, max, count, seed)  reseeds the deterministic stream, then draws

Both forms return a Vector of count uniformly distributed Numbers.
"""

from __future__ import annotations

import math as _math
from typing import TYPE_CHECKING

from scadmath.runtime.context import EvalContext
from scadmath.runtime.registry import FunctionRegistry
from scadmath.runtime.streams import seed_from_double
from scadmath.runtime.values import UNDEFINED, Number, Value, Vector

if TYPE_CHECKING:
    from scadmath.runtime.engine import Runtime


def _count(x: float) -> int:
    """Clamp a script number to a non-negative draw count."""
    if not _math.isfinite(x):
        return 0
    return max(0, int(x))


def builtin_rands(runtime: Runtime, ctx: EvalContext) -> Value:
    args = ctx.numbers(3, 4)
    if args is None:
        return UNDEFINED

    low, high, count = args[0], args[1], _count(args[2])
    if high < low:
        low, high = high, low

    seed = seed_from_double(args[3]) if len(args) == 4 else None
    stream = runtime.entropic if seed is None else runtime.deterministic

    # A zero-width range is answered without sampling; a given seed still applies.
    if low == high:
        if seed is not None:
            stream.seed(seed)
        return Vector.of(Number(low) for _ in range(count))

    samples = stream.uniform(low, high, count, seed)
    return Vector.of(Number(x) for x in samples)


def register(registry: FunctionRegistry) -> None:
    registry.register("rands", builtin_rands)
