"""
scadmath Standard Library - Lookup Module.

lookup(p, table) interpolates linearly in a table of [position, value]
pairs. The table need not be sorted; queries outside the covered range
clamp to the value at the nearest end.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from scadmath.runtime.context import EvalContext
from scadmath.runtime.registry import FunctionRegistry
from scadmath.runtime.values import UNDEFINED, Number, Value
from scadmath.utils.diagnostics import DiagnosticEmitter, ErrorCode

if TYPE_CHECKING:
    from scadmath.runtime.engine import Runtime


def _table_rows(
    table: Value, diagnostics: DiagnosticEmitter
) -> Optional[list[tuple[float, float]]]:
    rows = []
    for index, row in enumerate(table.to_vector()):
        pair = row.get_vec2()
        if pair is None:
            diagnostics.warning(
                ErrorCode.W0201,
                f"lookup: table row {index} is not a [position, value] pair",
                "lookup",
            ).note(f"row was {row.to_repr()}").emit()
            return None
        rows.append(pair)
    if not rows:
        diagnostics.warning(
            ErrorCode.W0201, f"lookup: invalid table {table.to_repr()}", "lookup"
        ).emit()
        return None
    return rows


def interpolate(p: float, rows: list[tuple[float, float]]) -> float:
    """
    Piecewise-linear interpolation over unsorted (position, value) rows.

    One pass narrows a low bracket (largest position <= p) and a high
    bracket (smallest position >= p), both seeded from the first row.
    """
    low_p, low_v = rows[0]
    high_p, high_v = rows[0]
    for this_p, this_v in rows[1:]:
        if this_p <= p and (this_p > low_p or low_p > p):
            low_p, low_v = this_p, this_v
        if this_p >= p and (this_p < high_p or high_p < p):
            high_p, high_v = this_p, this_v

    if p <= low_p:
        return high_v
    if p >= high_p:
        return low_v
    f = (p - low_p) / (high_p - low_p)
    return high_v * f + low_v * (1 - f)


def builtin_lookup(runtime: Runtime, ctx: EvalContext) -> Value:
    if ctx.num_args() < 2:
        return UNDEFINED
    p = ctx.get_arg_value(0).to_double()
    if p is None:
        return UNDEFINED
    rows = _table_rows(ctx.get_arg_value(1), runtime.diagnostics)
    if rows is None:
        return UNDEFINED
    return Number(interpolate(p, rows))


def register(registry: FunctionRegistry) -> None:
    registry.register("lookup", builtin_lookup)
