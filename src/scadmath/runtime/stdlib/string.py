"""
scadmath Standard Library - String Module.

Provides search(), a multi-mode lookup of values in strings and tables.

    search(needle, haystack, num_returns_per_match=1, index_col_num=0)

Strings are searched glyph by glyph (Unicode code points), never byte by
byte. Examples:

    search("a", "abcdabcd")                  -> [0]
    search("a", "abcdabcd", 0)               -> [[0, 4]]
    search("🂡aЛ", "a🂡Л🂡a🂡Л🂡a", 0)        -> [[1, 3, 5, 7], [0, 4, 8], [2, 6]]
    search("e", "abcdabcd", 1)               -> []
    search("abc", [["a",1],["b",2],["c",3],["a",5]], 0)
                                             -> [[0, 3], [1], [2]]
    search(3, [["a",1],["b",2],["c",3],["e",3]], 0, 1)
                                             -> [2, 3]

With num_returns_per_match == 1 the result is flat (one index per matched
needle element); with 0 (unlimited) or more than 1 each needle element gets
its own, possibly empty, list of indices.
"""

from __future__ import annotations

import math as _math
from collections.abc import Sequence
from typing import TYPE_CHECKING, Optional

from scadmath.runtime.context import EvalContext
from scadmath.runtime.registry import FunctionRegistry
from scadmath.runtime.values import UNDEFINED, Number, String, Value, Vector
from scadmath.utils.diagnostics import DiagnosticEmitter, ErrorCode

if TYPE_CHECKING:
    from scadmath.runtime.engine import Runtime


def _count_arg(ctx: EvalContext, index: int, default: int) -> int:
    """
    Optional non-negative integer argument, truncated toward zero.

    A present argument that is not a finite Number reads as 0, which for the
    result count means unlimited.
    """
    if ctx.num_args() <= index:
        return default
    x = ctx.get_arg_value(index).to_double()
    if x is None or not _math.isfinite(x):
        return 0
    return max(0, int(x))


def _indices(matches: Sequence[int]) -> Vector:
    return Vector.of(Number(float(j)) for j in matches)


def _not_found(diagnostics: DiagnosticEmitter, term: Value) -> None:
    diagnostics.warning(
        ErrorCode.W0204, f"search term not found: {term.to_repr()}", "search"
    ).emit()


def _column_cells(table: Value, index_col: int) -> list[Optional[str]]:
    """First glyph of each row's index column, None where there is none."""
    cells: list[Optional[str]] = []
    for row in table.to_vector():
        columns = row.to_vector()
        if index_col < len(columns):
            text = columns[index_col].to_display()
            cells.append(text[0] if text else None)
        else:
            cells.append(None)
    return cells


def search_glyphs(
    needle: str,
    cells: Sequence[Optional[str]],
    per_match: int,
    diagnostics: DiagnosticEmitter,
) -> list[Value]:
    """
    Locate each code point of needle among cells.

    Unmatched code points are reported; in flat mode (per_match == 1) they
    contribute nothing, otherwise an empty list.
    """
    result: list[Value] = []
    for glyph in needle:
        matches: list[int] = []
        for j, cell in enumerate(cells):
            if cell == glyph:
                matches.append(j)
                if per_match and len(matches) >= per_match:
                    break
        if not matches:
            _not_found(diagnostics, String(glyph))
        if per_match == 1:
            if matches:
                result.append(Number(float(matches[0])))
        else:
            result.append(_indices(matches))
    return result


def _row_matches(needle: Value, row: Value, index_col: int) -> bool:
    if index_col == 0 and needle == row:
        return True
    columns = row.to_vector()
    return index_col < len(columns) and needle == columns[index_col]


def _match_rows(needle: Value, table: Value, index_col: int, limit: int) -> list[int]:
    matches: list[int] = []
    for j, row in enumerate(table.to_vector()):
        if _row_matches(needle, row, index_col):
            matches.append(j)
            if limit and len(matches) >= limit:
                break
    return matches


def search(
    needle: Value,
    haystack: Value,
    per_match: int,
    index_col: int,
    diagnostics: DiagnosticEmitter,
) -> Value:
    """Dispatch on the needle variant."""
    if isinstance(needle, Number):
        return _indices(_match_rows(needle, haystack, index_col, per_match))

    if isinstance(needle, String):
        if isinstance(haystack, String):
            cells: list[Optional[str]] = list(haystack.text)
        else:
            cells = _column_cells(haystack, index_col)
        return Vector.of(search_glyphs(needle.text, cells, per_match, diagnostics))

    if isinstance(needle, Vector):
        result: list[Value] = []
        for element in needle:
            matches = _match_rows(element, haystack, index_col, per_match)
            if per_match == 1:
                if matches:
                    result.append(Number(float(matches[0])))
                else:
                    if isinstance(element, (Number, String)):
                        _not_found(diagnostics, element)
                    result.append(Vector())
            else:
                result.append(_indices(matches))
        return Vector.of(result)

    diagnostics.warning(
        ErrorCode.W0205, f"search: none performed on input {needle.to_repr()}", "search"
    ).emit()
    return UNDEFINED


def builtin_search(runtime: Runtime, ctx: EvalContext) -> Value:
    if ctx.num_args() < 2:
        return UNDEFINED
    return search(
        ctx.get_arg_value(0),
        ctx.get_arg_value(1),
        _count_arg(ctx, 2, 1),
        _count_arg(ctx, 3, 0),
        runtime.diagnostics,
    )


def register(registry: FunctionRegistry) -> None:
    registry.register("search", builtin_search)
