"""
Unit tests for the lookup (interpolation) builtin.
"""

import pytest

from scadmath.runtime.stdlib.lookup import interpolate
from scadmath.runtime.values import UNDEFINED
from scadmath.utils.diagnostics import ErrorCode

TABLE = [[-1, 10], [0, 0], [2, 20], [5, 50]]


class TestInterpolate:
    """Tests for piecewise-linear interpolation."""

    def test_exact_at_table_points(self, evaluate):
        """Test that table positions return their own value."""
        for p, v in TABLE:
            assert evaluate("lookup", p, TABLE) == float(v)

    def test_linear_between_points(self, evaluate):
        """Test interpolation inside a segment."""
        assert evaluate("lookup", 1, TABLE) == 10.0
        assert evaluate("lookup", -0.5, TABLE) == 5.0
        assert evaluate("lookup", 3.5, TABLE) == pytest.approx(35.0)

    def test_clamps_outside_range(self, evaluate):
        """Test that queries outside the table clamp to the end values."""
        assert evaluate("lookup", -100, TABLE) == 10.0
        assert evaluate("lookup", 100, TABLE) == 50.0

    def test_unsorted_table(self, evaluate):
        """Test that row order does not matter."""
        shuffled = [[5, 50], [0, 0], [-1, 10], [2, 20]]
        for p in (-3, -1, -0.25, 0, 1, 2, 4, 9):
            assert evaluate("lookup", p, shuffled) == evaluate("lookup", p, TABLE)

    def test_single_row(self):
        """Test a single-row table answers every query."""
        assert interpolate(-5.0, [(1.0, 7.0)]) == 7.0
        assert interpolate(5.0, [(1.0, 7.0)]) == 7.0


class TestInvalidLookup:
    """Tests for malformed lookup calls."""

    def test_silent_rejections(self, call):
        """Test arity and position type mismatches."""
        for args in [(), (1,), ("1", TABLE)]:
            result = call("lookup", *args)
            assert result.value is UNDEFINED
            assert result.diagnostics == []

    @pytest.mark.parametrize(
        "table",
        [[], 5, [[1, 2], [3]], [[1, 2], [3, "4"]], [[1, 2, 3]]],
    )
    def test_malformed_tables(self, call, table):
        """Test that structural problems are reported."""
        result = call("lookup", 1, table)
        assert result.value is UNDEFINED
        assert [d.code for d in result.diagnostics] == [ErrorCode.W0201]
