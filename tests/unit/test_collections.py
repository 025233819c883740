"""
Unit tests for the vector and aggregate builtins.
"""

import math

import pytest

from scadmath.runtime.values import UNDEFINED, Number, String
from scadmath.utils.diagnostics import DiagnosticLevel, ErrorCode


class TestMinMax:
    """Tests for min and max."""

    def test_positional_numbers(self, evaluate):
        """Test scanning positional Number arguments."""
        assert evaluate("min", 3, 1, 2) == 1.0
        assert evaluate("max", 3, 1, 2) == 3.0
        assert evaluate("max", 7) == 7.0

    def test_single_vector_is_reduced(self, evaluate):
        """Test reducing the elements of a single vector argument."""
        assert evaluate("min", [4, -2, 9]) == -2.0
        assert evaluate("max", [4, -2, 9]) == 9.0

    def test_vector_reduction_returns_element_value(self, call):
        """Test that vector reduction keeps the element variant."""
        assert call("max", ["a", "c", "b"]).value == String("c")

    def test_scan_stops_at_first_non_number(self, evaluate):
        """Test that the scan ends at the first non-Number argument."""
        assert evaluate("max", 1, 2, "x", 5) == 2.0
        assert evaluate("min", 3, 2, [0], -10) == 2.0

    def test_rejected_calls(self, call):
        """Test silent undef for unusable first arguments."""
        assert call("min").value is UNDEFINED
        assert call("min", []).value is UNDEFINED
        assert call("max", "a", 1).value is UNDEFINED
        assert call("max", [1, 2], 3).value is UNDEFINED
        assert call("max", []).diagnostics == []

    def test_nan_does_not_replace_seed(self, evaluate):
        """Test that NaN never compares better than the current best."""
        assert evaluate("max", 1, math.nan, 0.5) == 1.0


class TestNorm:
    """Tests for the Euclidean norm."""

    def test_norm(self, evaluate):
        """Test norm of numeric vectors."""
        assert evaluate("norm", [3, 4]) == 5.0
        assert evaluate("norm", [1, 2, 2]) == 3.0
        assert evaluate("norm", []) == 0.0

    def test_non_number_element_emits_diagnostic(self, call):
        """Test that any non-Number element aborts with a warning."""
        result = call("norm", [1, "2"])
        assert result.value is UNDEFINED
        assert [d.code for d in result.diagnostics] == [ErrorCode.W0201]
        assert result.diagnostics[0].level is DiagnosticLevel.WARNING

    def test_non_vector_is_silent(self, call):
        """Test that a non-vector argument is silently rejected."""
        result = call("norm", 5)
        assert result.value is UNDEFINED
        assert result.diagnostics == []


class TestCross:
    """Tests for the 3D cross product."""

    def test_unit_vectors(self, evaluate):
        """Test the cross product of basis vectors."""
        assert evaluate("cross", [1, 0, 0], [0, 1, 0]) == [0.0, 0.0, 1.0]
        assert evaluate("cross", [0, 1, 0], [1, 0, 0]) == [0.0, 0.0, -1.0]

    def test_general_vectors(self, evaluate):
        """Test a general cross product."""
        assert evaluate("cross", [1, 2, 3], [4, 5, 6]) == [-3.0, 6.0, -3.0]

    @pytest.mark.parametrize(
        "args, message",
        [
            (([1, 0, 0],), "Invalid number of parameters for cross()"),
            (([1, 0, 0], 5), "Invalid type of parameters for cross()"),
            (([1, 0], [0, 1, 0]), "Invalid vector size of parameter for cross()"),
            (([1, "0", 0], [0, 1, 0]), "Invalid value in parameter vector for cross()"),
            (([1, math.nan, 0], [0, 1, 0]), "Invalid value (NaN) in parameter vector for cross()"),
            (([1, 0, 0], [0, math.inf, 0]), "Invalid value (INF) in parameter vector for cross()"),
            (([-math.inf, 0, 0], [0, 1, math.nan]), "Invalid value (INF) in parameter vector for cross()"),
            (([1, 0, "z"], [math.nan, 1, 0]), "Invalid value (NaN) in parameter vector for cross()"),
        ],
    )
    def test_invalid_arguments(self, call, args, message):
        """Test that every rejection carries a diagnostic."""
        result = call("cross", *args)
        assert result.value is UNDEFINED
        assert [d.message for d in result.diagnostics] == [message]


class TestConcat:
    """Tests for concat."""

    def test_flattens_one_level(self, evaluate):
        """Test that vector arguments contribute their elements."""
        assert evaluate("concat", [1, 2], 3, [4]) == [1.0, 2.0, 3.0, 4.0]

    def test_keeps_nested_vectors(self, evaluate):
        """Test that only one level is flattened."""
        assert evaluate("concat", [[1, 2]], ["a"]) == [[1.0, 2.0], "a"]

    def test_no_arguments(self, evaluate):
        """Test concat of nothing."""
        assert evaluate("concat") == []

    def test_requires_feature(self, runtime_factory):
        """Test that concat is unavailable without its feature flag."""
        runtime = runtime_factory(features=())
        result = runtime.call("concat", [1], [2])
        assert result.value is UNDEFINED
        assert [d.code for d in result.diagnostics] == [ErrorCode.E0109]


class TestLenAndStr:
    """Tests for len and str."""

    def test_len_counts_glyphs(self, evaluate):
        """Test that string length counts code points."""
        assert evaluate("len", "🂡aЛ") == 3.0
        assert evaluate("len", [1, [2, 3]]) == 2.0

    def test_len_rejects_other_variants(self, call):
        """Test len of a Number."""
        assert call("len", 3).value is UNDEFINED

    def test_str_concatenates_display_forms(self, call):
        """Test str over mixed arguments."""
        assert call("str", "a", 1, [2, "b"], None).value == String('a1[2, "b"]undef')
        assert call("str").value == String("")

    def test_str_number_formatting(self, call):
        """Test that numbers print in %g form."""
        assert call("str", 2.5, 1e6).value == String("2.51e+06")
        assert call("str", Number(-1.0)).value == String("-1")
