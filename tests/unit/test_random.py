"""
Unit tests for rands and the random streams.
"""

import threading

from scadmath.runtime.streams import RandomStream, seed_from_double
from scadmath.runtime.values import UNDEFINED


class TestRands:
    """Tests for the rands builtin."""

    def test_count_and_range(self, evaluate):
        """Test that draws land in [min, max)."""
        values = evaluate("rands", 2, 5, 50)
        assert len(values) == 50
        assert all(2.0 <= v < 5.0 for v in values)

    def test_inverted_range_is_swapped(self, evaluate):
        """Test that min and max are swapped when inverted."""
        values = evaluate("rands", 5, 2, 20, 7)
        assert all(2.0 <= v < 5.0 for v in values)
        assert values == evaluate("rands", 2, 5, 20, 7)

    def test_seeded_calls_repeat(self, evaluate):
        """Test that equal seeds produce equal sequences."""
        assert evaluate("rands", 0, 1, 5, 42) == evaluate("rands", 0, 1, 5, 42)
        assert evaluate("rands", 0, 1, 5, 42) != evaluate("rands", 0, 1, 5, 43)

    def test_seeded_calls_repeat_across_runtimes(self, runtime_factory):
        """Test that seeded draws do not depend on the runtime instance."""
        first = runtime_factory(entropy_seed=1).call("rands", 0, 10, 4, 99).unwrap()
        second = runtime_factory(entropy_seed=2).call("rands", 0, 10, 4, 99).unwrap()
        assert first == second

    def test_degenerate_range(self, evaluate):
        """Test that min == max returns copies of that value."""
        assert evaluate("rands", 3, 3, 5, 42) == [3.0] * 5
        assert evaluate("rands", -1, -1, 2) == [-1.0, -1.0]

    def test_count_is_clamped(self, evaluate):
        """Test negative and fractional counts."""
        assert evaluate("rands", 0, 1, -4) == []
        assert len(evaluate("rands", 0, 1, 2.9)) == 2

    def test_rejected_calls(self, call):
        """Test arity and type mismatches."""
        for args in [(0, 1), (0, 1, 2, 3, 4), ("0", 1, 2), (0, 1, [2]), (0, 1, 2, "s")]:
            result = call("rands", *args)
            assert result.value is UNDEFINED
            assert result.diagnostics == []


class TestRandomStream:
    """Tests for the lock-protected generator stream."""

    def test_reseed_restarts_sequence(self):
        """Test that reseeding replays the same draws."""
        stream = RandomStream("test")
        first = stream.uniform(0.0, 1.0, 3, seed=5)
        stream.uniform(0.0, 1.0, 10)
        assert stream.uniform(0.0, 1.0, 3, seed=5) == first

    def test_concurrent_draws_are_serialized(self):
        """Test that concurrent draws neither lose nor duplicate samples."""
        stream = RandomStream("test", seed=11)
        collected = []
        lock = threading.Lock()

        def worker():
            values = stream.uniform(0.0, 1.0, 200)
            with lock:
                collected.extend(values)

        threads = [threading.Thread(target=worker) for _ in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        reference = RandomStream("reference", seed=11).uniform(0.0, 1.0, 800)
        assert sorted(collected) == sorted(reference)

    def test_seed_from_double(self):
        """Test truncation of script numbers to 32-bit seeds."""
        assert seed_from_double(42.9) == 42
        assert seed_from_double(-1.0) == (1 << 32) - 1
        assert seed_from_double(float("nan")) == 0
