"""
Unit tests for builtin diagnostics.
"""

import logging
import threading

import pytest

from scadmath.utils.diagnostics import (
    DiagnosticEmitter,
    DiagnosticLevel,
    ErrorCode,
    levenshtein_distance,
    suggest_similar,
)


@pytest.fixture
def emitter():
    return DiagnosticEmitter()


class TestDiagnosticEmitter:
    """Tests for recording and forwarding diagnostics."""

    def test_builder_records_diagnostic(self, emitter):
        """Test the fluent builder."""
        diagnostic = (
            emitter.warning(ErrorCode.W0204, 'search term not found: "e"', "search")
            .note("no row matched this code point")
            .emit()
        )
        assert emitter.diagnostics == [diagnostic]
        assert diagnostic.level == DiagnosticLevel.WARNING
        assert diagnostic.notes == ["no row matched this code point"]
        assert emitter.warning_count() == 1
        assert not emitter.has_errors()

    def test_forwarded_to_logging(self, emitter, caplog):
        """Test that diagnostics reach the scadmath logger."""
        with caplog.at_level(logging.WARNING, logger="scadmath"):
            emitter.warning(ErrorCode.W0201, "Incorrect arguments to norm()", "norm").emit()
        assert caplog.records[-1].levelno == logging.WARNING
        assert caplog.records[-1].getMessage() == "[W0201] Incorrect arguments to norm()"

    def test_errors_counted(self, emitter):
        """Test error bookkeeping."""
        emitter.error(ErrorCode.E0103, "Ignoring unknown function 'f'", "f").emit()
        assert emitter.has_errors()
        assert emitter.error_count() == 1
        emitter.clear()
        assert emitter.diagnostics == []

    def test_nested_captures(self, emitter):
        """Test that nested captures each see what was emitted inside them."""
        with emitter.capture() as outer:
            emitter.warning(ErrorCode.W0201, "first").emit()
            with emitter.capture() as inner:
                emitter.warning(ErrorCode.W0201, "second").emit()
            emitter.warning(ErrorCode.W0201, "third").emit()
        assert [d.message for d in outer] == ["first", "second", "third"]
        assert [d.message for d in inner] == ["second"]
        assert len(emitter.diagnostics) == 3

    def test_render_plain(self, emitter):
        """Test rendering without colors."""
        emitter.warning(ErrorCode.W0204, 'search term not found: "e"', "search").note(
            "no row matched this code point"
        ).emit()
        assert emitter.render_all(use_color=False) == (
            'warning[W0204]: search term not found: "e"\n'
            "  --> search()\n"
            "   = note: no row matched this code point"
        )

    def test_history_is_bounded(self, caplog):
        """Test that only the most recent diagnostics are kept while all are logged."""
        emitter = DiagnosticEmitter(history=10)
        with caplog.at_level(logging.WARNING, logger="scadmath"):
            for n in range(1000):
                emitter.warning(ErrorCode.W0204, f"term {n}").emit()
        assert [d.message for d in emitter.diagnostics] == [f"term {n}" for n in range(990, 1000)]
        assert len(caplog.records) == 1000

    def test_captures_are_per_thread(self, emitter):
        """Test that a capture never sees diagnostics emitted on another thread."""
        entered = threading.Event()
        emitted = threading.Event()
        seen = []

        def worker():
            with emitter.capture() as captured:
                entered.set()
                emitted.wait(timeout=5)
            seen.extend(captured)

        thread = threading.Thread(target=worker)
        thread.start()
        entered.wait(timeout=5)
        with emitter.capture() as mine:
            emitter.warning(ErrorCode.W0201, "Incorrect arguments to norm()", "norm").emit()
        emitted.set()
        thread.join()

        assert seen == []
        assert [d.message for d in mine] == ["Incorrect arguments to norm()"]


class TestSimilarity:
    """Tests for did-you-mean suggestions."""

    def test_levenshtein(self):
        """Test basic edit distances."""
        assert levenshtein_distance("", "abc") == 3
        assert levenshtein_distance("sin", "sign") == 1
        assert levenshtein_distance("kitten", "sitting") == 3

    def test_suggestions_closest_first(self):
        """Test ranking and the suggestion cap."""
        names = ["sin", "sign", "sqrt", "min", "cos"]
        assert suggest_similar("sinn", names) == ["sign", "sin", "min"]
        assert suggest_similar("sqrtt", names, max_suggestions=1) == ["sqrt"]
        assert suggest_similar("zzzzzz", names) == []
