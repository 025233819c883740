"""
Builtin Diagnostics for scadmath.

Builtins never raise to the host evaluator. Instead, argument problems worth
surfacing to the script author are reported as diagnostics: structured
warning records that are collected by a DiagnosticEmitter and forwarded to
the standard logging machinery.

Example output:
    warning[W0204]: search term not found: "e"
      --> search()
       = note: no row matched this code point
"""

from __future__ import annotations

import logging
import threading
from collections import deque
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

logger = logging.getLogger("scadmath")

DEFAULT_HISTORY = 256


# =============================================================================
# Error Codes Catalog
# =============================================================================


class ErrorCode:
    """
    Centralized catalog of diagnostic codes emitted by builtins.

    Codes are organized by category:
    - E01xx: Resolution errors (raised by the runtime, not the builtin)
    - W02xx: Builtin argument warnings
    """

    # Resolution errors: E01xx
    E0103 = "E0103"  # undefined function
    E0109 = "E0109"  # experimental builtin not enabled

    # Builtin warnings: W02xx
    W0201 = "W0201"  # invalid argument value
    W0202 = "W0202"  # invalid argument count
    W0203 = "W0203"  # invalid argument type
    W0204 = "W0204"  # search term not found
    W0205 = "W0205"  # search not performed
    W0206 = "W0206"  # parent module index out of range


ERROR_DESCRIPTIONS: dict[str, str] = {
    ErrorCode.E0103: "undefined function",
    ErrorCode.E0109: "experimental builtin not enabled",
    ErrorCode.W0201: "invalid argument value",
    ErrorCode.W0202: "invalid argument count",
    ErrorCode.W0203: "invalid argument type",
    ErrorCode.W0204: "search term not found",
    ErrorCode.W0205: "search not performed",
    ErrorCode.W0206: "parent module index out of range",
}


# =============================================================================
# Diagnostic Types
# =============================================================================


class DiagnosticLevel(Enum):
    """Severity level of a diagnostic message."""

    ERROR = "error"
    WARNING = "warning"
    NOTE = "note"
    HELP = "help"

    def color_code(self) -> str:
        """Get ANSI color code for this level."""
        colors = {
            DiagnosticLevel.ERROR: "\033[91m",  # Red
            DiagnosticLevel.WARNING: "\033[93m",  # Yellow
            DiagnosticLevel.NOTE: "\033[96m",  # Cyan
            DiagnosticLevel.HELP: "\033[92m",  # Green
        }
        return colors.get(self, "")

    def log_level(self) -> int:
        """Get the logging level used when forwarding this diagnostic."""
        levels = {
            DiagnosticLevel.ERROR: logging.ERROR,
            DiagnosticLevel.WARNING: logging.WARNING,
            DiagnosticLevel.NOTE: logging.INFO,
            DiagnosticLevel.HELP: logging.INFO,
        }
        return levels[self]


@dataclass
class Diagnostic:
    """
    A diagnostic message produced while evaluating a builtin.

    Attributes:
        code: Diagnostic code (e.g., "W0204")
        level: Severity level (ERROR, WARNING, NOTE, HELP)
        message: The main diagnostic message
        function: Name of the builtin that produced it, if any
        notes: Additional notes to display
        helps: Help messages with suggestions
    """

    code: str
    level: DiagnosticLevel
    message: str
    function: Optional[str] = None
    notes: list[str] = field(default_factory=list)
    helps: list[str] = field(default_factory=list)

    def render(self, use_color: bool = True) -> str:
        """
        Render this diagnostic as a formatted string.

        Args:
            use_color: Whether to use ANSI color codes

        Returns:
            A formatted multi-line string representation
        """
        lines: list[str] = []

        reset = "\033[0m" if use_color else ""
        bold = "\033[1m" if use_color else ""
        level_color = self.level.color_code() if use_color else ""
        blue = "\033[94m" if use_color else ""
        green = "\033[92m" if use_color else ""

        level_str = self.level.value
        if self.code in ERROR_DESCRIPTIONS:
            header = (
                f"{level_color}{bold}{level_str}[{self.code}]{reset}: {bold}{self.message}{reset}"
            )
        else:
            header = f"{level_color}{bold}{level_str}{reset}: {bold}{self.message}{reset}"
        lines.append(header)

        if self.function:
            lines.append(f"  {blue}-->{reset} {self.function}()")

        for note in self.notes:
            lines.append(f"   {blue}={reset} {bold}note:{reset} {note}")

        for help_msg in self.helps:
            lines.append(f"   {blue}={reset} {green}help:{reset} {help_msg}")

        return "\n".join(lines)

    def to_simple_message(self) -> str:
        """Get a simple one-line message for log output."""
        return f"[{self.code}] {self.message}"


# =============================================================================
# Diagnostic Builder (Fluent API)
# =============================================================================


class DiagnosticBuilder:
    """
    Fluent builder for constructing Diagnostic objects.

        emitter.warning("W0204", 'search term not found: "e"', "search")
            .note("no row matched this code point")
            .emit()
    """

    def __init__(
        self,
        emitter: "DiagnosticEmitter",
        code: str,
        level: DiagnosticLevel,
        message: str,
        function: Optional[str] = None,
    ) -> None:
        self._emitter = emitter
        self._code = code
        self._level = level
        self._message = message
        self._function = function
        self._notes: list[str] = []
        self._helps: list[str] = []

    def note(self, message: str) -> "DiagnosticBuilder":
        """Add a note."""
        self._notes.append(message)
        return self

    def help(self, message: str) -> "DiagnosticBuilder":
        """Add a help message."""
        self._helps.append(message)
        return self

    def build(self) -> Diagnostic:
        """Build the diagnostic without emitting."""
        return Diagnostic(
            code=self._code,
            level=self._level,
            message=self._message,
            function=self._function,
            notes=list(self._notes),
            helps=list(self._helps),
        )

    def emit(self) -> Diagnostic:
        """Build and emit the diagnostic to the emitter."""
        diagnostic = self.build()
        self._emitter.add_diagnostic(diagnostic)
        return diagnostic


# =============================================================================
# Diagnostic Emitter
# =============================================================================


class DiagnosticEmitter:
    """
    Process-wide sink for builtin diagnostics.

    Every diagnostic is forwarded to the "scadmath" logger. The emitter only
    keeps the most recent `history` diagnostics; callers that need every
    diagnostic of a call collect them with capture(). Emission is
    fire-and-forget: it never affects the builtin's control flow.

    Captures are per thread, so concurrent calls sharing one emitter never
    see each other's diagnostics.

    Usage:
        emitter = DiagnosticEmitter()
        with emitter.capture() as captured:
            emitter.warning("W0201", "Incorrect arguments to norm()", "norm").emit()
        for diagnostic in captured:
            print(diagnostic.render())
    """

    def __init__(
        self, log: Optional[logging.Logger] = None, history: int = DEFAULT_HISTORY
    ) -> None:
        """
        Initialize the diagnostic emitter.

        Args:
            log: Logger diagnostics are forwarded to (default: "scadmath")
            history: Number of recent diagnostics kept for inspection
        """
        self.log = log or logger
        self._recent: deque[Diagnostic] = deque(maxlen=history)
        self._lock = threading.Lock()
        self._local = threading.local()

    def _captures(self) -> list[list[Diagnostic]]:
        captures = getattr(self._local, "captures", None)
        if captures is None:
            captures = self._local.captures = []
        return captures

    @property
    def diagnostics(self) -> list[Diagnostic]:
        """Snapshot of the most recent diagnostics, oldest first."""
        with self._lock:
            return list(self._recent)

    def add_diagnostic(self, diagnostic: Diagnostic) -> None:
        """Record a diagnostic and forward it to the logger."""
        with self._lock:
            self._recent.append(diagnostic)
        for captured in self._captures():
            captured.append(diagnostic)
        self.log.log(diagnostic.level.log_level(), diagnostic.to_simple_message())

    def error(
        self, code: str, message: str, function: Optional[str] = None
    ) -> DiagnosticBuilder:
        """Create an error diagnostic builder."""
        return DiagnosticBuilder(self, code, DiagnosticLevel.ERROR, message, function)

    def warning(
        self, code: str, message: str, function: Optional[str] = None
    ) -> DiagnosticBuilder:
        """Create a warning diagnostic builder."""
        return DiagnosticBuilder(self, code, DiagnosticLevel.WARNING, message, function)

    @contextmanager
    def capture(self) -> Iterator[list[Diagnostic]]:
        """Collect the diagnostics emitted by this thread inside the with-block."""
        captured: list[Diagnostic] = []
        captures = self._captures()
        captures.append(captured)
        try:
            yield captured
        finally:
            captures[:] = [c for c in captures if c is not captured]

    def has_errors(self) -> bool:
        return any(d.level == DiagnosticLevel.ERROR for d in self.diagnostics)

    def error_count(self) -> int:
        return sum(1 for d in self.diagnostics if d.level == DiagnosticLevel.ERROR)

    def warning_count(self) -> int:
        return sum(1 for d in self.diagnostics if d.level == DiagnosticLevel.WARNING)

    def render_all(self, use_color: bool = True) -> str:
        """Render the recent diagnostics as a single string."""
        return "\n\n".join(d.render(use_color) for d in self.diagnostics)

    def clear(self) -> None:
        """Forget the recent diagnostics."""
        with self._lock:
            self._recent.clear()


# =============================================================================
# String Similarity (Levenshtein Distance)
# =============================================================================


def levenshtein_distance(s1: str, s2: str) -> int:
    """
    Calculate the Levenshtein (edit) distance between two strings.

    Args:
        s1: First string
        s2: Second string

    Returns:
        The edit distance as an integer
    """
    if len(s1) < len(s2):
        return levenshtein_distance(s2, s1)

    if len(s2) == 0:
        return len(s1)

    # Two rows are enough
    previous_row = list(range(len(s2) + 1))

    for i, c1 in enumerate(s1):
        current_row = [i + 1]
        for j, c2 in enumerate(s2):
            insertions = previous_row[j + 1] + 1
            deletions = current_row[j] + 1
            substitutions = previous_row[j] + (c1 != c2)
            current_row.append(min(insertions, deletions, substitutions))
        previous_row = current_row

    return previous_row[-1]


def suggest_similar(
    name: str,
    candidates: list[str],
    max_distance: int = 2,
    max_suggestions: int = 3,
) -> list[str]:
    """
    Find similar names from a list of candidates, closest first.

    Used for "did you mean?" suggestions on unknown builtin names.
    """
    if not candidates:
        return []

    scored = []
    for candidate in candidates:
        if abs(len(candidate) - len(name)) > max_distance:
            continue

        distance = levenshtein_distance(name.lower(), candidate.lower())
        if distance <= max_distance:
            scored.append((candidate, distance))

    scored.sort(key=lambda x: (x[1], x[0]))

    return [candidate for candidate, _ in scored[:max_suggestions]]


# =============================================================================
# Common Diagnostic Helpers
# =============================================================================


def create_undefined_function_diagnostic(
    emitter: DiagnosticEmitter,
    name: str,
    candidates: list[str],
) -> Diagnostic:
    """Create a diagnostic for a call to a name missing from the registry."""
    builder = emitter.error(
        ErrorCode.E0103,
        f"Ignoring unknown function '{name}'",
        name,
    )

    similar = suggest_similar(name, candidates)
    if similar:
        if len(similar) == 1:
            builder.help(f"did you mean '{similar[0]}'?")
        else:
            suggestions_str = ", ".join(f"'{s}'" for s in similar)
            builder.help(f"did you mean one of: {suggestions_str}?")

    return builder.emit()


def create_feature_disabled_diagnostic(
    emitter: DiagnosticEmitter,
    name: str,
    feature: str,
) -> Diagnostic:
    """Create a diagnostic for a call to a builtin gated behind a disabled feature."""
    return (
        emitter.error(
            ErrorCode.E0109,
            f"Experimental builtin function '{name}' is not enabled",
            name,
        )
        .help(f"enable the '{feature}' feature to use it")
        .emit()
    )


__all__ = [
    "ErrorCode",
    "ERROR_DESCRIPTIONS",
    "DEFAULT_HISTORY",
    "DiagnosticLevel",
    "Diagnostic",
    "DiagnosticBuilder",
    "DiagnosticEmitter",
    "levenshtein_distance",
    "suggest_similar",
    "create_undefined_function_diagnostic",
    "create_feature_disabled_diagnostic",
]
