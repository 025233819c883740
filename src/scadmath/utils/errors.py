"""
Error types for the scadmath runtime.

Builtin calls never raise; these exceptions only signal host programming
errors such as registering after start-up or malformed configuration.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True, slots=True)
class CallSite:
    """
    Identifies the builtin call an error refers to.

    Attributes:
        function: Name of the builtin being called
        argument: Optional 0-indexed argument position
    """

    function: str
    argument: Optional[int] = None

    def __str__(self) -> str:
        if self.argument is not None:
            return f"{self.function}() argument {self.argument}"
        return f"{self.function}()"


class ScadMathError(Exception):
    """Base exception for all scadmath host-facing errors."""

    def __init__(
        self,
        message: str,
        site: Optional[CallSite] = None,
        hint: Optional[str] = None,
    ) -> None:
        self.message = message
        self.site = site
        self.hint = hint
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        parts = []

        if self.site:
            parts.append(f"[{self.site}]")

        parts.append(self.message)

        if self.hint:
            parts.append(f"\n  hint: {self.hint}")

        return " ".join(parts) if not self.hint else " ".join(parts[:-1]) + parts[-1]


class RegistryError(ScadMathError):
    """Raised when the builtin registry is used outside its registration window."""

    pass


class ConfigError(ScadMathError):
    """
    Raised when runtime configuration cannot be parsed.

    This error is raised when:
    - A feature name is not known
    - A version string is not of the form YYYY.MM[.DD]
    - A seed is not an integer
    """

    def __init__(
        self,
        message: str,
        setting: Optional[str] = None,
        value: Optional[str] = None,
    ) -> None:
        """
        Initialize the error.

        Args:
            message: Error message
            setting: Name of the offending setting or environment variable
            value: The raw value that failed to parse
        """
        self.setting = setting
        self.value = value
        super().__init__(message)

    def _format_message(self) -> str:
        if self.setting is None:
            return self.message
        if self.value is None:
            return f"{self.setting}: {self.message}"
        return f"{self.setting}={self.value!r}: {self.message}"
