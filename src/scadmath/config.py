"""
scadmath Runtime Configuration.

Build metadata, feature flags and numeric tuning for a Runtime. Values can
be given explicitly or read from the environment:

    SCADMATH_FEATURES   comma-separated feature names (e.g. "concat")
    SCADMATH_VERSION    build version as YYYY.MM or YYYY.MM.DD
    SCADMATH_SEED       integer seed for the non-deterministic random stream
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from scadmath.utils.errors import ConfigError

# Beyond 26+26 bits of mantissa, reducing degrees modulo 360 loses every
# significant bit and trig results become meaningless.
TRIG_HUGE_VALUE = float(1 << 26) * 360.0 * float(1 << 26)


class Feature(Enum):
    """Experimental features that gate optional builtins."""

    EXPERIMENTAL_CONCAT = "concat"

    @classmethod
    def parse(cls, name: str) -> Feature:
        for feature in cls:
            if feature.value == name:
                return feature
        known = ", ".join(f.value for f in cls)
        raise ConfigError(f"unknown feature (known: {known})", "SCADMATH_FEATURES", name)


@dataclass(frozen=True, slots=True)
class BuildVersion:
    """
    Year/month/optional-day version stamp exposed by version().

    Attributes:
        year: Four-digit release year
        month: Release month, 1-12
        day: Optional day of month for development snapshots
    """

    year: int
    month: int
    day: Optional[int] = None

    def components(self) -> tuple[int, ...]:
        if self.day is None:
            return (self.year, self.month)
        return (self.year, self.month, self.day)

    def __str__(self) -> str:
        return ".".join(f"{part:02d}" for part in self.components())

    @classmethod
    def parse(cls, text: str) -> BuildVersion:
        parts = text.strip().split(".")
        if len(parts) not in (2, 3) or not all(p.isascii() and p.isdigit() for p in parts):
            raise ConfigError("expected YYYY.MM or YYYY.MM.DD", "SCADMATH_VERSION", text)
        numbers = [int(p) for p in parts]
        if not 1 <= numbers[1] <= 12:
            raise ConfigError("month must be between 1 and 12", "SCADMATH_VERSION", text)
        if len(numbers) == 3 and not 1 <= numbers[2] <= 31:
            raise ConfigError("day must be between 1 and 31", "SCADMATH_VERSION", text)
        return cls(*numbers)


DEFAULT_VERSION = BuildVersion(2014, 3)


@dataclass(frozen=True)
class RuntimeConfig:
    """
    Settings fixed for the lifetime of a Runtime.

    Attributes:
        version: Build version reported by version()/version_num()
        features: Enabled experimental features
        trig_huge_value: Magnitude at or beyond which sin/cos return NaN
        entropy_seed: Seed of the non-deterministic random stream; None seeds
            from wall-clock time mixed with the process id
    """

    version: BuildVersion = DEFAULT_VERSION
    features: frozenset[Feature] = field(default_factory=frozenset)
    trig_huge_value: float = TRIG_HUGE_VALUE
    entropy_seed: Optional[int] = None

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> RuntimeConfig:
        """
        Read configuration from environment variables.

        Raises:
            ConfigError: If any variable holds a malformed value
        """
        env = os.environ if environ is None else environ

        features = frozenset(
            Feature.parse(name.strip())
            for name in env.get("SCADMATH_FEATURES", "").split(",")
            if name.strip()
        )

        version = DEFAULT_VERSION
        if env.get("SCADMATH_VERSION"):
            version = BuildVersion.parse(env["SCADMATH_VERSION"])

        seed = None
        raw_seed = env.get("SCADMATH_SEED")
        if raw_seed:
            try:
                seed = int(raw_seed)
            except ValueError:
                raise ConfigError("seed must be an integer", "SCADMATH_SEED", raw_seed) from None

        return cls(version=version, features=features, entropy_seed=seed)


__all__ = ["Feature", "BuildVersion", "RuntimeConfig", "TRIG_HUGE_VALUE", "DEFAULT_VERSION"]
