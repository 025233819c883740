"""
scadmath Builtin Function Registry.

Maps builtin names to their implementations. A registry is populated once
during start-up and then sealed; after that it is only ever read, which makes
concurrent lookups safe without locking.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from scadmath.config import Feature
from scadmath.runtime.context import EvalContext
from scadmath.runtime.values import Value
from scadmath.utils.errors import CallSite, RegistryError

if TYPE_CHECKING:
    from scadmath.runtime.engine import Runtime

logger = logging.getLogger("scadmath.registry")

Implementation = Callable[["Runtime", EvalContext], Value]


@dataclass(frozen=True)
class BuiltinFunction:
    """
    A named builtin and the feature flag gating it, if any.

    Attributes:
        name: Name scripts call the builtin by
        implementation: Pure function of (runtime, call context) to Value
        feature: Experimental feature that must be enabled to resolve it
    """

    name: str
    implementation: Implementation
    feature: Optional[Feature] = None

    def evaluate(self, runtime: Runtime, ctx: EvalContext) -> Value:
        return self.implementation(runtime, ctx)

    def is_enabled(self, features: frozenset[Feature]) -> bool:
        return self.feature is None or self.feature in features

    def dump(self, indent: str = "", name: Optional[str] = None) -> str:
        return f"{indent}builtin function {name or self.name}();\n"


class FunctionRegistry:
    """
    Registry of builtin functions.

    Registering an existing name replaces the earlier entry, so an
    experimental variant can override a stable one.
    """

    def __init__(self) -> None:
        self._functions: dict[str, BuiltinFunction] = {}
        self._sealed = False

    def register(
        self,
        name: str,
        implementation: Implementation,
        feature: Optional[Feature] = None,
    ) -> BuiltinFunction:
        """
        Register a builtin under the given name.

        Raises:
            RegistryError: If the registry has already been sealed
        """
        if self._sealed:
            raise RegistryError(
                "cannot register a builtin after start-up",
                CallSite(name),
                hint="register every builtin before sealing the registry",
            )
        if name in self._functions:
            logger.debug("Replacing builtin %s", name)
        function = BuiltinFunction(name, implementation, feature)
        self._functions[name] = function
        logger.debug("Registered builtin %s", name)
        return function

    def seal(self) -> None:
        """End the registration window."""
        if not self._sealed:
            self._sealed = True
            logger.info("Builtin registry sealed with %d functions", len(self._functions))

    @property
    def sealed(self) -> bool:
        return self._sealed

    def resolve(
        self, name: str, features: Optional[frozenset[Feature]] = None
    ) -> Optional[BuiltinFunction]:
        """
        Look up a builtin by name.

        When features are given, a builtin whose feature is not among them
        resolves to None just like an unknown name.
        """
        function = self._functions.get(name)
        if function is None:
            return None
        if features is not None and not function.is_enabled(features):
            return None
        return function

    def is_gated(self, name: str, features: frozenset[Feature]) -> bool:
        """True when the name exists but its feature is disabled."""
        function = self._functions.get(name)
        return function is not None and not function.is_enabled(features)

    def names(self) -> list[str]:
        return sorted(self._functions)

    def __contains__(self, name: object) -> bool:
        return name in self._functions

    def __len__(self) -> int:
        return len(self._functions)


__all__ = ["BuiltinFunction", "FunctionRegistry", "Implementation"]
