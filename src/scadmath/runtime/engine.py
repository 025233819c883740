"""
scadmath Runtime.

The Runtime is the ambient context every builtin receives. It bundles the
sealed function registry, the two random streams, the diagnostic sink, the
host's module stack and the configuration, so no builtin touches globals.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Optional

from scadmath.config import RuntimeConfig
from scadmath.runtime.context import EvalContext, ListModuleStack, ModuleStack
from scadmath.runtime.registry import BuiltinFunction, FunctionRegistry
from scadmath.runtime.stdlib import default_registry
from scadmath.runtime.streams import RandomStream, entropy_seed
from scadmath.runtime.values import UNDEFINED, Value
from scadmath.utils.diagnostics import (
    Diagnostic,
    DiagnosticEmitter,
    create_feature_disabled_diagnostic,
    create_undefined_function_diagnostic,
)

logger = logging.getLogger("scadmath")


@dataclass
class CallResult:
    """
    Outcome of one builtin call.

    Attributes:
        value: The returned Value, UNDEFINED on failure
        diagnostics: Diagnostics emitted while evaluating the call
    """

    value: Value
    diagnostics: list[Diagnostic] = field(default_factory=list)

    def unwrap(self) -> Any:
        return self.value.unwrap()


class Runtime:
    """
    Evaluation state shared by all builtin calls of one host process.

    Usage:
        runtime = Runtime()
        runtime.call("max", 1, 2, 3).unwrap()   # 3.0
    """

    def __init__(
        self,
        config: Optional[RuntimeConfig] = None,
        registry: Optional[FunctionRegistry] = None,
        module_stack: Optional[ModuleStack] = None,
        diagnostics: Optional[DiagnosticEmitter] = None,
    ) -> None:
        self.config = config or RuntimeConfig()
        self.registry = registry if registry is not None else default_registry()
        self.module_stack: ModuleStack = module_stack if module_stack is not None else ListModuleStack()
        self.diagnostics = diagnostics or DiagnosticEmitter()

        seed = self.config.entropy_seed
        self.deterministic = RandomStream("deterministic")
        self.entropic = RandomStream("non-deterministic", entropy_seed() if seed is None else seed)

        if not self.registry.sealed:
            logger.warning("Runtime created with an unsealed builtin registry")

    def resolve(self, name: str) -> Optional[BuiltinFunction]:
        """Look up an enabled builtin; None when unknown or feature-gated."""
        return self.registry.resolve(name, self.config.features)

    def evaluate(self, name: str, ctx: EvalContext) -> Value:
        """
        Call a builtin the way the host evaluator does.

        Unknown or disabled names evaluate to UNDEFINED with a diagnostic;
        nothing is raised.
        """
        function = self.resolve(name)
        if function is None:
            if self.registry.is_gated(name, self.config.features):
                feature = self.registry.resolve(name).feature
                create_feature_disabled_diagnostic(self.diagnostics, name, feature.value)
            else:
                create_undefined_function_diagnostic(self.diagnostics, name, self.registry.names())
            return UNDEFINED
        return function.evaluate(self, ctx)

    def call(self, name: str, *args: Any) -> CallResult:
        """Evaluate a builtin on plain Python or Value arguments."""
        ctx = EvalContext.of(*args)
        with self.diagnostics.capture() as captured:
            value = self.evaluate(name, ctx)
        return CallResult(value, list(captured))


__all__ = ["Runtime", "CallResult"]
