"""
scadmath Standard Library.

Registers every builtin function: math, collections, string search,
lookup, random and version introspection.
"""

from functools import lru_cache

from scadmath.runtime.registry import FunctionRegistry
from scadmath.runtime.stdlib import collections, lookup, math, random, string, version


def register_all(registry: FunctionRegistry) -> FunctionRegistry:
    """Populate a registry with every builtin."""
    math.register(registry)
    random.register(registry)
    collections.register(registry)
    lookup.register(registry)
    string.register(registry)
    version.register(registry)
    return registry


@lru_cache(maxsize=None)
def default_registry() -> FunctionRegistry:
    """The process-wide registry, populated and sealed on first use."""
    registry = register_all(FunctionRegistry())
    registry.seal()
    return registry


BUILTIN_NAMES = (
    # Math
    "abs", "sign", "round", "ceil", "floor",
    "pow", "sqrt", "exp", "log", "ln",
    "sin", "cos", "tan", "asin", "acos", "atan", "atan2",
    # Random
    "rands",
    # Collections
    "min", "max", "norm", "cross", "concat", "len", "str",
    # Lookup and search
    "lookup", "search",
    # Version
    "version", "version_num", "parent_module",
)

__all__ = ["BUILTIN_NAMES", "register_all", "default_registry"]
