"""
Call-site collaborators handed to builtins by the host evaluator.

EvalContext is the read-only view over one call's already-evaluated
positional arguments. ModuleStack is the host's module instantiation stack,
only consulted by parent_module().
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any, Optional

from scadmath.runtime.values import Value


class EvalContext:
    """Positional arguments of a single builtin call."""

    __slots__ = ("_args",)

    def __init__(self, args: Sequence[Value] = ()) -> None:
        self._args: tuple[Value, ...] = tuple(args)

    @classmethod
    def of(cls, *args: Any) -> EvalContext:
        """Build a context from plain Python arguments."""
        return cls([Value.wrap(arg) for arg in args])

    def num_args(self) -> int:
        return len(self._args)

    def get_arg_value(self, index: int) -> Value:
        return self._args[index]

    @property
    def args(self) -> tuple[Value, ...]:
        return self._args

    def numbers(self, *counts: int) -> Optional[tuple[float, ...]]:
        """
        Shared arity and type gate for numeric builtins.

        Returns the arguments as floats when the call has one of the given
        argument counts and every argument is a Number, otherwise None.
        """
        if len(self._args) not in counts:
            return None
        values = tuple(arg.to_double() for arg in self._args)
        if any(v is None for v in values):
            return None
        return values

    def __repr__(self) -> str:
        inner = ", ".join(arg.to_repr() for arg in self._args)
        return f"EvalContext({inner})"


class ModuleStack(ABC):
    """The host's module call stack, indexed from the outermost frame."""

    @abstractmethod
    def stack_size(self) -> int:
        pass

    @abstractmethod
    def stack_element(self, index: int) -> str:
        pass


class ListModuleStack(ModuleStack):
    """
    ModuleStack backed by a plain list of module names, outermost first.

    Hosts push a name when instantiating a module and pop it on return.
    """

    def __init__(self, frames: Sequence[str] = ()) -> None:
        self.frames: list[str] = list(frames)

    def push(self, name: str) -> None:
        self.frames.append(name)

    def pop(self) -> str:
        return self.frames.pop()

    def stack_size(self) -> int:
        return len(self.frames)

    def stack_element(self, index: int) -> str:
        return self.frames[index]


__all__ = ["EvalContext", "ModuleStack", "ListModuleStack"]
