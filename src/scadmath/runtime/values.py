"""
scadmath Runtime Value Model.

Every builtin consumes and produces Values of exactly four variants:

- Undefined: the "no result / invalid input" sentinel
- Number: an IEEE-754 double, NaN and infinities included
- String: a sequence of Unicode code points
- Vector: an ordered, possibly heterogeneous sequence of Values

Values are immutable. Equality and ordering are only meaningful between
values of the same variant; comparing across variants is "incomparable"
and simply yields False rather than raising.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from enum import Enum
from dataclasses import dataclass
from typing import Any, Optional


class ValueType(Enum):
    """Variant tag of a Value."""

    UNDEFINED = "undefined"
    NUMBER = "number"
    STRING = "string"
    VECTOR = "vector"


class Value:
    """Base class of the closed value variant."""

    __slots__ = ()

    type: ValueType

    # -------------------------------------------------------------------------
    # Accessors
    # -------------------------------------------------------------------------

    def to_double(self) -> Optional[float]:
        """Numeric view; None for anything but a Number."""
        return None

    def to_vector(self) -> tuple[Value, ...]:
        """Element view; empty for anything but a Vector."""
        return ()

    def get_vec2(self) -> Optional[tuple[float, float]]:
        """Decompose a Vector of exactly two Numbers."""
        return None

    def get_vec3(self) -> Optional[tuple[float, float, float]]:
        """Decompose a Vector of exactly three Numbers."""
        return None

    def to_display(self) -> str:
        """Text used by str() and by diagnostics."""
        raise NotImplementedError

    def to_repr(self) -> str:
        """Text of this value when nested inside a Vector."""
        return self.to_display()

    def unwrap(self) -> Any:
        """Convert back into plain Python data."""
        raise NotImplementedError

    # -------------------------------------------------------------------------
    # Ordering (same-variant only)
    # -------------------------------------------------------------------------

    def _key(self) -> Any:
        return None

    def _comparable(self, other: object) -> bool:
        return (
            isinstance(other, Value)
            and other.type is self.type
            and self.type in (ValueType.NUMBER, ValueType.STRING)
        )

    def __lt__(self, other: object) -> bool:
        return self._comparable(other) and self._key() < other._key()

    def __gt__(self, other: object) -> bool:
        return self._comparable(other) and self._key() > other._key()

    def __le__(self, other: object) -> bool:
        return self._comparable(other) and self._key() <= other._key()

    def __ge__(self, other: object) -> bool:
        return self._comparable(other) and self._key() >= other._key()

    def __str__(self) -> str:
        return self.to_display()

    # -------------------------------------------------------------------------
    # Construction from Python data
    # -------------------------------------------------------------------------

    @staticmethod
    def wrap(obj: Any) -> Value:
        """
        Convert Python data into a Value.

        None becomes Undefined, bool/int/float become Number, str becomes
        String, and lists/tuples become Vectors (recursively). Existing
        Values pass through unchanged.

        Raises:
            TypeError: If the object has no Value representation
        """
        if isinstance(obj, Value):
            return obj
        if obj is None:
            return UNDEFINED
        if isinstance(obj, (bool, int, float)):
            return Number(float(obj))
        if isinstance(obj, str):
            return String(obj)
        if isinstance(obj, (list, tuple)):
            return Vector(tuple(Value.wrap(item) for item in obj))
        raise TypeError(f"Cannot convert {type(obj).__name__} to Value")


@dataclass(frozen=True, eq=False, slots=True)
class Undefined(Value):
    """The universal "no result" value."""

    type = ValueType.UNDEFINED

    def to_display(self) -> str:
        return "undef"

    def unwrap(self) -> None:
        return None

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Undefined)

    def __hash__(self) -> int:
        return hash(ValueType.UNDEFINED)

    def __repr__(self) -> str:
        return "UNDEFINED"


UNDEFINED = Undefined()


@dataclass(frozen=True, eq=False, slots=True)
class Number(Value):
    """An IEEE-754 double."""

    value: float

    type = ValueType.NUMBER

    def to_double(self) -> float:
        return self.value

    def to_display(self) -> str:
        return format(self.value, "g")

    def unwrap(self) -> float:
        return self.value

    def _key(self) -> float:
        return self.value

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Number) and self.value == other.value

    def __hash__(self) -> int:
        return hash(self.value)


@dataclass(frozen=True, eq=False, slots=True)
class String(Value):
    """A Unicode string; length and indexing count code points."""

    text: str

    type = ValueType.STRING

    def __len__(self) -> int:
        return len(self.text)

    def to_display(self) -> str:
        return self.text

    def to_repr(self) -> str:
        return f'"{self.text}"'

    def unwrap(self) -> str:
        return self.text

    def _key(self) -> str:
        return self.text

    def __eq__(self, other: object) -> bool:
        return isinstance(other, String) and self.text == other.text

    def __hash__(self) -> int:
        return hash(self.text)


@dataclass(frozen=True, eq=False, slots=True)
class Vector(Value):
    """An ordered sequence of Values."""

    items: tuple[Value, ...] = ()

    type = ValueType.VECTOR

    @classmethod
    def of(cls, items: Iterable[Value]) -> Vector:
        return cls(tuple(items))

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[Value]:
        return iter(self.items)

    def __getitem__(self, index: int) -> Value:
        return self.items[index]

    def to_vector(self) -> tuple[Value, ...]:
        return self.items

    def _numbers(self, size: int) -> Optional[tuple[float, ...]]:
        if len(self.items) != size:
            return None
        if not all(isinstance(item, Number) for item in self.items):
            return None
        return tuple(item.value for item in self.items)

    def get_vec2(self) -> Optional[tuple[float, float]]:
        return self._numbers(2)

    def get_vec3(self) -> Optional[tuple[float, float, float]]:
        return self._numbers(3)

    def to_display(self) -> str:
        return "[" + ", ".join(item.to_repr() for item in self.items) + "]"

    def unwrap(self) -> list:
        return [item.unwrap() for item in self.items]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vector) or len(other.items) != len(self.items):
            return False
        return all(a == b for a, b in zip(self.items, other.items))

    def __hash__(self) -> int:
        return hash(self.items)


__all__ = [
    "ValueType",
    "Value",
    "Undefined",
    "UNDEFINED",
    "Number",
    "String",
    "Vector",
]
