"""The Immutable wrapper and the one-layer unwrap convention."""

from __future__ import annotations

from typing import Any, ClassVar, Generic, TypeVar

from .capabilities import Copyable, Equatable
from .descriptors import WrapperTag, tag_of, tag_of_type

T = TypeVar("T")


class Immutable(Copyable, Equatable, Generic[T]):
    """Read-only container around exactly one value."""

    __slots__ = ("_value",)
    _bridge_tag: ClassVar[WrapperTag] = WrapperTag.IMMUTABLE

    def __init__(self, value: T):
        object.__setattr__(self, "_value", value)

    def get(self) -> T:
        return self._value

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError(f"{type(self).__name__} is read-only")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} is read-only")

    def copy(self) -> Immutable[T]:
        from .dispatch import copy

        return type(self)(copy(self._value))

    def equal(self, other: Any) -> bool:
        from .dispatch import equal

        return is_immutable(other) and equal(self._value, other.get())

    def unapply(self, value: Any) -> tuple[Any, bool]:
        from .dispatch import equal

        if equal(self._value, value):
            return value, True
        return None, False

    def __eq__(self, other: object) -> bool:
        return self.equal(other)

    def __hash__(self) -> int:
        return hash(("immutable", self._value))

    def __repr__(self) -> str:
        return f"Immutable({self._value!r})"


def is_immutable(value: object) -> bool:
    return tag_of(value) is WrapperTag.IMMUTABLE


def is_immutable_type(target: object) -> bool:
    """True for ``Immutable``, ``Immutable[X]`` and tagged subclasses."""
    return tag_of_type(target) is WrapperTag.IMMUTABLE


def unwrap(value: Any) -> Any:
    """Strip exactly one Immutable layer, if present."""
    if is_immutable(value):
        return value.get()
    return value


def unwrap_all(value: Any) -> Any:
    while is_immutable(value):
        value = value.get()
    return value
