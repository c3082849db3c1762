"""Option, Either and Tuple values, plus the Option-like probing convention.

Two Option encodings have to interoperate: values exposing ``is_defined()``
and ``get()`` (the ``Some``/``Nothing`` pair below), and ad hoc records with
a ``defined``/``value`` attribute pair. ``is_defined`` and ``get_some_value``
accept either, directly or behind one Immutable layer.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, ClassVar, Generic, TypeVar

from .capabilities import Copyable, Equatable, Extractor, probe_method
from .descriptors import WrapperTag
from .errors import NoSuchElementError
from .immutable import unwrap

T = TypeVar("T")
U = TypeVar("U")
L = TypeVar("L")
R = TypeVar("R")
A = TypeVar("A")
B = TypeVar("B")
C = TypeVar("C")

_NO_ATTR = object()


# ============================================================
# Probing
# ============================================================


def is_defined(value: Any) -> bool:
    """Whether ``value`` is a defined Option-like value."""
    value = unwrap(value)
    if value is None or isinstance(value, type):
        return False
    method = probe_method(value, "is_defined", 0)
    if method is not None:
        return bool(method())
    defined = getattr(value, "defined", _NO_ATTR)
    if defined is _NO_ATTR or not hasattr(value, "value"):
        return False
    return bool(unwrap(defined))


def get_some_value(value: Any) -> tuple[Any, bool]:
    """Payload of a defined Option-like value, as ``(payload, True)``."""
    if not is_defined(value):
        return None, False
    value = unwrap(value)
    method = probe_method(value, "get", 0)
    if method is not None:
        return method(), True
    return unwrap(value.value), True


def to_option(value: Any) -> Option[Any]:
    payload, ok = get_some_value(value)
    if ok:
        return Some(payload)
    return Nothing()


# ============================================================
# Option
# ============================================================


class Option(Copyable, Equatable, Generic[T]):
    def is_defined(self) -> bool:
        raise NotImplementedError

    def get(self) -> T:
        raise NotImplementedError

    def is_empty(self) -> bool:
        return not self.is_defined()

    def get_or_else(self, default: T) -> T:
        if self.is_defined():
            return self.get()
        return default

    def map(self, f: Callable[[T], U]) -> Option[U]:
        if self.is_defined():
            return Some(f(self.get()))
        return Nothing()

    def flat_map(self, f: Callable[[T], Any]) -> Option[Any]:
        if self.is_defined():
            return to_option(f(self.get()))
        return Nothing()

    def filter(self, pred: Callable[[T], bool]) -> Option[T]:
        if self.is_defined() and pred(self.get()):
            return self
        return Nothing()

    def for_each(self, f: Callable[[T], object]) -> None:
        if self.is_defined():
            f(self.get())

    def copy(self) -> Option[T]:
        from .dispatch import copy

        if self.is_defined():
            return Some(copy(self.get()))
        return Nothing()

    def equal(self, other: Option[T]) -> bool:
        from .dispatch import equal

        if self.is_defined() != other.is_defined():
            return False
        if not self.is_defined():
            return True
        return equal(self.get(), other.get())

    def unapply(self, value: Any) -> tuple[Any, bool]:
        from .extract import unapply_check

        if self.is_defined() and unapply_check(value, self.get()):
            return value, True
        return None, False


@dataclass(frozen=True, eq=False)
class Some(Option[T]):
    value: T

    def is_defined(self) -> bool:
        return True

    def get(self) -> T:
        return self.value

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Option) and self.equal(other)

    def __hash__(self) -> int:
        return hash(("some", self.value))


@dataclass(frozen=True, eq=False)
class Nothing(Option[T]):
    def is_defined(self) -> bool:
        return False

    def get(self) -> T:
        raise NoSuchElementError("get on empty Option")

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Option) and other.is_empty()

    def __hash__(self) -> int:
        return hash("nothing")


# ============================================================
# Either
# ============================================================


class Either(Generic[L, R]):
    """Right-biased disjoint union of ``Left`` and ``Right``."""

    value: Any

    def is_left(self) -> bool:
        return isinstance(self, Left)

    def is_right(self) -> bool:
        return isinstance(self, Right)

    def get(self) -> R:
        if self.is_right():
            return self.value
        raise NoSuchElementError("get on Left")

    def get_or_else(self, default: R) -> R:
        if self.is_right():
            return self.value
        return default

    def map(self, f: Callable[[R], U]) -> Either[L, U]:
        if self.is_right():
            return Right(f(self.value))
        return self  # type: ignore[return-value]

    def flat_map(self, f: Callable[[R], Either[L, U]]) -> Either[L, U]:
        if self.is_right():
            return f(self.value)
        return self  # type: ignore[return-value]

    def fold(self, on_left: Callable[[L], U], on_right: Callable[[R], U]) -> U:
        if self.is_right():
            return on_right(self.value)
        return on_left(self.value)

    def swap(self) -> Either[R, L]:
        if self.is_right():
            return Left(self.value)
        return Right(self.value)

    def to_option(self) -> Option[R]:
        if self.is_right():
            return Some(self.value)
        return Nothing()


@dataclass(frozen=True)
class Left(Either[L, R]):
    value: L


@dataclass(frozen=True)
class Right(Either[L, R]):
    value: R


# ============================================================
# Tuples
# ============================================================


@dataclass(frozen=True)
class Tuple(Generic[A, B]):
    _bridge_tag: ClassVar[WrapperTag] = WrapperTag.TUPLE

    v1: A
    v2: B


@dataclass(frozen=True)
class Tuple3(Generic[A, B, C]):
    _bridge_tag: ClassVar[WrapperTag] = WrapperTag.TUPLE

    v1: A
    v2: B
    v3: C


# ============================================================
# Companion extractors
# ============================================================


class SomePattern(Extractor):
    """Matches any defined Option-like value; binds its payload."""

    def unapply(self, value: Any) -> Option[Any]:
        return to_option(value)


class NothingPattern:
    """Matches ``None`` and empty Option-like values; binds nothing."""

    def unapply(self, value: Any) -> bool:
        value = unwrap(value)
        if value is None:
            return True
        if isinstance(value, Option) or _has_option_shape(value):
            return not is_defined(value)
        return False


class LeftPattern(Extractor):
    def unapply(self, value: Any) -> Option[Any]:
        value = unwrap(value)
        if isinstance(value, Either) and value.is_left():
            return Some(value.value)
        return Nothing()


class RightPattern(Extractor):
    def unapply(self, value: Any) -> Option[Any]:
        value = unwrap(value)
        if isinstance(value, Either) and value.is_right():
            return Some(value.value)
        return Nothing()


def _has_option_shape(value: object) -> bool:
    if probe_method(value, "is_defined", 0) is not None:
        return True
    return hasattr(value, "defined") and hasattr(value, "value")
