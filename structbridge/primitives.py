"""Named wrappers for primitive values, used as literal patterns."""

from __future__ import annotations

import math
import struct
from dataclasses import dataclass
from typing import Any, ClassVar

from .capabilities import Copyable, Equatable, Extractor
from .immutable import unwrap
from .option import Nothing, Option, Some


class Primitive(Copyable, Equatable, Extractor):
    """Base for primitive wrappers: identity copy, value equality, literal match."""

    kind: ClassVar[str] = "primitive"
    raw_type: ClassVar[type] = object
    value: Any

    def get(self) -> Any:
        return self.value

    def to_string(self) -> str:
        return str(self.value)

    def accepts(self, raw: object) -> bool:
        if isinstance(raw, bool) and self.raw_type is not bool:
            return False
        return isinstance(raw, self.raw_type)

    def copy(self) -> Primitive:
        return self

    def equal(self, other: Any) -> bool:
        return type(other) is type(self) and self.value == other.value

    def unapply(self, value: Any) -> Option[Any]:
        raw = unwrap(value)
        if isinstance(raw, Primitive):
            if self.equal(raw):
                return Some(raw)
            return Nothing()
        if self.accepts(raw) and raw == self.value:
            return Some(raw)
        return Nothing()

    def __eq__(self, other: object) -> bool:
        return self.equal(other)

    def __hash__(self) -> int:
        return hash((self.kind, self.value))


# ============================================================
# Integers
# ============================================================


class _Integer(Primitive):
    raw_type: ClassVar[type] = int
    bits: ClassVar[int | None] = None
    signed: ClassVar[bool] = True

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise ValueError(f"{self.kind} requires an int, got {type(self.value).__name__}")
        if self.bits is None:
            return
        if self.signed:
            lo, hi = -(1 << (self.bits - 1)), (1 << (self.bits - 1)) - 1
        else:
            lo, hi = 0, (1 << self.bits) - 1
        if not lo <= self.value <= hi:
            raise ValueError(f"{self.value} out of range for {self.kind}")


@dataclass(frozen=True, eq=False)
class Int(_Integer):
    value: int
    kind: ClassVar[str] = "int"


@dataclass(frozen=True, eq=False)
class Int8(_Integer):
    value: int
    kind: ClassVar[str] = "int8"
    bits: ClassVar[int | None] = 8


@dataclass(frozen=True, eq=False)
class Int16(_Integer):
    value: int
    kind: ClassVar[str] = "int16"
    bits: ClassVar[int | None] = 16


@dataclass(frozen=True, eq=False)
class Int32(_Integer):
    value: int
    kind: ClassVar[str] = "int32"
    bits: ClassVar[int | None] = 32


@dataclass(frozen=True, eq=False)
class Int64(_Integer):
    value: int
    kind: ClassVar[str] = "int64"
    bits: ClassVar[int | None] = 64


@dataclass(frozen=True, eq=False)
class UInt(_Integer):
    value: int
    kind: ClassVar[str] = "uint"
    bits: ClassVar[int | None] = 64
    signed: ClassVar[bool] = False


@dataclass(frozen=True, eq=False)
class UInt8(_Integer):
    value: int
    kind: ClassVar[str] = "uint8"
    bits: ClassVar[int | None] = 8
    signed: ClassVar[bool] = False


@dataclass(frozen=True, eq=False)
class UInt16(_Integer):
    value: int
    kind: ClassVar[str] = "uint16"
    bits: ClassVar[int | None] = 16
    signed: ClassVar[bool] = False


@dataclass(frozen=True, eq=False)
class UInt32(_Integer):
    value: int
    kind: ClassVar[str] = "uint32"
    bits: ClassVar[int | None] = 32
    signed: ClassVar[bool] = False


@dataclass(frozen=True, eq=False)
class UInt64(_Integer):
    value: int
    kind: ClassVar[str] = "uint64"
    bits: ClassVar[int | None] = 64
    signed: ClassVar[bool] = False


# ============================================================
# Floats, bools, strings
# ============================================================


class _Float(Primitive):
    raw_type: ClassVar[type] = float

    def accepts(self, raw: object) -> bool:
        # An int literal matches a float wrapper of equal value.
        return isinstance(raw, (int, float)) and not isinstance(raw, bool)

    def to_string(self) -> str:
        return repr(self.value)


@dataclass(frozen=True, eq=False)
class Float64(_Float):
    value: float
    kind: ClassVar[str] = "float64"

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", float(self.value))


@dataclass(frozen=True, eq=False)
class Float32(_Float):
    value: float
    kind: ClassVar[str] = "float32"

    def __post_init__(self) -> None:
        v = float(self.value)
        if math.isfinite(v):
            try:
                v = struct.unpack("<f", struct.pack("<f", v))[0]
            except OverflowError:
                raise ValueError(f"{self.value} out of range for float32") from None
        object.__setattr__(self, "value", v)

    def unapply(self, value: Any) -> Option[Any]:
        raw = unwrap(value)
        if not isinstance(raw, Primitive) and self.accepts(raw):
            # Compare at single precision.
            try:
                narrowed = Float32(raw).value
            except (ValueError, OverflowError):
                return Nothing()
            if narrowed == self.value:
                return Some(raw)
            return Nothing()
        return super().unapply(value)


@dataclass(frozen=True, eq=False)
class Bool(Primitive):
    value: bool
    kind: ClassVar[str] = "bool"
    raw_type: ClassVar[type] = bool

    def to_string(self) -> str:
        return "true" if self.value else "false"


@dataclass(frozen=True, eq=False)
class String(Primitive):
    value: str
    kind: ClassVar[str] = "string"
    raw_type: ClassVar[type] = str

    def to_string(self) -> str:
        return self.value
