"""structbridge public API."""

from __future__ import annotations

from .capabilities import Copyable, Equatable, Extractor, MethodShape, probe_method
from .descriptors import (
    NOT_APPLICABLE,
    TypeDescriptor,
    WrapperTag,
    describe,
    describe_value,
    is_assignable,
    is_composite,
)
from .dispatch import AS_STRATEGIES, COPY_STRATEGIES, EQUAL_STRATEGIES, as_type, copy, equal
from .errors import BridgeError, NoSuchElementError
from .extract import (
    EXTRACT_STRATEGIES,
    get_safe,
    unapply_check,
    unapply_full,
    unapply_tuple,
    unapply_tuple3,
)
from .immutable import Immutable, is_immutable, is_immutable_type, unwrap, unwrap_all
from .option import (
    Either,
    Left,
    LeftPattern,
    Nothing,
    NothingPattern,
    Option,
    Right,
    RightPattern,
    Some,
    SomePattern,
    Tuple,
    Tuple3,
    get_some_value,
    is_defined,
    to_option,
)
from .primitives import (
    Bool,
    Float32,
    Float64,
    Int,
    Int8,
    Int16,
    Int32,
    Int64,
    Primitive,
    String,
    UInt,
    UInt8,
    UInt16,
    UInt32,
    UInt64,
)

__all__ = [
    "equal",
    "copy",
    "as_type",
    "unwrap",
    "unwrap_all",
    "is_immutable",
    "is_immutable_type",
    "unapply_full",
    "unapply_check",
    "unapply_tuple",
    "unapply_tuple3",
    "get_safe",
    "is_defined",
    "get_some_value",
    "to_option",
    "describe",
    "describe_value",
    "is_assignable",
    "is_composite",
    "probe_method",
    "EQUAL_STRATEGIES",
    "COPY_STRATEGIES",
    "AS_STRATEGIES",
    "EXTRACT_STRATEGIES",
    "NOT_APPLICABLE",
    "TypeDescriptor",
    "WrapperTag",
    "MethodShape",
    "Copyable",
    "Equatable",
    "Extractor",
    "Immutable",
    "Option",
    "Some",
    "Nothing",
    "Either",
    "Left",
    "Right",
    "Tuple",
    "Tuple3",
    "SomePattern",
    "NothingPattern",
    "LeftPattern",
    "RightPattern",
    "Primitive",
    "Int",
    "Int8",
    "Int16",
    "Int32",
    "Int64",
    "UInt",
    "UInt8",
    "UInt16",
    "UInt32",
    "UInt64",
    "Float32",
    "Float64",
    "Bool",
    "String",
    "BridgeError",
    "NoSuchElementError",
]
