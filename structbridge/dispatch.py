"""Generic dispatch engine: equal, copy and as_type.

Each operation is an ordered tuple of strategies. A strategy either answers
or returns ``NOT_APPLICABLE`` so the next tier is consulted. Capability
interfaces come first, then reflective method probing, then the structural
algorithms driven by type descriptors.
"""

from __future__ import annotations

import logging
import typing
from typing import Any, Callable

from .capabilities import Copyable, Equatable, probe_method
from .descriptors import (
    MISSING_FIELD,
    NOT_APPLICABLE,
    describe,
    describe_value,
    element_targets,
    is_assignable,
    is_composite,
    is_composite_type,
    is_union,
    zero_value,
)
from .immutable import is_immutable, is_immutable_type

logger = logging.getLogger(__name__)

Converted = tuple[Any, bool]


# ============================================================
# equal
# ============================================================


def equal_by_capability(a: Any, b: Any) -> Any:
    if isinstance(a, Equatable) and isinstance(b, type(a)):
        return a.equal(b)
    return NOT_APPLICABLE


def equal_by_method(a: Any, b: Any) -> Any:
    if a is None or isinstance(a, type):
        return NOT_APPLICABLE
    method = probe_method(a, "equal", 1)
    if method is None or not method.returns_bool():
        return NOT_APPLICABLE
    if not is_assignable(b, method.params[0]):
        return NOT_APPLICABLE
    return bool(method(b))


def equal_deep(a: Any, b: Any) -> Any:
    if is_composite(a) and is_composite(b):
        return NOT_APPLICABLE
    if a is b:
        return True
    if type(a) is not type(b):
        return False
    if isinstance(a, (list, tuple)):
        return len(a) == len(b) and all(equal(x, y) for x, y in zip(a, b))
    if isinstance(a, dict):
        if a.keys() != b.keys():
            return False
        return all(equal(v, b[k]) for k, v in a.items())
    return bool(a == b)


def equal_fields(a: Any, b: Any) -> Any:
    if type(a) is not type(b):
        return False
    for f in describe_value(a).fields:
        va = f.read(a)
        vb = f.read(b)
        if va is MISSING_FIELD or vb is MISSING_FIELD:
            if va is not vb:
                return False
            continue
        if not equal(va, vb):
            return False
    return True


EQUAL_STRATEGIES: tuple[Callable[[Any, Any], Any], ...] = (
    equal_by_capability,
    equal_by_method,
    equal_deep,
    equal_fields,
)


def equal(a: Any, b: Any) -> bool:
    """Deep value equality of two boxed values."""
    for strategy in EQUAL_STRATEGIES:
        result = strategy(a, b)
        if result is not NOT_APPLICABLE:
            return bool(result)
    return False


# ============================================================
# copy
# ============================================================


def copy_nil(v: Any) -> Any:
    if v is None:
        return None
    return NOT_APPLICABLE


def copy_by_capability(v: Any) -> Any:
    if isinstance(v, Copyable):
        return v.copy()
    return NOT_APPLICABLE


def copy_by_method(v: Any) -> Any:
    if isinstance(v, type):
        return NOT_APPLICABLE
    method = probe_method(v, "copy", 0)
    if method is None:
        return NOT_APPLICABLE
    result = method()
    if isinstance(result, type(v)):
        return result
    return NOT_APPLICABLE


def copy_shallow(v: Any) -> Any:
    if not is_composite(v):
        return v
    return NOT_APPLICABLE


def copy_fields(v: Any) -> Any:
    desc = describe_value(v)
    values: dict[str, object] = {}
    for f in desc.fields:
        current = f.read(v)
        if current is MISSING_FIELD:
            logger.debug("%s.%s unreadable, left at zero value", desc.display(), f.name)
            continue
        values[f.name] = copy(current)
    return desc.construct(values, validate=False)


COPY_STRATEGIES: tuple[Callable[[Any], Any], ...] = (
    copy_nil,
    copy_by_capability,
    copy_by_method,
    copy_shallow,
    copy_fields,
)


def copy(v: Any) -> Any:
    """Duplicate a boxed value. Composite values are copied field by field."""
    for strategy in COPY_STRATEGIES:
        result = strategy(v)
        if result is not NOT_APPLICABLE:
            return result
    return v


# ============================================================
# as_type
# ============================================================


def _fail(target: object, reason: str, *args: object) -> Converted:
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("as_type to %r failed: " + reason, target, *args)
    return zero_value(target), False


def as_direct(obj: Any, target: object) -> Any:
    if is_immutable(obj) and not is_immutable_type(target) and target not in (Any, object):
        # The wrapper itself is never the answer for a non-wrapper target.
        return NOT_APPLICABLE
    if is_assignable(obj, target):
        return obj, True
    return NOT_APPLICABLE


def as_unwrapped_source(obj: Any, target: object) -> Any:
    if is_immutable(obj) and not is_immutable_type(target):
        return as_type(obj.get(), target)
    return NOT_APPLICABLE


def as_union_member(obj: Any, target: object) -> Any:
    if not is_union(target):
        return NOT_APPLICABLE
    for member in typing.get_args(target):
        value, ok = as_type(obj, member)
        if ok:
            return value, True
    return _fail(target, "no union member accepts %s", type(obj).__name__)


def as_container(obj: Any, target: object) -> Any:
    items = element_targets(obj, target)
    if items is None:
        return NOT_APPLICABLE
    converted = []
    for item, item_target in items:
        value, ok = as_type(item, item_target)
        if not ok:
            return _fail(target, "element %s not convertible", type(item).__name__)
        converted.append(value)
    origin = typing.get_origin(target)
    try:
        if origin is dict:
            return dict(zip(converted[0::2], converted[1::2])), True
        return origin(converted), True
    except TypeError as e:
        return _fail(target, "elements rejected: %s", e)


def as_scalar_mismatch(obj: Any, target: object) -> Any:
    if is_immutable(obj) and is_immutable_type(target):
        return NOT_APPLICABLE
    if is_composite(obj) and is_composite_type(target):
        return NOT_APPLICABLE
    return _fail(target, "%s is not convertible", type(obj).__name__)


def as_immutable_pair(obj: Any, target: object) -> Any:
    if not (is_immutable(obj) and is_immutable_type(target)):
        return NOT_APPLICABLE
    desc = describe(target)
    inner_target = desc.args[0] if desc.args else Any
    inner, ok = as_type(obj.get(), inner_target)
    if not ok:
        return _fail(target, "wrapped value is not convertible")
    return desc.cls(inner), True


def as_structural(obj: Any, target: object) -> Any:
    src = describe_value(obj)
    dst = describe(target)
    if src.field_names != dst.field_names:
        return _fail(target, "field layout of %s differs", src.display())
    values: dict[str, object] = {}
    for sf, df in zip(src.fields, dst.fields):
        current = sf.read(obj)
        if current is MISSING_FIELD:
            return _fail(target, "field %s unreadable", sf.name)
        value, ok = as_type(current, df.annotation)
        if not ok:
            return _fail(target, "field %s not convertible", sf.name)
        values[df.name] = value
    try:
        return dst.construct(values, validate=True), True
    except (TypeError, ValueError) as e:
        return _fail(target, "rejected by %s: %s", dst.display(), e)


AS_STRATEGIES: tuple[Callable[[Any, object], Any], ...] = (
    as_direct,
    as_union_member,
    as_unwrapped_source,
    as_container,
    as_scalar_mismatch,
    as_immutable_pair,
    as_structural,
)


def as_type(obj: Any, target: object) -> Converted:
    """View ``obj`` as ``target``; returns ``(value, True)`` or ``(zero, False)``.

    Succeeds when ``obj`` is directly usable as ``target``, and also when its
    concrete type is structurally identical (same field names in the same
    order, each field convertible), looking through Immutable wrappers.
    Builtin container targets such as ``list[Rect]`` convert element by
    element into a new container. Protocol targets without
    ``@runtime_checkable`` are satisfied by attribute presence.
    """
    for strategy in AS_STRATEGIES:
        result = strategy(obj, target)
        if result is not NOT_APPLICABLE:
            return result
    return _fail(target, "no strategy applies")
