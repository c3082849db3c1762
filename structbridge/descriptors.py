"""Run-time type descriptors for boxed values.

A descriptor answers the structural questions the dispatch engine asks of a
concrete type: is it composite, which fields does it declare (in order), what
type does each field expect, and how is a fresh instance assembled.

Composite types are dataclasses. Wrapper types (Immutable, Tuple) are
recognised by an explicit class-level tag, never by name.
"""

from __future__ import annotations

import dataclasses
import inspect
import logging
import types
import typing
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Final, TypeVar, Union

logger = logging.getLogger(__name__)

# Returned by a resolution strategy that does not apply to its inputs.
NOT_APPLICABLE: Final = object()

MISSING_FIELD: Final = object()

_SCALAR_ZEROS: Final[tuple[type, ...]] = (int, float, complex, str, bytes, bool)

_CONTAINER_ORIGINS: Final[tuple[type, ...]] = (list, tuple, set, frozenset, dict)


# ============================================================
# Wrapper tags
# ============================================================


class WrapperTag(str, Enum):
    IMMUTABLE = "immutable"
    TUPLE = "tuple"


def _origin_class(target: object) -> object:
    origin = typing.get_origin(target)
    return origin if origin is not None else target


def tag_of_type(target: object) -> WrapperTag | None:
    """Wrapper tag of a class or parameterized alias, if any."""
    cls = _origin_class(target)
    if not isinstance(cls, type):
        return None
    tag = getattr(cls, "_bridge_tag", None)
    return tag if isinstance(tag, WrapperTag) else None


def tag_of(value: object) -> WrapperTag | None:
    if isinstance(value, type):
        return None
    return tag_of_type(type(value))


# ============================================================
# Descriptors
# ============================================================


@dataclass(frozen=True)
class FieldDescriptor:
    name: str
    annotation: object
    field: dataclasses.Field

    def zero(self) -> object:
        if self.field.default is not dataclasses.MISSING:
            return self.field.default
        if self.field.default_factory is not dataclasses.MISSING:
            return self.field.default_factory()
        return zero_value(self.annotation)

    def read(self, value: object) -> object:
        return getattr(value, self.name, MISSING_FIELD)


@dataclass(frozen=True)
class TypeDescriptor:
    cls: type
    args: tuple[object, ...]
    tag: WrapperTag | None
    fields: tuple[FieldDescriptor, ...]

    @property
    def is_composite(self) -> bool:
        return dataclasses.is_dataclass(self.cls) and self.tag is not WrapperTag.IMMUTABLE

    @property
    def field_names(self) -> tuple[str, ...]:
        return tuple(f.name for f in self.fields)

    def display(self) -> str:
        if not self.args:
            return self.cls.__qualname__
        inner = ", ".join(_display_type(a) for a in self.args)
        return f"{self.cls.__qualname__}[{inner}]"

    def construct(self, values: dict[str, object], *, validate: bool) -> object:
        """Assemble a new instance field by field.

        Bypasses ``__init__`` and ``frozen`` so private and ``init=False``
        fields are reachable. Fields absent from ``values`` take their zero
        value; a field the class refuses to assign is skipped. With ``validate`` a
        parameterless ``__post_init__`` runs afterwards and may raise.
        """
        inst = object.__new__(self.cls)
        for f in self.fields:
            v = values.get(f.name, MISSING_FIELD)
            if v is MISSING_FIELD:
                v = f.zero()
            try:
                object.__setattr__(inst, f.name, v)
            except (AttributeError, TypeError) as e:
                logger.debug("%s.%s not assigned: %s", self.display(), f.name, e)
        if validate:
            post_init = getattr(inst, "__post_init__", None)
            if post_init is not None and _takes_no_args(post_init):
                post_init()
        return inst


def _display_type(t: object) -> str:
    if isinstance(t, type):
        return t.__qualname__
    return repr(t).replace("typing.", "")


def _takes_no_args(fn: Callable[..., object]) -> bool:
    try:
        sig = inspect.signature(fn)
    except (TypeError, ValueError):
        return False
    return all(
        p.default is not inspect.Parameter.empty
        or p.kind in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)
        for p in sig.parameters.values()
    )


def _class_hints(cls: type) -> dict[str, object]:
    try:
        return typing.get_type_hints(cls)
    except (NameError, TypeError, SyntaxError):
        # Unresolvable forward references degrade to Any.
        hints: dict[str, object] = {}
        for klass in reversed(cls.__mro__):
            for name, ann in inspect.get_annotations(klass).items():
                hints[name] = Any if isinstance(ann, str) else ann
        return hints


def _substitute(hint: object, mapping: dict[object, object]) -> object:
    if isinstance(hint, TypeVar):
        return mapping.get(hint, hint)
    params = getattr(hint, "__parameters__", ())
    if params and mapping:
        try:
            return hint[tuple(mapping.get(p, p) for p in params)]
        except TypeError:
            return hint
    return hint


def describe(target: object) -> TypeDescriptor:
    """Descriptor of a class or parameterized alias such as ``Box[int]``."""
    cls = _origin_class(target)
    if not isinstance(cls, type):
        raise TypeError(f"cannot describe {target!r}")
    args = typing.get_args(target) if cls is not target else ()
    mapping: dict[object, object] = {}
    params = getattr(cls, "__parameters__", ())
    if args and len(params) == len(args):
        mapping = dict(zip(params, args))
    fields: tuple[FieldDescriptor, ...] = ()
    if dataclasses.is_dataclass(cls):
        hints = _class_hints(cls)
        fields = tuple(
            FieldDescriptor(
                name=f.name,
                annotation=_substitute(hints.get(f.name, Any), mapping),
                field=f,
            )
            for f in dataclasses.fields(cls)
        )
    return TypeDescriptor(cls=cls, args=args, tag=tag_of_type(cls), fields=fields)


def describe_value(value: object) -> TypeDescriptor:
    return describe(type(value))


def _is_composite_class(cls: type) -> bool:
    return dataclasses.is_dataclass(cls) and tag_of_type(cls) is not WrapperTag.IMMUTABLE


def is_composite(value: object) -> bool:
    if isinstance(value, type):
        return False
    return _is_composite_class(type(value))


def is_composite_type(target: object) -> bool:
    cls = _origin_class(target)
    return isinstance(cls, type) and _is_composite_class(cls)


# ============================================================
# Assignability
# ============================================================


def is_union(target: object) -> bool:
    origin = typing.get_origin(target)
    return origin is Union or origin is types.UnionType


def zero_value(target: object) -> object:
    if target in _SCALAR_ZEROS:
        return typing.cast(type, target)()
    return None


def is_assignable(value: object, target: object) -> bool:
    """Whether ``value`` can be used as ``target`` without conversion."""
    if target is Any or target is object:
        return True
    if isinstance(target, TypeVar):
        if target.__bound__ is not None:
            return is_assignable(value, target.__bound__)
        if target.__constraints__:
            return any(is_assignable(value, c) for c in target.__constraints__)
        return True
    if target is None or target is type(None):
        return value is None
    if is_union(target):
        return any(is_assignable(value, m) for m in typing.get_args(target))
    origin = typing.get_origin(target)
    if origin is typing.Literal:
        return any(
            type(value) is type(lit) and value == lit for lit in typing.get_args(target)
        )
    if origin is None:
        if not isinstance(target, type):
            return False
        if isinstance(value, bool):
            return isinstance(value, target)
        if target is float and isinstance(value, int):
            return True
        if target is complex and isinstance(value, (int, float)):
            return True
        try:
            return isinstance(value, target)
        except TypeError:
            if typing.Protocol in getattr(target, "__mro__", ()):
                return all(hasattr(value, m) for m in _protocol_members(target))
            return False
    if not isinstance(origin, type):
        return False
    try:
        if not isinstance(value, origin):
            return False
    except TypeError:
        return False
    if origin in _CONTAINER_ORIGINS:
        items = element_targets(value, target)
        return items is not None and all(is_assignable(v, t) for v, t in items)
    desc = describe(target)
    if desc.tag is WrapperTag.IMMUTABLE:
        inner = desc.args[0] if desc.args else Any
        return is_assignable(value.get(), inner)  # type: ignore[attr-defined]
    if desc.is_composite:
        for f in desc.fields:
            v = f.read(value)
            if v is MISSING_FIELD or not is_assignable(v, f.annotation):
                return False
    return True


def _protocol_members(proto: type) -> set[str]:
    # Non-runtime protocols are matched by attribute presence only.
    members: set[str] = set()
    for klass in proto.__mro__:
        if klass in (object, typing.Protocol, typing.Generic):
            continue
        if typing.Protocol not in klass.__mro__:
            continue
        members.update(inspect.get_annotations(klass))
        members.update(name for name in vars(klass) if not name.startswith("_"))
    return members


def element_targets(value: Any, target: object) -> list[tuple[object, object]] | None:
    """Pair each element of a builtin container with its declared type.

    Dict keys and values alternate in the result. Returns None when ``target``
    is not a builtin container alias, when ``value`` is not an instance of its
    origin, or when a fixed-length tuple has the wrong length.
    """
    origin = typing.get_origin(target)
    if origin not in _CONTAINER_ORIGINS or not isinstance(value, origin):
        return None
    args = typing.get_args(target)
    if not args:
        return []
    if origin is dict:
        if len(args) != 2:
            return None
        pairs: list[tuple[object, object]] = []
        for k, v in value.items():
            pairs.append((k, args[0]))
            pairs.append((v, args[1]))
        return pairs
    if origin is tuple:
        if len(args) == 2 and args[1] is Ellipsis:
            return [(item, args[0]) for item in value]
        if len(args) != len(value):
            return None
        return list(zip(value, args))
    return [(item, args[0]) for item in value]
