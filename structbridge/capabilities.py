"""Capability interfaces and method-shape probing.

A concrete type opts into a capability in one of two ways:

1. Nominally, by subclassing ``Copyable``, ``Equatable`` or ``Extractor``.
2. Structurally, by exposing a method with the right name and arity
   (``copy()``, ``equal(other)``, ``unapply(value)``). The dispatch engine
   finds these with ``probe_method``.

The nominal tier is always consulted first.
"""

from __future__ import annotations

import inspect
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable


class Copyable(ABC):
    __slots__ = ()

    @abstractmethod
    def copy(self) -> Any:
        """Return a duplicate of this value."""


class Equatable(ABC):
    __slots__ = ()

    @abstractmethod
    def equal(self, other: Any) -> bool:
        """Value equality against a peer of the same type."""


class Extractor(ABC):
    __slots__ = ()

    @abstractmethod
    def unapply(self, value: Any) -> Any:
        """Test ``value``; return an Option-like result holding the binding."""


# ============================================================
# Method-shape probing
# ============================================================


@dataclass(frozen=True)
class MethodShape:
    name: str
    func: Callable[..., Any]
    params: tuple[object, ...]  # annotations, Any when absent
    returns: object  # Any when absent

    def __call__(self, *args: Any) -> Any:
        return self.func(*args)

    def returns_bool(self) -> bool:
        return self.returns is Any or self.returns is bool


def _signature(fn: Callable[..., Any]) -> inspect.Signature | None:
    try:
        return inspect.signature(fn, eval_str=True)
    except (NameError, SyntaxError, TypeError):
        pass
    except ValueError:
        return None
    try:
        return inspect.signature(fn)
    except (TypeError, ValueError):
        return None


def _annotation(ann: object) -> object:
    if ann is inspect.Parameter.empty or isinstance(ann, str):
        return Any
    return ann


def probe_method(obj: object, name: str, arity: int) -> MethodShape | None:
    """Find a callable attribute ``name`` accepting exactly ``arity`` positional args.

    Works for bound methods, classmethods and staticmethods reached through
    an instance or a class (companion objects). Returns None when absent or
    when the signature cannot take ``arity`` positional arguments.
    """
    fn = getattr(obj, name, None)
    if fn is None or not callable(fn):
        return None
    sig = _signature(fn)
    if sig is None:
        return None
    positional = [
        p
        for p in sig.parameters.values()
        if p.kind in (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)
    ]
    variadic = any(p.kind is inspect.Parameter.VAR_POSITIONAL for p in sig.parameters.values())
    required = [p for p in positional if p.default is inspect.Parameter.empty]
    if len(required) > arity:
        return None
    if len(positional) < arity and not variadic:
        return None
    if any(
        p.kind is inspect.Parameter.KEYWORD_ONLY and p.default is inspect.Parameter.empty
        for p in sig.parameters.values()
    ):
        return None
    params = tuple(_annotation(p.annotation) for p in positional[:arity])
    params += (Any,) * (arity - len(params))
    return MethodShape(
        name=name,
        func=fn,
        params=params,
        returns=_annotation(sig.return_annotation),
    )
