"""Pattern-match extraction.

``unapply_full(value, pattern)`` tests ``value`` against ``pattern`` and
returns ``(bindings, matched)``. Bindings are ordered as the extractor
declares them. Neither argument is ever mutated.
"""

from __future__ import annotations

import logging
from typing import Any, Callable

from .capabilities import Extractor, MethodShape, probe_method
from .descriptors import NOT_APPLICABLE, WrapperTag, tag_of
from .dispatch import as_type, equal
from .immutable import unwrap
from .option import get_some_value

logger = logging.getLogger(__name__)

Extraction = tuple[list[Any], bool]


def _no_match() -> Extraction:
    return [], False


def _from_option(result: Any) -> Extraction:
    payload, ok = get_some_value(result)
    if ok:
        return [payload], True
    return _no_match()


def _adapt_argument(method: MethodShape, value: Any) -> tuple[Any, bool]:
    return as_type(value, method.params[0])


def _interpret(result: Any) -> Extraction:
    if isinstance(result, bool):
        return ([], True) if result else _no_match()
    if isinstance(result, tuple) and result and isinstance(result[-1], bool):
        if result[-1]:
            return list(result[:-1]), True
        return _no_match()
    return _from_option(result)


# ============================================================
# Strategies
# ============================================================


def extract_by_capability(value: Any, pattern: Any) -> Any:
    if isinstance(pattern, Extractor):
        return _from_option(pattern.unapply(value))
    return NOT_APPLICABLE


def extract_by_method(value: Any, pattern: Any) -> Any:
    if pattern is None:
        return NOT_APPLICABLE
    method = probe_method(pattern, "unapply", 1)
    if method is None:
        return NOT_APPLICABLE
    arg, ok = _adapt_argument(method, value)
    if not ok:
        logger.debug(
            "%s.unapply not invoked: %s does not convert to %r",
            type(pattern).__name__,
            type(value).__name__,
            method.params[0],
        )
        return _no_match()
    return _interpret(method(arg))


def extract_by_equality(value: Any, pattern: Any) -> Any:
    if equal(value, pattern):
        return [value], True
    return _no_match()


EXTRACT_STRATEGIES: tuple[Callable[[Any, Any], Any], ...] = (
    extract_by_capability,
    extract_by_method,
    extract_by_equality,
)


# ============================================================
# Public API
# ============================================================


def unapply_full(value: Any, pattern: Any) -> Extraction:
    """Match ``value`` against ``pattern``; returns ``(bindings, matched)``."""
    value = unwrap(value)
    for strategy in EXTRACT_STRATEGIES:
        result = strategy(value, pattern)
        if result is not NOT_APPLICABLE:
            return result
    return _no_match()


def unapply_check(value: Any, pattern: Any) -> bool:
    _, ok = unapply_full(value, pattern)
    return ok


def _unapply_tagged(value: Any, fields: tuple[str, ...]) -> Extraction:
    value = unwrap(value)
    if tag_of(value) is not WrapperTag.TUPLE:
        return _no_match()
    parts = []
    for name in fields:
        if not hasattr(value, name):
            return _no_match()
        parts.append(unwrap(getattr(value, name)))
    if hasattr(value, f"v{len(fields) + 1}"):
        return _no_match()
    return parts, True


def unapply_tuple(value: Any) -> Extraction:
    """Destructure a two-element ``Tuple`` into its components."""
    return _unapply_tagged(value, ("v1", "v2"))


def unapply_tuple3(value: Any) -> Extraction:
    return _unapply_tagged(value, ("v1", "v2", "v3"))


def get_safe(bindings: list[Any], index: int) -> Any:
    """Binding at ``index``, or None when out of range."""
    if 0 <= index < len(bindings):
        return bindings[index]
    return None
