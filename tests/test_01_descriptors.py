"""Type descriptors, wrapper tags and assignability."""

from dataclasses import dataclass, field
from typing import Any, Generic, Literal, Optional, Protocol, TypeVar, runtime_checkable

import pytest

from structbridge.descriptors import (
    WrapperTag,
    describe,
    describe_value,
    is_assignable,
    is_composite,
    is_composite_type,
    tag_of,
    tag_of_type,
    zero_value,
)
from structbridge.immutable import Immutable
from structbridge.option import Tuple

T = TypeVar("T")


@dataclass
class Point:
    x: int
    y: int


@dataclass
class Box(Generic[T]):
    value: T


@dataclass(frozen=True)
class Account:
    owner: str
    _balance: int = 0
    audit: list = field(default_factory=list, init=False)


@dataclass
class Positive:
    n: int

    def __post_init__(self) -> None:
        if self.n <= 0:
            raise ValueError("n must be positive")


class ImmutableLookalike:
    def get(self) -> int:
        return 1


@runtime_checkable
class Shaper(Protocol):
    def area(self) -> float: ...


class Named(Protocol):
    name: str


@dataclass
class Tag:
    name: str


@dataclass
class Rect:
    width: float
    height: float

    def area(self) -> float:
        return self.width * self.height


# ---------------------------------------------------------------------------
# Descriptors
# ---------------------------------------------------------------------------


def test_fields_in_declaration_order():
    assert describe(Point).field_names == ("x", "y")
    assert describe(Account).field_names == ("owner", "_balance", "audit")


def test_describe_value_matches_class():
    assert describe_value(Point(1, 2)) == describe(Point)


def test_generic_field_annotations_are_substituted():
    desc = describe(Box[int])
    assert desc.cls is Box
    assert desc.args == (int,)
    assert desc.fields[0].annotation is int
    assert describe(Box).fields[0].annotation is T


def test_display():
    assert describe(Point).display() == "Point"
    assert describe(Box[int]).display() == "Box[int]"


def test_describe_rejects_non_types():
    with pytest.raises(TypeError):
        describe(3)


def test_composite_detection():
    assert is_composite(Point(1, 2))
    assert not is_composite(Point)
    assert not is_composite(3)
    assert not is_composite([Point(1, 2)])
    assert not is_composite(Immutable(Point(1, 2)))
    assert is_composite_type(Box[int])
    assert not is_composite_type(Immutable[Point])
    assert not is_composite_type(Optional[Point])


def test_wrapper_tags_are_explicit():
    assert tag_of(Immutable(1)) is WrapperTag.IMMUTABLE
    assert tag_of_type(Immutable[int]) is WrapperTag.IMMUTABLE
    assert tag_of(Tuple(1, "a")) is WrapperTag.TUPLE
    assert tag_of(ImmutableLookalike()) is None
    assert tag_of(Immutable) is None
    assert tag_of_type(ImmutableLookalike) is None


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------


def test_construct_bypasses_init_and_frozen():
    acct = describe(Account).construct(
        {"owner": "ann", "_balance": 5, "audit": ["x"]}, validate=True
    )
    assert isinstance(acct, Account)
    assert acct.owner == "ann"
    assert acct._balance == 5
    assert acct.audit == ["x"]


def test_construct_fills_zero_values():
    acct = describe(Account).construct({"owner": "bob"}, validate=False)
    assert acct._balance == 0
    assert acct.audit == []
    pt = describe(Point).construct({"x": 1}, validate=False)
    assert pt.y == 0


def test_construct_runs_post_init_only_when_validating():
    with pytest.raises(ValueError):
        describe(Positive).construct({"n": 0}, validate=True)
    assert describe(Positive).construct({"n": 0}, validate=False).n == 0


@pytest.mark.parametrize(
    "target,expected",
    [
        (int, 0),
        (float, 0.0),
        (str, ""),
        (bool, False),
        (bytes, b""),
        (Point, None),
        (Box[int], None),
        (Optional[int], None),
    ],
)
def test_zero_value(target, expected):
    assert zero_value(target) == expected


# ---------------------------------------------------------------------------
# Assignability
# ---------------------------------------------------------------------------


def test_numeric_promotion():
    assert is_assignable(1, float)
    assert is_assignable(1, complex)
    assert is_assignable(1.5, complex)
    assert not is_assignable(1.5, int)
    assert not is_assignable(True, float)
    assert is_assignable(True, bool)


def test_any_object_and_typevars():
    assert is_assignable(object(), Any)
    assert is_assignable(3, object)
    assert is_assignable("x", T)
    assert is_assignable(3, TypeVar("N", bound=int))
    assert not is_assignable("3", TypeVar("N", bound=int))


def test_none_targets():
    assert is_assignable(None, None)
    assert is_assignable(None, type(None))
    assert not is_assignable(0, None)


def test_unions_and_literals():
    assert is_assignable(None, Optional[int])
    assert is_assignable(3, int | None)
    assert not is_assignable("3", int | None)
    assert is_assignable("a", Literal["a", "b"])
    assert not is_assignable("c", Literal["a", "b"])
    assert not is_assignable(1, Literal[True])


def test_protocols():
    assert is_assignable(Rect(1, 2), Shaper)
    assert not is_assignable(Point(1, 2), Shaper)
    # isinstance() is not available on non-runtime protocols
    assert not is_assignable(Rect(1, 2), Named)


def test_parameterized_types():
    assert is_assignable(Box(42), Box[int])
    assert not is_assignable(Box(42), Box[str])
    assert is_assignable(Immutable(1), Immutable[int])
    assert not is_assignable(Immutable("x"), Immutable[int])
    assert not is_assignable(Point(1, 2), Box[int])
    assert is_assignable([1, 2], list[int])
    assert not is_assignable([1, "x"], list[int])


def test_non_runtime_protocols_match_by_attributes():
    assert is_assignable(Tag("x"), Named)
    assert not is_assignable(Point(1, 2), Named)


@pytest.mark.parametrize(
    "value,target,expected",
    [
        ([Point(1, 2)], list[Point], True),
        ([Point(1, 2), "p"], list[Point], False),
        ({"a": 1}, dict[str, int], True),
        ({"a": "1"}, dict[str, int], False),
        ({1: 1}, dict[str, int], False),
        ((1, "a"), tuple[int, str], True),
        ((1, "a", 2), tuple[int, str], False),
        ((1, 2, 3), tuple[int, ...], True),
        ((1, "a"), tuple[int, ...], False),
        ({1, 2}, set[int], True),
        (frozenset({"a"}), frozenset[int], False),
        ([], list[Point], True),
    ],
)
def test_container_elements_are_checked(value, target, expected):
    assert is_assignable(value, target) is expected


def test_missing_fields_take_zero_of_their_annotation():
    desc = describe(Account)
    assert desc.fields[0].zero() == ""
    assert desc.fields[1].zero() == 0
    assert describe(Point).construct({}, validate=False) == Point(0, 0)
