"""Option, Either and Option-like probing."""

from dataclasses import dataclass

import pytest

from structbridge import (
    BridgeError,
    Immutable,
    Left,
    NoSuchElementError,
    Nothing,
    Option,
    Right,
    Some,
    Tuple,
    Tuple3,
    copy,
    equal,
    get_some_value,
    is_defined,
    to_option,
)


@dataclass
class Point:
    x: int
    y: int


@dataclass
class Maybe:
    """Ad hoc Option encoding: a defined flag next to a value."""

    defined: object
    value: object = None


class Opt:
    """Method-based Option encoding."""

    def __init__(self, value=None, ok=False):
        self._value = value
        self._ok = ok

    def is_defined(self):
        return self._ok

    def get(self):
        return self._value


class Contradiction:
    defined = True
    value = 1

    def is_defined(self):
        return False


# ---------------------------------------------------------------------------
# Some / Nothing
# ---------------------------------------------------------------------------


def test_some_basics():
    some = Some(10)
    assert some.is_defined()
    assert not some.is_empty()
    assert some.get() == 10
    assert some.get_or_else(20) == 10


def test_nothing_basics():
    none = Nothing()
    assert not none.is_defined()
    assert none.is_empty()
    assert none.get_or_else(20) == 20
    with pytest.raises(NoSuchElementError):
        none.get()


def test_no_such_element_is_lookup_error():
    with pytest.raises(LookupError):
        Nothing().get()


def test_map():
    assert Some(10).map(lambda v: "val").get() == "val"
    assert Nothing().map(lambda v: "val").is_empty()


def test_flat_map():
    assert Some(10).flat_map(lambda v: Some("val")).get() == "val"
    assert Some(10).flat_map(lambda v: Nothing()).is_empty()
    assert Nothing().flat_map(lambda v: Some("val")).is_empty()


def test_flat_map_accepts_any_option_shape():
    result = Some(1).flat_map(lambda v: Maybe(True, v + 1))
    assert isinstance(result, Option)
    assert result.get() == 2


def test_filter():
    assert Some(10).filter(lambda v: v == 10).get() == 10
    assert Some(10).filter(lambda v: v == 20).is_empty()
    assert Nothing().filter(lambda v: True).is_empty()


def test_for_each():
    seen = []
    Some(10).for_each(seen.append)
    Nothing().for_each(seen.append)
    assert seen == [10]


def test_unapply():
    assert Some(10).unapply(10) == (10, True)
    assert Some(10).unapply(20)[1] is False
    assert Nothing().unapply(10)[1] is False


def test_copy_and_equal():
    p = Point(1, 2)
    c = Some(p).copy()
    assert c.get() == p
    assert c.get() is not p
    assert copy(Nothing()).is_empty()
    assert Some(1) == Some(1)
    assert Some(1) != Some(2)
    assert Some(1) != Nothing()
    assert Nothing() == Nothing()
    assert Some(1) != 1
    assert hash(Some(1)) == hash(Some(1))


def test_generic_alias_construction():
    assert Some[int](3).get() == 3


# ---------------------------------------------------------------------------
# Probing
# ---------------------------------------------------------------------------


def test_both_encodings_agree():
    assert is_defined(Some(1)) is True
    assert is_defined(Maybe(True, 1)) is True
    assert is_defined(Opt(1, True)) is True
    assert is_defined(Nothing()) is False
    assert is_defined(Maybe(False)) is False
    assert is_defined(Opt()) is False


def test_defined_flag_may_be_wrapped():
    assert is_defined(Maybe(Immutable(True), 1))
    assert not is_defined(Maybe(Immutable(False), 1))


def test_one_wrapper_layer_is_looked_through():
    assert is_defined(Immutable(Some(1)))
    assert get_some_value(Immutable(Maybe(True, 2))) == (2, True)


def test_method_encoding_takes_priority():
    assert not is_defined(Contradiction())


@pytest.mark.parametrize("value", [None, 5, "x", [1], Point(1, 2), Some, Maybe])
def test_non_options_are_not_defined(value):
    assert not is_defined(value)
    assert get_some_value(value) == (None, False)


def test_get_some_value():
    assert get_some_value(Some(3)) == (3, True)
    assert get_some_value(Opt("x", True)) == ("x", True)
    assert get_some_value(Maybe(True, Immutable(5))) == (5, True)
    assert get_some_value(Maybe(False, 5)) == (None, False)
    assert get_some_value(Nothing()) == (None, False)


def test_to_option():
    assert to_option(Maybe(True, 1)) == Some(1)
    assert to_option(Opt()) == Nothing()
    assert to_option(5) == Nothing()


# ---------------------------------------------------------------------------
# Either
# ---------------------------------------------------------------------------


def test_right_basics():
    r = Right(1)
    assert r.is_right()
    assert not r.is_left()
    assert r.get() == 1
    assert r.get_or_else(2) == 1
    assert r.map(lambda v: v + 1) == Right(2)
    assert r.flat_map(lambda v: Left("bad")) == Left("bad")
    assert r.to_option() == Some(1)


def test_left_basics():
    left = Left("e")
    assert left.is_left()
    assert left.get_or_else(2) == 2
    assert left.map(lambda v: v + 1) is left
    assert left.flat_map(lambda v: Right(v)) is left
    assert left.to_option().is_empty()
    with pytest.raises(NoSuchElementError):
        left.get()


def test_fold_and_swap():
    assert Left("e").fold(len, str) == 1
    assert Right(5).fold(len, str) == "5"
    assert Left("e").swap() == Right("e")
    assert Right(5).swap() == Left(5)


def test_either_equality():
    assert Left(1) == Left(1)
    assert Left(1) != Right(1)
    assert equal(Right(Point(1, 2)), Right(Point(1, 2)))


# ---------------------------------------------------------------------------
# Tuples
# ---------------------------------------------------------------------------


def test_tuples():
    t = Tuple(1, "a")
    assert (t.v1, t.v2) == (1, "a")
    t3 = Tuple3(1, "a", None)
    assert (t3.v1, t3.v2, t3.v3) == (1, "a", None)
    assert equal(Tuple(1, Point(0, 0)), Tuple(1, Point(0, 0)))


def test_error_message():
    with pytest.raises(BridgeError) as exc:
        Nothing().get()
    assert exc.value.msg == "get on empty Option"
