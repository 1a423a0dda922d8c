"""Tests for Maybe type (Some and Nothing)."""

import pytest
from hypothesis import given
from hypothesis import strategies as st
from klaw_optional import (
    EmptyValueError,
    Failure,
    InvalidArgumentError,
    Left,
    Nothing,
    NothingType,
    Right,
    Some,
    Success,
    maybe,
)
from strategies import maybes, values


class TestMaybeCreation:
    """Tests for Some, Nothing and the module constructors."""

    def test_some_creation(self):
        """Some wraps a value."""
        assert Some(42).value == 42

    def test_some_with_none(self):
        """Some(None) is a present value, not Nothing."""
        some = Some(None)
        assert some.is_some()
        assert some.value is None
        assert some != Nothing

    def test_nothing_is_singleton(self):
        """none() always returns the Nothing singleton."""
        assert maybe.none() is Nothing
        assert isinstance(Nothing, NothingType)

    def test_from_value_keeps_none(self):
        """from_value treats None as ordinary data."""
        assert maybe.from_value(None) == Some(None)

    def test_from_nullable(self):
        """from_nullable maps None to Nothing."""
        assert maybe.from_nullable(3) == Some(3)
        assert maybe.from_nullable(None) is Nothing
        assert maybe.from_nullable(0) == Some(0)

    def test_some_is_frozen(self):
        """Some instances are immutable."""
        with pytest.raises(AttributeError):
            Some(1).value = 2  # type: ignore[misc]

    def test_is_maybe(self):
        """is_maybe recognises both variants only."""
        assert maybe.is_maybe(Some(1))
        assert maybe.is_maybe(Nothing)
        assert not maybe.is_maybe(1)
        assert not maybe.is_maybe(None)


class TestMaybeAccess:
    """Tests for tag tests, value access and iteration."""

    def test_tags(self):
        """is_some and is_none reflect the variant."""
        assert Some(1).is_some() and not Some(1).is_none()
        assert Nothing.is_none() and not Nothing.is_some()

    def test_nothing_value_raises(self):
        """Reading the value of Nothing raises EmptyValueError."""
        with pytest.raises(EmptyValueError) as exc_info:
            _ = Nothing.value
        assert exc_info.value.code == 'empty_value'

    def test_iteration(self):
        """Iterating yields the payload zero or one time."""
        assert list(Some(5)) == [5]
        assert list(Nothing) == []


class TestMaybeMap:
    """Tests for map and filter."""

    def test_map_some(self):
        """map transforms the contained value."""
        assert Some(2).map(lambda x: x + 1) == Some(3)

    def test_map_nothing_does_not_call(self):
        """map on Nothing never invokes the selector."""
        calls = []
        assert Nothing.map(calls.append) is Nothing
        assert calls == []

    def test_map_binds_maybe_result(self):
        """A Maybe returned by the selector is not double wrapped."""
        assert Some(2).map(lambda x: Some(x * 2)) == Some(4)
        assert Some(2).map(lambda _: Nothing) is Nothing

    def test_map_to_none_is_present(self):
        """Mapping to None yields Some(None)."""
        assert Some(1).map(lambda _: None) == Some(None)

    def test_map_none_selector_raises(self):
        """A None selector is rejected on both variants."""
        with pytest.raises(InvalidArgumentError) as exc_info:
            Some(1).map(None)  # type: ignore[arg-type]
        assert exc_info.value.argument == 'selector'
        with pytest.raises(InvalidArgumentError):
            Nothing.map(None)  # type: ignore[arg-type]

    def test_filter(self):
        """filter keeps the value only when the predicate holds."""
        assert Some(3).filter(lambda x: x > 2) == Some(3)
        assert Some(1).filter(lambda x: x > 2) is Nothing
        assert Nothing.filter(lambda x: True) is Nothing

    @given(values)
    def test_map_default_law(self, v):
        """Mapping then defaulting equals applying the function."""
        assert Some(v).map(repr).value_or_default('d') == repr(v)
        assert Nothing.map(repr).value_or_default('d') == 'd'

    @given(maybes)
    def test_map_composition(self, m):
        """map(f).map(g) equals map(g . f)."""

        def f(x):
            return (x, 'f')

        def g(x):
            return [x, 'g']

        assert m.map(f).map(g) == m.map(lambda x: g(f(x)))


class TestMaybeDefaults:
    """Tests for value_or_default and select_or_default."""

    def test_value_or_default(self):
        """Present values win over the default."""
        assert Some(1).value_or_default(0) == 1
        assert Nothing.value_or_default(0) == 0
        assert Nothing.value_or_default() is None

    def test_default_factory_is_lazy(self):
        """The default factory runs only when empty."""
        calls = []

        def factory():
            calls.append('called')
            return 7

        assert Some(1).value_or_default(default_factory=factory) == 1
        assert calls == []
        assert Nothing.value_or_default(default_factory=factory) == 7
        assert calls == ['called']

    def test_select_or_default(self):
        """select_or_default applies the selector or falls back."""
        assert Some(2).select_or_default(lambda x: x * 10, 0) == 20
        assert Nothing.select_or_default(lambda x: x * 10, 0) == 0

    def test_select_or_default_unwraps_maybe(self):
        """A Maybe from the selector is unwrapped against the default."""
        assert Some(2).select_or_default(lambda x: Some(x + 1), 0) == 3
        assert Some(2).select_or_default(lambda x: Nothing, 0) == 0


class TestMaybeOr:
    """Tests for or_ alternatives."""

    def test_or_keeps_present(self):
        """A present Maybe ignores the alternative."""
        assert Some(1).or_(Some(2)) == Some(1)

    def test_or_uses_alternative(self):
        """An empty Maybe yields the alternative."""
        assert Nothing.or_(Some(2)) == Some(2)
        assert Nothing.or_(Nothing) is Nothing

    def test_or_generator_is_lazy(self):
        """A generator alternative runs only when empty."""
        calls = []

        def alt():
            calls.append('called')
            return Some(9)

        assert Some(1).or_(alt) == Some(1)
        assert calls == []
        assert Nothing.or_(alt) == Some(9)
        assert calls == ['called']

    def test_or_with_try(self):
        """A Try alternative makes both branches a Try."""
        assert Some(1).or_(Success(2)) == Success(1)
        assert Nothing.or_(Success(2)) == Success(2)

    def test_or_none_raises(self):
        """A None alternative is rejected."""
        with pytest.raises(InvalidArgumentError):
            Some(1).or_(None)  # type: ignore[arg-type]


class TestMaybeDo:
    """Tests for the do family."""

    def test_do_dispatches_by_tag(self):
        """Exactly one callback runs."""
        seen = []
        Some(1).do(on_value=seen.append, on_empty=lambda: seen.append('empty'))
        Nothing.do(on_value=seen.append, on_empty=lambda: seen.append('empty'))
        assert seen == [1, 'empty']

    def test_do_omitted_callback_is_noop(self):
        """A missing callback for the active tag does nothing."""
        seen = []
        Nothing.do(on_value=seen.append)
        Some(1).do(on_empty=lambda: seen.append('empty'))
        assert seen == []

    def test_do_both_none_raises(self):
        """Omitting both callbacks is an argument error."""
        with pytest.raises(InvalidArgumentError):
            Some(1).do()
        with pytest.raises(InvalidArgumentError):
            Nothing.do()

    def test_do_if_empty(self):
        """do_if_empty only runs for Nothing."""
        seen = []
        Some(1).do_if_empty(lambda: seen.append('some'))
        Nothing.do_if_empty(lambda: seen.append('nothing'))
        assert seen == ['nothing']


class TestMaybeConversions:
    """Tests for as_either, as_try and unwrap."""

    def test_as_either(self):
        """Present becomes Left, empty becomes Right(other)."""
        assert Some(1).as_either('missing') == Left(1)
        assert Nothing.as_either('missing') == Right('missing')

    def test_as_either_factory_is_lazy(self):
        """The right-hand factory runs only when empty."""
        calls = []

        def factory():
            calls.append('called')
            return 'made'

        assert Some(1).as_either(other_factory=factory) == Left(1)
        assert calls == []
        assert Nothing.as_either(other_factory=factory) == Right('made')

    @given(values, values)
    def test_as_either_round_trip(self, v, other):
        """as_either(...).to_maybe_left() returns the original Maybe."""
        assert Some(v).as_either(other).to_maybe_left() == Some(v)
        assert Nothing.as_either(other).to_maybe_left() is Nothing

    def test_as_try(self):
        """Present becomes Success, empty becomes Failure(EmptyValueError)."""
        assert Some(1).as_try() == Success(1)
        failed = Nothing.as_try()
        assert isinstance(failed, Failure)
        assert isinstance(failed.error, EmptyValueError)

    @given(maybes)
    def test_as_try_round_trip(self, m):
        """as_try().to_maybe() returns the original Maybe."""
        assert m.as_try().to_maybe() == m

    def test_unwrap(self):
        """unwrap flattens one level."""
        assert Some(Some(1)).unwrap() == Some(1)
        assert Some(Nothing).unwrap() is Nothing
        assert Nothing.unwrap() is Nothing

    @given(st.lists(values, max_size=5))
    def test_hashable(self, items):
        """Some and Nothing can be used as dict keys."""
        keyed = {Some(repr(i)): i for i in items}
        assert all(keyed[Some(repr(i))] == i for i in items)
        assert {Nothing: 1}[Nothing] == 1
