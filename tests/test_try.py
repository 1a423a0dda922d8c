"""Tests for Try type (Success and Failure) and try_.of capture."""

import asyncio

import pytest
from hypothesis import given
from hypothesis import strategies as st
from klaw_optional import (
    CancelledError,
    Failure,
    InvalidArgumentError,
    Left,
    Nothing,
    Right,
    Some,
    Success,
    init,
    try_,
)
from strategies import exceptions, tries, values


def boom(*_):
    raise ValueError('boom')


class TestTryOf:
    """Tests for try_.of capture semantics."""

    def test_of_success(self):
        """A returning function becomes Success."""
        assert try_.of(divmod, 7, 2) == Success((3, 1))

    def test_of_failure(self):
        """A raising function becomes Failure holding the exception."""
        result = try_.of(int, 'abc')
        assert not result.success
        assert isinstance(result.error, ValueError)

    def test_of_kwargs(self):
        """Keyword arguments are forwarded."""
        assert try_.of(int, '11', base=2) == Success(3)

    def test_of_none_fn_raises(self):
        """A None function is an argument error, not a Failure."""
        with pytest.raises(InvalidArgumentError):
            try_.of(None)  # type: ignore[arg-type]

    def test_of_reraises_cancellation(self):
        """Cancellation is never captured silently."""

        def cancelled():
            raise CancelledError('stop')

        with pytest.raises(CancelledError):
            try_.of(cancelled)

    def test_of_reraises_backend_cancellation(self):
        """The async backend's cancellation class propagates too."""

        def cancelled():
            raise asyncio.CancelledError()

        with pytest.raises(asyncio.CancelledError):
            try_.of(cancelled)

    def test_of_suppress_cancellation(self):
        """suppress_cancellation captures cancellation as Failure."""

        def cancelled():
            raise CancelledError('stop')

        result = try_.of(cancelled, suppress_cancellation=True)
        assert isinstance(result.error, CancelledError)

    def test_of_respects_capture_config(self):
        """Exceptions outside the configured capture types propagate."""
        init(capture=(ValueError,))
        assert isinstance(try_.of(boom).error, ValueError)
        with pytest.raises(KeyError):
            try_.of({}.__getitem__, 'missing')

    def test_of_does_not_capture_keyboard_interrupt(self):
        """BaseException outside Exception is not captured by default."""

        def interrupt():
            raise KeyboardInterrupt

        with pytest.raises(KeyboardInterrupt):
            try_.of(interrupt)

    @given(values)
    def test_capture_identity(self, v):
        """of(lambda: v) is Success(v)."""
        assert try_.of(lambda: v) == Success(v)

    @given(exceptions)
    def test_capture_failure(self, e):
        """A raised exception is captured as-is."""

        def raiser():
            raise e

        assert try_.of(raiser).error is e


class TestTryAccess:
    """Tests for success, value and error."""

    def test_success_properties(self):
        """Success exposes the value and no error."""
        s = Success(1)
        assert s.success
        assert s.value == 1
        assert s.error is None

    def test_failure_value_reraises(self):
        """Reading the value of a Failure re-raises its error."""
        error = ValueError('bad')
        with pytest.raises(ValueError) as exc_info:
            _ = Failure(error).value
        assert exc_info.value is error

    def test_failure_rejects_none(self):
        """Failure requires an error."""
        with pytest.raises(InvalidArgumentError):
            Failure(None)  # type: ignore[arg-type]

    def test_failure_rejects_non_exception(self):
        """Failure requires an exception instance."""
        with pytest.raises(TypeError):
            Failure('bad')  # type: ignore[arg-type]

    def test_iteration(self):
        """Iterating yields the payload zero or one time."""
        assert list(Success(1)) == [1]
        assert list(Failure(ValueError())) == []


class TestTryMap:
    """Tests for map (select)."""

    def test_map_success(self):
        """map transforms a success value."""
        assert Success(2).map(lambda x: x * 2) == Success(4)

    def test_map_captures_exceptions(self):
        """A raising selector becomes Failure."""
        result = Success(2).map(boom)
        assert isinstance(result.error, ValueError)

    def test_map_flat(self):
        """A Try returned by the selector is used directly."""
        assert Success(2).map(lambda x: Success(x + 1)) == Success(3)
        error = KeyError('k')
        assert Success(2).map(lambda _: Failure(error)) == Failure(error)

    def test_map_failure_passes_through(self):
        """The first failure wins and the selector is not called."""
        failed = Failure(ValueError('first'))
        calls = []
        assert failed.map(calls.append) is failed
        assert calls == []

    @given(tries)
    def test_map_composition(self, t):
        """map(f).map(g) equals map(g . f)."""

        def f(x):
            return (x, 'f')

        def g(x):
            return [x, 'g']

        assert t.map(f).map(g) == t.map(lambda x: g(f(x)))


class TestTryDefaults:
    """Tests for or_, value_or_default and select_or_default."""

    def test_or(self):
        """or_ returns self on Success, the alternative on Failure."""
        assert Success(1).or_(Success(2)) == Success(1)
        assert Failure(ValueError()).or_(Success(2)) == Success(2)
        assert Failure(ValueError()).or_(lambda: Success(3)) == Success(3)

    def test_value_or_default(self):
        """value_or_default substitutes on Failure."""
        assert Success(1).value_or_default(0) == 1
        assert Failure(ValueError()).value_or_default(0) == 0
        assert Failure(ValueError()).value_or_default(default_factory=lambda: 9) == 9

    def test_select_or_default(self):
        """select_or_default applies the selector or falls back."""
        assert Success(2).select_or_default(str, 'd') == '2'
        assert Failure(ValueError()).select_or_default(str, 'd') == 'd'
        assert Success(2).select_or_default(lambda _: Failure(ValueError()), 'd') == 'd'


class TestTryThrow:
    """Tests for throw."""

    def test_throw_success_returns_self(self):
        """Success has nothing to raise."""
        s = Success(1)
        assert s.throw() is s

    def test_throw_failure_raises(self):
        """throw() re-raises the captured error."""
        with pytest.raises(ValueError):
            Failure(ValueError('x')).throw()

    def test_throw_matching_type(self):
        """throw(type) raises only for a matching error."""
        failed = Failure(ValueError('x'))
        with pytest.raises(ValueError):
            failed.throw(ValueError)
        with pytest.raises(ValueError):
            failed.throw((KeyError, ValueError))
        assert failed.throw(KeyError) is failed


class TestTryDo:
    """Tests for the do family."""

    def test_do_dispatch(self):
        """do runs the callback for the outcome."""
        seen = []
        Success(1).do(on_value=seen.append, on_error=seen.append)
        error = ValueError()
        Failure(error).do(on_value=seen.append, on_error=seen.append)
        assert seen == [1, error]

    def test_do_throw_if_error(self):
        """With throw_if_error and no on_error, a Failure re-raises."""
        with pytest.raises(ValueError):
            Failure(ValueError()).do(on_value=print, throw_if_error=True)
        Failure(ValueError()).do(on_value=print)

    def test_do_both_none_raises(self):
        """Omitting both callbacks is an argument error."""
        with pytest.raises(InvalidArgumentError):
            Success(1).do()

    def test_do_if_error(self):
        """do_if_error only runs for Failure."""
        seen = []
        Success(1).do_if_error(seen.append)
        Failure(KeyError()).do_if_error(lambda e: seen.append(type(e)))
        assert seen == [KeyError]


class TestTryConversions:
    """Tests for unwrap, to_maybe and as_either."""

    def test_unwrap(self):
        """unwrap surfaces the inner Try; the outer failure wins."""
        inner_error = KeyError()
        outer = Failure(ValueError())
        assert Success(Success(1)).unwrap() == Success(1)
        assert Success(Failure(inner_error)).unwrap() == Failure(inner_error)
        assert outer.unwrap() is outer

    def test_to_maybe(self):
        """Success becomes Some, Failure becomes Nothing."""
        assert Success(1).to_maybe() == Some(1)
        assert Failure(ValueError()).to_maybe() is Nothing

    def test_to_maybe_reraises_cancellation(self):
        """A captured cancellation is re-raised unless suppressed."""
        failed = Failure(CancelledError('stop'))
        with pytest.raises(CancelledError):
            failed.to_maybe()
        assert failed.to_maybe(suppress_cancellation=True) is Nothing

    @given(st.one_of(values.map(Some), st.just(Nothing)))
    def test_to_maybe_round_trip(self, m):
        """Maybe.as_try().to_maybe(False) is the identity."""
        assert m.as_try().to_maybe(False) == m

    def test_as_either(self):
        """Success becomes Left; Failure projects into Right."""
        error = ValueError('bad')
        assert Success(1).as_either('other') == Left(1)
        assert Failure(error).as_either('other') == Right('other')
        assert Failure(error).as_either(other_factory=str) == Right('bad')


class TestTryModuleFunctions:
    """Tests for module-level helpers."""

    def test_from_value_and_error(self):
        """from_value and from_error build the variants."""
        error = ValueError()
        assert try_.from_value(1) == Success(1)
        assert try_.from_error(error) == Failure(error)

    def test_is_try(self):
        """is_try recognises both variants only."""
        assert try_.is_try(Success(1))
        assert try_.is_try(Failure(ValueError()))
        assert not try_.is_try(Some(1))

    def test_unwrap_function(self):
        """try_.unwrap leaves a non-nested Try unchanged."""
        assert try_.unwrap(Success(1)) == Success(1)
