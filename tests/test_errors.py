"""Tests for the error taxonomy and cancellation helpers."""

import asyncio

import pytest
from klaw_optional import (
    Cancelled,
    CancelledError,
    EmptyValueError,
    InvalidArgumentError,
    MultipleMatchesError,
    OptionalError,
    WrongSideError,
    is_cancellation,
)
from klaw_optional.errors import require


class TestOptionalError:
    """Tests for OptionalError and its subclasses."""

    def test_message_and_code(self):
        """OptionalError keeps its message and code."""
        error = OptionalError('boom', code='x')
        assert error.message == 'boom'
        assert error.code == 'x'
        assert str(error) == 'boom'

    def test_repr(self):
        """The repr includes the code only when one is set."""
        assert repr(OptionalError('boom')) == "OptionalError('boom')"
        assert repr(OptionalError('boom', code='x')) == "OptionalError('boom', code='x')"

    @pytest.mark.parametrize(
        ('error', 'code', 'builtin'),
        [
            (InvalidArgumentError('pred'), 'invalid_argument', ValueError),
            (MultipleMatchesError(), 'multiple_matches', ValueError),
            (EmptyValueError(), 'empty_value', LookupError),
            (WrongSideError('left'), 'wrong_side', LookupError),
        ],
    )
    def test_codes(self, error, code, builtin):
        """Each error carries its code and a matching builtin base."""
        assert error.code == code
        assert isinstance(error, OptionalError)
        assert isinstance(error, builtin)

    def test_argument_name(self):
        """InvalidArgumentError names the argument."""
        error = InvalidArgumentError('items')
        assert error.argument == 'items'
        assert 'items' in error.message

    def test_require(self):
        """require() passes values through and rejects None."""
        assert require(0, 'x') == 0
        with pytest.raises(InvalidArgumentError):
            require(None, 'x')


class TestCancellation:
    """Tests for Cancelled, CancelledError and is_cancellation."""

    def test_struct_exception_round_trip(self):
        """Cancelled and CancelledError convert into each other."""
        error = Cancelled('timeout').to_exception()
        assert isinstance(error, CancelledError)
        assert error.reason == 'timeout'
        assert error.code == 'cancelled'
        assert error.to_struct() == Cancelled('timeout')

    def test_default_message(self):
        """A reasonless CancelledError has a generic message."""
        assert CancelledError().message == 'Operation cancelled'

    def test_is_cancellation(self):
        """Library and asyncio cancellations are recognised."""
        assert is_cancellation(CancelledError())
        assert is_cancellation(asyncio.CancelledError())
        assert not is_cancellation(ValueError())
        assert not is_cancellation(None)

    async def test_is_cancellation_backend(self):
        """The running backend's cancellation class is recognised."""
        import anyio

        assert is_cancellation(anyio.get_cancelled_exc_class()())

    def test_is_cancellation_cause_chain(self):
        """A cancellation in the __cause__ chain counts."""
        try:
            try:
                raise CancelledError('inner')
            except CancelledError as e:
                raise RuntimeError('wrapped') from e
        except RuntimeError as outer:
            assert is_cancellation(outer)

    def test_is_cancellation_group(self):
        """Exception groups containing a cancellation count."""
        group = BaseExceptionGroup('many', [ValueError(), CancelledError()])
        assert is_cancellation(group)
        assert not is_cancellation(ExceptionGroup('many', [ValueError()]))
