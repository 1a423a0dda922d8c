"""Tests for verifying import styles work correctly."""

import klaw_optional


class TestFlatImports:
    """Verify flat imports from klaw_optional work."""

    def test_containers(self) -> None:
        """Test importing the container types from root."""
        from klaw_optional import Either, Failure, Left, Maybe, Nothing, NothingType, Right, Some, Success, Try

        option: Maybe[int] = Some(1)
        assert option.is_some()
        assert isinstance(Nothing, NothingType)
        either: Either[int, str] = Left(1)
        assert either.is_left()
        assert Right('r').is_right()
        outcome: Try[int] = Success(1)
        assert outcome.success
        assert not Failure(ValueError()).success

    def test_async(self) -> None:
        """Test importing async utilities from root."""
        from klaw_optional import AsyncEither, AsyncMaybe, AsyncTry, CancellationToken, Pending, async_first_matching

        assert AsyncMaybe is not None
        assert AsyncEither is not None
        assert AsyncTry is not None
        assert Pending is not None
        assert not CancellationToken().cancelled
        assert callable(async_first_matching)

    def test_decorators(self) -> None:
        """Test importing decorators from root."""
        from klaw_optional import nullable, nullable_async, safe, safe_async

        assert callable(safe)
        assert callable(safe_async)
        assert callable(nullable)
        assert callable(nullable_async)

    def test_queries(self) -> None:
        """Test importing sequence queries from root."""
        from klaw_optional import first_matching, values_of

        assert first_matching([1]) == klaw_optional.Some(1)
        assert list(values_of([klaw_optional.Some(2)])) == [2]


class TestModuleImports:
    """Verify module-style imports work."""

    def test_modules(self) -> None:
        """Constructor modules are reachable from root."""
        from klaw_optional import either, maybe, query, try_

        assert maybe.from_nullable(None) is maybe.Nothing
        assert either.Left(1).left == 1
        assert try_.of(int, '42') == try_.Success(42)
        assert query.first_matching([]) is maybe.Nothing

    def test_all_names_resolve(self) -> None:
        """Every name in __all__ is an attribute of the package."""
        missing = [name for name in klaw_optional.__all__ if not hasattr(klaw_optional, name)]
        assert missing == []
