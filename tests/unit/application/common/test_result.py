import pytest

from cardsmith.application.common.result import Failure, Success


class TestSuccess:
    def test_exposes_value(self) -> None:
        result = Success(42)

        assert result.is_success
        assert not result.is_failure
        assert result.unwrap() == 42

    def test_has_no_error(self) -> None:
        with pytest.raises(ValueError, match="Cannot get error from Success"):
            Success(42).unwrap_error()

    def test_offers_only_unwrap_accessors(self) -> None:
        assert not hasattr(Success(42), "map")


class TestFailure:
    def test_exposes_error(self) -> None:
        result = Failure("boom")

        assert result.is_failure
        assert not result.is_success
        assert result.unwrap_error() == "boom"

    def test_has_no_value(self) -> None:
        with pytest.raises(ValueError, match="Cannot get value from Failure"):
            Failure("boom").unwrap()

    def test_offers_only_unwrap_accessors(self) -> None:
        assert not hasattr(Failure("boom"), "map")
