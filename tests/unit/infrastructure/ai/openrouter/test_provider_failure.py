import pytest

from cardsmith.exceptions import (
    ProviderAuthError,
    ProviderError,
    ProviderRequestError,
    ProviderResponseError,
    ProviderTransientError,
    ProviderUnavailableError,
)
from cardsmith.infrastructure.ai.openrouter.errors import ProviderErrorKind, ProviderFailure


@pytest.mark.parametrize(
    ("kind", "exception_type"),
    [
        (ProviderErrorKind.AUTHENTICATION, ProviderAuthError),
        (ProviderErrorKind.INVALID_REQUEST, ProviderRequestError),
        (ProviderErrorKind.INVALID_RESPONSE, ProviderResponseError),
        (ProviderErrorKind.RATE_LIMITED, ProviderTransientError),
        (ProviderErrorKind.SERVER_ERROR, ProviderTransientError),
        (ProviderErrorKind.TRANSPORT, ProviderTransientError),
        (ProviderErrorKind.CIRCUIT_OPEN, ProviderUnavailableError),
    ],
)
def test_to_exception_maps_kind(kind: ProviderErrorKind, exception_type: type) -> None:
    exception = ProviderFailure(kind=kind, message="failed").to_exception()

    assert type(exception) is exception_type
    assert exception.message == "failed"


def test_unexpected_maps_to_base_provider_error() -> None:
    exception = ProviderFailure(
        kind=ProviderErrorKind.UNEXPECTED, message="Unexpected error", status_code=418
    ).to_exception()

    assert type(exception) is ProviderError
    assert exception.provider_status == 418


def test_transient_exception_keeps_retry_after_and_status() -> None:
    exception = ProviderFailure(
        kind=ProviderErrorKind.RATE_LIMITED,
        message="Rate limit exceeded",
        status_code=429,
        response_body="slow down",
        retry_after=12.0,
    ).to_exception()

    assert isinstance(exception, ProviderTransientError)
    assert exception.retry_after == 12.0
    assert exception.provider_status == 429
    assert exception.response_body == "slow down"
    assert exception.status_code == 503


def test_circuit_open_is_transient() -> None:
    exception = ProviderFailure(
        kind=ProviderErrorKind.CIRCUIT_OPEN, message="open"
    ).to_exception()

    assert isinstance(exception, ProviderTransientError)
