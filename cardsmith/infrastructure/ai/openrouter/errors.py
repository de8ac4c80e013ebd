"""
Provider failures as values.

The raw client, the retry policy and the circuit breaker pass these around
inside Result objects. They become exceptions only when they leave the
provider adapter, through ProviderFailure.to_exception().
"""

from dataclasses import dataclass
from enum import StrEnum

from cardsmith.exceptions import (
    ProviderAuthError,
    ProviderError,
    ProviderRequestError,
    ProviderResponseError,
    ProviderTransientError,
    ProviderUnavailableError,
)


class ProviderErrorKind(StrEnum):
    AUTHENTICATION = "AUTHENTICATION"
    INVALID_REQUEST = "INVALID_REQUEST"
    RATE_LIMITED = "RATE_LIMITED"
    SERVER_ERROR = "SERVER_ERROR"
    TRANSPORT = "TRANSPORT"
    INVALID_RESPONSE = "INVALID_RESPONSE"
    CIRCUIT_OPEN = "CIRCUIT_OPEN"
    UNEXPECTED = "UNEXPECTED"


_RETRYABLE_KINDS = frozenset(
    {
        ProviderErrorKind.RATE_LIMITED,
        ProviderErrorKind.SERVER_ERROR,
        ProviderErrorKind.TRANSPORT,
    }
)


@dataclass(frozen=True)
class ProviderFailure:
    """One failed call to the provider."""

    kind: ProviderErrorKind
    message: str
    status_code: int | None = None
    response_body: str | None = None
    retry_after: float | None = None

    @property
    def retryable(self) -> bool:
        return self.kind in _RETRYABLE_KINDS

    @property
    def counts_against_circuit(self) -> bool:
        """Whether the failure says something about the provider's health."""
        return self.retryable or self.kind is ProviderErrorKind.UNEXPECTED

    def to_exception(self) -> ProviderError:
        """Convert to the application exception for this kind of failure."""
        status = self.status_code
        body = self.response_body
        if self.kind is ProviderErrorKind.AUTHENTICATION:
            return ProviderAuthError(self.message, provider_status=status, response_body=body)
        if self.kind is ProviderErrorKind.INVALID_REQUEST:
            return ProviderRequestError(self.message, provider_status=status, response_body=body)
        if self.kind is ProviderErrorKind.INVALID_RESPONSE:
            return ProviderResponseError(self.message, provider_status=status, response_body=body)
        if self.kind is ProviderErrorKind.CIRCUIT_OPEN:
            return ProviderUnavailableError(self.message)
        if self.retryable:
            return ProviderTransientError(
                self.message,
                provider_status=status,
                response_body=body,
                retry_after=self.retry_after,
            )
        return ProviderError(self.message, provider_status=status, response_body=body)
