"""Custom exception hierarchy for the cardsmith application."""


class CardsmithError(Exception):
    """Base exception for all cardsmith application errors."""

    def __init__(self, message: str, status_code: int = 500) -> None:
        """Initialize exception with message and optional status code."""
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class NotFoundError(CardsmithError):
    """Resource not found error."""

    def __init__(self, message: str) -> None:
        """Initialize with message and 404 status code."""
        super().__init__(message, status_code=404)


class GenerationSessionNotFoundError(NotFoundError):
    """Generation session not found error."""

    def __init__(self, session_id: object) -> None:
        self.session_id = session_id
        super().__init__(f"Generation session with id {session_id} not found")


class ProviderError(CardsmithError):
    """
    The AI provider could not produce suggestions.

    Carries the HTTP status and body returned by the provider when there was one.
    """

    def __init__(
        self,
        message: str,
        *,
        provider_status: int | None = None,
        response_body: str | None = None,
        status_code: int = 502,
    ) -> None:
        self.provider_status = provider_status
        self.response_body = response_body
        super().__init__(message, status_code=status_code)


class ProviderAuthError(ProviderError):
    """Provider rejected our credentials (401/403). Not retried."""


class ProviderRequestError(ProviderError):
    """Provider rejected the request as malformed (400/422). Not retried."""


class ProviderTransientError(ProviderError):
    """Rate limit, server error or transport failure that outlived all retries."""

    def __init__(
        self,
        message: str,
        *,
        provider_status: int | None = None,
        response_body: str | None = None,
        retry_after: float | None = None,
    ) -> None:
        self.retry_after = retry_after
        super().__init__(
            message,
            provider_status=provider_status,
            response_body=response_body,
            status_code=503,
        )


class ProviderUnavailableError(ProviderTransientError):
    """Circuit breaker is open; the provider was not called."""


class ProviderResponseError(ProviderError):
    """Provider answered with content that does not match the expected schema. Not retried."""


class InvalidResponseError(ProviderResponseError):
    """Provider adapter returned no result at all."""
