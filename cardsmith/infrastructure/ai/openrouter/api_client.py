"""OpenRouter chat completions client."""

import math

import httpx
import structlog
from pydantic import ValidationError

from cardsmith.application.common.result import Failure, Result, Success
from cardsmith.infrastructure.ai.openrouter.dto import (
    ChatCompletionRequest,
    ChatCompletionResponse,
)
from cardsmith.infrastructure.ai.openrouter.errors import ProviderErrorKind, ProviderFailure

logger = structlog.get_logger(__name__)

_STATUS_KINDS: dict[int, ProviderErrorKind] = {
    400: ProviderErrorKind.INVALID_REQUEST,
    401: ProviderErrorKind.AUTHENTICATION,
    403: ProviderErrorKind.AUTHENTICATION,
    422: ProviderErrorKind.INVALID_REQUEST,
    429: ProviderErrorKind.RATE_LIMITED,
    500: ProviderErrorKind.SERVER_ERROR,
    502: ProviderErrorKind.SERVER_ERROR,
    503: ProviderErrorKind.SERVER_ERROR,
    504: ProviderErrorKind.SERVER_ERROR,
}

_STATUS_MESSAGES: dict[ProviderErrorKind, str] = {
    ProviderErrorKind.INVALID_REQUEST: "Invalid request",
    ProviderErrorKind.AUTHENTICATION: "Invalid API key",
    ProviderErrorKind.RATE_LIMITED: "Rate limit exceeded",
    ProviderErrorKind.SERVER_ERROR: "Server error",
}


class OpenRouterApiClient:
    """
    Single-attempt HTTP client for POST /chat/completions.

    Provider faults are returned as Failure values, never raised, so the
    retry policy and circuit breaker can decide by kind.
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        timeout_seconds: float = 30.0,
        app_url: str | None = None,
        app_name: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        headers = {"Authorization": f"Bearer {api_key}"}
        if app_url:
            headers["HTTP-Referer"] = app_url
        if app_name:
            headers["X-Title"] = app_name
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            headers=headers,
            timeout=timeout_seconds,
            transport=transport,
        )

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    async def send(
        self, request: ChatCompletionRequest
    ) -> Result[ChatCompletionResponse, ProviderFailure]:
        """Send one completion request and classify the outcome."""
        logger.info("openrouter_request_sent", model=request.model)

        try:
            response = await self._client.post("/chat/completions", json=request.to_payload())
        except httpx.TransportError as e:
            logger.warning("openrouter_transport_error", error_type=type(e).__name__, error=str(e))
            return Failure(
                ProviderFailure(
                    kind=ProviderErrorKind.TRANSPORT,
                    message=f"Transport error: {type(e).__name__}",
                )
            )

        if response.is_success:
            return self._parse_completion(response)
        return Failure(self._classify_error(response))

    def _parse_completion(
        self, response: httpx.Response
    ) -> Result[ChatCompletionResponse, ProviderFailure]:
        try:
            return Success(ChatCompletionResponse.model_validate_json(response.content))
        except ValidationError as e:
            logger.error("openrouter_invalid_envelope", error=str(e))
            return Failure(
                ProviderFailure(
                    kind=ProviderErrorKind.INVALID_RESPONSE,
                    message="Response is not a chat completion",
                    status_code=response.status_code,
                    response_body=response.text,
                )
            )

    def _classify_error(self, response: httpx.Response) -> ProviderFailure:
        status = response.status_code
        body = response.text
        logger.error("openrouter_api_error", status=status, body=body)

        kind = _STATUS_KINDS.get(status, ProviderErrorKind.UNEXPECTED)
        return ProviderFailure(
            kind=kind,
            message=_STATUS_MESSAGES.get(kind, "Unexpected error"),
            status_code=status,
            response_body=body,
            retry_after=(
                parse_retry_after(response.headers.get("Retry-After"))
                if kind is ProviderErrorKind.RATE_LIMITED
                else None
            ),
        )


def parse_retry_after(value: str | None) -> float | None:
    """Seconds from a Retry-After header; None when absent or not a number."""
    if value is None:
        return None
    try:
        seconds = float(value.strip())
    except ValueError:
        return None
    return seconds if math.isfinite(seconds) and seconds >= 0 else None
