"""Retry policy for provider calls that return Result values."""

import asyncio
from collections.abc import Awaitable, Callable
from typing import TypeVar

import structlog
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_result,
    stop_after_attempt,
    wait_exponential,
)
from tenacity.wait import wait_base

from cardsmith.application.common.result import Failure, Result
from cardsmith.infrastructure.ai.openrouter.errors import ProviderFailure

logger = structlog.get_logger(__name__)

T = TypeVar("T")


def _is_retryable_failure(result: object) -> bool:
    return isinstance(result, Failure) and result.error.retryable


def _last_result(retry_state: RetryCallState) -> object:
    # Attempts are exhausted: hand back the last Failure instead of raising RetryError
    return retry_state.outcome.result()  # type: ignore[union-attr]


class wait_retry_after(wait_base):  # noqa: N801
    """Wait for the provider's Retry-After hint when it sent one, else fall back."""

    def __init__(self, fallback: wait_base) -> None:
        self.fallback = fallback

    def __call__(self, retry_state: RetryCallState) -> float:
        result = retry_state.outcome.result() if retry_state.outcome else None
        if isinstance(result, Failure) and result.error.retry_after is not None:
            return float(result.error.retry_after)
        return self.fallback(retry_state)


class RetryPolicy:
    """
    Retries rate-limited, server-error and transport failures.

    The n-th retry waits initial_backoff * multiplier ** (n - 1) seconds,
    capped at max_backoff. max_attempts counts every attempt, the first
    one included. Exceptions raised by the attempt are not retried.
    """

    def __init__(
        self,
        max_attempts: int = 3,
        initial_backoff: float = 1.0,
        max_backoff: float = 10.0,
        multiplier: float = 2.0,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self.max_attempts = max_attempts
        self.wait = wait_retry_after(
            wait_exponential(multiplier=initial_backoff, exp_base=multiplier, max=max_backoff)
        )
        self._sleep = sleep

    async def call(
        self, attempt: Callable[[], Awaitable[Result[T, ProviderFailure]]]
    ) -> Result[T, ProviderFailure]:
        """Run the attempt until it succeeds, fails for good or attempts run out."""
        retrying = AsyncRetrying(
            stop=stop_after_attempt(self.max_attempts),
            wait=self.wait,
            retry=retry_if_result(_is_retryable_failure),
            retry_error_callback=_last_result,
            before_sleep=_log_retry,
            sleep=self._sleep,
            reraise=True,
        )
        return await retrying(attempt)


def _log_retry(retry_state: RetryCallState) -> None:
    result = retry_state.outcome.result() if retry_state.outcome else None
    kind = result.error.kind.value if isinstance(result, Failure) else None
    logger.warning(
        "openrouter_request_retrying",
        attempt=retry_state.attempt_number,
        failure_kind=kind,
        wait_seconds=retry_state.next_action.sleep if retry_state.next_action else None,
    )
