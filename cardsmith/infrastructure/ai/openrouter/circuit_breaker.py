"""
Circuit breaker for provider calls that return Result values.

CLOSED    calls pass; outcomes are recorded in a sliding window of the last
          N calls. Once the window is full and the failure rate reaches the
          threshold the circuit opens.
OPEN      calls fail fast with a CIRCUIT_OPEN failure, without calling the
          provider, until the wait duration has elapsed.
HALF_OPEN a limited number of trial calls pass. Any failed trial reopens the
          circuit; when every trial succeeds the circuit closes with an empty
          window.

Only failures that say something about the provider's health count. A
rejected API key or a malformed request is recorded as a success. Raised
exceptions and calls cancelled by a timeout count as failures.
"""

import asyncio
import time
from collections import deque
from collections.abc import Awaitable, Callable
from enum import StrEnum
from typing import TypeVar

import structlog

from cardsmith.application.common.result import Failure, Result
from cardsmith.infrastructure.ai.openrouter.errors import ProviderErrorKind, ProviderFailure

logger = structlog.get_logger(__name__)

T = TypeVar("T")


class CircuitState(StrEnum):
    CLOSED = "CLOSED"
    OPEN = "OPEN"
    HALF_OPEN = "HALF_OPEN"


class CircuitBreaker:
    """
    Process-wide breaker shared by every request going through one client.

    There is no await between admitting a call and updating state on the
    same event loop, so no lock is needed.
    """

    def __init__(
        self,
        sliding_window_size: int = 10,
        failure_rate_threshold: float = 50.0,
        wait_duration_in_open_state: float = 60.0,
        permitted_calls_in_half_open_state: int = 3,
        clock: Callable[[], float] = time.monotonic,
        name: str = "openrouter",
    ) -> None:
        self.sliding_window_size = sliding_window_size
        self.failure_rate_threshold = failure_rate_threshold
        self.wait_duration_in_open_state = wait_duration_in_open_state
        self.permitted_calls_in_half_open_state = permitted_calls_in_half_open_state
        self.name = name
        self._clock = clock

        self._state = CircuitState.CLOSED
        # True marks a failed call
        self._window: deque[bool] = deque(maxlen=sliding_window_size)
        self._opened_at = 0.0
        self._half_open_admitted = 0
        self._half_open_succeeded = 0

    @property
    def state(self) -> CircuitState:
        if (
            self._state is CircuitState.OPEN
            and self._clock() - self._opened_at >= self.wait_duration_in_open_state
        ):
            self._transition(CircuitState.HALF_OPEN)
        return self._state

    @property
    def failure_rate(self) -> float:
        """Failure rate of the window in percent, 0 when nothing was recorded."""
        if not self._window:
            return 0.0
        return 100.0 * sum(self._window) / len(self._window)

    async def call(
        self, operation: Callable[[], Awaitable[Result[T, ProviderFailure]]]
    ) -> Result[T, ProviderFailure]:
        """Run the operation if the circuit admits it and record its outcome."""
        if not self._try_acquire():
            logger.warning("circuit_breaker_rejected_call", breaker=self.name, state=self._state)
            return Failure(
                ProviderFailure(
                    kind=ProviderErrorKind.CIRCUIT_OPEN,
                    message="AI provider is temporarily unavailable (circuit open)",
                )
            )

        try:
            result = await operation()
        except (Exception, asyncio.CancelledError):
            # A call cut short by a timeout or cancellation still releases its trial slot
            self._record(failed=True)
            raise

        failed = isinstance(result, Failure) and result.error.counts_against_circuit
        self._record(failed=failed)
        return result

    def _try_acquire(self) -> bool:
        state = self.state
        if state is CircuitState.CLOSED:
            return True
        if state is CircuitState.HALF_OPEN:
            if self._half_open_admitted < self.permitted_calls_in_half_open_state:
                self._half_open_admitted += 1
                return True
            return False
        return False

    def _record(self, failed: bool) -> None:
        if self._state is CircuitState.HALF_OPEN:
            if failed:
                self._transition(CircuitState.OPEN)
                return
            self._half_open_succeeded += 1
            if self._half_open_succeeded >= self.permitted_calls_in_half_open_state:
                self._transition(CircuitState.CLOSED)
            return

        if self._state is CircuitState.OPEN:
            # Call was admitted before the circuit opened
            return

        self._window.append(failed)
        if (
            len(self._window) == self.sliding_window_size
            and self.failure_rate >= self.failure_rate_threshold
        ):
            self._transition(CircuitState.OPEN)

    def _transition(self, new_state: CircuitState) -> None:
        logger.info(
            "circuit_breaker_state_changed",
            breaker=self.name,
            from_state=self._state,
            to_state=new_state,
            failure_rate=self.failure_rate,
        )
        self._state = new_state
        self._half_open_admitted = 0
        self._half_open_succeeded = 0
        if new_state is CircuitState.OPEN:
            self._opened_at = self._clock()
        elif new_state is CircuitState.CLOSED:
            self._window.clear()
