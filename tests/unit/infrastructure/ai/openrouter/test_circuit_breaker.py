import asyncio

import pytest

from cardsmith.application.common.result import Failure, Success
from cardsmith.infrastructure.ai.openrouter.circuit_breaker import CircuitBreaker, CircuitState
from cardsmith.infrastructure.ai.openrouter.errors import ProviderErrorKind, ProviderFailure


class FakeClock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class CountingOperation:
    """Async operation returning a fixed result and counting invocations."""

    def __init__(self, result: Success | Failure) -> None:
        self.result = result
        self.calls = 0

    async def __call__(self) -> Success | Failure:
        self.calls += 1
        return self.result


def _failure(kind: ProviderErrorKind) -> Failure:
    return Failure(ProviderFailure(kind=kind, message=kind.value))


SUCCESS = Success("ok")
SERVER_ERROR = _failure(ProviderErrorKind.SERVER_ERROR)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def breaker(clock: FakeClock) -> CircuitBreaker:
    return CircuitBreaker(
        sliding_window_size=4,
        failure_rate_threshold=50.0,
        wait_duration_in_open_state=60.0,
        permitted_calls_in_half_open_state=2,
        clock=clock,
    )


async def _run(breaker: CircuitBreaker, result: Success | Failure, times: int = 1) -> None:
    operation = CountingOperation(result)
    for _ in range(times):
        await breaker.call(operation)


async def _open(breaker: CircuitBreaker) -> None:
    await _run(breaker, SERVER_ERROR, times=4)
    assert breaker.state is CircuitState.OPEN


class TestClosed:
    @pytest.mark.asyncio
    async def test_stays_closed_until_window_is_full(self, breaker: CircuitBreaker) -> None:
        await _run(breaker, SERVER_ERROR, times=3)

        assert breaker.state is CircuitState.CLOSED

    @pytest.mark.asyncio
    async def test_opens_when_failure_rate_reaches_threshold(
        self, breaker: CircuitBreaker
    ) -> None:
        await _run(breaker, SUCCESS, times=2)
        await _run(breaker, SERVER_ERROR, times=2)

        assert breaker.failure_rate == 50.0
        assert breaker.state is CircuitState.OPEN

    @pytest.mark.asyncio
    async def test_stays_closed_below_threshold(self, breaker: CircuitBreaker) -> None:
        await _run(breaker, SUCCESS, times=3)
        await _run(breaker, SERVER_ERROR)

        assert breaker.state is CircuitState.CLOSED

    @pytest.mark.asyncio
    async def test_window_slides(self, breaker: CircuitBreaker) -> None:
        await _run(breaker, SERVER_ERROR)
        await _run(breaker, SUCCESS, times=4)

        assert breaker.failure_rate == 0.0

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "kind",
        [
            ProviderErrorKind.AUTHENTICATION,
            ProviderErrorKind.INVALID_REQUEST,
            ProviderErrorKind.INVALID_RESPONSE,
        ],
    )
    async def test_caller_side_failures_do_not_count(
        self, breaker: CircuitBreaker, kind: ProviderErrorKind
    ) -> None:
        await _run(breaker, _failure(kind), times=4)

        assert breaker.state is CircuitState.CLOSED
        assert breaker.failure_rate == 0.0

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "kind",
        [
            ProviderErrorKind.RATE_LIMITED,
            ProviderErrorKind.TRANSPORT,
            ProviderErrorKind.UNEXPECTED,
        ],
    )
    async def test_provider_health_failures_count(
        self, breaker: CircuitBreaker, kind: ProviderErrorKind
    ) -> None:
        await _run(breaker, _failure(kind), times=4)

        assert breaker.state is CircuitState.OPEN

    @pytest.mark.asyncio
    async def test_raised_exception_counts_and_propagates(self, breaker: CircuitBreaker) -> None:
        async def boom() -> Success:
            raise RuntimeError("boom")

        for _ in range(4):
            with pytest.raises(RuntimeError):
                await breaker.call(boom)

        assert breaker.state is CircuitState.OPEN


class TestOpen:
    @pytest.mark.asyncio
    async def test_fails_fast_without_calling(self, breaker: CircuitBreaker) -> None:
        await _open(breaker)
        operation = CountingOperation(SUCCESS)

        result = await breaker.call(operation)

        assert result.is_failure
        assert result.unwrap_error().kind is ProviderErrorKind.CIRCUIT_OPEN
        assert operation.calls == 0

    @pytest.mark.asyncio
    async def test_half_opens_after_wait(self, breaker: CircuitBreaker, clock: FakeClock) -> None:
        await _open(breaker)

        clock.advance(59.9)
        assert breaker.state is CircuitState.OPEN
        clock.advance(0.1)
        assert breaker.state is CircuitState.HALF_OPEN


class TestHalfOpen:
    @pytest.mark.asyncio
    async def test_successful_trials_close_and_clear_window(
        self, breaker: CircuitBreaker, clock: FakeClock
    ) -> None:
        await _open(breaker)
        clock.advance(60)

        await _run(breaker, SUCCESS, times=2)

        assert breaker.state is CircuitState.CLOSED
        assert breaker.failure_rate == 0.0

    @pytest.mark.asyncio
    async def test_failed_trial_reopens(self, breaker: CircuitBreaker, clock: FakeClock) -> None:
        await _open(breaker)
        clock.advance(60)

        await _run(breaker, SUCCESS)
        await _run(breaker, SERVER_ERROR)

        assert breaker.state is CircuitState.OPEN
        clock.advance(59)
        assert breaker.state is CircuitState.OPEN

    @pytest.mark.asyncio
    async def test_admits_limited_number_of_trials(
        self, breaker: CircuitBreaker, clock: FakeClock
    ) -> None:
        await _open(breaker)
        clock.advance(60)
        admitted = 0

        async def pending_trial() -> Success:
            nonlocal admitted
            admitted += 1
            # Both trial slots are taken, so a further call is rejected
            if admitted == 2:
                rejected = await breaker.call(CountingOperation(SUCCESS))
                assert rejected.unwrap_error().kind is ProviderErrorKind.CIRCUIT_OPEN
            return SUCCESS

        await breaker.call(pending_trial)
        await breaker.call(pending_trial)

        assert admitted == 2
        assert breaker.state is CircuitState.CLOSED


async def _hang() -> Success:
    await asyncio.Event().wait()
    return SUCCESS


async def _run_timed_out(breaker: CircuitBreaker, times: int = 1) -> None:
    for _ in range(times):
        with pytest.raises(TimeoutError):
            async with asyncio.timeout(0.01):
                await breaker.call(_hang)


class TestCancelledCalls:
    @pytest.mark.asyncio
    async def test_timed_out_calls_count_as_failures(self, breaker: CircuitBreaker) -> None:
        await _run_timed_out(breaker, times=4)

        assert breaker.failure_rate == 100.0
        assert breaker.state is CircuitState.OPEN

    @pytest.mark.asyncio
    async def test_timed_out_trial_reopens_instead_of_holding_slot(
        self, breaker: CircuitBreaker, clock: FakeClock
    ) -> None:
        await _open(breaker)
        clock.advance(60)

        await _run_timed_out(breaker)

        assert breaker.state is CircuitState.OPEN

    @pytest.mark.asyncio
    async def test_breaker_recovers_after_cancelled_trials(
        self, breaker: CircuitBreaker, clock: FakeClock
    ) -> None:
        await _open(breaker)
        for _ in range(2):
            clock.advance(60)
            await _run_timed_out(breaker)

        clock.advance(60)
        operation = CountingOperation(SUCCESS)
        await breaker.call(operation)
        await breaker.call(operation)

        assert operation.calls == 2
        assert breaker.state is CircuitState.CLOSED

    @pytest.mark.asyncio
    async def test_cancelled_task_is_recorded(self, breaker: CircuitBreaker) -> None:
        task = asyncio.create_task(breaker.call(_hang))
        await asyncio.sleep(0)
        task.cancel()

        with pytest.raises(asyncio.CancelledError):
            await task

        assert breaker.failure_rate == 100.0
