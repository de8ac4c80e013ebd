import pytest

from cardsmith.application.common.result import Failure, Success
from cardsmith.infrastructure.ai.openrouter.errors import ProviderErrorKind, ProviderFailure
from cardsmith.infrastructure.ai.openrouter.retry_policy import RetryPolicy


class SleepRecorder:
    def __init__(self) -> None:
        self.waits: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.waits.append(seconds)


class ScriptedAttempt:
    """Returns the scripted results in order, repeating the last one."""

    def __init__(self, *results: Success | Failure) -> None:
        self.results = list(results)
        self.calls = 0

    async def __call__(self) -> Success | Failure:
        result = self.results[min(self.calls, len(self.results) - 1)]
        self.calls += 1
        return result


def _failure(kind: ProviderErrorKind, retry_after: float | None = None) -> Failure:
    return Failure(ProviderFailure(kind=kind, message=kind.value, retry_after=retry_after))


@pytest.fixture
def sleep() -> SleepRecorder:
    return SleepRecorder()


@pytest.fixture
def policy(sleep: SleepRecorder) -> RetryPolicy:
    return RetryPolicy(
        max_attempts=3, initial_backoff=1.0, max_backoff=10.0, multiplier=2.0, sleep=sleep
    )


@pytest.mark.asyncio
async def test_success_on_first_attempt(policy: RetryPolicy, sleep: SleepRecorder) -> None:
    attempt = ScriptedAttempt(Success("done"))

    result = await policy.call(attempt)

    assert result == Success("done")
    assert attempt.calls == 1
    assert sleep.waits == []


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "kind",
    [ProviderErrorKind.SERVER_ERROR, ProviderErrorKind.TRANSPORT, ProviderErrorKind.RATE_LIMITED],
)
async def test_retries_transient_failures_until_success(
    policy: RetryPolicy, sleep: SleepRecorder, kind: ProviderErrorKind
) -> None:
    attempt = ScriptedAttempt(_failure(kind), _failure(kind), Success("done"))

    result = await policy.call(attempt)

    assert result.is_success
    assert attempt.calls == 3
    assert sleep.waits == [1.0, 2.0]


@pytest.mark.asyncio
async def test_returns_last_failure_when_attempts_run_out(
    policy: RetryPolicy, sleep: SleepRecorder
) -> None:
    attempt = ScriptedAttempt(_failure(ProviderErrorKind.SERVER_ERROR))

    result = await policy.call(attempt)

    assert result.is_failure
    assert result.unwrap_error().kind is ProviderErrorKind.SERVER_ERROR
    assert attempt.calls == 3
    assert len(sleep.waits) == 2


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "kind",
    [
        ProviderErrorKind.AUTHENTICATION,
        ProviderErrorKind.INVALID_REQUEST,
        ProviderErrorKind.INVALID_RESPONSE,
        ProviderErrorKind.UNEXPECTED,
    ],
)
async def test_does_not_retry_permanent_failures(
    policy: RetryPolicy, sleep: SleepRecorder, kind: ProviderErrorKind
) -> None:
    attempt = ScriptedAttempt(_failure(kind), Success("never reached"))

    result = await policy.call(attempt)

    assert result.unwrap_error().kind is kind
    assert attempt.calls == 1
    assert sleep.waits == []


@pytest.mark.asyncio
async def test_backoff_is_capped(sleep: SleepRecorder) -> None:
    policy = RetryPolicy(
        max_attempts=6, initial_backoff=1.0, max_backoff=10.0, multiplier=3.0, sleep=sleep
    )
    attempt = ScriptedAttempt(_failure(ProviderErrorKind.SERVER_ERROR))

    await policy.call(attempt)

    assert sleep.waits == [1.0, 3.0, 9.0, 10.0, 10.0]


@pytest.mark.asyncio
async def test_rate_limit_hint_replaces_backoff(policy: RetryPolicy, sleep: SleepRecorder) -> None:
    attempt = ScriptedAttempt(
        _failure(ProviderErrorKind.RATE_LIMITED, retry_after=30),
        _failure(ProviderErrorKind.SERVER_ERROR),
        Success("done"),
    )

    await policy.call(attempt)

    assert sleep.waits == [30.0, 2.0]


@pytest.mark.asyncio
async def test_single_attempt_policy_never_retries(sleep: SleepRecorder) -> None:
    policy = RetryPolicy(max_attempts=1, sleep=sleep)
    attempt = ScriptedAttempt(_failure(ProviderErrorKind.TRANSPORT))

    result = await policy.call(attempt)

    assert result.is_failure
    assert attempt.calls == 1


@pytest.mark.asyncio
async def test_exceptions_propagate_without_retry(
    policy: RetryPolicy, sleep: SleepRecorder
) -> None:
    calls = 0

    async def broken() -> Success:
        nonlocal calls
        calls += 1
        raise ValueError("bug")

    with pytest.raises(ValueError, match="bug"):
        await policy.call(broken)

    assert calls == 1
