"""
Result type for operations whose failures must be told apart by value.

The resilient AI client uses it so retry and circuit-breaker policies can
inspect a failure's kind without catching exception subtypes.

Example:
    async def send(request: ChatCompletionRequest) -> Result[ChatCompletion, ProviderFailure]:
        response = await http.post(...)
        if response.status_code == 429:
            return Failure(ProviderFailure(ProviderErrorKind.RATE_LIMITED, "Rate limited"))
        return Success(ChatCompletion.model_validate(response.json()))

    result = await send(request)
    if result.is_failure:
        raise result.unwrap_error().to_exception()
    completion = result.unwrap()
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")  # Success value type
E = TypeVar("E")  # Error type


@dataclass(frozen=True)
class Success(Generic[T]):
    """Represents a successful result containing a value."""

    value: T

    @property
    def is_success(self) -> bool:
        return True

    @property
    def is_failure(self) -> bool:
        return False

    def unwrap(self) -> T:
        """Get the success value."""
        return self.value

    def unwrap_error(self) -> None:
        """Raises ValueError - Success has no error."""
        raise ValueError("Cannot get error from Success result")


@dataclass(frozen=True)
class Failure(Generic[E]):
    """Represents a failed result containing an error."""

    error: E

    @property
    def is_success(self) -> bool:
        return False

    @property
    def is_failure(self) -> bool:
        return True

    def unwrap(self) -> None:
        """Raises ValueError - Failure has no value."""
        raise ValueError("Cannot get value from Failure result")

    def unwrap_error(self) -> E:
        """Get the error."""
        return self.error


# Type alias for Result - a union of Success and Failure
Result = Success[T] | Failure[E]
