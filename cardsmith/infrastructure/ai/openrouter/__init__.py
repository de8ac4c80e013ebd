"""OpenRouter implementation of the AI provider port."""

from .api_client import OpenRouterApiClient
from .circuit_breaker import CircuitBreaker, CircuitState
from .errors import ProviderErrorKind, ProviderFailure
from .resilient_client import ResilientOpenRouterClient
from .retry_policy import RetryPolicy
from .service import ModelParameters, OpenRouterService

__all__ = [
    "CircuitBreaker",
    "CircuitState",
    "ModelParameters",
    "OpenRouterApiClient",
    "OpenRouterService",
    "ProviderErrorKind",
    "ProviderFailure",
    "ResilientOpenRouterClient",
    "RetryPolicy",
]
