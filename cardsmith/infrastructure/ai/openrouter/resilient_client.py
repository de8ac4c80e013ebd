from cardsmith.application.common.result import Result
from cardsmith.infrastructure.ai.openrouter.api_client import OpenRouterApiClient
from cardsmith.infrastructure.ai.openrouter.circuit_breaker import CircuitBreaker
from cardsmith.infrastructure.ai.openrouter.dto import (
    ChatCompletionRequest,
    ChatCompletionResponse,
)
from cardsmith.infrastructure.ai.openrouter.errors import ProviderFailure
from cardsmith.infrastructure.ai.openrouter.retry_policy import RetryPolicy


class ResilientOpenRouterClient:
    """
    OpenRouter client wrapped as CircuitBreaker(RetryPolicy(single attempt)).

    The breaker sees one outcome per logical request, after retries. While
    the circuit is open no attempt (and so no retry) is made.
    """

    def __init__(
        self,
        api_client: OpenRouterApiClient,
        retry_policy: RetryPolicy,
        circuit_breaker: CircuitBreaker,
    ) -> None:
        self.api_client = api_client
        self.retry_policy = retry_policy
        self.circuit_breaker = circuit_breaker

    async def send(
        self, request: ChatCompletionRequest
    ) -> Result[ChatCompletionResponse, ProviderFailure]:
        return await self.circuit_breaker.call(
            lambda: self.retry_policy.call(lambda: self.api_client.send(request))
        )

    async def close(self) -> None:
        await self.api_client.close()
