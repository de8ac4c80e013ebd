"""Use case for reporting whether the AI provider is reachable."""

import structlog

from cardsmith.application.learning.protocols.ai_provider import AiProviderProtocol
from cardsmith.application.learning.use_cases.dtos.generation_dtos import ProviderHealth

logger = structlog.get_logger(__name__)


class CheckAiProviderHealthUseCase:
    def __init__(self, ai_provider: AiProviderProtocol) -> None:
        self.ai_provider = ai_provider

    async def check(self) -> ProviderHealth:
        """Check the provider. Never raises; an unreachable provider is reported as down."""
        details = {"model": self.ai_provider.model_name}
        if await self.ai_provider.health_check():
            return ProviderHealth(status="up", details=details)

        logger.warning("ai_provider_down", model=self.ai_provider.model_name)
        return ProviderHealth(status="down", details={**details, "error": "health check failed"})
