"""Use case for generating flashcard suggestions from text."""

import asyncio
from uuid import UUID

import structlog

from cardsmith.application.learning.protocols.ai_provider import AiProviderProtocol
from cardsmith.application.learning.protocols.generation_session_repository import (
    GenerationSessionRepositoryProtocol,
)
from cardsmith.application.learning.use_cases.dtos.generation_dtos import GenerationSummary
from cardsmith.domain.common.value_objects import GenerationSessionId, UserId
from cardsmith.domain.learning.entities.generation_session import GenerationSession
from cardsmith.exceptions import InvalidResponseError

logger = structlog.get_logger(__name__)


class GenerationOrchestrator:
    """
    Runs one generation attempt and records its outcome as a session.

    Every call that reaches the provider ends with exactly one saved session,
    COMPLETED or FAILED. Provider errors are re-raised unchanged once the
    FAILED session has been stored.
    """

    def __init__(
        self,
        session_repository: GenerationSessionRepositoryProtocol,
        ai_provider: AiProviderProtocol,
        timeout_seconds: float | None = None,
    ) -> None:
        """Initialize use case with repository and provider protocols."""
        self.session_repository = session_repository
        self.ai_provider = ai_provider
        self.timeout_seconds = timeout_seconds

    async def generate(self, owner_id: UUID, input_text: str) -> GenerationSummary:
        """
        Generate suggestions for the text and store the session.

        Args:
            owner_id: ID of the user requesting the generation
            input_text: Text to generate flashcards from (1000..10000 characters)

        Returns:
            Summary of the COMPLETED session

        Raises:
            ValidationError: If the input text is out of bounds (nothing is stored)
            ProviderError: Whatever the provider raised, after the FAILED session is stored
            TimeoutError: If the provider did not answer within the timeout
            CancelledError: If the caller cancelled the call, after the FAILED session is stored
        """
        GenerationSession.validate_input_text(input_text)

        owner_id_vo = UserId(owner_id)
        session_id = GenerationSessionId.generate()

        logger.info(
            "generation_started",
            session_id=str(session_id),
            owner_id=str(owner_id),
            input_length=len(input_text),
        )

        try:
            async with asyncio.timeout(self.timeout_seconds):
                suggestions = await self.ai_provider.generate(input_text, session_id)
            if suggestions is None:
                raise InvalidResponseError("AI provider returned no suggestions")

            estimated_cost = self.ai_provider.estimate_cost(input_text)
            session = GenerationSession.create_completed(
                id=session_id,
                owner_id=owner_id_vo,
                input_text=input_text,
                suggestions=suggestions,
                model_name=self.ai_provider.model_name,
                estimated_cost=estimated_cost,
            )
        except (Exception, asyncio.CancelledError) as e:
            logger.warning(
                "generation_session_failed",
                session_id=str(session_id),
                owner_id=str(owner_id),
                error_type=type(e).__name__,
                error=str(e),
            )
            failed_session = GenerationSession.create_failed(
                id=session_id, owner_id=owner_id_vo, input_text=input_text
            )
            self.session_repository.save(failed_session)
            raise

        saved = self.session_repository.save(session)

        logger.info(
            "generation_session_completed",
            session_id=str(session_id),
            generated_count=saved.generated_count,
            model_name=saved.model_name,
            estimated_cost=str(saved.estimated_cost),
        )

        return GenerationSummary(
            session_id=saved.id.value,
            status=saved.status.value,
            created_at=saved.created_at,
        )
