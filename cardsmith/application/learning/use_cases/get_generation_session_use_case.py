"""Use case for reading a generation session's status and metrics."""

from uuid import UUID

from cardsmith.application.learning.protocols.generation_session_repository import (
    GenerationSessionRepositoryProtocol,
)
from cardsmith.application.learning.use_cases.dtos.generation_dtos import GenerationSessionView
from cardsmith.domain.common.value_objects import GenerationSessionId, UserId
from cardsmith.exceptions import GenerationSessionNotFoundError


class GetGenerationSessionUseCase:
    def __init__(self, session_repository: GenerationSessionRepositoryProtocol) -> None:
        self.session_repository = session_repository

    def get_session(self, session_id: UUID, owner_id: UUID) -> GenerationSessionView:
        """
        Get a session owned by the user.

        Raises:
            GenerationSessionNotFoundError: If the session does not exist
            NotOwnedError: If the session belongs to another user
        """
        session = self.session_repository.find_by_id(GenerationSessionId(session_id))
        if session is None:
            raise GenerationSessionNotFoundError(session_id)
        session.ensure_owned_by(UserId(owner_id))

        snapshot = session.to_snapshot()
        return GenerationSessionView(
            session_id=snapshot.id.value,
            status=snapshot.status.value,
            generated_count=snapshot.generated_count or 0,
            accepted_count=snapshot.accepted_count or 0,
            model_name=snapshot.model_name,
            estimated_cost=snapshot.estimated_cost,
            created_at=snapshot.created_at,
        )
