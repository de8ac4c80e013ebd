"""Use case for reading the suggestions of a generation session."""

from uuid import UUID

import structlog

from cardsmith.application.learning.protocols.generation_session_repository import (
    GenerationSessionRepositoryProtocol,
)
from cardsmith.application.learning.use_cases.dtos.generation_dtos import (
    SessionSuggestionsView,
    SuggestionView,
)
from cardsmith.domain.common.value_objects import GenerationSessionId, UserId
from cardsmith.exceptions import GenerationSessionNotFoundError

logger = structlog.get_logger(__name__)


class GetSessionSuggestionsUseCase:
    """Use case for listing the suggestions of a session."""

    def __init__(self, session_repository: GenerationSessionRepositoryProtocol) -> None:
        self.session_repository = session_repository

    def get_suggestions(self, session_id: UUID, owner_id: UUID) -> SessionSuggestionsView:
        """
        Get suggestions of a session owned by the user.

        PENDING and FAILED sessions yield an empty list.

        Raises:
            GenerationSessionNotFoundError: If the session does not exist
            NotOwnedError: If the session belongs to another user
        """
        session = self.session_repository.find_by_id(GenerationSessionId(session_id))
        if session is None:
            raise GenerationSessionNotFoundError(session_id)
        session.ensure_owned_by(UserId(owner_id))

        if not session.can_provide_suggestions():
            logger.debug(
                "suggestions_not_available",
                session_id=str(session_id),
                status=session.status.value,
            )
            return SessionSuggestionsView(session_id=session_id, status=session.status.value)

        return SessionSuggestionsView(
            session_id=session_id,
            status=session.status.value,
            suggestions=[
                SuggestionView(
                    id=suggestion.id.value,
                    front_text=suggestion.front_text,
                    back_text=suggestion.back_text,
                )
                for suggestion in session.suggestions
                if suggestion.id is not None
            ],
        )
