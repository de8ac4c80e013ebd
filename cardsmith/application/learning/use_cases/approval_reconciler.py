"""Use case for turning approved suggestions into flashcards."""

from collections.abc import Sequence
from uuid import UUID

import structlog

from cardsmith.application.learning.protocols.flashcard_repository import (
    FlashcardRepositoryProtocol,
)
from cardsmith.application.learning.protocols.generation_session_repository import (
    GenerationSessionRepositoryProtocol,
)
from cardsmith.application.learning.use_cases.dtos.approval_dtos import (
    ApprovalResult,
    CreatedFlashcard,
    SuggestionApproval,
)
from cardsmith.domain.common.exceptions import InvalidStateError, ValidationError
from cardsmith.domain.common.value_objects import GenerationSessionId, SuggestionId, UserId
from cardsmith.domain.learning.entities.flashcard import Flashcard, FlashcardSource
from cardsmith.domain.learning.entities.suggestion import Suggestion
from cardsmith.exceptions import GenerationSessionNotFoundError

logger = structlog.get_logger(__name__)


class ApprovalReconciler:
    """Use case for approving a selection of a session's suggestions."""

    def __init__(
        self,
        session_repository: GenerationSessionRepositoryProtocol,
        flashcard_repository: FlashcardRepositoryProtocol,
    ) -> None:
        """Initialize use case with repository protocols."""
        self.session_repository = session_repository
        self.flashcard_repository = flashcard_repository

    def approve(
        self,
        session_id: UUID,
        owner_id: UUID,
        approvals: Sequence[SuggestionApproval],
    ) -> ApprovalResult:
        """
        Create flashcards from the approved suggestions.

        An approval that supplies front or back text (even identical to the
        suggestion) produces an AI_USER card; otherwise the card is AI.
        The session is looked up and checked before the approvals themselves.
        Nothing is stored unless every approval resolves.

        Args:
            session_id: ID of the generation session
            owner_id: ID of the user (for ownership verification)
            approvals: Suggestions to accept, with optional edited text

        Returns:
            The created flashcards in approval order

        Raises:
            ValidationError: If approvals are empty, repeat a suggestion, reference
                an unknown suggestion or carry invalid text
            GenerationSessionNotFoundError: If the session does not exist
            NotOwnedError: If the session belongs to another user
            InvalidStateError: If the session is not COMPLETED
        """
        session_id_vo = GenerationSessionId(session_id)
        owner_id_vo = UserId(owner_id)

        session = self.session_repository.find_by_id(session_id_vo)
        if session is None:
            raise GenerationSessionNotFoundError(session_id)

        session.ensure_owned_by(owner_id_vo)
        if not session.can_provide_suggestions():
            raise InvalidStateError(
                f"Cannot approve suggestions of a {session.status} session",
                current_status=session.status,
            )

        _validate_approvals(approvals)

        suggestions_by_id: dict[SuggestionId, Suggestion] = {
            suggestion.id: suggestion
            for suggestion in session.suggestions
            if suggestion.id is not None
        }

        flashcards: list[Flashcard] = []
        for approval in approvals:
            suggestion = suggestions_by_id.get(SuggestionId(approval.suggestion_id))
            if suggestion is None:
                raise ValidationError(
                    f"Suggestion {approval.suggestion_id} not found in session {session_id}",
                    field="suggestion_id",
                    value=str(approval.suggestion_id),
                )

            source = FlashcardSource.AI_USER if approval.is_edited else FlashcardSource.AI
            flashcards.append(
                Flashcard.create_from_suggestion(
                    owner_id=owner_id_vo,
                    front_text=(
                        approval.front_text
                        if approval.front_text is not None
                        else suggestion.front_text
                    ),
                    back_text=(
                        approval.back_text
                        if approval.back_text is not None
                        else suggestion.back_text
                    ),
                    source=source,
                    generation_session_id=session.id,
                )
            )

        saved = self.flashcard_repository.save_all(flashcards)

        session.update_accepted_count(len(saved))
        self.session_repository.save(session)

        logger.info(
            "suggestions_approved",
            session_id=str(session_id),
            owner_id=str(owner_id),
            accepted_count=len(saved),
            edited_count=sum(1 for f in saved if f.source is FlashcardSource.AI_USER),
        )

        return ApprovalResult(
            created_flashcards=[
                CreatedFlashcard(
                    id=flashcard.id.value,
                    front_text=flashcard.front_text,
                    back_text=flashcard.back_text,
                    source=flashcard.source.value,
                )
                for flashcard in saved
            ]
        )


def _validate_approvals(approvals: Sequence[SuggestionApproval]) -> None:
    if not approvals:
        raise ValidationError("At least one suggestion must be approved", field="approvals")

    seen: set[UUID] = set()
    for approval in approvals:
        if approval.suggestion_id in seen:
            raise ValidationError(
                f"Suggestion {approval.suggestion_id} is approved more than once",
                field="suggestion_id",
                value=str(approval.suggestion_id),
            )
        seen.add(approval.suggestion_id)
