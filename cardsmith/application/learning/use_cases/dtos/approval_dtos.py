"""DTOs for suggestion approval."""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True)
class SuggestionApproval:
    """
    Instruction to turn one suggestion into a flashcard.

    front_text / back_text are None when the caller keeps the AI text.
    Supplying either one, even unchanged, marks the card as edited.
    """

    suggestion_id: UUID
    front_text: str | None = None
    back_text: str | None = None

    @property
    def is_edited(self) -> bool:
        return self.front_text is not None or self.back_text is not None


@dataclass(frozen=True)
class CreatedFlashcard:
    id: UUID
    front_text: str
    back_text: str
    source: str


@dataclass(frozen=True)
class ApprovalResult:
    created_flashcards: list[CreatedFlashcard]
