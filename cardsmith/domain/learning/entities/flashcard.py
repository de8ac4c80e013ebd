"""
Flashcard entity for spaced repetition learning.
"""

from dataclasses import dataclass
from datetime import UTC, datetime
from enum import StrEnum

from cardsmith.domain.common.aggregate_root import AggregateRoot
from cardsmith.domain.common.exceptions import ValidationError
from cardsmith.domain.common.value_objects import FlashcardId, GenerationSessionId, UserId

MAX_CONTENT_LENGTH = 1000


class FlashcardSource(StrEnum):
    """Provenance of a flashcard."""

    USER = "USER"
    AI = "AI"
    AI_USER = "AI_USER"


@dataclass(frozen=True)
class FlashcardSnapshot:
    """Immutable export of a Flashcard's state."""

    id: FlashcardId
    owner_id: UserId
    front_text: str
    back_text: str
    source: FlashcardSource
    generation_session_id: GenerationSessionId | None
    created_at: datetime
    updated_at: datetime

    def __post_init__(self) -> None:
        """Reject provenance that contradicts the session link."""
        if self.source is FlashcardSource.USER:
            if self.generation_session_id is not None:
                raise ValidationError(
                    "USER flashcards cannot reference a generation session",
                    field="generation_session_id",
                )
        elif self.generation_session_id is None:
            raise ValidationError(
                f"{self.source} flashcards must have generation session ID",
                field="generation_session_id",
            )


class Flashcard(AggregateRoot[FlashcardId]):
    """
    Permanently stored study card.

    Business Rules:
    - Front and back cannot be empty and are at most 1000 characters
    - AI and AI_USER cards always reference the generation session they came from
    - USER cards never reference a generation session
    - Editing content does not change the source
    """

    def __init__(
        self,
        id: FlashcardId,
        owner_id: UserId,
        front_text: str,
        back_text: str,
        source: FlashcardSource,
        generation_session_id: GenerationSessionId | None,
        created_at: datetime,
        updated_at: datetime,
    ) -> None:
        self._id = id
        self._owner_id = owner_id
        self._front_text = front_text
        self._back_text = back_text
        self._source = source
        self._generation_session_id = generation_session_id
        self._created_at = created_at
        self._updated_at = updated_at

    @classmethod
    def create_from_suggestion(
        cls,
        owner_id: UserId,
        front_text: str,
        back_text: str,
        source: FlashcardSource,
        generation_session_id: GenerationSessionId | None,
    ) -> "Flashcard":
        """
        Create a flashcard from an approved AI suggestion.

        Args:
            owner_id: User approving the suggestion
            front_text: Front side content
            back_text: Back side content
            source: AI for untouched suggestions, AI_USER for edited ones
            generation_session_id: Session the suggestion belongs to

        Raises:
            ValidationError: If content is invalid, source is USER or the session id is missing
        """
        _validate_content(front_text, back_text)
        if source not in (FlashcardSource.AI, FlashcardSource.AI_USER):
            raise ValidationError(
                f"AI-generated flashcards must have source AI or AI_USER, got: {source}",
                field="source",
            )
        if generation_session_id is None:
            raise ValidationError(
                "AI-generated flashcards must have generation session ID",
                field="generation_session_id",
            )

        now = datetime.now(UTC)
        return cls(
            id=FlashcardId.generate(),
            owner_id=owner_id,
            front_text=front_text,
            back_text=back_text,
            source=source,
            generation_session_id=generation_session_id,
            created_at=now,
            updated_at=now,
        )

    @classmethod
    def create_manual(cls, owner_id: UserId, front_text: str, back_text: str) -> "Flashcard":
        """
        Create a flashcard written by the user.

        Raises:
            ValidationError: If content is invalid
        """
        _validate_content(front_text, back_text)
        now = datetime.now(UTC)
        return cls(
            id=FlashcardId.generate(),
            owner_id=owner_id,
            front_text=front_text,
            back_text=back_text,
            source=FlashcardSource.USER,
            generation_session_id=None,
            created_at=now,
            updated_at=now,
        )

    @classmethod
    def from_snapshot(cls, snapshot: FlashcardSnapshot) -> "Flashcard":
        """Reconstitute a flashcard from persistence, keeping id and timestamps."""
        return cls(
            id=snapshot.id,
            owner_id=snapshot.owner_id,
            front_text=snapshot.front_text,
            back_text=snapshot.back_text,
            source=snapshot.source,
            generation_session_id=snapshot.generation_session_id,
            created_at=snapshot.created_at,
            updated_at=snapshot.updated_at,
        )

    @property
    def id(self) -> FlashcardId:
        return self._id

    @property
    def owner_id(self) -> UserId:
        return self._owner_id

    @property
    def front_text(self) -> str:
        return self._front_text

    @property
    def back_text(self) -> str:
        return self._back_text

    @property
    def source(self) -> FlashcardSource:
        return self._source

    @property
    def generation_session_id(self) -> GenerationSessionId | None:
        return self._generation_session_id

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def updated_at(self) -> datetime:
        return self._updated_at

    def update_content(self, front_text: str, back_text: str) -> None:
        """
        Replace both sides of the card.

        Raises:
            ValidationError: If content is invalid
        """
        _validate_content(front_text, back_text)
        self._front_text = front_text
        self._back_text = back_text
        self._updated_at = datetime.now(UTC)

    def is_ai_generated(self) -> bool:
        return self._source in (FlashcardSource.AI, FlashcardSource.AI_USER)

    def to_snapshot(self) -> FlashcardSnapshot:
        return FlashcardSnapshot(
            id=self._id,
            owner_id=self._owner_id,
            front_text=self._front_text,
            back_text=self._back_text,
            source=self._source,
            generation_session_id=self._generation_session_id,
            created_at=self._created_at,
            updated_at=self._updated_at,
        )

    def __repr__(self) -> str:
        return (
            f"Flashcard(id={self._id}, owner_id={self._owner_id}, source={self._source}, "
            f"generation_session_id={self._generation_session_id})"
        )


def _validate_content(front_text: str, back_text: str) -> None:
    if not front_text or not front_text.strip():
        raise ValidationError("Front content cannot be empty", field="front_text")
    if not back_text or not back_text.strip():
        raise ValidationError("Back content cannot be empty", field="back_text")
    if len(front_text) > MAX_CONTENT_LENGTH:
        raise ValidationError(
            f"Front content cannot exceed {MAX_CONTENT_LENGTH} characters. "
            f"Current: {len(front_text)}",
            field="front_text",
        )
    if len(back_text) > MAX_CONTENT_LENGTH:
        raise ValidationError(
            f"Back content cannot exceed {MAX_CONTENT_LENGTH} characters. "
            f"Current: {len(back_text)}",
            field="back_text",
        )
