"""Protocol for Flashcard repository in learning context."""

from collections.abc import Sequence
from typing import Protocol

from cardsmith.domain.common.value_objects import FlashcardId, GenerationSessionId, UserId
from cardsmith.domain.learning.entities.flashcard import Flashcard


class FlashcardRepositoryProtocol(Protocol):
    """Protocol for Flashcard repository operations in learning context."""

    def save(self, flashcard: Flashcard) -> Flashcard:
        """
        Save a flashcard entity (create or update).

        Args:
            flashcard: The flashcard entity to save

        Returns:
            Saved flashcard entity
        """
        ...

    def save_all(self, flashcards: Sequence[Flashcard]) -> list[Flashcard]:
        """
        Save several flashcards in one transaction.

        Either all of them are stored or none is.

        Returns:
            Saved flashcards in input order
        """
        ...

    def find_by_id(self, flashcard_id: FlashcardId) -> Flashcard | None: ...

    def find_by_owner_id(self, owner_id: UserId) -> list[Flashcard]:
        """
        Get all flashcards of a user.

        Returns:
            List of flashcard entities ordered by created_at DESC
        """
        ...

    def find_by_session_id(self, session_id: GenerationSessionId) -> list[Flashcard]:
        """
        Get flashcards created from a generation session's suggestions.

        Returns:
            List of flashcard entities ordered by created_at
        """
        ...

    def delete_by_id(self, flashcard_id: FlashcardId) -> bool:
        """
        Delete a flashcard.

        Returns:
            True if deleted, False if not found
        """
        ...

    def exists_by_id(self, flashcard_id: FlashcardId) -> bool: ...
