"""Protocol for GenerationSession repository in learning context."""

from typing import Protocol

from cardsmith.domain.common.value_objects import GenerationSessionId
from cardsmith.domain.learning.entities.generation_session import GenerationSession


class GenerationSessionRepositoryProtocol(Protocol):
    """Protocol for GenerationSession repository operations in learning context."""

    def save(self, session: GenerationSession) -> GenerationSession:
        """
        Save a session aggregate (create or update), including its suggestions.

        Args:
            session: The session to save

        Returns:
            Saved session with persistence-assigned suggestion ids
        """
        ...

    def find_by_id(self, session_id: GenerationSessionId) -> GenerationSession | None:
        """
        Find a session by ID.

        Ownership is checked by the caller through the aggregate.

        Returns:
            Session if found, None otherwise
        """
        ...

    def delete(self, session_id: GenerationSessionId) -> bool:
        """
        Delete a session together with its suggestions.

        Returns:
            True if deleted, False if not found

        Raises:
            InvalidStateError: If flashcards were created from the session
        """
        ...

    def exists_by_id(self, session_id: GenerationSessionId) -> bool: ...
