"""Repository for GenerationSession aggregates."""

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from cardsmith.domain.common.exceptions import InvalidStateError
from cardsmith.domain.common.value_objects import GenerationSessionId
from cardsmith.domain.learning.entities.generation_session import GenerationSession
from cardsmith.infrastructure.learning.mappers.generation_session_mapper import (
    GenerationSessionMapper,
)
from cardsmith.models import Flashcard as FlashcardORM
from cardsmith.models import GenerationSession as GenerationSessionORM


class GenerationSessionRepository:
    """Repository for GenerationSession aggregates and their suggestions."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.mapper = GenerationSessionMapper()

    def find_by_id(self, session_id: GenerationSessionId) -> GenerationSession | None:
        """
        Find a session by ID, suggestions included.

        Args:
            session_id: The session ID

        Returns:
            Session aggregate if found, None otherwise
        """
        stmt = (
            select(GenerationSessionORM)
            .options(selectinload(GenerationSessionORM.suggestions))
            .where(GenerationSessionORM.id == session_id.value)
        )
        orm_model = self.db.execute(stmt).scalar_one_or_none()
        return self.mapper.to_domain(orm_model) if orm_model else None

    def save(self, session: GenerationSession) -> GenerationSession:
        """
        Save a session aggregate (create or update).

        Args:
            session: The session aggregate to save

        Returns:
            Saved session with suggestion ids assigned
        """
        orm_model = self.db.get(GenerationSessionORM, session.id.value)
        if orm_model is None:
            # Create new
            orm_model = self.mapper.to_orm(session)
            self.db.add(orm_model)
        else:
            # Update existing
            self.mapper.to_orm(session, orm_model)
        self.db.commit()
        self.db.refresh(orm_model)
        return self.mapper.to_domain(orm_model)

    def delete(self, session_id: GenerationSessionId) -> bool:
        """
        Delete a session and its suggestions.

        Returns:
            True if deleted, False if not found

        Raises:
            InvalidStateError: If flashcards were created from the session
        """
        orm_model = self.db.get(GenerationSessionORM, session_id.value)
        if not orm_model:
            return False

        # AI flashcards must keep pointing at the session they came from
        stmt = select(FlashcardORM.id).where(FlashcardORM.generation_session_id == session_id.value)
        if self.db.execute(stmt).first() is not None:
            raise InvalidStateError(
                f"Generation session {session_id} has approved flashcards and cannot be deleted"
            )

        self.db.delete(orm_model)
        self.db.commit()
        return True

    def exists_by_id(self, session_id: GenerationSessionId) -> bool:
        stmt = select(GenerationSessionORM.id).where(GenerationSessionORM.id == session_id.value)
        return self.db.execute(stmt).first() is not None
