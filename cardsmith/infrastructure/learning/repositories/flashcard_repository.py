"""Repository for Flashcard domain entities."""

from collections.abc import Sequence

from sqlalchemy import select
from sqlalchemy.orm import Session

from cardsmith.domain.common.value_objects import FlashcardId, GenerationSessionId, UserId
from cardsmith.domain.learning.entities.flashcard import Flashcard
from cardsmith.infrastructure.learning.mappers.flashcard_mapper import FlashcardMapper
from cardsmith.models import Flashcard as FlashcardORM


class FlashcardRepository:
    """Repository for Flashcard domain entities."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.mapper = FlashcardMapper()

    def find_by_id(self, flashcard_id: FlashcardId) -> Flashcard | None:
        orm_model = self.db.get(FlashcardORM, flashcard_id.value)
        return self.mapper.to_domain(orm_model) if orm_model else None

    def find_by_owner_id(self, owner_id: UserId) -> list[Flashcard]:
        """
        Get all flashcards of a user.

        Returns:
            List of flashcard entities ordered by created_at DESC
        """
        stmt = (
            select(FlashcardORM)
            .where(FlashcardORM.owner_id == owner_id.value)
            .order_by(FlashcardORM.created_at.desc())
        )
        orm_models = self.db.execute(stmt).scalars().all()
        return [self.mapper.to_domain(orm) for orm in orm_models]

    def find_by_session_id(self, session_id: GenerationSessionId) -> list[Flashcard]:
        """
        Get flashcards created from a session's suggestions.

        Returns:
            List of flashcard entities ordered by created_at
        """
        stmt = (
            select(FlashcardORM)
            .where(FlashcardORM.generation_session_id == session_id.value)
            .order_by(FlashcardORM.created_at)
        )
        orm_models = self.db.execute(stmt).scalars().all()
        return [self.mapper.to_domain(orm) for orm in orm_models]

    def save(self, flashcard: Flashcard) -> Flashcard:
        """
        Save a flashcard entity (create or update).

        Args:
            flashcard: The flashcard entity to save

        Returns:
            Saved flashcard entity
        """
        orm_model = self._merge(flashcard)
        self.db.commit()
        self.db.refresh(orm_model)
        return self.mapper.to_domain(orm_model)

    def save_all(self, flashcards: Sequence[Flashcard]) -> list[Flashcard]:
        """
        Save several flashcards with a single commit.

        Returns:
            Saved flashcards in input order
        """
        orm_models = [self._merge(flashcard) for flashcard in flashcards]
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        for orm_model in orm_models:
            self.db.refresh(orm_model)
        return [self.mapper.to_domain(orm) for orm in orm_models]

    def delete_by_id(self, flashcard_id: FlashcardId) -> bool:
        """
        Delete a flashcard.

        Returns:
            True if deleted, False if not found
        """
        orm_model = self.db.get(FlashcardORM, flashcard_id.value)
        if not orm_model:
            return False

        self.db.delete(orm_model)
        self.db.commit()
        return True

    def exists_by_id(self, flashcard_id: FlashcardId) -> bool:
        stmt = select(FlashcardORM.id).where(FlashcardORM.id == flashcard_id.value)
        return self.db.execute(stmt).first() is not None

    def _merge(self, flashcard: Flashcard) -> FlashcardORM:
        orm_model = self.db.get(FlashcardORM, flashcard.id.value)
        if orm_model is None:
            orm_model = self.mapper.to_orm(flashcard)
            self.db.add(orm_model)
            return orm_model
        return self.mapper.to_orm(flashcard, orm_model)
