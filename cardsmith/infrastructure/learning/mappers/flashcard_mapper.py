"""Mapper for Flashcard ORM ↔ Domain conversion."""

from cardsmith.domain.common.value_objects import FlashcardId, GenerationSessionId, UserId
from cardsmith.domain.learning.entities.flashcard import (
    Flashcard,
    FlashcardSnapshot,
    FlashcardSource,
)
from cardsmith.infrastructure.learning.mappers.timestamps import ensure_utc
from cardsmith.models import Flashcard as FlashcardORM


class FlashcardMapper:
    """Mapper for Flashcard ORM ↔ Domain conversion."""

    def to_domain(self, orm_model: FlashcardORM) -> Flashcard:
        """Convert ORM model to domain entity."""
        return Flashcard.from_snapshot(
            FlashcardSnapshot(
                id=FlashcardId(orm_model.id),
                owner_id=UserId(orm_model.owner_id),
                front_text=orm_model.front_text,
                back_text=orm_model.back_text,
                source=FlashcardSource(orm_model.source),
                generation_session_id=(
                    GenerationSessionId(orm_model.generation_session_id)
                    if orm_model.generation_session_id
                    else None
                ),
                created_at=ensure_utc(orm_model.created_at),
                updated_at=ensure_utc(orm_model.updated_at),
            )
        )

    def to_orm(
        self, domain_entity: Flashcard, orm_model: FlashcardORM | None = None
    ) -> FlashcardORM:
        """Convert domain entity to ORM model."""
        if orm_model:
            # Update existing; source and session link never change
            orm_model.front_text = domain_entity.front_text
            orm_model.back_text = domain_entity.back_text
            orm_model.updated_at = domain_entity.updated_at
            return orm_model

        # Create new
        return FlashcardORM(
            id=domain_entity.id.value,
            owner_id=domain_entity.owner_id.value,
            front_text=domain_entity.front_text,
            back_text=domain_entity.back_text,
            source=domain_entity.source.value,
            generation_session_id=(
                domain_entity.generation_session_id.value
                if domain_entity.generation_session_id
                else None
            ),
            created_at=domain_entity.created_at,
            updated_at=domain_entity.updated_at,
        )
