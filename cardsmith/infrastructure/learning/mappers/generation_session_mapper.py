"""Mapper for GenerationSession ORM ↔ Domain conversion."""

from uuid import uuid4

from cardsmith.domain.common.value_objects import GenerationSessionId, SuggestionId, UserId
from cardsmith.domain.learning.entities.generation_session import (
    GenerationSession,
    GenerationSessionSnapshot,
    GenerationSessionStatus,
)
from cardsmith.domain.learning.entities.suggestion import Suggestion
from cardsmith.infrastructure.learning.mappers.timestamps import ensure_utc
from cardsmith.models import FlashcardSuggestion as FlashcardSuggestionORM
from cardsmith.models import GenerationSession as GenerationSessionORM


class GenerationSessionMapper:
    """Mapper for GenerationSession ORM ↔ Domain conversion."""

    def to_domain(self, orm_model: GenerationSessionORM) -> GenerationSession:
        """Convert ORM model to domain aggregate."""
        session_id = GenerationSessionId(orm_model.id)
        suggestions = tuple(
            Suggestion(
                id=SuggestionId(suggestion.id),
                session_id=session_id,
                front_text=suggestion.front_text,
                back_text=suggestion.back_text,
            )
            for suggestion in orm_model.suggestions
        )
        return GenerationSession.from_snapshot(
            GenerationSessionSnapshot(
                id=session_id,
                owner_id=UserId(orm_model.owner_id),
                input_text=orm_model.input_text,
                status=GenerationSessionStatus(orm_model.status),
                created_at=ensure_utc(orm_model.created_at),
                suggestions=suggestions,
                generated_count=orm_model.generated_count,
                accepted_count=orm_model.accepted_count,
                model_name=orm_model.model_name,
                estimated_cost=orm_model.estimated_cost,
            )
        )

    def to_orm(
        self, domain_entity: GenerationSession, orm_model: GenerationSessionORM | None = None
    ) -> GenerationSessionORM:
        """
        Convert domain aggregate to ORM model.

        Suggestions without an id get one here; the id is stable from then on.
        """
        snapshot = domain_entity.to_snapshot()

        if orm_model:
            # Update existing
            orm_model.status = snapshot.status.value
            orm_model.generated_count = snapshot.generated_count or 0
            orm_model.accepted_count = snapshot.accepted_count or 0
            orm_model.model_name = snapshot.model_name
            orm_model.estimated_cost = snapshot.estimated_cost
            if not orm_model.suggestions and snapshot.suggestions:
                orm_model.suggestions = self._suggestions_to_orm(snapshot)
            return orm_model

        # Create new
        return GenerationSessionORM(
            id=snapshot.id.value,
            owner_id=snapshot.owner_id.value,
            input_text=snapshot.input_text,
            status=snapshot.status.value,
            generated_count=snapshot.generated_count or 0,
            accepted_count=snapshot.accepted_count or 0,
            model_name=snapshot.model_name,
            estimated_cost=snapshot.estimated_cost,
            created_at=snapshot.created_at,
            suggestions=self._suggestions_to_orm(snapshot),
        )

    def _suggestions_to_orm(
        self, snapshot: GenerationSessionSnapshot
    ) -> list[FlashcardSuggestionORM]:
        return [
            FlashcardSuggestionORM(
                id=suggestion.id.value if suggestion.id else uuid4(),
                session_id=snapshot.id.value,
                position=position,
                front_text=suggestion.front_text,
                back_text=suggestion.back_text,
            )
            for position, suggestion in enumerate(snapshot.suggestions)
        ]
