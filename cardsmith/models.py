"""Database models."""

import uuid
from datetime import datetime
from decimal import Decimal

from sqlalchemy import DateTime, ForeignKey, Integer, Numeric, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from cardsmith.database import Base


class GenerationSession(Base):
    """One AI generation attempt and its outcome."""

    __tablename__ = "generation_sessions"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True)
    owner_id: Mapped[uuid.UUID] = mapped_column(Uuid, index=True, nullable=False)
    input_text: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False)
    generated_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    accepted_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    model_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    estimated_cost: Mapped[Decimal | None] = mapped_column(Numeric(10, 4), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    suggestions: Mapped[list["FlashcardSuggestion"]] = relationship(
        back_populates="session",
        order_by="FlashcardSuggestion.position",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<GenerationSession(id={self.id}, status='{self.status}')>"


class FlashcardSuggestion(Base):
    """Suggestion produced by a generation session, ordered by position."""

    __tablename__ = "flashcard_suggestions"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True)
    session_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("generation_sessions.id", ondelete="CASCADE"), index=True, nullable=False
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False)
    front_text: Mapped[str] = mapped_column(Text, nullable=False)
    back_text: Mapped[str] = mapped_column(Text, nullable=False)

    session: Mapped[GenerationSession] = relationship(back_populates="suggestions")

    def __repr__(self) -> str:
        return f"<FlashcardSuggestion(id={self.id}, session_id={self.session_id})>"


class Flashcard(Base):
    """Permanently stored flashcard."""

    __tablename__ = "flashcards"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True)
    owner_id: Mapped[uuid.UUID] = mapped_column(Uuid, index=True, nullable=False)
    front_text: Mapped[str] = mapped_column(String(1000), nullable=False)
    back_text: Mapped[str] = mapped_column(String(1000), nullable=False)
    source: Mapped[str] = mapped_column(String(10), nullable=False)
    generation_session_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid,
        ForeignKey("generation_sessions.id", ondelete="RESTRICT"),
        index=True,
        nullable=True,
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    def __repr__(self) -> str:
        return f"<Flashcard(id={self.id}, source='{self.source}')>"
