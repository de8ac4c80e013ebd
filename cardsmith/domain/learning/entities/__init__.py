"""Learning domain entities."""

from .flashcard import Flashcard, FlashcardSnapshot, FlashcardSource
from .generation_session import (
    GenerationSession,
    GenerationSessionSnapshot,
    GenerationSessionStatus,
)
from .suggestion import Suggestion

__all__ = [
    "Flashcard",
    "FlashcardSnapshot",
    "FlashcardSource",
    "GenerationSession",
    "GenerationSessionSnapshot",
    "GenerationSessionStatus",
    "Suggestion",
]
