"""Common value objects shared across all domain modules."""

from .ids import FlashcardId, GenerationSessionId, SuggestionId, UserId

__all__ = [
    "FlashcardId",
    "GenerationSessionId",
    "SuggestionId",
    "UserId",
]
