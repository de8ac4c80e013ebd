from .flashcard_repository import FlashcardRepository
from .generation_session_repository import GenerationSessionRepository

__all__ = ["FlashcardRepository", "GenerationSessionRepository"]
