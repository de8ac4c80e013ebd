from .flashcard_mapper import FlashcardMapper
from .generation_session_mapper import GenerationSessionMapper

__all__ = ["FlashcardMapper", "GenerationSessionMapper"]
