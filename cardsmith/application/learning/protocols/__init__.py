"""Ports used by the learning use cases."""

from .ai_provider import AiProviderProtocol
from .flashcard_repository import FlashcardRepositoryProtocol
from .generation_session_repository import GenerationSessionRepositoryProtocol

__all__ = [
    "AiProviderProtocol",
    "FlashcardRepositoryProtocol",
    "GenerationSessionRepositoryProtocol",
]
