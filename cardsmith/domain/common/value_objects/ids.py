from dataclasses import dataclass

from ..entity import EntityId


@dataclass(frozen=True)
class UserId(EntityId):
    """Strongly-typed user identifier."""


@dataclass(frozen=True)
class GenerationSessionId(EntityId):
    """Strongly-typed generation session identifier."""


@dataclass(frozen=True)
class SuggestionId(EntityId):
    """Strongly-typed suggestion identifier, assigned when the session is persisted."""


@dataclass(frozen=True)
class FlashcardId(EntityId):
    """Strongly-typed flashcard identifier."""
