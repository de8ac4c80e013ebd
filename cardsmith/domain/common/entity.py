"""
Base class for Entities.

Entities are objects that have a distinct identity that runs through time
and different states. Two entities are equal if they have the same identity,
regardless of their attributes.

Example:
    class Flashcard(Entity[FlashcardId]):
        def __init__(self, id: FlashcardId, front_text: str) -> None:
            self._id = id
            self._front_text = front_text

        @property
        def id(self) -> FlashcardId:
            return self._id
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Generic, Self, TypeVar
from uuid import UUID, uuid4

from .value_object import ValueObject


@dataclass(frozen=True)
class EntityId(ValueObject):
    """
    Base class for strongly-typed entity identifiers.

    Entity IDs are value objects that wrap a UUID.
    They provide type safety to prevent mixing up IDs of different entities.

    Example:
        session_id = GenerationSessionId.generate()
        flashcard_id = FlashcardId(session_id.value)
        # session_id != flashcard_id, the types differ
    """

    value: UUID

    def __post_init__(self) -> None:
        if not isinstance(self.value, UUID):
            raise TypeError(f"{self.__class__.__name__} must wrap a UUID")

    def __str__(self) -> str:
        return str(self.value)

    @classmethod
    def generate(cls) -> Self:
        """Generate a new random identifier."""
        return cls(uuid4())

    @classmethod
    def parse(cls, value: str | UUID) -> Self:
        """Build an identifier from a UUID or its string form."""
        return cls(value if isinstance(value, UUID) else UUID(value))

    def to_primitive(self) -> str:
        """Convert to primitive for serialization."""
        return str(self.value)


IdType = TypeVar("IdType", bound=EntityId)


class Entity(ABC, Generic[IdType]):
    """
    Base class for Entities in the domain model.

    Entities are:
    - Defined by identity (not attributes)
    - Mutable only through their own business methods
    - Have lifecycle (created, modified, deleted)
    """

    @property
    @abstractmethod
    def id(self) -> IdType:
        """Identity of the entity."""

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, self.__class__):
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(id={self.id})"
