"""
GenerationSession aggregate root.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import UTC, datetime
from decimal import Decimal
from enum import StrEnum

from cardsmith.domain.common.aggregate_root import AggregateRoot
from cardsmith.domain.common.exceptions import InvalidStateError, ValidationError
from cardsmith.domain.common.value_objects import GenerationSessionId, UserId
from cardsmith.domain.learning.entities.suggestion import Suggestion

MIN_INPUT_TEXT_LENGTH = 1000
MAX_INPUT_TEXT_LENGTH = 10000


class GenerationSessionStatus(StrEnum):
    """Lifecycle status of a generation attempt."""

    PENDING = "PENDING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"


@dataclass(frozen=True)
class GenerationSessionSnapshot:
    """
    Immutable export of a GenerationSession's state.

    This is the only way state leaves the aggregate (persistence mappers,
    query use cases). The aggregate can be rebuilt from it with
    GenerationSession.from_snapshot().
    """

    id: GenerationSessionId
    owner_id: UserId
    input_text: str
    status: GenerationSessionStatus
    created_at: datetime
    suggestions: tuple[Suggestion, ...] = ()
    generated_count: int | None = 0
    accepted_count: int | None = 0
    model_name: str | None = None
    estimated_cost: Decimal | None = None

    def __post_init__(self) -> None:
        """Validate required fields and default missing counters."""
        if self.id is None:
            raise ValidationError("Session ID cannot be None", field="id")
        if self.owner_id is None:
            raise ValidationError("Owner ID cannot be None", field="owner_id")
        if not self.input_text or not self.input_text.strip():
            raise ValidationError("Input text cannot be empty", field="input_text")
        if self.status is None:
            raise ValidationError("Status cannot be None", field="status")
        if self.created_at is None:
            raise ValidationError("Created at cannot be None", field="created_at")
        # frozen dataclass: defaults have to be written through object.__setattr__
        object.__setattr__(self, "suggestions", tuple(self.suggestions or ()))
        if self.generated_count is None:
            object.__setattr__(self, "generated_count", 0)
        if self.accepted_count is None:
            object.__setattr__(self, "accepted_count", 0)
        self._validate_outcome()

    def _validate_outcome(self) -> None:
        """Reject persisted state no factory or transition could have produced."""
        if self.status is GenerationSessionStatus.COMPLETED:
            if not self.suggestions:
                raise InvalidStateError(
                    "COMPLETED sessions must have suggestions", current_status=self.status
                )
            if self.generated_count != len(self.suggestions):
                raise InvalidStateError(
                    f"Generated count {self.generated_count} does not match "
                    f"{len(self.suggestions)} suggestions",
                    current_status=self.status,
                )
        else:
            if self.suggestions or self.generated_count:
                raise InvalidStateError(
                    f"{self.status} sessions cannot have suggestions",
                    current_status=self.status,
                )
            if self.model_name is not None or self.estimated_cost is not None:
                raise InvalidStateError(
                    f"{self.status} sessions cannot have a model name or cost",
                    current_status=self.status,
                )
        if not 0 <= self.accepted_count <= self.generated_count:
            raise InvalidStateError(
                f"Accepted count must be between 0 and {self.generated_count}",
                current_status=self.status,
            )


class GenerationSession(AggregateRoot[GenerationSessionId]):
    """
    One attempt to generate flashcard suggestions from input text.

    Business Rules:
    - Input text must be between 1000 and 10000 characters
    - COMPLETED sessions always carry at least one suggestion and
      generated_count equals the number of suggestions
    - FAILED sessions carry no suggestions, model name or cost
    - accepted_count stays within [0, generated_count] and can only be
      changed on COMPLETED sessions
    - COMPLETED and FAILED are terminal

    Lifecycle:
    - create() -> complete() / fail()
    - create_completed() / create_failed() with a pre-generated id when the
      outcome is already known
    - from_snapshot() when loading from persistence
    """

    def __init__(
        self,
        id: GenerationSessionId,
        owner_id: UserId,
        input_text: str,
        suggestions: Sequence[Suggestion],
        generated_count: int,
        accepted_count: int,
        model_name: str | None,
        estimated_cost: Decimal | None,
        status: GenerationSessionStatus,
        created_at: datetime,
    ) -> None:
        """Use the factory methods instead of calling this directly."""
        self._id = id
        self._owner_id = owner_id
        self._input_text = input_text
        self._suggestions: tuple[Suggestion, ...] = tuple(suggestions)
        self._generated_count = generated_count
        self._accepted_count = accepted_count
        self._model_name = model_name
        self._estimated_cost = estimated_cost
        self._status = status
        self._created_at = created_at

    @classmethod
    def create(cls, owner_id: UserId, input_text: str) -> "GenerationSession":
        """
        Create a new PENDING session.

        Args:
            owner_id: User starting the generation
            input_text: Text the suggestions will be generated from

        Returns:
            Session with PENDING status and no suggestions

        Raises:
            ValidationError: If the input text length is out of bounds
        """
        cls.validate_input_text(input_text)
        return cls(
            id=GenerationSessionId.generate(),
            owner_id=owner_id,
            input_text=input_text,
            suggestions=(),
            generated_count=0,
            accepted_count=0,
            model_name=None,
            estimated_cost=None,
            status=GenerationSessionStatus.PENDING,
            created_at=datetime.now(UTC),
        )

    @classmethod
    def create_completed(
        cls,
        id: GenerationSessionId,
        owner_id: UserId,
        input_text: str,
        suggestions: Sequence[Suggestion] | None,
        model_name: str | None,
        estimated_cost: Decimal | None,
    ) -> "GenerationSession":
        """
        Create a session that is already COMPLETED.

        Used when generation succeeded and the id was generated up front.

        Raises:
            ValidationError: If input text is out of bounds or there are no suggestions
        """
        cls.validate_input_text(input_text)
        if not suggestions:
            raise ValidationError(
                "Cannot create completed session without suggestions", field="suggestions"
            )

        return cls(
            id=id,
            owner_id=owner_id,
            input_text=input_text,
            suggestions=suggestions,
            generated_count=len(suggestions),
            accepted_count=0,
            model_name=model_name,
            estimated_cost=estimated_cost,
            status=GenerationSessionStatus.COMPLETED,
            created_at=datetime.now(UTC),
        )

    @classmethod
    def create_failed(
        cls, id: GenerationSessionId, owner_id: UserId, input_text: str
    ) -> "GenerationSession":
        """
        Create a session that is already FAILED.

        Raises:
            ValidationError: If the input text length is out of bounds
        """
        cls.validate_input_text(input_text)
        return cls(
            id=id,
            owner_id=owner_id,
            input_text=input_text,
            suggestions=(),
            generated_count=0,
            accepted_count=0,
            model_name=None,
            estimated_cost=None,
            status=GenerationSessionStatus.FAILED,
            created_at=datetime.now(UTC),
        )

    @classmethod
    def from_snapshot(cls, snapshot: GenerationSessionSnapshot) -> "GenerationSession":
        """Reconstitute a session from persisted state."""
        return cls(
            id=snapshot.id,
            owner_id=snapshot.owner_id,
            input_text=snapshot.input_text,
            suggestions=snapshot.suggestions,
            generated_count=snapshot.generated_count or 0,
            accepted_count=snapshot.accepted_count or 0,
            model_name=snapshot.model_name,
            estimated_cost=snapshot.estimated_cost,
            status=snapshot.status,
            created_at=snapshot.created_at,
        )

    # Read-only state

    @property
    def id(self) -> GenerationSessionId:
        return self._id

    @property
    def owner_id(self) -> UserId:
        return self._owner_id

    @property
    def input_text(self) -> str:
        return self._input_text

    @property
    def status(self) -> GenerationSessionStatus:
        return self._status

    @property
    def generated_count(self) -> int:
        return self._generated_count

    @property
    def accepted_count(self) -> int:
        return self._accepted_count

    @property
    def model_name(self) -> str | None:
        return self._model_name

    @property
    def estimated_cost(self) -> Decimal | None:
        return self._estimated_cost

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def suggestions(self) -> tuple[Suggestion, ...]:
        """Suggestions in generation order. The tuple cannot be used to mutate the session."""
        return self._suggestions

    # Business methods

    def complete(
        self,
        suggestions: Sequence[Suggestion] | None,
        model_name: str | None,
        estimated_cost: Decimal | None,
    ) -> None:
        """
        Mark a PENDING session as completed.

        Raises:
            InvalidStateError: If the session is not PENDING
            ValidationError: If there are no suggestions
        """
        if self._status is not GenerationSessionStatus.PENDING:
            raise InvalidStateError(
                f"Can only complete PENDING sessions. Current status: {self._status}",
                current_status=self._status,
            )
        if not suggestions:
            raise ValidationError(
                "Cannot complete session without suggestions", field="suggestions"
            )

        self._suggestions = tuple(suggestions)
        self._generated_count = len(self._suggestions)
        self._model_name = model_name
        self._estimated_cost = estimated_cost
        self._status = GenerationSessionStatus.COMPLETED

    def fail(self) -> None:
        """
        Mark a PENDING session as failed.

        Raises:
            InvalidStateError: If the session is not PENDING
        """
        if self._status is not GenerationSessionStatus.PENDING:
            raise InvalidStateError(
                f"Can only fail PENDING sessions. Current status: {self._status}",
                current_status=self._status,
            )
        self._status = GenerationSessionStatus.FAILED

    def update_accepted_count(self, accepted_count: int) -> None:
        """
        Record how many suggestions the owner accepted.

        Raises:
            InvalidStateError: If the session is not COMPLETED
            ValidationError: If the count is outside [0, generated_count]
        """
        if self._status is not GenerationSessionStatus.COMPLETED:
            raise InvalidStateError(
                "Can only update accepted count for COMPLETED sessions. "
                f"Current status: {self._status}",
                current_status=self._status,
            )
        if accepted_count < 0 or accepted_count > self._generated_count:
            raise ValidationError(
                f"Accepted count must be between 0 and {self._generated_count}",
                field="accepted_count",
                value=accepted_count,
            )
        self._accepted_count = accepted_count

    # Queries

    def can_provide_suggestions(self) -> bool:
        """Suggestions are readable (and approvable) only on COMPLETED sessions."""
        return self._status is GenerationSessionStatus.COMPLETED

    def is_pending(self) -> bool:
        return self._status is GenerationSessionStatus.PENDING

    def is_completed(self) -> bool:
        return self._status is GenerationSessionStatus.COMPLETED

    def has_failed(self) -> bool:
        return self._status is GenerationSessionStatus.FAILED

    def to_snapshot(self) -> GenerationSessionSnapshot:
        """Export the current state."""
        return GenerationSessionSnapshot(
            id=self._id,
            owner_id=self._owner_id,
            input_text=self._input_text,
            suggestions=self._suggestions,
            generated_count=self._generated_count,
            accepted_count=self._accepted_count,
            model_name=self._model_name,
            estimated_cost=self._estimated_cost,
            status=self._status,
            created_at=self._created_at,
        )

    def __repr__(self) -> str:
        return (
            f"GenerationSession(id={self._id}, owner_id={self._owner_id}, "
            f"status={self._status}, generated_count={self._generated_count}, "
            f"accepted_count={self._accepted_count})"
        )

    @staticmethod
    def validate_input_text(input_text: str) -> None:
        """
        Check input text against the length bounds.

        Raises:
            ValidationError: If the text is blank or its length is out of bounds
        """
        if not input_text or not input_text.strip():
            raise ValidationError("Input text cannot be empty", field="input_text")
        length = len(input_text)
        if length < MIN_INPUT_TEXT_LENGTH or length > MAX_INPUT_TEXT_LENGTH:
            raise ValidationError(
                f"Input text must be between {MIN_INPUT_TEXT_LENGTH} and "
                f"{MAX_INPUT_TEXT_LENGTH} characters. Current: {length}",
                field="input_text",
                value=length,
            )
