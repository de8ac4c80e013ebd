"""DTOs for AI generation use cases."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from uuid import UUID


@dataclass(frozen=True)
class GenerationSummary:
    """Outcome of a successful generation request."""

    session_id: UUID
    status: str
    created_at: datetime


@dataclass(frozen=True)
class GenerationSessionView:
    """Status and metrics of a generation session."""

    session_id: UUID
    status: str
    generated_count: int
    accepted_count: int
    model_name: str | None
    estimated_cost: Decimal | None
    created_at: datetime


@dataclass(frozen=True)
class SuggestionView:
    id: UUID
    front_text: str
    back_text: str


@dataclass(frozen=True)
class SessionSuggestionsView:
    """Suggestions of a session; empty unless the session is COMPLETED."""

    session_id: UUID
    status: str
    suggestions: list[SuggestionView] = field(default_factory=list)


@dataclass(frozen=True)
class ProviderHealth:
    status: str
    details: dict[str, str] = field(default_factory=dict)

    @property
    def is_up(self) -> bool:
        return self.status == "up"
