"""Pytest configuration and fixtures."""

from collections.abc import Generator
from decimal import Decimal
from uuid import UUID, uuid4

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

import cardsmith.models  # noqa: F401
from cardsmith.database import Base
from cardsmith.domain.common.value_objects import GenerationSessionId
from cardsmith.domain.learning.entities.suggestion import Suggestion

# Test database URL (in-memory SQLite)
TEST_DATABASE_URL = "sqlite:///:memory:"

# One shared connection so every session sees the same in-memory database
test_engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)

SAMPLE_PARAGRAPH = (
    "Photosynthesis is the process by which green plants and some other organisms "
    "use sunlight to synthesize foods from carbon dioxide and water. "
)


@pytest.fixture
def db_session() -> Generator[Session, None, None]:
    """Create a fresh database session for each test."""
    Base.metadata.create_all(bind=test_engine)

    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def owner_id() -> UUID:
    return uuid4()


@pytest.fixture
def other_owner_id() -> UUID:
    return uuid4()


@pytest.fixture
def input_text() -> str:
    """Input text of about 1500 characters, inside the accepted bounds."""
    return (SAMPLE_PARAGRAPH * 12)[:1500]


class FakeAiProvider:
    """In-memory AI provider returning canned suggestions or raising a canned error."""

    def __init__(
        self,
        cards: list[tuple[str, str]] | None = None,
        error: Exception | None = None,
        model_name: str = "openai/gpt-4o-mini",
        cost: Decimal = Decimal("0.0006"),
        healthy: bool = True,
    ) -> None:
        self.cards = cards if cards is not None else [
            ("What is photosynthesis?", "Turning light into chemical energy"),
            ("What do plants need for photosynthesis?", "Sunlight, water and CO2"),
            ("Which organisms photosynthesize?", "Green plants and some others"),
        ]
        self.error = error
        self._model_name = model_name
        self.cost = cost
        self.healthy = healthy
        self.generate_calls: list[tuple[str, GenerationSessionId]] = []

    @property
    def model_name(self) -> str:
        return self._model_name

    async def generate(
        self, input_text: str, session_id: GenerationSessionId
    ) -> list[Suggestion] | None:
        self.generate_calls.append((input_text, session_id))
        if self.error is not None:
            raise self.error
        return [
            Suggestion(session_id=session_id, front_text=front, back_text=back)
            for front, back in self.cards
        ]

    def estimate_cost(self, input_text: str) -> Decimal:
        return self.cost

    async def health_check(self) -> bool:
        return self.healthy


@pytest.fixture
def fake_provider() -> FakeAiProvider:
    return FakeAiProvider()


@pytest.fixture
def make_provider() -> type[FakeAiProvider]:
    """Provider class, for tests that need a failing or customised provider."""
    return FakeAiProvider
