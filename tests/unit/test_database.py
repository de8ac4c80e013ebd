from collections.abc import Generator
from pathlib import Path

import pytest
import structlog
from sqlalchemy import inspect

from cardsmith import database
from cardsmith.config import Settings, configure_logging


@pytest.fixture
def sqlite_settings(tmp_path: Path) -> Generator[Settings, None, None]:
    settings = Settings(
        _env_file=None,
        ENVIRONMENT="test",
        DATABASE_URL=f"sqlite:///{tmp_path / 'cardsmith.db'}",
    )
    yield settings
    database.dispose_engine()


def test_accessors_fail_before_initialization() -> None:
    database.dispose_engine()

    with pytest.raises(RuntimeError, match="Database not initialized"):
        database.get_engine()
    with pytest.raises(RuntimeError, match="Database not initialized"):
        database.get_session_factory()


def test_create_tables_and_sessions(sqlite_settings: Settings) -> None:
    database.initialize_database(sqlite_settings)
    database.create_tables()

    tables = set(inspect(database.get_engine()).get_table_names())
    assert {"generation_sessions", "flashcard_suggestions", "flashcards"} <= tables

    sessions = database.get_db()
    db = next(sessions)
    assert db.bind is database.get_engine()
    sessions.close()


def test_dispose_engine_resets_state(sqlite_settings: Settings) -> None:
    database.initialize_database(sqlite_settings)

    database.dispose_engine()

    with pytest.raises(RuntimeError):
        database.get_engine()


@pytest.mark.parametrize("environment", ["development", "production", "test"])
def test_configure_logging(environment: str) -> None:
    configure_logging(environment)

    structlog.get_logger("cardsmith.tests").info("logging_configured", environment=environment)
