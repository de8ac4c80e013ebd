from dataclasses import replace

import pytest

from cardsmith.domain.common.exceptions import NotOwnedError, ValidationError
from cardsmith.domain.common.value_objects import GenerationSessionId, UserId
from cardsmith.domain.learning.entities.flashcard import Flashcard, FlashcardSource


def test_create_from_suggestion() -> None:
    """Test creating an AI flashcard linked to its session."""
    owner = UserId.generate()
    session_id = GenerationSessionId.generate()

    flashcard = Flashcard.create_from_suggestion(
        owner_id=owner,
        front_text="What is ATP?",
        back_text="The energy currency of the cell",
        source=FlashcardSource.AI,
        generation_session_id=session_id,
    )

    assert flashcard.owner_id == owner
    assert flashcard.source is FlashcardSource.AI
    assert flashcard.generation_session_id == session_id
    assert flashcard.is_ai_generated()
    assert flashcard.created_at == flashcard.updated_at


def test_create_from_suggestion_rejects_user_source() -> None:
    with pytest.raises(ValidationError, match="source AI or AI_USER"):
        Flashcard.create_from_suggestion(
            owner_id=UserId.generate(),
            front_text="Q",
            back_text="A",
            source=FlashcardSource.USER,
            generation_session_id=GenerationSessionId.generate(),
        )


def test_create_from_suggestion_requires_session_id() -> None:
    with pytest.raises(ValidationError, match="generation session ID"):
        Flashcard.create_from_suggestion(
            owner_id=UserId.generate(),
            front_text="Q",
            back_text="A",
            source=FlashcardSource.AI_USER,
            generation_session_id=None,
        )


@pytest.mark.parametrize(
    ("front", "back", "field"),
    [
        ("", "A", "front_text"),
        ("   ", "A", "front_text"),
        ("Q", "", "back_text"),
        ("Q" * 1001, "A", "front_text"),
        ("Q", "A" * 1001, "back_text"),
    ],
)
def test_invalid_content_raises(front: str, back: str, field: str) -> None:
    with pytest.raises(ValidationError) as exc_info:
        Flashcard.create_manual(UserId.generate(), front, back)

    assert exc_info.value.field == field


def test_content_at_max_length_is_accepted() -> None:
    flashcard = Flashcard.create_manual(UserId.generate(), "Q" * 1000, "A" * 1000)

    assert len(flashcard.front_text) == 1000


def test_create_manual_has_no_session() -> None:
    flashcard = Flashcard.create_manual(UserId.generate(), "Q", "A")

    assert flashcard.source is FlashcardSource.USER
    assert flashcard.generation_session_id is None
    assert not flashcard.is_ai_generated()


def test_update_content_keeps_source_and_bumps_updated_at() -> None:
    flashcard = Flashcard.create_from_suggestion(
        owner_id=UserId.generate(),
        front_text="Q",
        back_text="A",
        source=FlashcardSource.AI,
        generation_session_id=GenerationSessionId.generate(),
    )
    before = flashcard.updated_at

    flashcard.update_content("New question", "New answer")

    assert flashcard.front_text == "New question"
    assert flashcard.back_text == "New answer"
    assert flashcard.source is FlashcardSource.AI
    assert flashcard.updated_at >= before


def test_update_content_validates() -> None:
    flashcard = Flashcard.create_manual(UserId.generate(), "Q", "A")

    with pytest.raises(ValidationError):
        flashcard.update_content("Q", " ")
    assert flashcard.back_text == "A"


def test_ownership() -> None:
    owner = UserId.generate()
    flashcard = Flashcard.create_manual(owner, "Q", "A")

    flashcard.ensure_owned_by(owner)
    with pytest.raises(NotOwnedError):
        flashcard.ensure_owned_by(UserId.generate())


def test_snapshot_round_trip() -> None:
    flashcard = Flashcard.create_from_suggestion(
        owner_id=UserId.generate(),
        front_text="Q",
        back_text="A",
        source=FlashcardSource.AI_USER,
        generation_session_id=GenerationSessionId.generate(),
    )

    restored = Flashcard.from_snapshot(flashcard.to_snapshot())

    assert restored == flashcard
    assert restored.to_snapshot() == flashcard.to_snapshot()


@pytest.mark.parametrize(
    ("source", "has_session"),
    [
        (FlashcardSource.AI, False),
        (FlashcardSource.AI_USER, False),
        (FlashcardSource.USER, True),
    ],
)
def test_snapshot_rejects_provenance_without_matching_session_link(
    source: FlashcardSource, has_session: bool
) -> None:
    snapshot = Flashcard.create_manual(UserId.generate(), "Front", "Back").to_snapshot()

    with pytest.raises(ValidationError, match="generation session"):
        replace(
            snapshot,
            source=source,
            generation_session_id=GenerationSessionId.generate() if has_session else None,
        )
