"""
Suggestion value object.
"""

from dataclasses import dataclass

from cardsmith.domain.common.value_object import ValueObject
from cardsmith.domain.common.value_objects import GenerationSessionId, SuggestionId


@dataclass(frozen=True)
class Suggestion(ValueObject):
    """
    One AI-proposed front/back pair.

    Suggestions live inside a GenerationSession and have no lifecycle of
    their own. The id stays None until the owning session is first saved.
    """

    session_id: GenerationSessionId
    front_text: str
    back_text: str
    id: SuggestionId | None = None
