from decimal import Decimal
from typing import Protocol

from cardsmith.domain.common.value_objects import GenerationSessionId
from cardsmith.domain.learning.entities.suggestion import Suggestion


class AiProviderProtocol(Protocol):
    """
    Port for the external AI that turns text into flashcard suggestions.

    Use cases depend on this protocol only, never on a concrete provider.
    """

    @property
    def model_name(self) -> str:
        """Model used for generation, recorded on completed sessions."""
        ...

    async def generate(
        self, input_text: str, session_id: GenerationSessionId
    ) -> list[Suggestion] | None:
        """
        Generate suggestions for the text, tagged with the given session id.

        Raises:
            ProviderError: Or one of its subclasses when the provider fails
        """
        ...

    def estimate_cost(self, input_text: str) -> Decimal:
        """Estimated cost in USD of generating suggestions for the text."""
        ...

    async def health_check(self) -> bool:
        """True when the provider answers a minimal request."""
        ...
