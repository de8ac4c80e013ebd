"""OpenRouter adapter for the AI provider port."""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

import structlog
from pydantic import ValidationError

from cardsmith.domain.common.value_objects import GenerationSessionId
from cardsmith.domain.learning.entities.generation_session import (
    MAX_INPUT_TEXT_LENGTH,
    MIN_INPUT_TEXT_LENGTH,
)
from cardsmith.domain.learning.entities.suggestion import Suggestion
from cardsmith.exceptions import ProviderRequestError, ProviderResponseError
from cardsmith.infrastructure.ai.openrouter.dto import (
    ChatCompletionRequest,
    ChatCompletionResponse,
    ChatMessage,
    FlashcardGenerationPayload,
)
from cardsmith.infrastructure.ai.openrouter.prompt_builder import FlashcardPromptBuilder
from cardsmith.infrastructure.ai.openrouter.resilient_client import ResilientOpenRouterClient

logger = structlog.get_logger(__name__)

# USD per 1000 tokens
COST_PER_1K_TOKENS: dict[str, Decimal] = {
    "openai/gpt-4-turbo": Decimal("0.01"),
    "openai/gpt-4o-mini": Decimal("0.00015"),
    "openai/gpt-3.5-turbo": Decimal("0.002"),
    "anthropic/claude-3-sonnet": Decimal("0.003"),
}
DEFAULT_COST_PER_1K_TOKENS = Decimal("0.01")

SYSTEM_MESSAGE_TOKENS = 200
# Rough characters-per-token ratio for mixed-language input
CHARS_PER_TOKEN = 3
HEALTH_CHECK_MAX_TOKENS = 5


@dataclass(frozen=True)
class ModelParameters:
    temperature: float = 0.7
    max_tokens: int = 2000
    top_p: float = 0.9
    frequency_penalty: float = 0.3
    presence_penalty: float = 0.1


class OpenRouterService:
    """Generates flashcard suggestions through the OpenRouter chat completions API."""

    def __init__(
        self,
        client: ResilientOpenRouterClient,
        model: str,
        parameters: ModelParameters | None = None,
        prompt_builder: FlashcardPromptBuilder | None = None,
    ) -> None:
        self.client = client
        self.model = model
        self.parameters = parameters or ModelParameters()
        self.prompt_builder = prompt_builder or FlashcardPromptBuilder()

    @property
    def model_name(self) -> str:
        return self.model

    async def generate(
        self, input_text: str, session_id: GenerationSessionId
    ) -> list[Suggestion]:
        """
        Generate suggestions for the text.

        Args:
            input_text: Text to generate flashcards from
            session_id: Session the suggestions will belong to

        Returns:
            Suggestions in the order the model produced them, without ids

        Raises:
            ProviderRequestError: If the text is out of bounds or the provider rejects the request
            ProviderAuthError: If the provider rejects the API key
            ProviderTransientError: If the provider kept failing after all retries
            ProviderUnavailableError: If the circuit breaker is open
            ProviderResponseError: If the answer does not match the flashcard schema
        """
        logger.info("flashcard_generation_requested", session_id=str(session_id))

        self._validate_input_text(input_text)

        result = await self.client.send(self._build_generation_request(input_text))
        if result.is_failure:
            failure = result.unwrap_error()
            logger.error(
                "flashcard_generation_failed",
                session_id=str(session_id),
                failure_kind=failure.kind.value,
                provider_status=failure.status_code,
            )
            raise failure.to_exception()

        return self._parse_suggestions(result.unwrap(), session_id)

    def estimate_cost(self, input_text: str) -> Decimal:
        """Estimated USD cost of a generation request for the text, 4 decimal places."""
        tokens = (
            len(input_text) // CHARS_PER_TOKEN
            + SYSTEM_MESSAGE_TOKENS
            + self.parameters.max_tokens
        )
        rate = COST_PER_1K_TOKENS.get(self.model, DEFAULT_COST_PER_1K_TOKENS)
        return (rate * Decimal(tokens) / Decimal(1000)).quantize(
            Decimal("0.0001"), rounding=ROUND_HALF_UP
        )

    async def health_check(self) -> bool:
        """Send a minimal request. Any failure is logged and reported as False."""
        request = ChatCompletionRequest(
            model=self.model,
            messages=[ChatMessage.user("test")],
            max_tokens=HEALTH_CHECK_MAX_TOKENS,
        )
        try:
            result = await self.client.send(request)
        except Exception:
            logger.exception("openrouter_health_check_error")
            return False

        if result.is_failure:
            failure = result.unwrap_error()
            logger.warning(
                "openrouter_health_check_failed",
                failure_kind=failure.kind.value,
                provider_status=failure.status_code,
            )
            return False
        return result.unwrap().id is not None

    def _validate_input_text(self, input_text: str) -> None:
        if not input_text or not input_text.strip():
            raise ProviderRequestError("Input text cannot be empty")
        length = len(input_text)
        if length < MIN_INPUT_TEXT_LENGTH:
            raise ProviderRequestError(
                f"Input text too short: {length} chars (minimum: {MIN_INPUT_TEXT_LENGTH})"
            )
        if length > MAX_INPUT_TEXT_LENGTH:
            raise ProviderRequestError(
                f"Input text too long: {length} chars (maximum: {MAX_INPUT_TEXT_LENGTH})"
            )

    def _build_generation_request(self, input_text: str) -> ChatCompletionRequest:
        return ChatCompletionRequest(
            model=self.model,
            messages=[
                ChatMessage.system(self.prompt_builder.build_system_message()),
                ChatMessage.user(self.prompt_builder.build_user_message(input_text)),
            ],
            response_format=self.prompt_builder.build_response_format(),
            temperature=self.parameters.temperature,
            max_tokens=self.parameters.max_tokens,
            top_p=self.parameters.top_p,
            frequency_penalty=self.parameters.frequency_penalty,
            presence_penalty=self.parameters.presence_penalty,
        )

    def _parse_suggestions(
        self, response: ChatCompletionResponse, session_id: GenerationSessionId
    ) -> list[Suggestion]:
        if not response.choices:
            raise ProviderResponseError("No choices in response")

        content = response.choices[0].message.content
        if not content:
            raise ProviderResponseError("Empty message content in response")

        logger.debug("parsing_flashcard_response", content_length=len(content))
        try:
            payload = FlashcardGenerationPayload.model_validate_json(content)
        except ValidationError as e:
            logger.error("flashcard_response_invalid", error=str(e))
            raise ProviderResponseError("Invalid response format", response_body=content) from e

        return [
            Suggestion(session_id=session_id, front_text=card.front, back_text=card.back)
            for card in payload.flashcards
        ]
