"""Wire models for the OpenRouter chat completions API."""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from cardsmith.domain.learning.entities.flashcard import MAX_CONTENT_LENGTH


class ChatMessage(BaseModel):
    role: Literal["system", "user", "assistant"]
    content: str | None = None

    @classmethod
    def system(cls, content: str) -> "ChatMessage":
        return cls(role="system", content=content)

    @classmethod
    def user(cls, content: str) -> "ChatMessage":
        return cls(role="user", content=content)


class JsonSchemaSpec(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    strict: bool = True
    schema_: dict[str, Any] = Field(alias="schema")


class ResponseFormat(BaseModel):
    type: Literal["json_schema"] = "json_schema"
    json_schema: JsonSchemaSpec


class ChatCompletionRequest(BaseModel):
    """Body of POST /chat/completions. Unset optional fields are not sent."""

    model: str
    messages: list[ChatMessage]
    response_format: ResponseFormat | None = None
    temperature: float | None = None
    max_tokens: int | None = None
    top_p: float | None = None
    frequency_penalty: float | None = None
    presence_penalty: float | None = None

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class ChatChoice(BaseModel):
    index: int = 0
    message: ChatMessage
    finish_reason: str | None = None


class ChatCompletionResponse(BaseModel):
    """Completion envelope. Unknown fields (usage, provider, ...) are ignored."""

    id: str | None = None
    model: str | None = None
    choices: list[ChatChoice] = Field(default_factory=list)


class GeneratedFlashcard(BaseModel):
    """One card as written by the model; it has to fit a Flashcard unedited."""

    model_config = ConfigDict(str_strip_whitespace=True)

    front: str = Field(min_length=1, max_length=MAX_CONTENT_LENGTH)
    back: str = Field(min_length=1, max_length=MAX_CONTENT_LENGTH)


class FlashcardGenerationPayload(BaseModel):
    """JSON document the model writes into the first choice's content."""

    flashcards: list[GeneratedFlashcard] = Field(min_length=1)
