"""Prompts and response schema for flashcard generation."""

import re

from cardsmith.infrastructure.ai.openrouter.dto import JsonSchemaSpec, ResponseFormat

SYSTEM_MESSAGE = """\
You are an expert in creating educational materials, specializing
in generating study flashcards. Your task is to analyze the provided
text and generate high-quality flashcards that will help students
learn and remember key concepts.

Requirements:
- Generate 10-15 flashcards per request
- Each flashcard must have a clear question (front) and concise answer (back)
- Questions should test understanding, not just memorization
- Answers must be accurate and concise (max 200 characters)
- Focus on the most important concepts from the text
- Avoid repetitions and trivial questions
- Response must be in JSON format according to the provided schema
"""

USER_MESSAGE_TEMPLATE = """\
Input text for flashcard generation:

---BEGIN INPUT---
{input_text}
---END INPUT---

Generate flashcards covering the main concepts from the above text.
Remember the quality requirements and return response in specified JSON format.
"""

FILTERED = "[FILTERED]"

_IGNORE_PREVIOUS_PATTERN = re.compile(r"ignore\s+previous", re.IGNORECASE)
_SYSTEM_ROLE_PATTERN = re.compile(r"system:", re.IGNORECASE)

FLASHCARD_RESPONSE_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "flashcards": {
            "type": "array",
            "description": "List of generated flashcards",
            "items": {
                "type": "object",
                "properties": {
                    "front": {
                        "type": "string",
                        "description": "Question or prompt for flashcard",
                        "minLength": 5,
                        "maxLength": 500,
                    },
                    "back": {
                        "type": "string",
                        "description": "Answer or flashcard content",
                        "minLength": 5,
                        "maxLength": 200,
                    },
                },
                "required": ["front", "back"],
                "additionalProperties": False,
            },
            "minItems": 5,
            "maxItems": 20,
        }
    },
    "required": ["flashcards"],
    "additionalProperties": False,
}


def sanitize_input(text: str) -> str:
    """Basic prompt-injection filtering of user supplied text."""
    sanitized = text.replace("```", "\\`\\`\\`")
    sanitized = _IGNORE_PREVIOUS_PATTERN.sub(FILTERED, sanitized)
    return _SYSTEM_ROLE_PATTERN.sub(FILTERED, sanitized)


class FlashcardPromptBuilder:
    def build_system_message(self) -> str:
        return SYSTEM_MESSAGE

    def build_user_message(self, input_text: str) -> str:
        return USER_MESSAGE_TEMPLATE.format(input_text=sanitize_input(input_text))

    def build_response_format(self) -> ResponseFormat:
        return ResponseFormat(
            json_schema=JsonSchemaSpec(
                name="flashcard_generation_response",
                strict=True,
                schema=FLASHCARD_RESPONSE_SCHEMA,
            )
        )
