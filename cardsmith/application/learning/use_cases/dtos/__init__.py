"""DTOs for learning use cases."""

from cardsmith.application.learning.use_cases.dtos.approval_dtos import (
    ApprovalResult,
    CreatedFlashcard,
    SuggestionApproval,
)
from cardsmith.application.learning.use_cases.dtos.generation_dtos import (
    GenerationSessionView,
    GenerationSummary,
    ProviderHealth,
    SessionSuggestionsView,
    SuggestionView,
)

__all__ = [
    "ApprovalResult",
    "CreatedFlashcard",
    "GenerationSessionView",
    "GenerationSummary",
    "ProviderHealth",
    "SessionSuggestionsView",
    "SuggestionApproval",
    "SuggestionView",
]
