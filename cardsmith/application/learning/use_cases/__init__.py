"""Learning use cases."""

from .approval_reconciler import ApprovalReconciler
from .check_ai_provider_health_use_case import CheckAiProviderHealthUseCase
from .generation_orchestrator import GenerationOrchestrator
from .get_generation_session_use_case import GetGenerationSessionUseCase
from .get_session_suggestions_use_case import GetSessionSuggestionsUseCase

__all__ = [
    "ApprovalReconciler",
    "CheckAiProviderHealthUseCase",
    "GenerationOrchestrator",
    "GetGenerationSessionUseCase",
    "GetSessionSuggestionsUseCase",
]
