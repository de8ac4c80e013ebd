from dependency_injector import containers, providers
from sqlalchemy.orm import Session

from cardsmith.application.learning.use_cases.approval_reconciler import ApprovalReconciler
from cardsmith.application.learning.use_cases.check_ai_provider_health_use_case import (
    CheckAiProviderHealthUseCase,
)
from cardsmith.application.learning.use_cases.generation_orchestrator import (
    GenerationOrchestrator,
)
from cardsmith.application.learning.use_cases.get_generation_session_use_case import (
    GetGenerationSessionUseCase,
)
from cardsmith.application.learning.use_cases.get_session_suggestions_use_case import (
    GetSessionSuggestionsUseCase,
)
from cardsmith.config import get_settings
from cardsmith.infrastructure.ai.openrouter.api_client import OpenRouterApiClient
from cardsmith.infrastructure.ai.openrouter.circuit_breaker import CircuitBreaker
from cardsmith.infrastructure.ai.openrouter.prompt_builder import FlashcardPromptBuilder
from cardsmith.infrastructure.ai.openrouter.resilient_client import ResilientOpenRouterClient
from cardsmith.infrastructure.ai.openrouter.retry_policy import RetryPolicy
from cardsmith.infrastructure.ai.openrouter.service import ModelParameters, OpenRouterService
from cardsmith.infrastructure.learning.repositories import (
    FlashcardRepository,
    GenerationSessionRepository,
)


class Container(containers.DeclarativeContainer):
    """Dependency injection container."""

    settings = providers.Singleton(get_settings)

    # Declare db as a dependency that will be provided at runtime
    db = providers.Dependency(instance_of=Session)

    # Repositories
    generation_session_repository = providers.Factory(GenerationSessionRepository, db=db)
    flashcard_repository = providers.Factory(FlashcardRepository, db=db)

    # AI provider; the breaker holds process-wide state, so everything up to
    # the service is a singleton
    openrouter_api_client = providers.Singleton(
        OpenRouterApiClient,
        base_url=settings.provided.OPENROUTER_BASE_URL,
        api_key=settings.provided.OPENROUTER_API_KEY,
        timeout_seconds=settings.provided.OPENROUTER_TIMEOUT_SECONDS,
    )
    retry_policy = providers.Singleton(
        RetryPolicy,
        max_attempts=settings.provided.OPENROUTER_RETRY_MAX_ATTEMPTS,
        initial_backoff=settings.provided.OPENROUTER_RETRY_INITIAL_BACKOFF_SECONDS,
        max_backoff=settings.provided.OPENROUTER_RETRY_MAX_BACKOFF_SECONDS,
        multiplier=settings.provided.OPENROUTER_RETRY_MULTIPLIER,
    )
    circuit_breaker = providers.Singleton(
        CircuitBreaker,
        sliding_window_size=settings.provided.OPENROUTER_CIRCUIT_SLIDING_WINDOW_SIZE,
        failure_rate_threshold=settings.provided.OPENROUTER_CIRCUIT_FAILURE_RATE_THRESHOLD,
        wait_duration_in_open_state=settings.provided.OPENROUTER_CIRCUIT_WAIT_DURATION_SECONDS,
        permitted_calls_in_half_open_state=(
            settings.provided.OPENROUTER_CIRCUIT_PERMITTED_CALLS_IN_HALF_OPEN
        ),
    )
    resilient_client = providers.Singleton(
        ResilientOpenRouterClient,
        api_client=openrouter_api_client,
        retry_policy=retry_policy,
        circuit_breaker=circuit_breaker,
    )
    model_parameters = providers.Singleton(
        ModelParameters,
        temperature=settings.provided.OPENROUTER_TEMPERATURE,
        max_tokens=settings.provided.OPENROUTER_MAX_TOKENS,
        top_p=settings.provided.OPENROUTER_TOP_P,
        frequency_penalty=settings.provided.OPENROUTER_FREQUENCY_PENALTY,
        presence_penalty=settings.provided.OPENROUTER_PRESENCE_PENALTY,
    )
    ai_provider = providers.Singleton(
        OpenRouterService,
        client=resilient_client,
        model=settings.provided.OPENROUTER_DEFAULT_MODEL,
        parameters=model_parameters,
        prompt_builder=providers.Singleton(FlashcardPromptBuilder),
    )

    # Learning module, application use cases
    generation_orchestrator = providers.Factory(
        GenerationOrchestrator,
        session_repository=generation_session_repository,
        ai_provider=ai_provider,
        timeout_seconds=settings.provided.GENERATION_TIMEOUT_SECONDS,
    )
    approval_reconciler = providers.Factory(
        ApprovalReconciler,
        session_repository=generation_session_repository,
        flashcard_repository=flashcard_repository,
    )
    get_generation_session_use_case = providers.Factory(
        GetGenerationSessionUseCase,
        session_repository=generation_session_repository,
    )
    get_session_suggestions_use_case = providers.Factory(
        GetSessionSuggestionsUseCase,
        session_repository=generation_session_repository,
    )
    check_ai_provider_health_use_case = providers.Factory(
        CheckAiProviderHealthUseCase,
        ai_provider=ai_provider,
    )


# Initialize container
container = Container()
