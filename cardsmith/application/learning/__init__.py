"""
Learning bounded context - Application layer.

Contains use cases for AI-assisted flashcard creation:
- Generation: run one attempt against the AI provider
- Approval: turn selected suggestions into flashcards
- Queries: session status and suggestions
"""
