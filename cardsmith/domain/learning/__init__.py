"""
Learning bounded context - Domain layer.

This context handles AI-assisted flashcard creation:
- Generation sessions and the suggestions they produced
- Flashcards with provenance (USER, AI, AI_USER)

Aggregates:
- GenerationSession: One generation attempt and its suggestions
- Flashcard: A permanently stored study card
"""
