"""AI-assisted flashcard generation core."""
