"""
Infrastructure layer.

The infrastructure layer contains implementations of ports defined
in the application layer:

- Persistence (SQLAlchemy repositories and mappers)
- External services (the OpenRouter AI provider)

This layer depends on domain and application layers,
but they do not depend on it.
"""
