"""
Application layer.

Orchestrates domain objects through use cases and depends only on
protocols (ports) for persistence and the AI provider.
"""
