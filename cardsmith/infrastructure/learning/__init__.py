"""Persistence adapters for the learning context."""
