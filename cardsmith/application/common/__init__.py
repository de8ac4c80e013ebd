"""
Application common module.

Contains shared building blocks for the application layer:
- Result: Success / Failure values for outcomes that are inspected, not caught
"""

from .result import Failure, Result, Success

__all__ = [
    "Failure",
    "Result",
    "Success",
]
