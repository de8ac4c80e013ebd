"""
Domain common module.

Contains base classes for domain modeling:
- ValueObject: Immutable objects defined by their attributes
- Entity: Objects with identity and lifecycle
- AggregateRoot: Consistency boundaries owned by a single user
"""

from .aggregate_root import AggregateRoot
from .entity import Entity, EntityId
from .exceptions import (
    DomainError,
    InvalidStateError,
    NotOwnedError,
    ValidationError,
)
from .value_object import ValueObject

__all__ = [
    "AggregateRoot",
    "DomainError",
    "Entity",
    "EntityId",
    "InvalidStateError",
    "NotOwnedError",
    "ValidationError",
    "ValueObject",
]
