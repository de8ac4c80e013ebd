"""
Base class for Aggregate Roots.

Aggregate Roots are the entry point to an aggregate - a cluster of domain
objects that are treated as a single unit. All external references should
go through the aggregate root, and all invariants are enforced here.

Every aggregate in this package belongs to exactly one user, so ownership
checks live on the base class:

    session.ensure_owned_by(caller_id)  # raises NotOwnedError
    if card.is_owned_by(caller_id): ...  # plain query
"""

from abc import abstractmethod
from typing import Generic

from .entity import Entity, IdType
from .exceptions import NotOwnedError
from .value_objects.ids import UserId


class AggregateRoot(Entity[IdType], Generic[IdType]):
    """
    Base class for Aggregate Roots in the domain model.

    Aggregate Roots are:
    - Entry point to an aggregate (cluster of related objects)
    - Responsible for maintaining invariants
    - The only object referenced from outside the aggregate
    - Owned by a single user
    """

    @property
    @abstractmethod
    def owner_id(self) -> UserId:
        """User that owns this aggregate."""

    def is_owned_by(self, owner_id: UserId) -> bool:
        """Check ownership without raising."""
        return self.owner_id == owner_id

    def ensure_owned_by(self, owner_id: UserId) -> None:
        """
        Verify that the aggregate belongs to the given user.

        Raises:
            NotOwnedError: If the aggregate is owned by someone else
        """
        if not self.is_owned_by(owner_id):
            raise NotOwnedError(self.__class__.__name__, self.id, owner_id)
