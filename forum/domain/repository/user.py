"""User lookup.

The forum never creates accounts itself; ``save`` exists for the auth
service's sync job and for seeding tests.
"""

from abc import ABC, abstractmethod
from typing import Optional

from forum.domain.model.user import User
from forum.domain.value import UserId


class UserRepository(ABC):
    @abstractmethod
    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Return the user, or None when the ID is unknown."""

    @abstractmethod
    async def save(self, user: User) -> User:
        """Insert the user, or overwrite handle and role if it exists."""
