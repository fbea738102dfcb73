"""User domain service."""

import logfire

from forum.domain.error import NotFoundError
from forum.domain.model import User
from forum.domain.repository import UserRepository
from forum.domain.value import UserId, UserRole

from .base import Service


class UserService(Service):
    """Domain service for user lookups.

    This is the only place the rest of the domain learns a user's role from;
    roles are never inferred from whatever shape an author reference has.
    """

    def __init__(self, user_repository: UserRepository) -> None:
        """Initialize user service.

        Args:
            user_repository: User repository
        """
        self.user_repository = user_repository

    async def get_by_id(self, user_id: UserId) -> User:
        """Get user by ID.

        Args:
            user_id: User ID

        Returns:
            User entity

        Raises:
            NotFoundError: If user not found
        """
        with logfire.span("user_service.get_by_id", user_id=str(user_id)):
            user = await self.user_repository.find_by_id(user_id)
            if not user:
                logfire.warn("User not found", user_id=str(user_id))
                raise NotFoundError("User", str(user_id))
            return user

    async def resolve_role(self, user_id: UserId) -> UserRole:
        """Look up a user's current role.

        Args:
            user_id: User ID

        Returns:
            The user's role

        Raises:
            NotFoundError: If user not found
        """
        user = await self.get_by_id(user_id)
        return user.role

    async def save(self, user: User) -> User:
        """Save a user."""
        with logfire.span(
            "user_service.save", user_id=str(user.id), handle=user.handle.root
        ):
            saved = await self.user_repository.save(user)
            logfire.info("User saved", user_id=str(saved.id), handle=saved.handle.root)
            return saved
