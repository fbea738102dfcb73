"""Dict-backed user store."""

from typing import Optional

from forum.domain.model.user import User
from forum.domain.repository.user import UserRepository
from forum.domain.value import UserId


class InMemoryUserRepository(UserRepository):
    def __init__(self) -> None:
        self._by_id: dict[UserId, User] = {}

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        return self._by_id.get(user_id)

    async def save(self, user: User) -> User:
        self._by_id[user.id] = user
        return user
