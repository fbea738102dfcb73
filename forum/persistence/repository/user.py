"""Users table access."""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from forum.domain.model import User
from forum.domain.repository import UserRepository
from forum.domain.value import UserId
from forum.persistence.mappers import row_to_user, user_to_dict
from forum.persistence.tables import users_table


class PostgresUserRepository(UserRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        row = (
            await self.session.execute(
                select(users_table).where(users_table.c.id == user_id)
            )
        ).mappings().first()
        return row_to_user(dict(row)) if row else None

    async def save(self, user: User) -> User:
        upsert = insert(users_table).values(**user_to_dict(user))
        upsert = upsert.on_conflict_do_update(
            index_elements=[users_table.c.id],
            set_={"handle": upsert.excluded.handle, "role": upsert.excluded.role},
        )
        await self.session.execute(upsert)
        return user
