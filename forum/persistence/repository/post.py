"""PostgreSQL implementation of Post repository."""

from datetime import datetime
from typing import Optional

import logfire
from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from forum.domain.model import Post
from forum.domain.repository import PostRepository
from forum.domain.value import PostId, UserId, VoteDirection
from forum.persistence.mappers import post_to_dict, row_to_post
from forum.persistence.repository.votes import (
    toggle_vote_values,
    without_vote_columns,
)
from forum.persistence.tables import posts_table


class PostgresPostRepository(PostRepository):
    """PostgreSQL implementation of PostRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID."""
        with logfire.span("post_repository.find_by_id", post_id=str(post_id)):
            stmt = select(posts_table).where(posts_table.c.id == post_id)
            result = await self.session.execute(stmt)
            row = result.fetchone()

            if not row:
                logfire.warn("Post not found", post_id=str(post_id))
                return None

            return row_to_post(row._asdict())

    async def save(self, post: Post) -> Post:
        """Insert a post, or update an existing one without touching its votes."""
        post_dict = post_to_dict(post)

        if await self.find_by_id(post.id) is None:
            await self.session.execute(posts_table.insert().values(**post_dict))
            await self.session.flush()
            return post

        result = await self.session.execute(
            update(posts_table)
            .where(posts_table.c.id == post.id)
            .values(**without_vote_columns(post_dict))
            .returning(posts_table)
        )
        await self.session.flush()
        return row_to_post(result.one()._asdict())

    async def touch_last_activity(self, post_id: PostId, at: datetime) -> None:
        """Set a post's last activity timestamp."""
        stmt = (
            update(posts_table)
            .where(posts_table.c.id == post_id)
            .values(last_activity=at)
        )
        await self.session.execute(stmt)
        await self.session.flush()

    async def toggle_vote(
        self, post_id: PostId, user_id: UserId, direction: VoteDirection
    ) -> Optional[Post]:
        """Atomically toggle a user's vote on a post."""
        stmt = (
            update(posts_table)
            .where(posts_table.c.id == post_id)
            .values(**toggle_vote_values(posts_table, user_id, direction))
            .returning(posts_table)
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        if row is None:
            return None

        await self.session.flush()
        return row_to_post(row._asdict())
