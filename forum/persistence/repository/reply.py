"""PostgreSQL implementation of Reply repository."""

from typing import Any, Dict, List, Optional

from sqlalchemy import desc, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from forum.domain.model import Reply
from forum.domain.repository import ReplyRepository
from forum.domain.value import PostId, ReplyId, ReplySortOrder, UserId, VoteDirection
from forum.persistence.mappers import reply_to_dict, row_to_reply
from forum.persistence.repository.votes import (
    toggle_vote_values,
    without_vote_columns,
)
from forum.persistence.tables import replies_table


class PostgresReplyRepository(ReplyRepository):
    """PostgreSQL implementation of ReplyRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    def _rows_to_replies(self, rows: List[Any]) -> List[Reply]:
        return [row_to_reply(row._asdict()) for row in rows]

    async def find_by_id(self, reply_id: ReplyId) -> Optional[Reply]:
        """Find a reply by ID."""
        stmt = select(replies_table).where(replies_table.c.id == reply_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_reply(row._asdict()) if row else None

    async def find_by_post(
        self,
        post_id: PostId,
        parent_id: Optional[ReplyId] = None,
        sort: ReplySortOrder = ReplySortOrder.NEWEST,
    ) -> List[Reply]:
        """Find one level of a post's reply forest."""
        stmt = select(replies_table).where(replies_table.c.post_id == post_id)

        if parent_id is None:
            stmt = stmt.where(replies_table.c.parent_id.is_(None))
        else:
            stmt = stmt.where(replies_table.c.parent_id == parent_id)

        if sort == ReplySortOrder.TOP:
            stmt = stmt.order_by(
                desc(replies_table.c.is_accepted_answer),
                desc(replies_table.c.vote_score),
                desc(replies_table.c.created_at),
            )
        else:
            stmt = stmt.order_by(desc(replies_table.c.created_at))

        result = await self.session.execute(stmt)
        return self._rows_to_replies(result.fetchall())

    async def find_accepted_by_post(self, post_id: PostId) -> List[Reply]:
        """Find the replies of a post currently marked as accepted answer."""
        stmt = (
            select(replies_table)
            .where(replies_table.c.post_id == post_id)
            .where(replies_table.c.is_accepted_answer.is_(True))
        )
        result = await self.session.execute(stmt)
        return self._rows_to_replies(result.fetchall())

    async def find_by_author(
        self,
        author_id: UserId,
        include_deleted: bool = False,
        limit: int = 10,
        offset: int = 0,
    ) -> List[Reply]:
        """Find replies by a specific author, newest first."""
        stmt = select(replies_table).where(replies_table.c.author_id == author_id)

        if not include_deleted:
            stmt = stmt.where(replies_table.c.is_deleted.is_(False))

        stmt = (
            stmt.order_by(desc(replies_table.c.created_at)).limit(limit).offset(offset)
        )

        result = await self.session.execute(stmt)
        return self._rows_to_replies(result.fetchall())

    async def count_by_author(
        self, author_id: UserId, include_deleted: bool = False
    ) -> int:
        """Count replies by a specific author."""
        stmt = (
            select(func.count())
            .select_from(replies_table)
            .where(replies_table.c.author_id == author_id)
        )
        if not include_deleted:
            stmt = stmt.where(replies_table.c.is_deleted.is_(False))

        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def save(self, reply: Reply) -> Reply:
        """Insert a reply, or update an existing one.

        Updates never write the vote columns; the stored votes are returned
        with the saved reply.
        """
        reply_dict: Dict[str, Any] = reply_to_dict(reply)

        if await self.find_by_id(reply.id) is None:
            await self.session.execute(replies_table.insert().values(**reply_dict))
            await self.session.flush()
            return reply

        result = await self.session.execute(
            update(replies_table)
            .where(replies_table.c.id == reply.id)
            .values(**without_vote_columns(reply_dict))
            .returning(replies_table)
        )
        await self.session.flush()
        return row_to_reply(result.one()._asdict())

    async def toggle_vote(
        self, reply_id: ReplyId, user_id: UserId, direction: VoteDirection
    ) -> Optional[Reply]:
        """Atomically toggle a user's vote on a reply."""
        stmt = (
            update(replies_table)
            .where(replies_table.c.id == reply_id)
            .values(**toggle_vote_values(replies_table, user_id, direction))
            .returning(replies_table)
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        if row is None:
            return None

        await self.session.flush()
        return row_to_reply(row._asdict())
