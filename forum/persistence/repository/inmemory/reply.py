"""In-memory reply repository for testing."""

from datetime import datetime
from typing import Optional

from forum.domain.model.reply import Reply
from forum.domain.model.vote import apply_vote, stored_votes
from forum.domain.repository.reply import ReplyRepository
from forum.domain.value import PostId, ReplyId, ReplySortOrder, UserId, VoteDirection


class InMemoryReplyRepository(ReplyRepository):
    """In-memory implementation of ReplyRepository for testing."""

    def __init__(self) -> None:
        self._replies: dict[ReplyId, Reply] = {}

    async def find_by_id(self, reply_id: ReplyId) -> Optional[Reply]:
        """Find a reply by ID."""
        return self._replies.get(reply_id)

    async def find_by_post(
        self,
        post_id: PostId,
        parent_id: Optional[ReplyId] = None,
        sort: ReplySortOrder = ReplySortOrder.NEWEST,
    ) -> list[Reply]:
        """Find one level of a post's reply forest."""
        replies = [
            r
            for r in self._replies.values()
            if r.post_id == post_id and r.parent_id == parent_id
        ]

        if sort == ReplySortOrder.TOP:
            replies.sort(
                key=lambda r: (r.is_accepted_answer, r.vote_score, r.created_at),
                reverse=True,
            )
        else:
            replies.sort(key=lambda r: r.created_at, reverse=True)

        return replies

    async def find_accepted_by_post(self, post_id: PostId) -> list[Reply]:
        """Find the replies of a post currently marked as accepted answer."""
        return [
            r
            for r in self._replies.values()
            if r.post_id == post_id and r.is_accepted_answer
        ]

    async def find_by_author(
        self,
        author_id: UserId,
        include_deleted: bool = False,
        limit: int = 10,
        offset: int = 0,
    ) -> list[Reply]:
        """Find replies by a specific author, newest first."""
        replies = [r for r in self._replies.values() if r.author_id == author_id]

        if not include_deleted:
            replies = [r for r in replies if not r.is_deleted]

        replies.sort(key=lambda r: r.created_at, reverse=True)

        return replies[offset : offset + limit]

    async def count_by_author(
        self, author_id: UserId, include_deleted: bool = False
    ) -> int:
        """Count replies by a specific author."""
        return sum(
            1
            for r in self._replies.values()
            if r.author_id == author_id and (include_deleted or not r.is_deleted)
        )

    async def save(self, reply: Reply) -> Reply:
        """Save a reply, keeping the stored votes of an existing one."""
        existing = self._replies.get(reply.id)
        if existing is not None:
            reply = reply.model_copy(update=stored_votes(existing))
        self._replies[reply.id] = reply
        return reply

    async def toggle_vote(
        self, reply_id: ReplyId, user_id: UserId, direction: VoteDirection
    ) -> Optional[Reply]:
        """Toggle a user's vote on a reply."""
        reply = self._replies.get(reply_id)
        if reply is None:
            return None
        updated = apply_vote(reply, user_id, direction).model_copy(
            update={"updated_at": datetime.now()}
        )
        self._replies[reply_id] = updated
        return updated
