"""Reply domain service."""

from datetime import datetime
from uuid import uuid4

import logfire

from forum.domain.error import ContentDeletedException, NotFoundError, ValidationError
from forum.domain.model.reply import (
    MAX_REPLY_DEPTH,
    Reply,
    normalize_reply_content,
)
from forum.domain.model.vote import recompute_vote_score
from forum.domain.repository import ReplyRepository
from forum.domain.value import (
    PostId,
    ReplyId,
    ReplySortOrder,
    UserId,
    UserRole,
    VoteDirection,
)

from .base import Service
from .post_service import PostService


class ReplyService(Service):
    """Domain service for reply operations.

    Every write goes through ``save`` so the vote score is recomputed and
    the owning post's last activity is touched, whatever the mutation was.
    """

    def __init__(
        self, reply_repository: ReplyRepository, post_service: PostService
    ) -> None:
        """Initialize reply service.

        Args:
            reply_repository: Reply repository
            post_service: Post domain service
        """
        self.reply_repository = reply_repository
        self.post_service = post_service

    async def save(self, reply: Reply) -> Reply:
        """Persist a reply and record activity on its post.

        Args:
            reply: Reply to save

        Returns:
            Saved reply with vote score recomputed
        """
        saved = await self.reply_repository.save(recompute_vote_score(reply))
        await self.post_service.touch_last_activity(saved.post_id)
        return saved

    async def create_reply(
        self,
        post_id: PostId,
        author_id: UserId,
        author_role: UserRole,
        content: str,
        parent_id: ReplyId | None = None,
    ) -> Reply:
        """Create a reply on a post or nested under another reply.

        Args:
            post_id: Post ID
            author_id: Author user ID
            author_role: Author's role, looked up at write time
            content: Reply content (trimmed before storing)
            parent_id: Parent reply ID for nested replies (None for top-level)

        Returns:
            Created reply

        Raises:
            ValidationError: If content is invalid, the parent is missing or
                on another post, or the parent is already at maximum depth
        """
        with logfire.span(
            "reply_service.create_reply",
            post_id=str(post_id),
            author_id=str(author_id),
            parent_id=str(parent_id) if parent_id else None,
        ):
            if not post_id or not author_id:
                raise ValidationError("Reply requires a post and an author")
            content = normalize_reply_content(content)

            depth = 0
            if parent_id:
                parent = await self.reply_repository.find_by_id(parent_id)
                if not parent:
                    logfire.error(
                        "Parent reply not found",
                        parent_id=str(parent_id),
                        post_id=str(post_id),
                    )
                    raise ValidationError("Parent reply not found")
                if parent.post_id != post_id:
                    logfire.error(
                        "Parent reply does not belong to post",
                        parent_id=str(parent_id),
                        parent_post_id=str(parent.post_id),
                        target_post_id=str(post_id),
                    )
                    raise ValidationError("Parent reply does not belong to this post")
                if not parent.can_have_children:
                    logfire.warn(
                        "Reply nesting limit reached",
                        parent_id=str(parent_id),
                        parent_depth=parent.depth,
                    )
                    raise ValidationError(
                        f"Replies cannot be nested more than {MAX_REPLY_DEPTH} levels deep"
                    )
                depth = parent.depth + 1

            now = datetime.now()
            reply = Reply(
                id=ReplyId(uuid4()),
                post_id=post_id,
                author_id=author_id,
                content=content,
                parent_id=parent_id,
                depth=depth,
                is_instructor_reply=author_role == UserRole.INSTRUCTOR,
                created_at=now,
                updated_at=now,
            )

            saved = await self.save(reply)
            logfire.info(
                "Reply created",
                reply_id=str(saved.id),
                post_id=str(post_id),
                depth=depth,
            )
            return saved

    async def get_reply_by_id(self, reply_id: ReplyId) -> Reply | None:
        """Get a reply by ID.

        Args:
            reply_id: Reply ID

        Returns:
            Reply if found, None otherwise
        """
        with logfire.span("reply_service.get_reply_by_id", reply_id=str(reply_id)):
            reply = await self.reply_repository.find_by_id(reply_id)
            if reply:
                logfire.info("Reply found", reply_id=str(reply_id))
            else:
                logfire.warn("Reply not found", reply_id=str(reply_id))
            return reply

    async def require_reply(self, reply_id: ReplyId) -> Reply:
        """Get a reply by ID or raise.

        Raises:
            NotFoundError: If reply not found
        """
        reply = await self.get_reply_by_id(reply_id)
        if reply is None:
            raise NotFoundError("Reply", str(reply_id))
        return reply

    async def get_replies_for_post(
        self,
        post_id: PostId,
        parent_id: ReplyId | None = None,
        sort: ReplySortOrder = ReplySortOrder.NEWEST,
    ) -> list[Reply]:
        """Get one level of a post's replies.

        Args:
            post_id: Post ID
            parent_id: Return children of this reply instead of top-level replies
            sort: Ordering of the returned replies

        Returns:
            List of replies
        """
        with logfire.span(
            "reply_service.get_replies_for_post",
            post_id=str(post_id),
            parent_id=str(parent_id) if parent_id else None,
            sort=sort.value,
        ):
            replies = await self.reply_repository.find_by_post(
                post_id=post_id, parent_id=parent_id, sort=sort
            )
            logfire.info(
                "Replies retrieved for post",
                post_id=str(post_id),
                count=len(replies),
            )
            return replies

    async def get_replies_by_author(
        self, author_id: UserId, page: int, limit: int
    ) -> tuple[list[Reply], int]:
        """Get a page of a user's replies, newest first.

        Args:
            author_id: Author user ID
            page: 1-based page number
            limit: Page size

        Returns:
            Tuple of (replies on the page, total replies by the author)
        """
        with logfire.span(
            "reply_service.get_replies_by_author",
            author_id=str(author_id),
            page=page,
            limit=limit,
        ):
            offset = (page - 1) * limit
            replies = await self.reply_repository.find_by_author(
                author_id=author_id, limit=limit, offset=offset
            )
            total = await self.reply_repository.count_by_author(author_id)
            return replies, total

    async def update_content(self, reply_id: ReplyId, content: str) -> Reply:
        """Replace the content of a reply.

        Args:
            reply_id: Reply ID
            content: New content

        Returns:
            Updated reply

        Raises:
            NotFoundError: If reply not found
            ContentDeletedException: If reply is deleted
            ValidationError: If content is invalid
        """
        with logfire.span(
            "reply_service.update_content",
            reply_id=str(reply_id),
            content_length=len(content),
        ):
            reply = await self.require_reply(reply_id)
            if reply.is_deleted:
                raise ContentDeletedException("reply", str(reply_id))

            updated = reply.model_copy(
                update={
                    "content": normalize_reply_content(content),
                    "updated_at": datetime.now(),
                }
            )
            saved = await self.save(updated)
            logfire.info("Reply content updated", reply_id=str(reply_id))
            return saved

    async def mark_accepted(self, reply_id: ReplyId) -> tuple[Reply, list[ReplyId]]:
        """Mark a reply as the accepted answer of its post.

        A post has at most one accepted answer: any other accepted reply on
        the same post loses the flag.

        Args:
            reply_id: Reply ID

        Returns:
            Tuple of (accepted reply, IDs of replies that lost the flag)

        Raises:
            NotFoundError: If reply not found
            ContentDeletedException: If reply is deleted
        """
        with logfire.span("reply_service.mark_accepted", reply_id=str(reply_id)):
            reply = await self.require_reply(reply_id)
            if reply.is_deleted:
                raise ContentDeletedException("reply", str(reply_id))

            now = datetime.now()
            unaccepted: list[ReplyId] = []
            for other in await self.reply_repository.find_accepted_by_post(
                reply.post_id
            ):
                if other.id == reply.id:
                    continue
                await self.save(
                    other.model_copy(
                        update={"is_accepted_answer": False, "updated_at": now}
                    )
                )
                unaccepted.append(other.id)

            accepted = reply
            if not reply.is_accepted_answer:
                accepted = await self.save(
                    reply.model_copy(
                        update={"is_accepted_answer": True, "updated_at": now}
                    )
                )

            logfire.info(
                "Reply marked as accepted",
                reply_id=str(reply_id),
                post_id=str(reply.post_id),
                unaccepted_count=len(unaccepted),
            )
            return accepted, unaccepted

    async def soft_delete(self, reply_id: ReplyId, acting_user_id: UserId) -> Reply:
        """Flag a reply as deleted.

        The record and its content are kept; children are not touched.

        Args:
            reply_id: Reply ID
            acting_user_id: User performing the deletion

        Returns:
            Deleted reply

        Raises:
            NotFoundError: If reply not found
            ContentDeletedException: If reply is already deleted
        """
        with logfire.span(
            "reply_service.soft_delete",
            reply_id=str(reply_id),
            acting_user_id=str(acting_user_id),
        ):
            reply = await self.require_reply(reply_id)
            if reply.is_deleted:
                raise ContentDeletedException("reply", str(reply_id))

            now = datetime.now()
            deleted = reply.model_copy(
                update={
                    "is_deleted": True,
                    "deleted_at": now,
                    "deleted_by": acting_user_id,
                    "updated_at": now,
                }
            )
            saved = await self.save(deleted)
            logfire.info(
                "Reply soft-deleted",
                reply_id=str(reply_id),
                deleted_by=str(acting_user_id),
            )
            return saved

    async def toggle_vote(
        self, reply_id: ReplyId, user_id: UserId, direction: VoteDirection
    ) -> Reply:
        """Toggle a user's vote on a reply.

        Args:
            reply_id: Reply ID
            user_id: Voting user ID
            direction: Vote direction

        Returns:
            Updated reply

        Raises:
            NotFoundError: If reply not found
            ContentDeletedException: If reply is deleted
        """
        with logfire.span(
            "reply_service.toggle_vote",
            reply_id=str(reply_id),
            user_id=str(user_id),
            direction=direction.value,
        ):
            reply = await self.require_reply(reply_id)
            if reply.is_deleted:
                raise ContentDeletedException("reply", str(reply_id))

            updated = await self.reply_repository.toggle_vote(
                reply_id, user_id, direction
            )
            if updated is None:
                raise NotFoundError("Reply", str(reply_id))

            await self.post_service.touch_last_activity(updated.post_id)
            logfire.info(
                "Reply vote toggled",
                reply_id=str(reply_id),
                vote_score=updated.vote_score,
            )
            return updated
