"""Post domain service."""

from datetime import datetime
from uuid import uuid4

import logfire

from forum.domain.model.post import Post
from forum.domain.model.vote import recompute_vote_score
from forum.domain.repository import PostRepository
from forum.domain.value import PostId, UserId, VoteDirection

from .base import Service


class PostService(Service):
    """Domain service for post operations."""

    def __init__(self, post_repository: PostRepository) -> None:
        """Initialize post service.

        Args:
            post_repository: Post repository
        """
        self.post_repository = post_repository

    async def create_post(self, author_id: UserId, title: str, content: str) -> Post:
        """Create a post.

        Args:
            author_id: Author user ID
            title: Post title
            content: Post body

        Returns:
            Created post
        """
        with logfire.span("post_service.create_post", author_id=str(author_id)):
            now = datetime.now()
            post = Post(
                id=PostId(uuid4()),
                title=title.strip(),
                content=content.strip(),
                author_id=author_id,
                last_activity=now,
                created_at=now,
                updated_at=now,
            )
            saved = await self.save_post(post)
            logfire.info("Post created", post_id=str(saved.id))
            return saved

    async def save_post(self, post: Post) -> Post:
        """Save a post with its vote score recomputed.

        Args:
            post: Post to save

        Returns:
            Saved post
        """
        with logfire.span("post_service.save_post", post_id=str(post.id)):
            return await self.post_repository.save(recompute_vote_score(post))

    async def get_post_by_id(self, post_id: PostId) -> Post | None:
        """Get a post by ID.

        Args:
            post_id: Post ID

        Returns:
            Post if found, None otherwise
        """
        with logfire.span("post_service.get_post_by_id", post_id=str(post_id)):
            post = await self.post_repository.find_by_id(post_id)

            if post:
                logfire.info("Post found", post_id=str(post_id))
            else:
                logfire.warn("Post not found", post_id=str(post_id))

            return post

    async def touch_last_activity(self, post_id: PostId) -> None:
        """Record activity on a post (called on every reply save).

        Args:
            post_id: Post ID
        """
        with logfire.span("post_service.touch_last_activity", post_id=str(post_id)):
            await self.post_repository.touch_last_activity(post_id, datetime.now())

    async def mark_answered(self, post_id: PostId) -> Post | None:
        """Flag a post as answered.

        Args:
            post_id: Post ID

        Returns:
            Updated post, None if the post does not exist
        """
        with logfire.span("post_service.mark_answered", post_id=str(post_id)):
            post = await self.post_repository.find_by_id(post_id)
            if not post:
                logfire.warn("Post not found for mark answered", post_id=str(post_id))
                return None
            if post.is_answered:
                return post

            updated = post.model_copy(
                update={"is_answered": True, "updated_at": datetime.now()}
            )
            saved = await self.save_post(updated)
            logfire.info("Post marked as answered", post_id=str(post_id))
            return saved

    async def toggle_vote(
        self, post_id: PostId, user_id: UserId, direction: VoteDirection
    ) -> Post | None:
        """Toggle a user's vote on a post.

        Args:
            post_id: Post ID
            user_id: Voting user ID
            direction: Vote direction

        Returns:
            Updated post, None if the post does not exist
        """
        with logfire.span(
            "post_service.toggle_vote",
            post_id=str(post_id),
            user_id=str(user_id),
            direction=direction.value,
        ):
            updated = await self.post_repository.toggle_vote(
                post_id, user_id, direction
            )
            if updated:
                logfire.info(
                    "Post vote toggled",
                    post_id=str(post_id),
                    vote_score=updated.vote_score,
                )
            return updated
