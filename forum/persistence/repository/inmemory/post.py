"""In-memory post repository for testing."""

from datetime import datetime
from typing import Optional

from forum.domain.model.post import Post
from forum.domain.model.vote import apply_vote, stored_votes
from forum.domain.repository.post import PostRepository
from forum.domain.value import PostId, UserId, VoteDirection


class InMemoryPostRepository(PostRepository):
    """In-memory implementation of PostRepository for testing."""

    def __init__(self) -> None:
        self._posts: dict[PostId, Post] = {}

    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID."""
        return self._posts.get(post_id)

    async def save(self, post: Post) -> Post:
        """Save a post, keeping the stored votes of an existing one."""
        existing = self._posts.get(post.id)
        if existing is not None:
            post = post.model_copy(update=stored_votes(existing))
        self._posts[post.id] = post
        return post

    async def touch_last_activity(self, post_id: PostId, at: datetime) -> None:
        """Set a post's last activity timestamp."""
        post = self._posts.get(post_id)
        if post:
            self._posts[post_id] = post.model_copy(update={"last_activity": at})

    async def toggle_vote(
        self, post_id: PostId, user_id: UserId, direction: VoteDirection
    ) -> Optional[Post]:
        """Toggle a user's vote on a post."""
        post = self._posts.get(post_id)
        if post is None:
            return None
        updated = apply_vote(post, user_id, direction).model_copy(
            update={"updated_at": datetime.now()}
        )
        self._posts[post_id] = updated
        return updated
