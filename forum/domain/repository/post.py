"""Post repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from forum.domain.model.post import Post
from forum.domain.value import PostId, UserId, VoteDirection


class PostRepository(ABC):
    """Repository for Post aggregate.

    Defines the contract for post persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID.

        Args:
            post_id: The post's unique identifier

        Returns:
            The post if found, None otherwise
        """
        pass

    @abstractmethod
    async def save(self, post: Post) -> Post:
        """Save a post (create or update).

        Updating an existing post keeps its stored votes; only
        ``toggle_vote`` changes them.

        Args:
            post: The post to save

        Returns:
            The saved post
        """
        pass

    @abstractmethod
    async def touch_last_activity(self, post_id: PostId, at: datetime) -> None:
        """Set a post's last activity timestamp.

        Args:
            post_id: The post ID
            at: Activity timestamp
        """
        pass

    @abstractmethod
    async def toggle_vote(
        self, post_id: PostId, user_id: UserId, direction: VoteDirection
    ) -> Optional[Post]:
        """Atomically toggle a user's vote on a post.

        Args:
            post_id: The post ID
            user_id: The voting user
            direction: Vote direction

        Returns:
            The updated post, or None if it does not exist
        """
        pass
