"""Reply repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from forum.domain.model.reply import Reply
from forum.domain.value import PostId, ReplyId, ReplySortOrder, UserId, VoteDirection


class ReplyRepository(ABC):
    """Repository for Reply entity.

    Defines the contract for reply persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(self, reply_id: ReplyId) -> Optional[Reply]:
        """Find a reply by ID.

        Args:
            reply_id: The reply's unique identifier

        Returns:
            The reply if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_post(
        self,
        post_id: PostId,
        parent_id: Optional[ReplyId] = None,
        sort: ReplySortOrder = ReplySortOrder.NEWEST,
    ) -> List[Reply]:
        """Find one level of a post's reply forest.

        Soft-deleted replies are included so their children stay reachable.

        Args:
            post_id: The post ID
            parent_id: Parent reply whose children to return; None returns
                the top-level replies
            sort: NEWEST orders by creation time descending; TOP puts the
                accepted answer first, then orders by vote score descending

        Returns:
            List of replies
        """
        pass

    @abstractmethod
    async def find_accepted_by_post(self, post_id: PostId) -> List[Reply]:
        """Find the replies of a post currently marked as accepted answer.

        Args:
            post_id: The post ID

        Returns:
            List of accepted replies
        """
        pass

    @abstractmethod
    async def find_by_author(
        self,
        author_id: UserId,
        include_deleted: bool = False,
        limit: int = 10,
        offset: int = 0,
    ) -> List[Reply]:
        """Find replies by a specific author, newest first.

        Args:
            author_id: The author's user ID
            include_deleted: Whether to include soft-deleted replies
            limit: Maximum number of replies to return
            offset: Number of replies to skip

        Returns:
            List of replies by the author
        """
        pass

    @abstractmethod
    async def count_by_author(
        self, author_id: UserId, include_deleted: bool = False
    ) -> int:
        """Count replies by a specific author.

        Args:
            author_id: The author's user ID
            include_deleted: Whether to count soft-deleted replies

        Returns:
            Number of replies
        """
        pass

    @abstractmethod
    async def save(self, reply: Reply) -> Reply:
        """Save a reply (create or update).

        Updating an existing reply keeps its stored votes; only
        ``toggle_vote`` changes them.

        Args:
            reply: The reply to save

        Returns:
            The saved reply
        """
        pass

    @abstractmethod
    async def toggle_vote(
        self, reply_id: ReplyId, user_id: UserId, direction: VoteDirection
    ) -> Optional[Reply]:
        """Atomically toggle a user's vote on a reply.

        Votes from different users must never overwrite each other, so
        implementations apply the toggle to the stored voter sets in one step
        rather than writing back a previously read copy.

        Args:
            reply_id: The reply ID
            user_id: The voting user
            direction: Vote direction

        Returns:
            The updated reply, or None if it does not exist
        """
        pass
