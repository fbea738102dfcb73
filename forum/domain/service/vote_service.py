"""Vote domain service."""

from uuid import UUID

import logfire

from forum.domain.error import NotFoundError
from forum.domain.model.vote import Votable
from forum.domain.value import PostId, ReplyId, UserId, VotableType, VoteDirection

from .base import Service
from .post_service import PostService
from .reply_service import ReplyService


class VoteService(Service):
    """Domain service for vote toggling on posts and replies.

    Both entity kinds carry their own voter sets; this service routes a
    toggle to the right one and returns the updated entity.
    """

    def __init__(self, post_service: PostService, reply_service: ReplyService) -> None:
        """Initialize vote service.

        Args:
            post_service: Post domain service
            reply_service: Reply domain service
        """
        self.post_service = post_service
        self.reply_service = reply_service

    async def toggle(
        self,
        votable_type: VotableType,
        votable_id: UUID,
        user_id: UserId,
        direction: VoteDirection,
    ) -> Votable:
        """Toggle a vote.

        Args:
            votable_type: Whether a post or a reply is voted on
            votable_id: ID of the voted entity
            user_id: Voting user ID
            direction: Vote direction

        Returns:
            The voted entity after the toggle

        Raises:
            NotFoundError: If the entity does not exist
            ContentDeletedException: If the reply is deleted
        """
        with logfire.span(
            "vote_service.toggle",
            votable_type=votable_type.value,
            votable_id=str(votable_id),
            user_id=str(user_id),
            direction=direction.value,
        ):
            if votable_type == VotableType.POST:
                post = await self.post_service.toggle_vote(
                    PostId(votable_id), user_id, direction
                )
                if post is None:
                    logfire.warn("Vote on non-existent post", post_id=str(votable_id))
                    raise NotFoundError("Post", str(votable_id))
                return post

            return await self.reply_service.toggle_vote(
                ReplyId(votable_id), user_id, direction
            )
