"""Toggle vote use case."""

from uuid import UUID

from forum.application.usecase.common import ApiModel
from forum.domain.service import VoteService
from forum.domain.value import UserId, VotableType, VoteDirection


class ToggleVoteRequest(ApiModel):
    """Toggle vote request."""

    votable_type: VotableType
    votable_id: str  # UUID string
    user_id: str  # User ID from authenticated user
    direction: VoteDirection


class ToggleVoteResponse(ApiModel):
    """Vote tally after the toggle."""

    upvotes: list[str]
    downvotes: list[str]
    vote_score: int
    message: str


class ToggleVoteUseCase:
    """Use case for upvoting or downvoting a post or reply.

    Voting the same direction twice retracts the vote; voting the other
    direction switches it.
    """

    def __init__(self, vote_service: VoteService) -> None:
        """Initialize toggle vote use case.

        Args:
            vote_service: Vote domain service
        """
        self.vote_service = vote_service

    async def execute(self, request: ToggleVoteRequest) -> ToggleVoteResponse:
        """Execute toggle vote flow.

        Args:
            request: Toggle vote request

        Returns:
            Voter sets and score after the toggle

        Raises:
            NotFoundError: If the post or reply does not exist
            ContentDeletedException: If the reply is deleted
        """
        user_id = UserId(UUID(request.user_id))
        entity = await self.vote_service.toggle(
            votable_type=request.votable_type,
            votable_id=UUID(request.votable_id),
            user_id=user_id,
            direction=request.direction,
        )

        if request.direction == VoteDirection.UP:
            voters, verb = entity.upvotes, "Upvote"
        else:
            voters, verb = entity.downvotes, "Downvote"
        message = f"{verb} added" if user_id in voters else f"{verb} removed"

        return ToggleVoteResponse(
            upvotes=[str(u) for u in entity.upvotes],
            downvotes=[str(d) for d in entity.downvotes],
            vote_score=entity.vote_score,
            message=message,
        )
