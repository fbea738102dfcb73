"""Vote bookkeeping shared by posts and replies.

Votes live on the voted entity itself as two sets of voter ids. The score is
derived from them and is never tracked as an independent counter:

    vote_score = len(upvotes) - len(downvotes)

Toggling follows three rules:
- voting the same direction twice retracts the vote
- voting the opposite direction switches the vote
- a voter is never in both sets, and never twice in one set
"""

from typing import Any, Sequence, TypeVar

from pydantic import Field, model_validator

from forum.domain.model.common import DomainModel
from forum.domain.value import UserId, VoteDirection


def compute_vote_score(upvotes: Sequence[UserId], downvotes: Sequence[UserId]) -> int:
    """Derive the net score from the two voter sets."""
    return len(upvotes) - len(downvotes)


def toggle_vote(
    upvotes: Sequence[UserId],
    downvotes: Sequence[UserId],
    user_id: UserId,
    direction: VoteDirection,
) -> tuple[list[UserId], list[UserId]]:
    """Apply one vote toggle to a pair of voter sets.

    Args:
        upvotes: Current upvoters
        downvotes: Current downvoters
        user_id: Voting user
        direction: Direction the user voted

    Returns:
        New (upvotes, downvotes) lists; the inputs are not modified
    """
    if direction == VoteDirection.UP:
        same, opposite = list(upvotes), list(downvotes)
    else:
        same, opposite = list(downvotes), list(upvotes)

    if user_id in same:
        same.remove(user_id)
    else:
        same.append(user_id)
        opposite = [voter for voter in opposite if voter != user_id]

    if direction == VoteDirection.UP:
        return same, opposite
    return opposite, same


class Votable(DomainModel):
    """Mixin for entities carrying upvote/downvote sets."""

    upvotes: list[UserId] = Field(default_factory=list)
    downvotes: list[UserId] = Field(default_factory=list)
    vote_score: int = 0

    @model_validator(mode="before")
    @classmethod
    def default_vote_score(cls, data: Any) -> Any:
        """Derive vote_score when it was not supplied."""
        if isinstance(data, dict) and data.get("vote_score") is None:
            data = {
                **data,
                "vote_score": compute_vote_score(
                    data.get("upvotes") or [], data.get("downvotes") or []
                ),
            }
        return data

    @model_validator(mode="after")
    def validate_votes(self) -> "Votable":
        """Enforce unique voters, mutual exclusion and a consistent score."""
        if len(set(self.upvotes)) != len(self.upvotes):
            raise ValueError("Duplicate voter in upvotes")
        if len(set(self.downvotes)) != len(self.downvotes):
            raise ValueError("Duplicate voter in downvotes")
        if set(self.upvotes) & set(self.downvotes):
            raise ValueError("A user cannot both upvote and downvote")
        if self.vote_score != compute_vote_score(self.upvotes, self.downvotes):
            raise ValueError(
                f"vote_score {self.vote_score} does not match "
                f"{len(self.upvotes)} upvotes and {len(self.downvotes)} downvotes"
            )
        return self


V = TypeVar("V", bound=Votable)


def recompute_vote_score(entity: V) -> V:
    """Return a copy of the entity with vote_score derived from its voter sets."""
    return entity.model_copy(
        update={"vote_score": compute_vote_score(entity.upvotes, entity.downvotes)}
    )


def apply_vote(entity: V, user_id: UserId, direction: VoteDirection) -> V:
    """Toggle a user's vote on an entity and recompute its score."""
    upvotes, downvotes = toggle_vote(
        entity.upvotes, entity.downvotes, user_id, direction
    )
    return recompute_vote_score(
        entity.model_copy(update={"upvotes": upvotes, "downvotes": downvotes})
    )


def stored_votes(entity: Votable) -> dict[str, Any]:
    """Vote fields of a stored entity, for carrying over on a non-vote save."""
    return {
        "upvotes": list(entity.upvotes),
        "downvotes": list(entity.downvotes),
        "vote_score": entity.vote_score,
    }
