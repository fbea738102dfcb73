"""Atomic vote toggling shared by the post and reply tables.

The toggle is expressed as a single UPDATE so that concurrent votes from
different users never overwrite each other. Postgres evaluates every SET
expression against the row as it was before the update, so the score is
computed from the same new-array expressions as the arrays themselves.
"""

from datetime import datetime
from typing import Any
from uuid import UUID

from sqlalchemy import Table, any_, case, cast, func
from sqlalchemy.dialects.postgresql import ARRAY
from sqlalchemy.dialects.postgresql import UUID as PG_UUID

from forum.domain.value import VoteDirection

# Written only by the toggle below once a row exists
VOTE_COLUMNS = ("upvotes", "downvotes", "vote_score")


def without_vote_columns(values: dict[str, Any]) -> dict[str, Any]:
    """Drop the vote columns from a row dict used to update an existing row."""
    return {k: v for k, v in values.items() if k not in VOTE_COLUMNS}


def toggle_vote_values(
    table: Table, user_id: UUID, direction: VoteDirection
) -> dict[str, Any]:
    """Build the SET clause for toggling a user's vote on a row.

    Args:
        table: Table with upvotes, downvotes and vote_score columns
        user_id: Voting user
        direction: Vote direction

    Returns:
        Values to pass to ``update().values()``
    """
    voter = cast(user_id, PG_UUID)
    if direction == VoteDirection.UP:
        same_name, opposite_name = "upvotes", "downvotes"
    else:
        same_name, opposite_name = "downvotes", "upvotes"
    same = table.c[same_name]
    opposite = table.c[opposite_name]

    already_voted = voter == any_(same)
    new_same = case(
        (already_voted, func.array_remove(same, voter, type_=ARRAY(PG_UUID))),
        else_=func.array_append(same, voter, type_=ARRAY(PG_UUID)),
    )
    new_opposite = case(
        (already_voted, opposite),
        else_=func.array_remove(opposite, voter, type_=ARRAY(PG_UUID)),
    )

    new_up, new_down = (
        (new_same, new_opposite)
        if direction == VoteDirection.UP
        else (new_opposite, new_same)
    )
    return {
        same_name: new_same,
        opposite_name: new_opposite,
        "vote_score": func.cardinality(new_up) - func.cardinality(new_down),
        "updated_at": datetime.now(),
    }
