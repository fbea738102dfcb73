"""Domain value objects for the forum."""

from forum.domain.value.identifiers import PostId, ReplyId, UserId
from forum.domain.value.types import (
    Handle,
    ReplySortOrder,
    UserRole,
    VotableType,
    VoteDirection,
)

__all__ = [
    # Identifiers
    "UserId",
    "PostId",
    "ReplyId",
    # Types
    "Handle",
    "ReplySortOrder",
    "UserRole",
    "VotableType",
    "VoteDirection",
]
