"""Domain value objects for the forum.

Value objects are immutable and defined by their values, not identity.
"""

from enum import Enum

from pydantic import field_validator

from forum.domain.value.common import RootValueObject


class UserRole(str, Enum):
    """Role of a forum member.

    Instructors and admins moderate discussions: they may accept answers on
    any post and delete any reply.
    """

    STUDENT = "student"
    INSTRUCTOR = "instructor"
    ADMIN = "admin"

    @property
    def is_moderator(self) -> bool:
        """Whether this role can moderate other users' content."""
        return self in (UserRole.INSTRUCTOR, UserRole.ADMIN)


class VoteDirection(str, Enum):
    """Direction of a vote toggle."""

    UP = "up"
    DOWN = "down"


class VotableType(str, Enum):
    """Type of entity that can be voted on."""

    POST = "post"
    REPLY = "reply"


class ReplySortOrder(str, Enum):
    """Ordering of replies returned for a post."""

    NEWEST = "newest"
    TOP = "top"


class Handle(RootValueObject[str]):
    """Human-readable user handle."""

    @field_validator("root")
    @classmethod
    def validate_handle_format(cls, v: str) -> str:
        """Validate handle is not empty and within length limits."""
        if len(v) < 1 or len(v) > 255:
            raise ValueError("Handle must be 1-255 characters")
        return v
