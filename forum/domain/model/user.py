"""User aggregate root.

Users are created by the external authentication system; the forum only
reads them to resolve authorship and roles.
"""

from datetime import datetime

from pydantic import Field

from forum.domain.model.common import DomainModel
from forum.domain.value import Handle, UserId, UserRole


class User(DomainModel):
    """Forum member."""

    id: UserId
    handle: Handle
    role: UserRole = UserRole.STUDENT
    created_at: datetime = Field(default_factory=datetime.now)
