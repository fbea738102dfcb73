"""Reply entity.

Replies are threaded answers on a post. A reply without a parent answers the
post directly; a reply with a parent is nested under it. The parent links
form a forest per post whose depth is capped at MAX_REPLY_DEPTH.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from forum.domain.error import ValidationError
from forum.domain.model.vote import Votable
from forum.domain.value import PostId, ReplyId, UserId

MAX_REPLY_DEPTH = 5
MAX_REPLY_LENGTH = 2000
DELETED_REPLY_PLACEHOLDER = "[This reply has been deleted]"


def normalize_reply_content(content: str) -> str:
    """Trim reply content and check its length.

    Args:
        content: Raw content as submitted

    Returns:
        Trimmed content

    Raises:
        ValidationError: If the trimmed content is empty or too long
    """
    trimmed = content.strip()
    if not trimmed:
        raise ValidationError("Reply content is required")
    if len(trimmed) > MAX_REPLY_LENGTH:
        raise ValidationError(
            f"Reply cannot be more than {MAX_REPLY_LENGTH} characters"
        )
    return trimmed


class Reply(Votable):
    """Reply entity.

    Threading is managed through:
    - parent_id: Direct parent reply (None for replies to the post)
    - depth: Nesting level (0 for top-level, parent depth + 1 otherwise)

    Deleting a reply only flags it; the content stays in storage and is
    redacted when displayed.
    """

    id: ReplyId
    post_id: PostId
    author_id: UserId
    content: str = Field(min_length=1, max_length=MAX_REPLY_LENGTH)
    parent_id: Optional[ReplyId] = None
    depth: int = Field(default=0, ge=0, le=MAX_REPLY_DEPTH)
    is_accepted_answer: bool = False
    is_instructor_reply: bool = False
    is_deleted: bool = False
    deleted_at: Optional[datetime] = None
    deleted_by: Optional[UserId] = None
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    @property
    def display_content(self) -> str:
        """Content as shown to readers (redacted once deleted)."""
        return DELETED_REPLY_PLACEHOLDER if self.is_deleted else self.content

    @property
    def can_have_children(self) -> bool:
        """Whether another reply may be nested under this one."""
        return self.depth < MAX_REPLY_DEPTH
