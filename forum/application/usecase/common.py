"""Models shared by the reply use cases.

Response models serialize with camelCase keys, which is what the web and
Python clients read.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from forum.domain.model import Reply


class ApiModel(BaseModel):
    """Base for request/response models exchanged with clients."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ReplyItem(ApiModel):
    """Reply as returned to clients.

    Deleted replies keep their place in the thread but carry the placeholder
    text instead of their content.
    """

    id: str
    post_id: str
    author_id: str
    content: str
    parent_reply: str | None = None
    depth: int
    upvotes: list[str] = []
    downvotes: list[str] = []
    vote_score: int = 0
    is_accepted_answer: bool = False
    is_instructor_reply: bool = False
    is_deleted: bool = False
    deleted_at: datetime | None = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_reply(cls, reply: Reply) -> "ReplyItem":
        """Build the client view of a reply."""
        return cls(
            id=str(reply.id),
            post_id=str(reply.post_id),
            author_id=str(reply.author_id),
            content=reply.display_content,
            parent_reply=str(reply.parent_id) if reply.parent_id else None,
            depth=reply.depth,
            upvotes=[str(u) for u in reply.upvotes],
            downvotes=[str(d) for d in reply.downvotes],
            vote_score=reply.vote_score,
            is_accepted_answer=reply.is_accepted_answer,
            is_instructor_reply=reply.is_instructor_reply,
            is_deleted=reply.is_deleted,
            deleted_at=reply.deleted_at,
            created_at=reply.created_at,
            updated_at=reply.updated_at,
        )


class PaginationInfo(ApiModel):
    """Page position within a paginated listing."""

    current_page: int
    total_pages: int
    total_replies: int
    has_next: bool
    has_prev: bool

    @classmethod
    def build(cls, page: int, limit: int, total: int) -> "PaginationInfo":
        """Compute page metadata from a page number, page size and total."""
        total_pages = (total + limit - 1) // limit if total else 0
        return cls(
            current_page=page,
            total_pages=total_pages,
            total_replies=total,
            has_next=page < total_pages,
            has_prev=page > 1,
        )
