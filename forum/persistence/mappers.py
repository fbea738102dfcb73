"""Mappers for converting between database rows and domain models.

Domain models are immutable pydantic models, so rows are mapped by hand
instead of through SQLAlchemy's ORM.
"""

from typing import Any, Dict
from uuid import UUID

from forum.domain.model import Post, Reply, User
from forum.domain.value import Handle, PostId, ReplyId, UserId, UserRole


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def _voters(values: Any) -> list[UserId]:
    return [UserId(_uuid(v)) for v in values or []]


def row_to_user(row: Dict[str, Any]) -> User:
    """Convert database row to User domain model.

    Args:
        row: Database row as dict

    Returns:
        User domain model
    """
    return User(
        id=UserId(_uuid(row["id"])),
        handle=Handle(row["handle"]),
        role=UserRole(row["role"]),
        created_at=row["created_at"],
    )


def user_to_dict(user: User) -> Dict[str, Any]:
    """Convert User domain model to database dict."""
    return {
        "id": user.id,
        "handle": user.handle.root,
        "role": user.role.value,
        "created_at": user.created_at,
    }


def row_to_post(row: Dict[str, Any]) -> Post:
    """Convert database row to Post domain model.

    Args:
        row: Database row as dict

    Returns:
        Post domain model
    """
    return Post(
        id=PostId(_uuid(row["id"])),
        title=row["title"],
        content=row["content"],
        author_id=UserId(_uuid(row["author_id"])),
        upvotes=_voters(row.get("upvotes")),
        downvotes=_voters(row.get("downvotes")),
        vote_score=row["vote_score"],
        is_answered=row["is_answered"],
        last_activity=row["last_activity"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def post_to_dict(post: Post) -> Dict[str, Any]:
    """Convert Post domain model to database dict."""
    return post.model_dump()


def row_to_reply(row: Dict[str, Any]) -> Reply:
    """Convert database row to Reply domain model.

    Args:
        row: Database row as dict

    Returns:
        Reply domain model
    """
    parent_id = row.get("parent_id")
    deleted_by = row.get("deleted_by")
    return Reply(
        id=ReplyId(_uuid(row["id"])),
        post_id=PostId(_uuid(row["post_id"])),
        author_id=UserId(_uuid(row["author_id"])),
        content=row["content"],
        parent_id=ReplyId(_uuid(parent_id)) if parent_id else None,
        depth=row["depth"],
        upvotes=_voters(row.get("upvotes")),
        downvotes=_voters(row.get("downvotes")),
        vote_score=row["vote_score"],
        is_accepted_answer=row["is_accepted_answer"],
        is_instructor_reply=row["is_instructor_reply"],
        is_deleted=row["is_deleted"],
        deleted_at=row.get("deleted_at"),
        deleted_by=UserId(_uuid(deleted_by)) if deleted_by else None,
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def reply_to_dict(reply: Reply) -> Dict[str, Any]:
    """Convert Reply domain model to database dict."""
    return reply.model_dump()
