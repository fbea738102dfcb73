"""Test configuration and shared builders."""

from datetime import datetime, timedelta
from uuid import uuid4

import logfire

from forum.client.tree import ReplyNode
from forum.domain.model import Post, Reply, User
from forum.domain.value import Handle, PostId, ReplyId, UserId, UserRole

# Keep spans local during tests
logfire.configure(send_to_logfire=False, console=False)


def make_user(role: UserRole = UserRole.STUDENT, handle: str = "alice") -> User:
    """Build a user with a fresh ID."""
    return User(id=UserId(uuid4()), handle=Handle(handle), role=role)


def make_post(author_id: UserId | None = None, title: str = "How do I?") -> Post:
    """Build a post with a fresh ID."""
    return Post(
        id=PostId(uuid4()),
        title=title,
        content="Question body",
        author_id=author_id or UserId(uuid4()),
    )


def make_reply(
    post_id: PostId,
    author_id: UserId | None = None,
    content: str = "A reply",
    parent: Reply | None = None,
    minutes_ago: int = 0,
    **fields,
) -> Reply:
    """Build a reply on a post, nested under ``parent`` when given."""
    created_at = datetime.now() - timedelta(minutes=minutes_ago)
    values = {
        "id": ReplyId(uuid4()),
        "post_id": post_id,
        "author_id": author_id or UserId(uuid4()),
        "content": content,
        "parent_id": parent.id if parent else None,
        "depth": parent.depth + 1 if parent else 0,
        "created_at": created_at,
        "updated_at": created_at,
    }
    return Reply(**{**values, **fields})


def make_node(parent: ReplyNode | None = None, **fields) -> ReplyNode:
    """Build a client-side reply node, nested under ``parent`` when given."""
    now = datetime.now()
    values = {
        "id": str(uuid4()),
        "post_id": "post-1",
        "author_id": "author-1",
        "content": "Reply",
        "parent_reply": parent.id if parent else None,
        "depth": parent.depth + 1 if parent else 0,
        "created_at": now,
        "updated_at": now,
    }
    return ReplyNode(**{**values, **fields})
