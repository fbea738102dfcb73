"""In-memory repository implementations for testing."""

from .post import InMemoryPostRepository
from .reply import InMemoryReplyRepository
from .user import InMemoryUserRepository

__all__ = [
    "InMemoryPostRepository",
    "InMemoryReplyRepository",
    "InMemoryUserRepository",
]
