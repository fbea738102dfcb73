"""Domain services."""

from .base import Service
from .jwt_service import JWTService
from .post_service import PostService
from .reply_service import ReplyService
from .user_service import UserService
from .vote_service import VoteService

__all__ = [
    "JWTService",
    "PostService",
    "ReplyService",
    "Service",
    "UserService",
    "VoteService",
]
