"""Reply use cases."""

from .accept_reply import AcceptReplyRequest, AcceptReplyResponse, AcceptReplyUseCase
from .create_reply import CreateReplyRequest, CreateReplyResponse, CreateReplyUseCase
from .delete_reply import DeleteReplyRequest, DeleteReplyResponse, DeleteReplyUseCase
from .get_replies import GetRepliesRequest, GetRepliesResponse, GetRepliesUseCase
from .get_user_replies import (
    GetUserRepliesRequest,
    GetUserRepliesResponse,
    GetUserRepliesUseCase,
)
from .update_reply import UpdateReplyRequest, UpdateReplyResponse, UpdateReplyUseCase

__all__ = [
    "AcceptReplyRequest",
    "AcceptReplyResponse",
    "AcceptReplyUseCase",
    "CreateReplyRequest",
    "CreateReplyResponse",
    "CreateReplyUseCase",
    "DeleteReplyRequest",
    "DeleteReplyResponse",
    "DeleteReplyUseCase",
    "GetRepliesRequest",
    "GetRepliesResponse",
    "GetRepliesUseCase",
    "GetUserRepliesRequest",
    "GetUserRepliesResponse",
    "GetUserRepliesUseCase",
    "UpdateReplyRequest",
    "UpdateReplyResponse",
    "UpdateReplyUseCase",
]
