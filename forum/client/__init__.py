"""Python client for the forum reply API with a local reply cache."""

from forum.client.api import ApiError, ReplyApiClient
from forum.client.controller import ReplyStoreController
from forum.client.store import ReplyState, ReplyStore, reduce
from forum.client.tree import ReplyNode, find_and_apply

__all__ = [
    "ApiError",
    "ReplyApiClient",
    "ReplyNode",
    "ReplyState",
    "ReplyStore",
    "ReplyStoreController",
    "find_and_apply",
    "reduce",
]
