"""Client-side reply store.

State changes go through ``reduce(state, action)``, which returns a new
state and leaves its input untouched. Within one state the forest, the flat
cache and the user reply list share node instances, so a node patched in the
forest is patched everywhere it is referenced.
"""

import copy
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Callable, Optional

from pydantic import BaseModel

from forum.application.usecase.common import PaginationInfo
from forum.client.tree import Location, ReplyNode, find_and_apply, has_id, iter_subtree
from forum.domain.model.reply import DELETED_REPLY_PLACEHOLDER


class OperationCategory(str, Enum):
    """Categories that track their own loading flag and error message."""

    CREATING = "creating"
    FETCHING = "fetching"
    UPDATING = "updating"
    DELETING = "deleting"
    VOTING = "voting"
    USER_REPLIES = "user_replies"


class ReplyPatch(BaseModel):
    """Fields a server response may change on a cached reply.

    Only fields that were explicitly set are applied.
    """

    content: Optional[str] = None
    is_accepted_answer: Optional[bool] = None
    is_deleted: Optional[bool] = None
    deleted_at: Optional[datetime] = None
    upvotes: Optional[list[str]] = None
    downvotes: Optional[list[str]] = None
    vote_score: Optional[int] = None
    updated_at: Optional[datetime] = None

    def apply_to(self, node: ReplyNode) -> None:
        """Merge the set fields into a node in place."""
        for name in self.model_fields_set:
            value = getattr(self, name)
            setattr(node, name, list(value) if isinstance(value, list) else value)

    @classmethod
    def from_node(cls, node: ReplyNode) -> "ReplyPatch":
        """Patch carrying every patchable field of a server-returned reply."""
        return cls(
            content=node.content,
            is_accepted_answer=node.is_accepted_answer,
            is_deleted=node.is_deleted,
            deleted_at=node.deleted_at,
            upvotes=node.upvotes,
            downvotes=node.downvotes,
            vote_score=node.vote_score,
            updated_at=node.updated_at,
        )


def _empty_pagination() -> PaginationInfo:
    return PaginationInfo(
        current_page=1, total_pages=1, total_replies=0, has_next=False, has_prev=False
    )


@dataclass
class ReplyState:
    """Everything the client knows about replies."""

    replies_by_post: dict[str, list[ReplyNode]] = field(default_factory=dict)
    cache: dict[str, ReplyNode] = field(default_factory=dict)
    user_replies: list[ReplyNode] = field(default_factory=list)
    user_replies_pagination: PaginationInfo = field(default_factory=_empty_pagination)
    expanded_replies: dict[str, bool] = field(default_factory=dict)
    loading: dict[OperationCategory, bool] = field(
        default_factory=lambda: {category: False for category in OperationCategory}
    )
    errors: dict[OperationCategory, Optional[str]] = field(
        default_factory=lambda: {category: None for category in OperationCategory}
    )
    message: Optional[str] = None


# Actions


@dataclass(frozen=True)
class InsertReply:
    post_id: str
    reply: ReplyNode
    parent_reply_id: Optional[str] = None


@dataclass(frozen=True)
class ApplyFieldUpdate:
    reply_id: str
    patch: ReplyPatch


@dataclass(frozen=True)
class RemoveReply:
    """Purge a reply and its loaded subtree from the local cache."""

    reply_id: str
    post_id: str


@dataclass(frozen=True)
class ApplyVoteResult:
    reply_id: str
    upvotes: list[str]
    downvotes: list[str]
    vote_score: int


@dataclass(frozen=True)
class MarkAccepted:
    reply_id: str


@dataclass(frozen=True)
class SoftDeleteInStore:
    reply_id: str
    deleted_at: datetime = field(default_factory=datetime.now)


@dataclass(frozen=True)
class ToggleExpanded:
    reply_id: str


@dataclass(frozen=True)
class CollapseAll:
    pass


@dataclass(frozen=True)
class RepliesFetched:
    """One level of a post's replies arrived from the server.

    Without a parent the post's top-level list is replaced; with one, that
    parent's children are.
    """

    post_id: str
    replies: list[ReplyNode]
    parent_reply_id: Optional[str] = None


@dataclass(frozen=True)
class UserRepliesFetched:
    replies: list[ReplyNode]
    pagination: PaginationInfo


@dataclass(frozen=True)
class ClearRepliesByPost:
    post_id: str


@dataclass(frozen=True)
class ClearAllReplies:
    pass


@dataclass(frozen=True)
class ClearUserReplies:
    pass


@dataclass(frozen=True)
class ClearErrors:
    pass


@dataclass(frozen=True)
class OperationStarted:
    category: OperationCategory


@dataclass(frozen=True)
class OperationSucceeded:
    category: OperationCategory
    message: Optional[str] = None


@dataclass(frozen=True)
class OperationFailed:
    category: OperationCategory
    message: str


# Handlers mutate the private copy made by reduce().


def _patch_everywhere(state: ReplyState, reply_id: str, patch: ReplyPatch) -> None:
    patched: set[int] = set()

    def apply(location: Location) -> None:
        patch.apply_to(location.node)
        patched.add(id(location.node))

    # The store does not track which post a reply belongs to
    for forest in state.replies_by_post.values():
        find_and_apply(forest, has_id(reply_id), apply)

    for node in (state.cache.get(reply_id), *state.user_replies):
        if node is not None and node.id == reply_id and id(node) not in patched:
            patch.apply_to(node)
            patched.add(id(node))


def _insert_reply(state: ReplyState, action: InsertReply) -> None:
    forest = state.replies_by_post.setdefault(action.post_id, [])
    node = action.reply.model_copy(deep=True)

    if action.parent_reply_id is None:
        forest.insert(0, node)
    else:

        def prepend_child(location: Location) -> None:
            if location.node.replies is None:
                location.node.replies = []
            location.node.replies.insert(0, node)

        if not find_and_apply(forest, has_id(action.parent_reply_id), prepend_child):
            return

    state.cache[node.id] = node


def _remove_reply(state: ReplyState, action: RemoveReply) -> None:
    removed: list[ReplyNode] = []

    def detach(location: Location) -> None:
        removed.extend(iter_subtree(location.node))
        del location.siblings[location.index]

    forest = state.replies_by_post.get(action.post_id, [])
    find_and_apply(forest, has_id(action.reply_id), detach)

    removed_ids = {node.id for node in removed} | {action.reply_id}
    for reply_id in removed_ids:
        state.cache.pop(reply_id, None)
    state.user_replies = [
        node for node in state.user_replies if node.id not in removed_ids
    ]


def _replies_fetched(state: ReplyState, action: RepliesFetched) -> None:
    forest = state.replies_by_post.setdefault(action.post_id, [])
    replies = [reply.model_copy(deep=True) for reply in action.replies]

    if action.parent_reply_id is None:
        state.replies_by_post[action.post_id] = replies
    else:

        def replace_children(location: Location) -> None:
            location.node.replies = replies

        if not find_and_apply(forest, has_id(action.parent_reply_id), replace_children):
            return

    for reply in replies:
        for node in iter_subtree(reply):
            state.cache[node.id] = node


def _soft_delete(state: ReplyState, action: SoftDeleteInStore) -> None:
    _patch_everywhere(
        state,
        action.reply_id,
        ReplyPatch(
            is_deleted=True,
            deleted_at=action.deleted_at,
            content=DELETED_REPLY_PLACEHOLDER,
        ),
    )

    # Profile listings only show live replies
    remaining = [node for node in state.user_replies if node.id != action.reply_id]
    if len(remaining) != len(state.user_replies):
        state.user_replies = remaining
        pagination = state.user_replies_pagination
        state.user_replies_pagination = pagination.model_copy(
            update={"total_replies": max(pagination.total_replies - 1, 0)}
        )


def _user_replies_fetched(state: ReplyState, action: UserRepliesFetched) -> None:
    state.user_replies = [reply.model_copy(deep=True) for reply in action.replies]
    state.user_replies_pagination = action.pagination
    for node in state.user_replies:
        # A reply already in a forest keeps its forest instance in the cache
        state.cache.setdefault(node.id, node)


def _clear_user_replies(state: ReplyState, action: ClearUserReplies) -> None:
    state.user_replies = []
    state.user_replies_pagination = _empty_pagination()


def _clear_errors(state: ReplyState, action: ClearErrors) -> None:
    state.errors = {category: None for category in OperationCategory}
    state.message = None


def _operation_started(state: ReplyState, action: OperationStarted) -> None:
    state.loading[action.category] = True
    state.errors[action.category] = None
    if action.category == OperationCategory.CREATING:
        state.message = None


def _operation_succeeded(state: ReplyState, action: OperationSucceeded) -> None:
    state.loading[action.category] = False
    if action.message is not None:
        state.message = action.message


def _operation_failed(state: ReplyState, action: OperationFailed) -> None:
    state.loading[action.category] = False
    state.errors[action.category] = action.message


def _toggle_expanded(state: ReplyState, action: ToggleExpanded) -> None:
    state.expanded_replies[action.reply_id] = not state.expanded_replies.get(
        action.reply_id, False
    )


_HANDLERS: dict[type, Callable[[ReplyState, Any], None]] = {
    InsertReply: _insert_reply,
    ApplyFieldUpdate: lambda s, a: _patch_everywhere(s, a.reply_id, a.patch),
    RemoveReply: _remove_reply,
    ApplyVoteResult: lambda s, a: _patch_everywhere(
        s,
        a.reply_id,
        ReplyPatch(upvotes=a.upvotes, downvotes=a.downvotes, vote_score=a.vote_score),
    ),
    MarkAccepted: lambda s, a: _patch_everywhere(
        s, a.reply_id, ReplyPatch(is_accepted_answer=True)
    ),
    SoftDeleteInStore: _soft_delete,
    ToggleExpanded: _toggle_expanded,
    CollapseAll: lambda s, a: setattr(s, "expanded_replies", {}),
    RepliesFetched: _replies_fetched,
    UserRepliesFetched: _user_replies_fetched,
    ClearRepliesByPost: lambda s, a: s.replies_by_post.pop(a.post_id, None),
    ClearAllReplies: lambda s, a: setattr(s, "replies_by_post", {}),
    ClearUserReplies: _clear_user_replies,
    ClearErrors: _clear_errors,
    OperationStarted: _operation_started,
    OperationSucceeded: _operation_succeeded,
    OperationFailed: _operation_failed,
}


def reduce(state: ReplyState, action: object) -> ReplyState:
    """Apply an action to a state.

    Args:
        state: Current state (not modified)
        action: One of the action classes of this module

    Returns:
        New state

    Raises:
        TypeError: If the action type is unknown
    """
    handler = _HANDLERS.get(type(action))
    if handler is None:
        raise TypeError(f"Unknown reply store action: {type(action).__name__}")

    # One deepcopy call keeps nodes shared between forest, cache and user list
    new_state = copy.deepcopy(state)
    handler(new_state, action)
    return new_state


class ReplyStore:
    """Holds the current reply state and applies dispatched actions."""

    def __init__(self, state: ReplyState | None = None) -> None:
        self.state = state or ReplyState()

    def dispatch(self, action: object) -> ReplyState:
        """Reduce an action into the current state and return the new state."""
        self.state = reduce(self.state, action)
        return self.state

    # Selectors

    def replies_for_post(self, post_id: str) -> list[ReplyNode]:
        return self.state.replies_by_post.get(post_id, [])

    def reply_by_id(self, reply_id: str) -> ReplyNode | None:
        return self.state.cache.get(reply_id)

    def is_expanded(self, reply_id: str) -> bool:
        return self.state.expanded_replies.get(reply_id, False)

    def is_loading(self, category: OperationCategory) -> bool:
        return self.state.loading[category]

    def error(self, category: OperationCategory) -> str | None:
        return self.state.errors[category]
