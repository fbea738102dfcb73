"""Async operations that talk to the API and feed the reply store."""

import logfire

from forum.client.api import ApiError, ReplyApiClient
from forum.client.store import (
    ApplyFieldUpdate,
    ApplyVoteResult,
    InsertReply,
    MarkAccepted,
    OperationCategory,
    OperationFailed,
    OperationStarted,
    OperationSucceeded,
    RepliesFetched,
    ReplyPatch,
    ReplyStore,
    SoftDeleteInStore,
    UserRepliesFetched,
)
from forum.client.tree import ReplyNode
from forum.domain.model.reply import normalize_reply_content


class ReplyStoreController:
    """Runs reply operations against the API and dispatches their results.

    Each operation marks its category as loading, awaits the API, then
    applies the result to the store. Failures are recorded under the
    category and re-raised. Once closed, responses that arrive late are
    dropped instead of applied.
    """

    def __init__(self, api: ReplyApiClient, store: ReplyStore) -> None:
        """Initialize controller.

        Args:
            api: Reply API client
            store: Store receiving the results
        """
        self.api = api
        self.store = store
        self.closed = False

    def close(self) -> None:
        """Stop applying responses to the store."""
        self.closed = True

    def _dispatch(self, action: object) -> None:
        if self.closed:
            logfire.debug(
                "Dropping action after close", action=type(action).__name__
            )
            return
        self.store.dispatch(action)

    def _fail(self, category: OperationCategory, error: ApiError) -> None:
        logfire.warn(
            "Reply operation failed", category=category.value, error=error.message
        )
        self._dispatch(OperationFailed(category=category, message=error.message))

    async def create_reply(
        self, post_id: str, content: str, parent_reply_id: str | None = None
    ) -> ReplyNode:
        """Create a reply and insert it into the post's forest.

        Raises:
            ValidationError: If content is empty or too long (no request is sent)
            ApiError: If the request fails
        """
        content = normalize_reply_content(content)
        category = OperationCategory.CREATING
        with logfire.span("reply_controller.create_reply", post_id=post_id):
            self._dispatch(OperationStarted(category))
            try:
                reply, message = await self.api.create_reply(
                    post_id, content, parent_reply_id
                )
            except ApiError as e:
                self._fail(category, e)
                raise

            self._dispatch(
                InsertReply(
                    post_id=reply.post_id,
                    reply=reply,
                    parent_reply_id=reply.parent_reply,
                )
            )
            self._dispatch(OperationSucceeded(category, message))
            return reply

    async def fetch_replies(
        self,
        post_id: str,
        parent_reply_id: str | None = None,
        sort: str | None = None,
    ) -> list[ReplyNode]:
        """Load top-level replies of a post, or the children of one reply.

        Raises:
            ApiError: If the request fails
        """
        category = OperationCategory.FETCHING
        with logfire.span(
            "reply_controller.fetch_replies",
            post_id=post_id,
            parent_reply_id=parent_reply_id,
        ):
            self._dispatch(OperationStarted(category))
            try:
                replies = await self.api.get_replies(post_id, parent_reply_id, sort)
            except ApiError as e:
                self._fail(category, e)
                raise

            self._dispatch(
                RepliesFetched(
                    post_id=post_id, replies=replies, parent_reply_id=parent_reply_id
                )
            )
            self._dispatch(OperationSucceeded(category))
            return replies

    async def fetch_user_replies(
        self, user_id: str, page: int = 1, limit: int = 10
    ) -> list[ReplyNode]:
        """Load a page of a user's replies.

        Raises:
            ApiError: If the request fails
        """
        category = OperationCategory.USER_REPLIES
        with logfire.span("reply_controller.fetch_user_replies", user_id=user_id):
            self._dispatch(OperationStarted(category))
            try:
                replies, pagination = await self.api.get_user_replies(
                    user_id, page, limit
                )
            except ApiError as e:
                self._fail(category, e)
                raise

            self._dispatch(UserRepliesFetched(replies=replies, pagination=pagination))
            self._dispatch(OperationSucceeded(category))
            return replies

    async def _vote(self, reply_id: str, direction: str) -> None:
        category = OperationCategory.VOTING
        with logfire.span(
            "reply_controller.vote", reply_id=reply_id, direction=direction
        ):
            self._dispatch(OperationStarted(category))
            try:
                result = await self.api.vote(reply_id, direction)
            except ApiError as e:
                self._fail(category, e)
                raise

            self._dispatch(
                ApplyVoteResult(
                    reply_id=reply_id,
                    upvotes=result.upvotes,
                    downvotes=result.downvotes,
                    vote_score=result.vote_score,
                )
            )
            self._dispatch(OperationSucceeded(category, result.message))

    async def upvote(self, reply_id: str) -> None:
        """Toggle an upvote on a reply.

        Raises:
            ApiError: If the request fails
        """
        await self._vote(reply_id, "upvote")

    async def downvote(self, reply_id: str) -> None:
        """Toggle a downvote on a reply.

        Raises:
            ApiError: If the request fails
        """
        await self._vote(reply_id, "downvote")

    async def accept(self, reply_id: str) -> None:
        """Mark a reply accepted and clear the flag the server moved off others.

        Raises:
            ApiError: If the request fails
        """
        category = OperationCategory.UPDATING
        with logfire.span("reply_controller.accept", reply_id=reply_id):
            self._dispatch(OperationStarted(category))
            try:
                _, unaccepted_ids, message = await self.api.accept_reply(reply_id)
            except ApiError as e:
                self._fail(category, e)
                raise

            for other_id in unaccepted_ids:
                self._dispatch(
                    ApplyFieldUpdate(
                        reply_id=other_id,
                        patch=ReplyPatch(is_accepted_answer=False),
                    )
                )
            self._dispatch(MarkAccepted(reply_id=reply_id))
            self._dispatch(OperationSucceeded(category, message))

    async def update(self, reply_id: str, content: str) -> ReplyNode:
        """Edit a reply's content.

        Raises:
            ValidationError: If content is empty or too long (no request is sent)
            ApiError: If the request fails
        """
        content = normalize_reply_content(content)
        category = OperationCategory.UPDATING
        with logfire.span("reply_controller.update", reply_id=reply_id):
            self._dispatch(OperationStarted(category))
            try:
                reply, message = await self.api.update_reply(reply_id, content)
            except ApiError as e:
                self._fail(category, e)
                raise

            self._dispatch(
                ApplyFieldUpdate(reply_id=reply_id, patch=ReplyPatch.from_node(reply))
            )
            self._dispatch(OperationSucceeded(category, message))
            return reply

    async def delete(self, reply_id: str) -> None:
        """Soft-delete a reply; it stays in its thread with redacted content.

        Raises:
            ApiError: If the request fails
        """
        category = OperationCategory.DELETING
        with logfire.span("reply_controller.delete", reply_id=reply_id):
            self._dispatch(OperationStarted(category))
            try:
                message = await self.api.delete_reply(reply_id)
            except ApiError as e:
                self._fail(category, e)
                raise

            self._dispatch(SoftDeleteInStore(reply_id=reply_id))
            self._dispatch(OperationSucceeded(category, message))
