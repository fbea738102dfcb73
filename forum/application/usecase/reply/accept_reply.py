"""Accept reply use case."""

from uuid import UUID

import logfire

from forum.application.usecase.common import ApiModel, ReplyItem
from forum.domain.error import NotAuthorizedError, NotFoundError
from forum.domain.service import PostService, ReplyService, UserService
from forum.domain.value import ReplyId, UserId


class AcceptReplyRequest(ApiModel):
    """Accept reply request."""

    reply_id: str
    user_id: str  # User ID from authenticated user


class AcceptReplyResponse(ApiModel):
    """Accept reply response."""

    reply: ReplyItem
    unaccepted_reply_ids: list[str] = []  # Replies of the same post that lost the flag
    message: str = "Reply marked as accepted answer"


class AcceptReplyUseCase:
    """Use case for marking a reply as the accepted answer of its post."""

    def __init__(
        self,
        reply_service: ReplyService,
        post_service: PostService,
        user_service: UserService,
    ) -> None:
        """Initialize accept reply use case.

        Args:
            reply_service: Reply domain service
            post_service: Post domain service
            user_service: User domain service
        """
        self.reply_service = reply_service
        self.post_service = post_service
        self.user_service = user_service

    async def execute(self, request: AcceptReplyRequest) -> AcceptReplyResponse:
        """Execute accept reply flow.

        Steps:
        1. Load the reply and its post
        2. Check the user is the post author or a moderator
        3. Mark the reply accepted, clearing any other accepted reply
        4. Flag the post as answered

        Args:
            request: Accept reply request

        Returns:
            Accepted reply and the IDs of replies that lost the flag

        Raises:
            NotFoundError: If reply, post or user not found
            NotAuthorizedError: If user may not accept answers on the post
            ContentDeletedException: If reply is deleted
        """
        reply_id = ReplyId(UUID(request.reply_id))
        user_id = UserId(UUID(request.user_id))

        reply = await self.reply_service.require_reply(reply_id)
        post = await self.post_service.get_post_by_id(reply.post_id)
        if not post:
            raise NotFoundError("Post", str(reply.post_id))

        if post.author_id != user_id:
            role = await self.user_service.resolve_role(user_id)
            if not role.is_moderator:
                logfire.warn(
                    "Unauthorized accept attempt",
                    reply_id=request.reply_id,
                    user_id=request.user_id,
                )
                raise NotAuthorizedError(
                    "accept", "reply", request.reply_id, request.user_id
                )

        accepted, unaccepted = await self.reply_service.mark_accepted(reply_id)
        await self.post_service.mark_answered(post.id)

        return AcceptReplyResponse(
            reply=ReplyItem.from_reply(accepted),
            unaccepted_reply_ids=[str(rid) for rid in unaccepted],
        )
