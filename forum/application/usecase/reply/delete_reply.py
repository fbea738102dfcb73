"""Delete reply use case."""

from uuid import UUID

import logfire

from forum.application.usecase.common import ApiModel
from forum.domain.error import NotAuthorizedError
from forum.domain.service import ReplyService, UserService
from forum.domain.value import ReplyId, UserId


class DeleteReplyRequest(ApiModel):
    """Delete reply request."""

    reply_id: str
    user_id: str  # User ID from authenticated user


class DeleteReplyResponse(ApiModel):
    """Delete reply response."""

    reply_id: str
    message: str = "Reply deleted successfully"


class DeleteReplyUseCase:
    """Use case for soft-deleting a reply."""

    def __init__(self, reply_service: ReplyService, user_service: UserService) -> None:
        """Initialize delete reply use case.

        Args:
            reply_service: Reply domain service
            user_service: User domain service
        """
        self.reply_service = reply_service
        self.user_service = user_service

    async def execute(self, request: DeleteReplyRequest) -> DeleteReplyResponse:
        """Execute delete reply flow.

        The author or a moderator (instructor/admin) may delete. Children
        of the reply are left as they are.

        Args:
            request: Delete reply request

        Returns:
            Confirmation

        Raises:
            NotFoundError: If reply or user not found
            NotAuthorizedError: If user may not delete the reply
            ContentDeletedException: If reply is already deleted
        """
        reply_id = ReplyId(UUID(request.reply_id))
        user_id = UserId(UUID(request.user_id))

        reply = await self.reply_service.require_reply(reply_id)
        if reply.author_id != user_id:
            role = await self.user_service.resolve_role(user_id)
            if not role.is_moderator:
                logfire.warn(
                    "Unauthorized reply delete attempt",
                    reply_id=request.reply_id,
                    user_id=request.user_id,
                )
                raise NotAuthorizedError(
                    "delete", "reply", request.reply_id, request.user_id
                )

        await self.reply_service.soft_delete(reply_id, user_id)
        return DeleteReplyResponse(reply_id=request.reply_id)
