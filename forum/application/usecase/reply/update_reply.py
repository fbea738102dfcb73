"""Update reply use case."""

from uuid import UUID

import logfire

from forum.application.usecase.common import ApiModel, ReplyItem
from forum.domain.error import NotAuthorizedError
from forum.domain.service import ReplyService
from forum.domain.value import ReplyId, UserId


class UpdateReplyRequest(ApiModel):
    """Update reply request."""

    reply_id: str
    user_id: str  # User ID from authenticated user
    content: str


class UpdateReplyResponse(ApiModel):
    """Update reply response."""

    reply: ReplyItem
    message: str = "Reply updated successfully"


class UpdateReplyUseCase:
    """Use case for editing a reply's content."""

    def __init__(self, reply_service: ReplyService) -> None:
        """Initialize update reply use case.

        Args:
            reply_service: Reply domain service
        """
        self.reply_service = reply_service

    async def execute(self, request: UpdateReplyRequest) -> UpdateReplyResponse:
        """Execute update reply flow.

        Only the author may edit; deleted replies cannot be edited.

        Args:
            request: Update reply request

        Returns:
            Updated reply

        Raises:
            NotFoundError: If reply not found
            NotAuthorizedError: If user is not the author
            ContentDeletedException: If reply is deleted
            ValidationError: If content is invalid
        """
        reply_id = ReplyId(UUID(request.reply_id))
        user_id = UserId(UUID(request.user_id))

        reply = await self.reply_service.require_reply(reply_id)
        if reply.author_id != user_id:
            logfire.warn(
                "Unauthorized reply edit attempt",
                reply_id=request.reply_id,
                user_id=request.user_id,
            )
            raise NotAuthorizedError(
                "edit", "reply", request.reply_id, request.user_id
            )

        updated = await self.reply_service.update_content(reply_id, request.content)
        return UpdateReplyResponse(reply=ReplyItem.from_reply(updated))
