"""Get user replies use case."""

from uuid import UUID

from forum.application.usecase.common import ApiModel, PaginationInfo, ReplyItem
from forum.config import ReplySettings
from forum.domain.service import ReplyService
from forum.domain.value import UserId


class GetUserRepliesRequest(ApiModel):
    """Get user replies request."""

    user_id: str
    page: int = 1
    limit: int | None = None  # Falls back to the configured page size


class GetUserRepliesResponse(ApiModel):
    """Get user replies response."""

    replies: list[ReplyItem]
    pagination: PaginationInfo


class GetUserRepliesUseCase:
    """Use case for paging through a user's reply history."""

    def __init__(
        self, reply_service: ReplyService, reply_settings: ReplySettings
    ) -> None:
        """Initialize get user replies use case.

        Args:
            reply_service: Reply domain service
            reply_settings: Reply listing settings
        """
        self.reply_service = reply_service
        self.reply_settings = reply_settings

    async def execute(self, request: GetUserRepliesRequest) -> GetUserRepliesResponse:
        """Execute get user replies flow.

        Page and limit are clamped to sane values rather than rejected.

        Args:
            request: Get user replies request

        Returns:
            One page of the user's non-deleted replies, newest first
        """
        page = max(request.page, 1)
        limit = request.limit or self.reply_settings.default_page_size
        limit = min(max(limit, 1), self.reply_settings.max_page_size)

        replies, total = await self.reply_service.get_replies_by_author(
            author_id=UserId(UUID(request.user_id)), page=page, limit=limit
        )

        return GetUserRepliesResponse(
            replies=[ReplyItem.from_reply(reply) for reply in replies],
            pagination=PaginationInfo.build(page=page, limit=limit, total=total),
        )
