"""Get replies use case."""

from uuid import UUID

from forum.application.usecase.common import ApiModel, ReplyItem
from forum.domain.error import NotFoundError
from forum.domain.service import PostService, ReplyService
from forum.domain.value import PostId, ReplyId, ReplySortOrder


class GetRepliesRequest(ApiModel):
    """Get replies request."""

    post_id: str
    parent_reply: str | None = None  # Children of this reply instead of top level
    sort: ReplySortOrder = ReplySortOrder.NEWEST


class GetRepliesResponse(ApiModel):
    """Get replies response."""

    replies: list[ReplyItem]


class GetRepliesUseCase:
    """Use case for listing one level of a post's reply thread."""

    def __init__(self, reply_service: ReplyService, post_service: PostService) -> None:
        """Initialize get replies use case.

        Args:
            reply_service: Reply domain service
            post_service: Post domain service
        """
        self.reply_service = reply_service
        self.post_service = post_service

    async def execute(self, request: GetRepliesRequest) -> GetRepliesResponse:
        """Execute get replies flow.

        Args:
            request: Get replies request

        Returns:
            Replies at the requested level, deleted ones redacted

        Raises:
            NotFoundError: If post not found
        """
        post_id = PostId(UUID(request.post_id))

        post = await self.post_service.get_post_by_id(post_id)
        if not post:
            raise NotFoundError("Post", request.post_id)

        replies = await self.reply_service.get_replies_for_post(
            post_id=post_id,
            parent_id=ReplyId(UUID(request.parent_reply))
            if request.parent_reply
            else None,
            sort=request.sort,
        )

        return GetRepliesResponse(
            replies=[ReplyItem.from_reply(reply) for reply in replies]
        )
