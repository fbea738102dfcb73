"""Create reply use case."""

from uuid import UUID

from forum.application.usecase.common import ApiModel, ReplyItem
from forum.domain.error import NotFoundError
from forum.domain.service import PostService, ReplyService, UserService
from forum.domain.value import PostId, ReplyId, UserId


class CreateReplyRequest(ApiModel):
    """Create reply request."""

    post_id: str  # UUID string
    author_id: str  # User ID from authenticated user
    content: str
    parent_reply: str | None = None  # Parent reply ID for nested replies


class CreateReplyResponse(ApiModel):
    """Create reply response."""

    reply: ReplyItem
    message: str = "Reply created successfully"


class CreateReplyUseCase:
    """Use case for replying to a post or to another reply."""

    def __init__(
        self,
        reply_service: ReplyService,
        post_service: PostService,
        user_service: UserService,
    ) -> None:
        """Initialize create reply use case.

        Args:
            reply_service: Reply domain service
            post_service: Post domain service
            user_service: User domain service
        """
        self.reply_service = reply_service
        self.post_service = post_service
        self.user_service = user_service

    async def execute(self, request: CreateReplyRequest) -> CreateReplyResponse:
        """Execute create reply flow.

        Steps:
        1. Verify the post exists
        2. Look up the author's role (drives the instructor flag)
        3. Create the reply (service validates content, parent and depth)

        Args:
            request: Create reply request

        Returns:
            Created reply

        Raises:
            NotFoundError: If post or author not found
            ValidationError: If content, parent or depth is invalid
        """
        post_id = PostId(UUID(request.post_id))
        author_id = UserId(UUID(request.author_id))

        post = await self.post_service.get_post_by_id(post_id)
        if not post:
            raise NotFoundError("Post", request.post_id)

        author_role = await self.user_service.resolve_role(author_id)

        reply = await self.reply_service.create_reply(
            post_id=post_id,
            author_id=author_id,
            author_role=author_role,
            content=request.content,
            parent_id=ReplyId(UUID(request.parent_reply))
            if request.parent_reply
            else None,
        )

        return CreateReplyResponse(reply=ReplyItem.from_reply(reply))
