"""Get post use case."""

from datetime import datetime
from uuid import UUID

from forum.application.usecase.common import ApiModel
from forum.domain.error import NotFoundError
from forum.domain.model import Post
from forum.domain.service import PostService
from forum.domain.value import PostId


class PostItem(ApiModel):
    """Post as returned to clients."""

    id: str
    title: str
    content: str
    author_id: str
    upvotes: list[str] = []
    downvotes: list[str] = []
    vote_score: int = 0
    is_answered: bool = False
    last_activity: datetime
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_post(cls, post: Post) -> "PostItem":
        """Build the client view of a post."""
        return cls(
            id=str(post.id),
            title=post.title,
            content=post.content,
            author_id=str(post.author_id),
            upvotes=[str(u) for u in post.upvotes],
            downvotes=[str(d) for d in post.downvotes],
            vote_score=post.vote_score,
            is_answered=post.is_answered,
            last_activity=post.last_activity,
            created_at=post.created_at,
            updated_at=post.updated_at,
        )


class GetPostRequest(ApiModel):
    """Get post request."""

    post_id: str


class GetPostResponse(ApiModel):
    """Get post response."""

    post: PostItem


class GetPostUseCase:
    """Use case for reading a single post."""

    def __init__(self, post_service: PostService) -> None:
        self.post_service = post_service

    async def execute(self, request: GetPostRequest) -> GetPostResponse:
        """Execute get post flow.

        Raises:
            NotFoundError: If post not found
        """
        post = await self.post_service.get_post_by_id(PostId(UUID(request.post_id)))
        if not post:
            raise NotFoundError("Post", request.post_id)
        return GetPostResponse(post=PostItem.from_post(post))
