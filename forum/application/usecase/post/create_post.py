"""Create post use case."""

from uuid import UUID

from forum.application.usecase.common import ApiModel
from forum.application.usecase.post.get_post import PostItem
from forum.domain.service import PostService, UserService
from forum.domain.value import UserId


class CreatePostRequest(ApiModel):
    """Create post request."""

    title: str
    content: str
    author_id: str  # User ID from authenticated user


class CreatePostResponse(ApiModel):
    """Create post response."""

    post: PostItem


class CreatePostUseCase:
    """Use case for creating a new post."""

    def __init__(self, post_service: PostService, user_service: UserService) -> None:
        """Initialize create post use case.

        Args:
            post_service: Post domain service
            user_service: User domain service
        """
        self.post_service = post_service
        self.user_service = user_service

    async def execute(self, request: CreatePostRequest) -> CreatePostResponse:
        """Execute create post flow.

        Args:
            request: Create post request

        Returns:
            Created post

        Raises:
            NotFoundError: If author not found
        """
        author_id = UserId(UUID(request.author_id))
        await self.user_service.get_by_id(author_id)

        post = await self.post_service.create_post(
            author_id=author_id, title=request.title, content=request.content
        )
        return CreatePostResponse(post=PostItem.from_post(post))
