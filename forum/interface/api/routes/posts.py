"""Post routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Request, status
from pydantic import Field

from forum.application.usecase.common import ApiModel
from forum.application.usecase.post import (
    CreatePostRequest,
    CreatePostResponse,
    CreatePostUseCase,
    GetPostRequest,
    GetPostResponse,
    GetPostUseCase,
)
from forum.application.usecase.vote import (
    ToggleVoteRequest,
    ToggleVoteResponse,
    ToggleVoteUseCase,
)
from forum.domain.service import JWTService
from forum.domain.value import VotableType, VoteDirection
from forum.interface.api.auth import require_user_id

router = APIRouter(prefix="/posts", tags=["posts"], route_class=DishkaRoute)


class CreatePostAPIRequest(ApiModel):
    """API request for creating a post."""

    title: str = Field(min_length=1, max_length=300)
    content: str = Field(min_length=1, max_length=10000)


@router.post("", response_model=CreatePostResponse, status_code=status.HTTP_201_CREATED)
async def create_post(
    request: CreatePostAPIRequest,
    create_post_use_case: FromDishka[CreatePostUseCase],
    jwt_service: FromDishka[JWTService],
    http_request: Request,
) -> CreatePostResponse:
    """Create a new post.

    Requires authentication.
    """
    user_id = require_user_id(jwt_service, http_request, "create posts")
    return await create_post_use_case.execute(
        CreatePostRequest(
            title=request.title, content=request.content, author_id=user_id
        )
    )


@router.get("/{post_id}", response_model=GetPostResponse)
async def get_post(
    post_id: str, get_post_use_case: FromDishka[GetPostUseCase]
) -> GetPostResponse:
    """Get a post by ID."""
    return await get_post_use_case.execute(GetPostRequest(post_id=post_id))


async def _vote_on_post(
    post_id: str,
    direction: VoteDirection,
    toggle_vote_use_case: ToggleVoteUseCase,
    jwt_service: JWTService,
    http_request: Request,
) -> ToggleVoteResponse:
    user_id = require_user_id(jwt_service, http_request, "vote")
    return await toggle_vote_use_case.execute(
        ToggleVoteRequest(
            votable_type=VotableType.POST,
            votable_id=post_id,
            user_id=user_id,
            direction=direction,
        )
    )


@router.post("/{post_id}/upvote", response_model=ToggleVoteResponse)
async def upvote_post(
    post_id: str,
    toggle_vote_use_case: FromDishka[ToggleVoteUseCase],
    jwt_service: FromDishka[JWTService],
    http_request: Request,
) -> ToggleVoteResponse:
    """Toggle an upvote on a post. Requires authentication."""
    return await _vote_on_post(
        post_id, VoteDirection.UP, toggle_vote_use_case, jwt_service, http_request
    )


@router.post("/{post_id}/downvote", response_model=ToggleVoteResponse)
async def downvote_post(
    post_id: str,
    toggle_vote_use_case: FromDishka[ToggleVoteUseCase],
    jwt_service: FromDishka[JWTService],
    http_request: Request,
) -> ToggleVoteResponse:
    """Toggle a downvote on a post. Requires authentication."""
    return await _vote_on_post(
        post_id, VoteDirection.DOWN, toggle_vote_use_case, jwt_service, http_request
    )
