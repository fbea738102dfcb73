"""Reply routes."""

import logfire
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Request, Query, status

from forum.application.usecase.common import ApiModel
from forum.application.usecase.reply import (
    AcceptReplyRequest,
    AcceptReplyResponse,
    AcceptReplyUseCase,
    CreateReplyRequest,
    CreateReplyResponse,
    CreateReplyUseCase,
    DeleteReplyRequest,
    DeleteReplyResponse,
    DeleteReplyUseCase,
    GetRepliesRequest,
    GetRepliesResponse,
    GetRepliesUseCase,
    GetUserRepliesRequest,
    GetUserRepliesResponse,
    GetUserRepliesUseCase,
    UpdateReplyRequest,
    UpdateReplyResponse,
    UpdateReplyUseCase,
)
from forum.application.usecase.vote import (
    ToggleVoteRequest,
    ToggleVoteResponse,
    ToggleVoteUseCase,
)
from forum.domain.service import JWTService
from forum.domain.value import ReplySortOrder, VotableType, VoteDirection
from forum.interface.api.auth import require_user_id

router = APIRouter(prefix="/replies", tags=["replies"], route_class=DishkaRoute)


class CreateReplyAPIRequest(ApiModel):
    """API request for creating a reply.

    Content is length-checked after trimming by the reply service, so the
    raw body is accepted as is.
    """

    content: str
    parent_reply: str | None = None  # Parent reply ID for nested replies


class UpdateReplyAPIRequest(ApiModel):
    """API request for editing a reply."""

    content: str


@router.get("/post/{post_id}", response_model=GetRepliesResponse)
async def get_replies_by_post(
    post_id: str,
    get_replies_use_case: FromDishka[GetRepliesUseCase],
    parent_reply: str | None = Query(default=None, alias="parentReply"),
    sort: ReplySortOrder = Query(default=ReplySortOrder.NEWEST),
) -> GetRepliesResponse:
    """List one level of a post's replies.

    Without ``parentReply`` the top-level replies are returned; with it,
    the direct children of that reply.

    Args:
        post_id: Post UUID
        get_replies_use_case: Get replies use case from DI
        parent_reply: Parent reply UUID (optional)
        sort: ``newest`` or ``top``

    Returns:
        Replies, deleted ones redacted
    """
    return await get_replies_use_case.execute(
        GetRepliesRequest(post_id=post_id, parent_reply=parent_reply, sort=sort)
    )


@router.get("/user/{user_id}", response_model=GetUserRepliesResponse)
async def get_user_replies(
    user_id: str,
    get_user_replies_use_case: FromDishka[GetUserRepliesUseCase],
    page: int = Query(default=1),
    limit: int | None = Query(default=None),
) -> GetUserRepliesResponse:
    """List a user's replies, newest first, one page at a time."""
    return await get_user_replies_use_case.execute(
        GetUserRepliesRequest(user_id=user_id, page=page, limit=limit)
    )


@router.post(
    "/post/{post_id}",
    response_model=CreateReplyResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_reply(
    post_id: str,
    request: CreateReplyAPIRequest,
    create_reply_use_case: FromDishka[CreateReplyUseCase],
    jwt_service: FromDishka[JWTService],
    http_request: Request,
) -> CreateReplyResponse:
    """Reply to a post or to another reply.

    Requires authentication.

    Args:
        post_id: Post UUID
        request: Reply content and optional parent
        create_reply_use_case: Create reply use case from DI
        jwt_service: JWT service for token verification (injected)
        http_request: Incoming request carrying the auth cookie

    Returns:
        Created reply
    """
    user_id = require_user_id(jwt_service, http_request, "reply")
    response = await create_reply_use_case.execute(
        CreateReplyRequest(
            post_id=post_id,
            author_id=user_id,
            content=request.content,
            parent_reply=request.parent_reply,
        )
    )
    logfire.info(
        "Reply created via API", reply_id=response.reply.id, post_id=post_id
    )
    return response


async def _vote_on_reply(
    reply_id: str,
    direction: VoteDirection,
    toggle_vote_use_case: ToggleVoteUseCase,
    jwt_service: JWTService,
    http_request: Request,
) -> ToggleVoteResponse:
    user_id = require_user_id(jwt_service, http_request, "vote")
    return await toggle_vote_use_case.execute(
        ToggleVoteRequest(
            votable_type=VotableType.REPLY,
            votable_id=reply_id,
            user_id=user_id,
            direction=direction,
        )
    )


@router.post("/{reply_id}/upvote", response_model=ToggleVoteResponse)
async def upvote_reply(
    reply_id: str,
    toggle_vote_use_case: FromDishka[ToggleVoteUseCase],
    jwt_service: FromDishka[JWTService],
    http_request: Request,
) -> ToggleVoteResponse:
    """Toggle an upvote on a reply. Requires authentication."""
    return await _vote_on_reply(
        reply_id, VoteDirection.UP, toggle_vote_use_case, jwt_service, http_request
    )


@router.post("/{reply_id}/downvote", response_model=ToggleVoteResponse)
async def downvote_reply(
    reply_id: str,
    toggle_vote_use_case: FromDishka[ToggleVoteUseCase],
    jwt_service: FromDishka[JWTService],
    http_request: Request,
) -> ToggleVoteResponse:
    """Toggle a downvote on a reply. Requires authentication."""
    return await _vote_on_reply(
        reply_id, VoteDirection.DOWN, toggle_vote_use_case, jwt_service, http_request
    )


@router.patch("/{reply_id}/accept", response_model=AcceptReplyResponse)
async def accept_reply(
    reply_id: str,
    accept_reply_use_case: FromDishka[AcceptReplyUseCase],
    jwt_service: FromDishka[JWTService],
    http_request: Request,
) -> AcceptReplyResponse:
    """Mark a reply as the accepted answer of its post.

    Allowed for the post author and for instructors/admins.
    """
    user_id = require_user_id(jwt_service, http_request, "accept answers")
    return await accept_reply_use_case.execute(
        AcceptReplyRequest(reply_id=reply_id, user_id=user_id)
    )


@router.put("/{reply_id}", response_model=UpdateReplyResponse)
async def update_reply(
    reply_id: str,
    request: UpdateReplyAPIRequest,
    update_reply_use_case: FromDishka[UpdateReplyUseCase],
    jwt_service: FromDishka[JWTService],
    http_request: Request,
) -> UpdateReplyResponse:
    """Edit a reply's content. Only the author can edit."""
    user_id = require_user_id(jwt_service, http_request, "edit replies")
    return await update_reply_use_case.execute(
        UpdateReplyRequest(reply_id=reply_id, user_id=user_id, content=request.content)
    )


@router.delete("/{reply_id}", response_model=DeleteReplyResponse)
async def delete_reply(
    reply_id: str,
    delete_reply_use_case: FromDishka[DeleteReplyUseCase],
    jwt_service: FromDishka[JWTService],
    http_request: Request,
) -> DeleteReplyResponse:
    """Soft-delete a reply.

    Allowed for the author and for instructors/admins. The reply stays in
    its thread with its content redacted.
    """
    user_id = require_user_id(jwt_service, http_request, "delete replies")
    return await delete_reply_use_case.execute(
        DeleteReplyRequest(reply_id=reply_id, user_id=user_id)
    )
