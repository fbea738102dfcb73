"""HTTP client for the reply endpoints."""

from typing import Any, Callable, TypeVar

import httpx
import logfire

from forum.application.usecase.common import PaginationInfo
from forum.application.usecase.vote import ToggleVoteResponse
from forum.client.tree import ReplyNode

T = TypeVar("T")


class ApiError(Exception):
    """A request to the forum API failed.

    The message is human readable: the server's ``detail`` when it sent one,
    otherwise a fallback describing the failed operation.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class ReplyApiClient:
    """Async client for the reply endpoints.

    Authenticates with the same ``auth_token`` cookie the web client uses.
    """

    def __init__(
        self,
        base_url: str,
        auth_token: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float = 30.0,
        cookie_name: str = "auth_token",
    ) -> None:
        """Initialize reply API client.

        Args:
            base_url: API base URL
            auth_token: JWT sent as the auth cookie
            transport: Custom httpx transport (tests use ``httpx.MockTransport``)
            timeout: Request timeout in seconds
            cookie_name: Name of the server's auth cookie
        """
        cookies = {cookie_name: auth_token} if auth_token else None
        self._client = httpx.AsyncClient(
            base_url=base_url, cookies=cookies, transport=transport, timeout=timeout
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(
        self,
        method: str,
        url: str,
        fallback_message: str,
        parse: Callable[[dict], T],
        **kwargs: Any,
    ) -> T:
        try:
            response = await self._client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            logfire.error("Reply API transport error", url=url, error=str(e))
            raise ApiError(fallback_message)

        if response.is_error:
            message = fallback_message
            try:
                body = response.json()
            except ValueError:
                body = None
            if isinstance(body, dict) and isinstance(body.get("detail"), str):
                message = body["detail"] or fallback_message
            logfire.warn(
                "Reply API request failed",
                url=url,
                status_code=response.status_code,
                error=message,
            )
            raise ApiError(message, status_code=response.status_code)

        # pydantic's ValidationError is a ValueError
        try:
            return parse(response.json())
        except (ValueError, KeyError, TypeError, AttributeError) as e:
            logfire.error(
                "Reply API returned an unexpected body",
                url=url,
                status_code=response.status_code,
                error=str(e),
            )
            raise ApiError(fallback_message, status_code=response.status_code) from e

    async def create_reply(
        self, post_id: str, content: str, parent_reply_id: str | None = None
    ) -> tuple[ReplyNode, str]:
        """Create a reply. Returns the created reply and the server message."""
        body: dict[str, Any] = {"content": content}
        if parent_reply_id:
            body["parentReply"] = parent_reply_id
        return await self._request(
            "POST",
            f"/replies/post/{post_id}",
            "Failed to create reply",
            _reply_and_message,
            json=body,
        )

    async def get_replies(
        self,
        post_id: str,
        parent_reply_id: str | None = None,
        sort: str | None = None,
    ) -> list[ReplyNode]:
        """Fetch one level of a post's replies."""
        params = {}
        if parent_reply_id:
            params["parentReply"] = parent_reply_id
        if sort:
            params["sort"] = sort
        fallback = (
            "Failed to fetch nested replies"
            if parent_reply_id
            else "Failed to fetch replies"
        )
        return await self._request(
            "GET",
            f"/replies/post/{post_id}",
            fallback,
            lambda data: _nodes(data["replies"]),
            params=params,
        )

    async def get_user_replies(
        self, user_id: str, page: int = 1, limit: int = 10
    ) -> tuple[list[ReplyNode], PaginationInfo]:
        """Fetch a page of a user's replies."""
        return await self._request(
            "GET",
            f"/replies/user/{user_id}",
            "Failed to fetch user replies",
            lambda data: (
                _nodes(data["replies"]),
                PaginationInfo.model_validate(data["pagination"]),
            ),
            params={"page": page, "limit": limit},
        )

    async def vote(self, reply_id: str, direction: str) -> ToggleVoteResponse:
        """Toggle an ``upvote`` or ``downvote`` on a reply."""
        return await self._request(
            "POST",
            f"/replies/{reply_id}/{direction}",
            f"Failed to {direction} reply",
            ToggleVoteResponse.model_validate,
        )

    async def accept_reply(self, reply_id: str) -> tuple[ReplyNode, list[str], str]:
        """Mark a reply accepted.

        Returns:
            Accepted reply, IDs of replies that lost the flag, server message
        """
        return await self._request(
            "PATCH",
            f"/replies/{reply_id}/accept",
            "Failed to mark reply as accepted",
            lambda data: (
                ReplyNode.model_validate(data["reply"]),
                [str(rid) for rid in data.get("unacceptedReplyIds", [])],
                data.get("message", ""),
            ),
        )

    async def update_reply(self, reply_id: str, content: str) -> tuple[ReplyNode, str]:
        """Edit a reply's content."""
        return await self._request(
            "PUT",
            f"/replies/{reply_id}",
            "Failed to update reply",
            _reply_and_message,
            json={"content": content},
        )

    async def delete_reply(self, reply_id: str) -> str:
        """Soft-delete a reply. Returns the server message."""
        return await self._request(
            "DELETE",
            f"/replies/{reply_id}",
            "Failed to delete reply",
            lambda data: data.get("message", ""),
        )


def _nodes(items: list) -> list[ReplyNode]:
    return [ReplyNode.model_validate(item) for item in items]


def _reply_and_message(data: dict) -> tuple[ReplyNode, str]:
    return ReplyNode.model_validate(data["reply"]), data.get("message", "")
