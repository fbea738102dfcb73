"""End-to-end tests for the reply endpoints against in-memory persistence."""

from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from forum.config import AuthSettings
from forum.domain.model import User
from forum.domain.repository import UserRepository
from forum.domain.service import JWTService
from forum.domain.value import UserRole
from forum.interface.api.app import create_app
from tests.conftest import make_user
from tests.di import build_test_container


@pytest.fixture
def container():
    return build_test_container()


@pytest.fixture
def client(container):
    """Create test client with test container."""
    with TestClient(create_app(container)) as test_client:
        yield test_client


def _login(client, container, role: UserRole = UserRole.STUDENT, handle="alice"):
    """Store a user and return (user, cookies carrying their token)."""
    user: User = make_user(role, handle)
    repo = client.portal.call(container.get, UserRepository)
    client.portal.call(repo.save, user)
    token = JWTService(AuthSettings()).create_token(str(user.id), handle)
    return user, {"auth_token": token}


def _create_post(client, cookies) -> str:
    response = client.post(
        "/posts", json={"title": "Question", "content": "Body"}, cookies=cookies
    )
    assert response.status_code == 201
    return response.json()["post"]["id"]


def _create_reply(client, cookies, post_id, content="Answer", parent=None) -> dict:
    body = {"content": content}
    if parent:
        body["parentReply"] = parent
    response = client.post(f"/replies/post/{post_id}", json=body, cookies=cookies)
    assert response.status_code == 201, response.text
    return response.json()["reply"]


class TestCreateReplyEndpoint:
    """Tests for POST /replies/post/{post_id}."""

    def test_create_reply_returns_camel_case(self, client, container):
        # Arrange
        _, cookies = _login(client, container)
        post_id = _create_post(client, cookies)

        # Act
        response = client.post(
            f"/replies/post/{post_id}", json={"content": "  Hi  "}, cookies=cookies
        )

        # Assert
        assert response.status_code == 201
        data = response.json()
        assert data["message"] == "Reply created successfully"
        assert data["reply"]["content"] == "Hi"
        assert data["reply"]["postId"] == post_id
        assert data["reply"]["voteScore"] == 0
        assert data["reply"]["parentReply"] is None

    def test_create_without_auth_fails(self, client, container):
        _, cookies = _login(client, container)
        post_id = _create_post(client, cookies)

        response = client.post(f"/replies/post/{post_id}", json={"content": "Hi"})

        assert response.status_code == 401
        assert response.json()["detail"] == "Authentication required to reply"

    def test_invalid_token_fails(self, client, container):
        _, cookies = _login(client, container)
        post_id = _create_post(client, cookies)

        response = client.post(
            f"/replies/post/{post_id}",
            json={"content": "Hi"},
            cookies={"auth_token": "invalid-token"},
        )

        assert response.status_code == 401

    def test_whitespace_content_is_bad_request(self, client, container):
        _, cookies = _login(client, container)
        post_id = _create_post(client, cookies)

        response = client.post(
            f"/replies/post/{post_id}", json={"content": "   "}, cookies=cookies
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "Reply content is required"

    def test_depth_limit_is_bad_request(self, client, container):
        # Arrange
        _, cookies = _login(client, container)
        post_id = _create_post(client, cookies)
        parent = _create_reply(client, cookies, post_id, "Depth 0")
        for level in range(1, 6):
            parent = _create_reply(
                client, cookies, post_id, f"Depth {level}", parent["id"]
            )

        # Act
        response = client.post(
            f"/replies/post/{post_id}",
            json={"content": "Too deep", "parentReply": parent["id"]},
            cookies=cookies,
        )

        # Assert
        assert response.status_code == 400
        assert "5 levels" in response.json()["detail"]

    def test_unknown_post_is_not_found(self, client, container):
        _, cookies = _login(client, container)

        response = client.post(
            f"/replies/post/{uuid4()}", json={"content": "Hi"}, cookies=cookies
        )

        assert response.status_code == 404

    def test_malformed_post_id_is_bad_request(self, client, container):
        _, cookies = _login(client, container)

        response = client.post(
            "/replies/post/not-a-uuid", json={"content": "Hi"}, cookies=cookies
        )

        assert response.status_code == 400


class TestListRepliesEndpoints:
    """Tests for GET /replies/post/{post_id} and /replies/user/{user_id}."""

    def test_nested_listing_uses_parent_reply_param(self, client, container):
        # Arrange
        _, cookies = _login(client, container)
        post_id = _create_post(client, cookies)
        parent = _create_reply(client, cookies, post_id, "Parent")
        child = _create_reply(client, cookies, post_id, "Child", parent["id"])

        # Act
        top = client.get(f"/replies/post/{post_id}")
        nested = client.get(
            f"/replies/post/{post_id}", params={"parentReply": parent["id"]}
        )

        # Assert
        assert [r["id"] for r in top.json()["replies"]] == [parent["id"]]
        assert [r["id"] for r in nested.json()["replies"]] == [child["id"]]

    def test_top_sort_orders_by_score(self, client, container):
        # Arrange
        _, cookies = _login(client, container)
        post_id = _create_post(client, cookies)
        quiet = _create_reply(client, cookies, post_id, "Quiet")
        loud = _create_reply(client, cookies, post_id, "Loud")
        client.post(f"/replies/{quiet['id']}/upvote", cookies=cookies)
        client.post(f"/replies/{loud['id']}/downvote", cookies=cookies)

        # Act
        response = client.get(f"/replies/post/{post_id}", params={"sort": "top"})

        # Assert
        assert [r["id"] for r in response.json()["replies"]] == [
            quiet["id"],
            loud["id"],
        ]

    def test_user_replies_paginate(self, client, container):
        # Arrange
        user, cookies = _login(client, container)
        post_id = _create_post(client, cookies)
        for i in range(3):
            _create_reply(client, cookies, post_id, f"Reply {i}")

        # Act
        response = client.get(
            f"/replies/user/{user.id}", params={"page": 1, "limit": 2}
        )

        # Assert
        data = response.json()
        assert len(data["replies"]) == 2
        assert data["pagination"] == {
            "currentPage": 1,
            "totalPages": 2,
            "totalReplies": 3,
            "hasNext": True,
            "hasPrev": False,
        }


class TestReplyMutationEndpoints:
    """Tests for voting, accepting, editing and deleting replies."""

    def test_upvote_toggles(self, client, container):
        # Arrange
        user, cookies = _login(client, container)
        post_id = _create_post(client, cookies)
        reply = _create_reply(client, cookies, post_id)

        # Act
        first = client.post(f"/replies/{reply['id']}/upvote", cookies=cookies)
        second = client.post(f"/replies/{reply['id']}/upvote", cookies=cookies)

        # Assert
        assert first.json() == {
            "upvotes": [str(user.id)],
            "downvotes": [],
            "voteScore": 1,
            "message": "Upvote added",
        }
        assert second.json()["voteScore"] == 0
        assert second.json()["message"] == "Upvote removed"

    def test_vote_without_auth_fails(self, client, container):
        _, cookies = _login(client, container)
        post_id = _create_post(client, cookies)
        reply = _create_reply(client, cookies, post_id)

        response = client.post(f"/replies/{reply['id']}/downvote")

        assert response.status_code == 401

    def test_accept_by_non_author_is_forbidden(self, client, container):
        # Arrange
        _, owner_cookies = _login(client, container, handle="owner")
        _, other_cookies = _login(client, container, handle="other")
        post_id = _create_post(client, owner_cookies)
        reply = _create_reply(client, other_cookies, post_id)

        # Act
        response = client.patch(
            f"/replies/{reply['id']}/accept", cookies=other_cookies
        )

        # Assert
        assert response.status_code == 403

    def test_accept_switches_answer(self, client, container):
        # Arrange
        _, cookies = _login(client, container)
        post_id = _create_post(client, cookies)
        first = _create_reply(client, cookies, post_id, "First")
        second = _create_reply(client, cookies, post_id, "Second")
        client.patch(f"/replies/{first['id']}/accept", cookies=cookies)

        # Act
        response = client.patch(f"/replies/{second['id']}/accept", cookies=cookies)

        # Assert
        data = response.json()
        assert data["reply"]["isAcceptedAnswer"] is True
        assert data["unacceptedReplyIds"] == [first["id"]]
        post = client.get(f"/posts/{post_id}").json()["post"]
        assert post["isAnswered"] is True

    def test_edit_by_other_user_is_forbidden(self, client, container):
        _, author_cookies = _login(client, container, handle="author")
        _, other_cookies = _login(client, container, handle="other")
        post_id = _create_post(client, author_cookies)
        reply = _create_reply(client, author_cookies, post_id)

        response = client.put(
            f"/replies/{reply['id']}", json={"content": "Hijack"}, cookies=other_cookies
        )

        assert response.status_code == 403

    def test_delete_redacts_and_keeps_children(self, client, container):
        # Arrange
        _, cookies = _login(client, container)
        _, instructor_cookies = _login(
            client, container, UserRole.INSTRUCTOR, "prof"
        )
        post_id = _create_post(client, cookies)
        parent = _create_reply(client, cookies, post_id, "Parent")
        child = _create_reply(client, cookies, post_id, "Child", parent["id"])

        # Act
        response = client.delete(
            f"/replies/{parent['id']}", cookies=instructor_cookies
        )

        # Assert
        assert response.status_code == 200
        assert response.json() == {
            "replyId": parent["id"],
            "message": "Reply deleted successfully",
        }
        listed = client.get(f"/replies/post/{post_id}").json()["replies"]
        assert listed[0]["isDeleted"] is True
        assert listed[0]["content"] == "[This reply has been deleted]"
        nested = client.get(
            f"/replies/post/{post_id}", params={"parentReply": parent["id"]}
        ).json()["replies"]
        assert [r["id"] for r in nested] == [child["id"]]

    def test_edit_deleted_reply_is_not_found(self, client, container):
        _, cookies = _login(client, container)
        post_id = _create_post(client, cookies)
        reply = _create_reply(client, cookies, post_id)
        client.delete(f"/replies/{reply['id']}", cookies=cookies)

        response = client.put(
            f"/replies/{reply['id']}", json={"content": "Back"}, cookies=cookies
        )

        assert response.status_code == 404

    def test_delete_unknown_reply_is_not_found(self, client, container):
        _, cookies = _login(client, container)

        response = client.delete(f"/replies/{uuid4()}", cookies=cookies)

        assert response.status_code == 404


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


class TestAuthCookieName:
    """The auth cookie name follows AUTH__COOKIE_NAME."""

    @pytest.fixture
    def renamed_client(self, monkeypatch, container):
        monkeypatch.setenv("AUTH__COOKIE_NAME", "forum_session")
        with TestClient(create_app(container)) as test_client:
            yield test_client

    def test_configured_cookie_authenticates(self, renamed_client, container):
        # Arrange
        _, cookies = _login(renamed_client, container)
        session = {"forum_session": cookies["auth_token"]}

        # Act
        response = renamed_client.post(
            "/posts", json={"title": "Question", "content": "Body"}, cookies=session
        )

        # Assert
        assert response.status_code == 201

    def test_default_cookie_name_is_ignored(self, renamed_client, container):
        _, cookies = _login(renamed_client, container)

        response = renamed_client.post(
            "/posts", json={"title": "Question", "content": "Body"}, cookies=cookies
        )

        assert response.status_code == 401
