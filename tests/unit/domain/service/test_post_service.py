"""Unit tests for PostService."""

from uuid import uuid4

import pytest

from forum.domain.repository import PostRepository
from forum.domain.service import PostService
from forum.domain.value import PostId, UserId, VoteDirection
from tests.conftest import make_post
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked, no docker needed
unit_env = create_env_fixture()


class TestCreatePost:
    """Tests for create_post method."""

    @pytest.mark.asyncio
    async def test_create_post_trims_and_saves(self, unit_env):
        # Arrange
        post_service = await unit_env.get(PostService)
        post_repo = await unit_env.get(PostRepository)
        author = UserId(uuid4())

        # Act
        post = await post_service.create_post(author, "  Title  ", " Body ")

        # Assert
        assert post.title == "Title"
        assert post.content == "Body"
        assert post.vote_score == 0
        assert not post.is_answered
        assert await post_repo.find_by_id(post.id) == post


class TestMarkAnswered:
    """Tests for mark_answered method."""

    @pytest.mark.asyncio
    async def test_flags_post(self, unit_env):
        post_service = await unit_env.get(PostService)
        post_repo = await unit_env.get(PostRepository)
        post = await post_repo.save(make_post())

        result = await post_service.mark_answered(post.id)

        assert result is not None
        assert result.is_answered

    @pytest.mark.asyncio
    async def test_missing_post_returns_none(self, unit_env):
        post_service = await unit_env.get(PostService)

        assert await post_service.mark_answered(PostId(uuid4())) is None


class TestToggleVote:
    """Tests for post vote toggling."""

    @pytest.mark.asyncio
    async def test_switching_direction_moves_vote(self, unit_env):
        # Arrange
        post_service = await unit_env.get(PostService)
        post_repo = await unit_env.get(PostRepository)
        post = await post_repo.save(make_post())
        user = UserId(uuid4())

        # Act
        await post_service.toggle_vote(post.id, user, VoteDirection.UP)
        result = await post_service.toggle_vote(post.id, user, VoteDirection.DOWN)

        # Assert
        assert result is not None
        assert result.upvotes == []
        assert result.downvotes == [user]
        assert result.vote_score == -1

    @pytest.mark.asyncio
    async def test_missing_post_returns_none(self, unit_env):
        post_service = await unit_env.get(PostService)

        result = await post_service.toggle_vote(
            PostId(uuid4()), UserId(uuid4()), VoteDirection.UP
        )

        assert result is None


@pytest.mark.asyncio
async def test_touch_last_activity_moves_timestamp(unit_env):
    post_service = await unit_env.get(PostService)
    post_repo = await unit_env.get(PostRepository)
    post = await post_repo.save(make_post())

    await post_service.touch_last_activity(post.id)

    stored = await post_repo.find_by_id(post.id)
    assert stored is not None
    assert stored.last_activity >= post.last_activity
