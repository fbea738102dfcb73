"""Unit tests for ReplyService."""

import asyncio
from datetime import datetime
from uuid import uuid4

import pytest

from forum.domain.error import ContentDeletedException, NotFoundError, ValidationError
from forum.domain.repository import PostRepository, ReplyRepository
from forum.domain.service import PostService, ReplyService
from forum.domain.value import (
    PostId,
    ReplyId,
    ReplySortOrder,
    UserId,
    UserRole,
    VoteDirection,
)
from forum.persistence.repository.inmemory import (
    InMemoryPostRepository,
    InMemoryReplyRepository,
)
from tests.conftest import make_post, make_reply
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked, no docker needed
unit_env = create_env_fixture()


async def _seed_post(unit_env):
    post_repo = await unit_env.get(PostRepository)
    post = make_post().model_copy(update={"last_activity": datetime(2024, 1, 1)})
    return await post_repo.save(post)


class TestCreateReply:
    """Tests for create_reply method."""

    @pytest.mark.asyncio
    async def test_top_level_reply_has_depth_zero(self, unit_env):
        """A reply without a parent answers the post directly."""
        # Arrange
        reply_service = await unit_env.get(ReplyService)
        post = await _seed_post(unit_env)

        # Act
        reply = await reply_service.create_reply(
            post.id, UserId(uuid4()), UserRole.STUDENT, "  First answer  "
        )

        # Assert
        assert reply.depth == 0
        assert reply.parent_id is None
        assert reply.content == "First answer"
        assert reply.vote_score == 0
        assert not reply.is_deleted
        assert not reply.is_accepted_answer

    @pytest.mark.asyncio
    async def test_nested_reply_depth_is_parent_plus_one(self, unit_env):
        # Arrange
        reply_service = await unit_env.get(ReplyService)
        post = await _seed_post(unit_env)
        parent = await reply_service.create_reply(
            post.id, UserId(uuid4()), UserRole.STUDENT, "Parent"
        )

        # Act
        child = await reply_service.create_reply(
            post.id, UserId(uuid4()), UserRole.STUDENT, "Child", parent_id=parent.id
        )

        # Assert
        assert child.parent_id == parent.id
        assert child.depth == 1

    @pytest.mark.asyncio
    async def test_chain_stops_at_depth_five(self, unit_env):
        """Replying to a depth-5 reply is rejected and nothing is stored."""
        # Arrange
        reply_service = await unit_env.get(ReplyService)
        reply_repo = await unit_env.get(ReplyRepository)
        post = await _seed_post(unit_env)
        author = UserId(uuid4())

        parent = await reply_service.create_reply(
            post.id, author, UserRole.STUDENT, "Depth 0"
        )
        for level in range(1, 6):
            parent = await reply_service.create_reply(
                post.id, author, UserRole.STUDENT, f"Depth {level}", parent.id
            )
        assert parent.depth == 5

        # Act / Assert
        with pytest.raises(ValidationError, match="5 levels"):
            await reply_service.create_reply(
                post.id, author, UserRole.STUDENT, "Too deep", parent.id
            )
        assert await reply_repo.find_by_post(post.id, parent_id=parent.id) == []

    @pytest.mark.asyncio
    async def test_missing_parent_is_rejected(self, unit_env):
        reply_service = await unit_env.get(ReplyService)
        post = await _seed_post(unit_env)

        with pytest.raises(ValidationError, match="Parent reply not found"):
            await reply_service.create_reply(
                post.id,
                UserId(uuid4()),
                UserRole.STUDENT,
                "Orphan",
                parent_id=ReplyId(uuid4()),
            )

    @pytest.mark.asyncio
    async def test_parent_on_other_post_is_rejected(self, unit_env):
        # Arrange
        reply_service = await unit_env.get(ReplyService)
        post = await _seed_post(unit_env)
        other_post = await _seed_post(unit_env)
        parent = await reply_service.create_reply(
            other_post.id, UserId(uuid4()), UserRole.STUDENT, "Elsewhere"
        )

        # Act / Assert
        with pytest.raises(ValidationError, match="does not belong"):
            await reply_service.create_reply(
                post.id, UserId(uuid4()), UserRole.STUDENT, "Cross", parent.id
            )

    @pytest.mark.asyncio
    async def test_empty_content_is_rejected(self, unit_env):
        reply_service = await unit_env.get(ReplyService)
        post = await _seed_post(unit_env)

        with pytest.raises(ValidationError):
            await reply_service.create_reply(
                post.id, UserId(uuid4()), UserRole.STUDENT, "   "
            )

    @pytest.mark.asyncio
    async def test_instructor_reply_is_flagged(self, unit_env):
        reply_service = await unit_env.get(ReplyService)
        post = await _seed_post(unit_env)

        reply = await reply_service.create_reply(
            post.id, UserId(uuid4()), UserRole.INSTRUCTOR, "Official answer"
        )

        assert reply.is_instructor_reply

    @pytest.mark.asyncio
    async def test_admin_reply_is_not_instructor_reply(self, unit_env):
        reply_service = await unit_env.get(ReplyService)
        post = await _seed_post(unit_env)

        reply = await reply_service.create_reply(
            post.id, UserId(uuid4()), UserRole.ADMIN, "Admin note"
        )

        assert not reply.is_instructor_reply

    @pytest.mark.asyncio
    async def test_create_touches_post_activity(self, unit_env):
        # Arrange
        reply_service = await unit_env.get(ReplyService)
        post_repo = await unit_env.get(PostRepository)
        post = await _seed_post(unit_env)

        # Act
        await reply_service.create_reply(
            post.id, UserId(uuid4()), UserRole.STUDENT, "Bump"
        )

        # Assert
        stored = await post_repo.find_by_id(post.id)
        assert stored is not None
        assert stored.last_activity > post.last_activity


class TestGetRepliesForPost:
    """Tests for get_replies_for_post method."""

    @pytest.mark.asyncio
    async def test_returns_only_requested_level(self, unit_env):
        # Arrange
        reply_service = await unit_env.get(ReplyService)
        reply_repo = await unit_env.get(ReplyRepository)
        post_id = PostId(uuid4())
        top = await reply_repo.save(make_reply(post_id, content="Top"))
        child = await reply_repo.save(make_reply(post_id, content="Child", parent=top))

        # Act
        top_level = await reply_service.get_replies_for_post(post_id)
        children = await reply_service.get_replies_for_post(post_id, parent_id=top.id)

        # Assert
        assert [r.id for r in top_level] == [top.id]
        assert [r.id for r in children] == [child.id]

    @pytest.mark.asyncio
    async def test_newest_first_by_default(self, unit_env):
        reply_service = await unit_env.get(ReplyService)
        reply_repo = await unit_env.get(ReplyRepository)
        post_id = PostId(uuid4())
        older = await reply_repo.save(make_reply(post_id, minutes_ago=10))
        newer = await reply_repo.save(make_reply(post_id, minutes_ago=1))

        replies = await reply_service.get_replies_for_post(post_id)

        assert [r.id for r in replies] == [newer.id, older.id]

    @pytest.mark.asyncio
    async def test_top_sort_puts_accepted_then_score(self, unit_env):
        """TOP ordering: accepted answer first, then by vote score."""
        # Arrange
        reply_service = await unit_env.get(ReplyService)
        reply_repo = await unit_env.get(ReplyRepository)
        post_id = PostId(uuid4())
        voters = [UserId(uuid4()) for _ in range(3)]
        popular = await reply_repo.save(make_reply(post_id, upvotes=voters))
        accepted = await reply_repo.save(
            make_reply(post_id, is_accepted_answer=True)
        )
        middling = await reply_repo.save(make_reply(post_id, upvotes=voters[:1]))

        # Act
        replies = await reply_service.get_replies_for_post(
            post_id, sort=ReplySortOrder.TOP
        )

        # Assert
        assert [r.id for r in replies] == [accepted.id, popular.id, middling.id]

    @pytest.mark.asyncio
    async def test_deleted_replies_are_listed(self, unit_env):
        reply_service = await unit_env.get(ReplyService)
        reply_repo = await unit_env.get(ReplyRepository)
        post_id = PostId(uuid4())
        deleted = await reply_repo.save(make_reply(post_id, is_deleted=True))

        replies = await reply_service.get_replies_for_post(post_id)

        assert [r.id for r in replies] == [deleted.id]


class TestGetRepliesByAuthor:
    """Tests for get_replies_by_author method."""

    @pytest.mark.asyncio
    async def test_pages_newest_first_and_skips_deleted(self, unit_env):
        # Arrange
        reply_service = await unit_env.get(ReplyService)
        reply_repo = await unit_env.get(ReplyRepository)
        author = UserId(uuid4())
        post_id = PostId(uuid4())
        saved = [
            await reply_repo.save(make_reply(post_id, author, minutes_ago=minutes))
            for minutes in (5, 4, 3, 2, 1)
        ]
        await reply_repo.save(make_reply(post_id, author, is_deleted=True))

        # Act
        page_one, total = await reply_service.get_replies_by_author(author, 1, 2)
        page_three, _ = await reply_service.get_replies_by_author(author, 3, 2)

        # Assert
        assert total == 5
        assert [r.id for r in page_one] == [saved[4].id, saved[3].id]
        assert [r.id for r in page_three] == [saved[0].id]


class TestUpdateContent:
    """Tests for update_content method."""

    @pytest.mark.asyncio
    async def test_updates_and_trims_content(self, unit_env):
        reply_service = await unit_env.get(ReplyService)
        reply_repo = await unit_env.get(ReplyRepository)
        reply = await reply_repo.save(make_reply(PostId(uuid4()), minutes_ago=5))

        updated = await reply_service.update_content(reply.id, "  Edited  ")

        assert updated.content == "Edited"
        assert updated.updated_at > reply.updated_at

    @pytest.mark.asyncio
    async def test_deleted_reply_cannot_be_edited(self, unit_env):
        reply_service = await unit_env.get(ReplyService)
        reply_repo = await unit_env.get(ReplyRepository)
        reply = await reply_repo.save(make_reply(PostId(uuid4()), is_deleted=True))

        with pytest.raises(ContentDeletedException):
            await reply_service.update_content(reply.id, "Revived")

    @pytest.mark.asyncio
    async def test_missing_reply_raises_not_found(self, unit_env):
        reply_service = await unit_env.get(ReplyService)

        with pytest.raises(NotFoundError):
            await reply_service.update_content(ReplyId(uuid4()), "Anything")


class TestMarkAccepted:
    """Tests for mark_accepted method."""

    @pytest.mark.asyncio
    async def test_accepting_clears_previous_answer(self, unit_env):
        """Only one reply per post keeps the accepted flag."""
        # Arrange
        reply_service = await unit_env.get(ReplyService)
        reply_repo = await unit_env.get(ReplyRepository)
        post_id = PostId(uuid4())
        first = await reply_repo.save(make_reply(post_id, is_accepted_answer=True))
        second = await reply_repo.save(make_reply(post_id))

        # Act
        accepted, unaccepted = await reply_service.mark_accepted(second.id)

        # Assert
        assert accepted.is_accepted_answer
        assert unaccepted == [first.id]
        stored_first = await reply_repo.find_by_id(first.id)
        assert stored_first is not None
        assert not stored_first.is_accepted_answer
        assert [r.id for r in await reply_repo.find_accepted_by_post(post_id)] == [
            second.id
        ]

    @pytest.mark.asyncio
    async def test_accepting_twice_is_idempotent(self, unit_env):
        reply_service = await unit_env.get(ReplyService)
        reply_repo = await unit_env.get(ReplyRepository)
        reply = await reply_repo.save(make_reply(PostId(uuid4())))

        await reply_service.mark_accepted(reply.id)
        accepted, unaccepted = await reply_service.mark_accepted(reply.id)

        assert accepted.is_accepted_answer
        assert unaccepted == []

    @pytest.mark.asyncio
    async def test_deleted_reply_cannot_be_accepted(self, unit_env):
        reply_service = await unit_env.get(ReplyService)
        reply_repo = await unit_env.get(ReplyRepository)
        reply = await reply_repo.save(make_reply(PostId(uuid4()), is_deleted=True))

        with pytest.raises(ContentDeletedException):
            await reply_service.mark_accepted(reply.id)


class TestSoftDelete:
    """Tests for soft_delete method."""

    @pytest.mark.asyncio
    async def test_flags_reply_and_keeps_content(self, unit_env):
        # Arrange
        reply_service = await unit_env.get(ReplyService)
        reply_repo = await unit_env.get(ReplyRepository)
        moderator = UserId(uuid4())
        reply = await reply_repo.save(make_reply(PostId(uuid4()), content="Oops"))

        # Act
        deleted = await reply_service.soft_delete(reply.id, moderator)

        # Assert
        assert deleted.is_deleted
        assert deleted.deleted_by == moderator
        assert deleted.deleted_at is not None
        assert deleted.content == "Oops"
        assert deleted.display_content == "[This reply has been deleted]"

    @pytest.mark.asyncio
    async def test_children_survive_parent_deletion(self, unit_env):
        # Arrange
        reply_service = await unit_env.get(ReplyService)
        reply_repo = await unit_env.get(ReplyRepository)
        post_id = PostId(uuid4())
        parent = await reply_repo.save(make_reply(post_id))
        child = await reply_repo.save(make_reply(post_id, parent=parent))

        # Act
        await reply_service.soft_delete(parent.id, UserId(uuid4()))

        # Assert
        children = await reply_service.get_replies_for_post(post_id, parent.id)
        assert [r.id for r in children] == [child.id]
        assert not children[0].is_deleted

    @pytest.mark.asyncio
    async def test_second_delete_is_rejected(self, unit_env):
        reply_service = await unit_env.get(ReplyService)
        reply_repo = await unit_env.get(ReplyRepository)
        reply = await reply_repo.save(make_reply(PostId(uuid4())))
        await reply_service.soft_delete(reply.id, UserId(uuid4()))

        with pytest.raises(ContentDeletedException):
            await reply_service.soft_delete(reply.id, UserId(uuid4()))


class TestToggleVote:
    """Tests for toggle_vote method."""

    @pytest.mark.asyncio
    async def test_upvote_twice_returns_to_zero(self, unit_env):
        # Arrange
        reply_service = await unit_env.get(ReplyService)
        reply_repo = await unit_env.get(ReplyRepository)
        reply = await reply_repo.save(make_reply(PostId(uuid4())))
        user = UserId(uuid4())

        # Act
        once = await reply_service.toggle_vote(reply.id, user, VoteDirection.UP)
        twice = await reply_service.toggle_vote(reply.id, user, VoteDirection.UP)

        # Assert
        assert once.vote_score == 1
        assert twice.vote_score == 0
        assert twice.upvotes == []

    @pytest.mark.asyncio
    async def test_vote_on_deleted_reply_is_rejected(self, unit_env):
        reply_service = await unit_env.get(ReplyService)
        reply_repo = await unit_env.get(ReplyRepository)
        reply = await reply_repo.save(make_reply(PostId(uuid4()), is_deleted=True))

        with pytest.raises(ContentDeletedException):
            await reply_service.toggle_vote(
                reply.id, UserId(uuid4()), VoteDirection.DOWN
            )

    @pytest.mark.asyncio
    async def test_vote_on_missing_reply_raises_not_found(self, unit_env):
        reply_service = await unit_env.get(ReplyService)

        with pytest.raises(NotFoundError):
            await reply_service.toggle_vote(
                ReplyId(uuid4()), UserId(uuid4()), VoteDirection.UP
            )


class SlowReadReplyRepository(InMemoryReplyRepository):
    """Lets other coroutines run between a read and the following write."""

    async def find_by_id(self, reply_id):
        reply = await super().find_by_id(reply_id)
        await asyncio.sleep(0.01)
        return reply


class TestWritesDuringVoting:
    """Non-vote writes keep votes cast while they were in flight."""

    @pytest.fixture
    def slow_setup(self):
        replies = SlowReadReplyRepository()
        posts = InMemoryPostRepository()
        return replies, posts, ReplyService(replies, PostService(posts))

    @pytest.mark.asyncio
    async def test_edit_racing_a_vote(self, slow_setup):
        # Arrange
        replies, posts, service = slow_setup
        post = await posts.save(make_post())
        reply = await replies.save(make_reply(post.id))
        voter = UserId(uuid4())

        # Act
        await asyncio.gather(
            service.update_content(reply.id, "edited"),
            replies.toggle_vote(reply.id, voter, VoteDirection.UP),
        )

        # Assert
        stored = await replies.find_by_id(reply.id)
        assert stored.content == "edited"
        assert stored.upvotes == [voter]
        assert stored.vote_score == 1

    @pytest.mark.asyncio
    async def test_soft_delete_racing_a_vote(self, slow_setup):
        # Arrange
        replies, posts, service = slow_setup
        post = await posts.save(make_post())
        reply = await replies.save(make_reply(post.id))
        voter = UserId(uuid4())

        # Act
        await asyncio.gather(
            service.soft_delete(reply.id, reply.author_id),
            replies.toggle_vote(reply.id, voter, VoteDirection.DOWN),
        )

        # Assert
        stored = await replies.find_by_id(reply.id)
        assert stored.is_deleted
        assert stored.downvotes == [voter]
        assert stored.vote_score == -1
