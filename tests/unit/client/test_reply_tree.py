"""Unit tests for the client reply forest helpers."""

from forum.client.tree import ReplyNode, find_and_apply, has_id, iter_subtree
from tests.conftest import make_node as node


class TestFindAndApply:
    """Tests for the forest search primitive."""

    def test_finds_nested_node(self):
        # Arrange
        root = node()
        child = node(root)
        grandchild = node(child)
        child.replies = [grandchild]
        root.replies = [child]
        seen = []

        # Act
        found = find_and_apply([root], has_id(grandchild.id), seen.append)

        # Assert
        assert found
        assert len(seen) == 1
        assert seen[0].node is grandchild
        assert seen[0].siblings is child.replies
        assert seen[0].index == 0

    def test_missing_node_returns_false(self):
        seen = []

        found = find_and_apply([node(), node()], has_id("nope"), seen.append)

        assert not found
        assert seen == []

    def test_only_first_match_is_applied(self):
        first, second = node(content="same"), node(content="same")
        seen = []

        find_and_apply([first, second], lambda n: n.content == "same", seen.append)

        assert [loc.node for loc in seen] == [first]

    def test_callback_can_detach_node(self):
        root = node()
        keep, drop = node(root), node(root)
        root.replies = [keep, drop]

        find_and_apply(
            [root], has_id(drop.id), lambda loc: loc.siblings.pop(loc.index)
        )

        assert root.replies == [keep]

    def test_unloaded_children_are_skipped(self):
        root = node()
        assert root.replies is None

        assert not find_and_apply([root], has_id("child"), lambda loc: None)


def test_iter_subtree_is_depth_first():
    root = node(content="root")
    a, b = node(root, content="a"), node(root, content="b")
    a1 = node(a, content="a1")
    a.replies = [a1]
    root.replies = [a, b]

    assert [n.content for n in iter_subtree(root)] == ["root", "a", "a1", "b"]


def test_reply_node_reads_camel_case_payload():
    payload = {
        "id": "r1",
        "postId": "p1",
        "authorId": "u1",
        "content": "Hi",
        "parentReply": None,
        "depth": 0,
        "voteScore": 2,
        "upvotes": ["a", "b"],
        "isAcceptedAnswer": True,
        "createdAt": "2024-01-01T00:00:00",
        "updatedAt": "2024-01-01T00:00:00",
    }

    reply = ReplyNode.model_validate(payload)

    assert reply.post_id == "p1"
    assert reply.vote_score == 2
    assert reply.is_accepted_answer
    assert reply.replies is None
