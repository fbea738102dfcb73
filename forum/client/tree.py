"""Reply forest used by the client cache.

A post's replies are held as an ordered forest: each node carries its own
``replies`` list of children. Every structural operation on the forest goes
through ``find_and_apply``.
"""

from dataclasses import dataclass
from typing import Callable, Iterator, Optional

from forum.application.usecase.common import ReplyItem


class ReplyNode(ReplyItem):
    """A reply as held in the client cache, with its loaded children.

    ``replies`` is None until children have been loaded or inserted.
    """

    replies: Optional[list["ReplyNode"]] = None


@dataclass
class Location:
    """Where a matching node sits in the forest."""

    node: ReplyNode
    siblings: list[ReplyNode]  # The list holding the node (top level or a children list)
    index: int


def find_and_apply(
    forest: list[ReplyNode],
    predicate: Callable[[ReplyNode], bool],
    apply: Callable[[Location], None],
) -> bool:
    """Depth-first search the forest and apply a callback to the first match.

    Each node is visited at most once. The callback may mutate the node or
    the sibling list it sits in.

    Args:
        forest: Top-level nodes to search
        predicate: Match test
        apply: Called with the location of the first matching node

    Returns:
        True if a node matched, False otherwise
    """
    for index, node in enumerate(forest):
        if predicate(node):
            apply(Location(node=node, siblings=forest, index=index))
            return True
        if node.replies and find_and_apply(node.replies, predicate, apply):
            return True
    return False


def has_id(reply_id: str) -> Callable[[ReplyNode], bool]:
    """Predicate matching a node by reply ID."""
    return lambda node: node.id == reply_id


def iter_subtree(node: ReplyNode) -> Iterator[ReplyNode]:
    """Yield a node and all of its loaded descendants, depth first."""
    yield node
    for child in node.replies or []:
        yield from iter_subtree(child)
