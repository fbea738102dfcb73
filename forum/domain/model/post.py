"""Post aggregate root.

Posts are the questions and discussion starters that replies attach to.
"""

from datetime import datetime

from pydantic import Field

from forum.domain.model.vote import Votable
from forum.domain.value import PostId, UserId


class Post(Votable):
    """Post aggregate root.

    last_activity is touched whenever one of the post's replies is saved,
    so listings can surface recently active threads.
    """

    id: PostId
    title: str = Field(min_length=1, max_length=300)
    content: str = Field(min_length=1, max_length=10000)
    author_id: UserId
    is_answered: bool = False
    last_activity: datetime = Field(default_factory=datetime.now)
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)
