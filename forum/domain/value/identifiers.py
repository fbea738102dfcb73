"""Strongly typed identifiers for forum entities.

NewType keeps post, reply and user ids from being mixed up at call sites.
"""

from typing import NewType
from uuid import UUID

UserId = NewType("UserId", UUID)
PostId = NewType("PostId", UUID)
ReplyId = NewType("ReplyId", UUID)
