"""SQLAlchemy table definitions for the forum.

They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
)
from sqlalchemy.dialects import postgresql
from sqlalchemy.dialects.postgresql import ARRAY, TIMESTAMP, UUID

metadata = MetaData()

# ============================================================================
# USERS TABLE
# ============================================================================
users_table = Table(
    "users",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("handle", String(255), nullable=False),
    Column(
        "role",
        postgresql.ENUM(
            "student", "instructor", "admin", name="user_role", create_type=False
        ),
        nullable=False,
        server_default="student",
    ),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_users_handle", users_table.c.handle)

# ============================================================================
# POSTS TABLE
# ============================================================================
posts_table = Table(
    "posts",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("title", String(300), nullable=False),
    Column("content", Text, nullable=False),
    Column(
        "author_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    ),
    Column("upvotes", ARRAY(UUID), nullable=False, server_default="{}"),
    Column("downvotes", ARRAY(UUID), nullable=False, server_default="{}"),
    Column("vote_score", Integer, nullable=False, server_default="0"),
    Column("is_answered", Boolean, nullable=False, server_default="false"),
    Column(
        "last_activity",
        TIMESTAMP(timezone=True),
        nullable=False,
        server_default="NOW()",
    ),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_posts_author_id", posts_table.c.author_id)
Index("idx_posts_last_activity", posts_table.c.last_activity.desc())

# ============================================================================
# REPLIES TABLE
# ============================================================================
replies_table = Table(
    "replies",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("post_id", UUID, ForeignKey("posts.id", ondelete="CASCADE"), nullable=False),
    Column(
        "author_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    ),
    Column("content", String(2000), nullable=False),
    Column(
        "parent_id", UUID, ForeignKey("replies.id", ondelete="CASCADE"), nullable=True
    ),
    Column("depth", Integer, nullable=False, server_default="0"),
    Column("upvotes", ARRAY(UUID), nullable=False, server_default="{}"),
    Column("downvotes", ARRAY(UUID), nullable=False, server_default="{}"),
    Column("vote_score", Integer, nullable=False, server_default="0"),
    Column("is_accepted_answer", Boolean, nullable=False, server_default="false"),
    Column("is_instructor_reply", Boolean, nullable=False, server_default="false"),
    Column("is_deleted", Boolean, nullable=False, server_default="false"),
    Column("deleted_at", TIMESTAMP(timezone=True), nullable=True),
    Column(
        "deleted_by", UUID, ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    ),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint("depth >= 0 AND depth <= 5", name="reply_depth_range"),
)

Index(
    "idx_replies_post_parent_created",
    replies_table.c.post_id,
    replies_table.c.parent_id,
    replies_table.c.created_at.desc(),
)
Index(
    "idx_replies_author_created",
    replies_table.c.author_id,
    replies_table.c.created_at.desc(),
)
Index(
    "idx_replies_post_accepted",
    replies_table.c.post_id,
    replies_table.c.is_accepted_answer,
)
