"""SQLAlchemy table definitions for the forum.

They match the schema defined in the Alembic migrations.
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    Enum,
    ForeignKey,
    Index,
    MetaData,
    String,
    Table,
    Text,
)
from sqlalchemy.dialects.postgresql import JSONB, TIMESTAMP

# Metadata object for all tables
metadata = MetaData()

ID = String(64)

# ============================================================================
# USERS TABLE
# ============================================================================
users_table = Table(
    "users",
    metadata,
    Column("id", ID, primary_key=True),
    Column("name", String(100), nullable=False),  # Handle, target of @mentions
    Column("email", String(255), nullable=True),
    Column("image", Text, nullable=True),
    Column("email_verified", Boolean, nullable=False, server_default="false"),
    Column("email_notifications", Boolean, nullable=False, server_default="true"),
    Column("notify_on_comment", Boolean, nullable=False, server_default="true"),
    Column("notify_on_reply", Boolean, nullable=False, server_default="true"),
    Column("notify_on_mention", Boolean, nullable=False, server_default="true"),
    Column("notify_on_like", Boolean, nullable=False, server_default="false"),
    Column("notify_on_system", Boolean, nullable=False, server_default="true"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_users_name", users_table.c.name)

# ============================================================================
# POSTS TABLE
# ============================================================================
posts_table = Table(
    "posts",
    metadata,
    Column("id", ID, primary_key=True),
    Column("title", String(300), nullable=False),
    Column("content", Text, nullable=True),
    Column(
        "author_id", ID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    ),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_posts_author_id", posts_table.c.author_id)

# ============================================================================
# COMMENTS TABLE (flat, threaded through parent_id)
# ============================================================================
comments_table = Table(
    "comments",
    metadata,
    Column("id", ID, primary_key=True),
    Column(
        "post_id", ID, ForeignKey("posts.id", ondelete="CASCADE"), nullable=False
    ),
    Column(
        "parent_id",
        ID,
        ForeignKey("comments.id", ondelete="CASCADE"),
        nullable=True,
    ),
    Column(
        "author_id", ID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    ),
    Column("content", Text, nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint(
        "char_length(content) BETWEEN 1 AND 10000", name="chk_comment_content_length"
    ),
)

Index("idx_comments_post_id", comments_table.c.post_id)
Index("idx_comments_parent_id", comments_table.c.parent_id)
Index("idx_comments_author_id", comments_table.c.author_id)

# ============================================================================
# VOTES TABLE (targets exactly one post or one comment)
# ============================================================================
votes_table = Table(
    "votes",
    metadata,
    Column("id", ID, primary_key=True),
    Column(
        "user_id", ID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    ),
    Column(
        "type",
        Enum("UP", "DOWN", name="vote_type", create_type=False),
        nullable=False,
    ),
    Column("post_id", ID, ForeignKey("posts.id", ondelete="CASCADE"), nullable=True),
    Column(
        "comment_id", ID, ForeignKey("comments.id", ondelete="CASCADE"), nullable=True
    ),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint(
        "(post_id IS NULL) <> (comment_id IS NULL)", name="chk_vote_single_target"
    ),
)

Index(
    "uq_votes_user_post",
    votes_table.c.user_id,
    votes_table.c.post_id,
    unique=True,
    postgresql_where=votes_table.c.post_id.isnot(None),
)
Index(
    "uq_votes_user_comment",
    votes_table.c.user_id,
    votes_table.c.comment_id,
    unique=True,
    postgresql_where=votes_table.c.comment_id.isnot(None),
)
Index("idx_votes_comment_id", votes_table.c.comment_id)
Index("idx_votes_post_id", votes_table.c.post_id)

# ============================================================================
# BADGES TABLES
# ============================================================================
badges_table = Table(
    "badges",
    metadata,
    Column("id", ID, primary_key=True),
    Column("name", String(100), nullable=False, unique=True),
    Column("description", Text, nullable=False, server_default=""),
    Column("icon", String(50), nullable=False, server_default=""),
    Column(
        "type",
        Enum(
            "ACTIVITY",
            "ENGAGEMENT",
            "APPRECIATION",
            "TENURE",
            "ACHIEVEMENT",
            "QUALITY",
            "SPECIAL",
            name="badge_type",
            create_type=False,
        ),
        nullable=False,
    ),
    Column(
        "level",
        Enum(
            "BRONZE",
            "SILVER",
            "GOLD",
            "PLATINUM",
            "DIAMOND",
            name="badge_level",
            create_type=False,
        ),
        nullable=False,
    ),
    Column("criteria", JSONB, nullable=False, server_default="{}"),
    Column("is_active", Boolean, nullable=False, server_default="true"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

user_badges_table = Table(
    "user_badges",
    metadata,
    Column("id", ID, primary_key=True),
    Column(
        "user_id", ID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    ),
    Column(
        "badge_id", ID, ForeignKey("badges.id", ondelete="CASCADE"), nullable=False
    ),
    Column(
        "earned_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column("awarded_by", String(64), nullable=False, server_default="system"),
)

Index(
    "uq_user_badges_user_badge",
    user_badges_table.c.user_id,
    user_badges_table.c.badge_id,
    unique=True,
)
Index(
    "idx_user_badges_user_earned",
    user_badges_table.c.user_id,
    user_badges_table.c.earned_at,
)

# ============================================================================
# NOTIFICATIONS TABLE
# ============================================================================
notifications_table = Table(
    "notifications",
    metadata,
    Column("id", ID, primary_key=True),
    Column(
        "user_id", ID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    ),
    Column(
        "type",
        Enum(
            "POST_LIKE",
            "POST_COMMENT",
            "COMMENT_REPLY",
            "MENTION",
            "BEST_ANSWER",
            "SYSTEM",
            name="notification_type",
            create_type=False,
        ),
        nullable=False,
    ),
    Column("title", String(200), nullable=False),
    Column("message", Text, nullable=False),
    Column("data", JSONB, nullable=False, server_default="{}"),
    Column("is_read", Boolean, nullable=False, server_default="false"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index(
    "idx_notifications_user_created",
    notifications_table.c.user_id,
    notifications_table.c.created_at,
)
