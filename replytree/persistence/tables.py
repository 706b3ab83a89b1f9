"""SQLAlchemy Core tables.

Kept in step with ``migrations/versions``.
"""

from sqlalchemy import (
    CheckConstraint,
    Column,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    text,
)
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID

metadata = MetaData()


def _id_column() -> Column:
    return Column(
        "id", UUID, primary_key=True, server_default=text("uuid_generate_v4()")
    )


def _created_at_column() -> Column:
    return Column(
        "created_at",
        TIMESTAMP(timezone=True),
        nullable=False,
        server_default=text("NOW()"),
    )


posts_table = Table(
    "posts",
    metadata,
    _id_column(),
    Column("author_id", UUID, nullable=False),
    Column("title", String(300), nullable=False),
    # Denormalized; only comment creation, subtree deletion and
    # reconciliation write it
    Column("comment_count", Integer, nullable=False, server_default="0"),
    _created_at_column(),
    CheckConstraint("comment_count >= 0", name="comment_count_non_negative"),
)

# parent_id has no ON DELETE CASCADE: subtrees are removed by the repository,
# which reports the removed row count to the post counter.
comments_table = Table(
    "comments",
    metadata,
    _id_column(),
    Column(
        "post_id",
        UUID,
        ForeignKey("posts.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("parent_id", UUID, ForeignKey("comments.id"), nullable=True),
    Column("author_id", UUID, nullable=False),
    Column("content", Text, nullable=False),
    _created_at_column(),
)

Index("idx_posts_created_at", posts_table.c.created_at.desc())
Index(
    "idx_comments_post_created",
    comments_table.c.post_id,
    comments_table.c.created_at,
)
# One traversal level is one lookup on this index
Index("idx_comments_parent_id", comments_table.c.parent_id)
Index(
    "idx_comments_roots",
    comments_table.c.post_id,
    postgresql_where=comments_table.c.parent_id.is_(None),
)
