"""initial_schema

Create the replytree schema:
- Posts (with denormalized comment_count)
- Comments (reply forest via self-referencing parent_id)

Revision ID: 3f1c9a7e2b44
Revises:
Create Date: 2026-10-19 09:12:44.518203

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "3f1c9a7e2b44"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.execute('CREATE EXTENSION IF NOT EXISTS "uuid-ossp"')

    # ========================================================================
    # POSTS table
    # ========================================================================
    op.create_table(
        "posts",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("uuid_generate_v4()"),
            nullable=False,
        ),
        sa.Column("author_id", sa.UUID(), nullable=False),
        sa.Column("title", sa.String(300), nullable=False),
        sa.Column("comment_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("comment_count >= 0", name="comment_count_non_negative"),
    )
    op.create_index(
        "idx_posts_created_at",
        "posts",
        [sa.text("created_at DESC")],
    )

    # ========================================================================
    # COMMENTS table
    # ========================================================================
    # parent_id uses the default NO ACTION: constraints are checked at the end
    # of each statement, so a recursive-CTE delete of a whole subtree succeeds
    # while deleting a parent alone (leaving children behind) fails.
    op.create_table(
        "comments",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("uuid_generate_v4()"),
            nullable=False,
        ),
        sa.Column("post_id", sa.UUID(), nullable=False),
        sa.Column("parent_id", sa.UUID(), nullable=True),
        sa.Column("author_id", sa.UUID(), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.ForeignKeyConstraint(["post_id"], ["posts.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["parent_id"], ["comments.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "idx_comments_post_created", "comments", ["post_id", "created_at"]
    )
    op.create_index("idx_comments_parent_id", "comments", ["parent_id"])
    op.create_index(
        "idx_comments_roots",
        "comments",
        ["post_id"],
        postgresql_where=sa.text("parent_id IS NULL"),
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table("comments")
    op.drop_table("posts")
