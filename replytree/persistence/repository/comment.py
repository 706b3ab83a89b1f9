"""PostgreSQL implementation of Comment repository."""

from collections import Counter, defaultdict
from typing import List, Optional

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from replytree.domain.model import Comment
from replytree.domain.repository import CommentRepository
from replytree.domain.value import CommentId, PostId
from replytree.persistence.error import storage_errors
from replytree.persistence.mappers import comment_to_dict, row_to_comment
from replytree.persistence.tables import comments_table


class PostgresCommentRepository(CommentRepository):
    """PostgreSQL implementation of CommentRepository.

    Subtree deletion is a single recursive-CTE DELETE, so the affected row
    count it returns is authoritative.
    """

    supports_cascade = True

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        stmt = select(comments_table).where(comments_table.c.id == comment_id)
        with storage_errors("find_by_id"):
            result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_comment(row._asdict()) if row else None

    async def find_by_post(self, post_id: PostId) -> List[Comment]:
        """Find all comments for a post, oldest first."""
        stmt = (
            select(comments_table)
            .where(comments_table.c.post_id == post_id)
            .order_by(comments_table.c.created_at)
        )
        with storage_errors("find_by_post"):
            result = await self.session.execute(stmt)
        return [row_to_comment(row._asdict()) for row in result.fetchall()]

    async def find_root_ids(self, post_id: PostId) -> List[CommentId]:
        """Find the IDs of the root comments of a post."""
        stmt = (
            select(comments_table.c.id)
            .where(comments_table.c.post_id == post_id)
            .where(comments_table.c.parent_id.is_(None))
        )
        with storage_errors("find_root_ids"):
            result = await self.session.execute(stmt)
        return [CommentId(comment_id) for comment_id in result.scalars().all()]

    async def find_by_parent(
        self, post_id: PostId, parent_id: Optional[CommentId]
    ) -> List[Comment]:
        """Find one thread level of a post, oldest first."""
        parent_clause = (
            comments_table.c.parent_id.is_(None)
            if parent_id is None
            else comments_table.c.parent_id == parent_id
        )
        stmt = (
            select(comments_table)
            .where(comments_table.c.post_id == post_id)
            .where(parent_clause)
            .order_by(comments_table.c.created_at)
        )
        with storage_errors("find_by_parent"):
            result = await self.session.execute(stmt)
        return [row_to_comment(row._asdict()) for row in result.fetchall()]

    async def find_children(
        self, parent_ids: set[CommentId], post_id: Optional[PostId] = None
    ) -> dict[CommentId, list[CommentId]]:
        """Find direct children of a set of comments in one query."""
        if not parent_ids:
            return {}

        stmt = select(comments_table.c.id, comments_table.c.parent_id).where(
            comments_table.c.parent_id.in_(parent_ids)
        )
        if post_id is not None:
            stmt = stmt.where(comments_table.c.post_id == post_id)
        with storage_errors("find_children"):
            result = await self.session.execute(stmt)

        children: dict[CommentId, list[CommentId]] = defaultdict(list)
        for child_id, parent_id in result.fetchall():
            children[CommentId(parent_id)].append(CommentId(child_id))
        return dict(children)

    async def save(self, comment: Comment) -> Comment:
        """Save a comment (create or update)."""
        existing = await self.find_by_id(comment.id)
        comment_dict = comment_to_dict(comment)

        if existing:
            stmt = (
                comments_table.update()
                .where(comments_table.c.id == comment.id)
                .values(**comment_dict)
            )
        else:
            stmt = comments_table.insert().values(**comment_dict)

        with storage_errors("save"):
            await self.session.execute(stmt)
            await self.session.flush()

        return comment

    async def delete_by_ids(self, comment_ids: set[CommentId]) -> dict[PostId, int]:
        """Hard delete a set of comments, returning the rows removed per post."""
        if not comment_ids:
            return {}

        stmt = (
            delete(comments_table)
            .where(comments_table.c.id.in_(comment_ids))
            .returning(comments_table.c.post_id)
        )
        with storage_errors("delete_by_ids"):
            result = await self.session.execute(stmt)
            deleted = _count_by_post(result.scalars().all())
            await self.session.flush()
        return deleted

    async def cascading_delete_by_root(
        self, root_id: CommentId
    ) -> dict[PostId, int]:
        """Delete a comment and its subtree in one statement.

        The recursive CTE uses UNION, not UNION ALL, so it terminates even if
        the stored parent relation contains a cycle. Each removed row reports
        its own post, so a reply stored on another post is charged there.
        """
        subtree = (
            select(comments_table.c.id)
            .where(comments_table.c.id == root_id)
            .cte("subtree", recursive=True)
        )
        subtree = subtree.union(
            select(comments_table.c.id).join(
                subtree, comments_table.c.parent_id == subtree.c.id
            )
        )
        stmt = (
            delete(comments_table)
            .where(comments_table.c.id.in_(select(subtree.c.id)))
            .returning(comments_table.c.post_id)
        )
        with storage_errors("cascading_delete_by_root"):
            result = await self.session.execute(stmt)
            deleted = _count_by_post(result.scalars().all())
            await self.session.flush()
        return deleted


def _count_by_post(post_ids) -> dict[PostId, int]:
    return {PostId(post_id): count for post_id, count in Counter(post_ids).items()}
