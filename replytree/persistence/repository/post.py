"""PostgreSQL implementation of Post repository."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import List, Optional

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from replytree.domain.model import Post
from replytree.domain.repository import PostRepository
from replytree.domain.value import PostId
from replytree.persistence.error import storage_errors
from replytree.persistence.mappers import post_to_dict, row_to_post
from replytree.persistence.tables import posts_table


class PostgresPostRepository(PostRepository):
    """PostgreSQL implementation of PostRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID."""
        stmt = select(posts_table).where(posts_table.c.id == post_id)
        with storage_errors("find_by_id"):
            result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_post(row._asdict()) if row else None

    async def find_all_ids(self) -> List[PostId]:
        """Find the IDs of all posts, oldest first."""
        stmt = select(posts_table.c.id).order_by(posts_table.c.created_at)
        with storage_errors("find_all_ids"):
            result = await self.session.execute(stmt)
        return [PostId(post_id) for post_id in result.scalars().all()]

    async def save(self, post: Post) -> Post:
        """Save a post (create or update)."""
        existing = await self.find_by_id(post.id)
        post_dict = post_to_dict(post)

        if existing:
            stmt = (
                posts_table.update()
                .where(posts_table.c.id == post.id)
                .values(**post_dict)
            )
        else:
            stmt = posts_table.insert().values(**post_dict)

        with storage_errors("save"):
            await self.session.execute(stmt)
            await self.session.flush()

        return post

    @asynccontextmanager
    async def lock(self, post_id: PostId) -> AsyncIterator[None]:
        """Take a row lock on the post.

        ``SELECT ... FOR UPDATE`` holds until the request transaction commits
        or rolls back, which covers every statement issued inside the context.
        """
        stmt = (
            select(posts_table.c.id)
            .where(posts_table.c.id == post_id)
            .with_for_update()
        )
        with storage_errors("lock"):
            await self.session.execute(stmt)
        yield

    async def get_comment_count(self, post_id: PostId) -> Optional[int]:
        """Read the stored comment counter."""
        stmt = select(posts_table.c.comment_count).where(posts_table.c.id == post_id)
        with storage_errors("get_comment_count"):
            result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def increment_comment_count(self, post_id: PostId, delta: int) -> None:
        """Atomically add delta to the counter (floored at 0)."""
        stmt = (
            update(posts_table)
            .where(posts_table.c.id == post_id)
            .values(comment_count=func.greatest(posts_table.c.comment_count + delta, 0))
        )
        with storage_errors("increment_comment_count"):
            await self.session.execute(stmt)
            await self.session.flush()

    async def set_comment_count(self, post_id: PostId, value: int) -> None:
        """Overwrite the comment counter."""
        stmt = (
            update(posts_table)
            .where(posts_table.c.id == post_id)
            .values(comment_count=value)
        )
        with storage_errors("set_comment_count"):
            await self.session.execute(stmt)
            await self.session.flush()
