"""Persistence infrastructure providers."""

from collections.abc import AsyncIterator

from dishka import Scope, provide
import logfire
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from replytree.config import Settings
from replytree.domain.repository import CommentRepository, PostRepository
from replytree.persistence.database import create_engine, create_session_factory
from replytree.persistence.repository import (
    PostgresCommentRepository,
    PostgresPostRepository,
)
from replytree.util.di.base import ProviderBase
from replytree.util.observability import instrument_sqlalchemy


class PersistenceProvider(ProviderBase):
    """Swappable persistence component (Postgres in production)."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """PostgreSQL: one engine per app, one transaction per request."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    async def get_engine(self, settings: Settings) -> AsyncIterator[AsyncEngine]:
        engine = create_engine(settings)
        instrument_sqlalchemy(engine)
        yield engine
        await engine.dispose()

    @provide(scope=Scope.APP)
    def get_session_factory(
        self, engine: AsyncEngine
    ) -> async_sessionmaker[AsyncSession]:
        return create_session_factory(engine)

    @provide(scope=Scope.REQUEST)
    async def get_session(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> AsyncIterator[AsyncSession]:
        """Request transaction shared by both repositories.

        Commits when the request scope closes cleanly and rolls back on any
        error. Either way the post row locks taken by ``PostRepository.lock``
        are released here, so a deletion and its counter decrement become
        visible together or not at all.
        """
        async with session_factory() as session:
            try:
                yield session
            except Exception as e:
                logfire.warn("Request transaction rolled back", error=str(e))
                await session.rollback()
                raise
            await session.commit()

    @provide(scope=Scope.REQUEST)
    def get_post_repository(self, session: AsyncSession) -> PostRepository:
        return PostgresPostRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_comment_repository(self, session: AsyncSession) -> CommentRepository:
        return PostgresCommentRepository(session)
