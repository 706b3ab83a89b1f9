"""Database engine and session factory for PostgreSQL."""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from replytree.config import Settings


def create_engine(settings: Settings) -> AsyncEngine:
    """Create async database engine.

    Every connection gets a server-side ``statement_timeout`` so a runaway
    recursive delete is cancelled by Postgres instead of holding the post
    row lock indefinitely.

    Args:
        settings: Application settings

    Returns:
        Configured async engine
    """
    database = settings.database
    return create_async_engine(
        database.url,
        echo=settings.debug,
        pool_pre_ping=True,
        pool_size=database.pool_size,
        max_overflow=database.max_overflow,
        pool_timeout=database.pool_timeout,
        connect_args={
            "server_settings": {
                "statement_timeout": str(database.statement_timeout_ms),
            }
        },
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create async session factory.

    Sessions are transaction-per-request: repositories flush, the DI
    provider commits or rolls back.
    """
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )
