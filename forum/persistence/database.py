"""PostgreSQL engine and session factory."""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from forum.config import Settings

APPLICATION_NAME = "forum-api"


def create_engine(settings: Settings) -> AsyncEngine:
    """Create the async engine for the forum database.

    Connections identify themselves as ``forum-api`` in ``pg_stat_activity``.

    Args:
        settings: Application settings

    Returns:
        Async engine backed by asyncpg
    """
    return create_async_engine(
        settings.database.url,
        echo=settings.debug,
        pool_pre_ping=True,
        pool_size=settings.database.pool_size,
        max_overflow=settings.database.max_overflow,
        connect_args={"server_settings": {"application_name": APPLICATION_NAME}},
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create the session factory used for request sessions.

    Repositories flush explicitly, and rows are mapped to frozen domain
    models, so sessions neither autoflush nor expire on commit.
    """
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )
