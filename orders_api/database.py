"""
SQLAlchemy Async Database Configuration.
"""

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine, AsyncSession, async_sessionmaker

from orders_api.config import get_settings
from orders_api.models.base import Base  # noqa: F401  (re-exported for metadata.create_all)

settings = get_settings()


def build_engine(database_url: str, echo: bool = False) -> AsyncEngine:
    """Create an async engine, with pool tuning for server databases."""
    if database_url.startswith("sqlite"):
        engine = create_async_engine(database_url, echo=echo, future=True)
        enable_sqlite_foreign_keys(engine)
        return engine

    return create_async_engine(
        database_url,
        echo=echo,
        future=True,
        pool_size=20,
        max_overflow=40,
        pool_timeout=10,       # Fail fast instead of blocking for 30s
        pool_recycle=900,
        pool_pre_ping=True,    # Verify connections before use
    )


def enable_sqlite_foreign_keys(engine: AsyncEngine) -> None:
    """SQLite ignores FOREIGN KEY clauses unless the pragma is set per connection."""

    @event.listens_for(engine.sync_engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def build_session_maker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


engine = build_engine(settings.DATABASE_URL, echo=settings.DEBUG)

# Async Session Factory
async_session_maker = build_session_maker(engine)


def get_session_maker() -> async_sessionmaker[AsyncSession]:
    """Dependency for FastAPI routes; services open their own sessions from it."""
    return async_session_maker
