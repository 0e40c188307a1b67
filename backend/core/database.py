"""
Async SQLModel engine and session maker.
"""

from sqlmodel import SQLModel
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import NullPool

from core.config import settings


def build_engine(database_url: str, echo: bool = False) -> AsyncEngine:
    """
    Create an async engine. SQLite connections get foreign keys switched on,
    otherwise `ON DELETE CASCADE` from summaries to notes/reminders is ignored.
    """
    is_sqlite = database_url.startswith("sqlite")
    engine = create_async_engine(
        database_url,
        echo=echo,
        pool_pre_ping=True,
        # aiosqlite connections must not be shared across event loops
        poolclass=NullPool if is_sqlite else None,
    )

    if is_sqlite:
        @event.listens_for(engine.sync_engine, "connect")
        def _enable_foreign_keys(dbapi_connection, _connection_record):  # noqa: ANN001
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return engine


def build_session_factory(bind: AsyncEngine) -> sessionmaker:
    return sessionmaker(bind, class_=AsyncSession, expire_on_commit=False)


engine = build_engine(settings.DATABASE_URL, echo=settings.ENV == "development")
async_session_factory = build_session_factory(engine)


async def init_db(bind: AsyncEngine | None = None) -> None:
    """
    Called once at startup (**dev only**) to create tables.
    In production you should run Alembic migrations instead.
    """
    # table models must be imported so they register on the metadata
    from models import note, reminder, session, summary, user  # noqa: F401

    async with (bind or engine).begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)


async def get_session() -> AsyncSession:  # FastAPI dependency
    async with async_session_factory() as session:
        yield session
