"""Database connection and session management.

Provides async database engine and session factory for PostgreSQL, and
the translation of driver errors into domain errors.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import logfire
from sqlalchemy.exc import DataError, IntegrityError, InterfaceError, OperationalError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from rediscover.config import Settings
from rediscover.domain.error import (
    DuplicateRecordError,
    InvalidRecordError,
    StoreUnavailableError,
)


def create_engine(settings: Settings) -> AsyncEngine:
    """Create async database engine.

    Args:
        settings: Application settings with database URL

    Returns:
        Configured async engine
    """
    return create_async_engine(
        settings.database_url,
        echo=settings.debug,  # Log SQL queries in debug mode
        pool_pre_ping=True,
        pool_size=settings.database.pool_size,
        max_overflow=settings.database.max_overflow,
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create async session factory.

    Args:
        engine: Database engine

    Returns:
        Session factory for creating database sessions
    """
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
        autocommit=False,
    )


@asynccontextmanager
async def translate_store_errors(entity: str) -> AsyncGenerator[None, None]:
    """Map driver exceptions raised inside the block to domain errors.

    Unique violations become DuplicateRecordError. Values a column cannot
    hold become InvalidRecordError. Lost or refused connections become
    StoreUnavailableError.

    Args:
        entity: Entity name used in the error message
    """
    try:
        yield
    except IntegrityError as e:
        constraint = getattr(getattr(e.orig, "__cause__", None), "constraint_name", None)
        raise DuplicateRecordError(entity, constraint) from e
    except DataError as e:
        logfire.warn("Store rejected value", entity=entity, error=str(e.orig))
        raise InvalidRecordError(entity, str(e.orig)) from e
    except (OperationalError, InterfaceError) as e:
        logfire.error("Database unavailable", entity=entity, error=str(e))
        raise StoreUnavailableError(str(e)) from e


@asynccontextmanager
async def savepoint(session: AsyncSession, entity: str) -> AsyncGenerator[None, None]:
    """Run a write inside a SAVEPOINT with error translation.

    A unique violation rolls back only the savepoint, so the request
    transaction stays usable for the caller's recovery path.

    Args:
        session: Request session
        entity: Entity name used in error messages
    """
    async with translate_store_errors(entity):
        async with session.begin_nested():
            yield
