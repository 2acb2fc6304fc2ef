"""Database initialization and dependency injection."""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import fastapi
from sqlalchemy.ext.asyncio import AsyncSession

from components.core.database import DatabaseManager
# Import all models to ensure they're registered
import components.user.models
import components.deposit.models
import components.transaction.models

# Create a single instance of DatabaseManager
db_manager = DatabaseManager()


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency for getting database sessions."""
    async with db_manager.get_db() as session:
        yield session


@asynccontextmanager
async def init_db(app: fastapi.FastAPI) -> AsyncGenerator[None, None]:
    """Create missing tables on startup and release pooled connections on shutdown."""
    await db_manager.create_tables()
    yield
    await db_manager.engine.dispose()
