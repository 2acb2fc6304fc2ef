"""Database setup endpoints."""

import logging
from typing import Union

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from components.core.init_db import db_manager, get_db
from components.deposit.repository import AnlageRepository
from components.setup import schemas
from components.setup.seed import seed_demo_data
from components.user.repository import UserRepository

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/setup",
    tags=["setup"],
)


@router.post("", response_model=schemas.SetupResult)
async def initialize_database(db: AsyncSession = Depends(get_db)):
    """Create missing tables and seed demo data into an empty database."""
    await db_manager.create_tables()
    return await seed_demo_data(db)


@router.get("", response_model=Union[schemas.SetupStatus, schemas.SetupResult])
async def database_status(db: AsyncSession = Depends(get_db)):
    """Report database readiness; an empty database is set up on the fly."""
    await db_manager.create_tables()
    user_count = await UserRepository(db).count()
    if user_count == 0:
        logger.info("Database is empty, seeding demo data")
        result = await seed_demo_data(db)
        result.auto_setup = True
        return result

    return schemas.SetupStatus(
        status="Database ready",
        users=user_count,
        anlagen=await AnlageRepository(db).count(),
    )
