"""Transaction endpoints for the API."""

from typing import List, Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from components.core.init_db import get_db
from components.transaction.repository import TransaktionRepository
from components.transaction import schemas
from components.user.models import User
from restapi.endpoints.auth import get_current_admin, get_current_user

router = APIRouter(
    prefix="/transaktionen",
    tags=["transaktionen"],
)


@router.get("/", response_model=List[schemas.TransaktionWithUser])
async def read_transaktionen(
    user_id: Optional[str] = Query(None, description="Only transactions of this user (administrators)"),
    limit: Optional[int] = Query(None, ge=1, le=1000, description="Maximum number of records"),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Get transactions, newest first. Customers only see their own."""
    if not current_user.is_admin:
        user_id = current_user.id
    repo = TransaktionRepository(db)
    return await repo.get_all(user_id=user_id, limit=limit)


@router.post("/", response_model=schemas.TransaktionWithUser, status_code=status.HTTP_201_CREATED)
async def create_transaktion(
    transaktion: schemas.TransaktionCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_admin)
):
    """Book a manual transaction, for example an interest credit."""
    repo = TransaktionRepository(db)
    return await repo.create(transaktion)
