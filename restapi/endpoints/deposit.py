"""Fixed-term deposit endpoints for the API."""

from typing import List, Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from components.core.exceptions import DepositNotFoundError, PermissionDeniedError
from components.core.init_db import get_db
from components.core.schemas import Message
from components.deposit.repository import AnlageRepository
from components.deposit import schemas
from components.user.models import User
from restapi.endpoints.auth import get_current_admin, get_current_user

router = APIRouter(
    prefix="/anlagen",
    tags=["anlagen"],
    responses={404: {"description": "Not found"}},
)


@router.get("/", response_model=List[schemas.Anlage])
async def read_anlagen(
    user_id: Optional[str] = Query(None, description="Only deposits of this user (administrators)"),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Get deposits, newest first. Customers only see their own."""
    if not current_user.is_admin:
        user_id = current_user.id
    repo = AnlageRepository(db)
    return await repo.get_all(user_id=user_id)


@router.post("/", response_model=schemas.Anlage, status_code=status.HTTP_201_CREATED)
async def create_anlage(
    anlage: schemas.AnlageCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_admin)
):
    """
    Open a deposit for a user.

    End date, interest and final amount are computed; the principal is
    booked as a deposit transaction.
    """
    repo = AnlageRepository(db)
    return await repo.create(anlage)


@router.get("/{anlage_id}", response_model=schemas.AnlageDetail)
async def read_anlage(
    anlage_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Get a deposit with its transactions, newest first."""
    repo = AnlageRepository(db)
    anlage = await repo.get_by_id(anlage_id, with_transactions=True)
    if anlage is None:
        raise DepositNotFoundError(anlage_id)
    if not current_user.is_admin and anlage.user_id != current_user.id:
        raise PermissionDeniedError("Zugriff verweigert")
    return anlage


@router.put("/{anlage_id}", response_model=schemas.Anlage)
async def update_anlage(
    anlage_id: int,
    anlage: schemas.AnlageUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_admin)
):
    """
    Update an active deposit.

    Terminated deposits cannot be edited (409). Setting status to
    ``beendet`` or ``vorzeitig_beendet`` books the payout.
    """
    repo = AnlageRepository(db)
    return await repo.update(anlage_id, anlage)


@router.delete("/{anlage_id}", response_model=Message)
async def delete_anlage(
    anlage_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_admin)
):
    """Delete a terminated deposit; active deposits are refused with 409."""
    repo = AnlageRepository(db)
    await repo.delete(anlage_id)
    return Message(message="Anlage erfolgreich gelöscht")
