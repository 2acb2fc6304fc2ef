"""User endpoints for the API."""

from typing import List
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from components.core.exceptions import PermissionDeniedError, UserNotFoundError
from components.core.init_db import get_db
from components.core.schemas import Message
from components.user.repository import UserRepository
from components.user import schemas
from components.user.models import User
from restapi.endpoints.auth import get_current_admin, get_current_user

router = APIRouter(
    prefix="/users",
    tags=["users"],
    responses={404: {"description": "Not found"}},
)


def ensure_self_or_admin(user_id: str, current_user: User) -> None:
    if not current_user.is_admin and current_user.id != user_id:
        raise PermissionDeniedError("Zugriff verweigert")


async def user_detail(repo: UserRepository, user: User) -> schemas.UserDetail:
    stats = await repo.get_stats(user.id)
    return schemas.UserDetail(**schemas.User.model_validate(user).model_dump(), stats=stats)


@router.get("/", response_model=List[schemas.User])
async def read_users(
    skip: int = Query(0, ge=0, description="Number of records to skip"),
    limit: int = Query(100, ge=1, le=500, description="Number of records to return"),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_admin)
):
    """Get list of users, newest first."""
    repo = UserRepository(db)
    return await repo.get_all(skip=skip, limit=limit)


@router.post("/", response_model=schemas.User, status_code=status.HTTP_201_CREATED)
async def create_user(
    user: schemas.UserCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_admin)
):
    """
    Create a new user.

    Without a password the configured default password is set; without an
    account number one is generated.
    """
    repo = UserRepository(db)
    return await repo.create(user)


@router.get("/{user_id}", response_model=schemas.UserDetail)
async def read_user(
    user_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Get a specific user by ID with deposit and transaction counts."""
    ensure_self_or_admin(user_id, current_user)
    repo = UserRepository(db)
    user = await repo.get_by_id(user_id)
    if user is None:
        raise UserNotFoundError(user_id)
    return await user_detail(repo, user)


@router.put("/{user_id}", response_model=schemas.User)
async def update_user(
    user_id: str,
    user: schemas.UserUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Update a user. Customers may edit their own profile only."""
    ensure_self_or_admin(user_id, current_user)
    repo = UserRepository(db)
    return await repo.update(user_id, user, allow_privileged=current_user.is_admin)


@router.delete("/{user_id}", response_model=Message)
async def delete_user(
    user_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_admin)
):
    """
    Delete a user with all deposits and transactions.

    Fails with 409 for the last administrator and for users who still own
    an active deposit.
    """
    repo = UserRepository(db)
    await repo.delete(user_id)
    return Message(message="Benutzer erfolgreich gelöscht")
