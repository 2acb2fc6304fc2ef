"""Dashboard endpoints for customers and administrators."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from components.core.init_db import get_db
from components.dashboard.repository import DashboardRepository
from components.dashboard import schemas
from components.user.models import User
from restapi.endpoints.auth import get_current_admin, get_current_user

router = APIRouter(tags=["dashboard"])


@router.get("/dashboard", response_model=schemas.UserDashboard)
async def get_user_dashboard(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    Overview of the logged in customer.

    Returns:
    - Total invested amount and total interest
    - Number of active deposits and of all deposits
    - Each deposit with the elapsed share of its term
    - The five latest transactions
    """
    repo = DashboardRepository(db)
    return await repo.get_user_dashboard(current_user.id)


@router.get("/admin/dashboard", response_model=schemas.AdminDashboard)
async def get_admin_dashboard(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_admin)
):
    """Bank-wide totals with the most recent users and deposits."""
    repo = DashboardRepository(db)
    return await repo.get_admin_dashboard()
