"""Pydantic schemas for transaction data validation."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from components.transaction.models import TransaktionTyp
from components.user.schemas import UserSummary


class TransaktionCreate(BaseModel):
    """Schema for manual transaction booking by an administrator."""
    user_id: str
    typ: TransaktionTyp
    betrag: float = Field(..., gt=0, allow_inf_nan=False)
    anlage_id: Optional[int] = None
    beschreibung: Optional[str] = Field(None, max_length=500)


class Transaktion(BaseModel):
    """Schema for transaction response."""
    id: int
    anlage_id: Optional[int] = None
    user_id: str
    typ: TransaktionTyp
    betrag: float
    datum: datetime
    beschreibung: Optional[str] = None

    class Config:
        from_attributes = True


class TransaktionWithUser(Transaktion):
    user: Optional[UserSummary] = None
