"""Pydantic schemas for deposit data validation."""

from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from components.deposit import interest
from components.deposit.models import AnlageStatus
from components.transaction.schemas import Transaktion
from components.user.schemas import UserSummary

# Upper limits accepted in forms and the calculator
MAX_ZINSSATZ = 100
MAX_LAUFZEIT_MONATE = 600


def check_precision(value: Optional[float], step, message: str) -> Optional[float]:
    if value is not None and not interest.fits_scale(value, step):
        raise ValueError(message)
    return value


class TermsPrecision(BaseModel):
    """Amounts in cents, rates with at most four decimal places."""

    @field_validator("betrag", check_fields=False)
    @classmethod
    def check_betrag(cls, value):
        return check_precision(value, interest.CENT, "Höchstens zwei Nachkommastellen erlaubt")

    @field_validator("zinssatz", check_fields=False)
    @classmethod
    def check_zinssatz(cls, value):
        return check_precision(value, interest.RATE_STEP, "Höchstens vier Nachkommastellen erlaubt")


class AnlageTerms(TermsPrecision):
    """Principal, rate and term as entered in forms and the calculator."""
    betrag: float = Field(..., gt=0, allow_inf_nan=False, description="Principal amount")
    zinssatz: float = Field(..., ge=0, le=MAX_ZINSSATZ, allow_inf_nan=False, description="Annual interest rate in percent")
    laufzeit_monate: int = Field(..., gt=0, le=MAX_LAUFZEIT_MONATE, description="Term in months")


class AnlageCreate(AnlageTerms):
    """Schema for deposit creation."""
    user_id: str
    start_datum: date


class AnlageUpdate(TermsPrecision):
    """Schema for deposit update; every field is optional."""
    betrag: Optional[float] = Field(None, gt=0, allow_inf_nan=False)
    zinssatz: Optional[float] = Field(None, ge=0, le=MAX_ZINSSATZ, allow_inf_nan=False)
    laufzeit_monate: Optional[int] = Field(None, gt=0, le=MAX_LAUFZEIT_MONATE)
    start_datum: Optional[date] = None
    status: Optional[AnlageStatus] = None


class Anlage(BaseModel):
    """Schema for deposit response."""
    id: int
    user_id: str
    betrag: float
    zinssatz: float
    laufzeit_monate: int
    start_datum: date
    end_datum: date
    zinsbetrag: float
    endbetrag: float
    status: AnlageStatus
    created_at: datetime
    updated_at: datetime
    user: Optional[UserSummary] = None

    class Config:
        from_attributes = True


class AnlageDetail(Anlage):
    """Deposit with its transactions, newest first."""
    transaktionen: List[Transaktion] = []


class MonthlyAccrual(BaseModel):
    monat: int
    zinsen_monat: float
    zinsen_gesamt: float
    kontostand: float


class InterestCalculation(BaseModel):
    """Schema for calculator response."""
    betrag: float
    zinssatz: float
    laufzeit_monate: int
    zinsbetrag: float
    endbetrag: float
    monatliche_zinsen: float
    rendite_prozent: float
    monatsuebersicht: List[MonthlyAccrual]
