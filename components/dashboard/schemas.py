"""Pydantic schemas for dashboard summaries."""

from typing import List

from pydantic import BaseModel

from components.deposit.schemas import Anlage
from components.transaction.schemas import Transaktion
from components.user.schemas import User


class AnlageProgress(Anlage):
    """Deposit with the elapsed share of its term."""
    fortschritt_prozent: float


class UserDashboard(BaseModel):
    """Schema for the customer overview."""
    gesamt_investiert: float
    gesamt_zinsen: float
    aktive_anlagen: int
    anlagen_gesamt: int
    anlagen: List[AnlageProgress]
    letzte_transaktionen: List[Transaktion]


class AdminDashboard(BaseModel):
    """Schema for the administrator overview."""
    benutzer_gesamt: int
    administratoren: int
    gesamt_investiert: float
    aktive_anlagen: int
    anlagen_gesamt: int
    transaktionen_gesamt: int
    einzahlungsvolumen: float
    neueste_benutzer: List[User]
    neueste_anlagen: List[Anlage]
