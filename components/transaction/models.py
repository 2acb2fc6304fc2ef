"""Transaction model for the database."""

import enum

from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, Numeric, Enum
from sqlalchemy.orm import relationship

from components.core.database import Base, enum_values, utcnow


class TransaktionTyp(str, enum.Enum):
    EINZAHLUNG = "einzahlung"
    AUSZAHLUNG = "auszahlung"
    ZINSGUTSCHRIFT = "zinsgutschrift"


class Transaktion(Base):
    """Ledger entry. Rows are only ever inserted."""
    __tablename__ = "transaktionen"

    id = Column(Integer, primary_key=True, index=True)
    anlage_id = Column(Integer, ForeignKey("festgeld_anlagen.id", ondelete="CASCADE"), nullable=True, index=True)
    user_id = Column(String(25), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    typ = Column(
        Enum(TransaktionTyp, values_callable=enum_values, native_enum=False, length=20),
        nullable=False,
    )
    betrag = Column(Numeric(12, 2), nullable=False)
    datum = Column(DateTime, nullable=False, default=utcnow)
    beschreibung = Column(Text, nullable=True)

    # Relationships
    user = relationship("User", back_populates="transaktionen")
    anlage = relationship("FestgeldAnlage", back_populates="transaktionen")
