"""Fixed-term deposit model for the database."""

import enum

from sqlalchemy import Column, Integer, String, Date, DateTime, ForeignKey, Numeric, Enum
from sqlalchemy.orm import relationship

from components.core.database import Base, enum_values, utcnow


class AnlageStatus(str, enum.Enum):
    AKTIV = "aktiv"
    BEENDET = "beendet"
    VORZEITIG_BEENDET = "vorzeitig_beendet"

    @property
    def is_terminal(self) -> bool:
        return self is not AnlageStatus.AKTIV


class FestgeldAnlage(Base):
    """Fixed-term deposit ("Festgeldanlage") owned by a user."""
    __tablename__ = "festgeld_anlagen"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String(25), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    betrag = Column(Numeric(12, 2), nullable=False)  # Principal
    zinssatz = Column(Numeric(7, 4), nullable=False)  # Annual rate in percent
    laufzeit_monate = Column(Integer, nullable=False)
    start_datum = Column(Date, nullable=False)
    end_datum = Column(Date, nullable=False)
    zinsbetrag = Column(Numeric(12, 2), nullable=False)
    endbetrag = Column(Numeric(12, 2), nullable=False)
    status = Column(
        Enum(AnlageStatus, values_callable=enum_values, native_enum=False, length=20),
        nullable=False,
        default=AnlageStatus.AKTIV,
    )
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    # Relationships
    user = relationship("User", back_populates="anlagen")
    transaktionen = relationship(
        "Transaktion",
        back_populates="anlage",
        cascade="all, delete-orphan",
        order_by="desc(Transaktion.datum)",
    )
