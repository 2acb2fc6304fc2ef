"""User model for the database."""

import enum

from sqlalchemy import Column, String, DateTime, Enum
from sqlalchemy.orm import relationship

from components.core.database import Base, enum_values, utcnow
from components.user.utils import generate_user_id


class Role(str, enum.Enum):
    USER = "user"
    ADMIN = "admin"


class KycStatus(str, enum.Enum):
    PENDING = "pending"
    VERIFIED = "verified"
    REJECTED = "rejected"
    INCOMPLETE = "incomplete"


class User(Base):
    """User model representing a bank customer or administrator."""
    __tablename__ = "users"

    id = Column(String(25), primary_key=True, default=generate_user_id)
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password = Column(String(255), nullable=False)  # Hashed password
    role = Column(
        Enum(Role, values_callable=enum_values, native_enum=False, length=10),
        nullable=False,
        default=Role.USER,
    )

    # Banking information
    account_number = Column(String(32), unique=True, nullable=False)
    kyc_status = Column(
        Enum(KycStatus, values_callable=enum_values, native_enum=False, length=20),
        nullable=False,
        default=KycStatus.PENDING,
    )

    # Address
    street = Column(String(255), nullable=True)
    postal_code = Column(String(20), nullable=True)
    city = Column(String(100), nullable=True)
    country = Column(String(100), nullable=True, default="Deutschland")

    # Reference account for payouts
    reference_iban = Column(String(34), nullable=True)
    reference_bic = Column(String(11), nullable=True)
    reference_bank_name = Column(String(255), nullable=True)

    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    anlagen = relationship(
        "FestgeldAnlage",
        back_populates="user",
        cascade="all, delete-orphan",
    )
    transaktionen = relationship(
        "Transaktion",
        back_populates="user",
        cascade="all, delete-orphan",
    )

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN
