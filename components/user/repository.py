"""Repository for user operations."""

import logging
from typing import List, Optional

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from components.core.config import get_settings
from components.core.exceptions import (
    ActiveDepositsError,
    ConflictError,
    EmailTakenError,
    LastAdminError,
    PermissionDeniedError,
    UserNotFoundError,
)
from components.core.security import get_password_hash, verify_password
from components.deposit.models import FestgeldAnlage, AnlageStatus
from components.transaction.models import Transaktion
from components.user.models import User, Role
from components.user.schemas import UserCreate, UserUpdate, UserStats
from components.user.utils import generate_account_number

logger = logging.getLogger(__name__)
settings = get_settings()

# Only administrators may change these
PRIVILEGED_FIELDS = ("role", "kyc_status", "account_number")
# Profile fields that may be cleared by sending an empty value
CLEARABLE_FIELDS = (
    "street",
    "postal_code",
    "city",
    "country",
    "reference_iban",
    "reference_bic",
    "reference_bank_name",
)


class UserRepository:
    """Repository for user operations."""

    def __init__(self, session: AsyncSession):
        """Initialize repository with database session."""
        self.session = session

    async def create(self, user: UserCreate) -> User:
        """Create a new user; the password falls back to the configured default."""
        if await self.exists(user.email):
            raise EmailTakenError(user.email)
        if user.account_number and await self._account_number_taken(user.account_number):
            raise ConflictError("Diese Kontonummer wird bereits verwendet")

        db_user = User(
            name=user.name,
            email=user.email,
            password=get_password_hash(user.password or settings.DEFAULT_PASSWORD),
            role=user.role,
            account_number=user.account_number or await self._new_account_number(),
            kyc_status=user.kyc_status,
            street=user.street,
            postal_code=user.postal_code,
            city=user.city,
            country=user.country or "Deutschland",
            reference_iban=user.reference_iban,
            reference_bic=user.reference_bic,
            reference_bank_name=user.reference_bank_name,
        )
        self.session.add(db_user)
        await self.session.commit()
        await self.session.refresh(db_user)
        logger.info("Created user %s (%s)", db_user.id, db_user.role.value)
        return db_user

    async def get_by_id(self, user_id: str) -> Optional[User]:
        """Get user by ID."""
        result = await self.session.execute(
            select(User).where(User.id == user_id)
        )
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by e-mail, case-insensitively."""
        result = await self.session.execute(
            select(User).where(User.email == email.strip().lower())
        )
        return result.scalar_one_or_none()

    async def get_all(self, skip: int = 0, limit: int = 100) -> List[User]:
        """Get all users, newest first."""
        query = (
            select(User)
            .order_by(User.created_at.desc(), User.id)
            .offset(skip)
            .limit(limit)
        )
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def get_recent(self, limit: int = 5) -> List[User]:
        return await self.get_all(limit=limit)

    async def update(self, user_id: str, user: UserUpdate, allow_privileged: bool = False) -> User:
        """
        Update user by ID.

        Only fields present in the payload are touched. Raises
        UserNotFoundError, EmailTakenError, or PermissionDeniedError when a
        non-administrator tries to change role, KYC status or account number.
        """
        db_user = await self.get_by_id(user_id)
        if not db_user:
            raise UserNotFoundError(user_id)

        changes = user.model_dump(exclude_unset=True)

        if not allow_privileged:
            forbidden = [
                field for field in PRIVILEGED_FIELDS
                if changes.get(field) is not None and changes[field] != getattr(db_user, field)
            ]
            if forbidden:
                raise PermissionDeniedError(
                    "Keine Berechtigung zum Ändern dieser Felder",
                    details={"fields": forbidden},
                )

        existing = await self.get_by_email(user.email)
        if existing and existing.id != user_id:
            raise EmailTakenError(user.email)

        account_number = changes.get("account_number")
        if account_number and account_number != db_user.account_number:
            if await self._account_number_taken(account_number):
                raise ConflictError("Diese Kontonummer wird bereits verwendet")

        db_user.name = user.name
        db_user.email = user.email
        for field in PRIVILEGED_FIELDS:
            if changes.get(field) is not None:
                setattr(db_user, field, changes[field])
        for field in CLEARABLE_FIELDS:
            if field in changes:
                setattr(db_user, field, changes[field])
        if user.password:
            db_user.password = get_password_hash(user.password)

        await self.session.commit()
        await self.session.refresh(db_user)
        return db_user

    async def delete(self, user_id: str) -> None:
        """
        Delete user by ID together with their deposits and transactions.

        The last administrator and users owning an active deposit are kept.
        """
        db_user = await self.get_by_id(user_id)
        if not db_user:
            raise UserNotFoundError(user_id)

        if db_user.role == Role.ADMIN and await self.count_admins() <= 1:
            raise LastAdminError()

        active_count = await self.count_active_deposits(user_id)
        if active_count > 0:
            raise ActiveDepositsError(user_id, active_count)

        await self.session.delete(db_user)
        await self.session.commit()
        logger.info("Deleted user %s", user_id)

    async def exists(self, email: str) -> bool:
        """Check if user with given e-mail exists."""
        result = await self.session.execute(
            select(User.id).where(User.email == email.strip().lower())
        )
        return result.scalar_one_or_none() is not None

    async def authenticate(self, email: str, password: str) -> Optional[User]:
        """Return the user when the credentials match."""
        user = await self.get_by_email(email)
        if not user or not verify_password(password, user.password):
            logger.warning("Failed login for %s", email)
            return None
        return user

    async def count(self) -> int:
        result = await self.session.execute(select(func.count(User.id)))
        return result.scalar_one()

    async def count_admins(self) -> int:
        result = await self.session.execute(
            select(func.count(User.id)).where(User.role == Role.ADMIN)
        )
        return result.scalar_one()

    async def count_active_deposits(self, user_id: str) -> int:
        result = await self.session.execute(
            select(func.count(FestgeldAnlage.id)).where(
                FestgeldAnlage.user_id == user_id,
                FestgeldAnlage.status == AnlageStatus.AKTIV,
            )
        )
        return result.scalar_one()

    async def get_stats(self, user_id: str) -> UserStats:
        """Number of deposits and transactions owned by the user."""
        anlagen = await self.session.execute(
            select(func.count(FestgeldAnlage.id)).where(FestgeldAnlage.user_id == user_id)
        )
        transaktionen = await self.session.execute(
            select(func.count(Transaktion.id)).where(Transaktion.user_id == user_id)
        )
        return UserStats(
            anlagen_count=anlagen.scalar_one(),
            transaktionen_count=transaktionen.scalar_one(),
        )

    async def _account_number_taken(self, account_number: str) -> bool:
        result = await self.session.execute(
            select(User.id).where(User.account_number == account_number)
        )
        return result.scalar_one_or_none() is not None

    async def _new_account_number(self) -> str:
        account_number = generate_account_number()
        while await self._account_number_taken(account_number):
            account_number = generate_account_number()
        return account_number
