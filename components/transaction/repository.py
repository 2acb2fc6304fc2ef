"""Repository for transaction operations."""

import logging
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from components.core.exceptions import DepositNotFoundError, InvalidInputError, UserNotFoundError
from components.deposit.interest import round_amount
from components.deposit.models import FestgeldAnlage
from components.transaction.models import Transaktion, TransaktionTyp
from components.transaction.schemas import TransaktionCreate
from components.user.models import User

logger = logging.getLogger(__name__)


class TransaktionRepository:
    """Repository for the insert-only transaction ledger."""

    def __init__(self, session: AsyncSession):
        """Initialize repository with database session."""
        self.session = session

    def record(
        self,
        user_id: str,
        typ: TransaktionTyp,
        betrag,
        beschreibung: Optional[str] = None,
        anlage_id: Optional[int] = None,
    ) -> Transaktion:
        """Add a ledger entry to the current unit of work without committing."""
        transaktion = Transaktion(
            user_id=user_id,
            anlage_id=anlage_id,
            typ=typ,
            betrag=round_amount(betrag),
            beschreibung=beschreibung,
        )
        self.session.add(transaktion)
        return transaktion

    async def create(self, data: TransaktionCreate) -> Transaktion:
        """Book a manual transaction, e.g. an interest credit."""
        user_exists = await self.session.execute(select(User.id).where(User.id == data.user_id))
        if user_exists.scalar_one_or_none() is None:
            raise UserNotFoundError(data.user_id)

        if data.anlage_id is not None:
            result = await self.session.execute(
                select(FestgeldAnlage.user_id).where(FestgeldAnlage.id == data.anlage_id)
            )
            owner_id = result.scalar_one_or_none()
            if owner_id is None:
                raise DepositNotFoundError(data.anlage_id)
            if owner_id != data.user_id:
                raise InvalidInputError(
                    "Die Anlage gehört nicht zu diesem Benutzer",
                    details={"anlage_id": data.anlage_id, "user_id": data.user_id},
                )

        transaktion = self.record(
            user_id=data.user_id,
            typ=data.typ,
            betrag=data.betrag,
            beschreibung=data.beschreibung,
            anlage_id=data.anlage_id,
        )
        await self.session.commit()
        logger.info("Booked %s transaction %s for user %s", data.typ.value, transaktion.id, data.user_id)
        return await self.get_by_id(transaktion.id)

    async def get_by_id(self, transaktion_id: int) -> Optional[Transaktion]:
        result = await self.session.execute(
            select(Transaktion)
            .options(selectinload(Transaktion.user))
            .where(Transaktion.id == transaktion_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def get_all(self, user_id: Optional[str] = None, limit: Optional[int] = None) -> List[Transaktion]:
        """Get transactions newest first, optionally for a single user."""
        query = select(Transaktion).options(selectinload(Transaktion.user))
        if user_id:
            query = query.where(Transaktion.user_id == user_id)
        query = query.order_by(Transaktion.datum.desc(), Transaktion.id.desc())
        if limit:
            query = query.limit(limit)
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def count(self) -> int:
        result = await self.session.execute(select(func.count(Transaktion.id)))
        return result.scalar_one()

    async def volume(self, typ: TransaktionTyp = TransaktionTyp.EINZAHLUNG) -> Decimal:
        """Sum of all transactions of one type."""
        result = await self.session.execute(
            select(func.sum(Transaktion.betrag)).where(Transaktion.typ == typ)
        )
        return round_amount(result.scalar() or 0)
