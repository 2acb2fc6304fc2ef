"""Repository for fixed-term deposit operations."""

import logging
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from components.core.exceptions import (
    ActiveDepositDeleteError,
    DepositClosedError,
    DepositNotFoundError,
    UserNotFoundError,
)
from components.deposit import interest
from components.deposit.models import FestgeldAnlage, AnlageStatus
from components.deposit.schemas import AnlageCreate, AnlageUpdate
from components.transaction.models import TransaktionTyp
from components.transaction.repository import TransaktionRepository
from components.user.models import User

logger = logging.getLogger(__name__)


def payout_description(anlage_id: int, status: AnlageStatus) -> str:
    prefix = "vorzeitig " if status == AnlageStatus.VORZEITIG_BEENDET else ""
    return f"Auszahlung der {prefix}beendeten Festgeldanlage #{anlage_id}"


class AnlageRepository:
    """
    Repository for deposits and their lifecycle.

    A deposit starts as ``aktiv`` and may move once to ``beendet`` or
    ``vorzeitig_beendet``. Creation books the principal as an
    ``einzahlung``; termination books the final amount as an
    ``auszahlung``. Each side effect is committed together with the change
    that caused it.
    """

    def __init__(self, session: AsyncSession):
        """Initialize repository with database session."""
        self.session = session
        self.transaktionen = TransaktionRepository(session)

    async def create(self, data: AnlageCreate) -> FestgeldAnlage:
        """Open a deposit and record its deposit transaction."""
        owner = await self.session.execute(select(User.id).where(User.id == data.user_id))
        if owner.scalar_one_or_none() is None:
            raise UserNotFoundError(data.user_id)

        # Schema validation limits both to their column scale, so nothing is rounded away
        betrag = interest.to_decimal(data.betrag)
        zinssatz = interest.to_decimal(data.zinssatz)
        zinsbetrag, endbetrag = interest.calculate_interest(betrag, zinssatz, data.laufzeit_monate)
        anlage = FestgeldAnlage(
            user_id=data.user_id,
            betrag=betrag,
            zinssatz=zinssatz,
            laufzeit_monate=data.laufzeit_monate,
            start_datum=data.start_datum,
            end_datum=interest.calculate_end_date(data.start_datum, data.laufzeit_monate),
            zinsbetrag=zinsbetrag,
            endbetrag=endbetrag,
            status=AnlageStatus.AKTIV,
        )
        self.session.add(anlage)
        await self.session.flush()

        self.transaktionen.record(
            user_id=anlage.user_id,
            anlage_id=anlage.id,
            typ=TransaktionTyp.EINZAHLUNG,
            betrag=anlage.betrag,
            beschreibung=f"Einzahlung für Festgeldanlage #{anlage.id}",
        )
        await self.session.commit()
        logger.info(
            "Created Festgeldanlage #%s for user %s: %s @ %s%% for %s months",
            anlage.id, anlage.user_id, anlage.betrag, anlage.zinssatz, anlage.laufzeit_monate,
        )
        return await self.get_by_id(anlage.id)

    async def get_by_id(self, anlage_id: int, with_transactions: bool = False) -> Optional[FestgeldAnlage]:
        """Get deposit by ID with its owner (and optionally its transactions)."""
        options = [selectinload(FestgeldAnlage.user)]
        if with_transactions:
            options.append(selectinload(FestgeldAnlage.transaktionen))
        result = await self.session.execute(
            select(FestgeldAnlage)
            .options(*options)
            .where(FestgeldAnlage.id == anlage_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def get_all(self, user_id: Optional[str] = None, limit: Optional[int] = None) -> List[FestgeldAnlage]:
        """Get deposits newest first, optionally for a single user."""
        query = select(FestgeldAnlage).options(selectinload(FestgeldAnlage.user))
        if user_id:
            query = query.where(FestgeldAnlage.user_id == user_id)
        query = query.order_by(FestgeldAnlage.created_at.desc(), FestgeldAnlage.id.desc())
        if limit:
            query = query.limit(limit)
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def get_recent(self, limit: int = 5) -> List[FestgeldAnlage]:
        return await self.get_all(limit=limit)

    async def update(self, anlage_id: int, data: AnlageUpdate) -> FestgeldAnlage:
        """
        Update an active deposit.

        End date is recomputed when start date or term change; interest and
        final amount when principal, rate or term change. Moving the deposit
        into a terminal status books one payout of the final amount.
        """
        anlage = await self.get_by_id(anlage_id)
        if not anlage:
            raise DepositNotFoundError(anlage_id)
        if anlage.status != AnlageStatus.AKTIV:
            raise DepositClosedError(anlage_id)

        changes = data.model_dump(exclude_unset=True, exclude_none=True)

        if "betrag" in changes:
            anlage.betrag = interest.to_decimal(changes["betrag"])
        if "zinssatz" in changes:
            anlage.zinssatz = interest.to_decimal(changes["zinssatz"])
        if "laufzeit_monate" in changes:
            anlage.laufzeit_monate = changes["laufzeit_monate"]
        if "start_datum" in changes:
            anlage.start_datum = changes["start_datum"]

        if changes.keys() & {"start_datum", "laufzeit_monate"}:
            anlage.end_datum = interest.calculate_end_date(anlage.start_datum, anlage.laufzeit_monate)
        if changes.keys() & {"betrag", "zinssatz", "laufzeit_monate"}:
            anlage.zinsbetrag, anlage.endbetrag = interest.calculate_interest(
                anlage.betrag, anlage.zinssatz, anlage.laufzeit_monate
            )

        new_status = changes.get("status")
        if new_status is not None and new_status.is_terminal:
            anlage.status = new_status
            self.transaktionen.record(
                user_id=anlage.user_id,
                anlage_id=anlage.id,
                typ=TransaktionTyp.AUSZAHLUNG,
                betrag=anlage.endbetrag,
                beschreibung=payout_description(anlage.id, new_status),
            )
            logger.info(
                "Festgeldanlage #%s %s, payout %s", anlage.id, new_status.value, anlage.endbetrag
            )

        await self.session.commit()
        return await self.get_by_id(anlage_id)

    async def delete(self, anlage_id: int) -> None:
        """Delete a terminated deposit together with its transactions."""
        anlage = await self.get_by_id(anlage_id)
        if not anlage:
            raise DepositNotFoundError(anlage_id)
        if anlage.status == AnlageStatus.AKTIV:
            raise ActiveDepositDeleteError(anlage_id)

        await self.session.delete(anlage)
        await self.session.commit()
        logger.info("Deleted Festgeldanlage #%s", anlage_id)

    async def count(self, status: Optional[AnlageStatus] = None) -> int:
        query = select(func.count(FestgeldAnlage.id))
        if status is not None:
            query = query.where(FestgeldAnlage.status == status)
        result = await self.session.execute(query)
        return result.scalar_one()

    async def total_invested(self) -> Decimal:
        result = await self.session.execute(select(func.sum(FestgeldAnlage.betrag)))
        return interest.round_amount(result.scalar() or 0)
