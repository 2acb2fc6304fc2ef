"""Repository for dashboard aggregations."""

from datetime import date
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from components.dashboard import schemas
from components.deposit.interest import round_amount, term_progress
from components.deposit.models import AnlageStatus
from components.deposit.repository import AnlageRepository
from components.deposit.schemas import Anlage
from components.transaction.repository import TransaktionRepository
from components.transaction.schemas import Transaktion
from components.user.repository import UserRepository
from components.user.schemas import User

RECENT_ITEMS = 5


class DashboardRepository:
    """Read-only summaries over users, deposits and transactions."""

    def __init__(self, session: AsyncSession):
        """Initialize repository with database session."""
        self.session = session
        self.users = UserRepository(session)
        self.anlagen = AnlageRepository(session)
        self.transaktionen = TransaktionRepository(session)

    async def get_user_dashboard(self, user_id: str, today: Optional[date] = None) -> schemas.UserDashboard:
        """
        Overview for one customer.

        Returns:
        - Total principal and total interest over all deposits
        - Number of active deposits and of all deposits
        - Every deposit with the elapsed share of its term
        - The latest transactions
        """
        today = today or date.today()
        anlagen = await self.anlagen.get_all(user_id=user_id)
        transaktionen = await self.transaktionen.get_all(user_id=user_id, limit=RECENT_ITEMS)

        progress = [
            schemas.AnlageProgress(
                **Anlage.model_validate(anlage).model_dump(),
                fortschritt_prozent=term_progress(anlage.start_datum, anlage.end_datum, today),
            )
            for anlage in anlagen
        ]

        return schemas.UserDashboard(
            gesamt_investiert=float(round_amount(sum(anlage.betrag for anlage in anlagen))),
            gesamt_zinsen=float(round_amount(sum(anlage.zinsbetrag for anlage in anlagen))),
            aktive_anlagen=sum(1 for anlage in anlagen if anlage.status == AnlageStatus.AKTIV),
            anlagen_gesamt=len(anlagen),
            anlagen=progress,
            letzte_transaktionen=[Transaktion.model_validate(t) for t in transaktionen],
        )

    async def get_admin_dashboard(self) -> schemas.AdminDashboard:
        """Bank-wide totals plus the most recent users and deposits."""
        recent_users = await self.users.get_recent(RECENT_ITEMS)
        recent_anlagen = await self.anlagen.get_recent(RECENT_ITEMS)

        return schemas.AdminDashboard(
            benutzer_gesamt=await self.users.count(),
            administratoren=await self.users.count_admins(),
            gesamt_investiert=float(await self.anlagen.total_invested()),
            aktive_anlagen=await self.anlagen.count(AnlageStatus.AKTIV),
            anlagen_gesamt=await self.anlagen.count(),
            transaktionen_gesamt=await self.transaktionen.count(),
            einzahlungsvolumen=float(await self.transaktionen.volume()),
            neueste_benutzer=[User.model_validate(user) for user in recent_users],
            neueste_anlagen=[Anlage.model_validate(anlage) for anlage in recent_anlagen],
        )
