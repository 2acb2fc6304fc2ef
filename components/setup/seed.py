"""Demo data for a fresh installation."""

import logging
from datetime import date, datetime

from sqlalchemy.ext.asyncio import AsyncSession

from components.core.security import get_password_hash
from components.deposit import interest
from components.deposit.models import FestgeldAnlage, AnlageStatus
from components.setup import schemas
from components.transaction.models import Transaktion, TransaktionTyp
from components.user.models import User, Role, KycStatus
from components.user.repository import UserRepository
from components.user.utils import generate_account_number

logger = logging.getLogger(__name__)

DEMO_CREDENTIALS = {
    "admin": "admin@onlinekonto.de / admin123",
    "user": "user@onlinekonto.de / user123",
    "pending": "thomas@onlinekonto.de / demo123",
}

# (betrag, zinssatz, laufzeit_monate, start_datum)
DEMO_ANLAGEN = [
    (10000, 3.5, 12, date(2024, 1, 1)),
    (25000, 4.2, 24, date(2024, 6, 1)),
]


def _demo_users():
    admin = User(
        name="Administrator",
        email="admin@onlinekonto.de",
        password=get_password_hash("admin123"),
        role=Role.ADMIN,
        account_number=generate_account_number(),
        kyc_status=KycStatus.VERIFIED,
        street="Hauptstraße 1",
        postal_code="10115",
        city="Berlin",
        country="Deutschland",
        reference_iban="DE89370400440532013000",
        reference_bic="COBADEFFXXX",
        reference_bank_name="Commerzbank AG",
    )
    customer = User(
        name="Max Mustermann",
        email="user@onlinekonto.de",
        password=get_password_hash("user123"),
        role=Role.USER,
        account_number=generate_account_number(),
        kyc_status=KycStatus.VERIFIED,
        street="Musterstraße 123",
        postal_code="80331",
        city="München",
        country="Deutschland",
        reference_iban="DE89370400440532013001",
        reference_bic="COBADEFFXXX",
        reference_bank_name="Deutsche Bank AG",
    )
    pending = User(
        name="Thomas Weber",
        email="thomas@onlinekonto.de",
        password=get_password_hash("demo123"),
        role=Role.USER,
        account_number=generate_account_number(),
        kyc_status=KycStatus.PENDING,
        street="Testweg 456",
        postal_code="22767",
        city="Hamburg",
        country="Deutschland",
    )
    return admin, customer, pending


async def seed_demo_data(session: AsyncSession) -> schemas.SetupResult:
    """Insert demo users, deposits and their deposit transactions unless users exist."""
    users = UserRepository(session)
    existing = await users.count()
    if existing > 0:
        return schemas.SetupResult(
            message="Database is already initialized",
            users=existing,
            already_setup=True,
        )

    logger.info("Seeding database with demo data")
    admin, customer, pending = _demo_users()
    session.add_all([admin, customer, pending])
    await session.flush()

    for betrag, zinssatz, laufzeit, start in DEMO_ANLAGEN:
        zinsbetrag, endbetrag = interest.calculate_interest(betrag, zinssatz, laufzeit)
        anlage = FestgeldAnlage(
            user_id=customer.id,
            betrag=interest.to_decimal(betrag),
            zinssatz=interest.to_decimal(zinssatz),
            laufzeit_monate=laufzeit,
            start_datum=start,
            end_datum=interest.calculate_end_date(start, laufzeit),
            zinsbetrag=zinsbetrag,
            endbetrag=endbetrag,
            status=AnlageStatus.AKTIV,
        )
        session.add(anlage)
        await session.flush()
        session.add(Transaktion(
            user_id=customer.id,
            anlage_id=anlage.id,
            typ=TransaktionTyp.EINZAHLUNG,
            betrag=anlage.betrag,
            datum=datetime.combine(start, datetime.min.time()),
            beschreibung=f"Festgeldanlage {laufzeit} Monate",
        ))

    await session.commit()
    logger.info("Database initialized with demo data")
    return schemas.SetupResult(
        message="Database initialized successfully!",
        tables_created=True,
        users=3,
        anlagen=len(DEMO_ANLAGEN),
        transaktionen=len(DEMO_ANLAGEN),
        credentials=DEMO_CREDENTIALS,
    )
