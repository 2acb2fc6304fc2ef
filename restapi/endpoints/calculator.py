"""Interest calculator endpoint."""

from fastapi import APIRouter

from components.deposit import interest
from components.deposit import schemas

router = APIRouter(
    prefix="/zinsrechner",
    tags=["zinsrechner"],
)


@router.post("/", response_model=schemas.InterestCalculation)
async def calculate(terms: schemas.AnlageTerms) -> schemas.InterestCalculation:
    """
    Calculate the yield of a fixed-term deposit.

    Returns interest, final amount, average monthly interest, the total
    return in percent of the principal and a monthly accrual table for the
    first 24 months.
    """
    zinsbetrag, endbetrag = interest.calculate_interest(terms.betrag, terms.zinssatz, terms.laufzeit_monate)
    schedule = interest.accrual_schedule(terms.betrag, terms.zinssatz, terms.laufzeit_monate)
    return schemas.InterestCalculation(
        betrag=terms.betrag,
        zinssatz=terms.zinssatz,
        laufzeit_monate=terms.laufzeit_monate,
        zinsbetrag=float(zinsbetrag),
        endbetrag=float(endbetrag),
        monatliche_zinsen=float(interest.monthly_interest(terms.betrag, terms.zinssatz, terms.laufzeit_monate)),
        rendite_prozent=float(interest.total_return_percent(terms.betrag, terms.zinssatz, terms.laufzeit_monate)),
        monatsuebersicht=[schemas.MonthlyAccrual(**row._asdict()) for row in schedule],
    )
