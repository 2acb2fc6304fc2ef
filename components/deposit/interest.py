"""
Interest arithmetic for fixed-term deposits.

Deposits earn simple interest proportional to the term:

    zinsbetrag = betrag * zinssatz * laufzeit_monate / 1200
    endbetrag  = betrag + zinsbetrag

Amounts are rounded half-up to cents; rates carry up to four decimal
places and enter the formula unrounded. Nothing in this module touches the
database; input checks (positive principal and term, non-negative rate)
are the caller's job.
"""

from calendar import monthrange
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import List, NamedTuple, Union

Number = Union[int, float, str, Decimal]

CENT = Decimal("0.01")
RATE_STEP = Decimal("0.0001")
MONTHS_PER_YEAR_PERCENT = Decimal(1200)
MAX_BREAKDOWN_MONTHS = 24


class InterestResult(NamedTuple):
    zinsbetrag: Decimal
    endbetrag: Decimal


class MonthlyAccrual(NamedTuple):
    monat: int
    zinsen_monat: Decimal
    zinsen_gesamt: Decimal
    kontostand: Decimal


def to_decimal(value: Number) -> Decimal:
    if isinstance(value, Decimal):
        return value
    # str() keeps 3.5 as 3.5 instead of its binary float expansion
    return Decimal(str(value))


def round_amount(value: Number) -> Decimal:
    """Round to cents using standard (half-up) rounding."""
    return to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def fits_scale(value: Number, step: Decimal) -> bool:
    """True when ``value`` has no more decimal places than ``step``."""
    exact = to_decimal(value)
    return exact == exact.quantize(step, rounding=ROUND_HALF_UP)


def calculate_interest(betrag: Number, zinssatz: Number, laufzeit_monate: int) -> InterestResult:
    """Interest and final payout of a deposit, both rounded to cents."""
    principal = to_decimal(betrag)
    zinsbetrag = round_amount(principal * to_decimal(zinssatz) * laufzeit_monate / MONTHS_PER_YEAR_PERCENT)
    return InterestResult(zinsbetrag, round_amount(principal + zinsbetrag))


def calculate_end_date(start_datum: date, laufzeit_monate: int) -> date:
    """
    Add whole calendar months to a start date.

    The day of month is kept; when the target month is shorter the last day
    of that month is used (2024-01-31 + 1 month -> 2024-02-29).
    """
    total_month = (start_datum.month - 1) + laufzeit_monate
    year = start_datum.year + total_month // 12
    month = total_month % 12 + 1
    day = min(start_datum.day, monthrange(year, month)[1])
    return start_datum.replace(year=year, month=month, day=day)


def monthly_interest(betrag: Number, zinssatz: Number, laufzeit_monate: int) -> Decimal:
    """Average interest earned per month of the term."""
    zinsbetrag = calculate_interest(betrag, zinssatz, laufzeit_monate).zinsbetrag
    return round_amount(zinsbetrag / laufzeit_monate)


def total_return_percent(betrag: Number, zinssatz: Number, laufzeit_monate: int) -> Decimal:
    """Interest over the whole term as a percentage of the principal."""
    zinsbetrag = calculate_interest(betrag, zinssatz, laufzeit_monate).zinsbetrag
    return round_amount(zinsbetrag * 100 / to_decimal(betrag))


def accrual_schedule(
    betrag: Number,
    zinssatz: Number,
    laufzeit_monate: int,
    max_months: int = MAX_BREAKDOWN_MONTHS,
) -> List[MonthlyAccrual]:
    """
    Month-by-month accrual of simple interest, capped at ``max_months`` rows.

    The accumulated interest of the final month equals ``calculate_interest``.
    """
    principal = to_decimal(betrag)
    schedule = []
    previous = Decimal("0.00")
    for monat in range(1, min(laufzeit_monate, max_months) + 1):
        accumulated = calculate_interest(principal, zinssatz, monat).zinsbetrag
        schedule.append(MonthlyAccrual(
            monat=monat,
            zinsen_monat=accumulated - previous,
            zinsen_gesamt=accumulated,
            kontostand=round_amount(principal + accumulated),
        ))
        previous = accumulated
    return schedule


def term_progress(start_datum: date, end_datum: date, today: date) -> float:
    """Elapsed share of the term in percent, clamped to 0..100."""
    total = (end_datum - start_datum).days
    if total <= 0:
        return 100.0
    elapsed = (today - start_datum).days
    return round(min(max(elapsed / total * 100, 0.0), 100.0), 2)
