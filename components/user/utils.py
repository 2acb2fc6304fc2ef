"""Helpers for customer accounts: identifiers, IBANs and display formatting."""

import re
import string
import secrets
from datetime import date
from typing import Optional

ID_ALPHABET = string.ascii_lowercase + string.digits
IBAN_PATTERN = re.compile(r"^[A-Z]{2}[0-9]{2}[A-Z0-9]{4,30}$")
HOME_COUNTRY = "Deutschland"
NOT_PROVIDED = "Nicht hinterlegt"

KYC_LABELS = {
    "pending": "Ausstehend",
    "verified": "Verifiziert",
    "rejected": "Abgelehnt",
    "incomplete": "Unvollständig",
}


def generate_user_id(length: int = 25) -> str:
    """Random lowercase alphanumeric user id, always starting with a letter."""
    head = secrets.choice(string.ascii_lowercase)
    return head + "".join(secrets.choice(ID_ALPHABET) for _ in range(length - 1))


def generate_account_number(today: Optional[date] = None) -> str:
    """Account number in the form OK-<year>-<6 uppercase alphanumerics>."""
    year = (today or date.today()).year
    suffix = "".join(secrets.choice(string.ascii_uppercase + string.digits) for _ in range(6))
    return f"OK-{year}-{suffix}"


def normalize_iban(iban: str) -> str:
    return re.sub(r"\s", "", iban).upper()


def validate_iban(iban: Optional[str]) -> bool:
    """Basic IBAN format check: country code, check digits, 4-30 alphanumerics."""
    if not iban:
        return False
    return IBAN_PATTERN.match(normalize_iban(iban)) is not None


def mask_iban(iban: Optional[str]) -> str:
    """Hide all but the last four characters of an IBAN."""
    if not iban:
        return NOT_PROVIDED
    if len(iban) < 4:
        return iban
    return "*" * (len(iban) - 4) + iban[-4:]


def format_address(
    street: Optional[str] = None,
    postal_code: Optional[str] = None,
    city: Optional[str] = None,
    country: Optional[str] = None,
) -> str:
    """Single-line postal address; the home country is omitted."""
    parts = []
    if street:
        parts.append(street)
    if postal_code and city:
        parts.append(f"{postal_code} {city}")
    elif city:
        parts.append(city)
    if country and country != HOME_COUNTRY:
        parts.append(country)
    return ", ".join(parts) if parts else NOT_PROVIDED


def kyc_label(kyc_status: str) -> str:
    value = getattr(kyc_status, "value", kyc_status)
    return KYC_LABELS.get(str(value).lower(), "Unbekannt")
