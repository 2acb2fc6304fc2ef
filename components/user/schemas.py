"""Pydantic schemas for user data validation."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, computed_field, field_validator

from components.user.models import Role, KycStatus
from components.user.utils import format_address, kyc_label, mask_iban, normalize_iban, validate_iban

OPTIONAL_TEXT_FIELDS = (
    "password",
    "account_number",
    "street",
    "postal_code",
    "city",
    "country",
    "reference_iban",
    "reference_bic",
    "reference_bank_name",
)


class UserProfileFields(BaseModel):
    """Address and reference account shared by create and update payloads."""
    street: Optional[str] = Field(None, max_length=255)
    postal_code: Optional[str] = Field(None, max_length=20)
    city: Optional[str] = Field(None, max_length=100)
    country: Optional[str] = Field(None, max_length=100)
    reference_iban: Optional[str] = None
    reference_bic: Optional[str] = Field(None, max_length=11)
    reference_bank_name: Optional[str] = Field(None, max_length=255)

    @field_validator(*OPTIONAL_TEXT_FIELDS, mode="before", check_fields=False)
    @classmethod
    def blank_to_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("reference_iban")
    @classmethod
    def check_iban(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        if not validate_iban(value):
            raise ValueError("Ungültiges IBAN-Format")
        return normalize_iban(value)


class UserWrite(UserProfileFields):
    name: str = Field(..., min_length=1, max_length=255)
    email: str = Field(..., min_length=3, max_length=255, pattern=r"^[^@\s]+@[^@\s]+$")
    password: Optional[str] = Field(None, min_length=6, max_length=128)
    role: Optional[Role] = None
    account_number: Optional[str] = Field(None, max_length=32)
    kyc_status: Optional[KycStatus] = None

    @field_validator("email")
    @classmethod
    def lower_email(cls, value: str) -> str:
        return value.strip().lower()


class UserCreate(UserWrite):
    """Schema for user creation by an administrator."""
    role: Role = Role.USER
    kyc_status: KycStatus = KycStatus.PENDING
    country: Optional[str] = "Deutschland"


class UserUpdate(UserWrite):
    """
    Schema for user update.

    Fields left out of the payload stay unchanged; optional profile fields
    sent as empty strings are cleared.
    """


class UserSummary(BaseModel):
    """Owner information embedded in deposits and transactions."""
    id: str
    name: str
    email: str

    class Config:
        from_attributes = True


class AuthUser(UserSummary):
    """Identity of the logged in user."""
    role: Role


class UserWithToken(AuthUser):
    """Login response: identity plus bearer token."""
    access_token: str
    token_type: str = "bearer"


class User(AuthUser):
    """Schema for user response."""
    account_number: str
    kyc_status: KycStatus
    street: Optional[str] = None
    postal_code: Optional[str] = None
    city: Optional[str] = None
    country: Optional[str] = None
    reference_iban: Optional[str] = None
    reference_bic: Optional[str] = None
    reference_bank_name: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class UserStats(BaseModel):
    anlagen_count: int
    transaktionen_count: int


class UserDetail(User):
    """Single user with display helpers and ownership statistics."""
    stats: UserStats

    @computed_field
    @property
    def address(self) -> str:
        return format_address(self.street, self.postal_code, self.city, self.country)

    @computed_field
    @property
    def kyc_status_label(self) -> str:
        return kyc_label(self.kyc_status)

    @computed_field
    @property
    def reference_iban_masked(self) -> str:
        return mask_iban(self.reference_iban)
