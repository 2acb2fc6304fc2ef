"""Schemas for database setup responses."""

from typing import Dict, Optional

from pydantic import BaseModel


class SetupResult(BaseModel):
    message: str
    users: int
    already_setup: bool = False
    tables_created: bool = False
    anlagen: Optional[int] = None
    transaktionen: Optional[int] = None
    credentials: Optional[Dict[str, str]] = None
    auto_setup: bool = False


class SetupStatus(BaseModel):
    status: str
    users: int
    anlagen: int
    ready: bool = True
