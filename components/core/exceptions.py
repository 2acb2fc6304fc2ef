"""Domain exceptions and their HTTP handlers."""

import logging
from typing import Any, Dict, Optional

from fastapi import Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class BankingException(Exception):
    """
    Base exception for the banking API.

    Repositories raise subclasses of this exception for business rule
    violations; the registered handler turns them into JSON responses.
    """

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    code = "BANKING_ERROR"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to API response dict."""
        result = {
            "detail": self.message,
            "code": self.code,
        }
        if self.details:
            result["details"] = self.details
        return result


class InvalidInputError(BankingException):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "INVALID_INPUT"


class PermissionDeniedError(BankingException):
    status_code = status.HTTP_403_FORBIDDEN
    code = "PERMISSION_DENIED"


class NotFoundError(BankingException):
    status_code = status.HTTP_404_NOT_FOUND
    code = "NOT_FOUND"


class UserNotFoundError(NotFoundError):
    code = "USER_NOT_FOUND"

    def __init__(self, user_id: str):
        super().__init__("Benutzer nicht gefunden", details={"user_id": user_id})


class DepositNotFoundError(NotFoundError):
    code = "ANLAGE_NOT_FOUND"

    def __init__(self, anlage_id: int):
        super().__init__("Anlage nicht gefunden", details={"anlage_id": anlage_id})


class ConflictError(BankingException):
    status_code = status.HTTP_409_CONFLICT
    code = "CONFLICT"


class EmailTakenError(ConflictError):
    code = "EMAIL_TAKEN"

    def __init__(self, email: str):
        super().__init__(
            "Ein Benutzer mit dieser E-Mail existiert bereits",
            details={"email": email},
        )


class LastAdminError(ConflictError):
    code = "LAST_ADMIN"

    def __init__(self):
        super().__init__("Der letzte Administrator kann nicht gelöscht werden")


class ActiveDepositsError(ConflictError):
    code = "USER_HAS_ACTIVE_ANLAGEN"

    def __init__(self, user_id: str, active_count: int):
        super().__init__(
            "Benutzer mit aktiven Anlagen können nicht gelöscht werden",
            details={"user_id": user_id, "active_anlagen": active_count},
        )


class ActiveDepositDeleteError(ConflictError):
    code = "ANLAGE_ACTIVE"

    def __init__(self, anlage_id: int):
        super().__init__(
            "Aktive Anlagen können nicht gelöscht werden. Beenden Sie die Anlage zuerst.",
            details={"anlage_id": anlage_id},
        )


class DepositClosedError(ConflictError):
    code = "ANLAGE_CLOSED"

    def __init__(self, anlage_id: int):
        super().__init__(
            "Beendete Anlagen können nicht bearbeitet werden",
            details={"anlage_id": anlage_id},
        )


async def banking_exception_handler(request: Request, exc: BankingException) -> JSONResponse:
    """Render a BankingException as JSON."""
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report request validation errors as 400 Bad Request."""
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "detail": "Validation error",
            "code": "VALIDATION_ERROR",
            "errors": jsonable_encoder(exc.errors()),
        },
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Unhandled exception on %s %s: %s", request.method, request.url.path, exc, exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Ein Fehler ist aufgetreten", "code": "INTERNAL_ERROR"},
    )
