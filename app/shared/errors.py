"""
Application error taxonomy.

Services raise these; app.main turns them into JSON responses of the form
{"error": <message>, "code": <CODE>, "message": <detail>, ...extra}.
"""

from typing import Any, Optional


class AppError(Exception):
    status_code = 500
    code = "INTERNAL_ERROR"
    default_message = "Internal server error"
    headers: Optional[dict] = None

    def __init__(self, message: Optional[str] = None, detail: Optional[str] = None, **extra: Any):
        self.message = message or self.default_message
        self.detail = detail or self.message
        self.extra = extra
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {"error": self.message, "code": self.code, "message": self.detail, **self.extra}


class InvalidInput(AppError):
    status_code = 400
    code = "INVALID_INPUT"
    default_message = "Invalid input"


class Unauthorized(AppError):
    status_code = 401
    code = "UNAUTHORIZED"
    default_message = "Authentication required"


class Forbidden(AppError):
    status_code = 403
    code = "FORBIDDEN"
    default_message = "You do not have access to this resource"


class UpgradeRequired(Forbidden):
    """Entitlement denial; clients branch on the code to show an upgrade prompt"""

    code = "UPGRADE_REQUIRED"
    default_message = "Upgrade to Pro to continue"


class NotFound(AppError):
    status_code = 404
    code = "NOT_FOUND"
    default_message = "Not found"


class Conflict(AppError):
    status_code = 409
    code = "CONFLICT"
    default_message = "Conflict"


class Gone(AppError):
    status_code = 410
    code = "GONE"
    default_message = "This link has expired"


class TooManyRequests(AppError):
    status_code = 429
    code = "RATE_LIMITED"
    default_message = "Too many requests"

    def __init__(self, retry_after: int, message: Optional[str] = None, detail: Optional[str] = None):
        super().__init__(message, detail, retryAfter=retry_after)
        self.headers = {"Retry-After": str(retry_after)}


class Internal(AppError):
    pass


class ServiceUnavailable(AppError):
    status_code = 503
    code = "SERVICE_UNAVAILABLE"
    default_message = "Service temporarily unavailable"
