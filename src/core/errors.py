from enum import Enum
from typing import Any, Dict, Optional


class ErrorCode(str, Enum):
    VALIDATION_ERROR = "VALIDATION_ERROR"
    BAD_REQUEST = "BAD_REQUEST"
    AUTHENTICATION_ERROR = "AUTHENTICATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    ALREADY_EXISTS = "ALREADY_EXISTS"
    UPLOAD_ERROR = "UPLOAD_ERROR"
    PAYLOAD_TOO_LARGE = "PAYLOAD_TOO_LARGE"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class ErrorSeverity(str, Enum):
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class AppError(Exception):
    def __init__(
        self,
        message: str,
        code: ErrorCode,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        errors: Optional[Dict[str, str]] = None,
        status_code: int = 500,
    ):
        self.message = message
        self.code = code
        self.severity = severity
        self.errors = errors or {}
        self.status_code = status_code
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "success": False,
            "error": self.message,
            "code": self.code.value,
            "severity": self.severity.value,
        }
        if self.errors:
            payload["errors"] = dict(self.errors)
        return payload


class ValidationError(AppError):
    """Field-level failures, collected rather than raised one at a time."""

    def __init__(self, errors: Dict[str, str], message: str = "Validation failed"):
        super().__init__(
            message=message,
            code=ErrorCode.VALIDATION_ERROR,
            severity=ErrorSeverity.WARNING,
            errors=errors,
            status_code=400,
        )


class BadRequestError(AppError):
    def __init__(self, message: str):
        super().__init__(
            message=message,
            code=ErrorCode.BAD_REQUEST,
            severity=ErrorSeverity.WARNING,
            status_code=400,
        )


class AuthenticationError(AppError):
    def __init__(self, message: str = "Invalid admin credentials"):
        super().__init__(
            message=message,
            code=ErrorCode.AUTHENTICATION_ERROR,
            severity=ErrorSeverity.WARNING,
            status_code=401,
        )


class NotFoundError(AppError):
    def __init__(self, resource: str, identifier: Any = None):
        self.resource = resource
        self.identifier = identifier
        super().__init__(
            message=f"{resource} not found",
            code=ErrorCode.NOT_FOUND,
            severity=ErrorSeverity.INFO,
            status_code=404,
        )


class ConflictError(AppError):
    def __init__(self, message: str):
        super().__init__(
            message=message,
            code=ErrorCode.ALREADY_EXISTS,
            severity=ErrorSeverity.WARNING,
            status_code=409,
        )


class UploadError(AppError):
    def __init__(self, message: str):
        super().__init__(
            message=message,
            code=ErrorCode.UPLOAD_ERROR,
            severity=ErrorSeverity.WARNING,
            status_code=400,
        )


class PayloadTooLargeError(AppError):
    def __init__(self, message: str = "File too large"):
        super().__init__(
            message=message,
            code=ErrorCode.PAYLOAD_TOO_LARGE,
            severity=ErrorSeverity.WARNING,
            status_code=413,
        )


def handle_exception(
    e: Exception, message: str = "Internal server error"
) -> tuple[Dict[str, Any], int]:
    if isinstance(e, AppError):
        return e.to_dict(), e.status_code

    # Internal details stay in the logs.
    return {
        "success": False,
        "error": message,
        "code": ErrorCode.INTERNAL_ERROR.value,
        "severity": ErrorSeverity.ERROR.value,
    }, 500
