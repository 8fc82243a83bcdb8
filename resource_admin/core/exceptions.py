# ================================
# CUSTOM EXCEPTIONS (core/exceptions.py)
# ================================

from typing import Dict, List, Optional


class AppException(Exception):
    """Base exception for application specific errors"""

    def __init__(self, detail: str, status_code: int = 400, error_code: str = None):
        self.detail = detail
        self.status_code = status_code
        self.error_code = error_code
        super().__init__(detail)


class AuthenticationError(AppException):
    """Missing or invalid principal"""

    def __init__(self, detail: str = "Unauthenticated", error_code: str = "AUTH_FAILED"):
        super().__init__(detail, 401, error_code)


class NotFoundError(AppException):
    """Record lookup miss"""

    def __init__(self, detail: str = "Record not found", error_code: str = "NOT_FOUND"):
        super().__init__(detail, 404, error_code)


class NotConfiguredError(AppException):
    """Optional feature without a repository or model binding"""

    def __init__(self, detail: str = "Feature not configured", error_code: str = "NOT_CONFIGURED"):
        super().__init__(detail, 404, error_code)


class ValidationFailedError(AppException):
    """Field rule violations, keyed by field name"""

    def __init__(
        self,
        field_errors: Dict[str, List[str]],
        detail: str = "The given data was invalid.",
        error_code: str = "VALIDATION_ERROR"
    ):
        self.field_errors = field_errors
        super().__init__(detail, 422, error_code)

    @property
    def first_error(self) -> Optional[str]:
        for messages in self.field_errors.values():
            if messages:
                return messages[0]
        return None
