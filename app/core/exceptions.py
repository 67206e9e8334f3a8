"""
Custom exception hierarchy for the checkout bridge.

All application-level exceptions inherit from AppException so they can be
caught by a single global handler.
"""


class AppException(Exception):
    """Base for all app exceptions."""

    def __init__(
        self,
        status_code: int,
        error_code: str,
        message: str,
        details: dict | None = None,
    ):
        self.status_code = status_code
        self.error_code = error_code
        self.message = message
        self.details = details or {}
        super().__init__(message)


class SessionBuildError(AppException):
    """Raised when the payment session payload could not be assembled."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(
            status_code=500,
            error_code="SESSION_BUILD_ERROR",
            message=message,
            details=details,
        )


class OrderNotFoundError(AppException):
    """Raised when an order lookup by increment id returns nothing."""

    def __init__(self, message: str = "Order not found", details: dict | None = None):
        super().__init__(
            status_code=404,
            error_code="ORDER_NOT_FOUND",
            message=message,
            details=details,
        )


class TransactionApplyError(AppException):
    """Raised when a gateway transaction could not be written onto a payment."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(
            status_code=500,
            error_code="TRANSACTION_APPLY_ERROR",
            message=message,
            details=details,
        )


class ExternalServiceError(AppException):
    """Raised when an external API call (Acquired) fails."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(
            status_code=502,
            error_code="EXTERNAL_SERVICE_ERROR",
            message=message,
            details=details,
        )
