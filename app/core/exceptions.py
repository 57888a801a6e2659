"""
Base exception class for application-wide error handling.

Domain apps derive their own hierarchies from BaseApplicationError so that
every unexpected failure carries a machine-readable error code and optional
structured details. Expected business outcomes are returned as
ServiceResult values instead (see core.services).

Usage:
    from core.exceptions import BaseApplicationError

    class BillingError(BaseApplicationError):
        default_error_code = "BILLING_ERROR"

    raise BillingError("Stripe is unreachable", details={"attempt": 2})

    try:
        ...
    except BaseApplicationError as e:
        logger.error(str(e), extra=e.to_dict())
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from typing import Any


class BaseApplicationError(Exception):
    """
    Base exception for all application-specific errors.

    Attributes:
        message: Human-readable error description
        error_code: Machine-readable code for log filtering and clients
        details: Additional error context (identifiers, upstream codes, etc.)

    Example:
        try:
            StripeAdapter.retrieve_subscription(subscription_id)
        except BaseApplicationError as e:
            logger.warning(f"Lookup failed: {e.error_code}")
    """

    default_error_code: str = "APPLICATION_ERROR"

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        """
        Initialize the exception.

        Args:
            message: Human-readable error description
            error_code: Machine-readable error code (defaults to class default)
            details: Additional error context
        """
        self.message = message
        self.error_code = error_code or self.default_error_code
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """
        Convert exception to a dictionary.

        Returns:
            Dict with error, error_code, and details keys

        Example:
            {
                "error": "No such subscription: sub_123",
                "error_code": "INVALID_STRIPE_REQUEST",
                "details": {"stripe_code": "resource_missing"}
            }
        """
        result: dict[str, Any] = {
            "error": self.message,
            "error_code": self.error_code,
        }
        if self.details:
            result["details"] = self.details
        return result

    def __str__(self) -> str:
        """Return string representation with error code."""
        return f"[{self.error_code}] {self.message}"

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"error_code={self.error_code!r}, "
            f"details={self.details!r})"
        )


class ExternalServiceError(BaseApplicationError):
    """
    Raised when an external service call fails.

    Use for:
    - Third-party API failures (Stripe)
    - Network timeouts
    - Unexpected upstream responses

    Note:
        Log the original error for debugging but don't echo upstream
        details back to anonymous callers such as webhook senders.
    """

    default_error_code: str = "EXTERNAL_SERVICE_ERROR"
