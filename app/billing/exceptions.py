"""
Billing exceptions.

These cover unexpected failures only. Expected business outcomes (unknown
user, unknown price) are returned as ServiceResult failures by the
handlers and never raised.

Exception Hierarchy:
    BillingError (base for billing domain)
    └── StripeError - Base for all Stripe errors
        ├── StripeInvalidRequestError - Bad request or signature (permanent)
        ├── StripeRateLimitError - Rate limited (transient)
        ├── StripeAPIUnavailableError - API unavailable (transient)
        └── StripeTimeoutError - Request timeout (transient)

Usage:
    from billing.exceptions import StripeError, StripeInvalidRequestError

    try:
        event = StripeAdapter.verify_webhook_signature(payload, signature, secret)
    except StripeInvalidRequestError as e:
        return HttpResponse(f"Webhook Error: {e.message}", status=400)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from core.exceptions import ExternalServiceError

if TYPE_CHECKING:
    from typing import Any


class BillingError(ExternalServiceError):
    """
    Base exception for all billing operations.

    Inherits from ExternalServiceError since every billing failure that
    is raised (rather than returned) originates at Stripe.
    """

    default_error_code: str = "BILLING_ERROR"


class StripeError(BillingError):
    """
    Base exception for all Stripe-related errors.

    Attributes:
        stripe_code: Stripe's internal error code
        is_retryable: Whether redelivering the webhook can be expected to succeed

    Note:
        Webhook processing never retries in-process. A 400 makes Stripe
        redeliver the event, so is_retryable only informs logging.
    """

    default_error_code: str = "STRIPE_ERROR"
    is_retryable: bool = False

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        stripe_code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        details = details or {}
        if stripe_code:
            details["stripe_code"] = stripe_code
        super().__init__(message, error_code=error_code, details=details)
        self.stripe_code = stripe_code


# -----------------------------------------------------------------------------
# Permanent Errors
# -----------------------------------------------------------------------------


class StripeInvalidRequestError(StripeError):
    """
    Invalid request sent to Stripe, or an unverifiable webhook.

    Possible causes:
    - Unknown checkout session or subscription ID
    - Bad API key (authentication_error)
    - Webhook signature mismatch (signature_verification_failed)
    """

    default_error_code: str = "INVALID_STRIPE_REQUEST"
    is_retryable: bool = False


# -----------------------------------------------------------------------------
# Transient Errors
# -----------------------------------------------------------------------------


class StripeRateLimitError(StripeError):
    """Rate limited by Stripe API."""

    default_error_code: str = "STRIPE_RATE_LIMITED"
    is_retryable: bool = True


class StripeAPIUnavailableError(StripeError):
    """
    Stripe API is temporarily unavailable.

    Covers network connectivity issues and Stripe server errors (5xx).
    """

    default_error_code: str = "STRIPE_UNAVAILABLE"
    is_retryable: bool = True


class StripeTimeoutError(StripeError):
    """
    Stripe API call timed out.

    No response arrived within STRIPE_API_TIMEOUT_SECONDS. Retrievals are
    read-only so a redelivery is always safe.
    """

    default_error_code: str = "STRIPE_TIMEOUT"
    is_retryable: bool = True
