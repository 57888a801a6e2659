"""
Stripe API adapter for billing operations.

This module provides the StripeAdapter class which encapsulates all
Stripe API interactions. All Stripe calls should go through this
adapter to ensure consistent error handling, timeouts and observability.

Features:
- Configurable timeouts on all API calls
- Automatic error translation to domain exceptions
- Structured logging with timing metrics
- Plain dataclass results instead of StripeObject graphs

Configuration (via settings):
- STRIPE_SECRET_KEY: Stripe API secret key
- STRIPE_API_TIMEOUT_SECONDS: API call timeout (default: 10)

Usage:
    from billing.adapters import StripeAdapter

    event = StripeAdapter.verify_webhook_signature(payload, signature, secret)
    session = StripeAdapter.retrieve_checkout_session("cs_test_123")
    for item in session.line_items:
        if item.is_recurring:
            ...
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Any

import stripe
from django.conf import settings

from billing.exceptions import (
    StripeAPIUnavailableError,
    StripeInvalidRequestError,
    StripeRateLimitError,
    StripeTimeoutError,
)


# =============================================================================
# Data Types
# =============================================================================


@dataclass
class LineItemResult:
    """
    One purchased line item of a checkout session.

    Attributes:
        id: Line item ID (li_xxx)
        price_id: Price ID (price_xxx), None if Stripe sent no price
        price_type: 'recurring' or 'one_time'
    """

    id: str
    price_id: str | None
    price_type: str | None

    @property
    def is_recurring(self) -> bool:
        return self.price_type == "recurring"


@dataclass
class CheckoutSessionResult:
    """
    Result from Stripe Checkout Session retrieval.

    Attributes:
        id: Checkout Session ID (cs_xxx)
        customer_id: Stripe Customer ID (cus_xxx), None for guest checkouts
        customer_email: Email entered at checkout (customer_details.email)
        line_items: Purchased items (requires expand=["line_items"])
    """

    id: str
    customer_id: str | None = None
    customer_email: str | None = None
    line_items: list[LineItemResult] = field(default_factory=list)


@dataclass
class SubscriptionResult:
    """
    Result from Stripe Subscription retrieval.

    Attributes:
        id: Subscription ID (sub_xxx)
        customer_id: Stripe Customer ID (cus_xxx)
        status: Subscription status (active, canceled, etc.)
    """

    id: str
    customer_id: str | None
    status: str | None = None


def _expandable_id(value: Any) -> str | None:
    """
    Return the ID of an expandable Stripe field.

    Expandable fields come back either as a bare ID string or, when
    expanded, as the full object dict.
    """
    if isinstance(value, dict):
        return value.get("id")
    return value


# =============================================================================
# Stripe Adapter
# =============================================================================


class StripeAdapter:
    """
    Adapter for Stripe API operations.

    All methods are classmethods - no instance state is maintained.

    Configuration (via settings):
    - STRIPE_SECRET_KEY: Stripe API secret key
    - STRIPE_API_TIMEOUT_SECONDS: API call timeout (default: 10)

    Usage:
        session = StripeAdapter.retrieve_checkout_session(session_id)
        subscription = StripeAdapter.retrieve_subscription(subscription_id)
    """

    # =========================================================================
    # Configuration
    # =========================================================================

    @staticmethod
    def _configure_stripe() -> None:
        """Configure Stripe client with API key and timeout."""
        stripe.api_key = settings.STRIPE_SECRET_KEY
        timeout = getattr(settings, "STRIPE_API_TIMEOUT_SECONDS", 10)
        stripe.default_http_client = stripe.RequestsClient(timeout=timeout)

    @classmethod
    def get_logger(cls) -> logging.Logger:
        """Get logger for this adapter."""
        return logging.getLogger(f"{cls.__module__}.{cls.__name__}")

    # =========================================================================
    # Retrieval
    # =========================================================================

    @classmethod
    def retrieve_checkout_session(cls, session_id: str) -> CheckoutSessionResult:
        """
        Retrieve a Checkout Session with its line items expanded.

        Args:
            session_id: Stripe Checkout Session ID (cs_xxx)

        Returns:
            CheckoutSessionResult with customer and line item details

        Raises:
            StripeInvalidRequestError: Session not found
            StripeRateLimitError, StripeAPIUnavailableError, StripeTimeoutError:
                Transient Stripe failures
        """
        cls._configure_stripe()
        logger = cls.get_logger()

        log_context = {
            "operation": "retrieve_checkout_session",
            "checkout_session_id": session_id,
        }

        start_time = time.time()
        logger.debug("Starting Stripe operation", extra=log_context)

        try:
            session = stripe.checkout.Session.retrieve(
                session_id,
                expand=["line_items"],
            )
            data = session.to_dict()

            duration_ms = (time.time() - start_time) * 1000
            logger.debug(
                "Stripe operation completed",
                extra={**log_context, "duration_ms": duration_ms},
            )
        except Exception as e:
            duration_ms = (time.time() - start_time) * 1000
            cls._handle_stripe_error(e, log_context, duration_ms)
            raise

        line_items = []
        for item in (data.get("line_items") or {}).get("data") or []:
            price = item.get("price") or {}
            line_items.append(
                LineItemResult(
                    id=item.get("id"),
                    price_id=price.get("id"),
                    price_type=price.get("type"),
                )
            )

        return CheckoutSessionResult(
            id=data.get("id"),
            customer_id=_expandable_id(data.get("customer")),
            customer_email=(data.get("customer_details") or {}).get("email"),
            line_items=line_items,
        )

    @classmethod
    def retrieve_subscription(cls, subscription_id: str) -> SubscriptionResult:
        """
        Retrieve a Subscription by ID.

        Args:
            subscription_id: Stripe Subscription ID (sub_xxx)

        Returns:
            SubscriptionResult with the owning customer

        Raises:
            StripeInvalidRequestError: Subscription not found
        """
        cls._configure_stripe()
        logger = cls.get_logger()

        log_context = {
            "operation": "retrieve_subscription",
            "subscription_id": subscription_id,
        }

        start_time = time.time()
        logger.debug("Starting Stripe operation", extra=log_context)

        try:
            subscription = stripe.Subscription.retrieve(subscription_id)
            data = subscription.to_dict()

            duration_ms = (time.time() - start_time) * 1000
            logger.debug(
                "Stripe operation completed",
                extra={
                    **log_context,
                    "status": data.get("status"),
                    "duration_ms": duration_ms,
                },
            )
        except Exception as e:
            duration_ms = (time.time() - start_time) * 1000
            cls._handle_stripe_error(e, log_context, duration_ms)
            raise

        return SubscriptionResult(
            id=data.get("id"),
            customer_id=_expandable_id(data.get("customer")),
            status=data.get("status"),
        )

    # =========================================================================
    # Webhook Verification
    # =========================================================================

    @classmethod
    def verify_webhook_signature(
        cls,
        payload: bytes,
        signature: str | None,
        secret: str,
    ) -> dict[str, Any]:
        """
        Verify and parse a Stripe webhook event.

        Args:
            payload: Raw webhook payload bytes
            signature: Stripe-Signature header value
            secret: Endpoint signing secret (whsec_xxx)

        Returns:
            Parsed event data dict

        Raises:
            StripeInvalidRequestError: Missing or invalid signature, or a
                body that is not a JSON event
        """
        if not signature:
            raise StripeInvalidRequestError(
                "Missing Stripe-Signature header",
                stripe_code="signature_verification_failed",
            )

        try:
            event = stripe.Webhook.construct_event(payload, signature, secret)
        except stripe.SignatureVerificationError as e:
            raise StripeInvalidRequestError(
                "Invalid webhook signature",
                stripe_code="signature_verification_failed",
                details={"error": str(e)},
            ) from e
        except ValueError as e:
            raise StripeInvalidRequestError(
                "Invalid webhook payload",
                stripe_code="invalid_payload",
                details={"error": str(e)},
            ) from e

        return event.to_dict()

    # =========================================================================
    # Error Handling
    # =========================================================================

    @classmethod
    def _handle_stripe_error(
        cls,
        error: Exception,
        log_context: dict[str, Any],
        duration_ms: float,
    ) -> None:
        """
        Translate Stripe exceptions to domain exceptions.

        Args:
            error: The Stripe exception
            log_context: Logging context dict
            duration_ms: Operation duration for logging

        Raises:
            StripeInvalidRequestError: Invalid request or authentication
            StripeRateLimitError: Rate limited
            StripeTimeoutError: Request timed out
            StripeAPIUnavailableError: API unavailable or unknown failure
        """
        logger = cls.get_logger()
        log_context = {**log_context, "duration_ms": duration_ms}

        if isinstance(error, stripe.InvalidRequestError):
            logger.error(
                "Invalid request to Stripe",
                extra={**log_context, "stripe_code": error.code},
            )
            raise StripeInvalidRequestError(
                str(error),
                stripe_code=error.code,
            ) from error

        elif isinstance(error, stripe.RateLimitError):
            logger.warning("Rate limited by Stripe", extra=log_context)
            raise StripeRateLimitError(
                "Stripe rate limit exceeded. Please retry.",
                stripe_code="rate_limit",
            ) from error

        elif isinstance(error, stripe.APIConnectionError):
            if "timed out" in str(error).lower():
                logger.error("Stripe request timed out", extra=log_context)
                raise StripeTimeoutError(
                    "Stripe request timed out. Please retry.",
                    stripe_code="timeout",
                ) from error

            logger.error(
                "Connection error to Stripe",
                extra=log_context,
                exc_info=True,
            )
            raise StripeAPIUnavailableError(
                "Could not connect to Stripe. Please retry.",
                stripe_code="api_connection_error",
            ) from error

        elif isinstance(error, stripe.AuthenticationError):
            logger.critical(
                "Stripe authentication failed - check API key",
                extra=log_context,
            )
            raise StripeInvalidRequestError(
                "Stripe authentication failed",
                stripe_code="authentication_error",
            ) from error

        elif isinstance(error, stripe.APIError):
            logger.error("Stripe API error", extra=log_context, exc_info=True)
            raise StripeAPIUnavailableError(
                "Stripe service error. Please retry.",
                stripe_code="api_error",
            ) from error

        else:
            logger.error(
                f"Unexpected error from Stripe: {type(error).__name__}",
                extra=log_context,
                exc_info=True,
            )
            raise StripeAPIUnavailableError(
                f"Unexpected Stripe error: {error}",
                stripe_code="unknown_error",
            ) from error
