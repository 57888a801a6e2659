"""
Billing adapters for external services.

All Stripe API calls go through StripeAdapter to ensure consistent error
handling, timeouts and observability.

Usage:
    from billing.adapters import StripeAdapter

    session = StripeAdapter.retrieve_checkout_session("cs_test_123")
"""

from billing.adapters.stripe_adapter import (
    CheckoutSessionResult,
    LineItemResult,
    StripeAdapter,
    SubscriptionResult,
)

__all__ = [
    "CheckoutSessionResult",
    "LineItemResult",
    "StripeAdapter",
    "SubscriptionResult",
]
