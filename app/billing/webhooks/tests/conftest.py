"""
Pytest fixtures for webhook tests.

Provides event payload builders and a patched StripeAdapter so handlers
can be exercised without calling Stripe.
"""

from unittest.mock import patch

import pytest

from billing.adapters import CheckoutSessionResult, LineItemResult, SubscriptionResult
from billing.states import StripeEventType


# =============================================================================
# Event Payload Fixtures
# =============================================================================


@pytest.fixture
def make_event():
    """Build a verified Stripe event dict."""

    def _create(
        event_id: str = "evt_test_123",
        event_type: str = StripeEventType.CHECKOUT_SESSION_COMPLETED,
        object_id: str = "cs_test_123",
    ) -> dict:
        return {
            "id": event_id,
            "object": "event",
            "type": str(event_type),
            "data": {"object": {"id": object_id}},
        }

    return _create


@pytest.fixture
def checkout_event(make_event):
    """checkout.session.completed event for session cs_test_123."""
    return make_event()


@pytest.fixture
def subscription_deleted_event(make_event):
    """customer.subscription.deleted event for subscription sub_test_123."""
    return make_event(
        event_id="evt_test_deleted",
        event_type=StripeEventType.CUSTOMER_SUBSCRIPTION_DELETED,
        object_id="sub_test_123",
    )


# =============================================================================
# Stripe Result Fixtures
# =============================================================================


@pytest.fixture
def make_checkout_session():
    """Build a CheckoutSessionResult as returned by the adapter."""

    def _create(
        customer_email: str | None = "buyer@example.com",
        customer_id: str | None = "cus_test_buyer",
        line_items: list[tuple[str | None, str | None]] | None = None,
    ) -> CheckoutSessionResult:
        if line_items is None:
            line_items = [("price_test_yearly", "recurring")]
        return CheckoutSessionResult(
            id="cs_test_123",
            customer_id=customer_id,
            customer_email=customer_email,
            line_items=[
                LineItemResult(id=f"li_test_{i}", price_id=price_id, price_type=price_type)
                for i, (price_id, price_type) in enumerate(line_items)
            ],
        )

    return _create


@pytest.fixture
def mock_stripe_adapter():
    """Patch StripeAdapter where the handlers look it up."""
    with patch("billing.webhooks.handlers.StripeAdapter") as mock:
        mock.retrieve_subscription.return_value = SubscriptionResult(
            id="sub_test_123",
            customer_id="cus_test_buyer",
            status="canceled",
        )
        yield mock
