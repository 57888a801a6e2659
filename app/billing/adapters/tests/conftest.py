"""
Pytest fixtures for Stripe adapter tests.

Sections:
    - Mock Stripe Response Fixtures
    - Mock Stripe Error Fixtures
    - Mock Stripe Client Fixtures
"""

from dataclasses import dataclass
from typing import Any
from unittest.mock import patch

import pytest
import stripe


# =============================================================================
# Mock Stripe Response Fixtures
# =============================================================================


@dataclass
class MockStripeObject:
    """Mock Stripe API object with to_dict support."""

    data: dict[str, Any]

    def __getattr__(self, name: str) -> Any:
        if name == "data":
            return self.__dict__["data"]
        return self.data.get(name)

    def to_dict(self) -> dict[str, Any]:
        return self.data


@pytest.fixture
def mock_checkout_session():
    """Create a mock Checkout Session response with expanded line items."""

    def _create(
        id: str = "cs_test_123",
        customer: Any = "cus_test_123",
        email: str | None = "buyer@example.com",
        line_items: list[dict] | None = None,
    ) -> MockStripeObject:
        if line_items is None:
            line_items = [
                {
                    "id": "li_test_1",
                    "object": "item",
                    "price": {"id": "price_test_yearly", "type": "recurring"},
                }
            ]
        return MockStripeObject(
            {
                "id": id,
                "object": "checkout.session",
                "customer": customer,
                "customer_details": {"email": email} if email is not None else None,
                "line_items": {"object": "list", "data": line_items, "has_more": False},
            }
        )

    return _create


@pytest.fixture
def mock_subscription():
    """Create a mock Subscription response."""

    def _create(
        id: str = "sub_test_123",
        customer: Any = "cus_test_123",
        status: str = "canceled",
    ) -> MockStripeObject:
        return MockStripeObject(
            {
                "id": id,
                "object": "subscription",
                "customer": customer,
                "status": status,
            }
        )

    return _create


# =============================================================================
# Mock Stripe Error Fixtures
# =============================================================================


@pytest.fixture
def invalid_request_error():
    """Create a Stripe InvalidRequestError."""
    return stripe.InvalidRequestError(
        message="No such checkout.session: cs_missing",
        param="id",
        code="resource_missing",
    )


@pytest.fixture
def rate_limit_error():
    """Create a Stripe RateLimitError."""
    return stripe.RateLimitError(
        message="Too many requests hit the API too quickly.",
    )


@pytest.fixture
def api_connection_error():
    """Create a Stripe APIConnectionError."""
    return stripe.APIConnectionError(
        message="Could not connect to Stripe.",
    )


@pytest.fixture
def timeout_error():
    """Create a Stripe APIConnectionError caused by a timeout."""
    return stripe.APIConnectionError(
        message="Request to Stripe timed out.",
    )


@pytest.fixture
def api_error():
    """Create a Stripe APIError."""
    return stripe.APIError(
        message="Something went wrong on Stripe's end.",
    )


@pytest.fixture
def authentication_error():
    """Create a Stripe AuthenticationError."""
    return stripe.AuthenticationError(
        message="Invalid API Key provided.",
    )


@pytest.fixture
def signature_verification_error():
    """Create a Stripe SignatureVerificationError."""
    return stripe.SignatureVerificationError(
        message="Unable to verify webhook signature.",
        sig_header="bad_signature",
    )


# =============================================================================
# Mock Stripe Client Fixtures
# =============================================================================


@pytest.fixture
def mock_stripe_checkout_session(mock_checkout_session):
    """Mock stripe.checkout.Session API."""
    with patch("stripe.checkout.Session") as mock:
        mock.retrieve.return_value = mock_checkout_session()
        yield mock


@pytest.fixture
def mock_stripe_subscription(mock_subscription):
    """Mock stripe.Subscription API."""
    with patch("stripe.Subscription") as mock:
        mock.retrieve.return_value = mock_subscription()
        yield mock


@pytest.fixture
def mock_stripe_webhook():
    """Mock stripe.Webhook API."""
    with patch("stripe.Webhook") as mock:
        mock.construct_event.return_value = MockStripeObject(
            {
                "id": "evt_test123",
                "type": "checkout.session.completed",
                "data": {
                    "object": {
                        "id": "cs_test_123",
                        "object": "checkout.session",
                    }
                },
            }
        )
        yield mock


@pytest.fixture
def mock_stripe_http_client():
    """Mock stripe.RequestsClient."""
    with patch("stripe.RequestsClient") as mock:
        yield mock
