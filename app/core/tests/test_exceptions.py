"""
Tests for the application exception hierarchy.
"""

from billing.exceptions import StripeInvalidRequestError, StripeTimeoutError
from core.exceptions import BaseApplicationError, ExternalServiceError


class TestBaseApplicationError:
    """Tests for BaseApplicationError."""

    def test_default_code(self):
        error = BaseApplicationError("Something failed")

        assert error.error_code == "APPLICATION_ERROR"
        assert str(error) == "[APPLICATION_ERROR] Something failed"

    def test_to_dict(self):
        error = ExternalServiceError("Stripe down", details={"service": "stripe"})

        assert error.to_dict() == {
            "error": "Stripe down",
            "error_code": "EXTERNAL_SERVICE_ERROR",
            "details": {"service": "stripe"},
        }

    def test_stripe_errors_are_application_errors(self):
        error = StripeInvalidRequestError("Invalid webhook signature", stripe_code="sig")

        assert isinstance(error, BaseApplicationError)
        assert error.details == {"stripe_code": "sig"}
        assert error.is_retryable is False
        assert StripeTimeoutError("timed out").is_retryable is True
