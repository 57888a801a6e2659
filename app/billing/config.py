"""
Runtime configuration for billing.

Settings are read once into an immutable BillingConfig that is passed
explicitly to the webhook service and handlers, so tests can build one
with fixture values instead of patching Django settings.

Usage:
    from billing.config import BillingConfig

    config = BillingConfig.from_settings()
    period = config.period_for_price("price_yearly_123")  # BillingPeriod.YEARLY
"""

from __future__ import annotations

from dataclasses import dataclass

from django.conf import settings

from billing.states import BillingPeriod


@dataclass(frozen=True)
class BillingConfig:
    """
    Stripe values needed to verify and classify webhook events.

    Attributes:
        webhook_secret: Endpoint signing secret (whsec_xxx)
        yearly_price_id: Price ID of the yearly premium plan
        monthly_price_id: Price ID of the monthly premium plan
    """

    webhook_secret: str
    yearly_price_id: str
    monthly_price_id: str

    @classmethod
    def from_settings(cls) -> BillingConfig:
        """Build the config from STRIPE_* Django settings."""
        return cls(
            webhook_secret=settings.STRIPE_WEBHOOK_SECRET,
            yearly_price_id=settings.STRIPE_YEARLY_PRICE_ID,
            monthly_price_id=settings.STRIPE_MONTHLY_PRICE_ID,
        )

    def period_for_price(self, price_id: str | None) -> BillingPeriod | None:
        """
        Classify a recurring price.

        Returns:
            The billing period for a configured price ID, None for any
            other (including empty) price ID.
        """
        if not price_id:
            return None
        if price_id == self.yearly_price_id:
            return BillingPeriod.YEARLY
        if price_id == self.monthly_price_id:
            return BillingPeriod.MONTHLY
        return None
