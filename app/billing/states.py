"""
Choice enums for the billing domain.

Usage:
    from billing.states import BillingPeriod, StripeEventType, WebhookEventStatus

    if event_type == StripeEventType.CHECKOUT_SESSION_COMPLETED:
        ...
"""

from django.db import models


class WebhookEventStatus(models.TextChoices):
    """
    Processing status for WebhookEvent.

    State Flow:
        PENDING → PROCESSED
        PENDING → FAILED → PROCESSED (on a successful redelivery)
    """

    PENDING = "pending", "Pending"
    PROCESSED = "processed", "Processed"
    FAILED = "failed", "Failed"


class BillingPeriod(models.TextChoices):
    """Length of one paid subscription period."""

    MONTHLY = "monthly", "Monthly"
    YEARLY = "yearly", "Yearly"


class StripeEventType(models.TextChoices):
    """
    Stripe event types this app reconciles.

    Anything else Stripe sends is acknowledged and ignored.
    """

    CHECKOUT_SESSION_COMPLETED = "checkout.session.completed", "Checkout Session Completed"
    CUSTOMER_SUBSCRIPTION_DELETED = (
        "customer.subscription.deleted",
        "Customer Subscription Deleted",
    )
