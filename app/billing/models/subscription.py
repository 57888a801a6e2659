"""
Subscription model for a user's paid premium period.

A user has at most one Subscription row. A completed checkout upserts it
with a fresh start/end window; a deleted Stripe subscription downgrades
the user's plan but leaves this row in place as history.

Usage:
    from billing.models import Subscription

    subscription, created = Subscription.objects.update_or_create(
        user=user,
        defaults={
            "start_date": now,
            "end_date": compute_end_date(now, BillingPeriod.YEARLY),
            "plan": Plan.PREMIUM,
            "period": BillingPeriod.YEARLY,
        },
    )
"""

from __future__ import annotations

from django.conf import settings
from django.db import models
from django.utils import timezone

from authentication.models import Plan
from core.model_mixins import UUIDPrimaryKeyMixin
from core.models import BaseModel

from billing.states import BillingPeriod


class Subscription(UUIDPrimaryKeyMixin, BaseModel):
    """
    The paid period purchased by a user.

    Fields:
        user: Owner of the subscription (unique)
        start_date: When the current period started
        end_date: When the current period ends
        plan: Plan granted by the subscription
        period: Billing period (monthly/yearly)
    """

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="subscription",
        help_text="User who owns the subscription",
    )

    start_date = models.DateTimeField(
        help_text="Start of the current paid period",
    )
    end_date = models.DateTimeField(
        db_index=True,
        help_text="End of the current paid period",
    )

    plan = models.CharField(
        max_length=20,
        choices=Plan.choices,
        default=Plan.PREMIUM,
        help_text="Plan granted by this subscription",
    )
    period = models.CharField(
        max_length=10,
        choices=BillingPeriod.choices,
        help_text="Billing period",
    )

    class Meta:
        ordering = ["-created_at"]
        verbose_name = "Subscription"
        verbose_name_plural = "Subscriptions"

    def __str__(self) -> str:
        return f"Subscription({self.user_id}, {self.plan}/{self.period})"

    @property
    def is_expired(self) -> bool:
        """Whether the paid period has ended."""
        return self.end_date <= timezone.now()

    @property
    def is_yearly(self) -> bool:
        return self.period == BillingPeriod.YEARLY
