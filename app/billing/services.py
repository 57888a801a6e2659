"""
Subscription services for plan changes driven by Stripe events.

SubscriptionService owns every write to Subscription rows and to the
user's plan. Webhook handlers decide *what* happened at Stripe and call
into this service to apply it.

Usage:
    from billing.services import SubscriptionService

    result = SubscriptionService.activate_premium(user, price_id, config)
    if not result:
        return result  # INVALID_PRICE_ID

    SubscriptionService.downgrade_to_free(user)
"""

from __future__ import annotations

import calendar
from datetime import datetime
from typing import TYPE_CHECKING

from django.utils import timezone

from authentication.models import Plan
from core.services import BaseService, ServiceResult

from billing.models import Subscription
from billing.states import BillingPeriod

if TYPE_CHECKING:
    from authentication.models import User
    from billing.config import BillingConfig


# =============================================================================
# Period Arithmetic
# =============================================================================


def add_months(value: datetime, months: int) -> datetime:
    """
    Shift a datetime by whole calendar months.

    The day of month is kept and clamped to the last day of the target
    month, so Jan 31 + 1 month is Feb 28 (or 29) and Feb 29 + 12 months
    is Feb 28.
    """
    month_index = value.month - 1 + months
    year = value.year + month_index // 12
    month = month_index % 12 + 1
    day = min(value.day, calendar.monthrange(year, month)[1])
    return value.replace(year=year, month=month, day=day)


def compute_end_date(start: datetime, period: str) -> datetime:
    """Return the end of a paid period starting at `start`."""
    months = 12 if period == BillingPeriod.YEARLY else 1
    return add_months(start, months)


# =============================================================================
# Subscription Service
# =============================================================================


class SubscriptionService(BaseService):
    """
    Applies plan changes to users and their Subscription rows.

    Callers are expected to hold a row lock on the user (select_for_update)
    inside an outer transaction; each method also opens its own atomic
    block so it is safe to call standalone.
    """

    @classmethod
    def activate_premium(
        cls,
        user: User,
        price_id: str | None,
        config: BillingConfig,
        now: datetime | None = None,
    ) -> ServiceResult[Subscription]:
        """
        Start a new premium period for a recurring purchase.

        Upserts the user's Subscription (one row per user) with a period
        computed from the price, then moves the user to the premium plan.

        Args:
            user: User who completed checkout
            price_id: Stripe Price ID of the recurring line item
            config: Billing config holding the yearly/monthly price IDs
            now: Period start (defaults to the current time)

        Returns:
            ServiceResult with the Subscription, or an INVALID_PRICE_ID
            failure if the price is neither the yearly nor monthly one
        """
        logger = cls.get_logger()

        period = config.period_for_price(price_id)
        if period is None:
            logger.warning(
                "Checkout line item has an unknown price",
                extra={"user_id": user.pk, "price_id": price_id},
            )
            return ServiceResult.failure(
                f"Invalid price id: {price_id}",
                error_code="INVALID_PRICE_ID",
            )

        start = now or timezone.now()
        end = compute_end_date(start, period)

        with cls.atomic():
            subscription, created = Subscription.objects.update_or_create(
                user=user,
                defaults={
                    "start_date": start,
                    "end_date": end,
                    "plan": Plan.PREMIUM,
                    "period": period,
                },
            )
            user.plan = Plan.PREMIUM
            user.save(update_fields=["plan", "updated_at"])

        logger.info(
            f"{'Created' if created else 'Renewed'} {period} premium subscription",
            extra={
                "user_id": user.pk,
                "subscription_id": str(subscription.pk),
                "end_date": end.isoformat(),
            },
        )
        return ServiceResult.success(subscription)

    @classmethod
    def downgrade_to_free(cls, user: User) -> ServiceResult[User]:
        """
        Move a user back to the free plan.

        The Subscription row is left untouched as a record of the last
        paid period.
        """
        previous_plan = user.plan
        with cls.atomic():
            user.plan = Plan.FREE
            user.save(update_fields=["plan", "updated_at"])

        cls.get_logger().info(
            "Downgraded user to free plan",
            extra={"user_id": user.pk, "previous_plan": previous_plan},
        )
        return ServiceResult.success(user)
