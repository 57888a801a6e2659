"""
Factory Boy factories for billing test data.

Usage:
    from billing.tests.factories import SubscriptionFactory, WebhookEventFactory

    # Monthly premium subscription for a new user
    subscription = SubscriptionFactory()

    # Yearly subscription for an existing user
    subscription = SubscriptionFactory(user=user, period=BillingPeriod.YEARLY)

    # Processed checkout webhook
    event = WebhookEventFactory(status=WebhookEventStatus.PROCESSED)
"""

import uuid
from datetime import timedelta

import factory
from django.utils import timezone

from authentication.models import Plan
from authentication.tests.factories import PremiumUserFactory
from billing.models import Subscription, WebhookEvent
from billing.states import BillingPeriod, StripeEventType, WebhookEventStatus


class SubscriptionFactory(factory.django.DjangoModelFactory):
    """
    Factory for Subscription instances.

    Default creates a monthly premium period that started now.
    """

    class Meta:
        model = Subscription
        skip_postgeneration_save = True

    user = factory.SubFactory(PremiumUserFactory)
    start_date = factory.LazyFunction(timezone.now)
    end_date = factory.LazyAttribute(lambda o: o.start_date + timedelta(days=30))
    plan = Plan.PREMIUM
    period = BillingPeriod.MONTHLY


class WebhookEventFactory(factory.django.DjangoModelFactory):
    """
    Factory for WebhookEvent instances.

    Default creates a PENDING checkout.session.completed event whose
    payload carries a checkout session id.

    Example:
        event = WebhookEventFactory(
            event_type=StripeEventType.CUSTOMER_SUBSCRIPTION_DELETED,
            payload={"data": {"object": {"id": "sub_123"}}},
        )
    """

    class Meta:
        model = WebhookEvent
        skip_postgeneration_save = True

    stripe_event_id = factory.Sequence(lambda n: f"evt_test_{n}_{uuid.uuid4().hex[:8]}")
    event_type = StripeEventType.CHECKOUT_SESSION_COMPLETED
    payload = factory.LazyAttribute(
        lambda o: {
            "id": o.stripe_event_id,
            "type": str(o.event_type),
            "data": {
                "object": {
                    "id": f"cs_test_{uuid.uuid4().hex[:12]}",
                    "object": "checkout.session",
                }
            },
        }
    )
    status = WebhookEventStatus.PENDING
