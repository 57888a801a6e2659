"""
Billing domain models.

- Subscription: The user's current paid period (one per user)
- WebhookEvent: Stripe webhook ledger for idempotent processing
"""

from billing.models.subscription import Subscription
from billing.models.webhook_event import WebhookEvent

__all__ = [
    "Subscription",
    "WebhookEvent",
]
