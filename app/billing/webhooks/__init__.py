"""
Webhook handling for billing events from Stripe.

Webhooks are verified, recorded in the WebhookEvent ledger and
reconciled synchronously inside a single transaction.

Usage:
    # In urls.py
    from billing.webhooks.views import stripe_webhook

    urlpatterns = [
        path("webhooks/stripe/", stripe_webhook, name="stripe_webhook"),
    ]
"""

from billing.webhooks.handlers import dispatch_webhook, register_handler
from billing.webhooks.views import stripe_webhook

__all__ = [
    "dispatch_webhook",
    "register_handler",
    "stripe_webhook",
]
