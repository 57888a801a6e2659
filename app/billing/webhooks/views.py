"""
Webhook endpoint view for Stripe.

The view:
1. Verifies the webhook signature
2. Hands the verified event to WebhookService
3. Maps the ServiceResult to a plain-text response

Processing is synchronous: the plan change is committed before Stripe
gets its 200, and any failure makes Stripe redeliver.

Usage:
    # In urls.py
    from billing.webhooks.views import stripe_webhook

    urlpatterns = [
        path("webhooks/stripe/", stripe_webhook, name="stripe_webhook"),
    ]
"""

from __future__ import annotations

import logging

from django.http import HttpRequest, HttpResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_POST

from billing.adapters import StripeAdapter
from billing.config import BillingConfig
from billing.exceptions import StripeInvalidRequestError
from billing.webhooks.services import WebhookService


logger = logging.getLogger(__name__)


@csrf_exempt
@require_POST
def stripe_webhook(request: HttpRequest, config: BillingConfig | None = None) -> HttpResponse:
    """
    Receive and reconcile Stripe webhook events.

    Security:
    - Signature verification prevents spoofed webhooks; nothing touches
      the database before it passes
    - CSRF exemption required for external webhooks
    - Only POST requests accepted (405 otherwise)

    Args:
        request: Incoming request with the raw body and Stripe-Signature header
        config: Billing config; built from settings when not supplied

    Returns:
        HttpResponse with status:
        - 200: Event applied, already applied, or of an unhandled type
        - 400: Invalid signature or processing failure

    Example Stripe-Signature header:
        t=1614556800,v1=xxx,v0=yyy
    """
    config = config or BillingConfig.from_settings()
    payload = request.body
    signature = request.headers.get("Stripe-Signature")

    try:
        event_data = StripeAdapter.verify_webhook_signature(
            payload,
            signature,
            config.webhook_secret,
        )
    except StripeInvalidRequestError as e:
        logger.warning(
            "Webhook signature verification failed",
            extra={"error": str(e)},
        )
        return HttpResponse(f"Webhook Error: {e.message}", status=400)
    except Exception as e:
        logger.error(
            f"Unexpected error verifying webhook: {type(e).__name__}",
            exc_info=True,
        )
        return HttpResponse("Webhook Error: verification error", status=400)

    result = WebhookService.process_event(event_data, config)

    if not result:
        return HttpResponse("Webhook Error", status=400)

    return HttpResponse("Webhook received", status=200)
