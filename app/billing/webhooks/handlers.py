"""
Webhook event handlers for Stripe events.

This module provides a handler registry and the handlers for the Stripe
events that change a user's plan.

The registry is keyed by StripeEventType. Event types without a handler
fall through to a default arm that logs and acknowledges them.

Handlers run inside the transaction opened by WebhookService and return
a ServiceResult; a failure rolls back everything the handler wrote.

Usage:
    from billing.webhooks.handlers import dispatch_webhook, register_handler

    @register_handler(StripeEventType.CHECKOUT_SESSION_COMPLETED)
    def handle_checkout(webhook_event, config) -> ServiceResult:
        ...

    result = dispatch_webhook(webhook_event, config)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable

from authentication.models import User
from core.services import ServiceResult

from billing.adapters import StripeAdapter
from billing.services import SubscriptionService
from billing.states import StripeEventType

if TYPE_CHECKING:
    from billing.config import BillingConfig
    from billing.models import WebhookEvent


logger = logging.getLogger(__name__)

WebhookHandler = Callable[["WebhookEvent", "BillingConfig"], ServiceResult]


# =============================================================================
# Handler Registry
# =============================================================================


WEBHOOK_HANDLERS: dict[StripeEventType, WebhookHandler] = {}


def register_handler(event_type: StripeEventType) -> Callable:
    """
    Decorator to register a webhook event handler.

    Args:
        event_type: The Stripe event type the handler processes

    Returns:
        Decorator function that registers the handler
    """

    def decorator(func: WebhookHandler) -> WebhookHandler:
        WEBHOOK_HANDLERS[event_type] = func
        logger.debug(f"Registered webhook handler for {event_type}")
        return func

    return decorator


def dispatch_webhook(webhook_event: WebhookEvent, config: BillingConfig) -> ServiceResult:
    """
    Dispatch a webhook event to the appropriate handler.

    Unknown event types are logged and acknowledged with a success result
    so Stripe stops redelivering them.

    Args:
        webhook_event: The WebhookEvent to process
        config: Billing config passed through to the handler

    Returns:
        ServiceResult from the handler, or success if no handler
    """
    handler = WEBHOOK_HANDLERS.get(webhook_event.event_type)

    if not handler:
        logger.info(
            f"Unhandled event type {webhook_event.event_type}",
            extra={"stripe_event_id": webhook_event.stripe_event_id},
        )
        return ServiceResult.success(None)

    logger.info(
        f"Dispatching {webhook_event.event_type} to handler",
        extra={"stripe_event_id": webhook_event.stripe_event_id},
    )

    return handler(webhook_event, config)


# =============================================================================
# Checkout Handlers
# =============================================================================


@register_handler(StripeEventType.CHECKOUT_SESSION_COMPLETED)
def handle_checkout_session_completed(
    webhook_event: WebhookEvent,
    config: BillingConfig,
) -> ServiceResult:
    """
    Grant premium access for a completed checkout.

    Re-fetches the session from Stripe with its line items, finds the user
    by the email entered at checkout and starts a premium period for every
    recurring line item. One-time purchases are skipped.

    Args:
        webhook_event: The WebhookEvent containing the event data
        config: Billing config with the yearly/monthly price IDs

    Returns:
        ServiceResult with the last Subscription written (None if nothing
        was applied), or a USER_NOT_FOUND / INVALID_PRICE_ID failure
    """
    session_id = webhook_event.get_object_id()

    if not session_id:
        logger.error(
            "checkout.session.completed: Could not extract session id",
            extra={"stripe_event_id": webhook_event.stripe_event_id},
        )
        return ServiceResult.failure(
            "Could not extract checkout session id from webhook",
            error_code="INVALID_WEBHOOK_PAYLOAD",
        )

    session = StripeAdapter.retrieve_checkout_session(session_id)

    if not session.customer_email:
        logger.info(
            "Checkout session has no customer email, nothing to apply",
            extra={
                "stripe_event_id": webhook_event.stripe_event_id,
                "checkout_session_id": session_id,
            },
        )
        return ServiceResult.success(None)

    user = (
        User.objects.select_for_update()
        .filter(email__iexact=session.customer_email)
        .first()
    )

    if user is None:
        logger.warning(
            "No user matches checkout email",
            extra={
                "stripe_event_id": webhook_event.stripe_event_id,
                "checkout_session_id": session_id,
            },
        )
        return ServiceResult.failure(
            f"User not found for checkout session {session_id}",
            error_code="USER_NOT_FOUND",
        )

    if not user.stripe_customer_id and session.customer_id:
        user.stripe_customer_id = session.customer_id
        user.save(update_fields=["stripe_customer_id", "updated_at"])
        logger.info(
            "Linked user to Stripe customer",
            extra={"user_id": user.pk, "stripe_customer_id": session.customer_id},
        )

    subscription = None
    for item in session.line_items:
        if not item.is_recurring:
            continue

        result = SubscriptionService.activate_premium(user, item.price_id, config)
        if not result:
            return result
        subscription = result.data

    return ServiceResult.success(subscription)


# =============================================================================
# Subscription Handlers
# =============================================================================


@register_handler(StripeEventType.CUSTOMER_SUBSCRIPTION_DELETED)
def handle_subscription_deleted(
    webhook_event: WebhookEvent,
    config: BillingConfig,
) -> ServiceResult:
    """
    Revoke premium access when Stripe deletes a subscription.

    Re-fetches the subscription to learn its customer and downgrades the
    user linked to that customer.

    Returns:
        ServiceResult with the user, or a USER_NOT_FOUND failure
    """
    subscription_id = webhook_event.get_object_id()

    if not subscription_id:
        logger.error(
            "customer.subscription.deleted: Could not extract subscription id",
            extra={"stripe_event_id": webhook_event.stripe_event_id},
        )
        return ServiceResult.failure(
            "Could not extract subscription id from webhook",
            error_code="INVALID_WEBHOOK_PAYLOAD",
        )

    stripe_subscription = StripeAdapter.retrieve_subscription(subscription_id)
    customer_id = stripe_subscription.customer_id

    user = None
    if customer_id:
        user = (
            User.objects.select_for_update()
            .filter(stripe_customer_id=customer_id)
            .first()
        )

    if user is None:
        logger.warning(
            "No user linked to Stripe customer",
            extra={
                "stripe_event_id": webhook_event.stripe_event_id,
                "stripe_customer_id": customer_id,
            },
        )
        return ServiceResult.failure(
            f"User not found for customer {customer_id}",
            error_code="USER_NOT_FOUND",
        )

    return SubscriptionService.downgrade_to_free(user)
