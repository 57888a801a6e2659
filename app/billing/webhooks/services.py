"""
Webhook processing service.

WebhookService turns a verified Stripe event into applied state:

1. Record the event in the WebhookEvent ledger (keyed by Stripe event id)
2. Lock the ledger row; skip events already processed
3. Dispatch to the handler for the event type, all inside one transaction
4. Mark the event processed, or roll back and mark it failed

Usage:
    from billing.webhooks.services import WebhookService

    result = WebhookService.process_event(event_data, config)
    status = 200 if result else 400
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from django.db import DatabaseError, transaction
from django.db.models import F
from django.utils import timezone

from core.exceptions import BaseApplicationError
from core.services import BaseService, ServiceResult

from billing.models import WebhookEvent
from billing.states import WebhookEventStatus
from billing.webhooks.handlers import dispatch_webhook

if TYPE_CHECKING:
    from billing.config import BillingConfig


class WebhookService(BaseService):
    """
    Idempotent, transactional processing of Stripe webhook events.

    Business failures come back as ServiceResult failures from the
    handlers. Unexpected exceptions (Stripe outages, database errors)
    are logged with traceback and converted to failures here, so the
    caller only ever branches on the result.
    """

    @classmethod
    def process_event(
        cls,
        event_data: dict[str, Any],
        config: BillingConfig,
    ) -> ServiceResult[WebhookEvent]:
        """
        Reconcile one verified Stripe event.

        Args:
            event_data: Event dict returned by signature verification
            config: Billing config passed through to the handlers

        Returns:
            ServiceResult with the WebhookEvent on success (including an
            already-processed redelivery), or the handler's failure
        """
        logger = cls.get_logger()

        stripe_event_id = event_data.get("id")
        event_type = event_data.get("type")

        if not stripe_event_id or not event_type:
            logger.warning("Webhook event missing id or type")
            return ServiceResult.failure(
                "Webhook event is missing id or type",
                error_code="INVALID_WEBHOOK_PAYLOAD",
            )

        log_context = {"stripe_event_id": stripe_event_id, "event_type": event_type}
        logger.info(f"Received Stripe webhook: {event_type}", extra=log_context)

        try:
            webhook_event, created = WebhookEvent.objects.get_or_create(
                stripe_event_id=stripe_event_id,
                defaults={
                    "event_type": event_type,
                    "payload": event_data,
                    "status": WebhookEventStatus.PENDING,
                },
            )
            if not created:
                logger.info(
                    f"Webhook already recorded with status: {webhook_event.status}",
                    extra=log_context,
                )

            result = cls._reconcile(webhook_event, config)
        except BaseApplicationError as exc:
            logger.exception("Webhook processing raised", extra=log_context)
            result = ServiceResult.failure(exc.message, error_code=exc.error_code)
        except Exception as exc:
            result = cls.handle_exception(
                exc,
                f"Webhook processing raised for {stripe_event_id}",
                error_code="WEBHOOK_PROCESSING_ERROR",
            )

        if not result:
            logger.warning(
                f"Webhook processing failed: {result.error}",
                extra={**log_context, "error_code": result.error_code},
            )
            cls._record_failure(stripe_event_id, result)

        return result

    @classmethod
    def _reconcile(
        cls,
        webhook_event: WebhookEvent,
        config: BillingConfig,
    ) -> ServiceResult[WebhookEvent]:
        """
        Dispatch the event under a row lock in a single transaction.

        A failed handler result rolls back every write the handler made.
        """
        with cls.atomic():
            locked = WebhookEvent.objects.select_for_update().get(pk=webhook_event.pk)

            if locked.is_processed:
                cls.get_logger().info(
                    "Webhook already processed, skipping",
                    extra={"stripe_event_id": locked.stripe_event_id},
                )
                return ServiceResult.success(locked)

            result = dispatch_webhook(locked, config)
            if not result:
                transaction.set_rollback(True)
                return result

            locked.attempt_count += 1
            locked.mark_processed()
            locked.save(
                update_fields=[
                    "status",
                    "processed_at",
                    "error_message",
                    "attempt_count",
                    "updated_at",
                ]
            )

        cls.get_logger().info(
            "Webhook processed",
            extra={
                "stripe_event_id": locked.stripe_event_id,
                "event_type": locked.event_type,
            },
        )
        return ServiceResult.success(locked)

    @classmethod
    def _record_failure(cls, stripe_event_id: str, result: ServiceResult) -> None:
        """
        Mark the ledger entry failed, outside the rolled-back transaction.
        """
        try:
            WebhookEvent.objects.filter(stripe_event_id=stripe_event_id).exclude(
                status=WebhookEventStatus.PROCESSED
            ).update(
                status=WebhookEventStatus.FAILED,
                error_message=f"[{result.error_code}] {result.error}",
                attempt_count=F("attempt_count") + 1,
                updated_at=timezone.now(),
            )
        except DatabaseError:
            # The response is a 400 either way; Stripe redelivers.
            cls.get_logger().exception(
                "Could not record webhook failure",
                extra={"stripe_event_id": stripe_event_id},
            )
