"""
Celery tasks for billing housekeeping.

Usage:
    from billing.tasks import cleanup_old_webhooks

    # Normally run daily by celery-beat (see migration 0002)
    cleanup_old_webhooks.delay()
"""

from __future__ import annotations

import logging
from datetime import timedelta

from celery import shared_task
from django.conf import settings
from django.utils import timezone

from billing.models import WebhookEvent
from billing.states import WebhookEventStatus

logger = logging.getLogger(__name__)


DEFAULT_WEBHOOK_RETENTION_DAYS = 90
DEFAULT_WEBHOOK_FAILED_RETENTION_DAYS = 365


@shared_task
def cleanup_old_webhooks(days: int | None = None, failed_days: int | None = None) -> dict:
    """
    Periodic task to clean up old webhook events.

    Processed events are removed once they were processed more than
    `days` ago. Failed and pending events are kept longer for
    investigation and removed once untouched for `failed_days`; by then
    Stripe has long stopped redelivering them.

    Args:
        days: Retention for processed events
              (defaults to settings.WEBHOOK_RETENTION_DAYS)
        failed_days: Retention for failed/pending events
                     (defaults to settings.WEBHOOK_FAILED_RETENTION_DAYS)

    Returns:
        Dict with the total and per-group counts of webhooks deleted
    """
    if days is None:
        days = getattr(settings, "WEBHOOK_RETENTION_DAYS", DEFAULT_WEBHOOK_RETENTION_DAYS)
    if failed_days is None:
        failed_days = getattr(
            settings,
            "WEBHOOK_FAILED_RETENTION_DAYS",
            DEFAULT_WEBHOOK_FAILED_RETENTION_DAYS,
        )

    now = timezone.now()
    cutoff = now - timedelta(days=days)
    failed_cutoff = now - timedelta(days=failed_days)

    processed_deleted, _ = WebhookEvent.objects.filter(
        status=WebhookEventStatus.PROCESSED,
        processed_at__lt=cutoff,
    ).delete()

    unresolved_deleted, _ = WebhookEvent.objects.filter(
        status__in=[WebhookEventStatus.FAILED, WebhookEventStatus.PENDING],
        updated_at__lt=failed_cutoff,
    ).delete()

    deleted_count = processed_deleted + unresolved_deleted
    if deleted_count > 0:
        logger.info(
            f"Deleted {deleted_count} old webhook events",
            extra={
                "processed_deleted": processed_deleted,
                "unresolved_deleted": unresolved_deleted,
                "cutoff_date": cutoff.isoformat(),
                "failed_cutoff_date": failed_cutoff.isoformat(),
            },
        )

    return {
        "deleted_count": deleted_count,
        "processed_deleted": processed_deleted,
        "unresolved_deleted": unresolved_deleted,
    }
