"""
WebhookEvent model for Stripe webhook event tracking.

Stores every verified webhook event received from Stripe for idempotent
processing and audit trails. The unique stripe_event_id constraint
ensures redelivered webhooks are detected and never reconciled twice.

Usage:
    from billing.models import WebhookEvent

    event, created = WebhookEvent.objects.get_or_create(
        stripe_event_id="evt_1234567890",
        defaults={
            "event_type": "checkout.session.completed",
            "payload": event_data,
        },
    )

    if event.is_processed:
        # Redelivery of an event we already applied
        return ServiceResult.success(event)
"""

from __future__ import annotations

from django.db import models
from django.utils import timezone

from core.model_mixins import UUIDPrimaryKeyMixin
from core.models import BaseModel

from billing.states import WebhookEventStatus


class WebhookEvent(UUIDPrimaryKeyMixin, BaseModel):
    """
    Tracks Stripe webhook events for idempotent processing.

    Processing Flow:
        1. Webhook arrives, verify Stripe signature
        2. Insert/get WebhookEvent with stripe_event_id
        3. Lock the row; if PROCESSED -> acknowledge (duplicate)
        4. Route to the handler for its event type
        5. Mark PROCESSED, or roll back and mark FAILED

    Fields:
        stripe_event_id: Unique Stripe Event ID (evt_xxx)
        event_type: Type of webhook event
        payload: Full JSON payload from Stripe
        status: Processing status
        processed_at: When event was successfully processed
        error_message: Error details if processing failed
        attempt_count: Number of processing attempts
    """

    # ==========================================================================
    # Event Identification
    # ==========================================================================

    stripe_event_id = models.CharField(
        max_length=255,
        unique=True,
        help_text="Stripe Event ID (evt_xxx) - unique constraint for idempotency",
    )

    event_type = models.CharField(
        max_length=100,
        help_text="Stripe event type (e.g., 'checkout.session.completed')",
    )

    payload = models.JSONField(
        help_text="Full webhook payload from Stripe (JSON)",
    )

    # ==========================================================================
    # Processing Status
    # ==========================================================================

    status = models.CharField(
        max_length=20,
        choices=WebhookEventStatus.choices,
        default=WebhookEventStatus.PENDING,
        help_text="Current processing status",
    )

    processed_at = models.DateTimeField(
        null=True,
        blank=True,
        help_text="When event was successfully processed",
    )

    error_message = models.TextField(
        null=True,
        blank=True,
        help_text="Error message if processing failed",
    )

    attempt_count = models.PositiveSmallIntegerField(
        default=0,
        help_text="Number of processing attempts",
    )

    class Meta:
        ordering = ["-created_at"]
        verbose_name = "Webhook Event"
        verbose_name_plural = "Webhook Events"
        indexes = [
            models.Index(fields=["status", "created_at"], name="billing_wh_status_created_idx"),
            models.Index(fields=["event_type", "created_at"], name="billing_wh_type_created_idx"),
        ]

    def __str__(self) -> str:
        return f"WebhookEvent({self.stripe_event_id}, {self.event_type})"

    # ==========================================================================
    # Properties
    # ==========================================================================

    @property
    def is_processed(self) -> bool:
        return self.status == WebhookEventStatus.PROCESSED

    # ==========================================================================
    # Helper Methods
    # ==========================================================================

    def mark_processed(self) -> None:
        """
        Mark event as successfully processed.

        Note: Does not save - caller must save after calling.
        """
        self.status = WebhookEventStatus.PROCESSED
        self.processed_at = timezone.now()
        self.error_message = None

    def get_object(self) -> dict:
        """
        Return the Stripe object embedded in the payload (data.object).

        Returns:
            The object dict, or an empty dict for malformed payloads
        """
        try:
            obj = self.payload.get("data", {}).get("object", {})
        except (AttributeError, TypeError):
            return {}
        return obj if isinstance(obj, dict) else {}

    def get_object_id(self) -> str | None:
        """
        Extract the primary object ID from the webhook payload.

        For checkout.session.completed this is the session ID (cs_xxx),
        for customer.subscription.deleted the subscription ID (sub_xxx).
        """
        return self.get_object().get("id")
