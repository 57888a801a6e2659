"""
Billing admin configuration.

Operators use these views to inspect a user's current period and to see
why a webhook failed before asking Stripe to resend it.
"""

from django.contrib import admin

from billing.models import Subscription, WebhookEvent


@admin.register(Subscription)
class SubscriptionAdmin(admin.ModelAdmin):
    """Admin configuration for Subscription."""

    list_display = [
        "id",
        "user",
        "plan",
        "period",
        "start_date",
        "end_date",
        "updated_at",
    ]
    list_filter = ["plan", "period"]
    search_fields = ["id", "user__email", "user__stripe_customer_id"]
    readonly_fields = ["id", "created_at", "updated_at"]
    raw_id_fields = ["user"]
    ordering = ["-created_at"]


@admin.register(WebhookEvent)
class WebhookEventAdmin(admin.ModelAdmin):
    """
    Admin configuration for WebhookEvent.

    Webhook events are immutable once received; only status and the
    error message are editable.
    """

    list_display = [
        "id",
        "stripe_event_id",
        "event_type",
        "status",
        "attempt_count",
        "processed_at",
        "created_at",
    ]
    list_filter = ["status", "event_type", "created_at"]
    search_fields = ["id", "stripe_event_id", "event_type"]
    readonly_fields = [
        "id",
        "created_at",
        "updated_at",
        "stripe_event_id",
        "event_type",
        "payload",
        "processed_at",
        "attempt_count",
    ]
    date_hierarchy = "created_at"
    ordering = ["-created_at"]

    fieldsets = (
        (
            None,
            {
                "fields": ("id", "stripe_event_id", "event_type", "status"),
            },
        ),
        (
            "Processing",
            {
                "fields": ("processed_at", "attempt_count"),
            },
        ),
        (
            "Error Info",
            {
                "fields": ("error_message",),
                "classes": ("collapse",),
            },
        ),
        (
            "Payload",
            {
                "fields": ("payload",),
                "classes": ("collapse",),
            },
        ),
        (
            "Timestamps",
            {
                "fields": ("created_at", "updated_at"),
                "classes": ("collapse",),
            },
        ),
    )
