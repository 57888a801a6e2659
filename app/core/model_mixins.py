"""
Reusable model mixins.

Mixins are abstract models; list them before BaseModel in the bases so
their fields come first:

    class WebhookEvent(UUIDPrimaryKeyMixin, BaseModel):
        ...
"""

from __future__ import annotations

import uuid

from django.db import models


class UUIDPrimaryKeyMixin(models.Model):
    """
    Use UUID as primary key instead of auto-increment integer.

    IDs are non-guessable and don't reveal record counts, which matters
    for rows that show up in admin URLs and logs (webhook ledger entries,
    subscriptions).

    Fields:
        id: UUIDField as primary key (auto-generated)
    """

    id = models.UUIDField(
        primary_key=True,
        default=uuid.uuid4,
        editable=False,
        help_text="Unique identifier (UUID v4)",
    )

    class Meta:
        abstract = True
