"""
Celery configuration for the Django application.

Celery runs the billing housekeeping jobs (pruning the webhook ledger)
outside the request cycle. Schedules live in the database via
django-celery-beat so operators can change them from the admin.

This configuration uses Redis as both the message broker and result backend.
Tasks are auto-discovered from all installed Django apps.

Usage:
    from billing.tasks import cleanup_old_webhooks

    cleanup_old_webhooks.delay(days=30)

For more information, see:
https://docs.celeryq.dev/en/stable/django/first-steps-with-django.html
"""

import os

from celery import Celery

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings")

app = Celery("config")

# All Celery settings are prefixed with CELERY_ in settings.py
app.config_from_object("django.conf:settings", namespace="CELERY")

app.autodiscover_tasks()
