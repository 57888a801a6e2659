"""
Add celery-beat schedule for pruning the webhook ledger.

Runs billing.tasks.cleanup_old_webhooks once a day.
"""

from django.db import migrations

TASK_NAME = "Clean Up Processed Webhook Events"


def create_periodic_task(apps, schema_editor):
    """Create the daily cleanup task."""
    IntervalSchedule = apps.get_model("django_celery_beat", "IntervalSchedule")
    PeriodicTask = apps.get_model("django_celery_beat", "PeriodicTask")

    schedule, _ = IntervalSchedule.objects.get_or_create(
        every=1,
        period="days",
    )

    PeriodicTask.objects.get_or_create(
        name=TASK_NAME,
        defaults={
            "task": "billing.tasks.cleanup_old_webhooks",
            "interval": schedule,
            "enabled": True,
            "description": (
                "Deletes processed Stripe webhook events older than "
                "WEBHOOK_RETENTION_DAYS, and failed or pending events untouched "
                "for WEBHOOK_FAILED_RETENTION_DAYS."
            ),
        },
    )


def remove_periodic_task(apps, schema_editor):
    """Remove the periodic task on migration rollback."""
    PeriodicTask = apps.get_model("django_celery_beat", "PeriodicTask")

    PeriodicTask.objects.filter(name=TASK_NAME).delete()


class Migration(migrations.Migration):
    dependencies = [
        ("billing", "0001_initial"),
        ("django_celery_beat", "0019_alter_periodictasks_options"),
    ]

    operations = [
        migrations.RunPython(create_periodic_task, remove_periodic_task),
    ]
