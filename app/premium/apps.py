"""
Premium app configuration.
"""

from django.apps import AppConfig


class PremiumConfig(AppConfig):
    """Configuration for the premium application."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "premium"
    verbose_name = "Premium"
