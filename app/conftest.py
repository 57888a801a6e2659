"""
Root pytest configuration for the Django project.

This module configures pytest-django and provides project-wide fixtures.
App-specific fixtures are defined in each app's tests/conftest.py.
"""

import os

import pytest

# Ensure Django settings are configured before any tests run
os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings_test")


def pytest_collection_modifyitems(items):
    """
    Auto-mark tests based on filename patterns.

    Mapping:
    - test_integration.py → e2e (full webhook-to-page workflows)
    - test_views.py, test_services.py, test_tasks.py, etc. → integration
    - test_models.py, test_config.py, test_decorators.py, etc. → unit
    - Unmatched files → integration (safe default for Django)

    Explicit markers on test functions/classes take precedence.
    """
    e2e_patterns = ["test_integration.py"]

    integration_patterns = [
        "test_views.py",
        "test_services.py",
        "test_tasks.py",
        "test_handlers.py",
        "test_decorators.py",
    ]

    unit_patterns = [
        "test_models.py",
        "test_managers.py",
        "test_config.py",
        "test_exceptions.py",
        "test_stripe_adapter.py",
    ]

    for item in items:
        existing_markers = {m.name for m in item.iter_markers()}
        if existing_markers & {"unit", "integration", "e2e"}:
            continue

        filename = str(item.fspath).split("/")[-1]

        if any(pattern in filename for pattern in e2e_patterns):
            item.add_marker(pytest.mark.e2e)
        elif any(pattern in filename for pattern in integration_patterns):
            item.add_marker(pytest.mark.integration)
        elif any(pattern in filename for pattern in unit_patterns):
            item.add_marker(pytest.mark.unit)
        else:
            # Default: integration (safe for Django where most tests hit DB)
            item.add_marker(pytest.mark.integration)


@pytest.fixture
def billing_config():
    """
    Billing config matching the price ids in config.settings_test.

    Passed explicitly to services and handlers instead of reading settings.
    """
    from billing.config import BillingConfig

    return BillingConfig(
        webhook_secret="whsec_test_fixture",
        yearly_price_id="price_test_yearly",
        monthly_price_id="price_test_monthly",
    )


@pytest.fixture
def user(db):
    """Create a basic free-plan user."""
    from authentication.tests.factories import UserFactory

    return UserFactory()


@pytest.fixture
def premium_user(db):
    """Create a premium user linked to a Stripe customer."""
    from authentication.tests.factories import PremiumUserFactory

    return PremiumUserFactory()
