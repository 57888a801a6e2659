"""
Test configuration and fixtures for authentication tests.

The user and premium_user fixtures live in the root conftest so the
billing and premium tests can share them.
"""

import pytest

from authentication.models import User


@pytest.fixture
def superuser(db):
    """Create a superuser with admin privileges."""
    return User.objects.create_superuser(
        email="admin@example.com",
        password="AdminPass123!",
    )
