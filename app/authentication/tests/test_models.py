"""
Tests for the User model billing fields.
"""

import pytest
from django.db import IntegrityError

from authentication.models import Plan, User
from authentication.tests.factories import UserFactory


class TestUserModel:
    """Tests for User fields and helpers."""

    def test_str_returns_email(self, user):
        assert str(user) == user.email

    def test_is_premium_reflects_plan(self, user, premium_user):
        assert user.is_premium is False
        assert premium_user.is_premium is True

    def test_plan_choices_are_free_and_premium(self):
        assert set(Plan.values) == {"free", "premium"}

    def test_stripe_customer_id_is_unique(self, db):
        """
        Given a user linked to a Stripe customer
        When another user is saved with the same customer id
        Then the database rejects it
        """
        UserFactory(stripe_customer_id="cus_shared")

        with pytest.raises(IntegrityError):
            UserFactory(stripe_customer_id="cus_shared")

    def test_many_users_without_customer_allowed(self, db):
        """Nullable unique column accepts several NULLs."""
        UserFactory()
        UserFactory()

        assert User.objects.filter(stripe_customer_id__isnull=True).count() == 2
