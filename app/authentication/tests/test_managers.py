"""
Tests for UserManager.

The UserManager provides:
- create_user(): Creates regular users with optional password
- create_superuser(): Creates admin users with elevated privileges
"""

import pytest

from authentication.models import Plan, User


class TestUserManagerCreateUser:
    """Tests for UserManager.create_user() method."""

    def test_creates_user_with_email_and_password(self, db):
        """
        Given valid email and password
        When create_user is called
        Then a user is created with those credentials
        """
        # Act
        user = User.objects.create_user(
            email="mgr_create_user@example.com", password="SecurePass123!"
        )

        # Assert
        assert user.pk is not None
        assert user.email == "mgr_create_user@example.com"
        assert user.check_password("SecurePass123!") is True

    def test_new_user_starts_on_free_plan_without_customer(self, db):
        """
        Given no billing fields
        When create_user is called
        Then the user is on the free plan with no Stripe customer
        """
        user = User.objects.create_user(email="fresh@example.com")

        assert user.plan == Plan.FREE
        assert user.stripe_customer_id is None

    def test_normalizes_email_domain_to_lowercase(self, db):
        """
        Given an email with uppercase characters in domain
        When create_user is called
        Then only the domain portion is lowercased
        """
        user = User.objects.create_user(
            email="Test.User@EXAMPLE.COM", password="TestPass123!"
        )

        assert user.email == "Test.User@example.com"

    @pytest.mark.parametrize("email", ["", None])
    def test_raises_valueerror_without_email(self, db, email):
        """
        Given an empty or missing email
        When create_user is called
        Then a ValueError is raised with descriptive message
        """
        with pytest.raises(ValueError) as exc_info:
            User.objects.create_user(email=email, password="TestPass123!")

        assert "Email field must be set" in str(exc_info.value)

    def test_sets_unusable_password_when_none_given(self, db):
        """
        Given no password
        When create_user is called
        Then the account cannot log in with a password
        """
        user = User.objects.create_user(email="nopass@example.com")

        assert user.has_usable_password() is False

    def test_regular_user_is_not_staff(self, db):
        user = User.objects.create_user(email="regular@example.com")

        assert user.is_staff is False
        assert user.is_superuser is False


class TestUserManagerCreateSuperuser:
    """Tests for UserManager.create_superuser() method."""

    def test_creates_superuser_with_admin_flags(self, db):
        """
        Given valid email and password
        When create_superuser is called
        Then the user has staff and superuser flags set
        """
        admin = User.objects.create_superuser(
            email="admin_mgr@example.com", password="AdminPass123!"
        )

        assert admin.is_staff is True
        assert admin.is_superuser is True
        assert admin.plan == Plan.FREE

    @pytest.mark.parametrize("flag", ["is_staff", "is_superuser"])
    def test_rejects_superuser_without_admin_flag(self, db, flag):
        """
        Given is_staff=False or is_superuser=False
        When create_superuser is called
        Then a ValueError is raised
        """
        with pytest.raises(ValueError) as exc_info:
            User.objects.create_superuser(
                email="bad_admin@example.com",
                password="AdminPass123!",
                **{flag: False},
            )

        assert f"{flag}=True" in str(exc_info.value)
