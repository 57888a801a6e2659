"""
Authentication models.

User is the custom user model with email-based authentication. Besides the
Django auth bookkeeping it carries the two billing attributes the Stripe
webhook reconciles:

- stripe_customer_id: the Stripe Customer the user pays through
- plan: the access tier the premium pages are gated on

Related files:
    - managers.py: Custom user manager for email-based creation
    - billing/webhooks/handlers.py: writes plan and stripe_customer_id
    - toolkit/decorators.py: reads plan to gate views
"""

from django.contrib.auth.models import AbstractBaseUser, PermissionsMixin
from django.db import models

from authentication.managers import UserManager


class Plan(models.TextChoices):
    """
    Access tier of a user.

    FREE is the default for every new account. The webhook handler moves a
    user to PREMIUM on a completed recurring checkout and back to FREE when
    Stripe reports the subscription deleted.
    """

    FREE = "free", "Free"
    PREMIUM = "premium", "Premium"


class User(AbstractBaseUser, PermissionsMixin):
    """
    Custom User model using email as the primary identifier.

    Fields:
        email: Primary identifier, unique, used for login
        stripe_customer_id: Stripe Customer ID (cus_xxx), set on first checkout
        plan: Current access tier (free/premium)
        is_active: Whether the user account is active
        is_staff: Whether the user can access Django admin
        date_joined: When the user account was created
        updated_at: When the user record was last modified

    Usage:
        user = User.objects.create_user(
            email='user@example.com',
            password='securepassword'
        )
        user.plan  # 'free'
        user.is_premium  # False
    """

    email = models.EmailField(
        unique=True,
        db_index=True,
        max_length=254,
        help_text="User's email address (primary identifier)",
    )

    # Billing
    stripe_customer_id = models.CharField(
        max_length=255,
        unique=True,
        null=True,
        blank=True,
        help_text="Stripe Customer ID (cus_xxx)",
    )
    plan = models.CharField(
        max_length=20,
        choices=Plan.choices,
        default=Plan.FREE,
        db_index=True,
        help_text="Current access tier",
    )

    # Account status flags
    is_active = models.BooleanField(
        default=True,
        help_text="Whether this user account is active. Deselect instead of deleting.",
    )
    is_staff = models.BooleanField(
        default=False,
        help_text="Whether the user can access the admin site.",
    )

    date_joined = models.DateTimeField(
        auto_now_add=True,
        help_text="When the user account was created",
    )
    updated_at = models.DateTimeField(
        auto_now=True,
        help_text="When the user record was last modified",
    )

    USERNAME_FIELD = "email"
    REQUIRED_FIELDS = []

    objects = UserManager()

    class Meta:
        verbose_name = "user"
        verbose_name_plural = "users"
        ordering = ["-date_joined"]

    def __str__(self):
        return self.email

    @property
    def is_premium(self) -> bool:
        """Whether the user currently has premium access."""
        return self.plan == Plan.PREMIUM
