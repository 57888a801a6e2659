"""
Authentication application.

Custom email-based user model carrying the billing fields the rest of the
project reads and writes.

Key components:
    - User model: Email login, plan (free/premium), stripe_customer_id
    - UserManager: create_user / create_superuser

Usage:
    from authentication.models import Plan, User
"""
