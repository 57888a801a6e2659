"""
Custom decorators for domain-specific functionality.

This module provides domain-aware decorators for:
- Plan requirement checking on page views

Usage:
    from toolkit.decorators import require_plan

    @require_plan()
    def premium_page(request):
        ...
"""

from __future__ import annotations

import functools
import logging
from typing import Callable

from django.conf import settings
from django.contrib.auth import get_user_model
from django.shortcuts import redirect

from authentication.models import Plan

logger = logging.getLogger(__name__)


def require_plan(
    plan_names: list[str] | None = None,
    redirect_url: str | None = None,
):
    """
    Require a paid plan to access a view.

    Anonymous visitors are redirected. For signed-in users the plan is
    read from the database on every request rather than from the session
    user, so a downgrade applied by a webhook takes effect immediately.

    Args:
        plan_names: Optional list of allowed plans. If None, every plan
                    except free is accepted.
        redirect_url: Where to send rejected visitors
                      (defaults to settings.PREMIUM_REDIRECT_URL)

    Returns:
        Decorator function

    Example:
        @require_plan()  # Anything but free
        def premium_page(request):
            ...

        @require_plan([Plan.PREMIUM])
        def premium_only(request):
            ...
    """

    def decorator(func: Callable):
        @functools.wraps(func)
        def wrapper(request, *args, **kwargs):
            target = redirect_url or getattr(settings, "PREMIUM_REDIRECT_URL", "/")

            if not request.user.is_authenticated:
                return redirect(target)

            plan = (
                get_user_model()
                .objects.filter(pk=request.user.pk)
                .values_list("plan", flat=True)
                .first()
            )

            if plan_names is None:
                allowed = plan != Plan.FREE
            else:
                allowed = plan in plan_names

            if not allowed:
                logger.info(
                    "Plan gate rejected user",
                    extra={"user_id": request.user.pk, "plan": plan},
                )
                return redirect(target)

            return func(request, *args, **kwargs)

        return wrapper

    return decorator
