"""
Base service layer patterns for business logic encapsulation.

This module provides the two building blocks every domain service uses:
- ServiceResult: Result wrapper for expected (business) failures
- BaseService: Base class with logger and transaction helpers

Pattern Comparison:
    - ServiceResult: Use for expected failures (unknown user, invalid price)
    - Exceptions: Use for unexpected failures (database errors, Stripe outages)

Usage:
    from core.services import BaseService, ServiceResult

    class PlanService(BaseService):
        @classmethod
        def downgrade(cls, user: User) -> ServiceResult[User]:
            if user.plan == Plan.FREE:
                return ServiceResult.failure("Already free", error_code="NO_CHANGE")

            with cls.atomic():
                user.plan = Plan.FREE
                user.save(update_fields=["plan", "updated_at"])

            cls.get_logger().info(f"Downgraded user {user.pk}")
            return ServiceResult.success(user)

    # At the HTTP boundary
    result = PlanService.downgrade(user)
    if not result:
        return HttpResponse(result.error, status=400)
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import TYPE_CHECKING, Generic, TypeVar

from django.db import transaction

if TYPE_CHECKING:
    from collections.abc import Generator

# Generic type for ServiceResult data
T = TypeVar("T")


@dataclass
class ServiceResult(Generic[T]):
    """
    Standard result wrapper for service operations.

    Makes business failures explicit values that travel back to the caller
    (usually a view) which decides how to present them.

    Attributes:
        success: Whether the operation succeeded
        data: Result data if successful (None if failed)
        error: Error message if failed (None if successful)
        error_code: Machine-readable error code

    Usage:
        return ServiceResult.success(subscription)
        return ServiceResult.failure("User not found", error_code="USER_NOT_FOUND")

        result = SubscriptionService.activate_premium(user, price_id, config)
        if result.success:
            subscription = result.data
        else:
            logger.warning(f"{result.error} ({result.error_code})")
    """

    success: bool
    data: T | None = None
    error: str | None = None
    error_code: str | None = None

    @classmethod
    def success(cls, data: T) -> ServiceResult[T]:
        """
        Create a successful result.

        Args:
            data: The result data

        Returns:
            ServiceResult with success=True and data set
        """
        return cls(success=True, data=data)

    @classmethod
    def failure(
        cls,
        error: str,
        error_code: str | None = None,
    ) -> ServiceResult[T]:
        """
        Create a failed result.

        Args:
            error: Human-readable error message
            error_code: Machine-readable error code

        Returns:
            ServiceResult with success=False and error details
        """
        return cls(
            success=False,
            error=error,
            error_code=error_code,
        )

    @classmethod
    def from_exception(cls, exc: Exception, error_code: str | None = None) -> ServiceResult[T]:
        """
        Create a failed result from an exception.

        Args:
            exc: The caught exception
            error_code: Optional error code (defaults to exception class name)

        Returns:
            ServiceResult with error details from exception
        """
        return cls(
            success=False,
            error=str(exc),
            error_code=error_code or exc.__class__.__name__.upper(),
        )

    def __bool__(self) -> bool:
        """Allow `if result:` as shorthand for `if result.success:`."""
        return self.success


class BaseService:
    """
    Base class for service layer classes.

    Services are stateless: use @classmethod or @staticmethod only.
    Return ServiceResult for expected failures, raise for unexpected ones.
    """

    @classmethod
    def get_logger(cls) -> logging.Logger:
        """
        Get logger for this service.

        Returns a logger named after the service class so log output
        can be filtered per service.
        """
        return logging.getLogger(f"{cls.__module__}.{cls.__name__}")

    @classmethod
    @contextmanager
    def atomic(cls) -> Generator[None, None, None]:
        """
        Execute operations in a database transaction.

        Thin wrapper around Django's transaction.atomic() that makes
        transaction boundaries explicit in service code. Nested use
        creates a savepoint.

        Example:
            with cls.atomic():
                subscription.save()
                user.save()
                # If user.save() fails, the subscription write is rolled back
        """
        with transaction.atomic():
            yield

    @classmethod
    def handle_exception(
        cls,
        exc: Exception,
        context: str = "",
        error_code: str | None = None,
        log_level: int = logging.ERROR,
    ) -> ServiceResult:
        """
        Log an unexpected exception and convert it to a ServiceResult.

        Args:
            exc: The caught exception
            context: Additional context for the log message
            error_code: Optional error code for the result
            log_level: Logging level (default ERROR)

        Returns:
            ServiceResult with error details
        """
        message = f"{context}: {exc}" if context else str(exc)
        cls.get_logger().log(log_level, message, exc_info=True)
        return ServiceResult.from_exception(exc, error_code)
