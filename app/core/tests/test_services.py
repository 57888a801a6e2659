"""
Tests for ServiceResult and BaseService.
"""

import logging

import pytest

from authentication.models import Plan, User
from core.services import BaseService, ServiceResult


class ExampleService(BaseService):
    pass


# =============================================================================
# ServiceResult Tests
# =============================================================================


class TestServiceResult:
    """Tests for the ServiceResult wrapper."""

    def test_success(self):
        result = ServiceResult.success({"id": 1})

        assert result.success is True
        assert result.data == {"id": 1}
        assert result.error is None
        assert bool(result) is True

    def test_failure(self):
        result = ServiceResult.failure("User not found", error_code="USER_NOT_FOUND")

        assert result.success is False
        assert result.data is None
        assert result.error == "User not found"
        assert result.error_code == "USER_NOT_FOUND"
        assert bool(result) is False

    def test_from_exception_defaults_code_to_class_name(self):
        result = ServiceResult.from_exception(ValueError("bad value"))

        assert result.error == "bad value"
        assert result.error_code == "VALUEERROR"

    def test_from_exception_with_code(self):
        result = ServiceResult.from_exception(RuntimeError("boom"), "WEBHOOK_PROCESSING_ERROR")

        assert result.error_code == "WEBHOOK_PROCESSING_ERROR"


# =============================================================================
# BaseService Tests
# =============================================================================


class TestBaseService:
    """Tests for BaseService helpers."""

    def test_logger_name(self):
        assert ExampleService.get_logger().name == f"{__name__}.ExampleService"

    @pytest.mark.django_db
    def test_atomic_rolls_back_on_error(self, user):
        with pytest.raises(RuntimeError):
            with ExampleService.atomic():
                User.objects.filter(pk=user.pk).update(plan=Plan.PREMIUM)
                raise RuntimeError("boom")

        user.refresh_from_db()
        assert user.plan == Plan.FREE

    def test_handle_exception_logs_and_wraps(self, caplog):
        with caplog.at_level(logging.ERROR):
            result = ExampleService.handle_exception(
                KeyError("missing"),
                context="Loading price",
                error_code="PRICE_LOOKUP_FAILED",
            )

        assert result.success is False
        assert result.error_code == "PRICE_LOOKUP_FAILED"
        assert "Loading price" in caplog.text
