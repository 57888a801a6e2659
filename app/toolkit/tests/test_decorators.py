"""
Tests for toolkit decorators.
"""

import pytest
from django.contrib.auth.models import AnonymousUser
from django.http import HttpResponse
from django.test import RequestFactory, override_settings

from authentication.models import Plan, User
from toolkit.decorators import require_plan


@require_plan()
def paid_view(request):
    return HttpResponse("paid content")


@require_plan([Plan.PREMIUM], redirect_url="/pricing/")
def premium_only_view(request):
    return HttpResponse("premium content")


@pytest.fixture
def rf():
    return RequestFactory()


def make_request(rf, user):
    request = rf.get("/premium/")
    request.user = user
    return request


@pytest.mark.django_db
class TestRequirePlan:
    """Tests for the require_plan decorator."""

    def test_anonymous_is_redirected(self, rf):
        response = paid_view(make_request(rf, AnonymousUser()))

        assert response.status_code == 302
        assert response.url == "/"

    def test_free_user_is_redirected(self, rf, user):
        response = paid_view(make_request(rf, user))

        assert response.status_code == 302
        assert response.url == "/"

    def test_premium_user_passes(self, rf, premium_user):
        response = paid_view(make_request(rf, premium_user))

        assert response.status_code == 200
        assert response.content == b"paid content"

    def test_any_non_free_plan_passes(self, rf, user):
        """Plans other than free are let through when no list is given."""
        User.objects.filter(pk=user.pk).update(plan="team")

        response = paid_view(make_request(rf, user))

        assert response.status_code == 200

    def test_plan_is_read_from_database(self, rf, premium_user):
        """
        Given a session user object still holding the premium plan
        When the stored plan has already been downgraded
        Then access is refused
        """
        User.objects.filter(pk=premium_user.pk).update(plan=Plan.FREE)
        assert premium_user.plan == Plan.PREMIUM

        response = paid_view(make_request(rf, premium_user))

        assert response.status_code == 302

    @override_settings(PREMIUM_REDIRECT_URL="/upgrade/")
    def test_redirect_url_from_settings(self, rf, user):
        response = paid_view(make_request(rf, user))

        assert response.url == "/upgrade/"

    def test_explicit_plan_list(self, rf, user, premium_user):
        User.objects.filter(pk=user.pk).update(plan="team")

        assert premium_only_view(make_request(rf, premium_user)).status_code == 200

        response = premium_only_view(make_request(rf, user))
        assert response.status_code == 302
        assert response.url == "/pricing/"

    def test_preserves_view_name(self):
        assert paid_view.__name__ == "paid_view"
