"""
URL configuration for the premium app.

Routes:
    - GET / - Premium page (redirects visitors without a paid plan)

All routes are prefixed with /premium/ when included in the main URLconf.
"""

from django.urls import path

from premium.views import premium_page

app_name = "premium"

urlpatterns = [
    path("", premium_page, name="page"),
]
