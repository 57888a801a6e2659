"""
Views for premium pages.
"""

from django.shortcuts import render
from django.views.decorators.http import require_GET

from toolkit.decorators import require_plan


@require_GET
@require_plan()
def premium_page(request):
    """Render the premium page for users on a paid plan."""
    return render(request, "premium/page.html")
