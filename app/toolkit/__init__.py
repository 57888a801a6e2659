"""
Toolkit - Domain-Specific Utilities.

Domain-aware helpers shared by the page apps.

Key components:
    - decorators.py: Domain-aware decorators (require_plan)

Usage:
    from toolkit.decorators import require_plan

Note:
    - This app has no models.
    - For generic infrastructure (base models, services, exceptions), see core/
"""
