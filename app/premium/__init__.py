"""
Premium app - plan-gated pages.

Pages here are wrapped in toolkit.decorators.require_plan, so visitors
without a paid plan are sent to PREMIUM_REDIRECT_URL.
"""
