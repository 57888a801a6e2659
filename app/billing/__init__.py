"""
Billing app: Stripe webhook reconciliation of user plans.

Receives signed Stripe webhook events, records them in an idempotency
ledger (WebhookEvent) and reconciles the user's plan and Subscription row
inside a single database transaction.
"""
