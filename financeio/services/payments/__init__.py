"""Servizi dei provider di pagamento (Stripe e PayPal)."""
