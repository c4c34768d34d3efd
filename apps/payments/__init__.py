"""Stripe payments: payment intents for bookings and the webhook relay."""
