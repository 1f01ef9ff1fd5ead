"""ASGI serving layer — request dispatch, error mapping, and response sending."""
