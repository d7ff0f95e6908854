"""Loyalty platform dashboard: services, app state and CLI over loyalty_client_sdk."""

__version__ = "0.1.0"
