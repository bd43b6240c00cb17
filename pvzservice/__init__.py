"""Pickup-point service: domain model, request context, password hashing, transactions, a pickup-point use case and server helpers."""

__version__ = "0.1.0"