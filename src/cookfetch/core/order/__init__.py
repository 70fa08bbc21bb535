"""Persisted cookbook order file."""

from cookfetch.core.order.store import OrderStore

__all__ = ["OrderStore"]
