"""Persistence for Trade Journal."""

from tradejournal.db.store import DEFAULT_NAMESPACE, StateStore

__all__ = ["StateStore", "DEFAULT_NAMESPACE"]
