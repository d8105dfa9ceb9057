"""Observability helpers for provider params sync."""

from .logging import SyncLogger, get_sync_logger

__all__ = ["SyncLogger", "get_sync_logger"]
