"""
Structured logging utility for draft builders and appliers.

This module provides a consistent logging interface for every provider
family, ensuring structured log lines with standard fields like provider
and model.
"""

import logging
from typing import Any, Dict, Optional


class SyncLogger:
    """Structured logger for provider draft sync."""

    def __init__(self, provider_name: str):
        """
        Initialize logger for a specific provider family.

        Args:
            provider_name: Name of the provider (e.g., "openai", "gemini")
        """
        self.provider = provider_name
        self.logger = logging.getLogger(f"provider_params_sync.providers.{provider_name}")

    def _format_message(self, message: str, **kwargs) -> str:
        """Format message with structured fields."""
        fields = [f"provider={self.provider}"]

        for key, value in kwargs.items():
            if value is not None:
                fields.append(f"{key}={value}")

        return f"[{' '.join(fields)}] {message}"

    def debug(self, message: str, model: Optional[str] = None, **kwargs):
        """Log debug message with structured fields."""
        self.logger.debug(self._format_message(message, model=model, **kwargs))

    def warning(self, message: str, model: Optional[str] = None, **kwargs):
        """Log warning message with structured fields."""
        self.logger.warning(self._format_message(message, model=model, **kwargs))

    def log_remainder(self, remainder: Dict[str, Any], model: str):
        """Log which draft keys stayed in the passthrough remainder."""
        if not remainder:
            return
        self.debug(
            "Retained draft keys as provider overrides",
            model=model,
            keys=",".join(sorted(remainder)),
        )


def get_sync_logger(provider: Any) -> SyncLogger:
    """Return a SyncLogger for a ProviderType, provider name or None."""
    name = getattr(provider, "value", provider) or "passthrough"
    return SyncLogger(str(name))
