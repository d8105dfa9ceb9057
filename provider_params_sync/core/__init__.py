"""Core layers for provider params sync.

This package contains the provider-agnostic logic organized into layers:
- capabilities: Model capability registry and model-family policies
- normalization: Effort mapping, JSON value helpers and context caching
- routing: The make_draft / apply_draft facade
"""

__all__ = []
