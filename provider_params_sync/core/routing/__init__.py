"""Sync facade: provider dispatch for make_draft / apply_draft."""

from .sync import DraftSync, apply_draft, draft_sync, make_draft, resolve_capabilities

__all__ = [
    "DraftSync",
    "draft_sync",
    "make_draft",
    "apply_draft",
    "resolve_capabilities",
]
