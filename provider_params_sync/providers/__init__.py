"""
Provider draft builder/applier pairs.

Providers without an entry here are passthrough: their drafts are kept
verbatim in ``provider_specific``.
"""

from typing import Dict, Optional

from ..core.normalization.json_values import MergePolicy
from ..models.providers import ProviderType
from .anthropic import apply_anthropic_draft, build_anthropic_draft
from .base import ApplyResult, ProviderDraftSync
from .cerebras import apply_cerebras_draft, build_cerebras_draft
from .fireworks import apply_fireworks_draft, build_fireworks_draft, finalize_fireworks_remainder
from .google import apply_gemini_draft, apply_vertex_draft, build_gemini_draft, build_vertex_draft
from .openai import apply_openai_draft, build_openai_draft
from .perplexity import apply_perplexity_draft, build_perplexity_draft
from .xai import apply_xai_draft, build_xai_draft

_OPENAI_SYNC = ProviderDraftSync("openai", build_openai_draft, apply_openai_draft)

PROVIDER_SYNCS: Dict[ProviderType, ProviderDraftSync] = {
    ProviderType.OPENAI: _OPENAI_SYNC,
    ProviderType.OPENAI_WEBSOCKET: _OPENAI_SYNC,
    ProviderType.ANTHROPIC: ProviderDraftSync(
        "anthropic", build_anthropic_draft, apply_anthropic_draft, MergePolicy.ANTHROPIC
    ),
    ProviderType.GEMINI: ProviderDraftSync("gemini", build_gemini_draft, apply_gemini_draft, MergePolicy.DEEP),
    ProviderType.VERTEXAI: ProviderDraftSync("vertexai", build_vertex_draft, apply_vertex_draft, MergePolicy.DEEP),
    ProviderType.XAI: ProviderDraftSync("xai", build_xai_draft, apply_xai_draft),
    ProviderType.CEREBRAS: ProviderDraftSync("cerebras", build_cerebras_draft, apply_cerebras_draft),
    ProviderType.FIREWORKS: ProviderDraftSync(
        "fireworks",
        build_fireworks_draft,
        apply_fireworks_draft,
        finalize_remainder=finalize_fireworks_remainder,
    ),
    ProviderType.PERPLEXITY: ProviderDraftSync(
        "perplexity", build_perplexity_draft, apply_perplexity_draft, MergePolicy.DEEP
    ),
}


def get_provider_sync(
    provider: Optional[ProviderType],
    providers: Optional[Dict[ProviderType, ProviderDraftSync]] = None,
) -> Optional[ProviderDraftSync]:
    """Builder/applier pair for a provider from a table (default PROVIDER_SYNCS); None means passthrough."""
    if provider is None:
        return None
    return (PROVIDER_SYNCS if providers is None else providers).get(provider)


__all__ = [
    "ApplyResult",
    "ProviderDraftSync",
    "PROVIDER_SYNCS",
    "get_provider_sync",
]
