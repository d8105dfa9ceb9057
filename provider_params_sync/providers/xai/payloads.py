"""xAI draft sync.

xAI only contributes prompt caching (``x-grok-conv-id`` and the
``prompt_cache_*`` fields), which the context cache adapter projects.
Everything else in an xAI draft stays in the passthrough remainder.
"""

from typing import Any, Dict

from ...core.capabilities import ModelCapabilitySet
from ...models.controls import GenerationControls


def build_xai_draft(
    controls: GenerationControls,
    model_id: str,
    capabilities: ModelCapabilitySet,
) -> Dict[str, Any]:
    return {}


def apply_xai_draft(
    draft: Dict[str, Any],
    model_id: str,
    capabilities: ModelCapabilitySet,
    controls: GenerationControls,
) -> GenerationControls:
    return controls
