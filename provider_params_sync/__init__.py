"""
Provider Params Sync - bidirectional translation between canonical generation
controls and provider-native request drafts.

Supported provider families:
- OpenAI (Responses API and WebSocket transport)
- Anthropic (Claude models)
- Google Gemini and Vertex AI
- xAI, Cerebras, Fireworks and Perplexity

Any other provider is handled as pure passthrough.

Features:
- Capability registry per provider/model pair
- Reasoning effort normalization
- Context cache envelope across provider caching mechanisms
- Lossless apply: unrecognized draft fragments are kept verbatim
"""

__version__ = "0.1.0"

from .core.capabilities import DEFAULT_CAPABILITIES, ModelCapabilitySet, get_capabilities
from .core.normalization import MergePolicy, normalize_effort, prune_nulls
from .core.routing import DraftSync, apply_draft, make_draft, resolve_capabilities
from .errors import DraftDecodeError, ParamsSyncError
from .models.controls import (
    ContextCacheControls,
    GenerationControls,
    GoogleVideoGenerationControls,
    ImageGenerationControls,
    ReasoningControls,
    ReasoningEffort,
    WebSearchControls,
)
from .models.providers import ProviderType, WireShape
from .providers import ApplyResult

__all__ = [
    # Facade
    "make_draft",
    "apply_draft",
    "DraftSync",
    "ApplyResult",

    # Capabilities
    "get_capabilities",
    "resolve_capabilities",
    "ModelCapabilitySet",
    "DEFAULT_CAPABILITIES",
    "normalize_effort",

    # JSON helpers
    "MergePolicy",
    "prune_nulls",

    # Models
    "ProviderType",
    "WireShape",
    "GenerationControls",
    "ReasoningControls",
    "ReasoningEffort",
    "WebSearchControls",
    "ContextCacheControls",
    "ImageGenerationControls",
    "GoogleVideoGenerationControls",

    # Errors
    "ParamsSyncError",
    "DraftDecodeError",
]
