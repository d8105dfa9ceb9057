"""Data models for provider params sync."""

from .controls import (
    ContextCacheControls,
    ContextCacheMode,
    ContextCacheStrategy,
    GenerationControls,
    GoogleVideoAspectRatio,
    GoogleVideoGenerationControls,
    GoogleVideoPersonGeneration,
    GoogleVideoResolution,
    ImageAspectRatio,
    ImageGenerationControls,
    ImageOutputSize,
    ImageResponseMode,
    ReasoningControls,
    ReasoningEffort,
    ReasoningSummary,
    VertexImageOutputMIMEType,
    VertexImagePersonGeneration,
    WebSearchContextSize,
    WebSearchControls,
    WebSearchUserLocation,
)
from .providers import ProviderType, WireShape

__all__ = [
    # Providers
    "ProviderType",
    "WireShape",

    # Controls
    "GenerationControls",
    "ReasoningControls",
    "ReasoningEffort",
    "ReasoningSummary",
    "WebSearchControls",
    "WebSearchContextSize",
    "WebSearchUserLocation",
    "ContextCacheControls",
    "ContextCacheMode",
    "ContextCacheStrategy",
    "ImageGenerationControls",
    "ImageResponseMode",
    "ImageAspectRatio",
    "ImageOutputSize",
    "VertexImagePersonGeneration",
    "VertexImageOutputMIMEType",
    "GoogleVideoGenerationControls",
    "GoogleVideoAspectRatio",
    "GoogleVideoResolution",
    "GoogleVideoPersonGeneration",
]
