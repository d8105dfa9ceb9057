# Model family tables used by the capability registry and draft builders
from typing import Dict, FrozenSet, Tuple

# OpenAI-style models that accept the "xhigh" reasoning effort
OPENAI_EXTREME_EFFORT_MODEL_IDS: FrozenSet[str] = frozenset({
    "gpt-5.2",
    "gpt-5.2-2025-12-11",
    "gpt-5.2-codex",
    "gpt-5.2-pro",
    "gpt-5.3-codex",
    "gpt-5.3-codex-spark",
})

# Gemini 3 Pro only exposes LOW and HIGH thinking levels
GEMINI_3_PRO_EFFORT_MODEL_IDS: FrozenSet[str] = frozenset({
    "gemini-3-pro",
    "gemini-3-pro-preview",
    "gemini-3.1-pro-preview",
})

GEMINI_3_MODEL_IDS: FrozenSet[str] = frozenset({
    "gemini-3",
    "gemini-3-pro",
    "gemini-3-pro-preview",
    "gemini-3.1-pro-preview",
    "gemini-3.1-flash-image-preview",
    "gemini-3-flash-preview",
    "gemini-3-pro-image-preview",
})

GOOGLE_IMAGE_MODEL_IDS: FrozenSet[str] = frozenset({
    "gemini-3-pro-image-preview",
    "gemini-3.1-flash-image-preview",
    "gemini-2.5-flash-image",
})

# Gemini 3 image models that accept imageConfig.imageSize
GEMINI_3_IMAGE_MODEL_IDS: FrozenSet[str] = frozenset({
    "gemini-3-pro-image-preview",
    "gemini-3.1-flash-image-preview",
})

# The one Gemini model that rejects both thinking and Google Search grounding
GEMINI_NO_THINKING_MODEL_ID = "gemini-2.5-flash-image"

GOOGLE_VIDEO_MODEL_PREFIX = "veo-"

# Google Search grounding allowlist (prefix match, with exclusions)
GOOGLE_SEARCH_MODEL_PREFIXES: Tuple[str, ...] = (
    "gemini-3",
    "gemini-2.5",
    "gemini-2.0-flash",
)
GOOGLE_SEARCH_EXCLUDED_MARKERS: Tuple[str, ...] = (
    "gemini-2.5-flash-image",
    "gemini-2.0-flash-lite",
)

# Substrings that mark image/video generation models
MEDIA_GENERATION_MARKERS: Tuple[str, ...] = (
    "-image",
    "imagen",
    "veo",
    "-video",
    "video-generation",
    "imagine-image",
    "imagine-video",
)

# Fireworks model IDs are addressed with either prefix
FIREWORKS_MODEL_PREFIXES: Tuple[str, ...] = (
    "fireworks/",
    "accounts/fireworks/models/",
)

FIREWORKS_MINIMAX_M2_PREFIX = "minimax-m2"

FIREWORKS_PRESERVED_HISTORY_MODEL_IDS: FrozenSet[str] = frozenset({
    "kimi-k2p5",
    "glm-4p7",
    "glm-5",
})

# Canonical Fireworks model prefixes that accept reasoning_effort
FIREWORKS_REASONING_MODEL_PREFIXES: Tuple[str, ...] = (
    "minimax-m2",
    "kimi-k2",
    "glm-4",
    "glm-5",
    "qwen3",
    "deepseek-r1",
    "deepseek-v3",
    "gpt-oss",
)

# Cerebras models that honour disable_reasoning / reasoning_format
CEREBRAS_REASONING_MODEL_MARKERS: Tuple[str, ...] = (
    "gpt-oss",
    "qwen-3",
    "glm",
)

REASONING_HISTORY_VALUES: Dict[str, FrozenSet[str]] = {
    "minimax": frozenset({"interleaved", "disabled"}),
    "preserved": frozenset({"preserved", "interleaved", "disabled"}),
}
