"""
Model family policy helpers.

Small predicates over model identifiers that encode provider-specific rules
(adaptive thinking, image size tiers, Fireworks reasoning history). The
capability registry and the draft builders both route their model checks
through these helpers so each rule lives in exactly one place.
"""

from typing import FrozenSet, Optional

from ...config.model_families import (
    CEREBRAS_REASONING_MODEL_MARKERS,
    FIREWORKS_MINIMAX_M2_PREFIX,
    FIREWORKS_MODEL_PREFIXES,
    FIREWORKS_PRESERVED_HISTORY_MODEL_IDS,
    FIREWORKS_REASONING_MODEL_PREFIXES,
    GEMINI_3_IMAGE_MODEL_IDS,
    GEMINI_3_MODEL_IDS,
    GEMINI_NO_THINKING_MODEL_ID,
    GOOGLE_IMAGE_MODEL_IDS,
    GOOGLE_SEARCH_EXCLUDED_MARKERS,
    GOOGLE_SEARCH_MODEL_PREFIXES,
    GOOGLE_VIDEO_MODEL_PREFIX,
    MEDIA_GENERATION_MARKERS,
    REASONING_HISTORY_VALUES,
)
from ...models.controls import ImageOutputSize


# Generic model-ID heuristics

def is_media_generation_model(model_id: str) -> bool:
    """Whether the ID looks like an image or video generation model."""
    lower = model_id.lower()
    return any(marker in lower for marker in MEDIA_GENERATION_MARKERS)


def is_anthropic_model(model_id: str) -> bool:
    lower = model_id.lower()
    return "claude" in lower or "anthropic/" in lower


def is_gemini_model(model_id: str) -> bool:
    return "gemini" in model_id.lower()


def is_reasoning_model(model_id: str) -> bool:
    """
    Heuristic for OpenAI-style reasoning models.

    Recognizes GPT-5 and o-series IDs, DeepSeek R1, IDs that advertise
    reasoning/thinking, and Claude/Gemini text models routed through
    OpenAI-compatible gateways.
    """
    lower = model_id.lower()

    if is_anthropic_model(lower):
        return True
    if is_gemini_model(lower) and "-image" not in lower and "imagen" not in lower:
        return True
    if "gpt-5" in lower or "gpt-oss" in lower:
        return True
    for series in ("o1", "o3", "o4"):
        if lower.startswith(series) or f"/{series}" in lower:
            return True
    return "deepseek-r1" in lower or "reasoning" in lower or "thinking" in lower


def canonical_openai_model_id(model_id: str) -> str:
    lower = model_id.lower()
    if lower.startswith("openai/"):
        return lower[len("openai/"):]
    return lower


# Anthropic

def _is_opus_46(lower: str) -> bool:
    return lower == "claude-opus-4-6" or "claude-opus-4-6-" in lower


def _is_sonnet_46(lower: str) -> bool:
    return lower == "claude-sonnet-4-6" or "claude-sonnet-4-6-" in lower


def supports_adaptive_thinking(model_id: str) -> bool:
    """Claude 4.6 models accept ``thinking: {"type": "adaptive"}``."""
    lower = model_id.lower()
    return _is_opus_46(lower) or _is_sonnet_46(lower)


def supports_anthropic_effort(model_id: str) -> bool:
    """Claude 4.6 models take effort through ``output_config.effort``."""
    return supports_adaptive_thinking(model_id)


def supports_anthropic_max_effort(model_id: str) -> bool:
    """Only Opus 4.6 accepts the ``max`` effort tier."""
    return _is_opus_46(model_id.lower())


# Google

def is_gemini3_model(model_id: str) -> bool:
    return model_id.lower() in GEMINI_3_MODEL_IDS


def is_google_image_model(model_id: str) -> bool:
    return model_id.lower() in GOOGLE_IMAGE_MODEL_IDS


def is_gemini3_image_model(model_id: str) -> bool:
    return model_id.lower() in GEMINI_3_IMAGE_MODEL_IDS


def is_google_video_model(model_id: str) -> bool:
    return model_id.lower().startswith(GOOGLE_VIDEO_MODEL_PREFIX)


def google_supports_thinking(model_id: str) -> bool:
    """Gemini text and image models think, except Gemini 2.5 Flash Image."""
    lower = model_id.lower()
    if not is_gemini_model(lower) or lower == GEMINI_NO_THINKING_MODEL_ID:
        return False
    return not is_google_video_model(lower) and "imagen" not in lower


def vertex_supports_thinking_config(model_id: str) -> bool:
    """Vertex rejects thinkingConfig on Gemini 3 image models."""
    return google_supports_thinking(model_id) and not is_gemini3_image_model(model_id)


def supports_google_search(model_id: str) -> bool:
    """Google Search grounding allowlist shared by Gemini and Vertex."""
    lower = model_id.lower()
    if any(marker in lower for marker in GOOGLE_SEARCH_EXCLUDED_MARKERS):
        return False
    return lower.startswith(GOOGLE_SEARCH_MODEL_PREFIXES)


def supports_google_image_size(model_id: str, image_size: ImageOutputSize) -> bool:
    """
    Size gating for imageConfig.imageSize.

    Gemini 3.1 Flash Image accepts every tier, Gemini 3 Pro Image rejects
    512px, and every other model rejects the field entirely.
    """
    lower = model_id.lower()
    if lower == "gemini-3.1-flash-image-preview":
        return True
    if lower == "gemini-3-pro-image-preview":
        return image_size != ImageOutputSize.SIZE_512PX
    return False


# Fireworks

def fireworks_canonical_model_id(model_id: str) -> Optional[str]:
    """Strip Fireworks routing prefixes; legacy bare IDs are returned as-is."""
    lower = model_id.lower()
    for prefix in FIREWORKS_MODEL_PREFIXES:
        if lower.startswith(prefix):
            return lower[len(prefix):]
    if "/" not in lower:
        return lower
    return None


def is_fireworks_minimax_m2_model(model_id: str) -> bool:
    canonical = fireworks_canonical_model_id(model_id)
    return canonical is not None and canonical.startswith(FIREWORKS_MINIMAX_M2_PREFIX)


def is_fireworks_reasoning_model(model_id: str) -> bool:
    canonical = fireworks_canonical_model_id(model_id)
    if canonical is not None and canonical.startswith(FIREWORKS_REASONING_MODEL_PREFIXES):
        return True
    return is_reasoning_model(model_id)


def supported_fireworks_reasoning_history_values(model_id: str) -> FrozenSet[str]:
    if is_fireworks_minimax_m2_model(model_id):
        return REASONING_HISTORY_VALUES["minimax"]
    if fireworks_canonical_model_id(model_id) in FIREWORKS_PRESERVED_HISTORY_MODEL_IDS:
        return REASONING_HISTORY_VALUES["preserved"]
    return frozenset()


# Cerebras

def is_cerebras_reasoning_model(model_id: str) -> bool:
    lower = model_id.lower()
    return any(marker in lower for marker in CEREBRAS_REASONING_MODEL_MARKERS)
