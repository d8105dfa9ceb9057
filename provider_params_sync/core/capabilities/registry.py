from __future__ import annotations

from functools import lru_cache
from typing import Optional, Tuple

from ...config.model_families import GEMINI_3_PRO_EFFORT_MODEL_IDS, OPENAI_EXTREME_EFFORT_MODEL_IDS
from ...config.overrides import ModelOverrides
from ...models.controls import ReasoningEffort
from ...models.providers import ProviderType, WireShape
from .models import DEFAULT_CAPABILITIES, ModelCapabilitySet
from .policy import (
    canonical_openai_model_id,
    google_supports_thinking,
    is_anthropic_model,
    is_cerebras_reasoning_model,
    is_fireworks_reasoning_model,
    is_gemini_model,
    is_media_generation_model,
    is_reasoning_model,
    supports_anthropic_max_effort,
    supports_google_search,
)

_E = ReasoningEffort

GOOGLE_EFFORTS: Tuple[ReasoningEffort, ...] = (_E.MINIMAL, _E.LOW, _E.MEDIUM, _E.HIGH)
GEMINI_3_PRO_EFFORTS: Tuple[ReasoningEffort, ...] = (_E.LOW, _E.HIGH)
PERPLEXITY_EFFORTS: Tuple[ReasoningEffort, ...] = (_E.MINIMAL, _E.LOW, _E.MEDIUM, _E.HIGH)
STANDARD_EFFORTS: Tuple[ReasoningEffort, ...] = (_E.LOW, _E.MEDIUM, _E.HIGH)
EXTENDED_EFFORTS: Tuple[ReasoningEffort, ...] = STANDARD_EFFORTS + (_E.XHIGH,)

_OPENAI_PROVIDERS = (ProviderType.OPENAI, ProviderType.OPENAI_WEBSOCKET)
_GOOGLE_PROVIDERS = (ProviderType.GEMINI, ProviderType.VERTEXAI)


def wire_shape(provider: Optional[ProviderType], model_id: str = "") -> WireShape:
    """Request body dialect for a provider family."""
    if provider in _OPENAI_PROVIDERS:
        return WireShape.OPENAI_RESPONSES
    if provider == ProviderType.ANTHROPIC:
        return WireShape.ANTHROPIC
    if provider in _GOOGLE_PROVIDERS:
        return WireShape.GEMINI
    return WireShape.OPENAI_COMPATIBLE


def supports_extreme_effort(provider: Optional[ProviderType], model_id: str) -> bool:
    """Whether an OpenAI-style model is on the ``xhigh`` allowlist."""
    if provider is None or wire_shape(provider) not in (WireShape.OPENAI_RESPONSES, WireShape.OPENAI_COMPATIBLE):
        return False
    return canonical_openai_model_id(model_id) in OPENAI_EXTREME_EFFORT_MODEL_IDS


def supported_reasoning_efforts(provider: Optional[ProviderType], model_id: str) -> Tuple[ReasoningEffort, ...]:
    """
    Reasoning effort levels a model accepts, in ascending order.

    An empty tuple means the model cannot reason; unknown providers and
    unrecognized models always get an empty tuple.
    """
    lower = model_id.lower()

    if provider is None:
        return ()

    if provider in _GOOGLE_PROVIDERS:
        if not google_supports_thinking(lower):
            return ()
        if provider == ProviderType.GEMINI and lower in GEMINI_3_PRO_EFFORT_MODEL_IDS:
            return GEMINI_3_PRO_EFFORTS
        return GOOGLE_EFFORTS

    if provider == ProviderType.PERPLEXITY:
        return PERPLEXITY_EFFORTS if "sonar" in lower else ()

    if provider == ProviderType.ANTHROPIC:
        if not is_anthropic_model(lower):
            return ()
        return EXTENDED_EFFORTS if supports_anthropic_max_effort(lower) else STANDARD_EFFORTS

    if provider == ProviderType.FIREWORKS:
        can_reason = is_fireworks_reasoning_model(lower)
    elif provider == ProviderType.CEREBRAS:
        can_reason = is_cerebras_reasoning_model(lower)
    else:
        can_reason = is_reasoning_model(lower)

    if not can_reason:
        return ()
    return EXTENDED_EFFORTS if supports_extreme_effort(provider, lower) else STANDARD_EFFORTS


def _supports_openai_web_search(lower: str) -> bool:
    if (lower.startswith(("gpt-", "o3", "o4"))
            or "/gpt-" in lower or "/o3" in lower or "/o4" in lower):
        return not is_media_generation_model(lower)
    return False


def _supports_openrouter_web_search(lower: str) -> bool:
    # Search-oriented model IDs are web-search capable regardless of vendor
    if "search" in lower or "sonar" in lower or ":online" in lower:
        return True
    if lower.startswith("openai/"):
        return _supports_openai_web_search(lower[len("openai/"):])
    if lower.startswith("anthropic/"):
        return True
    if lower.startswith("google/"):
        return supports_google_search(lower[len("google/"):])
    if lower.startswith(("x-ai/", "xai/", "perplexity/")):
        return not is_media_generation_model(lower)
    return False


def supports_web_search(provider: Optional[ProviderType], model_id: str) -> bool:
    lower = model_id.lower()

    if provider in _OPENAI_PROVIDERS:
        return _supports_openai_web_search(lower)
    if provider == ProviderType.OPENROUTER:
        return _supports_openrouter_web_search(lower)
    if provider == ProviderType.ANTHROPIC:
        return is_anthropic_model(lower)
    if provider == ProviderType.PERPLEXITY:
        return True
    if provider == ProviderType.XAI:
        return not is_media_generation_model(lower)
    if provider in _GOOGLE_PROVIDERS:
        return supports_google_search(lower)
    return False


def supports_dynamic_filtering(provider: Optional[ProviderType], model_id: str) -> bool:
    """Only Claude Opus/Sonnet 4.6 accept the dynamic-filtering search tool."""
    if provider != ProviderType.ANTHROPIC:
        return False
    lower = model_id.lower()
    return "claude-opus-4-6" in lower or "claude-sonnet-4-6" in lower


def supports_context_cache(provider: Optional[ProviderType], model_id: str) -> bool:
    lower = model_id.lower()

    if provider in _OPENAI_PROVIDERS:
        canonical = canonical_openai_model_id(lower)
        return canonical.startswith(("gpt-", "o1", "o3", "o4")) and not is_media_generation_model(lower)
    if provider == ProviderType.XAI:
        return "grok" in lower and not is_media_generation_model(lower)
    if provider == ProviderType.ANTHROPIC:
        return is_anthropic_model(lower)
    if provider in _GOOGLE_PROVIDERS:
        return is_gemini_model(lower) and not is_media_generation_model(lower)
    return False


@lru_cache(maxsize=1024)
def _derived_capabilities(provider: Optional[ProviderType], lower_model_id: str) -> ModelCapabilitySet:
    return ModelCapabilitySet(
        provider=provider,
        model_id=lower_model_id,
        wire_shape=wire_shape(provider, lower_model_id),
        supported_reasoning_efforts=supported_reasoning_efforts(provider, lower_model_id),
        supports_web_search=supports_web_search(provider, lower_model_id),
        supports_dynamic_web_search_filtering=supports_dynamic_filtering(provider, lower_model_id),
        supports_context_cache=supports_context_cache(provider, lower_model_id),
    )


def get_capabilities(
    provider: Optional[ProviderType],
    model_id: str,
    overrides: Optional[ModelOverrides] = None,
) -> ModelCapabilitySet:
    """Return the capability set for a provider/model pair.

    Args:
        provider: Provider family, or None when unknown
        model_id: Model identifier (case-insensitive)
        overrides: Optional per-model replacements for the derived answers

    Returns:
        ModelCapabilitySet; DEFAULT_CAPABILITIES for unknown providers
    """
    if provider is None:
        caps = DEFAULT_CAPABILITIES.model_copy(update={"model_id": model_id.lower()})
    else:
        caps = _derived_capabilities(provider, model_id.lower())

    if overrides is None:
        return caps

    update = {}
    if overrides.reasoning_efforts is not None:
        ordered = sorted(set(overrides.reasoning_efforts), key=list(ReasoningEffort).index)
        update["supported_reasoning_efforts"] = tuple(ordered)
    if overrides.web_search_supported is not None:
        update["supports_web_search"] = overrides.web_search_supported
    if overrides.context_cache_supported is not None:
        update["supports_context_cache"] = overrides.context_cache_supported
    return caps.model_copy(update=update)
