"""
Context cache adapter.

Normalizes the native prompt-caching mechanisms into the canonical
ContextCacheControls envelope and back:

- OpenAI-style: ``prompt_cache_key``, ``prompt_cache_retention``,
  ``prompt_cache_min_tokens``
- xAI: the OpenAI-style fields plus the ``x-grok-conv-id`` conversation key
- Anthropic: no envelope fields (cache_control lives on message content)
- Gemini / Vertex: ``cachedContent`` resource name, explicit mode only

Providers without context cache support never receive these fields and
have their canonical cache state cleared on apply.
"""

import re
from typing import Any, Dict, Optional

from ...models.controls import (
    TTL_1_HOUR,
    TTL_5_MINUTES,
    TTL_CUSTOM_PREFIX,
    ContextCacheControls,
    ContextCacheMode,
)
from ...models.providers import ProviderType
from ..capabilities import ModelCapabilitySet
from .coercion import coerce_int, normalized_trimmed_string

PROMPT_CACHE_KEY = "prompt_cache_key"
PROMPT_CACHE_RETENTION = "prompt_cache_retention"
PROMPT_CACHE_MIN_TOKENS = "prompt_cache_min_tokens"
XAI_CONVERSATION_ID = "x-grok-conv-id"
CACHED_CONTENT = "cachedContent"

_OPENAI_STYLE = (ProviderType.OPENAI, ProviderType.OPENAI_WEBSOCKET, ProviderType.XAI)
_GOOGLE = (ProviderType.GEMINI, ProviderType.VERTEXAI)

_SECONDS_PATTERN = re.compile(r"^(\d+)s?$")


def ttl_to_wire(ttl: Optional[str]) -> Optional[str]:
    """Canonical TTL to ``prompt_cache_retention``; None for the provider default."""
    if ttl == TTL_5_MINUTES:
        return "5m"
    if ttl == TTL_1_HOUR:
        return "1h"
    if ttl and ttl.startswith(TTL_CUSTOM_PREFIX):
        return f"{max(1, int(ttl[len(TTL_CUSTOM_PREFIX):]))}s"
    return None


def parse_ttl(raw: Any) -> Optional[str]:
    """Parse a wire retention value (``5m``, ``1h``, ``<n>s``, ``custom:<n>[s]``)."""
    if not isinstance(raw, str):
        return None
    value = raw.strip().lower()
    if value in ("5m", "5min"):
        return TTL_5_MINUTES
    if value in ("1h", "60m"):
        return TTL_1_HOUR
    if value.startswith(TTL_CUSTOM_PREFIX):
        value = value[len(TTL_CUSTOM_PREFIX):].strip()
        match = _SECONDS_PATTERN.match(value)
    elif value.endswith("s"):
        match = _SECONDS_PATTERN.match(value)
    else:
        match = None
    if match and int(match.group(1)) > 0:
        return f"{TTL_CUSTOM_PREFIX}{int(match.group(1))}"
    return None


def build_context_cache_fragment(
    provider: Optional[ProviderType],
    model_id: str,
    context_cache: Optional[ContextCacheControls],
    capabilities: ModelCapabilitySet,
) -> Dict[str, Any]:
    """Project canonical cache controls onto the provider's wire fields."""
    if context_cache is None or not context_cache.is_enabled or not capabilities.supports_context_cache:
        return {}

    out: Dict[str, Any] = {}
    if provider in _OPENAI_STYLE:
        if provider == ProviderType.XAI:
            conversation_id = normalized_trimmed_string(context_cache.conversation_id)
            if conversation_id:
                out[XAI_CONVERSATION_ID] = conversation_id
        cache_key = normalized_trimmed_string(context_cache.cache_key)
        if cache_key:
            out[PROMPT_CACHE_KEY] = cache_key
        retention = ttl_to_wire(context_cache.ttl)
        if retention:
            out[PROMPT_CACHE_RETENTION] = retention
        if context_cache.min_tokens_threshold and context_cache.min_tokens_threshold > 0:
            out[PROMPT_CACHE_MIN_TOKENS] = context_cache.min_tokens_threshold
    elif provider in _GOOGLE:
        name = normalized_trimmed_string(context_cache.cached_content_name)
        if context_cache.mode == ContextCacheMode.EXPLICIT and name:
            out[CACHED_CONTENT] = name

    return out


def _apply_openai_style(
    provider: ProviderType,
    draft: Dict[str, Any],
    context_cache: Optional[ContextCacheControls],
) -> Optional[ContextCacheControls]:
    keys = [PROMPT_CACHE_KEY, PROMPT_CACHE_RETENTION, PROMPT_CACHE_MIN_TOKENS]
    if provider == ProviderType.XAI:
        keys.append(XAI_CONVERSATION_ID)

    min_tokens = coerce_int(draft.get(PROMPT_CACHE_MIN_TOKENS))
    update = {
        "cache_key": normalized_trimmed_string(draft.get(PROMPT_CACHE_KEY)),
        "ttl": parse_ttl(draft.get(PROMPT_CACHE_RETENTION)),
        "min_tokens_threshold": min_tokens if min_tokens and min_tokens > 0 else None,
    }
    if provider == ProviderType.XAI:
        update["conversation_id"] = normalized_trimmed_string(draft.get(XAI_CONVERSATION_ID))

    touched = any(value is not None for value in update.values())
    if not touched:
        # Nothing on the wire: reset projected fields, keep mode and strategy
        if context_cache is None:
            return None
        return context_cache.model_copy(update=update)

    base = context_cache or ContextCacheControls(mode=ContextCacheMode.IMPLICIT)
    if base.mode == ContextCacheMode.OFF:
        update["mode"] = ContextCacheMode.IMPLICIT
    return base.model_copy(update=update)


def _apply_google(
    draft: Dict[str, Any],
    context_cache: Optional[ContextCacheControls],
) -> Optional[ContextCacheControls]:
    name = normalized_trimmed_string(draft.get(CACHED_CONTENT))
    if name is not None:
        base = context_cache or ContextCacheControls(mode=ContextCacheMode.EXPLICIT)
        return base.model_copy(update={"mode": ContextCacheMode.EXPLICIT, "cached_content_name": name})
    if context_cache is not None and context_cache.mode == ContextCacheMode.EXPLICIT:
        return context_cache.model_copy(update={"cached_content_name": None})
    return context_cache


def apply_context_cache_fragment(
    provider: Optional[ProviderType],
    model_id: str,
    draft: Dict[str, Any],
    context_cache: Optional[ContextCacheControls],
    capabilities: ModelCapabilitySet,
) -> Optional[ContextCacheControls]:
    """
    Reconstruct canonical cache controls from a draft.

    Args:
        provider: Provider family
        model_id: Model identifier
        draft: Null-pruned draft
        context_cache: Cache controls before this apply
        capabilities: Capability set for the model

    Returns:
        Updated cache controls; None when the model has no cache support
    """
    if not capabilities.supports_context_cache:
        return None
    if provider in _OPENAI_STYLE:
        return _apply_openai_style(provider, draft, context_cache)
    if provider in _GOOGLE:
        return _apply_google(draft, context_cache)
    # Anthropic caches at the message-content layer; nothing on the envelope
    return context_cache
