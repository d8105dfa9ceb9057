"""Unit tests for the context cache adapter."""

import pytest

from provider_params_sync.core.capabilities import get_capabilities
from provider_params_sync.core.normalization.context_cache import (
    apply_context_cache_fragment,
    build_context_cache_fragment,
    parse_ttl,
    ttl_to_wire,
)
from provider_params_sync.models.controls import (
    ContextCacheControls,
    ContextCacheMode,
    ContextCacheStrategy,
)
from provider_params_sync.models.providers import ProviderType


def _build(provider, model_id, cache):
    return build_context_cache_fragment(provider, model_id, cache, get_capabilities(provider, model_id))


def _apply(provider, model_id, draft, cache=None):
    return apply_context_cache_fragment(provider, model_id, draft, cache, get_capabilities(provider, model_id))


class TestTtl:
    """Test TTL conversions."""

    @pytest.mark.parametrize("ttl,wire", [
        ("5m", "5m"),
        ("1h", "1h"),
        ("custom:300", "300s"),
        ("default", None),
        (None, None),
    ])
    def test_ttl_to_wire(self, ttl, wire):
        """Test canonical TTLs map onto retention strings."""
        assert ttl_to_wire(ttl) == wire

    @pytest.mark.parametrize("raw,ttl", [
        ("5m", "5m"),
        ("5MIN", "5m"),
        ("60m", "1h"),
        ("300s", "custom:300"),
        ("custom:120s", "custom:120"),
        ("custom:45", "custom:45"),
        ("0s", None),
        ("forever", None),
        (300, None),
    ])
    def test_parse_ttl(self, raw, ttl):
        """Test retention strings parse back to canonical TTLs."""
        assert parse_ttl(raw) == ttl

    def test_controls_normalize_ttl(self):
        """Test stored TTL spellings are normalized on construction."""
        assert ContextCacheControls(ttl=90).ttl == "custom:90"
        assert ContextCacheControls(ttl="60m").ttl == "1h"
        assert ContextCacheControls(ttl="whenever").ttl == "default"


class TestBuildFragment:
    """Test projecting cache controls onto wire fields."""

    def test_openai_fields(self):
        """Test OpenAI receives key, retention and threshold."""
        cache = ContextCacheControls(cache_key=" conv-1 ", ttl="1h", min_tokens_threshold=1024)
        assert _build(ProviderType.OPENAI, "gpt-5", cache) == {
            "prompt_cache_key": "conv-1",
            "prompt_cache_retention": "1h",
            "prompt_cache_min_tokens": 1024,
        }

    def test_xai_conversation_id(self):
        """Test xAI adds the conversation header."""
        cache = ContextCacheControls(conversation_id="abc", cache_key="k")
        assert _build(ProviderType.XAI, "grok-4", cache) == {
            "x-grok-conv-id": "abc",
            "prompt_cache_key": "k",
        }

    def test_google_explicit_only(self):
        """Test cachedContent is emitted only in explicit mode."""
        name = "cachedContents/abc123"
        explicit = ContextCacheControls(mode=ContextCacheMode.EXPLICIT, cached_content_name=name)
        implicit = ContextCacheControls(mode=ContextCacheMode.IMPLICIT, cached_content_name=name)
        assert _build(ProviderType.GEMINI, "gemini-2.5-pro", explicit) == {"cachedContent": name}
        assert _build(ProviderType.GEMINI, "gemini-2.5-pro", implicit) == {}

    def test_anthropic_has_no_envelope_fields(self):
        """Test Anthropic never receives envelope fields."""
        cache = ContextCacheControls(cache_key="k", ttl="5m")
        assert _build(ProviderType.ANTHROPIC, "claude-sonnet-4-5", cache) == {}

    def test_off_and_unsupported(self):
        """Test disabled caching and unsupported models emit nothing."""
        cache = ContextCacheControls(mode=ContextCacheMode.OFF, cache_key="k")
        assert _build(ProviderType.OPENAI, "gpt-5", cache) == {}
        assert _build(ProviderType.PERPLEXITY, "sonar", ContextCacheControls(cache_key="k")) == {}


class TestApplyFragment:
    """Test reconstructing cache controls from drafts."""

    def test_openai_fields_parsed(self):
        """Test OpenAI fields populate the envelope."""
        cache = _apply(ProviderType.OPENAI, "gpt-5", {
            "prompt_cache_key": "conv-1",
            "prompt_cache_retention": "300s",
            "prompt_cache_min_tokens": 2048,
        })
        assert cache.mode == ContextCacheMode.IMPLICIT
        assert cache.cache_key == "conv-1"
        assert cache.ttl == "custom:300"
        assert cache.min_tokens_threshold == 2048

    def test_touching_a_field_turns_caching_on(self):
        """Test mode off becomes implicit once a field appears."""
        prior = ContextCacheControls(mode=ContextCacheMode.OFF, strategy=ContextCacheStrategy.SYSTEM_ONLY)
        cache = _apply(ProviderType.OPENAI, "gpt-5", {"prompt_cache_key": "k"}, prior)
        assert cache.mode == ContextCacheMode.IMPLICIT
        assert cache.strategy == ContextCacheStrategy.SYSTEM_ONLY

    def test_absent_fields_reset_projection(self):
        """Test absent wire fields clear the projected values but keep mode."""
        prior = ContextCacheControls(cache_key="k", ttl="1h", strategy=ContextCacheStrategy.PREFIX_WINDOW)
        cache = _apply(ProviderType.OPENAI, "gpt-5", {}, prior)
        assert cache.cache_key is None
        assert cache.ttl is None
        assert cache.strategy == ContextCacheStrategy.PREFIX_WINDOW
        assert _apply(ProviderType.OPENAI, "gpt-5", {}) is None

    def test_xai_conversation_id(self):
        """Test the xAI header is read back."""
        cache = _apply(ProviderType.XAI, "grok-4", {"x-grok-conv-id": " conv "})
        assert cache.conversation_id == "conv"

    def test_google_cached_content(self):
        """Test cachedContent switches to explicit mode."""
        cache = _apply(ProviderType.VERTEXAI, "gemini-2.5-pro", {"cachedContent": "cachedContents/x"})
        assert cache.mode == ContextCacheMode.EXPLICIT
        assert cache.cached_content_name == "cachedContents/x"

    def test_google_missing_cached_content_clears_name(self):
        """Test an explicit cache loses its name when the draft drops it."""
        prior = ContextCacheControls(mode=ContextCacheMode.EXPLICIT, cached_content_name="cachedContents/x")
        cache = _apply(ProviderType.GEMINI, "gemini-2.5-pro", {}, prior)
        assert cache.mode == ContextCacheMode.EXPLICIT
        assert cache.cached_content_name is None

    def test_anthropic_keeps_prior(self):
        """Test Anthropic cache state passes through untouched."""
        prior = ContextCacheControls(strategy=ContextCacheStrategy.SYSTEM_AND_TOOLS)
        assert _apply(ProviderType.ANTHROPIC, "claude-sonnet-4-5", {}, prior) == prior

    def test_unsupported_clears(self):
        """Test unsupported models always lose cache state."""
        prior = ContextCacheControls(cache_key="k")
        assert _apply(ProviderType.CEREBRAS, "gpt-oss-120b", {"prompt_cache_key": "k"}, prior) is None


class TestEnvelope:
    """Test the provider-independent cache representation."""

    def test_envelope_keys(self):
        """Test every set field appears under its envelope key."""
        cache = ContextCacheControls(
            mode=ContextCacheMode.EXPLICIT,
            strategy=ContextCacheStrategy.PREFIX_WINDOW,
            ttl=600,
            cache_key="ck",
            conversation_id="conv-1",
            cached_content_name="cachedContents/abc",
            min_tokens_threshold=1024,
        )
        assert cache.envelope() == {
            "mode": "explicit",
            "strategy": "prefixWindow",
            "ttl": "custom:600",
            "cache_key": "ck",
            "conversation_id": "conv-1",
            "cached_content_name": "cachedContents/abc",
            "min_tokens_threshold": 1024,
        }

    def test_envelope_skips_unset_fields(self):
        """Test unset fields are left out."""
        assert ContextCacheControls().envelope() == {"mode": "implicit"}

    def test_envelope_from_applied_draft(self):
        """Test a parsed xAI draft lands in the envelope."""
        cache = _apply(ProviderType.XAI, "grok-4", {"x-grok-conv-id": " conv-2 ", "prompt_cache_retention": "1h"})
        assert cache.envelope() == {"mode": "implicit", "ttl": "1h", "conversation_id": "conv-2"}
