"""Round trip tests: apply(build(C)) == C for controls a model can represent."""

import pytest

from provider_params_sync import apply_draft, make_draft
from provider_params_sync.models.controls import (
    ContextCacheControls,
    ContextCacheMode,
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

E = ReasoningEffort

ROUND_TRIP_CASES = [
    pytest.param("openai", "gpt-5.2", GenerationControls(
        temperature=0.5,
        top_p=0.9,
        max_tokens=1000,
        reasoning=ReasoningControls(enabled=True, effort=E.XHIGH, summary=ReasoningSummary.AUTO),
        web_search=WebSearchControls(enabled=True, context_size=WebSearchContextSize.HIGH),
        context_cache=ContextCacheControls(cache_key="k", ttl="custom:600", min_tokens_threshold=2048),
    ), id="openai"),
    pytest.param("openai_websocket", "gpt-5", GenerationControls(
        reasoning=ReasoningControls(enabled=False),
    ), id="openai-websocket-disabled"),
    pytest.param("anthropic", "claude-opus-4-6", GenerationControls(
        temperature=1.0,
        reasoning=ReasoningControls(enabled=True, effort=E.HIGH),
        web_search=WebSearchControls(
            enabled=True,
            max_uses=5,
            allowed_domains=["a.com"],
            user_location=WebSearchUserLocation(city="Berlin"),
            dynamic_filtering=True,
        ),
    ), id="anthropic-adaptive"),
    pytest.param("anthropic", "claude-sonnet-4-5", GenerationControls(
        max_tokens=8000,
        reasoning=ReasoningControls(enabled=True, budget_tokens=4096),
    ), id="anthropic-budget"),
    pytest.param("gemini", "gemini-2.5-pro", GenerationControls(
        temperature=0.7,
        max_tokens=8192,
        reasoning=ReasoningControls(enabled=True, budget_tokens=2048),
        web_search=WebSearchControls(enabled=True),
        context_cache=ContextCacheControls(mode=ContextCacheMode.EXPLICIT, cached_content_name="cachedContents/abc"),
    ), id="gemini"),
    pytest.param("gemini", "gemini-3-flash-preview", GenerationControls(
        reasoning=ReasoningControls(enabled=True, effort=E.MEDIUM),
    ), id="gemini-3-level"),
    pytest.param("gemini", "gemini-3-pro-preview", GenerationControls(
        reasoning=ReasoningControls(enabled=False),
    ), id="gemini-3-off"),
    pytest.param("vertexai", "gemini-3-pro-image-preview", GenerationControls(
        image_generation=ImageGenerationControls(
            response_mode=ImageResponseMode.IMAGE_ONLY,
            aspect_ratio=ImageAspectRatio.PORTRAIT_3_4,
            image_size=ImageOutputSize.SIZE_2K,
            seed=11,
            vertex_person_generation=VertexImagePersonGeneration.ALLOW_NONE,
            vertex_output_mime_type=VertexImageOutputMIMEType.WEBP,
            vertex_compression_quality=75,
        ),
    ), id="vertex-image"),
    pytest.param("gemini", "veo-3.0-generate-001", GenerationControls(
        google_video_generation=GoogleVideoGenerationControls(
            duration_seconds=8,
            aspect_ratio=GoogleVideoAspectRatio.LANDSCAPE_16_9,
            resolution=GoogleVideoResolution.RES_720P,
            negative_prompt="text overlays",
            generate_audio=True,
            person_generation=GoogleVideoPersonGeneration.ALLOW_ALL,
            seed=42,
        ),
    ), id="veo"),
    pytest.param("cerebras", "gpt-oss-120b", GenerationControls(
        temperature=0.2,
        top_p=0.8,
        max_tokens=256,
        reasoning=ReasoningControls(enabled=False),
    ), id="cerebras"),
    pytest.param("fireworks", "accounts/fireworks/models/kimi-k2p5", GenerationControls(
        max_tokens=500,
        reasoning=ReasoningControls(enabled=True, effort=E.MEDIUM),
    ), id="fireworks"),
    pytest.param("perplexity", "sonar-reasoning-pro", GenerationControls(
        temperature=0.1,
        reasoning=ReasoningControls(enabled=True, effort=E.MINIMAL),
        web_search=WebSearchControls(enabled=True, context_size=WebSearchContextSize.MEDIUM),
    ), id="perplexity"),
    pytest.param("xai", "grok-4", GenerationControls(
        context_cache=ContextCacheControls(conversation_id="conv-1", cache_key="ck", ttl="5m"),
    ), id="xai"),
]


class TestRoundTrip:
    """Test building then applying restores the controls."""

    @pytest.mark.parametrize("provider,model_id,controls", ROUND_TRIP_CASES)
    def test_round_trip(self, provider, model_id, controls):
        """Test apply(build(C)) == C with nothing left over."""
        draft = make_draft(provider, model_id, controls)
        result = apply_draft(provider, model_id, draft)
        assert result.remainder == {}
        assert result.controls == controls

    @pytest.mark.parametrize("provider,model_id,controls", ROUND_TRIP_CASES)
    def test_rebuild_is_stable(self, provider, model_id, controls):
        """Test the applied controls build the same draft again."""
        draft = make_draft(provider, model_id, controls)
        result = apply_draft(provider, model_id, draft)
        assert make_draft(provider, model_id, result.controls) == draft

    def test_passthrough_round_trip(self):
        """Test passthrough providers round trip through provider_specific."""
        controls = GenerationControls(provider_specific={"temperature": 0.3, "safe_prompt": True})
        draft = make_draft("mistral", "mistral-large-latest", controls)
        assert apply_draft("mistral", "mistral-large-latest", draft).controls == controls
