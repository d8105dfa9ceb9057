"""Unit tests for the Anthropic draft builder and applier."""

from provider_params_sync.core.capabilities import get_capabilities
from provider_params_sync.models.controls import (
    GenerationControls,
    ReasoningControls,
    ReasoningEffort,
    WebSearchControls,
    WebSearchUserLocation,
)
from provider_params_sync.models.providers import ProviderType
from provider_params_sync.providers.anthropic import apply_anthropic_draft, build_anthropic_draft
from provider_params_sync.providers.anthropic.payloads import (
    map_anthropic_effort,
    parse_anthropic_web_search,
)


def _build(model_id, controls):
    return build_anthropic_draft(controls, model_id, get_capabilities(ProviderType.ANTHROPIC, model_id))


def _apply(model_id, draft, controls=None):
    caps = get_capabilities(ProviderType.ANTHROPIC, model_id)
    return apply_anthropic_draft(draft, model_id, caps, controls or GenerationControls())


class TestBuildAnthropicDraft:
    """Test building Anthropic Messages drafts."""

    def test_adaptive_thinking(self):
        """Test adaptive models omit budget_tokens."""
        controls = GenerationControls(reasoning=ReasoningControls(enabled=True, budget_tokens=None))
        assert _build("claude-opus-4-6", controls) == {"thinking": {"type": "adaptive"}}

    def test_adaptive_thinking_with_effort(self):
        """Test effort is sent through output_config."""
        controls = GenerationControls(reasoning=ReasoningControls(enabled=True, effort=ReasoningEffort.XHIGH))
        assert _build("claude-opus-4-6", controls) == {
            "thinking": {"type": "adaptive"},
            "output_config": {"effort": "max"},
        }
        assert _build("claude-sonnet-4-6", controls)["output_config"] == {"effort": "high"}

    def test_budgeted_thinking(self):
        """Test older models get an explicit budget, defaulting to 2048."""
        with_budget = GenerationControls(reasoning=ReasoningControls(enabled=True, budget_tokens=8000))
        without = GenerationControls(reasoning=ReasoningControls(enabled=True, effort=ReasoningEffort.LOW))
        assert _build("claude-sonnet-4-5", with_budget) == {
            "thinking": {"type": "enabled", "budget_tokens": 8000}
        }
        assert _build("claude-sonnet-4-5", without) == {
            "thinking": {"type": "enabled", "budget_tokens": 2048}
        }

    def test_disabled_reasoning_emits_nothing(self):
        """Test disabled reasoning leaves thinking out."""
        controls = GenerationControls(max_tokens=1024, reasoning=ReasoningControls(enabled=False))
        assert _build("claude-sonnet-4-5", controls) == {"max_tokens": 1024}

    def test_effort_vocabulary(self):
        """Test abstract efforts map onto Anthropic effort names."""
        assert map_anthropic_effort(ReasoningEffort.MINIMAL, "claude-opus-4-6") == "low"
        assert map_anthropic_effort(ReasoningEffort.MEDIUM, "claude-opus-4-6") == "medium"
        assert map_anthropic_effort(ReasoningEffort.NONE, "claude-opus-4-6") == "high"
        assert map_anthropic_effort(ReasoningEffort.XHIGH, "claude-sonnet-4-6") == "high"

    def test_web_search_tool(self):
        """Test the full web search tool spec."""
        controls = GenerationControls(web_search=WebSearchControls(
            enabled=True,
            max_uses=3,
            allowed_domains=[" docs.python.org "],
            blocked_domains=["example.com"],
            user_location=WebSearchUserLocation(city="Paris", country="FR"),
        ))
        assert _build("claude-sonnet-4-5", controls) == {"tools": [{
            "type": "web_search_20250305",
            "name": "web_search",
            "max_uses": 3,
            "allowed_domains": ["docs.python.org"],
            "user_location": {"type": "approximate", "city": "Paris", "country": "FR"},
        }]}

    def test_dynamic_filtering_gated(self):
        """Test the dynamic tool type needs model support."""
        controls = GenerationControls(web_search=WebSearchControls(enabled=True, dynamic_filtering=True))
        assert _build("claude-opus-4-6", controls)["tools"][0]["type"] == "web_search_20260209"
        assert _build("claude-opus-4-5", controls)["tools"][0]["type"] == "web_search_20250305"


class TestApplyAnthropicDraft:
    """Test parsing Anthropic drafts."""

    def test_adaptive_with_effort(self):
        """Test adaptive thinking plus output effort."""
        controls = _apply("claude-opus-4-6", {
            "thinking": {"type": "adaptive"},
            "output_config": {"effort": "max"},
        })
        assert controls.reasoning == ReasoningControls(enabled=True, effort=ReasoningEffort.XHIGH)

    def test_budget_clears_effort_on_effort_models(self):
        """Test a budget on a 4.6 model drops the previous effort."""
        prior = GenerationControls(reasoning=ReasoningControls(enabled=True, effort=ReasoningEffort.HIGH))
        controls = _apply("claude-sonnet-4-6", {"thinking": {"type": "enabled", "budget_tokens": 4000}}, prior)
        assert controls.reasoning == ReasoningControls(enabled=True, budget_tokens=4000)

    def test_disabled_thinking(self):
        """Test explicit disabled thinking."""
        controls = _apply("claude-sonnet-4-5", {"thinking": {"type": "disabled"}})
        assert controls.reasoning == ReasoningControls(enabled=False)

    def test_missing_thinking_clears_reasoning(self):
        """Test removing thinking resets reasoning."""
        prior = GenerationControls(reasoning=ReasoningControls(enabled=True, budget_tokens=4000))
        assert _apply("claude-sonnet-4-5", {"temperature": 1}, prior).reasoning is None

    def test_output_effort_ignored_on_older_models(self):
        """Test output_config.effort only counts on effort-capable models."""
        controls = _apply("claude-sonnet-4-5", {"output_config": {"effort": "low"}})
        assert controls.reasoning is None

    def test_web_search_parsing(self):
        """Test the web search tool round into controls."""
        web_search = parse_anthropic_web_search([
            {"type": "custom", "name": "lookup"},
            {
                "type": "web_search_20260209",
                "name": "web_search",
                "max_uses": 2,
                "allowed_domains": ["a.com"],
                "blocked_domains": ["b.com"],
                "user_location": {"type": "approximate", "timezone": "Europe/Paris"},
            },
        ])
        assert web_search.enabled is True
        assert web_search.dynamic_filtering is True
        assert web_search.max_uses == 2
        assert web_search.allowed_domains == ["a.com"]
        assert web_search.blocked_domains is None
        assert web_search.user_location == WebSearchUserLocation(timezone="Europe/Paris")
        assert parse_anthropic_web_search([{"type": "bash_20250124"}]) is None

    def test_web_search_tool_type_must_be_string(self):
        """Test tools with non-string types are skipped."""
        assert parse_anthropic_web_search([{"type": {"a": 1}}, {"type": ["web_search_20250305"]}]) is None
        assert parse_anthropic_web_search(["web_search_20250305", None]) is None

    def test_output_effort_needs_enabled_thinking(self):
        """Test output_config.effort alone or with disabled thinking sets nothing."""
        assert _apply("claude-opus-4-6", {"output_config": {"effort": "high"}}).reasoning is None
        controls = _apply("claude-opus-4-6", {
            "thinking": {"type": "disabled"},
            "output_config": {"effort": "high"},
        })
        assert controls.reasoning == ReasoningControls(enabled=False)

    def test_thinking_drops_stored_effort_on_effort_models(self):
        """Test stored effort is only kept where output_config cannot carry it."""
        prior = GenerationControls(reasoning=ReasoningControls(enabled=True, effort=ReasoningEffort.HIGH))
        adaptive = _apply("claude-opus-4-6", {"thinking": {"type": "adaptive"}}, prior)
        assert adaptive.reasoning == ReasoningControls(enabled=True)
        older = _apply("claude-sonnet-4-5", {"thinking": {"type": "enabled", "budget_tokens": 2048}}, prior)
        assert older.reasoning == ReasoningControls(enabled=True, effort=ReasoningEffort.HIGH, budget_tokens=2048)
