from __future__ import annotations

from typing import Any, Dict, List, Optional

from ...config.constants import (
    ANTHROPIC_DYNAMIC_WEB_SEARCH_TOOL_TYPE,
    ANTHROPIC_WEB_SEARCH_TOOL_NAME,
    ANTHROPIC_WEB_SEARCH_TOOL_TYPE,
    ANTHROPIC_WEB_SEARCH_TOOL_TYPES,
    DEFAULT_ANTHROPIC_THINKING_BUDGET,
)
from ...core.capabilities import ModelCapabilitySet
from ...core.capabilities.policy import (
    supports_adaptive_thinking,
    supports_anthropic_effort,
    supports_anthropic_max_effort,
)
from ...core.normalization.coercion import coerce_int, coerce_str, normalized_domains
from ...models.controls import (
    GenerationControls,
    ReasoningControls,
    ReasoningEffort,
    WebSearchControls,
    WebSearchUserLocation,
)
from ..common import emit_sampling, normalized_effort, parse_sampling

WIRE_TO_EFFORT = {
    "low": ReasoningEffort.LOW,
    "medium": ReasoningEffort.MEDIUM,
    "high": ReasoningEffort.HIGH,
    "max": ReasoningEffort.XHIGH,
}

_LOCATION_FIELDS = ("city", "region", "country", "timezone")


def map_anthropic_effort(effort: ReasoningEffort, model_id: str) -> str:
    """Abstract effort to ``output_config.effort``; ``none`` maps to the default "high"."""
    if effort in (ReasoningEffort.MINIMAL, ReasoningEffort.LOW):
        return "low"
    if effort == ReasoningEffort.MEDIUM:
        return "medium"
    if effort == ReasoningEffort.XHIGH and supports_anthropic_max_effort(model_id):
        return "max"
    return "high"


def build_web_search_tool(web_search: WebSearchControls, capabilities: ModelCapabilitySet) -> Dict[str, Any]:
    """Build the web_search tool spec.

    The dynamic-filtering tool type is used only when requested and supported.
    Allowed domains win over blocked domains since the API rejects both.
    """
    use_dynamic = bool(web_search.dynamic_filtering) and capabilities.supports_dynamic_web_search_filtering
    spec: Dict[str, Any] = {
        "type": ANTHROPIC_DYNAMIC_WEB_SEARCH_TOOL_TYPE if use_dynamic else ANTHROPIC_WEB_SEARCH_TOOL_TYPE,
        "name": ANTHROPIC_WEB_SEARCH_TOOL_NAME,
    }
    if web_search.max_uses is not None and web_search.max_uses > 0:
        spec["max_uses"] = web_search.max_uses

    allowed = normalized_domains(web_search.allowed_domains)
    blocked = normalized_domains(web_search.blocked_domains)
    if allowed:
        spec["allowed_domains"] = allowed
    elif blocked:
        spec["blocked_domains"] = blocked

    location = web_search.user_location
    if location is not None and not location.is_empty:
        loc: Dict[str, Any] = {"type": "approximate"}
        for field in _LOCATION_FIELDS:
            value = (getattr(location, field) or "").strip()
            if value:
                loc[field] = value
        spec["user_location"] = loc

    return spec


def build_anthropic_draft(
    controls: GenerationControls,
    model_id: str,
    capabilities: ModelCapabilitySet,
) -> Dict[str, Any]:
    out = emit_sampling({}, controls)

    reasoning = controls.reasoning
    if reasoning is not None and reasoning.enabled and capabilities.supports_reasoning:
        if supports_adaptive_thinking(model_id) and reasoning.budget_tokens is None:
            out["thinking"] = {"type": "adaptive"}
        else:
            out["thinking"] = {
                "type": "enabled",
                "budget_tokens": reasoning.budget_tokens or DEFAULT_ANTHROPIC_THINKING_BUDGET,
            }

        if supports_anthropic_effort(model_id) and reasoning.budget_tokens is None and reasoning.effort is not None:
            effort = normalized_effort(reasoning.effort, capabilities)
            out["output_config"] = {"effort": map_anthropic_effort(effort, model_id)}

    web_search = controls.web_search
    if web_search is not None and web_search.enabled and capabilities.supports_web_search:
        out["tools"] = [build_web_search_tool(web_search, capabilities)]

    return out


def parse_anthropic_thinking(
    raw: Any,
    model_id: str,
    prior: Optional[ReasoningControls],
) -> Optional[ReasoningControls]:
    if not isinstance(raw, dict):
        return None

    thinking_type = coerce_str(raw.get("type"))
    thinking_type = thinking_type.lower() if thinking_type else None
    if thinking_type == "disabled":
        return ReasoningControls(enabled=False)

    budget = coerce_int(raw.get("budget_tokens")) if thinking_type != "adaptive" else None
    reasoning = (prior or ReasoningControls()).model_copy(
        update={"enabled": True, "budget_tokens": budget, "summary": None}
    )
    # Effort-capable models only take effort from output_config
    if supports_anthropic_effort(model_id):
        reasoning = reasoning.model_copy(update={"effort": None})
    return reasoning


def parse_anthropic_output_effort(
    raw: Any,
    model_id: str,
    reasoning: Optional[ReasoningControls],
) -> Optional[ReasoningControls]:
    """
    Fold ``output_config.effort`` into enabled thinking on effort-capable models.

    Without enabled thinking the effort has no canonical home: the builder
    would add a ``thinking`` block the draft never had.
    """
    if reasoning is None or not reasoning.enabled:
        return reasoning
    if not isinstance(raw, dict) or not supports_anthropic_effort(model_id):
        return reasoning
    effort_raw = coerce_str(raw.get("effort"))
    effort = WIRE_TO_EFFORT.get(effort_raw.lower()) if effort_raw else None
    if effort is None:
        return reasoning
    return reasoning.model_copy(update={"effort": effort, "budget_tokens": None})


def _string_list(raw: Any) -> Optional[List[str]]:
    if not isinstance(raw, list) or not all(isinstance(item, str) for item in raw):
        return None
    return normalized_domains(raw) or None


def parse_anthropic_web_search(raw: Any) -> Optional[WebSearchControls]:
    if not isinstance(raw, list):
        return None

    found = False
    settings: Dict[str, Any] = {}
    for item in raw:
        tool_type = coerce_str(item.get("type")) if isinstance(item, dict) else None
        if tool_type not in ANTHROPIC_WEB_SEARCH_TOOL_TYPES:
            continue
        found = True
        if tool_type == ANTHROPIC_DYNAMIC_WEB_SEARCH_TOOL_TYPE:
            settings["dynamic_filtering"] = True

        max_uses = coerce_int(item.get("max_uses"))
        if max_uses is not None:
            settings["max_uses"] = max_uses
        allowed = _string_list(item.get("allowed_domains"))
        if allowed:
            settings["allowed_domains"] = allowed
        blocked = _string_list(item.get("blocked_domains"))
        if blocked:
            settings["blocked_domains"] = blocked

        location = item.get("user_location")
        if isinstance(location, dict):
            parsed = WebSearchUserLocation(**{field: coerce_str(location.get(field)) for field in _LOCATION_FIELDS})
            if not parsed.is_empty:
                settings["user_location"] = parsed

    if not found:
        return None
    if settings.get("allowed_domains") and settings.get("blocked_domains"):
        settings.pop("blocked_domains")
    return WebSearchControls(enabled=True, **settings)


def apply_anthropic_draft(
    draft: Dict[str, Any],
    model_id: str,
    capabilities: ModelCapabilitySet,
    controls: GenerationControls,
) -> GenerationControls:
    update = parse_sampling(draft)

    reasoning = None
    if "thinking" in draft:
        reasoning = parse_anthropic_thinking(draft["thinking"], model_id, controls.reasoning)
    update["reasoning"] = parse_anthropic_output_effort(draft.get("output_config"), model_id, reasoning)

    update["web_search"] = parse_anthropic_web_search(draft.get("tools"))

    return controls.model_copy(update=update)
