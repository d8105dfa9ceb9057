"""OpenAI Responses API draft builder and applier.

Also serves the OpenAI WebSocket transport, which speaks the same dialect.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from ...config.constants import OPENAI_WEB_SEARCH_TOOL_TYPE
from ...core.capabilities import ModelCapabilitySet
from ...core.normalization.coercion import parse_enum
from ...models.controls import (
    GenerationControls,
    ReasoningControls,
    ReasoningEffort,
    ReasoningSummary,
    WebSearchContextSize,
    WebSearchControls,
)
from ..common import emit_sampling, normalized_effort, parse_sampling

MAX_TOKENS_KEY = "max_output_tokens"

EFFORT_TO_WIRE = {
    ReasoningEffort.NONE: "none",
    ReasoningEffort.MINIMAL: "low",
    ReasoningEffort.LOW: "low",
    ReasoningEffort.MEDIUM: "medium",
    ReasoningEffort.HIGH: "high",
    ReasoningEffort.XHIGH: "xhigh",
}

WIRE_TO_EFFORT = {
    "none": ReasoningEffort.NONE,
    "minimal": ReasoningEffort.MINIMAL,
    "low": ReasoningEffort.LOW,
    "medium": ReasoningEffort.MEDIUM,
    "high": ReasoningEffort.HIGH,
    "xhigh": ReasoningEffort.XHIGH,
    "extra_high": ReasoningEffort.XHIGH,
    "extra-high": ReasoningEffort.XHIGH,
}


def build_openai_draft(
    controls: GenerationControls,
    model_id: str,
    capabilities: ModelCapabilitySet,
) -> Dict[str, Any]:
    """Build the Responses API draft: sampling, reasoning block and web_search tool."""
    out = emit_sampling({}, controls, max_tokens_key=MAX_TOKENS_KEY)

    reasoning = controls.reasoning
    if reasoning is not None and capabilities.supports_reasoning:
        if reasoning.enabled:
            effort = normalized_effort(reasoning.effort or ReasoningEffort.NONE, capabilities)
            block: Dict[str, Any] = {"effort": EFFORT_TO_WIRE[effort]}
        else:
            block = {"effort": "none"}
        if reasoning.summary is not None:
            block["summary"] = reasoning.summary.value
        out["reasoning"] = block

    web_search = controls.web_search
    if web_search is not None and web_search.enabled and capabilities.supports_web_search:
        tool: Dict[str, Any] = {"type": OPENAI_WEB_SEARCH_TOOL_TYPE}
        if web_search.context_size is not None:
            tool["search_context_size"] = web_search.context_size.value
        out["tools"] = [tool]

    return out


def parse_openai_reasoning(raw: Any) -> Optional[ReasoningControls]:
    """Reasoning block to controls; effort "none" means reasoning explicitly off."""
    if not isinstance(raw, dict) or not isinstance(raw.get("effort"), str):
        return None
    effort = WIRE_TO_EFFORT.get(raw["effort"].lower())
    if effort is None:
        return None
    summary = parse_enum(ReasoningSummary, raw.get("summary"), case="lower")

    if effort == ReasoningEffort.NONE:
        return ReasoningControls(enabled=False, summary=summary)
    return ReasoningControls(enabled=True, effort=effort, summary=summary)


def parse_openai_web_search(raw: Any) -> Optional[WebSearchControls]:
    """Find the web_search tool among the declared tools."""
    if not isinstance(raw, list):
        return None

    found = False
    context_size = None
    for item in raw:
        if isinstance(item, dict) and item.get("type") == OPENAI_WEB_SEARCH_TOOL_TYPE:
            found = True
            context_size = parse_enum(WebSearchContextSize, item.get("search_context_size"), case="lower")

    return WebSearchControls(enabled=True, context_size=context_size) if found else None


def apply_openai_draft(
    draft: Dict[str, Any],
    model_id: str,
    capabilities: ModelCapabilitySet,
    controls: GenerationControls,
) -> GenerationControls:
    update = parse_sampling(draft, max_tokens_key=MAX_TOKENS_KEY)
    update["reasoning"] = parse_openai_reasoning(draft.get("reasoning"))

    if "tools" in draft:
        update["web_search"] = parse_openai_web_search(draft["tools"])
    elif controls.web_search is not None:
        # Keep the user's search preferences, just switched off
        update["web_search"] = controls.web_search.model_copy(update={"enabled": False})
    else:
        update["web_search"] = None

    return controls.model_copy(update=update)
