"""Perplexity Sonar draft builder and applier."""

from __future__ import annotations

from typing import Any, Dict, Optional

from ...core.capabilities import ModelCapabilitySet
from ...core.normalization.coercion import coerce_str, parse_enum
from ...models.controls import (
    GenerationControls,
    ReasoningControls,
    ReasoningEffort,
    WebSearchContextSize,
    WebSearchControls,
)
from ..common import emit_sampling, normalized_effort, parse_sampling

EFFORT_TO_WIRE = {
    ReasoningEffort.MINIMAL: "minimal",
    ReasoningEffort.LOW: "low",
    ReasoningEffort.MEDIUM: "medium",
    ReasoningEffort.HIGH: "high",
    ReasoningEffort.XHIGH: "high",
}

WIRE_TO_EFFORT = {
    "minimal": ReasoningEffort.MINIMAL,
    "low": ReasoningEffort.LOW,
    "medium": ReasoningEffort.MEDIUM,
    "high": ReasoningEffort.HIGH,
}


def build_perplexity_draft(
    controls: GenerationControls,
    model_id: str,
    capabilities: ModelCapabilitySet,
) -> Dict[str, Any]:
    out = emit_sampling({}, controls)

    reasoning = controls.reasoning
    if reasoning is not None and reasoning.enabled and capabilities.supports_reasoning:
        effort = normalized_effort(reasoning.effort or ReasoningEffort.MEDIUM, capabilities)
        wire = EFFORT_TO_WIRE.get(effort)
        if wire is not None:
            out["reasoning_effort"] = wire

    web_search = controls.web_search
    if web_search is not None:
        if not web_search.enabled:
            out["disable_search"] = True
        elif web_search.context_size is not None:
            out["web_search_options"] = {"search_context_size": web_search.context_size.value}

    return out


def parse_perplexity_reasoning(raw: Any) -> Optional[ReasoningControls]:
    wire = coerce_str(raw)
    effort = WIRE_TO_EFFORT.get(wire.strip().lower()) if wire else None
    if effort is None:
        return None
    return ReasoningControls(enabled=True, effort=effort)


def parse_perplexity_web_search(draft: Dict[str, Any]) -> Optional[WebSearchControls]:
    """
    Web search from ``disable_search`` and ``web_search_options``.

    A bare ``disable_search: false`` is the API default and carries nothing.
    The legacy ``web_search_options.disable_search`` flag is not promoted: it
    stays in the remainder and suppresses the context size next to it.
    """
    disabled: Optional[bool] = None
    if isinstance(draft.get("disable_search"), bool):
        disabled = draft["disable_search"]

    context_size = None
    options = draft.get("web_search_options")
    if isinstance(options, dict) and options.get("disable_search") is not True:
        context_size = parse_enum(WebSearchContextSize, options.get("search_context_size"), case="lower")

    if not disabled and context_size is None:
        return None
    return WebSearchControls(enabled=not disabled, context_size=context_size)


def apply_perplexity_draft(
    draft: Dict[str, Any],
    model_id: str,
    capabilities: ModelCapabilitySet,
    controls: GenerationControls,
) -> GenerationControls:
    update = parse_sampling(draft)
    update["reasoning"] = parse_perplexity_reasoning(draft.get("reasoning_effort"))
    update["web_search"] = parse_perplexity_web_search(draft)
    return controls.model_copy(update=update)
