"""
Fireworks draft builder and applier (OpenAI-compatible chat completions).

Fireworks exposes a flat ``reasoning_effort`` string. MiniMax M2 models cannot
switch reasoning off, so their reasoning is always reported as enabled.
``reasoning_history`` has no typed control; supported values are kept in the
remainder (lowercased) and unsupported ones are kept verbatim with a warning.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from ...core.capabilities import ModelCapabilitySet
from ...core.capabilities.policy import (
    is_fireworks_minimax_m2_model,
    supported_fireworks_reasoning_history_values,
)
from ...core.normalization.coercion import coerce_str
from ...models.controls import GenerationControls, ReasoningControls, ReasoningEffort
from ...observability.logging import SyncLogger
from ..common import emit_sampling, normalized_effort, parse_sampling

logger = SyncLogger("fireworks")

REASONING_HISTORY_KEY = "reasoning_history"

EFFORT_TO_WIRE = {
    ReasoningEffort.MINIMAL: "low",
    ReasoningEffort.LOW: "low",
    ReasoningEffort.MEDIUM: "medium",
    ReasoningEffort.HIGH: "high",
    ReasoningEffort.XHIGH: "high",
}

WIRE_TO_EFFORT = {
    "none": ReasoningEffort.NONE,
    "low": ReasoningEffort.LOW,
    "medium": ReasoningEffort.MEDIUM,
    "high": ReasoningEffort.HIGH,
}


def build_fireworks_draft(
    controls: GenerationControls,
    model_id: str,
    capabilities: ModelCapabilitySet,
) -> Dict[str, Any]:
    out = emit_sampling({}, controls)

    reasoning = controls.reasoning
    if reasoning is None or not capabilities.supports_reasoning:
        return out

    effort = reasoning.effort if reasoning.enabled else None
    if effort is None or effort == ReasoningEffort.NONE:
        # MiniMax M2 rejects "none"; leaving the key out keeps its default
        if not is_fireworks_minimax_m2_model(model_id):
            out["reasoning_effort"] = "none"
        return out

    out["reasoning_effort"] = EFFORT_TO_WIRE[normalized_effort(effort, capabilities)]
    return out


def parse_fireworks_reasoning(raw: Any, model_id: str) -> Optional[ReasoningControls]:
    """Effort from ``reasoning_effort``; MiniMax M2 reports any present value as medium."""
    if raw is None:
        return None
    minimax = is_fireworks_minimax_m2_model(model_id)
    always_on = ReasoningControls(enabled=True, effort=ReasoningEffort.MEDIUM) if minimax else None

    wire = coerce_str(raw)
    effort = WIRE_TO_EFFORT.get(wire.strip().lower()) if wire else None
    if effort is None:
        return always_on
    if effort == ReasoningEffort.NONE:
        return always_on or ReasoningControls(enabled=False)
    return ReasoningControls(enabled=True, effort=effort)


def apply_fireworks_draft(
    draft: Dict[str, Any],
    model_id: str,
    capabilities: ModelCapabilitySet,
    controls: GenerationControls,
) -> GenerationControls:
    update = parse_sampling(draft)
    update["reasoning"] = parse_fireworks_reasoning(draft.get("reasoning_effort"), model_id)
    return controls.model_copy(update=update)


def finalize_fireworks_remainder(remainder: Dict[str, Any], model_id: str) -> Dict[str, Any]:
    """Normalize ``reasoning_history`` in the passthrough remainder."""
    if REASONING_HISTORY_KEY not in remainder:
        return remainder

    value = remainder[REASONING_HISTORY_KEY]
    normalized = value.strip().lower() if isinstance(value, str) else None
    if normalized is not None and normalized in supported_fireworks_reasoning_history_values(model_id):
        return {**remainder, REASONING_HISTORY_KEY: normalized}

    logger.warning(
        "Unsupported reasoning_history kept verbatim",
        model=model_id,
        value=value,
    )
    return remainder
