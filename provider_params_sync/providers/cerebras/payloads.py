"""Cerebras draft builder and applier (OpenAI-compatible chat completions)."""

from __future__ import annotations

from typing import Any, Dict, Optional

from ...core.capabilities import ModelCapabilitySet
from ...core.normalization.coercion import coerce_str
from ...models.controls import GenerationControls, ReasoningControls
from ..common import emit_sampling, parse_sampling

MAX_TOKENS_KEY = "max_completion_tokens"


def build_cerebras_draft(
    controls: GenerationControls,
    model_id: str,
    capabilities: ModelCapabilitySet,
) -> Dict[str, Any]:
    out = emit_sampling({}, controls, max_tokens_key=MAX_TOKENS_KEY)

    reasoning = controls.reasoning
    if reasoning is not None and capabilities.supports_reasoning:
        out["disable_reasoning"] = not reasoning.enabled
        out["reasoning_format"] = "parsed" if reasoning.enabled else "none"

    return out


def parse_cerebras_reasoning(draft: Dict[str, Any]) -> Optional[ReasoningControls]:
    """
    Fold ``disable_reasoning`` and ``reasoning_format`` into reasoning controls.

    The builder always emits both keys, so a draft carrying only one of them
    stays in the remainder. ``reasoning_format`` wins when the two disagree;
    formats other than "none" and "parsed" (e.g. "raw") leave the flag in charge.
    """
    disabled = draft.get("disable_reasoning")
    reasoning_format = coerce_str(draft.get("reasoning_format"))
    if not isinstance(disabled, bool) or reasoning_format is None:
        return None

    enabled = not disabled
    lowered = reasoning_format.strip().lower()
    if lowered in ("none", "parsed"):
        enabled = lowered == "parsed"
    return ReasoningControls(enabled=enabled)


def apply_cerebras_draft(
    draft: Dict[str, Any],
    model_id: str,
    capabilities: ModelCapabilitySet,
    controls: GenerationControls,
) -> GenerationControls:
    update = parse_sampling(draft, max_tokens_key=MAX_TOKENS_KEY)
    update["reasoning"] = parse_cerebras_reasoning(draft)
    return controls.model_copy(update=update)
