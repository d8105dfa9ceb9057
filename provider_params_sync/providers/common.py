from __future__ import annotations

from typing import Any, Dict, Optional

from ..core.capabilities import ModelCapabilitySet
from ..core.normalization.coercion import coerce_float, coerce_int
from ..core.normalization.effort import nearest_supported_effort
from ..models.controls import GenerationControls, ReasoningEffort


def emit_sampling(
    out: Dict[str, Any],
    controls: GenerationControls,
    max_tokens_key: str = "max_tokens",
    temperature_key: str = "temperature",
    top_p_key: str = "top_p",
) -> Dict[str, Any]:
    """Copy temperature, top_p and max tokens into a draft under provider key names."""
    if controls.temperature is not None:
        out[temperature_key] = controls.temperature
    if controls.top_p is not None:
        out[top_p_key] = controls.top_p
    if controls.max_tokens is not None:
        out[max_tokens_key] = controls.max_tokens
    return out


def parse_sampling(
    draft: Dict[str, Any],
    max_tokens_key: str = "max_tokens",
    temperature_key: str = "temperature",
    top_p_key: str = "top_p",
) -> Dict[str, Any]:
    """Sampling fields for a controls update; absent or malformed keys reset to None."""
    return {
        "temperature": coerce_float(draft.get(temperature_key)),
        "top_p": coerce_float(draft.get(top_p_key)),
        "max_tokens": coerce_int(draft.get(max_tokens_key)),
    }


def normalized_effort(
    effort: Optional[ReasoningEffort],
    capabilities: ModelCapabilitySet,
) -> Optional[ReasoningEffort]:
    if effort is None:
        return None
    return nearest_supported_effort(effort, capabilities.supported_reasoning_efforts)
