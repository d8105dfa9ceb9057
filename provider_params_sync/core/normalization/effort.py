"""Reasoning effort normalization against a model's supported levels."""

from typing import Optional, Sequence

from ...models.controls import ReasoningEffort
from ...models.providers import ProviderType
from ..capabilities import ModelCapabilitySet, supported_reasoning_efforts

EFFORT_RANKS = {
    ReasoningEffort.NONE: 0,
    ReasoningEffort.MINIMAL: 1,
    ReasoningEffort.LOW: 2,
    ReasoningEffort.MEDIUM: 3,
    ReasoningEffort.HIGH: 4,
    ReasoningEffort.XHIGH: 5,
}


def effort_rank(effort: ReasoningEffort) -> int:
    return EFFORT_RANKS[ReasoningEffort(effort)]


def nearest_supported_effort(effort: ReasoningEffort, supported: Sequence[ReasoningEffort]) -> ReasoningEffort:
    """
    Map an effort onto the closest supported level.

    ``none`` always stays ``none`` since it means reasoning is off. Supported
    levels are returned unchanged; otherwise the candidate with the smallest
    rank distance wins and ties go to the higher rank.

    Args:
        effort: Requested effort
        supported: Levels the model accepts (empty means unrestricted)

    Returns:
        The normalized effort
    """
    effort = ReasoningEffort(effort)
    if effort == ReasoningEffort.NONE or not supported or effort in supported:
        return effort

    target = effort_rank(effort)
    best = None
    for candidate in supported:
        rank = effort_rank(candidate)
        key = (abs(rank - target), -rank)
        if best is None or key < best[0]:
            best = (key, candidate)
    return best[1]


def normalize_effort(
    effort: ReasoningEffort,
    provider: Optional[ProviderType],
    model_id: str,
    capabilities: Optional[ModelCapabilitySet] = None,
) -> ReasoningEffort:
    """Normalize an effort for a provider/model pair (or a precomputed capability set)."""
    if capabilities is not None:
        supported = capabilities.supported_reasoning_efforts
    else:
        supported = supported_reasoning_efforts(provider, model_id)
    return nearest_supported_effort(effort, supported)
