"""
Provider draft sync interface.

Every provider family contributes one builder/applier pair:

- the builder projects canonical GenerationControls onto a provider-native
  draft, emitting only what the model's capability set supports;
- the applier parses a (null-pruned) draft back into canonical controls.

Appliers never decide what stays in the passthrough remainder. The facade
re-runs the builder on the inferred controls and keeps every fragment the
builder does not reproduce exactly, so promotion is a pure structural check.
"""

from typing import Any, Callable, Dict, NamedTuple, Optional

from ..core.capabilities import ModelCapabilitySet
from ..core.normalization.json_values import MergePolicy
from ..models.controls import GenerationControls

Draft = Dict[str, Any]

DraftBuilder = Callable[[GenerationControls, str, ModelCapabilitySet], Draft]
DraftApplier = Callable[[Draft, str, ModelCapabilitySet, GenerationControls], GenerationControls]
RemainderHook = Callable[[Draft, str], Draft]


class ApplyResult(NamedTuple):
    """Outcome of applying a draft: updated controls and the passthrough remainder."""
    controls: GenerationControls
    remainder: Draft


class ProviderDraftSync(NamedTuple):
    """Builder/applier pair for one provider family."""
    name: str
    build: DraftBuilder
    apply: DraftApplier
    merge_policy: MergePolicy = MergePolicy.FLAT
    finalize_remainder: Optional[RemainderHook] = None
