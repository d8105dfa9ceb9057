import copy
from typing import Any, Dict, Optional, Union

from ...config.overrides import get_model_overrides
from ...models.controls import GenerationControls
from ...models.providers import ProviderType
from ...observability.logging import get_sync_logger
from ...providers import PROVIDER_SYNCS, ApplyResult, ProviderDraftSync, get_provider_sync
from ..capabilities import ModelCapabilitySet, get_capabilities
from ..normalization.context_cache import apply_context_cache_fragment, build_context_cache_fragment
from ..normalization.json_values import compute_remainder, merge_provider_specific, prune_nulls

ProviderLike = Union[ProviderType, str, None]


def resolve_capabilities(provider: Optional[ProviderType], model_id: str) -> ModelCapabilitySet:
    """Derived capabilities with any configured per-model overrides applied."""
    return get_capabilities(provider, model_id, get_model_overrides(provider, model_id))


class DraftSync:
    """Dispatches draft building and applying to provider builder/applier pairs."""

    def __init__(self, providers: Optional[Dict[ProviderType, ProviderDraftSync]] = None):
        self.providers = dict(PROVIDER_SYNCS if providers is None else providers)

    def _resolve(
        self,
        provider: ProviderLike,
        model_id: str,
        capabilities: Optional[ModelCapabilitySet],
    ):
        provider_type = ProviderType.parse(provider)
        if capabilities is None:
            capabilities = resolve_capabilities(provider_type, model_id)
        sync = get_provider_sync(provider_type, self.providers)
        return provider_type, capabilities, sync

    def make_draft(
        self,
        provider: ProviderLike,
        model_id: str,
        controls: GenerationControls,
        capabilities: Optional[ModelCapabilitySet] = None,
    ) -> Dict[str, Any]:
        """
        Build the provider-native draft for canonical controls.

        Args:
            provider: Provider family (enum or name); unknown names are passthrough
            model_id: Model identifier
            controls: Canonical controls
            capabilities: Precomputed capability set, resolved when omitted

        Returns:
            Draft with ``provider_specific`` merged over the computed fields
        """
        provider_type, capabilities, sync = self._resolve(provider, model_id, capabilities)
        logger = get_sync_logger(provider_type)

        if sync is None:
            logger.debug("Passthrough draft", model=model_id, keys=len(controls.provider_specific))
            return copy.deepcopy(controls.provider_specific)

        draft = sync.build(controls, model_id, capabilities)
        draft.update(build_context_cache_fragment(provider_type, model_id, controls.context_cache, capabilities))
        merged = merge_provider_specific(draft, controls.provider_specific, sync.merge_policy)

        logger.debug("Built draft", model=model_id, keys=",".join(sorted(merged)) or None)
        return copy.deepcopy(merged)

    def apply_draft(
        self,
        provider: ProviderLike,
        model_id: str,
        draft: Any,
        controls: Optional[GenerationControls] = None,
        capabilities: Optional[ModelCapabilitySet] = None,
    ) -> ApplyResult:
        """
        Fold an (edited) draft back into canonical controls.

        JSON nulls are pruned first, so clearing a value in an editor is the
        same as never setting it. Anything the provider builder would not
        reproduce from the inferred controls is kept in the remainder, which
        also becomes the returned controls' ``provider_specific``.

        Args:
            provider: Provider family (enum or name); unknown names are passthrough
            model_id: Model identifier
            draft: Draft JSON; anything but an object is treated as empty
            controls: Controls before this apply, defaults to empty controls
            capabilities: Precomputed capability set, resolved when omitted

        Returns:
            ApplyResult of updated controls and the passthrough remainder
        """
        provider_type, capabilities, sync = self._resolve(provider, model_id, capabilities)
        logger = get_sync_logger(provider_type)

        observed = prune_nulls(draft) if isinstance(draft, dict) else {}
        prior = (controls or GenerationControls()).model_copy(update={"provider_specific": {}})
        cache = apply_context_cache_fragment(provider_type, model_id, observed, prior.context_cache, capabilities)

        if sync is None:
            remainder = copy.deepcopy(observed)
            result = prior.model_copy(update={"context_cache": cache, "provider_specific": remainder})
            logger.debug("Passthrough apply", model=model_id, keys=len(remainder))
            return ApplyResult(result, remainder)

        parsed = sync.apply(observed, model_id, capabilities, prior)
        parsed = parsed.model_copy(update={"context_cache": cache, "provider_specific": {}})

        rebuilt = sync.build(parsed, model_id, capabilities)
        rebuilt.update(build_context_cache_fragment(provider_type, model_id, cache, capabilities))
        remainder = compute_remainder(observed, rebuilt, sync.merge_policy)
        if sync.finalize_remainder is not None:
            remainder = sync.finalize_remainder(remainder, model_id)
        remainder = copy.deepcopy(remainder)

        logger.log_remainder(remainder, model_id)
        return ApplyResult(parsed.model_copy(update={"provider_specific": remainder}), remainder)


draft_sync = DraftSync()


def make_draft(
    provider: ProviderLike,
    model_id: str,
    controls: GenerationControls,
    capabilities: Optional[ModelCapabilitySet] = None,
) -> Dict[str, Any]:
    return draft_sync.make_draft(provider, model_id, controls, capabilities)


def apply_draft(
    provider: ProviderLike,
    model_id: str,
    draft: Any,
    controls: Optional[GenerationControls] = None,
    capabilities: Optional[ModelCapabilitySet] = None,
) -> ApplyResult:
    return draft_sync.apply_draft(provider, model_id, draft, controls, capabilities)
