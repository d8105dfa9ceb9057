"""
JSON value helpers: null pruning, merging and structural comparison.

Drafts are plain JSON trees (dict / list / str / int / float / bool / None).
Promotion of a draft fragment into typed controls is decided by comparing
the observed draft with the draft the builder would emit itself.
"""

from enum import Enum
from typing import Any, Dict


class MergePolicy(str, Enum):
    """How passthrough fragments are merged back over a computed draft."""
    FLAT = "flat"
    DEEP = "deep"
    ANTHROPIC = "anthropic"


_PRUNED = object()


def _prune(value: Any) -> Any:
    if value is None:
        return _PRUNED
    if isinstance(value, dict):
        out = {}
        for key, item in value.items():
            pruned = _prune(item)
            if pruned is not _PRUNED:
                out[key] = pruned
        # Containers emptied by pruning go too; originally empty ones stay
        if value and not out:
            return _PRUNED
        return out
    if isinstance(value, list):
        out_list = [pruned for pruned in (_prune(item) for item in value) if pruned is not _PRUNED]
        if value and not out_list:
            return _PRUNED
        return out_list
    return value


def prune_nulls(draft: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively drop JSON nulls and the containers left empty by dropping them."""
    pruned = _prune(draft)
    return {} if pruned is _PRUNED else pruned


def deep_merge(base: Dict[str, Any], additional: Dict[str, Any]) -> Dict[str, Any]:
    """Return base with additional merged in; nested objects merge key by key."""
    merged = dict(base)
    for key, value in additional.items():
        existing = merged.get(key)
        if isinstance(existing, dict) and isinstance(value, dict):
            merged[key] = deep_merge(existing, value)
        else:
            merged[key] = value
    return merged


def json_equal(a: Any, b: Any) -> bool:
    """Structural JSON equality; booleans never equal numbers."""
    if isinstance(a, bool) or isinstance(b, bool):
        return isinstance(a, bool) and isinstance(b, bool) and a == b
    if isinstance(a, (int, float)) and isinstance(b, (int, float)):
        return a == b
    if isinstance(a, dict) and isinstance(b, dict):
        return a.keys() == b.keys() and all(json_equal(a[key], b[key]) for key in a)
    if isinstance(a, list) and isinstance(b, list):
        return len(a) == len(b) and all(json_equal(x, y) for x, y in zip(a, b))
    if type(a) is not type(b):
        return False
    return a == b


def flat_residual(observed: Dict[str, Any], rebuilt: Dict[str, Any]) -> Dict[str, Any]:
    """Top-level keys of observed whose values the rebuilt draft does not reproduce exactly."""
    return {
        key: value
        for key, value in observed.items()
        if key not in rebuilt or not json_equal(value, rebuilt[key])
    }


def residual(observed: Dict[str, Any], rebuilt: Dict[str, Any]) -> Dict[str, Any]:
    """Like flat_residual, but nested objects are compared key by key.

    A nested object survives only with the entries the rebuilt draft does not
    reproduce; it disappears once every entry is accounted for.
    """
    out: Dict[str, Any] = {}
    for key, value in observed.items():
        if key not in rebuilt:
            out[key] = value
            continue
        expected = rebuilt[key]
        if isinstance(value, dict) and isinstance(expected, dict):
            nested = residual(value, expected)
            if nested:
                out[key] = nested
        elif not json_equal(value, expected):
            out[key] = value
    return out


def merge_provider_specific(
    draft: Dict[str, Any],
    provider_specific: Dict[str, Any],
    policy: MergePolicy,
) -> Dict[str, Any]:
    """
    Merge passthrough fragments over a computed draft; passthrough always wins.

    - DEEP: nested objects merge key by key (Gemini, Vertex, Perplexity)
    - ANTHROPIC: ``output_format`` folds into ``output_config.format`` and
      ``output_config`` merges deeply; other keys overwrite
    - FLAT: top-level overwrite
    """
    if not provider_specific:
        return dict(draft)

    if policy == MergePolicy.DEEP:
        return deep_merge(draft, provider_specific)

    merged = dict(draft)
    for key, value in provider_specific.items():
        if policy == MergePolicy.ANTHROPIC:
            if key == "output_format":
                output = merged.get("output_config")
                output = dict(output) if isinstance(output, dict) else {}
                output["format"] = value
                merged["output_config"] = output
                continue
            if key == "output_config" and isinstance(value, dict):
                output = merged.get("output_config")
                output = output if isinstance(output, dict) else {}
                merged["output_config"] = deep_merge(output, value)
                continue
        merged[key] = value
    return merged


def compute_remainder(
    observed: Dict[str, Any],
    rebuilt: Dict[str, Any],
    policy: MergePolicy,
) -> Dict[str, Any]:
    """Fragments of observed that the rebuilt draft does not reproduce, per merge policy."""
    if policy == MergePolicy.DEEP:
        return residual(observed, rebuilt)

    remainder = flat_residual(observed, rebuilt)
    if policy == MergePolicy.ANTHROPIC and "output_config" in remainder:
        output = observed["output_config"]
        expected = rebuilt.get("output_config")
        if isinstance(output, dict) and isinstance(expected, dict):
            nested = residual(output, expected)
            if nested:
                remainder["output_config"] = nested
            else:
                remainder.pop("output_config")
    return remainder
