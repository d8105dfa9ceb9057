"""Normalization layer: effort mapping, JSON helpers, coercion and context caching."""

from .coercion import coerce_float, coerce_int, normalized_domains, normalized_trimmed_string
from .context_cache import (
    apply_context_cache_fragment,
    build_context_cache_fragment,
    parse_ttl,
    ttl_to_wire,
)
from .effort import effort_rank, nearest_supported_effort, normalize_effort
from .json_values import (
    MergePolicy,
    compute_remainder,
    deep_merge,
    json_equal,
    merge_provider_specific,
    prune_nulls,
    residual,
)

__all__ = [
    # Effort
    "normalize_effort",
    "nearest_supported_effort",
    "effort_rank",

    # JSON values
    "MergePolicy",
    "prune_nulls",
    "deep_merge",
    "json_equal",
    "residual",
    "merge_provider_specific",
    "compute_remainder",

    # Coercion
    "coerce_float",
    "coerce_int",
    "normalized_trimmed_string",
    "normalized_domains",

    # Context cache
    "build_context_cache_fragment",
    "apply_context_cache_fragment",
    "parse_ttl",
    "ttl_to_wire",
]
