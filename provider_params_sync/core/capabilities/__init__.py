"""Capability registry and model policy layer.

This layer handles:
- Wire shape selection per provider family
- Supported reasoning effort lookup
- Web search, dynamic filtering and context cache support
- Model-family predicates shared by draft builders
"""

from .models import DEFAULT_CAPABILITIES, ModelCapabilitySet
from .registry import (
    get_capabilities,
    supported_reasoning_efforts,
    supports_context_cache,
    supports_dynamic_filtering,
    supports_web_search,
    wire_shape,
)

__all__ = [
    "ModelCapabilitySet",
    "DEFAULT_CAPABILITIES",
    "get_capabilities",
    "wire_shape",
    "supported_reasoning_efforts",
    "supports_web_search",
    "supports_dynamic_filtering",
    "supports_context_cache",
]
