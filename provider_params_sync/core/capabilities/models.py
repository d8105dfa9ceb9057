"""
Model capability set for feature detection.

Defines which canonical features a provider/model pair supports so builders
can emit fields based on capabilities instead of hardcoded conditionals.
"""

from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from ...models.controls import ReasoningEffort
from ...models.providers import ProviderType, WireShape


class ModelCapabilitySet(BaseModel):
    """Capabilities derived for a specific provider/model combination."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    provider: Optional[ProviderType] = Field(None, description="Provider family, None when unknown")
    model_id: str = Field("", description="Model identifier as supplied by the caller")
    wire_shape: WireShape = Field(WireShape.OPENAI_COMPATIBLE, description="Request body dialect")

    # Reasoning
    supported_reasoning_efforts: Tuple[ReasoningEffort, ...] = Field(
        (), description="Supported effort levels in ascending order"
    )

    # Tools
    supports_web_search: bool = Field(False, description="Web search tool support")
    supports_dynamic_web_search_filtering: bool = Field(
        False, description="Dynamic-filtering web search tool support (Anthropic)"
    )

    # Caching
    supports_context_cache: bool = Field(False, description="Prompt/context cache support")

    @property
    def supports_reasoning(self) -> bool:
        return bool(self.supported_reasoning_efforts)

    def supports_effort(self, effort: ReasoningEffort) -> bool:
        return effort in self.supported_reasoning_efforts


# Fail-closed capabilities for unknown provider/model pairs
DEFAULT_CAPABILITIES = ModelCapabilitySet()
