"""
Canonical, provider-agnostic generation controls.

These models are the single source of truth that draft builders project onto
provider payloads and that draft appliers reconstruct from (possibly hand
edited) payloads. Anything the typed fields cannot express lives in
``GenerationControls.provider_specific``.
"""

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ReasoningEffort(str, Enum):
    """Abstract reasoning effort levels, ordered from off to strongest."""
    NONE = "none"
    MINIMAL = "minimal"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    XHIGH = "xhigh"


class ReasoningSummary(str, Enum):
    AUTO = "auto"
    CONCISE = "concise"
    DETAILED = "detailed"


class WebSearchContextSize(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class ContextCacheMode(str, Enum):
    OFF = "off"
    IMPLICIT = "implicit"
    EXPLICIT = "explicit"


class ContextCacheStrategy(str, Enum):
    SYSTEM_ONLY = "systemOnly"
    SYSTEM_AND_TOOLS = "systemAndTools"
    PREFIX_WINDOW = "prefixWindow"


class ImageResponseMode(str, Enum):
    TEXT_AND_IMAGE = "textAndImage"
    IMAGE_ONLY = "imageOnly"

    @property
    def response_modalities(self) -> List[str]:
        if self is ImageResponseMode.IMAGE_ONLY:
            return ["IMAGE"]
        return ["TEXT", "IMAGE"]


class ImageAspectRatio(str, Enum):
    SQUARE = "1:1"
    PORTRAIT_3_4 = "3:4"
    LANDSCAPE_4_3 = "4:3"
    PORTRAIT_9_16 = "9:16"
    LANDSCAPE_16_9 = "16:9"
    PORTRAIT_2_3 = "2:3"
    LANDSCAPE_3_2 = "3:2"
    PORTRAIT_4_5 = "4:5"
    LANDSCAPE_5_4 = "5:4"


class ImageOutputSize(str, Enum):
    SIZE_512PX = "512px"
    SIZE_1K = "1K"
    SIZE_2K = "2K"
    SIZE_4K = "4K"


class VertexImagePersonGeneration(str, Enum):
    UNSPECIFIED = "PERSON_GENERATION_UNSPECIFIED"
    ALLOW_NONE = "ALLOW_NONE"
    ALLOW_ADULT = "ALLOW_ADULT"
    ALLOW_ALL = "ALLOW_ALL"


class VertexImageOutputMIMEType(str, Enum):
    PNG = "image/png"
    JPEG = "image/jpeg"
    WEBP = "image/webp"


class GoogleVideoAspectRatio(str, Enum):
    LANDSCAPE_16_9 = "16:9"
    PORTRAIT_9_16 = "9:16"
    SQUARE = "1:1"


class GoogleVideoResolution(str, Enum):
    RES_720P = "720p"
    RES_1080P = "1080p"


class GoogleVideoPersonGeneration(str, Enum):
    DONT_ALLOW = "dont_allow"
    ALLOW_ADULT = "allow_adult"
    ALLOW_ALL = "allow_all"


# Canonical TTL spellings: "default", "5m", "1h", "custom:<seconds>"
TTL_DEFAULT = "default"
TTL_5_MINUTES = "5m"
TTL_1_HOUR = "1h"
TTL_CUSTOM_PREFIX = "custom:"


def normalize_ttl(value: Any) -> Optional[str]:
    """Normalize a stored TTL value to its canonical spelling.

    Integers become ``custom:<n>`` (clamped to at least one second); unknown
    strings fall back to the provider default.
    """
    if value is None:
        return None
    if isinstance(value, bool):
        return TTL_DEFAULT
    if isinstance(value, int):
        return f"{TTL_CUSTOM_PREFIX}{max(1, value)}"

    raw = str(value).strip().lower()
    if raw in ("", "default", "provider_default", "providerdefault"):
        return TTL_DEFAULT
    if raw in ("5m", "5min", "5mins", "minutes5"):
        return TTL_5_MINUTES
    if raw in ("1h", "60m", "hour1"):
        return TTL_1_HOUR
    if raw.startswith(TTL_CUSTOM_PREFIX):
        seconds = raw[len(TTL_CUSTOM_PREFIX):].strip()
        if seconds.isdigit() and int(seconds) > 0:
            return f"{TTL_CUSTOM_PREFIX}{int(seconds)}"
    return TTL_DEFAULT


class ReasoningControls(BaseModel):
    """Reasoning / thinking configuration."""
    model_config = ConfigDict(extra="forbid")

    enabled: bool = Field(True, description="Whether the model should reason before answering")
    effort: Optional[ReasoningEffort] = Field(None, description="Abstract effort level")
    budget_tokens: Optional[int] = Field(None, description="Explicit thinking token budget")
    summary: Optional[ReasoningSummary] = Field(None, description="Reasoning summary verbosity")


class WebSearchUserLocation(BaseModel):
    model_config = ConfigDict(extra="forbid")

    city: Optional[str] = None
    region: Optional[str] = None
    country: Optional[str] = None
    timezone: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return not any(
            (value or "").strip()
            for value in (self.city, self.region, self.country, self.timezone)
        )


class WebSearchControls(BaseModel):
    """Web search tool configuration."""
    model_config = ConfigDict(extra="forbid")

    enabled: bool = Field(False, description="Whether web search is enabled")
    context_size: Optional[WebSearchContextSize] = Field(None, description="Search context size")
    max_uses: Optional[int] = Field(None, description="Maximum searches per request")
    allowed_domains: Optional[List[str]] = Field(None, description="Only search these domains")
    blocked_domains: Optional[List[str]] = Field(None, description="Never search these domains")
    user_location: Optional[WebSearchUserLocation] = Field(None, description="Approximate user location")
    dynamic_filtering: Optional[bool] = Field(None, description="Use the dynamic-filtering search tool")


class ContextCacheControls(BaseModel):
    """Unified prompt/context cache configuration."""
    model_config = ConfigDict(extra="forbid")

    mode: ContextCacheMode = Field(ContextCacheMode.IMPLICIT, description="Caching mode")
    strategy: Optional[ContextCacheStrategy] = Field(None, description="Which prefix to cache")
    ttl: Optional[str] = Field(None, description="default, 5m, 1h or custom:<seconds>")
    cache_key: Optional[str] = Field(None, description="OpenAI-style stable prompt cache key")
    conversation_id: Optional[str] = Field(None, description="xAI conversation cache key")
    cached_content_name: Optional[str] = Field(None, description="Google cachedContents/{id} resource")
    min_tokens_threshold: Optional[int] = Field(None, description="Minimum prompt tokens before caching")

    @field_validator("ttl", mode="before")
    @classmethod
    def _normalize_ttl(cls, value: Any) -> Optional[str]:
        return normalize_ttl(value)

    @property
    def is_enabled(self) -> bool:
        return self.mode != ContextCacheMode.OFF

    def envelope(self) -> Dict[str, Any]:
        """Provider-independent representation, keyed by envelope field name."""
        return self.model_dump(mode="json", exclude_none=True)


class ImageGenerationControls(BaseModel):
    """Gemini / Vertex image generation options."""
    model_config = ConfigDict(extra="forbid")

    response_mode: Optional[ImageResponseMode] = None
    aspect_ratio: Optional[ImageAspectRatio] = None
    image_size: Optional[ImageOutputSize] = None
    seed: Optional[int] = None
    vertex_person_generation: Optional[VertexImagePersonGeneration] = None
    vertex_output_mime_type: Optional[VertexImageOutputMIMEType] = None
    vertex_compression_quality: Optional[int] = None

    @property
    def is_empty(self) -> bool:
        return all(value is None for value in self.__dict__.values())


class GoogleVideoGenerationControls(BaseModel):
    """Veo video generation options."""
    model_config = ConfigDict(extra="forbid")

    duration_seconds: Optional[int] = None
    aspect_ratio: Optional[GoogleVideoAspectRatio] = None
    resolution: Optional[GoogleVideoResolution] = None
    negative_prompt: Optional[str] = None
    generate_audio: Optional[bool] = None
    person_generation: Optional[GoogleVideoPersonGeneration] = None
    seed: Optional[int] = None

    @property
    def is_empty(self) -> bool:
        return all(value is None for value in self.__dict__.values())


class GenerationControls(BaseModel):
    """
    Canonical generation controls shared by every provider family.

    ``provider_specific`` holds verbatim JSON fragments that no typed field can
    represent; it is merged over the computed draft on every build.
    """
    model_config = ConfigDict(extra="forbid")

    temperature: Optional[float] = Field(None, description="Sampling temperature")
    top_p: Optional[float] = Field(None, description="Nucleus sampling parameter")
    max_tokens: Optional[int] = Field(None, description="Maximum output tokens")
    reasoning: Optional[ReasoningControls] = None
    web_search: Optional[WebSearchControls] = None
    context_cache: Optional[ContextCacheControls] = None
    image_generation: Optional[ImageGenerationControls] = None
    google_video_generation: Optional[GoogleVideoGenerationControls] = None
    provider_specific: Dict[str, Any] = Field(default_factory=dict, description="Passthrough JSON fragments")
