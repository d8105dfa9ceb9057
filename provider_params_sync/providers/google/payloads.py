"""
Gemini and Vertex AI draft builders and appliers.

Both providers share the generateContent dialect. Differences:

- Gemini declares search as ``{"google_search": {}}``, Vertex as ``{"googleSearch": {}}``
- Gemini 3 models on Gemini emit an explicit "off" thinking level when
  reasoning is disabled; Vertex never does
- Vertex omits thinkingConfig for Gemini 3 image models and adds
  personGeneration / imageOutputOptions to imageConfig
- Veo models only carry ``videoGeneration``
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from ...config.constants import GEMINI_SEARCH_TOOL_KEY, VERTEX_SEARCH_TOOL_KEY
from ...core.capabilities import ModelCapabilitySet
from ...core.capabilities.policy import (
    google_supports_thinking,
    is_gemini3_image_model,
    is_gemini3_model,
    is_google_image_model,
    is_google_video_model,
    supports_google_image_size,
    vertex_supports_thinking_config,
)
from ...core.normalization.coercion import coerce_bool, coerce_float, coerce_int, coerce_str, parse_enum
from ...models.controls import (
    GenerationControls,
    GoogleVideoAspectRatio,
    GoogleVideoGenerationControls,
    GoogleVideoPersonGeneration,
    GoogleVideoResolution,
    ImageAspectRatio,
    ImageGenerationControls,
    ImageOutputSize,
    ImageResponseMode,
    ReasoningControls,
    ReasoningEffort,
    VertexImageOutputMIMEType,
    VertexImagePersonGeneration,
    WebSearchControls,
)
from ..common import normalized_effort

LEVEL_TO_EFFORT = {
    "MINIMAL": ReasoningEffort.MINIMAL,
    "LOW": ReasoningEffort.LOW,
    "MEDIUM": ReasoningEffort.MEDIUM,
    "HIGH": ReasoningEffort.HIGH,
}


def default_thinking_level_when_off(capabilities: ModelCapabilitySet) -> str:
    """Lowest level a model accepts, used to express "reasoning off"."""
    return "MINIMAL" if capabilities.supports_effort(ReasoningEffort.MINIMAL) else "LOW"


def map_effort_to_thinking_level(effort: ReasoningEffort, capabilities: ModelCapabilitySet) -> str:
    if effort in (ReasoningEffort.NONE, ReasoningEffort.MINIMAL):
        return default_thinking_level_when_off(capabilities)
    if effort == ReasoningEffort.LOW:
        return "LOW"
    if effort == ReasoningEffort.MEDIUM:
        return "MEDIUM" if capabilities.supports_effort(ReasoningEffort.MEDIUM) else "HIGH"
    return "HIGH"


# Builders

def _build_thinking_config(
    reasoning: ReasoningControls,
    capabilities: ModelCapabilitySet,
) -> Dict[str, Any]:
    thinking: Dict[str, Any] = {"includeThoughts": True}
    if reasoning.budget_tokens is not None:
        thinking["thinkingBudget"] = reasoning.budget_tokens
    elif reasoning.effort is not None:
        effort = normalized_effort(reasoning.effort, capabilities)
        thinking["thinkingLevel"] = map_effort_to_thinking_level(effort, capabilities)
    return thinking


def _build_image_settings(
    image: ImageGenerationControls,
    model_id: str,
    config: Dict[str, Any],
    vertex: bool,
) -> None:
    response_mode = image.response_mode or ImageResponseMode.TEXT_AND_IMAGE
    config["responseModalities"] = response_mode.response_modalities
    if image.seed is not None:
        config["seed"] = image.seed

    image_config: Dict[str, Any] = {}
    if image.aspect_ratio is not None:
        image_config["aspectRatio"] = image.aspect_ratio.value
    if image.image_size is not None and supports_google_image_size(model_id, image.image_size):
        image_config["imageSize"] = image.image_size.value

    if vertex:
        if image.vertex_person_generation is not None:
            image_config["personGeneration"] = image.vertex_person_generation.value
        output_options: Dict[str, Any] = {}
        if image.vertex_output_mime_type is not None:
            output_options["mimeType"] = image.vertex_output_mime_type.value
        if image.vertex_compression_quality is not None:
            output_options["compressionQuality"] = min(100, max(0, image.vertex_compression_quality))
        if output_options:
            image_config["imageOutputOptions"] = output_options

    if image_config:
        config["imageConfig"] = image_config


def build_generation_config(
    controls: GenerationControls,
    model_id: str,
    capabilities: ModelCapabilitySet,
    vertex: bool = False,
) -> Dict[str, Any]:
    config: Dict[str, Any] = {}
    if controls.temperature is not None:
        config["temperature"] = controls.temperature
    if controls.max_tokens is not None:
        config["maxOutputTokens"] = controls.max_tokens
    if controls.top_p is not None:
        config["topP"] = controls.top_p

    can_think = vertex_supports_thinking_config(model_id) if vertex else google_supports_thinking(model_id)
    reasoning = controls.reasoning
    if reasoning is not None and can_think and capabilities.supports_reasoning:
        if reasoning.enabled:
            config["thinkingConfig"] = _build_thinking_config(reasoning, capabilities)
        elif not vertex and is_gemini3_model(model_id):
            config["thinkingConfig"] = {"thinkingLevel": default_thinking_level_when_off(capabilities)}

    if controls.image_generation is not None and is_google_image_model(model_id):
        _build_image_settings(controls.image_generation, model_id, config, vertex)

    return config


def build_video_generation(video: GoogleVideoGenerationControls) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    if video.duration_seconds is not None:
        out["durationSeconds"] = video.duration_seconds
    if video.aspect_ratio is not None:
        out["aspectRatio"] = video.aspect_ratio.value
    if video.resolution is not None:
        out["resolution"] = video.resolution.value
    negative_prompt = (video.negative_prompt or "").strip()
    if negative_prompt:
        out["negativePrompt"] = negative_prompt
    if video.generate_audio is not None:
        out["generateAudio"] = video.generate_audio
    if video.person_generation is not None:
        out["personGeneration"] = video.person_generation.value
    if video.seed is not None:
        out["seed"] = video.seed
    return out


def _build_google_draft(
    controls: GenerationControls,
    model_id: str,
    capabilities: ModelCapabilitySet,
    vertex: bool,
) -> Dict[str, Any]:
    out: Dict[str, Any] = {}

    if is_google_video_model(model_id):
        if controls.google_video_generation is not None:
            out["videoGeneration"] = build_video_generation(controls.google_video_generation)
        return out

    generation_config = build_generation_config(controls, model_id, capabilities, vertex=vertex)
    if generation_config:
        out["generationConfig"] = generation_config

    web_search = controls.web_search
    if web_search is not None and web_search.enabled and capabilities.supports_web_search:
        out["tools"] = [{VERTEX_SEARCH_TOOL_KEY if vertex else GEMINI_SEARCH_TOOL_KEY: {}}]

    return out


def build_gemini_draft(controls: GenerationControls, model_id: str, capabilities: ModelCapabilitySet) -> Dict[str, Any]:
    return _build_google_draft(controls, model_id, capabilities, vertex=False)


def build_vertex_draft(controls: GenerationControls, model_id: str, capabilities: ModelCapabilitySet) -> Dict[str, Any]:
    return _build_google_draft(controls, model_id, capabilities, vertex=True)


# Appliers

def parse_thinking_config(raw: Any, off_level: str) -> Optional[ReasoningControls]:
    """
    Parse thinkingConfig.

    includeThoughts=true enables reasoning (a budget wins over a level);
    without it, only the model's "off" level maps to reasoning disabled.
    """
    if not isinstance(raw, dict):
        return None

    budget = coerce_int(raw.get("thinkingBudget"))
    level = coerce_str(raw.get("thinkingLevel"))

    if raw.get("includeThoughts") is True:
        if budget is not None:
            return ReasoningControls(enabled=True, budget_tokens=budget)
        effort = LEVEL_TO_EFFORT.get(level.upper()) if level else None
        return ReasoningControls(enabled=True, effort=effort)

    if level is not None and level.upper() == off_level:
        return ReasoningControls(enabled=False)
    return None


def parse_image_settings(config: Dict[str, Any], model_id: str, vertex: bool) -> Optional[ImageGenerationControls]:
    """
    Image options from generationConfig.

    The builder always emits responseModalities for image options, so nothing
    is inferred unless the draft asks for image output itself.
    """
    modalities = config.get("responseModalities")
    if not isinstance(modalities, list):
        return None
    values = {item.upper() for item in modalities if isinstance(item, str)}
    if "IMAGE" not in values:
        return None

    response_mode = ImageResponseMode.IMAGE_ONLY if values == {"IMAGE"} else ImageResponseMode.TEXT_AND_IMAGE
    settings: Dict[str, Any] = {"response_mode": response_mode}

    seed = coerce_int(config.get("seed"))
    if seed is not None:
        settings["seed"] = seed

    image_config = config.get("imageConfig")
    if isinstance(image_config, dict):
        aspect_ratio = parse_enum(ImageAspectRatio, image_config.get("aspectRatio"))
        if aspect_ratio is not None:
            settings["aspect_ratio"] = aspect_ratio

        size = parse_enum(ImageOutputSize, image_config.get("imageSize"))
        if size is not None and is_gemini3_image_model(model_id) and supports_google_image_size(model_id, size):
            settings["image_size"] = size

        if vertex:
            person = parse_enum(VertexImagePersonGeneration, image_config.get("personGeneration"))
            if person is not None:
                settings["vertex_person_generation"] = person
            output_options = image_config.get("imageOutputOptions")
            if isinstance(output_options, dict):
                mime = parse_enum(VertexImageOutputMIMEType, output_options.get("mimeType"))
                if mime is not None:
                    settings["vertex_output_mime_type"] = mime
                quality = coerce_int(output_options.get("compressionQuality"))
                if quality is not None:
                    settings["vertex_compression_quality"] = quality

    return ImageGenerationControls(**settings)


def parse_video_generation(raw: Any) -> Optional[GoogleVideoGenerationControls]:
    if not isinstance(raw, dict):
        return None
    video = GoogleVideoGenerationControls(
        duration_seconds=coerce_int(raw.get("durationSeconds")),
        aspect_ratio=parse_enum(GoogleVideoAspectRatio, raw.get("aspectRatio")),
        resolution=parse_enum(GoogleVideoResolution, raw.get("resolution")),
        negative_prompt=coerce_str(raw.get("negativePrompt")),
        generate_audio=coerce_bool(raw.get("generateAudio")),
        person_generation=parse_enum(GoogleVideoPersonGeneration, raw.get("personGeneration")),
        seed=coerce_int(raw.get("seed")),
    )
    return None if video.is_empty else video


def parse_search_tools(raw: Any, key: str) -> Optional[WebSearchControls]:
    if not isinstance(raw, list):
        return None
    found = any(isinstance(item, dict) and key in item for item in raw)
    return WebSearchControls(enabled=True) if found else None


def _apply_google_draft(
    draft: Dict[str, Any],
    model_id: str,
    capabilities: ModelCapabilitySet,
    controls: GenerationControls,
    vertex: bool,
) -> GenerationControls:
    if is_google_video_model(model_id):
        video = parse_video_generation(draft.get("videoGeneration"))
        return controls.model_copy(update={"google_video_generation": video})

    update: Dict[str, Any] = {}
    config = draft.get("generationConfig")
    if not isinstance(config, dict):
        config = {}

    update["temperature"] = coerce_float(config.get("temperature"))
    update["max_tokens"] = coerce_int(config.get("maxOutputTokens"))
    update["top_p"] = coerce_float(config.get("topP"))
    update["reasoning"] = parse_thinking_config(
        config.get("thinkingConfig"), default_thinking_level_when_off(capabilities)
    )
    if is_google_image_model(model_id):
        update["image_generation"] = parse_image_settings(config, model_id, vertex)

    key = VERTEX_SEARCH_TOOL_KEY if vertex else GEMINI_SEARCH_TOOL_KEY
    update["web_search"] = parse_search_tools(draft.get("tools"), key)

    return controls.model_copy(update=update)


def apply_gemini_draft(
    draft: Dict[str, Any],
    model_id: str,
    capabilities: ModelCapabilitySet,
    controls: GenerationControls,
) -> GenerationControls:
    return _apply_google_draft(draft, model_id, capabilities, controls, vertex=False)


def apply_vertex_draft(
    draft: Dict[str, Any],
    model_id: str,
    capabilities: ModelCapabilitySet,
    controls: GenerationControls,
) -> GenerationControls:
    return _apply_google_draft(draft, model_id, capabilities, controls, vertex=True)
