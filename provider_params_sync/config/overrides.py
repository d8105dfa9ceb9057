"""Capability override functionality for provider/model pairs."""

import os
import json
import logging
from functools import lru_cache
from typing import Any, Dict, List, Optional
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..models.controls import ReasoningEffort
from .constants import (
    MODEL_OVERRIDES_DEFAULT_PATH,
    MODEL_OVERRIDES_FILE_ENV,
    MODEL_OVERRIDES_JSON_ENV,
)

logger = logging.getLogger(__name__)


class ModelOverrides(BaseModel):
    """Per-model replacements for derived capability answers."""
    model_config = ConfigDict(extra="forbid")

    reasoning_efforts: Optional[List[ReasoningEffort]] = Field(
        None, description="Replaces the supported reasoning effort list"
    )
    web_search_supported: Optional[bool] = Field(None, description="Forces web search support on or off")
    context_cache_supported: Optional[bool] = Field(None, description="Forces context cache support on or off")


def override_key(provider: Any, model_id: str) -> str:
    """Build the lookup key used in override files: ``<provider>/<model>``."""
    provider_name = getattr(provider, "value", provider) or ""
    return f"{str(provider_name).lower()}/{model_id.strip().lower()}"


def _describe(raw: Any) -> str:
    return f"{len(raw)} models" if isinstance(raw, dict) else f"a JSON {type(raw).__name__}"


def _read_file(path: Any) -> Optional[Any]:
    """Parse a JSON overrides file; unreadable or undecodable files are logged and skipped."""
    try:
        with open(path, 'r', encoding='utf-8') as f:
            raw = json.load(f)
    except (OSError, ValueError) as e:
        # ValueError covers JSONDecodeError and UnicodeDecodeError
        logger.error(f"Failed to load model overrides from {path}: {e}")
        return None
    logger.info(f"Loaded model overrides for {_describe(raw)} from {path}")
    return raw


def _read_raw_overrides() -> Any:
    """
    Read raw override JSON from environment variable or file.

    Priority order:
    1. PARAMS_SYNC_MODEL_OVERRIDES_JSON environment variable (JSON string)
    2. PARAMS_SYNC_MODEL_OVERRIDES_FILE environment variable (path to JSON file)
    3. ~/.params_sync/model_overrides.json (if exists)
    """
    json_str = os.getenv(MODEL_OVERRIDES_JSON_ENV)
    if json_str:
        try:
            raw = json.loads(json_str)
            logger.info(f"Loaded model overrides for {_describe(raw)} from environment")
            return raw
        except json.JSONDecodeError as e:
            logger.error(f"Failed to parse {MODEL_OVERRIDES_JSON_ENV}: {e}")

    file_path = os.getenv(MODEL_OVERRIDES_FILE_ENV)
    if file_path:
        raw = _read_file(file_path)
        if raw is not None:
            return raw

    default_path = Path.home().joinpath(*MODEL_OVERRIDES_DEFAULT_PATH)
    if default_path.is_file():
        raw = _read_file(default_path)
        if raw is not None:
            return raw

    return {}


def load_model_overrides() -> Dict[str, ModelOverrides]:
    """
    Load and validate capability overrides.

    Entries that are not objects or fail validation are logged and skipped.

    Returns:
        Dict mapping ``<provider>/<model>`` keys to ModelOverrides
    """
    raw = _read_raw_overrides()
    if not isinstance(raw, dict):
        logger.error("Model overrides must be a JSON object keyed by provider/model")
        return {}

    overrides: Dict[str, ModelOverrides] = {}
    for key, value in raw.items():
        try:
            overrides[key.strip().lower()] = ModelOverrides.model_validate(value)
        except ValidationError as e:
            logger.warning(f"Ignoring invalid model override for {key}: {e.error_count()} error(s)")
            continue
        logger.debug(f"Registered model override for {key}")

    return overrides


@lru_cache(maxsize=1)
def _cached_overrides() -> Dict[str, ModelOverrides]:
    return load_model_overrides()


def get_model_overrides(provider: Any, model_id: str) -> Optional[ModelOverrides]:
    """Return the configured override for a provider/model pair, if any."""
    return _cached_overrides().get(override_key(provider, model_id))


def reload_model_overrides() -> None:
    """Drop cached overrides so the next lookup re-reads the environment."""
    _cached_overrides.cache_clear()
