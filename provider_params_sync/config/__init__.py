"""Configuration: wire constants, model family tables and capability overrides."""

from .overrides import ModelOverrides, get_model_overrides, load_model_overrides, reload_model_overrides

__all__ = [
    "ModelOverrides",
    "get_model_overrides",
    "load_model_overrides",
    "reload_model_overrides",
]
