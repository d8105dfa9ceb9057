"""
Provider Params Sync Constants

Wire-level literals and environment variable names shared across the
draft builders, appliers and configuration loader.
"""

# Anthropic thinking budget used when reasoning is enabled without one
DEFAULT_ANTHROPIC_THINKING_BUDGET = 2048

# Anthropic web search tool types
ANTHROPIC_WEB_SEARCH_TOOL_TYPE = "web_search_20250305"
ANTHROPIC_DYNAMIC_WEB_SEARCH_TOOL_TYPE = "web_search_20260209"
ANTHROPIC_WEB_SEARCH_TOOL_TYPES = frozenset({
    ANTHROPIC_WEB_SEARCH_TOOL_TYPE,
    ANTHROPIC_DYNAMIC_WEB_SEARCH_TOOL_TYPE,
})
ANTHROPIC_WEB_SEARCH_TOOL_NAME = "web_search"

# OpenAI Responses web search tool type
OPENAI_WEB_SEARCH_TOOL_TYPE = "web_search"

# Google Search tool keys
GEMINI_SEARCH_TOOL_KEY = "google_search"
VERTEX_SEARCH_TOOL_KEY = "googleSearch"

# Environment variables for capability overrides
MODEL_OVERRIDES_JSON_ENV = "PARAMS_SYNC_MODEL_OVERRIDES_JSON"
MODEL_OVERRIDES_FILE_ENV = "PARAMS_SYNC_MODEL_OVERRIDES_FILE"
MODEL_OVERRIDES_DEFAULT_PATH = (".params_sync", "model_overrides.json")
