"""Shared pytest fixtures for provider params sync tests."""

import pytest
from dotenv import load_dotenv

# Load environment variables from .env file for tests
load_dotenv()

from provider_params_sync.config.constants import MODEL_OVERRIDES_FILE_ENV, MODEL_OVERRIDES_JSON_ENV
from provider_params_sync.config.overrides import reload_model_overrides
from provider_params_sync.core.capabilities import get_capabilities
from provider_params_sync.models.controls import (
    GenerationControls,
    ReasoningControls,
    ReasoningEffort,
    WebSearchControls,
)
from provider_params_sync.models.providers import ProviderType


@pytest.fixture(autouse=True)
def isolated_overrides(monkeypatch, tmp_path):
    """Keep user-level capability overrides out of every test."""
    monkeypatch.delenv(MODEL_OVERRIDES_JSON_ENV, raising=False)
    monkeypatch.delenv(MODEL_OVERRIDES_FILE_ENV, raising=False)
    monkeypatch.setenv("HOME", str(tmp_path))
    reload_model_overrides()
    yield
    reload_model_overrides()


@pytest.fixture
def caps():
    """Capability lookup shortcut: caps(provider, model)."""
    def _caps(provider, model_id):
        return get_capabilities(ProviderType.parse(provider), model_id)
    return _caps


@pytest.fixture
def reasoning_controls():
    """Controls with reasoning enabled at high effort."""
    return GenerationControls(reasoning=ReasoningControls(enabled=True, effort=ReasoningEffort.HIGH))


@pytest.fixture
def search_controls():
    """Controls with web search enabled."""
    return GenerationControls(web_search=WebSearchControls(enabled=True))
