"""Unit tests for capability override loading."""

import json

from provider_params_sync import apply_draft, make_draft
from provider_params_sync.config.constants import MODEL_OVERRIDES_FILE_ENV, MODEL_OVERRIDES_JSON_ENV
from provider_params_sync.config.overrides import (
    ModelOverrides,
    get_model_overrides,
    load_model_overrides,
    override_key,
    reload_model_overrides,
)
from provider_params_sync.core.routing import resolve_capabilities
from provider_params_sync.models.controls import (
    GenerationControls,
    ReasoningControls,
    ReasoningEffort,
)
from provider_params_sync.models.providers import ProviderType


class TestOverrideLoading:
    """Test where overrides come from."""

    def test_override_key(self):
        """Test keys are provider/model, lowercased."""
        assert override_key(ProviderType.OPENAI, " My-Model ") == "openai/my-model"
        assert override_key("Groq", "llama") == "groq/llama"

    def test_no_overrides(self):
        """Test nothing is loaded by default."""
        assert load_model_overrides() == {}

    def test_from_env_json(self, monkeypatch):
        """Test overrides from the JSON environment variable."""
        monkeypatch.setenv(MODEL_OVERRIDES_JSON_ENV, json.dumps({
            "OpenAI/my-finetune": {"reasoning_efforts": ["low", "high"]},
        }))
        overrides = load_model_overrides()
        assert overrides == {"openai/my-finetune": ModelOverrides(
            reasoning_efforts=[ReasoningEffort.LOW, ReasoningEffort.HIGH]
        )}

    def test_from_file(self, monkeypatch, tmp_path):
        """Test overrides from a file path."""
        path = tmp_path / "overrides.json"
        path.write_text(json.dumps({"groq/llama-3.3-70b": {"web_search_supported": True}}))
        monkeypatch.setenv(MODEL_OVERRIDES_FILE_ENV, str(path))
        assert load_model_overrides()["groq/llama-3.3-70b"].web_search_supported is True

    def test_default_path(self, tmp_path):
        """Test the per-user default file is read."""
        folder = tmp_path / ".params_sync"
        folder.mkdir()
        (folder / "model_overrides.json").write_text(json.dumps({"xai/grok-4": {"context_cache_supported": False}}))
        assert load_model_overrides()["xai/grok-4"].context_cache_supported is False

    def test_invalid_entries_skipped(self, monkeypatch, caplog):
        """Test invalid entries are logged and skipped."""
        monkeypatch.setenv(MODEL_OVERRIDES_JSON_ENV, json.dumps({
            "openai/a": {"reasoning_efforts": ["ludicrous"]},
            "openai/b": {"web_search_supported": True},
            "openai/c": "nope",
        }))
        overrides = load_model_overrides()
        assert list(overrides) == ["openai/b"]
        assert "Ignoring invalid model override" in caplog.text

    def test_bad_json_logged(self, monkeypatch, caplog):
        """Test malformed JSON falls back to no overrides."""
        monkeypatch.setenv(MODEL_OVERRIDES_JSON_ENV, "{broken")
        assert load_model_overrides() == {}
        assert MODEL_OVERRIDES_JSON_ENV in caplog.text

    def test_scalar_json_logged(self, monkeypatch, caplog):
        """Test a JSON value that is not an object is ignored."""
        monkeypatch.setenv(MODEL_OVERRIDES_JSON_ENV, "5")
        assert load_model_overrides() == {}
        assert "must be a JSON object" in caplog.text

    def test_directory_path_logged(self, monkeypatch, tmp_path, caplog):
        """Test a path that cannot be read as a file is ignored."""
        monkeypatch.setenv(MODEL_OVERRIDES_FILE_ENV, str(tmp_path))
        assert load_model_overrides() == {}
        assert "Failed to load model overrides" in caplog.text

    def test_non_utf8_file_logged(self, monkeypatch, tmp_path, caplog):
        """Test undecodable bytes are ignored."""
        path = tmp_path / "overrides.json"
        path.write_bytes(b"\xff\xfe{\x00")
        monkeypatch.setenv(MODEL_OVERRIDES_FILE_ENV, str(path))
        assert load_model_overrides() == {}
        assert "Failed to load model overrides" in caplog.text

    def test_unreadable_default_file_falls_back(self, tmp_path):
        """Test a broken per-user file leaves no overrides."""
        folder = tmp_path / ".params_sync"
        folder.mkdir()
        (folder / "model_overrides.json").write_text("[1, 2")
        assert load_model_overrides() == {}


class TestOverridesInSync:
    """Test overrides flow into the facade."""

    def test_overrides_change_drafts(self, monkeypatch):
        """Test an override enables reasoning for an unknown model."""
        monkeypatch.setenv(MODEL_OVERRIDES_JSON_ENV, json.dumps({
            "openai/my-finetune": {"reasoning_efforts": ["low", "medium", "high"]},
        }))
        reload_model_overrides()

        assert get_model_overrides(ProviderType.OPENAI, "My-Finetune") is not None
        assert resolve_capabilities(ProviderType.OPENAI, "my-finetune").supports_reasoning

        controls = GenerationControls(reasoning=ReasoningControls(enabled=True, effort=ReasoningEffort.HIGH))
        draft = make_draft("openai", "my-finetune", controls)
        assert draft == {"reasoning": {"effort": "high"}}
        assert apply_draft("openai", "my-finetune", draft).controls == controls

    def test_reload_required(self, monkeypatch):
        """Test overrides are cached until reloaded."""
        assert get_model_overrides(ProviderType.OPENAI, "late") is None
        monkeypatch.setenv(MODEL_OVERRIDES_JSON_ENV, json.dumps({"openai/late": {"web_search_supported": True}}))
        assert get_model_overrides(ProviderType.OPENAI, "late") is None
        reload_model_overrides()
        assert get_model_overrides(ProviderType.OPENAI, "late").web_search_supported is True

    def test_bad_config_does_not_break_sync(self, monkeypatch, tmp_path):
        """Test drafts still build and apply with broken override sources."""
        monkeypatch.setenv(MODEL_OVERRIDES_JSON_ENV, "5")
        monkeypatch.setenv(MODEL_OVERRIDES_FILE_ENV, str(tmp_path))
        reload_model_overrides()

        controls = GenerationControls(temperature=0.3)
        assert make_draft("openai", "gpt-5", controls) == {"temperature": 0.3}
        assert apply_draft("openai", "gpt-5", {"temperature": 0.3}).controls.temperature == 0.3
