from enum import Enum
from typing import Optional, Union


class ProviderType(str, Enum):
    """Supported LLM provider families."""
    OPENAI = "openai"
    OPENAI_WEBSOCKET = "openai_websocket"
    CODEX_APP_SERVER = "codex_app_server"
    OPENAI_COMPATIBLE = "openai_compatible"
    CLOUDFLARE_AI_GATEWAY = "cloudflare_ai_gateway"
    OPENROUTER = "openrouter"
    ANTHROPIC = "anthropic"
    PERPLEXITY = "perplexity"
    GROQ = "groq"
    COHERE = "cohere"
    MISTRAL = "mistral"
    DEEPINFRA = "deepinfra"
    XAI = "xai"
    DEEPSEEK = "deepseek"
    FIREWORKS = "fireworks"
    CEREBRAS = "cerebras"
    GEMINI = "gemini"
    VERTEXAI = "vertexai"

    @classmethod
    def parse(cls, value: Union[str, "ProviderType", None]) -> Optional["ProviderType"]:
        """Resolve a provider name, returning None for anything unknown."""
        if value is None or isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return None


class WireShape(str, Enum):
    """Request-body dialects a provider family speaks."""
    OPENAI_COMPATIBLE = "openai_compatible"
    OPENAI_RESPONSES = "openai_responses"
    ANTHROPIC = "anthropic"
    GEMINI = "gemini"
