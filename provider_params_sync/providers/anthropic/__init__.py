from .payloads import apply_anthropic_draft, build_anthropic_draft

__all__ = ["build_anthropic_draft", "apply_anthropic_draft"]
