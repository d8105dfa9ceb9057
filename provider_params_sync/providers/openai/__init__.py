from .payloads import apply_openai_draft, build_openai_draft

__all__ = ["build_openai_draft", "apply_openai_draft"]
