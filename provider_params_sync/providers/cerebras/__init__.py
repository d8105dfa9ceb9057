from .payloads import apply_cerebras_draft, build_cerebras_draft

__all__ = ["build_cerebras_draft", "apply_cerebras_draft"]
