from .payloads import apply_xai_draft, build_xai_draft

__all__ = ["build_xai_draft", "apply_xai_draft"]
