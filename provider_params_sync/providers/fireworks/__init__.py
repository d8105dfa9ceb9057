from .payloads import apply_fireworks_draft, build_fireworks_draft, finalize_fireworks_remainder

__all__ = ["build_fireworks_draft", "apply_fireworks_draft", "finalize_fireworks_remainder"]
