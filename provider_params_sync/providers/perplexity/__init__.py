from .payloads import apply_perplexity_draft, build_perplexity_draft

__all__ = ["build_perplexity_draft", "apply_perplexity_draft"]
