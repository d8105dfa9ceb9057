from .payloads import apply_gemini_draft, apply_vertex_draft, build_gemini_draft, build_vertex_draft

__all__ = ["build_gemini_draft", "apply_gemini_draft", "build_vertex_draft", "apply_vertex_draft"]
