"""
Exceptions raised at the I/O boundary of provider params sync.

The sync engine itself is total and never raises on malformed drafts; these
errors cover decoding user-supplied JSON before it reaches the engine.
"""

import json
from typing import Any, Dict, Optional


class ParamsSyncError(Exception):
    """
    Base exception for provider params sync.

    Attributes:
        message: Error message
        provider: Provider name, when the error is provider specific
    """

    def __init__(self, message: str, provider: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.provider = provider


class DraftDecodeError(ParamsSyncError):
    """Raised when draft or controls text is not a JSON object."""


def decode_json_object(text: str, source: str = "input") -> Dict[str, Any]:
    """Decode text into a JSON object.

    Args:
        text: Raw JSON text
        source: Human readable origin used in error messages

    Raises:
        DraftDecodeError: If the text is not valid JSON or not an object
    """
    try:
        value = json.loads(text)
    except json.JSONDecodeError as e:
        raise DraftDecodeError(f"Invalid JSON in {source}: {e}") from e
    if not isinstance(value, dict):
        raise DraftDecodeError(f"Expected a JSON object in {source}, got {type(value).__name__}")
    return value
