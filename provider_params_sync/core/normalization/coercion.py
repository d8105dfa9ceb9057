"""
Loose value coercion for user-edited drafts.

Wire formats are loosely typed once a human edits them: numbers arrive as
strings, integers as floats. These helpers return None instead of raising
when a value cannot be interpreted. Booleans are never treated as numbers.
"""

import math
from enum import Enum
from typing import Any, Iterable, List, Optional, Type, TypeVar

E = TypeVar("E", bound=Enum)


def coerce_float(raw: Any) -> Optional[float]:
    if isinstance(raw, bool):
        return None
    if not isinstance(raw, (int, float, str)):
        return None
    try:
        value = float(raw.strip() if isinstance(raw, str) else raw)
    except (ValueError, OverflowError):
        # Integers past the float range are JSON-legal but unusable
        return None
    return value if math.isfinite(value) else None


def coerce_int(raw: Any) -> Optional[int]:
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float):
        if math.isfinite(raw) and abs(raw - round(raw)) < 1e-7:
            return int(round(raw))
        return None
    if isinstance(raw, str):
        try:
            return int(raw.strip())
        except ValueError:
            return None
    return None


def coerce_bool(raw: Any) -> Optional[bool]:
    return raw if isinstance(raw, bool) else None


def coerce_str(raw: Any) -> Optional[str]:
    return raw if isinstance(raw, str) else None


def normalized_trimmed_string(raw: Any) -> Optional[str]:
    """Trimmed string, or None when missing, blank or not a string."""
    if not isinstance(raw, str):
        return None
    trimmed = raw.strip()
    return trimmed or None


def parse_enum(enum_cls: Type[E], raw: Any, case: Optional[str] = None) -> Optional[E]:
    """Parse a wire string into an enum member.

    Args:
        enum_cls: Target enum
        raw: Wire value
        case: "lower"/"upper" to case-fold before lookup, None for exact match
    """
    if not isinstance(raw, str):
        return None
    value = raw
    if case == "lower":
        value = raw.lower()
    elif case == "upper":
        value = raw.upper()
    try:
        return enum_cls(value)
    except ValueError:
        return None


def normalized_domains(domains: Optional[Iterable[Any]]) -> List[str]:
    """Trim domains, skip blanks and drop case-insensitive duplicates (first spelling wins)."""
    if not domains:
        return []
    seen = set()
    result = []
    for domain in domains:
        if not isinstance(domain, str):
            continue
        trimmed = domain.strip()
        if not trimmed or trimmed.lower() in seen:
            continue
        seen.add(trimmed.lower())
        result.append(trimmed)
    return result
