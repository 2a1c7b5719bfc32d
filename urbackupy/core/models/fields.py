"""Coercion of server field encodings into typed values."""
from typing import Any, Dict, Optional

from ..exceptions import DataIntegrityError

_TRUE_STRINGS = frozenset({'1', 'true', 'yes', 'on'})


def as_bool(value: Any) -> bool:
    """Server booleans arrive as true/false, 0/1 or '0'/'1'/''."""
    if isinstance(value, str):
        return value.strip().lower() in _TRUE_STRINGS
    return bool(value)


def as_int(value: Any, default: int = 0) -> int:
    if value is None or value == '':
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        try:
            return int(float(value))
        except (TypeError, ValueError):
            return default


def as_float(value: Any, default: float = 0.0) -> float:
    if value is None or value == '':
        return default
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def as_str(value: Any) -> str:
    return '' if value is None else str(value)


def require(entry: Any, *names: str) -> Dict[str, Any]:
    """
    Check that a list entry is an object carrying ``names``.

    Raises:
        DataIntegrityError: If the entry is not a dict or a field is missing
    """
    if not isinstance(entry, dict):
        raise DataIntegrityError(f"Expected an object, got {type(entry).__name__}")
    for name in names:
        if name not in entry:
            raise DataIntegrityError(f"Entry is missing field '{name}'", field=name)
    return entry


def optional_int(value: Any) -> Optional[int]:
    return None if value is None or value == '' else as_int(value)
