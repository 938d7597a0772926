from __future__ import annotations

from typing import Any, List


def is_blank(value: Any) -> bool:
    """True for None, False, zero and the empty string.

    Empty objects and arrays are not blank: `{"items": {}}` still has items.
    """
    if value is None:
        return True
    if isinstance(value, (bool, int, float, str)):
        return not value
    return False


def get_value_by_pointer(document: Any, segments: List[str]) -> Any:
    """Walk `document` one segment at a time.

    Returns None as soon as a segment is missing or lands on a blank value,
    so a pointer to a legitimate `false` or `0` also comes back as None.
    """
    current = document
    for segment in segments:
        if isinstance(current, dict):
            current = current.get(segment)
        elif isinstance(current, list):
            # Array indices are plain decimal segments.
            if segment.isdigit() and int(segment) < len(current):
                current = current[int(segment)]
            else:
                return None
        else:
            return None

        if is_blank(current):
            return None

    return current
