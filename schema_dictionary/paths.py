from __future__ import annotations

from typing import List


def is_internal_ref(ref: str) -> bool:
    """True for document-local references such as '#/$defs/Row'."""
    return isinstance(ref, str) and ref.startswith('#')


def split_pointer(ref: str) -> List[str]:
    """Split a local reference into the keys to walk.

    The leading '#/' is dropped and the rest is split on '/'. Empty segments
    are kept, so '#' alone yields [''] and never matches a key.
    No '~0'/'~1' unescaping is applied.
    """
    if ref is None:
        return []
    if not isinstance(ref, str):
        ref = str(ref)
    return ref[2:].split('/')


def matches_identifier(identifier: str, ref: str) -> bool:
    """Either string ends with the other."""
    return identifier.endswith(ref) or ref.endswith(identifier)
