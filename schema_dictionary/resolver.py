from __future__ import annotations

import logging
from typing import Any, Optional

from .accessors import get_value_by_pointer
from .paths import is_internal_ref, split_pointer
from .store import SchemaStore

logger = logging.getLogger(__name__)


def resolve_ref(ref: str, base: Any, store: SchemaStore) -> Optional[Any]:
    """Resolve a `$ref` string.

    Args:
        ref (str): The reference, either local ('#/...') or naming another document.
        base: The schema node local references are walked from.
        store (SchemaStore): Loaded documents for external references.

    Returns:
        The referenced node or document, or None when nothing matches.
        External references return the whole matched document; a fragment
        after '#' in an external reference is not applied.
    """
    if not isinstance(ref, str):
        return None

    if is_internal_ref(ref):
        resolved = get_value_by_pointer(base, split_pointer(ref))
    else:
        resolved = store.find(ref)

    if resolved is None:
        logger.debug("Unresolved reference %s", ref)
    return resolved
