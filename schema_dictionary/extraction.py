from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from .accessors import is_blank
from .errors import CyclicCompositionError
from .resolver import resolve_ref
from .store import SchemaStore

logger = logging.getLogger(__name__)

ROOT_LABEL = '(root)'


@dataclass(frozen=True)
class ExtractedProperty:
    """One row of the data dictionary."""

    category: Optional[str]
    name: str
    schema: Any
    required: bool = False


def extract_properties(
    node: Any,
    store: SchemaStore,
    category: Optional[str] = None,
) -> List[ExtractedProperty]:
    """Flatten a schema node into its properties.

    Direct `properties` come first (in key order), followed by the properties
    of each `allOf` branch in branch order. A `$ref` branch whose target has a
    `title` starts a new category; every other branch inherits `category`.
    Branches whose reference cannot be resolved are skipped.

    Raises:
        CyclicCompositionError: when a `$ref` leads back to a schema that is
            already being extracted.
    """
    return _extract(node, store, category, {id(node): ROOT_LABEL})


def _extract(
    node: Any,
    store: SchemaStore,
    category: Optional[str],
    active: Dict[int, str],
) -> List[ExtractedProperty]:
    result: List[ExtractedProperty] = []
    if not isinstance(node, dict):
        return result

    properties = node.get('properties')
    if isinstance(properties, dict):
        required = node.get('required')
        required_names = required if isinstance(required, list) else []
        for name, prop_schema in properties.items():
            result.append(ExtractedProperty(
                category=category,
                name=name,
                schema=prop_schema,
                required=name in required_names,
            ))

    all_of = node.get('allOf')
    if isinstance(all_of, list):
        for sub_schema in all_of:
            if not isinstance(sub_schema, dict):
                continue

            ref = sub_schema.get('$ref')
            if is_blank(ref):
                result.extend(_extract(sub_schema, store, category, active))
                continue

            # Local references are walked from the node holding the allOf.
            resolved = resolve_ref(ref, node, store)
            if not isinstance(resolved, dict):
                logger.debug("Skipping allOf branch %s: reference did not resolve", ref)
                continue

            key = id(resolved)
            if key in active:
                raise CyclicCompositionError(list(active.values()) + [str(ref)])

            title = resolved.get('title')
            sub_category = category if is_blank(title) else title
            active[key] = str(ref)
            try:
                result.extend(_extract(resolved, store, sub_category, active))
            finally:
                del active[key]

    return result
