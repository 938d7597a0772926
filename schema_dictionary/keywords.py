from __future__ import annotations

from collections import Counter
from typing import Dict, FrozenSet, Iterable, List, Union

from .extraction import ExtractedProperty

# Structural keywords that never become table columns.
EXCLUDED_KEYWORDS: FrozenSet[str] = frozenset({
    '$schema',
    '$id',
    '$ref',
    'properties',
    'items',
    'allOf',
    'anyOf',
    'oneOf',
    'enumDescriptions',
})


def aggregate_keywords(properties: Iterable[ExtractedProperty]) -> Counter:
    """Count how many property fragments use each keyword."""
    counts: Counter = Counter()
    for prop in properties:
        if not isinstance(prop.schema, dict):
            continue
        for keyword in prop.schema:
            if keyword not in EXCLUDED_KEYWORDS:
                counts[keyword] += 1
    return counts


def keyword_usage_stats(usage: Counter) -> List[Dict[str, Union[str, int]]]:
    """Keywords by usage, most used first; ties keep first-seen order."""
    return [{'keyword': keyword, 'count': count} for keyword, count in usage.most_common()]
