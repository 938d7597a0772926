from __future__ import annotations

import logging
from typing import Any, Dict, Iterator, Optional, Tuple

from .accessors import is_blank
from .paths import matches_identifier

logger = logging.getLogger(__name__)


def document_key(document: Dict[str, Any], source_name: str) -> str:
    """`$id` when the document declares one, else the file it came from."""
    schema_id = document.get('$id')
    if not is_blank(schema_id):
        return str(schema_id)
    return source_name


class SchemaStore:
    """Loaded schema documents keyed by identifier, in load order.

    Loading a second document under an existing identifier replaces the
    first one but keeps its position in the iteration order.
    """

    def __init__(self) -> None:
        self._documents: Dict[str, Dict[str, Any]] = {}

    def add(self, document: Dict[str, Any], source_name: str) -> str:
        key = document_key(document, source_name)
        if key in self._documents:
            logger.info("Schema %s replaces an earlier document with the same identifier", key)
        self._documents[key] = document
        return key

    def get(self, identifier: str) -> Optional[Dict[str, Any]]:
        return self._documents.get(identifier)

    def find(self, ref: str) -> Optional[Dict[str, Any]]:
        """Look up an external reference.

        The first identifier (in load order) that ends with `ref`, or that
        `ref` ends with, wins. An exact key lookup is the last resort.
        """
        for identifier, document in self._documents.items():
            if matches_identifier(identifier, ref):
                return document
        return self._documents.get(ref)

    def items(self) -> Iterator[Tuple[str, Dict[str, Any]]]:
        return iter(self._documents.items())

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._documents

    def __iter__(self) -> Iterator[str]:
        return iter(self._documents)

    def __len__(self) -> int:
        return len(self._documents)
