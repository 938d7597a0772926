"""Load schema documents and turn the main schema into table data.

`process_documents` is the entry point. It keeps no state between calls:
each call builds a new store and returns everything it derived in a
`ProcessingResult`, and the caller decides how long to keep it.
"""
from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union

from .accessors import is_blank
from .config import DEFAULT_TABLE_TITLE
from .extraction import ExtractedProperty, extract_properties
from .io_utils import parse_schema_document
from .keywords import aggregate_keywords, keyword_usage_stats
from .resolver import resolve_ref
from .store import SchemaStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TableData:
    title: str
    description: str
    properties: Tuple[ExtractedProperty, ...]


@dataclass(frozen=True)
class ProcessingResult:
    store: SchemaStore
    main_schema: Optional[Dict[str, Any]] = None
    table_data: Optional[TableData] = None
    keyword_usage: Counter = field(default_factory=Counter)

    @property
    def success(self) -> bool:
        return self.main_schema is not None

    def keyword_stats(self) -> List[Dict[str, Union[str, int]]]:
        return keyword_usage_stats(self.keyword_usage)


def is_main_schema(document: Dict[str, Any]) -> bool:
    return document.get('type') == 'array' and not is_blank(document.get('items'))


def get_table_data(main_schema: Optional[Dict[str, Any]], store: SchemaStore) -> Optional[TableData]:
    """Extract the row properties described by the main schema's `items`.

    A `$ref` in `items` is followed once; the resolved item schema is then
    flattened with `extract_properties`. Only missing or unresolvable `items`
    give None: a boolean or tuple-form `items` yields a table with no rows.
    """
    if main_schema is None:
        return None

    item_schema = main_schema.get('items')
    if isinstance(item_schema, dict) and not is_blank(item_schema.get('$ref')):
        item_schema = resolve_ref(item_schema['$ref'], main_schema, store)

    if is_blank(item_schema):
        logger.info("Main schema items could not be resolved")
        return None

    properties = extract_properties(item_schema, store)
    title = main_schema.get('title')
    description = main_schema.get('description')
    return TableData(
        title=DEFAULT_TABLE_TITLE if is_blank(title) else str(title),
        description='' if is_blank(description) else str(description),
        properties=tuple(properties),
    )


def process_documents(raw_documents: Iterable[Tuple[str, str]]) -> ProcessingResult:
    """Load `(name, text)` documents and derive the table data.

    The last loaded document with `type: "array"` and `items` becomes the main
    schema. With a single document and no such match, that document is used
    as-is.

    Raises:
        SchemaParseError: if any document is not a JSON object. Nothing is
            returned for the run in that case.
        CyclicCompositionError: if extraction runs into an `allOf` cycle.
    """
    store = SchemaStore()
    main_schema: Optional[Dict[str, Any]] = None
    loaded = 0

    for name, text in raw_documents:
        document = parse_schema_document(name, text)
        key = store.add(document, name)
        loaded += 1
        logger.debug("Loaded schema %s from %s", key, name)

        if is_main_schema(document):
            main_schema = document

    # Counted after identifier collisions, so two files sharing an `$id` count once.
    if main_schema is None and len(store) == 1:
        logger.warning("No array schema found; using the only loaded document as main schema")
        main_schema = next(document for _, document in store.items())

    logger.info("Loaded %d schema document(s); main schema %s", loaded, "found" if main_schema is not None else "missing")

    if main_schema is None:
        return ProcessingResult(store=store)

    table_data = get_table_data(main_schema, store)
    usage = aggregate_keywords(table_data.properties if table_data else [])
    return ProcessingResult(
        store=store,
        main_schema=main_schema,
        table_data=table_data,
        keyword_usage=usage,
    )
