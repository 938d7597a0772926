from __future__ import annotations

import logging
import os
import tempfile
from typing import List, Optional, Sequence

import gradio as gr

from .columns import (
    apply_selection,
    default_columns,
    list_available_columns,
    move_column,
    reset_column_order,
    select_all,
    select_none,
)
from .config import CSV_FILE_NAME, MAIN_SCHEMA_HINT
from .errors import SchemaDictionaryError
from .io_utils import read_uploaded_files
from .processor import ProcessingResult, process_documents
from .rendering import export_csv, filter_properties, render_table

logger = logging.getLogger(__name__)


def _keyword_stats(result: Optional[ProcessingResult]):
    return result.keyword_stats() if result is not None else []


def column_selector_update(result: Optional[ProcessingResult], columns: Sequence[str]):
    available = list_available_columns(columns, _keyword_stats(result))
    return gr.update(
        choices=[(col.label, col.keyword) for col in available],
        value=list(columns),
        label=f"{len(columns)} columns selected",
    )


def move_selector_update(columns: Sequence[str], current: Optional[str] = None):
    value = current if current in columns else (columns[0] if columns else None)
    return gr.update(choices=list(columns), value=value)


def render_current_table(result: Optional[ProcessingResult], columns: Sequence[str], query: str = '') -> str:
    if result is None or not result.success:
        return ''
    return render_table(filter_properties(result.table_data, columns, query), columns)


def refresh_column_view(result: Optional[ProcessingResult], columns: List[str], query: str = '', current: Optional[str] = None):
    """Outputs shared by every column action: state, selector, move dropdown, table."""
    return (
        columns,
        column_selector_update(result, columns),
        move_selector_update(columns, current),
        render_current_table(result, columns, query),
    )


def process_schema_files(file_objs, query: str = ''):
    """Load the uploaded schemas and render the table with default columns.

    Returns: result state, column state, column selector, move dropdown,
    table html, status message.
    """
    columns = default_columns()
    if not file_objs:
        return (None, columns, column_selector_update(None, columns), move_selector_update(columns), '', "No files selected.")

    try:
        documents = read_uploaded_files(file_objs)
        result = process_documents(documents)
    except SchemaDictionaryError as exc:
        logger.warning("Schema processing failed: %s", exc)
        return (None, columns, column_selector_update(None, columns), move_selector_update(columns), '', f"Error: {exc}")

    if not result.success:
        return (None, columns, column_selector_update(None, columns), move_selector_update(columns), '', f"Error: {MAIN_SCHEMA_HINT}")

    count = len(result.table_data.properties) if result.table_data else 0
    status = f"Successfully loaded {len(documents)} schema file(s). Found {count} properties."
    return (result, *refresh_column_view(result, columns, query), status)


def update_columns_handler(result, columns, checked, query=''):
    return refresh_column_view(result, apply_selection(columns or [], checked), query)


def select_all_handler(result, columns, query=''):
    available = [col.keyword for col in list_available_columns(columns or [], _keyword_stats(result))]
    return refresh_column_view(result, select_all(columns or [], available), query)


def select_none_handler(result, columns, query=''):
    return refresh_column_view(result, select_none(), query)


def select_default_handler(result, columns, query=''):
    return refresh_column_view(result, default_columns(), query)


def reset_order_handler(result, columns, query=''):
    return refresh_column_view(result, reset_column_order(columns or []), query)


def move_column_handler(result, columns, keyword, query='', offset: int = 1):
    columns = list(columns or [])
    if keyword not in columns:
        return refresh_column_view(result, columns, query)
    from_index = columns.index(keyword)
    to_index = min(max(from_index + offset, 0), len(columns) - 1)
    return refresh_column_view(result, move_column(columns, from_index, to_index), query, current=keyword)


def search_handler(result, columns, query):
    return render_current_table(result, columns or [], query)


def export_csv_handler(result, columns, file_name=None):
    if result is None or result.table_data is None:
        return None, "No data loaded."

    file_name = os.path.basename((file_name or '').strip())
    if not file_name:
        file_name = CSV_FILE_NAME
    if not file_name.lower().endswith('.csv'):
        file_name += '.csv'

    path = os.path.join(tempfile.gettempdir(), file_name)
    try:
        with open(path, 'w', newline='', encoding='utf-8') as f:
            f.write(export_csv(result.table_data, columns or default_columns()))
    except OSError as e:
        return None, f"Error during export: {str(e)}"

    return path, f"Export successful! Saved to {path}"
