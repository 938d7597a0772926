from __future__ import annotations

import csv
import io
import json
from dataclasses import replace
from html import escape
from typing import Any, Callable, Dict, List, Optional, Sequence

from .columns import format_keyword_display, get_column_definition
from .config import JSON_PREVIEW_LIMIT, PATTERN_PREVIEW_LIMIT
from .extraction import ExtractedProperty
from .processor import TableData

# Keywords shown by dedicated columns; additional info never repeats them.
ADDITIONAL_INFO_EXCLUDED = frozenset({
    'name', 'description', 'type', 'enum', 'enumDescriptions', 'const',
    'required', '$schema', '$id', '$ref', 'properties', 'items',
    'allOf', 'anyOf', 'oneOf',
})

NUMERIC_KEYWORDS = (
    'minimum', 'maximum', 'exclusiveMinimum', 'exclusiveMaximum',
    'minLength', 'maxLength', 'multipleOf', 'minItems', 'maxItems',
    'minProperties', 'maxProperties',
)
FLAG_KEYWORDS = ('deprecated', 'readOnly', 'writeOnly', 'uniqueItems')

TABLE_CSS = """
.table-container table { border-collapse: collapse; width: 100%; }
.table-container th, .table-container td { border: 1px solid #e2e8f0; padding: 6px 8px; vertical-align: top; }
.table-title { font-size: 1.3em; font-weight: 600; }
.subtitle { color: #718096; margin-bottom: 8px; }
.category-row td { background: #edf2f7; font-weight: 600; }
.variable-name { font-family: monospace; font-weight: 600; }
.data-type, .constraint, .cell-value-json { font-family: monospace; }
.required-badge { color: #2f855a; font-weight: 600; }
.optional-badge { color: #a0aec0; }
"""

# (keyword, property, schema, displayed columns) -> cell text
CellFormatter = Callable[[str, ExtractedProperty, Dict[str, Any], Sequence[str]], str]


def _integral_floats_as_ints(value: Any) -> Any:
    """1.0 -> 1, also inside arrays and objects."""
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, list):
        return [_integral_floats_as_ints(item) for item in value]
    if isinstance(value, dict):
        return {key: _integral_floats_as_ints(item) for key, item in value.items()}
    return value


def compact_json(value: Any) -> str:
    return json.dumps(_integral_floats_as_ints(value), ensure_ascii=False, separators=(',', ':'))


def to_text(value: Any) -> str:
    """Plain text for a JSON value."""
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if value is None:
        return 'null'
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (dict, list)):
        return compact_json(value)
    return str(value)


def _text_or_empty(value: Any) -> str:
    if value is None or value is False or value == '':
        return ''
    return to_text(value)


def _schema_of(prop: ExtractedProperty) -> Dict[str, Any]:
    return prop.schema if isinstance(prop.schema, dict) else {}


def format_type(schema: Dict[str, Any]) -> str:
    schema_type = schema.get('type')
    if isinstance(schema_type, list):
        return ' | '.join(to_text(t) for t in schema_type)
    type_name = _text_or_empty(schema_type) or 'any'
    if schema.get('format'):
        return f"{type_name} ({to_text(schema['format'])})"
    return type_name


def _enum_descriptions(schema: Dict[str, Any]) -> Optional[List[Any]]:
    values = schema.get('enum')
    descriptions = schema.get('enumDescriptions')
    if isinstance(values, list) and isinstance(descriptions, list) and len(descriptions) == len(values):
        return descriptions
    return None


def additional_info(schema: Dict[str, Any], columns: Sequence[str]) -> Dict[str, Any]:
    """Keywords with a value that no displayed column already shows."""
    return {
        key: value
        for key, value in schema.items()
        if key not in ADDITIONAL_INFO_EXCLUDED and key not in columns and value is not None
    }


# --- HTML cells ---

def format_value(value: Any, is_json: bool = False) -> str:
    if value is None:
        return ''
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, (dict, list)):
        text = json.dumps(value, ensure_ascii=False, indent=2)
        if len(text) > JSON_PREVIEW_LIMIT:
            return (
                f'<span class="cell-value-json" title="{escape(text)}">'
                f'{escape(text[:JSON_PREVIEW_LIMIT])}...</span>'
            )
        return f'<span class="cell-value-json">{escape(text)}</span>'
    if is_json:
        return f'<span class="cell-value-json">{escape(to_text(value))}</span>'
    return escape(to_text(value))


def format_enum(schema: Dict[str, Any]) -> str:
    values = schema.get('enum')
    if not isinstance(values, list):
        return ''

    descriptions = _enum_descriptions(schema)
    items = []
    for index, value in enumerate(values):
        desc = _text_or_empty(descriptions[index]) if descriptions else ''
        desc_html = f'<div class="enum-desc">{escape(desc)}</div>' if desc else ''
        items.append(
            f'<div class="enum-item"><div class="enum-value">{escape(to_text(value))}</div>{desc_html}</div>'
        )
    return (
        f'<details class="enum-container"><summary class="enum-toggle">{len(values)} values</summary>'
        f'<div class="enum-list">{"".join(items)}</div></details>'
    )


def _const_html(schema: Dict[str, Any]) -> str:
    return f'<span class="const-value">{escape(to_text(schema["const"]))}</span>'


def _html_name(keyword, prop, schema, columns):
    return f'<span class="variable-name">{escape(prop.name)}</span>'


def _html_description(keyword, prop, schema, columns):
    return escape(_text_or_empty(schema.get('description')))


def _html_type(keyword, prop, schema, columns):
    return f'<span class="data-type">{escape(format_type(schema))}</span>'


def _html_enum(keyword, prop, schema, columns):
    if 'const' in schema:
        return _const_html(schema)
    return format_enum(schema)


def _html_required(keyword, prop, schema, columns):
    if prop.required:
        return '<span class="required-badge">Yes</span>'
    return '<span class="optional-badge">No</span>'


def _html_default(keyword, prop, schema, columns):
    return format_value(schema['default'], is_json=True) if 'default' in schema else ''


def _html_const(keyword, prop, schema, columns):
    return _const_html(schema) if 'const' in schema else ''


def _html_numeric(keyword, prop, schema, columns):
    if keyword not in schema:
        return ''
    return f'<span class="constraint">{escape(to_text(schema[keyword]))}</span>'


def _html_pattern(keyword, prop, schema, columns):
    pattern = _text_or_empty(schema.get('pattern'))
    if not pattern:
        return ''
    suffix = '...' if len(pattern) > PATTERN_PREVIEW_LIMIT else ''
    return f'<span class="constraint" title="{escape(pattern)}">{escape(pattern[:PATTERN_PREVIEW_LIMIT])}{suffix}</span>'


def _html_format(keyword, prop, schema, columns):
    fmt = _text_or_empty(schema.get('format'))
    return f'<span class="data-type">{escape(fmt)}</span>' if fmt else ''


def _html_flag(keyword, prop, schema, columns):
    return '<span class="required-badge">Yes</span>' if schema.get(keyword) is True else ''


def _html_title(keyword, prop, schema, columns):
    return escape(_text_or_empty(schema.get('title')))


def _html_examples(keyword, prop, schema, columns):
    examples = schema.get('examples')
    return format_value(examples, is_json=True) if isinstance(examples, list) else ''


def _html_additional_info(keyword, prop, schema, columns):
    extra = additional_info(schema, columns)
    if not extra:
        return ''
    items = ''.join(
        f'<div class="property"><strong>{escape(format_keyword_display(key))}:</strong> '
        f'{escape(json.dumps(value, ensure_ascii=False, indent=2) if isinstance(value, (dict, list)) else to_text(value))}</div>'
        for key, value in extra.items()
    )
    return (
        f'<details class="additional-info"><summary>{len(extra)} properties...</summary>'
        f'<div class="additional-content">{items}</div></details>'
    )


def _html_generic(keyword, prop, schema, columns):
    return format_value(schema[keyword]) if keyword in schema else ''


HTML_FORMATTERS: Dict[str, CellFormatter] = {
    'name': _html_name,
    'description': _html_description,
    'type': _html_type,
    'enum': _html_enum,
    'required': _html_required,
    'default': _html_default,
    'const': _html_const,
    'pattern': _html_pattern,
    'format': _html_format,
    'title': _html_title,
    'examples': _html_examples,
    'additionalInfo': _html_additional_info,
    **{keyword: _html_numeric for keyword in NUMERIC_KEYWORDS},
    **{keyword: _html_flag for keyword in FLAG_KEYWORDS},
}


def format_cell(keyword: str, prop: ExtractedProperty, columns: Sequence[str]) -> str:
    formatter = HTML_FORMATTERS.get(keyword, _html_generic)
    return formatter(keyword, prop, _schema_of(prop), columns)


def render_table(table_data: Optional[TableData], columns: Sequence[str]) -> str:
    if table_data is None:
        return '<div class="error-message">No valid schema data to display</div>'

    has_categories = any(prop.category for prop in table_data.properties)
    parts = [
        '<div class="table-container">',
        '<div class="table-header">',
        f'<div class="table-title">{escape(table_data.title)}</div>',
    ]
    if table_data.description:
        parts.append(f'<div class="subtitle">{escape(table_data.description)}</div>')
    parts.append('</div><div class="table-scroll-wrapper"><table id="dataTable"><thead><tr>')

    for col in columns:
        parts.append(f'<th class="col-{escape(col)}">{escape(get_column_definition(col).display)}</th>')
    parts.append('</tr></thead><tbody>')

    last_category = None
    for prop in table_data.properties:
        if has_categories and prop.category and prop.category != last_category:
            parts.append(
                f'<tr class="category-row"><td colspan="{len(columns)}">{escape(str(prop.category))}</td></tr>'
            )
            last_category = prop.category

        parts.append('<tr class="data-row">')
        for col in columns:
            parts.append(f'<td class="cell-{escape(col)}">{format_cell(col, prop, columns)}</td>')
        parts.append('</tr>')

    parts.append('</tbody></table></div></div>')
    return ''.join(parts)


# --- CSV cells ---

def format_enum_for_csv(schema: Dict[str, Any]) -> str:
    values = schema.get('enum')
    if not isinstance(values, list):
        return ''
    descriptions = _enum_descriptions(schema)
    if descriptions:
        return '\n'.join(f"{to_text(value)}: {to_text(desc)}" for value, desc in zip(values, descriptions))
    return '\n'.join('' if value is None else to_text(value) for value in values)


def _csv_name(keyword, prop, schema, columns):
    return prop.name


def _csv_description(keyword, prop, schema, columns):
    return _text_or_empty(schema.get('description'))


def _csv_type(keyword, prop, schema, columns):
    return format_type(schema)


def _csv_enum(keyword, prop, schema, columns):
    if 'const' in schema:
        return to_text(schema['const'])
    return format_enum_for_csv(schema)


def _csv_required(keyword, prop, schema, columns):
    return 'Yes' if prop.required else 'No'


def _csv_additional_info(keyword, prop, schema, columns):
    return '\n'.join(
        f"{format_keyword_display(key)}: {to_text(value)}"
        for key, value in additional_info(schema, columns).items()
    )


def _csv_generic(keyword, prop, schema, columns):
    return compact_json(schema[keyword]) if keyword in schema else ''


CSV_FORMATTERS: Dict[str, CellFormatter] = {
    'name': _csv_name,
    'description': _csv_description,
    'type': _csv_type,
    'enum': _csv_enum,
    'required': _csv_required,
    'additionalInfo': _csv_additional_info,
}


def format_csv_cell(keyword: str, prop: ExtractedProperty, columns: Sequence[str]) -> str:
    formatter = CSV_FORMATTERS.get(keyword, _csv_generic)
    return formatter(keyword, prop, _schema_of(prop), columns)


def table_rows(table_data: TableData, columns: Sequence[str]) -> List[List[str]]:
    """Header plus one plain-text row per property, led by its category.

    The category column carries the last non-empty category forward, so
    rows without one repeat the group they are printed under.
    """
    rows = [['Category'] + [get_column_definition(col).display for col in columns]]
    current_category = ''
    for prop in table_data.properties:
        if prop.category and prop.category != current_category:
            current_category = prop.category
        rows.append([current_category] + [format_csv_cell(col, prop, columns) for col in columns])
    return rows


def export_csv(table_data: Optional[TableData], columns: Sequence[str]) -> str:
    if table_data is None:
        return ''

    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator='\n')
    writer.writerows(table_rows(table_data, columns))
    text = buffer.getvalue()
    return text[:-1] if text.endswith('\n') else text


def filter_properties(table_data: Optional[TableData], columns: Sequence[str], query: str) -> Optional[TableData]:
    """Keep properties whose displayed cells mention `query` (case-insensitive)."""
    if table_data is None or not query or not query.strip():
        return table_data

    needle = query.strip().lower()
    kept = tuple(
        prop for prop in table_data.properties
        if any(needle in format_csv_cell(col, prop, columns).lower() for col in columns)
    )
    return replace(table_data, properties=kept)
