from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence, Union


@dataclass(frozen=True)
class ColumnDefinition:
    display: str
    width: int = 120


@dataclass(frozen=True)
class AvailableColumn:
    keyword: str
    display: str
    count: Optional[int]
    selected: bool

    @property
    def label(self) -> str:
        if self.count is None:
            return self.display
        return f"{self.display} ({self.count} properties)"


MANDATORY_COLUMN = 'name'
ADDITIONAL_INFO = 'additionalInfo'

COLUMN_DEFINITIONS: Dict[str, ColumnDefinition] = {
    'name': ColumnDefinition('Variable Name', 150),
    'description': ColumnDefinition('Description', 300),
    'type': ColumnDefinition('Data Type', 110),
    'format': ColumnDefinition('Format', 100),
    'enum': ColumnDefinition('Valid Values', 140),
    'required': ColumnDefinition('Required', 80),
    'default': ColumnDefinition('Default', 100),
    'const': ColumnDefinition('Constant', 100),
    'minimum': ColumnDefinition('Min', 80),
    'maximum': ColumnDefinition('Max', 80),
    'exclusiveMinimum': ColumnDefinition('Exclusive Min', 100),
    'exclusiveMaximum': ColumnDefinition('Exclusive Max', 100),
    'minLength': ColumnDefinition('Min Length', 90),
    'maxLength': ColumnDefinition('Max Length', 90),
    'pattern': ColumnDefinition('Pattern', 150),
    'multipleOf': ColumnDefinition('Multiple Of', 90),
    'minItems': ColumnDefinition('Min Items', 90),
    'maxItems': ColumnDefinition('Max Items', 90),
    'uniqueItems': ColumnDefinition('Unique Items', 100),
    'minProperties': ColumnDefinition('Min Properties', 110),
    'maxProperties': ColumnDefinition('Max Properties', 110),
    'deprecated': ColumnDefinition('Deprecated', 90),
    'readOnly': ColumnDefinition('Read Only', 90),
    'writeOnly': ColumnDefinition('Write Only', 90),
    'title': ColumnDefinition('Title', 150),
    'examples': ColumnDefinition('Examples', 200),
    'additionalInfo': ColumnDefinition('Additional Info', 200),
}

DEFAULT_COLUMNS: List[str] = ['name', 'description', 'type', 'enum', 'required']


def format_keyword_display(keyword: str) -> str:
    """Turn a camelCase keyword into Title Case ('minLength' -> 'Min Length')."""
    spaced = re.sub(r'([A-Z])', r' \1', keyword)
    return (spaced[:1].upper() + spaced[1:]).strip()


def get_column_definition(keyword: str) -> ColumnDefinition:
    definition = COLUMN_DEFINITIONS.get(keyword)
    if definition is not None:
        return definition
    return ColumnDefinition(format_keyword_display(keyword), 120)


def default_columns() -> List[str]:
    return list(DEFAULT_COLUMNS)


def select_none() -> List[str]:
    return [MANDATORY_COLUMN]


def select_all(selected: Sequence[str], available: Iterable[str]) -> List[str]:
    """Keep the current selection order and append everything else."""
    columns = list(selected)
    for keyword in available:
        if keyword not in columns:
            columns.append(keyword)
    return columns


def move_column(selected: Sequence[str], from_index: int, to_index: int) -> List[str]:
    columns = list(selected)
    if from_index == to_index:
        return columns
    if not (0 <= from_index < len(columns)) or not (0 <= to_index < len(columns)):
        raise IndexError(f"Cannot move column {from_index} to {to_index} in {len(columns)} columns")
    moved = columns.pop(from_index)
    columns.insert(to_index, moved)
    return columns


def reset_column_order(selected: Sequence[str]) -> List[str]:
    """Default columns first in default order, then the rest as they were."""
    chosen = set(selected)
    columns = [keyword for keyword in DEFAULT_COLUMNS if keyword in chosen]
    columns.extend(keyword for keyword in selected if keyword not in DEFAULT_COLUMNS)
    return columns


def toggle_column(selected: Sequence[str], keyword: str, checked: bool) -> List[str]:
    columns = list(selected)
    if checked:
        if keyword not in columns:
            columns.append(keyword)
    elif keyword != MANDATORY_COLUMN:
        columns = [col for col in columns if col != keyword]
    return columns


def apply_selection(selected: Sequence[str], checked: Iterable[str]) -> List[str]:
    """Reconcile an unordered checkbox value with the ordered selection.

    Unchecked columns are dropped and newly checked ones are appended; the
    mandatory column always stays.
    """
    checked = list(checked or [])
    columns = list(selected)
    for keyword in list(columns):
        if keyword not in checked:
            columns = toggle_column(columns, keyword, False)
    for keyword in checked:
        columns = toggle_column(columns, keyword, True)
    return columns


def list_available_columns(
    selected: Sequence[str],
    keyword_stats: Optional[Iterable[Dict[str, Union[str, int]]]] = None,
) -> List[AvailableColumn]:
    """Selected columns in order, then the rest by usage count.

    Candidates are the fixed column definitions plus every keyword that
    appears in `keyword_stats`. `additionalInfo` has no count and sorts last.
    """
    counts: Dict[str, int] = {}
    for stat in keyword_stats or []:
        counts[str(stat['keyword'])] = int(stat['count'])

    def count_for(keyword: str, missing: Optional[int]) -> Optional[int]:
        if keyword == ADDITIONAL_INFO:
            return None
        return counts.get(keyword, missing)

    result: List[AvailableColumn] = []
    seen = set()
    for keyword in selected:
        if keyword in seen:
            continue
        seen.add(keyword)
        result.append(AvailableColumn(keyword, get_column_definition(keyword).display, count_for(keyword, None), True))

    candidates = [MANDATORY_COLUMN, 'required', ADDITIONAL_INFO, *COLUMN_DEFINITIONS, *counts]
    unselected: List[AvailableColumn] = []
    for keyword in candidates:
        if keyword in seen:
            continue
        seen.add(keyword)
        unselected.append(AvailableColumn(keyword, get_column_definition(keyword).display, count_for(keyword, 0), False))

    unselected.sort(key=lambda col: (col.count is None, -(col.count or 0)))
    result.extend(unselected)
    return result
