import pytest

from schema_dictionary.columns import (
    DEFAULT_COLUMNS,
    apply_selection,
    default_columns,
    format_keyword_display,
    get_column_definition,
    list_available_columns,
    move_column,
    reset_column_order,
    select_all,
    select_none,
    toggle_column,
)


def test_format_keyword_display():
    assert format_keyword_display("minLength") == "Min Length"
    assert format_keyword_display("x-unitOfMeasure") == "X-unit Of Measure"
    assert format_keyword_display("type") == "Type"


def test_column_definition_fallback():
    assert get_column_definition("enum").display == "Valid Values"
    fallback = get_column_definition("contentMediaType")
    assert fallback.display == "Content Media Type"
    assert fallback.width == 120


def test_default_columns_are_a_copy():
    columns = default_columns()
    columns.append("format")
    assert DEFAULT_COLUMNS == ["name", "description", "type", "enum", "required"]


def test_move_column():
    assert move_column(["name", "a", "b", "c"], 3, 1) == ["name", "c", "a", "b"]
    assert move_column(["name", "a"], 1, 1) == ["name", "a"]
    with pytest.raises(IndexError):
        move_column(["name"], 0, 3)


def test_reset_column_order():
    selected = ["format", "type", "name", "pattern", "description"]
    assert reset_column_order(selected) == ["name", "description", "type", "format", "pattern"]


def test_name_column_cannot_be_removed():
    assert toggle_column(["name", "type"], "name", False) == ["name", "type"]
    assert toggle_column(["name", "type"], "type", False) == ["name"]
    assert toggle_column(["name"], "format", True) == ["name", "format"]
    assert select_none() == ["name"]


def test_apply_selection_keeps_order():
    current = ["name", "type", "description"]
    checked = ["description", "name", "pattern"]
    assert apply_selection(current, checked) == ["name", "description", "pattern"]


def test_select_all_appends_missing():
    assert select_all(["type", "name"], ["name", "format", "type", "pattern"]) == ["type", "name", "format", "pattern"]


def test_list_available_columns():
    stats = [
        {"keyword": "type", "count": 5},
        {"keyword": "x-unit", "count": 3},
        {"keyword": "pattern", "count": 1},
    ]
    available = list_available_columns(["name", "type"], stats)

    assert [(c.keyword, c.selected, c.count) for c in available[:2]] == [("name", True, None), ("type", True, 5)]
    unselected = available[2:]
    assert unselected[0].keyword == "x-unit"
    assert unselected[0].label == "X-unit (3 properties)"
    assert unselected[1].keyword == "pattern"
    assert unselected[-1].keyword == "additionalInfo"
    assert unselected[-1].count is None
    assert len({c.keyword for c in available}) == len(available)
