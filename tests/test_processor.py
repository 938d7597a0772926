import json

import pytest

from schema_dictionary.errors import CyclicCompositionError, SchemaParseError
from schema_dictionary.extraction import ExtractedProperty
from schema_dictionary.processor import get_table_data, process_documents
from schema_dictionary.store import SchemaStore


def doc(name, schema):
    return name, json.dumps(schema)


def test_single_array_document():
    result = process_documents([
        doc("rows.json", {"type": "array", "items": {"properties": {"id": {"type": "integer"}}, "required": ["id"]}}),
    ])
    assert result.success
    assert result.table_data.properties == (
        ExtractedProperty(category=None, name="id", schema={"type": "integer"}, required=True),
    )
    assert result.table_data.title == "Dataset Schema"
    assert result.table_data.description == ""


def test_items_local_reference():
    result = process_documents([
        doc("rows.json", {
            "type": "array",
            "title": "Rows",
            "description": "All rows",
            "items": {"$ref": "#/$defs/Row"},
            "$defs": {"Row": {"properties": {"x": {"type": "string"}}}},
        }),
    ])
    assert [p.name for p in result.table_data.properties] == ["x"]
    assert result.table_data.title == "Rows"
    assert result.table_data.description == "All rows"


def test_items_external_reference():
    result = process_documents([
        doc("row.json", {"$id": "https://example.com/row.json", "properties": {"a": {}}}),
        doc("rows.json", {"type": "array", "items": {"$ref": "row.json"}}),
    ])
    assert [p.name for p in result.table_data.properties] == ["a"]


def test_unmatched_external_branch_contributes_nothing():
    result = process_documents([
        doc("rows.json", {
            "type": "array",
            "items": {
                "allOf": [
                    {"$ref": "other.json#/$defs/Missing"},
                    {"properties": {"kept": {"type": "string"}}},
                ],
            },
        }),
    ])
    assert [p.name for p in result.table_data.properties] == ["kept"]


def test_two_documents_without_main_schema():
    result = process_documents([
        doc("a.json", {"type": "object", "properties": {"a": {}}}),
        doc("b.json", {"type": "array"}),
    ])
    assert not result.success
    assert result.table_data is None
    assert len(result.keyword_usage) == 0
    assert get_table_data(result.main_schema, result.store) is None


def test_single_document_fallback_regardless_of_type():
    result = process_documents([doc("row.json", {"type": "object", "properties": {"a": {}}})])
    assert result.success
    assert result.main_schema["type"] == "object"
    # Without items there is nothing to extract.
    assert result.table_data is None


def test_last_main_schema_wins():
    result = process_documents([
        doc("first.json", {"type": "array", "items": {"properties": {"first": {}}}}),
        doc("second.json", {"type": "array", "items": {"properties": {"second": {}}}}),
        doc("other.json", {"type": "object"}),
    ])
    assert [p.name for p in result.table_data.properties] == ["second"]


def test_empty_items_object_counts_as_present():
    result = process_documents([
        doc("a.json", {"type": "array", "items": {}}),
        doc("b.json", {"type": "object"}),
    ])
    assert result.success
    assert result.table_data.properties == ()


def test_unresolved_items_reference():
    result = process_documents([
        doc("a.json", {"type": "array", "items": {"$ref": "#/$defs/Nope"}}),
    ])
    assert result.success
    assert result.table_data is None


def test_keyword_usage_from_extracted_properties():
    result = process_documents([
        doc("rows.json", {
            "type": "array",
            "items": {"properties": {"code": {"type": "string", "minLength": 3, "pattern": "^a"}}},
        }),
    ])
    assert result.keyword_stats() == [
        {"keyword": "type", "count": 1},
        {"keyword": "minLength", "count": 1},
        {"keyword": "pattern", "count": 1},
    ]


def test_categories_from_referenced_documents():
    result = process_documents([
        doc("person.json", {"$id": "person.json", "title": "Person", "properties": {"name": {"type": "string"}}}),
        doc("rows.json", {
            "type": "array",
            "items": {
                "properties": {"id": {"type": "integer"}},
                "allOf": [{"$ref": "person.json"}],
            },
        }),
    ])
    assert [(p.category, p.name) for p in result.table_data.properties] == [(None, "id"), ("Person", "name")]


def test_repeated_runs_are_identical():
    documents = [
        doc("person.json", {"$id": "person.json", "title": "Person", "properties": {"name": {"type": "string"}}}),
        doc("rows.json", {"type": "array", "items": {"allOf": [{"$ref": "person.json"}]}}),
    ]
    first = process_documents(documents)
    second = process_documents(documents)
    assert first.table_data == second.table_data
    assert first.keyword_usage == second.keyword_usage


def test_invalid_json_fails_the_run():
    with pytest.raises(SchemaParseError) as excinfo:
        process_documents([
            doc("good.json", {"type": "array", "items": {}}),
            ("bad.json", "{not json"),
        ])
    assert excinfo.value.name == "bad.json"


def test_non_object_document_is_rejected():
    with pytest.raises(SchemaParseError):
        process_documents([("list.json", "[1, 2, 3]")])


def test_cycle_is_reported():
    with pytest.raises(CyclicCompositionError):
        process_documents([
            doc("loop.json", {"$id": "loop.json", "allOf": [{"$ref": "loop.json"}]}),
            doc("rows.json", {"type": "array", "items": {"$ref": "loop.json"}}),
        ])


def test_get_table_data_without_main_schema():
    assert get_table_data(None, SchemaStore()) is None


def test_boolean_items_gives_empty_table():
    result = process_documents([doc("rows.json", {"type": "array", "title": "T", "items": True})])
    assert result.success
    assert result.table_data.title == "T"
    assert result.table_data.properties == ()


def test_tuple_items_gives_empty_table():
    result = process_documents([
        doc("rows.json", {"type": "array", "items": [{"properties": {"a": {}}}]}),
        doc("other.json", {"type": "object"}),
    ])
    assert result.table_data.properties == ()
