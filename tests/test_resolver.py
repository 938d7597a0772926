from schema_dictionary.accessors import get_value_by_pointer, is_blank
from schema_dictionary.paths import split_pointer
from schema_dictionary.resolver import resolve_ref
from schema_dictionary.store import SchemaStore


def make_store(*entries):
    store = SchemaStore()
    for name, document in entries:
        store.add(document, name)
    return store


def test_is_blank():
    assert is_blank(None)
    assert is_blank(False)
    assert is_blank(0)
    assert is_blank("")
    assert not is_blank({})
    assert not is_blank([])
    assert not is_blank("x")


def test_split_pointer_keeps_empty_segments():
    assert split_pointer("#/$defs/Row") == ["$defs", "Row"]
    assert split_pointer("#") == [""]


def test_internal_reference():
    base = {"$defs": {"Row": {"properties": {"x": {"type": "string"}}}}}
    resolved = resolve_ref("#/$defs/Row", base, SchemaStore())
    assert resolved is base["$defs"]["Row"]


def test_internal_reference_missing_segment():
    base = {"$defs": {}}
    assert resolve_ref("#/$defs/Row", base, SchemaStore()) is None


def test_internal_reference_stops_on_falsy_value():
    base = {"$defs": {"flag": False, "zero": 0, "empty": {}}}
    store = SchemaStore()
    assert resolve_ref("#/$defs/flag", base, store) is None
    assert resolve_ref("#/$defs/zero", base, store) is None
    assert resolve_ref("#/$defs/empty", base, store) == {}


def test_internal_reference_into_array():
    base = {"allOf": [{"title": "First"}, {"title": "Second"}]}
    assert get_value_by_pointer(base, ["allOf", "1"]) == {"title": "Second"}
    assert get_value_by_pointer(base, ["allOf", "5"]) is None


def test_external_reference_identifier_is_suffix_of_ref():
    other = {"$id": "other.json", "title": "Other"}
    store = make_store(("other.json", other))
    assert resolve_ref("https://example.com/schemas/other.json", {}, store) is other


def test_external_reference_ref_is_suffix_of_identifier():
    other = {"$id": "https://example.com/schemas/other.json"}
    store = make_store(("other.json", other))
    assert resolve_ref("schemas/other.json", {}, store) is other


def test_external_reference_first_loaded_wins():
    first = {"$id": "https://a.example/common.json"}
    second = {"$id": "https://b.example/common.json"}
    store = make_store(("a.json", first), ("b.json", second))
    assert resolve_ref("common.json", {}, store) is first


def test_external_reference_keeps_whole_document():
    other = {"$id": "other.json", "$defs": {"X": {"title": "X"}}}
    store = make_store(("other.json", other))
    # The fragment is not matched against "other.json" and nothing else matches.
    assert resolve_ref("other.json#/$defs/X", {}, store) is None
    assert resolve_ref("other.json", {}, store) is other


def test_external_reference_no_match():
    store = make_store(("a.json", {"$id": "a.json"}))
    assert resolve_ref("b.json", {}, store) is None


def test_store_falls_back_to_file_name_and_overwrites():
    store = SchemaStore()
    first = {"title": "first"}
    second = {"title": "second"}
    assert store.add(first, "row.json") == "row.json"
    store.add({"$id": "x"}, "x.json")
    store.add(second, "row.json")
    assert len(store) == 2
    assert store.get("row.json") is second
    assert list(store) == ["row.json", "x"]
