"""
Tests for mapping flattening and field type helpers.
"""

from opensearch_navigator.demo import MOCK_MAPPING
from opensearch_navigator.schema.mapping import extract_properties, flatten_mapping
from opensearch_navigator.schema.type_mappings import TypeMapper


def test_flat_mapping_has_no_dots():
    fields = flatten_mapping({"id": {"type": "keyword"}, "count": {"type": "long"}})
    
    assert [(f.path, f.type) for f in fields] == [("id", "keyword"), ("count", "long")]
    assert all("." not in f.path for f in fields)


def test_nested_depth_gives_depth_minus_one_dots():
    properties = {
        "a": {
            "properties": {
                "b": {
                    "type": "object",
                    "properties": {"c": {"type": "integer"}},
                },
                "d": {"type": "keyword"},
            }
        }
    }
    
    fields = {f.path: f.type for f in flatten_mapping(properties)}
    
    assert fields == {"a.b.c": "integer", "a.d": "keyword"}
    assert "a.b.c".count(".") == 2
    assert "a.d".count(".") == 1


def test_containers_are_not_emitted_and_order_is_kept():
    fields = flatten_mapping(extract_properties(MOCK_MAPPING))
    paths = [f.path for f in fields]
    
    assert paths == [
        "id",
        "name",
        "description",
        "status",
        "timestamp",
        "location",
        "metadata.host",
        "metadata.latency_ms",
        "metadata.tags",
    ]
    assert "metadata" not in paths


def test_flatten_with_prefix():
    fields = flatten_mapping({"x": {"type": "text"}}, prefix="root")
    
    assert fields[0].path == "root.x"


def test_extract_properties_falls_back_to_first_index():
    response = {"logs-2024.01": {"mappings": {"properties": {"msg": {"type": "text"}}}}}
    
    assert extract_properties(response, "logs") == {"msg": {"type": "text"}}
    assert extract_properties({}, "logs") == {}
    assert extract_properties({"idx": {"mappings": {}}}, "idx") == {}


def test_type_mapper():
    assert TypeMapper.normalize_type("keyword") == "string"
    assert TypeMapper.normalize_type("LONG") == "number"
    assert TypeMapper.normalize_type("geo_point") == "geo"
    assert TypeMapper.normalize_type("") == "unknown"
    
    assert "contains" in TypeMapper.operators_for("text")
    assert "gt" not in TypeMapper.operators_for("keyword")
    assert "gte" in TypeMapper.operators_for("date")
    assert TypeMapper.operators_for("geo_point") == ["exists"]
    assert len(TypeMapper.operators_for("mystery")) == 8
