"""
Tests for explicit schema registries: dict and YAML loading, inheritance flattening,
collections, validation errors, and estimates over loaded schemas.
"""

import tempfile
from pathlib import Path

import pytest

from jsonbound.estimation import JsonSizeEstimator, SizeEstimate
from jsonbound.schema import SchemaRegistry, load_schema


def _estimator(types: dict, max_collection_size: int = 10) -> JsonSizeEstimator:
    return JsonSizeEstimator(max_collection_size, load_schema({"types": types}))


def test_worked_example_int_and_string_fields():
    """intField (int32) + stringField (string): 32..297."""
    estimator = _estimator(
        {"Simple": {"fields": {"intField": "int32", "stringField": "string"}}}
    )
    estimate = estimator.estimate("Simple")
    assert estimate.min_size == 2 + (1 + 11 + 1) + (1 + 14 + 2)
    assert estimate.min_size == 32
    assert estimate.max_size == 2 + (1 + 11 + 11) + (1 + 14 + 257)
    assert estimate.max_size == 297


def test_self_referential_type():
    """C { self: C, name: string } terminates and exceeds {}."""
    estimator = _estimator({"C": {"fields": {"self": "C", "name": "string"}}})
    estimate = estimator.estimate("C")
    assert estimate == SizeEstimate(2 + (1 + 7 + 2) + (1 + 7 + 2), 2 + (1 + 7 + 2) + (1 + 7 + 257))
    assert estimate.min_size == 22
    assert estimate.max_size > 2


def test_enum_constants():
    """SMALL, MEDIUM, VERY_VERY_LONG_ENUM_VALUE -> 7..27."""
    estimator = _estimator(
        {"Size": {"kind": "enum", "constants": ["SMALL", "MEDIUM", "VERY_VERY_LONG_ENUM_VALUE"]}}
    )
    assert estimator.estimate("Size") == SizeEstimate(7, 27)


def test_extends_flattens_ancestor_fields():
    """Child fields first, then parent fields."""
    registry = load_schema(
        {
            "types": {
                "Parent": {"fields": {"parentField": "string"}},
                "Child": {"extends": "Parent", "fields": {"childField": "string"}},
            }
        }
    )
    child = registry.get("Child")
    assert [f.name for f in child.fields] == ["childField", "parentField"]
    estimate = JsonSizeEstimator(10, registry).estimate("Child")
    assert estimate == SizeEstimate(35, 545)


def test_extends_redeclared_field_kept_once():
    registry = load_schema(
        {
            "types": {
                "Parent": {"fields": {"name": "string", "age": "int32"}},
                "Child": {"extends": "Parent", "fields": {"name": "uuid"}},
            }
        }
    )
    fields = registry.get("Child").fields
    assert [(f.name, f.declared_type) for f in fields] == [("name", "uuid"), ("age", "int32")]


def test_collection_fields():
    registry = load_schema(
        {
            "types": {
                "Bag": {
                    "fields": {
                        "items": {"collection": "string"},
                        "anything": {"collection": None},
                    }
                }
            }
        }
    )
    items, anything = registry.get("Bag").fields
    assert items.declared_type == "collection[string]"
    assert items.element_type == "string"
    assert anything.declared_type == "collection"
    assert anything.element_type is None

    estimate = JsonSizeEstimator(10, registry).estimate("Bag")
    # items: 1 + 8 + [2 .. 2581]; anything: 1 + 11 + [2 .. 1000]
    assert estimate == SizeEstimate(2 + (1 + 8 + 2) + (1 + 11 + 2), 2 + (1 + 8 + 2581) + (1 + 11 + 1000))


def test_opaque_leaf_uses_fallback():
    estimator = _estimator({"Money": {"kind": "leaf"}, "Price": {"fields": {"amount": "Money"}}})
    assert estimator.estimate("Price") == SizeEstimate(2 + 1 + 9 + 2, 2 + 1 + 9 + 100)
    assert estimator.context.warnings


def test_leaf_alias_with_category():
    estimator = _estimator({"Sku": {"kind": "leaf", "category": "uuid"}})
    assert estimator.estimate("Sku") == SizeEstimate(36, 36)


def test_leaf_categories_registered():
    registry = load_schema({"types": {"Empty": {"fields": {}}}})
    assert "string" in registry
    assert registry.get("int8").category == "int8"
    assert JsonSizeEstimator(1, registry).estimate("Empty") == SizeEstimate(2, 2)


def test_root_level_declarations():
    """'types' key is optional."""
    registry = load_schema({"Point": {"fields": {"x": "int32", "y": "int32"}}})
    assert "Point" in registry


def test_registry_passthrough():
    registry = SchemaRegistry()
    assert load_schema(registry) is registry


def test_yaml_file():
    yaml_content = """
types:
  Entity:
    fields:
      id: uuid
  Tag:
    kind: enum
    constants: [RED, GREEN]
  Item:
    extends: Entity
    fields:
      tags: {collection: Tag}
"""
    with tempfile.NamedTemporaryFile(mode="w", suffix=".yaml", delete=False) as f:
        f.write(yaml_content)
        yaml_path = f.name

    try:
        registry = load_schema(yaml_path)
        item = registry.get("Item")
        assert [f.name for f in item.fields] == ["tags", "id"]
        assert item.fields[0].element_type == "Tag"

        estimate = JsonSizeEstimator(2, load_schema(Path(yaml_path))).estimate("Item")
        # tags: [] .. 2 + 2 * (7 + 1) - 1; id: uuid 36
        assert estimate == SizeEstimate(2 + (1 + 7 + 2) + (1 + 5 + 36), 2 + (1 + 7 + 17) + (1 + 5 + 36))
    finally:
        Path(yaml_path).unlink()


def test_yaml_file_missing():
    with pytest.raises(FileNotFoundError):
        load_schema("/nonexistent/schema.yaml")


def test_yaml_file_empty():
    with tempfile.NamedTemporaryFile(mode="w", suffix=".yaml", delete=False) as f:
        yaml_path = f.name
    try:
        with pytest.raises(ValueError, match="empty"):
            load_schema(yaml_path)
    finally:
        Path(yaml_path).unlink()


def test_yaml_file_invalid():
    with tempfile.NamedTemporaryFile(mode="w", suffix=".yaml", delete=False) as f:
        f.write("types: [unclosed\n")
        yaml_path = f.name
    try:
        with pytest.raises(ValueError, match="Failed to parse"):
            load_schema(yaml_path)
    finally:
        Path(yaml_path).unlink()


@pytest.mark.parametrize(
    "types, message",
    [
        ({"A": {"fields": {"b": "Missing"}}}, "unknown type"),
        ({"A": {"kind": "table"}}, "unknown kind"),
        ({"A": {"kind": "leaf", "category": "int128"}}, "unknown leaf category"),
        ({"A": {"extends": "B"}, "B": {"extends": "A"}}, "cycle"),
        ({"A": {"extends": "Nope"}}, "unknown type"),
        ({"A": {"extends": "E"}, "E": {"kind": "enum", "constants": ["X"]}}, "non-composite"),
        ({"A": {"fields": {"b": {"list": "string"}}}}, "collection"),
        ({"A": {"fields": {"b": 3}}}, "must be a string"),
        ({"string": {"fields": {}}}, "reserved"),
        ({"A": "not a dict"}, "must be a dict"),
        ({"E": {"kind": "enum", "constants": "RED"}}, "list of strings"),
    ],
)
def test_invalid_schemas(types, message):
    with pytest.raises(ValueError, match=message):
        load_schema({"types": types})


def test_empty_types_rejected():
    with pytest.raises(ValueError, match="non-empty"):
        load_schema({"types": {}})


def test_unsupported_source_type():
    with pytest.raises(TypeError):
        load_schema(42)
