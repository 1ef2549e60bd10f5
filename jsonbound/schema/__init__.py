"""Type schema: descriptors, Python introspection, and YAML schema registries."""

from jsonbound.schema.descriptors import (
    LEAF_CATEGORIES,
    FieldDescriptor,
    LeafCategory,
    SchemaRegistry,
    TypeDescriptor,
    TypeKind,
)
from jsonbound.schema.introspection import (
    SchemaBuilder,
    describe_type,
    enumerate_fields,
    type_name,
)
from jsonbound.schema.schema_loader import load_schema
from jsonbound.schema.types import (
    Float32,
    Float64,
    Instant,
    Int8,
    Int32,
    Int64,
    LegacyDateTime,
    ZonedDateTime,
)

__all__ = [
    "FieldDescriptor",
    "Float32",
    "Float64",
    "Instant",
    "Int32",
    "Int64",
    "Int8",
    "LEAF_CATEGORIES",
    "LeafCategory",
    "LegacyDateTime",
    "SchemaBuilder",
    "SchemaRegistry",
    "TypeDescriptor",
    "TypeKind",
    "ZonedDateTime",
    "describe_type",
    "enumerate_fields",
    "load_schema",
    "type_name",
]
