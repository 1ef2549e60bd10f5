"""
Schema loader: build a SchemaRegistry from a YAML file or dict of type declarations.
"""

from __future__ import annotations

from pathlib import Path

import yaml

from jsonbound.schema.descriptors import (
    LEAF_CATEGORIES,
    FieldDescriptor,
    SchemaRegistry,
    TypeDescriptor,
)

RAW_COLLECTION_NAME = "collection"


def load_schema(source: SchemaRegistry | str | Path | dict) -> SchemaRegistry:
    """
    Load a SchemaRegistry from various sources.

    Args:
        source: Can be:
            - SchemaRegistry instance: returned as-is
            - str or Path: treated as YAML file path
            - dict: type declarations, either at the root or under "types"

    Returns:
        SchemaRegistry holding every declared type, the leaf categories, and
        the collection descriptors the declarations use

    Raises:
        FileNotFoundError: If source is a file path that doesn't exist
        ValueError: If the document is malformed or references unknown types
    """
    if isinstance(source, SchemaRegistry):
        return source

    if isinstance(source, (str, Path)):
        return _load_from_yaml_file(source)

    if isinstance(source, dict):
        return _load_from_dict(source)

    raise TypeError(f"Unsupported source type for load_schema: {type(source).__name__}")


def _load_from_yaml_file(path: str | Path) -> SchemaRegistry:
    """Load SchemaRegistry from a YAML file."""
    file_path = Path(path)
    if not file_path.exists():
        raise FileNotFoundError(f"Schema file not found: {file_path}")

    try:
        data = yaml.safe_load(file_path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ValueError(f"Failed to parse YAML file {file_path}: {e}") from e

    if data is None:
        raise ValueError(f"YAML file {file_path} is empty")
    if not isinstance(data, dict):
        raise ValueError(f"YAML file {file_path}: expected dict, got {type(data).__name__}")
    return _load_from_dict(data)


def _load_from_dict(data: dict) -> SchemaRegistry:
    declarations = data.get("types", data)
    if not isinstance(declarations, dict) or not declarations:
        raise ValueError("Schema 'types' must be a non-empty dict")

    for name, decl in declarations.items():
        if not isinstance(name, str):
            raise ValueError(f"Type name must be a string, got {type(name).__name__}")
        if name in LEAF_CATEGORIES or name == RAW_COLLECTION_NAME:
            raise ValueError(f"Type name {name!r} is reserved")
        if not isinstance(decl, dict):
            raise ValueError(f"Type {name!r} must be a dict, got {type(decl).__name__}")

    registry = SchemaRegistry()
    for category in LEAF_CATEGORIES:
        registry.register(TypeDescriptor(name=category, kind="leaf", category=category))

    for name, decl in declarations.items():
        kind = decl.get("kind", "composite")
        if kind == "leaf":
            registry.register(_leaf_descriptor(name, decl))
        elif kind == "enum":
            registry.register(_enum_descriptor(name, decl))
        elif kind == "composite":
            fields = _flatten_fields(name, declarations)
            registry.register(
                TypeDescriptor(
                    name=name,
                    kind="composite",
                    fields=tuple(
                        _field_descriptor(name, f, t, declarations, registry)
                        for f, t in fields
                    ),
                )
            )
        else:
            raise ValueError(f"Type {name!r}: unknown kind {kind!r}")

    return registry


def _leaf_descriptor(name: str, decl: dict) -> TypeDescriptor:
    category = decl.get("category")
    if category is not None and category not in LEAF_CATEGORIES:
        raise ValueError(f"Type {name!r}: unknown leaf category {category!r}")
    return TypeDescriptor(name=name, kind="leaf", category=category)


def _enum_descriptor(name: str, decl: dict) -> TypeDescriptor:
    constants = decl.get("constants", [])
    if not isinstance(constants, list) or not all(isinstance(c, str) for c in constants):
        raise ValueError(f"Type {name!r}: 'constants' must be a list of strings")
    return TypeDescriptor(name=name, kind="enum", constants=tuple(constants))


def _flatten_fields(name: str, declarations: dict) -> list[tuple[str, object]]:
    """Own fields, then each ancestor's fields along the 'extends' chain."""
    fields: list[tuple[str, object]] = []
    seen_names: set[str] = set()
    chain: list[str] = []
    current: str | None = name
    while current is not None:
        if current in chain:
            raise ValueError(f"Type {name!r}: 'extends' cycle through {current!r}")
        chain.append(current)
        decl = declarations.get(current)
        if decl is None:
            raise ValueError(f"Type {chain[-2]!r} extends unknown type {current!r}")
        if decl.get("kind", "composite") != "composite":
            raise ValueError(f"Type {chain[-2]!r} extends non-composite type {current!r}")
        own = decl.get("fields") or {}
        if not isinstance(own, dict):
            raise ValueError(f"Type {current!r}: 'fields' must be a dict")
        for field_name, field_type in own.items():
            if field_name not in seen_names:
                seen_names.add(field_name)
                fields.append((str(field_name), field_type))
        current = decl.get("extends")
        if current is not None and not isinstance(current, str):
            raise ValueError(f"Type {chain[-1]!r}: 'extends' must be a type name")
    return fields


def _field_descriptor(
    owner: str,
    field_name: str,
    field_type: object,
    declarations: dict,
    registry: SchemaRegistry,
) -> FieldDescriptor:
    if isinstance(field_type, dict):
        if "collection" not in field_type:
            raise ValueError(
                f"Type {owner!r} field {field_name!r}: mapping type must have a 'collection' key"
            )
        element = field_type["collection"]
        if element is None:
            registry.register(TypeDescriptor(name=RAW_COLLECTION_NAME, kind="collection"))
            return FieldDescriptor(name=field_name, declared_type=RAW_COLLECTION_NAME)
        _check_reference(owner, field_name, element, declarations)
        collection_name = f"collection[{element}]"
        registry.register(TypeDescriptor(name=collection_name, kind="collection", element=element))
        return FieldDescriptor(
            name=field_name, declared_type=collection_name, element_type=element
        )

    _check_reference(owner, field_name, field_type, declarations)
    return FieldDescriptor(name=field_name, declared_type=field_type)


def _check_reference(owner: str, field_name: str, ref: object, declarations: dict) -> None:
    if not isinstance(ref, str):
        raise ValueError(
            f"Type {owner!r} field {field_name!r}: type reference must be a string, "
            f"got {type(ref).__name__}"
        )
    if ref not in LEAF_CATEGORIES and ref not in declarations:
        raise ValueError(f"Type {owner!r} field {field_name!r}: unknown type {ref!r}")
