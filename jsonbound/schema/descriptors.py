"""
Schema descriptors: immutable type and field descriptors plus the registry that owns them.

Descriptors reference each other by name, so cyclic type graphs can be described
without mutating a descriptor after construction.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Literal

TypeKind = Literal["leaf", "collection", "enum", "composite"]

LeafCategory = Literal[
    "int8",
    "int32",
    "int64",
    "float64",
    "float32",
    "boolean",
    "string",
    "date",
    "datetime",
    "zoned_datetime",
    "instant",
    "legacy_datetime",
    "uuid",
    "binary",
]

LEAF_CATEGORIES: tuple[str, ...] = (
    "int8",
    "int32",
    "int64",
    "float64",
    "float32",
    "boolean",
    "string",
    "date",
    "datetime",
    "zoned_datetime",
    "instant",
    "legacy_datetime",
    "uuid",
    "binary",
)

TYPE_KINDS: tuple[str, ...] = ("leaf", "collection", "enum", "composite")


@dataclass(frozen=True)
class FieldDescriptor:
    """One serialized field of a composite type."""

    name: str
    declared_type: str  # Registry name of the field's type
    element_type: str | None = None  # Collection fields only; None when raw


@dataclass(frozen=True)
class TypeDescriptor:
    """
    Structural description of one type.

    Only the payload matching ``kind`` is meaningful:
    leaf -> category (None for an unrecognized standard leaf),
    collection -> element (None for a raw collection),
    enum -> constants, composite -> fields (flattened, declared-then-ancestor order).
    """

    name: str
    kind: TypeKind
    category: LeafCategory | None = None
    element: str | None = None
    constants: tuple[str, ...] = ()
    fields: tuple[FieldDescriptor, ...] = ()

    def __post_init__(self) -> None:
        if self.kind not in TYPE_KINDS:
            raise ValueError(f"Unknown type kind for {self.name}: {self.kind!r}")
        if self.category is not None and self.category not in LEAF_CATEGORIES:
            raise ValueError(f"Unknown leaf category for {self.name}: {self.category!r}")

    def is_composite(self) -> bool:
        return self.kind == "composite"

    def is_collection(self) -> bool:
        return self.kind == "collection"


@dataclass
class SchemaRegistry:
    """Name -> TypeDescriptor mapping. Registration is write-once per name."""

    _types: dict[str, TypeDescriptor] = field(default_factory=dict)

    def register(self, descriptor: TypeDescriptor) -> TypeDescriptor:
        """Register a descriptor; re-registering an equal descriptor is a no-op."""
        existing = self._types.get(descriptor.name)
        if existing is not None:
            if existing != descriptor:
                raise ValueError(f"Type {descriptor.name} is already registered")
            return existing
        self._types[descriptor.name] = descriptor
        return descriptor

    def get(self, name: str) -> TypeDescriptor:
        try:
            return self._types[name]
        except KeyError:
            raise KeyError(f"Type not registered: {name}") from None

    def names(self) -> list[str]:
        return sorted(self._types)

    def __contains__(self, name: object) -> bool:
        return name in self._types

    def __iter__(self) -> Iterator[TypeDescriptor]:
        return iter(self._types.values())

    def __len__(self) -> int:
        return len(self._types)
