"""
Build schema descriptors from Python classes and type annotations.

The field enumerator walks a class and its ancestors; SchemaBuilder turns an
annotation (and everything reachable from it) into registered TypeDescriptors.
"""

from __future__ import annotations

import collections
import collections.abc
import dataclasses
import inspect
import types
import typing
from enum import Enum
from typing import Any, ClassVar

from jsonbound.schema.descriptors import FieldDescriptor, SchemaRegistry, TypeDescriptor
from jsonbound.schema.types import is_standard_type, leaf_base_category, leaf_category

# Concrete classes whose instances serialize as JSON arrays
_COLLECTION_BASES: tuple[type, ...] = (list, tuple, set, frozenset, collections.deque)

# Generic origins treated as collections when parameterized (typing.List[int] -> list, ...)
_COLLECTION_ORIGINS: frozenset[Any] = frozenset(
    {
        list,
        tuple,
        set,
        frozenset,
        collections.deque,
        collections.abc.Collection,
        collections.abc.Iterable,
        collections.abc.Sequence,
        collections.abc.MutableSequence,
        collections.abc.Set,
        collections.abc.MutableSet,
    }
)


def type_name(tp: Any) -> str:
    """Stable registry name for an annotation."""
    if typing.get_origin(tp) is None and isinstance(tp, type):
        return f"{tp.__module__}.{tp.__qualname__}"
    if isinstance(tp, typing.NewType):
        return f"{tp.__module__}.{tp.__name__}"
    return repr(tp)


def _is_pseudo_field(hint: Any) -> bool:
    """ClassVar and InitVar annotations are not serialized."""
    if hint is ClassVar or typing.get_origin(hint) is ClassVar:
        return True
    return hint is dataclasses.InitVar or isinstance(hint, dataclasses.InitVar)


def enumerate_fields(cls: type) -> list[tuple[str, Any]]:
    """
    Return (name, annotation) pairs for cls, then for each ancestor, stopping before object.

    Standard-library classes are leaves and yield no fields. A name redeclared in a
    subclass is kept once, at its most derived position.

    Raises:
        ValueError: If an annotation cannot be resolved
    """
    if is_standard_type(cls):
        return []

    fields: list[tuple[str, Any]] = []
    seen: set[str] = set()
    for klass in cls.__mro__:
        if klass is object:
            break
        own = inspect.get_annotations(klass)
        if not own:
            continue
        try:
            hints = typing.get_type_hints(
                klass, localns={cls.__name__: cls, klass.__name__: klass}
            )
        except Exception as e:
            raise ValueError(
                f"Cannot resolve annotations of {type_name(klass)}: {e}"
            ) from e
        for name in own:
            if name in seen:
                continue
            hint = hints.get(name, own[name])
            if _is_pseudo_field(hint):
                continue
            seen.add(name)
            fields.append((name, hint))
    return fields


def _unwrap_optional(tp: Any) -> Any:
    """X | None -> X. Other unions are returned unchanged."""
    origin = typing.get_origin(tp)
    if origin is typing.Union or origin is types.UnionType:
        args = [a for a in typing.get_args(tp) if a is not type(None)]
        if len(args) == 1:
            return args[0]
    return tp


def _element_annotation(tp: Any) -> Any | None:
    """
    First generic argument of a parameterized collection, one level deep only.

    A parameterized element (list[list[int]]) is reduced to its origin, which makes
    it a raw collection or an unrecognized leaf.
    """
    args = [a for a in typing.get_args(tp) if a is not Ellipsis]
    if not args:
        return None
    element = _unwrap_optional(args[0])
    origin = typing.get_origin(element)
    if origin is not None:
        return origin
    return element


class SchemaBuilder:
    """
    Describe Python annotations as TypeDescriptors in a SchemaRegistry.

    Each type is described once; composites that are still being described are
    referenced by name, which is what allows self-referential classes.
    """

    def __init__(self, registry: SchemaRegistry | None = None) -> None:
        self.registry = registry if registry is not None else SchemaRegistry()
        self._pending: set[str] = set()
        # Registry name -> class it was built from
        self._classes: dict[str, type] = {}

    def describe(self, tp: Any) -> TypeDescriptor:
        """Describe tp (and everything reachable from it); return its descriptor."""
        return self.registry.get(self.resolve(tp))

    def resolve(self, tp: Any) -> str:
        """Register tp if needed and return its registry name."""
        tp = _unwrap_optional(tp)
        name = type_name(tp)
        if typing.get_origin(tp) is None and isinstance(tp, type):
            known = self._classes.setdefault(name, tp)
            if known is not tp:
                raise ValueError(f"Distinct classes share the registry name {name}")
        if name in self.registry or name in self._pending:
            return name

        category = leaf_category(tp)
        if category is not None:
            self.registry.register(TypeDescriptor(name=name, kind="leaf", category=category))
            return name

        if isinstance(tp, typing.NewType):
            # User-defined NewTypes are bounded like the type they wrap
            return self.resolve(tp.__supertype__)

        origin = typing.get_origin(tp)
        if origin is not None:
            if origin in _COLLECTION_ORIGINS:
                return self._register_collection(name, _element_annotation(tp))
            # dict[...], Literal[...], Callable[...], multi-member unions
            self.registry.register(TypeDescriptor(name=name, kind="leaf"))
            return name

        if not isinstance(tp, type):
            # Any, TypeVar, unresolved forward references
            self.registry.register(TypeDescriptor(name=name, kind="leaf"))
            return name

        if issubclass(tp, Enum):
            constants = tuple(member.name for member in tp)
            self.registry.register(TypeDescriptor(name=name, kind="enum", constants=constants))
            return name

        if issubclass(tp, _COLLECTION_BASES):
            return self._register_collection(name, None)

        category = leaf_base_category(tp)
        if category is not None:
            self.registry.register(TypeDescriptor(name=name, kind="leaf", category=category))
            return name

        if is_standard_type(tp):
            self.registry.register(TypeDescriptor(name=name, kind="leaf"))
            return name

        return self._register_composite(name, tp)

    def _register_collection(self, name: str, element: Any | None) -> str:
        element_name = self.resolve(element) if element is not None else None
        self.registry.register(
            TypeDescriptor(name=name, kind="collection", element=element_name)
        )
        return name

    def _register_composite(self, name: str, cls: type) -> str:
        self._pending.add(name)
        try:
            fields: list[FieldDescriptor] = []
            for field_name, hint in enumerate_fields(cls):
                declared = self.resolve(hint)
                element = None
                if declared in self.registry:
                    element = self.registry.get(declared).element
                fields.append(
                    FieldDescriptor(
                        name=field_name, declared_type=declared, element_type=element
                    )
                )
        finally:
            self._pending.discard(name)
        self.registry.register(
            TypeDescriptor(name=name, kind="composite", fields=tuple(fields))
        )
        return name


def describe_type(tp: Any, registry: SchemaRegistry | None = None) -> TypeDescriptor:
    """Convenience wrapper: describe tp into registry (a fresh one by default)."""
    return SchemaBuilder(registry).describe(tp)
