"""
JsonSizeEstimator: recursive, cycle-safe JSON size bounds for described types.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import structlog

from jsonbound.estimation.collection_bounds import (
    RAW_COLLECTION_BOUND,
    SEPARATOR,
    collection_bound,
)
from jsonbound.estimation.data_model import EstimatorConfig, SizeEstimate, TypeEstimate
from jsonbound.estimation.enum_bounds import enum_bound
from jsonbound.estimation.type_table import UNRECOGNIZED_LEAF_BOUND, build_type_bound_table
from jsonbound.schema.descriptors import FieldDescriptor, SchemaRegistry, TypeDescriptor
from jsonbound.schema.introspection import SchemaBuilder

logger = structlog.get_logger()

OBJECT_BRACES = 2  # { }
FIELD_NAME_OVERHEAD = 3  # Two quotes and a colon

# Bound of a composite re-entered while it is still being expanded: an empty object
CYCLE_BOUND = SizeEstimate(2, 2)


@dataclass
class EstimationContext:
    """
    Traversal state for one caller.

    cache holds completed composite estimates (write-once); in_progress is the
    recursion guard of composites on the active call chain.
    """

    cache: dict[str, SizeEstimate] = field(default_factory=dict)
    in_progress: set[str] = field(default_factory=set)
    warnings: list[str] = field(default_factory=list)


class JsonSizeEstimator:
    """
    Bound the JSON size of a type without serializing any value.

    Not thread-safe when the default context is shared: concurrent callers should
    each pass their own EstimationContext (or hold a lock around estimate).
    """

    def __init__(
        self,
        config: EstimatorConfig | int,
        registry: SchemaRegistry | None = None,
    ) -> None:
        if isinstance(config, int) and not isinstance(config, bool):
            config = EstimatorConfig(max_collection_size=config)
        self.config = config
        self.registry = registry if registry is not None else SchemaRegistry()
        self.context = EstimationContext()
        self._builder = SchemaBuilder(self.registry)
        self._table = build_type_bound_table(config)

    def describe(self, tp: Any) -> TypeDescriptor:
        """
        Resolve tp to a registered descriptor.

        tp may be a TypeDescriptor, a registry name, or a Python annotation.
        """
        if isinstance(tp, TypeDescriptor):
            return self.registry.register(tp)
        if isinstance(tp, str):
            return self.registry.get(tp)
        return self._builder.describe(tp)

    def estimate(self, tp: Any, context: EstimationContext | None = None) -> SizeEstimate:
        """
        Return the (min, max) serialized size of a value of type tp.

        Composite roots are expanded field by field; any other root is bounded the
        way a field of that type would be.
        """
        ctx = context if context is not None else self.context
        descriptor = self.describe(tp)
        if descriptor.is_composite():
            return self._estimate_composite(descriptor, ctx)
        return self._estimate_value(descriptor, ctx)

    def estimate_report(self, tp: Any) -> TypeEstimate:
        """Estimate tp in a fresh context and report it with its diagnostics."""
        ctx = EstimationContext()
        descriptor = self.describe(tp)
        estimate = self.estimate(descriptor, ctx)
        return TypeEstimate(
            type_name=descriptor.name,
            estimate=estimate,
            max_collection_size=self.config.max_collection_size,
            warnings=tuple(sorted(set(ctx.warnings))),
        )

    def _estimate_composite(
        self, descriptor: TypeDescriptor, ctx: EstimationContext
    ) -> SizeEstimate:
        cached = ctx.cache.get(descriptor.name)
        if cached is not None:
            return cached

        if descriptor.name in ctx.in_progress:
            return CYCLE_BOUND

        ctx.in_progress.add(descriptor.name)
        try:
            min_size = OBJECT_BRACES
            max_size = OBJECT_BRACES
            for fd in descriptor.fields:
                # Every field pays for a separator, the last one included
                overhead = SEPARATOR + len(fd.name) + FIELD_NAME_OVERHEAD
                value = self._estimate_field(fd, ctx)
                min_size += overhead + value.min_size
                max_size += overhead + value.max_size
        finally:
            ctx.in_progress.discard(descriptor.name)

        estimate = SizeEstimate(min_size, max_size)
        ctx.cache[descriptor.name] = estimate
        return estimate

    def _estimate_field(self, fd: FieldDescriptor, ctx: EstimationContext) -> SizeEstimate:
        declared = self.registry.get(fd.declared_type)
        if declared.is_collection():
            return self._estimate_collection(declared.name, fd.element_type, ctx)
        return self._estimate_value(declared, ctx)

    def _estimate_value(self, descriptor: TypeDescriptor, ctx: EstimationContext) -> SizeEstimate:
        if descriptor.kind == "collection":
            return self._estimate_collection(descriptor.name, descriptor.element, ctx)

        if descriptor.kind == "leaf":
            if descriptor.category is not None:
                return self._table[descriptor.category]
            self._warn(
                ctx,
                f"Unknown type {descriptor.name}: assumed {UNRECOGNIZED_LEAF_BOUND.min_size}"
                f"..{UNRECOGNIZED_LEAF_BOUND.max_size} bytes",
                "Unrecognized leaf type",
                type_name=descriptor.name,
            )
            return UNRECOGNIZED_LEAF_BOUND

        if descriptor.kind == "enum":
            return enum_bound(descriptor.constants)

        return self._estimate_composite(descriptor, ctx)

    def _estimate_collection(
        self, name: str, element: str | None, ctx: EstimationContext
    ) -> SizeEstimate:
        if element is None:
            self._warn(
                ctx,
                f"Untyped collection {name}: assumed {RAW_COLLECTION_BOUND.min_size}"
                f"..{RAW_COLLECTION_BOUND.max_size} bytes",
                "Untyped collection",
                type_name=name,
            )
            return RAW_COLLECTION_BOUND
        element_bound = self._estimate_value(self.registry.get(element), ctx)
        return collection_bound(element_bound, self.config.max_collection_size)

    @staticmethod
    def _warn(ctx: EstimationContext, message: str, event: str, **context: Any) -> None:
        logger.warning(event, **context)
        ctx.warnings.append(message)
