"""
Estimation data model: size bounds, estimator configuration, and estimate reports.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from jsonbound.schema.descriptors import LEAF_CATEGORIES

DEFAULT_MAX_STRING_LENGTH = 255
DEFAULT_MAX_BINARY_SIZE = 1000


@dataclass(frozen=True)
class SizeEstimate:
    """
    Bound on the serialized byte length of one JSON value.

    Invariant: 0 <= min_size <= max_size
    """

    min_size: int  # Smallest possible serialized length
    max_size: int  # Largest possible serialized length under the configured limits

    def __post_init__(self) -> None:
        """Validate invariant: 0 <= min <= max."""
        if not (0 <= self.min_size <= self.max_size):
            raise ValueError(
                f"SizeEstimate invariant violated: "
                f"0 <= min_size ({self.min_size}) <= max_size ({self.max_size})"
            )

    def __str__(self) -> str:
        return f"Min: {self.min_size} bytes, Max: {self.max_size} bytes"


@dataclass(frozen=True)
class EstimatorConfig:
    """Tunable limits seeding the Type Bound Table and the collection calculator."""

    max_collection_size: int  # Elements assumed present in any collection for max bounds
    max_string_length: int = DEFAULT_MAX_STRING_LENGTH
    max_binary_size: int = DEFAULT_MAX_BINARY_SIZE
    leaf_overrides: dict[str, tuple[int, int]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        for attr in ("max_collection_size", "max_string_length", "max_binary_size"):
            value = getattr(self, attr)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(
                    f"EstimatorConfig '{attr}' must be an integer, got {type(value).__name__}"
                )
            if value < 0:
                raise ValueError(f"EstimatorConfig '{attr}' must be >= 0, got {value}")
        for category, bounds in self.leaf_overrides.items():
            if category not in LEAF_CATEGORIES:
                raise ValueError(
                    f"EstimatorConfig override for unknown leaf category {category!r}"
                )
            if (
                not isinstance(bounds, (tuple, list))
                or len(bounds) != 2
                or not all(isinstance(b, int) for b in bounds)
            ):
                raise ValueError(
                    f"EstimatorConfig override for {category!r} must be a (min, max) pair"
                )
            if not (0 <= bounds[0] <= bounds[1]):
                raise ValueError(
                    f"EstimatorConfig override for {category!r} must satisfy 0 <= min <= max"
                )


@dataclass(frozen=True)
class TypeEstimate:
    """Estimate for one root type plus the diagnostics raised while computing it."""

    type_name: str
    estimate: SizeEstimate
    max_collection_size: int
    warnings: tuple[str, ...]  # Sorted for determinism
