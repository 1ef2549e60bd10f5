"""
Type Bound Table: fixed (min, max) byte bounds for recognized leaf categories.
"""

from __future__ import annotations

from jsonbound.estimation.data_model import EstimatorConfig, SizeEstimate

# Fallback for standard leaf types that have no table row
UNRECOGNIZED_LEAF_BOUND = SizeEstimate(2, 100)

_FIXED_BOUNDS: dict[str, tuple[int, int]] = {
    "int8": (1, 1),  # Single digit
    "int32": (1, 11),  # -2147483648
    "int64": (1, 20),  # -9223372036854775808
    "float64": (3, 24),  # 0.0 .. scientific notation
    "float32": (3, 15),
    "boolean": (4, 5),  # true / false
    "date": (12, 12),  # "YYYY-MM-DD"
    "datetime": (25, 25),  # "YYYY-MM-DDThh:mm:ss.sss"
    "zoned_datetime": (26, 26),  # "YYYY-MM-DDThh:mm:ss.sssZ"
    "instant": (26, 26),
    "legacy_datetime": (10, 34),  # "YYYYMMDD" .. "YYYY-MM-DDThh:mm:ss.ssssss+hh:mm"
    "uuid": (36, 36),
}


def build_type_bound_table(config: EstimatorConfig) -> dict[str, SizeEstimate]:
    """
    Build the category -> SizeEstimate table for a configuration.

    String and binary rows follow the configured maxima; leaf_overrides replace rows.
    """
    table = {category: SizeEstimate(lo, hi) for category, (lo, hi) in _FIXED_BOUNDS.items()}
    table["string"] = SizeEstimate(2, config.max_string_length + 2)  # Quotes
    table["binary"] = SizeEstimate(0, config.max_binary_size)
    for category, (lo, hi) in config.leaf_overrides.items():
        table[category] = SizeEstimate(lo, hi)
    return table
