"""Tests for the Type Bound Table and the collection and enum bound calculators."""

import pytest

from jsonbound.estimation import (
    RAW_COLLECTION_BOUND,
    UNRECOGNIZED_LEAF_BOUND,
    EstimatorConfig,
    SizeEstimate,
    build_type_bound_table,
    collection_bound,
    enum_bound,
)
from jsonbound.schema import LEAF_CATEGORIES


@pytest.mark.parametrize(
    "category, expected",
    [
        ("int8", (1, 1)),
        ("int32", (1, 11)),
        ("int64", (1, 20)),
        ("float64", (3, 24)),
        ("float32", (3, 15)),
        ("boolean", (4, 5)),
        ("string", (2, 257)),
        ("date", (12, 12)),
        ("datetime", (25, 25)),
        ("zoned_datetime", (26, 26)),
        ("instant", (26, 26)),
        ("legacy_datetime", (10, 34)),
        ("uuid", (36, 36)),
        ("binary", (0, 1000)),
    ],
)
def test_default_table(category, expected):
    table = build_type_bound_table(EstimatorConfig(max_collection_size=10))
    assert table[category] == SizeEstimate(*expected)


def test_table_covers_every_category():
    table = build_type_bound_table(EstimatorConfig(max_collection_size=10))
    assert set(table) == set(LEAF_CATEGORIES)


def test_table_follows_configured_maxima():
    table = build_type_bound_table(
        EstimatorConfig(max_collection_size=1, max_string_length=40, max_binary_size=4096)
    )
    assert table["string"] == SizeEstimate(2, 42)
    assert table["binary"] == SizeEstimate(0, 4096)


def test_table_overrides():
    table = build_type_bound_table(
        EstimatorConfig(max_collection_size=1, leaf_overrides={"uuid": (38, 38)})
    )
    assert table["uuid"] == SizeEstimate(38, 38)
    assert table["int32"] == SizeEstimate(1, 11)


def test_fallback_bounds():
    assert UNRECOGNIZED_LEAF_BOUND == SizeEstimate(2, 100)
    assert RAW_COLLECTION_BOUND == SizeEstimate(2, 1000)


@pytest.mark.parametrize(
    "element, n, expected_max",
    [
        (SizeEstimate(1, 11), 10, 2 + 10 * 12 - 1),
        (SizeEstimate(2, 257), 10, 2 + 10 * 258 - 1),
        (SizeEstimate(1, 1), 1, 3),
        (SizeEstimate(4, 5), 100, 2 + 100 * 6 - 1),
    ],
)
def test_collection_bound(element, n, expected_max):
    """min is always [], max holds n elements without a trailing separator."""
    bound = collection_bound(element, n)
    assert bound.min_size == 2
    assert bound.max_size == expected_max


def test_collection_bound_ignores_element_minimum():
    assert collection_bound(SizeEstimate(36, 36), 5).min_size == 2


def test_collection_bound_zero_elements():
    assert collection_bound(SizeEstimate(1, 11), 0) == SizeEstimate(2, 2)


def test_enum_bound():
    assert enum_bound(["SMALL", "MEDIUM", "VERY_VERY_LONG_ENUM_VALUE"]) == SizeEstimate(7, 27)


def test_enum_bound_single_constant():
    assert enum_bound(("ON",)) == SizeEstimate(4, 4)


def test_enum_bound_no_constants():
    assert enum_bound(()) == SizeEstimate(2, 2)
