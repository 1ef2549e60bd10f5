"""JSON size estimation: bound tables, collection/enum calculators, and the recursive estimator."""

from jsonbound.estimation.collection_bounds import RAW_COLLECTION_BOUND, collection_bound
from jsonbound.estimation.config_loader import load_estimator_config
from jsonbound.estimation.data_model import (
    EstimatorConfig,
    SizeEstimate,
    TypeEstimate,
)
from jsonbound.estimation.enum_bounds import enum_bound
from jsonbound.estimation.estimator import (
    CYCLE_BOUND,
    EstimationContext,
    JsonSizeEstimator,
)
from jsonbound.estimation.serializer import (
    SCHEMA_VERSION,
    size_estimate_to_dict,
    type_estimate_to_dict,
)
from jsonbound.estimation.type_table import UNRECOGNIZED_LEAF_BOUND, build_type_bound_table
from jsonbound.estimation.validation import serialized_length, to_json, within_bounds

__all__ = [
    "CYCLE_BOUND",
    "EstimationContext",
    "EstimatorConfig",
    "JsonSizeEstimator",
    "RAW_COLLECTION_BOUND",
    "SCHEMA_VERSION",
    "SizeEstimate",
    "TypeEstimate",
    "UNRECOGNIZED_LEAF_BOUND",
    "build_type_bound_table",
    "collection_bound",
    "enum_bound",
    "load_estimator_config",
    "serialized_length",
    "size_estimate_to_dict",
    "to_json",
    "type_estimate_to_dict",
    "within_bounds",
]
