"""
Estimator config loader: supports YAML files, dicts, ints, and EstimatorConfig instances.
"""

from __future__ import annotations

from pathlib import Path

import yaml

from jsonbound.estimation.data_model import (
    DEFAULT_MAX_BINARY_SIZE,
    DEFAULT_MAX_STRING_LENGTH,
    EstimatorConfig,
)


def load_estimator_config(
    source: EstimatorConfig | str | Path | dict | int,
) -> EstimatorConfig:
    """
    Load an EstimatorConfig from various sources.

    Args:
        source: Can be:
            - EstimatorConfig instance: returned as-is
            - int: max collection size, other limits at their defaults
            - str or Path: treated as YAML file path
            - dict: constructed directly from dict keys

    Returns:
        EstimatorConfig instance

    Raises:
        FileNotFoundError: If source is a file path that doesn't exist
        ValueError: If the YAML is invalid or required fields are missing or mistyped
    """
    if isinstance(source, EstimatorConfig):
        return source

    if isinstance(source, int) and not isinstance(source, bool):
        return EstimatorConfig(max_collection_size=source)

    if isinstance(source, (str, Path)):
        return _load_from_yaml_file(source)

    if isinstance(source, dict):
        return _load_from_dict(source)

    raise TypeError(
        f"Unsupported source type for load_estimator_config: {type(source).__name__}"
    )


def _load_from_yaml_file(path: str | Path) -> EstimatorConfig:
    """Load EstimatorConfig from a YAML file."""
    file_path = Path(path)
    if not file_path.exists():
        raise FileNotFoundError(f"Config file not found: {file_path}")

    try:
        data = yaml.safe_load(file_path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ValueError(f"Failed to parse YAML file {file_path}: {e}") from e

    if data is None:
        raise ValueError(f"YAML file {file_path} is empty")

    if isinstance(data, dict):
        # Keys may sit at the root or under an "estimator" section
        if "estimator" in data:
            section = data["estimator"]
            if not isinstance(section, dict):
                raise ValueError(f"YAML file {file_path}: 'estimator' must be a dict")
            return _load_from_dict(section)
        return _load_from_dict(data)

    raise ValueError(f"YAML file {file_path}: expected dict, got {type(data).__name__}")


def _load_from_dict(data: dict) -> EstimatorConfig:
    """
    Construct EstimatorConfig from a dict.

    Raises:
        ValueError: If max_collection_size is missing or a field has an invalid type
    """
    max_collection_size = data.get("max_collection_size")
    if max_collection_size is None:
        raise ValueError("Config 'max_collection_size' is required")

    max_string_length = data.get("max_string_length", DEFAULT_MAX_STRING_LENGTH)
    max_binary_size = data.get("max_binary_size", DEFAULT_MAX_BINARY_SIZE)

    overrides = data.get("leaf_overrides") or {}
    if not isinstance(overrides, dict):
        raise ValueError(
            f"Config 'leaf_overrides' must be a dict, got {type(overrides).__name__}"
        )
    leaf_overrides: dict[str, tuple[int, int]] = {}
    for category, bounds in overrides.items():
        if isinstance(bounds, dict):
            bounds = (bounds.get("min"), bounds.get("max"))
        if not isinstance(bounds, (list, tuple)):
            raise ValueError(
                f"Config override for {category!r} must be [min, max] or {{min, max}}"
            )
        leaf_overrides[str(category)] = tuple(bounds)

    return EstimatorConfig(
        max_collection_size=max_collection_size,
        max_string_length=max_string_length,
        max_binary_size=max_binary_size,
        leaf_overrides=leaf_overrides,
    )
