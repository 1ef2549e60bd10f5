"""
Compare estimates with real encoder output for sample values.

The estimator never serializes data; these helpers are for checking bounds
against concrete values in tests and demos.
"""

from __future__ import annotations

import base64
import collections
import dataclasses
import datetime
import json
import uuid
from enum import Enum
from typing import Any

from jsonbound.estimation.data_model import SizeEstimate


def _encode_default(value: Any) -> Any:
    """
    json.dumps fallback matching the formats the Type Bound Table assumes.

    Plain Enum members encode as their name; str/int mixin enums are encoded by
    json itself as their value.
    """
    if isinstance(value, Enum):
        return value.name
    if isinstance(value, datetime.datetime):
        if value.tzinfo is not None:
            utc = value.astimezone(datetime.timezone.utc).replace(tzinfo=None)
            return utc.isoformat(timespec="milliseconds") + "Z"
        return value.isoformat(timespec="milliseconds")
    if isinstance(value, datetime.date):
        return value.isoformat()
    if isinstance(value, uuid.UUID):
        return str(value)
    if isinstance(value, (bytes, bytearray, memoryview)):
        return base64.b64encode(bytes(value)).decode("ascii")
    if isinstance(value, (set, frozenset, collections.deque)):
        return list(value)
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {f.name: getattr(value, f.name) for f in dataclasses.fields(value)}
    if hasattr(value, "__dict__"):
        return vars(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def to_json(value: Any) -> str:
    """Compact JSON text for value."""
    return json.dumps(value, default=_encode_default, separators=(",", ":"), ensure_ascii=False)


def serialized_length(value: Any) -> int:
    """Byte length of the compact UTF-8 JSON encoding of value."""
    return len(to_json(value).encode("utf-8"))


def within_bounds(estimate: SizeEstimate, value: Any) -> bool:
    """True when the encoded length of value lies inside estimate."""
    return estimate.min_size <= serialized_length(value) <= estimate.max_size
