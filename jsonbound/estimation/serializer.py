"""
Estimate serializer: deterministic JSON-serializable dicts for estimates and reports.
"""

from __future__ import annotations

from jsonbound.estimation.data_model import SizeEstimate, TypeEstimate

SCHEMA_VERSION = "1.0"


def size_estimate_to_dict(estimate: SizeEstimate) -> dict:
    """Convert SizeEstimate to JSON-serializable dict."""
    return {
        "min_size": estimate.min_size,
        "max_size": estimate.max_size,
    }


def type_estimate_to_dict(report: TypeEstimate) -> dict:
    """Return a JSON-serializable dict with deterministic ordering."""
    return {
        "schema_version": SCHEMA_VERSION,
        "type": report.type_name,
        "max_collection_size": report.max_collection_size,
        "size_estimate": size_estimate_to_dict(report.estimate),
        "warnings": sorted(report.warnings),
    }
