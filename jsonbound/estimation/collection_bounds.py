"""
Collection/array bounds: derive a sequence bound from its element bound.
"""

from __future__ import annotations

from jsonbound.estimation.data_model import SizeEstimate

BRACKETS = 2  # [ ]
SEPARATOR = 1  # ,

# Collections whose element type is unknown
RAW_COLLECTION_BOUND = SizeEstimate(2, 1000)


def collection_bound(element: SizeEstimate, max_collection_size: int) -> SizeEstimate:
    """
    Bound a JSON array of up to max_collection_size elements of the given bound.

    The minimum is always the empty array; the maximum holds max_collection_size
    elements, each followed by a separator except the last.
    """
    if max_collection_size == 0:
        return SizeEstimate(BRACKETS, BRACKETS)
    max_size = BRACKETS + max_collection_size * (element.max_size + SEPARATOR) - SEPARATOR
    return SizeEstimate(BRACKETS, max_size)
