"""
Enum bounds: enums serialize as the quoted name of one constant.
"""

from __future__ import annotations

from collections.abc import Sequence

from jsonbound.estimation.data_model import SizeEstimate

QUOTES = 2


def enum_bound(constants: Sequence[str]) -> SizeEstimate:
    """Bound from the shortest and longest constant name, plus quotes."""
    if not constants:
        return SizeEstimate(QUOTES, QUOTES)
    lengths = [len(name) for name in constants]
    return SizeEstimate(min(lengths) + QUOTES, max(lengths) + QUOTES)
