"""Price range and in-range evaluation."""
from __future__ import annotations

from collections.abc import Sequence

from ..models import PriceRange


def is_position_in_range(
    min_price: float, max_price: float, current_price: float
) -> bool:
    """Inclusive on both ends."""
    return min_price <= current_price <= max_price


def evaluate_range(bin_prices: Sequence[float], current_price: float) -> PriceRange:
    """Derive the min/max price of a bin set and whether it holds the current price.

    With no bin prices the range collapses to ``current_price``, so a position
    with unknown bins is reported as in range.
    """
    if bin_prices:
        min_price = min(bin_prices)
        max_price = max(bin_prices)
    else:
        min_price = max_price = current_price

    return PriceRange(
        min_price=min_price,
        max_price=max_price,
        is_in_range=is_position_in_range(min_price, max_price, current_price),
    )
