"""Bin index → price conversion."""
from __future__ import annotations

import sys

BASIS_POINT_MAX = 10_000


def get_price_from_bin_id(bin_id: int, bin_step: int) -> float:
    """Price of a bin on the geometric step law.

        price = (1 + bin_step / 10_000) ^ bin_id

    Negative bin ids give prices below 1. A bin step of 0 gives 1 for every
    bin. Results too large for a float saturate to ``inf``; results too small
    clamp to the smallest positive float, so the price is never 0.
    """
    base = 1 + bin_step / BASIS_POINT_MAX
    try:
        price = base**bin_id
    except OverflowError:
        return float("inf")
    return price if price > 0 else sys.float_info.min


def fee_tier_from_bin_step(bin_step: int) -> float:
    """Convert a bin step in basis points to a percentage fee tier."""
    return bin_step / 100


def price_impact(current_price: float, target_price: float) -> float:
    """Percentage move from ``current_price`` to ``target_price``."""
    if current_price == 0:
        return 0.0
    return (target_price - current_price) / current_price * 100
