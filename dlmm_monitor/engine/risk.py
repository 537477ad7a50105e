"""Position health and risk scores."""
from __future__ import annotations

import math
from collections.abc import Sequence

from ..models import BinData, Position

BASE_HEALTH = 50
IN_RANGE_BONUS = 30
HIGH_APY = 20.0
HIGH_APY_BONUS = 10
MID_APY = 10.0
MID_APY_BONUS = 5
WIDE_BIN_COUNT = 5
WIDE_BINS_BONUS = 10


def calculate_position_health(position: Position) -> float:
    """Heuristic 0-100 score; a coarse indicator, not a probability."""
    score = BASE_HEALTH

    if position.is_in_range:
        score += IN_RANGE_BONUS

    if position.estimated_apy > HIGH_APY:
        score += HIGH_APY_BONUS
    elif position.estimated_apy > MID_APY:
        score += MID_APY_BONUS

    if len(position.active_bins) > WIDE_BIN_COUNT:
        score += WIDE_BINS_BONUS

    return float(min(100, max(0, score)))


def calculate_impermanent_loss(initial_price: float, current_price: float) -> float:
    """Two-asset constant-product impermanent loss, as a percentage.

        r = current_price / initial_price
        IL = (2 * sqrt(r) / (1 + r) - 1) * 100

    Never positive; exactly 0 when the price has not moved.
    """
    if initial_price == 0:
        return 0.0

    ratio = current_price / initial_price
    return (2 * math.sqrt(ratio) / (1 + ratio) - 1) * 100


def calculate_liquidity_concentration(bins: Sequence[BinData]) -> float:
    """Herfindahl–Hirschman index of liquidity across bins, scaled to 0-100.

    100 means every unit of liquidity sits in one bin; N equal bins give 100/N.
    """
    if not bins:
        return 0.0

    total = sum(b.total_liquidity for b in bins)
    if total == 0:
        return 0.0

    return sum((b.total_liquidity / total) ** 2 for b in bins) * 100
