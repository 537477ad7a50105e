"""Fee yield estimation.

Timestamps are seconds since the epoch. ``now`` is always passed in by the
caller so that results do not depend on the wall clock.
"""
from __future__ import annotations

import math

SECONDS_PER_DAY = 86_400
DAYS_PER_YEAR = 365
MAX_APY = 1000.0


def _days_elapsed(start_timestamp: float, now: float) -> float:
    return (now - start_timestamp) / SECONDS_PER_DAY


def calculate_apy(
    fees_earned: float,
    total_value: float,
    start_timestamp: float,
    now: float,
    max_apy: float = MAX_APY,
) -> float:
    """Annualize realized fees into a percentage yield.

        daily_return = fees_earned / total_value / days_elapsed
        apy = daily_return * 365 * 100

    Returns 0 for a zero-value or zero-age position, and when the ratio is
    undefined (infinite fees over an infinite value). The result is clamped
    to ``[0, max_apy]``.
    """
    if total_value == 0:
        return 0.0

    days = _days_elapsed(start_timestamp, now)
    if days == 0:
        return 0.0

    daily_return = fees_earned / total_value / days
    apy = daily_return * DAYS_PER_YEAR * 100
    if math.isnan(apy):
        return 0.0
    return max(0.0, min(max_apy, apy))


def estimate_daily_fees(fees_earned: float, start_timestamp: float, now: float) -> float:
    """Average fees earned per day since ``start_timestamp``."""
    days = _days_elapsed(start_timestamp, now)
    if days == 0:
        return 0.0
    return fees_earned / days
