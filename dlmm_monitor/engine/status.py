"""Discrete position status for display."""
from __future__ import annotations

from ..models import Position, PositionStatus

LOW_APY_THRESHOLD = 5.0

STATUS_ACTIVE = "active"
STATUS_WARNING = "warning"
STATUS_INACTIVE = "inactive"


def get_position_status(
    position: Position, low_apy_threshold: float = LOW_APY_THRESHOLD
) -> PositionStatus:
    """Classify a position; the first matching rule wins."""
    if not position.is_in_range:
        return PositionStatus(STATUS_INACTIVE, "out of range, not earning fees")

    if position.estimated_apy < low_apy_threshold:
        return PositionStatus(STATUS_WARNING, "low yield, consider rebalancing")

    return PositionStatus(STATUS_ACTIVE, "earning fees")
