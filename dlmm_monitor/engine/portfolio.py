"""Portfolio aggregation."""
from __future__ import annotations

from collections.abc import Sequence

from ..models import PortfolioSummary, Position


def calculate_portfolio_summary(positions: Sequence[Position]) -> PortfolioSummary:
    """Reduce positions into totals.

    ``average_apy`` is a plain mean over positions, not weighted by value.
    """
    if not positions:
        return PortfolioSummary()

    total_value = sum(p.total_value for p in positions)
    total_fees = sum(p.fees_earned for p in positions)
    active = sum(1 for p in positions if p.is_in_range)
    average_apy = sum(p.estimated_apy for p in positions) / len(positions)

    return PortfolioSummary(
        total_value=total_value,
        total_fees_earned=total_fees,
        active_positions=active,
        average_apy=average_apy,
    )
