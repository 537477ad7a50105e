"""DLMM liquidity position metrics.

Turns decoded bin/position/pool records into prices, ranges, yields, risk
scores and portfolio totals.
"""
from .errors import InvalidInput
from .models import (
    BinData,
    PoolInfo,
    PortfolioSummary,
    Position,
    PositionReport,
    PositionStatus,
    TokenInfo,
    UnclaimedFees,
)

__all__ = [
    "BinData",
    "InvalidInput",
    "PoolInfo",
    "PortfolioSummary",
    "Position",
    "PositionReport",
    "PositionStatus",
    "TokenInfo",
    "UnclaimedFees",
]
