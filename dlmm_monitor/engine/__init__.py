"""Pure metric functions for DLMM positions — no I/O."""
from .portfolio import calculate_portfolio_summary
from .pricing import fee_tier_from_bin_step, get_price_from_bin_id, price_impact
from .ranges import evaluate_range, is_position_in_range
from .risk import (
    calculate_impermanent_loss,
    calculate_liquidity_concentration,
    calculate_position_health,
)
from .status import get_position_status
from .yields import calculate_apy, estimate_daily_fees

__all__ = [
    "calculate_apy",
    "calculate_impermanent_loss",
    "calculate_liquidity_concentration",
    "calculate_portfolio_summary",
    "calculate_position_health",
    "estimate_daily_fees",
    "evaluate_range",
    "fee_tier_from_bin_step",
    "get_position_status",
    "get_price_from_bin_id",
    "is_position_in_range",
    "price_impact",
]
