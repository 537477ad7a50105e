"""Data models — all frozen (immutable)."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


# ---------------------------------------------------------------------------
# Engine output records
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TokenInfo:
    """Token metadata, identified by its mint."""

    symbol: str
    mint: str
    decimals: int
    logo_uri: str | None = None


@dataclass(frozen=True)
class BinData:
    """Liquidity held in a single price bin."""

    bin_id: int
    price: float
    liquidity_x: float
    liquidity_y: float
    total_liquidity: float


@dataclass(frozen=True)
class UnclaimedFees:
    token_x: float = 0.0
    token_y: float = 0.0
    total_usd: float = 0.0


@dataclass(frozen=True)
class Position:
    """A liquidity position, rebuilt from scratch on every refresh."""

    address: str
    pool_address: str
    token_x: TokenInfo
    token_y: TokenInfo
    liquidity_x: float
    liquidity_y: float
    total_value: float
    fees_earned: float
    unclaimed_fees: UnclaimedFees
    active_bins: tuple[BinData, ...]
    min_price: float
    max_price: float
    current_price: float
    is_in_range: bool
    created_at: datetime
    estimated_apy: float


@dataclass(frozen=True)
class PoolInfo:
    address: str
    token_x: TokenInfo
    token_y: TokenInfo
    total_liquidity: float
    volume_24h: float
    current_price: float
    fee_tier: float
    active_bins: int


@dataclass(frozen=True)
class PortfolioSummary:
    total_value: float = 0.0
    total_fees_earned: float = 0.0
    active_positions: int = 0
    average_apy: float = 0.0


@dataclass(frozen=True)
class PositionStatus:
    status: str
    message: str


@dataclass(frozen=True)
class PriceRange:
    min_price: float
    max_price: float
    is_in_range: bool


@dataclass(frozen=True)
class PositionReport:
    """Derived risk metrics for a single position."""

    address: str
    status: str
    message: str
    health_score: float
    impermanent_loss: float
    liquidity_concentration: float


# ---------------------------------------------------------------------------
# Raw records handed over by the fetch layer (native units)
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class RawBin:
    bin_id: int
    liquidity_x: int
    liquidity_y: int


@dataclass(frozen=True)
class RawPool:
    """Decoded pool (LB pair) account."""

    address: str
    token_x_mint: str
    token_y_mint: str
    active_id: int
    bin_step: int
    reserve_x: int
    reserve_y: int
    volume_24h: float = 0.0
    bins: tuple[RawBin, ...] = ()


@dataclass(frozen=True)
class RawPosition:
    """Decoded position account."""

    address: str
    owner: str
    pool_address: str
    total_x_amount: int
    total_y_amount: int
    fee_x: int
    fee_y: int
    last_updated_at: int
    bins: tuple[RawBin, ...] = ()
