"""Assemble display records from raw DLMM account data.

Token Y is treated as the USD quote: values are ``x * price + y``. Nothing
here fetches prices or touches the network.
"""
from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import datetime, timezone

from .config import EngineConfig, TokenConfig
from .engine import (
    calculate_apy,
    calculate_impermanent_loss,
    calculate_liquidity_concentration,
    calculate_position_health,
    evaluate_range,
    fee_tier_from_bin_step,
    get_position_status,
    get_price_from_bin_id,
)
from .errors import InvalidInput
from .models import (
    BinData,
    PoolInfo,
    Position,
    PositionReport,
    RawBin,
    RawPool,
    RawPosition,
    TokenInfo,
    UnclaimedFees,
)

logger = logging.getLogger(__name__)


def to_ui_amount(raw_amount: int, decimals: int) -> float:
    """Convert a native-unit integer into token units."""
    return raw_amount / (10**decimals)


def quote_value(amount_x: float, price: float, amount_y: float) -> float:
    """Value in quote terms, ``x * price + y``; an empty X leg is worth 0."""
    if amount_x == 0:
        return amount_y
    return amount_x * price + amount_y


def _created_at(raw: RawPosition) -> datetime:
    try:
        return datetime.fromtimestamp(raw.last_updated_at, tz=timezone.utc)
    except (ValueError, OverflowError, OSError) as e:
        raise InvalidInput(
            f"position {raw.address}: bad last_updated_at {raw.last_updated_at}",
            field="last_updated_at",
        ) from e


def entry_price(position: Position) -> float:
    """Approximate entry price: the price of the position's median bin."""
    if not position.active_bins:
        return 0.0
    return position.active_bins[len(position.active_bins) // 2].price


class PositionAssembler:
    """Turn raw pool/position records into ``PoolInfo`` and ``Position``."""

    def __init__(
        self,
        engine: EngineConfig | None = None,
        tokens: dict[str, TokenConfig] | None = None,
    ) -> None:
        self._engine = engine or EngineConfig()
        self._tokens = dict(tokens or {})

    def token_info(self, mint: str) -> TokenInfo:
        """Look up token metadata, defaulting decimals for unknown mints."""
        cfg = self._tokens.get(mint)
        if cfg is None:
            logger.debug(
                "Unknown mint %s, assuming %d decimals",
                mint,
                self._engine.default_token_decimals,
            )
            return TokenInfo(
                symbol="UNKNOWN",
                mint=mint,
                decimals=self._engine.default_token_decimals,
            )
        return TokenInfo(
            symbol=cfg.symbol or "UNKNOWN",
            mint=mint,
            decimals=cfg.decimals,
            logo_uri=cfg.logo_uri,
        )

    # ------------------------------------------------------------------
    # Bins
    # ------------------------------------------------------------------

    @staticmethod
    def build_bin(
        raw: RawBin, bin_step: int, token_x: TokenInfo, token_y: TokenInfo
    ) -> BinData:
        price = get_price_from_bin_id(raw.bin_id, bin_step)
        liquidity_x = to_ui_amount(raw.liquidity_x, token_x.decimals)
        liquidity_y = to_ui_amount(raw.liquidity_y, token_y.decimals)
        return BinData(
            bin_id=raw.bin_id,
            price=price,
            liquidity_x=liquidity_x,
            liquidity_y=liquidity_y,
            total_liquidity=quote_value(liquidity_x, price, liquidity_y),
        )

    def build_liquidity_distribution(
        self, pool: RawPool, bins: Sequence[RawBin] | None = None
    ) -> tuple[BinData, ...]:
        """Bins for charting, sorted by bin id.

        Uses ``bins`` when given, otherwise the pool's own scan. With neither,
        returns an empty window of ``distribution_radius`` bins on each side
        of the active bin.
        """
        token_x = self.token_info(pool.token_x_mint)
        token_y = self.token_info(pool.token_y_mint)

        source = bins if bins is not None else pool.bins
        if source:
            built = [self.build_bin(b, pool.bin_step, token_x, token_y) for b in source]
        else:
            radius = self._engine.distribution_radius
            built = [
                self.build_bin(RawBin(pool.active_id + i, 0, 0), pool.bin_step, token_x, token_y)
                for i in range(-radius, radius + 1)
            ]

        return tuple(sorted(built, key=lambda b: b.bin_id))

    # ------------------------------------------------------------------
    # Pools and positions
    # ------------------------------------------------------------------

    def build_pool_info(self, pool: RawPool) -> PoolInfo:
        token_x = self.token_info(pool.token_x_mint)
        token_y = self.token_info(pool.token_y_mint)
        current_price = get_price_from_bin_id(pool.active_id, pool.bin_step)

        reserve_x = to_ui_amount(pool.reserve_x, token_x.decimals)
        reserve_y = to_ui_amount(pool.reserve_y, token_y.decimals)

        if pool.bins:
            active_bins = sum(1 for b in pool.bins if b.liquidity_x or b.liquidity_y)
        else:
            active_bins = 1

        return PoolInfo(
            address=pool.address,
            token_x=token_x,
            token_y=token_y,
            total_liquidity=quote_value(reserve_x, current_price, reserve_y),
            volume_24h=pool.volume_24h,
            current_price=current_price,
            fee_tier=fee_tier_from_bin_step(pool.bin_step),
            active_bins=active_bins,
        )

    def build_position(self, raw: RawPosition, pool: RawPool, now: float) -> Position:
        """Build a ``Position`` from its raw record and its pool.

        ``now`` is the reference timestamp (seconds since epoch) for the APY.
        """
        if raw.pool_address != pool.address:
            raise InvalidInput(
                f"position {raw.address}: belongs to pool {raw.pool_address}, "
                f"not {pool.address}",
                field="pool_address",
            )

        pool_info = self.build_pool_info(pool)
        token_x, token_y = pool_info.token_x, pool_info.token_y
        current_price = pool_info.current_price

        bins = tuple(
            self.build_bin(b, pool.bin_step, token_x, token_y)
            for b in sorted(raw.bins, key=lambda b: b.bin_id)
        )
        price_range = evaluate_range([b.price for b in bins], current_price)

        liquidity_x = to_ui_amount(raw.total_x_amount, token_x.decimals)
        liquidity_y = to_ui_amount(raw.total_y_amount, token_y.decimals)
        total_value = quote_value(liquidity_x, current_price, liquidity_y)

        fee_x = to_ui_amount(raw.fee_x, token_x.decimals)
        fee_y = to_ui_amount(raw.fee_y, token_y.decimals)
        fees = UnclaimedFees(
            token_x=fee_x,
            token_y=fee_y,
            total_usd=quote_value(fee_x, current_price, fee_y),
        )

        apy = calculate_apy(
            fees.total_usd,
            total_value,
            raw.last_updated_at,
            now,
            max_apy=self._engine.apy_cap,
        )

        logger.debug(
            "Position %s: value $%.2f  fees $%.2f  range [%.6f, %.6f]  price %.6f  in range: %s  APY %.2f%%",
            raw.address,
            total_value,
            fees.total_usd,
            price_range.min_price,
            price_range.max_price,
            current_price,
            price_range.is_in_range,
            apy,
        )

        return Position(
            address=raw.address,
            pool_address=pool.address,
            token_x=token_x,
            token_y=token_y,
            liquidity_x=liquidity_x,
            liquidity_y=liquidity_y,
            total_value=total_value,
            fees_earned=fees.total_usd,
            unclaimed_fees=fees,
            active_bins=bins,
            min_price=price_range.min_price,
            max_price=price_range.max_price,
            current_price=current_price,
            is_in_range=price_range.is_in_range,
            created_at=_created_at(raw),
            estimated_apy=apy,
        )

    def build_report(self, position: Position) -> PositionReport:
        """Status and risk metrics for one position."""
        status = get_position_status(position, self._engine.low_apy_threshold)
        return PositionReport(
            address=position.address,
            status=status.status,
            message=status.message,
            health_score=calculate_position_health(position),
            impermanent_loss=calculate_impermanent_loss(
                entry_price(position), position.current_price
            ),
            liquidity_concentration=calculate_liquidity_concentration(
                position.active_bins
            ),
        )
