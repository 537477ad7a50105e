"""Refresh orchestration — fetch raw records and assemble wallet views."""
from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass

from ..assembler import PositionAssembler
from ..config import AppConfig, WalletConfig
from ..engine import calculate_portfolio_summary
from ..errors import InvalidInput
from ..interfaces.position_source import PositionSource
from ..models import (
    BinData,
    PoolInfo,
    PortfolioSummary,
    Position,
    PositionReport,
    RawPool,
)
from ..parser import parse_pool, parse_position

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WalletView:
    """One refresh cycle's output for a wallet."""

    label: str
    address: str
    positions: tuple[Position, ...]
    reports: tuple[PositionReport, ...]
    summary: PortfolioSummary


class Dashboard:
    """Builds position views for the configured wallets.

    The source is passed in explicitly; the dashboard keeps no state between
    refreshes.
    """

    def __init__(self, source: PositionSource, config: AppConfig) -> None:
        self._source = source
        self._config = config
        self._assembler = PositionAssembler(config.engine, config.tokens)

    async def _fetch_pool(self, pool_address: str) -> RawPool | None:
        try:
            record = await self._source.fetch_pool_record(pool_address)
            return parse_pool(record)
        except (LookupError, InvalidInput) as e:
            logger.error("Could not load pool %s: %s", pool_address, e)
            return None

    async def refresh_positions(self, owner: str, now: float | None = None) -> list[Position]:
        """Fetch and assemble every position owned by ``owner``.

        Records that fail to parse, or whose pool cannot be loaded, are
        logged and skipped.
        """
        if now is None:
            now = time.time()

        records = await self._source.fetch_position_records(owner)

        raw_positions = []
        for record in records:
            try:
                raw_positions.append(parse_position(record))
            except InvalidInput as e:
                logger.warning("Skipping malformed position record: %s", e)

        pool_addresses = sorted({p.pool_address for p in raw_positions})
        raw_pools = await asyncio.gather(*(self._fetch_pool(a) for a in pool_addresses))
        pools = {a: p for a, p in zip(pool_addresses, raw_pools) if p is not None}

        positions: list[Position] = []
        for raw in raw_positions:
            pool = pools.get(raw.pool_address)
            if pool is None:
                logger.warning(
                    "Skipping position %s: pool %s unavailable", raw.address, raw.pool_address
                )
                continue
            try:
                positions.append(self._assembler.build_position(raw, pool, now))
            except InvalidInput as e:
                logger.warning("Skipping position %s: %s", raw.address, e)

        logger.info("Refreshed %d/%d positions for %s", len(positions), len(records), owner)
        return positions

    def summarize(self, positions: list[Position]) -> PortfolioSummary:
        return calculate_portfolio_summary(positions)

    def reports(self, positions: list[Position]) -> list[PositionReport]:
        return [self._assembler.build_report(p) for p in positions]

    async def wallet_view(self, wallet: WalletConfig, now: float | None = None) -> WalletView:
        positions = await self.refresh_positions(wallet.address, now)
        return WalletView(
            label=wallet.label,
            address=wallet.address,
            positions=tuple(positions),
            reports=tuple(self.reports(positions)),
            summary=self.summarize(positions),
        )

    async def refresh_all(self, now: float | None = None) -> list[WalletView]:
        """Refresh every configured wallet against a single reference time."""
        if now is None:
            now = time.time()
        return list(
            await asyncio.gather(*(self.wallet_view(w, now) for w in self._config.wallets))
        )

    async def pool_info(self, pool_address: str) -> PoolInfo:
        """Pool stats; raises ``LookupError`` or ``InvalidInput`` on bad data."""
        record = await self._source.fetch_pool_record(pool_address)
        return self._assembler.build_pool_info(parse_pool(record))

    async def liquidity_distribution(self, pool_address: str) -> tuple[BinData, ...]:
        record = await self._source.fetch_pool_record(pool_address)
        return self._assembler.build_liquidity_distribution(parse_pool(record))
