"""Shared test fixtures and sample data."""
from __future__ import annotations

import textwrap
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable

import pytest

from dlmm_monitor.config import (
    AppConfig,
    EngineConfig,
    SourceConfig,
    TokenConfig,
    WalletConfig,
)
from dlmm_monitor.models import BinData, Position, TokenInfo, UnclaimedFees

MINT_X = "MintSol111"
MINT_Y = "MintUsdc111"
START_TS = 1_700_000_000


# ---------------------------------------------------------------------------
# Config fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def sample_engine_config() -> EngineConfig:
    return EngineConfig(
        apy_cap=1000.0,
        low_apy_threshold=5.0,
        default_token_decimals=9,
        distribution_radius=2,
    )


@pytest.fixture()
def sample_tokens() -> dict[str, TokenConfig]:
    return {
        MINT_X: TokenConfig(symbol="SOL", decimals=9),
        MINT_Y: TokenConfig(symbol="USDC", decimals=6),
    }


@pytest.fixture()
def sample_app_config(
    sample_engine_config: EngineConfig,
    sample_tokens: dict[str, TokenConfig],
) -> AppConfig:
    return AppConfig(
        engine=sample_engine_config,
        tokens=sample_tokens,
        wallets=(WalletConfig(label="test-wallet", address="WalletA"),),
        source=SourceConfig(snapshot_path="snapshot.yaml"),
    )


# ---------------------------------------------------------------------------
# Model fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def token_x() -> TokenInfo:
    return TokenInfo(symbol="SOL", mint=MINT_X, decimals=9)


@pytest.fixture()
def token_y() -> TokenInfo:
    return TokenInfo(symbol="USDC", mint=MINT_Y, decimals=6)


def make_bins(count: int, liquidity: float = 100.0) -> tuple[BinData, ...]:
    return tuple(
        BinData(
            bin_id=i,
            price=1.0 + i / 100,
            liquidity_x=0.0,
            liquidity_y=liquidity,
            total_liquidity=liquidity,
        )
        for i in range(count)
    )


@pytest.fixture()
def make_position(token_x: TokenInfo, token_y: TokenInfo) -> Callable[..., Position]:
    """Factory for positions; keyword overrides replace the defaults."""

    def _make(**overrides: Any) -> Position:
        fields: dict[str, Any] = dict(
            address="PositionA",
            pool_address="Pool1",
            token_x=token_x,
            token_y=token_y,
            liquidity_x=10.0,
            liquidity_y=500.0,
            total_value=1000.0,
            fees_earned=25.0,
            unclaimed_fees=UnclaimedFees(token_x=0.1, token_y=15.0, total_usd=25.0),
            active_bins=make_bins(3),
            min_price=1.0,
            max_price=1.02,
            current_price=1.01,
            is_in_range=True,
            created_at=datetime.fromtimestamp(START_TS, tz=timezone.utc),
            estimated_apy=30.0,
        )
        fields.update(overrides)
        return Position(**fields)

    return _make


# ---------------------------------------------------------------------------
# Decoded chain records
# ---------------------------------------------------------------------------


@pytest.fixture()
def raw_pool_record() -> dict:
    # Active bin 0 pins the current price at 1.0 for any bin step.
    return {
        "address": "Pool1",
        "token_x_mint": MINT_X,
        "token_y_mint": MINT_Y,
        "active_id": 0,
        "bin_step": 100,
        "reserve_x": "2000000000000",  # 2000 SOL
        "reserve_y": "500000000",  # 500 USDC
        "volume_24h": 12000.0,
    }


@pytest.fixture()
def raw_position_record() -> dict:
    return {
        "address": "PositionA",
        "owner": "WalletA",
        "pool_address": "Pool1",
        "total_x_amount": "10000000000",  # 10 SOL
        "total_y_amount": "5000000",  # 5 USDC
        "fee_x": "1000000000",  # 1 SOL
        "fee_y": "500000",  # 0.5 USDC
        "last_updated_at": START_TS,
        "bins": [
            {"bin_id": 1, "liquidity_x": "5000000000", "liquidity_y": 0},
            {"bin_id": -1, "liquidity_x": 0, "liquidity_y": "2000000"},
            {"bin_id": 0, "liquidity_x": "5000000000", "liquidity_y": "1000000"},
        ],
    }


# ---------------------------------------------------------------------------
# Config / snapshot YAML fixtures
# ---------------------------------------------------------------------------

SAMPLE_YAML = textwrap.dedent(f"""\
    engine:
      apy_cap: 500.0
      low_apy_threshold: 7.5
      default_token_decimals: 8
      distribution_radius: 10
    tokens:
      {MINT_X}: {{symbol: SOL, decimals: 9}}
      {MINT_Y}: {{symbol: USDC, decimals: 6}}
    wallets:
      - label: test-wallet
        address: "WalletA"
    source:
      snapshot_path: snapshot.yaml
""")

SAMPLE_SNAPSHOT = textwrap.dedent(f"""\
    pools:
      - address: Pool1
        token_x_mint: {MINT_X}
        token_y_mint: {MINT_Y}
        active_id: 0
        bin_step: 100
        reserve_x: "2000000000000"
        reserve_y: "500000000"
    positions:
      - address: PositionA
        owner: WalletA
        pool_address: Pool1
        total_x_amount: "10000000000"
        total_y_amount: "5000000"
        fee_x: "1000000000"
        fee_y: "500000"
        last_updated_at: {START_TS}
        bins:
          - {{bin_id: -1, liquidity_x: 0, liquidity_y: "2000000"}}
          - {{bin_id: 0, liquidity_x: "5000000000", liquidity_y: "1000000"}}
          - {{bin_id: 1, liquidity_x: "5000000000", liquidity_y: 0}}
      - address: PositionB
        owner: WalletA
        pool_address: Pool1
        total_x_amount: "0"
        total_y_amount: "100000000"
        last_updated_at: {START_TS}
        bins:
          - {{bin_id: 5, liquidity_x: 0, liquidity_y: "100000000"}}
      - address: PositionOther
        owner: WalletB
        pool_address: Pool1
        total_x_amount: "1"
        total_y_amount: "1"
        last_updated_at: {START_TS}
""")


@pytest.fixture()
def sample_snapshot_path(tmp_path: Path) -> Path:
    path = tmp_path / "snapshot.yaml"
    path.write_text(SAMPLE_SNAPSHOT)
    return path


@pytest.fixture()
def sample_yaml_path(tmp_path: Path, sample_snapshot_path: Path) -> Path:
    cfg_file = tmp_path / "config.yaml"
    cfg_file.write_text(SAMPLE_YAML)
    return cfg_file
