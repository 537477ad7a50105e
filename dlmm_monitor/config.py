"""Configuration loader — reads config.yaml, interpolates env vars, validates."""
from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Frozen config dataclasses
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class EngineConfig:
    apy_cap: float = 1000.0
    low_apy_threshold: float = 5.0
    default_token_decimals: int = 9
    distribution_radius: int = 20


@dataclass(frozen=True)
class TokenConfig:
    symbol: str = ""
    decimals: int = 9
    logo_uri: str | None = None


@dataclass(frozen=True)
class WalletConfig:
    label: str = ""
    address: str = ""


@dataclass(frozen=True)
class SourceConfig:
    snapshot_path: str = "snapshot.yaml"


@dataclass(frozen=True)
class AppConfig:
    engine: EngineConfig = field(default_factory=EngineConfig)
    tokens: dict[str, TokenConfig] = field(default_factory=dict)
    wallets: tuple[WalletConfig, ...] = ()
    source: SourceConfig = field(default_factory=SourceConfig)


# ---------------------------------------------------------------------------
# Env interpolation
# ---------------------------------------------------------------------------

_ENV_VAR_RE = re.compile(r"\$\{([^}]+)}")


def _interpolate_env(value: Any) -> Any:
    """Recursively replace ${VAR} references with environment variable values."""
    if isinstance(value, str):
        return _ENV_VAR_RE.sub(lambda m: os.environ.get(m.group(1), ""), value)
    if isinstance(value, dict):
        return {k: _interpolate_env(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_interpolate_env(item) for item in value]
    return value


# ---------------------------------------------------------------------------
# YAML → dataclass builders
# ---------------------------------------------------------------------------


def _build_engine(raw: dict[str, Any]) -> EngineConfig:
    return EngineConfig(
        apy_cap=float(raw.get("apy_cap", 1000.0)),
        low_apy_threshold=float(raw.get("low_apy_threshold", 5.0)),
        default_token_decimals=int(raw.get("default_token_decimals", 9)),
        distribution_radius=int(raw.get("distribution_radius", 20)),
    )


def _build_tokens(raw: dict[str, Any], default_decimals: int) -> dict[str, TokenConfig]:
    tokens: dict[str, TokenConfig] = {}
    for mint, cfg in raw.items():
        if not isinstance(cfg, dict):
            raise ValueError(f"Token '{mint}' must be a mapping")
        tokens[mint] = TokenConfig(
            symbol=cfg.get("symbol", ""),
            decimals=int(cfg.get("decimals", default_decimals)),
            logo_uri=cfg.get("logo_uri"),
        )
    return tokens


def _build_wallets(raw: list[dict[str, Any]]) -> tuple[WalletConfig, ...]:
    wallets: list[WalletConfig] = []
    for w in raw:
        wallets.append(
            WalletConfig(
                label=w.get("label", ""),
                address=w.get("address", ""),
            )
        )
    return tuple(wallets)


def _build_source(raw: dict[str, Any], base_dir: Path) -> SourceConfig:
    snapshot_path = Path(raw.get("snapshot_path", SourceConfig.snapshot_path))
    if not snapshot_path.is_absolute():
        snapshot_path = base_dir / snapshot_path
    return SourceConfig(snapshot_path=str(snapshot_path))


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def load_config(config_path: str | Path | None = None) -> AppConfig:
    """Load and validate application configuration from YAML + .env.

    Args:
        config_path: Path to config.yaml. Defaults to ``config.yaml`` in the
            project root (one level up from this package). A relative
            ``source.snapshot_path`` is resolved against the config file's
            directory.
    """
    load_dotenv()

    if config_path is None:
        config_path = Path(__file__).resolve().parent.parent / "config.yaml"
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path) as f:
        raw = yaml.safe_load(f) or {}

    raw = _interpolate_env(raw)

    engine = _build_engine(raw.get("engine") or {})
    cfg = AppConfig(
        engine=engine,
        tokens=_build_tokens(raw.get("tokens") or {}, engine.default_token_decimals),
        wallets=_build_wallets(raw.get("wallets") or []),
        source=_build_source(raw.get("source") or {}, config_path.parent),
    )

    _validate(cfg)
    logger.info("Configuration loaded from %s", config_path)
    return cfg


def _validate(cfg: AppConfig) -> None:
    """Raise on invalid configuration."""
    if not cfg.wallets:
        raise ValueError("At least one wallet must be configured")

    for wallet in cfg.wallets:
        if not wallet.address:
            raise ValueError(f"Wallet '{wallet.label}' has no address")

    if cfg.engine.apy_cap <= 0:
        raise ValueError("engine.apy_cap must be positive")
    if cfg.engine.low_apy_threshold < 0:
        raise ValueError("engine.low_apy_threshold must not be negative")
    if cfg.engine.default_token_decimals < 0:
        raise ValueError("engine.default_token_decimals must not be negative")
    if cfg.engine.distribution_radius < 0:
        raise ValueError("engine.distribution_radius must not be negative")

    for mint, token in cfg.tokens.items():
        if token.decimals < 0:
            raise ValueError(f"Token '{mint}' has negative decimals")
