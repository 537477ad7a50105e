"""File-backed position source.

Reads a YAML (or JSON) dump of decoded accounts:

    pools:
      - {address: ..., token_x_mint: ..., active_id: ..., bin_step: ..., ...}
    positions:
      - {address: ..., owner: ..., pool_address: ..., bins: [...], ...}

The file is re-read on every call so each refresh sees current data.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)


class SnapshotSource:
    """Serve position and pool records from a snapshot file."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def _load(self) -> dict[str, Any]:
        if not self.path.exists():
            raise FileNotFoundError(f"Snapshot file not found: {self.path}")

        with open(self.path) as f:
            data = yaml.safe_load(f) or {}

        if not isinstance(data, dict):
            raise ValueError(f"Snapshot {self.path} must contain a mapping at top level")
        return data

    async def fetch_position_records(self, owner: str) -> list[dict[str, Any]]:
        """Position records owned by ``owner``."""
        records = [
            r
            for r in self._load().get("positions") or []
            if isinstance(r, dict) and r.get("owner") == owner
        ]
        logger.info("Loaded %d position records for %s from %s", len(records), owner, self.path)
        return records

    async def fetch_pool_record(self, pool_address: str) -> dict[str, Any]:
        """Pool record by address; raises ``LookupError`` if absent."""
        for record in self._load().get("pools") or []:
            if isinstance(record, dict) and record.get("address") == pool_address:
                return record
        raise LookupError(f"Pool not found: {pool_address}")
