"""Pure parsing functions for decoded DLMM account data — no I/O.

The fetch layer hands over plain mappings (already decoded from the chain's
account layout). Amounts are native-unit integers, possibly serialized as
strings. Anything missing or of the wrong shape raises ``InvalidInput``.
"""
from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any

from .errors import InvalidInput
from .models import RawBin, RawPool, RawPosition

_MISSING = object()


def _require(record: Mapping[str, Any], key: str, context: str) -> Any:
    if not isinstance(record, Mapping):
        raise InvalidInput(f"{context}: expected a mapping, got {type(record).__name__}")
    value = record.get(key, _MISSING)
    if value is _MISSING or value is None:
        raise InvalidInput(f"{context}: missing required field '{key}'", field=key)
    return value


def _as_int(value: Any, key: str, context: str) -> int:
    """Coerce an integer field, accepting decimal strings like "1500000"."""
    if isinstance(value, bool):
        raise InvalidInput(f"{context}: field '{key}' must be an integer", field=key)
    if isinstance(value, float):
        if not value.is_integer():
            raise InvalidInput(f"{context}: field '{key}' must be an integer", field=key)
        return int(value)
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise InvalidInput(
            f"{context}: field '{key}' must be an integer, got {value!r}", field=key
        ) from e


def _as_amount(value: Any, key: str, context: str) -> int:
    amount = _as_int(value, key, context)
    if amount < 0:
        raise InvalidInput(f"{context}: field '{key}' must not be negative", field=key)
    return amount


def _as_float(value: Any, key: str, context: str) -> float:
    if isinstance(value, bool):
        raise InvalidInput(f"{context}: field '{key}' must be a number", field=key)
    try:
        return float(value)
    except (TypeError, ValueError) as e:
        raise InvalidInput(
            f"{context}: field '{key}' must be a number, got {value!r}", field=key
        ) from e


def _as_timestamp(value: Any, key: str, context: str) -> int:
    """Seconds since the epoch; must map to a representable UTC datetime."""
    ts = _as_int(value, key, context)
    try:
        datetime.fromtimestamp(ts, tz=timezone.utc)
    except (ValueError, OverflowError, OSError) as e:
        raise InvalidInput(
            f"{context}: field '{key}' is not a timestamp in seconds: {ts}", field=key
        ) from e
    return ts


def _parse_bins(raw: Any, context: str) -> tuple[RawBin, ...]:
    if raw is None:
        return ()
    if not isinstance(raw, (list, tuple)):
        raise InvalidInput(f"{context}: field 'bins' must be a list", field="bins")
    bins = [parse_bin(entry, f"{context} bin[{i}]") for i, entry in enumerate(raw)]
    return tuple(sorted(bins, key=lambda b: b.bin_id))


def parse_bin(entry: Mapping[str, Any], context: str = "bin") -> RawBin:
    """Parse one per-bin reserve pair."""
    return RawBin(
        bin_id=_as_int(_require(entry, "bin_id", context), "bin_id", context),
        liquidity_x=_as_amount(entry.get("liquidity_x", 0), "liquidity_x", context),
        liquidity_y=_as_amount(entry.get("liquidity_y", 0), "liquidity_y", context),
    )


def parse_pool(record: Mapping[str, Any]) -> RawPool:
    """Parse a decoded pool (LB pair) record."""
    address = str(_require(record, "address", "pool"))
    context = f"pool {address}"

    bin_step = _as_int(_require(record, "bin_step", context), "bin_step", context)
    if bin_step < 0:
        raise InvalidInput(f"{context}: field 'bin_step' must not be negative", field="bin_step")

    return RawPool(
        address=address,
        token_x_mint=str(_require(record, "token_x_mint", context)),
        token_y_mint=str(_require(record, "token_y_mint", context)),
        active_id=_as_int(_require(record, "active_id", context), "active_id", context),
        bin_step=bin_step,
        reserve_x=_as_amount(_require(record, "reserve_x", context), "reserve_x", context),
        reserve_y=_as_amount(_require(record, "reserve_y", context), "reserve_y", context),
        volume_24h=_as_float(record.get("volume_24h", 0.0), "volume_24h", context),
        bins=_parse_bins(record.get("bins"), context),
    )


def parse_position(record: Mapping[str, Any]) -> RawPosition:
    """Parse a decoded position record.

    Fee counters default to 0 when absent; reserves and the timestamp are
    required.
    """
    address = str(_require(record, "address", "position"))
    context = f"position {address}"

    return RawPosition(
        address=address,
        owner=str(record.get("owner", "")),
        pool_address=str(_require(record, "pool_address", context)),
        total_x_amount=_as_amount(
            _require(record, "total_x_amount", context), "total_x_amount", context
        ),
        total_y_amount=_as_amount(
            _require(record, "total_y_amount", context), "total_y_amount", context
        ),
        fee_x=_as_amount(record.get("fee_x", 0), "fee_x", context),
        fee_y=_as_amount(record.get("fee_y", 0), "fee_y", context),
        last_updated_at=_as_timestamp(
            _require(record, "last_updated_at", context), "last_updated_at", context
        ),
        bins=_parse_bins(record.get("bins"), context),
    )
