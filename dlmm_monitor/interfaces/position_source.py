"""Position source protocol — boundary with the chain fetch layer."""
from typing import Any, Protocol


class PositionSource(Protocol):
    """Supplies decoded position and pool records as plain mappings."""

    async def fetch_position_records(self, owner: str) -> list[dict[str, Any]]: ...

    async def fetch_pool_record(self, pool_address: str) -> dict[str, Any]: ...
