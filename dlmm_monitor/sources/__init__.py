"""Position source implementations."""
from .snapshot import SnapshotSource

__all__ = ["SnapshotSource"]
