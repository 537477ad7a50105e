"""Protocol interfaces for the DLMM position monitor."""
from .position_source import PositionSource

__all__ = ["PositionSource"]
