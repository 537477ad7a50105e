"""Unit tests for the position status classifier."""
from __future__ import annotations

from typing import Callable

import pytest

from dlmm_monitor.engine.status import get_position_status
from dlmm_monitor.models import Position, PositionStatus


class TestGetPositionStatus:
    @pytest.mark.parametrize("apy", [0.0, 3.0, 30.0, 999.0])
    def test_out_of_range_is_inactive(
        self, make_position: Callable[..., Position], apy: float
    ) -> None:
        result = get_position_status(make_position(is_in_range=False, estimated_apy=apy))
        assert result == PositionStatus("inactive", "out of range, not earning fees")

    def test_low_yield_is_warning(self, make_position: Callable[..., Position]) -> None:
        result = get_position_status(make_position(is_in_range=True, estimated_apy=3.0))
        assert result.status == "warning"
        assert result.message == "low yield, consider rebalancing"

    def test_healthy_is_active(self, make_position: Callable[..., Position]) -> None:
        result = get_position_status(make_position(is_in_range=True, estimated_apy=30.0))
        assert result == PositionStatus("active", "earning fees")

    def test_threshold_is_exclusive(self, make_position: Callable[..., Position]) -> None:
        result = get_position_status(make_position(is_in_range=True, estimated_apy=5.0))
        assert result.status == "active"

    def test_custom_threshold(self, make_position: Callable[..., Position]) -> None:
        p = make_position(is_in_range=True, estimated_apy=8.0)
        assert get_position_status(p, low_apy_threshold=10.0).status == "warning"
        assert get_position_status(p, low_apy_threshold=8.0).status == "active"
