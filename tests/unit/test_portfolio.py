"""Unit tests for portfolio aggregation."""
from __future__ import annotations

from typing import Callable

import pytest

from dlmm_monitor.engine.portfolio import calculate_portfolio_summary
from dlmm_monitor.models import PortfolioSummary, Position


class TestCalculatePortfolioSummary:
    def test_empty(self) -> None:
        summary = calculate_portfolio_summary([])
        assert summary == PortfolioSummary(
            total_value=0.0, total_fees_earned=0.0, active_positions=0, average_apy=0.0
        )

    def test_total_value_exact_to_cents(
        self, make_position: Callable[..., Position]
    ) -> None:
        positions = [
            make_position(address="A", total_value=12450.50),
            make_position(address="B", total_value=8920.00),
            make_position(address="C", total_value=6230.80),
        ]
        summary = calculate_portfolio_summary(positions)
        assert round(summary.total_value, 2) == 27601.30

    def test_totals_and_counts(self, make_position: Callable[..., Position]) -> None:
        positions = [
            make_position(address="A", fees_earned=10.0, is_in_range=True),
            make_position(address="B", fees_earned=5.5, is_in_range=False),
            make_position(address="C", fees_earned=0.0, is_in_range=True),
        ]
        summary = calculate_portfolio_summary(positions)
        assert summary.total_fees_earned == pytest.approx(15.5)
        assert summary.active_positions == 2

    def test_average_apy_is_unweighted(
        self, make_position: Callable[..., Position]
    ) -> None:
        positions = [
            make_position(address="A", total_value=1_000_000.0, estimated_apy=10.0),
            make_position(address="B", total_value=1.0, estimated_apy=50.0),
        ]
        summary = calculate_portfolio_summary(positions)
        assert summary.average_apy == pytest.approx(30.0)

    def test_accepts_tuple(self, make_position: Callable[..., Position]) -> None:
        summary = calculate_portfolio_summary((make_position(estimated_apy=12.0),))
        assert summary.average_apy == pytest.approx(12.0)
        assert summary.active_positions == 1
