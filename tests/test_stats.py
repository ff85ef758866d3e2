"""
Tests for cellar statistics.
"""

import pytest

from cellarbook.schema import CellarItem, WineSummary
from cellarbook.stats import compute_stats


def item(id, wine_type, quantity, price=None):
    return CellarItem(
        id=id, user_id="u", wine_id=f"w{id}", quantity=quantity, purchase_price=price,
        wine=WineSummary(id=f"w{id}", name=f"Wine {id}", wine_type=wine_type),
    )


class TestCellarStats:
    """Test cellar totals and type shares."""

    def test_empty_cellar(self):
        """An empty cellar has zero totals."""
        stats = compute_stats([])
        assert stats.total_bottles == 0
        assert stats.total_value == 0
        assert stats.by_type == []

    def test_totals(self):
        """Bottles, value and litres are summed."""
        stats = compute_stats([item("1", "red", 6, 20.0), item("2", "white", 2, 12.5), item("3", "red", 1)])
        assert stats.total_bottles == 9
        assert stats.total_value == pytest.approx(145.0)
        assert stats.total_liters == pytest.approx(6.75)

    def test_type_shares_rounded(self):
        """Type shares are rounded percentages."""
        stats = compute_stats([item("1", "red", 1), item("2", "white", 1), item("3", "rose", 1), item("4", "red", 5)])
        shares = {s.wine_type: (s.count, s.percentage) for s in stats.by_type}
        assert shares == {"red": (6, 75), "white": (1, 13), "rose": (1, 13)}

    def test_half_rounds_up(self):
        """A half percent rounds up."""
        stats = compute_stats([item(str(i), "red", 1) for i in range(7)] + [item("x", "white", 1)])
        shares = {s.wine_type: s.percentage for s in stats.by_type}
        assert shares == {"red": 88, "white": 13}
