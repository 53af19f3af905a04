"""Tests for gap analysis."""

from datetime import datetime, timedelta

import pytest

from conftest import make_entry
from fuel_tracker.analysis.gaps import GapAnalyzer
from fuel_tracker.models.stats import GapAnalysis, GapTrend


START = datetime(2024, 1, 1, 8, 0)


def entries_with_gaps(gaps):
    """Entries separated by the given day gaps."""
    dates = [START]
    for gap in gaps:
        dates.append(dates[-1] + timedelta(days=gap))
    return [make_entry(d) for d in dates]


class TestGapAnalyzer:

    def setup_method(self):
        self.analyzer = GapAnalyzer()

    def test_fewer_than_two_entries(self, now):
        assert self.analyzer.analyze([], now) == GapAnalysis()
        result = self.analyzer.analyze([make_entry(START)], now)
        assert result.average_gap == 0
        assert result.current_gap == 0
        assert result.gap_trend == GapTrend.STABLE

    def test_ten_day_pair(self, car_pair):
        now = datetime(2024, 3, 20, 12, 0)
        result = self.analyzer.analyze(car_pair, now)

        assert result.average_gap == 10
        assert result.longest_gap == 10
        assert result.total_gap_days == 10
        # Last entry 2024-03-11 09:00
        assert result.current_gap == 9

    def test_totals_match_gap_list(self, now):
        gaps = [3, 8, 1, 12, 6]
        result = self.analyzer.analyze(entries_with_gaps(gaps), now)

        assert result.total_gap_days == sum(gaps)
        assert result.average_gap == pytest.approx(sum(gaps) / len(gaps))
        assert result.longest_gap == 12

    def test_partial_days_are_truncated(self, now):
        entries = [make_entry(START), make_entry(START + timedelta(days=1, hours=20))]
        assert self.analyzer.analyze(entries, now).total_gap_days == 1

    def test_unsorted_input(self, now):
        entries = entries_with_gaps([4, 9, 2])
        assert self.analyzer.analyze(entries[::-1], now) == self.analyzer.analyze(entries, now)

    def test_trend_stable_without_older_gaps(self, now):
        # Three gaps are all "recent", nothing to compare against
        result = self.analyzer.analyze(entries_with_gaps([2, 20, 40]), now)
        assert result.gap_trend == GapTrend.STABLE

    def test_trend_worsening(self, now):
        result = self.analyzer.analyze(entries_with_gaps([5, 5, 5, 10, 10, 10]), now)
        assert result.gap_trend == GapTrend.WORSENING

    def test_trend_improving(self, now):
        result = self.analyzer.analyze(entries_with_gaps([10, 10, 10, 5, 5, 5]), now)
        assert result.gap_trend == GapTrend.IMPROVING

    def test_trend_stable_within_ten_percent(self, now):
        result = self.analyzer.analyze(entries_with_gaps([10, 10, 10, 10, 10, 11]), now)
        assert result.gap_trend == GapTrend.STABLE

    def test_trend_with_zero_older_gaps(self, now):
        # Same-day refills first, then spaced out
        result = self.analyzer.analyze(entries_with_gaps([0, 7, 7, 7]), now)
        assert result.gap_trend == GapTrend.WORSENING
