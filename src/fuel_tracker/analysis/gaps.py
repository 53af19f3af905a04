"""Time-between-refills analysis."""

from datetime import datetime
from typing import List, Optional, Sequence

from .base import BaseAnalyzer, sort_by_date, mean, days_between
from ..models.entry import FuelEntry
from ..models.stats import GapAnalysis, GapTrend

# Number of most recent gaps compared against the rest
RECENT_GAP_COUNT = 3


class GapAnalyzer(BaseAnalyzer):
    """Computes gaps between consecutive refills and their trend."""

    @property
    def name(self) -> str:
        return "Gap Analysis"

    @property
    def description(self) -> str:
        return "Days between refills and whether they are getting longer or shorter"

    def analyze(self, entries: Sequence[FuelEntry], now: Optional[datetime] = None) -> GapAnalysis:
        if len(entries) < 2:
            return GapAnalysis()

        now = now or datetime.now()
        sorted_entries = sort_by_date(entries)
        gaps = self.gaps(sorted_entries)
        total_gap_days = sum(gaps)

        return GapAnalysis(
            current_gap=days_between(now, sorted_entries[-1].date),
            longest_gap=max(gaps),
            total_gap_days=total_gap_days,
            average_gap=total_gap_days / len(gaps),
            gap_trend=self._gap_trend(gaps),
        )

    @staticmethod
    def gaps(sorted_entries: Sequence[FuelEntry]) -> List[int]:
        """Whole days between each pair of consecutive entries."""
        return [
            days_between(sorted_entries[i].date, sorted_entries[i - 1].date)
            for i in range(1, len(sorted_entries))
        ]

    @staticmethod
    def _gap_trend(gaps: List[int]) -> GapTrend:
        """Compare the last few gaps with the ones before them."""
        recent_gaps = gaps[-RECENT_GAP_COUNT:]
        older_gaps = gaps[:-RECENT_GAP_COUNT]

        # No history to compare against
        if not older_gaps:
            return GapTrend.STABLE

        recent_avg = mean(recent_gaps)
        older_avg = mean(older_gaps)

        if recent_avg > older_avg * 1.1:
            return GapTrend.WORSENING
        if recent_avg < older_avg * 0.9:
            return GapTrend.IMPROVING
        return GapTrend.STABLE
