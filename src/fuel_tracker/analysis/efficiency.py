"""Efficiency trend, driving score and savings projections."""

from datetime import datetime
from typing import List, Optional, Sequence

from .base import BaseAnalyzer, sort_by_date, total_liters, total_amount, safe_ratio
from .distance import DistanceEstimator
from .habits import HabitProfiler
from ..models.catalog import VehicleCatalog
from ..models.entry import FuelEntry
from ..models.stats import (
    DriveSmarter,
    DriveFurtherRefillLess,
    EfficiencyTrend,
    PotentialSavings,
    RefillFrequency,
)

MIN_ENTRIES_FOR_TREND = 3
RECENT_ENTRY_COUNT = 5

# Flat share of current spend / CO2 that better driving could save
SAVINGS_SHARE = 0.1

# Improvement target for "drive further, refill less"
TARGET_IMPROVEMENT = 1.15

BASE_SCORE = 75
TREND_SCORE_DELTA = 15
REGULAR_REFILL_BONUS = 10

NOT_ENOUGH_DATA = "Add more entries for a more accurate analysis"

DECLINING_TIPS = [
    "Check tyre pressure regularly",
    "Avoid sudden acceleration",
]

GENERAL_TIPS = [
    "Use cruise control on toll roads",
    "Turn off the AC at low speeds",
    "Plan routes to avoid traffic jams",
]

DRIVE_FURTHER_TIPS = [
    "Keep a steady speed of 60-80 km/h",
    "Shift gears efficiently on manual transmissions",
    "Plan trips to avoid congestion",
    "Check the air filter periodically",
    "Avoid carrying excess weight",
]


class DriveSmarterAnalyzer(BaseAnalyzer):
    """Scores driving from efficiency trend and refill regularity."""

    def __init__(self, catalog: Optional[VehicleCatalog] = None):
        super().__init__(catalog)
        self._distance = DistanceEstimator(catalog)
        self._habits = HabitProfiler(catalog)

    @property
    def name(self) -> str:
        return "Drive Smarter"

    @property
    def description(self) -> str:
        return "Efficiency trend, savings potential and a 0-100 driving score"

    def analyze(self, entries: Sequence[FuelEntry], now: Optional[datetime] = None) -> DriveSmarter:
        if len(entries) < MIN_ENTRIES_FOR_TREND:
            return DriveSmarter(recommendations=[NOT_ENOUGH_DATA])

        trend = self.efficiency_trend(entries)
        habits = self._habits.analyze(entries, now)

        return DriveSmarter(
            efficiency_trend=trend,
            fuel_savings_potential=total_amount(entries) * SAVINGS_SHARE,
            co2_reduction_potential=self.total_co2(entries) * SAVINGS_SHARE,
            recommendations=self._recommendations(trend),
            driving_score=self._driving_score(trend, habits.refill_frequency),
        )

    def efficiency_trend(self, entries: Sequence[FuelEntry]) -> EfficiencyTrend:
        """Compare the latest refills' km/L with everything before them."""
        sorted_entries = sort_by_date(entries)
        recent = sorted_entries[-RECENT_ENTRY_COUNT:]
        older = sorted_entries[:-RECENT_ENTRY_COUNT]

        recent_efficiency = self._distance.efficiency(recent)
        older_efficiency = self._distance.efficiency(older)

        if recent_efficiency > older_efficiency * 1.05:
            return EfficiencyTrend.IMPROVING
        if recent_efficiency < older_efficiency * 0.95:
            return EfficiencyTrend.DECLINING
        return EfficiencyTrend.STABLE

    @staticmethod
    def _recommendations(trend: EfficiencyTrend) -> List[str]:
        tips = []
        if trend == EfficiencyTrend.DECLINING:
            tips.extend(DECLINING_TIPS)
        tips.extend(GENERAL_TIPS)
        return tips

    @staticmethod
    def _driving_score(trend: EfficiencyTrend, frequency: RefillFrequency) -> int:
        score = BASE_SCORE
        if trend == EfficiencyTrend.IMPROVING:
            score += TREND_SCORE_DELTA
        elif trend == EfficiencyTrend.DECLINING:
            score -= TREND_SCORE_DELTA

        if frequency == RefillFrequency.MODERATE:
            score += REGULAR_REFILL_BONUS

        return max(0, min(100, score))


class DriveFurtherAnalyzer(BaseAnalyzer):
    """Projects savings if efficiency improved to a target."""

    def __init__(self, catalog: Optional[VehicleCatalog] = None):
        super().__init__(catalog)
        self._distance = DistanceEstimator(catalog)

    @property
    def name(self) -> str:
        return "Drive Further, Refill Less"

    @property
    def description(self) -> str:
        return "Savings from reaching a 15% efficiency improvement"

    def analyze(
        self, entries: Sequence[FuelEntry], now: Optional[datetime] = None
    ) -> DriveFurtherRefillLess:
        liters = total_liters(entries)
        current = safe_ratio(self._distance.analyze(entries), liters)
        target = current * TARGET_IMPROVEMENT
        improvement = safe_ratio(target - current, current)

        return DriveFurtherRefillLess(
            current_efficiency=current,
            target_efficiency=target,
            potential_savings=PotentialSavings(
                liters_per_month=liters * improvement,
                amount_per_month=total_amount(entries) * improvement,
                co2_reduction_per_month=self.total_co2(entries) * improvement,
            ),
            tips=list(DRIVE_FURTHER_TIPS),
            progress_to_target=safe_ratio(current, target) * 100,
        )
