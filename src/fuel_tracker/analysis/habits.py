"""Fueling habit profiling."""

from collections import Counter
from datetime import datetime
from typing import Dict, List, Optional, Sequence

from .base import BaseAnalyzer, mean
from .gaps import GapAnalyzer
from ..models.catalog import VehicleCatalog
from ..models.entry import FuelEntry
from ..models.stats import FuelingHabits, RefillFrequency, TimeOfDay

# Indexed Sunday-first
DAY_NAMES = ["Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]

PREFERRED_DAY_COUNT = 3

# Average gap thresholds in days
FREQUENT_GAP_DAYS = 7
INFREQUENT_GAP_DAYS = 14


def sunday_weekday(moment: datetime) -> int:
    """Day of week with 0 = Sunday ... 6 = Saturday."""
    return (moment.weekday() + 1) % 7


def time_of_day(moment: datetime) -> TimeOfDay:
    if moment.hour < 12:
        return TimeOfDay.MORNING
    if moment.hour < 18:
        return TimeOfDay.AFTERNOON
    return TimeOfDay.EVENING


def percentages(counts: Dict[str, int], total: int) -> Dict[str, float]:
    """Convert counts into percentages of ``total``, keeping key order."""
    if not total:
        return {}
    return {key: count / total * 100 for key, count in counts.items()}


class HabitProfiler(BaseAnalyzer):
    """Profiles when, where and with what fuel the user refuels."""

    def __init__(self, catalog: Optional[VehicleCatalog] = None):
        super().__init__(catalog)
        self._gap_analyzer = GapAnalyzer(catalog)

    @property
    def name(self) -> str:
        return "Fueling Habits"

    @property
    def description(self) -> str:
        return "Preferred days, time of day, fuel types and locations"

    def analyze(self, entries: Sequence[FuelEntry], now: Optional[datetime] = None) -> FuelingHabits:
        if not entries:
            return FuelingHabits()

        gaps = self._gap_analyzer.analyze(entries, now)

        return FuelingHabits(
            preferred_days=self._preferred_days(entries),
            preferred_time_range=self._preferred_time_range(entries),
            average_refill_amount=mean([e.liters for e in entries]),
            refill_frequency=self.classify_frequency(gaps.average_gap),
            fuel_type_preference=percentages(
                dict(Counter(e.fuel_type for e in entries)), len(entries)
            ),
            location_patterns=self._location_patterns(entries),
        )

    @staticmethod
    def classify_frequency(average_gap: float) -> RefillFrequency:
        if average_gap < FREQUENT_GAP_DAYS:
            return RefillFrequency.FREQUENT
        if average_gap > INFREQUENT_GAP_DAYS:
            return RefillFrequency.INFREQUENT
        return RefillFrequency.MODERATE

    @staticmethod
    def _preferred_days(entries: Sequence[FuelEntry]) -> List[str]:
        """Top days of the week by refill count, ties going to the earlier day."""
        day_counts = Counter(sunday_weekday(e.date) for e in entries)
        ranked = sorted(day_counts.items(), key=lambda item: (-item[1], item[0]))
        return [DAY_NAMES[day] for day, _ in ranked[:PREFERRED_DAY_COUNT]]

    @staticmethod
    def _preferred_time_range(entries: Sequence[FuelEntry]) -> TimeOfDay:
        # Based on when the entry was recorded, not the refuel date
        counts = {part: 0 for part in TimeOfDay}
        for entry in entries:
            counts[time_of_day(entry.created_at)] += 1
        # max() keeps the first of equal counts, i.e. morning before afternoon
        return max(counts, key=counts.get)

    @staticmethod
    def _location_patterns(entries: Sequence[FuelEntry]) -> Dict[str, float]:
        located = [e.location for e in entries if e.location]
        return percentages(dict(Counter(located)), len(located))
