"""Stateless facade over the individual fuel analyzers."""

from datetime import date, datetime
from typing import List, Optional, Sequence

from .distance import DistanceEstimator, estimate_odometer
from .efficiency import DriveSmarterAnalyzer, DriveFurtherAnalyzer
from .gaps import GapAnalyzer
from .habits import HabitProfiler
from .periods import PeriodAnalyzer, filter_by_period, entries_on_date, time_period_presets
from .vehicles import VehicleAggregator, fuel_type_distribution, vehicle_type_distribution
from ..models.catalog import VehicleCatalog
from ..models.entry import FuelEntry
from ..models.stats import (
    Dashboard,
    DriveFurtherRefillLess,
    DriveSmarter,
    FuelingHabits,
    FuelSummary,
    GapAnalysis,
    MonthlyStats,
    TimePeriod,
    VehicleAnalysis,
)


class FuelAnalyticsEngine:
    """
    Derives every statistic from a snapshot of fuel entries.

    The engine holds no entries of its own: each call receives the current
    collection and recomputes from scratch. Only the vehicle catalog, used
    for CO2 factors and display names, is bound at construction.
    """

    def __init__(self, catalog: Optional[VehicleCatalog] = None):
        self._catalog = catalog or VehicleCatalog()
        self._distance = DistanceEstimator(self._catalog)
        self._gaps = GapAnalyzer(self._catalog)
        self._habits = HabitProfiler(self._catalog)
        self._drive_smarter = DriveSmarterAnalyzer(self._catalog)
        self._drive_further = DriveFurtherAnalyzer(self._catalog)
        self._vehicles = VehicleAggregator(self._catalog)
        self._periods = PeriodAnalyzer(self._catalog)

    @property
    def catalog(self) -> VehicleCatalog:
        return self._catalog

    def distance(self, entries: Sequence[FuelEntry]) -> float:
        return self._distance.analyze(entries)

    def estimate_odometer(
        self, entries: Sequence[FuelEntry], vehicle_type: str, now: Optional[datetime] = None
    ) -> float:
        return estimate_odometer(entries, vehicle_type, now)

    def gap_analysis(self, entries: Sequence[FuelEntry], now: Optional[datetime] = None) -> GapAnalysis:
        return self._gaps.analyze(entries, now)

    def fueling_habits(self, entries: Sequence[FuelEntry], now: Optional[datetime] = None) -> FuelingHabits:
        return self._habits.analyze(entries, now)

    def drive_smarter(self, entries: Sequence[FuelEntry], now: Optional[datetime] = None) -> DriveSmarter:
        return self._drive_smarter.analyze(entries, now)

    def drive_further(self, entries: Sequence[FuelEntry]) -> DriveFurtherRefillLess:
        return self._drive_further.analyze(entries)

    def vehicle_analysis(self, entries: Sequence[FuelEntry]) -> List[VehicleAnalysis]:
        return self._vehicles.analyze(entries)

    def monthly_stats(self, entries: Sequence[FuelEntry], moment: date) -> MonthlyStats:
        return self._periods.monthly_stats(entries, moment)

    def current_month_stats(self, entries: Sequence[FuelEntry], now: Optional[datetime] = None) -> MonthlyStats:
        return self._periods.analyze(entries, now)

    def recent_monthly_stats(
        self, entries: Sequence[FuelEntry], now: Optional[datetime] = None, months: int = 6
    ) -> List[MonthlyStats]:
        return self._periods.recent_monthly_stats(entries, now, months)

    def summary(self, entries: Sequence[FuelEntry], start: datetime, end: datetime) -> FuelSummary:
        return self._periods.summary(entries, start, end)

    def entries_by_period(self, entries: Sequence[FuelEntry], period: TimePeriod) -> List[FuelEntry]:
        return filter_by_period(entries, period.start_date, period.end_date)

    def entries_by_date(self, entries: Sequence[FuelEntry], day: date) -> List[FuelEntry]:
        return entries_on_date(entries, day)

    def time_period_presets(self, now: Optional[datetime] = None) -> List[TimePeriod]:
        return time_period_presets(now)

    def dashboard(self, entries: Sequence[FuelEntry], now: Optional[datetime] = None) -> Dashboard:
        """Compute every view over one snapshot."""
        now = now or datetime.now()

        return Dashboard(
            generated_at=now,
            entry_count=len(entries),
            current_month=self.current_month_stats(entries, now),
            recent_months=self.recent_monthly_stats(entries, now),
            gap_analysis=self.gap_analysis(entries, now),
            fueling_habits=self.fueling_habits(entries, now),
            drive_smarter=self.drive_smarter(entries, now),
            drive_further=self.drive_further(entries),
            vehicles=self.vehicle_analysis(entries),
            fuel_type_distribution=fuel_type_distribution(entries),
            vehicle_type_distribution=vehicle_type_distribution(entries),
            periods=self.time_period_presets(now),
            last_refill=max((e.date for e in entries), default=None),
        )
