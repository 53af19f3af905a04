"""Date-range filtering and calendar-month rollups."""

import calendar
from datetime import date, datetime, time, timedelta
from typing import List, Optional, Sequence, Tuple

from .base import BaseAnalyzer, total_liters, total_amount, safe_ratio
from .distance import DistanceEstimator
from .gaps import GapAnalyzer
from ..models.catalog import VehicleCatalog
from ..models.entry import FuelEntry
from ..models.stats import MonthlyStats, FuelSummary, TimePeriod

RECENT_MONTHS = 6


def filter_by_period(
    entries: Sequence[FuelEntry], start: datetime, end: datetime
) -> List[FuelEntry]:
    """Entries whose date lies in ``[start, end]``, bounds inclusive."""
    return [e for e in entries if start <= e.date <= end]


def entries_on_date(entries: Sequence[FuelEntry], day: date) -> List[FuelEntry]:
    """Entries recorded on the given calendar day."""
    if isinstance(day, datetime):
        day = day.date()
    return [e for e in entries if e.date.date() == day]


def month_bounds(moment: date) -> Tuple[datetime, datetime]:
    """First and last instant of the calendar month containing ``moment``."""
    last_day = calendar.monthrange(moment.year, moment.month)[1]
    start = datetime(moment.year, moment.month, 1)
    end = datetime.combine(date(moment.year, moment.month, last_day), time.max)
    return start, end


def shift_month(moment: date, months: int) -> date:
    """First day of the month ``months`` away from ``moment``."""
    index = moment.year * 12 + (moment.month - 1) + months
    return date(index // 12, index % 12 + 1, 1)


def time_period_presets(now: Optional[datetime] = None) -> List[TimePeriod]:
    """The named date ranges offered for filtering, relative to ``now``."""
    now = now or datetime.now()
    this_start, this_end = month_bounds(now)
    last_start, last_end = month_bounds(shift_month(now, -1))

    return [
        TimePeriod(key="7d", label="Last 7 days", days=7,
                   start_date=now - timedelta(days=7), end_date=now),
        TimePeriod(key="30d", label="Last 30 days", days=30,
                   start_date=now - timedelta(days=30), end_date=now),
        TimePeriod(key="this-month", label="This month", days=0,
                   start_date=this_start, end_date=this_end),
        TimePeriod(key="last-month", label="Last month", days=0,
                   start_date=last_start, end_date=last_end),
    ]


class PeriodAnalyzer(BaseAnalyzer):
    """Aggregates entries over calendar months and arbitrary ranges."""

    def __init__(self, catalog: Optional[VehicleCatalog] = None):
        super().__init__(catalog)
        self._distance = DistanceEstimator(catalog)
        self._gaps = GapAnalyzer(catalog)

    @property
    def name(self) -> str:
        return "Monthly Statistics"

    @property
    def description(self) -> str:
        return "Spend, liters, CO2 and efficiency for a calendar month"

    def analyze(self, entries: Sequence[FuelEntry], now: Optional[datetime] = None) -> MonthlyStats:
        """Stats for the month containing ``now``."""
        return self.monthly_stats(entries, now or datetime.now())

    def monthly_stats(self, entries: Sequence[FuelEntry], moment: date) -> MonthlyStats:
        start, end = month_bounds(moment)
        month_entries = filter_by_period(entries, start, end)

        liters = total_liters(month_entries)
        distance = self._distance.analyze(month_entries)

        return MonthlyStats(
            month=calendar.month_name[moment.month],
            year=moment.year,
            total_amount=total_amount(month_entries),
            total_liters=liters,
            refill_count=len(month_entries),
            co2_emissions=self.total_co2(month_entries),
            efficiency=safe_ratio(distance, liters),
            average_gap_days=self._gaps.analyze(month_entries).average_gap,
            total_distance=distance,
        )

    def recent_monthly_stats(
        self,
        entries: Sequence[FuelEntry],
        now: Optional[datetime] = None,
        months: int = RECENT_MONTHS,
    ) -> List[MonthlyStats]:
        """Stats for the last ``months`` calendar months, oldest first."""
        now = now or datetime.now()
        return [
            self.monthly_stats(entries, shift_month(now, -offset))
            for offset in range(months - 1, -1, -1)
        ]

    def summary(self, entries: Sequence[FuelEntry], start: datetime, end: datetime) -> FuelSummary:
        """Totals for entries dated within ``[start, end]``."""
        period_entries = filter_by_period(entries, start, end)
        liters = total_liters(period_entries)
        amount = total_amount(period_entries)

        return FuelSummary(
            total_amount=amount,
            total_liters=liters,
            total_refills=len(period_entries),
            average_price_per_liter=safe_ratio(amount, liters),
            total_co2_emissions=self.total_co2(period_entries),
            period_start=start,
            period_end=end,
        )
