"""Distance estimation from odometer readings or fuel burned."""

from datetime import datetime
from typing import Optional, Sequence

from .base import BaseAnalyzer, sort_by_date, total_liters, safe_ratio, days_between
from ..models.entry import FuelEntry

# Odometer spreads at or above this are treated as typos
MAX_PLAUSIBLE_DISTANCE = 50000

# Fallback km/L when the odometer cannot be trusted
CAR_KM_PER_LITER = 12
MOTORCYCLE_KM_PER_LITER = 25

# Average daily distance used to suggest an odometer reading
CAR_KM_PER_DAY = 30
MOTORCYCLE_KM_PER_DAY = 20


class DistanceEstimator(BaseAnalyzer):
    """Estimates distance travelled, tolerating missing or bad odometer data."""

    @property
    def name(self) -> str:
        return "Distance Estimator"

    @property
    def description(self) -> str:
        return "Resolves distance travelled from odometer readings or fuel consumption"

    def analyze(self, entries: Sequence[FuelEntry], now: Optional[datetime] = None) -> float:
        """Return the distance in km covered by ``entries``, never negative."""
        if len(entries) < 2:
            return 0.0

        sorted_entries = sort_by_date(entries)
        readings = [e.odometer for e in sorted_entries]
        odometer_distance = max(readings) - min(readings)

        if 0 < odometer_distance < MAX_PLAUSIBLE_DISTANCE:
            return odometer_distance

        # Users often don't know their odometer reading, so fall back to
        # a consumption-based estimate
        if any(e.vehicle_type == "motorcycle" for e in sorted_entries):
            km_per_liter = MOTORCYCLE_KM_PER_LITER
        else:
            km_per_liter = CAR_KM_PER_LITER

        return total_liters(sorted_entries) * km_per_liter

    def efficiency(self, entries: Sequence[FuelEntry]) -> float:
        """Distance per liter, 0 when it cannot be computed."""
        if len(entries) < 2:
            return 0.0
        return safe_ratio(self.analyze(entries), total_liters(entries))


def estimate_odometer(
    recent_entries: Sequence[FuelEntry],
    vehicle_type: str,
    now: Optional[datetime] = None,
) -> float:
    """
    Suggest an odometer reading for a new entry.

    Adds an average daily distance for every whole day since the most
    recent entry to that entry's reading.

    Args:
        recent_entries: Previous entries, any order
        vehicle_type: Vehicle type of the entry being recorded
        now: Reference instant

    Returns:
        Estimated reading, or 0 if there are no previous entries
    """
    if not recent_entries:
        return 0.0

    now = now or datetime.now()
    last_entry = sort_by_date(recent_entries)[-1]
    days_since = max(days_between(now, last_entry.date), 0)

    per_day = MOTORCYCLE_KM_PER_DAY if vehicle_type == "motorcycle" else CAR_KM_PER_DAY
    return last_entry.odometer + days_since * per_day
