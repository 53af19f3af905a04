"""Base analyzer class and shared helpers for fuel analysis."""

import statistics
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, List, Optional, Sequence

from ..models.catalog import VehicleCatalog
from ..models.entry import FuelEntry

SECONDS_PER_DAY = 86400


def sort_by_date(entries: Sequence[FuelEntry]) -> List[FuelEntry]:
    """Return a new list ordered by refuel date, oldest first."""
    return sorted(entries, key=lambda e: e.date)


def total_liters(entries: Sequence[FuelEntry]) -> float:
    return sum(e.liters for e in entries)


def total_amount(entries: Sequence[FuelEntry]) -> float:
    return sum(e.total_amount for e in entries)


def safe_ratio(numerator: float, denominator: float) -> float:
    """Divide, yielding 0 instead of a division error or NaN."""
    if not denominator:
        return 0.0
    return numerator / denominator


def mean(values: Sequence[float]) -> float:
    """Arithmetic mean, 0 for an empty sequence."""
    if not values:
        return 0.0
    return float(statistics.mean(values))


def days_between(later: datetime, earlier: datetime) -> int:
    """Whole days from ``earlier`` to ``later``, truncated toward zero."""
    return int((later - earlier).total_seconds() / SECONDS_PER_DAY)


class BaseAnalyzer(ABC):
    """Abstract base class for all fuel analyzers."""

    def __init__(self, catalog: Optional[VehicleCatalog] = None):
        self._catalog = catalog or VehicleCatalog()

    @property
    def catalog(self) -> VehicleCatalog:
        return self._catalog

    @property
    @abstractmethod
    def name(self) -> str:
        """Analyzer name for display."""
        pass

    @property
    @abstractmethod
    def description(self) -> str:
        """Analyzer description."""
        pass

    @abstractmethod
    def analyze(self, entries: Sequence[FuelEntry], now: Optional[datetime] = None) -> Any:
        """
        Derive a view from a snapshot of entries.

        Args:
            entries: Fuel entries, in any order. Never modified.
            now: Reference instant, defaults to the current time

        Returns:
            The analyzer's result model
        """
        pass

    def total_co2(self, entries: Sequence[FuelEntry]) -> float:
        """Sum of CO2 in kg, looking up each entry's own vehicle type."""
        return sum(self._catalog.co2_for(e.liters, e.vehicle_type) for e in entries)
