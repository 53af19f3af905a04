"""Per-vehicle aggregation."""

from collections import Counter
from datetime import datetime
from typing import Dict, List, Optional, Sequence

from .base import BaseAnalyzer, total_liters, total_amount, safe_ratio
from .distance import DistanceEstimator
from ..models.catalog import VehicleCatalog
from ..models.entry import FuelEntry
from ..models.stats import VehicleAnalysis


def group_by_vehicle(entries: Sequence[FuelEntry]) -> Dict[str, List[FuelEntry]]:
    """Group entries by vehicle type id, in first-seen order."""
    groups: Dict[str, List[FuelEntry]] = {}
    for entry in entries:
        groups.setdefault(entry.vehicle_type, []).append(entry)
    return groups


def fuel_type_distribution(entries: Sequence[FuelEntry]) -> Dict[str, int]:
    """Number of entries per fuel type id."""
    return dict(Counter(e.fuel_type for e in entries))


def vehicle_type_distribution(entries: Sequence[FuelEntry]) -> Dict[str, int]:
    """Number of entries per vehicle type id."""
    return dict(Counter(e.vehicle_type for e in entries))


class VehicleAggregator(BaseAnalyzer):
    """Summarizes spend, consumption and emissions per vehicle."""

    def __init__(self, catalog: Optional[VehicleCatalog] = None):
        super().__init__(catalog)
        self._distance = DistanceEstimator(catalog)

    @property
    def name(self) -> str:
        return "Vehicle Analysis"

    @property
    def description(self) -> str:
        return "Totals, efficiency and CO2 grouped by vehicle"

    def analyze(
        self, entries: Sequence[FuelEntry], now: Optional[datetime] = None
    ) -> List[VehicleAnalysis]:
        return [
            self._summarize(vehicle_id, group)
            for vehicle_id, group in group_by_vehicle(entries).items()
        ]

    def _summarize(self, vehicle_id: str, group: List[FuelEntry]) -> VehicleAnalysis:
        liters = total_liters(group)

        return VehicleAnalysis(
            vehicle_id=vehicle_id,
            vehicle_name=self.catalog.name_for(vehicle_id),
            total_entries=len(group),
            total_amount=total_amount(group),
            total_liters=liters,
            average_efficiency=safe_ratio(self._distance.analyze(group), liters),
            co2_emissions=self.total_co2(group),
            last_refill=max(e.date for e in group),
            average_refill_amount=liters / len(group),
        )
