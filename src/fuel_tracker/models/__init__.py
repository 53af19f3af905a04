"""Data models for the fuel tracker."""

from .catalog import FuelType, VehicleType, VehicleCatalog, FUEL_TYPES, VEHICLE_TYPES
from .entry import FuelEntry, FuelEntryCreate
from .stats import (
    GapTrend,
    EfficiencyTrend,
    RefillFrequency,
    TimeOfDay,
    GapAnalysis,
    FuelingHabits,
    DriveSmarter,
    DriveFurtherRefillLess,
    PotentialSavings,
    VehicleAnalysis,
    MonthlyStats,
    FuelSummary,
    TimePeriod,
    Dashboard,
)

__all__ = [
    "FuelType",
    "VehicleType",
    "VehicleCatalog",
    "FUEL_TYPES",
    "VEHICLE_TYPES",
    "FuelEntry",
    "FuelEntryCreate",
    "GapTrend",
    "EfficiencyTrend",
    "RefillFrequency",
    "TimeOfDay",
    "GapAnalysis",
    "FuelingHabits",
    "DriveSmarter",
    "DriveFurtherRefillLess",
    "PotentialSavings",
    "VehicleAnalysis",
    "MonthlyStats",
    "FuelSummary",
    "TimePeriod",
    "Dashboard",
]
