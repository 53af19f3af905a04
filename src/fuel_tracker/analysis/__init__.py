"""Analysis engines for fuel entries."""

from .base import BaseAnalyzer
from .distance import DistanceEstimator, estimate_odometer
from .gaps import GapAnalyzer
from .habits import HabitProfiler
from .efficiency import DriveSmarterAnalyzer, DriveFurtherAnalyzer
from .vehicles import VehicleAggregator
from .periods import PeriodAnalyzer, time_period_presets
from .engine import FuelAnalyticsEngine

__all__ = [
    "BaseAnalyzer",
    "DistanceEstimator",
    "estimate_odometer",
    "GapAnalyzer",
    "HabitProfiler",
    "DriveSmarterAnalyzer",
    "DriveFurtherAnalyzer",
    "VehicleAggregator",
    "PeriodAnalyzer",
    "time_period_presets",
    "FuelAnalyticsEngine",
]
