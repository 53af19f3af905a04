"""Data models for derived fuel statistics."""

from enum import Enum
from typing import Optional, List, Dict
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from datetime import datetime


class GapTrend(str, Enum):
    """Direction of the time between refills."""
    IMPROVING = "improving"    # Recent gaps shorter than before
    WORSENING = "worsening"    # Recent gaps longer than before
    STABLE = "stable"


class EfficiencyTrend(str, Enum):
    """Direction of km per liter over recent refills."""
    IMPROVING = "improving"
    DECLINING = "declining"
    STABLE = "stable"


class RefillFrequency(str, Enum):
    """How often the user refuels."""
    FREQUENT = "frequent"      # Average gap under a week
    MODERATE = "moderate"
    INFREQUENT = "infrequent"  # Average gap over two weeks


class TimeOfDay(str, Enum):
    """Part of the day an entry was recorded."""
    MORNING = "morning"
    AFTERNOON = "afternoon"
    EVENING = "evening"


class StatsModel(BaseModel):
    """Base for derived results: camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class GapAnalysis(StatsModel):
    """Time between consecutive refills."""

    current_gap: int = Field(default=0, description="Days since the last refill")
    longest_gap: int = Field(default=0, description="Longest period between refills")
    total_gap_days: int = Field(default=0, description="Sum of all gaps")
    average_gap: float = Field(default=0.0, description="Average days between refills")
    gap_trend: GapTrend = Field(default=GapTrend.STABLE)


class FuelingHabits(StatsModel):
    """When, where and what the user refuels."""

    preferred_days: List[str] = Field(default_factory=list, description="Most common refill days")
    preferred_time_range: TimeOfDay = Field(default=TimeOfDay.MORNING)
    average_refill_amount: float = Field(default=0.0, description="Average liters per refill")
    refill_frequency: RefillFrequency = Field(default=RefillFrequency.MODERATE)
    fuel_type_preference: Dict[str, float] = Field(default_factory=dict, description="Percent by fuel type")
    location_patterns: Dict[str, float] = Field(default_factory=dict, description="Percent by location")


class DriveSmarter(StatsModel):
    """Efficiency trend, savings potential and driving score."""

    efficiency_trend: EfficiencyTrend = Field(default=EfficiencyTrend.STABLE)
    fuel_savings_potential: float = Field(default=0.0, description="Estimated savings in Rupiah")
    co2_reduction_potential: float = Field(default=0.0, description="Estimated CO2 reduction in kg")
    recommendations: List[str] = Field(default_factory=list)
    driving_score: int = Field(default=75, ge=0, le=100)


class PotentialSavings(StatsModel):
    liters_per_month: float = 0.0
    amount_per_month: float = 0.0
    co2_reduction_per_month: float = 0.0


class DriveFurtherRefillLess(StatsModel):
    """Savings if efficiency reached the improvement target."""

    current_efficiency: float = Field(default=0.0, description="Current km/L")
    target_efficiency: float = Field(default=0.0, description="Target km/L")
    potential_savings: PotentialSavings = Field(default_factory=PotentialSavings)
    tips: List[str] = Field(default_factory=list)
    progress_to_target: float = Field(default=0.0, description="Percent of target reached")


class VehicleAnalysis(StatsModel):
    """Per-vehicle summary."""

    vehicle_id: str
    vehicle_name: str
    total_entries: int
    total_amount: float
    total_liters: float
    average_efficiency: float
    co2_emissions: float
    last_refill: datetime
    average_refill_amount: float


class MonthlyStats(StatsModel):
    """Totals for one calendar month."""

    month: str
    year: int
    total_amount: float = 0.0
    total_liters: float = 0.0
    refill_count: int = 0
    co2_emissions: float = 0.0
    efficiency: float = 0.0
    average_gap_days: float = 0.0
    total_distance: float = 0.0


class FuelSummary(StatsModel):
    """Totals for an arbitrary date range."""

    total_amount: float = 0.0
    total_liters: float = 0.0
    total_refills: int = 0
    average_price_per_liter: float = 0.0
    total_co2_emissions: float = 0.0
    period_start: datetime
    period_end: datetime


class TimePeriod(StatsModel):
    """A named date range used for filtering."""

    key: str = Field(..., description="Short name used on the command line")
    label: str
    days: int = Field(default=0, description="Rolling window length, 0 for calendar periods")
    start_date: datetime
    end_date: datetime


class Dashboard(StatsModel):
    """Every derived view over one snapshot of entries."""

    generated_at: datetime
    entry_count: int
    current_month: MonthlyStats
    recent_months: List[MonthlyStats] = Field(default_factory=list)
    gap_analysis: GapAnalysis
    fueling_habits: FuelingHabits
    drive_smarter: DriveSmarter
    drive_further: DriveFurtherRefillLess
    vehicles: List[VehicleAnalysis] = Field(default_factory=list)
    fuel_type_distribution: Dict[str, int] = Field(default_factory=dict)
    vehicle_type_distribution: Dict[str, int] = Field(default_factory=dict)
    periods: List[TimePeriod] = Field(default_factory=list)
    last_refill: Optional[datetime] = None
