"""Table display utilities for the fuel tracker."""

from typing import List, Optional, Sequence
from rich.table import Table
from rich.console import Console

from ..models.catalog import FuelType, VehicleCatalog, VehicleType, format_rupiah, get_fuel_type
from ..models.entry import FuelEntry
from ..models.stats import MonthlyStats, VehicleAnalysis, FuelSummary, GapAnalysis, FuelingHabits


class TableDisplay:
    """Create and display formatted tables."""

    def __init__(self, console: Optional[Console] = None):
        self._console = console or Console()

    def entries_table(
        self,
        entries: Sequence[FuelEntry],
        catalog: VehicleCatalog,
        title: str = "Fuel Entries",
    ) -> Table:
        """Create a table of fuel entries, newest first."""
        table = Table(title=title, show_header=True, header_style="bold cyan")

        table.add_column("ID", style="dim", width=10)
        table.add_column("Date", width=12)
        table.add_column("Vehicle", width=14)
        table.add_column("Fuel", width=16)
        table.add_column("Liters", justify="right", width=8)
        table.add_column("Amount", justify="right", style="green", width=14)
        table.add_column("Odometer", justify="right", width=10)
        table.add_column("Location", style="dim")

        for entry in sorted(entries, key=lambda e: e.date, reverse=True):
            fuel = get_fuel_type(entry.fuel_type)
            table.add_row(
                entry.id[:8],
                entry.date.strftime("%Y-%m-%d"),
                catalog.name_for(entry.vehicle_type),
                fuel.name if fuel else entry.fuel_type,
                f"{entry.liters:.2f}",
                format_rupiah(entry.total_amount),
                f"{entry.odometer:,.0f}",
                entry.location or "-",
            )

        return table

    def monthly_table(self, stats: List[MonthlyStats], title: str = "Monthly Statistics") -> Table:
        """Create a table with one row per month."""
        table = Table(title=title, show_header=True, header_style="bold cyan")

        table.add_column("Month", style="cyan bold", width=16)
        table.add_column("Refills", justify="right", width=8)
        table.add_column("Liters", justify="right", width=10)
        table.add_column("Amount", justify="right", style="green", width=14)
        table.add_column("CO2 (kg)", justify="right", style="yellow", width=10)
        table.add_column("km/L", justify="right", width=8)
        table.add_column("Avg gap", justify="right", width=8)

        for month in stats:
            table.add_row(
                f"{month.month} {month.year}",
                str(month.refill_count),
                f"{month.total_liters:.1f}",
                format_rupiah(month.total_amount),
                f"{month.co2_emissions:.1f}",
                f"{month.efficiency:.1f}",
                f"{month.average_gap_days:.1f}",
            )

        return table

    def vehicle_analysis_table(self, vehicles: List[VehicleAnalysis]) -> Table:
        """Create a table of per-vehicle summaries."""
        table = Table(title="Vehicle Analysis", show_header=True, header_style="bold cyan")

        table.add_column("Vehicle", style="cyan bold", width=16)
        table.add_column("Refills", justify="right", width=8)
        table.add_column("Liters", justify="right", width=10)
        table.add_column("Amount", justify="right", style="green", width=14)
        table.add_column("km/L", justify="right", width=8)
        table.add_column("CO2 (kg)", justify="right", style="yellow", width=10)
        table.add_column("Last refill", width=12)

        for vehicle in vehicles:
            table.add_row(
                vehicle.vehicle_name,
                str(vehicle.total_entries),
                f"{vehicle.total_liters:.1f}",
                format_rupiah(vehicle.total_amount),
                f"{vehicle.average_efficiency:.1f}",
                f"{vehicle.co2_emissions:.1f}",
                vehicle.last_refill.strftime("%Y-%m-%d"),
            )

        return table

    def gap_table(self, gaps: GapAnalysis) -> Table:
        """Create a table of refill gap figures."""
        table = Table(title="Gap Analysis", show_header=True, header_style="bold cyan")

        table.add_column("Metric", style="cyan")
        table.add_column("Days", justify="right")

        table.add_row("Since last refill", str(gaps.current_gap))
        table.add_row("Longest gap", str(gaps.longest_gap))
        table.add_row("Average gap", f"{gaps.average_gap:.1f}")
        table.add_row("Total gap days", str(gaps.total_gap_days))

        return table

    def habits_table(self, habits: FuelingHabits) -> Table:
        """Create a table of fueling habits."""
        table = Table(title="Fueling Habits", show_header=True, header_style="bold cyan")

        table.add_column("Habit", style="cyan")
        table.add_column("Value", style="white")

        table.add_row("Preferred days", ", ".join(habits.preferred_days) or "-")
        table.add_row("Preferred time", habits.preferred_time_range.value)
        table.add_row("Average refill", f"{habits.average_refill_amount:.1f} L")
        table.add_row("Refill frequency", habits.refill_frequency.value)

        for fuel_id, share in habits.fuel_type_preference.items():
            fuel = get_fuel_type(fuel_id)
            table.add_row(f"Fuel: {fuel.name if fuel else fuel_id}", f"{share:.0f}%")

        for location, share in habits.location_patterns.items():
            table.add_row(f"Location: {location}", f"{share:.0f}%")

        return table

    def summary_table(self, summary: FuelSummary, title: str = "Period Summary") -> Table:
        """Create a table for a date-range summary."""
        table = Table(title=title, show_header=True, header_style="bold cyan")

        table.add_column("Metric", style="cyan")
        table.add_column("Value", justify="right")

        table.add_row(
            "Period",
            f"{summary.period_start:%Y-%m-%d} - {summary.period_end:%Y-%m-%d}",
        )
        table.add_row("Refills", str(summary.total_refills))
        table.add_row("Liters", f"{summary.total_liters:.1f}")
        table.add_row("Amount", format_rupiah(summary.total_amount))
        table.add_row("Average price / L", format_rupiah(summary.average_price_per_liter))
        table.add_row("Average per refill", format_rupiah(
            summary.total_amount / summary.total_refills if summary.total_refills else 0
        ))
        table.add_row("CO2 (kg)", f"{summary.total_co2_emissions:.1f}")

        return table

    def vehicle_types_table(self, vehicles: List[VehicleType]) -> Table:
        """Create a table of vehicle types."""
        table = Table(title="Vehicle Types", show_header=True, header_style="bold cyan")

        table.add_column("ID", style="cyan bold")
        table.add_column("Name", width=20)
        table.add_column("Icon", style="dim")
        table.add_column("CO2 kg/L", justify="right")
        table.add_column("Custom", width=8)

        for vehicle in vehicles:
            table.add_row(
                vehicle.id,
                vehicle.name,
                vehicle.icon,
                f"{vehicle.co2_per_liter:.2f}",
                "[green]Yes[/green]" if vehicle.is_custom else "[dim]No[/dim]",
            )

        return table

    def fuel_types_table(self, fuels: List[FuelType]) -> Table:
        """Create a table of the fuel catalog."""
        table = Table(title="Fuel Types", show_header=True, header_style="bold cyan")

        table.add_column("ID", style="cyan bold")
        table.add_column("Name", width=18)
        table.add_column("RON", justify="right", width=5)
        table.add_column("Price / L", justify="right", style="green")
        table.add_column("Description", style="dim")

        for fuel in fuels:
            table.add_row(
                fuel.id,
                f"[{fuel.color}]{fuel.name}[/]",
                str(fuel.octane_rating) if fuel.octane_rating else "-",
                format_rupiah(fuel.price_per_liter),
                fuel.description,
            )

        return table

    def show(self, table: Table) -> None:
        """Display a table to the console."""
        self._console.print(table)
        self._console.print()
