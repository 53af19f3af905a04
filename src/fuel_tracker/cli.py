"""Fuel tracker CLI application."""

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError

from .analysis.engine import FuelAnalyticsEngine
from .analysis.periods import time_period_presets
from .display.console import console as display_console
from .display.tables import TableDisplay
from .exceptions import DataImportError
from .models.catalog import FUEL_TYPES, get_fuel_type, format_rupiah
from .models.entry import FuelEntry, FuelEntryCreate
from .storage.store import FuelStore

logger = logging.getLogger(__name__)

DATE_FORMATS = ["%Y-%m-%d", "%Y-%m-%d %H:%M", "%Y-%m-%dT%H:%M:%S"]


# Create Typer apps
app = typer.Typer(
    name="fuel-tracker",
    help="Fuel Tracker - Log refuels, track spending and CO2, and get driving insights",
    no_args_is_help=True,
)

analyze_app = typer.Typer(help="Fuel analytics")
vehicle_app = typer.Typer(help="Vehicle type management")
data_app = typer.Typer(help="Backup, restore and reset")

app.add_typer(analyze_app, name="analyze")
app.add_typer(vehicle_app, name="vehicle")
app.add_typer(data_app, name="data")

_table_display = TableDisplay(display_console.rich_console)


@app.callback()
def main(
    ctx: typer.Context,
    data_dir: Optional[Path] = typer.Option(
        None, "--data-dir", envvar="FUEL_TRACKER_HOME", help="Directory holding the fuel data file"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-V", help="Enable debug logging"),
):
    """Fuel Tracker."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    ctx.obj = FuelStore(data_dir)
    logger.debug(f"Using fuel data file {ctx.obj.path}")


def get_store(ctx: typer.Context) -> FuelStore:
    """Store created by the app callback."""
    return ctx.obj


def get_engine(store: FuelStore) -> FuelAnalyticsEngine:
    """Engine bound to the store's current vehicle catalog."""
    return FuelAnalyticsEngine(store.catalog)


def resolve_entry(store: FuelStore, entry_id: str) -> FuelEntry:
    """Find an entry by full id or unique id prefix, exiting on failure."""
    matches = [e for e in store.entries if e.id == entry_id]
    if not matches:
        matches = [e for e in store.entries if e.id.startswith(entry_id)]

    if len(matches) == 1:
        return matches[0]

    if matches:
        display_console.error(f"Entry id is ambiguous: {entry_id}")
    else:
        display_console.error(f"Entry not found: {entry_id}")
    raise typer.Exit(1)


def check_catalog_ids(store: FuelStore, vehicle: Optional[str], fuel: Optional[str]) -> None:
    """Exit when a given vehicle or fuel id is not in the catalogs."""
    if vehicle is not None and vehicle not in store.catalog:
        display_console.error(f"Unknown vehicle type: {vehicle}")
        raise typer.Exit(1)

    if fuel is not None and get_fuel_type(fuel) is None:
        display_console.error(f"Unknown fuel type: {fuel}")
        raise typer.Exit(1)


# ============ Entry Commands ============

@app.command()
def add(
    ctx: typer.Context,
    vehicle: str = typer.Option(..., "--vehicle", "-v", help="Vehicle type id (see 'vehicle list')"),
    fuel: str = typer.Option(..., "--fuel", "-f", help="Fuel type id (see 'fuels')"),
    liters: float = typer.Option(..., "--liters", "-l", min=0.0, help="Liters filled"),
    price: Optional[float] = typer.Option(None, "--price", "-p", min=0.0, help="Price per liter (catalog price if omitted)"),
    total: Optional[float] = typer.Option(None, "--total", "-t", min=0.0, help="Amount paid (liters x price if omitted)"),
    odometer: Optional[float] = typer.Option(None, "--odometer", "-o", min=0.0, help="Odometer reading in km (estimated if omitted)"),
    date: Optional[datetime] = typer.Option(None, "--date", "-d", formats=DATE_FORMATS, help="Refuel date (today if omitted)"),
    location: Optional[str] = typer.Option(None, "--location", help="Station or area"),
    notes: Optional[str] = typer.Option(None, "--notes", help="Free text notes"),
):
    """Record a refuel."""
    store = get_store(ctx)
    engine = get_engine(store)

    check_catalog_ids(store, vehicle, fuel)
    fuel_type = get_fuel_type(fuel)

    if price is None:
        price = fuel_type.price_per_liter

    if odometer is None:
        vehicle_entries = [e for e in store.entries if e.vehicle_type == vehicle]
        odometer = engine.estimate_odometer(vehicle_entries, vehicle)
        if odometer:
            display_console.info(f"Using estimated odometer reading: {odometer:,.0f} km")

    try:
        draft = FuelEntryCreate(
            date=date or datetime.now(),
            vehicle_type=vehicle,
            fuel_type=fuel,
            liters=liters,
            price_per_liter=price,
            total_amount=total,
            odometer=odometer,
            location=location,
            notes=notes,
        )
    except ValidationError as e:
        display_console.error(f"Invalid entry: {e}")
        raise typer.Exit(1)

    entry = store.add_entry(draft)
    display_console.success(
        f"Recorded {entry.liters:.2f} L of {fuel_type.name} for "
        f"{format_rupiah(entry.total_amount)} (id {entry.id[:8]})"
    )


@app.command("list")
def list_entries(
    ctx: typer.Context,
    date: Optional[datetime] = typer.Option(None, "--date", "-d", formats=DATE_FORMATS, help="Only entries on this day"),
    limit: int = typer.Option(20, "--limit", "-n", help="Number of entries to show"),
):
    """List recorded refuels, newest first."""
    store = get_store(ctx)
    entries = list(store.entries)

    if date:
        entries = get_engine(store).entries_by_date(entries, date)

    if not entries:
        display_console.info("No fuel entries found")
        return

    entries = sorted(entries, key=lambda e: e.date, reverse=True)[:limit]
    _table_display.show(_table_display.entries_table(entries, store.catalog))


@app.command()
def edit(
    ctx: typer.Context,
    entry_id: str = typer.Argument(..., help="Entry id or id prefix"),
    vehicle: Optional[str] = typer.Option(None, "--vehicle", "-v"),
    fuel: Optional[str] = typer.Option(None, "--fuel", "-f"),
    liters: Optional[float] = typer.Option(None, "--liters", "-l", min=0.0),
    price: Optional[float] = typer.Option(None, "--price", "-p", min=0.0),
    total: Optional[float] = typer.Option(None, "--total", "-t", min=0.0),
    odometer: Optional[float] = typer.Option(None, "--odometer", "-o", min=0.0),
    date: Optional[datetime] = typer.Option(None, "--date", "-d", formats=DATE_FORMATS),
    location: Optional[str] = typer.Option(None, "--location"),
    notes: Optional[str] = typer.Option(None, "--notes"),
):
    """Edit a recorded refuel."""
    store = get_store(ctx)
    entry = resolve_entry(store, entry_id)
    check_catalog_ids(store, vehicle, fuel)

    changes = {
        "vehicle_type": vehicle,
        "fuel_type": fuel,
        "liters": liters,
        "price_per_liter": price,
        "total_amount": total,
        "odometer": odometer,
        "date": date,
        "location": location,
        "notes": notes,
    }
    changes = {key: value for key, value in changes.items() if value is not None}

    if not changes:
        display_console.warning("Nothing to change")
        return

    try:
        store.update_entry(entry.id, **changes)
    except ValidationError as e:
        display_console.error(f"Invalid change: {e}")
        raise typer.Exit(1)

    display_console.success(f"Updated entry {entry.id[:8]}")


@app.command()
def delete(
    ctx: typer.Context,
    entry_id: str = typer.Argument(..., help="Entry id or id prefix"),
):
    """Delete a recorded refuel."""
    store = get_store(ctx)
    entry = resolve_entry(store, entry_id)

    if store.delete_entry(entry.id):
        display_console.success(f"Deleted entry {entry.id[:8]}")
    else:
        display_console.error(f"Failed to delete entry: {entry_id}")
        raise typer.Exit(1)


# ============ Statistics Commands ============

@app.command()
def stats(
    ctx: typer.Context,
    month: Optional[str] = typer.Option(None, "--month", "-m", help="Month as YYYY-MM (current month if omitted)"),
    months: int = typer.Option(6, "--months", help="Number of months in the history table"),
):
    """Show monthly statistics."""
    store = get_store(ctx)
    engine = get_engine(store)

    if month:
        try:
            moment = datetime.strptime(month, "%Y-%m")
        except ValueError:
            display_console.error(f"Invalid month: {month} (expected YYYY-MM)")
            raise typer.Exit(1)
    else:
        moment = datetime.now()

    current = engine.monthly_stats(store.entries, moment)

    display_console.header(f"{current.month} {current.year}")
    display_console.status_panel("Monthly Statistics", {
        "Refills": current.refill_count,
        "Liters": f"{current.total_liters:.1f} L",
        "Amount": format_rupiah(current.total_amount),
        "CO2": f"{current.co2_emissions:.1f} kg",
        "Distance": f"{current.total_distance:,.0f} km",
        "Efficiency": f"{current.efficiency:.1f} km/L",
        "Average gap": f"{current.average_gap_days:.1f} days",
    })

    history = engine.recent_monthly_stats(store.entries, moment, months)
    _table_display.show(_table_display.monthly_table(history, title=f"Last {months} Months"))


@app.command()
def period(
    ctx: typer.Context,
    preset: str = typer.Argument("30d", help="Period preset: 7d, 30d, this-month, last-month"),
    show_entries: bool = typer.Option(False, "--entries", "-e", help="Also list the entries"),
):
    """Summarize a preset time period."""
    store = get_store(ctx)
    engine = get_engine(store)

    presets = {p.key: p for p in time_period_presets()}
    selected = presets.get(preset)
    if selected is None:
        display_console.error(f"Unknown period: {preset}. Choose from: {', '.join(presets)}")
        raise typer.Exit(1)

    summary = engine.summary(store.entries, selected.start_date, selected.end_date)
    display_console.header(selected.label)
    _table_display.show(_table_display.summary_table(summary, title=selected.label))

    if show_entries:
        entries = engine.entries_by_period(store.entries, selected)
        if entries:
            _table_display.show(_table_display.entries_table(entries, store.catalog))


@app.command()
def fuels():
    """List the fuel type catalog."""
    _table_display.show(_table_display.fuel_types_table(FUEL_TYPES))


# ============ Analyze Commands ============

@analyze_app.command("gaps")
def analyze_gaps(ctx: typer.Context):
    """Analyze time between refills."""
    store = get_store(ctx)
    gaps = get_engine(store).gap_analysis(store.entries)

    display_console.header("Gap Analysis")
    _table_display.show(_table_display.gap_table(gaps))
    display_console.trend("Trend", gaps.gap_trend.value)


@analyze_app.command("habits")
def analyze_habits(ctx: typer.Context):
    """Analyze fueling habits."""
    store = get_store(ctx)
    habits = get_engine(store).fueling_habits(store.entries)

    display_console.header("Fueling Habits")
    _table_display.show(_table_display.habits_table(habits))


@analyze_app.command("drive")
def analyze_drive(ctx: typer.Context):
    """Efficiency trend, driving score and savings potential."""
    store = get_store(ctx)
    engine = get_engine(store)
    smarter = engine.drive_smarter(store.entries)
    further = engine.drive_further(store.entries)

    display_console.header("Drive Smarter")
    display_console.print(f"  [bold]Driving score:[/bold] [highlight]{smarter.driving_score}/100[/highlight]")
    display_console.trend("Efficiency trend", smarter.efficiency_trend.value)
    display_console.print(f"  [bold]Savings potential:[/bold] [amount]{format_rupiah(smarter.fuel_savings_potential)}[/amount]")
    display_console.print(f"  [bold]CO2 reduction potential:[/bold] [co2]{smarter.co2_reduction_potential:.1f} kg[/co2]")

    display_console.subheader("Recommendations")
    display_console.bullet_list(smarter.recommendations)

    display_console.header("Drive Further, Refill Less")
    display_console.status_panel("Efficiency", {
        "Current": f"{further.current_efficiency:.1f} km/L",
        "Target": f"{further.target_efficiency:.1f} km/L",
        "Progress": f"{further.progress_to_target:.0f}%",
        "Liters saved": f"{further.potential_savings.liters_per_month:.1f} L",
        "Amount saved": format_rupiah(further.potential_savings.amount_per_month),
        "CO2 avoided": f"{further.potential_savings.co2_reduction_per_month:.1f} kg",
    })
    display_console.subheader("Tips")
    display_console.bullet_list(further.tips)


@analyze_app.command("vehicles")
def analyze_vehicles(ctx: typer.Context):
    """Break down spending and emissions per vehicle."""
    store = get_store(ctx)
    vehicles = get_engine(store).vehicle_analysis(store.entries)

    if not vehicles:
        display_console.info("No fuel entries found")
        return

    display_console.header("Vehicle Analysis")
    _table_display.show(_table_display.vehicle_analysis_table(vehicles))


@analyze_app.command("all")
def analyze_all(ctx: typer.Context):
    """Run all analyzers."""
    analyze_gaps(ctx)
    analyze_habits(ctx)
    analyze_drive(ctx)
    analyze_vehicles(ctx)


@analyze_app.command("json")
def analyze_json(ctx: typer.Context):
    """Print every derived view as JSON."""
    store = get_store(ctx)
    dashboard = get_engine(store).dashboard(store.entries)
    typer.echo(dashboard.model_dump_json(by_alias=True, indent=2))


# ============ Vehicle Commands ============

@vehicle_app.command("list")
def vehicle_list(ctx: typer.Context):
    """List built-in and custom vehicle types."""
    store = get_store(ctx)
    _table_display.show(_table_display.vehicle_types_table(store.catalog.all()))


@vehicle_app.command("add")
def vehicle_add(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Vehicle type name"),
    co2_per_liter: float = typer.Option(..., "--co2", "-c", min=0.0, help="kg CO2 per liter"),
    icon: str = typer.Option("car", "--icon", help="Icon tag"),
):
    """Add a custom vehicle type."""
    store = get_store(ctx)
    vehicle = store.add_custom_vehicle_type(name, co2_per_liter, icon)
    display_console.success(f"Added vehicle type {vehicle.name} ({vehicle.id})")


@vehicle_app.command("delete")
def vehicle_delete(
    ctx: typer.Context,
    vehicle_id: str = typer.Argument(..., help="Custom vehicle type id"),
):
    """Delete a custom vehicle type."""
    store = get_store(ctx)

    if store.delete_custom_vehicle_type(vehicle_id):
        display_console.success(f"Deleted vehicle type {vehicle_id}")
    else:
        display_console.error(f"Cannot delete vehicle type: {vehicle_id} (built-in or not found)")
        raise typer.Exit(1)


# ============ Data Commands ============

@data_app.command("export")
def data_export(
    ctx: typer.Context,
    output: Optional[str] = typer.Option(None, "--output", "-o", help="Output file path"),
):
    """Export all data to a JSON backup."""
    store = get_store(ctx)
    filepath = store.export_to(output)
    display_console.success(f"Exported to: {filepath}")


@data_app.command("import")
def data_import(
    ctx: typer.Context,
    file: Path = typer.Argument(..., exists=True, dir_okay=False, help="Backup file to restore"),
):
    """Replace current data with a JSON backup."""
    store = get_store(ctx)

    try:
        payload = store.import_from(file)
    except DataImportError as e:
        display_console.error(f"Import failed: {e}")
        raise typer.Exit(1)

    if payload.is_empty:
        display_console.warning("Backup contained no fuel entries or vehicle types")
        return

    display_console.success(
        f"Imported {len(store.entries)} entries and "
        f"{len(store.custom_vehicle_types)} custom vehicle types"
    )


@data_app.command("reset")
def data_reset(
    ctx: typer.Context,
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
):
    """Delete all entries and custom vehicle types."""
    store = get_store(ctx)

    if not yes and not display_console.confirm("Delete all fuel data?"):
        display_console.info("Cancelled")
        return

    store.reset()
    display_console.success("All data has been deleted")


@data_app.command("info")
def data_info(ctx: typer.Context):
    """Show where data is stored."""
    store = get_store(ctx)
    snapshot = store.snapshot()
    display_console.status_panel("Fuel Data", {
        "File": snapshot["path"],
        "Entries": snapshot["entries"],
        "Custom vehicle types": snapshot["custom_vehicle_types"],
    })


# ============ Version Command ============

@app.command()
def version():
    """Show version information."""
    from . import __version__
    display_console.print(f"Fuel Tracker v{__version__}")


if __name__ == "__main__":
    app()
