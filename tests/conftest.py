"""Pytest fixtures for fuel tracker tests."""

from datetime import datetime, timedelta

import pytest

from fuel_tracker.models.entry import FuelEntry
from fuel_tracker.storage.store import FuelStore

# Wednesday
NOW = datetime(2024, 3, 20, 12, 0)


def make_entry(
    date: datetime,
    liters: float = 10.0,
    vehicle_type: str = "car",
    fuel_type: str = "pertalite",
    odometer: float = 0.0,
    price_per_liter: float = 10000.0,
    total_amount: float = None,
    location: str = None,
    created_at: datetime = None,
) -> FuelEntry:
    """Build a stored entry with sensible defaults."""
    return FuelEntry(
        date=date,
        vehicle_type=vehicle_type,
        fuel_type=fuel_type,
        liters=liters,
        price_per_liter=price_per_liter,
        total_amount=liters * price_per_liter if total_amount is None else total_amount,
        odometer=odometer,
        location=location,
        created_at=created_at or date,
        updated_at=created_at or date,
    )


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def car_pair():
    """Two car refills ten days apart, 120 km on the odometer."""
    d1 = datetime(2024, 3, 1, 9, 0)
    return [
        make_entry(d1, liters=10, odometer=1000),
        make_entry(d1 + timedelta(days=10), liters=10, odometer=1120),
    ]


@pytest.fixture
def car_pair_no_movement():
    """Same as car_pair but the odometer never moved."""
    d1 = datetime(2024, 3, 1, 9, 0)
    return [
        make_entry(d1, liters=10, odometer=1000),
        make_entry(d1 + timedelta(days=10), liters=10, odometer=1000),
    ]


@pytest.fixture
def mixed_entries():
    """A handful of entries across vehicles, fuels and locations."""
    base = datetime(2024, 2, 5, 8, 0)
    return [
        make_entry(base, liters=30, odometer=10000, location="Shell Sudirman"),
        make_entry(base + timedelta(days=8), liters=25, odometer=10350, fuel_type="pertamax",
                   location="Shell Sudirman"),
        make_entry(base + timedelta(days=9), liters=4, vehicle_type="motorcycle", odometer=2000),
        make_entry(base + timedelta(days=16), liters=28, odometer=10700, location="Pertamina Kuningan"),
        make_entry(base + timedelta(days=20), liters=5, vehicle_type="motorcycle", odometer=2110,
                   fuel_type="pertamax"),
        make_entry(base + timedelta(days=30), liters=12, vehicle_type="custom-gone", odometer=500),
    ]


@pytest.fixture
def store(tmp_path):
    """Empty store in a temporary directory."""
    return FuelStore(data_dir=tmp_path)
