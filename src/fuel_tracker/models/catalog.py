"""Reference data for fuel and vehicle types."""

from typing import Optional, List, Dict, Iterable
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


CUSTOM_VEHICLE_PREFIX = "custom-"


class FuelType(BaseModel):
    """A fuel product sold at the pump."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    id: str = Field(..., description="Catalog identifier")
    name: str = Field(..., description="Display name")
    octane_rating: int = Field(default=0, description="RON rating, 0 for diesel")
    price_per_liter: float = Field(..., description="Reference pump price in Rupiah")
    color: str = Field(default="#6b7280", description="Display color")
    description: str = Field(default="")


class VehicleType(BaseModel):
    """A vehicle category and its CO2 emission factor."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str = Field(..., description="Catalog identifier")
    name: str = Field(..., description="Display name")
    icon: str = Field(default="car", description="Icon tag")
    co2_per_liter: float = Field(..., ge=0.0, description="kg CO2 emitted per liter burned")

    @property
    def is_custom(self) -> bool:
        """Check if this is a user-defined vehicle type."""
        return self.id.startswith(CUSTOM_VEHICLE_PREFIX)


FUEL_TYPES: List[FuelType] = [
    FuelType(
        id="pertalite",
        name="Pertalite",
        octane_rating=90,
        price_per_liter=10000,
        color="#4ade80",
        description="RON 90 gasoline",
    ),
    FuelType(
        id="pertamax",
        name="Pertamax",
        octane_rating=92,
        price_per_liter=12400,
        color="#3b82f6",
        description="RON 92 gasoline for better engine performance",
    ),
    FuelType(
        id="pertamax-turbo",
        name="Pertamax Turbo",
        octane_rating=98,
        price_per_liter=13700,
        color="#8b5cf6",
        description="Premium RON 98 gasoline",
    ),
    FuelType(
        id="pertamax-green-95",
        name="Pertamax Green 95",
        octane_rating=95,
        price_per_liter=13400,
        color="#10b981",
        description="RON 95 bioethanol blend",
    ),
    FuelType(
        id="solar",
        name="Solar",
        octane_rating=0,  # Diesel has no octane rating
        price_per_liter=5150,
        color="#f59e0b",
        description="Diesel for diesel engines",
    ),
    FuelType(
        id="pertamina-dex",
        name="Pertamina Dex",
        octane_rating=0,
        price_per_liter=13300,
        color="#ef4444",
        description="Premium diesel with cleaning additives",
    ),
    FuelType(
        id="premium",
        name="Premium",
        octane_rating=88,
        price_per_liter=6800,
        color="#6b7280",
        description="RON 88 gasoline (no longer widely sold)",
    ),
]

VEHICLE_TYPES: List[VehicleType] = [
    VehicleType(id="car", name="Car", icon="car", co2_per_liter=2.3),
    VehicleType(id="motorcycle", name="Motorcycle", icon="bike", co2_per_liter=1.8),
    VehicleType(id="truck", name="Truck", icon="truck", co2_per_liter=2.7),
    VehicleType(id="suv", name="SUV", icon="car", co2_per_liter=2.5),
]

_FUEL_TYPES_BY_ID: Dict[str, FuelType] = {fuel.id: fuel for fuel in FUEL_TYPES}


def get_fuel_type(fuel_id: str) -> Optional[FuelType]:
    """Look up a fuel type by id."""
    return _FUEL_TYPES_BY_ID.get(fuel_id)


def format_rupiah(amount: float) -> str:
    """Format an amount as Indonesian Rupiah, e.g. ``Rp 12.400``."""
    return "Rp " + f"{round(amount):,}".replace(",", ".")


class VehicleCatalog:
    """Built-in vehicle types plus the user's custom ones."""

    def __init__(self, custom_types: Optional[Iterable[VehicleType]] = None):
        self._types: Dict[str, VehicleType] = {v.id: v for v in VEHICLE_TYPES}
        for vehicle in custom_types or []:
            self._types.setdefault(vehicle.id, vehicle)

    def __contains__(self, vehicle_id: str) -> bool:
        return vehicle_id in self._types

    def all(self) -> List[VehicleType]:
        """All vehicle types, built-ins first."""
        return list(self._types.values())

    def get(self, vehicle_id: str) -> Optional[VehicleType]:
        return self._types.get(vehicle_id)

    def name_for(self, vehicle_id: str) -> str:
        """Display name, falling back to the raw id for unknown types."""
        vehicle = self._types.get(vehicle_id)
        return vehicle.name if vehicle else vehicle_id

    def co2_for(self, liters: float, vehicle_id: str) -> float:
        """
        CO2 in kg for burning ``liters`` in the given vehicle type.

        Unknown vehicle types (e.g. a deleted custom type) emit 0.
        """
        vehicle = self._types.get(vehicle_id)
        return liters * vehicle.co2_per_liter if vehicle else 0.0
