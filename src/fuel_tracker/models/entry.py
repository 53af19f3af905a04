"""Data models for refuelling entries."""

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel
from datetime import datetime
from uuid import uuid4


def to_local_naive(value: datetime) -> datetime:
    """Convert an offset-aware datetime to naive local time; naive values pass through."""
    if value.tzinfo is None:
        return value
    return value.astimezone().replace(tzinfo=None)


class FuelEntryCreate(BaseModel):
    """A refuelling event as submitted by the user, before it is stored."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    date: datetime = Field(..., description="When the refuel happened")
    vehicle_type: str = Field(..., min_length=1, description="Vehicle catalog id")
    fuel_type: str = Field(..., min_length=1, description="Fuel catalog id")

    liters: float = Field(..., ge=0.0)
    price_per_liter: float = Field(..., ge=0.0)
    total_amount: Optional[float] = Field(default=None, ge=0.0, description="Amount paid, Rupiah")
    odometer: float = Field(default=0.0, ge=0.0, description="Odometer reading in km")

    location: Optional[str] = Field(default=None)
    notes: Optional[str] = Field(default=None)

    @field_validator("date")
    @classmethod
    def _naive_date(cls, value: datetime) -> datetime:
        return to_local_naive(value)

    @model_validator(mode="after")
    def _fill_total_amount(self) -> "FuelEntryCreate":
        if self.total_amount is None:
            self.total_amount = self.liters * self.price_per_liter
        return self


class FuelEntry(BaseModel):
    """A recorded refuelling event."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    id: str = Field(default_factory=lambda: str(uuid4()))

    date: datetime = Field(..., description="When the refuel happened")
    vehicle_type: str = Field(..., description="Vehicle catalog id")
    fuel_type: str = Field(..., description="Fuel catalog id")

    liters: float = Field(..., ge=0.0)
    price_per_liter: float = Field(..., ge=0.0)
    total_amount: float = Field(..., ge=0.0, description="Amount paid, stored independently")
    odometer: float = Field(default=0.0, ge=0.0)

    location: Optional[str] = Field(default=None)
    notes: Optional[str] = Field(default=None)

    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    @field_validator("date", "created_at", "updated_at")
    @classmethod
    def _naive_timestamps(cls, value: datetime) -> datetime:
        # Stored and compared as naive local time
        return to_local_naive(value)

    @classmethod
    def from_draft(cls, draft: FuelEntryCreate, now: Optional[datetime] = None) -> "FuelEntry":
        """Create a new entry with a fresh id and bookkeeping timestamps."""
        now = now or datetime.now()
        return cls(created_at=now, updated_at=now, **draft.model_dump())

    def with_changes(self, now: Optional[datetime] = None, **changes) -> "FuelEntry":
        """Return an edited copy; ``id`` and ``created_at`` cannot change."""
        changes.pop("id", None)
        changes.pop("created_at", None)
        data = self.model_dump()
        data.update(changes)
        data["updated_at"] = now or datetime.now()
        return FuelEntry.model_validate(data)

    @property
    def has_location(self) -> bool:
        return bool(self.location)

    def to_export_dict(self) -> dict:
        """Convert to the camelCase JSON shape used by backups."""
        return self.model_dump(mode="json", by_alias=True)
