"""Local persistence of fuel entries and custom vehicle types."""

import logging
from pathlib import Path
from datetime import datetime
from typing import Optional, Tuple, Union
from uuid import uuid4

from pydantic import ValidationError

from .backup import ImportPayload, backup_filename, export_json, parse_import
from ..models.catalog import CUSTOM_VEHICLE_PREFIX, VehicleCatalog, VehicleType
from ..models.entry import FuelEntry, FuelEntryCreate

logger = logging.getLogger(__name__)


class FuelStore:
    """
    Owns the entry collection and custom vehicle types.

    Collections are immutable tuples. Every change builds a new tuple,
    swaps it in and saves, so readers always see a whole snapshot.
    """

    DEFAULT_DATA_DIR = Path.home() / ".fuel-tracker"
    STORE_FILENAME = "fuel-data.json"

    def __init__(self, data_dir: Optional[Path] = None, autoload: bool = True):
        """
        Initialize the store.

        Args:
            data_dir: Directory holding the store file
            autoload: Load existing data from disk
        """
        self._data_dir = Path(data_dir) if data_dir else self.DEFAULT_DATA_DIR
        self._data_dir.mkdir(parents=True, exist_ok=True)

        self._entries: Tuple[FuelEntry, ...] = ()
        self._custom_vehicle_types: Tuple[VehicleType, ...] = ()

        if autoload:
            self.load()

    @property
    def data_dir(self) -> Path:
        return self._data_dir

    @property
    def path(self) -> Path:
        """Path of the store file."""
        return self._data_dir / self.STORE_FILENAME

    @property
    def entries(self) -> Tuple[FuelEntry, ...]:
        """Current snapshot of entries, in insertion order."""
        return self._entries

    @property
    def custom_vehicle_types(self) -> Tuple[VehicleType, ...]:
        return self._custom_vehicle_types

    @property
    def catalog(self) -> VehicleCatalog:
        """Built-in plus custom vehicle types."""
        return VehicleCatalog(self._custom_vehicle_types)

    # ============ Persistence ============

    def load(self) -> None:
        """
        Load state from disk.

        A missing file leaves the store empty. A file that fails validation
        is moved aside so the next save cannot overwrite it.
        """
        if not self.path.exists():
            return

        try:
            text = self.path.read_text(encoding="utf-8")
        except OSError as e:
            logger.error(f"Could not read store {self.path}: {e}")
            return

        try:
            payload = parse_import(text)
        except ValueError as e:
            quarantined = self.quarantine()
            logger.warning(f"Store {self.path} is invalid ({e}); moved it to {quarantined}")
            return

        self._apply(payload)
        logger.debug(f"Loaded {len(self._entries)} entries from {self.path}")

    def quarantine(self, now: Optional[datetime] = None) -> Path:
        """Rename the store file out of the way and return its new path."""
        now = now or datetime.now()
        target = self.path.with_name(f"{self.STORE_FILENAME}.corrupt-{now.strftime('%Y%m%d-%H%M%S-%f')}")
        self.path.rename(target)
        return target

    def save(self) -> None:
        """Write the current state to disk."""
        self.path.write_text(
            export_json(self._entries, self._custom_vehicle_types),
            encoding="utf-8",
        )

    def _apply(self, payload: ImportPayload) -> None:
        if payload.fuel_entries is not None:
            self._entries = tuple(payload.fuel_entries)
        if payload.custom_vehicle_types is not None:
            self._custom_vehicle_types = tuple(payload.custom_vehicle_types)

    # ============ Entries ============

    def add_entry(self, draft: FuelEntryCreate, now: Optional[datetime] = None) -> FuelEntry:
        """
        Record a new refuelling event.

        Args:
            draft: User-submitted entry data
            now: Creation timestamp

        Returns:
            The stored entry with its id and timestamps
        """
        entry = FuelEntry.from_draft(draft, now)
        self._entries = self._entries + (entry,)
        self.save()
        logger.info(f"Added fuel entry {entry.id}")
        return entry

    def get_entry(self, entry_id: str) -> Optional[FuelEntry]:
        for entry in self._entries:
            if entry.id == entry_id:
                return entry
        return None

    def update_entry(
        self, entry_id: str, now: Optional[datetime] = None, **changes
    ) -> Optional[FuelEntry]:
        """
        Edit an entry in place.

        Args:
            entry_id: Entry to edit
            now: Update timestamp
            **changes: Field values to replace

        Returns:
            The updated entry, or None if no entry has that id
        """
        current = self.get_entry(entry_id)
        if current is None:
            return None

        try:
            updated = current.with_changes(now=now, **changes)
        except ValidationError as e:
            logger.error(f"Rejected update to entry {entry_id}: {e}")
            raise

        self._entries = tuple(updated if e.id == entry_id else e for e in self._entries)
        self.save()
        logger.info(f"Updated fuel entry {entry_id}")
        return updated

    def delete_entry(self, entry_id: str) -> bool:
        """
        Delete an entry.

        Returns:
            True if deleted, False if no entry had that id
        """
        remaining = tuple(e for e in self._entries if e.id != entry_id)
        if len(remaining) == len(self._entries):
            return False

        self._entries = remaining
        self.save()
        logger.info(f"Deleted fuel entry {entry_id}")
        return True

    # ============ Vehicle types ============

    def add_custom_vehicle_type(self, name: str, co2_per_liter: float, icon: str = "car") -> VehicleType:
        """Create a user-defined vehicle type."""
        vehicle = VehicleType(
            id=f"{CUSTOM_VEHICLE_PREFIX}{uuid4().hex[:8]}",
            name=name,
            icon=icon,
            co2_per_liter=co2_per_liter,
        )
        self._custom_vehicle_types = self._custom_vehicle_types + (vehicle,)
        self.save()
        logger.info(f"Added custom vehicle type {vehicle.id} ({name})")
        return vehicle

    def delete_custom_vehicle_type(self, vehicle_id: str) -> bool:
        """
        Delete a custom vehicle type. Built-in types cannot be deleted.

        Entries that still reference the deleted type are kept and
        contribute 0 CO2 from then on.

        Returns:
            True if deleted, False otherwise
        """
        if not vehicle_id.startswith(CUSTOM_VEHICLE_PREFIX):
            logger.warning(f"Refusing to delete built-in vehicle type {vehicle_id}")
            return False

        remaining = tuple(v for v in self._custom_vehicle_types if v.id != vehicle_id)
        if len(remaining) == len(self._custom_vehicle_types):
            return False

        self._custom_vehicle_types = remaining
        self.save()
        logger.info(f"Deleted custom vehicle type {vehicle_id}")
        return True

    # ============ Data management ============

    def export_data(self, now: Optional[datetime] = None) -> str:
        """Backup document for the current state."""
        return export_json(self._entries, self._custom_vehicle_types, now)

    def export_to(self, output_path: Optional[Union[str, Path]] = None, now: Optional[datetime] = None) -> Path:
        """
        Write a backup document to disk.

        Args:
            output_path: Destination file (auto-named in the data dir if None)
            now: Export timestamp

        Returns:
            Path of the written file
        """
        filepath = Path(output_path) if output_path else self._data_dir / backup_filename(now)
        filepath.write_text(self.export_data(now), encoding="utf-8")
        logger.info(f"Exported {len(self._entries)} entries to {filepath}")
        return filepath

    def import_data(self, text: str) -> ImportPayload:
        """
        Replace state from a backup document.

        Fields present in the document replace the current ones wholesale;
        absent fields are left untouched.

        Raises:
            DataImportError: If the document is invalid. Nothing is applied.
        """
        payload = parse_import(text)
        self._apply(payload)
        self.save()
        logger.info(
            f"Imported {len(payload.fuel_entries or [])} entries and "
            f"{len(payload.custom_vehicle_types or [])} custom vehicle types"
        )
        return payload

    def import_from(self, filepath: Union[str, Path]) -> ImportPayload:
        """Import a backup document from a file."""
        return self.import_data(Path(filepath).read_text(encoding="utf-8"))

    def reset(self) -> None:
        """Delete all entries and custom vehicle types."""
        self._entries = ()
        self._custom_vehicle_types = ()
        if self.path.exists():
            self.path.unlink()
        logger.info("Reset all fuel data")

    def snapshot(self) -> dict:
        """Summary of stored data."""
        return {
            "entries": len(self._entries),
            "custom_vehicle_types": len(self._custom_vehicle_types),
            "path": str(self.path),
            "exists": self.path.exists(),
        }
