"""Backup document export and import."""

import json
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence

from pydantic import ValidationError

from ..exceptions import DataImportError
from ..models.catalog import VehicleType
from ..models.entry import FuelEntry

logger = logging.getLogger(__name__)

BACKUP_VERSION = "2.0"


@dataclass
class ImportPayload:
    """
    Validated contents of an import document.

    A field is None when the document did not carry it, in which case the
    existing state for that field must be left alone.
    """

    fuel_entries: Optional[List[FuelEntry]] = None
    custom_vehicle_types: Optional[List[VehicleType]] = None

    @property
    def is_empty(self) -> bool:
        return self.fuel_entries is None and self.custom_vehicle_types is None


def backup_filename(now: Optional[datetime] = None) -> str:
    """Default file name for an export."""
    now = now or datetime.now()
    return f"eco-fuel-backup-{now.strftime('%Y-%m-%d-%H%M')}.json"


def build_export(
    entries: Sequence[FuelEntry],
    custom_vehicle_types: Sequence[VehicleType],
    now: Optional[datetime] = None,
) -> Dict[str, Any]:
    """
    Build the backup document.

    Args:
        entries: Fuel entries to export
        custom_vehicle_types: User-defined vehicle types
        now: Export timestamp

    Returns:
        JSON-ready dictionary
    """
    now = now or datetime.now()
    return {
        "fuelEntries": [e.to_export_dict() for e in entries],
        "customVehicleTypes": [v.model_dump(mode="json", by_alias=True) for v in custom_vehicle_types],
        "exportDate": now.isoformat(),
        "version": BACKUP_VERSION,
    }


def export_json(
    entries: Sequence[FuelEntry],
    custom_vehicle_types: Sequence[VehicleType],
    now: Optional[datetime] = None,
) -> str:
    """Serialize the backup document to indented JSON."""
    return json.dumps(build_export(entries, custom_vehicle_types, now), indent=2)


def parse_import(text: str) -> ImportPayload:
    """
    Parse and validate an import document.

    The whole document is validated before anything is returned, so a
    caller applying the payload never applies half of it.

    Args:
        text: JSON document text

    Returns:
        ImportPayload with the fields present in the document

    Raises:
        DataImportError: If the text is not JSON, is not an object, or
            contains an invalid entry or vehicle type
    """
    try:
        data = json.loads(text)
    except (json.JSONDecodeError, TypeError) as e:
        logger.error(f"Import document is not valid JSON: {e}")
        raise DataImportError(f"Could not parse import data: {e}") from e

    if not isinstance(data, dict):
        raise DataImportError("Import data must be a JSON object")

    payload = ImportPayload()

    raw_entries = data.get("fuelEntries")
    if isinstance(raw_entries, list):
        payload.fuel_entries = _validate_list(FuelEntry, raw_entries, "fuel entry")

    raw_vehicles = data.get("customVehicleTypes")
    if isinstance(raw_vehicles, list):
        payload.custom_vehicle_types = _validate_list(VehicleType, raw_vehicles, "vehicle type")

    if data.get("version") not in (None, BACKUP_VERSION):
        logger.warning(f"Importing backup version {data.get('version')}, expected {BACKUP_VERSION}")

    return payload


def _validate_list(model, items: List[Any], label: str) -> list:
    validated = []
    for index, item in enumerate(items):
        try:
            validated.append(model.model_validate(item))
        except ValidationError as e:
            logger.error(f"Invalid {label} at position {index}: {e}")
            raise DataImportError(f"Invalid {label} at position {index}") from e
    return validated
