"""Data persistence and backups."""

from .store import FuelStore
from .backup import ImportPayload, build_export, export_json, parse_import

__all__ = ["FuelStore", "ImportPayload", "build_export", "export_json", "parse_import"]
