"""Tests for the fuel store and backup documents."""

import json
from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from fuel_tracker.analysis.engine import FuelAnalyticsEngine
from fuel_tracker.exceptions import DataImportError
from fuel_tracker.models.entry import FuelEntry, FuelEntryCreate
from fuel_tracker.storage.backup import BACKUP_VERSION, backup_filename, build_export, parse_import
from fuel_tracker.storage.store import FuelStore


def draft(**overrides) -> FuelEntryCreate:
    data = {
        "date": datetime(2024, 3, 1, 9, 0),
        "vehicle_type": "car",
        "fuel_type": "pertalite",
        "liters": 10,
        "price_per_liter": 10000,
        "odometer": 1000,
        "location": "Shell Sudirman",
    }
    data.update(overrides)
    return FuelEntryCreate(**data)


class TestEntries:

    def test_add_assigns_id_and_timestamps(self, store):
        created = datetime(2024, 3, 1, 10, 0)
        entry = store.add_entry(draft(), now=created)

        assert entry.id
        assert entry.created_at == created
        assert entry.updated_at == created
        assert store.entries == (entry,)

    def test_total_defaults_to_liters_times_price(self, store):
        entry = store.add_entry(draft(liters=12.5, price_per_liter=12400))
        assert entry.total_amount == pytest.approx(155000)

    def test_explicit_total_is_kept(self, store):
        entry = store.add_entry(draft(total_amount=99999))
        assert entry.total_amount == 99999

    def test_entries_persist(self, store, tmp_path):
        entry = store.add_entry(draft())

        reloaded = FuelStore(data_dir=tmp_path)
        assert reloaded.entries == (entry,)

    def test_update(self, store):
        entry = store.add_entry(draft(), now=datetime(2024, 3, 1, 10, 0))
        edited_at = datetime(2024, 3, 2, 8, 0)

        updated = store.update_entry(entry.id, now=edited_at, liters=20, notes="full tank")

        assert updated.id == entry.id
        assert updated.liters == 20
        assert updated.notes == "full tank"
        assert updated.created_at == entry.created_at
        assert updated.updated_at == edited_at
        # Stored total is independent of liters
        assert updated.total_amount == entry.total_amount
        assert store.get_entry(entry.id) == updated

    def test_update_cannot_change_id(self, store):
        entry = store.add_entry(draft())
        updated = store.update_entry(entry.id, id="other")
        assert updated.id == entry.id

    def test_update_unknown(self, store):
        assert store.update_entry("missing", liters=5) is None

    def test_update_rejects_invalid_values(self, store):
        entry = store.add_entry(draft())
        with pytest.raises(ValidationError):
            store.update_entry(entry.id, liters=-1)
        assert store.get_entry(entry.id) == entry

    def test_delete(self, store):
        entry = store.add_entry(draft())

        assert store.delete_entry(entry.id) is True
        assert store.entries == ()
        assert store.delete_entry(entry.id) is False

    def test_snapshots_are_not_mutated(self, store):
        store.add_entry(draft())
        snapshot = store.entries

        store.add_entry(draft(liters=5))
        store.delete_entry(snapshot[0].id)

        assert len(snapshot) == 1
        assert len(store.entries) == 1


class TestVehicleTypes:

    def test_add_custom(self, store):
        vehicle = store.add_custom_vehicle_type("Van", 3.1, icon="truck")

        assert vehicle.id.startswith("custom-")
        assert vehicle.is_custom
        assert store.catalog.get(vehicle.id) == vehicle
        assert store.custom_vehicle_types == (vehicle,)

    def test_delete_custom(self, store):
        vehicle = store.add_custom_vehicle_type("Van", 3.1)

        assert store.delete_custom_vehicle_type(vehicle.id) is True
        assert vehicle.id not in store.catalog
        assert store.delete_custom_vehicle_type(vehicle.id) is False

    def test_builtin_cannot_be_deleted(self, store):
        assert store.delete_custom_vehicle_type("car") is False
        assert "car" in store.catalog

    def test_entries_survive_deleted_type(self, store):
        vehicle = store.add_custom_vehicle_type("Van", 3.1)
        store.add_entry(draft(vehicle_type=vehicle.id))

        store.delete_custom_vehicle_type(vehicle.id)

        assert len(store.entries) == 1
        assert store.catalog.co2_for(10, vehicle.id) == 0


class TestBackup:

    def test_export_shape(self, store):
        store.add_entry(draft())
        exported_at = datetime(2024, 3, 5, 14, 30)

        data = build_export(store.entries, store.custom_vehicle_types, now=exported_at)

        assert set(data) == {"fuelEntries", "customVehicleTypes", "exportDate", "version"}
        assert data["version"] == BACKUP_VERSION == "2.0"
        assert data["exportDate"] == "2024-03-05T14:30:00"
        entry = data["fuelEntries"][0]
        assert entry["vehicleType"] == "car"
        assert entry["pricePerLiter"] == 10000
        assert entry["date"] == "2024-03-01T09:00:00"

    def test_backup_filename(self):
        assert backup_filename(datetime(2024, 3, 5, 14, 30)) == "eco-fuel-backup-2024-03-05-1430.json"

    def test_round_trip(self, store, tmp_path):
        store.add_entry(draft())
        store.add_entry(draft(liters=7.25, location=None, notes="half tank"))
        store.add_custom_vehicle_type("Van", 3.1)

        other = FuelStore(data_dir=tmp_path / "other")
        other.import_data(store.export_data())

        assert other.entries == store.entries
        assert other.custom_vehicle_types == store.custom_vehicle_types

    def test_export_to_file(self, store, tmp_path):
        store.add_entry(draft())
        path = store.export_to(tmp_path / "backup.json")

        other = FuelStore(data_dir=tmp_path / "other")
        other.import_from(path)
        assert other.entries == store.entries

    def test_import_replaces_instead_of_merging(self, store):
        store.add_entry(draft())
        document = {"fuelEntries": [FuelEntry(**draft(liters=3).model_dump()).to_export_dict()]}

        store.import_data(json.dumps(document))

        assert len(store.entries) == 1
        assert store.entries[0].liters == 3

    def test_import_converts_dates(self):
        payload = parse_import(json.dumps({
            "fuelEntries": [{
                "id": "1700000000000",
                "date": "2024-03-01T09:00:00.000Z",
                "vehicleType": "car",
                "fuelType": "pertalite",
                "liters": 10,
                "pricePerLiter": 10000,
                "totalAmount": 100000,
                "odometer": 1000,
                "createdAt": "2024-03-01T09:05:00.000Z",
                "updatedAt": "2024-03-01T09:05:00.000Z",
            }],
        }))

        entry = payload.fuel_entries[0]
        expected = datetime(2024, 3, 1, 9, 0, tzinfo=timezone.utc).astimezone().replace(tzinfo=None)
        assert entry.date == expected
        assert entry.date.tzinfo is None
        assert entry.created_at.tzinfo is None
        assert entry.updated_at.tzinfo is None
        assert payload.custom_vehicle_types is None

    def test_absent_fields_are_left_alone(self, store):
        entry = store.add_entry(draft())
        document = {"customVehicleTypes": [{"id": "custom-1", "name": "Van", "icon": "car", "co2PerLiter": 3}]}

        store.import_data(json.dumps(document))

        assert store.entries == (entry,)
        assert [v.id for v in store.custom_vehicle_types] == ["custom-1"]

    def test_non_list_fields_are_left_alone(self, store):
        entry = store.add_entry(draft())
        store.import_data(json.dumps({"fuelEntries": "nope"}))
        assert store.entries == (entry,)

    def test_invalid_json_fails_without_changes(self, store):
        entry = store.add_entry(draft())

        with pytest.raises(DataImportError):
            store.import_data("{not json")

        assert store.entries == (entry,)

    def test_non_object_document(self):
        with pytest.raises(DataImportError):
            parse_import("[1, 2, 3]")

    def test_invalid_entry_fails_without_changes(self, store):
        entry = store.add_entry(draft())
        good = entry.to_export_dict()
        bad = dict(good, liters="lots")

        with pytest.raises(DataImportError):
            store.import_data(json.dumps({"fuelEntries": [good, bad], "customVehicleTypes": []}))

        assert store.entries == (entry,)


class TestPersistence:

    def test_corrupt_file_loads_empty(self, tmp_path):
        (tmp_path / FuelStore.STORE_FILENAME).write_text("{{{", encoding="utf-8")
        assert FuelStore(data_dir=tmp_path).entries == ()

    def test_invalid_store_is_moved_aside(self, store, tmp_path):
        store.add_entry(draft())
        document = json.loads(store.path.read_text(encoding="utf-8"))
        document["fuelEntries"].append(dict(document["fuelEntries"][0], id="broken", liters="oops"))
        stored_text = json.dumps(document)
        store.path.write_text(stored_text, encoding="utf-8")

        reopened = FuelStore(data_dir=tmp_path)
        assert reopened.entries == ()

        quarantined = list(tmp_path.glob(f"{FuelStore.STORE_FILENAME}.corrupt-*"))
        assert len(quarantined) == 1
        assert quarantined[0].read_text(encoding="utf-8") == stored_text

        # Saving again must not touch the quarantined data
        reopened.add_entry(draft(liters=5))
        assert quarantined[0].read_text(encoding="utf-8") == stored_text
        assert len(FuelStore(data_dir=tmp_path).entries) == 1

    def test_reset(self, store):
        store.add_entry(draft())
        store.add_custom_vehicle_type("Van", 3.1)

        store.reset()

        assert store.entries == ()
        assert store.custom_vehicle_types == ()
        assert not store.path.exists()

    def test_snapshot(self, store):
        store.add_entry(draft())
        info = store.snapshot()

        assert info["entries"] == 1
        assert info["exists"] is True


class TestOffsetDates:

    BROWSER_BACKUP = {
        "fuelEntries": [
            {
                "id": "1709370000000",
                "date": "2024-03-02T09:00:00.000Z",
                "vehicleType": "car",
                "fuelType": "pertalite",
                "liters": 10,
                "pricePerLiter": 10000,
                "totalAmount": 100000,
                "odometer": 1000,
                "createdAt": "2024-03-02T09:05:00.000Z",
                "updatedAt": "2024-03-02T09:05:00.000Z",
            },
            {
                "id": "1710147600000",
                "date": "2024-03-11T09:00:00+07:00",
                "vehicleType": "car",
                "fuelType": "pertalite",
                "liters": 10,
                "pricePerLiter": 10000,
                "totalAmount": 100000,
                "odometer": 1120,
                "createdAt": "2024-03-11T09:05:00+07:00",
                "updatedAt": "2024-03-11T09:05:00+07:00",
            },
        ],
        "version": "2.0",
    }

    def test_draft_with_offset_becomes_naive(self):
        created = draft(date=datetime(2024, 3, 1, 2, 0, tzinfo=timezone.utc))
        assert created.date.tzinfo is None

    def test_imported_and_local_entries_mix(self, store, now):
        store.import_data(json.dumps(self.BROWSER_BACKUP))
        store.add_entry(draft(date=datetime(2024, 3, 15, 18, 0), odometer=1300), now=now)
        engine = FuelAnalyticsEngine(store.catalog)

        dashboard = engine.dashboard(store.entries, now)
        gaps = engine.gap_analysis(store.entries, now)
        summary = engine.summary(store.entries, datetime(2024, 2, 1), now)

        assert dashboard.entry_count == 3
        assert dashboard.current_month.refill_count == 3
        assert gaps.total_gap_days > 0
        assert summary.total_refills == 3

    def test_round_trip_after_offset_import(self, store, tmp_path):
        store.import_data(json.dumps(self.BROWSER_BACKUP))

        other = FuelStore(data_dir=tmp_path / "other")
        other.import_data(store.export_data())

        assert other.entries == store.entries
