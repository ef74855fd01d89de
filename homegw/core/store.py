"""Single-file JSON store of user-added devices."""

from __future__ import annotations

import json
import logging
import threading
from pathlib import Path
from typing import Any

from jsonschema import ValidationError

from homegw.core.config_loader import load_schema_validator
from homegw.core.errors import (
    DeviceAlreadyAdded,
    DuplicateDeviceName,
    RecordNotFound,
    RecordValidationError,
    StoreError,
)
from homegw.core.model import DeviceRecord, NetworkDeviceDescriptor

LOGGER = logging.getLogger(__name__)


def _record_to_doc(record: DeviceRecord) -> dict[str, Any]:
    return {"name": record.name, "device": record.device.to_dict()}


def _record_from_doc(doc: dict[str, Any]) -> DeviceRecord:
    return DeviceRecord(name=doc["name"], device=NetworkDeviceDescriptor.from_dict(doc["device"]))


class DeviceStore:
    """Devices the user chose to keep, keyed by identifier and by name.

    The whole store is rewritten on every mutation. A missing file is
    initialized empty; an unreadable or corrupted one is re-initialized.
    """

    def __init__(self, path: Path) -> None:
        self.path = path
        self.warnings: tuple[str, ...] = ()
        self._validator = load_schema_validator("device_record.schema.json")
        self._lock = threading.Lock()
        self._records: list[DeviceRecord] = self._load()

    def _load(self) -> list[DeviceRecord]:
        if not self.path.exists():
            LOGGER.info("Device store %s does not exist; initializing", self.path)
            self._save([])
            return []

        try:
            disk = json.loads(self.path.read_text(encoding="utf-8"))
            records = self._records_from_disk(disk.get("devices", []))
        except (OSError, ValueError, KeyError, TypeError, AttributeError, RecordValidationError) as exc:
            warning = f"Device store {self.path} is corrupted ({exc}); re-initializing"
            LOGGER.warning(warning)
            self.warnings = (warning,)
            self._save([])
            return []
        return records

    def _save(self, records: list[DeviceRecord]) -> None:
        doc = {"devices": [_record_to_doc(r) for r in records]}
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(doc, indent=2), encoding="utf-8")
        except OSError as exc:
            raise StoreError(f"Unable to save device store to {self.path}: {exc}") from exc

    def _records_from_disk(self, docs: list[Any]) -> list[DeviceRecord]:
        records: list[DeviceRecord] = []
        identifiers: set[str] = set()
        names: set[str] = set()
        for doc in docs:
            self._validate_doc(doc)
            record = _record_from_doc(doc)
            if record.device.identifier in identifiers:
                raise RecordValidationError(f"Device '{record.device.identifier}' is stored twice")
            if record.name in names:
                raise RecordValidationError(f"Device name '{record.name}' is stored twice")
            identifiers.add(record.device.identifier)
            names.add(record.name)
            records.append(record)
        return records

    def _validate(self, record: DeviceRecord) -> None:
        self._validate_doc(_record_to_doc(record))

    def _validate_doc(self, doc: Any) -> None:
        try:
            self._validator.validate(doc)
        except ValidationError as exc:
            path = ".".join(str(p) for p in exc.path)
            where = f" ({path})" if path else ""
            raise RecordValidationError(f"Invalid device record{where}: {exc.message}") from exc

    def list_devices(self) -> list[DeviceRecord]:
        return list(self._records)

    def get_by_identifier(self, identifier: str) -> DeviceRecord | None:
        return next((r for r in self._records if r.device.identifier == identifier), None)

    def get_by_name(self, name: str) -> DeviceRecord | None:
        return next((r for r in self._records if r.name == name), None)

    def is_added(self, identifier: str) -> bool:
        return self.get_by_identifier(identifier) is not None

    def add(self, name: str, device: NetworkDeviceDescriptor) -> DeviceRecord:
        record = DeviceRecord(name=name, device=device)
        self._validate(record)
        with self._lock:
            if self.get_by_identifier(device.identifier) is not None:
                raise DeviceAlreadyAdded(device.identifier)
            if self.get_by_name(name) is not None:
                raise DuplicateDeviceName(name)
            records = [*self._records, record]
            self._save(records)
            self._records = records
        LOGGER.info("Added device %s as '%s'", device.identifier, name)
        return record

    def rename(self, identifier: str, name: str) -> DeviceRecord:
        with self._lock:
            current = self.get_by_identifier(identifier)
            if current is None:
                raise RecordNotFound(f"Device '{identifier}' is not added yet")
            if current.name == name:
                return current
            if self.get_by_name(name) is not None:
                raise DuplicateDeviceName(name)
            updated = DeviceRecord(name=name, device=current.device)
            self._validate(updated)
            records = [updated if r.device.identifier == identifier else r for r in self._records]
            self._save(records)
            self._records = records
        LOGGER.info("Renamed device %s from '%s' to '%s'", identifier, current.name, name)
        return updated

    def remove(self, identifier: str) -> DeviceRecord:
        with self._lock:
            record = self.get_by_identifier(identifier)
            if record is None:
                raise RecordNotFound(f"Device '{identifier}' is not added yet")
            self._commit_removal(record)
        return record

    def remove_by_name(self, name: str) -> DeviceRecord:
        with self._lock:
            record = self.get_by_name(name)
            if record is None:
                raise RecordNotFound(f"No device named '{name}' is added")
            self._commit_removal(record)
        return record

    def _commit_removal(self, record: DeviceRecord) -> None:
        identifier = record.device.identifier
        records = [r for r in self._records if r.device.identifier != identifier]
        self._save(records)
        self._records = records
        LOGGER.info("Removed device %s ('%s')", identifier, record.name)
