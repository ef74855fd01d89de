"""Gateway configuration loading and validation for YAML-based homegw config."""

from __future__ import annotations

import ipaddress
import json
import logging
import os
import uuid
from dataclasses import dataclass
from importlib import resources
from importlib.resources.abc import Traversable
from pathlib import Path
from typing import Any

import yaml
from jsonschema import ValidationError, validators

from homegw.core.errors import ConfigLoadError, ConfigValidationError

CONFIG_FILE_NAME = "gateway.yaml"
LOGGER = logging.getLogger(__name__)


class UniqueKeyLoader(yaml.SafeLoader):
    """YAML loader that rejects duplicate mapping keys."""


def _construct_mapping(loader: UniqueKeyLoader, node: yaml.Node, deep: bool = False) -> dict[str, Any]:
    mapping: dict[str, Any] = {}
    for key_node, value_node in node.value:
        key = loader.construct_object(key_node, deep=deep)
        if key in mapping:
            raise ConfigValidationError(f"Duplicate key '{key}' in YAML document")
        mapping[key] = loader.construct_object(value_node, deep=deep)
    return mapping


UniqueKeyLoader.add_constructor(
    yaml.resolver.BaseResolver.DEFAULT_MAPPING_TAG,
    _construct_mapping,
)


@dataclass(frozen=True)
class DeviceEntry:
    type: str
    address: str
    port: int
    uuid: str | None = None


@dataclass(frozen=True)
class GatewayConfig:
    discovery_delay_s: float
    communication_delay_s: float
    store_path: Path
    devices: tuple[DeviceEntry, ...]


@dataclass(frozen=True)
class LoadedConfig:
    config: GatewayConfig
    warnings: tuple[str, ...]


def load_schema_validator(name: str) -> Any:
    schema_text = resources.files("homegw.schemas").joinpath(name).read_text(encoding="utf-8")
    schema = json.loads(schema_text)
    validator_cls = validators.validator_for(schema)
    validator_cls.check_schema(schema)
    return validator_cls(schema)


def user_config_path() -> Path:
    xdg_config = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))
    return xdg_config / "homegw" / CONFIG_FILE_NAME


def default_store_path() -> Path:
    xdg_data = Path(os.environ.get("XDG_DATA_HOME", Path.home() / ".local/share"))
    return xdg_data / "homegw" / "db.json"


def _read_yaml(path: Path | Traversable) -> dict[str, Any]:
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigLoadError(f"Could not read config file {path}: {exc}") from exc

    try:
        loaded = yaml.load(content, Loader=UniqueKeyLoader)
    except yaml.YAMLError as exc:
        raise ConfigValidationError(f"Invalid YAML in {path}: {exc}") from exc

    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        raise ConfigValidationError(f"Config file {path} must contain a mapping at root")
    return loaded


def _validate(doc: dict[str, Any], source: Path | Traversable) -> None:
    validator = load_schema_validator("gateway.schema.json")
    try:
        validator.validate(doc)
    except ValidationError as exc:
        path = ".".join(str(p) for p in exc.path)
        where = f" ({path})" if path else ""
        raise ConfigValidationError(f"Schema validation failed for {source}{where}: {exc.message}") from exc


def _normalize_address(value: str, *, context: str) -> str:
    try:
        return str(ipaddress.ip_address(value.strip()))
    except ValueError as exc:
        raise ConfigValidationError(f"{context} must be an IPv4 or IPv6 address") from exc


def _normalize_uuid(value: str, *, context: str) -> str:
    try:
        return str(uuid.UUID(value.strip()))
    except ValueError as exc:
        raise ConfigValidationError(f"{context} must be a UUID string") from exc


def _build_devices(entries: list[dict[str, Any]], source: Path | Traversable) -> tuple[DeviceEntry, ...]:
    devices: list[DeviceEntry] = []
    for index, entry in enumerate(entries):
        context = f"{source}: devices.{index}"
        devices.append(
            DeviceEntry(
                type=entry["type"],
                address=_normalize_address(entry["address"], context=f"{context}.address"),
                port=int(entry["port"]),
                uuid=_normalize_uuid(entry["uuid"], context=f"{context}.uuid")
                if "uuid" in entry
                else None,
            )
        )
    return tuple(devices)


def load_config(path: Path | None = None) -> LoadedConfig:
    """Load the packaged gateway config and layer the user config on top.

    ``path`` overrides the user config location; when it is given it must exist.
    """
    warnings: list[str] = []

    packaged = resources.files("homegw.config").joinpath(CONFIG_FILE_NAME)
    doc = _read_yaml(packaged)
    _validate(doc, packaged)
    timing = dict(doc.get("timing", {}))
    store = dict(doc.get("store", {}))
    devices = _build_devices(doc.get("devices", []), packaged)

    user_path = path or user_config_path()
    if path is not None or user_path.is_file():
        user_doc = _read_yaml(user_path)
        _validate(user_doc, user_path)
        timing.update(user_doc.get("timing", {}))
        store.update(user_doc.get("store", {}))
        if "devices" in user_doc:
            warning = f"User config {user_path} replaces the packaged device list"
            LOGGER.warning(warning)
            warnings.append(warning)
            devices = _build_devices(user_doc["devices"], user_path)

    store_path = Path(store["path"]).expanduser() if "path" in store else default_store_path()
    config = GatewayConfig(
        discovery_delay_s=float(timing.get("discovery_delay_s", 5.0)),
        communication_delay_s=float(timing.get("communication_delay_s", 0.3)),
        store_path=store_path,
        devices=devices,
    )
    return LoadedConfig(config=config, warnings=tuple(warnings))
