"""Service layer used by the CLI and the public client."""

from __future__ import annotations

from typing import Any

from homegw.core.config_loader import GatewayConfig, load_config
from homegw.core.device import Delay, fixed_delay
from homegw.core.discovery import NetworkDiscovery
from homegw.core.dispatcher import CommandDispatcher
from homegw.core.errors import DeviceNotFound, RecordNotFound
from homegw.core.model import ActionResult, DeviceRecord, DeviceState, DiscoveredDevice
from homegw.core.registry import ConnectionRegistry
from homegw.core.store import DeviceStore


class GatewayService:
    def __init__(
        self,
        *,
        config: GatewayConfig | None = None,
        discovery: NetworkDiscovery | None = None,
        store: DeviceStore | None = None,
        communication_delay: Delay | None = None,
    ) -> None:
        warnings: tuple[str, ...] = ()
        if config is None:
            loaded = load_config()
            config = loaded.config
            warnings = loaded.warnings
        self.config = config
        self.discovery = discovery or NetworkDiscovery(
            config.devices,
            delay=fixed_delay(config.discovery_delay_s),
        )
        self.store = store or DeviceStore(config.store_path)
        self.load_warnings = warnings + self.store.warnings
        self.registry = ConnectionRegistry(
            self.discovery,
            delay=communication_delay or fixed_delay(config.communication_delay_s),
        )
        self.dispatcher = CommandDispatcher(self.registry)

    def discover(self) -> list[DiscoveredDevice]:
        return [
            DiscoveredDevice(device=device, added=self.store.is_added(device.identifier))
            for device in self.discovery.list_known_devices()
        ]

    def list_saved(self) -> list[DeviceRecord]:
        return self.store.list_devices()

    def get_saved(self, identifier: str) -> DeviceRecord:
        record = self.store.get_by_identifier(identifier)
        if record is None:
            raise RecordNotFound(f"Device '{identifier}' is not added yet")
        return record

    def add_device(self, name: str, identifier: str) -> DeviceRecord:
        device = self.discovery.find(identifier)
        if device is None:
            raise DeviceNotFound(identifier)
        return self.store.add(name, device)

    def remove_device(self, identifier: str) -> DeviceRecord:
        return self.store.remove(identifier)

    def rename_device(self, identifier: str, name: str) -> DeviceRecord:
        return self.store.rename(identifier, name)

    def perform_action(self, identifier: str, action: str, args: Any = None) -> ActionResult:
        return self.dispatcher.dispatch(identifier, action, args)

    def get_status(self, identifier: str) -> DeviceState:
        return self.dispatcher.query_state(identifier)

    def list_actions(self, identifier: str) -> tuple[str, ...]:
        return self.dispatcher.list_actions(identifier)
