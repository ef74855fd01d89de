"""Simulated network discovery backed by the gateway configuration."""

from __future__ import annotations

import logging
import threading
import uuid
from collections.abc import Sequence

from homegw.core.config_loader import DeviceEntry
from homegw.core.device import Delay, fixed_delay
from homegw.core.model import NetworkDeviceDescriptor

DEFAULT_DISCOVERY_DELAY_S = 5.0
_IDENTIFIER_NAMESPACE = uuid.uuid5(uuid.NAMESPACE_DNS, "homegw.local")
LOGGER = logging.getLogger(__name__)


def device_identifier(entry: DeviceEntry) -> str:
    if entry.uuid:
        return entry.uuid
    return str(uuid.uuid5(_IDENTIFIER_NAMESPACE, f"{entry.type}://{entry.address}:{entry.port}"))


class NetworkDiscovery:
    """Scans the (simulated) network once per session and caches the result."""

    def __init__(self, entries: Sequence[DeviceEntry], *, delay: Delay | None = None) -> None:
        self._entries = tuple(entries)
        self._delay = delay or fixed_delay(DEFAULT_DISCOVERY_DELAY_S)
        self._devices: dict[str, NetworkDeviceDescriptor] | None = None
        self._lock = threading.Lock()

    def list_known_devices(self) -> list[NetworkDeviceDescriptor]:
        with self._lock:
            if self._devices is None:
                self._devices = self._scan()
            return list(self._devices.values())

    def refresh(self) -> list[NetworkDeviceDescriptor]:
        with self._lock:
            self._devices = self._scan()
            return list(self._devices.values())

    def find(self, identifier: str) -> NetworkDeviceDescriptor | None:
        for device in self.list_known_devices():
            if device.identifier == identifier:
                return device
        return None

    def _scan(self) -> dict[str, NetworkDeviceDescriptor]:
        self._delay()
        devices: dict[str, NetworkDeviceDescriptor] = {}
        for entry in self._entries:
            identifier = device_identifier(entry)
            if identifier in devices:
                LOGGER.warning("Ignoring duplicate device %s at %s:%d", identifier, entry.address, entry.port)
                continue
            devices[identifier] = NetworkDeviceDescriptor(
                identifier=identifier,
                type=entry.type,
                address=entry.address,
                port=entry.port,
            )
        LOGGER.info("Discovered %d device(s)", len(devices))
        return devices
