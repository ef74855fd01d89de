"""Stable public API for building tooling on top of homegw.

This module is the supported integration surface for third-party callers
(HTTP frontends, scripts, automations). Avoid importing from internal modules
unless intentionally depending on non-stable internals.
"""

from __future__ import annotations

from typing import Any

from homegw.core.config_loader import GatewayConfig
from homegw.core.device import Delay
from homegw.core.discovery import NetworkDiscovery
from homegw.core.errors import (
    ArgumentFormat,
    ConfigError,
    ConfigLoadError,
    ConfigValidationError,
    DeviceAlreadyAdded,
    DeviceNotFound,
    DispatchError,
    DuplicateDeviceName,
    GatewayError,
    InvalidArgument,
    OutOfRange,
    RecordNotFound,
    RecordValidationError,
    StoreError,
    UnknownAction,
    UnknownDeviceType,
    ValidationFailed,
)
from homegw.core.model import (
    AcFanSpeed,
    AcMode,
    AcState,
    AcSwing,
    ActionResult,
    DeviceRecord,
    DeviceState,
    DeviceType,
    DiscoveredDevice,
    LightState,
    NetworkDeviceDescriptor,
    PowerState,
    TvKey,
    TvState,
)
from homegw.core.service import GatewayService
from homegw.core.store import DeviceStore

__all__ = [
    "GatewayError",
    "DispatchError",
    "ValidationFailed",
    "OutOfRange",
    "InvalidArgument",
    "ArgumentFormat",
    "UnknownAction",
    "DeviceNotFound",
    "UnknownDeviceType",
    "ConfigError",
    "ConfigLoadError",
    "ConfigValidationError",
    "StoreError",
    "DeviceAlreadyAdded",
    "DuplicateDeviceName",
    "RecordNotFound",
    "RecordValidationError",
    "AcFanSpeed",
    "AcMode",
    "AcState",
    "AcSwing",
    "ActionResult",
    "DeviceRecord",
    "DeviceState",
    "DeviceType",
    "DiscoveredDevice",
    "LightState",
    "NetworkDeviceDescriptor",
    "PowerState",
    "TvKey",
    "TvState",
    "Client",
]


class Client:
    """Public client for interacting with homegw core capabilities.

    A `Client` instance wraps configuration loading, network discovery, the
    device store and the command dispatcher behind a stable API. It is safe to
    share one client between threads; actions on the same device are
    serialized, actions on different devices run independently.
    """

    def __init__(
        self,
        *,
        config: GatewayConfig | None = None,
        discovery: NetworkDiscovery | None = None,
        store: DeviceStore | None = None,
        communication_delay: Delay | None = None,
    ) -> None:
        self._service = GatewayService(
            config=config,
            discovery=discovery,
            store=store,
            communication_delay=communication_delay,
        )

    @property
    def load_warnings(self) -> tuple[str, ...]:
        return self._service.load_warnings

    def discover(self) -> list[DiscoveredDevice]:
        return self._service.discover()

    def list_saved_devices(self) -> list[DeviceRecord]:
        return self._service.list_saved()

    def get_saved_device(self, identifier: str) -> DeviceRecord:
        return self._service.get_saved(identifier)

    def add_device(self, name: str, identifier: str) -> DeviceRecord:
        return self._service.add_device(name, identifier)

    def remove_device(self, identifier: str) -> DeviceRecord:
        return self._service.remove_device(identifier)

    def rename_device(self, identifier: str, name: str) -> DeviceRecord:
        return self._service.rename_device(identifier, name)

    def list_actions(self, identifier: str) -> tuple[str, ...]:
        return self._service.list_actions(identifier)

    def perform_action(self, identifier: str, action: str, args: Any = None) -> ActionResult:
        return self._service.perform_action(identifier, action, args)

    def get_status(self, identifier: str) -> DeviceState:
        return self._service.get_status(identifier)
