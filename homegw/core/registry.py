"""Connection registry: one device state machine per identifier."""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Protocol

from homegw.core.capabilities import capabilities_for
from homegw.core.device import Delay, DeviceStateMachine
from homegw.core.errors import DeviceNotFound
from homegw.core.model import NetworkDeviceDescriptor

LOGGER = logging.getLogger(__name__)


class DeviceCatalog(Protocol):
    def find(self, identifier: str) -> NetworkDeviceDescriptor | None:
        """Return the descriptor for ``identifier`` or None when unknown."""


class _PendingCreation:
    __slots__ = ("lock", "waiters")

    def __init__(self) -> None:
        self.lock = threading.Lock()
        self.waiters = 0


class ConnectionRegistry:
    """Resolves identifiers to live device connections, creating them on first use.

    Entries are never evicted. Creation is serialized per identifier so that
    concurrent first-time resolutions converge on a single instance.
    """

    def __init__(self, catalog: DeviceCatalog, *, delay: Delay | None = None) -> None:
        self._catalog = catalog
        self._delay = delay
        self._connections: dict[str, DeviceStateMachine] = {}
        self._creation_locks: dict[str, _PendingCreation] = {}
        self._guard = threading.Lock()

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._connections

    def __len__(self) -> int:
        return len(self._connections)

    def connections(self) -> dict[str, DeviceStateMachine]:
        with self._guard:
            return dict(self._connections)

    def resolve(self, identifier: str) -> DeviceStateMachine:
        machine = self._connections.get(identifier)
        if machine is not None:
            return machine

        with self._creation_lock(identifier):
            machine = self._connections.get(identifier)
            if machine is not None:
                return machine

            descriptor = self._catalog.find(identifier)
            if descriptor is None:
                raise DeviceNotFound(identifier)

            machine = DeviceStateMachine(
                descriptor,
                capabilities_for(descriptor.type),
                delay=self._delay,
            )
            with self._guard:
                self._connections[identifier] = machine

        LOGGER.info(
            "Connected to %s device %s at %s:%d",
            descriptor.type,
            identifier,
            descriptor.address,
            descriptor.port,
        )
        return machine

    @contextmanager
    def _creation_lock(self, identifier: str) -> Iterator[None]:
        with self._guard:
            pending = self._creation_locks.get(identifier)
            if pending is None:
                pending = _PendingCreation()
                self._creation_locks[identifier] = pending
            pending.waiters += 1
        try:
            with pending.lock:
                yield
        finally:
            # Removed when the last caller leaves.
            with self._guard:
                pending.waiters -= 1
                if pending.waiters == 0:
                    del self._creation_locks[identifier]
