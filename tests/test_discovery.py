from __future__ import annotations

import uuid

from homegw.core.config_loader import DeviceEntry
from homegw.core.discovery import NetworkDiscovery, device_identifier

ENTRIES = (
    DeviceEntry(type="AC", address="192.168.1.33", port=10203),
    DeviceEntry(type="TV", address="192.168.1.35", port=80),
    DeviceEntry(type="Light", address="192.168.1.36", port=3001, uuid="0b7e2a8e-5f55-4a53-9a4c-6c1f6a1f0003"),
)


class CountingDelay:
    def __init__(self) -> None:
        self.calls = 0

    def __call__(self) -> None:
        self.calls += 1


def test_discovery_lists_configured_devices() -> None:
    discovery = NetworkDiscovery(ENTRIES, delay=CountingDelay())
    devices = discovery.list_known_devices()

    assert [d.type for d in devices] == ["AC", "TV", "Light"]
    assert devices[1].address == "192.168.1.35"
    assert devices[1].port == 80
    for device in devices:
        uuid.UUID(device.identifier)


def test_identifiers_are_stable_across_sessions() -> None:
    first = NetworkDiscovery(ENTRIES, delay=CountingDelay()).list_known_devices()
    second = NetworkDiscovery(ENTRIES, delay=CountingDelay()).list_known_devices()
    assert [d.identifier for d in first] == [d.identifier for d in second]
    assert len({d.identifier for d in first}) == 3


def test_explicit_uuid_is_used() -> None:
    assert device_identifier(ENTRIES[2]) == "0b7e2a8e-5f55-4a53-9a4c-6c1f6a1f0003"


def test_scan_is_cached_until_refresh() -> None:
    delay = CountingDelay()
    discovery = NetworkDiscovery(ENTRIES, delay=delay)

    discovery.list_known_devices()
    discovery.list_known_devices()
    assert delay.calls == 1

    discovery.refresh()
    assert delay.calls == 2


def test_find() -> None:
    discovery = NetworkDiscovery(ENTRIES, delay=CountingDelay())
    tv = discovery.list_known_devices()[1]

    assert discovery.find(tv.identifier) == tv
    assert discovery.find("missing") is None


def test_duplicate_entries_are_collapsed() -> None:
    discovery = NetworkDiscovery(ENTRIES + (ENTRIES[0],), delay=CountingDelay())
    assert len(discovery.list_known_devices()) == 3
