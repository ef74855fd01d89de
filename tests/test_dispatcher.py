from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

import pytest

from homegw.core.device import no_delay
from homegw.core.dispatcher import CommandDispatcher
from homegw.core.errors import DeviceNotFound, OutOfRange, UnknownAction, ValidationFailed
from homegw.core.model import ActionResult, NetworkDeviceDescriptor, PowerState
from homegw.core.registry import ConnectionRegistry

AC_ID = "0b7e2a8e-5f55-4a53-9a4c-6c1f6a1f0001"
TV_ID = "0b7e2a8e-5f55-4a53-9a4c-6c1f6a1f0002"
LIGHT_ID = "0b7e2a8e-5f55-4a53-9a4c-6c1f6a1f0003"


class FakeCatalog:
    def __init__(self) -> None:
        self.devices = {
            AC_ID: NetworkDeviceDescriptor(identifier=AC_ID, type="AC", address="192.168.1.33", port=10203),
            TV_ID: NetworkDeviceDescriptor(identifier=TV_ID, type="TV", address="192.168.1.35", port=80),
            LIGHT_ID: NetworkDeviceDescriptor(identifier=LIGHT_ID, type="Light", address="192.168.1.36", port=3001),
        }
        self.lookups = 0

    def find(self, identifier: str) -> NetworkDeviceDescriptor | None:
        self.lookups += 1
        return self.devices.get(identifier)


def _dispatcher() -> tuple[CommandDispatcher, FakeCatalog]:
    catalog = FakeCatalog()
    return CommandDispatcher(ConnectionRegistry(catalog, delay=no_delay)), catalog


def test_dispatch_returns_value_and_state() -> None:
    dispatcher, _ = _dispatcher()

    result = dispatcher.dispatch(AC_ID, "setPowerState", "ON")

    assert isinstance(result, ActionResult)
    assert result.identifier == AC_ID
    assert result.action == "setPowerState"
    assert result.value is PowerState.ON
    assert result.state.power is PowerState.ON
    assert dispatcher.query_state(AC_ID) == result.state


@pytest.mark.parametrize("identifier, action", [("", "setTemperature"), (AC_ID, ""), (None, "setMode")])
def test_missing_parameters_fail_before_resolution(identifier: str, action: str) -> None:
    dispatcher, catalog = _dispatcher()

    with pytest.raises(ValidationFailed):
        dispatcher.dispatch(identifier, action, 20)

    assert catalog.lookups == 0


def test_query_state_requires_identifier() -> None:
    dispatcher, catalog = _dispatcher()
    with pytest.raises(ValidationFailed):
        dispatcher.query_state("")
    assert catalog.lookups == 0


def test_unknown_identifier_fails_for_dispatch_and_query() -> None:
    dispatcher, _ = _dispatcher()

    with pytest.raises(DeviceNotFound):
        dispatcher.dispatch("missing", "setTemperature", 20)
    with pytest.raises(DeviceNotFound):
        dispatcher.query_state("missing")
    dispatcher.dispatch(AC_ID, "setTemperature", 20)
    with pytest.raises(DeviceNotFound):
        dispatcher.dispatch("missing", "setTemperature", 20)


@pytest.mark.parametrize("identifier", [AC_ID, TV_ID, LIGHT_ID])
def test_nonexistent_action_is_unknown(identifier: str) -> None:
    dispatcher, _ = _dispatcher()
    with pytest.raises(UnknownAction):
        dispatcher.dispatch(identifier, "nonexistentAction")


def test_failed_action_leaves_state_unchanged() -> None:
    dispatcher, _ = _dispatcher()
    before = dispatcher.query_state(AC_ID)

    with pytest.raises(OutOfRange):
        dispatcher.dispatch(AC_ID, "setTemperature", 40)

    assert dispatcher.query_state(AC_ID) == before


def test_list_actions_uses_capability_table() -> None:
    dispatcher, _ = _dispatcher()
    assert dispatcher.list_actions(TV_ID) == ("keyPress", "setPowerState", "setVolume", "toggleMute")


def test_concurrent_temperature_dispatch_ends_on_a_requested_value() -> None:
    dispatcher, _ = _dispatcher()
    requested = [18, 22, 25, 30, 32]

    with ThreadPoolExecutor(max_workers=len(requested)) as pool:
        results = list(pool.map(lambda t: dispatcher.dispatch(AC_ID, "setTemperature", t), requested))

    assert [r.value for r in results] == requested
    assert all(r.state.temperature == r.value for r in results)
    assert dispatcher.query_state(AC_ID).temperature in requested
