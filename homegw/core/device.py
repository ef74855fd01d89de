"""Device state machine: one instance per connected device."""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable
from typing import Any

from homegw.core.capabilities import CapabilitySet, Transition
from homegw.core.errors import UnknownAction
from homegw.core.model import DeviceState, NetworkDeviceDescriptor

DEFAULT_COMMUNICATION_DELAY_S = 0.3
LOGGER = logging.getLogger(__name__)

Delay = Callable[[], None]


def fixed_delay(seconds: float) -> Delay:
    """Return a delay that blocks for ``seconds``, modeling a device round trip."""

    def _wait() -> None:
        time.sleep(seconds)

    return _wait


def no_delay() -> None:
    return None


class DeviceStateMachine:
    """Owns one device's state and applies validated actions to it.

    Actions are serialized per device: the lock spans validation, the
    simulated communication delay and the commit. Reads take no lock because
    the state is an immutable value swapped by a single assignment.
    """

    def __init__(
        self,
        descriptor: NetworkDeviceDescriptor,
        capabilities: CapabilitySet,
        *,
        delay: Delay | None = None,
    ) -> None:
        self.descriptor = descriptor
        self.capabilities = capabilities
        self._delay = delay or fixed_delay(DEFAULT_COMMUNICATION_DELAY_S)
        self._state: DeviceState = capabilities.initial_state()
        self._lock = threading.Lock()

    @property
    def identifier(self) -> str:
        return self.descriptor.identifier

    def action_names(self) -> tuple[str, ...]:
        return self.capabilities.action_names()

    def get_state(self) -> DeviceState:
        return self._state

    def perform_action(self, name: str, args: Any = None) -> Any:
        return self.apply(name, args).value

    def apply(self, name: str, args: Any = None) -> Transition:
        """Run action ``name`` and return the committed state with its reported value."""
        handler = self.capabilities.actions.get(name)
        if handler is None:
            raise UnknownAction(name, self.action_names())

        with self._lock:
            transition = handler(self._state, args)
            self._delay()
            self._state = transition.state

        LOGGER.debug(
            "Committed %s(%r) on %s -> %r",
            name,
            args,
            self.identifier,
            transition.value,
        )
        return transition
