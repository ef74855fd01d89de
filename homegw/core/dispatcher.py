"""Command dispatcher: the entry point for device actions and state queries."""

from __future__ import annotations

from typing import Any

from homegw.core.errors import ValidationFailed
from homegw.core.model import ActionResult, DeviceState
from homegw.core.registry import ConnectionRegistry


class CommandDispatcher:
    def __init__(self, registry: ConnectionRegistry) -> None:
        self.registry = registry

    def dispatch(self, identifier: str, action_name: str, args: Any = None) -> ActionResult:
        if not identifier:
            raise ValidationFailed("UUID not provided")
        if not action_name:
            raise ValidationFailed("Action not provided")

        machine = self.registry.resolve(identifier)
        transition = machine.apply(action_name, args)
        return ActionResult(
            identifier=identifier,
            action=action_name,
            value=transition.value,
            state=transition.state,
        )

    def query_state(self, identifier: str) -> DeviceState:
        if not identifier:
            raise ValidationFailed("UUID not provided")
        return self.registry.resolve(identifier).get_state()

    def list_actions(self, identifier: str) -> tuple[str, ...]:
        if not identifier:
            raise ValidationFailed("UUID not provided")
        return self.registry.resolve(identifier).action_names()
