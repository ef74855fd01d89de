"""Per-device-type capability tables.

Each device type maps to an immutable table of action name -> handler. A
handler is a pure function ``(state, args) -> Transition``: it validates
``args`` against the field's domain and returns the proposed next state along
with the value reported to the caller, or raises a typed error. Handlers never
sleep and never touch shared state; committing the transition is the job of
the device state machine.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass, replace
from enum import Enum
from types import MappingProxyType
from typing import Any, TypeVar

from homegw.core.errors import ArgumentFormat, InvalidArgument, OutOfRange, UnknownDeviceType
from homegw.core.model import (
    AcFanSpeed,
    AcMode,
    AcState,
    AcSwing,
    DeviceState,
    DeviceType,
    LightState,
    PowerState,
    TvKey,
    TvState,
)

_HEX_COLOR_RE = re.compile(r"^#[0-9A-Fa-f]{6}$")
_COLOR_FORMATS = ("Hex Color String",)

TEMPERATURE_RANGE = (18, 32)
VOLUME_RANGE = (0, 100)
BRIGHTNESS_RANGE = (0, 100)

E = TypeVar("E", bound=Enum)


@dataclass(frozen=True)
class Transition:
    state: DeviceState
    value: Any


Handler = Callable[[Any, Any], Transition]


@dataclass(frozen=True)
class CapabilitySet:
    device_type: DeviceType
    initial_state: Callable[[], DeviceState]
    actions: Mapping[str, Handler]

    def action_names(self) -> tuple[str, ...]:
        return tuple(sorted(self.actions))


def _require_int(value: Any, bounds: tuple[int, int]) -> int:
    minimum, maximum = bounds
    # bool is an int subclass; True must not pass as 1.
    if isinstance(value, bool) or not isinstance(value, int):
        raise OutOfRange(minimum, maximum)
    if value < minimum or value > maximum:
        raise OutOfRange(minimum, maximum)
    return value


def _require_member(value: Any, enum_cls: type[E]) -> E:
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        for member in enum_cls:
            if member.value == value:
                return member
    raise InvalidArgument(member.value for member in enum_cls)


def _require_color(value: Any) -> str:
    if not isinstance(value, str) or not _HEX_COLOR_RE.match(value):
        raise ArgumentFormat(_COLOR_FORMATS)
    return value


def _set_power(state: Any, args: Any) -> Transition:
    power = _require_member(args, PowerState)
    return Transition(replace(state, power=power), power)


def _set_temperature(state: AcState, args: Any) -> Transition:
    temperature = _require_int(args, TEMPERATURE_RANGE)
    return Transition(replace(state, temperature=temperature), temperature)


def _set_mode(state: AcState, args: Any) -> Transition:
    mode = _require_member(args, AcMode)
    return Transition(replace(state, mode=mode), mode)


def _set_fan_speed(state: AcState, args: Any) -> Transition:
    fan_speed = _require_member(args, AcFanSpeed)
    return Transition(replace(state, fan_speed=fan_speed), fan_speed)


def _set_swing(state: AcState, args: Any) -> Transition:
    swing = _require_member(args, AcSwing)
    return Transition(replace(state, swing=swing), swing)


def _set_volume(state: TvState, args: Any) -> Transition:
    volume = _require_int(args, VOLUME_RANGE)
    return Transition(replace(state, volume=volume), True)


def _toggle_mute(state: TvState, args: Any) -> Transition:
    muted = not state.muted
    return Transition(replace(state, muted=muted), muted)


def _toggle_power(state: TvState, args: Any) -> Transition:
    power = PowerState.OFF if state.power is PowerState.ON else PowerState.ON
    return Transition(replace(state, power=power), True)


def _no_op(state: TvState, args: Any) -> Transition:
    return Transition(state, True)


_KEY_ACTIONS: Mapping[TvKey, Handler] = MappingProxyType(
    {
        TvKey.Mute: _toggle_mute,
        TvKey.VolumeUp: lambda state, _: _set_volume(state, state.volume + 1),
        TvKey.VolumeDown: lambda state, _: _set_volume(state, state.volume - 1),
        TvKey.TvPower: _toggle_power,
    }
)


def _key_press(state: TvState, args: Any) -> Transition:
    key = _require_member(args, TvKey)
    handler = _KEY_ACTIONS.get(key, _no_op)
    return handler(state, None)


def _set_brightness(state: LightState, args: Any) -> Transition:
    brightness = _require_int(args, BRIGHTNESS_RANGE)
    return Transition(replace(state, brightness=brightness), True)


def _set_color(state: LightState, args: Any) -> Transition:
    color = _require_color(args)
    return Transition(replace(state, color=color), True)


AC_CAPABILITIES = CapabilitySet(
    device_type=DeviceType.AC,
    initial_state=AcState,
    actions=MappingProxyType(
        {
            "setTemperature": _set_temperature,
            "setMode": _set_mode,
            "setFanSpeed": _set_fan_speed,
            "setSwing": _set_swing,
            "setPowerState": _set_power,
        }
    ),
)

TV_CAPABILITIES = CapabilitySet(
    device_type=DeviceType.TV,
    initial_state=TvState,
    actions=MappingProxyType(
        {
            "setVolume": _set_volume,
            "toggleMute": _toggle_mute,
            "setPowerState": _set_power,
            "keyPress": _key_press,
        }
    ),
)

LIGHT_CAPABILITIES = CapabilitySet(
    device_type=DeviceType.LIGHT,
    initial_state=LightState,
    actions=MappingProxyType(
        {
            "setBrightness": _set_brightness,
            "setColor": _set_color,
            "setPowerState": _set_power,
        }
    ),
)

CAPABILITIES: Mapping[DeviceType, CapabilitySet] = MappingProxyType(
    {
        DeviceType.AC: AC_CAPABILITIES,
        DeviceType.TV: TV_CAPABILITIES,
        DeviceType.LIGHT: LIGHT_CAPABILITIES,
    }
)


def capabilities_for(type_tag: DeviceType | str) -> CapabilitySet:
    try:
        device_type = DeviceType(type_tag)
    except ValueError:
        raise UnknownDeviceType(type_tag) from None
    return CAPABILITIES[device_type]
