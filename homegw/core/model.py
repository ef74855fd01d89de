"""Core data models used across capabilities, registry, service, and CLI."""

from __future__ import annotations

from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, Union


class DeviceType(str, Enum):
    AC = "AC"
    TV = "TV"
    LIGHT = "Light"


class PowerState(str, Enum):
    ON = "ON"
    OFF = "OFF"


class AcMode(str, Enum):
    COOL = "COOL"
    FAN = "FAN"
    HEAT = "HEAT"
    DRY = "DRY"
    AUTO = "AUTO"


class AcFanSpeed(str, Enum):
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"
    AUTO = "AUTO"


class AcSwing(str, Enum):
    S30 = "S30"
    S45 = "S45"
    S60 = "S60"
    AUTO = "AUTO"
    OFF = "OFF"


class TvKey(str, Enum):
    Num1 = "Num1"
    Num2 = "Num2"
    Num3 = "Num3"
    Num4 = "Num4"
    Num5 = "Num5"
    Num6 = "Num6"
    Num7 = "Num7"
    Num8 = "Num8"
    Num9 = "Num9"
    Num0 = "Num0"
    VolumeUp = "VolumeUp"
    VolumeDown = "VolumeDown"
    Mute = "Mute"
    Right = "Right"
    Left = "Left"
    Up = "Up"
    Down = "Down"
    ChannelUp = "ChannelUp"
    ChannelDown = "ChannelDown"
    Confirm = "Confirm"
    Return = "Return"
    Red = "Red"
    Green = "Green"
    Yellow = "Yellow"
    Blue = "Blue"
    GGuide = "GGuide"
    Home = "Home"
    Rec = "Rec"
    Tv = "Tv"
    Rewind = "Rewind"
    Pause = "Pause"
    Forward = "Forward"
    TvPower = "TvPower"


@dataclass(frozen=True)
class NetworkDeviceDescriptor:
    identifier: str
    type: str
    address: str
    port: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "uuid": self.identifier,
            "type": self.type,
            "ip": self.address,
            "servicePort": self.port,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> NetworkDeviceDescriptor:
        return cls(
            identifier=data["uuid"],
            type=data["type"],
            address=data["ip"],
            port=int(data["servicePort"]),
        )


class _StateMixin:
    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        for field in fields(self):  # type: ignore[arg-type]
            value = getattr(self, field.name)
            out[field.name] = value.value if isinstance(value, Enum) else value
        return out


@dataclass(frozen=True)
class AcState(_StateMixin):
    temperature: int = 28
    mode: AcMode = AcMode.AUTO
    fan_speed: AcFanSpeed = AcFanSpeed.AUTO
    swing: AcSwing = AcSwing.AUTO
    power: PowerState = PowerState.OFF


@dataclass(frozen=True)
class TvState(_StateMixin):
    power: PowerState = PowerState.OFF
    volume: int = 35
    muted: bool = False


@dataclass(frozen=True)
class LightState(_StateMixin):
    power: PowerState = PowerState.OFF
    color: str = "#FFFFFF"
    brightness: int = 75


DeviceState = Union[AcState, TvState, LightState]


@dataclass(frozen=True)
class DeviceRecord:
    name: str
    device: NetworkDeviceDescriptor


@dataclass(frozen=True)
class DiscoveredDevice:
    device: NetworkDeviceDescriptor
    added: bool


@dataclass(frozen=True)
class ActionResult:
    identifier: str
    action: str
    value: Any
    state: DeviceState
