from __future__ import annotations

import pytest

from homegw.core.capabilities import (
    AC_CAPABILITIES,
    CAPABILITIES,
    LIGHT_CAPABILITIES,
    TV_CAPABILITIES,
    capabilities_for,
)
from homegw.core.errors import ArgumentFormat, InvalidArgument, OutOfRange, UnknownDeviceType
from homegw.core.model import AcMode, AcState, DeviceType, LightState, PowerState, TvKey, TvState


def test_capabilities_selected_by_type_tag() -> None:
    assert capabilities_for("AC") is AC_CAPABILITIES
    assert capabilities_for(DeviceType.TV) is TV_CAPABILITIES
    assert capabilities_for("Light") is LIGHT_CAPABILITIES


def test_unknown_type_tag_rejected() -> None:
    with pytest.raises(UnknownDeviceType) as exc:
        capabilities_for("Fridge")
    assert exc.value.type_tag == "Fridge"


def test_action_tables_are_read_only() -> None:
    with pytest.raises(TypeError):
        AC_CAPABILITIES.actions["selfDestruct"] = lambda state, args: None  # type: ignore[index]
    with pytest.raises(TypeError):
        CAPABILITIES[DeviceType.AC] = TV_CAPABILITIES  # type: ignore[index]


def test_action_names_are_sorted() -> None:
    assert capabilities_for("Light").action_names() == ("setBrightness", "setColor", "setPowerState")
    assert "keyPress" in capabilities_for("TV").action_names()


def test_handlers_do_not_mutate_input_state() -> None:
    state = AcState()
    transition = AC_CAPABILITIES.actions["setTemperature"](state, 20)
    assert transition.state.temperature == 20
    assert transition.value == 20
    assert state.temperature == 28


@pytest.mark.parametrize("value", [17, 33, None, "22", 22.5, True])
def test_temperature_rejects_out_of_domain(value: object) -> None:
    with pytest.raises(OutOfRange) as exc:
        AC_CAPABILITIES.actions["setTemperature"](AcState(), value)
    assert (exc.value.minimum, exc.value.maximum) == (18, 32)


def test_temperature_bounds_are_inclusive() -> None:
    handler = AC_CAPABILITIES.actions["setTemperature"]
    assert handler(AcState(), 18).state.temperature == 18
    assert handler(AcState(), 32).state.temperature == 32


def test_enum_setter_accepts_names_and_members() -> None:
    handler = AC_CAPABILITIES.actions["setMode"]
    assert handler(AcState(), "COOL").state.mode is AcMode.COOL
    assert handler(AcState(), AcMode.DRY).state.mode is AcMode.DRY


def test_enum_setter_reports_valid_values() -> None:
    with pytest.raises(InvalidArgument) as exc:
        AC_CAPABILITIES.actions["setSwing"](AcState(), "S90")
    assert exc.value.values == ("S30", "S45", "S60", "AUTO", "OFF")
    assert "S30, S45" in str(exc.value)


def test_missing_enum_argument_is_invalid() -> None:
    with pytest.raises(InvalidArgument):
        LIGHT_CAPABILITIES.actions["setPowerState"](LightState(), None)


def test_zero_is_valid_for_volume_and_brightness() -> None:
    assert TV_CAPABILITIES.actions["setVolume"](TvState(), 0).state.volume == 0
    assert LIGHT_CAPABILITIES.actions["setBrightness"](LightState(), 0).state.brightness == 0


@pytest.mark.parametrize("color", ["#ZZZZZZ", "112233", "#1122", "#1122334", "", None, 0x112233])
def test_color_requires_hex_rgb(color: object) -> None:
    with pytest.raises(ArgumentFormat) as exc:
        LIGHT_CAPABILITIES.actions["setColor"](LightState(), color)
    assert exc.value.formats == ("Hex Color String",)


def test_color_is_stored_as_given() -> None:
    transition = LIGHT_CAPABILITIES.actions["setColor"](LightState(), "#a1B2c3")
    assert transition.state.color == "#a1B2c3"
    assert transition.value is True


def test_key_press_mute_toggles() -> None:
    key_press = TV_CAPABILITIES.actions["keyPress"]
    first = key_press(TvState(), "Mute")
    assert first.state.muted is True
    assert first.value is True
    second = key_press(first.state, TvKey.Mute)
    assert second.state.muted is False
    assert second.value is False


def test_key_press_volume_bounds() -> None:
    key_press = TV_CAPABILITIES.actions["keyPress"]
    assert key_press(TvState(volume=99), "VolumeUp").state.volume == 100
    with pytest.raises(OutOfRange):
        key_press(TvState(volume=100), "VolumeUp")
    with pytest.raises(OutOfRange):
        key_press(TvState(volume=0), "VolumeDown")


def test_key_press_power_toggles() -> None:
    key_press = TV_CAPABILITIES.actions["keyPress"]
    transition = key_press(TvState(), "TvPower")
    assert transition.state.power is PowerState.ON
    assert transition.value is True
    assert key_press(transition.state, "TvPower").state.power is PowerState.OFF


def test_key_press_is_total_over_keys() -> None:
    key_press = TV_CAPABILITIES.actions["keyPress"]
    state = TvState(volume=50)
    for key in TvKey:
        assert key_press(state, key).value in (True, False)


def test_key_press_unmodeled_key_is_no_op() -> None:
    state = TvState()
    transition = TV_CAPABILITIES.actions["keyPress"](state, "ChannelUp")
    assert transition.state == state
    assert transition.value is True


def test_key_press_unknown_key() -> None:
    with pytest.raises(InvalidArgument) as exc:
        TV_CAPABILITIES.actions["keyPress"](TvState(), "Netflix")
    assert "TvPower" in exc.value.values
