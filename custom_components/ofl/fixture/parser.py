"""
The parser is responsible for taking in the fixture format's JSON and creating
convenient model classes from it.

Wheel slot and capability classes, arguments and enum names match the fixture
format exactly, and are instantiated by `typing` trickery, instead of
appearing in code.
"""

import json
import logging
from typing import Any

from custom_components.ofl.config import CONF_VALIDATE_DMX_RANGES, \
    CONF_WARN_HELP_WANTED, process_options
from custom_components.ofl.fixture import OFL_URL
from custom_components.ofl.fixture.channel import CoarseChannel
from custom_components.ofl.fixture.dmx_value import max_dmx_value
from custom_components.ofl.fixture.exceptions import FixtureConfigurationError
from custom_components.ofl.fixture.fixture import Fixture
from custom_components.ofl.fixture.format_mapping import constructor_params, \
    extract_value_type, to_snake_case
from custom_components.ofl.fixture.mode import Mode
from custom_components.ofl.fixture.wheel import Wheel, WheelSlot

log = logging.getLogger(__name__)

WHEEL_SLOT_TYPES: dict[str, type[WheelSlot]] = {
    slot_type.__name__: slot_type for slot_type in WheelSlot.__subclasses__()
}


def _read_json_file(json_file: str) -> dict:
    with open(json_file, encoding="utf-8") as json_data:
        return json.load(json_data)


def parse(json_file: str, options: dict[str, Any] | None = None) -> Fixture:
    """
    Parses the json fixture-format file.
    :param json_file: The fixture-format json file
    :param options: Parser options, see `custom_components.ofl.config`.
    :return: The `Fixture` model class.
    """
    data = _read_json_file(json_file)
    return parse_fixture_data(data, options)


def parse_fixture_data(data: dict, options: dict[str, Any] | None = None) -> Fixture:
    """
    Parses fixture data from an already loaded fixture-format dictionary.
    :param data: The parsed JSON data
    :param options: Parser options, see `custom_components.ofl.config`.
    :return: The `Fixture` model class.
    """
    options = process_options(options)

    fixture_model = __parse_fixture(data, options[CONF_WARN_HELP_WANTED])

    if data.get("templateChannels") or data.get("matrix"):
        raise FixtureConfigurationError(
            f"Fixture {fixture_model.name}: matrix and template channels are not supported"
        )

    wheels_json = data.get("wheels")
    if wheels_json:
        __parse_wheels(fixture_model, wheels_json)

    available_channels_json = data.get("availableChannels")
    if not available_channels_json:
        raise FixtureConfigurationError(f"Fixture {fixture_model.name} has no availableChannels")

    for key, channel_json in available_channels_json.items():
        fixture_model.define_channel(CoarseChannel(key, channel_json, fixture_model))

    __parse_modes(fixture_model, data.get("modes", []))

    if options[CONF_VALIDATE_DMX_RANGES]:
        for channel in fixture_model.coarse_channels:
            __validate_dmx_ranges(channel)

    if options[CONF_WARN_HELP_WANTED]:
        for channel in fixture_model.coarse_channels:
            __warn_help_wanted(fixture_model, channel)

    return fixture_model


def __parse_fixture(fixture_json: dict, warn_help_wanted: bool) -> Fixture:
    name = fixture_json["name"]
    short_name = fixture_json.get("shortName", name)
    categories = fixture_json["categories"]

    fixture_key = fixture_json.get("fixtureKey")
    manufacturer_key = fixture_json.get("manufacturerKey")

    help_wanted = fixture_json.get("helpWanted")
    config_url = f"{OFL_URL}/{manufacturer_key}/{fixture_key}" if fixture_key and manufacturer_key else None

    if help_wanted and warn_help_wanted:
        if config_url:
            log.warning(
                "HELP WANTED: Looks like the fixture over at %s could use some love: %s.",
                config_url,
                help_wanted,
            )
        else:
            log.warning("HELP WANTED: Looks like the fixture %s could use some love: %s", name, help_wanted)

    return Fixture(name, short_name, categories, config_url, help_wanted)


def __parse_wheels(fixture_model: Fixture, wheels_json: dict):
    for wheel_name, wheel_json in wheels_json.items():
        slots: list[WheelSlot] = []
        direction = wheel_json.get("direction")

        for wheel_slot_json in wheel_json["slots"]:
            slot_type = wheel_slot_json["type"]

            # This is directly mapped to the class names inside wheel.py.
            slot_obj = WHEEL_SLOT_TYPES.get(slot_type)
            if slot_obj is None:
                raise FixtureConfigurationError(f"For wheel {wheel_name}, unknown slot type: {slot_type}")

            params = constructor_params(slot_obj)
            kwargs = {}

            for key, value_json in wheel_slot_json.items():
                if key == "type":
                    continue

                arg_name = to_snake_case(key)

                if arg_name in params:
                    kwargs[arg_name] = extract_value_type(arg_name, value_json, False, params)
                else:
                    raise FixtureConfigurationError(
                        f"For wheel {wheel_name}, " f"I don't know what kind of argument this is: " f"{arg_name}"
                    )

            slots.append(slot_obj(**kwargs))

        fixture_model.define_wheel(Wheel(wheel_name, slots, direction))


def __parse_modes(fixture_model: Fixture, modes_json: list[dict]):
    for mode_json in modes_json:
        name = mode_json["name"]
        channel_keys = []

        for channel_key in mode_json["channels"]:
            if channel_key is not None and not isinstance(channel_key, str):
                raise FixtureConfigurationError(
                    f"Mode {name}: channel insert blocks are not supported, got {channel_key}"
                )
            channel_keys.append(channel_key)

        fixture_model.define_mode(Mode(name, channel_keys, mode_json.get("shortName")))


def __validate_dmx_ranges(channel: CoarseChannel):
    capabilities = channel.capabilities
    if not capabilities:
        raise FixtureConfigurationError(f"Channel {channel.key} has no capabilities")

    expected_start = 0
    for capability in capabilities:
        start, end = capability.dmx_range
        if start != expected_start:
            kind = "gap" if start > expected_start else "overlap"
            raise FixtureConfigurationError(
                f"Channel {channel.key}: {kind} before capability {capability} "
                f"at DMX value {start}, expected {expected_start}"
            )
        if end < start:
            raise FixtureConfigurationError(
                f"Channel {channel.key}: capability {capability} ends before it starts: [{start}, {end}]"
            )
        expected_start = end + 1

    max_value = max_dmx_value(channel.dmx_value_resolution)
    if expected_start - 1 != max_value:
        raise FixtureConfigurationError(
            f"Channel {channel.key}: capabilities end at {expected_start - 1} instead of {max_value}"
        )


def __warn_help_wanted(fixture_model: Fixture, channel: CoarseChannel):
    where = f"over at {fixture_model.config_url}" if fixture_model.config_url else fixture_model.name
    for capability in channel.capabilities:
        if capability.help_wanted is not None:
            log.warning(
                "HELP WANTED: Channel '%s' of fixture %s could use some love: %s",
                channel.name,
                where,
                capability.help_wanted,
            )
