import unittest

import pytest

from custom_components.ofl.fixture.capability import BladePosition, \
    MenuClick, ShutterEffect, parse_capability
from custom_components.ofl.fixture.entity import Speed
from custom_components.ofl.fixture.exceptions import FixtureConfigurationError


class TestParseCapability(unittest.TestCase):

    def test_start_end_bundling(self):
        capability = parse_capability({
            "dmxRange": [20, 255],
            "type": "ShutterStrobe",
            "shutterEffect": "Strobe",
            "speedStart": "1Hz",
            "speedEnd": "20Hz"
        }, 1)

        self.assertEqual(capability.type, "ShutterStrobe")
        self.assertEqual(capability.shutter_effect, ShutterEffect.Strobe)
        self.assertEqual(capability.speed, [Speed(1, "Hz"), Speed(20, "Hz")])
        self.assertEqual(capability.dmx_range, [20, 255])
        self.assertFalse(capability.is_step)

    def test_single_value_is_wrapped(self):
        capability = parse_capability({"type": "StrobeSpeed", "speed": "fast"}, 1)

        self.assertEqual(capability.speed, [Speed("fast")])
        self.assertTrue(capability.is_step)

    def test_default_dmx_range(self):
        self.assertEqual(parse_capability({"type": "Generic"}, 1).dmx_range, [0, 255])
        self.assertEqual(parse_capability({"type": "Generic"}, 2).dmx_range, [0, 65535])

    def test_dmx_range_with_resolution(self):
        capability = parse_capability({"dmxRange": [128, 255], "type": "Generic"}, 1)

        self.assertEqual(capability.get_dmx_range_with_resolution(1), [128, 255])
        self.assertEqual(capability.get_dmx_range_with_resolution(2), [32768, 65535])
        self.assertTrue(capability.is_applicable(40000, 2))
        self.assertFalse(capability.is_applicable(127))

    def test_common_attributes(self):
        capability = parse_capability({
            "type": "NoFunction",
            "comment": "Nothing",
            "menuClick": "hidden",
            "switchChannels": {"Alias": "Target"},
            "helpWanted": "Is this right?"
        }, 1)

        self.assertEqual(capability.comment, "Nothing")
        self.assertEqual(capability.menu_click, MenuClick.hidden)
        self.assertEqual(capability.switch_channels, {"Alias": "Target"})
        self.assertEqual(capability.help_wanted, "Is this right?")
        self.assertEqual(str(capability), "Nothing")

    def test_defaults(self):
        capability = parse_capability({"type": "NoFunction"}, 1)

        self.assertEqual(capability.menu_click, MenuClick.start)
        self.assertEqual(capability.switch_channels, {})
        self.assertIsNone(capability.help_wanted)

    def test_color_preset(self):
        single = parse_capability({"type": "ColorPreset", "colors": ["#ff0000", "#00ff00"]}, 1)
        self.assertEqual(single.colors, [["#ff0000", "#00ff00"]])
        self.assertTrue(single.is_step)

        fade = parse_capability({
            "type": "ColorPreset", "colorsStart": ["#ff0000"], "colorsEnd": ["#0000ff"]
        }, 1)
        self.assertEqual(fade.colors, [["#ff0000"], ["#0000ff"]])
        self.assertFalse(fade.is_step)
        self.assertFalse(fade.is_inverted)

    def test_blade(self):
        capability = parse_capability({
            "type": "BladeInsertion", "blade": "Top", "insertionStart": "out", "insertionEnd": "in"
        }, 1)
        self.assertEqual(capability.blade, BladePosition.Top)
        self.assertFalse(capability.is_inverted)

        numbered = parse_capability({"type": "BladeRotation", "blade": 5, "angle": "10deg"}, 1)
        self.assertEqual(numbered.blade, 5)

    def test_unknown_argument(self):
        with self.assertRaises(FixtureConfigurationError):
            parse_capability({"type": "Intensity", "loudness": "high"}, 1)

    def test_unknown_type(self):
        with self.assertRaises(FixtureConfigurationError):
            parse_capability({"type": "Teleport"}, 1)

    def test_unknown_enum_value(self):
        with self.assertRaises(FixtureConfigurationError):
            parse_capability({"type": "ShutterStrobe", "shutterEffect": "Wobble"}, 1)


class TestInverted(unittest.TestCase):

    def test_decreasing(self):
        capability = parse_capability({
            "type": "Intensity", "brightnessStart": "100%", "brightnessEnd": "0%"
        }, 1)
        self.assertTrue(capability.is_inverted)

    def test_increasing(self):
        capability = parse_capability({"type": "Intensity"}, 1)
        self.assertFalse(capability.is_inverted)

    def test_step_is_not_inverted(self):
        capability = parse_capability({"type": "Intensity", "brightness": "50%"}, 1)
        self.assertTrue(capability.is_step)
        self.assertFalse(capability.is_inverted)

    def test_different_units(self):
        capability = parse_capability({
            "type": "StrobeSpeed", "speedStart": "fast", "speedEnd": "1Hz"
        }, 1)
        self.assertFalse(capability.is_inverted)

    def test_base_units(self):
        capability = parse_capability({
            "type": "StrobeDuration", "durationStart": "2s", "durationEnd": "500ms"
        }, 1)
        self.assertTrue(capability.is_inverted)


class TestCrossfade(unittest.TestCase):

    @staticmethod
    def intensity(start: int, end: int, brightness_start: str, brightness_end: str):
        return parse_capability({
            "dmxRange": [start, end],
            "type": "Intensity",
            "brightnessStart": brightness_start,
            "brightnessEnd": brightness_end
        }, 1)

    def test_continuous(self):
        first = self.intensity(0, 127, "0%", "50%")
        second = self.intensity(128, 255, "50%", "100%")
        self.assertTrue(first.can_crossfade_to(second))

    def test_jump(self):
        first = self.intensity(0, 127, "0%", "50%")
        second = self.intensity(128, 255, "60%", "100%")
        self.assertFalse(first.can_crossfade_to(second))

    def test_not_adjacent(self):
        first = self.intensity(0, 100, "0%", "50%")
        second = self.intensity(128, 255, "50%", "100%")
        self.assertFalse(first.can_crossfade_to(second))

    def test_different_types(self):
        first = parse_capability({"dmxRange": [0, 127], "type": "ShutterStrobe", "shutterEffect": "Closed"}, 1)
        second = parse_capability({"dmxRange": [128, 255], "type": "NoFunction"}, 1)
        self.assertFalse(first.can_crossfade_to(second))

    def test_steps_without_ranged_parameters(self):
        first = parse_capability({"dmxRange": [0, 127], "type": "NoFunction"}, 1)
        second = parse_capability({"dmxRange": [128, 255], "type": "NoFunction"}, 1)
        self.assertFalse(first.can_crossfade_to(second))

    def test_different_static_attributes(self):
        first = parse_capability({
            "dmxRange": [0, 127], "type": "ShutterStrobe", "shutterEffect": "Strobe",
            "speedStart": "1Hz", "speedEnd": "10Hz"
        }, 1)
        second = parse_capability({
            "dmxRange": [128, 255], "type": "ShutterStrobe", "shutterEffect": "Pulse",
            "speedStart": "10Hz", "speedEnd": "20Hz"
        }, 1)
        self.assertFalse(first.can_crossfade_to(second))

    def test_different_switch_targets(self):
        first = parse_capability({
            "dmxRange": [0, 127], "type": "Intensity", "switchChannels": {"A": "Red"}
        }, 1)
        second = parse_capability({
            "dmxRange": [128, 255], "type": "Intensity", "switchChannels": {"A": "Green"},
            "brightnessStart": "bright", "brightnessEnd": "off"
        }, 1)
        self.assertFalse(first.can_crossfade_to(second))


def test_wheels_without_channel():
    assert parse_capability({"type": "WheelSlot", "slotNumber": 1}, 1).wheels == []
    assert parse_capability({"type": "WheelSlot", "wheel": "Colors", "slotNumber": 1}, 1).wheels == [None]
    assert parse_capability({"type": "Intensity"}, 1).wheels == []


@pytest.mark.parametrize("capability_json", [
    {"type": "Pan", "angleStart": "0deg", "angleEnd": "540deg"},
    {"type": "WheelSlotRotation", "slotNumber": 2, "speed": "slow CW"},
    {"type": "Effect", "effectPreset": "ColorFade", "soundControlled": True},
    {"type": "Fog", "fogType": "Haze", "fogOutput": "strong"},
    {"type": "Maintenance", "hold": "3s"},
    {"type": "Iris", "openPercentStart": "closed", "openPercentEnd": "open"},
])
def test_str(capability_json):
    capability = parse_capability(capability_json, 1)
    assert capability.type == capability_json["type"]
    assert str(capability)


if __name__ == "__main__":
    unittest.main()
