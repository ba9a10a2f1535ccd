import threading
import unittest
from concurrent.futures import ThreadPoolExecutor
from unittest.mock import patch

import pytest

from custom_components.ofl.fixture import channel as channel_module
from custom_components.ofl.fixture.capability import SingleColor
from custom_components.ofl.fixture.channel import CoarseChannel, Precedence
from custom_components.ofl.fixture.channel_type import ChannelType
from custom_components.ofl.fixture.exceptions import EntityParseError, \
    ResolutionError


class TestResolution(unittest.TestCase):

    def test_max_resolution(self):
        for aliases in ([], ["fine"], ["fine", "fine^2"], ["fine", "fine^2", "fine^3"]):
            channel = CoarseChannel("Dimmer", {"fineChannelAliases": aliases, "capability": {"type": "Intensity"}})
            self.assertEqual(channel.max_resolution, 1 + len(aliases))
            self.assertEqual(channel.max_dmx_bound, pow(256, channel.max_resolution) - 1)

    def test_dmx_value_resolution_defaults_to_max_resolution(self):
        channel = CoarseChannel("Pan", {"fineChannelAliases": ["Pan fine"], "capability": {"type": "Pan", "angle": "0deg"}})
        self.assertEqual(channel.dmx_value_resolution, 2)

    def test_declared_dmx_value_resolution(self):
        channel = CoarseChannel("Pan", {
            "fineChannelAliases": ["Pan fine"],
            "dmxValueResolution": "8bit",
            "capability": {"type": "Pan", "angle": "0deg"}
        })
        self.assertEqual(channel.dmx_value_resolution, 1)
        self.assertEqual(channel.capabilities[0].dmx_range, [0, 255])

    def test_ensure_proper_resolution(self):
        channel = CoarseChannel("Pan", {"fineChannelAliases": ["Pan fine"], "capability": {"type": "Pan", "angle": "0deg"}})
        channel.ensure_proper_resolution(1)
        channel.ensure_proper_resolution(2)
        channel.ensure_proper_resolution(2.0)

        for resolution in (0, 3, -1, 1.5, 3.0, "2", True):
            with self.assertRaises(ResolutionError):
                channel.ensure_proper_resolution(resolution)


class TestDefaultAndHighlightValue(unittest.TestCase):

    def test_percentage_default_value(self):
        channel = CoarseChannel("Pan", {
            "fineChannelAliases": ["Pan fine"],
            "dmxValueResolution": "16bit",
            "defaultValue": "50%",
            "capability": {"type": "Pan", "angle": "0deg"}
        })
        self.assertTrue(channel.has_default_value)
        self.assertEqual(channel.default_value, 32767)
        self.assertEqual(channel.get_default_value_with_resolution(2), 32767)
        self.assertEqual(channel.get_default_value_with_resolution(1), 127)

    def test_integer_default_value_is_scaled(self):
        channel = CoarseChannel("Tilt", {
            "fineChannelAliases": ["Tilt fine", "Tilt fine^2"],
            "dmxValueResolution": "8bit",
            "defaultValue": 128,
            "capability": {"type": "Tilt", "angle": "0deg"}
        })
        self.assertEqual(channel.get_default_value_with_resolution(1), 128)
        self.assertEqual(channel.get_default_value_with_resolution(2), 32768)
        self.assertEqual(channel.get_default_value_with_resolution(3), 8388608)

    def test_keyword_default_value(self):
        channel = CoarseChannel("Dimmer", {"defaultValue": "bright", "capability": {"type": "Intensity"}})
        self.assertEqual(channel.default_value, 255)

    def test_integral_float_resolution(self):
        channel = CoarseChannel("Dimmer", {
            "fineChannelAliases": ["Dimmer fine"],
            "dmxValueResolution": "8bit",
            "defaultValue": 128,
            "capabilities": [
                {"dmxRange": [0, 127], "type": "NoFunction"},
                {"dmxRange": [128, 255], "type": "Intensity"}
            ]
        })
        self.assertEqual(channel.get_default_value_with_resolution(2.0), 32768)
        self.assertEqual(channel.get_highlight_value_with_resolution(1.0), 255)
        self.assertIs(channel.get_capability_with_dmx_value(40000, 2.0), channel.capabilities[1])

    def test_missing_default_value(self):
        channel = CoarseChannel("Dimmer", {"capability": {"type": "Intensity"}})
        self.assertFalse(channel.has_default_value)
        self.assertEqual(channel.default_value, 0)

    def test_highlight_value(self):
        channel = CoarseChannel("Dimmer", {"highlightValue": "75%", "capability": {"type": "Intensity"}})
        self.assertTrue(channel.has_highlight_value)
        self.assertEqual(channel.highlight_value, 191)

    def test_missing_highlight_value(self):
        channel = CoarseChannel("Dimmer", {"fineChannelAliases": ["Dimmer fine"], "capability": {"type": "Intensity"}})
        self.assertFalse(channel.has_highlight_value)
        self.assertEqual(channel.highlight_value, 65535)
        self.assertEqual(channel.get_highlight_value_with_resolution(1), 255)

    def test_resolution_out_of_range(self):
        channel = CoarseChannel("Dimmer", {"defaultValue": 10, "capability": {"type": "Intensity"}})
        with self.assertRaises(ResolutionError):
            channel.get_default_value_with_resolution(2)
        with self.assertRaises(ResolutionError):
            channel.get_highlight_value_with_resolution(0)

    def test_unparsable_default_value(self):
        channel = CoarseChannel("Dimmer", {"defaultValue": "half", "capability": {"type": "Intensity"}})
        self.assertEqual(channel.name, "Dimmer")
        with self.assertRaises(EntityParseError):
            channel.get_default_value_with_resolution(1)


class TestDerivedProperties(unittest.TestCase):

    def test_name(self):
        self.assertEqual(CoarseChannel("Dimmer", {"capability": {"type": "Intensity"}}).name, "Dimmer")
        self.assertEqual(CoarseChannel("Dimmer", {"name": "Master", "capability": {"type": "Intensity"}}).name,
                         "Master")
        self.assertEqual(repr(CoarseChannel("Dimmer", {"name": "Master"})), "Dimmer")

    def test_color(self):
        channel = CoarseChannel("Red", {"capability": {"type": "ColorIntensity", "color": "Red"}})
        self.assertEqual(channel.color, SingleColor.Red)
        self.assertEqual(channel.type, ChannelType.SINGLE_COLOR)
        self.assertIsNone(CoarseChannel("Dimmer", {"capability": {"type": "Intensity"}}).color)

    def test_constant_and_precedence(self):
        channel = CoarseChannel("Dimmer", {"constant": True, "precedence": "HTP", "capability": {"type": "Intensity"}})
        self.assertTrue(channel.is_constant)
        self.assertEqual(channel.precedence, Precedence.HTP)

        channel = CoarseChannel("Dimmer", {"capability": {"type": "Intensity"}})
        self.assertFalse(channel.is_constant)
        self.assertEqual(channel.precedence, Precedence.LTP)

    def test_capability_with_dmx_value(self):
        channel = CoarseChannel("Shutter", {"capabilities": [
            {"dmxRange": [0, 127], "type": "ShutterStrobe", "shutterEffect": "Closed"},
            {"dmxRange": [128, 255], "type": "ShutterStrobe", "shutterEffect": "Open"},
        ]})
        self.assertIs(channel.get_capability_with_dmx_value(0), channel.capabilities[0])
        self.assertIs(channel.get_capability_with_dmx_value(200), channel.capabilities[1])
        self.assertIsNone(channel.get_capability_with_dmx_value(300))

    def test_help_wanted(self):
        channel = CoarseChannel("Dimmer", {"capabilities": [
            {"dmxRange": [0, 127], "type": "NoFunction"},
            {"dmxRange": [128, 255], "type": "Intensity", "helpWanted": "Does it fade?"},
        ]})
        self.assertTrue(channel.is_help_wanted)
        self.assertFalse(CoarseChannel("Dimmer", {"capability": {"type": "Intensity"}}).is_help_wanted)

    def test_switching_channels(self):
        channel = CoarseChannel("Mode", {"capabilities": [
            {"dmxRange": [0, 127], "type": "Generic", "switchChannels": {"Color": "Red", "Other": "X"}},
            {"dmxRange": [128, 255], "type": "Generic", "switchChannels": {"Color": "Green", "Other": "X"}},
        ]})
        self.assertEqual(channel.switching_channel_aliases, ["Color", "Other"])
        self.assertEqual([switching.key for switching in channel.switching_channels], ["Color", "Other"])
        self.assertEqual(channel.switch_to_channel_keys, ["Red", "Green", "X"])

    def test_no_switching_channels(self):
        channel = CoarseChannel("Dimmer", {"capability": {"type": "Intensity"}})
        self.assertEqual(channel.switching_channel_aliases, [])
        self.assertEqual(channel.switching_channels, [])
        self.assertEqual(CoarseChannel("Empty", {"capabilities": []}).switching_channel_aliases, [])


class TestInverted(unittest.TestCase):

    def test_no_capabilities(self):
        self.assertFalse(CoarseChannel("Empty", {"capabilities": []}).is_inverted)

    def test_only_step_capabilities(self):
        channel = CoarseChannel("Shutter", {"capabilities": [
            {"dmxRange": [0, 127], "type": "ShutterStrobe", "shutterEffect": "Closed"},
            {"dmxRange": [128, 255], "type": "Intensity", "brightnessStart": "50%", "brightnessEnd": "50%"},
        ]})
        self.assertFalse(channel.is_inverted)

    def test_all_proportional_inverted(self):
        channel = CoarseChannel("Speed", {"capabilities": [
            {"dmxRange": [0, 9], "type": "NoFunction"},
            {"dmxRange": [10, 255], "type": "StrobeSpeed", "speedStart": "fast", "speedEnd": "slow"},
        ]})
        self.assertTrue(channel.is_inverted)

    def test_partially_inverted(self):
        channel = CoarseChannel("Speed", {"capabilities": [
            {"dmxRange": [0, 127], "type": "StrobeSpeed", "speedStart": "fast", "speedEnd": "slow"},
            {"dmxRange": [128, 255], "type": "StrobeSpeed", "speedStart": "slow", "speedEnd": "fast"},
        ]})
        self.assertFalse(channel.is_inverted)


class TestCrossfade(unittest.TestCase):

    def test_only_no_function(self):
        self.assertFalse(CoarseChannel("Nothing", {"capability": {"type": "NoFunction"}}).can_crossfade)

    def test_single_capability(self):
        self.assertTrue(CoarseChannel("Dimmer", {"capability": {"type": "Intensity"}}).can_crossfade)
        self.assertFalse(CoarseChannel("Dimmer", {"constant": True, "capability": {"type": "Intensity"}}).can_crossfade)

    def test_step_capabilities_of_different_types(self):
        channel = CoarseChannel("Shutter", {"capabilities": [
            {"dmxRange": [0, 127], "type": "ShutterStrobe", "shutterEffect": "Closed"},
            {"dmxRange": [128, 255], "type": "NoFunction"},
        ]})
        self.assertFalse(channel.can_crossfade)

    def test_step_capabilities_of_same_type(self):
        channel = CoarseChannel("Dimmer", {"capabilities": [
            {"dmxRange": [0, 127], "type": "Intensity", "brightness": "50%"},
            {"dmxRange": [128, 255], "type": "Intensity", "brightness": "50%"},
        ]})
        self.assertFalse(channel.can_crossfade)

    def test_continuous_capabilities(self):
        channel = CoarseChannel("Dimmer", {"capabilities": [
            {"dmxRange": [0, 127], "type": "Intensity", "brightnessStart": "0%", "brightnessEnd": "50%"},
            {"dmxRange": [128, 255], "type": "Intensity", "brightnessStart": "50%", "brightnessEnd": "100%"},
        ]})
        self.assertTrue(channel.can_crossfade)


class TestCache(unittest.TestCase):

    def test_capabilities_are_cached(self):
        channel = CoarseChannel("Dimmer", {"capability": {"type": "Intensity"}})
        self.assertIs(channel.capabilities, channel.capabilities)
        self.assertIs(channel.fine_channels, channel.fine_channels)

    def test_parse_errors_are_lazy(self):
        channel = CoarseChannel("Speed", {"capability": {"type": "StrobeSpeed", "speed": "very fast"}})
        self.assertEqual(channel.max_resolution, 1)
        with self.assertRaises(EntityParseError):
            _ = channel.capabilities

    def test_replacing_definition_clears_cache(self):
        channel = CoarseChannel("Dimmer", {"capability": {"type": "Intensity"}})
        self.assertEqual(channel.type, ChannelType.INTENSITY)
        self.assertEqual(channel.default_value, 0)

        channel.json_object = {
            "fineChannelAliases": ["Dimmer fine"],
            "defaultValue": "100%",
            "capability": {"type": "NoFunction"}
        }

        self.assertEqual(channel.type, ChannelType.NO_FUNCTION)
        self.assertEqual(channel.default_value, 65535)
        self.assertEqual([fine.key for fine in channel.fine_channels], ["Dimmer fine"])


def test_concurrent_readers_compute_once():
    channel = CoarseChannel("Dimmer", {"capabilities": [
        {"dmxRange": [0, 127], "type": "Intensity", "brightnessStart": "0%", "brightnessEnd": "50%"},
        {"dmxRange": [128, 255], "type": "Intensity", "brightnessStart": "50%", "brightnessEnd": "100%"},
    ]})
    barrier = threading.Barrier(8)

    def read():
        barrier.wait()
        return channel.capabilities, channel.type, channel.can_crossfade

    with patch.object(channel_module, "parse_capability", wraps=channel_module.parse_capability) as parse_mock:
        with ThreadPoolExecutor(max_workers=8) as executor:
            results = list(executor.map(lambda _: read(), range(8)))

    assert parse_mock.call_count == 2
    first_capabilities = results[0][0]
    for capabilities, channel_type, can_crossfade in results:
        assert capabilities is first_capabilities
        assert channel_type == ChannelType.INTENSITY
        assert can_crossfade


@pytest.mark.parametrize("resolution", [0, 2, 5])
def test_get_default_value_outside_resolution(resolution):
    channel = CoarseChannel("Dimmer", {"capability": {"type": "Intensity"}})
    with pytest.raises(ResolutionError):
        channel.get_default_value_with_resolution(resolution)


if __name__ == "__main__":
    unittest.main()
