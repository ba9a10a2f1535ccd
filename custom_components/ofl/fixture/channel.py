"""
Channel model classes.

A coarse channel maps to one DMX value and owns its capabilities. Fine channels
add precision bytes to a coarse channel, and switching channels are virtual
channels that forward to another channel depending on the coarse channel's
current capability.
"""

import logging
import math
import threading
from collections.abc import Callable
from enum import Enum, auto
from typing import Any, TYPE_CHECKING

from custom_components.ofl.fixture.capability import Capability, \
    parse_capability, SingleColor
from custom_components.ofl.fixture.channel_type import ChannelType, \
    classify_channel_type
from custom_components.ofl.fixture.dmx_value import RESOLUTION_8BIT, \
    DmxValueResolution, max_dmx_value, scale_dmx_value
from custom_components.ofl.fixture.entity import parse_entity
from custom_components.ofl.fixture.exceptions import ResolutionError
from custom_components.ofl.fixture.mode import SwitchingChannelBehavior

if TYPE_CHECKING:
    from custom_components.ofl.fixture.fixture import Fixture
    from custom_components.ofl.fixture.mode import Mode

log = logging.getLogger(__name__)


class Precedence(Enum):
    """
    Conflict resolution when multiple sources write the same channel.
    Names match fixture format exactly.
    """
    LTP = auto()
    HTP = auto()


class AbstractChannel:
    """
    Common identity of coarse, fine and switching channels.
    """

    def __init__(self, key: str):
        self.key = key

    @property
    def name(self) -> str:
        return self.key

    @property
    def fixture(self) -> "Fixture | None":
        return None

    def __repr__(self):
        return self.key


class CoarseChannel(AbstractChannel):
    """
    A channel as defined in the fixture's `availableChannels`. All derived
    properties are computed on first access and cached until the channel's
    definition is replaced.
    """

    # pylint: disable=too-many-public-methods

    def __init__(self, key: str, json_object: dict, fixture: "Fixture | None" = None):
        super().__init__(key)
        self._lock = threading.RLock()
        self._json_object: dict = {}
        self._cache: dict[str, Any] = {}
        self.json_object = json_object
        self._fixture = fixture

    @property
    def json_object(self) -> dict:
        return self._json_object

    @json_object.setter
    def json_object(self, json_object: dict) -> None:
        with self._lock:
            self._json_object = json_object
            self._cache = {}
        log.debug("Channel %s: definition replaced, cache cleared", self.key)

    def _cached(self, key: str, compute: Callable[[], Any]) -> Any:
        cache = self._cache
        if key in cache:
            return cache[key]

        with self._lock:
            # The definition may have been replaced while waiting
            cache = self._cache
            if key not in cache:
                cache[key] = compute()
            return cache[key]

    @property
    def fixture(self) -> "Fixture | None":
        return self._fixture

    @property
    def name(self) -> str:
        return self._json_object.get("name") or self.key

    @property
    def type(self) -> ChannelType:
        return self._cached("type", lambda: classify_channel_type(self.capabilities))

    @property
    def color(self) -> SingleColor | None:
        """
        :return: The color of the first ColorIntensity capability, if any.
        """
        return self._cached("color", lambda: next(
            (capability.color for capability in self.capabilities
             if capability.type == "ColorIntensity"),
            None
        ))

    @property
    def fine_channel_aliases(self) -> list[str]:
        return self._json_object.get("fineChannelAliases") or []

    @property
    def fine_channels(self) -> list["FineChannel"]:
        return self._cached("fine_channels", lambda: [
            FineChannel(alias, self) for alias in self.fine_channel_aliases
        ])

    @property
    def max_resolution(self) -> int:
        return RESOLUTION_8BIT + len(self.fine_channel_aliases)

    def ensure_proper_resolution(self, unchecked_resolution: int | float) -> None:
        """
        Integral floats like `2.0` are accepted as well.
        :raises ResolutionError: If the resolution is not an integer in
                                 [1, max_resolution].
        """
        is_integral = isinstance(unchecked_resolution, int) or (
            isinstance(unchecked_resolution, float) and unchecked_resolution.is_integer()
        )
        if (not is_integral
                or isinstance(unchecked_resolution, bool)
                or not RESOLUTION_8BIT <= unchecked_resolution <= self.max_resolution):
            raise ResolutionError(
                f"Channel {self.key}: resolution must be a positive integer "
                f"not greater than {self.max_resolution}, but was {unchecked_resolution}"
            )

    @property
    def dmx_value_resolution(self) -> int:
        """
        :return: The resolution in which DMX values of this channel are
                 declared. Defaults to the max resolution.
        """
        def compute():
            if "dmxValueResolution" in self._json_object:
                return DmxValueResolution.from_string(
                    self._json_object["dmxValueResolution"]
                ).value
            return self.max_resolution

        return self._cached("dmx_value_resolution", compute)

    def get_resolution_in_mode(self, mode: "Mode",
                               switching_channel_behavior: SwitchingChannelBehavior | None = None) -> int:
        """
        :param mode: The mode in which the channel could be used.
        :param switching_channel_behavior: How switching channels are treated,
                                           defaults to the mode's default.
        :return: How many of this channel's bytes are used in the mode, 0 if
                 the channel isn't used at all.
        """
        channel_keys = [self.key] + self.fine_channel_aliases
        if switching_channel_behavior is None:
            used_channels = [key for key in channel_keys if mode.get_channel_index(key) != -1]
        else:
            used_channels = [
                key for key in channel_keys
                if mode.get_channel_index(key, switching_channel_behavior) != -1
            ]
        return len(used_channels)

    @property
    def max_dmx_bound(self) -> int:
        return max_dmx_value(self.max_resolution)

    @property
    def has_default_value(self) -> bool:
        return "defaultValue" in self._json_object

    @property
    def default_value(self) -> int:
        return self.get_default_value_with_resolution(self.max_resolution)

    def get_default_value_with_resolution(self, desired_resolution: int) -> int:
        """
        :param desired_resolution: The resolution in [1, max_resolution].
        :return: The default value, scaled to the desired resolution.
        """
        self.ensure_proper_resolution(desired_resolution)
        values = self._cached("default_value_per_resolution", lambda: self._values_per_resolution(
            self._json_object.get("defaultValue") or 0
        ))
        return values[int(desired_resolution)]

    @property
    def has_highlight_value(self) -> bool:
        return "highlightValue" in self._json_object

    @property
    def highlight_value(self) -> int:
        return self.get_highlight_value_with_resolution(self.max_resolution)

    def get_highlight_value_with_resolution(self, desired_resolution: int) -> int:
        """
        :param desired_resolution: The resolution in [1, max_resolution].
        :return: The highlight value, scaled to the desired resolution.
        """
        self.ensure_proper_resolution(desired_resolution)
        values = self._cached("highlight_value_per_resolution", lambda: self._values_per_resolution(
            self._json_object.get("highlightValue", max_dmx_value(self.dmx_value_resolution))
        ))
        return values[int(desired_resolution)]

    def _values_per_resolution(self, raw_value: int | str) -> dict[int, int]:
        if not isinstance(raw_value, int) or isinstance(raw_value, bool):
            percentage = parse_entity(raw_value).value / 100
            raw_value = math.floor(percentage * max_dmx_value(self.dmx_value_resolution))

        return {
            resolution: scale_dmx_value(raw_value, self.dmx_value_resolution, resolution)
            for resolution in range(RESOLUTION_8BIT, self.max_resolution + 1)
        }

    @property
    def is_inverted(self) -> bool:
        """
        :return: True if there's at least one proportional capability, and all
                 proportional capabilities are inverted.
        """
        def compute():
            proportional = [capability for capability in self.capabilities if not capability.is_step]
            return len(proportional) > 0 and all(capability.is_inverted for capability in proportional)

        return self._cached("is_inverted", compute)

    @property
    def is_constant(self) -> bool:
        return bool(self._json_object.get("constant", False))

    @property
    def can_crossfade(self) -> bool:
        """
        :return: True if fading between DMX values results in a smooth
                 transition of the channel's effect.
        """
        def compute():
            capabilities = self.capabilities
            if len(capabilities) == 1:
                return not self.is_constant and self.type != ChannelType.NO_FUNCTION

            return all(
                capability.can_crossfade_to(next_capability)
                for capability, next_capability in zip(capabilities, capabilities[1:])
            ) and any(not capability.is_step for capability in capabilities)

        return self._cached("can_crossfade", compute)

    @property
    def precedence(self) -> Precedence:
        return Precedence[self._json_object.get("precedence", Precedence.LTP.name)]

    @property
    def switching_channel_aliases(self) -> list[str]:
        """
        Assumes that all capabilities declare the same aliases, so only the
        first one is consulted.
        """
        def compute():
            capabilities = self.capabilities
            if not capabilities:
                return []
            return list(capabilities[0].switch_channels)

        return self._cached("switching_channel_aliases", compute)

    @property
    def switching_channels(self) -> list["SwitchingChannel"]:
        return self._cached("switching_channels", lambda: [
            SwitchingChannel(alias, self) for alias in self.switching_channel_aliases
        ])

    @property
    def switch_to_channel_keys(self) -> list[str]:
        return self._cached("switch_to_channel_keys", lambda: [
            key
            for switching_channel in self.switching_channels
            for key in switching_channel.switch_to_channel_keys
        ])

    @property
    def capabilities(self) -> list[Capability]:
        def compute():
            resolution = self.dmx_value_resolution
            if "capability" in self._json_object:
                capability_json = {
                    "dmxRange": [0, max_dmx_value(resolution)],
                    **self._json_object["capability"]
                }
                return [parse_capability(capability_json, resolution, self)]

            return [
                parse_capability(capability_json, resolution, self)
                for capability_json in self._json_object.get("capabilities", [])
            ]

        return self._cached("capabilities", compute)

    def get_capability_with_dmx_value(self, dmx_value: int,
                                      resolution: int | None = None) -> Capability | None:
        """
        :param dmx_value: The DMX value to look up.
        :param resolution: The resolution of the DMX value, defaults to the
                           channel's declared resolution.
        :return: The capability which is active at that value.
        """
        if resolution is not None:
            self.ensure_proper_resolution(resolution)
            resolution = int(resolution)

        return next(
            (capability for capability in self.capabilities
             if capability.is_applicable(dmx_value, resolution)),
            None
        )

    @property
    def is_help_wanted(self) -> bool:
        return self._cached("is_help_wanted", lambda: any(
            capability.help_wanted is not None for capability in self.capabilities
        ))


class FineChannel(AbstractChannel):
    """
    A fine channel adds one byte of precision to its coarse channel.
    """

    def __init__(self, key: str, coarse_channel: CoarseChannel):
        super().__init__(key)
        self.coarse_channel = coarse_channel

    @property
    def resolution(self) -> int:
        """
        :return: 2 for the first fine channel, 3 for the one after, ...
        """
        return self.coarse_channel.fine_channel_aliases.index(self.key) + 2

    @property
    def coarser_channel(self) -> "CoarseChannel | FineChannel":
        """
        :return: The channel which carries the next more significant byte.
        """
        if self.resolution == 2:
            return self.coarse_channel
        return self.coarse_channel.fine_channels[self.resolution - 3]

    @property
    def name(self) -> str:
        if self.resolution == 2:
            return f"{self.coarse_channel.name} fine"
        return f"{self.coarse_channel.name} fine^{self.resolution - 1}"

    @property
    def fixture(self) -> "Fixture | None":
        return self.coarse_channel.fixture

    @property
    def type(self) -> ChannelType:
        return self.coarse_channel.type

    @property
    def capabilities(self) -> list[Capability]:
        return self.coarse_channel.capabilities

    @property
    def default_value(self) -> int:
        """
        :return: The byte this channel sends for the coarse channel's default.
        """
        return self.coarse_channel.get_default_value_with_resolution(self.resolution) % 256


class SwitchingChannel(AbstractChannel):
    """
    A virtual channel which forwards to one of several channels, depending on
    the capability its trigger channel is currently in.
    """

    def __init__(self, key: str, trigger_channel: CoarseChannel):
        super().__init__(key)
        self.trigger_channel = trigger_channel

    @property
    def fixture(self) -> "Fixture | None":
        return self.trigger_channel.fixture

    @property
    def trigger_capabilities(self) -> list[Capability]:
        return self.trigger_channel.capabilities

    @property
    def switch_to_channel_keys(self) -> list[str]:
        """
        :return: All channel keys this channel may forward to, without
                 duplicates, in capability order.
        """
        keys = (
            capability.switch_channels.get(self.key)
            for capability in self.trigger_capabilities
        )
        return list(dict.fromkeys(key for key in keys if key is not None))

    @property
    def switch_to_channels(self) -> list[AbstractChannel | None]:
        fixture = self.fixture
        if fixture is None:
            return []
        return [fixture.get_channel_by_key(key) for key in self.switch_to_channel_keys]

    @property
    def default_channel_key(self) -> str | None:
        """
        :return: The channel key selected by the trigger's default value.
        """
        resolution = self.trigger_channel.max_resolution
        return self.get_active_channel_key(
            self.trigger_channel.get_default_value_with_resolution(resolution),
            resolution
        )

    @property
    def default_channel(self) -> AbstractChannel | None:
        fixture = self.fixture
        key = self.default_channel_key
        if fixture is None or key is None:
            return None
        return fixture.get_channel_by_key(key)

    def get_active_channel_key(self, dmx_value: int, resolution: int | None = None) -> str | None:
        """
        :param dmx_value: The trigger channel's current DMX value.
        :param resolution: The resolution of the DMX value.
        :return: The channel key this channel forwards to at that value.
        """
        capability = self.trigger_channel.get_capability_with_dmx_value(dmx_value, resolution)
        if capability is None:
            return None
        return capability.switch_channels.get(self.key)

    def uses_channel_key(self, channel_key: str,
                         switching_channel_behavior: SwitchingChannelBehavior = SwitchingChannelBehavior.all) -> bool:
        """
        :param channel_key: The channel key to look for.
        :param switching_channel_behavior: `all` checks every possible target,
                                           `default` only the default target.
        :return: True if this channel may forward to the channel key.
        """
        if switching_channel_behavior == SwitchingChannelBehavior.all:
            return channel_key in self.switch_to_channel_keys
        if switching_channel_behavior == SwitchingChannelBehavior.default:
            return channel_key == self.default_channel_key
        return False

    @property
    def is_help_wanted(self) -> bool:
        return self.trigger_channel.is_help_wanted
