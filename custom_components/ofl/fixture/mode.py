"""
This module contains mode related classes, as per fixture format.
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from custom_components.ofl.fixture.fixture import Fixture


class SwitchingChannelBehavior(Enum):
    """
    Whether channels that a switching channel forwards to count as being
    used in a mode.
    Names match fixture format exactly.
    """

    # pylint: disable=invalid-name
    none = auto()
    default = auto()
    all = auto()


@dataclass
class Mode:
    """
    A mode is an ordered list of channels, each taking up one DMX address.
    An entry may be None for unused addresses.
    """

    name: str
    channel_keys: list[str | None]
    short_name: str | None = None
    fixture: "Fixture | None" = field(default=None, repr=False)

    def __post_init__(self):
        if not self.short_name:
            self.short_name = self.name

    def get_channel_index(self, channel_key: str,
                          switching_channel_behavior: SwitchingChannelBehavior = SwitchingChannelBehavior.all) -> int:
        """
        :param channel_key: The channel key to look for.
        :param switching_channel_behavior: Whether switching channels which
                                           may forward to the key count.
        :return: The zero-based index of the channel in this mode, -1 if it
                 isn't used.
        """
        # pylint: disable=import-outside-toplevel
        from custom_components.ofl.fixture.channel import SwitchingChannel

        for index, key in enumerate(self.channel_keys):
            if key is None:
                continue
            if key == channel_key:
                return index
            if switching_channel_behavior == SwitchingChannelBehavior.none or self.fixture is None:
                continue

            channel = self.fixture.get_channel_by_key(key)
            if isinstance(channel, SwitchingChannel) \
                    and channel.uses_channel_key(channel_key, switching_channel_behavior):
                return index

        return -1

    def __repr__(self):
        return f"{self.name}: {self.channel_keys}"
