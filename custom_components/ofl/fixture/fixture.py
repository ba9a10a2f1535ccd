"""
The fixture is the God class on which can be operated. It holds the parsed
fixture data from the fixture format and can be used to get specific bits out.
"""

from custom_components.ofl.fixture.channel import AbstractChannel, \
    CoarseChannel, FineChannel, SwitchingChannel
from custom_components.ofl.fixture.exceptions import FixtureConfigurationError
from custom_components.ofl.fixture.mode import Mode
from custom_components.ofl.fixture.wheel import Wheel


class Fixture:
    """
    The fixture model class containing all other model classes related to the
    fixture.
    """

    # pylint: disable=too-many-instance-attributes

    def __init__(self, name: str, short_name: str | None, categories: list[str],
                 config_url: str | None, help_wanted: str | None = None):
        self.name = name
        self.short_name = short_name or name

        assert categories
        self.categories = categories

        self.config_url = config_url
        self.help_wanted = help_wanted

        self.wheels: dict[str, Wheel] = {}
        self.channels: dict[str, CoarseChannel] = {}
        self.modes: dict[str, Mode] = {}

    def define_wheel(self, wheel: Wheel) -> None:
        self.wheels[wheel.name] = wheel

    def define_channel(self, channel: CoarseChannel) -> None:
        """
        Defines a new coarse channel. Its fine and switching channels are
        looked up through it.
        :param channel: The channel to be added to the fixture.
        """
        if channel.key in self.channels:
            raise FixtureConfigurationError(f"Channel {channel.key} is defined twice")
        self.channels[channel.key] = channel

    def define_mode(self, mode: Mode) -> None:
        """
        Adds a mode to the fixture.
        :param mode: The mode to be added
        """
        mode.fixture = self
        self.modes[mode.name] = mode

    def get_wheel_by_name(self, wheel_name: str) -> Wheel | None:
        return self.wheels.get(wheel_name)

    def get_channel_by_key(self, channel_key: str) -> AbstractChannel | None:
        """
        :param channel_key: A coarse, fine or switching channel key.
        :return: The channel with that key, None if there's no such channel.
        """
        if channel_key in self.channels:
            return self.channels[channel_key]

        return next(
            (channel for channel in self.fine_channels + self.switching_channels
             if channel.key == channel_key),
            None
        )

    @property
    def coarse_channels(self) -> list[CoarseChannel]:
        return list(self.channels.values())

    @property
    def fine_channels(self) -> list[FineChannel]:
        return [
            fine_channel
            for channel in self.channels.values()
            for fine_channel in channel.fine_channels
        ]

    @property
    def switching_channels(self) -> list[SwitchingChannel]:
        return [
            switching_channel
            for channel in self.channels.values()
            for switching_channel in channel.switching_channels
        ]

    @property
    def all_channels(self) -> list[AbstractChannel]:
        return self.coarse_channels + self.fine_channels + self.switching_channels

    @property
    def is_help_wanted(self) -> bool:
        """
        :return: True if the fixture or one of its channels asks for help.
        """
        return self.help_wanted is not None or any(
            channel.is_help_wanted for channel in self.channels.values()
        )

    def __str__(self):
        return f"{self.name}: {list(self.modes.values())}"

    def __repr__(self):
        return self.name
