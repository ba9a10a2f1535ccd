"""
Features about where fine channels are placed in a mode, relative to the
channels they add precision to.
"""

from custom_components.ofl.fixture.channel import FineChannel
from custom_components.ofl.fixture.fixture import Fixture
from custom_components.ofl.fixture_features import FixtureFeature


def _fine_before_coarse(fixture: Fixture) -> bool:
    for mode in fixture.modes.values():
        for position, channel_key in enumerate(mode.channel_keys):
            if channel_key is None:
                continue
            channel = fixture.get_channel_by_key(channel_key)
            if isinstance(channel, FineChannel) \
                    and position < mode.get_channel_index(channel.coarse_channel.key):
                return True
    return False


def _fine_not_adjacent_after_coarse(fixture: Fixture) -> bool:
    for mode in fixture.modes.values():
        for position, channel_key in enumerate(mode.channel_keys):
            if channel_key is None:
                continue
            channel = fixture.get_channel_by_key(channel_key)
            if not isinstance(channel, FineChannel):
                continue

            # A coarser channel that isn't in the mode at all doesn't count
            coarser_index = mode.get_channel_index(channel.coarser_channel.key)
            if coarser_index != -1 and position > coarser_index + 1:
                return True
    return False


FEATURES = [
    FixtureFeature(
        "Fine before coarse",
        "Fine channel used in a mode before its coarse channel",
        _fine_before_coarse,
    ),
    FixtureFeature(
        "Fine not-adjacent after coarse",
        "Coarse channel with fine channels are not directly after each other",
        _fine_not_adjacent_after_coarse,
    ),
]
