"""
Fixture features describe how a fixture makes use of the fixture format, e.g.
whether fine channels are placed in unusual positions. They only query the
fixture model.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from custom_components.ofl.fixture.fixture import Fixture

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class FixtureFeature:
    """
    A named check on a fixture.
    """
    name: str
    description: str
    has_feature: Callable[["Fixture"], bool]


def all_features() -> list[FixtureFeature]:
    # pylint: disable=import-outside-toplevel
    from custom_components.ofl.fixture_features import fine_positions

    return [*fine_positions.FEATURES]


def detect_features(fixture: "Fixture") -> list[str]:
    """
    :param fixture: The fixture to inspect.
    :return: Names of all features the fixture uses.
    """
    used = [feature.name for feature in all_features() if feature.has_feature(fixture)]
    log.debug("Fixture %s uses features %s", fixture.name, used)
    return used
