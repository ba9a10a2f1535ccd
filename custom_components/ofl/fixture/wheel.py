"""
Wheels and the slots they are made of.
https://github.com/OpenLightingProject/open-fixture-library/blob/master/docs/fixture-format.md#wheels

Slot class names and fields are mapped onto the fixture format by the parser.
"""

# pylint: disable=too-few-public-methods

from collections import Counter
from dataclasses import dataclass

from custom_components.ofl.fixture.entity import ColorTemperature, \
    IrisPercent, Percent


class WheelSlot:
    """Common base of all slot types, the parser looks up its subclasses by name."""

    @property
    def type(self) -> str:
        return type(self).__name__


@dataclass
class Open(WheelSlot):
    pass


@dataclass
class Closed(WheelSlot):
    pass


@dataclass
class Color(WheelSlot):
    name: str | None = None
    colors: list[str] | None = None
    color_temperature: ColorTemperature | None = None


@dataclass
class Gobo(WheelSlot):
    name: str | None = None
    resource: str | None = None


@dataclass
class Prism(WheelSlot):
    name: str | None = None
    facets: int | None = None

    def __post_init__(self):
        assert self.facets is None or self.facets >= 2


@dataclass
class Iris(WheelSlot):
    open_percent: IrisPercent | None = None


@dataclass
class Frost(WheelSlot):
    frost_intensity: Percent | None = None


@dataclass
class AnimationGoboStart(WheelSlot):
    name: str | None = None


@dataclass
class AnimationGoboEnd(WheelSlot):
    pass


class Wheel:
    """
    A named wheel of a fixture, referred to by wheel capabilities.
    """

    def __init__(self, name: str, slots: list[WheelSlot], direction: str | None = None) -> None:
        assert len(slots) >= 2

        self.name = name
        self.direction = direction
        self.slots = slots

    @property
    def type(self) -> str | None:
        """
        The most common slot type, not counting Open and Closed slots.
        Animation gobo start and end slots count as `AnimationGobo`.
        :return: The wheel type, None if there are only Open or Closed slots.
        """
        slot_types = Counter(
            slot.type.removesuffix("Start").removesuffix("End")
            for slot in self.slots
            if not isinstance(slot, (Open, Closed))
        )
        if not slot_types:
            return None
        return slot_types.most_common(1)[0][0]

    def get_slot(self, slot_number: int) -> WheelSlot:
        """
        :param slot_number: The one-based slot number, as used in capabilities.
        :return: The slot at that position.
        """
        return self.slots[(slot_number - 1) % len(self.slots)]

    def __repr__(self) -> str:
        return self.name
