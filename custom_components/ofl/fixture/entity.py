"""
Entities represent possible units or keywords which are used in capabilities,
like `50%`, `3.2s`, `10Hz` or `fast`.
https://github.com/OpenLightingProject/open-fixture-library/blob/master/docs/capability-types.md#entities
"""

import re

from custom_components.ofl.fixture.exceptions import EntityParseError

UNITS: list[str | None] = [None, "%", "Hz", "bpm", "rpm", "s", "ms", "m", "lm", "K", "deg", "m^3/min"]

# Units which are converted into another unit before entities are compared.
BASE_UNITS: dict[str, tuple[str, int]] = {
    "ms": ("s", 1000),
}

entity_pattern = re.compile(r"^(-?(?:\d+\.?\d*|\.\d+))(.*)$")


class Entity:
    """
    Base class for all entities.
    A keyword is stored as the percentage it conventionally stands for.
    """

    allowed_units: list[str | None] = UNITS
    keywords: dict[str, float] = {}

    def __init__(self, value: float | str, unit: str | None = None):
        if isinstance(value, str):
            if value not in self.keywords:
                raise EntityParseError(value, f"a number with unit or one of {list(self.keywords)}")
            self.input = value
            self.keyword: str | None = value
            self.value: float = self.keywords[value]
            self.unit: str | None = "%"
        else:
            if unit not in self.allowed_units:
                raise EntityParseError(f"{value}{unit or ''}", f"a unit in {self.allowed_units}")
            self.input = f"{value}{unit}" if unit else str(value)
            self.keyword = None
            self.value = value
            self.unit = unit

    @classmethod
    def from_string(cls, entity_string: str | float) -> "Entity":
        """
        Parses an entity as written in the fixture format.
        :param entity_string: A number, a number followed by a unit (`50%`) or
                              a keyword (`fast`).
        :return: The parsed entity.
        :raises EntityParseError: If the string doesn't match any of those.
        """
        if isinstance(entity_string, bool):
            raise EntityParseError(str(entity_string))

        if isinstance(entity_string, (int, float)):
            return cls(entity_string)

        if not isinstance(entity_string, str):
            raise EntityParseError(str(entity_string))

        match = entity_pattern.match(entity_string)
        if not match:
            return cls(entity_string)

        number, unit = match.groups()
        entity = cls(float(number), unit or None)
        entity.input = entity_string
        return entity

    @property
    def base_unit_entity(self) -> "Entity":
        """
        :return: This entity converted to its base unit, e.g. `500ms` becomes
                 `0.5s`. Returns itself if it's already in its base unit.
        """
        if self.unit not in BASE_UNITS:
            return self

        base_unit, divisor = BASE_UNITS[self.unit]
        return type(self)(self.value / divisor, base_unit)

    def __key(self) -> tuple[float, str | None]:
        base = self.base_unit_entity
        return base.value, base.unit

    def __eq__(self, other):
        if not isinstance(other, Entity):
            return NotImplemented
        return self.__key() == other.__key()

    def __hash__(self):
        return hash(self.__key())

    def __str__(self):
        return str(self.input)

    def __repr__(self):
        return self.__str__()

    def __lt__(self, other):
        return self.base_unit_entity.value < other.base_unit_entity.value


def parse_entity(entity_string: str | float, entity_type: type[Entity] = Entity) -> Entity:
    """
    Parses an entity string into the given entity type.
    :param entity_string: The value as found in the fixture format.
    :param entity_type: The `Entity` subclass which defines units and keywords.
    :return: The parsed entity.
    """
    return entity_type.from_string(entity_string)


class Speed(Entity):
    """
    Speed entity.
    Class name and instance attributes match fixture format exactly.
    """

    # pylint: disable=too-few-public-methods
    allowed_units = ["Hz", "bpm", "%"]
    keywords = {
        "fast reverse": -100,
        "slow reverse": -1,
        "stop": 0,
        "slow": 1,
        "fast": 100
    }


class RotationSpeed(Entity):
    """
    RotationSpeed entity.
    Class name and instance attributes match fixture format exactly.
    """

    # pylint: disable=too-few-public-methods
    allowed_units = ["Hz", "rpm", "%"]
    keywords = {
        "fast CCW": -100,
        "slow CCW": -1,
        "stop": 0,
        "slow CW": 1,
        "fast CW": 100
    }


class Time(Entity):
    """
    Time entity.
    Class name and instance attributes match fixture format exactly.
    """

    # pylint: disable=too-few-public-methods
    allowed_units = ["s", "ms", "%"]
    keywords = {
        "instant": 0,
        "short": 1,
        "long": 100
    }


class Distance(Entity):
    """
    Distance entity.
    """

    # pylint: disable=too-few-public-methods
    allowed_units = ["m", "%"]
    keywords = {
        "near": 1,
        "far": 100
    }


class Brightness(Entity):
    """
    Brightness entity.
    """

    # pylint: disable=too-few-public-methods
    allowed_units = ["lm", "%"]
    keywords = {
        "off": 0,
        "dark": 1,
        "bright": 100
    }


class ColorTemperature(Entity):
    """
    ColorTemperature entity, either in Kelvin or relative to the default white.
    """

    # pylint: disable=too-few-public-methods
    allowed_units = ["K", "%"]
    keywords = {
        "warm": -100,
        "CTO": -100,
        "default": 0,
        "cold": 100,
        "CTB": 100
    }


class FogOutput(Entity):
    """
    FogOutput entity.
    """

    # pylint: disable=too-few-public-methods
    allowed_units = ["m^3/min", "%"]
    keywords = {
        "off": 0,
        "weak": 1,
        "strong": 100
    }


class RotationAngle(Entity):
    """
    RotationAngle entity. Has no keywords.
    """

    # pylint: disable=too-few-public-methods
    allowed_units = ["deg", "%"]
    keywords = {}


class BeamAngle(Entity):
    """
    BeamAngle entity.
    """

    # pylint: disable=too-few-public-methods
    allowed_units = ["deg", "%"]
    keywords = {
        "closed": 0,
        "narrow": 1,
        "wide": 100
    }


class HorizontalAngle(Entity):
    """
    HorizontalAngle entity.
    """

    # pylint: disable=too-few-public-methods
    allowed_units = ["deg", "%"]
    keywords = {
        "left": -100,
        "center": 0,
        "right": 100
    }


class VerticalAngle(Entity):
    """
    VerticalAngle entity.
    """

    # pylint: disable=too-few-public-methods
    allowed_units = ["deg", "%"]
    keywords = {
        "top": -100,
        "center": 0,
        "bottom": 100
    }


class SwingAngle(Entity):
    """
    SwingAngle entity.
    """

    # pylint: disable=too-few-public-methods
    allowed_units = ["deg", "%"]
    keywords = {
        "off": 0,
        "narrow": 1,
        "wide": 100
    }


class Parameter(Entity):
    """
    Parameter entity, a unitless number or percentage.
    """

    # pylint: disable=too-few-public-methods
    allowed_units = [None, "%"]
    keywords = {
        "off": 0,
        "instant": 0,
        "low": 1,
        "slow": 1,
        "small": 1,
        "short": 1,
        "high": 100,
        "fast": 100,
        "big": 100,
        "long": 100
    }


class SlotNumber(Entity):
    """
    SlotNumber entity. Slots are numbered starting at 1, halfway values like
    2.5 are in between two slots.
    """

    # pylint: disable=too-few-public-methods
    allowed_units = [None]
    keywords = {}


class Percent(Entity):
    """
    Percent entity.
    """

    # pylint: disable=too-few-public-methods
    allowed_units = ["%"]
    keywords = {
        "off": 0,
        "low": 1,
        "high": 100
    }


class Insertion(Entity):
    """
    Insertion entity.
    """

    # pylint: disable=too-few-public-methods
    allowed_units = ["%"]
    keywords = {
        "out": 0,
        "in": 100,
    }


class IrisPercent(Entity):
    """
    IrisPercent entity.
    """

    # pylint: disable=too-few-public-methods
    allowed_units = ["%"]
    keywords = {
        "closed": 0,
        "open": 100,
    }


# Untyped values, like a channel's default value, accept the keywords of every entity type
Entity.keywords = {
    keyword: value
    for entity_type in Entity.__subclasses__()
    for keyword, value in entity_type.keywords.items()
}
