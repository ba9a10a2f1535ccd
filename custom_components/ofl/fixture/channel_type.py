"""
Classifies a channel into a single channel type, based on the types of its
capabilities. The constraints are checked in order, the first one that matches
determines the channel type.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum

from custom_components.ofl.fixture.capability import Capability, \
    ShutterEffect

log = logging.getLogger(__name__)


class ChannelType(StrEnum):
    """
    Semantic channel types. Values match the names used by fixture consumers.
    """
    SINGLE_COLOR = "Single Color"
    MULTI_COLOR = "Multi-Color"
    PAN = "Pan"
    TILT = "Tilt"
    FOCUS = "Focus"
    ZOOM = "Zoom"
    IRIS = "Iris"
    GOBO = "Gobo"
    PRISM = "Prism"
    COLOR_TEMPERATURE = "Color Temperature"
    EFFECT = "Effect"
    STROBE = "Strobe"
    SHUTTER = "Shutter"
    FOG = "Fog"
    SPEED = "Speed"
    MAINTENANCE = "Maintenance"
    INTENSITY = "Intensity"
    NO_FUNCTION = "NoFunction"
    UNKNOWN = "Unknown"


Predicate = Callable[[list[Capability]], bool]


@dataclass(frozen=True)
class ChannelTypeConstraint:
    """
    A channel matches when any of its capabilities has one of the required
    types, and the predicate (if any) holds for all of its capabilities.
    """
    channel_type: ChannelType
    required: frozenset[str]
    predicate: Predicate | None = None

    def matches(self, capabilities: list[Capability]) -> bool:
        if not any(capability.type in self.required for capability in capabilities):
            return False
        return self.predicate is None or self.predicate(capabilities)


def _all_wheel_slots_are_colors(capabilities: list[Capability]) -> bool:
    for capability in capabilities:
        if capability.type != "WheelSlot":
            continue
        wheels = capability.wheels
        if not wheels or wheels[0] is None or wheels[0].type != "Color":
            return False
    return True


def _all_wheels_are_gobos(capabilities: list[Capability]) -> bool:
    return all(
        wheel is not None and wheel.type == "Gobo"
        for capability in capabilities
        for wheel in capability.wheels
    )


def _has_strobe_effect(capabilities: list[Capability]) -> bool:
    return any(
        capability.type == "ShutterStrobe"
        and capability.shutter_effect not in (ShutterEffect.Open, ShutterEffect.Closed)
        for capability in capabilities
    )


# Order matters, the first match wins.
CHANNEL_TYPE_CONSTRAINTS: tuple[ChannelTypeConstraint, ...] = (
    ChannelTypeConstraint(ChannelType.SINGLE_COLOR, frozenset({"ColorIntensity"})),
    ChannelTypeConstraint(ChannelType.MULTI_COLOR, frozenset({"ColorPreset", "WheelSlot"}),
                          _all_wheel_slots_are_colors),
    ChannelTypeConstraint(ChannelType.PAN, frozenset({"Pan", "PanContinuous"})),
    ChannelTypeConstraint(ChannelType.TILT, frozenset({"Tilt", "TiltContinuous"})),
    ChannelTypeConstraint(ChannelType.FOCUS, frozenset({"Focus"})),
    ChannelTypeConstraint(ChannelType.ZOOM, frozenset({"Zoom"})),
    ChannelTypeConstraint(ChannelType.IRIS, frozenset({"Iris", "IrisEffect"})),
    ChannelTypeConstraint(ChannelType.GOBO, frozenset({"WheelSlot", "WheelShake"}),
                          _all_wheels_are_gobos),
    ChannelTypeConstraint(ChannelType.PRISM, frozenset({"Prism"})),
    ChannelTypeConstraint(ChannelType.COLOR_TEMPERATURE, frozenset({"ColorTemperature"})),
    ChannelTypeConstraint(ChannelType.EFFECT, frozenset({
        "Effect", "EffectParameter", "Frost", "FrostEffect", "SoundSensitivity", "WheelSlot"
    })),
    ChannelTypeConstraint(ChannelType.STROBE, frozenset({"ShutterStrobe"}), _has_strobe_effect),
    ChannelTypeConstraint(ChannelType.SHUTTER, frozenset({
        "ShutterStrobe", "BladeInsertion", "BladeRotation", "BladeSystemRotation"
    })),
    ChannelTypeConstraint(ChannelType.FOG, frozenset({"Fog", "FogOutput", "FogType"})),
    ChannelTypeConstraint(ChannelType.SPEED, frozenset({
        "StrobeSpeed", "StrobeDuration", "PanTiltSpeed", "EffectSpeed",
        "EffectDuration", "BeamAngle", "BeamPosition", "PrismRotation",
        "Rotation", "Speed", "Time", "WheelSlotRotation", "WheelRotation",
        "WheelShake"
    })),
    ChannelTypeConstraint(ChannelType.MAINTENANCE, frozenset({"Maintenance"})),
    ChannelTypeConstraint(ChannelType.INTENSITY, frozenset({"Intensity", "Generic"})),
    ChannelTypeConstraint(ChannelType.NO_FUNCTION, frozenset({"NoFunction"})),
)


def classify_channel_type(capabilities: list[Capability]) -> ChannelType:
    """
    Finds the channel type of a channel with the given capabilities.
    :param capabilities: All capabilities of the channel, in DMX order.
    :return: The first matching channel type, or `ChannelType.UNKNOWN`.
    """
    channel_type = next(
        (constraint.channel_type for constraint in CHANNEL_TYPE_CONSTRAINTS
         if constraint.matches(capabilities)),
        ChannelType.UNKNOWN
    )
    log.debug("Classified %s as %s", capabilities, channel_type)
    return channel_type
