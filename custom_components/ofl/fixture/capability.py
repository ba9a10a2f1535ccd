"""
All capability definitions.
https://github.com/OpenLightingProject/open-fixture-library/blob/master/docs/capability-types.md

Most arguments, instance attributes and class names are directly mapped to
values of the fixture format. Therefore, we will excuse the python linter.
"""
import inspect
import logging
from collections.abc import Iterable
# pylint: disable=too-many-lines, too-many-arguments
# pylint: disable=too-many-instance-attributes


from enum import Enum, auto
from typing import List, Any, TYPE_CHECKING

from custom_components.ofl.fixture import entity
from custom_components.ofl.fixture.dmx_value import RESOLUTION_8BIT, \
    max_dmx_value, scale_dmx_range_individually
from custom_components.ofl.fixture.entity import RotationAngle, RotationSpeed, \
    Brightness, SlotNumber, SwingAngle, Parameter, Percent, VerticalAngle, \
    HorizontalAngle, Distance, IrisPercent, Insertion, Entity
from custom_components.ofl.fixture.exceptions import FixtureConfigurationError
from custom_components.ofl.fixture.format_mapping import constructor_params, \
    extract_value_type, to_snake_case
from custom_components.ofl.fixture.wheel import Wheel

if TYPE_CHECKING:
    from custom_components.ofl.fixture.channel import CoarseChannel

log = logging.getLogger(__name__)


class MenuClick(Enum):
    """
    The menuClick property defines which DMX value to use if the whole
    capability is selected: start / center / end sets the channel's DMX value
    to the start / center / end of the range, respectively. hidden hides this
    capability from the trigger menu. This is one of those special features
    that are supported only by some lighting programs.

    Names match fixture format exactly.
    """
    # pylint: disable=invalid-name
    start = auto()
    center = auto()
    end = auto()
    hidden = auto()


class ShutterEffect(Enum):
    """
    Supported types of shutter effects. Names match fixture format exactly.
    """
    # pylint: disable=invalid-name
    Open = auto()
    Closed = auto()
    Strobe = auto()
    Pulse = auto()
    RampUp = auto()
    RampDown = auto()
    RampUpDown = auto()
    Lightning = auto()
    Spikes = auto()
    Burst = auto()


class SingleColor(Enum):
    """
    Supported types of colors. Names match fixture format exactly.
    """
    # pylint: disable=invalid-name
    Red = auto()
    Green = auto()
    Blue = auto()
    Cyan = auto()
    Magenta = auto()
    Yellow = auto()
    Amber = auto()
    White = auto()
    WarmWhite = auto()
    ColdWhite = auto()
    UV = auto()
    Lime = auto()
    Indigo = auto()


class WheelOrSlot(Enum):
    """
    Supported types for wheels/slots. Names match fixture format exactly.
    """
    # pylint: disable=invalid-name
    wheel = auto()
    slot = auto()


class EffectPreset(Enum):
    """
    Supported effects. Names match fixture format exactly.
    """
    # pylint: disable=invalid-name
    ColorJump = auto()
    ColorFade = auto()


class BladePosition(Enum):
    """
    Supported blade positions. Names match fixture format exactly.
    """
    # pylint: disable=invalid-name
    Top = auto()
    Right = auto()
    Bottom = auto()
    Left = auto()


class FogTypeOutput(Enum):
    """
    Supported fog types. Names match fixture format exactly.
    """
    # pylint: disable=invalid-name
    Fog = auto()
    Haze = auto()


# Instance attributes that don't describe what the capability does.
_BASE_ATTRIBUTES = frozenset({
    "channel", "dmx_value_resolution", "comment", "dmx_range",
    "menu_click", "help_wanted", "start_end"
})


class Capability:
    """
    A channel can do different things depending on which range its DMX value
    currently is in. Those ranges that can be triggered manually in many
     programs are called capabilities.
    """

    def __init__(self,
                 dmx_value_resolution: int = RESOLUTION_8BIT,
                 comment: str | None = None,
                 dmx_range: list[int] | None = None,
                 menu_click: MenuClick | None = None,
                 switch_channels: dict[str, str] | None = None,
                 help_wanted: str | None = None,
                 channel: "CoarseChannel | None" = None
                 ):
        super().__init__()

        if dmx_range is None:
            dmx_range = [0, max_dmx_value(dmx_value_resolution)]

        assert len(dmx_range) == 2

        # Not owned, only used to look up the fixture and its wheels.
        self.channel = channel
        self.dmx_value_resolution = dmx_value_resolution
        self.comment = comment
        self.dmx_range = list(dmx_range)
        self.menu_click = menu_click or MenuClick.start
        self.switch_channels = switch_channels or {}
        self.help_wanted = help_wanted

        # Parameters which can be given as a single value or a start/end pair
        self.start_end: dict[str, list] = {}

    @property
    def type(self) -> str:
        """
        :return: The capability type as written in the fixture format.
        """
        return type(self).__name__

    @property
    def dmx_range_start(self) -> int:
        return self.dmx_range[0]

    @property
    def dmx_range_end(self) -> int:
        return self.dmx_range[1]

    def get_dmx_range_with_resolution(self, desired_resolution: int) -> list[int]:
        """
        :param desired_resolution: The resolution the range should be scaled to.
        :return: [start, end] of this capability in the given resolution.
        """
        return scale_dmx_range_individually(
            self.dmx_range_start, self.dmx_range_end,
            self.dmx_value_resolution, desired_resolution
        )

    def is_applicable(self, dmx_value: int, resolution: int | None = None):
        """
        Tests whether or not the DMX value is within the range of this
        capability.
        :param dmx_value: The DMX value to be tested
        :param resolution: The resolution of the DMX value, defaults to the
                           channel's declared resolution.
        :return: True if the DMX value is within the bounds of this capability
        """
        if resolution is None:
            start, end = self.dmx_range
        else:
            start, end = self.get_dmx_range_with_resolution(resolution)
        return start <= dmx_value <= end

    def _define_from_entity(self, name: str, values: list | None):
        if not values:
            return

        assert len(values) in (1, 2)
        self.start_end[name] = values

    @property
    def is_step(self) -> bool:
        """
        :return: True if this capability stays the same over its whole DMX
                 range, False if one of its parameters changes proportionally.
        """
        return all(values[0] == values[-1] for values in self.start_end.values())

    @property
    def is_inverted(self) -> bool:
        """
        :return: True if the proportional parameters of this capability
                 decrease while the DMX value increases.
        """
        proportional = [
            values for values in self.start_end.values()
            if values[0] != values[-1] and isinstance(values[0], Entity)
        ]
        return len(proportional) > 0 and all(
            _is_decreasing(values[0], values[-1]) for values in proportional
        )

    def _static_attributes(self) -> dict[str, Any]:
        return {
            key: value for key, value in vars(self).items()
            if key not in _BASE_ATTRIBUTES and key not in self.start_end
        }

    def can_crossfade_to(self, next_capability: "Capability") -> bool:
        """
        Whether one can fade smoothly from this capability into the next one,
        i.e. they describe the same effect and this capability's end values
        are the next capability's start values.
        :param next_capability: The capability directly after this one.
        :return: True if a crossfade over the range boundary makes sense.
        """
        if self.type != next_capability.type:
            return False

        if self.dmx_range_end + 1 != next_capability.dmx_range_start:
            return False

        # pylint: disable=protected-access
        if self._static_attributes() != next_capability._static_attributes():
            return False

        # Without ranged parameters there is nothing to fade, only a step
        if not self.start_end or self.start_end.keys() != next_capability.start_end.keys():
            return False

        return all(
            values[-1] == next_capability.start_end[name][0]
            for name, values in self.start_end.items()
        )

    @property
    def wheel_names(self) -> list[str]:
        """
        :return: Names of the wheels this capability refers to.
        """
        return []

    @property
    def wheels(self) -> list[Wheel | None]:
        """
        :return: The fixture's wheels this capability refers to, None for
                 every wheel that the fixture doesn't define.
        """
        fixture = self.channel.fixture if self.channel else None
        return [
            fixture.get_wheel_by_name(name) if fixture else None
            for name in self.wheel_names
        ]

    def _wheel_names_from(self, wheel: str | list[str] | None) -> list[str]:
        if isinstance(wheel, list):
            return wheel
        if wheel:
            return [wheel]
        # The channel name is used when no wheel is given
        return [self.channel.name] if self.channel else []

    def __str__(self):
        if self.comment:
            return self.comment

        # Flags and switch targets don't describe the effect itself
        described = [
            value for name, value in self._static_attributes().items()
            if name != "switch_channels" and not isinstance(value, bool)
        ]
        return self.args_to_str(*described, *self.start_end.values())

    def __repr__(self):
        return self.__str__()

    def args_to_str(self, *args) -> str:
        """
        Helper function which turns arguments into a nice string.
        :param args: The argument(s) to be converted
        :return: A humanly readable string, the capability type if there's
                 nothing to describe.
        """
        s = ""
        for arg in args:
            if arg:
                if isinstance(arg, Enum):
                    arg = arg.name
                elif isinstance(arg, list) and len(arg) == 1:
                    arg = arg[0]
                elif isinstance(arg, Iterable) and not isinstance(arg, str):
                    arg = "…".join(map(str, arg))

                s = s + f" {arg}"

        return s[1:] or self.type


def _is_decreasing(start: Entity, end: Entity) -> bool:
    start = start.base_unit_entity
    end = end.base_unit_entity
    return start.unit == end.unit and start.value > end.value


class NoFunction(Capability):
    """The channel does nothing in this range."""


class ShutterStrobe(Capability):
    """Opens, closes or strobes the shutter."""

    def __init__(self, shutter_effect: ShutterEffect,
                 sound_controlled: bool = False,
                 random_timing: bool = False,
                 speed: List[entity.Speed] | None = None,
                 duration: List[entity.Time] | None = None,
                 **kwargs):
        super().__init__(**kwargs)
        self.shutter_effect = shutter_effect
        self.sound_controlled = sound_controlled
        self.random_timing = random_timing
        self.speed = speed
        self.duration = duration

        self._define_from_entity("speed", speed)
        self._define_from_entity("duration", duration)


class StrobeSpeed(Capability):
    """Speed of a strobe effect set on another channel."""

    def __init__(self, speed: List[entity.Speed], **kwargs):
        super().__init__(**kwargs)
        self.speed = speed
        self._define_from_entity("speed", speed)


class StrobeDuration(Capability):
    """Flash duration of a strobe effect set on another channel."""

    def __init__(self, duration: List[entity.Time], **kwargs):
        super().__init__(**kwargs)
        self.duration = duration
        self._define_from_entity("duration", duration)


class Intensity(Capability):
    """Dimmer."""

    def __init__(self, brightness: List[Brightness] | None = None, **kwargs):
        super().__init__(**kwargs)
        self.brightness = brightness or [Brightness("off"),
                                         Brightness("bright")]
        self._define_from_entity("brightness", self.brightness)


class ColorIntensity(Capability):
    """Brightness of one color emitter."""

    def __init__(self, color: SingleColor,
                 brightness: List[Brightness] | None = None, **kwargs):
        super().__init__(**kwargs)
        self.color = color
        self.brightness = brightness or [Brightness("off"),
                                         Brightness("bright")]
        self._define_from_entity("brightness", self.brightness)


class ColorPreset(Capability):
    """Fixed color or color fade, given as hex colors or a temperature."""

    def __init__(self,
                 colors: List[List[str]] | None = None,
                 color_temperature: List[entity.ColorTemperature] | None = None,
                 **kwargs):
        super().__init__(**kwargs)
        self.colors = colors
        self.color_temperature = color_temperature

        self._define_from_entity("colors", colors)
        self._define_from_entity("color_temperature", color_temperature)


class ColorTemperature(Capability):

    def __init__(self, color_temperature: List[entity.ColorTemperature],
                 **kwargs):
        super().__init__(**kwargs)
        self.color_temperature = color_temperature
        self._define_from_entity("color_temperature", self.color_temperature)


class Pan(Capability):

    def __init__(self, angle: List[RotationAngle], **kwargs):
        super().__init__(**kwargs)
        self.angle = angle
        self._define_from_entity("angle", angle)


class PanContinuous(Capability):
    """Endless pan rotation."""

    def __init__(self, speed: List[RotationSpeed], **kwargs):
        super().__init__(**kwargs)
        self.speed = speed
        self._define_from_entity("speed", speed)


class Tilt(Capability):

    def __init__(self, angle: List[RotationAngle], **kwargs):
        super().__init__(**kwargs)
        self.angle = angle
        self._define_from_entity("angle", angle)


class TiltContinuous(Capability):
    """Endless tilt rotation."""

    def __init__(self, speed: List[RotationSpeed], **kwargs):
        super().__init__(**kwargs)
        self.speed = speed
        self._define_from_entity("speed", speed)


class PanTiltSpeed(Capability):
    """Movement speed or duration for pan and tilt."""

    def __init__(self,
                 speed: List[entity.Speed] | None = None,
                 duration: List[entity.Time] | None = None,
                 **kwargs):
        super().__init__(**kwargs)
        assert bool(speed) != bool(duration)
        self.speed = speed
        self.duration = duration

        self._define_from_entity("speed", speed)
        self._define_from_entity("duration", duration)


class WheelSlot(Capability):
    """Selects a slot of one or more wheels."""

    def __init__(self, slot_number: List[SlotNumber],
                 wheel: str | None = None, **kwargs):
        super().__init__(**kwargs)
        self.wheel = wheel
        self.slot_number = slot_number
        self._define_from_entity("slot_number", slot_number)

    @property
    def wheel_names(self) -> list[str]:
        return self._wheel_names_from(self.wheel)


class WheelShake(Capability):
    """Shakes a wheel or a single slot."""

    def __init__(self,
                 is_shaking: WheelOrSlot = WheelOrSlot.wheel,
                 wheel: str | List[str] | None = None,
                 slot_number: List[SlotNumber] | None = None,
                 shake_speed: List[entity.Speed] | None = None,
                 shake_angle: List[SwingAngle] | None = None,
                 **kwargs):
        super().__init__(**kwargs)
        self.is_shaking = is_shaking
        self.wheel = wheel
        self.slot_number = slot_number
        self.shake_speed = shake_speed
        self.shake_angle = shake_angle

        self._define_from_entity("slot_number", slot_number)
        self._define_from_entity("shake_speed", shake_speed)
        self._define_from_entity("shake_angle", shake_angle)

    @property
    def wheel_names(self) -> list[str]:
        return self._wheel_names_from(self.wheel)


class WheelSlotRotation(Capability):
    """Rotates the selected slot, e.g. an indexed gobo."""

    def __init__(self,
                 wheel: str | List[str] | None = None,
                 slot_number: List[SlotNumber] | None = None,
                 speed: List[RotationSpeed] | None = None,
                 angle: List[RotationAngle] | None = None,
                 **kwargs):
        super().__init__(**kwargs)
        assert bool(angle) != bool(speed)
        self.wheel = wheel
        self.slot_number = slot_number

        self.speed = speed
        self.angle = angle

        self._define_from_entity("slot_number", slot_number)
        self._define_from_entity("speed", speed)
        self._define_from_entity("angle", angle)

    @property
    def wheel_names(self) -> list[str]:
        return self._wheel_names_from(self.wheel)


class WheelRotation(Capability):
    """Rotates the whole wheel."""

    def __init__(self,
                 wheel: str | List[str] | None = None,
                 speed: List[RotationSpeed] | None = None,
                 angle: List[RotationAngle] | None = None,
                 **kwargs):
        super().__init__(**kwargs)
        self.wheel = wheel
        self.speed = speed
        self.angle = angle

        self._define_from_entity("speed", speed)
        self._define_from_entity("angle", angle)

    @property
    def wheel_names(self) -> list[str]:
        return self._wheel_names_from(self.wheel)


class Effect(Capability):
    """A named or preset effect program."""

    def __init__(self,
                 effect_name: str | None = None,
                 effect_preset: EffectPreset | None = None,
                 speed: List[entity.Speed] | None = None,
                 duration: List[entity.Time] | None = None,
                 parameter: List[Parameter] | None = None,
                 sound_controlled: bool = False,
                 sound_sensitivity: List[Percent] | None = None,
                 **kwargs):
        super().__init__(**kwargs)

        assert effect_name or effect_preset
        self.effect_name = effect_name
        self.effect_preset = effect_preset
        self.sound_controlled = sound_controlled
        self.speed = speed
        self.duration = duration
        self.parameter = parameter
        self.sound_sensitivity = sound_sensitivity

        self._define_from_entity("speed", speed)
        self._define_from_entity("duration", duration)
        self._define_from_entity("parameter", parameter)
        self._define_from_entity("sound_sensitivity", sound_sensitivity)


class BeamAngle(Capability):

    def __init__(self, angle: List[entity.BeamAngle], **kwargs):
        super().__init__(**kwargs)
        self.angle = angle
        self._define_from_entity("angle", angle)


class BeamPosition(Capability):
    """Beam position for fixtures that move the beam without pan or tilt."""

    def __init__(self,
                 horizontal_angle: List[HorizontalAngle] | None = None,
                 vertical_angle: List[VerticalAngle] | None = None,
                 **kwargs):
        super().__init__(**kwargs)

        assert horizontal_angle or vertical_angle
        self.horizontal_angle = horizontal_angle
        self.vertical_angle = vertical_angle

        self._define_from_entity("horizontal_angle", horizontal_angle)
        self._define_from_entity("vertical_angle", vertical_angle)


class EffectSpeed(Capability):

    def __init__(self, speed: List[entity.Speed], **kwargs):
        super().__init__(**kwargs)
        self.speed = speed
        self._define_from_entity("speed", speed)


class EffectDuration(Capability):

    def __init__(self, duration: List[entity.Time], **kwargs):
        super().__init__(**kwargs)
        self.duration = duration
        self._define_from_entity("duration", duration)


class EffectParameter(Capability):

    def __init__(self, parameter: List[Parameter], **kwargs):
        super().__init__(**kwargs)
        self.parameter = parameter
        self._define_from_entity("parameter", parameter)


class SoundSensitivity(Capability):

    def __init__(self, sound_sensitivity: List[Percent], **kwargs):
        super().__init__(**kwargs)
        self.sound_sensitivity = sound_sensitivity
        self._define_from_entity("sound_sensitivity", sound_sensitivity)


class Focus(Capability):

    def __init__(self, distance: List[Distance], **kwargs):
        super().__init__(**kwargs)
        self.distance = distance
        self._define_from_entity("distance", distance)


class Zoom(Capability):

    def __init__(self, angle: List[entity.BeamAngle], **kwargs):
        super().__init__(**kwargs)
        self.angle = angle
        self._define_from_entity("angle", angle)


class Iris(Capability):

    def __init__(self, open_percent: List[IrisPercent], **kwargs):
        super().__init__(**kwargs)
        self.open_percent = open_percent
        self._define_from_entity("open_percent", open_percent)


class IrisEffect(Capability):

    def __init__(self, effect_name: str,
                 speed: List[entity.Speed] | None = None, **kwargs):
        super().__init__(**kwargs)
        self.effect_name = effect_name
        self.speed = speed
        self._define_from_entity("speed", speed)


class Frost(Capability):

    def __init__(self, frost_intensity: List[Percent], **kwargs):
        super().__init__(**kwargs)
        self.frost_intensity = frost_intensity
        self._define_from_entity("frost_intensity", frost_intensity)


class FrostEffect(Capability):

    def __init__(self, effect_name: str,
                 speed: List[entity.Speed] | None = None, **kwargs):
        super().__init__(**kwargs)
        self.effect_name = effect_name
        self.speed = speed
        self._define_from_entity("speed", speed)


class Prism(Capability):
    """Inserts the prism, optionally rotating it."""

    def __init__(self,
                 speed: List[RotationSpeed] | None = None,
                 angle: List[RotationAngle] | None = None,
                 **kwargs):
        super().__init__(**kwargs)
        assert not (bool(speed) and bool(angle))
        self.speed = speed
        self.angle = angle

        self._define_from_entity("speed", speed)
        self._define_from_entity("angle", angle)


class PrismRotation(Capability):

    def __init__(self,
                 speed: List[RotationSpeed] | None = None,
                 angle: List[RotationAngle] | None = None,
                 **kwargs):
        super().__init__(**kwargs)
        assert bool(speed) != bool(angle)
        self.speed = speed
        self.angle = angle

        self._define_from_entity("speed", speed)
        self._define_from_entity("angle", angle)


class BladeInsertion(Capability):
    """Moves a framing blade in or out."""

    def __init__(self,
                 blade: BladePosition | int,
                 insertion: List[Insertion],
                 **kwargs):
        super().__init__(**kwargs)
        self.blade = blade
        self.insertion = insertion
        self._define_from_entity("insertion", insertion)


class BladeRotation(Capability):
    """Rotates a single framing blade."""

    def __init__(self,
                 blade: BladePosition | int,
                 angle: List[RotationAngle],
                 **kwargs):
        super().__init__(**kwargs)
        self.blade = blade
        self.angle = angle
        self._define_from_entity("angle", angle)


class BladeSystemRotation(Capability):
    """Rotates the whole framing blade system."""

    def __init__(self,
                 angle: List[RotationAngle],
                 **kwargs):
        super().__init__(**kwargs)
        self.angle = angle
        self._define_from_entity("angle", angle)


class Fog(Capability):

    def __init__(self,
                 fog_type: FogTypeOutput | None = None,
                 fog_output: List[entity.FogOutput] | None = None,
                 **kwargs):
        super().__init__(**kwargs)
        self.fog_type = fog_type
        self.fog_output = fog_output
        self._define_from_entity("fog_output", fog_output)


class FogOutput(Capability):

    def __init__(self,
                 fog_output: List[entity.FogOutput],
                 **kwargs):
        super().__init__(**kwargs)
        self.fog_output = fog_output
        self._define_from_entity("fog_output", fog_output)


class FogType(Capability):

    def __init__(self,
                 fog_type: FogTypeOutput | None = None,
                 **kwargs):
        super().__init__(**kwargs)
        self.fog_type = fog_type


class Rotation(Capability):
    """Rotation of the whole fixture or head, for fixtures without pan and tilt."""

    def __init__(self,
                 speed: List[RotationSpeed] | None = None,
                 angle: List[RotationAngle] | None = None,
                 **kwargs):
        super().__init__(**kwargs)
        assert bool(speed) != bool(angle)
        self.speed = speed
        self.angle = angle

        self._define_from_entity("speed", speed)
        self._define_from_entity("angle", angle)


class Speed(Capability):
    """Generic speed, when nothing more specific fits."""

    def __init__(self,
                 speed: List[entity.Speed],
                 **kwargs):
        super().__init__(**kwargs)
        self.speed = speed
        self._define_from_entity("speed", speed)


class Time(Capability):
    """Generic time, when nothing more specific fits."""

    def __init__(self,
                 time: List[entity.Time],
                 **kwargs):
        super().__init__(**kwargs)
        self.time = time
        self._define_from_entity("time", time)


class Maintenance(Capability):
    """Reset, lamp control and other maintenance functions, optionally held for some time."""

    def __init__(self,
                 parameter: List[Parameter] | None = None,
                 hold: entity.Time | None = None,
                 **kwargs):
        super().__init__(**kwargs)
        self.hold = hold
        self.parameter = parameter
        self._define_from_entity("parameter", parameter)


class Generic(Capability):
    """Anything the other types can't describe."""


CAPABILITY_TYPES: dict[str, type[Capability]] = {
    capability_type.__name__: capability_type
    for capability_type in Capability.__subclasses__()
}


def parse_capability(capability_json: dict,
                     dmx_value_resolution: int,
                     channel: "CoarseChannel | None" = None) -> Capability:
    """
    Creates the capability model class from its fixture format JSON.
    :param capability_json: The capability as found in the fixture format.
    :param dmx_value_resolution: The resolution its DMX values are given in.
    :param channel: The channel this capability belongs to.
    :return: The `Capability` subclass matching the capability's type.
    """
    channel_name = channel.name if channel else None
    capability_type = capability_json["type"]

    # This is directly mapped to the class names above.
    capability_obj = CAPABILITY_TYPES.get(capability_type)
    if capability_obj is None:
        raise FixtureConfigurationError(
            f"For channel {channel_name}, unknown capability type: {capability_type}"
        )

    params = constructor_params(capability_obj)
    parent_params = constructor_params(Capability)

    # Required arguments that are missing are left for the class to judge.
    kwargs: dict[str, Any] = {
        name: None for name, param in params.items()
        if param.default is inspect.Parameter.empty
    }
    kwargs["dmx_value_resolution"] = dmx_value_resolution
    kwargs["channel"] = channel

    start_end_registry = {}

    for key, value_json in capability_json.items():
        if key == "type":
            continue

        arg_name = to_snake_case(key)

        # Bundle the _start and _end capabilities into a list.
        # This reduces the amount of variables we have to write in capabilities.py.
        is_combined = False
        is_start = arg_name.endswith("_start")
        if is_start or arg_name.endswith("_end"):
            shorthand = arg_name[0 : arg_name.rfind("_")]
            value_container = start_end_registry.get(shorthand, [None, None])
            if is_start:
                value_container[0] = value_json
            else:
                value_container[1] = value_json

            if None in value_container:
                start_end_registry[shorthand] = value_container
                continue

            start_end_registry.pop(shorthand)
            value_json = value_container
            arg_name = shorthand
            is_combined = True

        if arg_name in params:
            kwargs[arg_name] = extract_value_type(arg_name, value_json, is_combined, params)

        elif arg_name in parent_params:
            kwargs[arg_name] = extract_value_type(arg_name, value_json, is_combined, parent_params)

        else:
            raise FixtureConfigurationError(
                f"For channel {channel_name}, " f"I don't know what kind of argument this is: {arg_name}"
            )

    capability_model = capability_obj(**kwargs)
    log.debug("Channel %s: parsed capability %s", channel_name, capability_model)
    return capability_model
