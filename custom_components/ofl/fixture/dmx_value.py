"""
DMX values can be defined in different resolutions. A resolution is the amount
of bytes used to represent the value, so 1 for 8bit, 2 for 16bit, ...

Multi-byte values are big-endian; the coarse channel carries the most
significant byte.
"""

from enum import Enum

from custom_components.ofl.fixture.exceptions import FixtureConfigurationError, \
    ResolutionError

RESOLUTION_8BIT = 1
RESOLUTION_16BIT = 2
RESOLUTION_24BIT = 3
RESOLUTION_32BIT = 4


class DmxValueResolution(Enum):
    """
    Defines the bit depth of the configured DMX values in the fixture;
    defaultValue, dmxRange, highlightValue, ...
    """
    _8BIT = RESOLUTION_8BIT
    _16BIT = RESOLUTION_16BIT
    _24BIT = RESOLUTION_24BIT

    @classmethod
    def from_string(cls, dmx_value_resolution: str) -> "DmxValueResolution":
        """
        Looks up the resolution as written in the fixture format.
        :param dmx_value_resolution: One of `8bit`, `16bit` or `24bit`.
        :return: The matching resolution.
        """
        try:
            return next(
                dvr for dvr in cls if dvr.name == f"_{dmx_value_resolution.upper()}"
            )
        except StopIteration:
            raise FixtureConfigurationError(
                f"Invalid dmxValueResolution '{dmx_value_resolution}'. "
                "Must be one of: 8bit, 16bit, 24bit"
            ) from None


def _check_resolution(resolution: int) -> None:
    if not isinstance(resolution, int) or isinstance(resolution, bool) or resolution < RESOLUTION_8BIT:
        raise ResolutionError(f"Resolution must be a positive integer, but was {resolution}")


def max_dmx_value(resolution: int) -> int:
    """
    :param resolution: The resolution, 1 for 8bit, 2 for 16bit, ...
    :return: The highest DMX value in that resolution, e.g. 65535 for 16bit.
    """
    _check_resolution(resolution)
    return pow(256, resolution) - 1


def scale_dmx_value(dmx_value: int, current_resolution: int, desired_resolution: int) -> int:
    """
    Scales a DMX value from one resolution to another.
    Scaling up appends zero bytes, scaling down drops the least significant
    bytes. Scaling down is lossy.
    :param dmx_value: The DMX value in the current resolution.
    :param current_resolution: The resolution the value is given in.
    :param desired_resolution: The resolution to scale to.
    :return: The DMX value in the desired resolution.
    """
    _check_resolution(current_resolution)
    _check_resolution(desired_resolution)

    if desired_resolution >= current_resolution:
        return dmx_value * pow(256, desired_resolution - current_resolution)

    return dmx_value // pow(256, current_resolution - desired_resolution)


def scale_dmx_range_individually(dmx_range_start: int, dmx_range_end: int,
                                 current_resolution: int,
                                 desired_resolution: int) -> list[int]:
    """
    Scales a DMX range from one resolution to another. When scaling up, the
    start is padded with 0x00 bytes and the end with 0xFF bytes, so adjacent
    ranges stay adjacent.
    :param dmx_range_start: Start of the range in the current resolution.
    :param dmx_range_end: End of the range in the current resolution.
    :param current_resolution: The resolution the range is given in.
    :param desired_resolution: The resolution to scale to.
    :return: [start, end] in the desired resolution.
    """
    start = scale_dmx_value(dmx_range_start, current_resolution, desired_resolution)
    end = scale_dmx_value(dmx_range_end, current_resolution, desired_resolution)

    if desired_resolution > current_resolution:
        end += pow(256, desired_resolution - current_resolution) - 1

    return [start, end]
