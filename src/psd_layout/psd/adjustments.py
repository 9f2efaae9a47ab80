"""
Raw payloads of adjustment layer blocks.

These records mirror the binary layout one to one and do no range
checking; :py:mod:`psd_layout.api.dispatch` turns them into the typed
effects of :py:mod:`psd_layout.api.adjustments`. Vibrance has no binary
layout of its own and is stored as a descriptor block.
"""

import logging
from typing import Any, BinaryIO, List, Optional, Tuple, TypeVar

from attrs import astuple, define, field

from psd_layout.constants import Tag
from psd_layout.psd.base import BaseElement, ListElement
from psd_layout.psd.bin_utils import (
    is_readable,
    read_fmt,
    write_fmt,
    write_padding,
)
from psd_layout.psd.color import Color
from psd_layout.psd.descriptor import DescriptorBlock
from psd_layout.registry import new_registry
from psd_layout.validators import in_

logger = logging.getLogger(__name__)

T = TypeVar("T", bound="BaseElement")

ADJUSTMENT_TYPES, register = new_registry()
register(Tag.VIBRANCE)(DescriptorBlock)

#: Level records stored in a ``levl`` block, used or not.
LEVEL_RECORD_COUNT = 29

#: Hue ranges of a ``hue ``/``hue2`` block besides the master range.
HUE_RANGE_COUNT = 6


@register(Tag.BRIGHTNESS_AND_CONTRAST)
@define(repr=False)
class BrightnessContrast(BaseElement):
    """Legacy brightness and contrast, both signed."""

    brightness: int = 0
    contrast: int = 0
    mean: int = 127
    lab_only: int = 0

    @classmethod
    def read(cls: type[T], fp: BinaryIO, **kwargs: Any) -> T:
        return cls(*read_fmt("2hHBx", fp))  # type: ignore[call-arg]

    def write(self, fp: BinaryIO, **kwargs: Any) -> int:
        return write_fmt(fp, "2hHBx", *astuple(self))


@register(Tag.COLOR_BALANCE)
@define(repr=False)
class ColorBalance(BaseElement):
    """
    Shifts for three tonal ranges. Each range is a signed
    (cyan-red, magenta-green, yellow-blue) triple.
    """

    shadows: tuple = (0, 0, 0)
    midtones: tuple = (0, 0, 0)
    highlights: tuple = (0, 0, 0)
    luminosity: bool = field(default=True, converter=bool)

    @classmethod
    def read(cls: type[T], fp: BinaryIO, **kwargs: Any) -> T:
        ranges = [read_fmt("3h", fp) for _ in range(3)]
        return cls(*ranges, read_fmt("B", fp)[0])  # type: ignore[call-arg]

    def write(self, fp: BinaryIO, **kwargs: Any) -> int:
        written = 0
        for triple in (self.shadows, self.midtones, self.highlights):
            written += write_fmt(fp, "3h", *triple)
        written += write_fmt(fp, "B", self.luminosity)
        return written + write_padding(fp, written, 4)


@register(Tag.CHANNEL_MIXER)
@define(repr=False)
class ChannelMixer(BaseElement):
    """
    Channel mixer. Each row weights (red, green, blue, unused, constant)
    into one output channel; files may stop after fewer than three rows.

    .. py:attribute:: rows
    """

    version: int = field(default=1, validator=in_((1,)))
    monochrome: int = 0
    rows: list = field(factory=list, converter=list)

    @classmethod
    def read(cls: type[T], fp: BinaryIO, **kwargs: Any) -> T:
        version, monochrome = read_fmt("2H", fp)
        rows: List[Tuple[int, ...]] = []
        while len(rows) < 3 and is_readable(fp, 10):
            rows.append(read_fmt("5h", fp))
        assert rows, "Channel mixer without channel records"
        return cls(version, monochrome, rows)  # type: ignore[call-arg]

    def write(self, fp: BinaryIO, **kwargs: Any) -> int:
        written = write_fmt(fp, "2H", self.version, self.monochrome)
        return written + sum(write_fmt(fp, "5h", *row) for row in self.rows)


@register(Tag.CURVES)
@define(repr=False)
class Curves(BaseElement):
    """
    Curves, either as control points or as 256-entry lookup maps.

    Version 1 stores a channel bit mask in `count_map`, version 4 the
    channel count. Points are (output, input) pairs.

    .. py:attribute:: is_map
    .. py:attribute:: data

        Per channel, a list of points or a lookup map. Channel 0 is the
        composite curve.
    """

    is_map: bool = field(default=False, converter=bool)
    version: int = field(default=4, validator=in_((1, 4)))
    count_map: int = 0
    data: list = field(factory=list, converter=list)

    @classmethod
    def read(cls: type[T], fp: BinaryIO, **kwargs: Any) -> T:
        is_map, version, count_map = read_fmt("BHI", fp)
        assert version in (1, 4), "Invalid curves version %d" % version
        channels = bin(count_map).count("1") if version == 1 else count_map
        if is_map:
            data = [list(read_fmt("256B", fp)) for _ in range(channels)]
        else:
            data = [_read_points(fp) for _ in range(channels)]
        return cls(is_map, version, count_map, data)  # type: ignore[call-arg]

    def write(self, fp: BinaryIO, **kwargs: Any) -> int:
        written = write_fmt(fp, "BHI", self.is_map, self.version, self.count_map)
        for channel in self.data:
            if self.is_map:
                written += write_fmt(fp, "256B", *channel)
                continue
            written += write_fmt(fp, "H", len(channel))
            written += sum(write_fmt(fp, "2H", *point) for point in channel)
        return written + write_padding(fp, written, 4)

    def channel_points(self, index: int) -> Optional[list]:
        """
        (input, output) points of one channel, or `None` when the channel is
        absent. Lookup maps are sampled every 51 levels.
        """
        if index >= len(self.data):
            return None
        channel = self.data[index]
        if self.is_map:
            return [(level, channel[level]) for level in range(0, 256, 51)]
        return [(input_, output) for output, input_ in channel]


def _read_points(fp: BinaryIO) -> list:
    count = read_fmt("H", fp)[0]
    assert 2 <= count <= 19, "Curves point count %d not in [2, 19]" % count
    return [read_fmt("2H", fp) for _ in range(count)]


@register(Tag.EXPOSURE)
@define(repr=False)
class Exposure(BaseElement):
    version: int = 1
    exposure: float = 0.0
    offset: float = 0.0
    gamma: float = 1.0

    @classmethod
    def read(cls: type[T], fp: BinaryIO, **kwargs: Any) -> T:
        return cls(*read_fmt("H3f", fp))  # type: ignore[call-arg]

    def write(self, fp: BinaryIO, padding: int = 4, **kwargs: Any) -> int:
        written = write_fmt(fp, "H3f", *astuple(self))
        return written + write_padding(fp, written, padding)


@register(Tag.HUE_SATURATION_V4)
@register(Tag.HUE_SATURATION)
@define(repr=False)
class HueSaturation(BaseElement):
    """
    Hue and saturation. `colorization` and `master` are
    (hue, saturation, lightness) triples, and `enable` picks the
    colorization one. `items` holds a (range, settings) pair for each of
    the six hue ranges.
    """

    version: int = field(default=2, validator=in_((2,)))
    enable: int = 0
    colorization: tuple = (0, 0, 0)
    master: tuple = (0, 0, 0)
    items: list = field(factory=list, converter=list)

    @classmethod
    def read(cls: type[T], fp: BinaryIO, **kwargs: Any) -> T:
        version, enable = read_fmt("HBx", fp)
        assert version == 2, "Invalid hue/saturation version %d" % version
        colorization = read_fmt("3h", fp)
        master = read_fmt("3h", fp)
        items = [
            [read_fmt("4h", fp), read_fmt("3h", fp)] for _ in range(HUE_RANGE_COUNT)
        ]
        return cls(version, enable, colorization, master, items)  # type: ignore[call-arg]

    def write(self, fp: BinaryIO, **kwargs: Any) -> int:
        written = write_fmt(fp, "HBx", self.version, self.enable)
        written += write_fmt(fp, "3h", *self.colorization)
        written += write_fmt(fp, "3h", *self.master)
        for hue_range, settings in self.items:
            written += write_fmt(fp, "4h", *hue_range)
            written += write_fmt(fp, "3h", *settings)
        return written + write_padding(fp, written, 4)

    @property
    def settings(self) -> tuple:
        """The (hue, saturation, lightness) triple that applies."""
        return self.colorization if self.enable else self.master


@define(repr=False)
class LevelRecord(BaseElement):
    """
    Levels of one channel. `gamma` is scaled by 100, so 100 means 1.0.
    """

    input_floor: int = 0
    input_ceiling: int = 255
    output_floor: int = 0
    output_ceiling: int = 255
    gamma: int = 100

    @classmethod
    def read(cls: type[T], fp: BinaryIO, **kwargs: Any) -> T:
        return cls(*read_fmt("5H", fp))  # type: ignore[call-arg]

    def write(self, fp: BinaryIO, **kwargs: Any) -> int:
        return write_fmt(fp, "5H", *astuple(self))


@register(Tag.LEVELS)
@define(repr=False)
class Levels(ListElement):
    """
    :py:class:`LevelRecord` list, composite channel first. Missing records
    are written as identity levels.
    """

    version: int = field(default=2, validator=in_((2,)))

    @classmethod
    def read(cls: type[T], fp: BinaryIO, **kwargs: Any) -> T:
        version = read_fmt("H", fp)[0]
        if version != 2:
            raise ValueError("Invalid levels version %d" % version)
        records = [LevelRecord.read(fp) for _ in range(LEVEL_RECORD_COUNT)]
        return cls(version=version, items=records)  # type: ignore[call-arg]

    def write(self, fp: BinaryIO, **kwargs: Any) -> int:
        records = list(self)[:LEVEL_RECORD_COUNT]
        records += [LevelRecord()] * (LEVEL_RECORD_COUNT - len(records))
        written = write_fmt(fp, "H", self.version)
        written += sum(record.write(fp) for record in records)
        return written + write_padding(fp, written, 4)


@register(Tag.PHOTO_FILTER)
@define(repr=False)
class PhotoFilter(BaseElement):
    """
    Photo filter. Version 3 stores the filter color as XYZ in `xyz`,
    version 2 as a :py:class:`~psd_layout.psd.color.Color` in `color`.
    """

    version: int = field(default=2, validator=in_((2, 3)))
    xyz: Optional[tuple] = None
    color: Optional[Color] = None
    density: int = 25
    luminosity: int = 1

    @classmethod
    def read(cls: type[T], fp: BinaryIO, **kwargs: Any) -> T:
        version = read_fmt("H", fp)[0]
        assert version in (2, 3), "Invalid photo filter version %d" % version
        xyz = read_fmt("3I", fp) if version == 3 else None
        color = Color.read(fp) if version == 2 else None
        density, luminosity = read_fmt("IB", fp)
        return cls(version, xyz, color, density, luminosity)  # type: ignore[call-arg]

    def write(self, fp: BinaryIO, **kwargs: Any) -> int:
        written = write_fmt(fp, "H", self.version)
        if self.version == 3:
            written += write_fmt(fp, "3I", *(self.xyz or (0, 0, 0)))
        else:
            written += (self.color or Color()).write(fp)
        written += write_fmt(fp, "IB", self.density, self.luminosity)
        return written + write_padding(fp, written, 4)
