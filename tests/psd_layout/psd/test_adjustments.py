import logging

import pytest

from psd_layout.constants import Tag
from psd_layout.psd.adjustments import (
    ADJUSTMENT_TYPES,
    BrightnessContrast,
    ChannelMixer,
    ColorBalance,
    Curves,
    Exposure,
    HueSaturation,
    LevelRecord,
    Levels,
    PhotoFilter,
)
from psd_layout.psd.bin_utils import pack
from psd_layout.psd.color import Color
from psd_layout.psd.descriptor import DescriptorBlock

from ..utils import check_read_write, check_write_read

logger = logging.getLogger(__name__)

HUE_ITEMS = [[(0, 0, 0, 0), (0, 0, 0)] for _ in range(6)]


def test_registry():
    assert ADJUSTMENT_TYPES[Tag.BRIGHTNESS_AND_CONTRAST] is BrightnessContrast
    assert ADJUSTMENT_TYPES[Tag.HUE_SATURATION] is HueSaturation
    assert ADJUSTMENT_TYPES[Tag.HUE_SATURATION_V4] is HueSaturation
    assert ADJUSTMENT_TYPES[Tag.VIBRANCE] is DescriptorBlock


@pytest.mark.parametrize(
    "element",
    [
        BrightnessContrast(10, -20, 127, 0),
        ColorBalance((1, 2, 3), (-4, -5, -6), (7, 8, 9), False),
        ChannelMixer(1, 0, [(100, 0, 0, 0, 0), (0, 100, 0, 0, 0), (0, 0, 100, 0, 0)]),
        Exposure(1, 1.5, 0.25, 1.0),
        HueSaturation(2, 1, (10, 20, 30), (0, -15, 0), HUE_ITEMS),
        Levels(version=2, items=[LevelRecord() for _ in range(29)]),
        PhotoFilter(version=3, xyz=(1, 2, 3), density=50, luminosity=0),
        PhotoFilter(version=2, color=Color(values=[65535, 0, 0, 0])),
    ],
)
def test_adjustments_wr(element):
    check_write_read(element)


@pytest.mark.parametrize(
    "is_map, version, count_map, data",
    [
        (False, 4, 1, [[(0, 0), (255, 255)]]),
        (True, 4, 1, [list(range(256))]),
        (False, 1, 1, [[(0, 0), (128, 64), (255, 255)]]),
    ],
)
def test_curves_wr(is_map, version, count_map, data):
    check_write_read(Curves(is_map, version, count_map, data))


def test_brightness_contrast_rw():
    check_read_write(BrightnessContrast, pack("2hHBx", 30, -10, 127, 1))


def test_curves_channel_points():
    curves = Curves(False, 4, 1, [[(0, 0), (128, 64), (255, 255)]])
    assert curves.channel_points(0) == [(0, 0), (64, 128), (255, 255)]
    assert curves.channel_points(1) is None


def test_curves_map_channel_points():
    curves = Curves(True, 4, 1, [list(range(256))])
    assert curves.channel_points(0) == [(x, x) for x in range(0, 256, 51)]


def test_curves_invalid_point_count():
    data = pack("BHI", 0, 4, 1) + pack("H", 1) + pack("2H", 0, 0)
    with pytest.raises(AssertionError):
        Curves.frombytes(data)


def test_channel_mixer_without_rows():
    with pytest.raises(AssertionError):
        ChannelMixer.frombytes(pack("2H", 1, 0))


def test_channel_mixer_partial_rows():
    mixer = ChannelMixer.frombytes(pack("2H5h", 1, 1, 40, 40, 20, 0, 0))
    assert mixer.monochrome == 1
    assert mixer.rows == [(40, 40, 20, 0, 0)]


def test_hue_saturation_settings():
    value = HueSaturation(2, 0, (10, 20, 30), (0, -15, 0), HUE_ITEMS)
    assert value.settings == (0, -15, 0)
    value.enable = 1
    assert value.settings == (10, 20, 30)


def test_levels_invalid_version():
    with pytest.raises(ValueError):
        Levels.frombytes(pack("H", 1) + pack("5H", 0, 255, 0, 255, 100) * 29)


def test_short_payload():
    with pytest.raises(AssertionError):
        BrightnessContrast.frombytes(b"\x00\x01")
