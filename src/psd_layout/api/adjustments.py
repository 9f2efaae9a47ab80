"""
Adjustment layer effects.

Adjustments carry no blend mode of their own. The binary blocks they are
decoded from live in :py:mod:`psd_layout.psd.adjustments`.
"""

import logging
from typing import Any, Callable, ClassVar

import numpy as np
from attrs import define, field

from psd_layout.api.effects import Color, Effect, _color
from psd_layout.constants import AdjustmentKind, EffectFamily
from psd_layout.validators import clamp

logger = logging.getLogger(__name__)


def _clamped_tuple(minimum: float, maximum: float, size: int) -> Callable[[Any], tuple]:
    converter = clamp(minimum, maximum)

    def convert(values: Any) -> tuple:
        values = tuple(converter(v) for v in values)
        if len(values) != size:
            raise ValueError("Expected %d values, got %d" % (size, len(values)))
        return values

    return convert


def _curve_points(points: Any) -> list:
    converter = clamp(0.0, 1.0)
    return sorted((converter(x), converter(y)) for x, y in points)


@define(repr=False)
class AdjustmentEffect(Effect):
    """
    Base class of adjustment layer effects.
    """

    family: ClassVar[EffectFamily] = EffectFamily.ADJUSTMENT


@define(repr=False)
class BrightnessContrast(AdjustmentEffect):
    """
    Brightness and contrast.

    .. py:attribute:: brightness
    .. py:attribute:: contrast
    .. py:attribute:: mean
    .. py:attribute:: lab_only
    .. py:attribute:: use_legacy
    """

    kind: ClassVar[AdjustmentKind] = AdjustmentKind.BRIGHTNESS_CONTRAST

    brightness: float = field(default=0.0, converter=clamp(-150.0, 150.0))
    contrast: float = field(default=0.0, converter=clamp(-100.0, 100.0))
    mean: float = field(default=127.0, converter=clamp(0.0, 255.0))
    lab_only: bool = field(default=False, converter=bool)
    use_legacy: bool = field(default=False, converter=bool)


@define(repr=False)
class HueSaturation(AdjustmentEffect):
    """
    Hue and saturation.

    .. py:attribute:: hue
    .. py:attribute:: saturation
    .. py:attribute:: lightness
    .. py:attribute:: colorize
    """

    kind: ClassVar[AdjustmentKind] = AdjustmentKind.HUE_SATURATION

    hue: float = field(default=0.0, converter=clamp(-180.0, 180.0))
    saturation: float = field(default=0.0, converter=clamp(-100.0, 100.0))
    lightness: float = field(default=0.0, converter=clamp(-100.0, 100.0))
    colorize: bool = field(default=False, converter=bool)


@define(repr=False)
class ColorBalance(AdjustmentEffect):
    """
    Color balance. The named fields hold the midtones; `shadows` and
    `highlights` are (cyan-red, magenta-green, yellow-blue) triples.

    .. py:attribute:: cyan_red
    .. py:attribute:: magenta_green
    .. py:attribute:: yellow_blue
    .. py:attribute:: shadows
    .. py:attribute:: highlights
    .. py:attribute:: preserve_luminosity
    """

    kind: ClassVar[AdjustmentKind] = AdjustmentKind.COLOR_BALANCE

    cyan_red: float = field(default=0.0, converter=clamp(-100.0, 100.0))
    magenta_green: float = field(default=0.0, converter=clamp(-100.0, 100.0))
    yellow_blue: float = field(default=0.0, converter=clamp(-100.0, 100.0))
    shadows: tuple = field(
        default=(0.0, 0.0, 0.0), converter=_clamped_tuple(-100.0, 100.0, 3)
    )
    highlights: tuple = field(
        default=(0.0, 0.0, 0.0), converter=_clamped_tuple(-100.0, 100.0, 3)
    )
    preserve_luminosity: bool = field(default=True, converter=bool)


@define(repr=False)
class Curves(AdjustmentEffect):
    """
    Curves. Each channel is a list of (input, output) points in [0, 1],
    sorted by input. An empty list leaves the channel unchanged.

    .. py:attribute:: rgb
    .. py:attribute:: red
    .. py:attribute:: green
    .. py:attribute:: blue
    """

    kind: ClassVar[AdjustmentKind] = AdjustmentKind.CURVES

    rgb: list = field(factory=lambda: [(0.0, 0.0), (1.0, 1.0)], converter=_curve_points)
    red: list = field(factory=list, converter=_curve_points)
    green: list = field(factory=list, converter=_curve_points)
    blue: list = field(factory=list, converter=_curve_points)

    def lookup_table(self, channel: str = "rgb") -> np.ndarray:
        """
        Build a 256-entry lookup table for the given channel.

        Points are linearly interpolated; values outside the first and last
        points are held constant.

        :param channel: one of `rgb`, `red`, `green` or `blue`.
        :return: `numpy.ndarray` of `uint8`.
        """
        points = getattr(self, channel)
        x = np.arange(256, dtype=np.float64)
        if not points:
            return x.astype(np.uint8)
        xp = np.array([p[0] for p in points]) * 255.0
        fp = np.array([p[1] for p in points]) * 255.0
        return np.round(np.interp(x, xp, fp)).astype(np.uint8)


@define(repr=False)
class Levels(AdjustmentEffect):
    """
    Levels of the composite channel.

    .. py:attribute:: input_black
    .. py:attribute:: input_white
    .. py:attribute:: input_gamma
    .. py:attribute:: output_black
    .. py:attribute:: output_white
    """

    kind: ClassVar[AdjustmentKind] = AdjustmentKind.LEVELS

    input_black: float = field(default=0.0, converter=clamp(0.0, 253.0))
    input_white: float = field(default=255.0, converter=clamp(2.0, 255.0))
    input_gamma: float = field(default=1.0, converter=clamp(0.1, 9.99))
    output_black: float = field(default=0.0, converter=clamp(0.0, 255.0))
    output_white: float = field(default=255.0, converter=clamp(0.0, 255.0))

    def lookup_table(self) -> np.ndarray:
        """
        Build a 256-entry lookup table.

        :return: `numpy.ndarray` of `uint8`.
        """
        x = np.arange(256, dtype=np.float64)
        span = max(self.input_white - self.input_black, 1.0)
        value = np.clip((x - self.input_black) / span, 0.0, 1.0)
        value = np.power(value, 1.0 / self.input_gamma)
        value = self.output_black + value * (self.output_white - self.output_black)
        return np.round(np.clip(value, 0.0, 255.0)).astype(np.uint8)


@define(repr=False)
class PhotoFilter(AdjustmentEffect):
    """
    Photo filter.

    .. py:attribute:: filter_color
    .. py:attribute:: density
    .. py:attribute:: preserve_luminosity
    """

    kind: ClassVar[AdjustmentKind] = AdjustmentKind.PHOTO_FILTER

    filter_color: Color = _color(Color.white)
    density: float = field(default=25.0, converter=clamp(0.0, 100.0))
    preserve_luminosity: bool = field(default=True, converter=bool)


@define(repr=False)
class ChannelMixer(AdjustmentEffect):
    """
    Channel mixer. Each output row is a (red, green, blue, constant) tuple
    in percent.

    .. py:attribute:: monochrome
    .. py:attribute:: red
    .. py:attribute:: green
    .. py:attribute:: blue
    """

    kind: ClassVar[AdjustmentKind] = AdjustmentKind.CHANNEL_MIXER

    monochrome: bool = field(default=False, converter=bool)
    red: tuple = field(
        default=(100.0, 0.0, 0.0, 0.0), converter=_clamped_tuple(-200.0, 200.0, 4)
    )
    green: tuple = field(
        default=(0.0, 100.0, 0.0, 0.0), converter=_clamped_tuple(-200.0, 200.0, 4)
    )
    blue: tuple = field(
        default=(0.0, 0.0, 100.0, 0.0), converter=_clamped_tuple(-200.0, 200.0, 4)
    )


@define(repr=False)
class ColorLookup(AdjustmentEffect):
    """
    Color lookup. The lookup table itself is not decoded.

    .. py:attribute:: lookup_name
    .. py:attribute:: dither
    """

    kind: ClassVar[AdjustmentKind] = AdjustmentKind.COLOR_LOOKUP

    lookup_name: str = ""
    dither: bool = field(default=False, converter=bool)


@define(repr=False)
class Vibrance(AdjustmentEffect):
    """
    Vibrance.

    .. py:attribute:: vibrance
    .. py:attribute:: saturation
    """

    kind: ClassVar[AdjustmentKind] = AdjustmentKind.VIBRANCE

    vibrance: float = field(default=0.0, converter=clamp(-100.0, 100.0))
    saturation: float = field(default=0.0, converter=clamp(-100.0, 100.0))


@define(repr=False)
class Exposure(AdjustmentEffect):
    """
    Exposure.

    .. py:attribute:: exposure
    .. py:attribute:: offset
    .. py:attribute:: gamma
    """

    kind: ClassVar[AdjustmentKind] = AdjustmentKind.EXPOSURE

    exposure: float = field(default=0.0, converter=clamp(-20.0, 20.0))
    offset: float = field(default=0.0, converter=clamp(-0.5, 0.5))
    gamma: float = field(default=1.0, converter=clamp(0.01, 9.99))


#: Adjustment variants by kind.
ADJUSTMENT_VARIANTS = {
    kls.kind: kls
    for kls in (
        BrightnessContrast,
        HueSaturation,
        ColorBalance,
        Curves,
        Levels,
        PhotoFilter,
        ChannelMixer,
        ColorLookup,
        Vibrance,
        Exposure,
    )
}