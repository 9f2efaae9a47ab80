"""
Smart filter effects.

Smart filters are applied to smart object layers in the order Photoshop
lists them. Like layer styles, each filter has its own blend mode.
"""

import logging
from typing import ClassVar

from attrs import define, field

from psd_layout.api.effects import _BlendEffect
from psd_layout.constants import (
    DistortStyle,
    EffectFamily,
    FilterKind,
    NoiseDistribution,
    RadialBlurMethod,
)
from psd_layout.validators import clamp, in_

logger = logging.getLogger(__name__)


@define(repr=False)
class FilterEffect(_BlendEffect):
    """
    Base class of smart filter effects.

    .. py:attribute:: blend_mode

        See :py:class:`~psd_layout.constants.BlendMode`.
    """

    family: ClassVar[EffectFamily] = EffectFamily.SMART_FILTER


@define(repr=False)
class GaussianBlur(FilterEffect):
    """
    Gaussian blur.

    .. py:attribute:: radius

        Radius in pixels.
    """

    kind: ClassVar[FilterKind] = FilterKind.GAUSSIAN_BLUR

    radius: float = field(default=1.0, converter=clamp(0.1, 250.0))


@define(repr=False)
class MotionBlur(FilterEffect):
    """
    Motion blur.

    .. py:attribute:: angle
    .. py:attribute:: distance
    """

    kind: ClassVar[FilterKind] = FilterKind.MOTION_BLUR

    angle: float = field(default=0.0, converter=clamp(-360.0, 360.0))
    distance: float = field(default=1.0, converter=clamp(1.0, 999.0))


@define(repr=False)
class RadialBlur(FilterEffect):
    """
    Radial blur.

    .. py:attribute:: amount
    .. py:attribute:: method

        See :py:class:`~psd_layout.constants.RadialBlurMethod`.

    .. py:attribute:: center

        Normalized (x, y) center.
    """

    kind: ClassVar[FilterKind] = FilterKind.RADIAL_BLUR

    amount: float = field(default=10.0, converter=clamp(1.0, 100.0))
    method: RadialBlurMethod = field(
        default=RadialBlurMethod.SPIN,
        converter=RadialBlurMethod,
        validator=in_(RadialBlurMethod),
    )
    center: tuple = (0.5, 0.5)


@define(repr=False)
class Sharpen(FilterEffect):
    """
    Sharpen.

    .. py:attribute:: amount
    """

    kind: ClassVar[FilterKind] = FilterKind.SHARPEN

    amount: float = field(default=50.0, converter=clamp(1.0, 500.0))


@define(repr=False)
class UnsharpMask(FilterEffect):
    """
    Unsharp mask.

    .. py:attribute:: amount
    .. py:attribute:: radius
    .. py:attribute:: threshold
    """

    kind: ClassVar[FilterKind] = FilterKind.UNSHARP_MASK

    amount: float = field(default=50.0, converter=clamp(1.0, 500.0))
    radius: float = field(default=1.0, converter=clamp(0.1, 250.0))
    threshold: float = field(default=0.0, converter=clamp(0.0, 255.0))


@define(repr=False)
class Noise(FilterEffect):
    """
    Add noise.

    .. py:attribute:: amount
    .. py:attribute:: distribution

        See :py:class:`~psd_layout.constants.NoiseDistribution`.

    .. py:attribute:: monochromatic
    """

    kind: ClassVar[FilterKind] = FilterKind.NOISE

    amount: float = field(default=10.0, converter=clamp(0.1, 400.0))
    distribution: NoiseDistribution = field(
        default=NoiseDistribution.UNIFORM,
        converter=NoiseDistribution,
        validator=in_(NoiseDistribution),
    )
    monochromatic: bool = field(default=False, converter=bool)


@define(repr=False)
class Distort(FilterEffect):
    """
    Twirl, pinch, zigzag or spherize distortion.

    .. py:attribute:: style

        See :py:class:`~psd_layout.constants.DistortStyle`.

    .. py:attribute:: amount
    """

    kind: ClassVar[FilterKind] = FilterKind.DISTORT

    style: DistortStyle = field(
        default=DistortStyle.TWIRL, converter=DistortStyle, validator=in_(DistortStyle)
    )
    amount: float = field(default=50.0, converter=clamp(-100.0, 100.0))


@define(repr=False)
class Emboss(FilterEffect):
    """
    Emboss filter.

    .. py:attribute:: angle
    .. py:attribute:: height
    .. py:attribute:: amount
    """

    kind: ClassVar[FilterKind] = FilterKind.EMBOSS

    angle: float = field(default=135.0, converter=clamp(-180.0, 180.0))
    height: float = field(default=3.0, converter=clamp(1.0, 10.0))
    amount: float = field(default=100.0, converter=clamp(1.0, 500.0))


@define(repr=False)
class FindEdges(FilterEffect):
    """Find edges, no parameters."""

    kind: ClassVar[FilterKind] = FilterKind.FIND_EDGES


@define(repr=False)
class HighPass(FilterEffect):
    """
    High pass.

    .. py:attribute:: radius
    """

    kind: ClassVar[FilterKind] = FilterKind.HIGH_PASS

    radius: float = field(default=10.0, converter=clamp(0.1, 250.0))


@define(repr=False)
class Liquify(FilterEffect):
    """
    Liquify. The distortion mesh is not decoded.

    .. py:attribute:: has_mesh
    """

    kind: ClassVar[FilterKind] = FilterKind.LIQUIFY

    has_mesh: bool = field(default=False, converter=bool)


@define(repr=False)
class OilPaint(FilterEffect):
    """
    Oil paint.

    .. py:attribute:: stylization
    .. py:attribute:: cleanliness
    .. py:attribute:: scale
    .. py:attribute:: bristle_detail
    """

    kind: ClassVar[FilterKind] = FilterKind.OIL_PAINT

    stylization: float = field(default=1.0, converter=clamp(0.1, 10.0))
    cleanliness: float = field(default=1.0, converter=clamp(0.0, 10.0))
    scale: float = field(default=1.0, converter=clamp(0.1, 10.0))
    bristle_detail: float = field(default=0.0, converter=clamp(0.0, 10.0))


@define(repr=False)
class Posterize(FilterEffect):
    """
    Posterize.

    .. py:attribute:: levels
    """

    kind: ClassVar[FilterKind] = FilterKind.POSTERIZE

    levels: float = field(default=4.0, converter=clamp(2.0, 255.0))


@define(repr=False)
class Solarize(FilterEffect):
    """Solarize, no parameters."""

    kind: ClassVar[FilterKind] = FilterKind.SOLARIZE


@define(repr=False)
class WaveDistortion(FilterEffect):
    """
    Wave distortion.

    .. py:attribute:: amplitude
    .. py:attribute:: wavelength
    .. py:attribute:: scale
    .. py:attribute:: horizontal
    .. py:attribute:: vertical
    """

    kind: ClassVar[FilterKind] = FilterKind.WAVE_DISTORTION

    amplitude: float = field(default=10.0, converter=clamp(1.0, 999.0))
    wavelength: float = field(default=100.0, converter=clamp(1.0, 999.0))
    scale: float = field(default=100.0, converter=clamp(1.0, 100.0))
    horizontal: bool = field(default=True, converter=bool)
    vertical: bool = field(default=False, converter=bool)


#: Smart filter variants by kind.
FILTER_VARIANTS = {
    kls.kind: kls
    for kls in (
        GaussianBlur,
        MotionBlur,
        RadialBlur,
        Sharpen,
        UnsharpMask,
        Noise,
        Distort,
        Emboss,
        FindEdges,
        HighPass,
        Liquify,
        OilPaint,
        Posterize,
        Solarize,
        WaveDistortion,
    )
}
