"""
Effects module.

Layer style effects, plus the pieces shared by every effect family: the
:py:class:`Effect` base record and the :py:class:`Color` value.

Every effect is an attrs record. Numeric parameters are clamped into their
valid range on construction, see :py:func:`psd_layout.validators.clamp`::

    shadow = DropShadow(distance=3, angle=135, size=3, opacity=0.6)
    assert shadow.kind == StyleKind.DROP_SHADOW
"""

import logging
from enum import Enum
from typing import Any, ClassVar, Sequence

from attrs import define, field, fields
from attrs.validators import instance_of

from psd_layout.constants import (
    BevelStyle,
    BlendMode,
    EffectFamily,
    GlowSource,
    StrokePosition,
    StyleKind,
)
from psd_layout.validators import clamp, in_

logger = logging.getLogger(__name__)


@define(frozen=True)
class Color:
    """
    RGBA color with components in [0, 1].

    .. py:attribute:: r
    .. py:attribute:: g
    .. py:attribute:: b
    .. py:attribute:: a
    """

    r: float = field(default=0.0, converter=clamp(0.0, 1.0))
    g: float = field(default=0.0, converter=clamp(0.0, 1.0))
    b: float = field(default=0.0, converter=clamp(0.0, 1.0))
    a: float = field(default=1.0, converter=clamp(0.0, 1.0))

    @classmethod
    def black(cls, alpha: float = 1.0) -> "Color":
        return cls(0.0, 0.0, 0.0, alpha)

    @classmethod
    def white(cls, alpha: float = 1.0) -> "Color":
        return cls(1.0, 1.0, 1.0, alpha)

    @classmethod
    def red(cls, alpha: float = 1.0) -> "Color":
        return cls(1.0, 0.0, 0.0, alpha)

    @classmethod
    def yellow(cls, alpha: float = 1.0) -> "Color":
        return cls(1.0, 1.0, 0.0, alpha)

    @classmethod
    def from_rgb(cls, rgb: Sequence[float], alpha: float = 1.0) -> "Color":
        return cls(rgb[0], rgb[1], rgb[2], alpha)

    def to_tuple(self) -> tuple:
        return (self.r, self.g, self.b, self.a)


def _format_value(value: Any) -> str:
    if isinstance(value, Enum):
        return value.name.lower()
    if isinstance(value, float):
        return "%g" % value
    return repr(value)


def _color(default: Any) -> Any:
    return field(factory=default, validator=instance_of(Color))


@define(repr=False)
class Effect:
    """
    Base effect record.

    .. py:attribute:: enabled

        Whether the effect is active.

    .. py:attribute:: opacity

        Opacity in [0, 1].
    """

    kind: ClassVar[Enum]
    family: ClassVar[EffectFamily]

    enabled: bool = field(default=True, converter=bool)
    opacity: float = field(default=1.0, converter=clamp(0.0, 1.0))

    @property
    def name(self) -> str:
        """Effect name."""
        return self.kind.value

    def __repr__(self) -> str:
        return "%s(%s)" % (
            self.name,
            ", ".join(
                "%s=%s" % (a.name, _format_value(getattr(self, a.name)))
                for a in fields(self.__class__)
            ),
        )

    def _repr_pretty_(self, p: Any, cycle: bool) -> None:
        if cycle:
            return
        p.text(self.__repr__())


@define(repr=False)
class _BlendEffect(Effect):
    blend_mode: BlendMode = field(
        default=BlendMode.NORMAL, converter=BlendMode.from_key
    )


@define(repr=False)
class StyleEffect(_BlendEffect):
    """
    Base class of layer style effects.

    .. py:attribute:: blend_mode

        See :py:class:`~psd_layout.constants.BlendMode`.
    """

    family: ClassVar[EffectFamily] = EffectFamily.STYLE


@define(repr=False)
class DropShadow(StyleEffect):
    """
    Drop shadow.

    .. py:attribute:: color
    .. py:attribute:: distance
    .. py:attribute:: angle
    .. py:attribute:: spread
    .. py:attribute:: size
    """

    kind: ClassVar[StyleKind] = StyleKind.DROP_SHADOW

    color: Color = _color(Color.black)
    distance: float = field(default=5.0, converter=clamp(0.0, 30000.0))
    angle: float = field(default=135.0, converter=clamp(-360.0, 360.0))
    spread: float = field(default=0.0, converter=clamp(0.0, 100.0))
    size: float = field(default=5.0, converter=clamp(0.0, 250.0))


@define(repr=False)
class InnerShadow(StyleEffect):
    """
    Inner shadow.

    .. py:attribute:: color
    .. py:attribute:: distance
    .. py:attribute:: angle
    .. py:attribute:: choke
    .. py:attribute:: size
    """

    kind: ClassVar[StyleKind] = StyleKind.INNER_SHADOW

    color: Color = _color(Color.black)
    distance: float = field(default=5.0, converter=clamp(0.0, 30000.0))
    angle: float = field(default=135.0, converter=clamp(-360.0, 360.0))
    choke: float = field(default=0.0, converter=clamp(0.0, 100.0))
    size: float = field(default=5.0, converter=clamp(0.0, 250.0))


@define(repr=False)
class OuterGlow(StyleEffect):
    """
    Outer glow.

    .. py:attribute:: color
    .. py:attribute:: spread
    .. py:attribute:: size
    .. py:attribute:: range
    """

    kind: ClassVar[StyleKind] = StyleKind.OUTER_GLOW

    color: Color = _color(Color.yellow)
    spread: float = field(default=0.0, converter=clamp(0.0, 100.0))
    size: float = field(default=5.0, converter=clamp(0.0, 250.0))
    range: float = field(default=50.0, converter=clamp(1.0, 100.0))


@define(repr=False)
class InnerGlow(StyleEffect):
    """
    Inner glow.

    .. py:attribute:: color
    .. py:attribute:: choke
    .. py:attribute:: size
    .. py:attribute:: range
    .. py:attribute:: source

        See :py:class:`~psd_layout.constants.GlowSource`.
    """

    kind: ClassVar[StyleKind] = StyleKind.INNER_GLOW

    color: Color = _color(Color.yellow)
    choke: float = field(default=0.0, converter=clamp(0.0, 100.0))
    size: float = field(default=5.0, converter=clamp(0.0, 250.0))
    range: float = field(default=50.0, converter=clamp(1.0, 100.0))
    source: GlowSource = field(
        default=GlowSource.EDGE, converter=GlowSource, validator=in_(GlowSource)
    )


@define(repr=False)
class Stroke(StyleEffect):
    """
    Stroke.

    .. py:attribute:: color
    .. py:attribute:: size
    .. py:attribute:: position

        See :py:class:`~psd_layout.constants.StrokePosition`.
    """

    kind: ClassVar[StyleKind] = StyleKind.STROKE

    color: Color = _color(Color.red)
    size: float = field(default=3.0, converter=clamp(1.0, 250.0))
    position: StrokePosition = field(
        default=StrokePosition.OUTSIDE,
        converter=StrokePosition,
        validator=in_(StrokePosition),
    )


@define(repr=False)
class ColorOverlay(StyleEffect):
    """
    Color overlay, also the legacy solid fill.

    .. py:attribute:: color
    """

    kind: ClassVar[StyleKind] = StyleKind.COLOR_OVERLAY

    color: Color = _color(Color.red)


def _default_stops() -> list:
    return [Color.black(), Color.white()]


@define(repr=False)
class GradientOverlay(StyleEffect):
    """
    Gradient overlay. Only the stop colors are kept, locations and midpoints
    are not.

    .. py:attribute:: colors
    .. py:attribute:: angle
    .. py:attribute:: scale
    .. py:attribute:: reverse
    """

    kind: ClassVar[StyleKind] = StyleKind.GRADIENT_OVERLAY

    colors: list = field(factory=_default_stops, converter=list)
    angle: float = field(default=90.0, converter=clamp(-360.0, 360.0))
    scale: float = field(default=100.0, converter=clamp(10.0, 150.0))
    reverse: bool = field(default=False, converter=bool)


@define(repr=False)
class PatternOverlay(StyleEffect):
    """
    Pattern overlay.

    .. py:attribute:: pattern_name
    .. py:attribute:: scale
    """

    kind: ClassVar[StyleKind] = StyleKind.PATTERN_OVERLAY

    pattern_name: str = ""
    scale: float = field(default=100.0, converter=clamp(1.0, 1000.0))


@define(repr=False)
class _BevelEmboss(StyleEffect):
    style: BevelStyle = field(
        default=BevelStyle.INNER, converter=BevelStyle, validator=in_(BevelStyle)
    )
    depth: float = field(default=100.0, converter=clamp(1.0, 1000.0))
    size: float = field(default=5.0, converter=clamp(0.0, 250.0))
    soften: float = field(default=0.0, converter=clamp(0.0, 16.0))
    angle: float = field(default=120.0, converter=clamp(-360.0, 360.0))
    altitude: float = field(default=30.0, converter=clamp(0.0, 90.0))
    highlight_color: Color = _color(Color.white)
    shadow_color: Color = _color(Color.black)


@define(repr=False)
class Bevel(_BevelEmboss):
    """
    Bevel.

    .. py:attribute:: style

        See :py:class:`~psd_layout.constants.BevelStyle`.

    .. py:attribute:: depth
    .. py:attribute:: size
    .. py:attribute:: soften
    .. py:attribute:: angle
    .. py:attribute:: altitude
    .. py:attribute:: highlight_color
    .. py:attribute:: shadow_color
    """

    kind: ClassVar[StyleKind] = StyleKind.BEVEL


@define(repr=False)
class Emboss(_BevelEmboss):
    """
    Emboss, the bevel and emboss effect in one of the emboss styles.
    """

    kind: ClassVar[StyleKind] = StyleKind.EMBOSS

    style: BevelStyle = field(
        default=BevelStyle.EMBOSS, converter=BevelStyle, validator=in_(BevelStyle)
    )


@define(repr=False)
class Satin(StyleEffect):
    """
    Satin.

    .. py:attribute:: color
    .. py:attribute:: angle
    .. py:attribute:: distance
    .. py:attribute:: size
    .. py:attribute:: invert
    """

    kind: ClassVar[StyleKind] = StyleKind.SATIN

    color: Color = _color(Color.black)
    angle: float = field(default=19.0, converter=clamp(-360.0, 360.0))
    distance: float = field(default=11.0, converter=clamp(1.0, 250.0))
    size: float = field(default=14.0, converter=clamp(0.0, 250.0))
    invert: bool = field(default=True, converter=bool)


#: Style variants by kind.
STYLE_VARIANTS = {
    kls.kind: kls
    for kls in (
        DropShadow,
        InnerShadow,
        OuterGlow,
        InnerGlow,
        Stroke,
        ColorOverlay,
        GradientOverlay,
        PatternOverlay,
        Bevel,
        Emboss,
        Satin,
    )
}
