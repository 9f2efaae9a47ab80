"""
Legacy layer effects (``lrFX``).

Older files carry their layer style in this fixed binary layout instead of
the ``lfx2`` descriptor. Only six effects exist here, each stored behind an
``8BIM`` signature and its own length prefix:

=====================  ===============================
OSType                 structure
=====================  ===============================
``cmnS``               :py:class:`CommonStateInfo`
``dsdw``, ``isdw``     :py:class:`ShadowInfo`
``oglw``, ``iglw``     :py:class:`GlowInfo`
``bevl``               :py:class:`BevelInfo`
``sofi``               :py:class:`SolidFillInfo`
=====================  ===============================

Opacities are stored as bytes in 0...255.
"""

import logging
from typing import Any, BinaryIO, Dict, Optional, Sequence, TypeVar

from attrs import define, field

from psd_layout.constants import BlendMode, EffectOSType
from psd_layout.psd.base import BaseElement, DictElement
from psd_layout.psd.bin_utils import (
    read_fmt,
    read_length_block,
    write_bytes,
    write_fmt,
    write_length_block,
    write_padding,
)
from psd_layout.psd.color import Color

logger = logging.getLogger(__name__)

T = TypeVar("T", bound="BaseElement")

SIGNATURE = b"8BIM"


def _read_fields(fp: BinaryIO, fmt: str, names: Sequence[str]) -> Dict[str, Any]:
    return dict(zip(names, read_fmt(fmt, fp)))


def _read_signature(fp: BinaryIO) -> None:
    signature = fp.read(4)
    assert signature == SIGNATURE, "Invalid signature %r" % signature


def _read_blend_mode(fp: BinaryIO) -> BlendMode:
    _read_signature(fp)
    return BlendMode.from_key(read_fmt("4s", fp)[0])


def _write_blend_mode(fp: BinaryIO, blend_mode: BlendMode) -> int:
    return write_bytes(fp, SIGNATURE + blend_mode.value)


@define(repr=False)
class CommonStateInfo(BaseElement):
    """Visibility shared by all the legacy effects."""

    version: int = 0
    visible: int = 1

    @classmethod
    def read(cls: type[T], fp: BinaryIO, **kwargs: Any) -> T:
        return cls(**_read_fields(fp, "IB2x", ("version", "visible")))

    def write(self, fp: BinaryIO, **kwargs: Any) -> int:
        return write_fmt(fp, "IB2x", self.version, self.visible)


@define(repr=False)
class ShadowInfo(BaseElement):
    """
    Drop or inner shadow.

    .. py:attribute:: blur
    .. py:attribute:: angle
    .. py:attribute:: distance
    .. py:attribute:: color
    .. py:attribute:: blend_mode
    .. py:attribute:: opacity
    """

    version: int = 2
    blur: int = 5
    intensity: int = 0
    angle: int = 120
    distance: int = 5
    color: Color = field(factory=Color)
    blend_mode: BlendMode = field(default=BlendMode.MULTIPLY, converter=BlendMode.from_key)
    enabled: int = 1
    use_global_angle: int = 1
    opacity: int = 191
    native_color: Color = field(factory=Color)

    @classmethod
    def read(cls: type[T], fp: BinaryIO, **kwargs: Any) -> T:
        values = _read_fields(
            fp, "IIIiI", ("version", "blur", "intensity", "angle", "distance")
        )
        values["color"] = Color.read(fp)
        values["blend_mode"] = _read_blend_mode(fp)
        values.update(
            _read_fields(fp, "3B", ("enabled", "use_global_angle", "opacity"))
        )
        values["native_color"] = Color.read(fp)
        return cls(**values)

    def write(self, fp: BinaryIO, **kwargs: Any) -> int:
        written = write_fmt(
            fp,
            "IIIiI",
            self.version,
            self.blur,
            self.intensity,
            self.angle,
            self.distance,
        )
        written += self.color.write(fp)
        written += _write_blend_mode(fp, self.blend_mode)
        written += write_fmt(
            fp, "3B", self.enabled, self.use_global_angle, self.opacity
        )
        return written + self.native_color.write(fp)


@define(repr=False)
class GlowInfo(BaseElement):
    """
    Outer or inner glow. From version 2 on, a native color follows, and
    inner glows put an `invert` flag before it.
    """

    version: int = 2
    blur: int = 5
    intensity: int = 0
    color: Color = field(factory=Color)
    blend_mode: BlendMode = field(default=BlendMode.SCREEN, converter=BlendMode.from_key)
    enabled: int = 1
    opacity: int = 191
    invert: Optional[int] = None
    native_color: Optional[Color] = None

    @classmethod
    def read(cls: type[T], fp: BinaryIO, inner: bool = False, **kwargs: Any) -> T:
        values = _read_fields(fp, "III", ("version", "blur", "intensity"))
        values["color"] = Color.read(fp)
        values["blend_mode"] = _read_blend_mode(fp)
        values.update(_read_fields(fp, "2B", ("enabled", "opacity")))
        if values["version"] >= 2:
            if inner:
                values["invert"] = read_fmt("B", fp)[0]
            values["native_color"] = Color.read(fp)
        return cls(**values)

    def write(self, fp: BinaryIO, **kwargs: Any) -> int:
        written = write_fmt(fp, "III", self.version, self.blur, self.intensity)
        written += self.color.write(fp)
        written += _write_blend_mode(fp, self.blend_mode)
        written += write_fmt(fp, "2B", self.enabled, self.opacity)
        if self.version < 2:
            return written
        if self.invert is not None:
            written += write_fmt(fp, "B", self.invert)
        return written + (self.native_color or self.color).write(fp)


@define(repr=False)
class BevelInfo(BaseElement):
    """
    Bevel and emboss.

    `bevel_style` counts from 1: outer bevel, inner bevel, emboss, pillow
    emboss, stroke emboss. Version 2 repeats both colors at the end.
    """

    version: int = 0
    angle: int = 120
    depth: int = 100
    blur: int = 5
    highlight_blend_mode: BlendMode = field(
        default=BlendMode.SCREEN, converter=BlendMode.from_key
    )
    shadow_blend_mode: BlendMode = field(
        default=BlendMode.MULTIPLY, converter=BlendMode.from_key
    )
    highlight_color: Color = field(factory=Color)
    shadow_color: Color = field(factory=Color)
    bevel_style: int = 2
    highlight_opacity: int = 191
    shadow_opacity: int = 191
    enabled: int = 1
    use_global_angle: int = 1
    direction: int = 0

    _FLAGS = (
        "bevel_style",
        "highlight_opacity",
        "shadow_opacity",
        "enabled",
        "use_global_angle",
        "direction",
    )

    @classmethod
    def read(cls: type[T], fp: BinaryIO, **kwargs: Any) -> T:
        values = _read_fields(fp, "Ii2I", ("version", "angle", "depth", "blur"))
        values["highlight_blend_mode"] = _read_blend_mode(fp)
        values["shadow_blend_mode"] = _read_blend_mode(fp)
        values["highlight_color"] = Color.read(fp)
        values["shadow_color"] = Color.read(fp)
        values.update(_read_fields(fp, "6B", cls._FLAGS))  # type: ignore[attr-defined]
        if values["version"] == 2:
            Color.read(fp)
            Color.read(fp)
        return cls(**values)

    def write(self, fp: BinaryIO, **kwargs: Any) -> int:
        written = write_fmt(fp, "Ii2I", self.version, self.angle, self.depth, self.blur)
        written += _write_blend_mode(fp, self.highlight_blend_mode)
        written += _write_blend_mode(fp, self.shadow_blend_mode)
        colors = [self.highlight_color, self.shadow_color]
        written += sum(color.write(fp) for color in colors)
        written += write_fmt(fp, "6B", *(getattr(self, name) for name in self._FLAGS))
        if self.version == 2:
            written += sum(color.write(fp) for color in colors)
        return written


@define(repr=False)
class SolidFillInfo(BaseElement):
    """Solid fill, the legacy counterpart of a color overlay."""

    version: int = 2
    blend_mode: BlendMode = field(default=BlendMode.NORMAL, converter=BlendMode.from_key)
    color: Color = field(factory=Color)
    opacity: int = 255
    enabled: int = 1
    native_color: Color = field(factory=Color)

    @classmethod
    def read(cls: type[T], fp: BinaryIO, **kwargs: Any) -> T:
        version = read_fmt("I", fp)[0]
        blend_mode = _read_blend_mode(fp)
        color = Color.read(fp)
        opacity, enabled = read_fmt("2B", fp)
        return cls(  # type: ignore[call-arg]
            version, blend_mode, color, opacity, enabled, Color.read(fp)
        )

    def write(self, fp: BinaryIO, **kwargs: Any) -> int:
        written = write_fmt(fp, "I", self.version)
        written += _write_blend_mode(fp, self.blend_mode)
        written += self.color.write(fp)
        written += write_fmt(fp, "2B", self.opacity, self.enabled)
        return written + self.native_color.write(fp)


EFFECT_TYPES = {
    EffectOSType.COMMON_STATE: CommonStateInfo,
    EffectOSType.DROP_SHADOW: ShadowInfo,
    EffectOSType.INNER_SHADOW: ShadowInfo,
    EffectOSType.OUTER_GLOW: GlowInfo,
    EffectOSType.INNER_GLOW: GlowInfo,
    EffectOSType.BEVEL: BevelInfo,
    EffectOSType.SOLID_FILL: SolidFillInfo,
}


@define(repr=False)
class EffectsLayer(DictElement):
    """
    Legacy effects keyed by :py:class:`~psd_layout.constants.EffectOSType`,
    in file order.
    """

    version: int = 0

    @classmethod
    def read(cls: type[T], fp: BinaryIO, **kwargs: Any) -> T:
        version, count = read_fmt("2H", fp)
        items = []
        for _ in range(count):
            _read_signature(fp)
            ostype = EffectOSType(read_fmt("4s", fp)[0])
            options = {"inner": True} if ostype == EffectOSType.INNER_GLOW else {}
            data = read_length_block(fp)
            items.append((ostype, EFFECT_TYPES[ostype].frombytes(data, **options)))
        return cls(version=version, items=items)  # type: ignore[call-arg]

    def write(self, fp: BinaryIO, **kwargs: Any) -> int:
        written = write_fmt(fp, "2H", self.version, len(self))
        for ostype, info in self.items():
            written += write_bytes(fp, SIGNATURE + ostype.value)
            written += write_length_block(fp, info.write)
        return written + write_padding(fp, written, 4)
