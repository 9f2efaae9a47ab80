"""
Tag dispatch.

Maps the 4-character key of a tagged block to the effect family that owns
it, and decodes the block into typed effects.

Adjustment and smart filter tags map to exactly one effect each. Style tags
bundle several effects in a single block. A known tag whose payload cannot
be decoded still yields its effect with neutral defaults, since the tag
alone tells that the effect is active. Unknown tags are skipped with a
warning; Photoshop writes many undocumented ones.

Example::

    from psd_layout.api.dispatch import parse_block

    for block in layer.blocks:
        for effect in parse_block(block, layer.name):
            print(effect)
"""

import logging
import struct
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

from attrs import fields

from psd_layout.api.adjustments import (
    AdjustmentEffect,
    BrightnessContrast,
    ChannelMixer,
    ColorBalance,
    ColorLookup,
    Curves,
    Exposure,
    HueSaturation,
    Levels,
    PhotoFilter,
    Vibrance,
)
from psd_layout.api.effects import (
    Bevel,
    Color,
    ColorOverlay,
    DropShadow,
    Emboss,
    GradientOverlay,
    InnerGlow,
    InnerShadow,
    OuterGlow,
    PatternOverlay,
    Satin,
    Stroke,
    StyleEffect,
)
from psd_layout.api import smart_filters
from psd_layout.api.layers import TaggedBlock
from psd_layout.constants import (
    BevelStyle,
    BlendMode,
    DistortStyle,
    EffectFamily,
    EffectOSType,
    GlowSource,
    NoiseDistribution,
    RadialBlurMethod,
    StrokePosition,
    Tag,
)
from psd_layout.psd import adjustments as psd_adjustments
from psd_layout.psd.descriptor import (
    Descriptor,
    DescriptorBlock,
    DescriptorBlock2,
    Enumerated,
    List as DescriptorList,
    get_value,
)
from psd_layout.psd.effects_layer import EffectsLayer
from psd_layout.registry import new_registry

logger = logging.getLogger(__name__)

#: Errors that mark a payload as undecodable.
DECODE_ERRORS = (
    AssertionError,
    ValueError,
    TypeError,
    struct.error,
    IOError,
    KeyError,
    AttributeError,
)

ADJUSTMENT_PARSERS, register_adjustment = new_registry(attribute="tag")
STYLE_PARSERS, register_style = new_registry(attribute="tag")
STYLE_DESCRIPTORS, register_style_descriptor = new_registry(attribute="classID")

#: Adjustment tag table.
ADJUSTMENT_TAGS = {
    Tag.BRIGHTNESS_AND_CONTRAST: BrightnessContrast,
    Tag.HUE_SATURATION: HueSaturation,
    Tag.HUE_SATURATION_V4: HueSaturation,
    Tag.COLOR_BALANCE: ColorBalance,
    Tag.CURVES: Curves,
    Tag.LEVELS: Levels,
    Tag.PHOTO_FILTER: PhotoFilter,
    Tag.CHANNEL_MIXER: ChannelMixer,
    Tag.COLOR_LOOKUP: ColorLookup,
    Tag.VIBRANCE: Vibrance,
    Tag.EXPOSURE: Exposure,
}

#: Style tags in order of precedence.
STYLE_TAGS = (
    Tag.OBJECT_BASED_EFFECTS_LAYER_INFO,
    Tag.OBJECT_BASED_EFFECTS_LAYER_INFO_V0,
    Tag.OBJECT_BASED_EFFECTS_LAYER_INFO_V1,
    Tag.EFFECTS_LAYER,
)

#: Smart filter tag table: variant and the values used when the payload
#: carries no settings.
FILTER_TAGS: Dict[Tag, Tuple[type, Dict[str, Any]]] = {
    Tag.GAUSSIAN_BLUR: (smart_filters.GaussianBlur, {"radius": 2.0}),
    Tag.MOTION_BLUR: (smart_filters.MotionBlur, {"distance": 5.0}),
    Tag.RADIAL_BLUR: (smart_filters.RadialBlur, {"amount": 10.0}),
    Tag.SHARPEN: (smart_filters.Sharpen, {"amount": 50.0}),
    Tag.UNSHARP_MASK: (
        smart_filters.UnsharpMask,
        {"amount": 50.0, "radius": 1.0, "threshold": 0.0},
    ),
    Tag.ADD_NOISE: (smart_filters.Noise, {"amount": 10.0}),
    Tag.EMBOSS: (
        smart_filters.Emboss,
        {"angle": 135.0, "height": 3.0, "amount": 100.0},
    ),
    Tag.HIGH_PASS: (smart_filters.HighPass, {"radius": 10.0}),
    Tag.WAVE: (
        smart_filters.WaveDistortion,
        {"amplitude": 10.0, "wavelength": 100.0, "scale": 100.0},
    ),
    Tag.FIND_EDGES: (smart_filters.FindEdges, {}),
    Tag.LIQUIFY: (smart_filters.Liquify, {}),
    Tag.POSTERIZE_FILTER: (smart_filters.Posterize, {}),
    Tag.SOLARIZE: (smart_filters.Solarize, {}),
    Tag.TWIRL: (smart_filters.Distort, {"style": DistortStyle.TWIRL}),
    Tag.PINCH: (smart_filters.Distort, {"style": DistortStyle.PINCH}),
    Tag.ZIGZAG: (smart_filters.Distort, {"style": DistortStyle.ZIGZAG}),
    Tag.SPHERIZE: (smart_filters.Distort, {"style": DistortStyle.SPHERIZE}),
}

#: Filter descriptor keys and the fields they set.
FILTER_KEYS = {
    b"Rds ": "radius",
    b"Angl": "angle",
    b"Dstn": "distance",
    b"Amnt": "amount",
    b"Thsh": "threshold",
    b"Nose": "amount",
    b"Dstr": "distribution",
    b"Mnch": "monochromatic",
    b"Hght": "height",
    b"BlrM": "method",
    b"AmMx": "amplitude",
    b"WvMx": "wavelength",
    b"SclH": "scale",
    b"Lvls": "levels",
}

_FILTER_ENUMS = {
    b"Unfr": NoiseDistribution.UNIFORM,
    b"Gsn ": NoiseDistribution.GAUSSIAN,
    b"Spn ": RadialBlurMethod.SPIN,
    b"Zm  ": RadialBlurMethod.ZOOM,
}


def to_tag(key: Union[bytes, str, Tag]) -> Optional[Tag]:
    """Convert a block key to :py:class:`~psd_layout.constants.Tag`, or `None`."""
    if isinstance(key, Tag):
        return key
    if isinstance(key, str):
        key = key.encode("ascii", "replace")
    try:
        return Tag(key)
    except ValueError:
        return None


def family_of(key: Union[bytes, str, Tag]) -> Optional[EffectFamily]:
    """
    Return the effect family that consumes the given tag, or `None` for
    tags that carry no effect.
    """
    tag = to_tag(key)
    if tag in ADJUSTMENT_TAGS:
        return EffectFamily.ADJUSTMENT
    if tag in STYLE_TAGS:
        return EffectFamily.STYLE
    if tag in FILTER_TAGS:
        return EffectFamily.SMART_FILTER
    return None


def parse_block(block: TaggedBlock, layer_name: str = "") -> List[Any]:
    """
    Decode a single tagged block into a list of effects.

    Unknown tags and tags without effect content yield an empty list.

    :param block: :py:class:`~psd_layout.api.layers.TaggedBlock`.
    :param layer_name: layer name used in diagnostics.
    """
    tag = to_tag(block.key)
    family = family_of(tag) if tag is not None else None
    if family is None:
        skip_block(block, layer_name)
        return []
    if family == EffectFamily.ADJUSTMENT:
        effect = parse_adjustment(block, layer_name)
        return [effect] if effect is not None else []
    if family == EffectFamily.STYLE:
        return parse_style(block, layer_name) or []
    effect = parse_smart_filter(block, layer_name)
    return [effect] if effect is not None else []


def skip_block(block: TaggedBlock, layer_name: str = "") -> None:
    """Log a block that yields no effect."""
    tag = to_tag(block.key)
    if tag is None:
        logger.warning(
            "Unrecognized tag %r in layer %r, skipped", block.key, layer_name
        )
    else:
        logger.debug("Tag %r of layer %r carries no effect", tag.value, layer_name)


def _decode_failed(tag: Tag, layer_name: str, error: Exception) -> None:
    logger.warning(
        "Failed to decode %r block of layer %r, using defaults: %s",
        tag.value,
        layer_name,
        error,
    )


def parse_adjustment(
    block: TaggedBlock, layer_name: str = ""
) -> Optional[AdjustmentEffect]:
    """
    Decode an adjustment block.

    :return: adjustment effect, or `None` for non-adjustment tags.
    """
    tag = to_tag(block.key)
    variant = ADJUSTMENT_TAGS.get(tag)  # type: ignore[arg-type]
    if variant is None:
        skip_block(block, layer_name)
        return None
    if not block.data:
        logger.debug("Empty %r block of layer %r", tag.value, layer_name)  # type: ignore[union-attr]
        return variant()
    parser = ADJUSTMENT_PARSERS.get(tag)
    if parser is None:
        logger.debug("Layout of %r is not decoded, using defaults", tag.value)  # type: ignore[union-attr]
        return variant()
    try:
        return parser(block.data)
    except DECODE_ERRORS as e:
        _decode_failed(tag, layer_name, e)  # type: ignore[arg-type]
        return variant()


def _read_adjustment(tag: Tag, data: bytes) -> Any:
    kls = psd_adjustments.ADJUSTMENT_TYPES[tag]
    return kls.frombytes(data)


@register_adjustment(Tag.BRIGHTNESS_AND_CONTRAST)
def _brightness_contrast(data: bytes) -> BrightnessContrast:
    value = _read_adjustment(Tag.BRIGHTNESS_AND_CONTRAST, data)
    return BrightnessContrast(
        brightness=value.brightness,
        contrast=value.contrast,
        mean=value.mean,
        lab_only=value.lab_only,
        use_legacy=True,
    )


@register_adjustment(Tag.HUE_SATURATION_V4)
@register_adjustment(Tag.HUE_SATURATION)
def _hue_saturation(data: bytes) -> HueSaturation:
    value = _read_adjustment(Tag.HUE_SATURATION, data)
    hue, saturation, lightness = value.settings
    return HueSaturation(
        hue=hue,
        saturation=saturation,
        lightness=lightness,
        colorize=value.enable,
    )


@register_adjustment(Tag.COLOR_BALANCE)
def _color_balance(data: bytes) -> ColorBalance:
    value = _read_adjustment(Tag.COLOR_BALANCE, data)
    cyan_red, magenta_green, yellow_blue = value.midtones
    return ColorBalance(
        cyan_red=cyan_red,
        magenta_green=magenta_green,
        yellow_blue=yellow_blue,
        shadows=value.shadows,
        highlights=value.highlights,
        preserve_luminosity=value.luminosity,
    )


@register_adjustment(Tag.CURVES)
def _curves(data: bytes) -> Curves:
    value = _read_adjustment(Tag.CURVES, data)
    channels = {}
    for index, name in enumerate(("rgb", "red", "green", "blue")):
        points = value.channel_points(index)
        if points is not None:
            channels[name] = [(x / 255.0, y / 255.0) for x, y in points]
    return Curves(**channels)


@register_adjustment(Tag.LEVELS)
def _levels(data: bytes) -> Levels:
    value = _read_adjustment(Tag.LEVELS, data)
    record = value[0]
    return Levels(
        input_black=record.input_floor,
        input_white=record.input_ceiling,
        input_gamma=record.gamma / 100.0,
        output_black=record.output_floor,
        output_white=record.output_ceiling,
    )


@register_adjustment(Tag.PHOTO_FILTER)
def _photo_filter(data: bytes) -> PhotoFilter:
    value = _read_adjustment(Tag.PHOTO_FILTER, data)
    kwargs: Dict[str, Any] = dict(
        density=value.density, preserve_luminosity=value.luminosity
    )
    if value.color is not None:
        kwargs["filter_color"] = Color.from_rgb(value.color.to_rgb())
    return PhotoFilter(**kwargs)


@register_adjustment(Tag.CHANNEL_MIXER)
def _channel_mixer(data: bytes) -> ChannelMixer:
    value = _read_adjustment(Tag.CHANNEL_MIXER, data)
    rows = {}
    for name, row in zip(("red", "green", "blue"), value.rows):
        red, green, blue, _, constant = row
        rows[name] = (red, green, blue, constant)
    return ChannelMixer(monochrome=value.monochrome, **rows)


@register_adjustment(Tag.EXPOSURE)
def _exposure(data: bytes) -> Exposure:
    value = _read_adjustment(Tag.EXPOSURE, data)
    return Exposure(exposure=value.exposure, offset=value.offset, gamma=value.gamma)


@register_adjustment(Tag.VIBRANCE)
def _vibrance(data: bytes) -> Vibrance:
    value = _read_adjustment(Tag.VIBRANCE, data)
    return Vibrance(
        vibrance=get_value(value, b"vibrance", 0),
        saturation=get_value(value, b"Strt", 0),
    )


def parse_style(
    block: TaggedBlock, layer_name: str = ""
) -> Optional[List[StyleEffect]]:
    """
    Decode a layer style block.

    Only effects present in the Photoshop UI are returned. Effects that are
    switched off, individually or by the global effects switch, are kept
    with `enabled` set to `False`.

    :return: list of style effects, or `None` if the block is not a style
        block or cannot be decoded.
    """
    tag = to_tag(block.key)
    parser = STYLE_PARSERS.get(tag)
    if parser is None:
        skip_block(block, layer_name)
        return None
    try:
        return parser(block.data)
    except DECODE_ERRORS as e:
        logger.warning(
            "Failed to decode %r block of layer %r, no style read: %s",
            tag.value,  # type: ignore[union-attr]
            layer_name,
            e,
        )
        return None


@register_style(Tag.OBJECT_BASED_EFFECTS_LAYER_INFO)
@register_style(Tag.OBJECT_BASED_EFFECTS_LAYER_INFO_V0)
@register_style(Tag.OBJECT_BASED_EFFECTS_LAYER_INFO_V1)
def _object_based_effects(data: bytes) -> List[StyleEffect]:
    return _styles_from_descriptor(DescriptorBlock2.frombytes(data))


def _styles_from_descriptor(descriptor: Descriptor) -> List[StyleEffect]:
    master = bool(get_value(descriptor, b"masterFXSwitch", True))
    effects = []
    for key in descriptor:
        value = descriptor[key]
        if not isinstance(value, DescriptorList):
            value = [value]
        for item in value:
            if not isinstance(item, Descriptor):
                continue
            if b"present" in item and not get_value(item, b"present"):
                continue
            builder = STYLE_DESCRIPTORS.get(item.classID)
            if builder is None:
                logger.debug("Unsupported style effect %r", item.classID)
                continue
            effect = builder(item)
            effect.enabled = master and bool(get_value(item, b"enab", True))
            effects.append(effect)
    return effects


def _typed(item: Descriptor, key: bytes, kls: type) -> Any:
    """Item at `key`, or `None`. An item of another type is malformed."""
    value = item.get(key)
    if value is not None and not isinstance(value, kls):
        raise TypeError(
            "Expected %s at %r, got %s" % (kls.__name__, key, type(value).__name__)
        )
    return value


def _enum(item: Descriptor, key: bytes, default: Any) -> Any:
    value = _typed(item, key, Enumerated)
    return value.enum if value is not None else default


def _color(item: Descriptor, key: bytes = b"Clr ", alpha: float = 1.0) -> Color:
    value = _typed(item, key, Descriptor)
    if value is None:
        return Color.black(alpha)
    if value.classID != b"RGBC":
        logger.debug("Unsupported color class %r, using black", value.classID)
        return Color.black(alpha)
    return Color(
        get_value(value, b"Rd  ", 0.0) / 255.0,
        get_value(value, b"Grn ", 0.0) / 255.0,
        get_value(value, b"Bl  ", 0.0) / 255.0,
        alpha,
    )


def _common(item: Descriptor) -> Dict[str, Any]:
    return dict(
        blend_mode=_enum(item, b"Md  ", BlendMode.NORMAL),
        opacity=get_value(item, b"Opct", 100.0) / 100.0,
    )


@register_style_descriptor(b"DrSh")
def _drop_shadow(item: Descriptor) -> DropShadow:
    return DropShadow(
        color=_color(item),
        distance=get_value(item, b"Dstn", 5.0),
        angle=get_value(item, b"lagl", 135.0),
        spread=get_value(item, b"Ckmt", 0.0),
        size=get_value(item, b"blur", 5.0),
        **_common(item),
    )


@register_style_descriptor(b"IrSh")
def _inner_shadow(item: Descriptor) -> InnerShadow:
    return InnerShadow(
        color=_color(item),
        distance=get_value(item, b"Dstn", 5.0),
        angle=get_value(item, b"lagl", 135.0),
        choke=get_value(item, b"Ckmt", 0.0),
        size=get_value(item, b"blur", 5.0),
        **_common(item),
    )


@register_style_descriptor(b"OrGl")
def _outer_glow(item: Descriptor) -> OuterGlow:
    return OuterGlow(
        color=_color(item),
        spread=get_value(item, b"Ckmt", 0.0),
        size=get_value(item, b"blur", 5.0),
        range=get_value(item, b"Inpr", 50.0),
        **_common(item),
    )


@register_style_descriptor(b"IrGl")
def _inner_glow(item: Descriptor) -> InnerGlow:
    source = _enum(item, b"glwS", b"SrcE")
    return InnerGlow(
        color=_color(item),
        choke=get_value(item, b"Ckmt", 0.0),
        size=get_value(item, b"blur", 5.0),
        range=get_value(item, b"Inpr", 50.0),
        source=GlowSource.CENTER if source == b"SrcC" else GlowSource.EDGE,
        **_common(item),
    )


_STROKE_POSITIONS = {
    b"OutF": StrokePosition.OUTSIDE,
    b"InsF": StrokePosition.INSIDE,
    b"CtrF": StrokePosition.CENTER,
}


@register_style_descriptor(b"FrFX")
def _stroke(item: Descriptor) -> Stroke:
    position = _enum(item, b"Styl", b"OutF")
    return Stroke(
        color=_color(item),
        size=get_value(item, b"Sz  ", 3.0),
        position=_STROKE_POSITIONS.get(position, StrokePosition.OUTSIDE),
        **_common(item),
    )


@register_style_descriptor(b"SoFi")
def _color_overlay(item: Descriptor) -> ColorOverlay:
    return ColorOverlay(color=_color(item), **_common(item))


@register_style_descriptor(b"GrFl")
def _gradient_overlay(item: Descriptor) -> GradientOverlay:
    kwargs = _common(item)
    gradient = _typed(item, b"Grad", Descriptor)
    stops = _typed(gradient, b"Clrs", DescriptorList) if gradient is not None else None
    if stops is not None:
        if not all(isinstance(stop, Descriptor) for stop in stops):
            raise TypeError("Gradient stops must be descriptors")
        kwargs["colors"] = [_color(stop) for stop in stops]
    return GradientOverlay(
        angle=get_value(item, b"Angl", 90.0),
        scale=get_value(item, b"Scl ", 100.0),
        reverse=get_value(item, b"Rvrs", False),
        **kwargs,
    )


@register_style_descriptor(b"patternFill")
def _pattern_overlay(item: Descriptor) -> PatternOverlay:
    pattern = _typed(item, b"Ptrn", Descriptor)
    name = get_value(pattern, b"Nm  ", "") if pattern is not None else ""
    if not isinstance(name, str):
        raise TypeError("Pattern name must be text, got %s" % type(name).__name__)
    return PatternOverlay(
        pattern_name=name.rstrip("\x00"),
        scale=get_value(item, b"Scl ", 100.0),
        **_common(item),
    )


_BEVEL_STYLES = {
    b"OtrB": BevelStyle.OUTER,
    b"InrB": BevelStyle.INNER,
    b"Embs": BevelStyle.EMBOSS,
    b"PlEb": BevelStyle.PILLOW,
    b"strokeEmboss": BevelStyle.STROKE,
}


@register_style_descriptor(b"ebbl")
def _bevel_emboss(item: Descriptor) -> Union[Bevel, Emboss]:
    style = _BEVEL_STYLES.get(
        _enum(item, b"bvlS", b"InrB"), BevelStyle.INNER
    )
    kls = Emboss if style in (BevelStyle.EMBOSS, BevelStyle.PILLOW) else Bevel
    return kls(
        style=style,
        depth=get_value(item, b"srgR", 100.0),
        size=get_value(item, b"blur", 5.0),
        soften=get_value(item, b"Sftn", 0.0),
        angle=get_value(item, b"lagl", 120.0),
        altitude=get_value(item, b"Lald", 30.0),
        highlight_color=_color(item, b"hglC"),
        shadow_color=_color(item, b"sdwC"),
        blend_mode=_enum(item, b"hglM", BlendMode.SCREEN),
        opacity=get_value(item, b"hglO", 100.0) / 100.0,
    )


@register_style_descriptor(b"ChFX")
def _satin(item: Descriptor) -> Satin:
    return Satin(
        color=_color(item),
        angle=get_value(item, b"lagl", 19.0),
        distance=get_value(item, b"Dstn", 11.0),
        size=get_value(item, b"blur", 14.0),
        invert=get_value(item, b"Invr", True),
        **_common(item),
    )


@register_style(Tag.EFFECTS_LAYER)
def _effects_layer(data: bytes) -> List[StyleEffect]:
    value = EffectsLayer.frombytes(data)
    common = value.get(EffectOSType.COMMON_STATE)
    master = bool(common.visible) if common is not None else True
    effects: List[StyleEffect] = []
    for ostype in value:
        info = value[ostype]
        builder = _LEGACY_BUILDERS.get(ostype)
        if builder is None:
            continue
        effect = builder(info)
        effect.enabled = master and bool(info.enabled)
        effects.append(effect)
    return effects


def _legacy_shadow(kls: type) -> Callable[[Any], StyleEffect]:
    def build(info: Any) -> StyleEffect:
        return kls(
            color=Color.from_rgb(info.color.to_rgb()),
            distance=info.distance,
            angle=info.angle,
            size=info.blur,
            blend_mode=info.blend_mode,
            opacity=info.opacity / 255.0,
        )

    return build


def _legacy_glow(kls: type) -> Callable[[Any], StyleEffect]:
    def build(info: Any) -> StyleEffect:
        return kls(
            color=Color.from_rgb(info.color.to_rgb()),
            size=info.blur,
            blend_mode=info.blend_mode,
            opacity=info.opacity / 255.0,
        )

    return build


_LEGACY_BEVEL_STYLES = {
    1: BevelStyle.OUTER,
    2: BevelStyle.INNER,
    3: BevelStyle.EMBOSS,
    4: BevelStyle.PILLOW,
    5: BevelStyle.STROKE,
}


def _legacy_bevel(info: Any) -> StyleEffect:
    style = _LEGACY_BEVEL_STYLES.get(info.bevel_style, BevelStyle.INNER)
    kls = Emboss if style in (BevelStyle.EMBOSS, BevelStyle.PILLOW) else Bevel
    return kls(
        style=style,
        depth=info.depth,
        size=info.blur,
        angle=info.angle,
        highlight_color=Color.from_rgb(info.highlight_color.to_rgb()),
        shadow_color=Color.from_rgb(info.shadow_color.to_rgb()),
        blend_mode=info.highlight_blend_mode,
        opacity=info.highlight_opacity / 255.0,
    )


def _legacy_solid_fill(info: Any) -> StyleEffect:
    return ColorOverlay(
        color=Color.from_rgb(info.color.to_rgb()),
        blend_mode=info.blend_mode,
        opacity=info.opacity / 255.0,
    )


_LEGACY_BUILDERS: Dict[EffectOSType, Callable[[Any], StyleEffect]] = {
    EffectOSType.DROP_SHADOW: _legacy_shadow(DropShadow),
    EffectOSType.INNER_SHADOW: _legacy_shadow(InnerShadow),
    EffectOSType.OUTER_GLOW: _legacy_glow(OuterGlow),
    EffectOSType.INNER_GLOW: _legacy_glow(InnerGlow),
    EffectOSType.BEVEL: _legacy_bevel,
    EffectOSType.SOLID_FILL: _legacy_solid_fill,
}


def parse_smart_filter(
    block: TaggedBlock, layer_name: str = ""
) -> Optional[smart_filters.FilterEffect]:
    """
    Decode a smart filter block.

    An empty payload yields the filter with its tag defaults. Otherwise the
    payload is read as a descriptor, whose known keys override the
    defaults.

    :return: smart filter effect, or `None` for non-filter tags.
    """
    tag = to_tag(block.key)
    entry = FILTER_TAGS.get(tag)  # type: ignore[arg-type]
    if entry is None:
        skip_block(block, layer_name)
        return None
    variant, defaults = entry
    if not block.data:
        logger.debug("Empty %r block of layer %r", tag.value, layer_name)  # type: ignore[union-attr]
        return variant(**defaults)
    try:
        descriptor = DescriptorBlock.frombytes(block.data)
        return variant(**_filter_settings(variant, descriptor, defaults))
    except DECODE_ERRORS as e:
        _decode_failed(tag, layer_name, e)  # type: ignore[arg-type]
        return variant(**defaults)


def _filter_settings(
    variant: type, descriptor: Descriptor, defaults: Dict[str, Any]
) -> Dict[str, Any]:
    names = {a.name for a in fields(variant)}
    settings = dict(defaults)
    for key, name in FILTER_KEYS.items():
        if name not in names or key not in descriptor:
            continue
        value = descriptor[key]
        enum = getattr(value, "enum", None)
        if enum is not None:
            if enum not in _FILTER_ENUMS:
                raise ValueError("Unknown %r value %r" % (key, enum))
            settings[name] = _FILTER_ENUMS[enum]
        else:
            settings[name] = getattr(value, "value", value)
    return settings
