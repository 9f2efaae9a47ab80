import logging

import pytest

from psd_layout.api import smart_filters
from psd_layout.api.adjustments import (
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
from psd_layout.api.dispatch import (
    family_of,
    parse_adjustment,
    parse_block,
    parse_smart_filter,
    parse_style,
    to_tag,
)
from psd_layout.api.effects import (
    Bevel,
    ColorOverlay,
    DropShadow,
    Emboss,
    GradientOverlay,
    InnerGlow,
    OuterGlow,
    PatternOverlay,
    Satin,
)
from psd_layout.constants import (
    BevelStyle,
    BlendMode,
    DistortStyle,
    EffectFamily,
    EffectOSType,
    GlowSource,
    NoiseDistribution,
    StrokePosition,
    Tag,
)
from psd_layout.psd import adjustments as psd_adjustments
from psd_layout.psd.bin_utils import pack
from psd_layout.psd.color import Color as PsdColor
from psd_layout.psd.descriptor import (
    Bool,
    Descriptor,
    Double,
    Enumerated,
    Integer,
    List,
    String,
)
from psd_layout.psd.effects_layer import (
    BevelInfo,
    CommonStateInfo,
    EffectsLayer,
    GlowInfo,
    ShadowInfo,
    SolidFillInfo,
)

from ..utils import (
    blend,
    block,
    effect_descriptor,
    filter_settings,
    lfx2,
    percent,
    pixels,
    rgb,
)

logger = logging.getLogger(__name__)


@pytest.mark.parametrize(
    "key, family",
    [
        (b"brit", EffectFamily.ADJUSTMENT),
        ("hue ", EffectFamily.ADJUSTMENT),
        (Tag.VIBRANCE, EffectFamily.ADJUSTMENT),
        (b"lfx2", EffectFamily.STYLE),
        (b"lrFX", EffectFamily.STYLE),
        (b"GBlr", EffectFamily.SMART_FILTER),
        (b"Sphr", EffectFamily.SMART_FILTER),
        (b"luni", None),
        (b"zzzz", None),
    ],
)
def test_family_of(key, family):
    assert family_of(key) == family


def test_to_tag():
    assert to_tag(b"levl") == Tag.LEVELS
    assert to_tag("zzzz") is None
    assert to_tag("hue ") == Tag.HUE_SATURATION
    assert to_tag(b"hue2") == Tag.HUE_SATURATION_V4


def test_unknown_tag(caplog):
    with caplog.at_level(logging.WARNING):
        assert parse_block(block("zzzz", b"\x01\x02")) == []
    assert "zzzz" in caplog.text


def test_known_tag_without_effect(caplog):
    with caplog.at_level(logging.WARNING):
        assert parse_block(block("lyid", pack("I", 3))) == []
    assert caplog.text == ""


def test_undecodable_brightness_contrast(caplog):
    with caplog.at_level(logging.WARNING):
        effects = parse_block(block("brit", b"\x00\x01"), "Title")
    assert len(effects) == 1
    effect = effects[0]
    assert isinstance(effect, BrightnessContrast)
    assert effect.brightness == 0.0
    assert effect.contrast == 0.0
    assert "brit" in caplog.text
    assert "Title" in caplog.text


def test_brightness_contrast():
    effect = parse_adjustment(block("brit", pack("2hHBx", 40, -20, 100, 1)))
    assert effect == BrightnessContrast(
        brightness=40, contrast=-20, mean=100, lab_only=True, use_legacy=True
    )


def test_brightness_contrast_out_of_range():
    effect = parse_adjustment(block("brit", pack("2hHBx", 300, 0, 127, 0)))
    assert effect.brightness == 150.0


def test_empty_payload():
    effect = parse_adjustment(block("brit"))
    assert effect == BrightnessContrast()


def test_undecoded_layout():
    assert parse_adjustment(block("clrL", b"\x00" * 16)) == ColorLookup()


def test_non_adjustment_tag():
    assert parse_adjustment(block("GBlr")) is None


@pytest.mark.parametrize("key", ["hue2", "hue "])
def test_hue_saturation(key):
    items = [[(0, 0, 0, 0), (0, 0, 0)] for _ in range(6)]
    data = psd_adjustments.HueSaturation(
        2, 0, (0, 25, 0), (15, -30, 10), items
    ).tobytes()
    effect = parse_adjustment(block(key, data))
    assert effect == HueSaturation(hue=15, saturation=-30, lightness=10)


def test_hue_saturation_colorize():
    items = [[(0, 0, 0, 0), (0, 0, 0)] for _ in range(6)]
    data = psd_adjustments.HueSaturation(2, 1, (120, 25, 0), (0, 0, 0), items).tobytes()
    effect = parse_adjustment(block("hue2", data))
    assert effect.colorize is True
    assert effect.hue == 120.0
    assert effect.saturation == 25.0


def test_color_balance():
    data = psd_adjustments.ColorBalance(
        (1, 2, 3), (15, 0, 10), (-1, -2, -3), False
    ).tobytes()
    effect = parse_adjustment(block("blnc", data))
    assert effect == ColorBalance(
        cyan_red=15,
        yellow_blue=10,
        shadows=(1, 2, 3),
        highlights=(-1, -2, -3),
        preserve_luminosity=False,
    )


def test_curves():
    data = psd_adjustments.Curves(
        False, 4, 2, [[(0, 0), (255, 255)], [(255, 0), (0, 255)]]
    ).tobytes()
    effect = parse_adjustment(block("curv", data))
    assert isinstance(effect, Curves)
    assert effect.rgb == [(0.0, 0.0), (1.0, 1.0)]
    assert effect.red == [(0.0, 1.0), (1.0, 0.0)]
    assert effect.green == []


def test_levels():
    records = [psd_adjustments.LevelRecord(10, 240, 5, 250, 150)]
    data = psd_adjustments.Levels(version=2, items=records).tobytes()
    effect = parse_adjustment(block("levl", data))
    assert effect == Levels(
        input_black=10,
        input_white=240,
        input_gamma=1.5,
        output_black=5,
        output_white=250,
    )


def test_photo_filter():
    data = psd_adjustments.PhotoFilter(
        version=2, color=PsdColor(values=[65535, 0, 0, 0]), density=40, luminosity=0
    ).tobytes()
    effect = parse_adjustment(block("phfl", data))
    assert isinstance(effect, PhotoFilter)
    assert effect.filter_color.to_tuple() == (1.0, 0.0, 0.0, 1.0)
    assert effect.density == 40.0
    assert effect.preserve_luminosity is False


def test_channel_mixer():
    data = pack("2H5h5h", 1, 0, 80, 20, 0, 0, 5, 0, 100, 0, 0, 0)
    effect = parse_adjustment(block("mixr", data))
    assert effect == ChannelMixer(
        red=(80, 20, 0, 5), green=(0, 100, 0, 0), blue=(0, 0, 100, 0)
    )


def test_exposure():
    data = psd_adjustments.Exposure(1, 2.0, 0.25, 1.5).tobytes()
    assert parse_adjustment(block("expA", data)) == Exposure(
        exposure=2.0, offset=0.25, gamma=1.5
    )


def test_vibrance():
    data = filter_settings((b"vibrance", Double(30)), (b"Strt", Double(-10)))
    assert parse_adjustment(block("vibA", data)) == Vibrance(
        vibrance=30, saturation=-10
    )


def test_object_based_effects():
    data = lfx2(
        [
            (
                b"DrSh",
                effect_descriptor(
                    b"DrSh",
                    (b"enab", Bool(True)),
                    (b"Md  ", blend(b"Mltp")),
                    (b"Clr ", rgb(255.0, 0.0, 0.0)),
                    (b"Opct", percent(75.0)),
                    (b"lagl", Double(90.0)),
                    (b"Dstn", pixels(8.0)),
                    (b"Ckmt", pixels(10.0)),
                    (b"blur", pixels(4.0)),
                ),
            ),
            (
                b"FrFX",
                effect_descriptor(
                    b"FrFX",
                    (b"enab", Bool(False)),
                    (b"Styl", Enumerated(b"FStl", b"InsF")),
                    (b"Sz  ", pixels(2.0)),
                ),
            ),
            (
                b"OrGl",
                effect_descriptor(b"OrGl", (b"enab", Bool(True)), (b"present", Bool(False))),
            ),
        ]
    )
    effects = parse_style(block("lfx2", data))
    assert [e.name for e in effects] == ["DropShadow", "Stroke"]
    shadow, stroke = effects
    assert shadow == DropShadow(
        color=shadow.color,
        blend_mode=BlendMode.MULTIPLY,
        opacity=0.75,
        angle=90.0,
        distance=8.0,
        spread=10.0,
        size=4.0,
    )
    assert shadow.color.to_tuple() == (1.0, 0.0, 0.0, 1.0)
    assert stroke.enabled is False
    assert stroke.position == StrokePosition.INSIDE
    assert stroke.size == 2.0


def test_object_based_effects_master_switch():
    data = lfx2(
        [(b"SoFi", effect_descriptor(b"SoFi", (b"enab", Bool(True))))],
        master=False,
    )
    effects = parse_style(block("lfx2", data))
    assert len(effects) == 1
    assert isinstance(effects[0], ColorOverlay)
    assert effects[0].enabled is False


def test_object_based_effects_multi():
    shadows = List(
        [
            effect_descriptor(b"DrSh", (b"enab", Bool(True)), (b"Dstn", pixels(1.0))),
            effect_descriptor(b"DrSh", (b"enab", Bool(True)), (b"Dstn", pixels(2.0))),
        ]
    )
    effects = parse_style(block("lfx2", lfx2([(b"dropShadowMulti", shadows)])))
    assert [e.distance for e in effects] == [1.0, 2.0]


def test_object_based_effects_variants():
    gradient = Descriptor(
        classID=b"Grdn",
        items=[
            (
                b"Clrs",
                List(
                    [
                        Descriptor(classID=b"Clrt", items=[(b"Clr ", rgb(0, 0, 0))]),
                        Descriptor(
                            classID=b"Clrt", items=[(b"Clr ", rgb(255, 255, 255))]
                        ),
                    ]
                ),
            )
        ],
    )
    pattern = Descriptor(classID=b"Ptrn", items=[(b"Nm  ", String("Dots"))])
    data = lfx2(
        [
            (
                b"IrGl",
                effect_descriptor(
                    b"IrGl", (b"glwS", Enumerated(b"IGSr", b"SrcC"))
                ),
            ),
            (b"GrFl", effect_descriptor(b"GrFl", (b"Grad", gradient))),
            (b"patternFill", effect_descriptor(b"patternFill", (b"Ptrn", pattern))),
            (
                b"ebbl",
                effect_descriptor(
                    b"ebbl",
                    (b"bvlS", Enumerated(b"BESl", b"PlEb")),
                    (b"hglM", blend(b"Scrn")),
                ),
            ),
            (b"ChFX", effect_descriptor(b"ChFX", (b"Invr", Bool(False)))),
            (b"Sprk", effect_descriptor(b"Sprk")),
        ]
    )
    effects = parse_style(block("lfx2", data))
    assert [type(e) for e in effects] == [
        InnerGlow,
        GradientOverlay,
        PatternOverlay,
        Emboss,
        Satin,
    ]
    glow, gradient_overlay, pattern_overlay, emboss, satin = effects
    assert glow.source == GlowSource.CENTER
    assert [c.to_tuple() for c in gradient_overlay.colors] == [
        (0.0, 0.0, 0.0, 1.0),
        (1.0, 1.0, 1.0, 1.0),
    ]
    assert pattern_overlay.pattern_name == "Dots"
    assert emboss.style == BevelStyle.PILLOW
    assert emboss.blend_mode == BlendMode.SCREEN
    assert satin.invert is False


def test_undecodable_style(caplog):
    with caplog.at_level(logging.WARNING):
        assert parse_style(block("lfx2", b"\x00\x00\x00\x00")) is None
    assert "lfx2" in caplog.text
    assert parse_block(block("lfx2", b"\x00")) == []


@pytest.mark.parametrize(
    "effect",
    [
        effect_descriptor(b"DrSh", (b"Clr ", percent(50.0))),
        effect_descriptor(b"SoFi", (b"Md  ", Integer(1))),
        effect_descriptor(b"GrFl", (b"Grad", String("Black, White"))),
        effect_descriptor(
            b"GrFl",
            (b"Grad", Descriptor(classID=b"Grdn", items=[(b"Clrs", Integer(2))])),
        ),
        effect_descriptor(
            b"GrFl",
            (
                b"Grad",
                Descriptor(classID=b"Grdn", items=[(b"Clrs", List([Integer(0)]))]),
            ),
        ),
        effect_descriptor(b"patternFill", (b"Ptrn", Integer(7))),
        effect_descriptor(
            b"patternFill",
            (b"Ptrn", Descriptor(classID=b"Ptrn", items=[(b"Nm  ", Integer(7))])),
        ),
        effect_descriptor(b"IrGl", (b"glwS", Double(1.0))),
    ],
)
def test_style_with_wrong_item_types(effect, caplog):
    with caplog.at_level(logging.WARNING):
        assert parse_style(block("lfx2", lfx2([(effect.classID, effect)]))) is None
    assert "lfx2" in caplog.text


def test_legacy_effects_layer():
    data = EffectsLayer(
        version=0,
        items=[
            (EffectOSType.COMMON_STATE, CommonStateInfo()),
            (
                EffectOSType.DROP_SHADOW,
                ShadowInfo(
                    distance=7,
                    blur=3,
                    angle=90,
                    opacity=255,
                    color=PsdColor(values=[0, 0, 65535, 0]),
                ),
            ),
            (EffectOSType.OUTER_GLOW, GlowInfo(native_color=PsdColor(), enabled=0)),
            (EffectOSType.BEVEL, BevelInfo(bevel_style=1)),
            (EffectOSType.SOLID_FILL, SolidFillInfo(opacity=51)),
        ],
    ).tobytes()
    effects = parse_style(block("lrFX", data))
    assert [type(e) for e in effects] == [DropShadow, OuterGlow, Bevel, ColorOverlay]
    shadow, glow, bevel, fill = effects
    assert shadow.distance == 7.0
    assert shadow.size == 3.0
    assert shadow.opacity == 1.0
    assert shadow.blend_mode == BlendMode.MULTIPLY
    assert shadow.color.to_tuple() == (0.0, 0.0, 1.0, 1.0)
    assert glow.enabled is False
    assert bevel.style == BevelStyle.OUTER
    assert fill.opacity == pytest.approx(0.2)


def test_legacy_effects_layer_hidden():
    data = EffectsLayer(
        version=0,
        items=[
            (EffectOSType.COMMON_STATE, CommonStateInfo(visible=0)),
            (EffectOSType.INNER_GLOW, GlowInfo(invert=0, native_color=PsdColor())),
        ],
    ).tobytes()
    effects = parse_style(block("lrFX", data))
    assert len(effects) == 1
    assert isinstance(effects[0], InnerGlow)
    assert effects[0].enabled is False


@pytest.mark.parametrize(
    "key, kls, attrs",
    [
        ("GBlr", smart_filters.GaussianBlur, {"radius": 2.0}),
        ("MBlr", smart_filters.MotionBlur, {"distance": 5.0}),
        ("Shrp", smart_filters.Sharpen, {"amount": 50.0}),
        ("Nois", smart_filters.Noise, {"amount": 10.0}),
        ("Embs", smart_filters.Emboss, {"angle": 135.0, "height": 3.0}),
        ("HiPs", smart_filters.HighPass, {"radius": 10.0}),
        ("Wave", smart_filters.WaveDistortion, {"amplitude": 10.0}),
        ("Pnch", smart_filters.Distort, {"style": DistortStyle.PINCH}),
        ("FndE", smart_filters.FindEdges, {}),
    ],
)
def test_smart_filter_defaults(key, kls, attrs):
    effect = parse_smart_filter(block(key))
    assert isinstance(effect, kls)
    for name, value in attrs.items():
        assert getattr(effect, name) == value


def test_smart_filter_settings():
    data = filter_settings((b"Rds ", pixels(6.5)))
    assert parse_smart_filter(block("GBlr", data)).radius == 6.5

    data = filter_settings(
        (b"Nose", percent(30.0)),
        (b"Dstr", Enumerated(b"Dstr", b"Gsn ")),
        (b"Mnch", Bool(True)),
    )
    effect = parse_smart_filter(block("Nois", data))
    assert effect.amount == 30.0
    assert effect.distribution == NoiseDistribution.GAUSSIAN
    assert effect.monochromatic is True


def test_smart_filter_ignores_foreign_keys():
    data = filter_settings((b"Rds ", pixels(6.5)), (b"Hght", Double(4.0)))
    effect = parse_smart_filter(block("GBlr", data))
    assert effect.radius == 6.5


def test_undecodable_smart_filter(caplog):
    with caplog.at_level(logging.WARNING):
        effect = parse_smart_filter(block("MBlr", b"\x00\x00"))
    assert effect == smart_filters.MotionBlur(distance=5.0)
    assert "MBlr" in caplog.text


def test_unknown_filter_enum(caplog):
    data = filter_settings((b"Dstr", Enumerated(b"Dstr", b"Blue")))
    with caplog.at_level(logging.WARNING):
        effect = parse_smart_filter(block("Nois", data))
    assert effect == smart_filters.Noise(amount=10.0)


def test_parse_block_routing():
    assert [e.name for e in parse_block(block("HiPs"))] == ["HighPass"]
    assert [e.name for e in parse_block(block("vibA"))] == ["Vibrance"]
    assert parse_block(block("lfx2", lfx2([]))) == []
