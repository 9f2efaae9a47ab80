"""
Various constants for psd_layout
"""

import logging
from enum import Enum, IntEnum
from typing import Union

logger = logging.getLogger(__name__)

#: Substrings in a layer name marking the end of a layer group.
END_GROUP_MARKERS = ("</Layer set>", "</Layer group>")

#: Exact layer name some producers emit for a zero-height end-of-group layer.
END_GROUP_PLACEHOLDER = " copy"


class ColorSpaceID(IntEnum):
    """
    Color space types.
    """

    RGB = 0
    HSB = 1
    CMYK = 2
    LAB = 7
    GRAYSCALE = 8


class BlendMode(Enum):
    """
    Blend modes.
    """

    PASS_THROUGH = b"pass"
    NORMAL = b"norm"
    DISSOLVE = b"diss"
    DARKEN = b"dark"
    MULTIPLY = b"mul "
    COLOR_BURN = b"idiv"
    LINEAR_BURN = b"lbrn"
    DARKER_COLOR = b"dkCl"
    LIGHTEN = b"lite"
    SCREEN = b"scrn"
    COLOR_DODGE = b"div "
    LINEAR_DODGE = b"lddg"
    LIGHTER_COLOR = b"lgCl"
    OVERLAY = b"over"
    SOFT_LIGHT = b"sLit"
    HARD_LIGHT = b"hLit"
    VIVID_LIGHT = b"vLit"
    LINEAR_LIGHT = b"lLit"
    PIN_LIGHT = b"pLit"
    HARD_MIX = b"hMix"
    DIFFERENCE = b"diff"
    EXCLUSION = b"smud"
    SUBTRACT = b"fsub"
    DIVIDE = b"fdiv"
    HUE = b"hue "
    SATURATION = b"sat "
    COLOR = b"colr"
    LUMINOSITY = b"lum "

    @classmethod
    def from_key(cls, key: Union[str, bytes, "BlendMode", None]) -> "BlendMode":
        """
        Convert a 4-character blend mode key, or a descriptor blend mode
        enum, to :py:class:`BlendMode`.

        Unknown keys fall back to :py:attr:`NORMAL`.
        """
        if isinstance(key, cls):
            return key
        if key is None:
            return cls.NORMAL
        if isinstance(key, str):
            key = key.encode("ascii", "replace")
        try:
            return cls(key)
        except ValueError:
            pass
        mode = DESCRIPTOR_BLEND_MODES.get(key)
        if mode is None:
            logger.warning("Unsupported blend mode: %r, defaulting to normal", key)
            return cls.NORMAL
        return mode


#: Descriptor enum values (``BlnM`` type) used in object-based effects.
DESCRIPTOR_BLEND_MODES = {
    b"passThrough": BlendMode.PASS_THROUGH,
    b"Nrml": BlendMode.NORMAL,
    b"Dslv": BlendMode.DISSOLVE,
    b"Drkn": BlendMode.DARKEN,
    b"Mltp": BlendMode.MULTIPLY,
    b"CBrn": BlendMode.COLOR_BURN,
    b"linearBurn": BlendMode.LINEAR_BURN,
    b"darkerColor": BlendMode.DARKER_COLOR,
    b"Lghn": BlendMode.LIGHTEN,
    b"Scrn": BlendMode.SCREEN,
    b"CDdg": BlendMode.COLOR_DODGE,
    b"linearDodge": BlendMode.LINEAR_DODGE,
    b"lighterColor": BlendMode.LIGHTER_COLOR,
    b"Ovrl": BlendMode.OVERLAY,
    b"SftL": BlendMode.SOFT_LIGHT,
    b"HrdL": BlendMode.HARD_LIGHT,
    b"vividLight": BlendMode.VIVID_LIGHT,
    b"linearLight": BlendMode.LINEAR_LIGHT,
    b"pinLight": BlendMode.PIN_LIGHT,
    b"hardMix": BlendMode.HARD_MIX,
    b"Dfrn": BlendMode.DIFFERENCE,
    b"Xclu": BlendMode.EXCLUSION,
    b"blendSubtraction": BlendMode.SUBTRACT,
    b"blendDivide": BlendMode.DIVIDE,
    b"H   ": BlendMode.HUE,
    b"Strt": BlendMode.SATURATION,
    b"Clr ": BlendMode.COLOR,
    b"Lmns": BlendMode.LUMINOSITY,
}


class EffectFamily(Enum):
    """
    Independent families of effects attached to a layer.
    """

    ADJUSTMENT = "adjustment"
    STYLE = "style"
    SMART_FILTER = "smart_filter"


class Tag(Enum):
    """
    Tagged block keys found in a layer's additional information stream.

    Keys are grouped by the effect family that consumes them. Keys that carry
    no effect are listed so that they are skipped quietly.
    """

    # Adjustment layers.
    BRIGHTNESS_AND_CONTRAST = b"brit"
    HUE_SATURATION = b"hue "
    HUE_SATURATION_V4 = b"hue2"
    COLOR_BALANCE = b"blnc"
    CURVES = b"curv"
    LEVELS = b"levl"
    PHOTO_FILTER = b"phfl"
    CHANNEL_MIXER = b"mixr"
    COLOR_LOOKUP = b"clrL"
    VIBRANCE = b"vibA"
    EXPOSURE = b"expA"

    # Layer styles, several effects per block.
    EFFECTS_LAYER = b"lrFX"
    OBJECT_BASED_EFFECTS_LAYER_INFO = b"lfx2"
    OBJECT_BASED_EFFECTS_LAYER_INFO_V0 = b"lmfx"  # Undocumented.
    OBJECT_BASED_EFFECTS_LAYER_INFO_V1 = b"lfxs"  # Undocumented.

    # Smart filters.
    GAUSSIAN_BLUR = b"GBlr"
    MOTION_BLUR = b"MBlr"
    RADIAL_BLUR = b"RBlr"
    SHARPEN = b"Shrp"
    UNSHARP_MASK = b"USMk"
    ADD_NOISE = b"Nois"
    EMBOSS = b"Embs"
    HIGH_PASS = b"HiPs"
    WAVE = b"Wave"
    FIND_EDGES = b"FndE"
    LIQUIFY = b"LqFy"
    POSTERIZE_FILTER = b"Pstr"
    SOLARIZE = b"Slrz"
    TWIRL = b"Twrl"
    PINCH = b"Pnch"
    ZIGZAG = b"ZgZg"
    SPHERIZE = b"Sphr"

    # No effect content.
    BLEND_CLIPPING_ELEMENTS = b"clbl"
    BLEND_FILL_OPACITY = b"iOpa"  # Undocumented.
    BLEND_INTERIOR_ELEMENTS = b"infx"
    CHANNEL_BLENDING_RESTRICTIONS_SETTING = b"brst"
    FILTER_EFFECTS1 = b"FXid"
    FILTER_EFFECTS2 = b"FEid"
    FILTER_MASK = b"FMsk"
    KNOCKOUT_SETTING = b"knko"
    LAYER_ID = b"lyid"
    LAYER_NAME_SOURCE_SETTING = b"lnsr"
    LAYER_VERSION = b"lyvr"
    METADATA_SETTING = b"shmd"
    NESTED_SECTION_DIVIDER_SETTING = b"lsdk"
    PLACED_LAYER1 = b"plLd"
    PLACED_LAYER2 = b"PlLd"
    PROTECTED_SETTING = b"lspf"
    REFERENCE_POINT = b"fxrp"
    SECTION_DIVIDER_SETTING = b"lsct"
    SHEET_COLOR_SETTING = b"lclr"
    SMART_OBJECT_LAYER_DATA1 = b"SoLd"
    SMART_OBJECT_LAYER_DATA2 = b"SoLE"
    TYPE_TOOL_INFO = b"tySh"
    TYPE_TOOL_OBJECT_SETTING = b"TySh"
    UNICODE_LAYER_NAME = b"luni"
    USER_MASK = b"LMsk"
    VECTOR_MASK_SETTING1 = b"vmsk"
    VECTOR_MASK_SETTING2 = b"vsms"
    VECTOR_ORIGINATION_DATA = b"vogk"


class AdjustmentKind(Enum):
    """
    Adjustment layer variants.
    """

    BRIGHTNESS_CONTRAST = "BrightnessContrast"
    HUE_SATURATION = "HueSaturation"
    COLOR_BALANCE = "ColorBalance"
    CURVES = "Curves"
    LEVELS = "Levels"
    PHOTO_FILTER = "PhotoFilter"
    CHANNEL_MIXER = "ChannelMixer"
    COLOR_LOOKUP = "ColorLookup"
    VIBRANCE = "Vibrance"
    EXPOSURE = "Exposure"


class StyleKind(Enum):
    """
    Layer style variants.
    """

    DROP_SHADOW = "DropShadow"
    INNER_SHADOW = "InnerShadow"
    OUTER_GLOW = "OuterGlow"
    INNER_GLOW = "InnerGlow"
    STROKE = "Stroke"
    COLOR_OVERLAY = "ColorOverlay"
    GRADIENT_OVERLAY = "GradientOverlay"
    PATTERN_OVERLAY = "PatternOverlay"
    BEVEL = "Bevel"
    EMBOSS = "Emboss"
    SATIN = "Satin"


class FilterKind(Enum):
    """
    Smart filter variants.
    """

    GAUSSIAN_BLUR = "GaussianBlur"
    MOTION_BLUR = "MotionBlur"
    RADIAL_BLUR = "RadialBlur"
    SHARPEN = "Sharpen"
    UNSHARP_MASK = "UnsharpMask"
    NOISE = "Noise"
    DISTORT = "Distort"
    EMBOSS = "Emboss"
    FIND_EDGES = "FindEdges"
    HIGH_PASS = "HighPass"
    LIQUIFY = "Liquify"
    OIL_PAINT = "OilPaint"
    POSTERIZE = "Posterize"
    SOLARIZE = "Solarize"
    WAVE_DISTORTION = "WaveDistortion"


class EffectOSType(Enum):
    """
    OS Type keys for legacy Layer Effects.
    """

    COMMON_STATE = b"cmnS"
    DROP_SHADOW = b"dsdw"
    INNER_SHADOW = b"isdw"
    OUTER_GLOW = b"oglw"
    INNER_GLOW = b"iglw"
    BEVEL = b"bevl"
    SOLID_FILL = b"sofi"


class OSType(Enum):
    """
    Descriptor OSTypes.
    """

    REFERENCE = b"obj "
    DESCRIPTOR = b"Objc"
    LIST = b"VlLs"
    DOUBLE = b"doub"
    UNIT_FLOAT = b"UntF"
    UNIT_FLOATS = b"UnFl"  # Undocumented
    STRING = b"TEXT"
    ENUMERATED = b"enum"
    INTEGER = b"long"
    LARGE_INTEGER = b"comp"
    BOOLEAN = b"bool"
    GLOBAL_OBJECT = b"GlbO"
    CLASS1 = b"type"
    CLASS2 = b"GlbC"
    ALIAS = b"alis"
    RAW_DATA = b"tdta"
    OBJECT_ARRAY = b"ObAr"  # Undocumented


class StrokePosition(Enum):
    OUTSIDE = "outside"
    INSIDE = "inside"
    CENTER = "center"


class GlowSource(Enum):
    EDGE = "edge"
    CENTER = "center"


class BevelStyle(Enum):
    INNER = "inner"
    OUTER = "outer"
    EMBOSS = "emboss"
    PILLOW = "pillow"
    STROKE = "stroke"


class RadialBlurMethod(Enum):
    SPIN = "spin"
    ZOOM = "zoom"


class NoiseDistribution(Enum):
    UNIFORM = "uniform"
    GAUSSIAN = "gaussian"


class DistortStyle(Enum):
    TWIRL = "twirl"
    PINCH = "pinch"
    ZIGZAG = "zigzag"
    SPHERIZE = "spherize"
