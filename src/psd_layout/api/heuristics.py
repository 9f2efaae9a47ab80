"""
Name heuristics.

Designers often name layers after the effect they want, e.g.
``"Title shadow"`` or ``"bg blur heavy"``. When a file carries no decodable
data for an effect, the layer name is the only hint left. The rules below
match lower-cased substrings of the name and insert an effect only when the
catalog has none of that exact variant yet, so decoded effects always take
precedence and running the rules twice changes nothing.
"""

import logging
from typing import Callable, Dict, Optional

from psd_layout.api import smart_filters
from psd_layout.api.adjustments import BrightnessContrast, ColorBalance, HueSaturation
from psd_layout.api.catalog import EffectCatalog
from psd_layout.api.effects import (
    Color,
    ColorOverlay,
    DropShadow,
    Effect,
    OuterGlow,
    Stroke,
)
from psd_layout.constants import EffectFamily, StrokePosition

logger = logging.getLogger(__name__)

BRIGHTNESS_CUES = ("brightness", "contrast", "bright+", "bright-")
SATURATION_CUES = ("saturation", "hue", "saturate+", "saturate-", "desaturate")
COLOR_BALANCE_CUES = ("warm", "cool", "tint")

SHADOW_CUES = ("shadow", "drop")
GLOW_CUES = ("glow",)
STROKE_CUES = ("stroke", "outline")
OVERLAY_CUES = ("overlay", "tint")

BLUR_CUES = ("blur",)
SHARPEN_CUES = ("sharpen",)
NOISE_CUES = ("noise",)
EMBOSS_CUES = ("emboss",)
HIGH_PASS_CUES = ("highpass",)


def _matches(name: str, cues: tuple) -> bool:
    return any(cue in name for cue in cues)


def _insert(catalog: EffectCatalog, effect: Effect, name: str) -> None:
    if catalog.has_effect(effect.kind):
        return
    logger.debug("Adding %s to %r from its name", effect.name, name)
    catalog.add_effect(effect)


def _signed(name: str, positive: str, negatives: tuple, amount: float) -> float:
    if positive in name:
        return amount
    if _matches(name, negatives):
        return -amount
    return 0.0


def augment_adjustments(name: str, catalog: EffectCatalog) -> None:
    """Insert adjustments hinted by the lower-cased layer `name`."""
    if _matches(name, BRIGHTNESS_CUES):
        _insert(
            catalog,
            BrightnessContrast(
                brightness=_signed(name, "bright+", ("bright-",), 20.0),
                contrast=_signed(name, "contrast+", ("contrast-",), 20.0),
            ),
            name,
        )
    if _matches(name, SATURATION_CUES):
        _insert(
            catalog,
            HueSaturation(
                saturation=_signed(
                    name, "saturate+", ("desaturate", "saturate-"), 25.0
                ),
            ),
            name,
        )
    if _matches(name, COLOR_BALANCE_CUES):
        if "warm" in name:
            effect = ColorBalance(cyan_red=15.0, yellow_blue=10.0)
        elif "cool" in name:
            effect = ColorBalance(cyan_red=-15.0, yellow_blue=-10.0)
        else:
            effect = ColorBalance()
        _insert(catalog, effect, name)


def augment_styles(name: str, catalog: EffectCatalog) -> None:
    """Insert layer styles hinted by the lower-cased layer `name`."""
    if _matches(name, SHADOW_CUES):
        _insert(
            catalog,
            DropShadow(
                color=Color.black(0.6),
                distance=3.0,
                angle=135.0,
                size=3.0,
                opacity=0.6,
            ),
            name,
        )
    if _matches(name, GLOW_CUES):
        _insert(
            catalog,
            OuterGlow(color=Color.yellow(0.8), size=5.0, opacity=0.8),
            name,
        )
    if _matches(name, STROKE_CUES):
        _insert(
            catalog,
            Stroke(
                color=Color.black(),
                size=2.0,
                position=StrokePosition.OUTSIDE,
                opacity=1.0,
            ),
            name,
        )
    if _matches(name, OVERLAY_CUES):
        _insert(
            catalog,
            ColorOverlay(color=Color.red(0.5), opacity=0.5),
            name,
        )


def augment_smart_filters(name: str, catalog: EffectCatalog) -> None:
    """Insert smart filters hinted by the lower-cased layer `name`."""
    if _matches(name, BLUR_CUES):
        if "motion" in name:
            effect: Effect = smart_filters.MotionBlur(distance=5.0)
        elif "radial" in name:
            effect = smart_filters.RadialBlur(amount=10.0)
        elif _matches(name, ("heavy", "strong")):
            effect = smart_filters.GaussianBlur(radius=5.0)
        elif _matches(name, ("light", "subtle")):
            effect = smart_filters.GaussianBlur(radius=1.0)
        else:
            effect = smart_filters.GaussianBlur(radius=2.0)
        _insert(catalog, effect, name)
    if _matches(name, SHARPEN_CUES):
        if "unsharp" in name:
            effect = smart_filters.UnsharpMask(amount=50.0, radius=1.0)
        else:
            effect = smart_filters.Sharpen(amount=50.0)
        _insert(catalog, effect, name)
    if _matches(name, NOISE_CUES):
        if "heavy" in name:
            amount = 25.0
        elif "light" in name:
            amount = 5.0
        else:
            amount = 10.0
        _insert(catalog, smart_filters.Noise(amount=amount), name)
    if _matches(name, EMBOSS_CUES):
        _insert(
            catalog,
            smart_filters.Emboss(angle=135.0, height=3.0, amount=100.0),
            name,
        )
    if _matches(name, HIGH_PASS_CUES):
        _insert(catalog, smart_filters.HighPass(radius=10.0), name)


_AUGMENTERS: Dict[EffectFamily, Callable[[str, EffectCatalog], None]] = {
    EffectFamily.ADJUSTMENT: augment_adjustments,
    EffectFamily.STYLE: augment_styles,
    EffectFamily.SMART_FILTER: augment_smart_filters,
}


def augment(name: Optional[str], catalog: EffectCatalog) -> None:
    """
    Insert the effects hinted by a layer name into `catalog`, in place.

    The rules of the catalog's family are applied. An effect is only added
    when the catalog holds no effect of the same variant.

    :param name: layer name, matched case-insensitively.
    :param catalog: :py:class:`~psd_layout.api.catalog.EffectCatalog`.
    :raise TypeError: if `catalog` is not an effect catalog.
    """
    if not isinstance(catalog, EffectCatalog):
        raise TypeError("Expected an EffectCatalog, got %r" % (catalog,))
    _AUGMENTERS[catalog.family]((name or "").lower(), catalog)
