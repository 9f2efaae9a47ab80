import logging

import pytest

from psd_layout.api import smart_filters
from psd_layout.api.adjustments import BrightnessContrast
from psd_layout.api.catalog import EffectCatalog
from psd_layout.api.effects import DropShadow, OuterGlow, Stroke
from psd_layout.constants import AdjustmentKind, EffectFamily, FilterKind, StyleKind

logger = logging.getLogger(__name__)


@pytest.fixture
def styles():
    return EffectCatalog(
        EffectFamily.STYLE,
        [DropShadow(distance=1), OuterGlow(), DropShadow(distance=2, enabled=False)],
    )


def test_empty_catalog():
    catalog = EffectCatalog(EffectFamily.ADJUSTMENT)
    assert len(catalog) == 0
    assert not catalog
    assert not catalog.has_any_effects
    assert catalog.get_effect(BrightnessContrast) is None
    assert catalog.get_effects(BrightnessContrast) == []
    assert not catalog.has_effect(AdjustmentKind.LEVELS)


def test_insertion_order(styles):
    assert len(styles) == 3
    assert styles.has_any_effects
    assert [e.name for e in styles] == ["DropShadow", "OuterGlow", "DropShadow"]
    assert styles[1].kind == StyleKind.OUTER_GLOW
    assert styles.kinds() == [StyleKind.DROP_SHADOW, StyleKind.OUTER_GLOW]


def test_get_effect_first_match(styles):
    assert styles.get_effect(DropShadow).distance == 1.0
    assert [e.distance for e in styles.get_effects(DropShadow)] == [1.0, 2.0]


@pytest.mark.parametrize(
    "kind", [DropShadow, StyleKind.DROP_SHADOW, "DropShadow", "dropshadow"]
)
def test_resolve(styles, kind):
    assert styles.has_effect(kind)


def test_missing_kind(styles):
    assert styles.get_effect(Stroke) is None
    assert not styles.has_effect("Stroke")


def test_unknown_name(styles):
    with pytest.raises(KeyError):
        styles.get_effect("Sparkle")


def test_wrong_family_kind(styles):
    with pytest.raises(TypeError):
        styles.get_effect(FilterKind.EMBOSS)
    with pytest.raises(TypeError):
        styles.has_effect(smart_filters.Emboss)


def test_wrong_family_effect(styles):
    with pytest.raises(TypeError):
        styles.add_effect(smart_filters.GaussianBlur())
    with pytest.raises(TypeError):
        styles.add_effect("DropShadow")
    assert len(styles) == 3


def test_find(styles):
    assert len(list(styles.find("DropShadow"))) == 1
    assert len(list(styles.find("DropShadow", enabled=False))) == 2
    assert list(styles.find("Sparkle")) == []


def test_same_name_across_families():
    filters = EffectCatalog(EffectFamily.SMART_FILTER, [smart_filters.Emboss()])
    assert filters.has_effect("Emboss")
    assert filters.get_effect("emboss").kind == FilterKind.EMBOSS


def test_repr(styles):
    assert repr(styles) == "EffectCatalog(DropShadow OuterGlow DropShadow)"
