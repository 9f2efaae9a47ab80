import logging

import numpy as np
import pytest

from psd_layout.api.adjustments import (
    ADJUSTMENT_VARIANTS,
    BrightnessContrast,
    ChannelMixer,
    ColorBalance,
    Curves,
    Levels,
)
from psd_layout.constants import AdjustmentKind, EffectFamily

logger = logging.getLogger(__name__)


def test_adjustment_variants():
    assert set(ADJUSTMENT_VARIANTS) == set(AdjustmentKind)
    for kind, kls in ADJUSTMENT_VARIANTS.items():
        effect = kls()
        assert effect.kind == kind
        assert effect.family == EffectFamily.ADJUSTMENT
        assert not hasattr(effect, "blend_mode")


def test_neutral_defaults():
    effect = BrightnessContrast()
    assert effect.brightness == 0.0
    assert effect.contrast == 0.0
    assert effect.use_legacy is False
    assert ChannelMixer().red == (100.0, 0.0, 0.0, 0.0)


def test_ranges():
    assert BrightnessContrast(brightness=500).brightness == 150.0
    assert BrightnessContrast(contrast=-500).contrast == -100.0
    assert ColorBalance(shadows=(200, -200, 0)).shadows == (100.0, -100.0, 0.0)
    assert Levels(input_gamma=0.0).input_gamma == 0.1


def test_tuple_size():
    with pytest.raises(ValueError):
        ColorBalance(shadows=(1, 2))


def test_curves_points_sorted_and_clamped():
    curves = Curves(rgb=[(1.0, 1.0), (0.0, -0.5), (0.5, 0.25)])
    assert curves.rgb == [(0.0, 0.0), (0.5, 0.25), (1.0, 1.0)]


def test_curves_lookup_table():
    identity = Curves().lookup_table()
    assert identity.dtype == np.uint8
    assert np.array_equal(identity, np.arange(256, dtype=np.uint8))

    inverted = Curves(red=[(0.0, 1.0), (1.0, 0.0)]).lookup_table("red")
    assert inverted[0] == 255
    assert inverted[255] == 0

    assert np.array_equal(
        Curves().lookup_table("blue"), np.arange(256, dtype=np.uint8)
    )


def test_levels_lookup_table():
    table = Levels().lookup_table()
    assert np.array_equal(table, np.arange(256, dtype=np.uint8))

    table = Levels(input_black=50, input_white=200).lookup_table()
    assert table[0] == 0
    assert table[50] == 0
    assert table[200] == 255
    assert table[255] == 255

    table = Levels(output_black=100, output_white=200).lookup_table()
    assert table[0] == 100
    assert table[255] == 200
