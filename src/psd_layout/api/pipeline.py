"""
Effect population.

For each layer the tagged blocks are decoded first, then the name heuristics
fill the gaps. The functions here hold no global state, so separate
documents may be processed on separate workers.
"""

import logging
from typing import Dict, Iterable

from psd_layout.api.catalog import EffectCatalog
from psd_layout.api.dispatch import (
    family_of,
    parse_adjustment,
    parse_smart_filter,
    parse_style,
    skip_block,
)
from psd_layout.api.heuristics import augment
from psd_layout.api.layers import LayerRecord
from psd_layout.constants import EffectFamily

logger = logging.getLogger(__name__)


def populate_effects(
    layer: LayerRecord, heuristics: bool = True
) -> Dict[str, EffectCatalog]:
    """
    Populate the effect catalogs of a layer.

    Catalogs are rebuilt from scratch on each call and stored on the layer.
    Among several layer style blocks, the first one that decodes wins.

    :param layer: :py:class:`~psd_layout.api.layers.LayerRecord`.
    :param heuristics: apply name heuristics after decoding.
    :return: dict of `adjustments`, `styles` and `smart_filters` catalogs.
    """
    adjustments = EffectCatalog(EffectFamily.ADJUSTMENT)
    styles = EffectCatalog(EffectFamily.STYLE)
    smart_filters = EffectCatalog(EffectFamily.SMART_FILTER)

    style_source = None
    for block in layer.blocks:
        family = family_of(block.key)
        if family == EffectFamily.ADJUSTMENT:
            effect = parse_adjustment(block, layer.name)
            if effect is not None:
                adjustments.add_effect(effect)
        elif family == EffectFamily.STYLE:
            if style_source is not None:
                logger.debug(
                    "Style already read from %r in layer %r, skipping %r",
                    style_source,
                    layer.name,
                    block.key,
                )
                continue
            effects = parse_style(block, layer.name)
            if effects is not None:
                style_source = block.key
                for effect in effects:
                    styles.add_effect(effect)
        elif family == EffectFamily.SMART_FILTER:
            effect = parse_smart_filter(block, layer.name)
            if effect is not None:
                smart_filters.add_effect(effect)
        else:
            skip_block(block, layer.name)

    if heuristics:
        for catalog in (adjustments, styles, smart_filters):
            augment(layer.name, catalog)

    catalogs = {
        "adjustments": adjustments,
        "styles": styles,
        "smart_filters": smart_filters,
    }
    layer._catalogs = catalogs
    return catalogs


def apply_effects(roots: Iterable[LayerRecord], heuristics: bool = True) -> None:
    """
    Populate the effect catalogs of every layer in a tree, depth first.

    :param roots: root records returned by
        :py:func:`~psd_layout.api.tree.build_tree`.
    """
    for layer in roots:
        populate_effects(layer, heuristics=heuristics)
        apply_effects(layer.children, heuristics=heuristics)
