"""
psd-layout: layer tree and effect catalogs for Photoshop layer records.

Document readers expose layers as a flat, back-to-front list of records
with group markers and raw tagged blocks. This package rebuilds the group
hierarchy and decodes the tagged blocks into typed adjustments, layer
styles and smart filters.

Basic usage::

    from psd_layout import LayerRecord, apply_effects, build_tree

    records = [LayerRecord.from_dict(item) for item in dump["layers"]]
    roots = build_tree(records)
    apply_effects(roots)

    for layer in roots:
        print(layer.name)
        for effect in layer.styles:
            print("  ", effect)

Architecture:

- :py:mod:`psd_layout.psd`: Low-level binary structures of tagged blocks
- :py:mod:`psd_layout.api`: Layer tree and effect catalogs (primary interface)
"""

from psd_layout.api.catalog import EffectCatalog
from psd_layout.api.dispatch import parse_block
from psd_layout.api.heuristics import augment
from psd_layout.api.layers import LayerRecord, Rect, TaggedBlock
from psd_layout.api.pipeline import apply_effects, populate_effects
from psd_layout.api.tree import build_tree
from psd_layout.version import __version__

__all__ = [
    "EffectCatalog",
    "LayerRecord",
    "Rect",
    "TaggedBlock",
    "apply_effects",
    "augment",
    "build_tree",
    "parse_block",
    "populate_effects",
    "__version__",
]
