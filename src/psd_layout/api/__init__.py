"""
High-level API for layer trees and their effects.

This subpackage turns the flat layer records handed over by a document
reader into a tree, and exposes the effects of each layer as typed
catalogs. It wraps the low-level :py:mod:`psd_layout.psd` binary
structures.

Key modules:

- :py:mod:`psd_layout.api.layers`: Layer records and tagged blocks
- :py:mod:`psd_layout.api.tree`: Layer tree reconstruction
- :py:mod:`psd_layout.api.effects`: Layer styles (shadows, glows, etc.)
- :py:mod:`psd_layout.api.adjustments`: Adjustment effects
- :py:mod:`psd_layout.api.smart_filters`: Smart filter effects
- :py:mod:`psd_layout.api.catalog`: Per-family effect catalogs
- :py:mod:`psd_layout.api.dispatch`: Tag dispatch and block decoding
- :py:mod:`psd_layout.api.heuristics`: Layer name heuristics
- :py:mod:`psd_layout.api.pipeline`: Effect population over a tree

Example usage::

    from psd_layout.api.pipeline import apply_effects
    from psd_layout.api.tree import build_tree

    roots = build_tree(records)
    apply_effects(roots)
    for layer in roots:
        print(layer.name, list(layer.styles))
"""
