"""
Binary payloads of the tagged blocks that carry layer effects.

Each structure derives from :py:class:`psd_layout.psd.base.BaseElement`
and round-trips through :py:meth:`frombytes` and :py:meth:`tobytes`.
"""

from .adjustments import ADJUSTMENT_TYPES as ADJUSTMENT_TYPES
from .descriptor import (
    Descriptor as Descriptor,
    DescriptorBlock as DescriptorBlock,
    DescriptorBlock2 as DescriptorBlock2,
)
from .effects_layer import EffectsLayer as EffectsLayer

__all__ = [
    "ADJUSTMENT_TYPES",
    "Descriptor",
    "DescriptorBlock",
    "DescriptorBlock2",
    "EffectsLayer",
]
