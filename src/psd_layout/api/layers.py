"""
Layer module.

A :py:class:`LayerRecord` is one entry of the flat layer stream handed over
by a document reader. After :py:func:`~psd_layout.api.tree.build_tree` the
same records carry their children, and each record lazily exposes three
effect catalogs.

Example usage::

    from psd_layout.api.tree import build_tree

    roots = build_tree(records)
    for layer in roots:
        print(layer.name, layer.is_group())
        if layer.styles.has_effect("DropShadow"):
            shadow = layer.styles.get_effect("DropShadow")

Common layer properties:

- ``name``: Layer name
- ``rect``: Bounding rectangle (x, y, width, height)
- ``visible``: Visibility flag
- ``opacity``: Opacity (0-255)
- ``blend_mode``: Blend mode enum
- ``blocks``: Raw tagged blocks
- ``children``: Child records, populated by the tree builder
"""

import base64
import logging
from typing import TYPE_CHECKING, Any, Dict, Iterator, Optional, Union

from attrs import define, field

from psd_layout.constants import BlendMode
from psd_layout.psd.bin_utils import trimmed_repr
from psd_layout.validators import range_

if TYPE_CHECKING:
    from psd_layout.api.catalog import EffectCatalog

logger = logging.getLogger(__name__)


def _to_key(value: Union[str, bytes]) -> bytes:
    if isinstance(value, str):
        value = value.encode("ascii")
    return bytes(value)


def _check_key(inst: Any, attr: Any, value: bytes) -> None:
    if len(value) != 4:
        raise ValueError("'%s' must be 4 bytes: %r" % (attr.name, value))


@define(frozen=True)
class Rect:
    """
    Bounding rectangle.

    .. py:attribute:: x
    .. py:attribute:: y
    .. py:attribute:: width
    .. py:attribute:: height
    """

    x: int = 0
    y: int = 0
    width: int = 0
    height: int = 0

    @property
    def bbox(self) -> tuple:
        """(left, top, right, bottom) tuple."""
        return (self.x, self.y, self.x + self.width, self.y + self.height)

    def is_degenerate(self) -> bool:
        """True if the rectangle covers no area."""
        return self.width <= 0 or self.height <= 0


def _to_rect(value: Any) -> Rect:
    if isinstance(value, Rect):
        return value
    return Rect(*value)


@define(repr=False)
class TaggedBlock:
    """
    Raw tagged block of a layer.

    .. py:attribute:: key

        4-character `bytes` tag, e.g. ``b"lfx2"``.

    .. py:attribute:: data

        Payload `bytes`.
    """

    key: bytes = field(converter=_to_key, validator=_check_key)
    data: bytes = field(default=b"", converter=bytes)

    def __repr__(self) -> str:
        return "TaggedBlock(%r, %s)" % (self.key, trimmed_repr(self.data))


@define(repr=False, eq=False)
class LayerRecord:
    """
    Layer record.

    Records compare by identity, so a tree never holds two equal-looking
    layers as the same node.

    .. py:attribute:: name
    .. py:attribute:: rect
    .. py:attribute:: visible
    .. py:attribute:: opacity

        Opacity in [0, 255].

    .. py:attribute:: blend_mode

        See :py:class:`~psd_layout.constants.BlendMode`. 4-character keys
        are converted, unknown keys fall back to normal.

    .. py:attribute:: blocks

        List of :py:class:`TaggedBlock`.

    .. py:attribute:: children

        List of child :py:class:`LayerRecord`.

    .. py:attribute:: pixel_data_irrelevant

        Set on group start markers.
    """

    name: str = ""
    rect: Rect = field(factory=Rect, converter=_to_rect)
    visible: bool = field(default=True, converter=bool)
    opacity: int = field(default=255, converter=int, validator=range_(0, 255))
    blend_mode: BlendMode = field(
        default=BlendMode.NORMAL, converter=BlendMode.from_key
    )
    blocks: list = field(factory=list, converter=list)
    children: list = field(factory=list, converter=list)
    pixel_data_irrelevant: bool = field(default=False, converter=bool)
    _catalogs: Optional[Dict[str, "EffectCatalog"]] = field(
        default=None, init=False, repr=False
    )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LayerRecord":
        """
        Create a record from a plain dict, as found in a JSON layer dump.

        Block payloads are base64 encoded::

            {"name": "Title", "rect": [0, 0, 10, 10],
             "blocks": [{"key": "brit", "data": "AAoAFAB/AAA="}]}
        """
        blocks = [
            TaggedBlock(item["key"], base64.b64decode(item.get("data", "")))
            for item in data.get("blocks", [])
        ]
        return cls(
            name=data.get("name", ""),
            rect=data.get("rect", (0, 0, 0, 0)),
            visible=data.get("visible", True),
            opacity=data.get("opacity", 255),
            blend_mode=data.get("blend_mode", BlendMode.NORMAL),
            blocks=blocks,
            pixel_data_irrelevant=data.get("pixel_data_irrelevant", False),
        )

    @property
    def opacity_ratio(self) -> float:
        """Opacity in [0, 1]."""
        return self.opacity / 255.0

    def is_group(self) -> bool:
        """Return True if the record has children."""
        return len(self.children) > 0

    def is_leaf(self) -> bool:
        """Return True if the record has no children."""
        return not self.children

    def has_effects(self) -> bool:
        """
        Return True if any block carries an adjustment, style or smart
        filter tag. Name heuristics are not considered.
        """
        from psd_layout.api.dispatch import family_of

        return any(family_of(block.key) is not None for block in self.blocks)

    @property
    def adjustments(self) -> "EffectCatalog":
        """Adjustment catalog, populated on first access."""
        return self._get_catalogs()["adjustments"]

    @property
    def styles(self) -> "EffectCatalog":
        """Layer style catalog, populated on first access."""
        return self._get_catalogs()["styles"]

    @property
    def smart_filters(self) -> "EffectCatalog":
        """Smart filter catalog, populated on first access."""
        return self._get_catalogs()["smart_filters"]

    def _get_catalogs(self) -> Dict[str, "EffectCatalog"]:
        if self._catalogs is None:
            from psd_layout.api.pipeline import populate_effects

            populate_effects(self)
        return self._catalogs  # type: ignore[return-value]

    def descendants(self) -> Iterator["LayerRecord"]:
        """
        Return a generator to iterate over all descendant records, depth
        first.
        """
        for layer in self.children:
            yield layer
            yield from layer.descendants()

    def find(self, name: str) -> Optional["LayerRecord"]:
        """
        Returns the first descendant found for the given layer name.
        """
        for layer in self.findall(name):
            return layer
        return None

    def findall(self, name: str) -> Iterator["LayerRecord"]:
        """
        Return a generator to iterate over all descendants with the given
        name.
        """
        for layer in self.descendants():
            if layer.name == name:
                yield layer

    def __repr__(self) -> str:
        return "%s(%r size=%dx%d%s%s)" % (
            self.__class__.__name__,
            self.name,
            self.rect.width,
            self.rect.height,
            "" if self.visible else " hidden",
            " group" if self.pixel_data_irrelevant else "",
        )

    def _repr_pretty_(self, p: Any, cycle: bool) -> None:
        if cycle:
            p.text(self.__repr__())
            return
        p.text(self.__repr__())
        with p.indent(2):
            for catalog in (self.adjustments, self.styles, self.smart_filters):
                for effect in catalog:
                    p.break_()
                    p.text("* ")
                    p.text(repr(effect))
            for idx, child in enumerate(self.children):
                p.break_()
                p.text("[%d] " % idx)
                child._repr_pretty_(p, cycle)
