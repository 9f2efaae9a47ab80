"""
Color values embedded in legacy effects and adjustment blocks.
"""

import logging
from typing import Any, BinaryIO, Tuple, TypeVar

from attrs import define, field

from psd_layout.constants import ColorSpaceID
from psd_layout.psd.base import BaseElement
from psd_layout.psd.bin_utils import read_fmt, write_fmt

logger = logging.getLogger(__name__)

T = TypeVar("T", bound="Color")


def _component_format(space: Any) -> str:
    # Lab components are signed.
    return "4h" if space == ColorSpaceID.LAB else "4H"


@define(repr=False)
class Color(BaseElement):
    """
    Color space ID followed by four 16-bit components.

    .. py:attribute:: id

        :py:class:`~psd_layout.constants.ColorSpaceID`, or the raw `int`
        for an unknown space.

    .. py:attribute:: values
    """

    id: ColorSpaceID = ColorSpaceID.RGB
    values: list = field(factory=lambda: [0, 0, 0, 0])

    @classmethod
    def read(cls: type[T], fp: BinaryIO, **kwargs: Any) -> T:
        space = read_fmt("H", fp)[0]
        if space in {item.value for item in ColorSpaceID}:
            space = ColorSpaceID(space)
        else:
            logger.info("Unknown color space %d", space)
        values = read_fmt(_component_format(space), fp)
        return cls(space, list(values))  # type: ignore[call-arg]

    def write(self, fp: BinaryIO, **kwargs: Any) -> int:
        written = write_fmt(fp, "H", getattr(self.id, "value", self.id))
        return written + write_fmt(fp, _component_format(self.id), *self.values)

    def to_rgb(self) -> Tuple[float, float, float]:
        """
        RGB components scaled to [0, 1]. Colors in other spaces come out as
        black.
        """
        if self.id != ColorSpaceID.RGB:
            logger.debug("No conversion from %r, using black", self.id)
            return (0.0, 0.0, 0.0)
        r, g, b = (min(max(v / 65535.0, 0.0), 1.0) for v in self.values[:3])
        return (r, g, b)
