import base64
import logging
import tempfile
from typing import Any, Iterable, Tuple, Type, TypeVar

from psd_layout.api.layers import LayerRecord, TaggedBlock
from psd_layout.psd.base import BaseElement
from psd_layout.psd.bin_utils import trimmed_repr
from psd_layout.psd.descriptor import (
    Bool,
    Descriptor,
    DescriptorBlock,
    DescriptorBlock2,
    Double,
    Enumerated,
    UnitFloat,
)

T = TypeVar("T", bound=BaseElement)

logging.basicConfig(level=logging.DEBUG)


def check_write_read(element: T, *args: Any, **kwargs: Any) -> None:
    with tempfile.TemporaryFile() as f:
        element.write(f, *args, **kwargs)
        f.flush()
        f.seek(0)
        new_element = element.read(f, *args, **kwargs)
    assert element == new_element, "%s vs %s" % (element, new_element)


def check_read_write(cls: Type[T], data: bytes, *args: Any, **kwargs: Any) -> None:
    element = cls.frombytes(data, *args, **kwargs)
    new_data = element.tobytes(*args, **kwargs)
    assert data == new_data, "%s vs %s" % (trimmed_repr(data), trimmed_repr(new_data))


def layer(name: str, width: int = 10, height: int = 10, **kwargs: Any) -> LayerRecord:
    return LayerRecord(name=name, rect=(0, 0, width, height), **kwargs)


def start_group(name: str) -> LayerRecord:
    return LayerRecord(name=name, rect=(0, 0, 0, 0), pixel_data_irrelevant=True)


def end_group() -> LayerRecord:
    return LayerRecord(name="</Layer group>", rect=(0, 0, 0, 0))


def block(key: str, data: bytes = b"") -> TaggedBlock:
    return TaggedBlock(key, data)


def rgb(r: float, g: float, b: float) -> Descriptor:
    return Descriptor(
        classID=b"RGBC",
        items=[(b"Rd  ", Double(r)), (b"Grn ", Double(g)), (b"Bl  ", Double(b))],
    )


def percent(value: float) -> UnitFloat:
    return UnitFloat(value=value, unit=b"#Prc")


def pixels(value: float) -> UnitFloat:
    return UnitFloat(value=value, unit=b"#Pxl")


def blend(key: bytes) -> Enumerated:
    return Enumerated(b"BlnM", key)


def effect_descriptor(classID: bytes, *items: Tuple[bytes, Any]) -> Descriptor:
    return Descriptor(classID=classID, items=list(items))


def lfx2(effects: Iterable[Tuple[bytes, Descriptor]], master: bool = True) -> bytes:
    items = [(b"Scl ", percent(100.0)), (b"masterFXSwitch", Bool(master))]
    items.extend(effects)
    return DescriptorBlock2(classID=b"null", items=items).tobytes()


def filter_settings(*items: Tuple[bytes, Any]) -> bytes:
    return DescriptorBlock(classID=b"null", items=list(items)).tobytes()


def b64(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")
