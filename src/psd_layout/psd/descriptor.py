"""
Action descriptors.

Object-based layer styles (``lfx2``), vibrance blocks and filter settings
all serialize their parameters as descriptors: a class ID followed by
typed items, each introduced by a 4-character OSType. Items are keyed by
`bytes`; most keys are 4 characters, some are longer, e.g.
``masterFXSwitch``.

Only the OSTypes found in effect and filter parameters are registered.
References (``obj ``) and any unknown OSType raise :py:exc:`ValueError`,
so the enclosing block is reported as undecodable.
"""

import logging
from typing import Any, BinaryIO, Dict, TypeVar

from attrs import define, field

from psd_layout.constants import OSType
from psd_layout.psd.base import (
    BaseElement,
    BooleanElement,
    DictElement,
    IntegerElement,
    ListElement,
    NumericElement,
    StringElement,
)
from psd_layout.psd.bin_utils import (
    read_fmt,
    read_length_block,
    read_unicode_string,
    write_bytes,
    write_fmt,
    write_length_block,
    write_padding,
    write_unicode_string,
)
from psd_layout.registry import new_registry
from psd_layout.validators import in_

logger = logging.getLogger(__name__)

TYPES, register = new_registry(attribute="ostype")

T = TypeVar("T")


def read_length_and_key(fp: BinaryIO) -> bytes:
    """
    Read a descriptor key. A zero length stands for a 4-character key.
    """
    length = read_fmt("I", fp)[0]
    key = fp.read(length or 4)
    assert len(key) == (length or 4), "Truncated descriptor key"
    return key


def write_length_and_key(fp: BinaryIO, value: bytes) -> int:
    written = write_fmt(fp, "I", 0 if len(value) == 4 else len(value))
    written += write_bytes(fp, value)
    return written


def _read_value(fp: BinaryIO) -> Any:
    key = fp.read(4)
    kls = TYPES.get(OSType(key))
    if kls is None:
        raise ValueError("Unsupported descriptor OSType %r" % key)
    return kls.read(fp)


def _write_value(fp: BinaryIO, value: Any) -> int:
    return write_bytes(fp, value.ostype.value) + value.write(fp)


class _DescriptorBody(DictElement):
    """Name, class ID and items shared by the descriptor flavors."""

    @classmethod
    def _read_body(cls, fp: BinaryIO) -> Dict[str, Any]:
        name = read_unicode_string(fp)
        classID = read_length_and_key(fp)
        count = read_fmt("I", fp)[0]
        items = [(read_length_and_key(fp), _read_value(fp)) for _ in range(count)]
        return dict(name=name, classID=classID, items=items)

    def _write_body(self, fp: BinaryIO) -> int:
        written = write_unicode_string(fp, self.name)
        written += write_length_and_key(fp, self.classID)
        written += write_fmt(fp, "I", len(self))
        for key, value in self.items():
            written += write_length_and_key(fp, key)
            written += _write_value(fp, value)
        return written

    @classmethod
    def _key_converter(cls, key: Any) -> bytes:
        if isinstance(key, str):
            return key.encode("ascii")
        return key


@register(OSType.DESCRIPTOR)
@define(repr=False)
class Descriptor(_DescriptorBody):
    """
    Dict-like descriptor. Keys may be given as `bytes` or `str`::

        if descriptor.classID == b"DrSh":
            opacity = descriptor[b"Opct"].value

    .. py:attribute:: name
    .. py:attribute:: classID
    """

    name: str = ""
    classID: bytes = b"null"

    @classmethod
    def read(cls: type[T], fp: BinaryIO, **kwargs: Any) -> T:
        return cls(**cls._read_body(fp))  # type: ignore[attr-defined]

    def write(self, fp: BinaryIO, **kwargs: Any) -> int:
        return self._write_body(fp)


@register(OSType.GLOBAL_OBJECT)
class GlobalObject(Descriptor):
    """Same layout as :py:class:`Descriptor`."""


@register(OSType.LIST)
@define(repr=False)
class List(ListElement):
    """Sequence of typed values, e.g. the ``dropShadowMulti`` effects."""

    @classmethod
    def read(cls: type[T], fp: BinaryIO, **kwargs: Any) -> T:
        count = read_fmt("I", fp)[0]
        return cls([_read_value(fp) for _ in range(count)])  # type: ignore[call-arg]

    def write(self, fp: BinaryIO, **kwargs: Any) -> int:
        written = write_fmt(fp, "I", len(self))
        return written + sum(_write_value(fp, item) for item in self)


@register(OSType.UNIT_FLOAT)
@define(repr=False, eq=False, order=False)
class UnitFloat(NumericElement):
    """
    Double with a unit, e.g. ``#Pxl`` for pixels, ``#Prc`` for percent or
    ``#Ang`` for degrees. Compares by `value` only.

    .. py:attribute:: value
    .. py:attribute:: unit
    """

    value: float = 0.0
    unit: bytes = b"#Nne"

    @classmethod
    def read(cls: type[T], fp: BinaryIO, **kwargs: Any) -> T:
        unit, value = read_fmt("4sd", fp)
        return cls(value=value, unit=unit)  # type: ignore[call-arg]

    def write(self, fp: BinaryIO, **kwargs: Any) -> int:
        return write_fmt(fp, "4sd", self.unit, self.value)


@register(OSType.DOUBLE)
class Double(NumericElement):
    pass


@register(OSType.STRING)
class String(StringElement):
    pass


@register(OSType.BOOLEAN)
class Bool(BooleanElement):
    pass


@register(OSType.INTEGER)
class Integer(IntegerElement):
    pass


@register(OSType.LARGE_INTEGER)
class LargeInteger(IntegerElement):
    """Signed 64-bit integer."""

    @classmethod
    def read(cls: type[T], fp: BinaryIO, **kwargs: Any) -> T:
        return cls(read_fmt("q", fp)[0])  # type: ignore[call-arg]

    def write(self, fp: BinaryIO, **kwargs: Any) -> int:
        return write_fmt(fp, "q", self.value)


@register(OSType.ENUMERATED)
@define(repr=False)
class Enumerated(BaseElement):
    """
    Enumerated value, such as blend mode ``Mltp`` of type ``BlnM``.

    .. py:attribute:: typeID
    .. py:attribute:: enum
    """

    typeID: bytes = b"null"
    enum: bytes = b"null"

    @classmethod
    def read(cls: type[T], fp: BinaryIO, **kwargs: Any) -> T:
        typeID = read_length_and_key(fp)
        return cls(typeID, read_length_and_key(fp))  # type: ignore[call-arg]

    def write(self, fp: BinaryIO, **kwargs: Any) -> int:
        written = write_length_and_key(fp, self.typeID)
        return written + write_length_and_key(fp, self.enum)

    def __repr__(self) -> str:
        return "%s.%s" % (self.typeID.decode("ascii", "replace"), self.enum.decode("ascii", "replace"))


@define(repr=False)
class Class(BaseElement):
    """
    Class reference.

    .. py:attribute:: name
    .. py:attribute:: classID
    """

    name: str = ""
    classID: bytes = b"null"

    @classmethod
    def read(cls: type[T], fp: BinaryIO, **kwargs: Any) -> T:
        name = read_unicode_string(fp)
        return cls(name, read_length_and_key(fp))  # type: ignore[call-arg]

    def write(self, fp: BinaryIO, **kwargs: Any) -> int:
        written = write_unicode_string(fp, self.name)
        return written + write_length_and_key(fp, self.classID)


@register(OSType.CLASS1)
class Class1(Class):
    pass


@register(OSType.CLASS2)
class Class2(Class):
    pass


@register(OSType.RAW_DATA)
@define(repr=False)
class RawData(BaseElement):
    """
    Opaque bytes, kept as they are.

    .. py:attribute:: value
    """

    value: bytes = b""

    @classmethod
    def read(cls: type[T], fp: BinaryIO, **kwargs: Any) -> T:
        return cls(read_length_block(fp))  # type: ignore[call-arg]

    def write(self, fp: BinaryIO, **kwargs: Any) -> int:
        return write_length_block(fp, lambda f: write_bytes(f, self.value))


@register(OSType.ALIAS)
class Alias(RawData):
    """File alias, kept as opaque bytes."""


@define(repr=False)
class DescriptorBlock(Descriptor):
    """
    Descriptor preceded by its format version, always 16. Used by filter
    settings and vibrance blocks.

    .. py:attribute:: version
    """

    version: int = field(default=16, validator=in_((16,)))

    @classmethod
    def read(cls: type[T], fp: BinaryIO, **kwargs: Any) -> T:
        version = read_fmt("I", fp)[0]
        return cls(version=version, **cls._read_body(fp))  # type: ignore[attr-defined,call-arg]

    def write(self, fp: BinaryIO, padding: int = 4, **kwargs: Any) -> int:
        written = write_fmt(fp, "I", self.version)
        written += self._write_body(fp)
        return written + write_padding(fp, written, padding)


@define(repr=False)
class DescriptorBlock2(Descriptor):
    """
    Descriptor preceded by a block version and the descriptor format
    version 16. Used by object-based layer styles.

    .. py:attribute:: version
    .. py:attribute:: data_version
    """

    version: int = 0
    data_version: int = field(default=16, validator=in_((16,)))

    @classmethod
    def read(cls: type[T], fp: BinaryIO, **kwargs: Any) -> T:
        version, data_version = read_fmt("2I", fp)
        return cls(version=version, data_version=data_version, **cls._read_body(fp))  # type: ignore[attr-defined,call-arg]

    def write(self, fp: BinaryIO, padding: int = 4, **kwargs: Any) -> int:
        written = write_fmt(fp, "2I", self.version, self.data_version)
        written += self._write_body(fp)
        return written + write_padding(fp, written, padding)


def get_value(descriptor: Any, key: bytes, default: Any = None) -> Any:
    """
    Look up `key` and unwrap numbers, booleans and strings to plain
    values. Other items are returned as they are.
    """
    result = descriptor.get(key, default)
    if isinstance(result, (NumericElement, StringElement)):
        return result.value
    return result
