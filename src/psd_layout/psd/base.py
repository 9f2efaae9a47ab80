"""
Base structures of tagged block payloads.

Every structure in :py:mod:`psd_layout.psd` is an attrs_ record deriving
from :py:class:`BaseElement`, and reads itself from or writes itself to a
binary file-like object::

    value = BrightnessContrast.frombytes(block.data)
    assert value.tobytes() == block.data

.. _attrs: https://www.attrs.org/en/stable/index.html
"""

import io
import logging
from collections import OrderedDict
from typing import Any, BinaryIO, TypeVar

from attrs import define, field, validate

from psd_layout.psd.bin_utils import (
    read_fmt,
    read_unicode_string,
    write_fmt,
    write_unicode_string,
)

logger = logging.getLogger(__name__)

T = TypeVar("T", bound="BaseElement")


class BaseElement:
    """
    Base of the payload structures.

    Subclasses implement :py:meth:`read` and :py:meth:`write`; the byte
    helpers wrap them with an in-memory buffer.
    """

    @classmethod
    def read(cls: type[T], fp: BinaryIO, **kwargs: Any) -> T:
        """Read the structure from a file-like object."""
        raise NotImplementedError()

    def write(self, fp: BinaryIO, **kwargs: Any) -> int:
        """Write the structure and return the number of bytes written."""
        raise NotImplementedError()

    @classmethod
    def frombytes(cls: type[T], data: bytes, *args: Any, **kwargs: Any) -> T:
        with io.BytesIO(data) as f:
            return cls.read(f, *args, **kwargs)

    def tobytes(self, *args: Any, **kwargs: Any) -> bytes:
        with io.BytesIO() as f:
            self.write(f, *args, **kwargs)
            return f.getvalue()

    def validate(self) -> None:
        """Run the attrs validators again."""
        return validate(self)  # type: ignore[arg-type]


@define(repr=False, eq=False, order=False)
class ValueElement(BaseElement):
    """
    Wrapper of a single plain `value`. Compares, hashes and prints like the
    wrapped value, so descriptor items can be checked against literals.
    """

    value: object = None

    def __eq__(self, other: Any) -> bool:
        return self.value == getattr(other, "value", other)

    def __ne__(self, other: Any) -> bool:
        return not self.__eq__(other)

    def __hash__(self) -> int:
        return hash(self.value)

    def __bool__(self) -> bool:
        return bool(self.value)

    def __repr__(self) -> str:
        return repr(self.value)


@define(repr=False, eq=False, order=False)
class NumericElement(ValueElement):
    """Double precision `value`."""

    value: float = field(default=0.0, converter=float)

    def __float__(self) -> float:
        return float(self.value)

    def __int__(self) -> int:
        return int(self.value)

    @classmethod
    def read(cls: type[T], fp: BinaryIO, **kwargs: Any) -> T:
        return cls(read_fmt("d", fp)[0])  # type: ignore[call-arg]

    def write(self, fp: BinaryIO, **kwargs: Any) -> int:
        return write_fmt(fp, "d", self.value)


@define(repr=False, eq=False, order=False)
class IntegerElement(NumericElement):
    """Signed 32-bit `value`."""

    value: int = field(default=0, converter=int)  # type: ignore[assignment]

    @classmethod
    def read(cls: type[T], fp: BinaryIO, **kwargs: Any) -> T:
        return cls(read_fmt("i", fp)[0])  # type: ignore[call-arg]

    def write(self, fp: BinaryIO, **kwargs: Any) -> int:
        return write_fmt(fp, "i", self.value)


@define(repr=False, eq=False, order=False)
class BooleanElement(IntegerElement):
    """One-byte `bool` value."""

    value: bool = field(default=False, converter=bool)  # type: ignore[assignment]

    @classmethod
    def read(cls: type[T], fp: BinaryIO, **kwargs: Any) -> T:
        return cls(read_fmt("?", fp)[0])  # type: ignore[call-arg]

    def write(self, fp: BinaryIO, **kwargs: Any) -> int:
        return write_fmt(fp, "?", self.value)


@define(repr=False, eq=False, order=False)
class StringElement(ValueElement):
    """UTF-16 `str` value with a character count prefix."""

    value: str = ""

    @classmethod
    def read(cls: type[T], fp: BinaryIO, padding: int = 1, **kwargs: Any) -> T:
        return cls(read_unicode_string(fp, padding=padding))  # type: ignore[call-arg]

    def write(self, fp: BinaryIO, padding: int = 1, **kwargs: Any) -> int:
        return write_unicode_string(fp, self.value, padding=padding)


@define(repr=False)
class ListElement(BaseElement):
    """
    Sequence of structures, written back to back.
    """

    _items: list = field(factory=list, converter=list)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Any:
        return iter(self._items)

    def __getitem__(self, key: Any) -> Any:
        return self._items[key]

    def __repr__(self) -> str:
        return repr(self._items)

    def write(self, fp: BinaryIO, *args: Any, **kwargs: Any) -> int:
        return sum(item.write(fp, *args, **kwargs) for item in self)


@define(repr=False)
class DictElement(BaseElement):
    """
    Ordered mapping of structures. Subclasses normalize lookup keys in
    :py:meth:`_key_converter`.
    """

    _items: OrderedDict = field(factory=OrderedDict, converter=OrderedDict)

    @classmethod
    def _key_converter(cls, key: Any) -> Any:
        return key

    def get(self, key: Any, *args: Any) -> Any:
        return self._items.get(self._key_converter(key), *args)

    def items(self) -> Any:
        return self._items.items()

    def keys(self) -> Any:
        return self._items.keys()

    def values(self) -> Any:
        return self._items.values()

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Any:
        return iter(self._items)

    def __getitem__(self, key: Any) -> Any:
        return self._items[self._key_converter(key)]

    def __setitem__(self, key: Any, value: Any) -> None:
        self._items[self._key_converter(key)] = value

    def __contains__(self, key: Any) -> bool:
        return self._key_converter(key) in self._items

    def __repr__(self) -> str:
        return dict.__repr__(self._items)
