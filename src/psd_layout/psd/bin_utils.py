"""
Big-endian binary helpers shared by the tagged block structures.

Short reads are reported with :py:exc:`AssertionError`, which the tag
dispatcher treats as an undecodable payload.
"""

import io
import struct
from typing import Any, BinaryIO, Callable, Tuple


def pack(fmt: str, *args: Any) -> bytes:
    """Pack `args` with the big-endian struct format `fmt`."""
    return struct.pack(">" + fmt, *args)


def read_fmt(fmt: str, fp: BinaryIO) -> Tuple[Any, ...]:
    """
    Read and unpack one big-endian struct `fmt` from ``fp``.

    :raise AssertionError: when fewer bytes than needed are left.
    """
    size = struct.calcsize(">" + fmt)
    data = fp.read(size)
    assert len(data) == size, "Expected %d bytes for %r, got %d" % (
        size,
        fmt,
        len(data),
    )
    return struct.unpack(">" + fmt, data)


def write_fmt(fp: BinaryIO, fmt: str, *args: Any) -> int:
    """Pack `args` and write them to ``fp``, returning the written size."""
    return write_bytes(fp, pack(fmt, *args))


def write_bytes(fp: BinaryIO, data: bytes) -> int:
    start = fp.tell()
    fp.write(data)
    written = fp.tell() - start
    assert written == len(data), "Wrote %d of %d bytes" % (written, len(data))
    return written


def read_length_block(fp: BinaryIO, fmt: str = "I", padding: int = 1) -> bytes:
    """
    Read a payload prefixed by its length.

    :param fmt: struct format of the length prefix.
    :param padding: alignment of the payload size.
    """
    length = read_fmt(fmt, fp)[0]
    data = fp.read(length)
    assert len(data) == length, "Expected %d bytes, got %d" % (length, len(data))
    read_padding(fp, length, padding)
    return data


def write_length_block(
    fp: BinaryIO, writer: Callable[[BinaryIO], int], fmt: str = "I", padding: int = 1
) -> int:
    """
    Write the output of `writer` prefixed by its length.

    Example::

        write_length_block(fp, info.write)
    """
    with io.BytesIO() as f:
        writer(f)
        data = f.getvalue()
    written = write_fmt(fp, fmt, len(data))
    written += write_bytes(fp, data)
    written += write_padding(fp, len(data), padding)
    return written


def read_padding(fp: BinaryIO, size: int, divisor: int = 2) -> bytes:
    """Skip the bytes that align `size` to `divisor`."""
    remainder = size % divisor
    return fp.read(divisor - remainder) if remainder else b""


def write_padding(fp: BinaryIO, size: int, divisor: int = 2) -> int:
    """Write zero bytes that align `size` to `divisor`."""
    remainder = size % divisor
    if not remainder:
        return 0
    return write_bytes(fp, b"\x00" * (divisor - remainder))


def is_readable(fp: BinaryIO, size: int = 1) -> bool:
    """Whether at least `size` bytes are left, without consuming them."""
    position = fp.tell()
    data = fp.read(size)
    fp.seek(position)
    return len(data) == size


def read_unicode_string(fp: BinaryIO, padding: int = 1) -> str:
    """Read a UTF-16 string prefixed by its character count."""
    count = read_fmt("I", fp)[0]
    data = fp.read(count * 2)
    assert len(data) == count * 2, "Truncated unicode string"
    read_padding(fp, count * 2, padding)
    return data.decode("utf-16-be", "replace").rstrip("\x00")


def write_unicode_string(fp: BinaryIO, value: str, padding: int = 1) -> int:
    # Descriptor names are NULL terminated.
    data = value.encode("utf-16-be") + b"\x00\x00"
    written = write_fmt(fp, "I", len(data) // 2)
    written += write_bytes(fp, data)
    written += write_padding(fp, written, padding)
    return written


def trimmed_repr(data: bytes, trim_length: int = 16) -> str:
    """Repr of `data` cut at `trim_length` bytes, with the total size."""
    if isinstance(data, bytes) and len(data) > trim_length:
        return "%r ... =(%d)" % (data[:trim_length], len(data))
    return repr(data)
