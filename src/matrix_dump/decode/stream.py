"""Big-endian primitive reader over a binary stream."""

import struct
import threading
from typing import BinaryIO

import numpy as np

from matrix_dump.errors import IOFailure, MalformedPartition

_INT32 = struct.Struct(">i")
_UINT16 = struct.Struct(">H")
_FLOAT32 = struct.Struct(">f")
_FLOAT64 = struct.Struct(">d")

# Largest single read issued to the underlying handle.
_MAX_CHUNK = 1024 * 1024

# Modified UTF-8 writes U+0000 as a two-byte sequence.
_MODIFIED_NUL = b"\xc0\x80"


def decode_modified_utf8(payload: bytes) -> str:
    """
    Decode a modified UTF-8 payload.

    Differs from standard UTF-8 in two ways: NUL is encoded as C0 80, and
    supplementary characters are written as two encoded UTF-16 surrogates.
    """
    payload = payload.replace(_MODIFIED_NUL, b"\x00")
    try:
        text = payload.decode("utf-8", errors="surrogatepass")
        # Recombine surrogate pairs into single code points.
        return text.encode("utf-16-be", errors="surrogatepass").decode("utf-16-be")
    except UnicodeError as exc:
        raise MalformedPartition(f"invalid modified UTF-8 string: {exc}") from exc


class DataInputStream:
    """
    Sequential reader of big-endian primitives.

    Every read either returns the full value or raises: a premature end of
    stream is a MalformedPartition, an OS error is an IOFailure. When the
    stream size is known, a read past its end fails before any bytes are
    read. When a cancel event is given, reads fail with IOFailure once it
    is set.
    """

    def __init__(
        self,
        handle: BinaryIO,
        name: str = "<stream>",
        size: int | None = None,
        cancel_event: threading.Event | None = None,
    ):
        self._handle = handle
        self._name = name
        self._size = size
        self._cancel_event = cancel_event
        self._offset = 0

    @property
    def name(self) -> str:
        return self._name

    @property
    def offset(self) -> int:
        """Number of bytes consumed so far."""
        return self._offset

    def read_fully(self, size: int) -> bytes:
        """Read exactly `size` bytes."""
        if self._cancel_event is not None and self._cancel_event.is_set():
            raise IOFailure(f"read of {self._name} interrupted")
        if size == 0:
            return b""
        if self._size is not None and size > self._size - self._offset:
            raise MalformedPartition(
                f"unexpected end of {self._name}: wanted {size} bytes at offset "
                f"{self._offset}, {max(self._size - self._offset, 0)} left"
            )

        chunks = []
        remaining = size
        try:
            while remaining > 0:
                # Bounded reads keep a bogus length from allocating its full size.
                chunk = self._handle.read(min(remaining, _MAX_CHUNK))
                if not chunk:
                    break
                chunks.append(chunk)
                remaining -= len(chunk)
        except OSError as exc:
            raise IOFailure(f"read of {self._name} failed: {exc}") from exc

        data = b"".join(chunks)
        self._offset += len(data)
        if remaining > 0:
            raise MalformedPartition(
                f"unexpected end of {self._name}: wanted {size} bytes at offset "
                f"{self._offset - len(data)}, got {len(data)}"
            )
        return data

    def read_i32(self) -> int:
        return _INT32.unpack(self.read_fully(4))[0]

    def read_u16(self) -> int:
        return _UINT16.unpack(self.read_fully(2))[0]

    def read_f32(self) -> float:
        return _FLOAT32.unpack(self.read_fully(4))[0]

    def read_f64(self) -> float:
        return _FLOAT64.unpack(self.read_fully(8))[0]

    def read_utf(self) -> str:
        """Read a string with an unsigned 16-bit byte-length prefix."""
        length = self.read_u16()
        return decode_modified_utf8(self.read_fully(length))

    def read_array(self, dtype: np.dtype, count: int) -> np.ndarray:
        """Read `count` contiguous items of a (big-endian) numpy dtype."""
        dtype = np.dtype(dtype)
        if count == 0:
            return np.empty(0, dtype=dtype)
        return np.frombuffer(self.read_fully(dtype.itemsize * count), dtype=dtype)

    def close(self) -> None:
        try:
            self._handle.close()
        except OSError as exc:
            raise IOFailure(f"close of {self._name} failed: {exc}") from exc

    def __enter__(self) -> "DataInputStream":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
