# inline_str.py
"""
Length-prefixed string read in place from a shared buffer.

Layout at the string's offset: u16 little-endian byte length L, then L bytes
of UTF-8. An InlineStr copies nothing; it keeps the buffer alive and reads
the payload through memoryview slices.
"""

from typing import Union

from byte_utils import SIZE_U16, as_readonly_buffer, buffer_address, unpack_u16_from
from errors import InvalidUtf8Error, OutOfBoundsError


class InlineStr:
    __slots__ = ('_buf', '_offset', '_len')

    def __init__(self, buf, offset: int):
        """
        Decode the length prefix at offset. The payload range is only
        checked by a debug assert; use from_buffer() when the offset is not
        trusted.
        """
        self._buf = buf
        self._offset = offset
        self._len = unpack_u16_from(buf, offset)
        assert offset + SIZE_U16 + self._len <= len(buf), \
            f"string of {self._len} bytes at offset {offset} exceeds buffer of {len(buf)} bytes"

    @classmethod
    def from_buffer(cls, buf, offset: int) -> 'InlineStr':
        """
        Checked constructor.

        Raises OutOfBoundsError if the length prefix or the declared
        payload does not fit in buf.
        """
        limit = len(buf)
        if offset < 0 or offset + SIZE_U16 > limit:
            raise OutOfBoundsError(offset, SIZE_U16, limit)
        length = unpack_u16_from(buf, offset)
        if offset + SIZE_U16 + length > limit:
            raise OutOfBoundsError(offset, SIZE_U16 + length, limit)
        return cls(buf, offset)

    @classmethod
    def from_bytes(cls, data) -> 'InlineStr':
        """Checked decode of an inline string at the start of data."""
        return cls.from_buffer(as_readonly_buffer(data), 0)

    def __len__(self) -> int:
        return self._len

    def len(self) -> int:
        return self._len

    @property
    def offset(self) -> int:
        """Position of the length prefix in the buffer."""
        return self._offset

    def _payload_start(self) -> int:
        return self._offset + SIZE_U16

    def as_bytes(self) -> memoryview:
        start = self._payload_start()
        return self._buf[start:start + self._len]

    def to_bytes(self) -> bytes:
        return bytes(self.as_bytes())

    def as_str(self) -> str:
        try:
            return str(self.as_bytes(), 'utf-8')
        except UnicodeDecodeError as e:
            raise InvalidUtf8Error(self._offset, e.reason) from e

    def as_ptr(self) -> int:
        """Address of the first payload byte; valid while the buffer lives."""
        return buffer_address(self._buf) + self._payload_start()

    def __str__(self):
        return self.as_str()

    def __repr__(self):
        return f"InlineStr({self.to_bytes()!r})"

    def __eq__(self, other: Union['InlineStr', str, bytes]):
        if isinstance(other, InlineStr):
            return self.as_bytes() == other.as_bytes()
        if isinstance(other, str):
            return self.as_bytes() == other.encode('utf-8')
        if isinstance(other, (bytes, bytearray, memoryview)):
            return self.as_bytes() == other
        return NotImplemented

    __hash__ = None
