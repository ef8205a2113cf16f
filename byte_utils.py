# byte_utils.py
"""
Binary packing/unpacking helpers for the VarChar column layout.

Endianness: all multi-byte values are **little-endian** (struct format prefix '<').

This module centralizes:
- format constants (magic, version, type tags, null sentinel)
- pack/unpack helpers for the primitive types the layout uses
- positional readers over shared buffers (no slicing, no copies)
- read-only buffer wrapping and buffer address lookup for FFI callers
- safe file read helpers (read_exact)
"""

from enum import IntEnum
from typing import BinaryIO
import struct

import numpy as np

# ---- Format constants ----
MAGIC = b'VCHR'         # 4 bytes
VERSION = 1             # uint8

# Prefix: MAGIC(4) + VERSION(1) + reserved(7) + header_len(u64)
HEADER_PREFIX_LEN = 0x14  # 20 bytes, header begins here

# Any negative offset means NULL; this is the one the serializer writes
NULL_OFFSET = -1
# Inline strings carry a u16 length prefix
MAX_INLINE_LEN = 0xFFFF

I32_MIN = -2**31
I32_MAX = 2**31 - 1

# numpy dtype of the offset table
OFFSET_DTYPE = np.dtype('<i4')


class Ty(IntEnum):
    """Native column-cell type tags. 0 is NULL."""
    Null = 0
    Bool = 1
    TinyInt = 2
    SmallInt = 3
    Int = 4
    BigInt = 5
    Float = 6
    Double = 7
    VarChar = 8
    Timestamp = 9
    NChar = 10
    UTinyInt = 11
    USmallInt = 12
    UInt = 13
    UBigInt = 14
    Json = 15
    VarBinary = 16
    Decimal = 17
    Blob = 18
    MediumBlob = 19


# ---- Struct helpers (little-endian) ----
_U16 = struct.Struct('<H')
_I32 = struct.Struct('<i')

def pack_u8(x: int) -> bytes:
    return struct.pack('<B', x)

def unpack_u8(b: bytes) -> int:
    return struct.unpack('<B', b)[0]

def pack_u16(x: int) -> bytes:
    return _U16.pack(x)

def unpack_u16(b: bytes) -> int:
    return _U16.unpack(b)[0]

def pack_u64(x: int) -> bytes:
    return struct.pack('<Q', x)

def unpack_u64(b: bytes) -> int:
    return struct.unpack('<Q', b)[0]

def pack_i32(x: int) -> bytes:
    return _I32.pack(x)

def unpack_i32(b: bytes) -> int:
    return _I32.unpack(b)[0]

def unpack_u16_from(buf, pos: int) -> int:
    """Read a u16 at byte position `pos` of any buffer without slicing it."""
    return _U16.unpack_from(buf, pos)[0]

# ---- Utility: size constants (for reading) ----
SIZE_U8 = struct.calcsize('<B')
SIZE_U16 = struct.calcsize('<H')
SIZE_U64 = struct.calcsize('<Q')
SIZE_I32 = struct.calcsize('<i')

# ---- Buffer helpers ----
def as_readonly_buffer(data) -> memoryview:
    """
    Wrap a bytes-like object in a flat, read-only memoryview.
    The underlying bytes are shared, never copied.
    """
    view = data if isinstance(data, memoryview) else memoryview(data)
    if view.format != 'B' or view.ndim != 1:
        view = view.cast('B')
    return view.toreadonly()

def buffer_address(buf) -> int:
    """
    Address of the first byte of `buf`.

    Only meaningful while the object owning the memory is alive.
    """
    return np.frombuffer(buf, dtype=np.uint8).ctypes.data

# ---- Convenience / IO helpers ----
def read_exact(f: BinaryIO, n: int) -> bytes:
    """
    Read exactly n bytes from file-like object f.
    Raises EOFError if fewer than n bytes available.
    """
    data = f.read(n)
    if len(data) != n:
        raise EOFError(f"Expected {n} bytes, got {len(data)} bytes")
    return data

def pack_inline_str(b: bytes) -> bytes:
    """
    Prefix a bytes object with a u16 length (little-endian).
    This is the on-wire form of one non-null data segment entry.
    """
    if len(b) > MAX_INLINE_LEN:
        raise ValueError(f"Inline string of {len(b)} bytes exceeds {MAX_INLINE_LEN} bytes")
    return pack_u16(len(b)) + b


# ---- Small self-tests when run as a script ----
if __name__ == '__main__':
    assert pack_u16(0x1234) == b'\x34\x12'
    assert unpack_i32(pack_i32(-42)) == -42
    assert unpack_u16_from(b'\x00\x05\x00', 1) == 5
    assert pack_inline_str(b'bob') == b'\x03\x00bob'

    ro = as_readonly_buffer(bytearray(b'abc'))
    assert ro.readonly and bytes(ro) == b'abc'

    import io
    bio = io.BytesIO(b'hello')
    assert read_exact(bio, 5) == b'hello'
    try:
        read_exact(io.BytesIO(b'abc'), 4)
        raise SystemExit("read_exact did not raise EOFError")
    except EOFError:
        pass

    print("byte_utils.py self-tests passed")
