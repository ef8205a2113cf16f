# header_utils.py
"""
Header builder & parser for the column file.

Functions:
- build_header(name, num_rows, payload_size, flags=0) -> bytes
- parse_header(header_bytes) -> dict

Header layout (all little-endian):
  name_length u16 + name bytes (UTF-8)
  type_id     u8     (Ty.VarChar)
  flags       u8
  num_rows    u64
  payload_size u64   (offset table + data segment)
"""

import io
from typing import Dict

from byte_utils import (
    Ty,
    pack_u64, pack_u16, pack_u8,
    unpack_u64, unpack_u16, unpack_u8,
    SIZE_U64, SIZE_U16, SIZE_U8
)


def build_header(name: str, num_rows: int, payload_size: int, flags: int = 0) -> bytes:
    """
    Build header bytes deterministically.
    """
    buf = io.BytesIO()

    name_b = name.encode('utf-8') if not isinstance(name, bytes) else name
    if len(name_b) >= (1 << 16):
        raise ValueError("Column name too long (>65535 bytes)")

    buf.write(pack_u16(len(name_b)))
    buf.write(name_b)
    buf.write(pack_u8(int(Ty.VarChar)))
    buf.write(pack_u8(int(flags)))
    buf.write(pack_u64(int(num_rows)))
    buf.write(pack_u64(int(payload_size)))

    return buf.getvalue()


def _read_field(buf: io.BytesIO, size: int, what: str) -> bytes:
    raw = buf.read(size)
    if len(raw) < size:
        raise ValueError(f"Header truncated reading {what}")
    return raw


def parse_header(header_bytes: bytes) -> Dict:
    """
    Parse header bytes produced by build_header.

    Returns a dict with keys: name (str), type (Ty), flags (int),
    num_rows (int), payload_size (int).
    Raises ValueError on truncation or a non-VarChar type id.
    """
    buf = io.BytesIO(header_bytes)

    name_len = unpack_u16(_read_field(buf, SIZE_U16, "name_length"))
    name = _read_field(buf, name_len, "name bytes").decode('utf-8')

    type_id = unpack_u8(_read_field(buf, SIZE_U8, f"type for column {name}"))
    if type_id != Ty.VarChar:
        raise ValueError(f"Column '{name}' has type id {type_id}, expected {int(Ty.VarChar)} (VarChar)")

    flags = unpack_u8(_read_field(buf, SIZE_U8, f"flags for column {name}"))
    num_rows = unpack_u64(_read_field(buf, SIZE_U64, f"num_rows for column {name}"))
    payload_size = unpack_u64(_read_field(buf, SIZE_U64, f"payload_size for column {name}"))

    return {
        'name': name,
        'type': Ty(type_id),
        'flags': flags,
        'num_rows': num_rows,
        'payload_size': payload_size,
    }
