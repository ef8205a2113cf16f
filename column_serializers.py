# column_serializers.py
"""
Column serializer and parser for the VarChar column payload.

Provides:
- serialize_varchar_column(values) -> bytes

And the inverse:
- parse_varchar_block(data, num_values) -> VarCharView

Payload layout:
- num_values little-endian int32 offsets, -1 for NULL
- data segment: for each non-null value, u16 length + UTF-8 bytes,
  packed back-to-back; offsets are relative to the start of the data segment

Edge cases:
- Empty column -> empty payload
- A value longer than 65535 UTF-8 bytes, or a data segment whose offsets
  overflow int32, raises ValueError.
"""

import io
import logging
from typing import List, Optional

from byte_utils import I32_MAX, NULL_OFFSET, pack_i32, pack_inline_str
from varchar_view import VarCharView

logger = logging.getLogger(__name__)


# ---- Serializer ----
def serialize_varchar_column(values: List[Optional[str]]) -> bytes:
    """
    Build the offset table followed by the data segment.
    Returns offsets_bytes + data_bytes.
    """
    offsets = []
    data = io.BytesIO()
    for v in values:
        if v is None:
            offsets.append(NULL_OFFSET)
            continue
        if isinstance(v, str):
            b = v.encode('utf-8')
        elif isinstance(v, (bytes, bytearray)):
            b = bytes(v)
            try:
                b.decode('utf-8')
            except UnicodeDecodeError as e:
                raise ValueError(f"Row {len(offsets)} is not valid UTF-8: {e.reason}") from e
        else:
            b = str(v).encode('utf-8')
        cur = data.tell()
        if cur > I32_MAX:
            raise ValueError("String data exceeds 2 GiB; int32 offsets cannot address it.")
        offsets.append(cur)
        data.write(pack_inline_str(b))

    buf = io.BytesIO()
    for off in offsets:
        buf.write(pack_i32(off))
    buf.write(data.getvalue())
    logger.debug("serialized %d rows (%d null) into %d bytes",
                 len(offsets), offsets.count(NULL_OFFSET), buf.tell())
    return buf.getvalue()


# ---- Parser ----
def parse_varchar_block(data, num_values: int, verify: bool = True) -> VarCharView:
    """
    Wrap a payload in a VarCharView without copying it.

    With verify=True every offset, length and payload is checked up front,
    so the view's unchecked accessors are safe to use afterwards.
    """
    view = VarCharView.from_bytes(data, num_values, verify=verify)
    logger.debug("parsed VarChar block: %d rows, %d null, %d data bytes, verified=%s",
                 len(view), view.null_count(), len(view.data), verify)
    return view


# ---- Self-tests ----
if __name__ == '__main__':
    strs = ["", "hello", None, "こんにちは", "a,comma", "line\nbreak"]
    block = serialize_varchar_column(strs)
    assert parse_varchar_block(block, len(strs)).to_vec() == strs

    assert serialize_varchar_column([]) == b''
    assert parse_varchar_block(b'', 0).to_vec() == []

    print("column_serializers.py self-tests passed")
