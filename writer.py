# writer.py
import logging
from typing import List, Optional

from byte_utils import MAGIC, VERSION, pack_u8, pack_u64
from header_utils import build_header
from column_serializers import serialize_varchar_column

logger = logging.getLogger(__name__)


def write_column(out_path: str, name: str, values: List[Optional[str]]) -> None:
    """
    Write one VarChar column to a file.

    - name: column name stored in the header
    - values: one entry per row, None for NULL

    File layout: MAGIC(4) + VERSION(1) + reserved(7) + header_len(u64)
    + header bytes + column payload (offset table + data segment).

    Raises ValueError on values the payload cannot represent.
    """
    payload = serialize_varchar_column(values)
    header = build_header(name, len(values), len(payload))

    with open(out_path, 'wb') as f:
        f.write(MAGIC)
        f.write(pack_u8(VERSION))
        f.write(b'\x00' * 7)           # reserved
        f.write(pack_u64(len(header)))  # header length (u64 little-endian)
        f.write(header)
        f.write(payload)
        f.flush()

    logger.debug("wrote column '%s' to %s: %d rows, %d payload bytes",
                 name, out_path, len(values), len(payload))
