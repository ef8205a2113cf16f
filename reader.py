# reader.py
import csv
import logging
from typing import Optional, Tuple

from byte_utils import MAGIC, VERSION, HEADER_PREFIX_LEN, unpack_u64
from header_utils import parse_header
from column_serializers import parse_varchar_block
from varchar_view import VarCharView

logger = logging.getLogger(__name__)


def read_column(path: str, verify: bool = True) -> Tuple[str, VarCharView]:
    """
    Read a column file and return (name, view).

    The file is read into memory once; the view's offset table and data
    segment are windows into that single bytes object.

    Raises RuntimeError / ValueError / EOFError on malformed files, and
    DecodeError when verify is set and a row does not decode.
    """
    with open(path, 'rb') as f:
        raw = f.read()

    if len(raw) < HEADER_PREFIX_LEN:
        raise EOFError(f"Expected {HEADER_PREFIX_LEN} bytes, got {len(raw)} bytes")
    if raw[:4] != MAGIC:
        raise RuntimeError("Bad magic: not a VarChar column file")
    version = raw[4]
    if version != VERSION:
        raise RuntimeError(f"Unsupported column file version {version}")

    header_len = unpack_u64(raw[12:HEADER_PREFIX_LEN])
    header_end = HEADER_PREFIX_LEN + header_len
    if len(raw) < header_end:
        raise EOFError(f"Expected {header_len} header bytes, got {len(raw) - HEADER_PREFIX_LEN} bytes")
    meta = parse_header(raw[HEADER_PREFIX_LEN:header_end])

    payload = memoryview(raw)[header_end:]
    if len(payload) != meta['payload_size']:
        raise RuntimeError(
            f"Payload size mismatch for column '{meta['name']}': header says "
            f"{meta['payload_size']}, got {len(payload)}"
        )

    view = parse_varchar_block(payload, meta['num_rows'], verify=verify)
    logger.debug("read column '%s' from %s: %r", meta['name'], path, view)
    return meta['name'], view


def read_column_to_csv(path: str, csv_out_path: str, null_marker: Optional[str] = '\\N') -> None:
    """
    Convenience helper: reads a column file and writes a one-column CSV.
    NULL rows are written as null_marker.
    """
    name, view = read_column(path)
    with open(csv_out_path, 'w', newline='', encoding='utf-8') as out:
        writer = csv.writer(out)
        writer.writerow([name])
        for v in view.to_vec():
            writer.writerow([null_marker if v is None else v])
