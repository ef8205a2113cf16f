# varchar_view.py
"""
Zero-copy view over one VarChar column of a result block.

A VarCharView binds an offset table to the column's data segment. Nothing
is decoded until a row is asked for, and nothing is copied until to_vec()
or an explicit as_str()/to_bytes() on a returned InlineStr.

Two method families:
- checked: len, is_null, get, get_value, get_raw_value, verify.
  They never read outside the buffer.
- unchecked (``*_unchecked``): the caller certifies ``0 <= row < len(view)``
  and, for string rows, that the producer wrote a well-formed entry. Only a
  debug assert guards the row index; under ``python -O`` a violation is a
  caller bug with unspecified results.
"""

import ctypes
from typing import Iterator, List, NamedTuple, Optional

from byte_utils import SIZE_I32, SIZE_U16, Ty, as_readonly_buffer, buffer_address
from inline_str import InlineStr
from offsets import Offsets


class BorrowedValue(NamedTuple):
    """Typed cell value: (Ty.VarChar, text) or (Ty.Null, None)."""
    ty: Ty
    value: Optional[str] = None

    @classmethod
    def null(cls) -> 'BorrowedValue':
        return cls(Ty.Null, None)

    @classmethod
    def varchar(cls, text: str) -> 'BorrowedValue':
        return cls(Ty.VarChar, text)

    @property
    def is_null(self) -> bool:
        return self.ty == Ty.Null


class RawCell(ctypes.Structure):
    """C layout of a raw cell: type tag, byte length, data pointer."""
    _fields_ = [
        ("ty", ctypes.c_uint8),
        ("len", ctypes.c_uint32),
        ("ptr", ctypes.c_void_p),
    ]


class RawValue(NamedTuple):
    """
    Foreign-function triple for one cell.

    ptr is None for NULL, otherwise the address of the first payload byte.
    The address is only valid while the column's buffer is alive, so keep
    the view referenced for as long as the pointer is used.
    """
    ty: Ty
    length: int
    ptr: Optional[int]

    def as_c_void_p(self) -> ctypes.c_void_p:
        return ctypes.c_void_p(self.ptr)

    def to_cell(self) -> RawCell:
        return RawCell(int(self.ty), self.length, self.ptr)


_RAW_NULL = RawValue(Ty.Null, 0, None)


class VarCharView:
    __slots__ = ('offsets', 'data', '_address')

    def __init__(self, offsets, data=b''):
        """
        - offsets: Offsets, or any sequence of ints (one per row, negative = NULL)
        - data: bytes-like data segment; shared, not copied
        """
        if not isinstance(offsets, Offsets):
            offsets = Offsets(offsets)
        self.offsets = offsets
        self.data = as_readonly_buffer(data)
        self._address = buffer_address(self.data)

    @classmethod
    def from_bytes(cls, block, rows: int, verify: bool = False) -> 'VarCharView':
        """
        Split a column payload into offset table (rows x int32) and data
        segment. Both parts share memory with block.
        """
        buf = as_readonly_buffer(block)
        offsets = Offsets.from_bytes(buf, rows)
        view = cls(offsets, buf[rows * SIZE_I32:])
        if verify:
            view.verify()
        return view

    def __len__(self) -> int:
        return len(self.offsets)

    def len(self) -> int:
        return len(self.offsets)

    # ---- null tests ----
    def is_null(self, row: int) -> bool:
        """True if row is NULL. Rows outside the column are reported as not null."""
        if 0 <= row < len(self.offsets):
            return self.is_null_unchecked(row)
        return False

    def is_null_unchecked(self, row: int) -> bool:
        return self.offsets.get_unchecked(row) < 0

    def null_count(self) -> int:
        return self.offsets.null_count()

    # ---- unchecked accessors ----
    def get_unchecked(self, row: int) -> Optional[InlineStr]:
        offset = self.offsets.get_unchecked(row)
        if offset >= 0:
            return InlineStr(self.data, offset)
        return None

    def get_value_unchecked(self, row: int) -> BorrowedValue:
        s = self.get_unchecked(row)
        if s is None:
            return BorrowedValue.null()
        return BorrowedValue.varchar(s.as_str())

    def get_raw_value_unchecked(self, row: int) -> RawValue:
        s = self.get_unchecked(row)
        if s is None:
            return _RAW_NULL
        return RawValue(Ty.VarChar, len(s), self._address + s.offset + SIZE_U16)

    # ---- checked accessors ----
    def get(self, row: int) -> Optional[InlineStr]:
        """
        Inline string at row, or None for NULL.

        Raises IndexError for rows outside the column and OutOfBoundsError
        when the stored offset or length does not fit the data segment.
        """
        if not 0 <= row < len(self.offsets):
            raise IndexError(f"row {row} out of range for column of {len(self.offsets)} rows")
        offset = self.offsets.get_unchecked(row)
        if offset < 0:
            return None
        return InlineStr.from_buffer(self.data, offset)

    def get_value(self, row: int) -> BorrowedValue:
        s = self.get(row)
        if s is None:
            return BorrowedValue.null()
        return BorrowedValue.varchar(s.as_str())

    def get_raw_value(self, row: int) -> RawValue:
        s = self.get(row)
        if s is None:
            return _RAW_NULL
        return RawValue(Ty.VarChar, len(s), self._address + s.offset + SIZE_U16)

    def verify(self) -> 'VarCharView':
        """
        Check every non-null row in one pass: the entry fits the data
        segment and its payload is valid UTF-8. Raises DecodeError.
        """
        for offset in self.offsets:
            if offset >= 0:
                InlineStr.from_buffer(self.data, offset).as_str()
        return self

    # ---- iteration / materialization ----
    def iter(self) -> 'VarCharIter':
        return VarCharIter(self)

    def __iter__(self) -> 'VarCharIter':
        return VarCharIter(self)

    def to_vec(self) -> List[Optional[str]]:
        """Decode every row into owned str objects (None for NULL)."""
        return [None if s is None else s.as_str() for s in self.iter()]

    def __repr__(self):
        return f"VarCharView(rows={len(self)}, nulls={self.null_count()}, data_len={len(self.data)})"


class VarCharIter:
    """Forward, single-pass cursor over a VarCharView's rows."""

    __slots__ = ('_view', '_row')

    def __init__(self, view: VarCharView):
        self._view = view
        self._row = 0

    def __iter__(self) -> Iterator[Optional[InlineStr]]:
        return self

    def __next__(self) -> Optional[InlineStr]:
        if self._row < len(self._view):
            row = self._row
            self._row += 1
            return self._view.get_unchecked(row)
        raise StopIteration

    def __length_hint__(self) -> int:
        return max(len(self._view) - self._row, 0)
