# offsets.py
"""
Offset table of a VarChar column.

One little-endian signed 32-bit entry per row. A non-negative entry is the
byte position of the row's inline string in the data segment; any negative
entry marks the row as NULL.
"""

from typing import Iterator, Optional

import numpy as np

from byte_utils import I32_MAX, I32_MIN, OFFSET_DTYPE, SIZE_I32
from errors import OutOfBoundsError


class Offsets:
    """Read-only, row-indexed sequence of int32 offsets."""

    __slots__ = ('_array',)

    def __init__(self, values=()):
        if isinstance(values, np.ndarray):
            if values.dtype != OFFSET_DTYPE and values.size and (
                    values.min() < I32_MIN or values.max() > I32_MAX):
                raise OverflowError(f"Offsets outside int32 range [{I32_MIN}, {I32_MAX}]")
            array = values.astype(OFFSET_DTYPE, copy=False)
        else:
            array = np.asarray(list(values), dtype=OFFSET_DTYPE)
        if array.ndim != 1:
            raise ValueError(f"Offset table must be one-dimensional, got shape {array.shape}")
        # a view, so the caller's array keeps its own flags
        array = array.view()
        array.flags.writeable = False
        self._array = array

    @classmethod
    def from_bytes(cls, buf, rows: int) -> 'Offsets':
        """
        Interpret the first rows * 4 bytes of buf as the offset table.
        The table shares memory with buf.
        """
        need = rows * SIZE_I32
        if rows < 0 or len(buf) < need:
            raise OutOfBoundsError(0, need, len(buf))
        if rows == 0:
            return cls()
        return cls(np.frombuffer(buf, dtype=OFFSET_DTYPE, count=rows))

    def __len__(self) -> int:
        return self._array.shape[0]

    def len(self) -> int:
        return self._array.shape[0]

    def get(self, row: int) -> Optional[int]:
        """Offset at row, or None when row is outside the table."""
        if 0 <= row < self._array.shape[0]:
            return int(self._array[row])
        return None

    def get_unchecked(self, row: int) -> int:
        """
        Offset at row. The caller guarantees 0 <= row < len(self);
        the check below only runs in debug (non -O) interpreters.
        """
        assert 0 <= row < self._array.shape[0], f"row {row} out of range for {self._array.shape[0]} rows"
        return int(self._array[row])

    def __iter__(self) -> Iterator[int]:
        return (int(o) for o in self._array)

    def null_count(self) -> int:
        return int(np.count_nonzero(self._array < 0))

    def as_array(self) -> np.ndarray:
        return self._array

    def to_bytes(self) -> bytes:
        return self._array.tobytes()

    def __eq__(self, other):
        if isinstance(other, Offsets):
            return np.array_equal(self._array, other._array)
        return NotImplemented

    __hash__ = None

    def __repr__(self):
        return f"Offsets({self._array.tolist()!r})"
