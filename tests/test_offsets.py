import numpy as np
import pytest

from errors import OutOfBoundsError
from offsets import Offsets


def test_get_is_bounds_checked():
    offsets = Offsets([0, -1, 7])
    assert len(offsets) == 3
    assert offsets.get(0) == 0
    assert offsets.get(1) == -1
    assert offsets.get(2) == 7
    assert offsets.get(3) is None
    assert offsets.get(-1) is None


def test_get_unchecked_reads_value():
    offsets = Offsets([5, -3])
    assert offsets.get_unchecked(0) == 5
    assert offsets.get_unchecked(1) == -3
    assert isinstance(offsets.get_unchecked(0), int)


def test_from_bytes_is_little_endian_int32():
    raw = b'\x00\x00\x00\x00' + b'\xff\xff\xff\xff' + b'\x07\x00\x00\x00' + b'trailing'
    offsets = Offsets.from_bytes(raw, 3)
    assert list(offsets) == [0, -1, 7]
    assert offsets.to_bytes() == raw[:12]
    assert offsets.null_count() == 1


def test_from_bytes_too_short():
    with pytest.raises(OutOfBoundsError) as exc:
        Offsets.from_bytes(b'\x00' * 7, 2)
    assert exc.value.length == 8
    assert exc.value.limit == 7


def test_from_bytes_zero_rows():
    assert len(Offsets.from_bytes(b'', 0)) == 0


def test_table_is_read_only():
    offsets = Offsets([1, 2])
    with pytest.raises(ValueError):
        offsets.as_array()[0] = 9


def test_caller_array_keeps_its_flags():
    arr = np.array([1, -1], dtype='<i4')
    offsets = Offsets(arr)
    assert arr.flags.writeable
    assert offsets == Offsets([1, -1])


def test_rejects_multidimensional_input():
    with pytest.raises(ValueError):
        Offsets(np.zeros((2, 2), dtype='<i4'))


def test_wide_array_outside_int32_is_rejected():
    with pytest.raises(OverflowError):
        Offsets(np.array([2**31, 0], dtype=np.int64))
    with pytest.raises(OverflowError):
        Offsets(np.array([-2**31 - 1], dtype=np.int64))


def test_wide_array_inside_int32_is_converted():
    offsets = Offsets(np.array([2**31 - 1, -1, 0], dtype=np.int64))
    assert list(offsets) == [2**31 - 1, -1, 0]
