# tests/io/test_split.py
from __future__ import annotations

import io
import struct

import cloudpickle
import pytest

from func_input.errors import CorruptDescriptor
from func_input.io.split import FunctionSplit
from func_input.parallel.types import Partition


def _square(i: int) -> int:
    return i * i


def test_length_and_locations():
    split = FunctionSplit(5, 10, _square)
    assert split.get_length() == 10
    assert split.get_locations() == []
    assert split.end == 15
    assert split.partition() == Partition(5, 10)


def test_encode_layout_is_big_endian_header_then_payload():
    split = FunctionSplit(6, 4, _square)
    data = split.encode()

    start, length, size = struct.unpack(">iii", data[:12])
    assert (start, length) == (6, 4)
    assert size == len(data) - 12

    f = cloudpickle.loads(data[12:])
    assert f(9) == 81


def test_round_trip_preserves_range_and_function():
    offset = 7
    split = FunctionSplit(3, 5, lambda i: i + offset)

    decoded = FunctionSplit.decode(split.encode())
    assert decoded == split
    assert (decoded.start, decoded.length) == (3, 5)
    assert [decoded.function(i) for i in range(3, 8)] == [10, 11, 12, 13, 14]


def test_decoded_split_has_its_own_function_copy():
    captured = {"k": 1}
    split = FunctionSplit(0, 1, lambda i: captured["k"])
    decoded = FunctionSplit.decode(split.encode())

    captured["k"] = 2
    assert split.function(0) == 2
    assert decoded.function(0) == 1


def test_equality_ignores_function():
    assert FunctionSplit(1, 2, _square) == FunctionSplit(1, 2, lambda i: -i)
    assert FunctionSplit(1, 2, _square) != FunctionSplit(1, 3, _square)


def test_for_partition():
    split = FunctionSplit.for_partition(Partition(2, 8), _square)
    assert (split.start, split.length) == (2, 8)
    assert split.function is _square


def test_stream_write_and_read_leave_following_bytes():
    buf = io.BytesIO()
    FunctionSplit(0, 3, _square).write(buf)
    FunctionSplit(3, 4, _square).write(buf)
    buf.seek(0)

    first = FunctionSplit.read_from(buf)
    second = FunctionSplit.read_from(buf)
    assert (first.start, first.length) == (0, 3)
    assert (second.start, second.length) == (3, 4)
    assert buf.read() == b""


@pytest.mark.parametrize("cut", [0, 3, 8, 11])
def test_truncated_header_raises(cut):
    data = FunctionSplit(0, 4, _square).encode()
    with pytest.raises(CorruptDescriptor):
        FunctionSplit.decode(data[:cut])


def test_truncated_payload_raises():
    data = FunctionSplit(0, 4, _square).encode()
    for cut in (12, 13, len(data) - 1):
        with pytest.raises(CorruptDescriptor):
            FunctionSplit.decode(data[:cut])


def test_trailing_bytes_raise():
    data = FunctionSplit(0, 4, _square).encode()
    with pytest.raises(CorruptDescriptor, match="trailing"):
        FunctionSplit.decode(data + b"\x00")


def test_garbage_payload_raises():
    payload = b"not a pickle"
    data = struct.pack(">iii", 0, 4, len(payload)) + payload
    with pytest.raises(CorruptDescriptor, match="could not be reconstructed"):
        FunctionSplit.decode(data)


def test_non_callable_payload_raises():
    payload = cloudpickle.dumps([1, 2, 3])
    data = struct.pack(">iii", 0, 4, len(payload)) + payload
    with pytest.raises(CorruptDescriptor, match="not a callable"):
        FunctionSplit.decode(data)


def test_negative_fields_raise():
    payload = cloudpickle.dumps(_square)
    with pytest.raises(CorruptDescriptor):
        FunctionSplit.decode(struct.pack(">iii", -1, 4, len(payload)) + payload)
    with pytest.raises(CorruptDescriptor):
        FunctionSplit.decode(struct.pack(">iii", 0, 4, -5))


def test_constructor_rejects_invalid_ranges():
    with pytest.raises(ValueError):
        FunctionSplit(-1, 3, _square)
    with pytest.raises(ValueError):
        FunctionSplit(0, -3, _square)
    with pytest.raises(ValueError):
        FunctionSplit(2**31 - 2, 5, _square)
