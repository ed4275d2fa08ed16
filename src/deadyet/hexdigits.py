"""Hex digit decoding.

Values are decoded into their big-endian nibble sequence with no leading
zero digits, so the length of a decoding tracks the magnitude of the value.
"""
from functools import singledispatch
from typing import List, Union

from deadyet.utils import OutOfRangeError, U64_DIGITS, check_u64

BytesLike = Union[bytes, bytearray, memoryview]


@singledispatch
def decode(value) -> List[int]:
    """Return the hex digits of `value`, most significant first."""
    raise OutOfRangeError(f"cannot decode {type(value).__name__} as hex digits")


@decode.register
def _(value: int) -> List[int]:
    check_u64(value)
    if value == 0:
        return [0]
    digits = []
    while value:
        value, nibble = divmod(value, 16)
        digits.append(nibble)
    digits.reverse()
    return digits


@decode.register(bytes)
@decode.register(bytearray)
@decode.register(memoryview)
def _(value: BytesLike) -> List[int]:
    raw = bytes(value)
    if len(raw) > U64_DIGITS // 2:
        raise OutOfRangeError(f"byte string too long for u64: {len(raw)} bytes")
    return decode(int.from_bytes(raw, "big"))


def digit_count(value) -> int:
    return len(decode(value))


def to_pattern_int(value) -> int:
    """Fold a decoding back into an int: [13, 14, 10, 13] -> 0xDEAD."""
    result = 0
    for nibble in decode(value):
        result = result * 16 + nibble
    return result
