from typing import Literal, Union

U64_BITS = 64
U64_DIGITS = U64_BITS // 4
U64_MAX = (1 << U64_BITS) - 1

type NumberBase = Union[Literal["auto", "hex", "dec"], str]


class DeadyetError(Exception):
    pass

class OutOfRangeError(DeadyetError, ValueError):
    pass

class InvalidAlignmentError(DeadyetError, ValueError):
    pass

class InvalidPatternError(DeadyetError, ValueError):
    pass

class PartialMaskError(InvalidPatternError):
    pass

class NoMatchError(DeadyetError, LookupError):
    pass

class ClockError(DeadyetError, RuntimeError):
    pass


def check_u64(value: int, name: str = "value") -> int:
    """Reject anything that is not an unsigned 64-bit integer."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise OutOfRangeError(f"{name} must be an int, got {type(value).__name__}")
    if value < 0 or value > U64_MAX:
        raise OutOfRangeError(f"{name} out of u64 range: {value}")
    return value


def check_alignment(lshd: int) -> int:
    """Reject alignments whose shift would reach past the 64-bit width."""
    if isinstance(lshd, bool) or not isinstance(lshd, int):
        raise InvalidAlignmentError(f"alignment must be an int, got {type(lshd).__name__}")
    if lshd < 0 or 4 * lshd >= U64_BITS:
        raise InvalidAlignmentError(f"alignment must be in 0..{U64_DIGITS - 1}, got {lshd}")
    return lshd


def is_full_mask(mask: int) -> bool:
    """True for masks of the form 2**(4k) - 1 with k >= 1."""
    return mask > 0 and mask & (mask + 1) == 0 and mask.bit_length() % 4 == 0


def parse_number(text: str, base: NumberBase = "auto") -> int:
    """Parse a user supplied number into a u64.

    `auto` honours 0x/0o/0b prefixes and falls back to decimal, `hex` accepts
    bare digits with an optional 0x prefix, `dec` is decimal only.
    """
    text = text.strip().replace("_", "")
    if not text:
        raise OutOfRangeError("empty number")
    if base == "auto":
        radix = 0 if text[:2].lower() in ("0x", "0o", "0b") else 10
    elif base == "hex":
        radix = 16
    elif base == "dec":
        radix = 10
    else:
        raise ValueError(f"Invalid number base: {base}")

    try:
        value = int(text, radix)
    except ValueError:
        raise OutOfRangeError(f"not a valid {base} number: {text!r}") from None
    return check_u64(value, "number")


def format_hex(value: int) -> str:
    """Format like the decoder sees it: uppercase digits, no padding."""
    return f"0x{value:X}"
