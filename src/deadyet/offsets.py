"""Closed-form distances to the next occurrence of a hex pattern.

An alignment `lshd` names how many least significant hex digits are skipped
before the window `(number >> 4*lshd) & pattern_mask` is compared with the
pattern. For a single alignment the distance to the next number whose window
equals the pattern is computed directly; the global offset is the minimum
over every alignment inside the number's own digit width.
"""
from typing import Optional, Tuple

import structlog

from deadyet.cache import BoundedCache, default_cache
from deadyet.hexdigits import digit_count
from deadyet.utils import (
    InvalidPatternError,
    U64_DIGITS,
    U64_MAX,
    check_alignment,
    check_u64,
)

log = structlog.get_logger(__name__)

CacheKey = Tuple[int, int, int]


def check_pattern(pattern: int, pattern_mask: int) -> None:
    check_u64(pattern, "pattern")
    check_u64(pattern_mask, "pattern_mask")
    if digit_count(pattern_mask) < digit_count(pattern):
        raise InvalidPatternError(
            f"mask 0x{pattern_mask:X} is narrower than pattern 0x{pattern:X}"
        )
    if pattern & ~pattern_mask:
        raise InvalidPatternError(
            f"pattern 0x{pattern:X} has digits outside mask 0x{pattern_mask:X}"
        )


def offset_at_alignment(number: int, lshd: int, pattern: int, pattern_mask: int) -> Optional[int]:
    """Distance from `number` to the next value whose window at `lshd` equals `pattern`.

    Returns None when no such value exists in the u64 domain, either because
    the pattern cannot fit above the skipped digits or because the match would
    lie past U64_MAX.
    """
    check_u64(number, "number")
    check_pattern(pattern, pattern_mask)
    check_alignment(lshd)
    return _offset_at_alignment(number, lshd, pattern, pattern_mask)


def _offset_at_alignment(number: int, lshd: int, pattern: int, pattern_mask: int) -> Optional[int]:
    if digit_count(pattern) > U64_DIGITS - lshd:
        log.debug("pattern does not fit above alignment", lshd=lshd, pattern=pattern)
        return None

    shift = 4 * lshd
    remainder = number & ((1 << shift) - 1)
    restricted = (number >> shift) & pattern_mask

    if restricted > pattern:
        # Roll the window over into its next cycle.
        offset = ((pattern_mask - restricted + pattern + 1) << shift) - remainder
    elif restricted == pattern:
        return 0
    else:
        offset = ((pattern - restricted) << shift) - remainder

    if number + offset > U64_MAX:
        log.debug("match past u64 range", number=number, lshd=lshd)
        return None
    return offset


def next_match_offset_at_alignment(
    number: int, lshd: int, pattern: int, pattern_mask: int
) -> Optional[int]:
    """Distance to the next match while ignoring the `lshd` least significant digits.

    None means no match is possible under this restriction.
    """
    return offset_at_alignment(number, lshd, pattern, pattern_mask)


def _compute_next_match_offset(number: int, pattern: int, pattern_mask: int) -> Optional[int]:
    best: Optional[int] = None
    for lshd in range(digit_count(number)):
        offset = _offset_at_alignment(number, lshd, pattern, pattern_mask)
        if offset is None:
            continue
        if best is None or offset < best:
            best = offset
            if best == 0:
                break
    return best


def next_match_offset(
    number: int,
    pattern: int,
    pattern_mask: int,
    *,
    cache: Optional[BoundedCache[CacheKey, Optional[int]]] = None,
) -> Optional[int]:
    """Smallest non-negative offset that makes `number` contain `pattern` at any alignment.

    Results are memoized in `cache` (the process-wide default when omitted).
    None means no matching value exists between `number` and U64_MAX.
    """
    check_u64(number, "number")
    check_pattern(pattern, pattern_mask)
    if cache is None:
        cache = default_cache()

    key = (number, pattern, pattern_mask)
    try:
        return cache.get(key)
    except KeyError:
        pass

    offset = _compute_next_match_offset(number, pattern, pattern_mask)
    cache.put(key, offset)
    return offset
