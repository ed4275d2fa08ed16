from typing import Optional, Tuple

import structlog

from deadyet.cache import BoundedCache
from deadyet.hexdigits import digit_count
from deadyet.matcher import contains_pattern
from deadyet.offsets import check_pattern, next_match_offset
from deadyet.utils import PartialMaskError, U64_MAX, check_u64, is_full_mask

log = structlog.get_logger(__name__)


class PatternIterator:
    """Iterate over the values containing a hex pattern, in increasing order.

    >>> it = PatternIterator(0, 0xDEAD, 0xFFFF)
    >>> [hex(next(it)) for _ in range(3)]
    ['0xdead', '0x1dead', '0x2dead']
    """

    def __init__(self, start: int, pattern: int, pattern_mask: int, *,
                 cache: Optional[BoundedCache] = None) -> None:
        check_pattern(pattern, pattern_mask)
        self.current = check_u64(start, "start")
        self.pattern = pattern
        self.pattern_mask = pattern_mask
        self._cache = cache

    def __iter__(self) -> "PatternIterator":
        return self

    def __next__(self) -> int:
        if self.current > U64_MAX:
            raise StopIteration
        offset = next_match_offset(self.current, self.pattern, self.pattern_mask, cache=self._cache)
        if offset is None:
            log.debug("pattern iterator exhausted", current=self.current, pattern=self.pattern)
            self.current = U64_MAX + 1
            raise StopIteration
        found = self.current + offset
        self.current = found + 1
        return found


class PatternRangeIterator:
    """Iterate over maximal runs of consecutive values containing a hex pattern.

    Only defined for full masks (2**(4k) - 1): every value sharing the digits
    of a match from some position upward also matches, which is what lets a
    run be described by its first value and a digit position.

    >>> it = PatternRangeIterator(0xB00B00, 0xB00B5, 0xFFFFF)
    >>> [(hex(lo), hex(hi)) for lo, hi in (next(it), next(it))]
    [('0xb00b50', '0xb00b5f'), ('0xbb00b5', '0xbb00b5')]
    """

    def __init__(self, start: int, pattern: int, pattern_mask: int, *,
                 cache: Optional[BoundedCache] = None) -> None:
        check_pattern(pattern, pattern_mask)
        if not is_full_mask(pattern_mask):
            raise PartialMaskError(
                f"range iteration needs a full mask (2**(4k) - 1), got 0x{pattern_mask:X}"
            )
        self.current = check_u64(start, "start")
        self.pattern = pattern
        self.pattern_mask = pattern_mask
        self._cache = cache

    def __iter__(self) -> "PatternRangeIterator":
        return self

    def __next__(self) -> Tuple[int, int]:
        if self.current > U64_MAX:
            raise StopIteration
        offset = next_match_offset(self.current, self.pattern, self.pattern_mask, cache=self._cache)
        if offset is None:
            log.debug("range iterator exhausted", current=self.current, pattern=self.pattern)
            self.current = U64_MAX + 1
            raise StopIteration

        start_of_next = self.current + offset
        end = start_of_next
        for i in reversed(range(digit_count(start_of_next))):
            if contains_pattern(start_of_next >> (4 * i), self.pattern):
                # Digits below position i are free.
                end = start_of_next | ((1 << (4 * i)) - 1)
                break

        self.current = end + 1
        return start_of_next, end


def iterate_matches(start: int, pattern: int, pattern_mask: int, *,
                    cache: Optional[BoundedCache] = None) -> PatternIterator:
    return PatternIterator(start, pattern, pattern_mask, cache=cache)


def iterate_match_ranges(start: int, pattern: int, pattern_mask: int, *,
                         cache: Optional[BoundedCache] = None) -> PatternRangeIterator:
    return PatternRangeIterator(start, pattern, pattern_mask, cache=cache)
