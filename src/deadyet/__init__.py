"""Find hex patterns such as DEAD in the hex digits of unsigned integers."""
from deadyet.cache import BoundedCache, default_cache
from deadyet.clock import current_unix
from deadyet.dead import (
    DEAD_MASK,
    DEAD_PATTERN,
    dead_iterator,
    dead_range_iterator,
    has_dead,
    is_it_dead,
    next_dead,
    next_dead_offset,
    next_dead_offset_at_alignment,
    seconds_until_dead,
)
from deadyet.hexdigits import decode, digit_count, to_pattern_int
from deadyet.iterators import (
    PatternIterator,
    PatternRangeIterator,
    iterate_match_ranges,
    iterate_matches,
)
from deadyet.matcher import contains_pattern
from deadyet.offsets import next_match_offset, next_match_offset_at_alignment, offset_at_alignment
from deadyet.utils import (
    ClockError,
    DeadyetError,
    InvalidAlignmentError,
    InvalidPatternError,
    NoMatchError,
    OutOfRangeError,
    PartialMaskError,
    U64_MAX,
)

__all__ = [
    "BoundedCache",
    "ClockError",
    "DEAD_MASK",
    "DEAD_PATTERN",
    "DeadyetError",
    "InvalidAlignmentError",
    "InvalidPatternError",
    "NoMatchError",
    "OutOfRangeError",
    "PartialMaskError",
    "PatternIterator",
    "PatternRangeIterator",
    "U64_MAX",
    "contains_pattern",
    "current_unix",
    "dead_iterator",
    "dead_range_iterator",
    "decode",
    "default_cache",
    "digit_count",
    "has_dead",
    "is_it_dead",
    "iterate_match_ranges",
    "iterate_matches",
    "next_dead",
    "next_dead_offset",
    "next_dead_offset_at_alignment",
    "next_match_offset",
    "next_match_offset_at_alignment",
    "offset_at_alignment",
    "seconds_until_dead",
    "to_pattern_int",
]
