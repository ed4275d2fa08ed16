"""Shortcuts for the `DEAD` pattern, including the wall-clock helpers."""
from typing import Optional, Tuple

from deadyet.clock import Clock, current_unix
from deadyet.iterators import PatternIterator, PatternRangeIterator
from deadyet.matcher import contains_pattern
from deadyet.offsets import next_match_offset, next_match_offset_at_alignment
from deadyet.utils import NoMatchError

DEAD_PATTERN = 0xDEAD
DEAD_MASK = 0xFFFF


def has_dead(number: int) -> bool:
    return contains_pattern(number, DEAD_PATTERN)


def next_dead_offset(number: int) -> Optional[int]:
    """Distance to the next value containing DEAD, 0 if `number` already does."""
    return next_match_offset(number, DEAD_PATTERN, DEAD_MASK)


def next_dead_offset_at_alignment(number: int, lshd: int) -> Optional[int]:
    """Distance to the next DEAD ignoring the `lshd` least significant digits."""
    return next_match_offset_at_alignment(number, lshd, DEAD_PATTERN, DEAD_MASK)


def dead_iterator(start: int) -> PatternIterator:
    return PatternIterator(start, DEAD_PATTERN, DEAD_MASK)


def dead_range_iterator(start: int) -> PatternRangeIterator:
    return PatternRangeIterator(start, DEAD_PATTERN, DEAD_MASK)


def is_it_dead(clock: Optional[Clock] = None) -> bool:
    """Whether the current unix timestamp contains DEAD."""
    return has_dead(current_unix(clock))


def seconds_until_dead(clock: Optional[Clock] = None) -> Optional[int]:
    return next_dead_offset(current_unix(clock))


def next_dead(clock: Optional[Clock] = None) -> Tuple[int, int]:
    """Return (seconds until the next DEAD timestamp, that timestamp)."""
    now = current_unix(clock)
    diff = next_dead_offset(now)
    if diff is None:
        raise NoMatchError(f"no DEAD timestamp after {now}")
    return diff, now + diff
