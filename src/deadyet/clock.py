import math
import time
from typing import Callable, Optional

from deadyet.utils import ClockError, U64_MAX

Clock = Callable[[], float]


def system_clock() -> float:
    return time.time()


def current_unix(clock: Optional[Clock] = None) -> int:
    """Current unix time in whole seconds.

    Raises ClockError when the clock reports a time before the epoch or a
    value that cannot be a timestamp.
    """
    clock = clock or system_clock
    try:
        now = float(clock())
    except (TypeError, ValueError, OverflowError, OSError) as e:
        raise ClockError(f"clock failed: {e}") from e

    if not math.isfinite(now):
        raise ClockError(f"clock returned a non-finite time: {now}")
    if now < 0:
        raise ClockError("system time is before the unix epoch")

    seconds = int(now)
    if seconds > U64_MAX:
        raise ClockError(f"clock time out of u64 range: {seconds}")
    return seconds
