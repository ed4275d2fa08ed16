from datetime import datetime, timezone
from typing import Iterable, Optional, Tuple

from rich.panel import Panel
from rich.table import Table

from deadyet.hexdigits import decode
from deadyet.utils import format_hex


COLORS = {
    "match": "bold yellow on black",
    "digits": "cyan",
    "offset": "green",
    "dead": "bold red",
    "alive": "spring_green2",
}

HEX_CHARS = "0123456789ABCDEF"


def highlight_digits(value: int, pattern: int) -> str:
    """Hex string of `value` with every occurrence of `pattern` marked up."""
    digits = decode(value)
    pattern_digits = decode(pattern)
    width = len(pattern_digits)

    marked = [False] * len(digits)
    for start in range(len(digits) - width + 1):
        if digits[start:start + width] == pattern_digits:
            for i in range(start, start + width):
                marked[i] = True

    parts = []
    for digit, is_match in zip(digits, marked):
        style = COLORS["match"] if is_match else COLORS["digits"]
        parts.append(f"[{style}]{HEX_CHARS[digit]}[/{style}]")
    return "0x" + "".join(parts)


def render_matches(values: Iterable[int], pattern: int, start: int) -> Table:
    """Table of successive matches and their distance from `start`."""
    table = Table(title=f"Matches of {format_hex(pattern)} from {format_hex(start)}")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Hex")
    table.add_column("Decimal", justify="right")
    table.add_column("Offset", justify="right", style=COLORS["offset"])

    for index, value in enumerate(values):
        table.add_row(str(index), highlight_digits(value, pattern), str(value), str(value - start))
    return table


def render_ranges(ranges: Iterable[Tuple[int, int]], pattern: int) -> Table:
    table = Table(title=f"Ranges containing {format_hex(pattern)}")
    table.add_column("#", justify="right", style="dim")
    table.add_column("From")
    table.add_column("To")
    table.add_column("Length", justify="right", style=COLORS["offset"])

    for index, (lo, hi) in enumerate(ranges):
        table.add_row(
            str(index),
            highlight_digits(lo, pattern),
            highlight_digits(hi, pattern),
            str(hi - lo + 1),
        )
    return table


def render_now(now: int, dead: bool, next_s: Optional[int], pattern: int) -> Panel:
    """Panel describing the current timestamp and the next DEAD moment."""
    state = "[{0}]DEAD[/{0}]".format(COLORS["dead"]) if dead else "[{0}]alive[/{0}]".format(COLORS["alive"])
    lines = [
        f"Now:  {highlight_digits(now, pattern)} ({now})",
        f"Is it dead yet?  {state}",
    ]
    if next_s is None:
        lines.append("No further match in the u64 range.")
    else:
        next_time = now + next_s
        try:
            when = datetime.fromtimestamp(next_time, tz=timezone.utc).isoformat()
        except (OverflowError, OSError, ValueError):
            when = "beyond the calendar"
        lines.append(f"Next: {highlight_digits(next_time, pattern)} in {next_s} s ({when})")
    return Panel("\n".join(lines), title="deadyet", border_style="dim")
