from itertools import islice

from fastapi import APIRouter, Depends, FastAPI, HTTPException, Query
import structlog

from deadyet.clock import Clock, system_clock, current_unix
from deadyet.dead import has_dead, next_dead_offset
from deadyet.iterators import iterate_match_ranges, iterate_matches
from deadyet.matcher import contains_pattern
from deadyet.offsets import next_match_offset
from deadyet.utils import ClockError, DeadyetError, NumberBase, format_hex, parse_number

from . import models

log = structlog.get_logger(
    processors=[
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.JSONRenderer(indent=2),
    ],
)

MAX_COUNT = 1000

# Create the FastAPI app
app = FastAPI(title="Is It Dead Yet? Demo API")

# Create the router for API endpoints
router = APIRouter()


def get_clock() -> Clock:
    """Wall-clock source, overridable in tests."""
    return system_clock


def parse_param(name: str, value: str, base: NumberBase = "hex") -> int:
    """Parse a path or query parameter, turning bad input into a 400."""
    try:
        return parse_number(value, base)
    except DeadyetError as e:
        log.warning("rejected parameter", param=name, value=value, error=str(e))
        raise HTTPException(status_code=400, detail=f"{name}: {e}")


def dead_answer(number: int) -> models.DeadResponse:
    return models.DeadResponse(
        number=number,
        number_hex=format_hex(number),
        answer="yes" if has_dead(number) else "no",
    )


@router.get("/", response_model=models.IsDeadResponse)
def is_dead_now(clock: Clock = Depends(get_clock)):
    """ Is the current unix timestamp DEAD, and when is the next one? """
    try:
        now = current_unix(clock)
    except ClockError as e:
        log.error("clock failure", error=str(e))
        raise HTTPException(status_code=503, detail=f"{e}")

    next_s = next_dead_offset(now)
    log.info("is it dead", now=now, next_s=next_s)
    return models.IsDeadResponse(
        now=now,
        dead=has_dead(now),
        next_s=next_s,
        next_time=None if next_s is None else now + next_s,
    )


@router.get("/check/{number}/{pattern}", response_model=models.CheckResponse)
def check(number: str, pattern: str):
    """ Both parameters are hex. """
    number_value = parse_param("number", number)
    pattern_value = parse_param("pattern", pattern)
    found = contains_pattern(number_value, pattern_value)
    log.info("check", number=format_hex(number_value), pattern=format_hex(pattern_value), found=found)
    return models.CheckResponse(
        number_hex=format_hex(number_value),
        pattern_hex=format_hex(pattern_value),
        found=found,
    )


@router.get("/dead_hex/{number}", response_model=models.DeadResponse)
def is_dead_hex(number: str):
    return dead_answer(parse_param("number", number, "hex"))


@router.get("/dead_dec/{number}", response_model=models.DeadResponse)
def is_dead_dec(number: str):
    return dead_answer(parse_param("number", number, "dec"))


@router.get("/next/{number}", response_model=models.NextResponse)
def next_match(number: str, pattern: str = "DEAD", mask: str = "FFFF"):
    """ Offset from a hex number to the next value containing the pattern. """
    number_value = parse_param("number", number)
    pattern_value = parse_param("pattern", pattern)
    mask_value = parse_param("mask", mask)
    try:
        offset = next_match_offset(number_value, pattern_value, mask_value)
    except DeadyetError as e:
        log.warning("rejected next query", error=str(e))
        raise HTTPException(status_code=400, detail=f"{e}")

    return models.NextResponse(
        number_hex=format_hex(number_value),
        pattern_hex=format_hex(pattern_value),
        mask_hex=format_hex(mask_value),
        offset=offset,
        target_hex=None if offset is None else format_hex(number_value + offset),
    )


@router.get("/matches/{start}", response_model=models.MatchesResponse)
def matches(
    start: str,
    pattern: str = "DEAD",
    mask: str = "FFFF",
    count: int = Query(10, ge=1, le=MAX_COUNT),
):
    """ Successive values containing the pattern, from a hex start. """
    pattern_value = parse_param("pattern", pattern)
    try:
        found = islice(
            iterate_matches(parse_param("start", start), pattern_value, parse_param("mask", mask)),
            count,
        )
        values = [format_hex(value) for value in found]
    except DeadyetError as e:
        log.warning("rejected matches query", error=str(e))
        raise HTTPException(status_code=400, detail=f"{e}")
    return models.MatchesResponse(pattern_hex=format_hex(pattern_value), matches=values)


@router.get("/ranges/{start}", response_model=models.RangesResponse)
def ranges(
    start: str,
    pattern: str = "DEAD",
    mask: str = "FFFF",
    count: int = Query(10, ge=1, le=MAX_COUNT),
):
    """ Maximal runs of values containing the pattern. The mask must be full. """
    pattern_value = parse_param("pattern", pattern)
    try:
        found = islice(
            iterate_match_ranges(parse_param("start", start), pattern_value, parse_param("mask", mask)),
            count,
        )
        result = [
            models.MatchRange(lo=format_hex(lo), hi=format_hex(hi), length=hi - lo + 1)
            for lo, hi in found
        ]
    except DeadyetError as e:
        log.warning("rejected ranges query", error=str(e))
        raise HTTPException(status_code=400, detail=f"{e}")
    return models.RangesResponse(pattern_hex=format_hex(pattern_value), ranges=result)


# Include the router in the app (after all routes are defined)
app.include_router(router)
