from typing import List, Literal, Optional

from pydantic import BaseModel


class CheckResponse(BaseModel):
    number_hex: str
    pattern_hex: str
    found: bool


class DeadResponse(BaseModel):
    number: int
    number_hex: str
    answer: Literal["yes", "no"]


class IsDeadResponse(BaseModel):
    now: int
    dead: bool
    next_s: Optional[int]
    next_time: Optional[int]


class NextResponse(BaseModel):
    number_hex: str
    pattern_hex: str
    mask_hex: str
    offset: Optional[int]
    target_hex: Optional[str]


class MatchesResponse(BaseModel):
    pattern_hex: str
    matches: List[str]


class MatchRange(BaseModel):
    lo: str
    hi: str
    length: int


class RangesResponse(BaseModel):
    pattern_hex: str
    ranges: List[MatchRange]
