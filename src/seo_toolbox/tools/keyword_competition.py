"""Competitors ranking for a keyword and how much of it they own."""

from typing import List

from pydantic import BaseModel, Field

from ..fallback.fields import Const, IntRange, Items, Obj, Share, Text
from .base import Tool


class CompetitorKeywordStats(BaseModel):
    url: str
    keyword_overlap: float = Field(..., ge=0, le=100)
    competitors_keywords: int = Field(..., ge=0)
    common_keywords: int = Field(..., ge=0)
    share: float = Field(..., ge=0, le=100)
    target_keywords: int = Field(..., ge=0)
    dr: int = Field(..., ge=0, le=100)
    traffic: int = Field(..., ge=0)
    value: float = Field(..., ge=0)

class KeywordCompetitionReport(BaseModel):
    keywords: List[CompetitorKeywordStats]


def _competitor(url, overlap, keywords, common, dr, traffic, value):
    return Obj({
        "url": Text(url),
        "keyword_overlap": IntRange(*overlap),
        "competitors_keywords": IntRange(*keywords),
        "common_keywords": IntRange(*common),
        "share": Const(0),
        "target_keywords": IntRange(150, 200),
        "dr": IntRange(*dr),
        "traffic": IntRange(*traffic),
        "value": IntRange(*value),
    })


FALLBACK = Obj({
    "keywords": Items(
        _competitor("{slug}-hub.com", (65, 20), (1200, 600), (200, 100), (60, 15), (40000, 20000), (20000, 10000)),
        _competitor("best-{slug}.com", (55, 15), (1000, 400), (150, 60), (55, 10), (30000, 15000), (15000, 8000)),
        _competitor("{slug}-guide.org", (45, 20), (800, 400), (120, 60), (50, 10), (22000, 12000), (11000, 6000)),
        _competitor("top{slug}.net", (40, 15), (600, 300), (90, 50), (45, 10), (15000, 8000), (7000, 4000)),
        _competitor("{slug}-reviews.com", (30, 20), (400, 300), (60, 40), (40, 10), (9000, 6000), (4000, 3000)),
        shares={"share": Share(100, by="traffic")},
    ),
})


TOOL = Tool(
    name="keyword-competition",
    description="Top competing domains for a keyword with overlap, share, DR and traffic",
    subject_kind="keyword",
    template="keyword_competition",
    result_model=KeywordCompetitionReport,
    fallback=FALLBACK,
)
