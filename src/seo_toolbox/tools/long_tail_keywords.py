"""Long-tail keyword suggestions grouped by intent, scored by opportunity."""

from typing import List, Literal

from pydantic import BaseModel, Field

from ..fallback.fields import Const, Derived, FloatRange, IntRange, Items, Obj, Text
from .base import Tool

Level = Literal["low", "medium", "high"]
Intent = Literal["informational", "commercial", "navigational", "transactional"]


def opportunity_score(search_volume: int, difficulty: int) -> int:
    """(volume / difficulty) * 10, capped at 100. A zero difficulty counts as 1."""
    return int(min(100, search_volume / max(difficulty, 1) * 10))


class LongTailKeyword(BaseModel):
    keyword: str
    search_volume: int = Field(..., ge=0)
    difficulty: int = Field(..., ge=0, le=100)
    cpc: float = Field(..., ge=0)
    competition: Level
    intent: Intent
    word_count: int = Field(..., ge=1)
    opportunity_score: float = Field(..., ge=0, le=100)

class LongTailReport(BaseModel):
    seed_keyword: str
    total_suggestions: int = Field(..., ge=0)
    long_tail_keywords: List[LongTailKeyword]
    question_based: List[LongTailKeyword]
    location_based: List[LongTailKeyword]
    commercial_intent: List[LongTailKeyword]
    informational_intent: List[LongTailKeyword]


def _suggestion(text, volume, difficulty, cpc, competition, intent):
    return Obj({
        "keyword": Text(text),
        "search_volume": IntRange(*volume),
        "difficulty": IntRange(*difficulty),
        "cpc": FloatRange(*cpc),
        "competition": Const(competition),
        "intent": Const(intent),
        "word_count": Derived(lambda kw, ctx: len(kw["keyword"].split())),
        "opportunity_score": Derived(lambda kw, ctx: opportunity_score(kw["search_volume"], kw["difficulty"])),
    })

_GROUPS = ("long_tail_keywords", "question_based", "location_based", "commercial_intent", "informational_intent")


FALLBACK = Obj({
    "seed_keyword": Text("{keyword}"),
    "long_tail_keywords": Items(
        _suggestion("best {keyword} for beginners", (100, 1000), (10, 40), (0.3, 2), "low", "commercial"),
        _suggestion("how to learn {keyword} quickly", (80, 800), (15, 35), (0.2, 1.5), "low", "informational"),
        _suggestion("{keyword} step by step guide", (60, 600), (20, 30), (0.4, 1.2), "low", "informational"),
    ),
    "question_based": Items(
        _suggestion("what is {keyword}", (50, 500), (10, 25), (0.1, 0.8), "low", "informational"),
        _suggestion("how to use {keyword}", (40, 400), (15, 30), (0.2, 1.0), "low", "informational"),
    ),
    "location_based": Items(
        _suggestion("{keyword} near me", (30, 300), (20, 35), (0.5, 2.0), "medium", "navigational"),
    ),
    "commercial_intent": Items(
        _suggestion("best {keyword} for", (70, 700), (25, 45), (0.8, 3.0), "medium", "commercial"),
        _suggestion("{keyword} reviews", (60, 600), (25, 40), (0.6, 2.5), "medium", "commercial"),
    ),
    "informational_intent": Items(
        _suggestion("{keyword} guide", (90, 900), (10, 30), (0.2, 1.0), "low", "informational"),
        _suggestion("{keyword} tutorial", (80, 800), (10, 25), (0.2, 0.8), "low", "informational"),
    ),
    "total_suggestions": Derived(lambda report, ctx: sum(len(report[g]) for g in _GROUPS)),
})


TOOL = Tool(
    name="long-tail-keyword-suggestion",
    description="Long-tail keyword ideas grouped by intent with an opportunity score",
    subject_kind="keyword",
    template="long_tail_keywords",
    result_model=LongTailReport,
    fallback=FALLBACK,
)
