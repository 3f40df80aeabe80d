"""Keyword research: volume, difficulty and related terms for a seed keyword."""

from typing import List, Literal

from pydantic import BaseModel, Field

from ..fallback.fields import Choice, Const, FloatRange, IntRange, Items, Obj, Text
from .base import Tool

Level = Literal["low", "medium", "high"]
Trend = Literal["rising", "stable", "declining"]


class KeywordMetrics(BaseModel):
    keyword: str
    search_volume: int = Field(..., ge=0)
    difficulty: int = Field(..., ge=0, le=100)
    cpc: float = Field(..., ge=0)
    competition: Level
    trend: Trend
    related_keywords: List[str] = []

class KeywordResearchReport(BaseModel):
    primary_keyword: KeywordMetrics
    related_keywords: List[KeywordMetrics]
    long_tail_keywords: List[KeywordMetrics]
    questions: List[str]
    suggestions: List[str]


def _keyword(text, volume, difficulty, cpc, competition, trend):
    return Obj({
        "keyword": Text(text),
        "search_volume": IntRange(*volume),
        "difficulty": IntRange(*difficulty),
        "cpc": FloatRange(*cpc),
        "competition": Const(competition),
        "trend": Const(trend),
        "related_keywords": Const([]),
    })


FALLBACK = Obj({
    "primary_keyword": Obj({
        "keyword": Text("{keyword}"),
        "search_volume": IntRange(1000, 10000),
        "difficulty": IntRange(0, 100),
        "cpc": FloatRange(0.5, 5),
        "competition": Choice(["low", "medium", "high"]),
        "trend": Choice(["rising", "stable", "declining"]),
        "related_keywords": Items(Text("{keyword} tips"), Text("{keyword} guide"), Text("{keyword} tools")),
    }),
    "related_keywords": Items(
        _keyword("{keyword} tips", (500, 5000), (0, 80), (0.3, 3), "medium", "stable"),
        _keyword("{keyword} guide", (300, 3000), (0, 70), (0.4, 2), "low", "rising"),
        _keyword("{keyword} tools", (400, 4000), (0, 90), (0.6, 4), "high", "stable"),
    ),
    "long_tail_keywords": Items(
        _keyword("best {keyword} for beginners", (100, 1000), (0, 50), (0.2, 2), "low", "rising"),
        _keyword("how to learn {keyword} quickly", (80, 800), (0, 40), (0.3, 1.5), "low", "stable"),
    ),
    "questions": Items(
        Text("What is {keyword}?"),
        Text("How to use {keyword}?"),
        Text("Best {keyword} practices?"),
        Text("Why is {keyword} important?"),
        Text("{keyword} vs alternatives?"),
    ),
    "suggestions": Items(
        Text("{keyword} strategy"),
        Text("{keyword} optimization"),
        Text("{keyword} analysis"),
        Text("{keyword} best practices"),
        Text("{keyword} implementation"),
    ),
})


TOOL = Tool(
    name="keyword-research",
    description="Search volume, difficulty, CPC and related keywords for a seed keyword",
    subject_kind="keyword",
    template="keyword_research",
    result_model=KeywordResearchReport,
    fallback=FALLBACK,
)
