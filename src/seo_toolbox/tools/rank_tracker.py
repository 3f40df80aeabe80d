"""Estimated search positions of a domain for a set of tracked keywords."""

from datetime import datetime, timezone
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, Field, field_validator

from ..fallback.fields import Const, Derived, Each, IntRange, Maybe, Obj, Text
from .base import Tool

Device = Literal["desktop", "mobile"]
Trend = Literal["up", "down", "stable", "new"]

MAX_TRACKED_KEYWORDS = 25


class RankTrackerParams(BaseModel):
    keywords: List[str]
    location: str = ""
    device: Device = "desktop"

    @field_validator("keywords")
    @classmethod
    def clean_keywords(cls, v: List[str]) -> List[str]:
        cleaned: List[str] = []
        for kw in v:
            kw = " ".join(kw.split())
            if kw and kw not in cleaned:
                cleaned.append(kw)
        if not cleaned:
            raise ValueError("at least one keyword is required")
        if len(cleaned) > MAX_TRACKED_KEYWORDS:
            raise ValueError(f"at most {MAX_TRACKED_KEYWORDS} keywords can be tracked at once")
        return cleaned

    @field_validator("location")
    @classmethod
    def clean_location(cls, v: str) -> str:
        return v.strip()


class KeywordRanking(BaseModel):
    keyword: str
    position: Optional[int] = Field(None, ge=1, le=100)
    url: Optional[str] = None
    search_volume: Optional[int] = Field(None, ge=0)
    difficulty: Optional[int] = Field(None, ge=0, le=100)
    trend: Trend
    previous_position: Optional[int] = None
    change: int = 0

class RankTrackerReport(BaseModel):
    domain: str
    location: str
    device: Device
    total_keywords: int = Field(..., ge=0)
    average_position: float = Field(..., ge=0)
    top_rankings: int = Field(..., ge=0)
    rankings: List[KeywordRanking]
    last_updated: str
    visibility: float = Field(..., ge=0)


def click_through_rate(position: int) -> float:
    if position <= 3:
        return 0.3
    if position <= 10:
        return 0.1
    return 0.02

def summarize(rankings: List[Dict]) -> Dict:
    """Average position over ranked keywords, top-10 count and CTR-weighted visibility."""
    ranked = [r for r in rankings if r.get("position")]
    average = sum(r["position"] for r in ranked) / len(ranked) if ranked else 0
    visibility = sum(
        r["search_volume"] * click_through_rate(r["position"])
        for r in ranked if r.get("search_volume")
    )
    return {
        "average_position": round(average, 1),
        "top_rankings": sum(1 for r in ranked if r["position"] <= 10),
        "visibility": round(visibility),
    }


def _ranking_url(ranking: Dict, ctx: Dict) -> Optional[str]:
    if ranking["position"] is None:
        return None
    slug = "-".join(ctx["tracked_keyword"].lower().split())
    return f"https://{ctx['domain']}/{slug}"


FALLBACK = Obj({
    "domain": Text("{domain}"),
    "location": Text("{location_label}"),
    "device": Text("{device}"),
    "total_keywords": Derived(lambda report, ctx: len(ctx["keywords"])),
    "rankings": Each("keywords", "tracked_keyword", Obj({
        "keyword": Text("{tracked_keyword}"),
        # Roughly 30% of tracked keywords do not rank in the top 100
        "position": Maybe(IntRange(1, 50), none_rate=0.3),
        "url": Derived(_ranking_url),
        "search_volume": IntRange(100, 10000),
        "difficulty": IntRange(20, 80),
        "trend": Const("new"),
        "previous_position": Const(None),
        "change": Const(0),
    })),
    "average_position": Derived(lambda report, ctx: summarize(report["rankings"])["average_position"]),
    "top_rankings": Derived(lambda report, ctx: summarize(report["rankings"])["top_rankings"]),
    "visibility": Derived(lambda report, ctx: summarize(report["rankings"])["visibility"]),
    "last_updated": Derived(lambda report, ctx: datetime.now(timezone.utc).isoformat()),
})


class RankTrackerTool(Tool):
    def prompt_context(self, ctx):
        ctx["location_label"] = ctx["location"] or "Global"
        # Empty locations get neutral phrasing instead of a blank in the prompt
        ctx["location_clause"] = (
            f"for searchers in {ctx['location']}" if ctx["location"] else "without any location targeting"
        )
        ctx["keyword_lines"] = "\n".join(f"- {kw}" for kw in ctx["keywords"])
        return ctx


TOOL = RankTrackerTool(
    name="rank-tracker",
    description="Estimated ranking positions, visibility and trends for tracked keywords",
    subject_kind="domain",
    template="rank_tracker",
    result_model=RankTrackerReport,
    fallback=FALLBACK,
    params_model=RankTrackerParams,
)
