"""How valuable a backlink from a given page would be.

The fallback draws authority metrics and then labels and summarizes them with
fixed thresholds, so the qualitative analysis always matches the numbers.
"""

from typing import Dict, List, Literal

from pydantic import BaseModel, Field

from ..fallback.fields import Derived, IntRange, Obj, Text
from .base import Tool

Level = Literal["High", "Medium", "Low"]


class LinkMetrics(BaseModel):
    domainAuthority: int = Field(..., ge=0, le=100)
    pageAuthority: int = Field(..., ge=0, le=100)
    trustFlow: int = Field(..., ge=0, le=100)
    citationFlow: int = Field(..., ge=0, le=100)
    spamScore: int = Field(..., ge=0, le=100)
    organicTraffic: int = Field(..., ge=0)

class LinkAnalysis(BaseModel):
    linkQuality: Level
    contentRelevance: Level
    domainTrust: Level
    linkPlacement: Literal["Contextual", "Sidebar", "Footer", "Navigation"]
    anchorTextOptimization: Literal["Natural", "Over-optimized", "Under-optimized"]

class LinkSummary(BaseModel):
    strengths: List[str]
    weaknesses: List[str]
    recommendations: List[str]

class ValuableBacklinkReport(BaseModel):
    url: str
    overallScore: int = Field(..., ge=1, le=100)
    metrics: LinkMetrics
    analysis: LinkAnalysis
    summary: LinkSummary


def level(score: float) -> str:
    if score >= 60:
        return "High"
    if score >= 35:
        return "Medium"
    return "Low"

def value_score(metrics: Dict) -> int:
    """Mean of the authority metrics with spam counted against the link."""
    parts = [
        metrics["domainAuthority"],
        metrics["pageAuthority"],
        metrics["trustFlow"],
        metrics["citationFlow"],
        100 - metrics["spamScore"],
    ]
    return max(1, min(100, round(sum(parts) / len(parts))))

def analyze(report: Dict, ctx: Dict) -> Dict:
    m = report["metrics"]
    trust = m["trustFlow"] + (10 if ctx["url"].lower().startswith("https://") else 0)
    return {
        "linkQuality": level(report["overallScore"]),
        "contentRelevance": level(m["pageAuthority"]),
        "domainTrust": level(trust),
        "linkPlacement": "Contextual",
        "anchorTextOptimization": "Natural" if m["spamScore"] < 20 else "Over-optimized",
    }

def summarize(report: Dict) -> Dict:
    m = report["metrics"]
    a = report["analysis"]
    strengths, weaknesses, recommendations = [], [], []

    if a["domainTrust"] == "High":
        strengths.append("Trusted domain with a strong trust flow")
    else:
        weaknesses.append("Trust flow is below what authoritative sites reach")
        recommendations.append("Earn links from established sites in the same niche")
    if m["domainAuthority"] >= 50:
        strengths.append(f"Domain authority of {m['domainAuthority']} passes meaningful link equity")
    else:
        weaknesses.append(f"Domain authority of {m['domainAuthority']} limits the value passed")
    if m["spamScore"] < 20:
        strengths.append("Low spam score")
    else:
        weaknesses.append(f"Spam score of {m['spamScore']} may make the link risky")
        recommendations.append("Review the linking site's outbound links before pursuing the link")
    if m["citationFlow"] > m["trustFlow"] + 15:
        weaknesses.append("Citation flow far above trust flow suggests many low-quality inbound links")

    recommendations.append("Aim for a contextual placement inside relevant content")
    recommendations.append("Use natural, varied anchor text")
    return {"strengths": strengths, "weaknesses": weaknesses, "recommendations": recommendations}


FALLBACK = Obj({
    "url": Text("{url}"),
    "metrics": Obj({
        "domainAuthority": IntRange(25, 50),
        "pageAuthority": IntRange(20, 45),
        "trustFlow": IntRange(15, 45),
        "citationFlow": IntRange(20, 45),
        "spamScore": IntRange(1, 35),
        "organicTraffic": IntRange(500, 25000),
    }),
    "overallScore": Derived(lambda report, ctx: value_score(report["metrics"])),
    "analysis": Derived(analyze),
    "summary": Derived(lambda report, ctx: summarize(report)),
})


TOOL = Tool(
    name="valuable-backlink-checker",
    description="Authority metrics and an overall value score for a backlink from a page",
    subject_kind="url",
    template="valuable_backlink",
    result_model=ValuableBacklinkReport,
    fallback=FALLBACK,
)
