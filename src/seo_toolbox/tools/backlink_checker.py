"""Backlink profile analysis for a URL's domain."""

from typing import List

from pydantic import BaseModel, Field

from ..fallback.fields import Const, Derived, IntRange, Items, Obj, Share, Text
from .base import Tool


class BacklinkProfile(BaseModel):
    dofollow: int
    nofollow: int
    text_links: int
    image_links: int
    redirect_links: int

class TopBacklink(BaseModel):
    source_url: str
    source_domain: str
    anchor_text: str
    link_type: str
    domain_authority: int = Field(..., ge=0, le=100)
    page_authority: int = Field(..., ge=0, le=100)
    spam_score: int = Field(..., ge=0, le=100)
    first_seen: str
    last_seen: str

class AnchorTextShare(BaseModel):
    anchor_text: str
    count: int
    percentage: float
    type: str

class LinkQuality(BaseModel):
    high_quality: int
    medium_quality: int
    low_quality: int
    toxic_links: int

class CompetitorBacklinks(BaseModel):
    domain: str
    backlinks: int
    referring_domains: int
    domain_authority: int

class GrowthTrend(BaseModel):
    month: str
    new_backlinks: int
    lost_backlinks: int
    net_growth: int

class BacklinkRecommendations(BaseModel):
    opportunities: List[str]
    risks: List[str]
    action_items: List[str]

class BacklinkReport(BaseModel):
    domain: str
    total_backlinks: int
    referring_domains: int
    domain_authority: int = Field(..., ge=0, le=100)
    page_authority: int = Field(..., ge=0, le=100)
    spam_score: int = Field(..., ge=0, le=100)
    trust_flow: int = Field(..., ge=0, le=100)
    citation_flow: int = Field(..., ge=0, le=100)
    backlink_profile: BacklinkProfile
    top_backlinks: List[TopBacklink]
    anchor_text_distribution: List[AnchorTextShare]
    link_quality_analysis: LinkQuality
    competitor_comparison: List[CompetitorBacklinks]
    growth_trends: List[GrowthTrend]
    recommendations: BacklinkRecommendations


def _backlink(source_url, source_domain, anchor, link_type, da, pa, spam, first_seen, last_seen):
    return Obj({
        "source_url": Text(source_url),
        "source_domain": Const(source_domain),
        "anchor_text": Text(anchor),
        "link_type": Const(link_type),
        "domain_authority": IntRange(*da),
        "page_authority": IntRange(*pa),
        "spam_score": IntRange(*spam),
        "first_seen": Const(first_seen),
        "last_seen": Const(last_seen),
    })

def _anchor(text, count, kind):
    return Obj({
        "anchor_text": Text(text),
        "count": IntRange(*count),
        "percentage": Const(0),
        "type": Const(kind),
    })

def _competitor(n, backlinks, referring, da):
    return Obj({
        "domain": Text(f"competitor{n}-{{stem}}.com"),
        "backlinks": IntRange(*backlinks),
        "referring_domains": IntRange(*referring),
        "domain_authority": IntRange(*da),
    })

def _month(label, new, lost):
    return Obj({
        "month": Const(label),
        "new_backlinks": IntRange(*new),
        "lost_backlinks": IntRange(*lost),
        "net_growth": Derived(lambda m, ctx: m["new_backlinks"] - m["lost_backlinks"]),
    })


FALLBACK = Obj({
    "domain": Text("{domain}"),
    "total_backlinks": IntRange(10000, 50000),
    "referring_domains": IntRange(1000, 5000),
    "domain_authority": IntRange(40, 40),
    "page_authority": IntRange(35, 35),
    "spam_score": IntRange(5, 30),
    "trust_flow": IntRange(40, 30),
    "citation_flow": IntRange(45, 25),
    "backlink_profile": Obj({
        "dofollow": IntRange(15000, 30000),
        "nofollow": IntRange(8000, 20000),
        "text_links": IntRange(18000, 35000),
        "image_links": IntRange(3000, 8000),
        "redirect_links": IntRange(500, 2000),
    }),
    "top_backlinks": Items(
        _backlink("https://example1.com/article-about-{stem}", "example1.com", "{stem} guide",
                  "dofollow", (70, 20), (65, 15), (2, 10), "2024-01-15", "2024-06-20"),
        _backlink("https://industry-blog.com/review-{stem}", "industry-blog.com", "check out {domain}",
                  "dofollow", (65, 15), (60, 12), (3, 8), "2024-02-10", "2024-06-18"),
        _backlink("https://news-site.com/feature-{stem}", "news-site.com", "{domain}",
                  "dofollow", (72, 18), (68, 14), (1, 5), "2024-03-05", "2024-06-22"),
        _backlink("https://resource-hub.com/tools-like-{stem}", "resource-hub.com", "useful tool",
                  "nofollow", (58, 12), (55, 10), (5, 12), "2024-04-12", "2024-06-15"),
        _backlink("https://forum.com/discussion-{stem}", "forum.com", "click here",
                  "nofollow", (50, 10), (48, 8), (8, 15), "2024-05-08", "2024-06-10"),
    ),
    "anchor_text_distribution": Items(
        _anchor("{domain}", (2000, 5000), "branded"),
        _anchor("click here", (1500, 3000), "generic"),
        _anchor("{stem} tool", (1000, 2000), "partial_match"),
        _anchor("useful resource", (800, 1500), "generic"),
        _anchor("https://{domain}", (500, 1000), "naked_url"),
        shares={"percentage": Share(100, by="count")},
    ),
    "link_quality_analysis": Obj({
        "high_quality": IntRange(8000, 15000),
        "medium_quality": IntRange(12000, 20000),
        "low_quality": IntRange(5000, 10000),
        "toxic_links": IntRange(200, 2000),
    }),
    "competitor_comparison": Items(
        _competitor(1, (40000, 80000), (4000, 8000), (75, 15)),
        _competitor(2, (30000, 60000), (3000, 6000), (68, 12)),
        _competitor(3, (20000, 40000), (2000, 4000), (60, 10)),
    ),
    "growth_trends": Items(
        _month("Jan 2024", (200, 500), (50, 200)),
        _month("Feb 2024", (250, 600), (60, 180)),
        _month("Mar 2024", (300, 550), (40, 150)),
        _month("Apr 2024", (280, 520), (55, 170)),
        _month("May 2024", (320, 580), (45, 160)),
        _month("Jun 2024", (350, 600), (50, 150)),
    ),
    "recommendations": Obj({
        "opportunities": Const([
            "Reach out to industry publications that already cover similar tools",
            "Turn unlinked brand mentions into links",
            "Publish data-driven resources that attract editorial links",
        ]),
        "risks": Const([
            "Toxic links may need a disavow review",
            "Generic anchors dominate part of the profile",
        ]),
        "action_items": Const([
            "Audit the lowest-quality referring domains",
            "Diversify anchor text toward branded and partial-match phrases",
            "Track new and lost links monthly",
        ]),
    }),
})


TOOL = Tool(
    name="backlink-checker",
    description="Backlink profile, anchor text distribution and link quality for a URL's domain",
    subject_kind="domain",
    template="backlink_checker",
    result_model=BacklinkReport,
    fallback=FALLBACK,
)
