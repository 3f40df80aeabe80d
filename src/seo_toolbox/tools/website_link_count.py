"""Internal, external and broken link counts for a page."""

from typing import List, Literal

from pydantic import BaseModel, Field, model_validator

from ..fallback.fields import Const, Derived, IntRange, Items, Obj, Share
from .base import Tool

Placement = Literal["Navigation", "Content", "Footer", "Sidebar"]

# Relative weight of each page region when splitting the total link count
PLACEMENT_WEIGHTS = {"Navigation": 3, "Content": 5, "Footer": 1.5, "Sidebar": 1}


class DomainCount(BaseModel):
    domain: str
    count: int = Field(..., ge=0)

class PathCount(BaseModel):
    path: str
    count: int = Field(..., ge=0)

class PlacementCount(BaseModel):
    category: Placement
    count: int = Field(..., ge=0)

class LinkCountReport(BaseModel):
    totalLinks: int = Field(..., ge=0)
    internalLinks: int = Field(..., ge=0)
    externalLinks: int = Field(..., ge=0)
    brokenLinks: int = Field(..., ge=0)
    topExternalDomains: List[DomainCount]
    topInternalPaths: List[PathCount]
    linkDistribution: List[PlacementCount]

    @model_validator(mode="after")
    def totals_add_up(self):
        if self.totalLinks != self.internalLinks + self.externalLinks:
            raise ValueError("totalLinks must equal internalLinks + externalLinks")
        return self


def _count(label_field, label, span):
    return Obj({label_field: Const(label), "count": IntRange(*span)})

def _placement(category):
    return Obj({"category": Const(category), "count": Const(0)})


FALLBACK = Obj({
    "internalLinks": IntRange(30, 60),
    "externalLinks": IntRange(5, 25),
    "totalLinks": Derived(lambda report, ctx: report["internalLinks"] + report["externalLinks"]),
    "brokenLinks": IntRange(0, 4),
    "topExternalDomains": Items(
        _count("domain", "facebook.com", (1, 3)),
        _count("domain", "twitter.com", (1, 3)),
        _count("domain", "linkedin.com", (1, 2)),
    ),
    "topInternalPaths": Items(
        _count("path", "/", (3, 5)),
        _count("path", "/about", (2, 3)),
        _count("path", "/blog", (2, 4)),
        _count("path", "/contact", (1, 3)),
    ),
    "linkDistribution": Items(
        *(_placement(category) for category in PLACEMENT_WEIGHTS),
        shares={"count": Share("totalLinks", by=lambda item: PLACEMENT_WEIGHTS[item["category"]])},
    ),
})


TOOL = Tool(
    name="website-link-count-checker",
    description="Internal, external and broken link counts with top domains and link placement for a page",
    subject_kind="url",
    template="website_link_count",
    result_model=LinkCountReport,
    fallback=FALLBACK,
)
