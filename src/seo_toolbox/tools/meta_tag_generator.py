"""Meta, Open Graph and Twitter Card tags for a page.

Unlike the estimate tools the fallback here is fully deterministic: the tag
blocks are rendered straight from the page details the caller supplied.
"""

import json
from datetime import datetime, timezone
from html import escape
from typing import Dict, List, Literal

from pydantic import BaseModel, Field, field_validator

from ..fallback.fields import Const, Derived, Obj
from .base import Tool

Priority = Literal["high", "medium", "low"]

_OPTIONAL_FIELDS = (
    "keywords", "author", "canonical", "og_image", "site_name", "twitter_site", "twitter_creator",
)


class MetaTagParams(BaseModel):
    title: str
    description: str
    keywords: str = ""
    author: str = ""
    robots: str = "index, follow"
    canonical: str = ""
    og_image: str = ""
    og_type: str = "website"
    site_name: str = ""
    twitter_card: Literal["summary", "summary_large_image", "app", "player"] = "summary_large_image"
    twitter_site: str = ""
    twitter_creator: str = ""
    schema_type: str = "WebPage"

    @field_validator("title", "description")
    @classmethod
    def required_text(cls, v: str) -> str:
        v = " ".join(v.split())
        if not v:
            raise ValueError("must not be blank")
        return v

    @field_validator(*_OPTIONAL_FIELDS, "robots", "og_type", "schema_type")
    @classmethod
    def strip_text(cls, v: str) -> str:
        return v.strip()


class MetaRecommendation(BaseModel):
    type: str
    message: str
    priority: Priority

class SnippetPreview(BaseModel):
    title: str
    description: str
    url: str

class CardPreview(BaseModel):
    title: str
    description: str
    image: str

class MetaPreview(BaseModel):
    google: SnippetPreview
    facebook: CardPreview
    twitter: CardPreview

class MetaTagReport(BaseModel):
    basic_meta: str
    open_graph: str
    twitter_cards: str
    structured_data: str
    complete_html: str
    seo_score: int = Field(..., ge=0, le=100)
    recommendations: List[MetaRecommendation]
    preview: MetaPreview


def _tag(fmt: str, value: str) -> List[str]:
    return [fmt.format(escape(value))] if value else []

def basic_meta(ctx: Dict) -> str:
    lines = [
        "<!-- Basic Meta Tags -->",
        '<meta charset="UTF-8">',
        '<meta name="viewport" content="width=device-width, initial-scale=1.0">',
        f"<title>{escape(ctx['title'])}</title>",
        f'<meta name="description" content="{escape(ctx["description"])}">',
        *_tag('<meta name="keywords" content="{}">', ctx["keywords"]),
        *_tag('<meta name="author" content="{}">', ctx["author"]),
        f'<meta name="robots" content="{escape(ctx["robots"])}">',
        *_tag('<link rel="canonical" href="{}">', ctx["canonical"]),
    ]
    return "\n".join(lines)

def open_graph(ctx: Dict) -> str:
    lines = [
        "<!-- Open Graph Meta Tags -->",
        f'<meta property="og:title" content="{escape(ctx["title"])}">',
        f'<meta property="og:description" content="{escape(ctx["description"])}">',
        f'<meta property="og:type" content="{escape(ctx["og_type"])}">',
        f'<meta property="og:url" content="{escape(ctx["url"])}">',
        *_tag('<meta property="og:image" content="{}">', ctx["og_image"]),
        *_tag('<meta property="og:site_name" content="{}">', ctx["site_name"]),
    ]
    return "\n".join(lines)

def twitter_cards(ctx: Dict) -> str:
    lines = [
        "<!-- Twitter Card Meta Tags -->",
        f'<meta name="twitter:card" content="{escape(ctx["twitter_card"])}">',
        f'<meta name="twitter:title" content="{escape(ctx["title"])}">',
        f'<meta name="twitter:description" content="{escape(ctx["description"])}">',
        *_tag('<meta name="twitter:image" content="{}">', ctx["og_image"]),
        *_tag('<meta name="twitter:site" content="{}">', ctx["twitter_site"]),
        *_tag('<meta name="twitter:creator" content="{}">', ctx["twitter_creator"]),
    ]
    return "\n".join(lines)

def structured_data(ctx: Dict) -> str:
    data = {
        "@context": "https://schema.org",
        "@type": ctx["schema_type"],
        "name": ctx["title"],
        "description": ctx["description"],
        "url": ctx["url"],
    }
    if ctx["og_image"]:
        data["image"] = ctx["og_image"]
    if ctx["author"]:
        data["author"] = {"@type": "Person", "name": ctx["author"]}
    data["dateModified"] = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
    # "</" would end the script element early
    body = json.dumps(data, indent=2, ensure_ascii=False).replace("</", "<\\/")
    return "<!-- Structured Data -->\n" + f'<script type="application/ld+json">\n{body}\n</script>'

def complete_html(report: Dict) -> str:
    head = "\n\n".join(
        report[key] for key in ("basic_meta", "open_graph", "twitter_cards", "structured_data")
    )
    return (
        '<!DOCTYPE html>\n<html lang="en">\n<head>\n'
        f"{head}\n"
        "</head>\n<body>\n  <!-- Your page content here -->\n</body>\n</html>"
    )

def meta_score(ctx: Dict) -> int:
    """70 for the required tags, plus points for ideal lengths, a share image and a canonical link."""
    score = 70
    if 30 <= len(ctx["title"]) <= 60:
        score += 10
    if 120 <= len(ctx["description"]) <= 160:
        score += 10
    if ctx["og_image"]:
        score += 5
    if ctx["canonical"]:
        score += 5
    return score

def _preview(ctx: Dict) -> Dict:
    card = {"title": ctx["title"], "description": ctx["description"], "image": ctx["og_image"]}
    return {
        "google": {
            "title": ctx["title"],
            "description": ctx["description"],
            "url": ctx["canonical"] or ctx["url"],
        },
        "facebook": dict(card),
        "twitter": dict(card),
    }


FALLBACK = Obj({
    "basic_meta": Derived(lambda report, ctx: basic_meta(ctx)),
    "open_graph": Derived(lambda report, ctx: open_graph(ctx)),
    "twitter_cards": Derived(lambda report, ctx: twitter_cards(ctx)),
    "structured_data": Derived(lambda report, ctx: structured_data(ctx)),
    "complete_html": Derived(lambda report, ctx: complete_html(report)),
    "seo_score": Derived(lambda report, ctx: meta_score(ctx)),
    "recommendations": Const([
        {
            "type": "Title Optimization",
            "message": "Consider adding your brand name to the title for better recognition",
            "priority": "medium",
        },
        {
            "type": "Image Optimization",
            "message": "Add high-quality images for Open Graph and Twitter cards",
            "priority": "high",
        },
        {
            "type": "Structured Data",
            "message": "Consider adding more specific structured data based on your content type",
            "priority": "medium",
        },
    ]),
    "preview": Derived(lambda report, ctx: _preview(ctx)),
})


class MetaTagTool(Tool):
    def prompt_context(self, ctx):
        given = [f"- {name}: {ctx[name]}" for name in _OPTIONAL_FIELDS if ctx[name]]
        ctx["optional_lines"] = "\n".join(given) or "- none"
        return ctx


TOOL = MetaTagTool(
    name="meta-tag-generator",
    description="Meta, Open Graph, Twitter Card and structured data tags for a page",
    subject_kind="url",
    template="meta_tag_generator",
    result_model=MetaTagReport,
    fallback=FALLBACK,
    params_model=MetaTagParams,
)
