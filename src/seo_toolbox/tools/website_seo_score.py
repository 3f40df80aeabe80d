"""Overall SEO score for a page across eight weighted areas.

The fallback first synthesizes the page facts (title, headings, links, vitals)
and then scores every area from them, so the metrics, issues and grade always
agree with the technical details in the same report.
"""

from datetime import datetime, timezone
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, Field

from ..fallback.fields import Choice, Const, Derived, Flag, FloatRange, Fmt, IntRange, Maybe, Obj, Text
from .base import Tool

MetricStatus = Literal["good", "warning", "critical"]
Severity = Literal["critical", "warning", "info"]

# Lighthouse category defaults used when only the performance score is known
ACCESSIBILITY_SCORE = 80
BEST_PRACTICES_SCORE = 75
LIGHTHOUSE_SEO_SCORE = 80


class SeoMetric(BaseModel):
    name: str
    score: int = Field(..., ge=0, le=100)
    max_score: int = 100
    status: MetricStatus
    description: str
    recommendations: List[str]

class SeoMetrics(BaseModel):
    technical_seo: SeoMetric
    on_page_seo: SeoMetric
    content_quality: SeoMetric
    user_experience: SeoMetric
    mobile_optimization: SeoMetric
    page_speed: SeoMetric
    security: SeoMetric
    social_signals: SeoMetric

class SeoIssue(BaseModel):
    category: str
    issue: str
    severity: Severity
    description: str
    recommendation: str
    impact: str

class KeywordAnalysis(BaseModel):
    primary_keywords: List[str]
    keyword_density: Dict[str, float]
    missing_keywords: List[str]
    keyword_opportunities: List[str]

class CompetitorScore(BaseModel):
    domain: str
    seo_score: int = Field(..., ge=0, le=100)
    strengths: List[str]
    weaknesses: List[str]
    opportunities: List[str]

class SeoRecommendations(BaseModel):
    immediate_fixes: List[str]
    short_term_improvements: List[str]
    long_term_strategy: List[str]

class CoreWebVitals(BaseModel):
    lcp: float = Field(..., ge=0)
    fid: float = Field(..., ge=0)
    cls: float = Field(..., ge=0)

class PageDetails(BaseModel):
    page_title: Optional[str] = None
    meta_description: Optional[str] = None
    h1_tags: List[str]
    h2_tags: List[str]
    images_without_alt: int = Field(..., ge=0)
    internal_links: int = Field(..., ge=0)
    external_links: int = Field(..., ge=0)
    word_count: int = Field(0, ge=0)
    page_size: str
    load_time: str
    ssl_certificate: bool
    mobile_friendly: bool
    structured_data: bool
    open_graph: bool = False
    page_speed_score: int = Field(..., ge=0, le=100)
    core_web_vitals: CoreWebVitals

class SeoScoreReport(BaseModel):
    url: str
    overall_score: int = Field(..., ge=0, le=100)
    grade: str
    last_analyzed: str
    metrics: SeoMetrics
    issues: List[SeoIssue]
    keyword_analysis: KeywordAnalysis
    competitor_analysis: List[CompetitorScore]
    recommendations: SeoRecommendations
    technical_details: PageDetails


GRADE_FLOORS = ((90, "A+"), (85, "A"), (80, "B+"), (75, "B"), (70, "C+"), (65, "C"), (60, "D+"), (50, "D"))

def grade_for(score: float) -> str:
    for floor, grade in GRADE_FLOORS:
        if score >= floor:
            return grade
    return "F"

def status_for(score: float) -> str:
    if score >= 80:
        return "good"
    if score >= 60:
        return "warning"
    return "critical"


def _length_score(text: Optional[str], lo: int, hi: int) -> int:
    if not text:
        return 0
    return 100 if lo <= len(text) <= hi else 70

def _metric(name: str, score: float, description: str, recommendations: List[str]) -> Dict:
    score = round(score)
    return {
        "name": name,
        "score": score,
        "max_score": 100,
        "status": status_for(score),
        "description": description,
        "recommendations": recommendations,
    }

def score_metrics(details: Dict) -> Dict:
    """Score the eight areas from the page facts in technical_details."""
    title = _length_score(details["page_title"], 30, 60)
    meta = _length_score(details["meta_description"], 120, 160)
    h1_count = len(details["h1_tags"])
    h1 = 100 if h1_count == 1 else 0 if h1_count == 0 else 50
    images = max(0, 100 - 10 * details["images_without_alt"])
    words = details["word_count"]
    content = min(100, words / 10) if words >= 300 else words / 3
    structured = 100 if details["structured_data"] else 50
    speed = details["page_speed_score"]
    mobile = 90 if details["mobile_friendly"] else 50
    security = 100 if details["ssl_certificate"] else 0
    social = 80 if details["open_graph"] else 40

    return {
        "technical_seo": _metric(
            "Technical SEO", (title + meta + h1 + structured + LIGHTHOUSE_SEO_SCORE) / 5,
            "Technical aspects including title tags, meta descriptions, and heading structure",
            (["Optimize title tag length and content"] if title < 100 else [])
            + (["Improve meta description"] if meta < 100 else [])
            + (["Fix H1 tag structure"] if h1 < 100 else []),
        ),
        "on_page_seo": _metric(
            "On-Page SEO", (content + images + ACCESSIBILITY_SCORE) / 3,
            "Content quality and on-page optimization factors",
            (["Increase content length and quality"] if content < 80 else [])
            + (["Add alt text to images"] if images < 90 else []),
        ),
        "content_quality": _metric(
            "Content Quality", content, "Quality and length of content on the page",
            (["Add more comprehensive content"] if words < 300 else [])
            + ["Improve content structure and readability"],
        ),
        "user_experience": _metric(
            "User Experience", (speed + mobile + BEST_PRACTICES_SCORE) / 3,
            "User experience factors including speed and mobile-friendliness",
            (["Improve page loading speed"] if speed < 80 else [])
            + (["Optimize for mobile devices"] if mobile < 80 else []),
        ),
        "mobile_optimization": _metric(
            "Mobile Optimization", mobile, "Mobile-friendliness and responsive design",
            ["Test and improve mobile responsiveness"] if mobile < 90 else [],
        ),
        "page_speed": _metric(
            "Page Speed", speed, "Page loading speed and performance metrics",
            ["Optimize images and media files", "Minimize CSS and JavaScript", "Use browser caching"],
        ),
        "security": _metric(
            "Security", security, "Website security including SSL certificate",
            ["Install SSL certificate", "Ensure HTTPS redirect"] if security < 100
            else ["Security is properly configured"],
        ),
        "social_signals": _metric(
            "Social Signals", social, "Social media integration and sharing capabilities",
            (["Add Open Graph meta tags"] if not details["open_graph"] else [])
            + ["Include social sharing buttons"],
        ),
    }

def overall_score(metrics: Dict) -> int:
    scores = [m["score"] for m in metrics.values()]
    return round(sum(scores) / len(scores))


def find_issues(details: Dict) -> List[Dict]:
    issues: List[Dict] = []

    def add(category, issue, severity, description, recommendation, impact):
        issues.append({
            "category": category,
            "issue": issue,
            "severity": severity,
            "description": description,
            "recommendation": recommendation,
            "impact": impact,
        })

    if not details["page_title"]:
        add("Technical SEO", "Missing page title", "critical", "The page does not have a title tag",
            "Add a descriptive title tag (50-60 characters)", "Critical for search engine rankings")
    if not details["meta_description"]:
        add("Technical SEO", "Missing meta description", "critical", "The page does not have a meta description",
            "Add a compelling meta description (150-160 characters)",
            "Affects click-through rates from search results")
    if not details["h1_tags"]:
        add("On-Page SEO", "Missing H1 tag", "critical", "The page does not have an H1 heading",
            "Add a single, descriptive H1 tag", "Important for content structure and SEO")
    if details["images_without_alt"] > 0:
        add("Accessibility", f"{details['images_without_alt']} images without alt text", "warning",
            "Some images are missing alt attributes", "Add descriptive alt text to all images",
            "Affects accessibility and image SEO")
    if not details["ssl_certificate"]:
        add("Security", "No SSL certificate", "critical", "The website is not using HTTPS",
            "Install and configure SSL certificate", "Critical for security and search rankings")

    vitals = details["core_web_vitals"]
    if vitals["lcp"] > 2500:
        add("Performance", "Poor Largest Contentful Paint", "warning",
            f"LCP is {vitals['lcp']}ms (should be < 2.5s)",
            "Optimize images, remove unused CSS, and improve server response time",
            "Affects user experience and Core Web Vitals score")
    if vitals["cls"] > 0.1:
        add("Performance", "Poor Cumulative Layout Shift", "warning",
            f"CLS is {vitals['cls']} (should be < 0.1)",
            "Add size attributes to images and videos, avoid inserting content above existing content",
            "Affects user experience and Core Web Vitals score")
    return issues


def recommend(details: Dict) -> Dict:
    fixes = []
    if not details["page_title"]:
        fixes.append("Add a title tag")
    if not details["meta_description"]:
        fixes.append("Add meta description")
    if details["images_without_alt"] > 0:
        fixes.append("Add alt text to images")
    if not details["ssl_certificate"]:
        fixes.append("Install SSL certificate")
    return {
        "immediate_fixes": fixes,
        "short_term_improvements": [
            "Optimize content length and quality",
            "Improve internal linking structure",
            "Add structured data markup",
            "Optimize page loading speed",
        ],
        "long_term_strategy": [
            "Develop comprehensive content strategy",
            "Build quality backlinks",
            "Monitor and improve Core Web Vitals",
            "Regular SEO audits and optimizations",
        ],
    }

def _keywords(ctx: Dict) -> Dict:
    primary = [ctx["stem"], f"{ctx['stem']} services", f"{ctx['stem']} online"]
    return {
        "primary_keywords": primary,
        "keyword_density": dict(zip(primary, (2.4, 1.1, 0.6))),
        "missing_keywords": ["Add relevant keywords based on your content"],
        "keyword_opportunities": ["Research long-tail keywords", "Analyze competitor keywords"],
    }


FALLBACK = Obj({
    "url": Text("{url}"),
    "technical_details": Obj({
        "page_title": Maybe(Text("{site_label} | Official Website and Online Services"), none_rate=0.05),
        "meta_description": Maybe(
            Text("{site_label} offers products, services and resources. Learn more about what we do "
                 "and how we can help you today."),
            none_rate=0.2,
        ),
        "h1_tags": Choice([["Welcome to our website"], ["Welcome to our website"], [],
                           ["Welcome to our website", "Latest news"]]),
        "h2_tags": Const(["Our Services", "About Us", "Latest News", "Contact"]),
        "images_without_alt": IntRange(0, 8),
        "internal_links": IntRange(20, 40),
        "external_links": IntRange(2, 13),
        "word_count": IntRange(150, 1200),
        "page_size": Fmt("{}KB", IntRange(80, 320)),
        "load_time": Fmt("{}ms", IntRange(300, 1900)),
        "ssl_certificate": Derived(lambda details, ctx: ctx["url"].lower().startswith("https://")),
        "mobile_friendly": Flag(0.85),
        "structured_data": Flag(0.5),
        "open_graph": Flag(0.6),
        "page_speed_score": IntRange(45, 50),
        "core_web_vitals": Obj({
            "lcp": IntRange(1200, 1800),
            "fid": IntRange(20, 160),
            "cls": FloatRange(0.01, 0.24),
        }),
    }),
    "metrics": Derived(lambda report, ctx: score_metrics(report["technical_details"])),
    "overall_score": Derived(lambda report, ctx: overall_score(report["metrics"])),
    "grade": Derived(lambda report, ctx: grade_for(report["overall_score"])),
    "last_analyzed": Derived(lambda report, ctx: datetime.now(timezone.utc).isoformat()),
    "issues": Derived(lambda report, ctx: find_issues(report["technical_details"])),
    "keyword_analysis": Derived(lambda report, ctx: _keywords(ctx)),
    "competitor_analysis": Const([]),
    "recommendations": Derived(lambda report, ctx: recommend(report["technical_details"])),
})


class SeoScoreTool(Tool):
    def prompt_context(self, ctx):
        ctx["site_label"] = ctx["stem"].capitalize()
        return ctx


TOOL = SeoScoreTool(
    name="website-seo-score-checker",
    description="Overall SEO score, per-area metrics, issues and recommendations for a page",
    subject_kind="url",
    template="website_seo_score",
    result_model=SeoScoreReport,
    fallback=FALLBACK,
)
