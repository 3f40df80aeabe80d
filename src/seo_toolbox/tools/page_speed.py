"""Page speed estimate for a URL on a mobile or desktop device.

The vendor is asked for a Lighthouse-style report. The fallback keeps metric
values, statuses and the overall grade consistent with the generated scores.
"""

from datetime import datetime
from typing import Dict, List, Literal, Tuple

from pydantic import BaseModel, Field

from ..fallback.fields import Const, Derived, Flag, FloatRange, Fmt, IntRange, Items, Obj, Share, Switch, Text
from .base import Tool

Status = Literal["good", "needs-improvement", "poor"]
Impact = Literal["high", "medium", "low"]
Device = Literal["mobile", "desktop"]


class PageSpeedParams(BaseModel):
    device_type: Device = "mobile"


class Threshold(BaseModel):
    good: float
    poor: float

class PerformanceMetric(BaseModel):
    name: str
    value: float
    unit: str
    score: float = Field(..., ge=0, le=100)
    status: Status
    description: str
    threshold: Threshold

class SpeedMetrics(BaseModel):
    first_contentful_paint: PerformanceMetric
    largest_contentful_paint: PerformanceMetric
    first_input_delay: PerformanceMetric
    cumulative_layout_shift: PerformanceMetric
    speed_index: PerformanceMetric
    time_to_interactive: PerformanceMetric

class Opportunity(BaseModel):
    title: str
    description: str
    impact: Impact
    savings: str
    category: str
    recommendations: List[str]

class ResourceBreakdown(BaseModel):
    type: str
    count: int = Field(..., ge=0)
    size: str
    load_time: str
    percentage: float = Field(..., ge=0, le=100)

class TechnicalDetails(BaseModel):
    total_page_size: str
    total_requests: int
    dom_elements: int
    server_response_time: str
    compression_enabled: bool
    image_optimization: float
    css_minification: bool
    js_minification: bool
    browser_caching: bool
    cdn_usage: bool

class SpeedRecommendations(BaseModel):
    critical: List[str]
    important: List[str]
    minor: List[str]

class Comparison(BaseModel):
    industry_average: float
    top_performers: float
    your_score: float

class PageSpeedReport(BaseModel):
    url: str
    test_date: str
    device_type: Device
    overall_score: float = Field(..., ge=0, le=100)
    grade: str
    metrics: SpeedMetrics
    opportunities: List[Opportunity]
    resource_breakdown: List[ResourceBreakdown]
    technical_details: TechnicalDetails
    recommendations: SpeedRecommendations
    comparison: Comparison


def grade_for(score: float) -> str:
    if score >= 90:
        return "A"
    if score >= 80:
        return "B"
    if score >= 70:
        return "C"
    if score >= 60:
        return "D"
    return "F"

def status_for(score: float) -> str:
    if score >= 80:
        return "good"
    if score >= 50:
        return "needs-improvement"
    return "poor"

# Value ranges per status band: (good, needs-improvement, poor)
Bands = Tuple[Tuple[float, float], Tuple[float, float], Tuple[float, float]]

def metric_value(score: float, bands: Bands, digits: int = 2) -> float:
    """Place a metric value inside the band its score falls in; higher scores give lower values."""
    if score >= 80:
        (lo, hi), t = bands[0], (score - 80) / 20
    elif score >= 50:
        (lo, hi), t = bands[1], (score - 50) / 30
    else:
        (lo, hi), t = bands[2], score / 50
    return round(hi - min(t, 1.0) * (hi - lo), digits)


_SCORE = Switch("device_type", {"mobile": IntRange(50, 21), "desktop": IntRange(70, 21)})

def _metric(name, unit, description, good, poor, bands: Bands):
    return Obj({
        "name": Const(name),
        "score": _SCORE,
        "value": Derived(lambda m, ctx: metric_value(m["score"], bands)),
        "unit": Const(unit),
        "status": Derived(lambda m, ctx: status_for(m["score"])),
        "description": Const(description),
        "threshold": Const({"good": good, "poor": poor}),
    })

_METRICS = Obj({
    "first_contentful_paint": _metric(
        "First Contentful Paint", "s", "Time until the first text or image is painted",
        1.8, 3.0, ((0.5, 1.8), (1.8, 3.0), (3.0, 6.0))),
    "largest_contentful_paint": _metric(
        "Largest Contentful Paint", "s", "Time until the largest text or image is painted",
        2.5, 4.0, ((1.0, 2.5), (2.5, 4.0), (4.0, 8.0))),
    "first_input_delay": _metric(
        "First Input Delay", "ms",
        "Time from when a user first interacts with your page to when the browser responds",
        100, 300, ((10, 100), (100, 300), (300, 600))),
    "cumulative_layout_shift": _metric(
        "Cumulative Layout Shift", "", "Measures visual stability by quantifying unexpected layout shifts",
        0.1, 0.25, ((0.01, 0.1), (0.1, 0.25), (0.25, 0.5))),
    "speed_index": _metric(
        "Speed Index", "s", "How quickly the contents of a page are visibly populated",
        3.4, 5.8, ((1.5, 3.4), (3.4, 5.8), (5.8, 10.0))),
    "time_to_interactive": _metric(
        "Time to Interactive", "s", "Time until the page becomes fully interactive",
        3.8, 7.3, ((2.0, 3.8), (3.8, 7.3), (7.3, 15.0))),
})

def _overall(report: Dict, ctx) -> int:
    scores = [m["score"] for m in report["metrics"].values()]
    return round(sum(scores) / len(scores))

_BENCHMARKS = {"mobile": (55, 85), "desktop": (75, 95)}

def _comparison(report: Dict, ctx) -> Dict:
    industry_average, top_performers = _BENCHMARKS[ctx["device_type"]]
    return {
        "industry_average": industry_average,
        "top_performers": top_performers,
        "your_score": report["overall_score"],
    }

def _size_kb(resource: Dict) -> int:
    return int(resource["size"].split()[0])

def _resource(kind, count):
    return Obj({
        "type": Const(kind),
        "count": IntRange(count, 5),
        "size": Fmt("{} KB", IntRange(100, 900)),
        "load_time": Fmt("{}s", FloatRange(0.3, 2.2, 1)),
        "percentage": Const(0),
    })


FALLBACK = Obj({
    "url": Text("{url}"),
    "test_date": Derived(lambda report, ctx: datetime.now().strftime("%Y-%m-%d %H:%M:%S")),
    "device_type": Text("{device_type}"),
    "metrics": _METRICS,
    "overall_score": Derived(_overall),
    "grade": Derived(lambda report, ctx: grade_for(report["overall_score"])),
    "opportunities": Items(
        Obj({
            "title": Const("Optimize images"),
            "description": Const("Properly size images to save cellular data and improve load time"),
            "impact": Const("high"),
            "savings": Fmt("{}s", FloatRange(1.0, 2.0, 1)),
            "category": Const("Images"),
            "recommendations": Const([
                "Serve images in next-gen formats like WebP",
                "Properly size images for different screen sizes",
                "Use lazy loading for off-screen images",
            ]),
        }),
        Obj({
            "title": Const("Eliminate render-blocking resources"),
            "description": Const("Resources are blocking the first paint of your page"),
            "impact": Const("medium"),
            "savings": Fmt("{}s", FloatRange(0.5, 1.5, 1)),
            "category": Const("CSS/JS"),
            "recommendations": Const([
                "Inline critical CSS",
                "Defer non-critical CSS",
                "Remove unused CSS and JavaScript",
            ]),
        }),
        Obj({
            "title": Const("Reduce server response time"),
            "description": Const("Server response time is slower than recommended"),
            "impact": Const("medium"),
            "savings": Fmt("{}s", FloatRange(0.3, 1.2, 1)),
            "category": Const("Server"),
            "recommendations": Const([
                "Optimize server configuration",
                "Use a faster hosting provider",
                "Implement server-side caching",
            ]),
        }),
    ),
    "resource_breakdown": Items(
        _resource("Images", 15),
        _resource("JavaScript", 8),
        _resource("CSS", 5),
        _resource("Fonts", 3),
        _resource("Other", 7),
        shares={"percentage": Share(100, by=_size_kb)},
    ),
    "technical_details": Obj({
        "total_page_size": Switch("device_type", {
            "mobile": Fmt("{} MB", FloatRange(1.5, 1.5)),
            "desktop": Fmt("{} MB", FloatRange(2.0, 2.0)),
        }),
        "total_requests": IntRange(20, 30),
        "dom_elements": IntRange(500, 1000),
        "server_response_time": Fmt("{}ms", IntRange(200, 500)),
        "compression_enabled": Flag(0.7),
        "image_optimization": IntRange(50, 40),
        "css_minification": Flag(0.6),
        "js_minification": Flag(0.7),
        "browser_caching": Flag(0.8),
        "cdn_usage": Flag(0.5),
    }),
    "recommendations": Const({
        "critical": [
            "Optimize and compress images to reduce file sizes",
            "Enable CSS and JavaScript minification",
            "Implement a Content Delivery Network (CDN)",
        ],
        "important": [
            "Eliminate render-blocking CSS and JavaScript",
            "Reduce server response time",
            "Implement lazy loading for images",
        ],
        "minor": [
            "Reduce DOM complexity",
            "Optimize web fonts loading",
            "Enable text compression",
        ],
    }),
    "comparison": Derived(_comparison),
})


TOOL = Tool(
    name="page-speed-test",
    description="Core Web Vitals style speed report with opportunities for a URL",
    subject_kind="url",
    template="page_speed",
    result_model=PageSpeedReport,
    fallback=FALLBACK,
    params_model=PageSpeedParams,
)
