"""Analysis tools exposed by the API.

Each module defines a result model, a fallback table and a TOOL instance.
get_tool() resolves the URL name used by the HTTP layer.
"""

from typing import Dict, List

from .base import Tool
from . import (
    backlink_checker,
    keyword_competition,
    keyword_research,
    long_tail_keywords,
    meta_tag_generator,
    page_speed,
    rank_tracker,
    ssl_checker,
    valuable_backlink,
    website_link_count,
    website_seo_score,
)

TOOLS: Dict[str, Tool] = {
    module.TOOL.name: module.TOOL
    for module in (
        backlink_checker,
        keyword_research,
        long_tail_keywords,
        keyword_competition,
        page_speed,
        rank_tracker,
        meta_tag_generator,
        ssl_checker,
        website_seo_score,
        website_link_count,
        valuable_backlink,
    )
}

def get_tool(name: str) -> Tool:
    """Raises KeyError for unknown tool names."""
    return TOOLS[name]

def list_tools() -> List[Tool]:
    return list(TOOLS.values())
