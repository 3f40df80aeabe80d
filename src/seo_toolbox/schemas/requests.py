"""Pydantic schemas for the HTTP boundary.

Defines AnalysisRequest (what a tool endpoint accepts) and AnalysisResult (what it returns).
"""

from pydantic import BaseModel, Field
from typing import Any, Dict, List, Literal, Optional

from ..llm.client import VendorType

Source = Literal["generated", "fallback"]

class AnalysisRequest(BaseModel):
    subject: Optional[str] = Field(None, description="URL, domain or keyword to analyze")
    vendor: Optional[VendorType] = Field(None, description="Generation backend; server default when omitted")
    params: Dict[str, Any] = Field(default_factory=dict, description="Tool-specific options")

class AnalysisResult(BaseModel):
    tool: str
    vendor: VendorType
    source: Source
    data: Dict[str, Any]

class ToolInfo(BaseModel):
    name: str
    description: str
    subject_kind: str

class ToolList(BaseModel):
    tools: List[ToolInfo]
