"""
Schemas - Confluence Models

Pydantic models for simplified Confluence tool output.
"""

from pydantic import BaseModel
from typing import List, Optional


class SimplePageResult(BaseModel):
    """A page reduced to what a tool caller needs."""
    id: str
    status: str = "current"
    title: str
    content: str = ""
    url: Optional[str] = None


class PageListResult(BaseModel):
    """A page of SimplePageResult with Confluence pagination metadata."""
    results: List[SimplePageResult]
    start: int = 0
    limit: int = 0
    size: int = 0
