from pydantic import BaseModel, Field
from typing import Any, List, Optional
from datetime import datetime


class LoadingStateResponse(BaseModel):
    source: str
    status: str = Field(..., description="idle, loading, loaded or error")
    is_loading: bool
    is_loaded: bool
    error: Optional[str] = None
    last_updated: Optional[datetime] = None


class DatasetInfo(BaseModel):
    source: str
    path: str
    skip_header_lines: int
    cached: bool
    state: LoadingStateResponse


class LoadResponse(BaseModel):
    """Outcome of loading one dataset"""
    source: str
    success: bool
    errors: List[str] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)
    state: LoadingStateResponse
    data: Any = None


class CacheClearResponse(BaseModel):
    success: bool
    message: str
