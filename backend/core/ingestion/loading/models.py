# loading/models.py
"""
Data models for loading state and results.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Generic, List, Optional, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class LoadingState:
    """Loading state of one data source."""
    is_loading: bool = False
    is_loaded: bool = False
    error: Optional[str] = None
    last_updated: Optional[datetime] = None

    @property
    def status(self) -> str:
        if self.is_loading:
            return "loading"
        if self.error:
            return "error"
        if self.is_loaded:
            return "loaded"
        return "idle"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status": self.status,
            "is_loading": self.is_loading,
            "is_loaded": self.is_loaded,
            "error": self.error,
            "last_updated": self.last_updated.isoformat() if self.last_updated else None
        }


IDLE_STATE = LoadingState()


@dataclass
class LoadingResult(Generic[T]):
    """What a load hands back to the caller: data plus diagnostics."""
    data: T
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
