# loading/__init__.py
"""
Cached, observable CSV loading with bounded retries.
"""

from .models import LoadingState, LoadingResult
from .errors import (
    LoadingError,
    TransportError,
    HttpStatusError,
    EmptyResponseError,
    FetchTimeoutError,
    ExhaustedRetriesError
)
from .state_store import LoadingStateStore
from .fetcher import CsvFetcher
from .manager import DataLoadingManager

__all__ = [
    'LoadingState',
    'LoadingResult',
    'LoadingError',
    'TransportError',
    'HttpStatusError',
    'EmptyResponseError',
    'FetchTimeoutError',
    'ExhaustedRetriesError',
    'LoadingStateStore',
    'CsvFetcher',
    'DataLoadingManager'
]
