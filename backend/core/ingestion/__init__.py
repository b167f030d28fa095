# core/ingestion/__init__.py
"""
CSV ingestion: quote-aware parsing plus cached, observable loading.
"""

from .csv_parser import parse_csv, tokenize_line, ParseOptions, ParseResult
from .loading import DataLoadingManager, LoadingState, LoadingResult

__all__ = [
    'parse_csv',
    'tokenize_line',
    'ParseOptions',
    'ParseResult',
    'DataLoadingManager',
    'LoadingState',
    'LoadingResult'
]
