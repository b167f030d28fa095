# csv_parser/__init__.py
"""
Micromodule for quote-aware CSV parsing and field normalization.
"""

from .models import ParseOptions, ParseResult, RowOutcome
from .errors import CsvParserErrors
from .tokenizer import tokenize_line
from .parser import parse_csv
from .normalizers import (
    clean_field,
    parse_percentage,
    parse_numeric,
    format_phone_number,
    normalize_name,
    validate_required_fields,
    ValidationOutcome
)

__all__ = [
    'ParseOptions',
    'ParseResult',
    'RowOutcome',
    'CsvParserErrors',
    'tokenize_line',
    'parse_csv',
    'clean_field',
    'parse_percentage',
    'parse_numeric',
    'format_phone_number',
    'normalize_name',
    'validate_required_fields',
    'ValidationOutcome'
]
