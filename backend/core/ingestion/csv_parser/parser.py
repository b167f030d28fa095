# csv_parser/parser.py
"""
Document-level CSV parsing with column-count validation.
"""

import logging
from typing import List, Optional

from .models import ParseOptions, ParseResult, RowOutcome
from .errors import CsvParserErrors
from .tokenizer import tokenize_line

logger = logging.getLogger(__name__)


def parse_csv(text: str, options: Optional[ParseOptions] = None) -> ParseResult:
    """
    Parse CSV text into headers, rows and diagnostics.

    Never raises on malformed content: every row is coerced to the header
    width (padded with empty strings or truncated) and each mismatch is
    reported in ``errors`` with its line number in the source text.

    Args:
        text: Full CSV document
        options: Parse options (defaults apply when omitted)

    Returns:
        ParseResult
    """
    options = options or ParseOptions()
    result = ParseResult()

    lines = text.split("\n")
    data_lines = lines[options.skip_header_lines:]

    if not data_lines:
        result.errors.append(CsvParserErrors.no_data_lines())
        return result

    result.headers = tokenize_line(
        data_lines[0], options.delimiter, options.quote_char, options.trim_fields
    )
    expected = len(result.headers)

    for index in range(1, len(data_lines)):
        line = data_lines[index].strip()
        # 1-based line number in the source text (skipped lines + header)
        line_number = index + options.skip_header_lines + 1

        if options.skip_empty_lines and not line:
            continue

        outcome = _parse_row(line, options)
        if not outcome.ok:
            result.errors.append(CsvParserErrors.malformed_row(line_number, outcome.error))
            continue

        row = outcome.values
        if len(row) != expected:
            result.errors.append(
                CsvParserErrors.column_count_mismatch(line_number, expected, len(row))
            )
            row = _fit_row(row, expected)

        result.rows.append(row)

    if result.errors:
        logger.debug(f"Parsed {len(result.rows)} rows with {len(result.errors)} diagnostics")

    return result


def _parse_row(line: str, options: ParseOptions) -> RowOutcome:
    """Tokenize one data line into a tagged outcome."""
    values = tokenize_line(line, options.delimiter, options.quote_char, options.trim_fields)
    if not values:
        return RowOutcome.failure("Line produced no fields")
    return RowOutcome.success(values)


def _fit_row(row: List[str], width: int) -> List[str]:
    """Pad with empty strings or truncate to ``width``."""
    if len(row) < width:
        return row + [""] * (width - len(row))
    return row[:width]
