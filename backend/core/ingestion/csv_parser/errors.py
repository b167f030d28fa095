# csv_parser/errors.py
"""
Normalized diagnostics of the csv_parser.

Diagnostics are plain strings so they can be forwarded untouched into
``LoadingResult.errors``.
"""


class CsvParserErrors:
    """Factory of diagnostic messages."""

    @staticmethod
    def no_data_lines() -> str:
        return "No data lines found in CSV"

    @staticmethod
    def column_count_mismatch(line_number: int, expected: int, actual: int) -> str:
        return f"Row {line_number}: Expected {expected} columns, got {actual}"

    @staticmethod
    def malformed_row(line_number: int, details: str = "") -> str:
        return f"Row {line_number}: {details or 'Malformed row'}"
