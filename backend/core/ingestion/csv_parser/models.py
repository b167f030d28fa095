# csv_parser/models.py
"""
Data models for the csv_parser.
"""

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class ParseOptions:
    """Options for a single parse call."""
    delimiter: str = ","
    quote_char: str = '"'
    skip_empty_lines: bool = True
    skip_header_lines: int = 0
    trim_fields: bool = True

    def __post_init__(self):
        if len(self.delimiter) != 1:
            raise ValueError(f"delimiter must be a single character, got {self.delimiter!r}")
        if len(self.quote_char) != 1:
            raise ValueError(f"quote_char must be a single character, got {self.quote_char!r}")
        if self.skip_header_lines < 0:
            raise ValueError("skip_header_lines must be non-negative")


@dataclass
class ParseResult:
    """Best-effort result of parsing a CSV document."""
    headers: List[str] = field(default_factory=list)
    rows: List[List[str]] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)

    @property
    def total_columns(self) -> int:
        return len(self.headers)

    def records(self) -> List[dict]:
        """Rows keyed by header name."""
        return [dict(zip(self.headers, row)) for row in self.rows]


@dataclass
class RowOutcome:
    """Tagged outcome of parsing one data line."""
    ok: bool
    values: List[str] = field(default_factory=list)
    error: Optional[str] = None

    @classmethod
    def success(cls, values: List[str]) -> "RowOutcome":
        return cls(ok=True, values=values)

    @classmethod
    def failure(cls, message: str) -> "RowOutcome":
        return cls(ok=False, error=message)
