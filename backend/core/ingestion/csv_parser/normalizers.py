# csv_parser/normalizers.py
"""
Field normalizers applied by row parsers after parsing.

All functions are total: they never raise and fall back to a safe default.
"""

import re
import unicodedata
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP, Context
from dataclasses import dataclass, field
from typing import Any, Iterable, List, Mapping, Optional

_SURROUNDING_QUOTES = re.compile(r"^[\"'‘’“”]|[\"'‘’“”]$")
_WHITESPACE = re.compile(r"\s+")
_NON_PERCENT = re.compile(r"[^\d.]")
_NON_NUMERIC = re.compile(r"[^\d.\-]")
_NON_DIGIT = re.compile(r"\D")
_LEADING_FLOAT = re.compile(r"^-?(\d+\.?\d*|\.\d+)")

# Wide enough for any finite float
_WIDE_CONTEXT = Context(prec=400)


_CLEAN_FIELD_PUNCTUATION = "-.()"


def _keep_word_chars(text: str, extra: str = "") -> str:
    """Drop everything but word characters, whitespace, combining marks and ``extra``.

    Combining marks (Malayalam vowel signs, virama) are kept so Indic names
    survive intact.
    """
    return "".join(
        char for char in text
        if char.isalnum() or char == "_" or char.isspace() or char in extra
        or unicodedata.category(char).startswith("M")
    )


def _leading_float(text: str) -> Optional[float]:
    """Parse the longest numeric prefix of ``text``, ``None`` if there is none."""
    match = _LEADING_FLOAT.match(text.strip())
    if not match:
        return None
    return float(match.group(0))


def clean_field(value: Optional[Any]) -> str:
    """Trim, drop one layer of surrounding quotes and stray symbols."""
    if not value:
        return ""

    text = str(value).strip()
    text = _SURROUNDING_QUOTES.sub("", text)
    text = _WHITESPACE.sub(" ", text)
    text = _keep_word_chars(text, _CLEAN_FIELD_PUNCTUATION)
    return text.strip()


def parse_percentage(value: Optional[Any]) -> str:
    """Format a percentage-like value as ``"12.30%"``; ``"0%"`` when unparseable."""
    if not value:
        return "0%"

    parsed = _leading_float(_NON_PERCENT.sub("", str(value)))
    if parsed is None:
        return "0%"

    # Round half up on the exact binary value: 7.125 -> 7.13, 1.005 -> 1.00
    try:
        rounded = Decimal(parsed).quantize(
            Decimal("0.01"), rounding=ROUND_HALF_UP, context=_WIDE_CONTEXT
        )
    except InvalidOperation:
        return f"{parsed:.2f}%"

    return f"{rounded}%"


def parse_numeric(value: Optional[Any], fallback: float = 0) -> float:
    """Parse a number out of a noisy field, ``fallback`` when unparseable."""
    if not value:
        return fallback

    parsed = _leading_float(_NON_NUMERIC.sub("", str(value)))
    return fallback if parsed is None else parsed


def format_phone_number(value: Optional[str]) -> str:
    """Prefix Indian mobile numbers with ``+91``."""
    if not value:
        return ""

    digits = _NON_DIGIT.sub("", value)

    if len(digits) == 10:
        return f"+91 {digits}"
    if len(digits) == 12 and digits.startswith("91"):
        return f"+{digits}"

    return value


def normalize_name(value: Optional[str]) -> str:
    """Fold a name into a comparison key."""
    if not value:
        return ""

    text = value.lower().strip()
    text = _WHITESPACE.sub(" ", text)
    text = _keep_word_chars(text)
    return text.strip()


@dataclass
class ValidationOutcome:
    """Result of a required-field check."""
    is_valid: bool
    missing_fields: List[str] = field(default_factory=list)


def validate_required_fields(record: Mapping[str, Optional[str]],
                             required_keys: Iterable[str]) -> ValidationOutcome:
    """A field is missing when absent, blank or ``n/a`` (any case)."""
    missing = []

    for key in required_keys:
        value = record.get(key)
        if not value or not value.strip() or value.lower() == "n/a":
            missing.append(key)

    return ValidationOutcome(is_valid=not missing, missing_fields=missing)
