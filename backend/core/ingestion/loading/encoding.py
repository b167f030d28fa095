# loading/encoding.py
"""
Decoding of fetched CSV bytes.
"""

import logging
from typing import Optional

import chardet

logger = logging.getLogger(__name__)

FALLBACK_ENCODING = "latin-1"


def decode_body(content: bytes, declared: Optional[str] = None) -> str:
    """
    Decode a response body to text.

    UTF-8 first (the static server always serves UTF-8), then the charset the
    server declared, then whatever chardet detects with reasonable confidence.

    Args:
        content: Raw response body
        declared: Charset from the Content-Type header, if any

    Returns:
        Decoded text
    """
    candidates = ["utf-8"]
    if declared and declared.lower() not in candidates:
        candidates.append(declared.lower())

    for encoding in candidates:
        try:
            return content.decode(encoding)
        except (UnicodeDecodeError, LookupError):
            continue

    result = chardet.detect(content)
    detected = (result.get("encoding") or "").lower()
    confidence = result.get("confidence") or 0

    if detected and confidence > 0.5:
        try:
            text = content.decode(detected)
            logger.warning(f"CSV body is not UTF-8, decoded as {detected} ({confidence:.2f})")
            return text
        except (UnicodeDecodeError, LookupError):
            pass

    logger.warning(f"Could not detect CSV encoding, decoding as {FALLBACK_ENCODING}")
    return content.decode(FALLBACK_ENCODING, errors="replace")
