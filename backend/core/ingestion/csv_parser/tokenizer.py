# csv_parser/tokenizer.py
"""
Quote-aware tokenizer for a single CSV line.
"""

from typing import List


def tokenize_line(line: str, delimiter: str = ",", quote_char: str = '"',
                  trim_fields: bool = True) -> List[str]:
    """
    Split one line into field values.

    A doubled quote inside a quoted section yields one literal quote; any
    other quote toggles the quoted state. Unterminated quotes never raise,
    whatever was buffered is flushed at end of line.

    Note: with ``trim_fields`` the whole field is trimmed after quote
    removal, so whitespace inside quotes is trimmed too. Downstream data
    relies on this.

    Args:
        line: Raw text line without its line terminator
        delimiter: Single-character field separator
        quote_char: Single-character quote
        trim_fields: Strip surrounding whitespace from every field

    Returns:
        List of field values (never empty)
    """
    fields: List[str] = []
    current: List[str] = []
    in_quotes = False
    i = 0
    length = len(line)

    def close_field():
        value = "".join(current)
        fields.append(value.strip() if trim_fields else value)
        current.clear()

    while i < length:
        char = line[i]

        if char == quote_char:
            if in_quotes and i + 1 < length and line[i + 1] == quote_char:
                # Escaped quote
                current.append(quote_char)
                i += 2
            else:
                in_quotes = not in_quotes
                i += 1
        elif char == delimiter and not in_quotes:
            close_field()
            i += 1
        else:
            current.append(char)
            i += 1

    # Last field is always emitted
    close_field()

    return fields
