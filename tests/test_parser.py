import pytest

from backend.core.ingestion.csv_parser import parse_csv, ParseOptions, ParseResult, RowOutcome


def test_headers_and_rows():
    result = parse_csv("Zone,Org\nA,B\nC,D")

    assert result.headers == ["Zone", "Org"]
    assert result.rows == [["A", "B"], ["C", "D"]]
    assert result.errors == []


def test_short_row_is_padded_with_diagnostic():
    result = parse_csv("Zone,Org\nA,B\nC")

    assert result.headers == ["Zone", "Org"]
    assert result.rows == [["A", "B"], ["C", ""]]
    assert result.errors == ["Row 3: Expected 2 columns, got 1"]


def test_long_row_is_truncated_with_diagnostic():
    result = parse_csv("a,b\n1,2,3,4")

    assert result.rows == [["1", "2"]]
    assert result.errors == ["Row 2: Expected 2 columns, got 4"]


def test_every_row_matches_header_width():
    text = "h1,h2,h3\n1\n1,2\n1,2,3\n1,2,3,4,5\n,,"
    result = parse_csv(text)

    assert all(len(row) == 3 for row in result.rows)
    assert len(result.errors) == 3


def test_row_numbers_account_for_skipped_lines():
    text = "Title line\nSubtitle\nZone,Org\nA,B\nonly-one"
    result = parse_csv(text, ParseOptions(skip_header_lines=2))

    assert result.headers == ["Zone", "Org"]
    assert result.errors == ["Row 5: Expected 2 columns, got 1"]


def test_blank_lines_are_skipped():
    result = parse_csv("a,b\n\n1,2\n   \n3,4\n")

    assert result.rows == [["1", "2"], ["3", "4"]]
    assert result.errors == []


def test_blank_lines_kept_when_not_skipping():
    result = parse_csv("a,b\n\n1,2", ParseOptions(skip_empty_lines=False))

    assert result.rows == [["", ""], ["1", "2"]]
    assert result.errors == ["Row 2: Expected 2 columns, got 1"]


def test_carriage_returns_are_trimmed_from_data_lines():
    result = parse_csv("a,b\r\n1,2\r\n")

    assert result.rows == [["1", "2"]]


def test_skipping_every_line_reports_no_data():
    result = parse_csv("one\ntwo", ParseOptions(skip_header_lines=5))

    assert result.headers == []
    assert result.rows == []
    assert result.errors == ["No data lines found in CSV"]


def test_quoted_fields_in_document():
    result = parse_csv('Name,Note\n"Doe, Jane","said ""ok"""')

    assert result.rows == [["Doe, Jane", 'said "ok"']]


def test_records_are_keyed_by_header():
    result = parse_csv("Zone,Org\nA,B")

    assert result.records() == [{"Zone": "A", "Org": "B"}]
    assert result.total_columns == 2


def test_default_result_is_empty():
    result = ParseResult()

    assert result.headers == [] and result.rows == [] and result.errors == []


def test_row_outcome_tags():
    assert RowOutcome.success(["a"]).ok is True
    failure = RowOutcome.failure("bad")
    assert failure.ok is False
    assert failure.error == "bad"


def test_options_reject_multi_character_delimiter():
    with pytest.raises(ValueError):
        ParseOptions(delimiter="::")
    with pytest.raises(ValueError):
        ParseOptions(skip_header_lines=-1)
