"""Unit tests for the data parser."""

import csv

import pytest

from country_series.data.models import RecordParseError
from country_series.data.parser import (
    iter_country_rows,
    parse_country_record,
    parse_series_record,
    read_country_block,
    split_line,
)


def test_split_line():
    """Test tokenizing plain and quoted fields."""
    assert split_line("Canada,CAN,1,2\n") == ["Canada", "CAN", "1", "2"]
    assert split_line('"Korea, Rep.",KOR,1\r\n') == ["Korea, Rep.", "KOR", "1"]
    assert split_line("") == []


def test_parse_series_record():
    """Test parsing a series line into a record."""
    record = parse_series_record(["GDP growth", "NY.GDP", "100", "-1", " 300 "])
    assert record.name == "GDP growth"
    assert record.code == "NY.GDP"
    assert record.values == (100.0, None, 300.0)


def test_parse_series_record_rejects_bad_number():
    """A malformed value surfaces as a parse error naming the column."""
    with pytest.raises(RecordParseError) as excinfo:
        parse_series_record(["GDP growth", "NY.GDP", "100", "abc"])
    assert excinfo.value.field_name == "values.1"


@pytest.mark.parametrize("token", ["", "nan", "inf"])
def test_parse_series_record_rejects_non_finite(token):
    """Empty and non-finite tokens are never coerced."""
    with pytest.raises(RecordParseError):
        parse_series_record(["GDP growth", "NY.GDP", token])


def test_parse_series_record_requires_code():
    """Test that a record without a code is rejected."""
    with pytest.raises(RecordParseError):
        parse_series_record(["GDP growth"])


def test_parse_country_record():
    """Test parsing a country line."""
    record = parse_country_record(["Canada", "CAN", "Population", "SP.POP", "5", "7"])
    assert record.country_name == "Canada"
    assert record.country_code == "CAN"
    assert record.series.code == "SP.POP"
    assert record.series.values == (5.0, 7.0)


def test_parse_country_record_reports_nested_field():
    """Errors inside the embedded series carry the nested field path."""
    with pytest.raises(RecordParseError) as excinfo:
        parse_country_record(["Canada", "CAN", "Population", "SP.POP", "5", "x"])
    assert excinfo.value.field_name == "series.values.1"


def test_iter_country_rows_skips_blank_lines(data_file):
    """Test that blank lines are not yielded."""
    rows = list(iter_country_rows(data_file))
    assert len(rows) == 6
    assert all(row for row in rows)


def test_read_country_block_stops_after_contiguous_run(data_file):
    """Only the first contiguous run of a country is returned."""
    block = read_country_block(data_file, "Canada")
    assert [record.series.code for record in block] == ["NY.GDP", "SP.POP", "EMPTY"]


def test_read_country_block_unknown_country(data_file):
    """Test that an absent country yields an empty block."""
    assert read_country_block(data_file, "Peru") == []


def test_read_country_block_parse_failure(data_file):
    """Test that a malformed matching row raises."""
    with pytest.raises(RecordParseError):
        read_country_block(data_file, "Broken")


def test_iter_country_rows_replaces_undecodable_bytes(tmp_path):
    """Non UTF-8 bytes do not abort the scan."""
    path = tmp_path / "latin1.csv"
    path.write_bytes(b"C\xf4te,CIV,S,S1,1,2\nCanada,CAN,GDP,G,1,2\n")
    rows = list(iter_country_rows(path))
    assert rows[0][0] == "C\ufffdte"
    assert rows[1][:2] == ["Canada", "CAN"]


def test_iter_country_rows_reports_unreadable_row(tmp_path):
    """A row the csv reader rejects becomes a parse error."""
    path = tmp_path / "huge.csv"
    oversized = "1" * (csv.field_size_limit() + 1)
    path.write_text(f"Other,OTH,S,S1,{oversized}\nCanada,CAN,GDP,G,1,2\n")
    with pytest.raises(RecordParseError, match="Unreadable row"):
        list(iter_country_rows(path))
