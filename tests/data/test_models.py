"""Unit tests for the data models."""

import pytest

from country_series.data.models import (
    CountryRecord,
    Observation,
    RecordParseError,
    SeriesRecord,
    load_country_record,
    load_series_record,
)


@pytest.mark.parametrize(
    "value, expected",
    [
        (-1, None),
        (-1.0, None),
        (None, None),
        (0, 0.0),
        (-2.5, -2.5),
        ("12.5", 12.5),
    ],
)
def test_observation_value_conversion(value, expected):
    """Test that the missing marker becomes None."""
    assert Observation(year=1960, value=value).value == expected


def test_observation_with_value():
    """Test that with_value returns a new observation."""
    missing = Observation(year="1961")
    filled = missing.with_value(4.0)
    assert missing.is_valid is False
    assert filled.is_valid is True
    assert filled.year == 1961


def test_series_record_observations():
    """Test that columns map to consecutive years from 1960."""
    record = SeriesRecord(name=" GDP ", code=" G ", values=[1.0, -1.0, 3.0])
    assert record.name == "GDP"
    assert record.code == "G"
    assert record.observations() == [
        Observation(1960, 1.0),
        Observation(1961, None),
        Observation(1962, 3.0),
    ]


def test_load_series_record_with_no_values():
    """A series line may carry no observations at all."""
    record = load_series_record(["GDP", "G"])
    assert record.values == ()


def test_load_country_record_builds_nested_series():
    """Test loading a full country record."""
    record = load_country_record(["Chile", "CHL", "GDP", "G", "1", "2"])
    assert isinstance(record, CountryRecord)
    assert record.series == SeriesRecord(name="GDP", code="G", values=[1.0, 2.0])


def test_load_country_record_requires_series_fields():
    """Test that a country line without series fields is rejected."""
    with pytest.raises(RecordParseError):
        load_country_record(["Chile", "CHL"])


def test_load_series_record_ignores_trailing_delimiter():
    """A single trailing empty cell ends the record."""
    record = load_series_record(["GDP", "G", "1", "2", ""])
    assert record.values == (1.0, 2.0)


def test_load_series_record_rejects_empty_inner_cell():
    """An empty cell inside the record is still invalid."""
    with pytest.raises(RecordParseError) as exc_info:
        load_series_record(["GDP", "G", "1", "", "3"])
    assert exc_info.value.field_name == "values.1"
