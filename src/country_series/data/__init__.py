"""Record models and parsers for country series files."""

from .files import DEFAULT_DATA_FILE, FIRST_YEAR, MIN_CAPACITY, MISSING_VALUE
from .models import CountryRecord, Observation, RecordParseError, SeriesRecord
from .parser import (
    iter_country_rows,
    parse_country_record,
    parse_series_record,
    read_country_block,
    split_line,
)

__all__ = [
    "CountryRecord",
    "DEFAULT_DATA_FILE",
    "FIRST_YEAR",
    "MIN_CAPACITY",
    "MISSING_VALUE",
    "Observation",
    "RecordParseError",
    "SeriesRecord",
    "iter_country_rows",
    "parse_country_record",
    "parse_series_record",
    "read_country_block",
    "split_line",
]
