"""Parsers for comma-delimited country series files."""

import csv
import io
from collections.abc import Iterable, Iterator
from pathlib import Path

import structlog

from .models import (
    CountryRecord,
    RecordParseError,
    SeriesRecord,
    load_country_record,
    load_series_record,
)

logger = structlog.get_logger(__name__)


def split_line(line: str) -> list[str]:
    """Tokenize a single comma-delimited record."""
    rows = list(csv.reader(io.StringIO(line.rstrip("\r\n"))))
    if not rows:
        return []
    return rows[0]


def parse_series_record(tokens: Iterable[str]) -> SeriesRecord:
    """Parse ``name, code, v1960, ...`` tokens into a series record."""
    return load_series_record(list(tokens))


def parse_country_record(tokens: Iterable[str]) -> CountryRecord:
    """Parse ``country, code, series, code, v1960, ...`` tokens into a country record."""
    return load_country_record(list(tokens))


def _is_blank(row: list[str]) -> bool:
    return all(token.strip() == "" for token in row)


def iter_country_rows(path: str | Path) -> Iterator[list[str]]:
    """Yield raw token rows from the data file, skipping blank lines.

    Undecodable bytes are replaced so they never abort the scan. A row the csv
    reader cannot tokenize raises :class:`RecordParseError`.
    """
    with open(path, newline="", encoding="utf-8", errors="replace") as handle:
        reader = csv.reader(handle)
        try:
            for row in reader:
                if not row or _is_blank(row):
                    continue
                yield row
        except csv.Error as exc:
            raise RecordParseError(f"Unreadable row {reader.line_num}: {exc}") from exc


def read_country_block(path: str | Path, country_name: str) -> list[CountryRecord]:
    """Return the contiguous run of records whose leading field is ``country_name``.

    Records are grouped by country in the source file, so scanning stops at the
    first non-matching row after the run has started. Only matching rows are
    parsed; a malformed matching row raises :class:`RecordParseError`.
    """
    block: list[CountryRecord] = []
    started = False
    for row in iter_country_rows(path):
        matches = row[0].strip() == country_name
        if not matches:
            if started:
                break
            continue
        started = True
        block.append(parse_country_record(row))
    logger.debug("parser.block_read", country=country_name, records=len(block), path=str(path))
    return block


__all__ = [
    "iter_country_rows",
    "parse_country_record",
    "parse_series_record",
    "read_country_block",
    "split_line",
]
