"""Domain models for country series records."""

from collections.abc import Sequence
from typing import Any

import marshmallow as ma
from attrs import define, field

from .files import FIRST_YEAR, MISSING_VALUE


class RecordParseError(ValueError):
    """Raised when a record token cannot be turned into a typed value."""

    def __init__(self, message: str, *, field_name: str | None = None) -> None:
        super().__init__(message)
        self.field_name = field_name


def _strip(value: str) -> str:
    """Trim surrounding whitespace from a field."""
    return value.strip()


def _missing_to_none(value: float | None) -> float | None:
    """Map the on-disk missing marker to ``None``."""
    if value is None:
        return None
    number = float(value)
    if number == MISSING_VALUE:
        return None
    return number


@define(slots=True, frozen=True)
class Observation:
    """Single annual value of a series; ``value`` is None when unobserved."""

    year: int = field(converter=int)
    value: float | None = field(converter=_missing_to_none, default=None)

    @property
    def is_valid(self) -> bool:
        """Return True when the observation carries a real value."""
        return self.value is not None

    def with_value(self, value: float | None) -> "Observation":
        """Return a copy of this observation holding ``value``."""
        return Observation(year=self.year, value=value)


@define(slots=True, frozen=True)
class SeriesRecord:
    """A parsed series line: name, code and values from ``first_year`` on."""

    name: str = field(converter=_strip)
    code: str = field(converter=_strip)
    values: tuple[float | None, ...] = field(
        converter=lambda values: tuple(_missing_to_none(v) for v in values),
        factory=tuple,
    )
    first_year: int = FIRST_YEAR

    def observations(self) -> list[Observation]:
        """Return one observation per column, placeholders included."""
        return [
            Observation(year=self.first_year + offset, value=value)
            for offset, value in enumerate(self.values)
        ]


@define(slots=True, frozen=True)
class CountryRecord:
    """A parsed country line wrapping the series it describes."""

    country_name: str = field(converter=_strip)
    country_code: str = field(converter=_strip)
    series: SeriesRecord


class SeriesRecordSchema(ma.Schema):
    """Marshmallow schema validating a tokenized series line."""

    name = ma.fields.Str(required=True)
    code = ma.fields.Str(required=True)
    values = ma.fields.List(ma.fields.Float(allow_nan=False), load_default=list)

    @ma.post_load
    def make_record(self, data: dict[str, Any], **kwargs: object) -> SeriesRecord:
        """Instantiate :class:`SeriesRecord` from validated tokens."""
        return SeriesRecord(name=data["name"], code=data["code"], values=data["values"])


class CountryRecordSchema(ma.Schema):
    """Marshmallow schema validating a tokenized country line."""

    country_name = ma.fields.Str(required=True)
    country_code = ma.fields.Str(required=True)
    series = ma.fields.Nested(SeriesRecordSchema, required=True)

    @ma.post_load
    def make_record(self, data: dict[str, Any], **kwargs: object) -> CountryRecord:
        """Instantiate :class:`CountryRecord` from validated tokens."""
        return CountryRecord(**data)


def _describe_errors(messages: dict[str, Any] | list[Any]) -> tuple[str, str | None]:
    """Flatten marshmallow error messages into a message and a field name."""
    if isinstance(messages, dict):
        for key, value in messages.items():
            inner, inner_field = _describe_errors(value)
            name = str(key) if inner_field is None else f"{key}.{inner_field}"
            return inner, name
    if isinstance(messages, list) and messages:
        return str(messages[0]), None
    return str(messages), None


def _series_payload(tokens: Sequence[str]) -> dict[str, Any]:
    if len(tokens) < 2:
        raise RecordParseError("Series record needs a name and a code.", field_name="code")
    values = [token.strip() for token in tokens[2:]]
    # A single trailing delimiter ends the record; empty cells elsewhere are invalid.
    if values and values[-1] == "":
        values.pop()
    return {"name": tokens[0], "code": tokens[1], "values": values}


def load_series_record(tokens: Sequence[str]) -> SeriesRecord:
    """Validate tokens of a series line into a :class:`SeriesRecord`."""
    try:
        return SeriesRecordSchema().load(_series_payload(tokens))
    except ma.ValidationError as exc:
        message, name = _describe_errors(exc.messages)
        raise RecordParseError(f"Invalid series record: {name}: {message}", field_name=name) from exc


def load_country_record(tokens: Sequence[str]) -> CountryRecord:
    """Validate tokens of a country line into a :class:`CountryRecord`."""
    if len(tokens) < 2:
        raise RecordParseError("Country record needs a name and a code.", field_name="country_code")
    payload = {
        "country_name": tokens[0],
        "country_code": tokens[1],
        "series": _series_payload(tokens[2:]),
    }
    try:
        return CountryRecordSchema().load(payload)
    except ma.ValidationError as exc:
        message, name = _describe_errors(exc.messages)
        raise RecordParseError(
            f"Invalid country record: {name}: {message}", field_name=name
        ) from exc


__all__ = [
    "CountryRecord",
    "CountryRecordSchema",
    "Observation",
    "RecordParseError",
    "SeriesRecord",
    "SeriesRecordSchema",
    "load_country_record",
    "load_series_record",
]
