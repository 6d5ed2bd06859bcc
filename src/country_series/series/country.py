"""Country container owning the series loaded for one country."""

from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Any

import structlog
from attrs import define, field

from ..data.files import DEFAULT_DATA_FILE
from ..data.models import RecordParseError, SeriesRecord
from ..data.parser import read_country_block
from .buffer import GrowableBuffer
from .outcome import FailureReason, Outcome
from .timeseries import TimeSeries

logger = structlog.get_logger(__name__)


@define(slots=True)
class CountryData:
    """All series of one country, read from a grouped data file.

    Series are kept in insertion order in a :class:`GrowableBuffer` and are
    addressed by their series code. Every operation returns an
    :class:`Outcome` instead of raising.
    """

    data_file: Path = field(default=Path(DEFAULT_DATA_FILE), converter=Path)
    country_name: str = ""
    country_code: str = ""
    _series: GrowableBuffer[TimeSeries] = field(factory=GrowableBuffer, repr=False)

    @property
    def count(self) -> int:
        return self._series.count

    @property
    def capacity(self) -> int:
        return self._series.capacity

    def __len__(self) -> int:
        return self._series.count

    def __iter__(self) -> Iterator[TimeSeries]:
        return iter(self._series)

    def load(self, country_name: str) -> Outcome:
        """Reload every series of ``country_name`` from the data file.

        Previously loaded series are discarded. The new state is only committed
        once the whole block has parsed, so a parse or I/O failure keeps the
        current contents.
        """
        log = logger.bind(country=country_name, data_file=str(self.data_file))
        log.debug("country.load_start")
        try:
            records = read_country_block(self.data_file, country_name)
        except RecordParseError as exc:
            log.warning("country.load_parse_failed", error=str(exc), field=exc.field_name)
            return Outcome.failure(FailureReason.PARSE_FAILURE)
        except OSError as exc:
            log.warning("country.load_source_unavailable", error=str(exc))
            return Outcome.failure(FailureReason.SOURCE_UNAVAILABLE)

        staged = CountryData(data_file=self.data_file, country_name=country_name)
        if records:
            staged.country_code = records[0].country_code
        for record in records:
            if not staged.add_series(record.series):
                log.warning("country.duplicate_series", code=record.series.code)

        self.country_name = staged.country_name
        self.country_code = staged.country_code
        self._series = staged._series
        log.info("country.load_complete", code=self.country_code, series=self.count)
        return Outcome.success()

    def add_series(self, record: SeriesRecord) -> Outcome:
        """Build a series from ``record`` and append it; codes must stay unique."""
        if self.return_series_idx(record.code) >= 0:
            return Outcome.failure(FailureReason.DUPLICATE_INSERT)
        series = TimeSeries()
        series.load(record)
        self._series.append(series)
        return Outcome.success()

    def return_series_idx(self, series_code: str) -> int:
        """Return the position of ``series_code`` or -1 when it is not loaded."""
        for idx, series in enumerate(self._series):
            if series.series_code == series_code:
                return idx
        return -1

    def get_series(self, series_code: str) -> TimeSeries | None:
        idx = self.return_series_idx(series_code)
        if idx < 0:
            return None
        return self._series[idx]

    def _with_series(
        self,
        series_code: str,
        action: Callable[[TimeSeries], Outcome],
    ) -> Outcome:
        series = self.get_series(series_code)
        if series is None:
            logger.debug("country.series_not_found", code=series_code)
            return Outcome.failure(FailureReason.NOT_FOUND)
        return action(series)

    def add_series_element(self, series_code: str, year: int, datum: float) -> Outcome:
        def _add(series: TimeSeries) -> Outcome:
            if series.add_series_element(year, datum):
                return Outcome.success()
            return Outcome.failure(FailureReason.DUPLICATE_INSERT)

        return self._with_series(series_code, _add)

    def update(self, series_code: str, year: int, datum: float) -> Outcome:
        def _update(series: TimeSeries) -> Outcome:
            if series.update(year, datum):
                return Outcome.success()
            if year in series.years:
                return Outcome.failure(FailureReason.NO_VALID_DATA)
            return Outcome.failure(FailureReason.NOT_FOUND)

        return self._with_series(series_code, _update)

    def print_series(self, series_code: str) -> Outcome:
        return self._with_series(
            series_code, lambda series: _payload_or_no_data(series.render())
        )

    def series_mean(self, series_code: str) -> Outcome:
        return self._with_series(
            series_code, lambda series: _payload_or_no_data(series.describe_mean())
        )

    def series_monotonic(self, series_code: str) -> Outcome:
        return self._with_series(
            series_code, lambda series: _payload_or_no_data(series.describe_monotonic())
        )

    def series_best_fit(self, series_code: str) -> Outcome:
        def _fit(series: TimeSeries) -> Outcome:
            if not series.has_valid_data():
                return Outcome.failure(FailureReason.NO_VALID_DATA)
            description = series.describe_fit()
            if description is None:
                return Outcome.failure(FailureReason.DEGENERATE_FIT)
            return Outcome.success(description)

        return self._with_series(series_code, _fit)

    def series_size_capacity(self, series_code: str) -> Outcome:
        return self._with_series(series_code, lambda series: Outcome.success(series.size_capacity()))

    def delete_series(self, series_code: str) -> Outcome:
        """Drop the series with ``series_code`` and apply the shrink policy."""
        idx = self.return_series_idx(series_code)
        if idx < 0:
            return Outcome.failure(FailureReason.NOT_FOUND)
        self._series.remove(idx)
        self._series.check_and_resize()
        logger.debug("country.series_deleted", code=series_code, remaining=self.count)
        return Outcome.success()

    def series_with_biggest_mean(self) -> Outcome:
        """Return the code of the series with the largest mean.

        Series without valid data are skipped; ties keep the earliest series.
        """
        best_code: str | None = None
        best_mean = 0.0
        for series in self._series:
            series_mean = series.mean()
            if series_mean is None:
                continue
            if best_code is None or series_mean > best_mean:
                best_code = series.series_code
                best_mean = series_mean
        if best_code is None:
            return Outcome.failure(FailureReason.NO_VALID_DATA)
        return Outcome.success(best_code)

    def list_series(self) -> Outcome:
        """Return the country name and code followed by every series name."""
        parts = [self.country_name, self.country_code]
        parts.extend(series.series_name for series in self._series)
        return Outcome.success(" ".join(parts))

    def copy(self) -> "CountryData":
        """Return a deep copy; each series gets its own storage."""
        clone = CountryData(
            data_file=self.data_file,
            country_name=self.country_name,
            country_code=self.country_code,
            series=self._series.copy(),
        )
        for idx, series in enumerate(self._series):
            clone._series[idx] = series.copy()
        return clone

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-friendly representation of the loaded country."""
        return {
            "country_name": self.country_name,
            "country_code": self.country_code,
            "series": [series.to_dict() for series in self._series],
        }


def _payload_or_no_data(payload: str | None) -> Outcome:
    if payload is None:
        return Outcome.failure(FailureReason.NO_VALID_DATA)
    return Outcome.success(payload)


__all__ = ["CountryData"]
