"""Global test configuration and fixtures."""

from pathlib import Path

import pytest
import structlog

from country_series.series import CountryData, TimeSeries

SAMPLE_CSV = """\
Canada,CAN,GDP growth,NY.GDP,100,-1,300
Canada,CAN,Population,SP.POP,5,5,7
Canada,CAN,Empty,EMPTY,-1,-1,-1

Chile,CHL,GDP growth,NY.GDP,1,2,3
Canada,CAN,Late,LATE,9,9,9
Broken,BRK,Bad,BAD,1,abc,3
"""


@pytest.fixture
def data_file(tmp_path) -> Path:
    """Write the sample country file and return its path."""
    path = tmp_path / "multidata.csv"
    path.write_text(SAMPLE_CSV)
    return path


@pytest.fixture
def canada(data_file) -> CountryData:
    """Return a container with Canada loaded from the sample file."""
    country = CountryData(data_file=data_file)
    assert country.load("Canada").ok
    return country


@pytest.fixture
def gdp_series() -> TimeSeries:
    """Series with values 100, missing, 300 for 1960-1962."""
    series = TimeSeries()
    series.load(["GDP growth", "NY.GDP", "100", "-1", "300"])
    return series


@pytest.fixture(autouse=True)
def reset_structlog():
    yield
    structlog.contextvars.clear_contextvars()
    structlog.reset_defaults()
