"""Constants describing the country series data file."""

DEFAULT_DATA_FILE = "lab2_multidata.csv"

# Annual values in a record start at FIRST_YEAR and run one per column.
FIRST_YEAR = 1960

# On-disk marker for an unobserved year.
MISSING_VALUE = -1.0

MIN_CAPACITY = 2
