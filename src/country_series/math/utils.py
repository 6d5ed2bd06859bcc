"""Common helper functions for statistical routines."""

from collections.abc import Iterable
from typing import TypeAlias, cast

import numpy as np
import numpy.typing as npt

FloatArray: TypeAlias = npt.NDArray[np.float64]
NumericInput: TypeAlias = npt.ArrayLike | Iterable[float]


def to_numpy(values: NumericInput) -> FloatArray:
    """Coerce the input sequence into a 1D NumPy float array."""
    if not isinstance(values, np.ndarray):
        values = list(values)  # type: ignore[arg-type]
    arr = cast(FloatArray, np.asarray(values, dtype=float))
    if arr.ndim != 1:
        raise ValueError("Values must be a 1D sequence.")
    return arr


def paired_arrays(xs: NumericInput, ys: NumericInput) -> tuple[FloatArray, FloatArray]:
    """Return aligned float arrays, validating that both share a shape."""
    x_arr = to_numpy(xs)
    y_arr = to_numpy(ys)
    if x_arr.shape != y_arr.shape:
        raise ValueError("Years and values must share the same shape.")
    return x_arr, y_arr
