"""
Series adapter

- observation and prediction records
- splitting observations into parallel arrays
- ordinal encoding of categorical x
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, NamedTuple

import numpy as np
import polars as pl

from polyreg.errors import InvalidInput

FIELDS = ("x", "y", "label")


@dataclass(frozen=True)
class Observation:
    """A single (x, y) point. `label` is only used for presentation."""

    x: Any
    y: float | None = None
    label: Any = None


class Prediction(NamedTuple):
    x: Any
    y: float


@dataclass(frozen=True, eq=False)
class VectorSeries:
    """Observations split into parallel arrays."""

    x: np.ndarray
    y: np.ndarray | None = None
    label: list | None = None
    ordinal: bool = False

    def __len__(self) -> int:
        return len(self.x)

    @property
    def display_x(self) -> list:
        """Labels if present (x where a record has none), otherwise x values."""
        if self.label is not None:
            return list(self.label)
        return self.x.tolist()


def is_numeric(value) -> bool:
    return isinstance(value, (int, float, np.integer, np.floating)) and not isinstance(
        value, (bool, np.bool_)
    )


def is_column(values) -> bool:
    if isinstance(values, np.ndarray):
        return values.ndim >= 1
    return isinstance(values, (Sequence, pl.Series)) and not isinstance(
        values, (str, bytes)
    )


def is_finite_number(value) -> bool:
    if not is_numeric(value):
        return False
    try:
        return bool(np.isfinite(float(value)))
    except OverflowError:
        return False


def vectorize(
    series,
    ordinal: bool | None = None,
    require_y: bool = True,
) -> VectorSeries:
    """Split observations into parallel x, y (and label) arrays.

    ## parameters
    - series: observations, one of
        - sequence of `Observation`
        - sequence of (x, y) tuples, or (x,) / bare x when `require_y` is False
        - sequence of dicts with keys x, y, label
        - dict of parallel lists {"x": [...], "y": [...], "label": [...]}
        - polars DataFrame with columns x, y, label
    - ordinal (bool | None): replace x by its position in the series.
        - None: only if some x is not a number
    - require_y (bool): every observation needs a response.

    ## returns
    - series (VectorSeries): with original x kept as label if ordinal.
    """
    if isinstance(series, VectorSeries) and series.ordinal:
        # positions are already encoded, the original x lives in label
        if ordinal is False:
            raise InvalidInput("Series is already ordinal encoded")
        if require_y and series.y is None:
            raise InvalidInput("Missing y in ordinal series")
        return series

    records = _records(series, require_y)

    xs = [r.x for r in records]
    categorical = not all(is_numeric(v) for v in xs)
    if ordinal is None:
        ordinal = categorical
    elif categorical and not ordinal:
        bad = next(v for v in xs if not is_numeric(v))
        raise InvalidInput(f"Non-numeric x ({bad!r}) requires ordinal encoding")

    if ordinal:
        # position within the supplied sequence, never sorted or hashed
        x = np.arange(len(records), dtype=float)
        label = [r.x if r.label is None else r.label for r in records]
    else:
        try:
            x = np.array(xs, dtype=float)
        except (OverflowError, TypeError, ValueError) as e:
            raise InvalidInput(f"Explanatory values out of float range: {e}") from e

        label = None
        if any(r.label is not None for r in records):
            label = [r.x if r.label is None else r.label for r in records]

    y = None
    if all(r.y is not None for r in records):
        y = np.array([r.y for r in records], dtype=float)

    return VectorSeries(x=x, y=y, label=label, ordinal=bool(ordinal))


def ordinalize(series) -> VectorSeries:
    """Vectorize prediction inputs with x replaced by its zero-based position.

    Matches the encoding used by `vectorize(..., ordinal=True)` on training data.
    """
    return vectorize(series, ordinal=True, require_y=False)


def _records(series, require_y: bool) -> list[Observation]:
    """Normalize any supported series shape to a list of Observation."""
    if isinstance(series, VectorSeries):
        series = {
            "x": series.x.tolist(),
            "y": None if series.y is None else series.y.tolist(),
            "label": series.label,
        }
    if isinstance(series, pl.DataFrame):
        series = {c: series[c].to_list() for c in series.columns}

    if isinstance(series, Mapping):
        records = _from_columns(series)
    elif is_column(series):
        records = [_to_observation(item, require_y) for item in series]
    else:
        raise InvalidInput(f"Unsupported series type: {type(series).__name__}")

    if len(records) == 0:
        raise InvalidInput("Empty series, needs at least one observation")

    for i, r in enumerate(records):
        if r.x is None:
            raise InvalidInput(f"Missing x in observation {i}")
        if r.y is None and require_y:
            raise InvalidInput(f"Missing y in observation {i}")
        if r.y is not None and not is_finite_number(r.y):
            raise InvalidInput(f"Response must be a finite number, not {r.y!r} ({i})")

    return records


def _from_columns(columns: Mapping) -> list[Observation]:
    unknown = set(columns.keys()) - set(FIELDS)
    if unknown:
        raise InvalidInput(f"Unsupported series keys: {sorted(unknown)}")
    if columns.get("x") is None:
        raise InvalidInput("Series needs an `x` column")

    for k, values in columns.items():
        if values is not None and not is_column(values):
            raise InvalidInput(f"Column {k} must be a sequence, not {values!r}")

    n = len(columns["x"])
    arrays = {}
    for k in FIELDS:
        values = columns.get(k)
        if values is None:
            values = [None] * n
        elif len(values) != n:
            raise InvalidInput(f"Inconsistent lengths: {len(values)} {k} for {n} x")
        arrays[k] = list(values)

    return [
        Observation(x=x, y=y, label=label)
        for x, y, label in zip(arrays["x"], arrays["y"], arrays["label"])
    ]


def _to_observation(item, require_y: bool) -> Observation:
    if isinstance(item, Observation):
        return item
    if isinstance(item, Mapping):
        if "x" not in item or set(item.keys()) - set(FIELDS):
            raise InvalidInput(f"Malformed observation: {item!r}")
        return Observation(item["x"], item.get("y"), item.get("label"))
    if isinstance(item, (tuple, list)) or (
        isinstance(item, np.ndarray) and item.ndim == 1
    ):
        if len(item) == 2:
            return Observation(item[0], item[1])
        if len(item) == 1 and not require_y:
            return Observation(item[0])
        raise InvalidInput(f"Expects (x, y) pairs, not {item!r}")
    if not require_y and item is not None:
        return Observation(item)

    raise InvalidInput(f"Malformed observation: {item!r}")
