"""
Series building and time alignment.

Raw streams arrive as parallel sequences (one value per recorded second) whose
elements may be missing or of unknown type. This module turns them into
SampleSeries (float values indexed by integer seconds) and provides the
"build lookup, then join" helpers used to pair series by exact timestamp.
"""

import logging
from collections.abc import Callable, Mapping, Sequence
from typing import Any

import numpy as np
import pandas as pd

from ..constants import StreamNames
from ..models import SampleSeries

logger = logging.getLogger(__name__)


def empty_series(name: str | None = None) -> SampleSeries:
    """Return an empty float series with an integer time index."""
    return pd.Series(
        [], index=pd.Index([], dtype="int64", name="time"), dtype=float, name=name
    )


def build_series(
    time: Sequence[Any],
    values: Sequence[Any],
    transform: Callable[[float], float] | None = None,
    name: str | None = None,
) -> SampleSeries:
    """
    Pair a time stream with a value stream.

    Values (and times) that cannot be coerced to a finite float are skipped,
    as are indices where the transform yields a non-finite result.

    Args:
        time: Time stream in seconds from activity start
        values: Parallel raw value stream
        transform: Optional per-sample transform applied to coerced values
        name: Optional series name

    Returns:
        Series of floats indexed by integer time, input order preserved
    """
    n = min(len(time), len(values))
    if n == 0:
        return empty_series(name)

    times = pd.to_numeric(pd.Series(list(time)[:n], dtype=object), errors="coerce")
    raw = pd.to_numeric(pd.Series(list(values)[:n], dtype=object), errors="coerce")
    times = times.astype(float).to_numpy()
    raw = raw.astype(float).to_numpy()

    valid = np.isfinite(times) & np.isfinite(raw)
    times = times[valid]
    raw = raw[valid]

    if transform is not None and len(raw):
        raw = np.array([transform(float(v)) for v in raw], dtype=float)
        finite = np.isfinite(raw)
        times = times[finite]
        raw = raw[finite]

    skipped = n - len(raw)
    if skipped:
        logger.debug(f"Skipped {skipped} non-numeric samples in stream '{name}'")

    index = pd.Index(times.astype("int64"), name="time")
    return pd.Series(raw, index=index, dtype=float, name=name)


def build_stream_series(
    raw_streams: Mapping[str, Sequence[Any]],
    stream_name: str,
    transform: Callable[[float], float] | None = None,
) -> SampleSeries:
    """
    Build the series of one named stream from a raw stream bundle.

    Args:
        raw_streams: Mapping of stream name to per-second samples
        stream_name: Stream to extract (e.g. 'heartrate')
        transform: Optional per-sample transform

    Returns:
        The built series, or an empty series if either stream is missing
    """
    time = raw_streams.get(StreamNames.TIME)
    values = raw_streams.get(stream_name)
    if time is None or values is None:
        return empty_series(stream_name)
    return build_series(time, values, transform=transform, name=stream_name)


def time_lookup(series: SampleSeries) -> SampleSeries:
    """
    Build a timestamp-keyed lookup of a series.

    Duplicated timestamps keep their last sample so that every key maps to a
    single value.
    """
    return series[~series.index.duplicated(keep="last")]


def join_on_time(left: SampleSeries, right: SampleSeries) -> pd.DataFrame:
    """
    Pair two series by exact timestamp.

    Args:
        left: Series driving the iteration order
        right: Series looked up by timestamp

    Returns:
        DataFrame with columns 'left' and 'right', one row per sample of
        `left` whose timestamp exists in `right`, in `left`'s order
    """
    lookup = time_lookup(right)
    matched = left.index.isin(lookup.index)
    paired_left = left[matched]
    return pd.DataFrame(
        {
            "left": paired_left.to_numpy(),
            "right": lookup.reindex(paired_left.index).to_numpy(),
        },
        index=paired_left.index,
    )


def series_deltas(series: SampleSeries) -> pd.DataFrame:
    """
    Consecutive-pair deltas of a series.

    Returns:
        DataFrame indexed by the later sample's time with columns 'dt'
        (seconds), 'delta' (value change) and 'value' (later value);
        one row fewer than the input
    """
    times = series.index.to_numpy(dtype=float)
    values = series.to_numpy(dtype=float)
    return pd.DataFrame(
        {
            "dt": np.diff(times),
            "delta": np.diff(values),
            "value": values[1:],
        },
        index=series.index[1:],
    )
