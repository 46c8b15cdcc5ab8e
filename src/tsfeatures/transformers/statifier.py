"""Statistical feature engine — summarise one gappy sequence as a feature row.

The row is built from three blocks computed on the sequence:
  - quantile block: median, mean, 25th and 75th percentile of valid values
  - shape block: kurtosis, skewness, variation, entropy and the
    autocorrelation / partial-autocorrelation energies over a lag window
    (24 by default, i.e. one day of hourly samples)
  - missing-block block: median, mean, 25th and 75th percentile of the
    *lengths* of the runs of consecutive missing entries

Missing entries are anything ``pandas.isna`` reports as missing.  Runs are
found from an explicit is-missing mask, so no sentinel value can collide with
real data.
"""

from __future__ import annotations

import itertools
import logging
from typing import Any, NamedTuple

import numpy as np
import pandas as pd
from scipy import stats
from statsmodels.tsa.stattools import acf, pacf

from tsfeatures.errors import ShapeError
from tsfeatures.registry import register_transformer
from tsfeatures.transformers.base import Transformer, TransformerConfig

logger = logging.getLogger(__name__)

QUANTILE_COLUMNS = ["median", "mean", "q25", "q75"]
SHAPE_COLUMNS = ["kurtosis", "skewness", "variation", "entropy", "autocor", "pacf"]
MISSING_BLOCK_COLUMNS = ["bmedian", "bmean", "bq25", "bq75"]

DEFAULT_MAXLAG = 24


class StatBlocks(NamedTuple):
    """The three one-row frames making up a full feature row."""

    quantiles: pd.DataFrame
    shape: pd.DataFrame
    missing_blocks: pd.DataFrame


@register_transformer("statifier")
class Statifier(Transformer):
    """Turn one numeric sequence into a single-row DataFrame of statistics."""

    class Config(TransformerConfig):
        processmissing: bool = True
        maxlag: int = DEFAULT_MAXLAG

    def fit(self, data: Any, labels: Any = None) -> Statifier:
        _split_missing(data, component=self.name)
        self.model = self.args
        return self

    def transform(self, data: Any) -> pd.DataFrame:
        model = self._check_fitted()
        if data is None:
            return pd.DataFrame()
        values, missing = _split_missing(data, component=self.name)
        if missing.size == 0:
            return pd.DataFrame()

        blocks = _compute_blocks(values, missing, maxlag=model["maxlag"])
        if model["processmissing"]:
            result = pd.concat(list(blocks), axis=1)
        else:
            result = pd.concat([blocks.quantiles, blocks.shape], axis=1)

        logger.info(
            "%s: %d values (%d missing) → %d features",
            self.name,
            missing.size,
            int(missing.sum()),
            len(result.columns),
        )
        return result


# ----------------------------------------------------------------------
# Statistics (pure functions over a sequence)
# ----------------------------------------------------------------------


def full_stat(data: Any, maxlag: int = DEFAULT_MAXLAG) -> StatBlocks:
    """Compute all three statistic blocks for *data*."""
    values, missing = _split_missing(data)
    return _compute_blocks(values, missing, maxlag=maxlag)


def missing_run_lengths(data: Any) -> list[int]:
    """Lengths of the maximal runs of consecutive missing entries, in order."""
    _, missing = _split_missing(data)
    return _run_lengths(missing)


def missing_block_stats(data: Any) -> pd.DataFrame:
    """Quantile statistics over the missing-run lengths of *data*.

    A sequence without missing entries has no runs; every column is then NaN.
    """
    _, missing = _split_missing(data)
    return _missing_block_frame(missing)


def _compute_blocks(values: np.ndarray, missing: np.ndarray, maxlag: int) -> StatBlocks:
    return StatBlocks(
        quantiles=_quantile_frame(values, QUANTILE_COLUMNS),
        shape=_shape_frame(values, maxlag),
        missing_blocks=_missing_block_frame(missing),
    )


def _quantile_frame(values: np.ndarray, columns: list[str]) -> pd.DataFrame:
    if values.size == 0:
        row = [np.nan] * len(columns)
    else:
        row = [
            np.median(values),
            np.mean(values),
            np.quantile(values, 0.25),
            np.quantile(values, 0.75),
        ]
    return pd.DataFrame([row], columns=columns, dtype=float)


def _shape_frame(values: np.ndarray, maxlag: int) -> pd.DataFrame:
    if values.size == 0:
        return pd.DataFrame(
            [[np.nan] * len(SHAPE_COLUMNS)], columns=SHAPE_COLUMNS, dtype=float
        )

    _, counts = np.unique(values, return_counts=True)
    row = {
        "kurtosis": stats.kurtosis(values),
        "skewness": stats.skew(values),
        "variation": stats.variation(values, ddof=1),
        "entropy": stats.entropy(counts),
        "autocor": _acf_energy(values, min(maxlag, values.size - 1)),
        "pacf": _pacf_energy(values, min(maxlag, values.size // 2 - 1)),
    }
    return pd.DataFrame([row], columns=SHAPE_COLUMNS, dtype=float)


def _acf_energy(values: np.ndarray, nlags: int) -> float:
    """Euclidean norm of the autocorrelations at lags ``1..nlags``."""
    if nlags < 1:
        return 0.0
    coefs = acf(values, nlags=nlags, fft=False)[1:]
    return float(np.sqrt(np.sum(coefs**2)))


def _pacf_energy(values: np.ndarray, nlags: int) -> float:
    """Euclidean norm of the partial autocorrelations at lags ``1..nlags``."""
    if nlags < 1:
        return 0.0
    coefs = pacf(values, nlags=nlags, method="ols")[1:]
    return float(np.sqrt(np.sum(coefs**2)))


def _missing_block_frame(missing: np.ndarray) -> pd.DataFrame:
    runs = np.asarray(_run_lengths(missing), dtype=float)
    return _quantile_frame(runs, MISSING_BLOCK_COLUMNS)


def _run_lengths(missing: np.ndarray) -> list[int]:
    return [
        sum(1 for _ in run)
        for is_missing, run in itertools.groupby(missing.tolist())
        if is_missing
    ]


def _split_missing(data: Any, component: str | None = None) -> tuple[np.ndarray, np.ndarray]:
    """Return ``(valid values as float64, is-missing mask)`` for a flat sequence.

    Raises ``ShapeError`` for tables, matrices, nested sequences, scalars and
    non-numeric entries.
    """
    if isinstance(data, pd.DataFrame):
        raise ShapeError(
            "expected a flat numeric sequence, got a DataFrame", component=component
        )
    if isinstance(data, np.ndarray) and data.ndim != 1:
        raise ShapeError(
            f"expected a 1-D sequence, got an array of shape {data.shape}",
            component=component,
        )
    if not isinstance(data, (list, tuple, np.ndarray, pd.Series)):
        raise ShapeError(
            f"expected a flat numeric sequence, got {type(data).__name__}",
            component=component,
        )

    series = pd.Series(list(data), dtype=object)
    if any(isinstance(v, (list, tuple, np.ndarray, pd.Series)) for v in series):
        raise ShapeError(
            "expected a flat numeric sequence, got nested sequences", component=component
        )

    missing = series.isna().to_numpy(dtype=bool)
    try:
        values = series[~missing].astype(float).to_numpy()
    except (TypeError, ValueError) as exc:
        raise ShapeError(
            f"sequence contains non-numeric entries: {exc}", component=component
        ) from exc
    return values, missing


# ----------------------------------------------------------------------
# Demo
# ----------------------------------------------------------------------


def make_demo_sequence(seed: int = 123) -> list[float | None]:
    """Ten-sample signal with a single gap and a three-sample gap.

    Values come from a local generator so no global random state is touched.
    """
    rng = np.random.default_rng(seed)
    head = rng.integers(1, 11, size=3).astype(float).tolist()
    tail = rng.integers(1, 6, size=3).astype(float).tolist()
    return [None, *head, None, None, None, *tail]


def statifier_demo(seed: int = 123) -> tuple[pd.DataFrame, pd.DataFrame]:
    """Run the Statifier on the demo signal without and with missing-block stats."""
    data = make_demo_sequence(seed)
    reduced = Statifier({"processmissing": False}).fit_transform(data)
    full = Statifier({"processmissing": True}).fit_transform(data)
    return reduced, full
