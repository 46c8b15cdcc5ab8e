"""Imputer — fill NaN cells of numeric columns with a per-column aggregate.

The aggregate (``strategy``) is computed over the valid cells of the column
being filled.  Non-numeric columns pass through unchanged.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

import numpy as np
import pandas as pd
from pydantic import field_validator

from tsfeatures.errors import EmptyColumnError, ShapeError
from tsfeatures.registry import register_transformer
from tsfeatures.transformers.base import Transformer, TransformerConfig

logger = logging.getLogger(__name__)

STRATEGIES: dict[str, Callable[..., Any]] = {
    "mean": np.mean,
    "median": np.median,
    "min": np.min,
    "max": np.max,
}


@register_transformer("imputer")
class Imputer(Transformer):
    """Replace NaN in every real-valued column with ``strategy(valid values)``."""

    class Config(TransformerConfig):
        strategy: str | Callable[..., Any] = "mean"

        @field_validator("strategy")
        @classmethod
        def _known_strategy(cls, value):
            if isinstance(value, str) and value not in STRATEGIES:
                raise ValueError(
                    f"Unknown strategy {value!r}. Available: {', '.join(sorted(STRATEGIES))}"
                )
            return value

    def fit(self, data: pd.DataFrame, labels: Any = None) -> Imputer:
        strategy = self._config.strategy
        if isinstance(strategy, str):
            strategy = STRATEGIES[strategy]
        self.model = {"strategy": strategy}
        return self

    def transform(self, data: pd.DataFrame) -> pd.DataFrame:
        model = self._check_fitted()
        if not isinstance(data, pd.DataFrame):
            raise ShapeError(
                f"expected a DataFrame, got {type(data).__name__}", component=self.name
            )
        strategy = model["strategy"]
        result = data.copy()

        for position, label in enumerate(result.columns):
            cells = result.iloc[:, position]
            if not _is_real_valued(cells):
                continue
            na_rows = cells.isna()
            if not na_rows.any():
                continue
            valid = cells[~na_rows].to_numpy(dtype=float)
            if valid.size == 0:
                raise EmptyColumnError(
                    f"column {label!r} has no valid values to aggregate",
                    component=self.name,
                )
            fill_value = strategy(valid)
            result.isetitem(position, cells.astype(float).where(~na_rows, fill_value))
            logger.info(
                "%s: filled %d cell(s) in %r with %r",
                self.name,
                int(na_rows.sum()),
                label,
                fill_value,
            )
        return result


def _is_real_valued(cells: pd.Series) -> bool:
    return pd.api.types.is_numeric_dtype(cells.dtype) and not pd.api.types.is_bool_dtype(
        cells.dtype
    )
