"""One-hot encoder — expand nominal columns into indicator columns.

Nominal columns are addressed by position.  A column is numeric when every
value in it is a real number; anything else is nominal unless the caller
lists the nominal columns explicitly.

Values unseen at fit time are patched to the first known category and each
patched cell is logged at WARNING level.  A column fitted with no categories
at all cannot be patched and raises ``ShapeError``.
"""

from __future__ import annotations

import logging
import numbers
from typing import Any

import numpy as np
import pandas as pd

from tsfeatures.errors import ShapeError
from tsfeatures.registry import register_transformer
from tsfeatures.transformers.base import Transformer, TransformerConfig

logger = logging.getLogger(__name__)


@register_transformer("one_hot_encoder")
class OneHotEncoder(Transformer):
    """Replace each nominal column with one float indicator per category."""

    class Config(TransformerConfig):
        # Positional indices of the nominal columns; detected when None.
        nominal_columns: list[int] | None = None
        # Column index -> ordered category list; observed values when None.
        nominal_column_values_map: dict[int, list[Any]] | None = None

    def fit(self, data: pd.DataFrame, labels: Any = None) -> OneHotEncoder:
        _require_frame(data, self.name)

        nominal_columns = self._config.nominal_columns
        if nominal_columns is None:
            nominal_columns = find_nominal_columns(data)
        for column in nominal_columns:
            if not 0 <= column < data.shape[1]:
                raise ShapeError(
                    f"nominal column {column} is out of range for {data.shape[1]} column(s)",
                    component=self.name,
                )

        values_map = self._config.nominal_column_values_map
        if values_map is None:
            values_map = {
                column: pd.unique(data.iloc[:, column]).tolist()
                for column in nominal_columns
            }
        unmapped = [column for column in nominal_columns if column not in values_map]
        if unmapped:
            raise ShapeError(
                f"nominal_column_values_map has no categories for column(s) {unmapped}",
                component=self.name,
            )

        self.model = {
            "nominal_columns": list(nominal_columns),
            "nominal_column_values_map": {k: list(v) for k, v in values_map.items()},
        }
        logger.info(
            "%s: %d nominal column(s) %s", self.name, len(nominal_columns), nominal_columns
        )
        return self

    def transform(self, data: pd.DataFrame) -> pd.DataFrame:
        model = self._check_fitted()
        _require_frame(data, self.name)
        nominal_columns = set(model["nominal_columns"])
        values_map = model["nominal_column_values_map"]

        # Numeric columns first, then the indicator block of each nominal column.
        # Blocks are collected by position, so colliding labels never overwrite.
        labels: list[Any] = []
        blocks: list[np.ndarray] = []
        for column in range(data.shape[1]):
            if column not in nominal_columns:
                labels.append(data.columns[column])
                blocks.append(data.iloc[:, column].to_numpy(dtype=float))

        for column in sorted(nominal_columns):
            label = data.columns[column]
            cells = data.iloc[:, column]
            categories = values_map[column]
            indicators = np.zeros((len(data), len(categories)), dtype=float)
            for row, value in enumerate(cells):
                index = _category_index(categories, value)
                if index is None:
                    if not categories:
                        raise ShapeError(
                            f"column {label!r} has no known categories to encode {value!r}",
                            component=self.name,
                        )
                    logger.warning(
                        "%s: unseen value %r at (row %d, column %r), patching to %r",
                        self.name,
                        value,
                        row,
                        label,
                        categories[0],
                    )
                    index = 0
                indicators[row, index] = 1.0
            for offset, category in enumerate(categories):
                labels.append(f"{label}_{category}")
                blocks.append(indicators[:, offset])

        result = pd.DataFrame(dict(enumerate(blocks)), index=data.index, dtype=float)
        result.columns = labels
        return result


def find_nominal_columns(data: pd.DataFrame) -> list[int]:
    """Positions of the columns whose values are not all real numbers."""
    nominal: list[int] = []
    for column in range(data.shape[1]):
        cells = data.iloc[:, column]
        if pd.api.types.is_numeric_dtype(cells.dtype):
            continue
        if not all(isinstance(v, numbers.Real) for v in cells):
            nominal.append(column)
    return nominal


def _category_index(categories: list[Any], value: Any) -> int | None:
    for index, category in enumerate(categories):
        if category == value or (pd.isna(category) and pd.isna(value)):
            return index
    return None


def _require_frame(data: Any, component: str) -> None:
    if not isinstance(data, pd.DataFrame):
        raise ShapeError(
            f"expected a DataFrame, got {type(data).__name__}", component=component
        )
