"""Shared fixtures for the test suite."""

from __future__ import annotations

import json
from pathlib import Path

import numpy as np
import pandas as pd
import pytest


@pytest.fixture()
def gappy_sequence() -> list[float | None]:
    """Ten samples with one single-sample gap and one three-sample gap."""
    return [None, 3, 7, 2, None, None, None, 4, 1, 5]


@pytest.fixture()
def hourly_sequence() -> list[float | None]:
    """Three days of a noisy daily cycle with a few gaps."""
    rng = np.random.default_rng(7)
    hours = np.arange(72)
    values = 10 + 5 * np.sin(2 * np.pi * hours / 24) + rng.normal(0, 0.5, size=72)
    series: list[float | None] = values.tolist()
    for index in (5, 6, 30, 31, 32, 33, 60):
        series[index] = None
    return series


@pytest.fixture()
def mixed_df() -> pd.DataFrame:
    """One nominal and two numeric columns, with NaN in a numeric column."""
    return pd.DataFrame(
        {
            "colour": ["red", "blue", "red", "green"],
            "size": [1.0, np.nan, 3.0, 4.0],
            "weight": [10.0, 20.0, 30.0, 40.0],
        }
    )


@pytest.fixture()
def tmp_sequence_file(tmp_path: Path) -> Path:
    """Write the gappy sequence to a temp JSON file and return its path."""
    path = tmp_path / "series.json"
    path.write_text(json.dumps([None, 3, 7, 2, None, None, None, 4, 1, 5]))
    return path
