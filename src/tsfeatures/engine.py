"""Pipeline engine — build and run a pipeline from a YAML run config.

Reads a validated config, resolves stage names to concrete classes via the
registry, fits the resulting :class:`Pipeline` on the input data and returns
(or writes) the transformed result.

The engine **never** imports a concrete transformer class.  It relies
entirely on the decorator-based registry for class resolution.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any

import pandas as pd
import yaml

# Importing the subpackage triggers @register_transformer decorators in its __init__.py
import tsfeatures.transformers  # noqa: F401

from tsfeatures.models import InputConfig, OutputConfig, RunConfig
from tsfeatures.registry import get_transformer
from tsfeatures.transformers.pipeline import Pipeline

logger = logging.getLogger(__name__)

LOG_LEVEL_ENV = "TSFEATURES_LOG_LEVEL"


class PipelineEngine:
    """Load a run config, then fit and transform its pipeline on its input."""

    def __init__(self, config_path: str | Path) -> None:
        self._config_path = Path(config_path)
        self.config: RunConfig | None = None

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def load_config(self) -> RunConfig:
        raw = yaml.safe_load(self._config_path.read_text())
        return RunConfig.model_validate(raw)

    def build(self, config: RunConfig | None = None) -> Pipeline:
        """Resolve every configured stage into a prototype and chain them."""
        config = config or self.load_config()
        prototypes = []
        for step in config.pipeline.stages:
            step_config = self._resolve_step_config(step.config_file, step.inline_config)
            transformer_cls = get_transformer(step.name)
            logger.info(
                "Registry resolved %r → %s", step.name, transformer_cls.__name__
            )
            prototypes.append(transformer_cls(step_config))
        return Pipeline({"transformers": prototypes})

    def run(self) -> pd.DataFrame:
        """Execute the pipeline and return the transformed data."""
        self.config = config = self.load_config()

        logging.basicConfig(
            level=os.environ.get(LOG_LEVEL_ENV, config.settings.log_level),
            format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        )
        logger.info("Pipeline %r started", config.pipeline.name)

        pipeline = self.build(config)
        data = self.load_input(config.input)

        pipeline.fit(data)
        result = pipeline.transform(data)
        if not isinstance(result, pd.DataFrame):
            result = pd.DataFrame(result)
        logger.info(
            "Pipeline %r produced %d rows, %d columns",
            config.pipeline.name,
            len(result),
            len(result.columns),
        )

        if config.output.file_path is not None:
            self._write_output(result, config.output)

        logger.info("Pipeline %r finished successfully", config.pipeline.name)
        return result

    @staticmethod
    def load_input(input_config: InputConfig) -> pd.DataFrame | list[Any]:
        """Read the JSON input as a table (records) or as a flat sequence.

        ``null`` entries of a sequence are treated as missing.
        """
        path = Path(input_config.file_path)
        logger.info("Reading %s input from %s", input_config.kind, path)

        if input_config.kind == "table":
            return pd.read_json(path, orient="records")

        if input_config.column is not None:
            table = pd.read_json(path, orient="records")
            return table[input_config.column].tolist()

        raw = json.loads(path.read_text())
        if not isinstance(raw, list):
            raise ValueError(
                f"Sequence input {path} must hold a JSON list, got {type(raw).__name__}"
            )
        return raw

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    @staticmethod
    def _resolve_step_config(
        config_file: str | None,
        inline_config: dict[str, Any] | None,
    ) -> dict[str, Any]:
        """Merge config_file YAML with inline_config.  Inline wins."""
        merged: dict[str, Any] = {}
        if config_file is not None:
            merged.update(yaml.safe_load(Path(config_file).read_text()) or {})
        if inline_config is not None:
            merged.update(inline_config)
        return merged

    @staticmethod
    def _write_output(df: pd.DataFrame, output_config: OutputConfig) -> None:
        path = Path(output_config.file_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        df.to_json(path, orient="records", indent=output_config.indent)
        logger.info("Wrote %d rows to %s", len(df), path)
