"""Pydantic models for run configuration validation.

The YAML config is parsed into these models at startup.  Invalid configs
fail fast with clear error messages before any data is read.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel


class RunSettings(BaseModel):
    log_level: str = "INFO"


class StageConfig(BaseModel):
    """One pipeline stage: a registry key plus its configuration."""

    name: str
    config_file: str | None = None
    inline_config: dict[str, Any] | None = None


class PipelineDefinition(BaseModel):
    name: str
    description: str = ""
    stages: list[StageConfig] = []


class InputConfig(BaseModel):
    file_path: str
    kind: Literal["sequence", "table"] = "table"
    # Table column to feed downstream as a sequence (kind="sequence" only).
    column: str | None = None


class OutputConfig(BaseModel):
    file_path: str | None = None
    indent: int | None = None


class RunConfig(BaseModel):
    """Root model — represents the entire run YAML file."""

    version: str = "1.0"
    pipeline: PipelineDefinition
    input: InputConfig
    output: OutputConfig = OutputConfig()
    settings: RunSettings = RunSettings()
