"""Tests for PipelineEngine and run-config validation."""

from __future__ import annotations

import json
from pathlib import Path

import pandas as pd
import pytest
from pydantic import ValidationError

from tsfeatures.engine import PipelineEngine
from tsfeatures.models import InputConfig, RunConfig
from tsfeatures.transformers.imputer import Imputer
from tsfeatures.transformers.one_hot import OneHotEncoder
from tsfeatures.transformers.statifier import Statifier

TABLE_RECORDS = [
    {"colour": "red", "size": 1.0, "weight": 10.0},
    {"colour": "blue", "size": None, "weight": 20.0},
    {"colour": "red", "size": 3.0, "weight": 30.0},
]


def _write_run_yaml(tmp_path: Path, body: str) -> Path:
    config_path = tmp_path / "run.yaml"
    config_path.write_text(body)
    return config_path


@pytest.fixture()
def table_file(tmp_path: Path) -> Path:
    path = tmp_path / "table.json"
    path.write_text(json.dumps(TABLE_RECORDS))
    return path


class TestRunConfig:
    def test_minimal_config(self):
        config = RunConfig.model_validate(
            {"pipeline": {"name": "p"}, "input": {"file_path": "x.json"}}
        )
        assert config.pipeline.stages == []
        assert config.input.kind == "table"
        assert config.output.file_path is None
        assert config.settings.log_level == "INFO"

    def test_missing_input_rejected(self):
        with pytest.raises(ValidationError):
            RunConfig.model_validate({"pipeline": {"name": "p"}})

    def test_unknown_input_kind_rejected(self):
        with pytest.raises(ValidationError):
            InputConfig(file_path="x.json", kind="matrix")


class TestBuild:
    def test_resolves_stage_names(self, tmp_path, table_file):
        config_path = _write_run_yaml(
            tmp_path,
            f"pipeline:\n"
            f"  name: build_pipe\n"
            f"  stages:\n"
            f"    - name: one_hot_encoder\n"
            f"    - name: imputer\n"
            f"      inline_config:\n"
            f"        strategy: median\n"
            f"input:\n"
            f'  file_path: "{table_file}"\n',
        )
        pipeline = PipelineEngine(config_path).build()
        stages = pipeline.config.transformers
        assert [type(t) for t in stages] == [OneHotEncoder, Imputer]
        assert stages[1].args["strategy"] == "median"

    def test_inline_config_wins_over_config_file(self, tmp_path, table_file):
        stage_file = tmp_path / "statifier.yaml"
        stage_file.write_text("processmissing: false\nmaxlag: 6\n")
        config_path = _write_run_yaml(
            tmp_path,
            f"pipeline:\n"
            f"  name: merge_pipe\n"
            f"  stages:\n"
            f"    - name: statifier\n"
            f'      config_file: "{stage_file}"\n'
            f"      inline_config:\n"
            f"        maxlag: 3\n"
            f"input:\n"
            f'  file_path: "{table_file}"\n',
        )
        (stage,) = PipelineEngine(config_path).build().config.transformers
        assert isinstance(stage, Statifier)
        assert stage.args == {"processmissing": False, "maxlag": 3}

    def test_unknown_stage_name(self, tmp_path, table_file):
        config_path = _write_run_yaml(
            tmp_path,
            f"pipeline:\n"
            f"  name: bad_pipe\n"
            f"  stages:\n"
            f"    - name: smoother\n"
            f"input:\n"
            f'  file_path: "{table_file}"\n',
        )
        with pytest.raises(KeyError, match="Unknown transformer"):
            PipelineEngine(config_path).build()


class TestLoadInput:
    def test_table(self, table_file):
        df = PipelineEngine.load_input(InputConfig(file_path=str(table_file)))
        assert isinstance(df, pd.DataFrame)
        assert list(df.columns) == ["colour", "size", "weight"]
        assert df["size"].isna().tolist() == [False, True, False]

    def test_sequence(self, tmp_sequence_file):
        seq = PipelineEngine.load_input(
            InputConfig(file_path=str(tmp_sequence_file), kind="sequence")
        )
        assert seq == [None, 3, 7, 2, None, None, None, 4, 1, 5]

    def test_sequence_from_column(self, table_file):
        seq = PipelineEngine.load_input(
            InputConfig(file_path=str(table_file), kind="sequence", column="weight")
        )
        assert seq == [10.0, 20.0, 30.0]

    def test_sequence_must_be_list(self, tmp_path):
        path = tmp_path / "obj.json"
        path.write_text(json.dumps({"values": [1, 2]}))
        with pytest.raises(ValueError, match="JSON list"):
            PipelineEngine.load_input(InputConfig(file_path=str(path), kind="sequence"))


class TestRun:
    def test_table_pipeline_writes_records(self, tmp_path, table_file):
        out_path = tmp_path / "out" / "encoded.json"
        config_path = _write_run_yaml(
            tmp_path,
            f"pipeline:\n"
            f"  name: table_pipe\n"
            f"  stages:\n"
            f"    - name: one_hot_encoder\n"
            f"    - name: imputer\n"
            f"input:\n"
            f'  file_path: "{table_file}"\n'
            f"output:\n"
            f'  file_path: "{out_path}"\n'
            f"  indent: 2\n"
            f"settings:\n"
            f"  log_level: WARNING\n",
        )
        result = PipelineEngine(config_path).run()

        assert list(result.columns) == ["size", "weight", "colour_red", "colour_blue"]
        assert result.loc[1, "size"] == 2.0
        records = json.loads(out_path.read_text())
        assert len(records) == 3
        assert records[1]["colour_blue"] == 1.0

    def test_sequence_pipeline(self, tmp_path, tmp_sequence_file):
        config_path = _write_run_yaml(
            tmp_path,
            f"pipeline:\n"
            f"  name: seq_pipe\n"
            f"  stages:\n"
            f"    - name: statifier\n"
            f"input:\n"
            f'  file_path: "{tmp_sequence_file}"\n'
            f"  kind: sequence\n"
            f"settings:\n"
            f"  log_level: WARNING\n",
        )
        result = PipelineEngine(config_path).run()
        assert result.shape == (1, 14)
        # gaps of length 1 and 3
        assert result.loc[0, "bmedian"] == 2.0
        assert result.loc[0, "median"] == 3.5

    def test_empty_stage_list_returns_input(self, tmp_path, table_file):
        config_path = _write_run_yaml(
            tmp_path,
            f"pipeline:\n"
            f"  name: noop\n"
            f"input:\n"
            f'  file_path: "{table_file}"\n'
            f"settings:\n"
            f"  log_level: WARNING\n",
        )
        result = PipelineEngine(config_path).run()
        assert result.shape == (3, 3)

    def test_invalid_yaml_config(self, tmp_path):
        config_path = _write_run_yaml(tmp_path, "pipeline:\n  name: missing_input\n")
        with pytest.raises(ValidationError):
            PipelineEngine(config_path).run()

    def test_run_keeps_loaded_config(self, tmp_path, table_file):
        config_path = _write_run_yaml(
            tmp_path,
            f"pipeline:\n"
            f"  name: kept\n"
            f"input:\n"
            f'  file_path: "{table_file}"\n'
            f"settings:\n"
            f"  log_level: WARNING\n",
        )
        engine = PipelineEngine(config_path)
        assert engine.config is None
        engine.run()
        config_path.unlink()
        assert engine.config.pipeline.name == "kept"
        assert engine.config.output.file_path is None
