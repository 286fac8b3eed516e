"""Tests for the click command-line interface."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from name_classifier.cli import main


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


class TestEvaluateCommand:
    """Tests for ``name-classifier evaluate``."""

    def test_text_report(self, runner: CliRunner, sample_data_path: Path) -> None:
        result = runner.invoke(main, ["evaluate", str(sample_data_path), "--seed", "7"])
        assert result.exit_code == 0, result.output
        lines = [line for line in result.output.splitlines() if "=>" in line]
        assert len(lines) == 6
        assert lines[0].startswith("Precision(female) => ")
        assert lines[5].startswith("F(male) => ")

    def test_json_output(self, runner: CliRunner, sample_data_path: Path) -> None:
        result = runner.invoke(
            main, ["evaluate", str(sample_data_path), "--seed", "7", "--output", "json"]
        )
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["training_size"] == 32
        assert data["test_size"] == 8
        assert data["model"]["classes"] == ["female", "male"]

    def test_rich_output(self, runner: CliRunner, sample_data_path: Path) -> None:
        result = runner.invoke(
            main, ["evaluate", str(sample_data_path), "--seed", "7", "-o", "rich", "-w", "2"]
        )
        assert result.exit_code == 0, result.output
        assert "Per-class Metrics" in result.output
        assert "Confusion Matrix" in result.output

    def test_default_path_from_environment(self, runner: CliRunner, sample_data_path: Path) -> None:
        result = runner.invoke(
            main, ["evaluate", "--seed", "1"], env={"NAME_CLASSIFIER_DATA": str(sample_data_path)}
        )
        assert result.exit_code == 0, result.output
        assert "Precision(female)" in result.output

    def test_missing_file_exits_with_error(self, runner: CliRunner, tmp_path: Path) -> None:
        result = runner.invoke(main, ["evaluate", str(tmp_path / "missing.csv")])
        assert result.exit_code == 1
        assert "Error" in result.output
        assert "Precision" not in result.output

    def test_invalid_train_ratio(self, runner: CliRunner, sample_data_path: Path) -> None:
        result = runner.invoke(main, ["evaluate", str(sample_data_path), "--train-ratio", "2"])
        assert result.exit_code == 2

    def test_undefined_metrics_rendered(self, runner: CliRunner, tmp_path: Path) -> None:
        file = tmp_path / "one.csv"
        file.write_text("anna,female\n", encoding="utf-8")
        result = runner.invoke(main, ["evaluate", str(file), "--seed", "0"])
        assert result.exit_code == 0, result.output
        assert "Precision(female) => undefined" in result.output
        assert "Recall(female) => 0.0" in result.output


class TestClassifyCommand:
    """Tests for ``name-classifier classify``."""

    @pytest.fixture
    def training_file(self, tmp_path: Path) -> Path:
        file = tmp_path / "train.csv"
        file.write_text("anna,female\nmia,female\nbob,male\njon,male\n", encoding="utf-8")
        return file

    def test_json_predictions(self, runner: CliRunner, training_file: Path) -> None:
        result = runner.invoke(main, ["classify", str(training_file), "Amy", "rob", "-o", "json"])
        assert result.exit_code == 0, result.output
        assert json.loads(result.output) == {"amy": "female", "rob": "male"}

    def test_rich_predictions(self, runner: CliRunner, training_file: Path) -> None:
        result = runner.invoke(main, ["classify", str(training_file), "amy"])
        assert result.exit_code == 0, result.output
        assert "amy" in result.output
        assert "female" in result.output

    def test_requires_names(self, runner: CliRunner, training_file: Path) -> None:
        result = runner.invoke(main, ["classify", str(training_file)])
        assert result.exit_code == 2

    def test_missing_file(self, runner: CliRunner, tmp_path: Path) -> None:
        result = runner.invoke(main, ["classify", str(tmp_path / "nope.csv"), "amy"])
        assert result.exit_code == 1
        assert "Error" in result.output
