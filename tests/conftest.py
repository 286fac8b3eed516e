"""Shared test fixtures for name-classifier tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from name_classifier.classifier import train
from name_classifier.features import extract_records
from name_classifier.models import ExtractedRecord, Model, Record


@pytest.fixture
def sample_data_path() -> Path:
    """Path to the sample names file (40 unique records plus noise)."""
    return Path(__file__).parent.parent / "examples" / "names.csv"


@pytest.fixture
def sample_data_text(sample_data_path: Path) -> str:
    return sample_data_path.read_text(encoding="utf-8")


@pytest.fixture
def separable_training() -> list[ExtractedRecord]:
    """Two female and two male names with little letter overlap."""
    return extract_records([
        Record("anna", "female"),
        Record("mia", "female"),
        Record("bob", "male"),
        Record("jon", "male"),
    ])


@pytest.fixture
def separable_model(separable_training: list[ExtractedRecord]) -> Model:
    return train(separable_training, ["female", "male"])


@pytest.fixture
def separable_test() -> list[ExtractedRecord]:
    return extract_records([
        Record("amy", "female"),
        Record("rob", "male"),
    ])


@pytest.fixture
def tmp_data_file(tmp_path: Path) -> Path:
    """A small record file with CRLF endings, a blank line and a malformed line."""
    file = tmp_path / "names.csv"
    file.write_bytes(
        b"Anna,female\r\n"
        b"Mia,female\r\n"
        b"\r\n"
        b"Bob,male\r\n"
        b"Jon,male\r\n"
        b"not-a-record\r\n"
        b"Amy,female\r\n"
        b"Rob,male\r\n"
    )
    return file
